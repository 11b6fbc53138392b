#!/usr/bin/env python3
"""
Command line interface for memmet.

    memmet [OUTPUT] -i FILE_OR_DIR [-i ...] [-d DIMS] [-n] [-y] [--debug]
    memmet config [-o DIR] [-n BOOL] [-y BOOL] [-d DIMS] [-t TYPE]
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import questionary
from questionary import Style
from rich.console import Console

from .config import ConfigStore, Settings
from .core import VideoConcatenator
from .exceptions import MemmetError
from .ffmpeg_wrapper import FFmpegWrapper
from .logging_conf import logger, setup_logging
from .models import ALLOWED_EXTENSIONS, parse_dimensions

console = Console()

# Custom style for questionary
custom_style = Style([
    ('qmark', 'fg:cyan bold'),
    ('question', 'bold'),
    ('answer', 'fg:cyan'),
])


def _dimensions(value: str):
    try:
        return parse_dimensions(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _bool(value: str) -> bool:
    text = value.strip().lower()
    if text in ("true", "yes", "y", "1", "on"):
        return True
    if text in ("false", "no", "n", "0", "off"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="memmet",
        description="memmet: slap some videos together, but easy. "
                    "Run 'memmet config --help' to set the default values.",
    )
    parser.add_argument("output", nargs="?", type=Path, metavar="FILE", help="The path for the output file")
    parser.add_argument(
        "-i", "--input",
        action="append",
        type=Path,
        required=True,
        metavar="FILE or DIR",
        help="The input files/directories to concatenate together",
    )
    parser.add_argument("-d", "--dimensions", type=_dimensions, help="Set the dimensions of the output video (WIDTH:HEIGHT, largest)")
    parser.add_argument("-n", "--no_audio", action="store_true", default=None, help="Removes all audio from the output file")
    parser.add_argument(
        "-y", "--overwrite",
        action="store_true",
        default=None,
        help="Automatically overwrites the output file if it already exists",
    )
    parser.add_argument("--debug", action="store_true", help="Print ffmpeg output")
    return parser


def build_config_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="memmet config", description="Set the default input values")
    parser.add_argument(
        "-o", "--output_directory", "--out_dir",
        dest="out_dir",
        type=Path,
        help="Set the default output directory for your output file",
    )
    parser.add_argument("-n", "--no_audio", type=_bool, metavar="BOOL")
    parser.add_argument("-y", "--overwrite", type=_bool, metavar="BOOL")
    parser.add_argument("-d", "--dimensions", type=_dimensions)
    parser.add_argument("-t", "--file_type", choices=ALLOWED_EXTENSIONS, help="Default output file type")
    return parser


def ask_overwrite(path: Path) -> bool:
    answer = questionary.confirm(
        f"{path} already exists. Overwrite it?",
        default=False,
        style=custom_style,
    ).ask()
    return bool(answer)


def run_config(argv: List[str], store: ConfigStore) -> int:
    args = build_config_parser().parse_args(argv)
    store.set(
        out_dir=args.out_dir,
        no_audio=args.no_audio,
        overwrite=args.overwrite,
        dimensions=args.dimensions,
        file_type=args.file_type,
    )
    console.print("[green]Config successfully updated[/green]")
    return 0


def run_concat(argv: List[str], store: ConfigStore, settings: Settings, ffmpeg: FFmpegWrapper) -> int:
    args = build_parser().parse_args(argv)
    if args.debug:
        setup_logging(settings.config_dir, debug=True)

    concatenator = VideoConcatenator(
        config=store.record,
        settings=settings,
        ffmpeg=ffmpeg,
        confirm_overwrite=ask_overwrite,
    )
    result = concatenator.run(
        args.input,
        output=args.output,
        dimensions=args.dimensions,
        no_audio=args.no_audio,
        overwrite=args.overwrite,
        debug=args.debug,
    )
    if result.status == "declined":
        console.print("[yellow]Nothing done, output file left untouched[/yellow]")
    else:
        console.print(f"[green]✓ Output written to[/green] [cyan]{result.output_file}[/cyan]")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    settings = Settings()
    setup_logging(settings.config_dir)

    ffmpeg = FFmpegWrapper(settings.ffmpeg_path, settings.ffprobe_path, settings.silence_source)
    store = ConfigStore(settings.config_path)
    try:
        store.open()
        ffmpeg.ensure_installed()

        if argv and argv[0] == "config":
            return run_config(argv[1:], store)
        return run_concat(argv, store, settings, ffmpeg)
    except MemmetError as e:
        logger.error("%s", e)
        console.print(f"[red]Error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
