import os
from pathlib import Path
from typing import Iterable, List, Optional, Set

from .exceptions import InputTraversalError
from .logging_conf import logger
from .models import ALLOWED_EXTENSIONS


def has_video_extension(path: Path) -> bool:
    return path.suffix.lower().lstrip(".") in ALLOWED_EXTENSIONS


def _walk(path: Path, found: List[Path], visited: Set[Path]):
    try:
        is_dir = path.is_dir()
    except OSError as e:
        raise InputTraversalError(f"Cannot access {path}: {e}") from e

    if not is_dir:
        if has_video_extension(path):
            found.append(path)
        return

    real = path.resolve()
    if real in visited:
        logger.warning("Skipping %s, directory already visited", path)
        return
    visited.add(real)

    try:
        entries = sorted(os.scandir(path), key=lambda entry: entry.name)
    except OSError as e:
        raise InputTraversalError(f"Cannot list directory {path}: {e}") from e

    for entry in entries:
        _walk(Path(entry.path), found, visited)


def collect_input_files(paths: Iterable[Path]) -> List[Path]:
    """
    Expand files and directories into the list of candidate video files.

    Directories are walked recursively with their entries in name order.
    Symlinked directories are followed, a directory reached twice is
    skipped. Only mp4, mkv and mov files are kept.
    """
    found: List[Path] = []
    visited: Set[Path] = set()
    for raw in paths:
        path = Path(raw)
        if not path.exists():
            raise InputTraversalError(f"No such file or directory: {path}")
        _walk(path, found, visited)
    return found


def total_duration(durations: Iterable[Optional[float]]) -> Optional[float]:
    """Sum of the durations, or None when any of them is unknown."""
    total = 0.0
    for duration in durations:
        if not duration:
            return None
        total += duration
    return total
