from pathlib import Path
from typing import Callable, List, NamedTuple, Optional, Sequence

from tqdm import tqdm

from .config import ConfigRecord, Settings
from .dimensions import resolve_dimensions
from .exceptions import InsufficientInputs, InvalidExtension
from .ffmpeg_wrapper import FFmpegWrapper, format_command
from .filter_graph import build_filter_graph, silence_duration
from .logging_conf import logger
from .models import ALLOWED_EXTENSIONS, LARGEST, DimensionPolicy, TrackInfo, format_dimensions
from .prober import probe_tracks
from .utils import collect_input_files, total_duration

DEFAULT_OUTPUT_NAME = "output"
DEFAULT_FILE_TYPE = "mp4"
RESERVED_COLOR_SPACE = "reserved"


class RunResult(NamedTuple):
    status: str  # "done" or "declined"
    output_file: Path
    command: Optional[List[str]] = None
    ffmpeg_output: Optional[str] = None


def _first_set(*values):
    for value in values:
        if value is not None:
            return value
    return None


class VideoConcatenator:
    """
    Concatenate the accepted inputs into one file with ffmpeg.

    Every parameter is resolved from the explicit argument first, then the
    persisted config record, then a hardcoded fallback.
    """

    def __init__(
        self,
        config: Optional[ConfigRecord] = None,
        settings: Optional[Settings] = None,
        ffmpeg: Optional[FFmpegWrapper] = None,
        confirm_overwrite: Optional[Callable[[Path], bool]] = None,
    ):
        self.config = config if config is not None else ConfigRecord()
        self.settings = settings if settings is not None else Settings()
        self.ffmpeg = ffmpeg if ffmpeg is not None else FFmpegWrapper(
            self.settings.ffmpeg_path,
            self.settings.ffprobe_path,
            self.settings.silence_source,
        )
        # Declining is the safe answer when nobody can be asked
        self.confirm_overwrite = confirm_overwrite or (lambda path: False)

    def resolve_output(self, output: Optional[Path] = None) -> Path:
        default_ext = self.config.file_type or DEFAULT_FILE_TYPE

        if output is None:
            out_dir = self.config.out_dir or Path(".")
            return out_dir / f"{DEFAULT_OUTPUT_NAME}.{default_ext}"

        output = Path(output)
        if not output.suffix:
            return output.with_name(f"{output.name}.{default_ext}")

        ext = output.suffix.lstrip(".").lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise InvalidExtension(
                f"Unsupported output extension {output.suffix!r}, use one of: {', '.join(ALLOWED_EXTENSIONS)}"
            )
        return output

    def resolve_dimensions_policy(self, dimensions: Optional[DimensionPolicy] = None) -> DimensionPolicy:
        return _first_set(dimensions, self.config.dimensions, LARGEST)

    def probe_inputs(self, inputs: Sequence[Path]) -> List[TrackInfo]:
        files = collect_input_files(inputs)
        logger.info("Found %d candidate video file(s)", len(files))

        accepted = []
        for path in tqdm(files, desc="Probing input files", disable=len(files) < 2):
            track = probe_tracks(path, self.ffmpeg)
            if track.color_space == RESERVED_COLOR_SPACE:
                logger.info("Skipping %s: reserved colour space is not supported", path)
                continue
            logger.debug("Accepted %s: %dx%d video=%d audio=%s", path, track.width, track.height, track.video_index, track.audio_index)
            accepted.append(track)
        return accepted

    def run(
        self,
        inputs: Sequence[Path],
        output: Optional[Path] = None,
        dimensions: Optional[DimensionPolicy] = None,
        no_audio: Optional[bool] = None,
        overwrite: Optional[bool] = None,
        debug: bool = False,
    ) -> RunResult:
        output_file = self.resolve_output(output)
        policy = self.resolve_dimensions_policy(dimensions)
        no_audio = _first_set(no_audio, self.config.no_audio, False)
        overwrite = _first_set(overwrite, self.config.overwrite, False)

        if output_file.exists() and not overwrite:
            if not self.confirm_overwrite(output_file):
                logger.info("Not overwriting %s", output_file)
                return RunResult("declined", output_file)
            overwrite = True

        accepted = self.probe_inputs(inputs)
        if len(accepted) < 2:
            raise InsufficientInputs(f"You need at least 2 videos, found {len(accepted)}")

        width, height = resolve_dimensions(accepted, policy)
        logger.info("Output dimensions (%s): %dx%d", format_dimensions(policy), width, height)

        graph = build_filter_graph(accepted, (width, height), no_audio)
        cmd = self.ffmpeg.build_concat_command(
            [track.path for track in accepted],
            graph.expression,
            graph.map_args,
            self.settings.video_codec,
            output_file,
            overwrite,
            silence_input=graph.silence_input,
            silence_duration=silence_duration(accepted, no_audio),
        )
        logger.info("Running ffmpeg: %s", format_command(cmd))

        ffmpeg_output = self.ffmpeg.concatenate(cmd, total_duration(track.duration for track in accepted))
        if debug:
            logger.debug("ffmpeg output:\n%s", ffmpeg_output)

        return RunResult("done", output_file, cmd, ffmpeg_output)
