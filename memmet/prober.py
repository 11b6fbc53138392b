"""
Track metadata probing.

Turns the ffprobe description of a file into a TrackInfo: the first video
and first audio stream indexes plus the colour space and geometry.
"""

from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError

from .exceptions import FFmpegError, ProbeFailure
from .ffmpeg_wrapper import FFmpegWrapper
from .models import TrackInfo


def _parse_duration(info: Dict) -> Optional[float]:
    duration = info.get("format", {}).get("duration")
    try:
        return float(duration) if duration is not None else None
    except (TypeError, ValueError):
        return None


def _stream_index(stream: Dict, path: Path) -> int:
    try:
        return int(stream["index"])
    except (KeyError, TypeError, ValueError) as e:
        raise ProbeFailure(f"Stream without a usable index in {path}: {stream}") from e


def probe_tracks(path: Path, ffmpeg: FFmpegWrapper) -> TrackInfo:
    """
    Probe a file and build its TrackInfo.

    The first video and first audio stream (in ffprobe order) are selected.
    color_space, width and height are taken from whichever stream set them
    last, whatever its type.
    """
    if not path.is_file():
        raise ProbeFailure(f"Cannot read input file: {path}")

    try:
        info = ffmpeg.probe(path)
    except FFmpegError as e:
        raise ProbeFailure(str(e)) from e

    if not isinstance(info, dict):
        raise ProbeFailure(f"Unexpected ffprobe output for {path}")

    video_index = None
    audio_index = None
    color_space = ""
    width = None
    height = None

    for stream in info.get("streams", []):
        codec_type = stream.get("codec_type")
        if codec_type == "video" and video_index is None:
            video_index = _stream_index(stream, path)
        elif codec_type == "audio" and audio_index is None:
            audio_index = _stream_index(stream, path)

        if stream.get("color_space") is not None:
            color_space = stream["color_space"]
        if stream.get("width") is not None:
            width = stream["width"]
        if stream.get("height") is not None:
            height = stream["height"]

    if video_index is None:
        raise ProbeFailure(f"No video stream found in {path}")

    try:
        return TrackInfo(
            path=path,
            video_index=video_index,
            audio_index=audio_index,
            color_space=color_space,
            width=width,
            height=height,
            duration=_parse_duration(info),
        )
    except ValidationError as e:
        raise ProbeFailure(f"Invalid geometry for {path}: {width}x{height}") from e
