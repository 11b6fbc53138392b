"""
memmet: concatenate video files with ffmpeg.

Probes every input, picks a common output size, scales and pads each
video to it and joins them with a single concat filter. Inputs without
an audio track are filled with silence.
"""

from .config import ConfigRecord, ConfigStore, Settings
from .core import RunResult, VideoConcatenator
from .dimensions import resolve_dimensions
from .filter_graph import FilterGraph, build_filter_graph
from .models import LARGEST, SMALLEST, ExplicitDimensions, TrackInfo, parse_dimensions
from .prober import probe_tracks

__all__ = [
    "ConfigRecord",
    "ConfigStore",
    "Settings",
    "RunResult",
    "VideoConcatenator",
    "resolve_dimensions",
    "FilterGraph",
    "build_filter_graph",
    "LARGEST",
    "SMALLEST",
    "ExplicitDimensions",
    "TrackInfo",
    "parse_dimensions",
    "probe_tracks",
]
