"""
Filter graph construction for the concat run.

Every input is scaled to fit the canonical geometry, padded to it, and
joined by a single concat filter. Inputs without audio borrow a shared
silent source appended after the real inputs.
"""

from typing import List, NamedTuple, Optional, Sequence, Tuple

from .exceptions import InsufficientInputs
from .models import TrackInfo

VIDEO_OUT = "v"
AUDIO_OUT = "a"


class FilterGraph(NamedTuple):
    expression: str
    map_args: List[str]
    # True when a silent source must follow the real inputs
    silence_input: bool


def input_label(position: int) -> str:
    # ffmpeg names input streams by number, so labels never start with a digit
    return f"in{position}"


def needs_silence_input(accepted: Sequence[TrackInfo], no_audio: bool) -> bool:
    if no_audio:
        return False
    return any(not track.has_audio for track in accepted)


def silence_duration(accepted: Sequence[TrackInfo], no_audio: bool) -> Optional[float]:
    """
    How long the shared silent source has to run.

    Every audio-less input reads the silence from its start, so it must
    last as long as the longest of them. None when a duration is unknown,
    in which case the source is left unbounded.
    """
    if not needs_silence_input(accepted, no_audio):
        return None
    durations = [track.duration for track in accepted if not track.has_audio]
    if not all(durations):
        return None
    return max(durations)


def scale_pad_clause(position: int, track: TrackInfo, width: int, height: int) -> str:
    return (
        f"[{position}:{track.video_index}]"
        f"scale={width}:{height}:force_original_aspect_ratio=decrease,"
        f"setdar={width}/{height},"
        f"setsar=1/1,"
        f"pad={width}:{height}:(ow-iw)/2:(oh-ih)/2"
        f"[{input_label(position)}]"
    )


def build_filter_graph(
    accepted: Sequence[TrackInfo],
    canonical: Tuple[int, int],
    no_audio: bool,
) -> FilterGraph:
    count = len(accepted)
    if count < 2:
        raise InsufficientInputs(f"At least 2 videos are needed, got {count}")

    width, height = canonical
    silence = needs_silence_input(accepted, no_audio)

    clauses = []
    concat_inputs = ""
    for position, track in enumerate(accepted):
        clauses.append(scale_pad_clause(position, track, width, height))
        concat_inputs += f"[{input_label(position)}]"
        if no_audio:
            continue
        if track.has_audio:
            concat_inputs += f"[{position}:{track.audio_index}]"
        else:
            # The silent source sits right after the last real input
            concat_inputs += f"[{count}:a]"

    if no_audio:
        concat = f"{concat_inputs}concat=n={count}:v=1[{VIDEO_OUT}]"
        map_args = ["-map", f"[{VIDEO_OUT}]"]
    else:
        concat = f"{concat_inputs}concat=n={count}:v=1:a=1[{VIDEO_OUT}][{AUDIO_OUT}]"
        map_args = ["-map", f"[{VIDEO_OUT}]", "-map", f"[{AUDIO_OUT}]"]

    clauses.append(concat)
    return FilterGraph(";".join(clauses), map_args, silence)
