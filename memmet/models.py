import re
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, PositiveInt

ALLOWED_EXTENSIONS = ("mp4", "mkv", "mov")

LARGEST = "largest"
SMALLEST = "smallest"

FileType = Literal["mp4", "mov", "mkv"]


class ExplicitDimensions(BaseModel):
    width: PositiveInt
    height: PositiveInt

    model_config = ConfigDict(frozen=True)


DimensionPolicy = Union[ExplicitDimensions, Literal["largest", "smallest"]]


class TrackInfo(BaseModel):
    """Track and geometry facts for one accepted input file."""

    path: Path
    video_index: int
    audio_index: Optional[int] = None
    color_space: str = ""
    width: PositiveInt
    height: PositiveInt
    # Sizes the progress bar and the silent filler
    duration: Optional[float] = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_audio(self) -> bool:
        return self.audio_index is not None

    @property
    def area(self) -> int:
        return self.width * self.height


_DIMENSIONS_RE = re.compile(r"^\s*(\d+)\s*[:xX]\s*(\d+)\s*$")


def parse_dimensions(value: str) -> DimensionPolicy:
    """
    Parse a dimension specification.

    Accepts "largest"/"l", "smallest"/"s" or an explicit "W:H" (or "WxH").
    Raises ValueError for anything else.
    """
    text = value.strip().lower()
    if text in ("largest", "l"):
        return LARGEST
    if text in ("smallest", "s"):
        return SMALLEST

    match = _DIMENSIONS_RE.match(text)
    if not match:
        raise ValueError(f"invalid dimensions {value!r}, expected WIDTH:HEIGHT, largest or smallest")

    width, height = int(match.group(1)), int(match.group(2))
    if width <= 0 or height <= 0:
        raise ValueError(f"dimensions must be positive, got {width}:{height}")
    return ExplicitDimensions(width=width, height=height)


def format_dimensions(policy: DimensionPolicy) -> str:
    if isinstance(policy, ExplicitDimensions):
        return f"{policy.width}:{policy.height}"
    return policy
