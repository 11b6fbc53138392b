from pathlib import Path

import pytest

from memmet.ffmpeg_wrapper import FFmpegWrapper
from memmet.models import TrackInfo


def make_track(width, height, audio_index=1, video_index=0, name="clip.mp4", color_space="bt709", duration=None):
    return TrackInfo(
        path=Path(name),
        video_index=video_index,
        audio_index=audio_index,
        color_space=color_space,
        width=width,
        height=height,
        duration=duration,
    )


def probe_result(width, height, audio=True, color_space="bt709", duration="10.0"):
    """ffprobe JSON for a file with one video and (optionally) one audio stream."""
    streams = [
        {"index": 0, "codec_type": "video", "width": width, "height": height, "color_space": color_space},
    ]
    if audio:
        streams.append({"index": 1, "codec_type": "audio"})
    return {"streams": streams, "format": {"duration": duration}}


class FakeFFmpeg(FFmpegWrapper):
    """FFmpegWrapper that answers probes from a dict and records runs."""

    def __init__(self, probes=None, output="ffmpeg says hi"):
        super().__init__()
        self.probes = probes or {}
        self.output = output
        self.probed = []
        self.runs = []

    def probe(self, input_file):
        self.probed.append(Path(input_file).name)
        return self.probes[Path(input_file).name]

    def concatenate(self, cmd, total_duration=None):
        self.runs.append((list(cmd), total_duration))
        return self.output


@pytest.fixture
def fake_ffmpeg():
    return FakeFFmpeg()
