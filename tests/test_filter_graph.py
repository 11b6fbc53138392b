import re

import pytest

from memmet.exceptions import InsufficientInputs
from memmet.filter_graph import build_filter_graph, input_label, needs_silence_input, silence_duration

from conftest import make_track

SCALE_PAD = (
    "scale=1920:1080:force_original_aspect_ratio=decrease,"
    "setdar=1920/1080,setsar=1/1,pad=1920:1080:(ow-iw)/2:(oh-ih)/2"
)


def test_graph_with_audio_everywhere():
    tracks = [make_track(1920, 1080), make_track(640, 480, audio_index=2)]
    graph = build_filter_graph(tracks, (1920, 1080), no_audio=False)
    assert graph.expression == (
        f"[0:0]{SCALE_PAD}[in0];"
        f"[1:0]{SCALE_PAD}[in1];"
        "[in0][0:1][in1][1:2]concat=n=2:v=1:a=1[v][a]"
    )
    assert graph.map_args == ["-map", "[v]", "-map", "[a]"]
    assert graph.silence_input is False


def test_graph_shares_one_silence_input():
    tracks = [
        make_track(1920, 1080, audio_index=None),
        make_track(1280, 720),
        make_track(640, 480, audio_index=None),
    ]
    graph = build_filter_graph(tracks, (1920, 1080), no_audio=False)
    assert graph.silence_input is True
    assert graph.expression.endswith("[in0][3:a][in1][1:1][in2][3:a]concat=n=3:v=1:a=1[v][a]")
    assert graph.expression.count("[3:a]") == 2


def test_graph_without_audio():
    tracks = [make_track(1920, 1080, audio_index=None), make_track(1280, 720)]
    graph = build_filter_graph(tracks, (1920, 1080), no_audio=True)
    assert graph.expression.endswith("[in0][in1]concat=n=2:v=1[v]")
    assert "a=" not in graph.expression
    assert "[a]" not in graph.expression
    assert ":a]" not in graph.expression
    assert graph.map_args == ["-map", "[v]"]
    assert graph.silence_input is False


@pytest.mark.parametrize("count", [2, 3, 7])
def test_concat_declares_input_count(count):
    tracks = [make_track(640, 480) for _ in range(count)]
    graph = build_filter_graph(tracks, (640, 480), no_audio=False)
    assert re.findall(r"concat=n=(\d+)", graph.expression) == [str(count)]
    labels = {input_label(i) for i in range(count)}
    assert len(labels) == count
    assert all(not label[0].isdigit() for label in labels)


def test_uses_selected_stream_indexes():
    tracks = [make_track(640, 480, video_index=2, audio_index=0), make_track(640, 480)]
    graph = build_filter_graph(tracks, (640, 480), no_audio=False)
    assert graph.expression.startswith("[0:2]scale=")
    assert "[in0][0:0]" in graph.expression


@pytest.mark.parametrize("count", [0, 1])
def test_needs_two_inputs(count):
    with pytest.raises(InsufficientInputs):
        build_filter_graph([make_track(640, 480)] * count, (640, 480), no_audio=False)


def test_needs_silence_input():
    with_audio = make_track(640, 480)
    without = make_track(640, 480, audio_index=None)
    assert needs_silence_input([with_audio, without], no_audio=False)
    assert not needs_silence_input([with_audio, with_audio], no_audio=False)
    assert not needs_silence_input([without, without], no_audio=True)


def test_silence_lasts_as_long_as_longest_silent_input():
    tracks = [
        make_track(640, 480, audio_index=None, duration=4.0),
        make_track(640, 480, duration=30.0),
        make_track(640, 480, audio_index=None, duration=7.5),
    ]
    assert silence_duration(tracks, no_audio=False) == pytest.approx(7.5)
    assert silence_duration(tracks, no_audio=True) is None


def test_silence_duration_unknown():
    tracks = [make_track(640, 480, audio_index=None, duration=None), make_track(640, 480, duration=3.0)]
    assert silence_duration(tracks, no_audio=False) is None
    assert silence_duration([make_track(640, 480), make_track(640, 480)], no_audio=False) is None
