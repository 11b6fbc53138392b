import pytest

from memmet.dimensions import resolve_dimensions
from memmet.exceptions import InsufficientInputs, UnsupportedPolicy
from memmet.models import LARGEST, SMALLEST, ExplicitDimensions

from conftest import make_track


def test_largest_picks_biggest_area():
    tracks = [make_track(640, 480), make_track(1920, 1080), make_track(1280, 720)]
    assert resolve_dimensions(tracks, LARGEST) == (1920, 1080)


def test_largest_ties_keep_first():
    tracks = [make_track(800, 600), make_track(1200, 400), make_track(600, 800)]
    assert resolve_dimensions(tracks, LARGEST) == (800, 600)


def test_largest_needs_inputs():
    with pytest.raises(InsufficientInputs):
        resolve_dimensions([], LARGEST)


def test_explicit_is_returned_unchanged():
    tracks = [make_track(640, 480), make_track(1920, 1080)]
    policy = ExplicitDimensions(width=4000, height=10)
    assert resolve_dimensions(tracks, policy) == (4000, 10)
    assert resolve_dimensions([], policy) == (4000, 10)


@pytest.mark.parametrize("count", [0, 1, 3])
def test_smallest_is_unsupported(count):
    tracks = [make_track(640 + i, 480) for i in range(count)]
    with pytest.raises(UnsupportedPolicy):
        resolve_dimensions(tracks, SMALLEST)
