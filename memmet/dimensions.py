from typing import Sequence, Tuple

from .exceptions import InsufficientInputs, UnsupportedPolicy
from .models import LARGEST, SMALLEST, DimensionPolicy, ExplicitDimensions, TrackInfo


def resolve_dimensions(accepted: Sequence[TrackInfo], policy: DimensionPolicy) -> Tuple[int, int]:
    """
    Pick the canonical output (width, height).

    Explicit dimensions are returned as given. "largest" picks the input
    with the biggest pixel area, the first one on ties. "smallest" is
    recognised but not supported.
    """
    if policy == SMALLEST:
        raise UnsupportedPolicy('The "smallest" dimensions option is currently unsupported')

    if isinstance(policy, ExplicitDimensions):
        return policy.width, policy.height

    if policy == LARGEST:
        if not accepted:
            raise InsufficientInputs("Cannot pick the largest dimensions without any inputs")
        # max() keeps the first maximal element
        largest = max(accepted, key=lambda track: track.area)
        return largest.width, largest.height

    raise UnsupportedPolicy(f"Unknown dimensions policy: {policy!r}")
