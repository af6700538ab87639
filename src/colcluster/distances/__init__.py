"""Distance functions for clustering visitors."""

from typing import Callable, Any, Optional

from ..exceptions import InvalidConfigurationError
from .scalar import squared_difference, absolute_difference
from .euclidean import squared_euclidean, euclidean

DistanceFunction = Callable[[Any, Any], float]


def check_distance(distance: Optional[DistanceFunction]) -> DistanceFunction:
    """Return the default distance for None, reject anything not callable."""
    if distance is None:
        return squared_difference
    if not callable(distance):
        raise InvalidConfigurationError(
            f"distance must be callable, got {type(distance).__name__}")
    return distance


__all__ = [
    'DistanceFunction',
    'check_distance',
    'squared_difference',
    'absolute_difference',
    'squared_euclidean',
    'euclidean'
]
