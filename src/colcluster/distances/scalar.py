"""
Distance functions for scalar-like column elements.

The default dissimilarity of both visitors is the squared difference. These
are plain module-level functions so they can be swapped for any callable
with the same (x, y) -> float signature.
"""

from typing import Any


def squared_difference(x: Any, y: Any) -> float:
    """Squared difference (x - y)².

    Args:
        x: First element
        y: Second element

    Returns:
        Non-negative float
    """
    diff = x - y
    return float(diff * diff)


def absolute_difference(x: Any, y: Any) -> float:
    """Absolute difference |x - y|."""
    return float(abs(x - y))
