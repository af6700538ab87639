"""
Euclidean distance for vector-valued column elements.

Use this when every element of the column is itself a vector, e.g. a row of
a numpy array or a 1D torch tensor.
"""

from typing import Any

import torch


def _as_vector(x: Any) -> torch.Tensor:
    return torch.as_tensor(x, dtype=torch.float64).reshape(-1)


def squared_euclidean(x: Any, y: Any) -> float:
    """Squared Euclidean distance ||x - y||².

    Args:
        x: First vector (array-like)
        y: Second vector (array-like, same length as x)

    Returns:
        Non-negative float
    """
    diff = _as_vector(x) - _as_vector(y)
    return float(torch.sum(diff * diff))


def euclidean(x: Any, y: Any) -> float:
    """Euclidean distance ||x - y||."""
    return squared_euclidean(x, y) ** 0.5
