"""
Clustering quality metrics for column partitions.
"""

from typing import Any, Callable, Sequence

import torch
from torch import Tensor


def inertia(column: Sequence, n_points: int, representatives: Sequence,
            labels: Tensor, distance: Callable[[Any, Any], float]) -> float:
    """Total within-cluster distance to the assigned representative.

    Args:
        column: Column of elements
        n_points: Working size
        representatives: Centroids or exemplars
        labels: (n,) cluster id per element (-1 entries are skipped)
        distance: Pairwise dissimilarity

    Returns:
        Sum of distance(element, representative[label]) over the working range
    """
    total = 0.0
    for point, label in enumerate(labels.tolist()[:n_points]):
        if label < 0:
            continue
        total += float(distance(column[point], representatives[label]))
    return total


def cluster_sizes(labels: Tensor, n_clusters: int) -> list:
    """Number of elements per cluster id."""
    valid = labels[labels >= 0]
    return torch.bincount(valid, minlength=n_clusters).tolist()
