"""
Mean update strategy for K-means centroids.
"""

from typing import Any, List, Sequence

from torch import Tensor

from ..base.interfaces import ParameterUpdater
from ..utils.validation import check_empty_cluster_policy


def zero_like(element: Any) -> Any:
    """Additive identity of an element's type (0 for numbers, zeros for arrays)."""
    return element - element


class MeanUpdater(ParameterUpdater):
    """Updates each centroid to the mean of its assigned elements.

    Sums start from the additive identity and are divided by max(count, 1).
    With the default ``'reset'`` policy an empty cluster therefore gets the
    zero element as its new centroid. ``'keep'`` leaves it unchanged.
    """

    def __init__(self, empty_cluster: str = 'reset'):
        """
        Args:
            empty_cluster: 'reset' or 'keep'
        """
        self.empty_cluster = check_empty_cluster_policy(empty_cluster)
        self.empty_clusters_: List[int] = []

    def update(self, column: Sequence, n_points: int, assignments: Tensor,
               previous: Sequence, **kwargs) -> List[Any]:
        """Compute new centroids.

        Args:
            column: Column of elements
            n_points: Working size
            assignments: (n,) hard assignments
            previous: Current centroids

        Returns:
            List of new centroids, one per cluster
        """
        n_clusters = len(previous)
        zero = zero_like(column[0])
        sums = [zero for _ in range(n_clusters)]
        counts = [0] * n_clusters

        for point, cluster in enumerate(assignments.tolist()[:n_points]):
            sums[cluster] = sums[cluster] + column[point]
            counts[cluster] += 1

        self.empty_clusters_ = [k for k in range(n_clusters) if counts[k] == 0]

        new_centroids = []
        for k in range(n_clusters):
            if counts[k] == 0 and self.empty_cluster == 'keep':
                new_centroids.append(previous[k])
            else:
                new_centroids.append(sums[k] / max(1, counts[k]))

        return new_centroids
