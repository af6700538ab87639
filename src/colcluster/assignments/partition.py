"""
Partitioning of a column around a finalized set of representatives.

Shared post-processing step of both visitors' ``get_clusters``.
"""

from typing import Any, Callable, List, Sequence

import torch

from ..base.data_structures import ClusterPartition, ClusterView
from .hard import HardAssignment


class ClusterPartitioner:
    """Groups every element of the working range under its nearest representative."""

    def __init__(self, distance: Callable[[Any, Any], float]):
        self.assignment_strategy = HardAssignment(distance)

    def partition(self, column: Sequence, n_points: int, representatives: Sequence,
                  with_sentinel: bool = False) -> ClusterPartition:
        """Build a partition of the working range.

        Args:
            column: Column of elements (borrowed by the returned views)
            n_points: Working size
            representatives: Centroids or exemplars, one per cluster
            with_sentinel: Whether each cluster carries its representative as
                a sentinel first entry (K-means)

        Returns:
            ClusterPartition; empty if there are no representatives
        """
        if len(representatives) == 0:
            return ClusterPartition([], torch.full((n_points,), -1, dtype=torch.long))

        labels = self.assignment_strategy.compute_assignments(column, n_points, representatives)

        clusters: List[ClusterView] = []
        for k, representative in enumerate(representatives):
            indices = torch.where(labels == k)[0].tolist()
            clusters.append(ClusterView(column, indices, cluster_id=k,
                                        representative=representative,
                                        has_sentinel=with_sentinel))

        return ClusterPartition(clusters, labels)
