"""
Hard assignment of column elements to their nearest representative.

Used both inside the K-means loop and by the partitioner shared with
affinity propagation.
"""

from typing import Any, Callable, Dict, Sequence, Tuple

import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy


def distance_matrix(column: Sequence, n_points: int, representatives: Sequence,
                    distance: Callable[[Any, Any], float]) -> Tensor:
    """Distances from every element of the working range to every representative.

    The distance is always called as ``distance(element, representative)``.

    Returns:
        (n, K) float64 tensor
    """
    n_clusters = len(representatives)
    distances = torch.zeros(n_points, n_clusters, dtype=torch.float64)

    for point in range(n_points):
        value = column[point]
        for k, representative in enumerate(representatives):
            distances[point, k] = distance(value, representative)

    return distances


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to the nearest representative.

    Each element goes to exactly one cluster. On exact ties the lowest
    cluster index wins.
    """

    def __init__(self, distance: Callable[[Any, Any], float]):
        """
        Args:
            distance: Pairwise dissimilarity (element, representative) -> float
        """
        self.distance = distance

    def compute_assignments(self, column: Sequence, n_points: int,
                            representatives: Sequence,
                            **kwargs) -> Tensor:
        """Assign each element to its nearest representative.

        Returns:
            (n,) long tensor of cluster indices
        """
        assignments, _ = self.compute_assignments_with_info(column, n_points, representatives)
        return assignments

    def compute_assignments_with_info(self, column: Sequence, n_points: int,
                                      representatives: Sequence) -> Tuple[Tensor, Dict[str, Tensor]]:
        """Assign elements and also return the distances involved.

        Returns:
            assignments: (n,) cluster indices
            info: 'distances' (n, K) and 'min_distances' (n,)
        """
        distances = distance_matrix(column, n_points, representatives, self.distance)

        if n_points == 0:
            empty = torch.zeros(0, dtype=torch.long)
            return empty, {'distances': distances, 'min_distances': torch.zeros(0, dtype=torch.float64)}

        # torch.argmin returns the first minimal index
        assignments = torch.argmin(distances, dim=1)
        min_distances = torch.gather(distances, 1, assignments.unsqueeze(1)).squeeze(1)

        return assignments, {'distances': distances, 'min_distances': min_distances}
