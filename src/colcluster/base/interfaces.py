"""
Core interfaces for the column clustering visitors.

This module defines the abstract base classes that pluggable components
implement. Columns are plain positional sequences of elements; the only
operation every component may rely on is the distance function.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

from torch import Tensor


class RandomSource(ABC):
    """Source of uniformly distributed positions.

    Injected into K-means so that centroid sampling can be seeded or replaced
    by a fixed sequence in tests.
    """

    @abstractmethod
    def next_index(self, upper: int) -> int:
        """Draw an integer uniformly from [0, upper).

        Args:
            upper: Exclusive upper bound, must be >= 1

        Returns:
            Drawn position
        """
        pass


class InitializationStrategy(ABC):
    """Abstract base class for centroid initialization strategies."""

    @abstractmethod
    def initialize(self, column: Sequence, n_points: int, n_clusters: int,
                   **kwargs) -> List[Any]:
        """Pick initial representatives.

        Args:
            column: Column of elements
            n_points: Working size
            n_clusters: Number of representatives to pick

        Returns:
            List of n_clusters elements
        """
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for element-to-representative assignment."""

    @abstractmethod
    def compute_assignments(self, column: Sequence, n_points: int,
                            representatives: Sequence,
                            **kwargs) -> Tensor:
        """Compute cluster assignments for the working range.

        Args:
            column: Column of elements
            n_points: Working size
            representatives: K centroids or exemplars

        Returns:
            (n,) long tensor of cluster indices
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for centroid update strategies."""

    @abstractmethod
    def update(self, column: Sequence, n_points: int, assignments: Tensor,
               previous: Sequence, **kwargs) -> List[Any]:
        """Compute new representatives from the current assignments.

        Args:
            column: Column of elements
            n_points: Working size
            assignments: (n,) hard assignments
            previous: Current representatives

        Returns:
            List of updated representatives
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if the algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []
