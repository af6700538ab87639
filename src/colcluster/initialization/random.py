"""
Random initialization strategy for K-means.

Selects random elements of the column as initial centroids. Draws are made
with replacement, so the same position may be picked more than once.
"""

import copy
from typing import Any, List, Optional, Sequence, Union

import numpy as np

import torch

from ..base.interfaces import InitializationStrategy, RandomSource
from ..exceptions import InsufficientDataError, InvalidConfigurationError


class TorchRandomSource(RandomSource):
    """Random source backed by a ``torch.Generator``.

    Without an explicit generator torch's default generator is used, which
    ``torch.manual_seed`` controls.
    """

    def __init__(self, generator: Optional[torch.Generator] = None):
        self.generator = generator

    def next_index(self, upper: int) -> int:
        if upper < 1:
            raise InsufficientDataError("Cannot draw a position from an empty range")
        return int(torch.randint(upper, (1,), generator=self.generator).item())


class SequenceRandomSource(RandomSource):
    """Replays a fixed sequence of positions, cycling when exhausted.

    Each value is reduced modulo the requested upper bound.
    """

    def __init__(self, indices: Sequence[int]):
        if len(indices) == 0:
            raise InvalidConfigurationError("SequenceRandomSource needs at least one index")
        self.indices = [int(i) for i in indices]
        self._position = 0

    def next_index(self, upper: int) -> int:
        if upper < 1:
            raise InsufficientDataError("Cannot draw a position from an empty range")
        value = self.indices[self._position % len(self.indices)]
        self._position += 1
        return value % upper

    def reset(self) -> None:
        """Restart the sequence from its first value."""
        self._position = 0


def check_random_state(random_state: Optional[Union[int, torch.Generator, RandomSource]]) -> RandomSource:
    """Create a random source from a random state.

    Args:
        random_state: None, seed, generator or an existing RandomSource

    Returns:
        RandomSource
    """
    if random_state is None:
        return TorchRandomSource()
    elif isinstance(random_state, RandomSource):
        return random_state
    elif isinstance(random_state, bool):
        raise InvalidConfigurationError("random_state must be int, Generator or RandomSource, got bool")
    elif isinstance(random_state, int):
        generator = torch.Generator()
        generator.manual_seed(random_state)
        return TorchRandomSource(generator)
    elif isinstance(random_state, torch.Generator):
        return TorchRandomSource(random_state)
    else:
        raise InvalidConfigurationError(
            f"random_state must be int, Generator or RandomSource, got {type(random_state).__name__}")


def copy_element(element: Any) -> Any:
    """Owned copy of a column element.

    Indexing a tensor or a 2-D array returns a view into the column, so
    sampled centroids are detached from the host's storage here.
    """
    if isinstance(element, torch.Tensor):
        return element.clone()
    if isinstance(element, np.ndarray):
        return element.copy()
    return copy.copy(element)


class RandomInit(InitializationStrategy):
    """Pick K centroids uniformly at random from the working range."""

    def __init__(self, random_source: Optional[RandomSource] = None):
        """
        Args:
            random_source: Source of positions (torch default generator if None)
        """
        self.random_source = random_source if random_source is not None else TorchRandomSource()

    def initialize(self, column: Sequence, n_points: int, n_clusters: int,
                   **kwargs) -> List[Any]:
        """Initialize centroids with random elements.

        Args:
            column: Column of elements
            n_points: Working size
            n_clusters: Number of centroids

        Returns:
            List of n_clusters elements
        """
        if n_points < 1:
            raise InsufficientDataError("Cannot sample centroids from an empty column")

        self.indices_ = [self.random_source.next_index(n_points) for _ in range(n_clusters)]
        return [copy_element(column[idx]) for idx in self.indices_]
