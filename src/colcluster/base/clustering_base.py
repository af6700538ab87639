"""
Base class for the column clustering visitors.

Provides the visitor protocol shared by K-means and affinity propagation:
``pre()``, invocation with ``(index, column)``, ``post()``, ``get_result()``
and ``get_clusters(index, column)``, plus an estimator-style ``fit`` /
``predict`` surface on top of it.
"""

from abc import abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence, Sized
import time

from torch import Tensor

from .data_structures import AlgorithmState, ClusterPartition
from ..assignments.partition import ClusterPartitioner
from ..distances import check_distance
from ..utils.validation import check_max_iter, check_working_size, working_size


class BaseClusteringVisitor:
    """Base class implementing the visitor protocol.

    Subclasses need to specify:
    - ``_fit``: the clustering run over the working range
    - ``_representatives``: the centroids or exemplars clusters form around
    - ``get_result``: the learned result
    """

    # whether each cluster of get_clusters carries its representative as sentinel
    _partition_sentinel = False

    def __init__(self,
                 max_iter: int,
                 distance: Optional[Callable[[Any, Any], float]] = None,
                 verbose: int = 0):
        """
        Args:
            max_iter: Iteration budget (positive)
            distance: Pairwise dissimilarity, squared difference if None
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
        """
        self.max_iter = max_iter
        self.distance = distance
        self.verbose = verbose

        # Algorithm state
        self.fitted_ = False
        self.converged_ = False
        self.n_iter_ = 0
        self.history_: List[AlgorithmState] = []
        self.labels_: Optional[Tensor] = None

        self._validate_params()

    def _validate_params(self) -> None:
        """Validate configuration; subclasses extend this."""
        check_max_iter(self.max_iter)
        self._distance = check_distance(self.distance)

    def _min_points(self) -> int:
        """Smallest working size a run accepts."""
        return 1

    @abstractmethod
    def _fit(self, column: Sequence, n_points: int) -> None:
        """Run the algorithm over the first n_points elements of column."""
        pass

    @abstractmethod
    def _representatives(self) -> List[Any]:
        """Representatives that clusters are formed around."""
        pass

    @abstractmethod
    def get_result(self) -> Any:
        """Learned centroids or exemplars."""
        pass

    # Visitor protocol

    def pre(self) -> None:
        """Called by the host before processing; nothing to reset."""
        pass

    def post(self) -> None:
        """Called by the host after processing."""
        pass

    def __call__(self, index: Sized, column: Sequence) -> None:
        self.run(index, column)

    def run(self, index: Sized, column: Sequence) -> 'BaseClusteringVisitor':
        """Cluster the working range min(len(index), len(column)) of column.

        Args:
            index: Index sequence, only its length is consulted
            column: Column of elements

        Returns:
            Self
        """
        n_points = working_size(index, column)
        check_working_size(n_points, self._min_points())

        self.fitted_ = False
        self.converged_ = False
        self.n_iter_ = 0
        self.history_ = []

        start_time = time.time()
        self._fit(column, n_points)
        self.fitted_ = True

        if self.verbose:
            print(f"Total fitting time: {time.time() - start_time:.3f}s")

        return self

    def get_clusters(self, index: Sized, column: Sequence) -> ClusterPartition:
        """Separate the column into clusters around the learned representatives.

        The returned views borrow ``column``; it must outlive the partition.

        Args:
            index: Index sequence, only its length is consulted
            column: Same or structurally compatible column as used in run

        Returns:
            ClusterPartition
        """
        self._check_fitted()
        n_points = working_size(index, column)
        partitioner = ClusterPartitioner(self._distance)
        return partitioner.partition(column, n_points, self._representatives(),
                                     with_sentinel=self._partition_sentinel)

    # Estimator-style surface

    def fit(self, column: Sequence, index: Optional[Sized] = None) -> 'BaseClusteringVisitor':
        """Fit on a column; the whole column is used when index is None."""
        return self.run(column if index is None else index, column)

    def predict(self, column: Sequence, index: Optional[Sized] = None) -> Tensor:
        """Cluster labels for the working range (-1 when there are no clusters).

        Returns:
            (n,) long tensor
        """
        partition = self.get_clusters(column if index is None else index, column)
        return partition.labels

    def fit_predict(self, column: Sequence, index: Optional[Sized] = None) -> Tensor:
        """Fit and return cluster labels."""
        self.fit(column, index)
        return self.predict(column, index)

    def _check_fitted(self) -> None:
        if not self.fitted_:
            raise RuntimeError(f"{self.__class__.__name__} must be fitted before use")

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get configuration parameters."""
        return {
            'max_iter': self.max_iter,
            'distance': self.distance,
            'verbose': self.verbose
        }

    def set_params(self, **params) -> 'BaseClusteringVisitor':
        """Set configuration parameters and re-validate them."""
        previous = self.get_params()
        for key in params:
            if key not in previous:
                raise ValueError(f"Invalid parameter {key!r} for {self.__class__.__name__}")

        for key, value in params.items():
            setattr(self, key, value)
        try:
            self._validate_params()
        except ValueError:
            # a rejected configuration never stays on the visitor
            for key, value in previous.items():
                setattr(self, key, value)
            self._validate_params()
            raise
        return self
