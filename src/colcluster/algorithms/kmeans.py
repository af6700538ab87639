"""
K-means clustering visitor.

Classic K-means over an ordered column of numeric-like elements, using a
pluggable distance function for assignment and for measuring centroid shifts.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Union
import time
import warnings

import torch

from ..base.clustering_base import BaseClusteringVisitor
from ..base.data_structures import AlgorithmState
from ..base.interfaces import RandomSource
from ..assignments.hard import HardAssignment
from ..exceptions import DegenerateClusterWarning, InsufficientDataError
from ..initialization.random import RandomInit, check_random_state
from ..updates.mean import MeanUpdater
from ..utils.convergence import CentroidShift
from ..utils.metrics import inertia
from ..utils.validation import check_n_clusters, check_tolerance, check_empty_cluster_policy, working_size


class KMeansVisitor(BaseClusteringVisitor):
    """K-means clustering visitor.

    Partitions the working range into K clusters. Centroids start as K
    random elements (drawn with replacement) and are refined by alternating
    assignment and mean updates until no centroid moves more than ``tol`` or
    the iteration budget runs out.

    Parameters
    ----------
    n_clusters : int
        Number of clusters K
    max_iter : int
        Iteration budget
    distance : callable, optional
        Pairwise dissimilarity (x, y) -> float, squared difference by default.
        Also used to measure how far each centroid moved.
    tol : float, default=1e-7
        Largest centroid shift still considered converged
    empty_cluster : {'reset', 'keep'}, default='reset'
        What an emptied cluster's centroid becomes. 'reset' sets it to the
        zero element (sum of nothing divided by 1); 'keep' leaves it as is.
    random_state : int, torch.Generator or RandomSource, optional
        Source of the initial centroid positions
    verbose : int, default=0
        Verbosity level

    Attributes
    ----------
    cluster_centers_ : list
        Final centroids
    labels_ : Tensor of shape (n_samples,)
        Assignments from the last assignment step
    inertia_ : float
        Within-cluster distance sum of the last assignment step
    n_iter_ : int
        Number of iterations run
    """

    _partition_sentinel = True

    def __init__(self,
                 n_clusters: int,
                 max_iter: int,
                 distance: Optional[Callable[[Any, Any], float]] = None,
                 tol: float = 1e-7,
                 empty_cluster: str = 'reset',
                 random_state: Optional[Union[int, torch.Generator, RandomSource]] = None,
                 verbose: int = 0):
        """Initialize K-means visitor."""
        self.n_clusters = n_clusters
        self.tol = tol
        self.empty_cluster = empty_cluster
        self.random_state = random_state
        super().__init__(max_iter=max_iter, distance=distance, verbose=verbose)

        self.cluster_centers_: List[Any] = []

    def _validate_params(self) -> None:
        super()._validate_params()
        check_n_clusters(self.n_clusters)
        check_tolerance(self.tol)
        check_empty_cluster_policy(self.empty_cluster)
        check_random_state(self.random_state)

    def _fit(self, column: Sequence, n_points: int) -> None:
        if n_points < self.n_clusters:
            raise InsufficientDataError(
                f"Cannot create {self.n_clusters} clusters from {n_points} elements")

        assignment_strategy = HardAssignment(self._distance)
        update_strategy = MeanUpdater(self.empty_cluster)
        convergence_criterion = CentroidShift(tol=self.tol)

        if self.verbose:
            print(f"Initializing {self.n_clusters} clusters...")

        # int seeds restart their generator on every run
        initialization_strategy = RandomInit(check_random_state(self.random_state))
        centroids = initialization_strategy.initialize(column, n_points, self.n_clusters)
        self.initial_indices_ = list(initialization_strategy.indices_)

        for iteration in range(self.max_iter):
            iter_start_time = time.time()

            # Assignment step
            assignments, info = assignment_strategy.compute_assignments_with_info(
                column, n_points, centroids
            )
            objective_value = info['min_distances'].sum().item()

            # Update step
            new_centroids = update_strategy.update(column, n_points, assignments, centroids)

            if update_strategy.empty_clusters_ and self.verbose:
                warnings.warn(
                    f"Clusters {update_strategy.empty_clusters_} received no elements at "
                    f"iteration {iteration}; policy '{self.empty_cluster}' applied",
                    DegenerateClusterWarning
                )

            shifts = torch.tensor(
                [float(self._distance(new, old)) for new, old in zip(new_centroids, centroids)],
                dtype=torch.float64
            )
            converged = convergence_criterion.check({
                'iteration': iteration,
                'shifts': shifts
            })

            self.labels_ = assignments
            self.history_.append(AlgorithmState(
                iteration=iteration,
                n_clusters=self.n_clusters,
                objective_value=objective_value,
                converged=converged,
                metadata={
                    'shifts': shifts,
                    'empty_clusters': list(update_strategy.empty_clusters_)
                }
            ))
            self.n_iter_ = iteration + 1

            # Logging
            iter_time = time.time() - iter_start_time
            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                print(f"Iteration {iteration:3d}: inertia = {objective_value:.6f} "
                      f"max shift = {shifts.max().item():.3e} ({iter_time:.3f}s)")

            if converged:
                self.converged_ = True
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break

            centroids = new_centroids

        if not self.converged_ and self.verbose:
            warnings.warn(f"Failed to converge after {self.max_iter} iterations")

        self.cluster_centers_ = list(centroids)

    def _representatives(self) -> List[Any]:
        return self.cluster_centers_

    def get_result(self) -> List[Any]:
        """The K final centroids, in cluster order."""
        self._check_fitted()
        return list(self.cluster_centers_)

    @property
    def inertia_(self) -> float:
        """Within-cluster distance sum of the last assignment step."""
        self._check_fitted()
        return self.history_[-1].objective_value

    def score(self, column: Sequence, index: Optional[Sequence] = None) -> float:
        """Opposite of the within-cluster distance sum of column."""
        index = column if index is None else index
        labels = self.predict(column, index)
        return -inertia(column, working_size(index, column), self.cluster_centers_,
                        labels, self._distance)

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        params = super().get_params(deep)
        params.update({
            'n_clusters': self.n_clusters,
            'tol': self.tol,
            'empty_cluster': self.empty_cluster,
            'random_state': self.random_state
        })
        return params
