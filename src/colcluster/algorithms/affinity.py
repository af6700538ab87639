"""
Affinity propagation clustering visitor.

Exemplar-based clustering by message passing between column elements. The
number of clusters is not given up front; it emerges from the
self-preference, which is set to the smallest pairwise similarity.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence
import numbers
import time
import warnings

import torch

from ..assignments.partition import ClusterPartitioner
from ..base.clustering_base import BaseClusteringVisitor
from ..base.data_structures import AlgorithmState, ColumnView
from ..exceptions import EmptyExemplarSetWarning, InvalidConfigurationError
from ..matrices.messages import AvailabilityMatrix, ResponsibilityMatrix, exemplar_mask
from ..matrices.similarity import SimilarityMatrix
from ..utils.convergence import MaxIterations, StableExemplars
from ..utils.validation import check_damping


class AffinityPropagationVisitor(BaseClusteringVisitor):
    """Affinity propagation clustering visitor.

    Runs ``max_iter`` rounds of responsibility/availability updates, then
    selects as exemplars every element i with r(i, i) + a(i, i) > 0.

    Parameters
    ----------
    max_iter : int
        Number of message passing rounds
    distance : callable, optional
        Pairwise dissimilarity (x, y) -> float, squared difference by default
    damping : float, default=0.9
        Weight of the previous message value, in (0, 1)
    convergence_iter : int, optional
        If given, stop early once the exemplar set has been unchanged for this
        many consecutive rounds. None runs every round.
    verbose : int, default=0
        Verbosity level
    device : torch.device, optional
        Device for the message matrices (None for auto-detect)

    Attributes
    ----------
    exemplar_indices_ : Tensor
        Column positions of the exemplars, in column order
    labels_ : Tensor of shape (n_samples,)
        Nearest exemplar per element, -1 everywhere if there is no exemplar
    similarity_ : SimilarityMatrix
    responsibility_ : ResponsibilityMatrix
    availability_ : AvailabilityMatrix
    n_iter_ : int
        Number of rounds run
    """

    def __init__(self,
                 max_iter: int,
                 distance: Optional[Callable[[Any, Any], float]] = None,
                 damping: float = 0.9,
                 convergence_iter: Optional[int] = None,
                 verbose: int = 0,
                 device: Optional[torch.device] = None):
        """Initialize affinity propagation visitor."""
        self.damping = damping
        self.convergence_iter = convergence_iter
        super().__init__(max_iter=max_iter, distance=distance, verbose=verbose)

        if device is None:
            self.device = torch.device('cuda' if torch.cuda.is_available() else 'cpu')
        else:
            self.device = device

        self.exemplar_indices_ = torch.zeros(0, dtype=torch.long)
        self.similarity_: Optional[SimilarityMatrix] = None
        self.responsibility_: Optional[ResponsibilityMatrix] = None
        self.availability_: Optional[AvailabilityMatrix] = None
        self._column: Optional[Sequence] = None

    def _validate_params(self) -> None:
        super()._validate_params()
        self._damping = check_damping(self.damping)
        if self.convergence_iter is not None:
            if isinstance(self.convergence_iter, bool) or not isinstance(self.convergence_iter, numbers.Integral) \
                    or self.convergence_iter <= 0:
                raise InvalidConfigurationError(
                    f"convergence_iter must be a positive int or None, got {self.convergence_iter!r}")

    def _fit(self, column: Sequence, n_points: int) -> None:
        if self.verbose:
            print(f"Computing similarities for {n_points} elements...")

        similarity = SimilarityMatrix.from_column(column, n_points, self._distance, self.device)
        dense_similarity = similarity.to_dense()
        responsibility = ResponsibilityMatrix(n_points, self.device)
        availability = AvailabilityMatrix(n_points, self.device)

        if self.convergence_iter is None:
            convergence_criterion = MaxIterations()
        else:
            convergence_criterion = StableExemplars(self.convergence_iter)

        for iteration in range(self.max_iter):
            iter_start_time = time.time()

            # responsibilities are fully refreshed before availabilities read them
            responsibility.update(dense_similarity, availability, self._damping)
            availability.update(responsibility, self._damping)

            mask = exemplar_mask(responsibility, availability)
            n_exemplars = int(mask.sum().item())
            converged = convergence_criterion.check({
                'iteration': iteration,
                'exemplar_mask': mask
            })

            self.history_.append(AlgorithmState(
                iteration=iteration,
                n_clusters=n_exemplars,
                converged=converged
            ))
            self.n_iter_ = iteration + 1

            iter_time = time.time() - iter_start_time
            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                print(f"Round {iteration:3d}: {n_exemplars} exemplars ({iter_time:.3f}s)")

            if converged:
                self.converged_ = True
                if self.verbose:
                    print(f"Exemplars stable at round {iteration}")
                break

        mask = exemplar_mask(responsibility, availability)
        self.exemplar_indices_ = torch.nonzero(mask, as_tuple=False).flatten().cpu()
        self.similarity_ = similarity
        self.responsibility_ = responsibility
        self.availability_ = availability
        self._column = column

        if self.exemplar_indices_.numel() == 0:
            self.labels_ = torch.full((n_points,), -1, dtype=torch.long)
            if self.verbose:
                warnings.warn(f"No exemplar found after {self.n_iter_} rounds",
                              EmptyExemplarSetWarning)
        else:
            exemplars = [column[i] for i in self.exemplar_indices_.tolist()]
            self.labels_ = ClusterPartitioner(self._distance).partition(
                column, n_points, exemplars).labels

    def _representatives(self) -> List[Any]:
        return self.get_result().to_list()

    def get_result(self) -> ColumnView:
        """Exemplars as a view into the fitted column, in column order.

        The view borrows the column passed to run.
        """
        self._check_fitted()
        return ColumnView(self._column, self.exemplar_indices_.tolist())

    @property
    def n_exemplars_(self) -> int:
        self._check_fitted()
        return int(self.exemplar_indices_.numel())

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        params = super().get_params(deep)
        params.update({
            'damping': self.damping,
            'convergence_iter': self.convergence_iter,
            'device': self.device
        })
        return params
