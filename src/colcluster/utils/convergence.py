"""
Convergence criteria for the clustering visitors.

- K-means stops once no centroid moves further than a tolerance.
- Affinity propagation runs a fixed number of rounds by default and can
  optionally stop once its exemplar set has been stable for a while.
"""

from typing import Any, Dict, Optional

import torch
from torch import Tensor

from ..base.interfaces import ConvergenceCriterion


class CentroidShift(ConvergenceCriterion):
    """Convergence when every centroid shift is at most ``tol``.

    Shifts are measured with the visitor's own distance function between the
    new and the old centroid.
    """

    def __init__(self, tol: float = 1e-7):
        """
        Args:
            tol: Largest shift still considered converged
        """
        super().__init__()
        self.tol = tol

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check the per-cluster shifts in ``current_state['shifts']``."""
        shifts = current_state['shifts']
        if not isinstance(shifts, Tensor):
            shifts = torch.as_tensor(shifts, dtype=torch.float64)

        max_shift = shifts.max().item() if shifts.numel() > 0 else 0.0
        converged = bool((shifts <= self.tol).all().item())

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'max_shift': max_shift,
            'converged': converged
        })

        return converged


class StableExemplars(ConvergenceCriterion):
    """Convergence once the exemplar set is unchanged for ``convergence_iter``
    consecutive rounds.

    Each round is compared with the one before it, so convergence needs at
    least ``convergence_iter + 1`` rounds with the same non-empty mask.
    """

    def __init__(self, convergence_iter: int = 15):
        super().__init__()
        if convergence_iter < 1:
            raise ValueError(f"convergence_iter must be positive, got {convergence_iter}")
        self.convergence_iter = convergence_iter
        self._prev_mask: Optional[Tensor] = None
        self._stable_count = 0

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Compare ``current_state['exemplar_mask']`` with the previous round."""
        mask = current_state['exemplar_mask']

        if self._prev_mask is not None and torch.equal(mask, self._prev_mask):
            self._stable_count += 1
        else:
            self._stable_count = 0

        self._prev_mask = mask.clone()

        # an empty exemplar set never counts as converged
        converged = bool(mask.any().item()) and self._stable_count >= self.convergence_iter

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'n_exemplars': int(mask.sum().item()),
            'stable_count': self._stable_count
        })

        return converged

    def reset(self):
        super().reset()
        self._prev_mask = None
        self._stable_count = 0


class MaxIterations(ConvergenceCriterion):
    """Never converges; the visitor runs its full iteration budget."""

    def check(self, current_state: Dict[str, Any]) -> bool:
        self.history.append({'iteration': current_state.get('iteration', len(self.history))})
        return False
