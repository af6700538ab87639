"""
Responsibility and availability matrices for affinity propagation.

Both are dense (n, n) float64 tensors indexed ``[candidate, element]``:
``responsibility[j, i]`` is r(i, j), the message from element i to candidate
exemplar j, and ``availability[j, i]`` is a(j, i), the message from candidate
j back to element i.

Each round first refreshes every responsibility from the previous round's
availabilities, then every availability from this round's
responsibilities. The whole-matrix updates below give the same values as
sweeping the cells one by one in that order.
"""

import torch
from torch import Tensor

from .similarity import SimilarityMatrix


class MessageMatrix:
    """Dense damped message matrix."""

    def __init__(self, size: int, device: torch.device = torch.device('cpu')):
        self.size = size
        self.values = torch.zeros(size, size, dtype=torch.float64, device=device)

    def damped_update(self, new_values: Tensor, damping: float) -> None:
        """Blend new values with the current ones in place."""
        self.values.mul_(damping).add_((1.0 - damping) * new_values)

    def diagonal(self) -> Tensor:
        return torch.diagonal(self.values)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={self.size})"


class ResponsibilityMatrix(MessageMatrix):
    """r(i, j) = s(i, j) - max_{j' != j} [s(i, j') + a(j', i)], damped."""

    def compute(self, similarity: Tensor, availability: Tensor) -> Tensor:
        """Undamped responsibilities.

        Args:
            similarity: Dense (n, n) similarity, s[i, j]
            availability: (n, n) availability indexed [candidate, element]

        Returns:
            (n, n) responsibilities indexed [candidate, element]
        """
        n = self.size
        # combined[i, j'] = s(i, j') + a(j', i)
        combined = similarity + availability.t()

        if n > 1:
            top2, top2_idx = torch.topk(combined, 2, dim=1)
            best, second = top2[:, 0], top2[:, 1]
            excluded_max = best.unsqueeze(1).expand(n, n).clone()
            rows = torch.arange(n, device=combined.device)
            excluded_max[rows, top2_idx[:, 0]] = second
        else:
            excluded_max = torch.full_like(combined, float('-inf'))

        # (i, j) layout -> [candidate, element]
        return (similarity - excluded_max).t()

    def update(self, similarity: Tensor, availability: 'AvailabilityMatrix',
               damping: float) -> None:
        self.damped_update(self.compute(similarity, availability.values), damping)


class AvailabilityMatrix(MessageMatrix):
    """Availabilities with the self-availability rule on the diagonal:

    a(j, j) = sum_{i != j} max(0, r(i, j))
    a(j, i) = min(0, r(j, j) + sum_{i' not in {i, j}} max(0, r(i', j)))
    both damped against the previous value.
    """

    def compute(self, responsibility: Tensor) -> Tensor:
        """Undamped availabilities from (already refreshed) responsibilities.

        Args:
            responsibility: (n, n) responsibilities indexed [candidate, element]

        Returns:
            (n, n) availabilities indexed [candidate, element]
        """
        positive = torch.clamp(responsibility, min=0.0)
        positive.fill_diagonal_(0.0)
        self_resp = torch.diagonal(responsibility)
        # row j: sum over all elements i' != j of max(0, r(i', j))
        support = positive.sum(dim=1)

        off_diag = torch.clamp(
            self_resp.unsqueeze(1) + support.unsqueeze(1) - positive,
            max=0.0
        )
        new_values = off_diag.clone()
        new_values.diagonal().copy_(support)
        return new_values

    def update(self, responsibility: ResponsibilityMatrix, damping: float) -> None:
        self.damped_update(self.compute(responsibility.values), damping)


def exemplar_mask(responsibility: ResponsibilityMatrix,
                  availability: AvailabilityMatrix) -> Tensor:
    """Element i is an exemplar iff r(i, i) + a(i, i) > 0."""
    return (responsibility.diagonal() + availability.diagonal()) > 0.0
