# tests/test_message_matrices.py
"""
U2 — Responsibility / availability updates

Covers:
- whole-matrix updates agree with a cell-by-cell reference sweep, round after round
- damping blends the previous value with the new one
- availabilities read the responsibilities refreshed in the same round
- exemplar_mask on the self terms
"""

from __future__ import annotations

import numpy as np
import pytest
import torch

from colcluster.distances import squared_difference
from colcluster.matrices import (
    AvailabilityMatrix,
    ResponsibilityMatrix,
    SimilarityMatrix,
    exemplar_mask,
)

from utils import reference_round, reference_similarity


def _run_rounds(column, rounds, damping):
    n = len(column)
    S = SimilarityMatrix.from_column(column, n, squared_difference).to_dense()
    R = ResponsibilityMatrix(n)
    A = AvailabilityMatrix(n)
    for _ in range(rounds):
        R.update(S, A, damping)
        A.update(R, damping)
    return R, A


@pytest.mark.parametrize("rounds,damping", [(1, 0.9), (5, 0.5), (25, 0.9)])
def test_matches_cell_by_cell_reference(rng, rounds, damping):
    column = rng.normal(size=8).round(3).tolist()
    R, A = _run_rounds(column, rounds, damping)

    S_ref = reference_similarity(column, squared_difference)
    R_ref = np.zeros_like(S_ref)
    A_ref = np.zeros_like(S_ref)
    for _ in range(rounds):
        reference_round(S_ref, R_ref, A_ref, damping)

    np.testing.assert_allclose(R.values.numpy(), R_ref, rtol=1e-10, atol=1e-10)
    np.testing.assert_allclose(A.values.numpy(), A_ref, rtol=1e-10, atol=1e-10)


def test_first_round_responsibility_values():
    column = [1.0, 2.0, 3.0]
    S = SimilarityMatrix.from_column(column, 3, squared_difference).to_dense()
    R = ResponsibilityMatrix(3)
    A = AvailabilityMatrix(3)

    R.update(S, A, damping=0.9)

    # r(0, 1) = 0.1 * (s(0, 1) - max(s(0, 0), s(0, 2))) = 0.1 * (-1 - (-4))
    assert R.values[1, 0].item() == pytest.approx(0.3)
    # r(1, 1) = 0.1 * (s(1, 1) - max(s(1, 0), s(1, 2))) = 0.1 * (-4 - (-1))
    assert R.values[1, 1].item() == pytest.approx(-0.3)


def test_availability_reads_current_round_responsibilities():
    R = ResponsibilityMatrix(3)
    R.values = torch.tensor([[1.0, 2.0, -1.0],
                             [0.5, -2.0, 3.0],
                             [-1.0, 4.0, 0.0]], dtype=torch.float64)
    A = AvailabilityMatrix(3)
    new = A.compute(R.values)

    # a(0, 0) = max(0, r(1, 0)) + max(0, r(2, 0)) = 2 + 0
    assert new[0, 0].item() == pytest.approx(2.0)
    # a(0, 1) = min(0, r(0, 0) + max(0, r(2, 0))) = min(0, 1 + 0)
    assert new[0, 1].item() == pytest.approx(0.0)
    # a(1, 0) = min(0, r(1, 1) + max(0, r(2, 1))) = min(0, -2 + 3)
    assert new[1, 0].item() == pytest.approx(0.0)
    # a(1, 2) = min(0, r(1, 1) + max(0, r(0, 1))) = min(0, -2 + 0.5)
    assert new[1, 2].item() == pytest.approx(-1.5)


def test_damped_update_blends_previous_value():
    M = ResponsibilityMatrix(2)
    M.values.fill_(10.0)
    M.damped_update(torch.zeros(2, 2, dtype=torch.float64), damping=0.9)
    assert torch.allclose(M.values, torch.full((2, 2), 9.0, dtype=torch.float64))


def test_single_element_is_its_own_exemplar():
    R, A = _run_rounds([7.0], rounds=3, damping=0.9)
    assert not torch.isnan(R.values).any()
    assert not torch.isnan(A.values).any()
    assert exemplar_mask(R, A).tolist() == [True]


def test_exemplar_mask_uses_self_terms():
    R = ResponsibilityMatrix(2)
    A = AvailabilityMatrix(2)
    R.values = torch.tensor([[1.0, 0.0], [0.0, -3.0]], dtype=torch.float64)
    A.values = torch.tensor([[-0.5, 0.0], [0.0, 2.0]], dtype=torch.float64)
    assert exemplar_mask(R, A).tolist() == [True, False]
