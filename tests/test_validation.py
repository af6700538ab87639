# tests/test_validation.py
"""
U6 — Validation, random sources and distance functions

Covers:
- configuration validators raise InvalidConfigurationError (a ValueError)
- working size is min(len(index), len(column))
- TorchRandomSource / SequenceRandomSource / check_random_state
- RandomInit draws with replacement from the working range and owns its samples
- default and vector distance functions
"""

from __future__ import annotations

import numpy as np
import pytest
import torch

from colcluster.distances import (
    absolute_difference,
    check_distance,
    euclidean,
    squared_difference,
    squared_euclidean,
)
from colcluster.exceptions import InsufficientDataError, InvalidConfigurationError
from colcluster.initialization import (
    RandomInit,
    copy_element,
    SequenceRandomSource,
    TorchRandomSource,
    check_random_state,
)
from colcluster.updates import MeanUpdater, zero_like
from colcluster.utils.validation import (
    check_damping,
    check_max_iter,
    check_n_clusters,
    check_tolerance,
    check_working_size,
    working_size,
)


def test_working_size():
    assert working_size([0, 1, 2], [1.0, 2.0]) == 2
    assert working_size(range(5), [1.0] * 10) == 5
    assert working_size([], [1.0]) == 0


@pytest.mark.parametrize("value", [0, -3, 1.5, "2", True])
def test_check_n_clusters_rejects(value):
    with pytest.raises(InvalidConfigurationError):
        check_n_clusters(value)


def test_check_max_iter():
    assert check_max_iter(5) == 5
    with pytest.raises(InvalidConfigurationError):
        check_max_iter(0)


def test_validators_accept_numpy_scalars():
    assert check_n_clusters(np.int64(3)) == 3
    assert type(check_max_iter(np.int32(7))) is int
    assert check_damping(np.float32(0.5)) == 0.5
    assert check_tolerance(np.float64(1e-7)) == pytest.approx(1e-7)
    with pytest.raises(InvalidConfigurationError):
        check_n_clusters(np.float64(2.0))
    with pytest.raises(InvalidConfigurationError):
        check_max_iter(np.bool_(True))


@pytest.mark.parametrize("value", [0.0, 1.0, -0.5, 2, "0.5"])
def test_check_damping_rejects(value):
    with pytest.raises(ValueError):
        check_damping(value)


def test_check_damping_accepts_open_interval():
    assert check_damping(0.5) == 0.5
    assert check_damping(0.999) == pytest.approx(0.999)


def test_check_tolerance():
    assert check_tolerance(0) == 0.0
    with pytest.raises(InvalidConfigurationError):
        check_tolerance(-1e-3)


def test_check_working_size():
    check_working_size(3, 3)
    with pytest.raises(InsufficientDataError):
        check_working_size(2, 3)
    with pytest.raises(InsufficientDataError):
        check_working_size(0)


def test_sequence_random_source_cycles_and_wraps():
    source = SequenceRandomSource([1, 7, 2])
    assert [source.next_index(5) for _ in range(4)] == [1, 2, 2, 1]
    source.reset()
    assert source.next_index(10) == 1


def test_sequence_random_source_rejects_empty():
    with pytest.raises(InvalidConfigurationError):
        SequenceRandomSource([])


def test_torch_random_source_range_and_seed():
    a = TorchRandomSource(torch.Generator().manual_seed(3))
    b = TorchRandomSource(torch.Generator().manual_seed(3))
    draws_a = [a.next_index(4) for _ in range(20)]
    draws_b = [b.next_index(4) for _ in range(20)]
    assert draws_a == draws_b
    assert all(0 <= d < 4 for d in draws_a)
    with pytest.raises(InsufficientDataError):
        a.next_index(0)


def test_check_random_state_variants():
    source = SequenceRandomSource([0])
    assert check_random_state(source) is source
    assert isinstance(check_random_state(None), TorchRandomSource)
    assert isinstance(check_random_state(5), TorchRandomSource)
    assert isinstance(check_random_state(torch.Generator()), TorchRandomSource)
    with pytest.raises(InvalidConfigurationError):
        check_random_state("seed")


def test_random_init_draws_with_replacement():
    column = [10.0, 20.0, 30.0, 40.0]
    init = RandomInit(SequenceRandomSource([2, 2, 0]))
    centroids = init.initialize(column, n_points=3, n_clusters=3)
    assert centroids == [30.0, 30.0, 10.0]
    assert init.indices_ == [2, 2, 0]


def test_random_init_copies_array_elements():
    column = np.array([[0.0, 0.0], [5.0, 5.0]])
    centroids = RandomInit(SequenceRandomSource([1])).initialize(column, n_points=2, n_clusters=1)
    column[1] += 100.0
    assert centroids[0].tolist() == [5.0, 5.0]


def test_copy_element_detaches_views():
    tensor_column = torch.zeros(2, 3)
    row = copy_element(tensor_column[0])
    tensor_column[0] += 1.0
    assert row.tolist() == [0.0, 0.0, 0.0]

    array_column = np.zeros((2, 3))
    row = copy_element(array_column[1])
    array_column[1] += 1.0
    assert row.tolist() == [0.0, 0.0, 0.0]

    assert copy_element(2.5) == 2.5


def test_random_init_stays_in_working_range():
    column = list(range(100))
    init = RandomInit(TorchRandomSource(torch.Generator().manual_seed(0)))
    init.initialize(column, n_points=5, n_clusters=50)
    assert max(init.indices_) < 5


def test_mean_updater_reset_and_keep():
    column = [1.0, 3.0, 8.0]
    assignments = torch.tensor([0, 0, 2])
    previous = [2.0, 5.0, 8.0]

    reset = MeanUpdater('reset')
    assert reset.update(column, 3, assignments, previous) == [2.0, 0.0, 8.0]
    assert reset.empty_clusters_ == [1]

    keep = MeanUpdater('keep')
    assert keep.update(column, 3, assignments, previous) == [2.0, 5.0, 8.0]


def test_zero_like_matches_element_type():
    assert zero_like(5) == 0
    np.testing.assert_array_equal(zero_like(np.array([1.0, 2.0])), np.zeros(2))
    assert torch.equal(zero_like(torch.tensor([3, 4])), torch.zeros(2, dtype=torch.long))


def test_scalar_distances():
    assert squared_difference(3, 1) == 4.0
    assert isinstance(squared_difference(3, 1), float)
    assert absolute_difference(1.5, 4.0) == pytest.approx(2.5)


def test_vector_distances():
    x = np.array([1.0, 2.0])
    y = torch.tensor([4.0, 6.0])
    assert squared_euclidean(x, y) == pytest.approx(25.0)
    assert euclidean([1.0, 2.0], [4.0, 6.0]) == pytest.approx(5.0)


def test_check_distance():
    assert check_distance(None) is squared_difference
    assert check_distance(absolute_difference) is absolute_difference
    with pytest.raises(InvalidConfigurationError):
        check_distance(42)
