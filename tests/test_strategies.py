import numpy as np
import pytest

import simulators
from simulators import (
    InvalidArgumentError,
    ParallelStrategy,
    SequentialStrategy,
    make_strategy,
    partition_rows,
)


@pytest.mark.parametrize("rows, parts, expected", [
    (10, 3, [(0, 4), (4, 7), (7, 10)]),
    (5, 1, [(0, 5)]),
    (2, 8, [(0, 1), (1, 2)]),
    (6, 6, [(0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 6)]),
    (1, 4, [(0, 1)]),
])
def test_partition_rows(rows, parts, expected):
    assert partition_rows(rows, parts) == expected


@pytest.mark.parametrize("rows", [1, 7, 64, 101])
@pytest.mark.parametrize("parts", [1, 3, 16])
def test_partition_rows_covers_every_row_once(rows, parts):
    blocks = partition_rows(rows, parts)
    covered = [row for start, stop in blocks for row in range(start, stop)]
    assert covered == list(range(rows))
    assert all(stop > start for start, stop in blocks)
    sizes = [stop - start for start, stop in blocks]
    assert max(sizes) - min(sizes) <= 1


@pytest.mark.parametrize("rows, parts", [(0, 2), (3, 0), (-1, 1)])
def test_partition_rows_rejects_non_positive(rows, parts):
    with pytest.raises(InvalidArgumentError):
        partition_rows(rows, parts)


@pytest.mark.parametrize("workers", [0, -3, 1.5])
def test_parallel_strategy_rejects_bad_workers(workers):
    with pytest.raises(InvalidArgumentError):
        ParallelStrategy(workers=workers)


def test_parallel_strategy_defaults_to_cpu_count(monkeypatch):
    monkeypatch.setattr(simulators.os, "cpu_count", lambda: 6)
    assert ParallelStrategy().workers == 6


def test_parallel_strategy_falls_back_to_one_worker(monkeypatch):
    monkeypatch.setattr(simulators.os, "cpu_count", lambda: None)
    assert ParallelStrategy().workers == 1


def test_parallel_strategy_fills_every_row():
    current = np.zeros((9, 5), dtype=bool)
    next_state = np.ones((9, 5), dtype=bool)

    ParallelStrategy(workers=4).evolve(current, next_state)

    assert not next_state.any()


def test_parallel_strategy_propagates_worker_errors(monkeypatch):
    def failing_kernel(current, next_state, start, stop):
        raise RuntimeError(f"rows {start}-{stop} failed")

    monkeypatch.setattr(simulators, "evolve_rows", failing_kernel)
    current = np.zeros((4, 4), dtype=bool)

    with pytest.raises(RuntimeError, match="failed"):
        ParallelStrategy(workers=2).evolve(current, np.empty_like(current))


def test_make_strategy_by_name():
    assert isinstance(make_strategy("sequential"), SequentialStrategy)
    parallel = make_strategy("parallel", workers=3)
    assert isinstance(parallel, ParallelStrategy)
    assert parallel.workers == 3


def test_make_strategy_rejects_unknown_name():
    with pytest.raises(InvalidArgumentError, match="Unknown strategy"):
        make_strategy("quantum")


def test_strategy_repr():
    assert repr(SequentialStrategy()) == "SequentialStrategy()"
    assert repr(ParallelStrategy(workers=2)) == "ParallelStrategy(workers=2)"
