"""
Game of Life Simulators

This module contains the Conway's Game of Life engine and its execution strategies:
- InvalidArgumentError: Raised for invalid construction arguments
- Rule kernels: Numba-compiled B3/S23 neighbor counting and transition functions
- BaseStrategy: Abstract base class for all execution strategies
- SequentialStrategy: Single-threaded row-major evolution
- ParallelStrategy: Row blocks fanned out over a bounded thread pool
- GameOfLife: Engine owning the grid state, parameterized by a strategy
- Utility functions for random grids, row partitioning and strategy lookup
"""

import logging
import operator
import os
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import numpy as np
from numba import njit

logger = logging.getLogger(__name__)


class InvalidArgumentError(ValueError):
    """Raised when an engine, strategy or simulation is given an invalid argument."""


# Rule Kernels
@njit(nogil=True)
def count_alive_neighbors(grid, row, column):
    """
    Count alive cells among the 8 neighbors of (row, column).

    Offsets that land outside the grid are skipped (no wraparound).
    """
    rows, columns = grid.shape
    alive = 0
    for di in range(-1, 2):
        for dj in range(-1, 2):
            if di == 0 and dj == 0:
                continue
            ni = row + di
            nj = column + dj
            if 0 <= ni < rows and 0 <= nj < columns and grid[ni, nj]:
                alive += 1
    return alive


@njit(nogil=True)
def next_cell_state(alive, neighbors):
    """Apply the B3/S23 transition to a single cell."""
    if alive:
        return neighbors == 2 or neighbors == 3
    return neighbors == 3


@njit(nogil=True)
def evolve_rows(current, next_state, start, stop):
    """
    Write generation N+1 for rows [start, stop) into next_state.

    Args:
        current: Generation N grid, only read
        next_state: Destination grid, only rows [start, stop) are written
        start, stop: Row range handled by this call
    """
    columns = current.shape[1]
    for i in range(start, stop):
        for j in range(columns):
            neighbors = count_alive_neighbors(current, i, j)
            next_state[i, j] = next_cell_state(current[i, j], neighbors)


# Abstract Base Classes
class BaseStrategy(ABC):
    """Abstract base class for the ways a generation can be evolved."""

    name = "base"

    @abstractmethod
    def evolve(self, current: np.ndarray, next_state: np.ndarray) -> None:
        """Fill next_state with the generation following current."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# Concrete Strategy Implementations
class SequentialStrategy(BaseStrategy):
    """Evolves every cell on the calling thread, row by row."""

    name = "sequential"

    def evolve(self, current: np.ndarray, next_state: np.ndarray) -> None:
        evolve_rows(current, next_state, 0, current.shape[0])


class ParallelStrategy(BaseStrategy):
    """
    Data-parallel evolution over a bounded thread pool.

    The row range is split into contiguous blocks, one per worker. Each block
    writes only its own rows of the destination and reads the frozen source,
    so no locking is required. The rule kernel releases the GIL, which lets
    the blocks run concurrently.
    """

    name = "parallel"

    def __init__(self, workers: Optional[int] = None):
        """
        Initialize parallel strategy.

        Args:
            workers: Maximum number of worker threads (default: CPU count)
        """
        if workers is None:
            workers = os.cpu_count() or 1
        self.workers = positive_int("workers", workers)

    def evolve(self, current: np.ndarray, next_state: np.ndarray) -> None:
        blocks = partition_rows(current.shape[0], self.workers)
        if len(blocks) == 1:
            evolve_rows(current, next_state, *blocks[0])
            return

        with ThreadPoolExecutor(max_workers=len(blocks)) as executor:
            futures = [executor.submit(evolve_rows, current, next_state, start, stop)
                       for start, stop in blocks]
            # Barrier: result() re-raises any worker failure
            for future in futures:
                future.result()

    def __repr__(self) -> str:
        return f"ParallelStrategy(workers={self.workers})"


# Engine
class GameOfLife:
    """
    Conway's Game of Life (B3/S23) on a fixed-size, non-toroidal grid.

    The engine owns a mutable current grid and an immutable copy of the
    initial grid. How a generation is computed is delegated to a strategy,
    so the sequential and parallel engines share the same data model and
    rule and produce identical grids.
    """

    def __init__(self, grid, strategy: Optional[BaseStrategy] = None):
        """
        Initialize engine from an explicit grid.

        Args:
            grid: 2D array-like of cell values (truthy = alive), copied on entry
            strategy: Execution strategy (default: SequentialStrategy)
        """
        if strategy is not None and not isinstance(strategy, BaseStrategy):
            raise InvalidArgumentError(
                f"strategy must be a BaseStrategy, got {type(strategy).__name__}")
        self._grid = _as_grid(grid)
        self._initial_grid = self._grid.copy()
        self._initial_grid.flags.writeable = False
        self._generation = 0
        self._strategy = strategy if strategy is not None else SequentialStrategy()
        logger.debug("Created %dx%d engine with %r", self.rows, self.columns, self._strategy)

    @classmethod
    def random(cls, rows: int, columns: int, *, seed: Optional[int] = None,
               rng: Optional[np.random.Generator] = None,
               strategy: Optional[BaseStrategy] = None) -> "GameOfLife":
        """
        Create engine with every cell independently alive with probability 0.5.

        Args:
            rows, columns: Grid dimensions, both must be positive
            seed: Seed for a fresh generator (mutually exclusive with rng)
            rng: Generator to draw cells from
            strategy: Execution strategy (default: SequentialStrategy)
        """
        if seed is not None and rng is not None:
            raise InvalidArgumentError("Pass either seed or rng, not both")
        if rng is None:
            if seed is not None:
                seed = non_negative_int("seed", seed)
            rng = np.random.default_rng(seed)
        elif not isinstance(rng, np.random.Generator):
            raise InvalidArgumentError(f"rng must be a numpy Generator, got {type(rng).__name__}")
        return cls(random_grid(rows, columns, rng), strategy=strategy)

    @classmethod
    def sequential(cls, grid) -> "GameOfLife":
        """Create engine evolving on the calling thread."""
        return cls(grid, strategy=SequentialStrategy())

    @classmethod
    def parallel(cls, grid, workers: Optional[int] = None) -> "GameOfLife":
        """Create engine evolving row blocks over a thread pool."""
        return cls(grid, strategy=ParallelStrategy(workers))

    @property
    def rows(self) -> int:
        return self._grid.shape[0]

    @property
    def columns(self) -> int:
        return self._grid.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._grid.shape

    @property
    def strategy(self) -> BaseStrategy:
        return self._strategy

    @property
    def generation(self) -> int:
        """Number of advances since construction or the last restart."""
        return self._generation

    @property
    def current_generation(self) -> np.ndarray:
        """Deep copy of the current grid."""
        return self._grid.copy()

    def advance(self) -> None:
        """Compute the next generation and make it current."""
        source = self._grid.view()
        source.flags.writeable = False
        next_state = np.empty_like(self._grid)
        self._strategy.evolve(source, next_state)

        self._grid = next_state
        self._generation += 1

    def restart(self) -> None:
        """Reset to the initial grid and generation 0."""
        np.copyto(self._grid, self._initial_grid)
        self._generation = 0

    def __repr__(self) -> str:
        return (f"GameOfLife(rows={self.rows}, columns={self.columns}, "
                f"generation={self._generation}, strategy={self._strategy!r})")


# Utility Functions
def random_grid(rows: int, columns: int, rng: np.random.Generator) -> np.ndarray:
    """Draw a rows x columns grid with each cell alive with probability 0.5."""
    rows = positive_int("rows", rows)
    columns = positive_int("columns", columns)
    return rng.choice([False, True], size=(rows, columns), p=[0.5, 0.5])


def partition_rows(rows: int, parts: int) -> List[Tuple[int, int]]:
    """
    Split [0, rows) into at most `parts` contiguous, non-empty (start, stop) blocks.

    Block sizes differ by at most one row; earlier blocks get the extra rows.
    """
    rows = positive_int("rows", rows)
    parts = min(positive_int("parts", parts), rows)
    base, extra = divmod(rows, parts)

    blocks = []
    start = 0
    for index in range(parts):
        stop = start + base + (1 if index < extra else 0)
        blocks.append((start, stop))
        start = stop
    return blocks


def make_strategy(name: str, workers: Optional[int] = None) -> BaseStrategy:
    """
    Create a strategy by name.

    Args:
        name: One of "sequential", "parallel" or "cuda"
        workers: Worker count for the parallel strategy
    """
    if name == SequentialStrategy.name:
        strategy = SequentialStrategy()
    elif name == ParallelStrategy.name:
        strategy = ParallelStrategy(workers)
    elif name == "cuda":
        from gpu import CudaStrategy
        strategy = CudaStrategy()
    else:
        raise InvalidArgumentError(f"Unknown strategy {name!r}")

    logger.debug("Selected strategy %r", strategy)
    return strategy


def _as_int(name: str, value) -> int:
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    try:
        return operator.index(value)
    except TypeError:
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}") from None


def positive_int(name: str, value) -> int:
    value = _as_int(name, value)
    if value <= 0:
        raise InvalidArgumentError(f"{name} must be positive, got {value}")
    return value


def non_negative_int(name: str, value) -> int:
    value = _as_int(name, value)
    if value < 0:
        raise InvalidArgumentError(f"{name} must not be negative, got {value}")
    return value


def _as_grid(grid) -> np.ndarray:
    if grid is None:
        raise InvalidArgumentError("Grid must not be None")
    try:
        array = np.array(grid, dtype=bool, order="C")
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Grid must be a rectangular array of cells: {e}") from e

    if array.size == 0:
        raise InvalidArgumentError("Grid must have at least one row and one column.")
    if array.ndim != 2:
        raise InvalidArgumentError(f"Grid must be two-dimensional, got shape {array.shape}")
    return array
