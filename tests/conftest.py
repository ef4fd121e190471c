"""Shared pytest fixtures and helpers for the Game of Life tests.

GPU tests require a CUDA-capable device reachable through numba. They are
skipped automatically when it is missing.
"""

import numpy as np
import pytest

# ---------------------------------------------------------------------------
#  Skip helpers
# ---------------------------------------------------------------------------

def _has_cuda():
    try:
        from gpu import cuda_available
        return cuda_available()
    except Exception:
        return False


requires_cuda = pytest.mark.skipif(not _has_cuda(), reason="CUDA not available")


# ---------------------------------------------------------------------------
#  Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def horizontal_blinker():
    return np.array([[False, False, False],
                     [True, True, True],
                     [False, False, False]])


@pytest.fixture
def vertical_blinker():
    return np.array([[False, True, False],
                     [False, True, False],
                     [False, True, False]])


@pytest.fixture
def block():
    grid = np.zeros((4, 4), dtype=bool)
    grid[1:3, 1:3] = True
    return grid


@pytest.fixture
def glider():
    grid = np.zeros((8, 8), dtype=bool)
    grid[0, 1] = grid[1, 2] = True
    grid[2, 0:3] = True
    return grid
