"""
GPU Execution Strategy

CUDA-accelerated evolution for the GameOfLife engine. One CUDA thread computes
one cell against the unmodified previous generation held in device memory.
Requires a CUDA-capable GPU; use cuda_available() to check before constructing.
"""

import logging
from typing import Tuple

import numpy as np
from numba import cuda

from simulators import BaseStrategy

logger = logging.getLogger(__name__)


# CUDA Kernels
@cuda.jit
def _update_kernel(current, next_state, rows, columns):
    """
    CUDA kernel for Conway's Game of Life (B3/S23) on a bounded grid.

    Args:
        current: Current state grid (device array, uint8)
        next_state: Next state grid (device array, uint8)
        rows, columns: Grid dimensions
    """
    i, j = cuda.grid(2)

    if i < rows and j < columns:
        # Neighbors outside the grid are not counted
        neighbors = 0
        for di in range(-1, 2):
            for dj in range(-1, 2):
                if di == 0 and dj == 0:
                    continue
                ni = i + di
                nj = j + dj
                if ni >= 0 and ni < rows and nj >= 0 and nj < columns:
                    neighbors += current[ni, nj]

        if current[i, j] == 1:
            next_state[i, j] = 1 if neighbors == 2 or neighbors == 3 else 0
        else:
            next_state[i, j] = 1 if neighbors == 3 else 0


def cuda_available() -> bool:
    """Return True when numba can reach a CUDA device."""
    return cuda.is_available()


class CudaStrategy(BaseStrategy):
    """Evolves the grid on the GPU, one thread per cell."""

    name = "cuda"

    def __init__(self, threads_per_block: Tuple[int, int] = (16, 16)):
        """
        Initialize CUDA strategy.

        Args:
            threads_per_block: CUDA thread block size
        """
        if not cuda_available():
            raise RuntimeError("CUDA is not available; use the sequential or parallel strategy")
        self.threads_per_block = threads_per_block
        gpu = cuda.get_current_device()
        logger.debug("Using GPU device %s (compute capability %s)", gpu.name, gpu.compute_capability)

    def evolve(self, current: np.ndarray, next_state: np.ndarray) -> None:
        rows, columns = current.shape
        blocks_per_grid = (
            (rows + self.threads_per_block[0] - 1) // self.threads_per_block[0],
            (columns + self.threads_per_block[1] - 1) // self.threads_per_block[1]
        )

        d_current = cuda.to_device(current.astype(np.uint8))
        d_next = cuda.device_array_like(d_current)
        _update_kernel[blocks_per_grid, self.threads_per_block](d_current, d_next, rows, columns)
        next_state[...] = d_next.copy_to_host().astype(bool)

    def __repr__(self) -> str:
        return f"CudaStrategy(threads_per_block={self.threads_per_block})"
