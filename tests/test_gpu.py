import numpy as np
import pytest

from conftest import requires_cuda
from simulators import GameOfLife


@requires_cuda
@pytest.mark.parametrize("rows, columns", [(1, 1), (3, 3), (17, 40), (100, 64)])
def test_cuda_matches_sequential(rows, columns):
    from gpu import CudaStrategy

    grid = np.random.default_rng(rows + columns).random((rows, columns)) < 0.5
    sequential = GameOfLife.sequential(grid)
    cuda_game = GameOfLife(grid, strategy=CudaStrategy())

    for _ in range(8):
        sequential.advance()
        cuda_game.advance()
        np.testing.assert_array_equal(cuda_game.current_generation, sequential.current_generation)


@requires_cuda
def test_cuda_blinker(horizontal_blinker, vertical_blinker):
    from gpu import CudaStrategy

    game = GameOfLife(horizontal_blinker, strategy=CudaStrategy())
    game.advance()
    np.testing.assert_array_equal(game.current_generation, vertical_blinker)
