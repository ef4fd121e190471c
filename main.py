#!/usr/bin/env python3
"""
Game of Life Main Runner

Runs Conway's Game of Life with a selectable execution strategy and visualizer.

Examples:
    python main.py --rows 20 --columns 40 --generations 5 --seed 7
    python main.py --pattern glider --rows 10 --columns 10 --strategy parallel --workers 4
    python main.py --rows 512 --columns 512 --generations 1000 --visualizer console
"""

import argparse
import logging
import sys
from typing import List, Optional

import numpy as np

from engine import SimulationEngine
from simulators import GameOfLife, InvalidArgumentError, make_strategy
from visualizers import ConsoleVisualizer, NoVisualizer, OpenCVVisualizer, TextVisualizer

DEFAULT_ROWS = 16
DEFAULT_COLUMNS = 32
DEFAULT_GENERATIONS = 10
DEFAULT_ALIVE_CHAR = "#"
DEFAULT_DEAD_CHAR = "."

PATTERNS = {
    "blinker": np.array([[0, 0, 0],
                         [1, 1, 1],
                         [0, 0, 0]], dtype=bool),
    "block": np.array([[1, 1],
                       [1, 1]], dtype=bool),
    "glider": np.array([[0, 1, 0],
                        [0, 0, 1],
                        [1, 1, 1]], dtype=bool),
}

VISUALIZERS = ("text", "console", "opencv", "none")


def positive_int_arg(text: str) -> int:
    """argparse type for strictly positive integers."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def non_negative_int_arg(text: str) -> int:
    """argparse type for integers that are zero or greater."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return value


def single_char(text: str) -> str:
    if len(text) != 1:
        raise argparse.ArgumentTypeError(f"must be a single character, got {text!r}")
    return text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Conway's Game of Life (B3/S23) on a bounded grid.")
    parser.add_argument("--rows", type=positive_int_arg, default=DEFAULT_ROWS)
    parser.add_argument("--columns", type=positive_int_arg, default=DEFAULT_COLUMNS)
    parser.add_argument("--pattern", choices=sorted(PATTERNS),
                        help="start from a centered pattern instead of a random grid")
    parser.add_argument("--seed", type=non_negative_int_arg, help="seed for the random initial grid")
    parser.add_argument("--generations", type=positive_int_arg, default=DEFAULT_GENERATIONS,
                        help="number of generations to produce, including generation 0")
    parser.add_argument("--strategy", choices=("sequential", "parallel", "cuda"), default="sequential")
    parser.add_argument("--workers", type=positive_int_arg,
                        help="worker threads for the parallel strategy (default: CPU count)")
    parser.add_argument("--visualizer", choices=VISUALIZERS, default="text")
    parser.add_argument("--display-interval", type=positive_int_arg, default=1)
    parser.add_argument("--alive", type=single_char, default=DEFAULT_ALIVE_CHAR)
    parser.add_argument("--dead", type=single_char, default=DEFAULT_DEAD_CHAR)
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def place_pattern(pattern: np.ndarray, rows: int, columns: int) -> np.ndarray:
    """Center a pattern in an otherwise dead rows x columns grid."""
    height, width = pattern.shape
    if height > rows or width > columns:
        raise InvalidArgumentError(
            f"Pattern of size {height}x{width} does not fit in a {rows}x{columns} grid")
    grid = np.zeros((rows, columns), dtype=bool)
    top = (rows - height) // 2
    left = (columns - width) // 2
    grid[top:top + height, left:left + width] = pattern
    return grid


def make_visualizer(name: str, alive_char: str, dead_char: str):
    if name == "text":
        return TextVisualizer(sys.stdout, alive_char, dead_char)
    elif name == "console":
        return ConsoleVisualizer()
    elif name == "opencv":
        return OpenCVVisualizer()
    return NoVisualizer()


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, build the engine and run the simulation."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
                        stream=sys.stderr)

    try:
        strategy = make_strategy(args.strategy, args.workers)
        if args.pattern is not None:
            grid = place_pattern(PATTERNS[args.pattern], args.rows, args.columns)
            game = GameOfLife(grid, strategy=strategy)
        else:
            game = GameOfLife.random(args.rows, args.columns, seed=args.seed, strategy=strategy)

        visualizer = make_visualizer(args.visualizer, args.alive, args.dead)
        engine = SimulationEngine(game, visualizer, display_interval=args.display_interval)
        engine.run(args.generations)
    except InvalidArgumentError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except RuntimeError as e:
        # Unavailable backend (CUDA, OpenCV)
        print(f"error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user", file=sys.stderr)
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
