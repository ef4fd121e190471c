"""
Game of Life Visualizers

This module contains visualization implementations for Game of Life grids:
- BaseVisualizer: Abstract base class for all visualizers
- TextVisualizer: Writes each generation as rows of characters to a text stream
- ConsoleVisualizer: Simple console statistics output
- NoVisualizer: No visualization for benchmarking
- OpenCVVisualizer: Real-time OpenCV window display
"""

import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO, Tuple

import numpy as np

from simulators import InvalidArgumentError

try:
    import cv2
    OPENCV_AVAILABLE = True
except ImportError:
    OPENCV_AVAILABLE = False


# Abstract Base Classes
class BaseVisualizer(ABC):
    """Abstract base class for different visualization methods."""

    @abstractmethod
    def update(self, state: np.ndarray, fps: float, generation: int) -> bool:
        """Update visualization with current state. Returns False to stop simulation."""
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """Clean up visualization resources."""
        pass


# Concrete Visualizer Implementations
class TextVisualizer(BaseVisualizer):
    """
    Prints every generation as text.

    Each generation is written as a "Generation: N" header, one line per grid
    row with a character per cell, and a trailing blank line.
    """

    def __init__(self, stream: Optional[TextIO] = None, alive_char: str = "#",
                 dead_char: str = "."):
        """
        Initialize text visualizer.

        Args:
            stream: Text stream to write to (default: sys.stdout)
            alive_char: Character printed for alive cells
            dead_char: Character printed for dead cells
        """
        for name, char in (("alive_char", alive_char), ("dead_char", dead_char)):
            if not isinstance(char, str) or len(char) != 1:
                raise InvalidArgumentError(f"{name} must be a single character, got {char!r}")
        self.stream = stream if stream is not None else sys.stdout
        self.alive_char = alive_char
        self.dead_char = dead_char

    def render(self, state: np.ndarray) -> str:
        """Render a grid as newline-terminated rows of characters."""
        return "".join(
            "".join(self.alive_char if cell else self.dead_char for cell in row) + "\n"
            for row in state
        )

    def update(self, state: np.ndarray, fps: float, generation: int) -> bool:
        self.stream.write(f"Generation: {generation}\n")
        self.stream.write(self.render(state))
        self.stream.write("\n")
        return True

    def cleanup(self) -> None:
        """Flush the stream; it is owned by the caller and stays open."""
        self.stream.flush()


class ConsoleVisualizer(BaseVisualizer):
    """Simple console-based visualizer."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout

    def update(self, state: np.ndarray, fps: float, generation: int) -> bool:
        """Print basic stats to console."""
        alive_count = int(np.count_nonzero(state))
        total_cells = state.size
        density = alive_count / total_cells * 100

        print(f"Generation {generation:6d} | FPS: {fps:6.1f} | "
              f"Alive: {alive_count:6d}/{total_cells} ({density:5.1f}%)", file=self.stream)

        return True  # Never stop from console

    def cleanup(self) -> None:
        """No cleanup needed for console."""
        pass


class NoVisualizer(BaseVisualizer):
    """No visualization - for benchmarking."""

    def update(self, state: np.ndarray, fps: float, generation: int) -> bool:
        """No visualization."""
        return True  # Never stop

    def cleanup(self) -> None:
        """No cleanup needed."""
        pass


class OpenCVVisualizer(BaseVisualizer):
    """OpenCV-based real-time visualizer."""

    def __init__(self, display_size: Tuple[int, int] = (768, 768),
                 window_name: str = "Game of Life"):
        if not OPENCV_AVAILABLE:
            raise RuntimeError("OpenCV is not available. Install with: pip install opencv-python")
        self.display_size = display_size
        self.window_name = window_name
        cv2.namedWindow(self.window_name, cv2.WINDOW_AUTOSIZE)

    def update(self, state: np.ndarray, fps: float, generation: int) -> bool:
        """Update OpenCV display."""
        # Alive cells white, dead cells black
        display_state = state.astype(np.uint8) * 255

        if display_state.shape != self.display_size[::-1]:
            display_state = cv2.resize(display_state, self.display_size,
                                       interpolation=cv2.INTER_NEAREST)

        display_state = cv2.cvtColor(display_state, cv2.COLOR_GRAY2BGR)
        cv2.putText(display_state, f"FPS: {fps:.1f}", (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 1, (0, 255, 0), 2)
        cv2.putText(display_state, f"Generation: {generation}", (10, 70),
                    cv2.FONT_HERSHEY_SIMPLEX, 1, (0, 255, 0), 2)

        cv2.imshow(self.window_name, display_state)

        # Check for 'q' key press to quit
        return cv2.waitKey(1) & 0xFF != ord('q')

    def cleanup(self) -> None:
        """Clean up OpenCV resources."""
        cv2.destroyAllWindows()
