"""
Simulation Engine

This module contains the SimulationEngine class that drives a GameOfLife
engine and hands each generation to a visualizer.
"""

import logging
import time

from simulators import GameOfLife, InvalidArgumentError, positive_int
from visualizers import BaseVisualizer

logger = logging.getLogger(__name__)


class SimulationEngine:
    """Coordinates between a Game of Life engine and a visualizer."""

    def __init__(self, simulator: GameOfLife, visualizer: BaseVisualizer,
                 display_interval: int = 1):
        """
        Initialize simulation engine.

        Args:
            simulator: The Game of Life engine to advance
            visualizer: The visualizer to display results
            display_interval: Show every Nth generation (generation 0 is always shown)
        """
        if simulator is None:
            raise InvalidArgumentError("simulator must not be None")
        if visualizer is None:
            raise InvalidArgumentError("visualizer must not be None")
        self.simulator = simulator
        self.visualizer = visualizer
        self.display_interval = positive_int("display_interval", display_interval)

    def run(self, generations: int) -> int:
        """
        Run the simulation.

        Shows the current generation, then advances and shows until
        `generations` generations have been produced in total.

        Args:
            generations: Number of generations to produce, including the first

        Returns:
            The generation the engine ended on
        """
        generations = positive_int("generations", generations)

        logger.info("Starting simulation with %r and %s",
                    self.simulator.strategy, type(self.visualizer).__name__)
        logger.info("Grid size: %dx%d, display interval: %d",
                    self.simulator.rows, self.simulator.columns, self.display_interval)

        try:
            last_display_time = time.perf_counter()
            frame_count = 0

            if not self.visualizer.update(self.simulator.current_generation, 0.0,
                                          self.simulator.generation):
                return self.simulator.generation

            for _ in range(1, generations):
                self.simulator.advance()
                frame_count += 1

                generation = self.simulator.generation
                if generation % self.display_interval == 0:
                    current_time = time.perf_counter()
                    elapsed_time = current_time - last_display_time
                    fps = frame_count / elapsed_time if elapsed_time > 0 else 0.0

                    should_continue = self.visualizer.update(
                        self.simulator.current_generation, fps, generation)
                    if not should_continue:
                        break

                    # Reset timing for next interval
                    last_display_time = current_time
                    frame_count = 0

            return self.simulator.generation

        finally:
            self.visualizer.cleanup()
            logger.info("Simulation completed at generation %d", self.simulator.generation)
