"""
Convergence Detection System

Decides when the evolution loop stops: either the population's average
fitness reached the desired threshold or the generation counter ran past the
configured limit. Also keeps the average fitness history for statistics.

Features:
- Desired average fitness threshold (raw fitness scale, not normalized)
- Generation limit
- Fitness trend analysis over a recent window
"""

from enum import Enum
from typing import List, Optional, Tuple
import numpy as np
from ga_constants import AlgorithmConstants


class TerminationReason(Enum):
    """Why the evolution loop stopped."""

    MAX_GENERATIONS_EXCEEDED = "max-generations-exceeded"
    DESIRED_FITNESS_REACHED = "desired-fitness-reached"
    PERFECT_INDIVIDUAL_FOUND = "perfect-individual-found"

    def __str__(self) -> str:
        return self.value


class ConvergenceDetector:
    """
    Termination checks for the genetic algorithm.

    The fitness threshold is checked before the generation limit, so a run
    whose last allowed generation reaches the threshold reports success.
    """

    def __init__(self, desired_fitness: float, max_generations: int):
        """
        Initialize the convergence detection system.

        Args:
            desired_fitness: Average fitness that ends the run
            max_generations: Generation counter value that may not be exceeded
        """
        self.desired_fitness = desired_fitness
        self.max_generations = max_generations

        # Fitness tracking
        self.fitness_history: List[float] = []

    def add_fitness(self, fitness: float) -> None:
        """
        Add an average fitness value to the history.

        Args:
            fitness: Average fitness after the current generation
        """
        self.fitness_history.append(fitness)

    def check_convergence(self, current_generation: int,
                          average_fitness: float) -> Tuple[bool, Optional[TerminationReason], str]:
        """
        Check whether the loop should stop.

        Args:
            current_generation: Generation counter after the latest cycle
            average_fitness: Refreshed average fitness

        Returns:
            Tuple of (terminate, reason or None, human readable message)
        """
        if average_fitness >= self.desired_fitness:
            return (True, TerminationReason.DESIRED_FITNESS_REACHED,
                    f"Fitness of {average_fitness:.4f} is reached (desired {self.desired_fitness})")

        if current_generation > self.max_generations:
            return (True, TerminationReason.MAX_GENERATIONS_EXCEEDED,
                    f"We reached the maximal amount of generations ({self.max_generations}) and break here")

        return (False, None,
                f"Still evolving: {average_fitness:.4f} < {self.desired_fitness}")

    def _calculate_trend(self) -> float:
        """
        Slope of the average fitness over the recent window.

        Returns:
            Positive value for improving trend, negative for declining
        """
        window_size = min(AlgorithmConstants.TREND_WINDOW_SIZE, len(self.fitness_history))
        if window_size < 2:
            return 0.0

        recent_window = np.asarray(self.fitness_history[-window_size:], dtype=float)
        x_values = np.arange(window_size, dtype=float)

        # Linear regression slope
        slope = np.polyfit(x_values, recent_window, 1)[0]
        return round(float(slope), AlgorithmConstants.FITNESS_IMPROVEMENT_PRECISION)

    def get_statistics(self) -> dict:
        """Get convergence detection statistics."""
        history = np.asarray(self.fitness_history, dtype=float)
        return {
            'fitness_history_length': len(self.fitness_history),
            'best_average_fitness': float(history.max()) if history.size else 0.0,
            'mean_average_fitness': float(history.mean()) if history.size else 0.0,
            'fitness_trend': self._calculate_trend(),
            'desired_fitness': self.desired_fitness
        }
