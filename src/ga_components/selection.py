"""
Selection Methods Module

Parent selection and survivor selection for the OneMax genetic algorithm.

Features:
- Uniform random parent selection with distinct indices
- Truncation survivor selection (keep the fittest)
- Selection statistics
"""

import random
from typing import List, Tuple
from ga_exceptions import SelectionError, InvariantViolation


class SelectionMethods:
    """
    Selection strategies used by the population.

    Parent selection is uniform; all selection pressure comes from
    truncation after breeding.
    """

    def __init__(self, rng: random.Random = None):
        """
        Initialize selection methods.

        Args:
            rng: Random source (a fresh unseeded one if None)
        """
        self.rng = rng or random.Random()

        # Statistics tracking
        self.selection_stats = {
            'parent_pairs_selected': 0,
            'redraws': 0,
            'truncations': 0,
            'individuals_removed': 0
        }

    def random_distinct_pair(self, population_size: int) -> Tuple[int, int]:
        """
        Draw two distinct indices uniformly from [0, population_size).

        Both indices are drawn with replacement; the first one is redrawn
        until they differ.

        Args:
            population_size: Number of individuals to choose from

        Returns:
            Tuple of (mother_index, father_index)

        Raises:
            SelectionError: If fewer than two individuals exist
        """
        if population_size < 2:
            raise SelectionError(
                f"Parent selection needs at least 2 individuals, population has {population_size}",
                population_size=population_size, selection_type="random_distinct_pair")

        mother = self.rng.randrange(population_size)
        father = self.rng.randrange(population_size)
        while mother == father:
            mother = self.rng.randrange(population_size)
            self.selection_stats['redraws'] += 1

        self.selection_stats['parent_pairs_selected'] += 1
        return mother, father

    def truncation_selection(self, individuals: List, target_size: int) -> List:
        """
        Keep the ``target_size`` fittest individuals.

        Individuals are stably sorted by fitness ascending and the last
        ``target_size`` entries are kept, so among equal fitness the ones nearer
        the end of the original order survive.

        Args:
            individuals: Current individuals (bred population)
            target_size: Number of survivors

        Returns:
            Survivors in ascending fitness order

        Raises:
            InvariantViolation: If fewer than target_size individuals exist
        """
        if len(individuals) < target_size:
            raise InvariantViolation(
                f"Cannot truncate {len(individuals)} individuals to {target_size}",
                population_size=len(individuals), required_size=target_size)

        ranked = sorted(individuals, key=lambda individual: individual.fitness)
        survivors = ranked[len(ranked) - target_size:]

        self.selection_stats['truncations'] += 1
        self.selection_stats['individuals_removed'] += len(ranked) - len(survivors)
        return survivors

    def get_statistics(self) -> dict:
        """Get selection statistics."""
        return self.selection_stats.copy()

