"""
Genetic Operations Module

Core genetic algorithm operations: single-point crossover and bit-flip
mutation. These are the building blocks that drive the evolutionary search.

Features:
- Random one-point crossover with an optional fixed split point
- Crossover rate honored as the probability of recombining
- Per-gene bit-flip mutation
- Operation statistics
"""

import random
from typing import Optional, Tuple
from ga_exceptions import CrossoverError
from ga_components.genome import Genome
from ga_components.individual import Individual
from ga_logging import get_logger


class GeneticOperations:
    """
    Core genetic operations for the OneMax genetic algorithm.

    Crossover never touches the parents and always preserves the genome length.
    Mutation is applied to children after crossover.
    """

    def __init__(self, crossover_rate: float, mutation_rate: float,
                 rng: random.Random = None):
        """
        Initialize genetic operations.

        Args:
            crossover_rate: Probability of recombining a parent pair (else cloned)
            mutation_rate: Probability of each gene being flipped
            rng: Random source (a fresh unseeded one if None)
        """
        self.crossover_rate = crossover_rate
        self.mutation_rate = mutation_rate
        self.rng = rng or random.Random()
        self.logger = get_logger("GeneticOperations")

        # Statistics tracking
        self.crossover_count = 0
        self.clone_count = 0
        self.mutation_count = 0
        self.bits_flipped = 0

    def crossover(self, parent1: Individual, parent2: Individual) -> Tuple[Individual, Individual]:
        """
        Produce two children from two parents.

        With probability ``crossover_rate`` the parents are recombined with
        one-point crossover; otherwise the children are clones of the parents.
        A rate of 1.0 always recombines.

        Args:
            parent1: First parent (mother)
            parent2: Second parent (father)

        Returns:
            Tuple of two new children with generation tag 0
        """
        if self.crossover_rate < 1.0 and self.rng.random() >= self.crossover_rate:
            self.clone_count += 1
            return (Individual(parent1.genome.copy(), 0),
                    Individual(parent2.genome.copy(), 0))

        return self.one_point_crossover(parent1, parent2)

    def one_point_crossover(self, parent1: Individual, parent2: Individual,
                            point: Optional[int] = None) -> Tuple[Individual, Individual]:
        """
        Single-point crossover.

        child1 = parent1[:point] + parent2[point:]
        child2 = parent2[:point] + parent1[point:]

        Args:
            parent1: First parent
            parent2: Second parent
            point: Split point in [0, L]; drawn uniformly from [0, L) if None

        Returns:
            Tuple of two children, fitness computed, generation tag 0

        Raises:
            CrossoverError: If parent lengths differ or the point is out of range
        """
        length = len(parent1.genome)
        if len(parent2.genome) != length:
            raise CrossoverError(
                f"Crossover error: parent lengths differ ({length} != {len(parent2.genome)})",
                parent1_length=length, parent2_length=len(parent2.genome))

        if point is None:
            point = self.rng.randrange(length)
        elif not 0 <= point <= length:
            raise CrossoverError(f"Crossover point {point} outside [0, {length}]",
                                 parent1_length=length, parent2_length=length, point=point)

        child1 = Individual(Genome.concat(parent1.genome[:point], parent2.genome[point:]), 0)
        child2 = Individual(Genome.concat(parent2.genome[:point], parent1.genome[point:]), 0)

        self.crossover_count += 1

        if self.logger.is_debug():
            self.logger.debug("RandomOnePointCrossover", split_at=point)
            self.logger.debug(f"  Mother: {parent1}")
            self.logger.debug(f"  Father: {parent2}")
            self.logger.debug(f"  Child1: {child1}")
            self.logger.debug(f"  Child2: {child2}")

        return child1, child2

    def mutate(self, individual: Individual) -> Individual:
        """
        Apply bit-flip mutation to an individual in place.

        Args:
            individual: Individual to mutate

        Returns:
            The same individual, fitness refreshed
        """
        flipped = individual.mutate(self.mutation_rate, self.rng)
        if flipped:
            self.mutation_count += 1
            self.bits_flipped += flipped

        if self.logger.is_debug():
            marker = " <===== WINNER!" if individual.is_perfect else ""
            self.logger.debug(f"Mutated child: {individual}{marker}")

        return individual

    def get_statistics(self) -> dict:
        """Get statistics about genetic operations performed."""
        return {
            'crossover_count': self.crossover_count,
            'clone_count': self.clone_count,
            'mutation_count': self.mutation_count,
            'bits_flipped': self.bits_flipped
        }

