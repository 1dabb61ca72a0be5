"""
Evaluation Module

Handles OneMax fitness evaluation for genomes and populations.

Features:
- Pure popcount fitness function
- Fitness validation against the genome length
- Evaluation statistics
"""

from typing import Callable, Iterable, List
from ga_exceptions import validate_fitness
from ga_components.genome import Genome


FitnessFunction = Callable[[Genome], int]


def count_ones(genome: Genome) -> int:
    """
    OneMax fitness: number of genes equal to 1.

    Args:
        genome: Genome to score

    Returns:
        Count of set genes (0 to len(genome))
    """
    return sum(1 for gene in genome if gene == 1)


class EvaluationEngine:
    """
    Evaluation engine for the genetic algorithm.

    Evaluates genomes sequentially with the OneMax fitness function and keeps
    counters for reporting.
    """

    def __init__(self, fitness_function: FitnessFunction = count_ones):
        """
        Initialize evaluation engine.

        Args:
            fitness_function: Genome scoring function
        """
        self.fitness_function = fitness_function

        self.stats = {
            'evaluations_performed': 0,
            'population_evaluations': 0
        }

    def evaluate(self, genome: Genome) -> int:
        """
        Evaluate a single genome.

        Args:
            genome: Genome to evaluate

        Returns:
            Validated fitness value

        Raises:
            InvalidFitnessError: If the fitness function returns a value outside [0, len]
        """
        fitness = self.fitness_function(genome)
        self.stats['evaluations_performed'] += 1
        return validate_fitness(fitness, min_expected=0, max_expected=len(genome))

    def evaluate_population(self, individuals: Iterable) -> List[int]:
        """
        Evaluate every individual's genome.

        Args:
            individuals: Individuals to evaluate

        Returns:
            Fitness values in population order
        """
        results = [self.evaluate(individual.genome) for individual in individuals]
        self.stats['population_evaluations'] += 1
        return results

    def get_statistics(self) -> dict:
        """Get evaluation statistics."""
        return self.stats.copy()
