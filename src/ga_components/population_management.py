"""
Population Management Module

Handles population initialization, parent selection, crossover orchestration,
truncation and aggregate statistics for the OneMax genetic algorithm.

Features:
- Random population initialization
- Distinct random parent selection (copies are handed out)
- Truncation back to the target size
- Average fitness refresh with stop-at-first-perfect detection
- Content-equality lookup and replacement
- Population diversity statistics
"""

import random
from typing import List, Optional, Tuple
from ga_exceptions import ConfigurationError, InvariantViolation, PopulationError
from ga_constants import GAConstants
from ga_components.individual import Individual
from ga_components.evaluation import EvaluationEngine
from ga_components.genetic_operations import GeneticOperations
from ga_components.selection import SelectionMethods


class Population:
    """
    Ordered collection of individuals with a fixed target size.

    Order carries no meaning; lookups are by genome content. The population
    grows while breeding and ``truncate`` shrinks it back to exactly the
    target size.
    """

    def __init__(self, genetic_operations: GeneticOperations = None,
                 selection_methods: SelectionMethods = None,
                 evaluation_engine: EvaluationEngine = None,
                 stop_at_first_perfect: bool = False,
                 rng: random.Random = None):
        """
        Create an empty population.

        Args:
            genetic_operations: Crossover and mutation operators
            selection_methods: Parent and survivor selection
            evaluation_engine: Fitness evaluation used for refreshes
            stop_at_first_perfect: Report a perfect individual from average refreshes
            rng: Random source shared with the operators when they are created here
        """
        self.rng = rng or random.Random()
        self.genetic_operations = genetic_operations or GeneticOperations(
            GAConstants.DEFAULT_CROSSOVER_RATE, GAConstants.DEFAULT_MUTATION_RATE, self.rng)
        self.selection_methods = selection_methods or SelectionMethods(self.rng)
        self.evaluation_engine = evaluation_engine or EvaluationEngine()
        self.stop_at_first_perfect = stop_at_first_perfect

        self.individuals: List[Individual] = []
        self.max_individuals = 0
        self.max_fitness = 0
        self.avg_fitness = 0.0
        self.perfect_individual: Optional[Individual] = None
        self._initialized = False

        # Statistics
        self.stats = {
            'individuals_created': 0,
            'individuals_appended': 0,
            'average_refreshes': 0
        }

    def initialize(self, size: int, genome_length: int) -> None:
        """
        Create ``size`` random individuals with ``genome_length`` genes.

        Args:
            size: Target population size
            genome_length: Genes per individual (also the max fitness)

        Raises:
            ConfigurationError: On sizes the algorithm cannot work with
            PopulationError: If the population was already initialized
        """
        if self._initialized:
            raise PopulationError("Population is already initialized")
        if size < GAConstants.MIN_POPULATION_SIZE:
            raise ConfigurationError(f"Population size ({size}) must be at least "
                                     f"{GAConstants.MIN_POPULATION_SIZE}")
        if genome_length < GAConstants.MIN_GENOME_LENGTH:
            raise ConfigurationError(f"Genome length ({genome_length}) must be at least "
                                     f"{GAConstants.MIN_GENOME_LENGTH}")

        self.max_individuals = size
        self.max_fitness = genome_length
        for _ in range(size):
            self.append(Individual.random(genome_length, self.rng, generation=0))
        self.stats['individuals_created'] += size
        self._initialized = True

    def seed(self, individuals: List[Individual], target_size: int = None) -> None:
        """
        Initialize from existing individuals instead of random ones.

        Args:
            individuals: Individuals to adopt (copied)
            target_size: Expected number of individuals (defaults to their count)

        Raises:
            PopulationError: If already initialized, empty, of the wrong size,
                or genome lengths differ
        """
        if self._initialized:
            raise PopulationError("Population is already initialized")
        if not individuals:
            raise PopulationError("Cannot seed a population without individuals")
        if target_size is not None and target_size != len(individuals):
            raise PopulationError(f"Seeding needs exactly {target_size} individuals, got {len(individuals)}")

        lengths = {len(individual.genome) for individual in individuals}
        if len(lengths) != 1:
            raise PopulationError(f"Seeded individuals have differing genome lengths: {sorted(lengths)}")

        self.max_individuals = len(individuals)
        self.max_fitness = lengths.pop()
        for individual in individuals:
            self.append(individual.copy())
        self._initialized = True

    @property
    def target_size(self) -> int:
        return self.max_individuals

    def __len__(self) -> int:
        return len(self.individuals)

    def __iter__(self):
        return iter(self.individuals)

    def two_individuals(self, x: int, y: int) -> Tuple[Individual, Individual]:
        return self.individuals[x], self.individuals[y]

    def select_parents(self) -> Tuple[Individual, Individual]:
        """
        Pick two distinct individuals uniformly at random.

        Returns:
            Copies of the mother and the father

        Raises:
            SelectionError: If fewer than two individuals exist
        """
        mother, father = self.selection_methods.random_distinct_pair(len(self.individuals))
        mother_individual, father_individual = self.two_individuals(mother, father)
        return mother_individual.copy(), father_individual.copy()

    def crossover(self, parent1: Individual, parent2: Individual) -> Tuple[Individual, Individual]:
        """Recombine two parents into two children (parents unchanged)."""
        children = self.genetic_operations.crossover(parent1, parent2)
        self.stats['individuals_created'] += 2
        return children

    def mutate(self, individual: Individual) -> Individual:
        return self.genetic_operations.mutate(individual)

    def append(self, individual: Individual) -> None:
        self.individuals.append(individual)
        self.stats['individuals_appended'] += 1

    def append_pair(self, first: Individual, second: Individual) -> None:
        self.append(first)
        self.append(second)

    def set_individual(self, index: int, individual: Individual) -> None:
        self.individuals[index] = individual

    def remove_individual(self, index: int) -> Individual:
        return self.individuals.pop(index)

    def position_of(self, individual: Individual) -> int:
        """
        Index of the first individual whose genome equals ``individual``'s.

        Linear scan; with duplicate genomes the first match wins.

        Returns:
            Index, or -1 if no individual matches
        """
        for index, candidate in enumerate(self.individuals):
            if candidate.same_genome(individual):
                return index
        return -1

    def replace_individuals(self, old1: Individual, new1: Individual,
                            old2: Individual, new2: Individual) -> None:
        """
        Replace two individuals located by genome content.

        Both positions are resolved before either replacement happens.

        Raises:
            PopulationError: If either individual is not in the population
        """
        position1, position2 = self.position_of(old1), self.position_of(old2)
        if position1 < 0 or position2 < 0:
            raise PopulationError("Cannot replace an individual that is not in the population")
        self.set_individual(position1, new1)
        self.set_individual(position2, new2)

    def truncate(self) -> Optional[Individual]:
        """
        Survival of the fittest: shrink back to the target size.

        Returns:
            The perfect individual reported by the average refresh, if any

        Raises:
            InvariantViolation: If fewer than target-size individuals exist
        """
        self.individuals = self.selection_methods.truncation_selection(
            self.individuals, self.max_individuals)
        return self.refresh_average_fitness()

    def refresh_average_fitness(self) -> Optional[Individual]:
        """
        Recompute the average fitness.

        With stop-at-first-perfect enabled the scan stops at the first
        individual with maximal fitness; that individual is recorded and
        returned and the cached average is left as it was.

        Returns:
            The perfect individual, or None when the average was refreshed

        Raises:
            InvariantViolation: If the population is empty
        """
        if not self.individuals:
            raise InvariantViolation("Cannot average the fitness of an empty population",
                                     population_size=0, required_size=1)

        self.stats['average_refreshes'] += 1
        total = 0
        for individual in self.individuals:
            fitness = self.evaluation_engine.evaluate(individual.genome)
            if self.stop_at_first_perfect and fitness == self.max_fitness:
                self.perfect_individual = individual
                return individual
            total += fitness

        self.avg_fitness = total / len(self.individuals)
        return None

    def mean_fitness(self) -> float:
        """Mean of the cached fitness values; does not touch ``avg_fitness``."""
        if not self.individuals:
            return 0.0
        return sum(individual.fitness for individual in self.individuals) / len(self.individuals)

    def refresh_fitness(self) -> None:
        """Recompute every individual's cached fitness."""
        for individual, fitness in zip(self.individuals,
                                       self.evaluation_engine.evaluate_population(self.individuals)):
            individual.fitness = fitness

    def refresh_generation(self, generation: int) -> None:
        """Stamp every individual with ``generation``."""
        for individual in self.individuals:
            individual.generation = generation

    def best_individual(self) -> Individual:
        """Fittest individual (last one among equals, matching truncation order)."""
        if not self.individuals:
            raise InvariantViolation("Empty population has no best individual",
                                     population_size=0, required_size=1)
        best = self.individuals[0]
        for individual in self.individuals[1:]:
            if individual.fitness >= best.fitness:
                best = individual
        return best

    def worst_individual(self) -> Individual:
        if not self.individuals:
            raise InvariantViolation("Empty population has no worst individual",
                                     population_size=0, required_size=1)
        return min(self.individuals, key=lambda individual: individual.fitness)

    def get_population_diversity(self) -> float:
        """
        Calculate population diversity based on unique genomes.

        Returns:
            Diversity ratio (0.0 to 1.0)
        """
        if not self.individuals:
            return 0.0

        signatures = {str(individual.genome) for individual in self.individuals}
        return len(signatures) / len(self.individuals)

    def snapshot(self) -> List[Individual]:
        """Deep copies of the current individuals."""
        return [individual.copy() for individual in self.individuals]

    def get_statistics(self) -> dict:
        """Get population management statistics."""
        stats = self.stats.copy()
        stats['size'] = len(self.individuals)
        stats['target_size'] = self.max_individuals
        stats['avg_fitness'] = self.avg_fitness
        return stats
