import os
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
import psutil
from tqdm import tqdm
from ga_config import GAConfig
from ga_constants import ReportingConstants, AlgorithmConstants, bytes_to_mb
from ga_exceptions import ConfigurationError, PopulationError
from ga_logging import get_logger
from ga_components.convergence_detection import ConvergenceDetector, TerminationReason
from ga_components.evaluation import EvaluationEngine
from ga_components.genetic_operations import GeneticOperations
from ga_components.individual import Individual
from ga_components.persistence import RecordSink, create_sink
from ga_components.population_management import Population
from ga_components.reporting import GAReporter
from ga_components.selection import SelectionMethods


class EvolutionState(Enum):
    INITIALIZING = "initializing"
    BREEDING = "breeding"
    TRUNCATING = "truncating"
    CONVERGENCE_CHECK = "convergence-check"
    TERMINATED = "terminated"


@dataclass
class EvolutionResult:
    """Outcome of a run, returned instead of exiting the process."""

    reason: TerminationReason
    generation: int
    average_fitness: float
    best_individual: Individual
    winner: Optional[Individual] = None
    population: List[Individual] = field(default_factory=list)
    fitness_history: List[float] = field(default_factory=list)
    message: str = ""

    @property
    def converged(self) -> bool:
        return self.reason is not TerminationReason.MAX_GENERATIONS_EXCEEDED

    def to_dict(self) -> dict:
        return {
            'reason': str(self.reason),
            'converged': self.converged,
            'generation': self.generation,
            'average_fitness': self.average_fitness,
            'best_individual': self.best_individual.to_record().to_dict(),
            'winner': self.winner.to_record().to_dict() if self.winner else None,
            'message': self.message
        }


class GeneticAlgorithm:
    def __init__(self, config: GAConfig, sink: RecordSink = None,
                 rng: random.Random = None,
                 initial_individuals: List[Individual] = None) -> None:

        self.config = config
        self.rng = rng or random.Random(config.seed)
        self.logger = get_logger("GeneticAlgorithm")

        # Initialize modular components using config values
        self.evaluation_engine = EvaluationEngine()

        self.genetic_operations = GeneticOperations(
            crossover_rate=config.crossover_rate,
            mutation_rate=config.mutation_rate,
            rng=self.rng
        )

        self.selection_methods = SelectionMethods(rng=self.rng)

        self.population = Population(
            genetic_operations=self.genetic_operations,
            selection_methods=self.selection_methods,
            evaluation_engine=self.evaluation_engine,
            stop_at_first_perfect=config.stop_at_first_perfect,
            rng=self.rng
        )

        self.convergence_detector = ConvergenceDetector(
            config.desired_fitness,
            config.max_generations
        )

        self.sink = sink if sink is not None else create_sink(config)

        self.reporter = GAReporter(
            output_dir=config.output_dir,
            experiment_name=f"ga_run_{int(time.time())}"
        ) if config.output_dir else None

        self.initial_individuals = initial_individuals
        self.generation = 0
        self.state = EvolutionState.INITIALIZING
        self.winner: Optional[Individual] = None
        self.termination_reason: Optional[TerminationReason] = None
        self.termination_message = ""

        self._process = psutil.Process(os.getpid())
        self.peak_memory_mb = 0.0

    def initialize(self) -> Optional[TerminationReason]:
        """
        Build the population and run the generation 0 convergence check.

        Returns:
            Termination reason if generation 0 already satisfies a stop condition

        Raises:
            ConfigurationError: If seeded individuals do not match the configured
                population size and genome length
        """
        if self.state is not EvolutionState.INITIALIZING:
            raise PopulationError("Evolution loop is already initialized")

        if self.initial_individuals is not None:
            self._check_initial_individuals()
            self.population.seed(self.initial_individuals, self.config.population_size)
        else:
            self.population.initialize(self.config.population_size, self.config.genome_length)

        self.population.refresh_fitness()
        self.logger.debug("Initialized w/ random individuals", size=len(self.population))
        self.logger.log_population(self.generation, self.population.individuals)

        # Generation 0 may already be good enough
        perfect = self.population.refresh_average_fitness()
        return self.check_convergence(perfect, advance_generation=False)

    def _check_initial_individuals(self) -> None:
        errors = []
        if len(self.initial_individuals) != self.config.population_size:
            errors.append(f"Got {len(self.initial_individuals)} initial individuals, "
                          f"population size is {self.config.population_size}")
        lengths = sorted({len(individual.genome) for individual in self.initial_individuals})
        if any(length != self.config.genome_length for length in lengths):
            errors.append(f"Initial genome lengths {lengths} differ from genome length "
                          f"{self.config.genome_length}")
        if errors:
            raise ConfigurationError(
                "Initial individuals do not match the configuration:\n"
                + "\n".join(f"  - {error}" for error in errors),
                errors=errors)

    def breed(self) -> None:
        """Grow the population by two children per configured crossover."""
        self.state = EvolutionState.BREEDING
        self.logger.log_generation_start(self.generation + 1, len(self.population))
        self.logger.debug("Fitness before breeding", avg_fitness=f"{self.population.avg_fitness:.4f}")

        for _ in range(self.config.children_per_generation):
            mother, father = self.population.select_parents()
            child1, child2 = self.population.crossover(mother, father)

            # Crossover first, then mutation
            self.population.mutate(child1)
            self.population.mutate(child2)

            self.population.append_pair(child1, child2)

    def truncate(self) -> Optional[Individual]:
        self.state = EvolutionState.TRUNCATING
        return self.population.truncate()

    def check_convergence(self, perfect: Optional[Individual] = None,
                          advance_generation: bool = True) -> Optional[TerminationReason]:
        """
        Decide whether to stop, based on the last average fitness refresh.

        After a breeding cycle the generation counter is advanced and every
        individual is stamped with it. The initial check leaves it at 0.

        Args:
            perfect: Perfect individual reported by the last average refresh
            advance_generation: Whether a breeding cycle just completed

        Returns:
            Termination reason, or None to keep breeding
        """
        self.state = EvolutionState.CONVERGENCE_CHECK

        if advance_generation:
            self.generation += 1
            self.population.refresh_generation(self.generation)

        if perfect is not None:
            return self._terminate(TerminationReason.PERFECT_INDIVIDUAL_FOUND,
                                   f"Perfect individual found: {perfect}", winner=perfect)

        average_fitness = self.population.avg_fitness
        self.convergence_detector.add_fitness(average_fitness)
        terminate, reason, message = self.convergence_detector.check_convergence(
            self.generation, average_fitness)

        if terminate:
            return self._terminate(reason, message)
        return None

    def _terminate(self, reason: TerminationReason, message: str,
                   winner: Individual = None) -> TerminationReason:
        self.state = EvolutionState.TERMINATED
        self.termination_reason = reason
        self.termination_message = message
        if winner is not None:
            self.winner = winner.copy()
            self.logger.log_winner(self.winner)
        return reason

    def step(self) -> Optional[TerminationReason]:
        """
        Run one breeding cycle: breed, truncate, check, persist.

        Returns:
            Termination reason, or None if the loop should continue
        """
        if self.state is EvolutionState.INITIALIZING:
            raise PopulationError("Call initialize() before breeding")
        if self.state is EvolutionState.TERMINATED:
            return self.termination_reason

        init_time = time.time()

        self.breed()
        perfect = self.truncate()
        reason = self.check_convergence(perfect)

        self.sink.persist_population(self.population.individuals)
        self._record_generation(time.time() - init_time)
        return reason

    def _record_generation(self, generation_time: float) -> None:
        memory_mb = bytes_to_mb(self._process.memory_info().rss)
        self.peak_memory_mb = max(self.peak_memory_mb, memory_mb)

        best_individual = self.population.best_individual()
        self.logger.log_generation_complete(self.generation, self.population.mean_fitness(),
                                            best_individual.fitness, generation_time,
                                            self.peak_memory_mb)
        self.logger.log_population(self.generation, self.population.individuals)

        if self.generation % AlgorithmConstants.POPULATION_DIVERSITY_LOG_INTERVAL == 0:
            self.logger.debug(f"Population diversity: {self.population.get_population_diversity():.3f}")

        if self.reporter:
            self.reporter.save_generation_data(self.generation, self.population.individuals,
                                               self.population.mean_fitness())

    def run(self) -> EvolutionResult:
        """Runs the genetic algorithm until a termination condition holds."""
        self.logger.info("-" * ReportingConstants.SEPARATOR_WIDTH)
        self.logger.log_config_summary(self.config)
        self.logger.info(f"Sink: {self.sink.describe()}")

        if self.reporter:
            self.reporter.start_run(self.config.to_dict())

        reason = self.initialize()

        progress = tqdm(total=self.config.max_generations + 1, desc="Generations",
                        unit="gen", disable=not self.config.show_progress)
        try:
            while reason is None:
                reason = self.step()
                progress.update(1)
                progress.set_postfix(avg_fitness=f"{self.population.avg_fitness:.2f}")
        finally:
            progress.close()

        return self._finalize()

    def _finalize(self) -> EvolutionResult:
        result = EvolutionResult(
            reason=self.termination_reason,
            generation=self.generation,
            average_fitness=self.population.mean_fitness(),
            best_individual=self.population.best_individual().copy(),
            winner=self.winner,
            population=self.population.snapshot(),
            fitness_history=list(self.convergence_detector.fitness_history),
            message=self.termination_message
        )

        self.logger.info("-" * ReportingConstants.SEPARATOR_WIDTH)
        self.logger.log_termination(self.generation, str(result.reason), result.average_fitness)
        self.logger.info(self.termination_message)
        self.logger.info(f"Result after {self.generation} generations:")
        for i, individual in enumerate(result.population):
            self.logger.info(f"  {i} {individual}")
        self.logger.info(f"Fitness of {result.average_fitness} is reached")

        sink_stats = self.sink.get_statistics()
        self.logger.log_sink_stats(sink_stats['records_sent'], sink_stats['send_failures'])

        if self.reporter:
            component_stats = {
                'population': self.population.get_statistics(),
                'selection_methods': self.selection_methods.get_statistics(),
                'genetic_operations': self.genetic_operations.get_statistics(),
                'evaluation_engine': self.evaluation_engine.get_statistics(),
                'convergence_detector': self.convergence_detector.get_statistics(),
                'sink': sink_stats,
                'peak_memory_mb': self.peak_memory_mb
            }
            self.reporter.export_fitness_history()
            self.reporter.save_run_summary(result.to_dict(), component_stats)

        return result
