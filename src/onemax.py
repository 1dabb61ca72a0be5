"""
OneMax Genetic Algorithm

This module provides a command-line interface for running a generational
genetic algorithm that maximizes the number of set bits in a fixed-length
bit-string.

Features:
- Configurable population size, genome length, rates and run limits
- Stop at the first perfect individual or at a desired average fitness
- Streaming of every surviving individual to a TCP collector
- Optional CSV/JSON reporting and fitness plots

Usage:
    python main.py -nri 10 -nre 32 -ftnss 32 --disable_sink
"""

import argparse
import sys
from typing import List, Optional

from genetic_algorithm import GeneticAlgorithm
from ga_config import GAConfig
from ga_constants import GAConstants, SinkConstants, LOG_LEVELS
from ga_exceptions import ConfigurationError
from ga_logging import setup_logging, get_logger, log_exception


EXIT_OK = 0
EXIT_CONFIGURATION_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser (long names plus the classic short flags)."""
    parser = argparse.ArgumentParser(description='Run a genetic algorithm on the OneMax problem.')

    # GA parameters
    parser.add_argument('--crossover_rate', '-cor', type=float, default=GAConstants.DEFAULT_CROSSOVER_RATE,
                        help="Crossover rate. Chance of crossover in every iteration (default: 1.0)")
    parser.add_argument('--mutation_rate', '-mr', type=float, default=GAConstants.DEFAULT_MUTATION_RATE,
                        help="Mutation rate. Chance of mutation of each gene of a child after birth (default: 0.1)")
    parser.add_argument('--population_size', '-nri', type=int, default=GAConstants.DEFAULT_POPULATION_SIZE,
                        help="Number of individuals (default: 10)")
    parser.add_argument('--genome_length', '-nre', type=int, default=GAConstants.DEFAULT_GENOME_LENGTH,
                        help="Number of entities per individual (default: 32)")
    parser.add_argument('--max_generations', '-maxgen', type=int, default=GAConstants.DEFAULT_MAX_GENERATIONS,
                        help="Generations to try before break (default: 200000)")
    parser.add_argument('--children_per_generation', '-chldpg', type=int,
                        default=GAConstants.DEFAULT_CHILDREN_PER_GENERATION,
                        help="Number of crossovers per generation, each producing two children (default: 10)")
    parser.add_argument('--desired_fitness', '-ftnss', type=float, default=GAConstants.DEFAULT_DESIRED_FITNESS,
                        help="Average fitness we try to reach (default: 32)")
    parser.add_argument('--stop', '-stop', dest='stop', action=argparse.BooleanOptionalAction,
                        default=GAConstants.DEFAULT_STOP_AT_FIRST_PERFECT,
                        help="Stop at first sight of a perfect individual (default: on)")
    parser.add_argument('--debug', '-debug', action='store_true', help="Enable debug output")
    parser.add_argument('--seed', type=int, default=None, help="Random seed for reproducible runs")

    # Persistence sink
    parser.add_argument('--sink_host', '-eshost', type=str, default=SinkConstants.DEFAULT_HOST,
                        help="Hostname/IP of the collector (default: localhost)")
    parser.add_argument('--sink_port', '-esport', type=int, default=SinkConstants.DEFAULT_PORT,
                        help="Port of the collector (default: 9200)")
    parser.add_argument('--sink_index', '-esindex', type=str, default=SinkConstants.DEFAULT_INDEX,
                        help="Index name for the collector (default: logstash-ec)")
    parser.add_argument('--disable_sink', action='store_true',
                        help="Do not send individuals to the collector")

    # Output
    parser.add_argument('--output_dir', '-o', type=str, default=None,
                        help="Folder for CSV/JSON results and the log file (default: no files)")
    parser.add_argument('--plot', action='store_true',
                        help="Save fitness plots to the output folder at the end of the run")
    parser.add_argument('--progress', action='store_true', help="Show a progress bar")
    parser.add_argument('--log_level', type=str.upper, choices=LOG_LEVELS, default='INFO',
                        help="Console log level (default: INFO)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the OneMax genetic algorithm.

    Parses command-line arguments, builds the configuration, runs the
    evolution loop and reports the result.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = GAConfig.from_args(args)
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR

    logger = setup_logging(
        level=config.log_level,
        log_to_file=config.output_dir is not None,
        output_dir=config.output_dir or "logs",
        console_colors=True
    )
    logger.info(config.summary())

    ga = GeneticAlgorithm(config)

    try:
        result = ga.run()
    except Exception as e:
        logger.critical("GA execution failed", exception=e)
        raise

    if result.winner is not None:
        logger.info(f"Winner: {result.winner}")
    logger.info(f"GA finished: {result.reason}", generation=result.generation,
                avg_fitness=f"{result.average_fitness:.4f}",
                best_fitness=result.best_individual.fitness)

    if config.plot and config.output_dir:
        # Imported lazily so headless runs without plots skip matplotlib
        from plot_maker import EvolutionVisualizer
        try:
            saved = EvolutionVisualizer(config.output_dir).save_plots()
            logger.info("Fitness plots saved", files=", ".join(saved))
        except (OSError, ValueError) as e:
            log_exception(e, context="plot generation")
    elif config.plot:
        get_logger().warning("--plot needs --output_dir, skipping plots")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
