"""
Configuration Constants for the OneMax Genetic Algorithm

Centralizes default values and magic numbers for better maintainability.
All constants are organized by category with clear documentation.
"""


class GAConstants:
    """Default run parameters for the genetic algorithm."""

    # Genetic operator rates
    DEFAULT_CROSSOVER_RATE = 1.0       # Always recombine parents
    DEFAULT_MUTATION_RATE = 0.1        # Per-gene flip probability

    # Population shape
    DEFAULT_POPULATION_SIZE = 10       # Individuals kept after truncation
    DEFAULT_GENOME_LENGTH = 32         # Genes per individual
    MIN_POPULATION_SIZE = 2            # Parent selection needs two distinct individuals
    MIN_GENOME_LENGTH = 1              # Crossover point is drawn from [0, L)

    # Run limits
    DEFAULT_MAX_GENERATIONS = 200000   # Generations to try before giving up
    DEFAULT_CHILDREN_PER_GENERATION = 10  # Crossover pairs per generation
    DEFAULT_DESIRED_FITNESS = 32.0     # Average fitness that ends the run
    DEFAULT_STOP_AT_FIRST_PERFECT = True


class SinkConstants:
    """Connection defaults for the individual persistence sink."""

    DEFAULT_HOST = "localhost"
    DEFAULT_PORT = 9200
    DEFAULT_INDEX = "logstash-ec"
    CONNECT_TIMEOUT_SECONDS = 2.0      # Per-record connection timeout
    RECORD_ENCODING = "utf-8"
    RECORD_TERMINATOR = "\n"           # One JSON document per line
    MIN_PORT = 1
    MAX_PORT = 65535


class ReportingConstants:
    """File naming used by the reporter and the plot maker."""

    GENERATION_FILE_PREFIX = "generation_"
    FITNESS_HISTORY_FILE = "fitness_history.csv"
    SUMMARY_FILE_SUFFIX = "_summary.json"
    BEST_FITNESS_PLOT = "best_fitness.png"
    AVERAGE_FITNESS_PLOT = "average_fitness.png"
    SEPARATOR_WIDTH = 100


class MemoryConstants:
    """Memory-related configuration constants."""

    # Unit conversion constants
    BYTES_PER_MB = 1024 * 1024


class AlgorithmConstants:
    """Algorithm-specific configuration constants."""

    # Generation tracking
    TREND_WINDOW_SIZE = 10               # Generations used for the fitness trend
    FITNESS_IMPROVEMENT_PRECISION = 4    # Decimal places for fitness comparison

    # Logging cadence
    POPULATION_DIVERSITY_LOG_INTERVAL = 5  # Log diversity every N generations


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def bytes_to_mb(bytes_value: int) -> float:
    """Convert bytes to megabytes."""
    return bytes_value / MemoryConstants.BYTES_PER_MB

