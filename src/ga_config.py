"""
Configuration Management for the OneMax Genetic Algorithm

Validates and organizes user-provided CLI parameters into a clean structure.
Replaces process-wide flag globals with a single config object that is passed
into the evolution loop.
"""

from dataclasses import dataclass, asdict
from typing import Optional
from ga_constants import GAConstants, SinkConstants, LOG_LEVELS
from ga_exceptions import ConfigurationError
from ga_logging import get_logger


@dataclass
class GAConfig:
    """
    Configuration container that validates and organizes user-provided parameters.

    Every field has the command-line default, so ``GAConfig()`` is a runnable
    configuration. Invalid combinations raise ConfigurationError before any
    breeding begins.
    """

    # Core GA Parameters (user-provided via CLI)
    crossover_rate: float = GAConstants.DEFAULT_CROSSOVER_RATE
    mutation_rate: float = GAConstants.DEFAULT_MUTATION_RATE
    population_size: int = GAConstants.DEFAULT_POPULATION_SIZE
    genome_length: int = GAConstants.DEFAULT_GENOME_LENGTH
    max_generations: int = GAConstants.DEFAULT_MAX_GENERATIONS
    children_per_generation: int = GAConstants.DEFAULT_CHILDREN_PER_GENERATION
    desired_fitness: float = GAConstants.DEFAULT_DESIRED_FITNESS
    stop_at_first_perfect: bool = GAConstants.DEFAULT_STOP_AT_FIRST_PERFECT
    debug: bool = False

    # Persistence sink
    sink_host: str = SinkConstants.DEFAULT_HOST
    sink_port: int = SinkConstants.DEFAULT_PORT
    sink_index: str = SinkConstants.DEFAULT_INDEX
    enable_sink: bool = True

    # Run environment
    seed: Optional[int] = None
    output_dir: Optional[str] = None  # No reporting files when None
    show_progress: bool = False
    plot: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate user parameters after initialization."""
        self._validate()

    def _validate(self):
        """Validate critical user parameters to catch errors early."""
        errors = []

        # Population shape
        if self.population_size < GAConstants.MIN_POPULATION_SIZE:
            errors.append(f"Population size ({self.population_size}) must be at least "
                          f"{GAConstants.MIN_POPULATION_SIZE}")
        if self.genome_length < GAConstants.MIN_GENOME_LENGTH:
            errors.append(f"Genome length ({self.genome_length}) must be at least "
                          f"{GAConstants.MIN_GENOME_LENGTH}")

        # Run limits
        if self.max_generations < 0:
            errors.append(f"Max generations ({self.max_generations}) cannot be negative")
        if self.children_per_generation < 1:
            errors.append(f"Children per generation ({self.children_per_generation}) must be positive")
        if self.desired_fitness < 0:
            errors.append(f"Desired fitness ({self.desired_fitness}) cannot be negative")

        # Rate validation
        if not 0.0 <= self.mutation_rate <= 1.0:
            errors.append(f"Mutation rate ({self.mutation_rate}) must be between 0.0 and 1.0")
        if not 0.0 <= self.crossover_rate <= 1.0:
            errors.append(f"Crossover rate ({self.crossover_rate}) must be between 0.0 and 1.0")

        # Sink validation
        if self.enable_sink:
            if not self.sink_host or not self.sink_host.strip():
                errors.append("Sink host cannot be empty")
            if not SinkConstants.MIN_PORT <= self.sink_port <= SinkConstants.MAX_PORT:
                errors.append(f"Sink port ({self.sink_port}) must be between "
                              f"{SinkConstants.MIN_PORT} and {SinkConstants.MAX_PORT}")

        if self.log_level.upper() not in LOG_LEVELS:
            errors.append(f"Log level ({self.log_level}) must be one of: {list(LOG_LEVELS)}")

        if self.output_dir is not None and not self.output_dir.strip():
            errors.append("Output directory cannot be empty")

        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(f"  - {error}" for error in errors),
                errors=errors)

        if self.desired_fitness > self.genome_length:
            get_logger().warning(
                f"Desired fitness ({self.desired_fitness}) exceeds genome length "
                f"({self.genome_length}); the run can only end on the generation limit "
                f"or a perfect individual")

    @classmethod
    def from_args(cls, args) -> 'GAConfig':
        """
        Create configuration from parsed CLI arguments.

        Args:
            args: argparse.Namespace from CLI parsing

        Returns:
            Validated GAConfig instance
        """
        config_params = {
            'crossover_rate': args.crossover_rate,
            'mutation_rate': args.mutation_rate,
            'population_size': args.population_size,
            'genome_length': args.genome_length,
            'max_generations': args.max_generations,
            'children_per_generation': args.children_per_generation,
            'desired_fitness': args.desired_fitness,
            'stop_at_first_perfect': getattr(args, 'stop', GAConstants.DEFAULT_STOP_AT_FIRST_PERFECT),
            'debug': getattr(args, 'debug', False),
            'sink_host': getattr(args, 'sink_host', SinkConstants.DEFAULT_HOST),
            'sink_port': getattr(args, 'sink_port', SinkConstants.DEFAULT_PORT),
            'sink_index': getattr(args, 'sink_index', SinkConstants.DEFAULT_INDEX),
            'enable_sink': not getattr(args, 'disable_sink', False),
            'seed': getattr(args, 'seed', None),
            'output_dir': getattr(args, 'output_dir', None),
            'show_progress': getattr(args, 'progress', False),
            'plot': getattr(args, 'plot', False),
            'log_level': getattr(args, 'log_level', 'INFO'),
        }

        # --debug implies debug level logging
        if config_params['debug'] and config_params['log_level'].upper() == 'INFO':
            config_params['log_level'] = 'DEBUG'

        return cls(**config_params)

    @property
    def children_per_cycle(self) -> int:
        """Total children appended per breeding cycle (two per crossover)."""
        return 2 * self.children_per_generation

    @property
    def max_fitness(self) -> int:
        """Best attainable fitness (every gene set)."""
        return self.genome_length

    def summary(self) -> str:
        """Generate human-readable configuration summary."""
        summary = f"""GA Configuration:
  Individuals: {self.population_size}
  Entities / individual: {self.genome_length}
  Desired fitness: {self.desired_fitness}
  Generations: up to {self.max_generations} ({self.children_per_cycle} children each)
  Rates: mutation={self.mutation_rate:.3f}, crossover={self.crossover_rate:.3f}
  Stop at first perfect: {'yes' if self.stop_at_first_perfect else 'no'}"""

        if self.enable_sink:
            summary += f"""
  Sink: {self.sink_host}:{self.sink_port} (index: {self.sink_index})"""
        else:
            summary += "\n  Sink: disabled"

        if self.output_dir:
            summary += f"""
  Output: {self.output_dir}"""

        if self.seed is not None:
            summary += f"""
  Seed: {self.seed}"""

        return summary

    def __str__(self) -> str:
        return (f"GAConfig(pop={self.population_size}, len={self.genome_length}, "
                f"maxgen={self.max_generations}, desired={self.desired_fitness})")

    def to_dict(self) -> dict:
        """Convert config to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'GAConfig':
        """Create config from dictionary."""
        return cls(**config_dict)

    def update(self, **kwargs) -> 'GAConfig':
        """Create a new config with updated values."""
        current_config = self.to_dict()
        current_config.update(kwargs)
        return self.from_dict(current_config)
