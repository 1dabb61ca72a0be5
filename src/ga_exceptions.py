"""
Custom Exception Classes for the OneMax Genetic Algorithm

Provides specific, meaningful exceptions for the different failure modes:
configuration errors fail fast, invariant violations fail loudly, and
persistence errors are logged and swallowed by the sink.
"""


class GAException(Exception):
    """Base exception for all genetic algorithm related errors."""
    pass


class ConfigurationError(GAException):
    """Raised when GA configuration is invalid or inconsistent."""

    def __init__(self, message: str, errors: list = None):
        super().__init__(message)
        self.errors = errors or []


class PopulationError(GAException):
    """Raised when population operations fail."""
    pass


class InvariantViolation(PopulationError):
    """Raised when an operation would break a population size invariant."""

    def __init__(self, message: str, population_size: int = None,
                 required_size: int = None):
        super().__init__(message)
        self.population_size = population_size
        self.required_size = required_size


class SelectionError(InvariantViolation):
    """Raised when parents cannot be selected from the population."""

    def __init__(self, message: str, population_size: int = None,
                 selection_type: str = None):
        super().__init__(message, population_size=population_size, required_size=2)
        self.selection_type = selection_type


class CrossoverError(GAException):
    """Raised when crossover operations fail."""

    def __init__(self, message: str, parent1_length: int = None,
                 parent2_length: int = None, point: int = None):
        super().__init__(message)
        self.parent1_length = parent1_length
        self.parent2_length = parent2_length
        self.point = point


class MutationError(GAException):
    """Raised when mutation operations fail."""

    def __init__(self, message: str, mutation_rate: float = None):
        super().__init__(message)
        self.mutation_rate = mutation_rate


class InvalidFitnessError(GAException):
    """Raised when fitness evaluation returns invalid results."""

    def __init__(self, fitness_value, expected_range: tuple = None):
        message = f"Invalid fitness value: {fitness_value}"
        if expected_range:
            message += f" (expected: {expected_range[0]} to {expected_range[1]})"
        super().__init__(message)
        self.fitness_value = fitness_value
        self.expected_range = expected_range


class PersistenceError(GAException):
    """Raised when an individual record cannot be delivered to the sink."""

    def __init__(self, message: str, host: str = None, port: int = None):
        super().__init__(message)
        self.host = host
        self.port = port


def handle_persistence_error(e: Exception, host: str, port: int,
                             generation: int = None) -> bool:
    """
    Standardized persistence error handler.

    Wraps the original exception, logs it and tells the caller to carry on.
    Sink failures never abort the evolutionary loop.

    Args:
        e: Original exception
        host: Sink host that failed
        port: Sink port that failed
        generation: Generation of the record being written

    Returns:
        Always False (record not delivered)
    """
    error = PersistenceError(f"Sink write failed: {e}", host=host, port=port)

    from ga_logging import get_logger
    get_logger().log_sink_error(host, port, error, generation=generation)
    return False


def validate_fitness(fitness, min_expected: int = 0, max_expected: int = None):
    """
    Validate fitness value and raise appropriate exception if invalid.

    Args:
        fitness: Fitness value to validate
        min_expected: Minimum expected fitness value
        max_expected: Maximum expected fitness value (genome length)

    Returns:
        Validated fitness value

    Raises:
        InvalidFitnessError: If fitness is invalid
    """
    if fitness is None:
        raise InvalidFitnessError("Fitness is None",
                                  expected_range=(min_expected, max_expected))

    if isinstance(fitness, bool) or not isinstance(fitness, int):
        raise InvalidFitnessError(
            f"Fitness must be an integer, got {type(fitness).__name__}")

    if fitness < min_expected or (max_expected is not None and fitness > max_expected):
        raise InvalidFitnessError(fitness, expected_range=(min_expected, max_expected))

    return fitness
