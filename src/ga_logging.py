"""
Centralized Logging System for the OneMax Genetic Algorithm

Replaces scattered print statements with structured logging.
Provides consistent formatting, log levels, and file output.
"""

import logging
import sys
from datetime import datetime
from typing import Optional
from pathlib import Path


class GAFormatter(logging.Formatter):
    """Custom formatter for GA logging with color support and structured output."""

    # Color codes for console output
    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m'      # Reset
    }

    def __init__(self, use_colors: bool = True, include_timestamp: bool = True):
        self.use_colors = use_colors and hasattr(sys.stdout, 'isatty') and sys.stdout.isatty()
        self.include_timestamp = include_timestamp

        if include_timestamp:
            fmt = '[%(asctime)s] %(levelname)-8s | %(name)s | %(message)s'
            datefmt = '%H:%M:%S'
        else:
            fmt = '%(levelname)-8s | %(name)s | %(message)s'
            datefmt = None

        super().__init__(fmt, datefmt)

    def format(self, record):
        if self.use_colors:
            color = self.COLORS.get(record.levelname, '')
            reset = self.COLORS['RESET']
            # Copy so the file handler does not receive escape codes
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{reset}"

        return super().format(record)


class GALogger:
    """
    Centralized logger for the genetic algorithm with console and file output.

    Manages log levels and file output, and provides GA-specific logging methods
    for generations, winners, termination and sink failures.
    """

    def __init__(self, name: str = "GA", level: str = "INFO",
                 log_to_file: bool = False, output_dir: str = "logs",
                 console_colors: bool = True):
        """
        Initialize GA logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_to_file: Whether to log to file
            output_dir: Directory for log files
            console_colors: Whether to use colors in console output
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self.logger.propagate = False
        self.log_file = None

        # Clear any existing handlers
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.logger.level)
        console_formatter = GAFormatter(use_colors=console_colors, include_timestamp=False)
        console_handler.setFormatter(console_formatter)
        self.logger.addHandler(console_handler)

        if log_to_file:
            self._setup_file_logging(output_dir)

    def _setup_file_logging(self, output_dir: str):
        """Setup timestamped file logging."""
        log_dir = Path(output_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"ga_run_{timestamp}.log"

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)  # File gets all levels
        file_formatter = GAFormatter(use_colors=False, include_timestamp=True)
        file_handler.setFormatter(file_formatter)
        self.logger.addHandler(file_handler)

        self.log_file = str(log_file)

    def close(self):
        """Close all handlers (releases the log file)."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    def is_debug(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self.logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self.logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self.logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, exception: Exception = None, **kwargs):
        """Log error message with optional exception details."""
        formatted_msg = self._format_message(message, **kwargs)
        if exception:
            formatted_msg += f" | Exception: {type(exception).__name__}: {str(exception)}"
        self.logger.error(formatted_msg)

    def critical(self, message: str, exception: Exception = None, **kwargs):
        """Log critical message with optional exception details."""
        formatted_msg = self._format_message(message, **kwargs)
        if exception:
            formatted_msg += f" | Exception: {type(exception).__name__}: {str(exception)}"
        self.logger.critical(formatted_msg)

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with optional context parameters."""
        if kwargs:
            context = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            return f"{message} | {context}"
        return message

    # GA-specific logging methods
    def log_generation_start(self, generation: int, population_size: int):
        """Log the start of a breeding cycle."""
        self.debug(f"Breeding for generation {generation} begins",
                   population_size=population_size)

    def log_generation_complete(self, generation: int, average_fitness: float,
                                best_fitness: int, time_taken: float, peak_memory: float):
        """Log generation completion."""
        self.info(f"Generation {generation} complete",
                  avg_fitness=f"{average_fitness:.4f}",
                  best_fitness=best_fitness,
                  time_taken=f"{time_taken:.4f}s",
                  peak_memory=f"{peak_memory:.1f}MB")

    def log_population(self, generation: int, individuals):
        """Log a full population snapshot at debug level."""
        if not self.is_debug():
            return
        self.debug(f"Population at generation {generation}")
        for i, individual in enumerate(individuals):
            self.debug(f"  {i} {individual}")

    def log_winner(self, individual):
        """Log a perfect individual."""
        self.info(f"Winner: {individual}")

    def log_termination(self, generation: int, reason: str, average_fitness: float):
        """Log why the loop stopped."""
        self.info(f"Evolution terminated at generation {generation}",
                  reason=reason,
                  avg_fitness=f"{average_fitness:.4f}")

    def log_sink_error(self, host: str, port: int, error: Exception,
                       generation: int = None):
        """Log a failed persistence write."""
        self.error("Sink write failed, continuing",
                   sink=f"{host}:{port}",
                   generation=generation,
                   exception=error)

    def log_sink_stats(self, sent: int, failed: int):
        """Log persistence statistics."""
        self.info("Sink statistics", records_sent=sent, send_failures=failed)

    def log_config_summary(self, config):
        """Log configuration summary."""
        self.info("GA Configuration loaded",
                  population=config.population_size,
                  genome_length=config.genome_length,
                  max_generations=config.max_generations,
                  children_per_generation=config.children_per_generation,
                  desired_fitness=config.desired_fitness,
                  mutation_rate=config.mutation_rate,
                  crossover_rate=config.crossover_rate)


# Global logger instance
_global_logger: Optional[GALogger] = None


def get_logger(name: str = "GA") -> GALogger:
    """Get or create global logger instance."""
    global _global_logger
    if _global_logger is None:
        _global_logger = GALogger(name)
    return _global_logger


def setup_logging(level: str = "INFO", log_to_file: bool = False,
                  output_dir: str = "logs", console_colors: bool = True) -> GALogger:
    """
    Setup global logging configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to file
        output_dir: Directory for log files
        console_colors: Whether to use colors in console output

    Returns:
        Configured GALogger instance
    """
    global _global_logger
    if _global_logger is not None:
        _global_logger.close()
    _global_logger = GALogger(
        level=level,
        log_to_file=log_to_file,
        output_dir=output_dir,
        console_colors=console_colors
    )
    return _global_logger


def log_exception(exception: Exception, context: str = "", **kwargs):
    """Log exception with context using global logger."""
    logger = get_logger()
    logger.error(f"Exception in {context}", exception=exception, **kwargs)
