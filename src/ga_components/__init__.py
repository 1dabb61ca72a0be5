"""
GA Components Module

Modular components for the OneMax Genetic Algorithm implementation.
Each component handles a specific aspect of the GA process:

- Genome: Fixed-length binary genome
- Individual: Genome with cached fitness and generation tag
- EvaluationEngine: OneMax fitness evaluation
- GeneticOperations: Crossover and mutation operations
- SelectionMethods: Parent selection and truncation
- Population: Population initialization, breeding support and statistics
- ConvergenceDetector: Termination checks
- RecordSink / TcpJsonSink: Persistence of surviving individuals
- GAReporter: Generates reports and saves results

Usage:
    from ga_components import Population, GeneticOperations
    from ga_components.persistence import TcpJsonSink
"""

from .genome import Genome
from .evaluation import EvaluationEngine, count_ones
from .persistence import IndividualRecord, RecordSink, NullSink, TcpJsonSink
from .individual import Individual
from .genetic_operations import GeneticOperations
from .selection import SelectionMethods
from .population_management import Population
from .convergence_detection import ConvergenceDetector, TerminationReason
from .reporting import GAReporter

__all__ = [
    'Genome',
    'Individual',
    'EvaluationEngine',
    'count_ones',
    'GeneticOperations',
    'SelectionMethods',
    'Population',
    'ConvergenceDetector',
    'TerminationReason',
    'IndividualRecord',
    'RecordSink',
    'NullSink',
    'TcpJsonSink',
    'GAReporter'
]

# Version information
__version__ = '1.0.0'
__description__ = 'Generational Genetic Algorithm for the OneMax Problem'
