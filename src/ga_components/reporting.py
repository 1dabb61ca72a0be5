"""
Reporting and I/O Module

Handles data persistence and progress reporting for genetic algorithm runs.

Features:
- Per-generation CSV snapshots of the population
- Fitness history export
- JSON run summary
"""

import os
import csv
import json
import time
from datetime import datetime
from typing import Any, Dict, List
from ga_constants import ReportingConstants
from ga_logging import get_logger


class GAReporter:
    """
    Reporting and I/O manager for the genetic algorithm.

    Writes one CSV per generation, keeps best/average fitness per
    generation in memory and exports them at the end of the run.
    """

    def __init__(self, output_dir: str, experiment_name: str = None):
        """
        Initialize GA reporter.

        Args:
            output_dir: Directory for output files
            experiment_name: Name of the experiment (auto-generated if None)
        """
        self.output_dir = output_dir
        self.experiment_name = experiment_name or f"ga_run_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        self.logger = get_logger("Reporter")

        os.makedirs(self.output_dir, exist_ok=True)

        # Initialize tracking
        self.start_time = None
        self.run_config: Dict[str, Any] = {}
        self.generation_data: List[Dict[str, Any]] = []
        self.statistics = {
            'total_generations': 0,
            'best_overall_fitness': None,
            'total_runtime': 0.0
        }

    def start_run(self, run_config: Dict[str, Any]):
        """
        Start a new GA run.

        Args:
            run_config: Configuration parameters for the run
        """
        self.start_time = time.time()
        self.run_config = dict(run_config)
        self.logger.debug(f"Reporting to {self.output_dir}", experiment=self.experiment_name)

    def save_generation_data(self, generation: int, individuals: List, average_fitness: float):
        """
        Save one generation's population to CSV and update tracking.

        Args:
            generation: Generation number
            individuals: Individuals currently in the population
            average_fitness: Refreshed average fitness of the population
        """
        fitness_values = [individual.fitness for individual in individuals]
        generation_info = {
            'generation': generation,
            'timestamp': datetime.now().isoformat(),
            'population_size': len(individuals),
            'best_fitness': max(fitness_values),
            'avg_fitness': average_fitness,
            'worst_fitness': min(fitness_values)
        }
        self.generation_data.append(generation_info)

        self.statistics['total_generations'] = generation
        if (self.statistics['best_overall_fitness'] is None
                or generation_info['best_fitness'] > self.statistics['best_overall_fitness']):
            self.statistics['best_overall_fitness'] = generation_info['best_fitness']

        csv_filename = os.path.join(
            self.output_dir, f"{ReportingConstants.GENERATION_FILE_PREFIX}{generation}.csv")
        with open(csv_filename, mode='w', newline='') as csv_file:
            writer = csv.writer(csv_file)
            writer.writerow(['Generation', 'Fitness', 'Genome'])
            for individual in individuals:
                writer.writerow([individual.generation, individual.fitness, str(individual.genome)])

    def export_fitness_history(self) -> str:
        """
        Export best/average/worst fitness per generation to CSV.

        Returns:
            Path of the written file
        """
        filename = os.path.join(self.output_dir, ReportingConstants.FITNESS_HISTORY_FILE)
        fieldnames = ['generation', 'best_fitness', 'avg_fitness', 'worst_fitness', 'population_size']

        with open(filename, mode='w', newline='') as csv_file:
            writer = csv.DictWriter(csv_file, fieldnames=fieldnames, extrasaction='ignore')
            writer.writeheader()
            for row in self.generation_data:
                writer.writerow(row)

        return filename

    def save_run_summary(self, final_result: Dict[str, Any], component_stats: Dict[str, Any] = None) -> str:
        """
        Save run summary JSON.

        Args:
            final_result: Termination information and best individual
            component_stats: Statistics gathered from GA components

        Returns:
            Path of the written file
        """
        if self.start_time:
            self.statistics['total_runtime'] = time.time() - self.start_time

        summary_filename = os.path.join(
            self.output_dir, f"{self.experiment_name}{ReportingConstants.SUMMARY_FILE_SUFFIX}")

        summary_data = {
            'experiment_name': self.experiment_name,
            'end_time': datetime.now().isoformat(),
            'configuration': self.run_config,
            'statistics': self.statistics,
            'final_result': final_result,
            'component_statistics': component_stats or {},
            'generation_summary': self.generation_data
        }

        with open(summary_filename, 'w') as f:
            json.dump(summary_data, f, indent=2, default=str)

        return summary_filename
