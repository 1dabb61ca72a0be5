"""
Tests for the Command-Line Entry Point and Fitness Plots
"""

import os
import sys
import unittest
from unittest.mock import patch

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tests.test_fixtures import TestFixtures, TestDataBuilder
from genetic_algorithm import GeneticAlgorithm
from ga_logging import setup_logging
from onemax import main, EXIT_OK, EXIT_CONFIGURATION_ERROR
from plot_maker import EvolutionVisualizer


class TestMain(unittest.TestCase):

    def setUp(self):
        self.temp_dir = TestFixtures.create_temp_test_dir()

    def tearDown(self):
        setup_logging(level="ERROR", log_to_file=False)
        TestFixtures.cleanup_path(self.temp_dir)

    def test_successful_run(self):
        exit_code = main(['-nri', '4', '-nre', '6', '-maxgen', '20', '--disable_sink',
                          '--seed', '3', '--log_level', 'ERROR'])
        self.assertEqual(exit_code, EXIT_OK)

    def test_generation_limit_is_a_normal_exit(self):
        exit_code = main(['-nri', '3', '-nre', '40', '-maxgen', '1', '-mr', '0', '--no-stop',
                          '--disable_sink', '--seed', '3', '--log_level', 'ERROR'])
        self.assertEqual(exit_code, EXIT_OK)

    def test_configuration_error(self):
        with patch('sys.stderr'):
            exit_code = main(['-nri', '1', '--disable_sink'])
        self.assertEqual(exit_code, EXIT_CONFIGURATION_ERROR)

    def test_output_and_plots(self):
        exit_code = main(['-nri', '4', '-nre', '8', '-maxgen', '5', '--no-stop', '-ftnss', '100',
                          '--disable_sink', '--seed', '5', '--log_level', 'ERROR',
                          '-o', self.temp_dir, '--plot'])
        self.assertEqual(exit_code, EXIT_OK)
        self.assertTrue(os.path.isfile(os.path.join(self.temp_dir, 'fitness_history.csv')))
        self.assertTrue(os.path.isfile(os.path.join(self.temp_dir, 'best_fitness.png')))
        self.assertTrue(os.path.isfile(os.path.join(self.temp_dir, 'average_fitness.png')))


class TestEvolutionVisualizer(unittest.TestCase):

    def setUp(self):
        setup_logging(level="ERROR", log_to_file=False)

    def test_plots_from_reporter_output(self):
        with TestDataBuilder() as builder:
            config, sink, _ = (builder
                .with_config(stop_at_first_perfect=False, desired_fitness=100.0, max_generations=4)
                .with_temp_output_dir()
                .build())
            GeneticAlgorithm(config, sink=sink).run()

            visualizer = EvolutionVisualizer(config.output_dir)
            self.assertEqual(len(visualizer.data), 5)
            summary = visualizer.fitness_summary()
            self.assertEqual(list(summary['generation']), [1, 2, 3, 4, 5])
            self.assertTrue((summary['best_fitness'].diff().dropna() >= 0).all())

            saved = visualizer.save_plots()
            for path in saved:
                self.assertTrue(os.path.isfile(path))

    def test_empty_directory(self):
        temp_dir = TestFixtures.create_temp_test_dir()
        try:
            with self.assertRaises(ValueError):
                EvolutionVisualizer(temp_dir).save_plots()
        finally:
            TestFixtures.cleanup_path(temp_dir)


if __name__ == '__main__':
    unittest.main()
