"""
Unit Tests for GA Configuration

Tests defaults, validation, CLI mapping and serialization of GAConfig.
"""

import os
import sys
import unittest

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tests.test_fixtures import TestFixtures
from ga_config import GAConfig
from ga_exceptions import ConfigurationError
from ga_logging import setup_logging
from onemax import build_parser


class TestGAConfig(unittest.TestCase):

    def setUp(self):
        setup_logging(level="ERROR", log_to_file=False)

    def test_defaults(self):
        config = GAConfig()
        self.assertEqual(config.crossover_rate, 1.0)
        self.assertEqual(config.mutation_rate, 0.1)
        self.assertEqual(config.population_size, 10)
        self.assertEqual(config.genome_length, 32)
        self.assertEqual(config.max_generations, 200000)
        self.assertEqual(config.children_per_generation, 10)
        self.assertEqual(config.desired_fitness, 32.0)
        self.assertTrue(config.stop_at_first_perfect)
        self.assertEqual(config.sink_host, "localhost")
        self.assertEqual(config.sink_port, 9200)
        self.assertEqual(config.sink_index, "logstash-ec")
        self.assertEqual(config.children_per_cycle, 20)

    def test_invalid_values_collected(self):
        with self.assertRaises(ConfigurationError) as context:
            GAConfig(population_size=1, genome_length=0, mutation_rate=2.0)
        self.assertEqual(len(context.exception.errors), 3)

    def test_invalid_rates(self):
        for params in ({'crossover_rate': -0.1}, {'mutation_rate': 1.1}):
            with self.assertRaises(ConfigurationError):
                GAConfig(**params)

    def test_invalid_run_limits(self):
        for params in ({'children_per_generation': 0}, {'max_generations': -1},
                       {'desired_fitness': -1.0}):
            with self.assertRaises(ConfigurationError):
                GAConfig(**params)

    def test_sink_checked_only_when_enabled(self):
        with self.assertRaises(ConfigurationError):
            GAConfig(sink_port=0)
        GAConfig(sink_port=0, enable_sink=False)

    def test_desired_fitness_above_length_is_allowed(self):
        config = GAConfig(genome_length=4, desired_fitness=10.0)
        self.assertEqual(config.max_fitness, 4)

    def test_update_and_round_trip(self):
        config = TestFixtures.get_test_config()
        updated = config.update(population_size=8)
        self.assertEqual(updated.population_size, 8)
        self.assertEqual(config.population_size, 4)
        self.assertEqual(GAConfig.from_dict(updated.to_dict()), updated)

    def test_update_validates(self):
        with self.assertRaises(ConfigurationError):
            TestFixtures.get_test_config().update(population_size=0)

    def test_summary(self):
        summary = GAConfig(enable_sink=False, seed=3).summary()
        self.assertIn("Sink: disabled", summary)
        self.assertIn("Seed: 3", summary)


class TestConfigFromArgs(unittest.TestCase):

    def setUp(self):
        setup_logging(level="ERROR", log_to_file=False)
        self.parser = build_parser()

    def test_short_flags(self):
        args = self.parser.parse_args(['-cor', '0.5', '-mr', '0.2', '-nri', '6', '-nre', '16',
                                       '-maxgen', '100', '-chldpg', '3', '-ftnss', '15',
                                       '-eshost', 'collector', '-esport', '5000', '-esindex', 'runs'])
        config = GAConfig.from_args(args)
        self.assertEqual(config.crossover_rate, 0.5)
        self.assertEqual(config.mutation_rate, 0.2)
        self.assertEqual(config.population_size, 6)
        self.assertEqual(config.genome_length, 16)
        self.assertEqual(config.max_generations, 100)
        self.assertEqual(config.children_per_generation, 3)
        self.assertEqual(config.desired_fitness, 15.0)
        self.assertEqual(config.sink_host, 'collector')
        self.assertEqual(config.sink_port, 5000)
        self.assertEqual(config.sink_index, 'runs')

    def test_stop_flag(self):
        self.assertTrue(GAConfig.from_args(self.parser.parse_args([])).stop_at_first_perfect)
        config = GAConfig.from_args(self.parser.parse_args(['--no-stop']))
        self.assertFalse(config.stop_at_first_perfect)

    def test_debug_raises_log_level(self):
        config = GAConfig.from_args(self.parser.parse_args(['-debug']))
        self.assertTrue(config.debug)
        self.assertEqual(config.log_level, 'DEBUG')

    def test_disable_sink(self):
        config = GAConfig.from_args(self.parser.parse_args(['--disable_sink']))
        self.assertFalse(config.enable_sink)

    def test_invalid_args(self):
        with self.assertRaises(ConfigurationError):
            GAConfig.from_args(self.parser.parse_args(['-nri', '1']))


if __name__ == '__main__':
    unittest.main()
