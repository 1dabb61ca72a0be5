"""
Unit Tests for Convergence Detection
"""

import os
import sys
import unittest

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tests.test_fixtures import TestFixtures  # noqa: F401 (path setup)
from ga_components.convergence_detection import ConvergenceDetector, TerminationReason


class TestConvergenceDetector(unittest.TestCase):

    def setUp(self):
        self.detector = ConvergenceDetector(desired_fitness=30.0, max_generations=10)

    def test_keeps_going_below_threshold(self):
        terminate, reason, _ = self.detector.check_convergence(5, 29.9)
        self.assertFalse(terminate)
        self.assertIsNone(reason)

    def test_desired_fitness_reached(self):
        terminate, reason, message = self.detector.check_convergence(5, 30.0)
        self.assertTrue(terminate)
        self.assertIs(reason, TerminationReason.DESIRED_FITNESS_REACHED)
        self.assertIn("is reached", message)

    def test_generation_limit_is_exclusive(self):
        self.assertFalse(self.detector.check_convergence(10, 1.0)[0])
        terminate, reason, _ = self.detector.check_convergence(11, 1.0)
        self.assertTrue(terminate)
        self.assertIs(reason, TerminationReason.MAX_GENERATIONS_EXCEEDED)

    def test_fitness_wins_over_generation_limit(self):
        _, reason, _ = self.detector.check_convergence(11, 31.0)
        self.assertIs(reason, TerminationReason.DESIRED_FITNESS_REACHED)

    def test_reason_strings(self):
        self.assertEqual(str(TerminationReason.PERFECT_INDIVIDUAL_FOUND), "perfect-individual-found")
        self.assertEqual(str(TerminationReason.MAX_GENERATIONS_EXCEEDED), "max-generations-exceeded")

    def test_statistics(self):
        for value in (1.0, 2.0, 3.0, 4.0):
            self.detector.add_fitness(value)
        stats = self.detector.get_statistics()
        self.assertEqual(stats['fitness_history_length'], 4)
        self.assertEqual(stats['best_average_fitness'], 4.0)
        self.assertEqual(stats['mean_average_fitness'], 2.5)
        self.assertAlmostEqual(stats['fitness_trend'], 1.0)

    def test_empty_statistics(self):
        stats = self.detector.get_statistics()
        self.assertEqual(stats['best_average_fitness'], 0.0)
        self.assertEqual(stats['fitness_trend'], 0.0)


if __name__ == '__main__':
    unittest.main()
