"""
Unit Tests for Genome and Individual

Tests the binary genome container and the individual wrapper:
- Random creation and validation
- Bit flips and bounds checking
- Content equality and copies
- Cached fitness after mutation
"""

import os
import sys
import unittest

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tests.test_fixtures import TestFixtures
from ga_components.genome import Genome
from ga_components.individual import Individual
from ga_components.evaluation import count_ones, EvaluationEngine
from ga_exceptions import MutationError, InvalidFitnessError
from ga_logging import setup_logging


class TestGenome(unittest.TestCase):

    def test_random_genome_has_requested_length(self):
        rng = TestFixtures.get_rng()
        for length in (1, 4, 32):
            genome = Genome.random(length, rng)
            self.assertEqual(len(genome), length)
            self.assertTrue(all(gene in (0, 1) for gene in genome))

    def test_same_seed_gives_same_genome(self):
        first = Genome.random(64, TestFixtures.get_rng(7))
        second = Genome.random(64, TestFixtures.get_rng(7))
        self.assertEqual(first, second)

    def test_invalid_gene_rejected(self):
        with self.assertRaises(ValueError):
            Genome([0, 1, 2])
        with self.assertRaises(ValueError):
            Genome([True, False])

    def test_float_gene_rejected(self):
        with self.assertRaises(ValueError):
            Genome([1.0, 0.0])
        with self.assertRaises(ValueError):
            Genome([1, 0.0, 1])

    def test_flip_bit(self):
        genome = Genome([0, 0, 1])
        genome.flip_bit(0)
        genome.flip_bit(2)
        self.assertEqual(genome.genes, [1, 0, 0])

    def test_flip_bit_out_of_range(self):
        genome = Genome([0, 1])
        with self.assertRaises(IndexError):
            genome.flip_bit(2)
        with self.assertRaises(IndexError):
            genome.flip_bit(-1)

    def test_copy_is_independent(self):
        genome = Genome([1, 0, 1])
        clone = genome.copy()
        clone.flip_bit(1)
        self.assertEqual(genome.genes, [1, 0, 1])
        self.assertNotEqual(genome, clone)

    def test_genes_property_returns_copy(self):
        genome = Genome([1, 1])
        genes = genome.genes
        genes[0] = 0
        self.assertEqual(genome.genes, [1, 1])

    def test_slicing_and_concat(self):
        genome = Genome([0, 1, 1, 0])
        self.assertEqual(genome[:2], [0, 1])
        self.assertEqual(Genome.concat(genome[:1], genome[1:]), genome)

    def test_str(self):
        self.assertEqual(str(Genome([1, 0, 1, 1])), "1011")

    def test_count_ones(self):
        self.assertEqual(count_ones(Genome([0, 0, 0, 0])), 0)
        self.assertEqual(count_ones(Genome([1, 0, 1, 1])), 3)
        self.assertEqual(count_ones(Genome([1] * 32)), 32)


class TestIndividual(unittest.TestCase):

    def setUp(self):
        setup_logging(level="ERROR", log_to_file=False)

    def test_package_exports_load(self):
        import ga_components
        self.assertIs(ga_components.Individual, Individual)
        self.assertIs(ga_components.Genome, Genome)

    def test_fitness_computed_on_creation(self):
        individual = Individual.from_bits([1, 1, 0, 1], generation=3)
        self.assertEqual(individual.fitness, 3)
        self.assertEqual(individual.generation, 3)
        self.assertEqual(individual.amount, 4)
        self.assertFalse(individual.is_perfect)

    def test_mutation_rate_zero_changes_nothing(self):
        individual = Individual.from_bits([0, 1, 0, 1])
        flipped = individual.mutate(0.0, TestFixtures.get_rng())
        self.assertEqual(flipped, 0)
        self.assertEqual(individual.genome.genes, [0, 1, 0, 1])

    def test_mutation_rate_one_flips_everything(self):
        individual = Individual.from_bits([0, 1, 0, 1])
        flipped = individual.mutate(1.0, TestFixtures.get_rng())
        self.assertEqual(flipped, 4)
        self.assertEqual(individual.genome.genes, [1, 0, 1, 0])
        self.assertEqual(individual.fitness, 2)

    def test_fitness_refreshed_after_mutation(self):
        rng = TestFixtures.get_rng(3)
        for _ in range(20):
            individual = Individual.random(16, rng)
            individual.mutate(0.5, rng)
            self.assertEqual(individual.fitness, count_ones(individual.genome))

    def test_invalid_mutation_rate(self):
        individual = Individual.from_bits([0, 1])
        with self.assertRaises(MutationError):
            individual.mutate(1.5, TestFixtures.get_rng())

    def test_copy_is_deep(self):
        individual = Individual.from_bits([0, 0, 1], generation=2)
        clone = individual.copy()
        clone.genome.flip_bit(0)
        self.assertEqual(individual.genome.genes, [0, 0, 1])
        self.assertEqual(clone.generation, 2)

    def test_same_genome_ignores_metadata(self):
        first = Individual.from_bits([1, 0], generation=1)
        second = Individual.from_bits([1, 0], generation=9)
        self.assertTrue(first.same_genome(second))

    def test_record(self):
        record = Individual.from_bits([1, 0, 1], generation=5).to_record()
        self.assertEqual(record.to_dict(),
                         {'entities': [1, 0, 1], 'amount': 3, 'fitness': 2, 'generation': 5})

    def test_str_format(self):
        self.assertEqual(str(Individual.from_bits([1, 0], generation=4)), "{[1, 0] 2 1 4}")


class TestEvaluationEngine(unittest.TestCase):

    def test_evaluate_population(self):
        engine = EvaluationEngine()
        individuals = TestFixtures.individuals_from_bits([[0, 0], [1, 0], [1, 1]])
        self.assertEqual(engine.evaluate_population(individuals), [0, 1, 2])
        stats = engine.get_statistics()
        self.assertEqual(stats['evaluations_performed'], 3)
        self.assertEqual(stats['population_evaluations'], 1)

    def test_out_of_range_fitness_rejected(self):
        engine = EvaluationEngine(fitness_function=lambda genome: len(genome) + 1)
        with self.assertRaises(InvalidFitnessError):
            engine.evaluate(Genome([1, 1]))


if __name__ == '__main__':
    unittest.main()
