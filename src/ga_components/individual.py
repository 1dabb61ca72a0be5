"""
Individual Module

Candidate solution wrapping a genome with a cached fitness and the
generation in which it was last stamped.
"""

from random import Random
from ga_exceptions import MutationError
from ga_components.genome import Genome
from ga_components.evaluation import count_ones
from ga_components.persistence import IndividualRecord


class Individual:
    """
    A genome plus its cached fitness and generation tag.

    Fitness is computed eagerly on creation and refreshed after mutation, so
    ``individual.fitness == count_ones(individual.genome)`` holds whenever it
    is read outside of ``mutate``.
    """

    def __init__(self, genome: Genome, generation: int = 0):
        self.genome = genome
        self.generation = generation
        self.fitness = count_ones(genome)

    @classmethod
    def random(cls, length: int, rng: Random, generation: int = 0) -> 'Individual':
        """Create an individual with a uniformly random genome."""
        return cls(Genome.random(length, rng), generation)

    @classmethod
    def from_bits(cls, bits, generation: int = 0) -> 'Individual':
        """Create an individual from a sequence of 0/1 values."""
        return cls(Genome(bits), generation)

    @property
    def amount(self) -> int:
        """Number of genes."""
        return len(self.genome)

    @property
    def is_perfect(self) -> bool:
        return self.fitness == len(self.genome)

    def mutate(self, mutation_rate: float, rng: Random) -> int:
        """
        Flip each gene independently with probability ``mutation_rate``.

        Fitness is recomputed once every position has been processed.

        Args:
            mutation_rate: Per-gene flip probability in [0, 1]
            rng: Random source

        Returns:
            Number of flipped genes
        """
        if not 0.0 <= mutation_rate <= 1.0:
            raise MutationError(f"Mutation rate ({mutation_rate}) must be between 0.0 and 1.0",
                                mutation_rate=mutation_rate)

        flipped = 0
        for position in range(len(self.genome)):
            if rng.random() < mutation_rate:
                self.genome.flip_bit(position)
                flipped += 1

        self.refresh_fitness()
        return flipped

    def refresh_fitness(self) -> int:
        self.fitness = count_ones(self.genome)
        return self.fitness

    def same_genome(self, other: 'Individual') -> bool:
        """Genome content equality; fitness and generation are ignored."""
        return self.genome == other.genome

    def copy(self) -> 'Individual':
        clone = Individual(self.genome.copy(), self.generation)
        clone.fitness = self.fitness
        return clone

    def to_record(self) -> IndividualRecord:
        """Build the persistence record for this individual."""
        return IndividualRecord(
            entities=self.genome.genes,
            amount=len(self.genome),
            fitness=self.fitness,
            generation=self.generation
        )

    def __repr__(self) -> str:
        return f"Individual(genome={self.genome}, fitness={self.fitness}, generation={self.generation})"

    def __str__(self) -> str:
        return f"{{{self.genome.genes} {len(self.genome)} {self.fitness} {self.generation}}}"
