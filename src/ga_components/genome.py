"""
Genome Module

Fixed-length binary genome used by every individual in the population.

Features:
- Uniform random initialization from an injected random source
- In-place bit flips with bounds checking
- Content equality and slicing for crossover
"""

from random import Random
from typing import Iterable, List


class Genome:
    """
    Ordered sequence of binary genes with a length fixed at creation.

    The genes are mutable in place (bit flips) but the length never changes.
    Two genomes are equal when their gene contents are equal.
    """

    __slots__ = ('_genes',)

    def __init__(self, genes: Iterable[int]):
        """
        Create a genome from gene values.

        Args:
            genes: Iterable of 0/1 values (copied)

        Raises:
            ValueError: If a gene is not 0 or 1
        """
        genes = list(genes)
        for position, gene in enumerate(genes):
            if not isinstance(gene, int) or isinstance(gene, bool) or gene not in (0, 1):
                raise ValueError(f"Gene at position {position} must be 0 or 1, got {gene!r}")
        self._genes = genes

    @classmethod
    def random(cls, length: int, rng: Random) -> 'Genome':
        """
        Create a genome of ``length`` uniformly random genes.

        Args:
            length: Number of genes
            rng: Random source

        Returns:
            New random genome
        """
        if length < 0:
            raise ValueError(f"Genome length ({length}) cannot be negative")
        return cls(rng.randint(0, 1) for _ in range(length))

    @classmethod
    def concat(cls, head: List[int], tail: List[int]) -> 'Genome':
        """Build a genome from two gene slices."""
        return cls(head + tail)

    @property
    def genes(self) -> List[int]:
        """Copy of the gene values."""
        return list(self._genes)

    def flip_bit(self, position: int) -> None:
        """
        Flip the gene at ``position``.

        Raises:
            IndexError: If position is outside [0, len)
        """
        if not 0 <= position < len(self._genes):
            raise IndexError(f"Gene position {position} out of range for genome of length {len(self._genes)}")
        self._genes[position] = 1 - self._genes[position]

    def copy(self) -> 'Genome':
        return Genome(self._genes)

    def __len__(self) -> int:
        return len(self._genes)

    def __getitem__(self, index):
        # Slices come back as plain gene lists
        return self._genes[index]

    def __iter__(self):
        return iter(self._genes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Genome):
            return NotImplemented
        return self._genes == other._genes

    __hash__ = None  # Mutable

    def __str__(self) -> str:
        return ''.join(str(gene) for gene in self._genes)

    def __repr__(self) -> str:
        return f"Genome({self._genes})"
