"""Shared test fixtures for genomecmp tests."""

import logging
import random

import pytest

from genomecmp.core.genes import GeneAnnotation


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attaches so each test sees its own stderr."""
    yield
    logger = logging.getLogger("genomecmp")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def dna_alphabet():
    """DNA alphabet (ACGT)."""
    return "ACGT"


@pytest.fixture
def random_dna(dna_alphabet):
    """Factory for reproducible random DNA strings."""

    def _make(length: int, seed: int = 0) -> str:
        rng = random.Random(seed)
        return "".join(rng.choice(dna_alphabet) for _ in range(length))

    return _make


@pytest.fixture
def make_gene():
    """Factory for gene annotations with sequential ids."""
    counter = iter(range(1, 10_000))

    def _make(name: str, start: int, end: int, strand: str = "+") -> GeneAnnotation:
        return GeneAnnotation(id=next(counter), start_pos=start, end_pos=end, strand=strand, name=name)

    return _make


@pytest.fixture
def phage_genes(make_gene):
    """Five contiguous 1 kb genes with unrelated names."""
    names = ["portal", "capsid", "integrase", "terminase", "endolysin"]
    return [make_gene(name, i * 1000, (i + 1) * 1000) for i, name in enumerate(names)]
