"""genomecmp public interface.

Alignment-free and anchor-based comparison of nucleotide sequences and gene
annotations. The engines live under ``genomecmp.kmers``,
``genomecmp.distance``, ``genomecmp.synteny`` and ``genomecmp.cache``.
"""

from __future__ import annotations

from .core import GeneAnnotation, Sequence
from .errors import ConfigError, GenomeCmpError, LengthMismatchError

__all__ = [
    "ConfigError",
    "GeneAnnotation",
    "GenomeCmpError",
    "LengthMismatchError",
    "Sequence",
]

__version__ = "0.1.0"
