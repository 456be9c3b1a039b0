"""Input coercion helpers."""

from __future__ import annotations

from typing import Union

from genomecmp.core.sequence import Sequence

SequenceLike = Union[str, Sequence]

DNA_BASES = frozenset("ACGT")


def as_tokens(sequence: SequenceLike | None) -> str:
    """Return the raw text of ``sequence``; ``None`` becomes the empty string."""
    if sequence is None:
        return ""
    if isinstance(sequence, Sequence):
        return sequence.tokens
    return str(sequence)


def is_unambiguous(kmer: str) -> bool:
    """True when ``kmer`` (upper-case) holds only A/C/G/T."""
    return DNA_BASES.issuperset(kmer)
