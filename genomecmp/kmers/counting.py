"""K-mer extraction.

K-mers are read from the upper-cased sequence. Any window holding a character
other than A, C, G or T (N and the other IUPAC ambiguity codes) is skipped.
Canonical k-mers are the lexicographic minimum of a k-mer and its reverse
complement, which makes counts strand-independent.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator

from genomecmp.utils.validation import SequenceLike, as_tokens, is_unambiguous

_COMPLEMENT = str.maketrans("ACGT", "TGCA")


def reverse_complement(kmer: str) -> str:
    return kmer.translate(_COMPLEMENT)[::-1]


def canonical_kmer(kmer: str) -> str:
    rc = reverse_complement(kmer)
    return kmer if kmer <= rc else rc


def iter_kmers(sequence: SequenceLike, k: int, canonical: bool = False) -> Iterator[str]:
    """Yield every valid k-mer of ``sequence`` in positional order."""
    seq = as_tokens(sequence).upper()
    if k < 1 or len(seq) < k:
        return
    for i in range(len(seq) - k + 1):
        kmer = seq[i : i + k]
        if not is_unambiguous(kmer):
            continue
        yield canonical_kmer(kmer) if canonical else kmer


def kmer_set(sequence: SequenceLike, k: int, canonical: bool = False) -> set[str]:
    """Distinct k-mers of ``sequence``; empty for ``k < 1`` or short input."""
    return set(iter_kmers(sequence, k, canonical))


def kmer_frequencies(sequence: SequenceLike, k: int, canonical: bool = False) -> Counter[str]:
    """K-mer occurrence counts; empty for ``k < 1`` or short input."""
    return Counter(iter_kmers(sequence, k, canonical))


def canonical_kmer_set(sequence: SequenceLike, k: int) -> set[str]:
    return kmer_set(sequence, k, canonical=True)


def canonical_kmer_frequencies(sequence: SequenceLike, k: int) -> Counter[str]:
    return kmer_frequencies(sequence, k, canonical=True)
