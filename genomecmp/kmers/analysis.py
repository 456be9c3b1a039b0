"""Alignment-free comparison of two sequences by k-mer content."""

from __future__ import annotations

from collections.abc import Iterable, Sequence as SeqType
from dataclasses import asdict, dataclass

import pandas as pd

from genomecmp.kmers.counting import canonical_kmer_frequencies
from genomecmp.kmers.metrics import (
    bray_curtis_dissimilarity,
    containment_index,
    cosine_similarity,
    jaccard_index,
    kmer_intersection_size,
)
from genomecmp.utils.validation import SequenceLike

DEFAULT_K_VALUES: tuple[int, ...] = (3, 5, 7, 11)


@dataclass(frozen=True, slots=True)
class KmerAnalysis:
    """K-mer similarity between two sequences at a single ``k``."""

    k: int
    unique_kmers_a: int = 0
    unique_kmers_b: int = 0
    shared_kmers: int = 0
    jaccard_index: float = 0.0
    containment_a_in_b: float = 0.0
    containment_b_in_a: float = 0.0
    cosine_similarity: float = 0.0
    bray_curtis_dissimilarity: float = 0.0

    def to_dict(self) -> dict[str, float | int]:
        return asdict(self)


def analyze_kmers(sequence_a: SequenceLike, sequence_b: SequenceLike, k: int) -> KmerAnalysis:
    """Compare canonical k-mer sets and frequencies of two sequences.

    An invalid ``k`` yields an all-zero result rather than an error.
    """
    if k < 1:
        return KmerAnalysis(k=k)

    freqs_a = canonical_kmer_frequencies(sequence_a, k)
    freqs_b = canonical_kmer_frequencies(sequence_b, k)
    set_a = freqs_a.keys()
    set_b = freqs_b.keys()

    return KmerAnalysis(
        k=k,
        unique_kmers_a=len(set_a),
        unique_kmers_b=len(set_b),
        shared_kmers=kmer_intersection_size(set_a, set_b),
        jaccard_index=jaccard_index(set_a, set_b),
        containment_a_in_b=containment_index(set_a, set_b),
        containment_b_in_a=containment_index(set_b, set_a),
        cosine_similarity=cosine_similarity(freqs_a, freqs_b),
        bray_curtis_dissimilarity=bray_curtis_dissimilarity(freqs_a, freqs_b),
    )


def multi_resolution_kmer_analysis(
    sequence_a: SequenceLike,
    sequence_b: SequenceLike,
    k_values: SeqType[int] = DEFAULT_K_VALUES,
) -> list[KmerAnalysis]:
    """Run :func:`analyze_kmers` for each ``k``, preserving input order.

    Small k (3-4) captures composition, medium k (5-7) balances specificity and
    coverage, large k (9-11) picks out conserved regions.
    """
    return [analyze_kmers(sequence_a, sequence_b, k) for k in k_values]


def kmer_analyses_to_frame(results: Iterable[KmerAnalysis]) -> pd.DataFrame:
    """One row per ``k``."""
    rows = [result.to_dict() for result in results]
    columns = list(KmerAnalysis.__dataclass_fields__)
    return pd.DataFrame(rows, columns=columns)
