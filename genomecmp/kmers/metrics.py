"""Set- and abundance-based k-mer similarity metrics."""

from __future__ import annotations

from collections.abc import Mapping, Set

import numpy as np


def kmer_intersection_size(set_a: Set[str], set_b: Set[str]) -> int:
    small, large = (set_a, set_b) if len(set_a) <= len(set_b) else (set_b, set_a)
    return sum(1 for kmer in small if kmer in large)


def jaccard_index(set_a: Set[str], set_b: Set[str]) -> float:
    """``|A ∩ B| / |A ∪ B|``; two empty sets are identical (1.0)."""
    shared = kmer_intersection_size(set_a, set_b)
    union = len(set_a) + len(set_b) - shared
    return shared / union if union > 0 else 1.0


def containment_index(set_a: Set[str], set_b: Set[str]) -> float:
    """Fraction of A's k-mers found in B (asymmetric); 0 when A is empty."""
    if not set_a:
        return 0.0
    return kmer_intersection_size(set_a, set_b) / len(set_a)


def _aligned_counts(
    freqs_a: Mapping[str, int], freqs_b: Mapping[str, int]
) -> tuple[np.ndarray, np.ndarray]:
    union = sorted(set(freqs_a) | set(freqs_b))
    vec_a = np.fromiter((freqs_a.get(kmer, 0) for kmer in union), dtype=np.float64, count=len(union))
    vec_b = np.fromiter((freqs_b.get(kmer, 0) for kmer in union), dtype=np.float64, count=len(union))
    return vec_a, vec_b


def cosine_similarity(freqs_a: Mapping[str, int], freqs_b: Mapping[str, int]) -> float:
    """Cosine of the angle between two k-mer count vectors.

    Returns 0.0 when either vector is all zeros.
    """
    vec_a, vec_b = _aligned_counts(freqs_a, freqs_b)
    denominator = float(np.linalg.norm(vec_a) * np.linalg.norm(vec_b))
    if denominator <= 0.0:
        return 0.0
    return float(np.dot(vec_a, vec_b)) / denominator


def bray_curtis_dissimilarity(freqs_a: Mapping[str, int], freqs_b: Mapping[str, int]) -> float:
    """``Σ|Ai - Bi| / Σ(Ai + Bi)``; 0 = identical, 1 = disjoint, 0 when both empty."""
    vec_a, vec_b = _aligned_counts(freqs_a, freqs_b)
    total = float(np.sum(vec_a + vec_b))
    if total <= 0.0:
        return 0.0
    return float(np.sum(np.abs(vec_a - vec_b))) / total
