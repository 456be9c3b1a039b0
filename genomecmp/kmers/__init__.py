"""K-mer and MinHash similarity engine."""

from .analysis import (
    DEFAULT_K_VALUES,
    KmerAnalysis,
    analyze_kmers,
    kmer_analyses_to_frame,
    multi_resolution_kmer_analysis,
)
from .counting import (
    canonical_kmer,
    canonical_kmer_frequencies,
    canonical_kmer_set,
    iter_kmers,
    kmer_frequencies,
    kmer_set,
    reverse_complement,
)
from .metrics import (
    bray_curtis_dissimilarity,
    containment_index,
    cosine_similarity,
    jaccard_index,
    kmer_intersection_size,
)
from .minhash import (
    EMPTY_SLOT,
    MinHashSignature,
    cached_minhash_signature,
    deterministic_seeds,
    minhash_jaccard,
    minhash_jaccard_from_signatures,
    minhash_signature,
)

__all__ = [
    "DEFAULT_K_VALUES",
    "EMPTY_SLOT",
    "KmerAnalysis",
    "MinHashSignature",
    "analyze_kmers",
    "bray_curtis_dissimilarity",
    "cached_minhash_signature",
    "canonical_kmer",
    "canonical_kmer_frequencies",
    "canonical_kmer_set",
    "containment_index",
    "cosine_similarity",
    "deterministic_seeds",
    "iter_kmers",
    "jaccard_index",
    "kmer_analyses_to_frame",
    "kmer_frequencies",
    "kmer_intersection_size",
    "kmer_set",
    "minhash_jaccard",
    "minhash_jaccard_from_signatures",
    "minhash_signature",
    "multi_resolution_kmer_analysis",
    "reverse_complement",
]
