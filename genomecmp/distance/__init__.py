"""Edit-distance engine."""

from .accel import accelerator_available
from .levenshtein import (
    EditDistanceResult,
    EditOperations,
    approximate_levenshtein,
    exact_levenshtein,
    heuristic_operations,
    levenshtein_distance,
    levenshtein_with_operations,
)
from .metrics import (
    EditDistanceMetrics,
    analyze_edit_distance,
    hamming_distance,
    lcs_similarity,
    levenshtein_similarity,
    longest_common_subsequence,
    normalized_levenshtein,
    percent_identity,
    quick_similarity_estimate,
)

__all__ = [
    "EditDistanceMetrics",
    "EditDistanceResult",
    "EditOperations",
    "accelerator_available",
    "analyze_edit_distance",
    "approximate_levenshtein",
    "exact_levenshtein",
    "hamming_distance",
    "heuristic_operations",
    "lcs_similarity",
    "levenshtein_distance",
    "levenshtein_similarity",
    "levenshtein_with_operations",
    "longest_common_subsequence",
    "normalized_levenshtein",
    "percent_identity",
    "quick_similarity_estimate",
]
