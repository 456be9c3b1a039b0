"""Metrics derived from edit distance plus cheap positional comparisons."""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass
from typing import Any

import numpy as np

from genomecmp.distance.levenshtein import (
    DEFAULT_MAX_LENGTH,
    approximate_levenshtein,
    code_points,
    exact_levenshtein,
    heuristic_operations,
    levenshtein_distance,
    levenshtein_with_operations,
    round_half_up,
)
from genomecmp.errors import LengthMismatchError
from genomecmp.utils.config import EditDistanceConfig
from genomecmp.utils.validation import SequenceLike, as_tokens

LCS_WINDOW_SIZE = 1000
LCS_NUM_WINDOWS = 10


@dataclass(frozen=True, slots=True)
class EditDistanceMetrics:
    """Bundle produced by :func:`analyze_edit_distance`.

    ``is_approximate`` refers to the distance itself. ``operations_approximate``
    is set whenever the insertion/deletion/substitution split is heuristic,
    which also happens for exact distances too large for a traceback.
    """

    levenshtein_distance: int
    normalized_levenshtein: float
    levenshtein_similarity: float
    insertions: int
    deletions: int
    substitutions: int
    is_approximate: bool
    operations_approximate: bool
    window_size: int | None = None
    window_count: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def normalized_levenshtein(
    a: SequenceLike, b: SequenceLike, max_length: int | None = DEFAULT_MAX_LENGTH
) -> float:
    """``distance / max(len(a), len(b))`` in [0, 1]; 0 when both are empty."""
    a, b = as_tokens(a), as_tokens(b)
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 0.0
    result = levenshtein_distance(a, b, max_length)
    return min(1.0, result.distance / max_len)


def levenshtein_similarity(
    a: SequenceLike, b: SequenceLike, max_length: int | None = DEFAULT_MAX_LENGTH
) -> float:
    return 1.0 - normalized_levenshtein(a, b, max_length)


def hamming_distance(a: SequenceLike, b: SequenceLike) -> int:
    """Number of differing positions between two equal-length strings.

    Raises
    ------
    LengthMismatchError
        If the operands differ in length.
    """
    a, b = as_tokens(a), as_tokens(b)
    if len(a) != len(b):
        raise LengthMismatchError(len(a), len(b))
    return sum(char_a != char_b for char_a, char_b in zip(a, b))


def percent_identity(a: SequenceLike, b: SequenceLike) -> float:
    """Case-insensitive positional identity, in percent.

    Matches are divided by the longer length, so length differences count
    against identity.
    """
    a, b = as_tokens(a), as_tokens(b)
    min_len = min(len(a), len(b))
    if min_len == 0:
        return 100.0 if len(a) == len(b) else 0.0
    matches = sum(x == y for x, y in zip(a[:min_len].upper(), b[:min_len].upper()))
    return matches / max(len(a), len(b)) * 100.0


def _lcs_length(a: str, b: str) -> int:
    if len(a) > len(b):
        a, b = b, a
    if not a:
        return 0
    codes_b = code_points(b)
    prev = np.zeros(len(b) + 1, dtype=np.int64)
    curr = np.zeros(len(b) + 1, dtype=np.int64)
    for code in code_points(a):
        candidates = np.where(codes_b == code, prev[:-1] + 1, prev[1:])
        np.maximum.accumulate(candidates, out=curr[1:])
        prev, curr = curr, prev
    return int(prev[-1])


def _approximate_lcs(a: str, b: str, window_size: int, num_windows: int) -> int:
    min_len = min(len(a), len(b))
    step = min_len // num_windows
    total = 0
    for i in range(num_windows):
        start = i * step
        total += _lcs_length(a[start : start + window_size], b[start : start + window_size])
    return round_half_up((total / num_windows) * (min_len / window_size))


def longest_common_subsequence(
    a: SequenceLike, b: SequenceLike, max_length: int | None = DEFAULT_MAX_LENGTH
) -> int:
    """LCS length; above ``max_length`` a windowed estimate scaled to the full length."""
    a, b = as_tokens(a), as_tokens(b)
    if max_length is not None and (len(a) > max_length or len(b) > max_length):
        return _approximate_lcs(a, b, LCS_WINDOW_SIZE, LCS_NUM_WINDOWS)
    return _lcs_length(a, b)


def lcs_similarity(a: SequenceLike, b: SequenceLike) -> float:
    a, b = as_tokens(a), as_tokens(b)
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return min(1.0, longest_common_subsequence(a, b) / max_len)


def analyze_edit_distance(
    sequence_a: SequenceLike,
    sequence_b: SequenceLike,
    config: EditDistanceConfig | None = None,
) -> EditDistanceMetrics:
    """Distance, normalized scores and an operation breakdown in one record."""
    cfg = config or EditDistanceConfig()
    a, b = as_tokens(sequence_a), as_tokens(sequence_b)
    longest = max(len(a), len(b))
    window_size: int | None = None
    window_count: int | None = None

    if longest > cfg.max_exact_length:
        approx = approximate_levenshtein(
            a, b, cfg.window_size, cfg.num_windows, use_accelerator=cfg.use_accelerator
        )
        distance = approx.distance
        length_diff = abs(len(a) - len(b))
        substitutions = max(0, round_half_up((distance - length_diff) * 0.6))
        indels = distance - substitutions
        major, minor = round_half_up(indels * 0.6), round_half_up(indels * 0.4)
        insertions = major if len(a) < len(b) else minor
        deletions = major if len(a) > len(b) else minor
        is_approximate = operations_approximate = True
        window_size, window_count = approx.window_size, approx.window_count
    elif longest > cfg.max_operations_length:
        distance = exact_levenshtein(a, b, use_accelerator=cfg.use_accelerator)
        ops = heuristic_operations(distance, len(a), len(b))
        insertions, deletions, substitutions = ops.insertions, ops.deletions, ops.substitutions
        is_approximate, operations_approximate = False, True
    else:
        ops = levenshtein_with_operations(a, b, cfg.max_operations_length)
        distance = ops.distance
        insertions, deletions, substitutions = ops.insertions, ops.deletions, ops.substitutions
        is_approximate = operations_approximate = False

    normalized = min(1.0, distance / longest) if longest > 0 else 0.0
    return EditDistanceMetrics(
        levenshtein_distance=distance,
        normalized_levenshtein=normalized,
        levenshtein_similarity=1.0 - normalized,
        insertions=insertions,
        deletions=deletions,
        substitutions=substitutions,
        is_approximate=is_approximate,
        operations_approximate=operations_approximate,
        window_size=window_size,
        window_count=window_count,
    )


def quick_similarity_estimate(
    a: SequenceLike,
    b: SequenceLike,
    sample_size: int = 1000,
    num_samples: int = 10,
    rng: random.Random | None = None,
) -> float:
    """Cheap similarity pre-filter in [0, 1].

    Very different lengths short-circuit to ``ratio * 0.5``; short inputs use
    exact percent identity; long inputs average positional identity over
    ``num_samples`` randomly placed windows. The sampled path is
    nondeterministic unless ``rng`` is seeded; use it for coarse filtering only.
    """
    a, b = as_tokens(a), as_tokens(b)
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    min_len = min(len(a), len(b))
    length_ratio = min_len / max_len
    if length_ratio < 0.5:
        return length_ratio * 0.5
    if min_len <= sample_size:
        return percent_identity(a, b) / 100.0

    rng = rng or random.Random()
    matches = 0
    total = 0
    for _ in range(max(1, num_samples)):
        start = rng.randrange(min_len - sample_size)
        sample_a = a[start : start + sample_size].upper()
        sample_b = b[start : start + sample_size].upper()
        matches += sum(x == y for x, y in zip(sample_a, sample_b))
        total += sample_size
    return (matches / total) * length_ratio
