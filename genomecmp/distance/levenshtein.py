"""Levenshtein distance with exact and windowed-approximate code paths.

The exact path is the classic unit-cost dynamic program. Each DP row is
updated with numpy: substitution/deletion candidates are computed
elementwise and the left-to-right insertion dependency is resolved with a
running minimum (``curr[i] = i + min_{j<=i}(tmp[j] - j)``).

Operands longer than the configured threshold go through
:func:`approximate_levenshtein`, which samples evenly spaced windows and
extrapolates. Every result carries ``is_approximate`` so exact and estimated
numbers are never mixed silently.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any

import numpy as np

from genomecmp.distance.accel import native_levenshtein
from genomecmp.utils.validation import SequenceLike, as_tokens

_LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 10000
DEFAULT_MAX_OPERATIONS_LENGTH = 5000
DEFAULT_WINDOW_SIZE = 1000
DEFAULT_NUM_WINDOWS = 20


@dataclass(frozen=True, slots=True)
class EditDistanceResult:
    distance: int
    is_approximate: bool = False
    window_size: int | None = None
    window_count: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class EditOperations:
    """Edit-script breakdown.

    On the exact path ``insertions + deletions + substitutions == distance``.
    When ``is_approximate`` is set the breakdown is a heuristic and need not
    sum to ``distance``.
    """

    distance: int
    insertions: int
    deletions: int
    substitutions: int
    is_approximate: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def code_points(text: str) -> np.ndarray:
    """Code points of ``text`` as a uint32 array."""
    return np.frombuffer(text.encode("utf-32-le"), dtype=np.uint32)


def _exceeds(a: str, b: str, max_length: int | None) -> bool:
    return max_length is not None and (len(a) > max_length or len(b) > max_length)


def _reference_distance(a: str, b: str) -> int:
    # the shorter operand drives the row vector
    if len(a) > len(b):
        a, b = b, a
    m, n = len(a), len(b)
    if m == 0:
        return n

    codes_a = code_points(a)
    codes_b = code_points(b)
    offsets = np.arange(m + 1, dtype=np.int64)
    prev = offsets.copy()
    tmp = np.empty(m + 1, dtype=np.int64)
    for j in range(1, n + 1):
        cost = codes_a != codes_b[j - 1]
        tmp[0] = j
        np.minimum(prev[1:] + 1, prev[:-1] + cost, out=tmp[1:])
        prev = np.minimum.accumulate(tmp - offsets) + offsets
    return int(prev[m])


def exact_levenshtein(a: SequenceLike, b: SequenceLike, *, use_accelerator: bool = True) -> int:
    """Exact unit-cost edit distance, O(len(a)·len(b)) time, O(min) memory."""
    a, b = as_tokens(a), as_tokens(b)
    if not a or not b:
        return max(len(a), len(b))
    if use_accelerator:
        native = native_levenshtein(a, b)
        if native is not None:
            return native
    return _reference_distance(a, b)


def approximate_levenshtein(
    a: SequenceLike,
    b: SequenceLike,
    window_size: int = DEFAULT_WINDOW_SIZE,
    num_windows: int = DEFAULT_NUM_WINDOWS,
    *,
    use_accelerator: bool = True,
) -> EditDistanceResult:
    """Windowed estimate of the edit distance for long operands.

    Up to ``num_windows`` windows of ``window_size`` are spread evenly over the
    shorter length; their mean exact distance is scaled by
    ``min_len / window_size`` and the length difference is added for the
    unaligned tail. When not even one window fits, the exact distance of the
    whole pair is returned, still flagged approximate with ``window_count=1``.
    """
    a, b = as_tokens(a), as_tokens(b)
    window_size = max(1, int(window_size))
    num_windows = max(1, int(num_windows))

    min_len = min(len(a), len(b))
    length_diff = abs(len(a) - len(b))

    effective = min(num_windows, min_len // window_size)
    if effective < 1:
        distance = exact_levenshtein(a, b, use_accelerator=use_accelerator)
        return EditDistanceResult(
            distance=distance,
            is_approximate=True,
            window_size=window_size,
            window_count=1,
        )

    step = (min_len - window_size) // (effective - 1 or 1)
    total = 0
    for i in range(effective):
        start = i * step
        total += exact_levenshtein(
            a[start : start + window_size],
            b[start : start + window_size],
            use_accelerator=use_accelerator,
        )

    mean_distance = total / effective
    estimate = round_half_up(mean_distance * (min_len / window_size) + length_diff)
    _LOGGER.debug(
        "Approximated edit distance over %d windows of %d: %d", effective, window_size, estimate
    )
    return EditDistanceResult(
        distance=estimate,
        is_approximate=True,
        window_size=window_size,
        window_count=effective,
    )


def levenshtein_distance(
    a: SequenceLike,
    b: SequenceLike,
    max_length: int | None = DEFAULT_MAX_LENGTH,
    *,
    use_accelerator: bool = True,
) -> EditDistanceResult:
    """Edit distance; exact up to ``max_length``, windowed estimate beyond.

    ``max_length=None`` forces the exact path regardless of size.
    """
    a, b = as_tokens(a), as_tokens(b)
    if _exceeds(a, b, max_length):
        _LOGGER.debug("Operands exceed %s; using windowed approximation", max_length)
        return approximate_levenshtein(
            a, b, DEFAULT_WINDOW_SIZE, DEFAULT_NUM_WINDOWS, use_accelerator=use_accelerator
        )
    return EditDistanceResult(distance=exact_levenshtein(a, b, use_accelerator=use_accelerator))


def _distance_matrix(a: str, b: str) -> np.ndarray:
    """Full (len(a)+1) x (len(b)+1) DP matrix; rows index ``a``."""
    m, n = len(a), len(b)
    dp = np.empty((m + 1, n + 1), dtype=np.int32)
    offsets = np.arange(n + 1, dtype=np.int64)
    dp[0] = offsets
    codes_a = code_points(a)
    codes_b = code_points(b)
    prev = offsets.copy()
    tmp = np.empty(n + 1, dtype=np.int64)
    for i in range(1, m + 1):
        cost = codes_b != codes_a[i - 1]
        tmp[0] = i
        np.minimum(prev[1:] + 1, prev[:-1] + cost, out=tmp[1:])
        prev = np.minimum.accumulate(tmp - offsets) + offsets
        dp[i] = prev
    return dp


def heuristic_operations(distance: int, len_a: int, len_b: int) -> EditOperations:
    """Approximate breakdown without a traceback.

    The length difference is charged to insertions (``b`` longer) or deletions
    (``a`` longer); the rest of the distance is charged to substitutions,
    since aligned genomes accumulate more point substitutions than indels.
    """
    length_diff = abs(len_a - len_b)
    return EditOperations(
        distance=distance,
        insertions=length_diff if len_a < len_b else 0,
        deletions=length_diff if len_a > len_b else 0,
        substitutions=max(0, distance - length_diff),
        is_approximate=True,
    )


def levenshtein_with_operations(
    a: SequenceLike,
    b: SequenceLike,
    max_length: int | None = DEFAULT_MAX_OPERATIONS_LENGTH,
    *,
    use_accelerator: bool = True,
) -> EditOperations:
    """Edit distance with insertion/deletion/substitution counts.

    Within ``max_length`` the counts come from a traceback over the full DP
    matrix (O(m·n) memory). Ties are broken in a fixed order: diagonal match,
    diagonal substitution, horizontal insertion, vertical deletion. Larger
    operands get :func:`heuristic_operations` over the windowed estimate.
    """
    a, b = as_tokens(a), as_tokens(b)
    if _exceeds(a, b, max_length):
        approx = approximate_levenshtein(a, b, use_accelerator=use_accelerator)
        return heuristic_operations(approx.distance, len(a), len(b))

    dp = _distance_matrix(a, b)
    insertions = deletions = substitutions = 0
    i, j = len(a), len(b)
    while i > 0 or j > 0:
        if i > 0 and j > 0 and a[i - 1] == b[j - 1]:
            i -= 1
            j -= 1
        elif i > 0 and j > 0 and dp[i, j] == dp[i - 1, j - 1] + 1:
            substitutions += 1
            i -= 1
            j -= 1
        elif j > 0 and dp[i, j] == dp[i, j - 1] + 1:
            insertions += 1
            j -= 1
        else:
            deletions += 1
            i -= 1

    return EditOperations(
        distance=int(dp[len(a), len(b)]),
        insertions=insertions,
        deletions=deletions,
        substitutions=substitutions,
    )
