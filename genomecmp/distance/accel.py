"""Optional native backend for exact Levenshtein distances.

``edlib`` computes the same global unit-cost edit distance as the reference
dynamic program in :mod:`genomecmp.distance.levenshtein`. When it is missing,
fails its self-check, or errors on a particular input, callers fall back to
the reference path; results are identical and only latency differs.
"""

from __future__ import annotations

import logging

try:
    import edlib
except ImportError:  # pragma: no cover - optional dependency
    edlib = None

_LOGGER = logging.getLogger(__name__)

# (probe_a, probe_b, expected distance)
_SELF_CHECKS = (("a", "b", 1), ("kitten", "sitting", 3), ("ACGT", "ACGT", 0))

_available: bool | None = None
_warned = False


def accelerator_available() -> bool:
    """Whether the native backend is importable and passes its self-check."""
    global _available
    if _available is None:
        _available = _self_check()
    return _available


def _self_check() -> bool:
    if edlib is None:
        _LOGGER.debug("edlib not installed; using reference edit distance")
        return False
    try:
        for probe_a, probe_b, expected in _SELF_CHECKS:
            result = edlib.align(probe_a, probe_b, mode="NW", task="distance")
            if result.get("editDistance") != expected:
                _LOGGER.warning("edlib self-check failed on %r/%r; using reference edit distance", probe_a, probe_b)
                return False
    except Exception as exc:  # noqa: BLE001 - any backend fault disables it
        _LOGGER.warning("edlib self-check raised %s; using reference edit distance", exc)
        return False
    return True


def native_levenshtein(a: str, b: str) -> int | None:
    """Exact distance from the native backend, or ``None`` to request the fallback."""
    global _warned
    if not a or not b or not accelerator_available():
        return None
    try:
        result = edlib.align(a, b, mode="NW", task="distance")
    except Exception as exc:  # noqa: BLE001 - fall back to the reference path
        if not _warned:
            _LOGGER.warning("edlib failed (%s); falling back to reference edit distance", exc)
            _warned = True
        return None
    distance = result.get("editDistance", -1)
    return int(distance) if distance >= 0 else None


def reset_accelerator() -> None:
    """Forget the cached self-check result (used by tests)."""
    global _available, _warned
    _available = None
    _warned = False
