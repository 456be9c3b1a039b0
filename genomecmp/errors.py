"""Exception hierarchy for genomecmp."""

from __future__ import annotations


class GenomeCmpError(Exception):
    """Base class for errors raised by genomecmp."""


class LengthMismatchError(GenomeCmpError, ValueError):
    """Operands must have equal length (Hamming distance)."""

    def __init__(self, len_a: int, len_b: int) -> None:
        msg = f"Hamming distance requires equal-length strings (got {len_a} and {len_b})"
        super().__init__(msg)
        self.len_a = len_a
        self.len_b = len_b


class ConfigError(GenomeCmpError, ValueError):
    """Invalid configuration value."""


__all__ = ["GenomeCmpError", "LengthMismatchError", "ConfigError"]
