"""Utility exports."""

from .config import (
    CacheConfig,
    ComparisonConfig,
    EditDistanceConfig,
    KmerConfig,
    StructuralVariantOptions,
    SyntenyOptions,
    load_config,
)
from .logging import get_logger
from .validation import as_tokens

__all__ = [
    "CacheConfig",
    "ComparisonConfig",
    "EditDistanceConfig",
    "KmerConfig",
    "StructuralVariantOptions",
    "SyntenyOptions",
    "load_config",
    "get_logger",
    "as_tokens",
]
