"""Signature cache exports."""

from .signature_cache import (
    CacheStats,
    SignatureCache,
    clear_signature_cache,
    entry_size,
    get_signature_cache,
    init_signature_cache,
    make_cache_key,
    make_cache_key_from_id,
)

__all__ = [
    "CacheStats",
    "SignatureCache",
    "clear_signature_cache",
    "entry_size",
    "get_signature_cache",
    "init_signature_cache",
    "make_cache_key",
    "make_cache_key_from_id",
]
