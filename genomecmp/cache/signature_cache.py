"""Bounded in-memory cache for MinHash signatures.

Entries are evicted least-recently-used first until both the entry limit and
the byte budget hold. The byte total always equals the sum of the live entry
sizes.
"""

from __future__ import annotations

import hashlib
import logging
import threading
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from genomecmp.utils.config import CacheConfig

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


def make_cache_key(sequence: str, k: int, num_hashes: int, canonical: bool) -> str:
    """Content-addressed key; the sequence is digested so keys stay short."""
    digest = hashlib.sha1(sequence.encode("utf-8")).hexdigest()
    return f"seq:{digest}:{len(sequence)}:k{k}:h{num_hashes}:c{int(canonical)}"


def make_cache_key_from_id(seq_id: str, k: int, num_hashes: int, canonical: bool) -> str:
    """Identifier-addressed key, namespaced apart from content keys."""
    return f"id:{seq_id}:k{k}:h{num_hashes}:c{int(canonical)}"


def entry_size(value: object) -> int:
    """Byte size charged against the budget for ``value``."""
    if value is None:
        return 0
    nbytes = getattr(value, "nbytes", None)
    if nbytes is not None:
        return int(nbytes)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return len(value)
    msg = f"Cannot size cache value of type {type(value).__name__}"
    raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class CacheStats:
    hits: int
    misses: int
    hit_rate: float
    entries: int
    bytes: int
    max_entries: int
    max_bytes: int

    def to_dict(self) -> dict[str, float | int]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hit_rate,
            "entries": self.entries,
            "bytes": self.bytes,
            "max_entries": self.max_entries,
            "max_bytes": self.max_bytes,
        }


class SignatureCache(Generic[T]):
    """LRU cache bounded by entry count and total bytes.

    Parameters
    ----------
    max_entries : int
        Maximum number of live entries.
    max_bytes : int
        Maximum sum of entry sizes, as reported by :func:`entry_size`.

    Example
    -------
    >>> cache = SignatureCache(max_entries=100)
    >>> sig = cache.get_or_compute("ACGT", 3, 128, True, lambda: minhash_signature("ACGT", 3))
    """

    def __init__(self, max_entries: int = 1000, max_bytes: int = 64 * 1024 * 1024) -> None:
        config = CacheConfig(max_entries=max_entries, max_bytes=max_bytes)
        self._max_entries = config.max_entries
        self._max_bytes = config.max_bytes
        self._store: OrderedDict[str, tuple[T | None, int]] = OrderedDict()
        self._bytes = 0
        self._hits = 0
        self._misses = 0
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: CacheConfig) -> SignatureCache[Any]:
        return cls(max_entries=config.max_entries, max_bytes=config.max_bytes)

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def _lookup(self, key: str) -> Any:
        with self._lock:
            entry = self._store.get(key, _MISSING)
            if entry is _MISSING:
                self._misses += 1
                return _MISSING
            self._store.move_to_end(key)
            self._hits += 1
            return entry[0]

    def get(self, key: str) -> T | None:
        """Return the cached value (``None`` when absent) and mark it recently used."""
        value = self._lookup(key)
        return None if value is _MISSING else value

    def has(self, key: str) -> bool:
        """Membership test; does not touch recency or counters."""
        return key in self._store

    def set(self, key: str, value: T | None) -> None:
        size = entry_size(value)
        with self._lock:
            previous = self._store.pop(key, None)
            if previous is not None:
                self._bytes -= previous[1]
            self._store[key] = (value, size)
            self._bytes += size
            self._evict()

    def delete(self, key: str) -> bool:
        with self._lock:
            entry = self._store.pop(key, None)
            if entry is None:
                return False
            self._bytes -= entry[1]
            return True

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._bytes = 0

    def get_or_compute(
        self,
        sequence: str,
        k: int,
        num_hashes: int,
        canonical: bool,
        compute_fn: Callable[[], T | None],
        *,
        seq_id: str | None = None,
    ) -> T | None:
        """Return the cached signature or compute, store and return it.

        ``None`` results are cached as well. Exceptions raised by
        ``compute_fn`` propagate and nothing is stored.
        """
        if seq_id is not None:
            key = make_cache_key_from_id(seq_id, k, num_hashes, canonical)
        else:
            key = make_cache_key(sequence, k, num_hashes, canonical)

        value = self._lookup(key)
        if value is not _MISSING:
            return value

        computed = compute_fn()
        self.set(key, computed)
        return computed

    def get_stats(self) -> CacheStats:
        with self._lock:
            total = self._hits + self._misses
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                hit_rate=self._hits / total if total else 0.0,
                entries=len(self._store),
                bytes=self._bytes,
                max_entries=self._max_entries,
                max_bytes=self._max_bytes,
            )

    def reset_stats(self) -> None:
        with self._lock:
            self._hits = 0
            self._misses = 0

    def _evict(self) -> None:
        while self._store and (
            len(self._store) > self._max_entries or self._bytes > self._max_bytes
        ):
            key, (_, size) = self._store.popitem(last=False)
            self._bytes -= size
            _LOGGER.debug("Evicted %s (%d bytes)", key, size)


_GLOBAL_CACHE: SignatureCache[Any] | None = None
_GLOBAL_LOCK = threading.Lock()


def get_signature_cache() -> SignatureCache[Any]:
    """Return the process-wide cache, creating it with default limits."""
    global _GLOBAL_CACHE
    with _GLOBAL_LOCK:
        if _GLOBAL_CACHE is None:
            _GLOBAL_CACHE = SignatureCache.from_config(CacheConfig())
        return _GLOBAL_CACHE


def init_signature_cache(config: CacheConfig | None = None) -> SignatureCache[Any]:
    """Replace the process-wide cache with a fresh one built from ``config``."""
    global _GLOBAL_CACHE
    with _GLOBAL_LOCK:
        _GLOBAL_CACHE = SignatureCache.from_config(config or CacheConfig())
        return _GLOBAL_CACHE


def clear_signature_cache() -> None:
    """Empty the process-wide cache; a no-op before it exists."""
    with _GLOBAL_LOCK:
        cache = _GLOBAL_CACHE
    if cache is not None:
        cache.clear()
