"""MinHash sketches for Jaccard estimation on large sequences.

Every (canonical) k-mer gets a 32-bit FNV-1a base hash. ``num_hashes``
independent hash functions are derived by XOR-ing the base hash with a
deterministic seed and multiplying by the FNV prime (mod 2**32); each signature
slot keeps the minimum value seen. Seeds come from a fixed linear congruential
generator, so the same sequence, ``k`` and ``num_hashes`` always produce the
same signature.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from genomecmp.kmers.counting import iter_kmers
from genomecmp.utils.validation import SequenceLike, as_tokens

if TYPE_CHECKING:  # pragma: no cover
    from genomecmp.cache.signature_cache import SignatureCache

_LOGGER = logging.getLogger(__name__)

_MASK32 = 0xFFFFFFFF
_FNV_OFFSET = 0x811C9DC5
_FNV_PRIME = 0x01000193
_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223
_LCG_STATE = 0xDEADBEEF

EMPTY_SLOT = 0xFFFFFFFF
DEFAULT_NUM_HASHES = 128

# rows of base hashes mixed per step; bounds the (rows x num_hashes) scratch matrix
_CHUNK_ROWS = 4096


@functools.lru_cache(maxsize=None)
def deterministic_seeds(count: int) -> np.ndarray:
    """Return ``count`` LCG seeds (read-only, memoized per count)."""
    seeds = np.empty(count, dtype=np.uint32)
    state = _LCG_STATE
    for i in range(count):
        state = (state * _LCG_MULTIPLIER + _LCG_INCREMENT) & _MASK32
        seeds[i] = state
    seeds.setflags(write=False)
    return seeds


def fnv1a_32(text: str) -> int:
    h = _FNV_OFFSET
    for char in text:
        h = ((h ^ ord(char)) * _FNV_PRIME) & _MASK32
    return h


@dataclass(frozen=True, slots=True, eq=False)
class MinHashSignature:
    """Fixed-length MinHash sketch plus the parameters that produced it."""

    values: np.ndarray
    k: int
    num_hashes: int
    canonical: bool = True
    total_kmers_seen: int = 0

    @property
    def nbytes(self) -> int:
        return int(self.values.nbytes)

    @property
    def is_empty(self) -> bool:
        """True when no k-mer contributed to the sketch."""
        return self.num_hashes == 0 or self.total_kmers_seen == 0

    def __len__(self) -> int:
        return self.num_hashes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MinHashSignature):
            return NotImplemented
        return (
            self.k == other.k
            and self.num_hashes == other.num_hashes
            and self.canonical == other.canonical
            and self.total_kmers_seen == other.total_kmers_seen
            and np.array_equal(self.values, other.values)
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "values": self.values.tolist(),
            "k": self.k,
            "num_hashes": self.num_hashes,
            "canonical": self.canonical,
            "total_kmers_seen": self.total_kmers_seen,
        }


def minhash_signature(
    sequence: SequenceLike,
    k: int,
    num_hashes: int = DEFAULT_NUM_HASHES,
    canonical: bool = True,
) -> MinHashSignature:
    """Build the MinHash signature of ``sequence``.

    Slots that never saw a k-mer hold ``EMPTY_SLOT``. Invalid ``k`` or
    ``num_hashes`` produce an empty signature rather than an error.
    """
    num_hashes = max(0, int(num_hashes))
    signature = np.full(num_hashes, EMPTY_SLOT, dtype=np.uint32)

    seen = 0
    distinct: set[str] = set()
    for kmer in iter_kmers(sequence, k, canonical):
        seen += 1
        distinct.add(kmer)

    if num_hashes and distinct:
        seeds = deterministic_seeds(num_hashes)
        prime = np.uint32(_FNV_PRIME)
        # duplicates cannot lower a minimum, so hashing distinct k-mers suffices
        bases = np.fromiter((fnv1a_32(kmer) for kmer in sorted(distinct)), dtype=np.uint32, count=len(distinct))
        for start in range(0, len(bases), _CHUNK_ROWS):
            block = bases[start : start + _CHUNK_ROWS, None] ^ seeds[None, :]
            mixed = np.multiply(block, prime, dtype=np.uint32)
            np.minimum(signature, mixed.min(axis=0), out=signature)

    signature.setflags(write=False)
    return MinHashSignature(
        values=signature,
        k=k,
        num_hashes=num_hashes,
        canonical=canonical,
        total_kmers_seen=seen,
    )


def _signature_values(signature: MinHashSignature | np.ndarray | Any) -> np.ndarray:
    if isinstance(signature, MinHashSignature):
        return signature.values
    return np.asarray(signature, dtype=np.uint32)


def minhash_jaccard_from_signatures(
    signature_a: MinHashSignature | np.ndarray | None,
    signature_b: MinHashSignature | np.ndarray | None,
) -> float:
    """Fraction of matching slots between two precomputed signatures.

    Mismatched lengths and zero-length signatures yield 0.0. Signatures that
    saw no k-mers also yield 0.0, even when both are empty; this differs from
    ``jaccard_index``, which scores two empty k-mer sets as 1.0.
    """
    if signature_a is None or signature_b is None:
        return 0.0
    values_a = _signature_values(signature_a)
    values_b = _signature_values(signature_b)
    if values_a.size == 0 or values_a.shape != values_b.shape:
        return 0.0
    if np.all(values_a == EMPTY_SLOT) or np.all(values_b == EMPTY_SLOT):
        return 0.0
    return float(np.count_nonzero(values_a == values_b)) / values_a.size


def cached_minhash_signature(
    sequence: SequenceLike,
    k: int,
    num_hashes: int = DEFAULT_NUM_HASHES,
    canonical: bool = True,
    *,
    cache: SignatureCache[MinHashSignature],
    seq_id: str | None = None,
) -> MinHashSignature | None:
    """Signature lookup through ``cache``; keyed by ``seq_id`` when given, else by content."""
    tokens = as_tokens(sequence)
    return cache.get_or_compute(
        tokens,
        k,
        num_hashes,
        canonical,
        lambda: minhash_signature(tokens, k, num_hashes, canonical),
        seq_id=seq_id,
    )


def minhash_jaccard(
    sequence_a: SequenceLike,
    sequence_b: SequenceLike,
    k: int,
    num_hashes: int = DEFAULT_NUM_HASHES,
    canonical: bool = True,
    *,
    cache: SignatureCache[MinHashSignature] | None = None,
) -> float:
    """Estimate the k-mer Jaccard index of two sequences from MinHash sketches."""
    if num_hashes < 1:
        return 0.0
    if cache is None:
        sig_a = minhash_signature(sequence_a, k, num_hashes, canonical)
        sig_b = minhash_signature(sequence_b, k, num_hashes, canonical)
    else:
        sig_a = cached_minhash_signature(sequence_a, k, num_hashes, canonical, cache=cache)
        sig_b = cached_minhash_signature(sequence_b, k, num_hashes, canonical, cache=cache)
        _LOGGER.debug("Signature cache after lookup: %s", cache.get_stats())
    return minhash_jaccard_from_signatures(sig_a, sig_b)
