"""Greedy anchor matching and block chaining.

Every gene pair above ``min_score`` is a candidate; candidates are accepted
best-first while both genes are still unused, then chained in A order into
monotone forward or reverse blocks.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence as SeqType
from dataclasses import dataclass
from typing import NamedTuple

from genomecmp.synteny.genes import GeneLike, GeneTokens, coerce_genes, token_distance, tokenize_gene
from genomecmp.synteny.types import Orientation, SyntenyBlock, clamp01
from genomecmp.utils.config import SyntenyOptions


class GeneMatch(NamedTuple):
    idx_a: int
    idx_b: int
    score: float


def find_candidate_matches(
    tokens_a: SeqType[GeneTokens],
    tokens_b: SeqType[GeneTokens],
    min_score: float = 0.2,
) -> list[GeneMatch]:
    """All pairs with similarity >= ``min_score``; quadratic in gene count."""
    candidates: list[GeneMatch] = []
    for idx_a, token_a in enumerate(tokens_a):
        if not token_a.text:
            continue
        for idx_b, token_b in enumerate(tokens_b):
            score = 1.0 - token_distance(token_a, token_b)
            if score >= min_score:
                candidates.append(GeneMatch(idx_a, idx_b, score))
    return candidates


def greedy_one_to_one(candidates: Iterable[GeneMatch]) -> list[GeneMatch]:
    """Accept candidates by descending score while neither gene is used.

    Ties keep candidate order. The result is sorted by A index.
    """
    used_a: set[int] = set()
    used_b: set[int] = set()
    accepted: list[GeneMatch] = []
    for match in sorted(candidates, key=lambda m: -m.score):
        if match.idx_a in used_a or match.idx_b in used_b:
            continue
        used_a.add(match.idx_a)
        used_b.add(match.idx_b)
        accepted.append(match)
    accepted.sort(key=lambda m: m.idx_a)
    return accepted


@dataclass(slots=True)
class _OpenBlock:
    start_idx_a: int
    end_idx_a: int
    start_idx_b: int
    end_idx_b: int
    score_sum: float
    count: int = 1
    orientation: Orientation | None = None

    @classmethod
    def seed(cls, match: GeneMatch) -> _OpenBlock:
        return cls(match.idx_a, match.idx_a, match.idx_b, match.idx_b, match.score)

    def close(self) -> SyntenyBlock:
        return SyntenyBlock(
            start_idx_a=self.start_idx_a,
            end_idx_a=self.end_idx_a,
            start_idx_b=self.start_idx_b,
            end_idx_b=self.end_idx_b,
            score=clamp01(self.score_sum / self.count),
            orientation=self.orientation or "forward",
        )


def chain_matches(matches: Iterable[GeneMatch], options: SyntenyOptions | None = None) -> list[SyntenyBlock]:
    """Chain A-sorted matches into synteny blocks.

    A match extends the open block when A strictly advances by at most
    ``max_step_a``, B moves by a nonzero step of at most ``max_step_b``, and
    the B direction agrees with the block orientation (set by the first
    extension). Blocks with fewer than ``min_block_matches`` members are
    discarded. An unextended block has no orientation; with
    ``min_block_matches`` of 1 it is still kept and reported as ``forward``
    rather than dropped for lacking a direction.
    """
    opts = options or SyntenyOptions()
    blocks: list[SyntenyBlock] = []
    current: _OpenBlock | None = None

    def flush(block: _OpenBlock | None) -> None:
        if block is None or block.count < opts.min_block_matches:
            return
        blocks.append(block.close())

    for match in matches:
        if current is None:
            current = _OpenBlock.seed(match)
            continue

        delta_a = match.idx_a - current.end_idx_a
        delta_b = match.idx_b - current.end_idx_b
        if delta_a <= 0:
            continue

        step_a_ok = delta_a <= opts.max_step_a
        step_b_ok = delta_b != 0 and abs(delta_b) <= opts.max_step_b
        direction: Orientation = "forward" if delta_b > 0 else "reverse"
        expected = current.orientation or direction

        if step_a_ok and step_b_ok and expected == direction:
            current.end_idx_a = match.idx_a
            current.end_idx_b = match.idx_b
            current.score_sum += match.score
            current.count += 1
            current.orientation = expected
            continue

        flush(current)
        current = _OpenBlock.seed(match)

    flush(current)
    blocks.sort(key=lambda block: block.start_idx_a)
    return blocks


def chain_synteny_blocks(
    genes_a: Iterable[GeneLike],
    genes_b: Iterable[GeneLike],
    options: SyntenyOptions | None = None,
) -> list[SyntenyBlock]:
    """Candidate generation, one-to-one matching and chaining in one call."""
    opts = options or SyntenyOptions()
    tokens_a = [tokenize_gene(gene) for gene in coerce_genes(genes_a)]
    tokens_b = [tokenize_gene(gene) for gene in coerce_genes(genes_b)]
    matches = greedy_one_to_one(find_candidate_matches(tokens_a, tokens_b, opts.min_score))
    return chain_matches(matches, opts)
