"""Structural-variant calling from chained synteny blocks."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence as SeqType

from genomecmp.core.genes import GeneAnnotation
from genomecmp.synteny.chaining import chain_synteny_blocks
from genomecmp.synteny.genes import GeneLike, coerce_genes
from genomecmp.synteny.types import (
    IndexRange,
    StructuralVariantCall,
    StructuralVariantReport,
    SyntenyBlock,
    VariantType,
    clamp01,
    empty_counts,
)
from genomecmp.utils.config import StructuralVariantOptions, SyntenyOptions

_LOGGER = logging.getLogger(__name__)

INDEL_ASYMMETRY = 0.3
DUPLICATION_ASYMMETRY = 0.25
MAX_AFFECTED_GENES = 8


def gene_range(genes: SeqType[GeneAnnotation], start_idx: int, end_idx: int) -> tuple[int, int]:
    """Genomic extent covered by genes ``start_idx..end_idx`` in either order."""
    lo, hi = min(start_idx, end_idx), max(start_idx, end_idx)
    start = genes[lo].start_pos
    end = genes[hi].end_pos
    return min(start, end), max(start, end)


def collect_gene_labels(genes: Iterable[GeneAnnotation], start: int, end: int) -> tuple[str, ...]:
    lo, hi = min(start, end), max(start, end)
    labels = [gene.label for gene in genes if gene.start_pos <= hi and gene.end_pos >= lo]
    return tuple(labels[:MAX_AFFECTED_GENES])


def _make_call(
    variant: VariantType,
    genes_a: SeqType[GeneAnnotation],
    genes_b: SeqType[GeneAnnotation],
    *,
    anchor_a: IndexRange,
    anchor_b: IndexRange,
    span_a: tuple[int, int],
    span_b: tuple[int, int],
    size_a: int,
    size_b: int,
    confidence: float,
    evidence: Iterable[str],
) -> StructuralVariantCall:
    start_a, end_a = min(span_a), max(span_a)
    start_b, end_b = min(span_b), max(span_b)
    return StructuralVariantCall(
        id=f"{variant.value}-{start_a}-{start_b}-{abs(size_a - size_b)}",
        type=variant,
        start_a=start_a,
        end_a=end_a,
        start_b=start_b,
        end_b=end_b,
        size_a=size_a,
        size_b=size_b,
        confidence=confidence,
        anchor_a=anchor_a,
        anchor_b=anchor_b,
        evidence=tuple(evidence),
        affected_genes_a=collect_gene_labels(genes_a, start_a, end_a),
        affected_genes_b=collect_gene_labels(genes_b, start_b, end_b),
    )


def _inversion_calls(
    blocks: Iterable[SyntenyBlock],
    genes_a: SeqType[GeneAnnotation],
    genes_b: SeqType[GeneAnnotation],
    opts: StructuralVariantOptions,
) -> list[StructuralVariantCall]:
    calls = []
    for block in blocks:
        if block.orientation != "reverse":
            continue
        if min(block.span_a, block.span_b) < opts.inversion_min_flip:
            continue
        span_a = gene_range(genes_a, block.start_idx_a, block.end_idx_a)
        span_b = gene_range(genes_b, block.start_idx_b, block.end_idx_b)
        size_a = max(0, span_a[1] - span_a[0])
        size_b = max(0, span_b[1] - span_b[0])
        size_similarity = 1 - abs(size_a - size_b) / max(size_a, size_b, 1)
        calls.append(
            _make_call(
                VariantType.INVERSION,
                genes_a,
                genes_b,
                anchor_a=IndexRange(block.start_idx_a, block.end_idx_a),
                anchor_b=IndexRange(block.start_idx_b, block.end_idx_b),
                span_a=span_a,
                span_b=span_b,
                size_a=size_a,
                size_b=size_b,
                confidence=clamp01(0.3 + 0.35 * block.score + 0.35 * size_similarity),
                evidence=("reverse-oriented gene block", f"score={block.score:.2f}"),
            )
        )
    return calls


def _duplication_confidence(avg_gap: float, min_gap_bp: int) -> float:
    # a zero gap threshold makes the ratio unbounded; such calls score 0
    if min_gap_bp <= 0:
        return 0.0
    return clamp01(0.3 + avg_gap / (min_gap_bp * 2))


def _boundary_call(
    current: SyntenyBlock,
    following: SyntenyBlock,
    genes_a: SeqType[GeneAnnotation],
    genes_b: SeqType[GeneAnnotation],
    opts: StructuralVariantOptions,
) -> StructuralVariantCall | None:
    """Classify the gap between two consecutive forward blocks.

    Checks run in order (indel, translocation, duplication) and the first
    hit wins.
    """
    curr_start_a, curr_end_a = gene_range(genes_a, current.start_idx_a, current.end_idx_a)
    curr_start_b, curr_end_b = gene_range(genes_b, current.start_idx_b, current.end_idx_b)
    next_start_a, _ = gene_range(genes_a, following.start_idx_a, following.end_idx_a)
    next_start_b, _ = gene_range(genes_b, following.start_idx_b, following.end_idx_b)

    gap_a = max(0, next_start_a - curr_end_a)
    gap_b = max(0, next_start_b - curr_end_b)
    avg_gap = (gap_a + gap_b) / 2
    span_a = (curr_end_a, next_start_a)
    span_b = (curr_end_b, next_start_b)
    anchors = {
        "anchor_a": IndexRange(current.end_idx_a, following.start_idx_a),
        "anchor_b": IndexRange(current.end_idx_b, following.start_idx_b),
        "span_a": span_a,
        "span_b": span_b,
    }

    if gap_a > opts.min_gap_bp or gap_b > opts.min_gap_bp:
        larger = max(gap_a, gap_b)
        rel = abs(gap_a - gap_b) / larger if larger else 0.0
        if rel > INDEL_ASYMMETRY:
            missing_in_b = gap_a > gap_b
            return _make_call(
                VariantType.DELETION if missing_in_b else VariantType.INSERTION,
                genes_a,
                genes_b,
                size_a=gap_a,
                size_b=gap_b,
                confidence=clamp01(0.5 + 0.5 * rel),
                evidence=(
                    f"gapA={gap_a}",
                    f"gapB={gap_b}",
                    "missing sequence in genome B" if missing_in_b else "extra sequence in genome B",
                ),
                **anchors,
            )

    distance_diff = abs(abs(next_start_a - curr_start_a) - abs(next_start_b - curr_start_b))
    if distance_diff > opts.translocation_distance and avg_gap > opts.min_gap_bp:
        return _make_call(
            VariantType.TRANSLOCATION,
            genes_a,
            genes_b,
            size_a=abs(span_a[1] - span_a[0]),
            size_b=abs(span_b[1] - span_b[0]),
            confidence=clamp01(0.4 + min(distance_diff / 10000, 0.6)),
            evidence=("anchor spacing mismatch", f"|delta|={distance_diff}"),
            **anchors,
        )

    if (
        avg_gap > 0
        and abs(gap_a - gap_b) / max(avg_gap, 1) < DUPLICATION_ASYMMETRY
        and avg_gap > opts.min_gap_bp / 2
    ):
        return _make_call(
            VariantType.DUPLICATION,
            genes_a,
            genes_b,
            size_a=gap_a,
            size_b=gap_b,
            confidence=_duplication_confidence(avg_gap, opts.min_gap_bp),
            evidence=("similar gap sizes, possible tandem duplication",),
            **anchors,
        )
    return None


def analyze_structural_variants(
    genes_a: Iterable[GeneLike],
    genes_b: Iterable[GeneLike],
    options: StructuralVariantOptions | None = None,
    synteny_options: SyntenyOptions | None = None,
) -> StructuralVariantReport:
    """Call structural variants between two annotated genomes.

    Parameters
    ----------
    genes_a, genes_b : iterable of GeneAnnotation or mappings
        Gene annotations in genome order.
    options : StructuralVariantOptions, optional
        Gap, confidence and inversion thresholds.
    synteny_options : SyntenyOptions, optional
        Block chaining parameters.

    Returns
    -------
    StructuralVariantReport
        Inversions first, then at most one gap call per forward/forward block
        boundary. Calls below ``min_confidence`` are dropped. Genomes with
        fewer than two genes give an empty report.
    """
    opts = options or StructuralVariantOptions()
    genes_a = coerce_genes(genes_a)
    genes_b = coerce_genes(genes_b)
    if len(genes_a) < 2 or len(genes_b) < 2:
        return StructuralVariantReport()

    blocks = chain_synteny_blocks(genes_a, genes_b, synteny_options)
    if not blocks:
        return StructuralVariantReport(anchors_used=0)

    calls = _inversion_calls(blocks, genes_a, genes_b, opts)
    for current, following in zip(blocks, blocks[1:]):
        # gap calls assume a monotone mapping on both sides
        if current.orientation != "forward" or following.orientation != "forward":
            continue
        call = _boundary_call(current, following, genes_a, genes_b, opts)
        if call is not None:
            calls.append(call)

    kept = [call for call in calls if call.confidence >= opts.min_confidence]
    counts = empty_counts()
    counts.update(Counter(call.type.value for call in kept))
    _LOGGER.debug(
        "Structural variants: %d blocks, %d calls (%d below confidence)",
        len(blocks),
        len(kept),
        len(calls) - len(kept),
    )
    return StructuralVariantReport(calls=tuple(kept), counts=counts, anchors_used=len(blocks))
