"""Synteny and structural-variant result types."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

import pandas as pd

Orientation = Literal["forward", "reverse"]


class VariantType(str, Enum):
    """Structural variant classes, in reporting order."""

    DELETION = "deletion"
    INSERTION = "insertion"
    INVERSION = "inversion"
    DUPLICATION = "duplication"
    TRANSLOCATION = "translocation"


def clamp01(value: float) -> float:
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(1.0, value))


@dataclass(frozen=True, slots=True)
class SyntenyBlock:
    """Run of matched gene-index pairs between genome A and genome B.

    Indices are inclusive; for reverse blocks ``end_idx_b < start_idx_b``.
    """

    start_idx_a: int
    end_idx_a: int
    start_idx_b: int
    end_idx_b: int
    score: float
    orientation: Orientation = "forward"

    @property
    def span_a(self) -> int:
        return abs(self.end_idx_a - self.start_idx_a)

    @property
    def span_b(self) -> int:
        return abs(self.end_idx_b - self.start_idx_b)

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_idx_a": self.start_idx_a,
            "end_idx_a": self.end_idx_a,
            "start_idx_b": self.start_idx_b,
            "end_idx_b": self.end_idx_b,
            "score": self.score,
            "orientation": self.orientation,
        }


@dataclass(frozen=True, slots=True)
class SyntenyAnalysis:
    blocks: tuple[SyntenyBlock, ...]
    breakpoints: tuple[int, ...]  # A indices where a new block starts
    global_score: float
    dtw_distance: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "blocks": [block.to_dict() for block in self.blocks],
            "breakpoints": list(self.breakpoints),
            "global_score": self.global_score,
            "dtw_distance": self.dtw_distance,
        }


@dataclass(frozen=True, slots=True)
class IndexRange:
    start_idx: int
    end_idx: int


@dataclass(frozen=True, slots=True)
class StructuralVariantCall:
    """A classified discontinuity between two genomes.

    Coordinates are genomic positions taken from the anchoring gene
    annotations; anchors are gene indices.
    """

    id: str
    type: VariantType
    start_a: int
    end_a: int
    start_b: int
    end_b: int
    size_a: int
    size_b: int
    confidence: float
    anchor_a: IndexRange
    anchor_b: IndexRange
    evidence: tuple[str, ...] = ()
    affected_genes_a: tuple[str, ...] = ()
    affected_genes_b: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "start_a": self.start_a,
            "end_a": self.end_a,
            "start_b": self.start_b,
            "end_b": self.end_b,
            "size_a": self.size_a,
            "size_b": self.size_b,
            "confidence": self.confidence,
            "anchor_a": {"start_idx": self.anchor_a.start_idx, "end_idx": self.anchor_a.end_idx},
            "anchor_b": {"start_idx": self.anchor_b.start_idx, "end_idx": self.anchor_b.end_idx},
            "evidence": list(self.evidence),
            "affected_genes_a": list(self.affected_genes_a),
            "affected_genes_b": list(self.affected_genes_b),
        }


def empty_counts() -> dict[str, int]:
    return {variant.value: 0 for variant in VariantType}


@dataclass(frozen=True, slots=True)
class StructuralVariantReport:
    calls: tuple[StructuralVariantCall, ...] = ()
    counts: Mapping[str, int] = field(default_factory=empty_counts)
    anchors_used: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "calls": [call.to_dict() for call in self.calls],
            "counts": dict(self.counts),
            "anchors_used": self.anchors_used,
        }

    def to_frame(self) -> pd.DataFrame:
        """One row per call; anchors and gene lists flattened to scalar columns."""
        columns = [
            "id", "type", "start_a", "end_a", "start_b", "end_b", "size_a", "size_b",
            "confidence", "anchor_a_start", "anchor_a_end", "anchor_b_start", "anchor_b_end",
            "evidence", "affected_genes_a", "affected_genes_b",
        ]
        rows = [
            {
                "id": call.id,
                "type": call.type.value,
                "start_a": call.start_a,
                "end_a": call.end_a,
                "start_b": call.start_b,
                "end_b": call.end_b,
                "size_a": call.size_a,
                "size_b": call.size_b,
                "confidence": call.confidence,
                "anchor_a_start": call.anchor_a.start_idx,
                "anchor_a_end": call.anchor_a.end_idx,
                "anchor_b_start": call.anchor_b.start_idx,
                "anchor_b_end": call.anchor_b.end_idx,
                "evidence": "; ".join(call.evidence),
                "affected_genes_a": ", ".join(call.affected_genes_a),
                "affected_genes_b": ", ".join(call.affected_genes_b),
            }
            for call in self.calls
        ]
        return pd.DataFrame(rows, columns=columns)
