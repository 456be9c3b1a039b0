"""Text heuristics for deciding whether two annotated genes correspond."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from genomecmp.core.genes import GeneAnnotation

GeneLike = Union[GeneAnnotation, Mapping[str, Any]]

_TOKEN_SPLIT = re.compile(r"[\s-]+")
# tokens this short ("gp3", "int") match far too many unrelated genes
MIN_TOKEN_LENGTH = 4

EQUAL_DISTANCE = 0.0
SUBSTRING_DISTANCE = 0.2
SHARED_TOKEN_DISTANCE = 0.5
UNRELATED_DISTANCE = 1.0


@dataclass(frozen=True, slots=True)
class GeneTokens:
    text: str
    terms: frozenset[str]


def coerce_genes(genes: Iterable[GeneLike] | None) -> list[GeneAnnotation]:
    """Accept annotations or loose mappings; returns a new list."""
    return [
        gene if isinstance(gene, GeneAnnotation) else GeneAnnotation.from_mapping(gene)
        for gene in genes or ()
    ]


def tokenize_gene(gene: GeneAnnotation) -> GeneTokens:
    text = (gene.product or gene.name or "").lower()
    terms = frozenset(term for term in _TOKEN_SPLIT.split(text) if len(term) >= MIN_TOKEN_LENGTH)
    return GeneTokens(text=text, terms=terms)


def token_distance(first: GeneTokens, second: GeneTokens, *, substring_rule: bool = True) -> float:
    """Text distance between two tokenized genes.

    Tiers, first match wins: empty text 1.0, equal text 0.0, substring 0.2
    (only with ``substring_rule``), any shared token 0.5, otherwise 1.0.
    """
    if not first.text or not second.text:
        return UNRELATED_DISTANCE
    if first.text == second.text:
        return EQUAL_DISTANCE
    if substring_rule and (first.text in second.text or second.text in first.text):
        return SUBSTRING_DISTANCE
    if first.terms & second.terms:
        return SHARED_TOKEN_DISTANCE
    return UNRELATED_DISTANCE


def gene_distance(gene_a: GeneLike, gene_b: GeneLike, *, substring_rule: bool = True) -> float:
    first, second = coerce_genes((gene_a, gene_b))
    return token_distance(tokenize_gene(first), tokenize_gene(second), substring_rule=substring_rule)


def gene_similarity(gene_a: GeneLike, gene_b: GeneLike, *, substring_rule: bool = True) -> float:
    return 1.0 - gene_distance(gene_a, gene_b, substring_rule=substring_rule)
