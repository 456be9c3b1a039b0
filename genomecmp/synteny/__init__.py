"""Gene-order comparison: synteny blocks and structural-variant calls."""

from .alignment import align_synteny
from .chaining import GeneMatch, chain_matches, chain_synteny_blocks, find_candidate_matches, greedy_one_to_one
from .genes import GeneTokens, gene_distance, gene_similarity, token_distance, tokenize_gene
from .types import (
    IndexRange,
    StructuralVariantCall,
    StructuralVariantReport,
    SyntenyAnalysis,
    SyntenyBlock,
    VariantType,
)
from .variants import analyze_structural_variants

__all__ = [
    "GeneMatch",
    "GeneTokens",
    "IndexRange",
    "StructuralVariantCall",
    "StructuralVariantReport",
    "SyntenyAnalysis",
    "SyntenyBlock",
    "VariantType",
    "align_synteny",
    "analyze_structural_variants",
    "chain_matches",
    "chain_synteny_blocks",
    "find_candidate_matches",
    "gene_distance",
    "gene_similarity",
    "greedy_one_to_one",
    "token_distance",
    "tokenize_gene",
]
