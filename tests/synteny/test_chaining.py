import pytest

from genomecmp.synteny import (
    GeneMatch,
    chain_synteny_blocks,
    find_candidate_matches,
    greedy_one_to_one,
    tokenize_gene,
)
from genomecmp.utils.config import SyntenyOptions


def _span(block):
    return (block.start_idx_a, block.end_idx_a, block.start_idx_b, block.end_idx_b)


class TestMatching:
    def test_candidates_respect_threshold(self, make_gene):
        genes_a = [make_gene("terminase large", 0, 10), make_gene("portal", 10, 20)]
        genes_b = [make_gene("terminase small", 0, 10), make_gene("capsid", 10, 20)]
        tokens_a = [tokenize_gene(g) for g in genes_a]
        tokens_b = [tokenize_gene(g) for g in genes_b]
        assert find_candidate_matches(tokens_a, tokens_b) == [GeneMatch(0, 0, 0.5)]
        assert find_candidate_matches(tokens_a, tokens_b, min_score=0.6) == []

    def test_greedy_prefers_best_score(self):
        candidates = [GeneMatch(0, 0, 0.5), GeneMatch(0, 1, 1.0), GeneMatch(1, 1, 0.8), GeneMatch(1, 0, 0.5)]
        assert greedy_one_to_one(candidates) == [GeneMatch(0, 1, 1.0), GeneMatch(1, 0, 0.5)]

    def test_greedy_ties_keep_input_order(self):
        candidates = [GeneMatch(0, 0, 1.0), GeneMatch(1, 0, 1.0)]
        assert greedy_one_to_one(candidates) == [GeneMatch(0, 0, 1.0)]


class TestChaining:
    def test_collinear_genes_form_one_forward_block(self, phage_genes):
        blocks = chain_synteny_blocks(phage_genes, phage_genes)
        assert len(blocks) == 1
        assert _span(blocks[0]) == (0, 4, 0, 4)
        assert blocks[0].orientation == "forward"
        assert blocks[0].score == pytest.approx(1.0)

    def test_reversed_order_forms_reverse_block(self, phage_genes):
        blocks = chain_synteny_blocks(phage_genes, list(reversed(phage_genes)))
        assert len(blocks) == 1
        assert _span(blocks[0]) == (0, 4, 4, 0)
        assert blocks[0].orientation == "reverse"
        assert blocks[0].span_b == 4

    def test_large_step_in_b_splits_blocks(self, make_gene):
        names_a = ["alpha", "bravo", "charlie", "delta"]
        names_b = ["alpha", "bravo", "xray", "yankee", "zulu", "whiskey", "charlie", "delta"]
        genes_a = [make_gene(n, i * 10, i * 10 + 5) for i, n in enumerate(names_a)]
        genes_b = [make_gene(n, i * 10, i * 10 + 5) for i, n in enumerate(names_b)]
        blocks = chain_synteny_blocks(genes_a, genes_b)
        assert [_span(b) for b in blocks] == [(0, 1, 0, 1), (2, 3, 6, 7)]

    def test_block_score_is_mean_of_members(self, make_gene):
        genes_a = [make_gene("portal protein", 0, 10), make_gene("major capsid", 10, 20)]
        genes_b = [make_gene("portal protein", 0, 10), make_gene("minor capsid", 10, 20)]
        blocks = chain_synteny_blocks(genes_a, genes_b)
        assert blocks[0].score == pytest.approx(0.75)

    def test_singletons_need_min_block_matches_of_one(self, make_gene):
        genes_a = [make_gene("portal", 0, 10), make_gene("capsid", 10, 20)]
        genes_b = [make_gene("portal", 0, 10), make_gene("holin", 10, 20)]
        assert chain_synteny_blocks(genes_a, genes_b) == []
        blocks = chain_synteny_blocks(genes_a, genes_b, SyntenyOptions(min_block_matches=1))
        assert [_span(b) for b in blocks] == [(0, 0, 0, 0)]
        assert blocks[0].orientation == "forward"

    def test_empty_inputs(self):
        assert chain_synteny_blocks([], []) == []
