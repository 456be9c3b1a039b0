"""Tests for DTW synteny alignment."""

import math

import pytest

from genomecmp.synteny import align_synteny


def test_identical_gene_orders(make_gene):
    genes = [make_gene(name, i * 100, i * 100 + 90) for i, name in enumerate(["alpha", "bravo", "charlie"])]
    result = align_synteny(genes, list(genes))
    assert len(result.blocks) == 1
    block = result.blocks[0]
    assert (block.start_idx_a, block.end_idx_a, block.start_idx_b, block.end_idx_b) == (0, 2, 0, 2)
    assert block.score == pytest.approx(1.0)
    assert block.orientation == "forward"
    assert result.global_score == pytest.approx(1.0)
    assert result.breakpoints == ()
    assert result.dtw_distance == 0.0


def test_short_identifiers_do_not_match(make_gene):
    result = align_synteny([make_gene("gp3", 0, 100)], [make_gene("gp34", 0, 100)])
    assert result.blocks == ()
    assert result.global_score == 0.0


def test_shared_token_forms_half_scored_block():
    genes_a = [{"product": "terminase large subunit", "startPos": 0, "endPos": 100}]
    genes_b = [{"product": "terminase small subunit", "startPos": 0, "endPos": 100}]
    result = align_synteny(genes_a, genes_b)
    assert len(result.blocks) == 1
    assert result.blocks[0].score == pytest.approx(0.5)


def test_unrelated_gene_splits_blocks(make_gene):
    names_a = ["portal", "capsid", "integrase", "tailfiber", "endolysin"]
    names_b = ["portal", "capsid", "holin", "tailfiber", "endolysin"]
    genes_a = [make_gene(name, i * 100, i * 100 + 90) for i, name in enumerate(names_a)]
    genes_b = [make_gene(name, i * 100, i * 100 + 90) for i, name in enumerate(names_b)]
    result = align_synteny(genes_a, genes_b)
    spans = [(b.start_idx_a, b.end_idx_a) for b in result.blocks]
    assert spans == [(0, 1), (3, 4)]
    assert result.breakpoints == (3,)
    assert result.global_score == pytest.approx(0.8)
    assert result.dtw_distance == pytest.approx(1.0)


def test_empty_input(make_gene):
    result = align_synteny([], [make_gene("portal", 0, 10)])
    assert result.blocks == ()
    assert result.global_score == 0.0
    assert math.isinf(result.dtw_distance)


def test_to_dict(phage_genes):
    data = align_synteny(phage_genes, phage_genes).to_dict()
    assert data["blocks"][0]["orientation"] == "forward"
    assert data["global_score"] == pytest.approx(1.0)


def test_unrelated_middle_gene_leaves_two_singletons(make_gene):
    genes_a = [make_gene(n, i * 100, i * 100 + 90) for i, n in enumerate(["alpha", "bravo", "charlie"])]
    genes_b = [make_gene(n, i * 100, i * 100 + 90) for i, n in enumerate(["alpha", "xray", "charlie"])]
    result = align_synteny(genes_a, genes_b)
    assert [(b.start_idx_a, b.end_idx_a) for b in result.blocks] == [(0, 0), (2, 2)]
    assert [b.score for b in result.blocks] == [1.0, 1.0]


def test_contained_product_scores_by_shared_token():
    result = align_synteny(
        [{"product": "terminase large subunit"}],
        [{"product": "terminase"}],
    )
    assert len(result.blocks) == 1
    assert result.blocks[0].score == pytest.approx(0.5)
