"""Tests for exact and windowed Levenshtein distance."""

import pytest

from genomecmp.core.sequence import Sequence
from genomecmp.distance import (
    approximate_levenshtein,
    exact_levenshtein,
    heuristic_operations,
    levenshtein_distance,
    levenshtein_with_operations,
)


class TestExactDistance:
    def test_kitten_sitting(self):
        result = levenshtein_distance("kitten", "sitting")
        assert result.distance == 3
        assert not result.is_approximate
        assert result.window_count is None

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ("", "", 0),
            ("", "ACGT", 4),
            ("ACGT", "", 4),
            ("ACGT", "ACGT", 0),
            ("flaw", "lawn", 2),
            ("GATTACA", "GCATGCU", 4),
        ],
    )
    def test_reference_values(self, a, b, expected):
        assert exact_levenshtein(a, b, use_accelerator=False) == expected

    def test_symmetric(self, random_dna):
        a, b = random_dna(120, seed=1), random_dna(90, seed=2)
        assert exact_levenshtein(a, b, use_accelerator=False) == exact_levenshtein(
            b, a, use_accelerator=False
        )

    def test_bounded_by_longer_length(self, random_dna):
        a, b = random_dna(50, seed=3), random_dna(80, seed=4)
        distance = exact_levenshtein(a, b, use_accelerator=False)
        assert abs(len(a) - len(b)) <= distance <= max(len(a), len(b))

    def test_accepts_sequence_records(self):
        assert exact_levenshtein(Sequence(id="a", tokens="kitten"), "sitting") == 3

    def test_max_length_none_forces_exact(self):
        a = "A" * 10_050
        b = "A" * 10_000
        result = levenshtein_distance(a, b, max_length=None)
        assert result.distance == 50
        assert not result.is_approximate


class TestApproximateDistance:
    def test_long_inputs_switch_to_windows(self, random_dna):
        seq = random_dna(12_000)
        result = levenshtein_distance(seq, seq)
        assert result.is_approximate
        assert result.distance == 0
        assert result.window_size == 1000
        assert result.window_count == 12

    def test_window_count_is_capped(self, random_dna):
        seq = random_dna(3000)
        result = approximate_levenshtein(seq, seq, window_size=100, num_windows=5)
        assert result.window_count == 5

    def test_length_difference_is_added(self, random_dna):
        seq = random_dna(3000)
        result = approximate_levenshtein(seq, seq + "A" * 40, window_size=500, num_windows=4)
        assert result.distance == 40
        assert result.is_approximate

    def test_falls_back_to_exact_when_no_window_fits(self):
        result = approximate_levenshtein("kitten", "sitting", window_size=1000)
        assert result.distance == 3
        assert result.is_approximate
        assert result.window_count == 1


class TestOperations:
    def test_kitten_sitting_breakdown(self):
        ops = levenshtein_with_operations("kitten", "sitting")
        assert ops.distance == 3
        assert (ops.substitutions, ops.insertions, ops.deletions) == (2, 1, 0)
        assert not ops.is_approximate

    def test_counts_sum_to_distance(self, random_dna):
        a, b = random_dna(200, seed=5), random_dna(180, seed=6)
        ops = levenshtein_with_operations(a, b)
        assert ops.insertions + ops.deletions + ops.substitutions == ops.distance
        assert ops.distance == exact_levenshtein(a, b, use_accelerator=False)

    def test_pure_deletion(self):
        ops = levenshtein_with_operations("ACGTT", "ACGT")
        assert (ops.distance, ops.deletions, ops.insertions, ops.substitutions) == (1, 1, 0, 0)

    def test_empty_operands(self):
        assert levenshtein_with_operations("", "").distance == 0
        assert levenshtein_with_operations("", "AC").insertions == 2
        assert levenshtein_with_operations("AC", "").deletions == 2

    def test_large_inputs_use_heuristic(self, random_dna):
        a = random_dna(600)
        ops = levenshtein_with_operations(a, a + "GG", max_length=500)
        assert ops.is_approximate
        assert ops.insertions == 2

    def test_heuristic_operations(self):
        ops = heuristic_operations(10, 100, 104)
        assert (ops.insertions, ops.deletions, ops.substitutions) == (4, 0, 6)
        assert ops.is_approximate
