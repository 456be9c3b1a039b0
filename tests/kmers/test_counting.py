from genomecmp.core.sequence import Sequence
from genomecmp.kmers import (
    canonical_kmer,
    canonical_kmer_frequencies,
    canonical_kmer_set,
    iter_kmers,
    kmer_frequencies,
    kmer_set,
    reverse_complement,
)


def test_reverse_complement():
    assert reverse_complement("AACG") == "CGTT"


def test_canonical_kmer_picks_lexicographic_minimum():
    assert canonical_kmer("TTT") == "AAA"
    assert canonical_kmer("AAA") == "AAA"
    assert canonical_kmer("ACGT") == "ACGT"


def test_kmer_set_skips_ambiguous_windows():
    assert kmer_set("ACGTN", 2) == {"AC", "CG", "GT"}
    assert kmer_set("ANA", 1) == {"A"}
    assert kmer_set("RYKM", 1) == set()


def test_kmer_set_is_case_insensitive():
    assert kmer_set("acgt", 2) == kmer_set("ACGT", 2)


def test_kmer_frequencies_counts_overlapping_windows():
    assert kmer_frequencies("AAAA", 2) == {"AA": 3}


def test_invalid_k_and_short_input_give_empty_results():
    assert kmer_set("ACGT", 0) == set()
    assert kmer_set("ACGT", -1) == set()
    assert kmer_set("AC", 3) == set()
    assert list(iter_kmers("", 1)) == []
    assert kmer_frequencies(None, 2) == {}


def test_canonical_counts_are_strand_independent():
    seq = "ACGGTTACA"
    assert canonical_kmer_set(seq, 3) == canonical_kmer_set(reverse_complement(seq), 3)
    assert canonical_kmer_frequencies(seq, 3) == canonical_kmer_frequencies(reverse_complement(seq), 3)


def test_accepts_sequence_records():
    seq = Sequence(id="s", tokens="ACGT")
    assert kmer_set(seq, 3) == {"ACG", "CGT"}
