"""End-to-end tests for the genomecmp CLI."""

import json

import pytest

from genomecmp.cli import build_parser, main


@pytest.fixture
def fasta_pair(tmp_path, random_dna):
    pytest.importorskip("Bio")
    seq = random_dna(400)
    first = tmp_path / "a.fa"
    second = tmp_path / "b.fa"
    first.write_text(f">a\n{seq}\n")
    second.write_text(f">b\n{seq[:200]}T{seq[201:]}\n")
    return str(first), str(second)


@pytest.fixture
def gene_pair(tmp_path, phage_genes):
    first = tmp_path / "a.json"
    second = tmp_path / "b.json"
    first.write_text(json.dumps([g.to_dict() for g in phage_genes]))
    second.write_text(json.dumps([g.to_dict() for g in phage_genes]))
    return str(first), str(second)


def _run(capsys, argv):
    assert main(argv) == 0
    return json.loads(capsys.readouterr().out)


def test_parser_lists_subcommands():
    help_text = build_parser().format_help()
    for command in ("kmers", "minhash", "edit", "sv", "synteny"):
        assert command in help_text


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out


def test_kmers(capsys, fasta_pair):
    result = _run(capsys, ["kmers", *fasta_pair, "--k", "3", "5"])
    assert [row["k"] for row in result] == [3, 5]


def test_minhash(capsys, fasta_pair):
    result = _run(capsys, ["minhash", *fasta_pair, "--k", "12", "--num-hashes", "64"])
    assert result["num_hashes"] == 64
    assert 0.5 < result["jaccard_estimate"] <= 1.0


def test_edit(capsys, fasta_pair):
    result = _run(capsys, ["edit", *fasta_pair])
    assert result["levenshtein_distance"] <= 1
    assert result["is_approximate"] is False


def test_edit_with_config(capsys, fasta_pair, tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"edit_distance": {"max_exact_length": 100, "window_size": 50}}))
    result = _run(capsys, ["edit", *fasta_pair, "--config", str(config)])
    assert result["is_approximate"] is True
    assert result["window_size"] == 50


def test_sv(capsys, gene_pair):
    result = _run(capsys, ["sv", *gene_pair])
    assert result["anchors_used"] == 1
    assert result["calls"] == []


def test_synteny(capsys, gene_pair):
    result = _run(capsys, ["synteny", *gene_pair])
    assert result["global_score"] == pytest.approx(1.0)


def test_missing_config(fasta_pair, tmp_path):
    with pytest.raises(FileNotFoundError):
        main(["edit", *fasta_pair, "--config", str(tmp_path / "nope.yaml")])


def test_loader_logs_go_to_stderr(capsys, gene_pair):
    assert main(["synteny", *gene_pair]) == 0
    captured = capsys.readouterr()
    assert "Loaded 5 gene annotations" in captured.err
    assert "Loaded" not in captured.out


def test_log_level_silences_info(capsys, gene_pair):
    assert main(["--log-level", "WARNING", "synteny", *gene_pair]) == 0
    assert "Loaded" not in capsys.readouterr().err
