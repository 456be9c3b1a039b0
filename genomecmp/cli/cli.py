"""genomecmp command-line interface."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from genomecmp.cache import init_signature_cache
from genomecmp.core.sequence import Sequence
from genomecmp.distance import analyze_edit_distance
from genomecmp.io import read_fasta, read_gene_annotations
from genomecmp.kmers import minhash_jaccard, multi_resolution_kmer_analysis
from genomecmp.synteny import align_synteny, analyze_structural_variants
from genomecmp.utils.config import ComparisonConfig, load_config
from genomecmp.utils.logging import get_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Genome comparison CLI")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Threshold for genomecmp log records on stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    kmers_parser = subparsers.add_parser("kmers", help="Multi-resolution k-mer similarity")
    _add_pair(kmers_parser, "FASTA")
    kmers_parser.add_argument("--k", type=int, nargs="+", help="k values (default from config)")
    _add_config(kmers_parser)

    minhash_parser = subparsers.add_parser("minhash", help="MinHash Jaccard estimate")
    _add_pair(minhash_parser, "FASTA")
    minhash_parser.add_argument("--k", type=int, help="k-mer length (default from config)")
    minhash_parser.add_argument("--num-hashes", type=int, help="Signature length (default from config)")
    _add_config(minhash_parser)

    edit_parser = subparsers.add_parser("edit", help="Edit-distance metrics")
    _add_pair(edit_parser, "FASTA")
    _add_config(edit_parser)

    sv_parser = subparsers.add_parser("sv", help="Structural variants from gene annotations")
    _add_pair(sv_parser, "annotation (JSON/CSV/TSV)")
    _add_config(sv_parser)

    synteny_parser = subparsers.add_parser("synteny", help="Ordered synteny alignment")
    _add_pair(synteny_parser, "annotation (JSON/CSV/TSV)")

    return parser


def _add_pair(parser: argparse.ArgumentParser, kind: str) -> None:
    parser.add_argument("first", help=f"{kind} file for genome A")
    parser.add_argument("second", help=f"{kind} file for genome B")


def _add_config(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to YAML/JSON config file")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    get_logger(level=args.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    config = _load_config(getattr(args, "config", None))
    if args.command == "kmers":
        result: Any = _run_kmers(args, config)
    elif args.command == "minhash":
        result = _run_minhash(args, config)
    elif args.command == "edit":
        seq_a, seq_b = _read_pair(args)
        result = analyze_edit_distance(seq_a, seq_b, config.edit_distance).to_dict()
    elif args.command == "sv":
        genes_a, genes_b = read_gene_annotations(args.first), read_gene_annotations(args.second)
        result = analyze_structural_variants(
            genes_a, genes_b, config.structural_variants, config.synteny
        ).to_dict()
    else:
        genes_a, genes_b = read_gene_annotations(args.first), read_gene_annotations(args.second)
        result = align_synteny(genes_a, genes_b).to_dict()

    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def _load_config(path: str | None) -> ComparisonConfig:
    if path is None:
        return ComparisonConfig()
    return load_config(Path(path))


def _read_pair(args: argparse.Namespace) -> tuple[Sequence, Sequence]:
    return _first_record(args.first), _first_record(args.second)


def _first_record(path: str) -> Sequence:
    records = read_fasta(path)
    if not records:
        raise ValueError(f"No FASTA records in {path}")
    return records[0]


def _run_kmers(args: argparse.Namespace, config: ComparisonConfig) -> list[dict[str, Any]]:
    seq_a, seq_b = _read_pair(args)
    k_values = args.k or config.kmers.k_values
    return [result.to_dict() for result in multi_resolution_kmer_analysis(seq_a, seq_b, k_values)]


def _run_minhash(args: argparse.Namespace, config: ComparisonConfig) -> dict[str, Any]:
    seq_a, seq_b = _read_pair(args)
    k = args.k or config.kmers.minhash_k
    num_hashes = args.num_hashes or config.kmers.num_hashes
    cache = init_signature_cache(config.cache)
    estimate = minhash_jaccard(seq_a, seq_b, k, num_hashes, config.kmers.canonical, cache=cache)
    return {
        "k": k,
        "num_hashes": num_hashes,
        "canonical": config.kmers.canonical,
        "jaccard_estimate": estimate,
    }


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
