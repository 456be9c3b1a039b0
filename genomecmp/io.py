"""File readers for sequences and gene annotations."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pandas as pd

from genomecmp.core.genes import GeneAnnotation
from genomecmp.core.sequence import Sequence

_LOGGER = logging.getLogger(__name__)

_DELIMITERS = {".csv": ",", ".tsv": "\t"}


def _existing(path: str | Path) -> Path:
    target = Path(path)
    if not target.exists():
        raise FileNotFoundError(f"Input file not found: {target}")
    return target


def read_fasta(path: str | Path) -> list[Sequence]:
    """Load every record of a FASTA file as an upper-cased :class:`Sequence`."""
    try:
        from Bio import SeqIO
    except ImportError:
        raise ImportError(
            "BioPython is required for FASTA parsing. "
            "Install with: pip install biopython"
        )

    target = _existing(path)
    sequences = [
        Sequence(
            id=record.id,
            tokens=str(record.seq).upper(),
            metadata={"description": record.description},
        )
        for record in SeqIO.parse(target, "fasta")
    ]
    _LOGGER.info("Loaded %d sequences from %s", len(sequences), target)
    return sequences


def read_gene_annotations(path: str | Path) -> list[GeneAnnotation]:
    """Load gene annotations in genome order.

    ``.json`` files hold a list of records; ``.csv`` and ``.tsv`` files hold
    one gene per row. Both accept snake_case or camelCase column names.
    """
    target = _existing(path)
    suffix = target.suffix.lower()
    if suffix == ".json":
        with open(target) as handle:
            records = json.load(handle)
        if not isinstance(records, list):
            raise ValueError("JSON annotation file should contain a list of gene records")
    elif suffix in _DELIMITERS:
        frame = pd.read_csv(target, sep=_DELIMITERS[suffix])
        records = frame.to_dict(orient="records")
    else:
        msg = f"Unsupported annotation format: {target.suffix or target.name}"
        raise ValueError(msg)

    genes = [GeneAnnotation.from_mapping(record) for record in records]
    _LOGGER.info("Loaded %d gene annotations from %s", len(genes), target)
    return genes
