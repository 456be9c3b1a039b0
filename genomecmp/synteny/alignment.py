"""Order-preserving synteny alignment by dynamic time warping.

Genes are compared with the substring-free text distance; the warping path is
traced back preferring diagonal moves, and contiguous diagonal runs of related
genes become forward synteny blocks.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from genomecmp.synteny.genes import GeneLike, coerce_genes, token_distance, tokenize_gene
from genomecmp.synteny.types import SyntenyAnalysis, SyntenyBlock, clamp01

# pairs closer than this are "related"
RELATED_DISTANCE = 0.8
_TIE_TOLERANCE = 1e-3


def _warping_matrix(costs: list[list[float]]) -> list[list[float]]:
    n = len(costs)
    m = len(costs[0]) if n else 0
    dtw = [[math.inf] * (m + 1) for _ in range(n + 1)]
    dtw[0][0] = 0.0
    for i in range(1, n + 1):
        row, above = dtw[i], dtw[i - 1]
        for j in range(1, m + 1):
            row[j] = costs[i - 1][j - 1] + min(above[j], row[j - 1], above[j - 1])
    return dtw


def _warping_path(dtw: list[list[float]]) -> list[tuple[int, int]]:
    i = len(dtw) - 1
    j = len(dtw[0]) - 1
    path: list[tuple[int, int]] = []
    while i > 0 or j > 0:
        path.append((i - 1, j - 1))
        if i == 0:
            j -= 1
            continue
        if j == 0:
            i -= 1
            continue
        best = min(dtw[i - 1][j], dtw[i][j - 1], dtw[i - 1][j - 1])
        if abs(dtw[i - 1][j - 1] - best) < _TIE_TOLERANCE:
            i -= 1
            j -= 1
        elif abs(dtw[i - 1][j] - best) < _TIE_TOLERANCE:
            i -= 1
        else:
            j -= 1
    path.reverse()
    return [(a, b) for a, b in path if a >= 0 and b >= 0]


def align_synteny(genes_a: Iterable[GeneLike], genes_b: Iterable[GeneLike]) -> SyntenyAnalysis:
    """Align two ordered gene lists and report forward synteny blocks.

    A block is a run of consecutive diagonal steps whose genes are related;
    its score is the similarity of its first pair. ``global_score`` is the fraction of
    genome A covered by blocks.
    """
    genes_a = coerce_genes(genes_a)
    genes_b = coerce_genes(genes_b)
    if not genes_a or not genes_b:
        return SyntenyAnalysis(blocks=(), breakpoints=(), global_score=0.0, dtw_distance=math.inf)

    tokens_a = [tokenize_gene(gene) for gene in genes_a]
    tokens_b = [tokenize_gene(gene) for gene in genes_b]
    costs = [
        [token_distance(ta, tb, substring_rule=False) for tb in tokens_b]
        for ta in tokens_a
    ]
    dtw = _warping_matrix(costs)

    blocks: list[SyntenyBlock] = []
    run: list[tuple[int, int, float]] = []

    def flush() -> None:
        if run:
            blocks.append(
                SyntenyBlock(
                    start_idx_a=run[0][0],
                    end_idx_a=run[-1][0],
                    start_idx_b=run[0][1],
                    end_idx_b=run[-1][1],
                    score=clamp01(run[0][2]),
                    orientation="forward",
                )
            )
            run.clear()

    for idx_a, idx_b in _warping_path(dtw):
        distance = costs[idx_a][idx_b]
        if distance >= RELATED_DISTANCE:
            flush()
            continue
        if run and not (idx_a == run[-1][0] + 1 and idx_b == run[-1][1] + 1):
            flush()
        run.append((idx_a, idx_b, 1.0 - distance))
    flush()

    covered = sum(block.end_idx_a - block.start_idx_a + 1 for block in blocks)
    return SyntenyAnalysis(
        blocks=tuple(blocks),
        breakpoints=tuple(block.start_idx_a for block in blocks[1:]),
        global_score=covered / len(genes_a),
        dtw_distance=dtw[-1][-1],
    )
