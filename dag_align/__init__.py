#!/usr/bin/env python3
"""
Copyright (c) 2025, Josh Walker

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

1. Redistributions of source code must retain the above copyright notice, this
   list of conditions and the following disclaimer.

2. Redistributions in binary form must reproduce the above copyright notice,
   this list of conditions and the following disclaimer in the documentation
   and/or other materials provided with the distribution.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

Pairwise Sequence Alignment as Longest Paths in a DAG

This package computes optimal pairwise alignments by finding the heaviest
path through an implicitly defined directed acyclic graph. The same engine
gives edit distance, global, local, fitting and overlap alignment, protein
alignment with a substitution matrix, and affine-gap alignment.

Example:
    >>> from dag_align import align, BLOSUM62, GapPenalty
    >>> result = align("PLEASANTLY", "MEANLY", BLOSUM62, GapPenalty(-5))
    >>> result.score
    8
"""

from .cells import Cell, link
from .config import (
    BLOSUM62,
    DEFAULT_GAPS,
    DEFAULT_SCORING,
    EDIT_DISTANCE_GAPS,
    EDIT_DISTANCE_SCORING,
    FITTING,
    GLOBAL,
    LOCAL,
    MODES,
    OVERLAP,
    GapPenalty,
    Scoring,
    TaxiPolicy,
    taxi_policy,
)
from .coords import GridCoordinates, Layer
from .decode import Alignment, Move, decode_path
from .errors import AlignmentError, ConfigurationError, TopologyError
from .graph import Graph, Path
from .grid import AffineScheme, AlignmentGrid, LinearScheme
from .linear_space import linear_space_alignment

__version__ = "0.1.0"


def align(seq1, seq2, scoring=None, gaps=None, mode='global', gap_symbol='-'):
    """
    Align two sequences and return the optimal alignment.

    Args:
        seq1 (str): First sequence, laid along the rows of the grid
        seq2 (str): Second sequence, laid along the columns
        scoring (Scoring, optional): Diagonal-move weights or substitution
                                     matrix. Defaults to DEFAULT_SCORING
                                     (match 1, mismatch -2).
        gaps (GapPenalty, optional): Gap weights. Linear gaps use a single
                                     layer grid, affine gaps three layers.
                                     Defaults to DEFAULT_GAPS (-2).
        mode (str or TaxiPolicy): 'global', 'local', 'fitting' (seq2 inside
                                  seq1), 'overlap' (suffix of seq1 with
                                  prefix of seq2), or a custom TaxiPolicy
        gap_symbol (str): Character written for gaps

    Returns:
        Alignment: Dataclass containing:
            - score (int): Optimal alignment score
            - aligned_a, aligned_b (str): Equal-length aligned rows
            - a_start, a_end, b_start, b_end (int): Aligned region of each input
            - moves (tuple): Decoded Move per column

    Raises:
        ConfigurationError: Empty sequences, unknown mode, or a scoring
                            matrix lacking a needed character pair

    Example:
        >>> print(align("AC", "AG", Scoring(1, -1), GapPenalty(-1)))
        0
        AC
        AG
    """
    return AlignmentGrid(seq1, seq2, scoring, gaps, taxi=mode, gap_symbol=gap_symbol).align()


def global_alignment(seq1, seq2, scoring=None, gaps=None):
    """Align all of seq1 with all of seq2."""
    return align(seq1, seq2, scoring, gaps, GLOBAL)


def local_alignment(seq1, seq2, scoring=None, gaps=None):
    """Best-scoring pair of substrings (Smith-Waterman style)."""
    return align(seq1, seq2, scoring, gaps, LOCAL)


def fitting_alignment(seq1, seq2, scoring=None, gaps=None):
    """All of seq2 against the best-matching substring of seq1."""
    return align(seq1, seq2, scoring, gaps, FITTING)


def overlap_alignment(seq1, seq2, scoring=None, gaps=None):
    """A suffix of seq1 against a prefix of seq2."""
    return align(seq1, seq2, scoring, gaps, OVERLAP)


def affine_alignment(seq1, seq2, scoring=None, gap_open=-11, gap_extend=-1, mode='global'):
    """
    Alignment with affine gaps: a gap of length k weighs
    gap_open + (k - 1) * gap_extend.

    Always uses the three-layer grid, so gap_open == gap_extend gives the
    same score as the linear-gap grid.

    Args:
        seq1, seq2 (str): Sequences to align
        scoring (Scoring, optional): Defaults to BLOSUM62
        gap_open (int): Weight of a gap's first position (negative)
        gap_extend (int): Weight of each further position; must not be more
                          severe than gap_open
        mode (str or TaxiPolicy): As for align()

    Returns:
        Alignment: The optimal alignment
    """
    scoring = BLOSUM62 if scoring is None else scoring
    grid = AlignmentGrid(seq1, seq2, scoring, GapPenalty(gap_open, gap_extend),
                         taxi=mode, layered=True)
    return grid.align()


def edit_distance(seq1, seq2):
    """
    Minimum number of substitutions, insertions and deletions turning seq1
    into seq2.

    Example:
        >>> edit_distance("PLEASANTLY", "MEANLY")
        5
    """
    grid = AlignmentGrid(seq1, seq2, EDIT_DISTANCE_SCORING, EDIT_DISTANCE_GAPS)
    return -grid.compute()


def manhattan_tourist(down, right):
    """
    Heaviest route from the top-left to the bottom-right corner of a city
    grid where every block has its own weight and only down and right
    steps are allowed.

    Args:
        down: n rows of m + 1 weights; down[i][j] is the block from
              (i, j) to (i + 1, j)
        right: n + 1 rows of m weights; right[i][j] is the block from
               (i, j) to (i, j + 1)

    Returns:
        Path: Ids (row * (m + 1) + col) of the corners visited and the
              route's total weight

    Raises:
        ConfigurationError: If the two tables do not describe the same grid

    Example:
        >>> manhattan_tourist([[1, 5]], [[2], [3]]).weight
        7
    """
    if not right or len(down) != len(right) - 1 or \
            any(len(row) != len(right[0]) for row in right) or \
            any(len(row) != len(right[0]) + 1 for row in down):
        raise ConfigurationError(
            f"down must be n x (m + 1) and right (n + 1) x m, got {len(down)} "
            f"and {len(right)} rows")

    coords = GridCoordinates(len(right), len(right[0]) + 1)
    cells = [Cell(i) for i in range(coords.size)]
    for row in range(coords.rows):
        for col in range(coords.cols):
            if col:
                link(cells, coords.to_id(row, col - 1), coords.to_id(row, col),
                     right[row][col - 1])
            if row:
                link(cells, coords.to_id(row - 1, col), coords.to_id(row, col),
                     down[row - 1][col])
    graph = Graph(coords.to_id(0, 0), coords.to_id(coords.rows - 1, coords.cols - 1), cells)
    return graph.find_path()


def longest_common_subsequence(seq1, seq2):
    """
    A longest common subsequence of seq1 and seq2.

    Example:
        >>> len(longest_common_subsequence("AACCTTGG", "ACACTGTGA"))
        6
    """
    result = align(seq1, seq2, Scoring(match=1, mismatch=0), GapPenalty(0))
    return ''.join(x for move, x, y in zip(result.moves, result.aligned_a, result.aligned_b)
                   if move == Move.DIAGONAL and x == y)


__all__ = [
    # high-level entry points
    "align",
    "global_alignment",
    "local_alignment",
    "fitting_alignment",
    "overlap_alignment",
    "affine_alignment",
    "edit_distance",
    "longest_common_subsequence",
    "manhattan_tourist",
    "linear_space_alignment",
    # configuration
    "Scoring",
    "GapPenalty",
    "TaxiPolicy",
    "taxi_policy",
    "MODES",
    "GLOBAL",
    "LOCAL",
    "FITTING",
    "OVERLAP",
    "BLOSUM62",
    "DEFAULT_SCORING",
    "DEFAULT_GAPS",
    "EDIT_DISTANCE_SCORING",
    "EDIT_DISTANCE_GAPS",
    # engine
    "Cell",
    "link",
    "Graph",
    "Path",
    "GridCoordinates",
    "Layer",
    "AlignmentGrid",
    "LinearScheme",
    "AffineScheme",
    "Alignment",
    "Move",
    "decode_path",
    # errors
    "AlignmentError",
    "ConfigurationError",
    "TopologyError",
]
