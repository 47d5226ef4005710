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

Global alignment in memory linear in the length of b.

The rows of a are split in half. One pass scores the top half of a against
every prefix of b, a second pass scores the reversed bottom half against
every reversed suffix of b, and the column where the two sums peak is a
point the optimal path goes through. Both halves are then aligned
recursively. Small pieces are handed to the full grid.
"""

import logging

from .config import DEFAULT_GAPS, DEFAULT_SCORING
from .decode import Alignment, Move
from .errors import ConfigurationError
from .grid import AlignmentGrid

logger = logging.getLogger(__name__)


def _last_row(a, b, scoring, indel):
    """Best global scores of a against each prefix b[:j], keeping one row."""
    previous = [col * indel for col in range(len(b) + 1)]
    for x in a:
        current = [previous[0] + indel]
        for col, y in enumerate(b, 1):
            current.append(max(previous[col - 1] + scoring(x, y),
                               previous[col] + indel,
                               current[col - 1] + indel))
        previous = current
    return previous


def _split_moves(a, b, scoring, gaps):
    if not a:
        return [Move.HORIZONTAL] * len(b)
    if not b:
        return [Move.VERTICAL] * len(a)
    if len(a) == 1 or len(b) == 1:
        return list(AlignmentGrid(a, b, scoring, gaps).align().moves)

    mid = len(a) // 2
    upper = _last_row(a[:mid], b, scoring, gaps.open)
    lower = _last_row(a[mid:][::-1], b[::-1], scoring, gaps.open)
    n = len(b)
    split = max(range(n + 1), key=lambda col: upper[col] + lower[n - col])

    return (_split_moves(a[:mid], b[:split], scoring, gaps) +
            _split_moves(a[mid:], b[split:], scoring, gaps))


def linear_space_alignment(a, b, scoring=None, gaps=None, gap_symbol='-'):
    """
    Global alignment of a and b using O(len(b)) working memory per pass.

    Gives the same score as the grid's global alignment; among equally
    good alignments it may pick a different one.

    Args:
        a, b: Non-empty sequences
        scoring (Scoring, optional): Defaults to DEFAULT_SCORING
        gaps (GapPenalty, optional): Must be linear. Defaults to DEFAULT_GAPS.
        gap_symbol: Character written for gaps

    Returns:
        Alignment: Covering all of a and b

    Raises:
        ConfigurationError: Empty input, affine gaps, or a scoring table
                            missing a needed pair
    """
    scoring = DEFAULT_SCORING if scoring is None else scoring
    gaps = DEFAULT_GAPS if gaps is None else gaps
    if len(a) == 0 or len(b) == 0:
        raise ConfigurationError(
            f"Cannot align empty sequences (lengths {len(a)} and {len(b)})")
    if not gaps.is_linear:
        raise ConfigurationError("Linear-space alignment only supports linear gaps")
    scoring.check(a, b)

    moves = _split_moves(a, b, scoring, gaps)

    top, bottom = [], []
    score = row = col = 0
    for move in moves:
        if move == Move.DIAGONAL:
            top.append(a[row])
            bottom.append(b[col])
            score += scoring(a[row], b[col])
            row += 1
            col += 1
        elif move == Move.VERTICAL:
            top.append(a[row])
            bottom.append(gap_symbol)
            score += gaps.open
            row += 1
        else:
            top.append(gap_symbol)
            bottom.append(b[col])
            score += gaps.open
            col += 1

    logger.debug("linear-space alignment of %d x %d residues, score %d", len(a), len(b), score)
    return Alignment(score=score, aligned_a=''.join(top), aligned_b=''.join(bottom),
                     a_start=0, a_end=len(a), b_start=0, b_end=len(b),
                     moves=tuple(moves), gap=gap_symbol)
