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

Turn a best path through an alignment grid into aligned strings.

Consecutive ids along the path are compared after dropping the layer
offset. With cols columns per row, an id step of

- cols + 1 is a diagonal move (one character from each sequence),
- cols is a vertical move (character of a against a gap),
- 1 is a horizontal move (gap against a character of b),
- 0 is a change of layer at the same position (affine grids), no output.

Steps into a cell whose predecessor is a taxi jump are not moves: they are
the free entries from the source and exits to the sink of local, fitting
and overlap alignment, and are left out so only the aligned region is
emitted.
"""

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple

from .errors import TopologyError


class Move(IntEnum):
    """Alignment operations."""
    DIAGONAL = 0    # match or substitution
    VERTICAL = 1    # character of a, gap in b (deletion)
    HORIZONTAL = 2  # gap in a, character of b (insertion)


@dataclass(frozen=True)
class Alignment:
    """Result of aligning two sequences.

    Fields:
        score: Weight of the optimal path
        aligned_a: Aligned region of a with gap symbols
        aligned_b: Aligned region of b with gap symbols (same length)
        a_start, a_end: Aligned region of a as a half-open range
        b_start, b_end: Aligned region of b as a half-open range
        moves: Decoded moves, one per alignment column
        gap: Gap symbol used in aligned_a/aligned_b
    """
    score: int
    aligned_a: str
    aligned_b: str
    a_start: int = 0
    a_end: int = 0
    b_start: int = 0
    b_end: int = 0
    moves: Tuple[Move, ...] = ()
    gap: str = '-'

    def __len__(self):
        return len(self.moves)

    def __str__(self):
        return f"{self.score}\n{self.aligned_a}\n{self.aligned_b}"

    @property
    def cigar(self):
        """
        Run-length extended CIGAR of the alignment.

        '=' and 'X' are diagonal matches and substitutions, 'I' a character
        of a against a gap, 'D' a gap in a. The same convention as edlib,
        with a as the query.

        Examples:
            >>> Alignment(0, "AC-T", "AGGT", moves=(0, 0, 2, 0)).cigar
            '1=1X1D1='
        """
        ops = []
        for move, x, y in zip(self.moves, self.aligned_a, self.aligned_b):
            if move == Move.DIAGONAL:
                ops.append('=' if x == y else 'X')
            elif move == Move.VERTICAL:
                ops.append('I')
            else:
                ops.append('D')
        return ''.join(f"{len(run.group(0))}{run.group(1)}"
                       for run in re.finditer(r'([=XID])\1*', ''.join(ops)))


def decode_path(path, cells, coords, a, b, gap='-'):
    """
    Decode a grid path into an Alignment.

    Args:
        path: Path from the grid's source to its sink
        cells: The grid's cell arena (for taxi markers)
        coords: GridCoordinates of the grid
        a, b: The aligned sequences (rows and columns)
        gap: Gap symbol

    Returns:
        Alignment: With path.weight as score

    Raises:
        TopologyError: If two consecutive ids are not a legal move
    """
    cols = coords.cols
    top = []
    bottom = []
    moves = []
    start = end = None

    ids = path.ids
    previous = coords.normalize(ids[0])
    for cell_id in ids[1:]:
        current = coords.normalize(cell_id)
        if cells[cell_id].taxi:
            previous = current
            continue

        delta = current - previous
        row, col = divmod(previous, cols)
        if delta == 0:
            # gap closed or opened in another layer
            continue
        elif delta == cols + 1:
            top.append(a[row])
            bottom.append(b[col])
            moves.append(Move.DIAGONAL)
        elif delta == cols:
            top.append(a[row])
            bottom.append(gap)
            moves.append(Move.VERTICAL)
        elif delta == 1:
            top.append(gap)
            bottom.append(b[col])
            moves.append(Move.HORIZONTAL)
        else:
            raise TopologyError(f"step {previous} -> {current} is not an alignment move", cell_id)

        if start is None:
            start = (row, col)
        end = divmod(current, cols)
        previous = current

    if start is None:
        # nothing aligned, e.g. a local alignment of unrelated sequences
        start = end = divmod(coords.normalize(ids[0]), cols)

    return Alignment(
        score=path.weight,
        aligned_a=''.join(top),
        aligned_b=''.join(bottom),
        a_start=start[0],
        a_end=end[0],
        b_start=start[1],
        b_end=end[1],
        moves=tuple(moves),
        gap=gap,
    )
