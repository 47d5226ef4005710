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

Alignment grids: the DAG engine specialised to two sequences.

An AlignmentGrid is one engine composed with a coordinate scheme:

- LinearScheme: one cell per (row, col). Moves are diagonal
  (substitution), vertical (character of a against a gap) and horizontal
  (gap against a character of b).
- AffineScheme: three cells per (row, col), the DIAGONAL (M), DOWN (D) and
  RIGHT (I) layers, so opening a gap can cost more than extending it.

Instead of the generic level-by-level relaxation the grid computes its
first column and first row directly, then scans the interior once in
row-major order, which visits every predecessor before its successors.
The TaxiPolicy adds free jumps from the source and to the sink that turn
global alignment into local, fitting or overlap alignment.
"""

import logging

from .cells import Cell, link
from .config import DEFAULT_GAPS, DEFAULT_SCORING, GLOBAL, taxi_policy
from .coords import GridCoordinates, Layer
from .decode import decode_path
from .errors import ConfigurationError
from .graph import Graph


class LinearScheme:
    """One layer; every gap position weighs gaps.open."""
    layers = 1

    def __init__(self, coords):
        self.coords = coords

    def wire(self, cells, a, b, scoring, gaps):
        """
        Add the incoming edges of every cell.

        Insertion order (which decides ties) is horizontal, diagonal, vertical.
        """
        to_id = self.coords.to_id
        indel = gaps.open
        for row in range(self.coords.rows):
            for col in range(self.coords.cols):
                cell_id = to_id(row, col)
                if col:
                    link(cells, to_id(row, col - 1), cell_id, indel)
                    if row:
                        link(cells, to_id(row - 1, col - 1), cell_id,
                             scoring(a[row - 1], b[col - 1]))
                if row:
                    link(cells, to_id(row - 1, col), cell_id, indel)

    def order(self, row, col):
        """Ids to relax at (row, col), in order; the last one is the main cell."""
        return (self.coords.to_id(row, col),)

    def main(self, row, col):
        return self.coords.to_id(row, col)


class AffineScheme:
    """
    Three layers with separate gap-open and gap-extend weights.

    DOWN(row, col) extends DOWN(row - 1, col) or opens from
    DIAGONAL(row - 1, col); RIGHT is the same along columns. DIAGONAL closes
    either gap at no cost and also carries the substitution edge. The first
    row of DOWN and the first column of RIGHT have no gap to extend.
    """
    layers = len(Layer)

    def __init__(self, coords):
        self.coords = coords

    def wire(self, cells, a, b, scoring, gaps):
        to_id = self.coords.to_id
        for row in range(self.coords.rows):
            for col in range(self.coords.cols):
                down = to_id(row, col, Layer.DOWN)
                right = to_id(row, col, Layer.RIGHT)
                diagonal = to_id(row, col, Layer.DIAGONAL)
                if row:
                    if row > 1:
                        link(cells, to_id(row - 1, col, Layer.DOWN), down, gaps.extend)
                    link(cells, to_id(row - 1, col, Layer.DIAGONAL), down, gaps.open)
                if col:
                    if col > 1:
                        link(cells, to_id(row, col - 1, Layer.RIGHT), right, gaps.extend)
                    link(cells, to_id(row, col - 1, Layer.DIAGONAL), right, gaps.open)
                # closing edges only from gap cells that can hold a gap
                if row:
                    link(cells, down, diagonal, 0)
                if col:
                    link(cells, right, diagonal, 0)
                if row and col:
                    link(cells, to_id(row - 1, col - 1, Layer.DIAGONAL), diagonal,
                         scoring(a[row - 1], b[col - 1]))

    def order(self, row, col):
        # gap layers first: the diagonal layer's closing edges read them
        to_id = self.coords.to_id
        return (to_id(row, col, Layer.DOWN),
                to_id(row, col, Layer.RIGHT),
                to_id(row, col, Layer.DIAGONAL))

    def main(self, row, col):
        return self.coords.to_id(row, col, Layer.DIAGONAL)


class AlignmentGrid:
    """
    Best-scoring alignment of a (rows) against b (columns).

    Args:
        a, b: Non-empty sequences
        scoring: Scoring for diagonal moves
        gaps: GapPenalty; linear gaps use one layer, affine gaps three
        taxi: TaxiPolicy or mode name ('global', 'local', 'fitting', 'overlap')
        layered: Force the three-layer scheme (True) or the single-layer one
                 (False); by default chosen from gaps.is_linear
        gap_symbol: Character written for gaps in the decoded alignment
        logger: Logger for debug records

    Raises:
        ConfigurationError: Empty input, a scoring table missing a needed
                            pair, or affine gaps forced onto a single layer

    Examples:
        >>> grid = AlignmentGrid("AC", "AG", Scoring(0, -1), GapPenalty(-1))
        >>> grid.align().score
        -1
    """

    def __init__(self, a, b, scoring=None, gaps=None, taxi=GLOBAL, layered=None,
                 gap_symbol='-', logger=None):
        self.logger = logger or logging.getLogger(__name__)
        self.scoring = DEFAULT_SCORING if scoring is None else scoring
        self.gaps = DEFAULT_GAPS if gaps is None else gaps
        self.taxi = taxi_policy(taxi)
        self.gap_symbol = gap_symbol

        if len(a) == 0 or len(b) == 0:
            raise ConfigurationError(
                f"Cannot align empty sequences (lengths {len(a)} and {len(b)})")
        self.scoring.check(a, b)
        if layered is None:
            layered = not self.gaps.is_linear
        elif not layered and not self.gaps.is_linear:
            raise ConfigurationError(
                f"Affine gaps ({self.gaps.open}, {self.gaps.extend}) need the layered scheme")
        self.a = a
        self.b = b

        scheme = AffineScheme if layered else LinearScheme
        self.coords = GridCoordinates(len(a) + 1, len(b) + 1, scheme.layers)
        self.scheme = scheme(self.coords)
        cells = [Cell(i) for i in range(self.coords.size)]
        self.scheme.wire(cells, a, b, self.scoring, self.gaps)
        self.graph = Graph(self.scheme.main(0, 0),
                           self.scheme.main(self.coords.rows - 1, self.coords.cols - 1),
                           cells)
        self.path = None
        self.computed = False

    @property
    def cells(self):
        return self.graph.cells

    @property
    def source(self):
        return self.graph.source

    @property
    def sink(self):
        return self.graph.sink

    def _relax_at(self, row, col):
        cells = self.graph.cells
        for cell_id in self.scheme.order(row, col):
            cells[cell_id].relax(cells)

    def compute(self):
        """
        Compute every cell's best score and predecessor in one pass.

        Returns:
            int: The sink's score (the optimal alignment score)
        """
        cells = self.graph.cells
        source = self.graph.source
        rows, cols = self.coords.rows, self.coords.cols
        taxi = self.taxi
        main = self.scheme.main
        # skipping leading characters only helps when gaps cost something
        free_start = self.gaps.open < 0

        for row in range(1, rows):
            self._relax_at(row, 0)
            if taxi.start_vert and free_start:
                cells[main(row, 0)].taxi_from(source)

        for col in range(1, cols):
            self._relax_at(0, col)
            if taxi.start_horiz and free_start:
                cells[main(0, col)].taxi_from(source)

        # local alignment may always fall back to the empty alignment
        best, best_score = None, 0 if taxi.is_local else None
        for row in range(1, rows):
            for col in range(1, cols):
                self._relax_at(row, col)
                cell = cells[main(row, col)]
                if taxi.is_local and cell.score < 0:
                    cell.taxi_from(source)
                # first strictly better cell in row-major order wins
                if taxi.has_exit and taxi.allows_exit(row, col, rows, cols) and \
                        (best_score is None or cell.score > best_score):
                    best, best_score = cell.id, cell.score

        sink = cells[self.graph.sink]
        if best is not None and best != sink.id:
            sink.taxi_from(best, best_score)

        self.computed = True
        self.logger.debug("scored %d cells of a %dx%d grid (%d layer(s)), sink score %d",
                          self.coords.size, rows, cols, self.coords.layers, sink.score)
        return sink.score

    def align(self):
        """
        Compute, backtrack and decode the optimal alignment.

        Returns:
            Alignment: Score, aligned strings and aligned region
        """
        if not self.computed:
            self.compute()
        self.path = self.graph.backtrack()
        return decode_path(self.path, self.graph.cells, self.coords,
                           self.a, self.b, self.gap_symbol)
