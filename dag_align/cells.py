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

Cells and weighted edges of an alignment DAG.

Cells live in a flat arena (a list or a dict keyed by id) and refer to each
other only by integer id, so no cell owns another.
"""


class Cell:
    """A scored vertex with a back-pointer and its weighted incoming edges.

    Attributes:
        id: Integer id; in grids it encodes (row, col, layer)
        score: Best path weight found so far (0 until relaxed)
        predecessor: Id of the cell the best path arrives from, or None
        incoming: Predecessor id -> edge weight, in insertion order
        outgoing: Successor ids, in insertion order
        taxi: True when the predecessor was assigned through a free taxi
            jump rather than a real edge
    """
    __slots__ = ('id', 'score', 'predecessor', 'incoming', 'outgoing', 'taxi')

    def __init__(self, cell_id, score=0):
        self.id = cell_id
        self.score = score
        self.predecessor = None
        self.incoming = {}
        self.outgoing = []
        self.taxi = False

    def add_incoming(self, predecessor, weight):
        """Add an edge from predecessor. Re-adding a predecessor overwrites its weight."""
        self.incoming[predecessor] = weight

    def relax(self, cells, reached=None):
        """
        Take the best of all incoming edges as this cell's score.

        score = max(cells[p].score + weight) over incoming (p, weight). The
        first inserted edge wins ties. A cell without usable incoming edges
        keeps its current score, which is what gives the grid origin its 0.

        Args:
            cells: The arena holding every predecessor
            reached: Optional set of ids; when given, predecessors outside it
                     are ignored

        Returns:
            int: The resulting score
        """
        best = None
        for predecessor, weight in self.incoming.items():
            if reached is not None and predecessor not in reached:
                continue
            candidate = cells[predecessor].score + weight
            if best is None or candidate > best:
                best = candidate
                self.predecessor = predecessor
        if best is not None:
            self.score = best
            self.taxi = False
        return self.score

    def taxi_from(self, cell_id, score=0):
        """Jump here for free from cell_id (a zero-cost taxi edge)."""
        self.score = score
        self.predecessor = cell_id
        self.taxi = True

    def __repr__(self):
        edges = ', '.join(f"{p}:{w}" for p, w in self.incoming.items())
        return (f"Cell({self.id}, score={self.score}, "
                f"predecessor={self.predecessor}, incoming=[{edges}])")


def link(cells, start, end, weight):
    """Wire a weighted edge start -> end between two cells of an arena."""
    cells[end].add_incoming(start, weight)
    outgoing = cells[start].outgoing
    if end not in outgoing:
        outgoing.append(end)
