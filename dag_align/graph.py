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

Generic longest-weighted-path engine for directed acyclic graphs.

The caller supplies the topology (cells and weighted edges). The engine
relaxes cells outward from the source one level at a time, then follows
predecessor pointers back from the sink to recover the best path.

Contract: the topology is acyclic and every predecessor of a cell is
reachable from the source no later than the cell itself. This is not
checked during normal computation; use Graph.validate() (or
find_path(validate=True)) to check it explicitly.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Tuple

from .cells import Cell, link
from .errors import TopologyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Path:
    """Best path through a graph.

    Fields:
        ids: Cell ids from source to sink
        weight: Total path weight (the sink's score)
    """
    ids: Tuple[int, ...]
    weight: int

    def __len__(self):
        return len(self.ids)

    def __iter__(self):
        return iter(self.ids)

    def __str__(self):
        return f"{self.weight}\n" + '->'.join(str(i) for i in self.ids)


class Graph:
    """
    A weighted DAG stored as an arena of cells addressed by integer id.

    Examples:
        >>> graph = Graph.from_edges([(0, 1, 7), (0, 2, 4), (2, 3, 2),
        ...                           (1, 4, 1), (3, 4, 3)], source=0, sink=4)
        >>> graph.find_path().ids
        (0, 2, 3, 4)
    """

    def __init__(self, source, sink, cells=None):
        # dict arena for sparse ids, list arena when ids are dense (grids)
        self.cells = {} if cells is None else cells
        self.source = source
        self.sink = sink

    @classmethod
    def from_edges(cls, edges, source, sink):
        """
        Build a graph from (start, end, weight) triples.

        Args:
            edges: Iterable of (start_id, end_id, weight)
            source: Id of the start cell
            sink: Id of the end cell

        Returns:
            Graph: With a cell for every id mentioned (plus source and sink)
        """
        graph = cls(source, sink)
        graph.add_cell(source)
        graph.add_cell(sink)
        for start, end, weight in edges:
            graph.add_edge(start, end, weight)
        return graph

    def add_cell(self, cell_id):
        """Return the cell with this id, creating it if needed."""
        cell = self.cells.get(cell_id)
        if cell is None:
            cell = self.cells[cell_id] = Cell(cell_id)
        return cell

    def add_edge(self, start, end, weight):
        """Add a weighted edge start -> end, creating either cell if needed."""
        self.add_cell(start)
        self.add_cell(end)
        link(self.cells, start, end, weight)

    def _ids(self):
        if isinstance(self.cells, dict):
            return list(self.cells)
        return range(len(self.cells))

    def compute(self):
        """
        Relax every cell reachable from the source, level by level.

        Each round relaxes all successors of the previous round's cells (each
        at most once per round). A cell is relaxed again whenever one of its
        predecessors changes, so its last relaxation sees final predecessor
        scores. Only predecessors already reached from the source count.

        Returns:
            int: Number of rounds performed

        Raises:
            TopologyError: If relaxation does not settle within one round per
                           cell, which only happens when the graph has a cycle
        """
        cells = self.cells
        reached = {self.source}
        frontier = [self.source]
        limit = len(cells)
        rounds = 0

        while frontier:
            rounds += 1
            if rounds > limit:
                raise TopologyError("relaxation did not settle; graph has a cycle",
                                    frontier[0])
            relaxed = set()
            upcoming = []
            for start in frontier:
                for end in cells[start].outgoing:
                    if end in relaxed:
                        continue
                    cells[end].relax(cells, reached)
                    reached.add(end)
                    relaxed.add(end)
                    upcoming.append(end)
            frontier = upcoming

        logger.debug("relaxed %d cells from source %s in %d rounds",
                     len(reached), self.source, rounds)
        return rounds

    def backtrack(self):
        """
        Follow predecessors from the sink back to the source.

        Returns:
            Path: Ids from source to sink with the sink's score as weight

        Raises:
            TopologyError: If the predecessor chain breaks before the source
        """
        cells = self.cells
        ids = []
        current = self.sink
        while current != self.source:
            ids.append(current)
            if len(ids) > len(cells):
                raise TopologyError("predecessor chain loops", current)
            previous = cells[current].predecessor
            if previous is None:
                raise TopologyError(
                    f"sink {self.sink} is not reachable from source {self.source}",
                    current)
            current = previous
        ids.append(self.source)
        ids.reverse()
        return Path(tuple(ids), cells[self.sink].score)

    def find_path(self, validate=False):
        """Compute all cells, then backtrack from the sink.

        Args:
            validate: Check acyclicity and sink reachability first
        """
        if validate:
            self.validate()
        self.compute()
        return self.backtrack()

    def validate(self):
        """
        Check the engine's topology contract explicitly.

        Runs Kahn's algorithm over the whole arena to detect cycles, then
        checks that the sink can be reached from the source.

        Raises:
            TopologyError: On a cycle, a missing source/sink, an edge to an
                           unknown cell, or an unreachable sink
        """
        ids = self._ids()
        known = set(ids)
        for endpoint in (self.source, self.sink):
            if endpoint not in known:
                raise TopologyError("endpoint is not a cell of this graph", endpoint)

        in_degree = dict.fromkeys(ids, 0)
        for cell_id in ids:
            for end in self.cells[cell_id].outgoing:
                if end not in known:
                    raise TopologyError(f"edge to unknown cell {end}", cell_id)
                in_degree[end] += 1

        queue = deque(i for i in ids if in_degree[i] == 0)
        visited = 0
        while queue:
            cell_id = queue.popleft()
            visited += 1
            for end in self.cells[cell_id].outgoing:
                in_degree[end] -= 1
                if in_degree[end] == 0:
                    queue.append(end)
        if visited != len(in_degree):
            stuck = next(i for i in ids if in_degree[i] > 0)
            raise TopologyError("graph contains a cycle", stuck)

        seen = {self.source}
        stack = [self.source]
        while stack:
            for end in self.cells[stack.pop()].outgoing:
                if end not in seen:
                    seen.add(end)
                    stack.append(end)
        if self.sink not in seen:
            raise TopologyError(
                f"sink {self.sink} is not reachable from source {self.source}")
