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

Exceptions raised by the alignment engine.

Configuration problems are reported before any cell is computed. Topology
problems mean a caller-built graph broke the engine's contract (it is not
acyclic, or the sink cannot be reached from the source).
"""


class AlignmentError(Exception):
    """Base exception for all dag_align errors."""


class ConfigurationError(AlignmentError, ValueError):
    """Invalid inputs or scoring configuration.

    Raised for empty sequences, scoring tables that lack a character pair
    the inputs need, gap models whose extension is harsher than opening,
    and unknown alignment modes.
    """


class TopologyError(AlignmentError, RuntimeError):
    """A graph violated the acyclic, sink-reachable contract.

    Args:
        message: What went wrong
        cell_id: The cell at which the violation was noticed, if any
    """

    def __init__(self, message, cell_id=None):
        self.cell_id = cell_id
        if cell_id is not None:
            message = f"{message} (at cell {cell_id})"
        super().__init__(message)
