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

Immutable scoring configuration for alignments.

Weights are signed edge weights: bonuses are positive, penalties negative.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from .errors import ConfigurationError


@dataclass(frozen=True)
class Scoring:
    """
    Weight of a diagonal (match/substitution) move.

    Attributes:
        match: Weight when the two characters are equal (no matrix given)
        mismatch: Weight when they differ (no matrix given)
        matrix: Optional table matrix[char_of_a][char_of_b] -> weight. May be
                asymmetric. Takes precedence over match/mismatch.

    Examples:
        >>> Scoring(match=1, mismatch=-1)('A', 'C')
        -1
        >>> BLOSUM62('W', 'W')
        11
    """
    match: int = 1
    mismatch: int = -2
    matrix: Optional[Mapping[str, Mapping[str, int]]] = field(default=None, hash=False)

    def __post_init__(self):
        if self.matrix is not None:
            frozen = MappingProxyType({
                row: MappingProxyType(dict(weights))
                for row, weights in self.matrix.items()
            })
            object.__setattr__(self, 'matrix', frozen)

    @classmethod
    def from_table(cls, alphabet, rows):
        """
        Build a substitution matrix from a square table.

        Args:
            alphabet: Characters labelling both rows and columns, in order
            rows: One list of weights per character of alphabet

        Returns:
            Scoring: Backed by the table
        """
        if len(rows) != len(alphabet) or any(len(row) != len(alphabet) for row in rows):
            raise ConfigurationError(
                f"Scoring table must be {len(alphabet)}x{len(alphabet)} for alphabet {alphabet!r}")
        return cls(matrix={
            x: dict(zip(alphabet, row)) for x, row in zip(alphabet, rows)
        })

    def __call__(self, x, y):
        if self.matrix is not None:
            return self.matrix[x][y]
        return self.match if x == y else self.mismatch

    def check(self, a, b):
        """
        Make sure every character pair the inputs need has a weight.

        Args:
            a, b: The sequences that will be aligned

        Raises:
            ConfigurationError: Listing the missing (char_of_a, char_of_b) pairs
        """
        if self.matrix is None:
            return
        missing = sorted(
            (x, y) for x in set(a) for y in set(b)
            if y not in self.matrix.get(x, {})
        )
        if missing:
            shown = ', '.join(f"{x}/{y}" for x, y in missing[:10])
            more = f" and {len(missing) - 10} more" if len(missing) > 10 else ""
            raise ConfigurationError(f"Scoring matrix has no entry for {shown}{more}")


@dataclass(frozen=True)
class GapPenalty:
    """
    Gap model. A gap of length k weighs open + (k - 1) * extend.

    Attributes:
        open: Weight of the first position of a gap
        extend: Weight of each further position (defaults to open, which
                makes the model linear)
    """
    open: int = -2
    extend: Optional[int] = None

    def __post_init__(self):
        if self.extend is None:
            object.__setattr__(self, 'extend', self.open)
        if self.extend < self.open:
            raise ConfigurationError(
                f"Gap extension ({self.extend}) must not be more severe than "
                f"gap opening ({self.open})")

    @property
    def is_linear(self):
        return self.open == self.extend


@dataclass(frozen=True)
class TaxiPolicy:
    """
    Free ("taxi") jumps that select the alignment variant.

    Attributes:
        start_vert: First column may be entered from the source for free
                    (skip a prefix of a)
        end_vert: Paths may leave for the sink before the last row
                  (skip a suffix of a)
        start_horiz: First row may be entered from the source for free
                     (skip a prefix of b)
        end_horiz: Paths may leave for the sink before the last column
                   (skip a suffix of b)

    All False is global alignment, all True is local alignment.
    """
    start_vert: bool = False
    end_vert: bool = False
    start_horiz: bool = False
    end_horiz: bool = False

    @property
    def is_local(self):
        """Any cell may restart from the source when its score drops below 0."""
        return self.start_vert and self.start_horiz

    @property
    def has_exit(self):
        return self.end_vert or self.end_horiz

    def allows_exit(self, row, col, rows, cols):
        """Whether cell (row, col) may jump straight to the sink."""
        return ((self.end_horiz or (self.end_vert and col == cols - 1)) and
                (self.end_vert or (self.end_horiz and row == rows - 1)))


GLOBAL = TaxiPolicy()
LOCAL = TaxiPolicy(True, True, True, True)
# b fitted inside a: free prefix and suffix of a only
FITTING = TaxiPolicy(start_vert=True, end_vert=True)
# suffix of a against prefix of b
OVERLAP = TaxiPolicy(start_vert=True, end_horiz=True)

MODES = {
    'global': GLOBAL,
    'local': LOCAL,
    'fitting': FITTING,
    'overlap': OVERLAP,
}


def taxi_policy(mode):
    """Resolve a mode name (or pass through a TaxiPolicy)."""
    if isinstance(mode, TaxiPolicy):
        return mode
    try:
        return MODES[mode.lower()]
    except (KeyError, AttributeError):
        raise ConfigurationError(
            f"Unknown alignment mode {mode!r}, expected one of {sorted(MODES)}") from None


DEFAULT_SCORING = Scoring(match=1, mismatch=-2)
DEFAULT_GAPS = GapPenalty(-2)

EDIT_DISTANCE_SCORING = Scoring(match=0, mismatch=-1)
EDIT_DISTANCE_GAPS = GapPenalty(-1)

# Standard BLOSUM62 as distributed by NCBI (ftp.ncbi.nih.gov/blast/matrices/BLOSUM62),
# restricted to the 20 standard amino acids.
BLOSUM62 = Scoring.from_table('ARNDCQEGHILKMFPSTWYV', [
    # A   R   N   D   C   Q   E   G   H   I   L   K   M   F   P   S   T   W   Y   V
    [ 4, -1, -2, -2,  0, -1, -1,  0, -2, -1, -1, -1, -1, -2, -1,  1,  0, -3, -2,  0],  # A
    [-1,  5,  0, -2, -3,  1,  0, -2,  0, -3, -2,  2, -1, -3, -2, -1, -1, -3, -2, -3],  # R
    [-2,  0,  6,  1, -3,  0,  0,  0,  1, -3, -3,  0, -2, -3, -2,  1,  0, -4, -2, -3],  # N
    [-2, -2,  1,  6, -3,  0,  2, -1, -1, -3, -4, -1, -3, -3, -1,  0, -1, -4, -3, -3],  # D
    [ 0, -3, -3, -3,  9, -3, -4, -3, -3, -1, -1, -3, -1, -2, -3, -1, -1, -2, -2, -1],  # C
    [-1,  1,  0,  0, -3,  5,  2, -2,  0, -3, -2,  1,  0, -3, -1,  0, -1, -2, -1, -2],  # Q
    [-1,  0,  0,  2, -4,  2,  5, -2,  0, -3, -3,  1, -2, -3, -1,  0, -1, -3, -2, -2],  # E
    [ 0, -2,  0, -1, -3, -2, -2,  6, -2, -4, -4, -2, -3, -3, -2,  0, -2, -2, -3, -3],  # G
    [-2,  0,  1, -1, -3,  0,  0, -2,  8, -3, -3, -1, -2, -1, -2, -1, -2, -2,  2, -3],  # H
    [-1, -3, -3, -3, -1, -3, -3, -4, -3,  4,  2, -3,  1,  0, -3, -2, -1, -3, -1,  3],  # I
    [-1, -2, -3, -4, -1, -2, -3, -4, -3,  2,  4, -2,  2,  0, -3, -2, -1, -2, -1,  1],  # L
    [-1,  2,  0, -1, -3,  1,  1, -2, -1, -3, -2,  5, -1, -3, -1,  0, -1, -3, -2, -2],  # K
    [-1, -1, -2, -3, -1,  0, -2, -3, -2,  1,  2, -1,  5,  0, -2, -1, -1, -1, -1,  1],  # M
    [-2, -3, -3, -3, -2, -3, -3, -3, -1,  0,  0, -3,  0,  6, -4, -2, -2,  1,  3, -1],  # F
    [-1, -2, -2, -1, -3, -1, -1, -2, -2, -3, -3, -1, -2, -4,  7, -1, -1, -4, -3, -2],  # P
    [ 1, -1,  1,  0, -1,  0,  0,  0, -1, -2, -2,  0, -1, -2, -1,  4,  1, -3, -2, -2],  # S
    [ 0, -1,  0, -1, -1, -1, -1, -2, -2, -1, -1, -1, -1, -2, -1,  1,  5, -2, -2,  0],  # T
    [-3, -3, -4, -4, -2, -2, -3, -2, -2, -3, -2, -3, -1,  1, -4, -3, -2, 11,  2, -3],  # W
    [-2, -2, -2, -3, -2, -1, -2, -3,  2, -1, -1, -2, -1,  3, -3, -2, -2,  2,  7, -1],  # Y
    [ 0, -3, -3, -3, -1, -2, -2, -3, -3,  3,  1, -2,  1, -1, -2, -2,  0, -3, -1,  4],  # V
])
