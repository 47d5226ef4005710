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

Coordinate scheme for alignment grids.

A grid over sequences a (rows) and b (columns) has rows = len(a) + 1 and
cols = len(b) + 1 positions per layer. Cell ids are

    id = layer * rows * cols + row * cols + col

so one layer is a contiguous block of ids and the layer offset is a large
constant added to the in-layer id.
"""

from dataclasses import dataclass
from enum import IntEnum


class Layer(IntEnum):
    """Layers of an affine-gap grid. Linear grids only use DIAGONAL."""
    DIAGONAL = 0  # match/substitution layer (M)
    DOWN = 1      # vertical gaps, character of a against a gap (D)
    RIGHT = 2     # horizontal gaps, gap against a character of b (I)


@dataclass(frozen=True)
class GridCoordinates:
    """Bijection between (row, col, layer) and integer cell ids.

    Attributes:
        rows: Positions along a (len(a) + 1)
        cols: Positions along b (len(b) + 1)
        layers: 1 for linear gaps, 3 for affine gaps
    """
    rows: int
    cols: int
    layers: int = 1

    def __post_init__(self):
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"Grid needs at least one row and column, got {self.rows}x{self.cols}")
        if self.layers not in (1, len(Layer)):
            raise ValueError(f"Grid must have 1 or {len(Layer)} layers, got {self.layers}")

    @property
    def total(self):
        """Number of cells in one layer."""
        return self.rows * self.cols

    @property
    def size(self):
        """Number of cells over all layers."""
        return self.total * self.layers

    def to_id(self, row, col, layer=Layer.DIAGONAL):
        if not (0 <= row < self.rows and 0 <= col < self.cols and 0 <= layer < self.layers):
            raise IndexError(f"({row}, {col}, {layer}) is outside a "
                             f"{self.rows}x{self.cols}x{self.layers} grid")
        return layer * self.total + row * self.cols + col

    def from_id(self, cell_id):
        """Inverse of to_id.

        Returns:
            tuple: (row, col, Layer)
        """
        if not 0 <= cell_id < self.size:
            raise IndexError(f"cell id {cell_id} is outside a grid of {self.size} cells")
        layer, offset = divmod(cell_id, self.total)
        row, col = divmod(offset, self.cols)
        return row, col, Layer(layer)

    def normalize(self, cell_id):
        """Drop the layer offset, leaving the in-layer id."""
        return cell_id % self.total
