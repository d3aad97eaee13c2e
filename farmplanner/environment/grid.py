"""Pixel/grid conversion for the editing canvas.

Pointer events arrive in canvas pixels; placements live in grid cells.
Conversion is a pure floor-division by a fixed tile size, so negative
pixels (pointer dragged past the canvas edge) map to negative cells
instead of being truncated toward zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

Pixel = Tuple[float, float]
Cell = Tuple[int, int]


def to_grid(pixel: float, tile_size: int) -> int:
    """Return the grid coordinate containing ``pixel``."""
    return math.floor(pixel / tile_size)


@dataclass(frozen=True)
class TileGrid:
    """Fixed tile size plus helpers to move between pixels and cells."""

    tile_size: int

    def __post_init__(self) -> None:
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")

    def to_cell(self, pos: Pixel) -> Cell:
        return to_grid(pos[0], self.tile_size), to_grid(pos[1], self.tile_size)

    def cell_origin(self, cell: Cell) -> Tuple[int, int]:
        """Top-left pixel corner of ``cell``."""
        return cell[0] * self.tile_size, cell[1] * self.tile_size

    def pixel_size(self, grid_width: int, grid_height: int) -> Tuple[int, int]:
        return grid_width * self.tile_size, grid_height * self.tile_size
