"""Grid geometry for farmplanner locations."""

from .grid import Cell, Pixel, TileGrid, to_grid
from .schemas import Rect
from .helpers import (
    cells_outside,
    first_blocked_cell,
    footprint_rect,
    footprints_intersect,
)

__all__ = [
    "Cell",
    "Pixel",
    "TileGrid",
    "to_grid",
    "Rect",
    "cells_outside",
    "first_blocked_cell",
    "footprint_rect",
    "footprints_intersect",
]
