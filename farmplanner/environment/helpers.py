"""Utilities for footprint geometry on the placement grid."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .schemas import Rect


def footprint_rect(grid_x: int, grid_y: int, width: int = 1, height: int = 1) -> Rect:
    """Return the rect of cells occupied by a footprint anchored at (grid_x, grid_y).

    Width/height below 1 are clamped to 1: every footprint occupies its anchor cell.
    """
    return Rect(x=grid_x, y=grid_y, width=max(int(width), 1), height=max(int(height), 1))


def first_blocked_cell(footprint: Rect, blocked_areas: Iterable[Rect]) -> Optional[Tuple[int, int]]:
    """Return the first footprint cell contained in any blocked rect, or None.

    Containment is tested cell by cell against each rect, never against the bounding
    box of the blocked union.
    """
    areas = list(blocked_areas)
    if not areas:
        return None
    for cell_x, cell_y in footprint.cells():
        for blocked in areas:
            if blocked.contains_cell(cell_x, cell_y):
                return cell_x, cell_y
    return None


def footprints_intersect(a: Rect, b: Rect) -> bool:
    """Return True if the two footprints share at least one cell.

    Walks the cells of ``a`` and asks ``b`` for containment, matching the per-cell
    rule used for blocked terrain. Zero-area rects never intersect anything.
    """
    for cell_x, cell_y in a.cells():
        if b.contains_cell(cell_x, cell_y):
            return True
    return False


def cells_outside(footprint: Rect, grid_width: int, grid_height: int) -> List[Tuple[int, int]]:
    """Return footprint cells that fall outside a ``grid_width`` x ``grid_height`` grid."""
    return [
        (cell_x, cell_y)
        for cell_x, cell_y in footprint.cells()
        if not (0 <= cell_x < grid_width and 0 <= cell_y < grid_height)
    ]
