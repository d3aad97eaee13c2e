"""Tests for grid geometry helpers."""

import pytest

from farmplanner.environment import (
    Rect,
    TileGrid,
    cells_outside,
    first_blocked_cell,
    footprint_rect,
    footprints_intersect,
    to_grid,
)


def test_to_grid_floors_including_negative_pixels():
    assert to_grid(0, 32) == 0
    assert to_grid(31.9, 32) == 0
    assert to_grid(32, 32) == 1
    # Dragging past the canvas edge must not truncate toward zero
    assert to_grid(-1, 32) == -1


def test_tile_grid_round_trip_of_cell_origin():
    grid = TileGrid(tile_size=32)
    assert grid.to_cell((101, 100)) == (3, 3)
    assert grid.cell_origin((3, 3)) == (96, 96)
    assert grid.pixel_size(10, 5) == (320, 160)

    with pytest.raises(ValueError):
        TileGrid(tile_size=0)


def test_rect_cell_containment_is_half_open():
    rect = Rect(x=2, y=3, width=2, height=1)
    assert rect.contains_cell(2, 3)
    assert rect.contains_cell(3, 3)
    assert not rect.contains_cell(4, 3)  # right edge exclusive
    assert not rect.contains_cell(2, 4)  # bottom edge exclusive
    assert list(rect.cells()) == [(2, 3), (3, 3)]


def test_footprint_rect_clamps_to_single_cell():
    assert footprint_rect(5, 5, 0, 0) == Rect(x=5, y=5, width=1, height=1)
    assert footprint_rect(1, 2, 3, 2) == Rect(x=1, y=2, width=3, height=2)


def test_first_blocked_cell_uses_per_cell_union():
    # L-shaped blocked union; (7,7) is inside its bounding box but free
    blocked = [Rect(x=6, y=6, width=2, height=1), Rect(x=6, y=7, width=1, height=1)]

    assert first_blocked_cell(footprint_rect(7, 7), blocked) is None
    assert first_blocked_cell(footprint_rect(5, 7, 2, 1), blocked) == (6, 7)
    assert first_blocked_cell(footprint_rect(0, 0), []) is None


def test_footprints_intersect():
    coop = footprint_rect(2, 2, 3, 2)  # cells x 2..4, y 2..3
    assert footprints_intersect(coop, footprint_rect(4, 3))
    assert not footprints_intersect(coop, footprint_rect(5, 2))
    assert not footprints_intersect(coop, footprint_rect(2, 4, 3, 1))


def test_cells_outside():
    assert cells_outside(footprint_rect(8, 8, 2, 2), 10, 10) == []
    assert cells_outside(footprint_rect(9, 9, 2, 1), 10, 10) == [(10, 9)]
    assert cells_outside(footprint_rect(-1, 0), 10, 10) == [(-1, 0)]
