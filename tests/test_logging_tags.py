"""Tests for logging tags and debug flags in placement output.

These tests assert that:
- Validation decisions print [•] lines only when DEBUG_PLACEMENT is set
- A rejected drop always prints a [?] warning naming the reason
- FARMPLANNER_NO_COLOR strips ANSI codes
"""

from __future__ import annotations

import pytest

from farmplanner.drag import DragSession
from farmplanner.logging_utils import (
    LOG_TAG_DETERMINISTIC,
    LOG_TAG_WARNING,
    Color,
    colored,
)
from farmplanner.schemas import Placement, PlacementCandidate
from farmplanner.store import PlacementStore
from farmplanner.validation import CollisionValidator


def test_colored_respects_no_color(monkeypatch):
    monkeypatch.delenv("FARMPLANNER_NO_COLOR", raising=False)
    assert colored("hi", Color.GREEN) == f"{Color.GREEN.value}hi{Color.RESET.value}"
    assert colored("hi", Color.RED, bold=True).startswith(Color.BOLD.value)

    monkeypatch.setenv("FARMPLANNER_NO_COLOR", "1")
    assert colored("hi", Color.GREEN) == "hi"


@pytest.mark.asyncio
async def test_validation_logs_only_with_debug_flag(catalog, farm, capsys, monkeypatch):
    monkeypatch.setenv("FARMPLANNER_NO_COLOR", "1")
    validator = CollisionValidator(catalog)
    candidate = PlacementCandidate(object_key="crate", grid_x=6, grid_y=6)

    monkeypatch.delenv("DEBUG_PLACEMENT", raising=False)
    await validator.validate_placement(candidate, farm)
    assert capsys.readouterr().out == ""

    monkeypatch.setenv("DEBUG_PLACEMENT", "1")
    await validator.validate_placement(candidate, farm)
    out = capsys.readouterr().out
    assert LOG_TAG_DETERMINISTIC in out
    assert "[Validate] crate at [6, 6] on 'objects': rejected (BlockedTerrain)" in out


@pytest.mark.asyncio
async def test_rejected_drop_prints_warning(catalog, farm, capsys, monkeypatch):
    monkeypatch.setenv("FARMPLANNER_NO_COLOR", "1")
    monkeypatch.delenv("DEBUG_DRAG", raising=False)
    farm.placements.append(Placement(id="crate-1", object_key="crate", grid_x=3, grid_y=3))
    validator = CollisionValidator(catalog)
    session = DragSession(validator, PlacementStore(validator), tile_size=16)

    await session.pointer_down(farm, (50, 50), "objects")
    await session.pointer_up((3, 3))

    out = capsys.readouterr().out
    assert LOG_TAG_WARNING in out
    assert "Drop of crate-1 at [0, 0] rejected: Placement blocked by terrain; kept at [3, 3]" in out
