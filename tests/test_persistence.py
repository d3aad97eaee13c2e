"""Tests for layout persistence backends."""

import json

import pytest

from farmplanner.persistence import InMemoryLayoutPersistence, JsonLayoutPersistence
from farmplanner.schemas import Placement, SavedLayout


def make_layout(key: str = "farm") -> SavedLayout:
    return SavedLayout(
        location_key=key,
        placements=[
            Placement(id="p1", object_key="coop", grid_x=2, grid_y=2, layer="buildings"),
            Placement(id="p2", object_key="crate", grid_x=5, grid_y=5),
        ],
    )


@pytest.mark.asyncio
async def test_in_memory_persistence_round_trip():
    persistence = InMemoryLayoutPersistence()
    await persistence.initialize()

    layout = make_layout()
    await persistence.save_layout(layout)
    # Later edits to the caller's object are not saved
    layout.placements[0].grid_x = 9

    restored = await persistence.load_layout("farm")
    assert restored.placements[0].grid_x == 2
    assert await persistence.load_layout("greenhouse") is None

    await persistence.save_layout(make_layout("greenhouse"))
    assert await persistence.list_layouts() == ["farm", "greenhouse"]

    await persistence.delete_layout("farm")
    await persistence.delete_layout("farm")
    assert await persistence.list_layouts() == ["greenhouse"]
    await persistence.close()


@pytest.mark.asyncio
async def test_json_persistence_writes_camel_case_files(tmp_path):
    persistence = JsonLayoutPersistence(tmp_path / "layouts")
    await persistence.initialize()

    await persistence.save_layout(make_layout())

    payload = json.loads((tmp_path / "layouts" / "farm.json").read_text("utf-8"))
    assert payload["locationKey"] == "farm"
    assert payload["placements"][0] == {
        "id": "p1",
        "objectKey": "coop",
        "gridX": 2,
        "gridY": 2,
        "layer": "buildings",
    }

    restored = await persistence.load_layout("farm")
    assert restored == make_layout()


@pytest.mark.asyncio
async def test_json_persistence_list_and_delete(tmp_path):
    persistence = JsonLayoutPersistence(tmp_path)
    assert await persistence.load_layout("farm") is None

    await persistence.save_layout(make_layout("greenhouse"))
    await persistence.save_layout(make_layout("farm"))
    assert await persistence.list_layouts() == ["farm", "greenhouse"]

    await persistence.delete_layout("greenhouse")
    await persistence.delete_layout("greenhouse")
    assert await persistence.list_layouts() == ["farm"]


@pytest.mark.asyncio
async def test_json_persistence_missing_directory_lists_nothing(tmp_path):
    persistence = JsonLayoutPersistence(tmp_path / "never-created")
    assert await persistence.list_layouts() == []
