"""Shared fixtures: a small catalog, a 10x10 outdoor location and on-disk editor data."""

import asyncio
import json
from pathlib import Path

import pytest

from farmplanner.catalog import InMemoryCatalog
from farmplanner.environment import Rect
from farmplanner.schemas import Location, ObjectDefinition


DEFINITIONS = [
    ObjectDefinition(key="crate", name="Crate", category="decor"),
    ObjectDefinition(key="bench", name="Wooden Bench", category="decor", footprint_width=2),
    ObjectDefinition(
        key="coop",
        name="Coop",
        category="buildings",
        footprint_width=3,
        footprint_height=2,
        placeable_indoors=False,
        default_layer="buildings",
    ),
    ObjectDefinition(key="lamp", name="Lamp", category="decor"),
    ObjectDefinition(key="stone_path", name="Stone Path", category="decor", default_layer="paths"),
    ObjectDefinition(key="wallpaper_floral", name="Floral Wallpaper", category="wallpaper"),
]


class GatedCatalog(InMemoryCatalog):
    """In-memory catalog whose lookups can be held until the test releases them.

    While ``paused`` every lookup parks on its own asyncio.Event (appended to
    ``gates`` in call order), which lets tests resolve lookups out of order.
    """

    def __init__(self, definitions=DEFINITIONS):
        super().__init__(definitions)
        self.paused = False
        self.gates: list[asyncio.Event] = []
        self.calls: list[str] = []

    async def get_definition(self, object_key):
        self.calls.append(object_key)
        if self.paused:
            gate = asyncio.Event()
            self.gates.append(gate)
            await gate.wait()
        return await super().get_definition(object_key)


async def settle() -> None:
    """Let scheduled tasks run until they block."""
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.fixture
def catalog() -> InMemoryCatalog:
    return InMemoryCatalog(DEFINITIONS)


@pytest.fixture
def gated_catalog() -> GatedCatalog:
    return GatedCatalog()


@pytest.fixture(name="settle")
def settle_fixture():
    return settle


@pytest.fixture
def farm() -> Location:
    # Row 0 is blocked, plus an L-shaped pond: (6,6), (7,6) and (6,7).
    # Cell (7,7) is free even though it sits inside the pond's bounding box.
    return Location(
        key="farm",
        name="Farm",
        grid_width=10,
        grid_height=10,
        indoors=False,
        blocked_areas=[
            Rect(x=0, y=0, width=10, height=1),
            Rect(x=6, y=6, width=2, height=1),
            Rect(x=6, y=7, width=1, height=1),
        ],
    )


@pytest.fixture
def cellar() -> Location:
    return Location(key="cellar", name="Cellar", grid_width=6, grid_height=6, indoors=True)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Editor data on disk: catalog category files plus two locations."""
    (tmp_path / "decor.json").write_text(
        json.dumps(
            {
                "crate": {"name": "Crate"},
                "bench": {"name": "Wooden Bench", "footprintWidth": 2},
                "stone_path": {"name": "Stone Path", "defaultLayer": "paths"},
            }
        ),
        "utf-8",
    )
    (tmp_path / "buildings.json").write_text(
        json.dumps(
            {
                "coop": {
                    "name": "Coop",
                    "footprintWidth": 3,
                    "footprintHeight": 2,
                    "placeableIndoors": False,
                    "defaultLayer": "buildings",
                    "sprite": ["coop_spring.png", "coop_winter.png"],
                }
            }
        ),
        "utf-8",
    )
    (tmp_path / "locations-manifest.json").write_text(json.dumps(["farm", "cellar"]), "utf-8")
    locations = tmp_path / "locations"
    locations.mkdir()
    (locations / "farm.json").write_text(
        json.dumps(
            {
                "name": "Farm",
                "gridWidth": 10,
                "gridHeight": 10,
                "indoors": False,
                "blockedAreas": [{"x": 0, "y": 0, "width": 10, "height": 1}],
                "placements": [
                    {"id": "seed-coop", "objectKey": "coop", "gridX": 2, "gridY": 2, "layer": "buildings"}
                ],
            }
        ),
        "utf-8",
    )
    (locations / "cellar.json").write_text(
        json.dumps({"name": "Cellar", "gridWidth": 6, "gridHeight": 6, "indoors": True}),
        "utf-8",
    )
    return tmp_path
