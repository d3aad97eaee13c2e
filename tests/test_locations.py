"""Tests for LocationLoader."""

import json

import pytest

from farmplanner.errors import LocationLoadError, LocationNotFoundError
from farmplanner.locations import LocationLoader


@pytest.mark.asyncio
async def test_loader_reads_manifest_and_locations(data_dir):
    loader = LocationLoader(data_dir)
    assert loader.loaded is False

    locations = await loader.load()

    assert loader.loaded is True
    assert list(locations) == ["farm", "cellar"]
    farm = loader.get_location("farm")
    assert farm.key == "farm"
    assert (farm.grid_width, farm.grid_height) == (10, 10)
    assert farm.blocked_areas[0].width == 10
    assert farm.placements[0].id == "seed-coop"
    assert loader.get_location("cellar").indoors is True


@pytest.mark.asyncio
async def test_get_location_returns_independent_copies(data_dir):
    loader = LocationLoader(data_dir)
    await loader.load()

    edited = loader.get_location("farm")
    edited.placements.clear()

    assert len(loader.get_location("farm").placements) == 1


@pytest.mark.asyncio
async def test_bounds_and_summaries(data_dir):
    loader = LocationLoader(data_dir)
    await loader.load()

    bounds = loader.get_bounds("cellar")
    assert (bounds.grid_width, bounds.grid_height, bounds.indoors) == (6, 6, True)

    summaries = loader.available_locations()
    assert [(s.key, s.name) for s in summaries] == [("farm", "Farm"), ("cellar", "Cellar")]


@pytest.mark.asyncio
async def test_unknown_key_raises(data_dir):
    loader = LocationLoader(data_dir)
    await loader.load()
    with pytest.raises(LocationNotFoundError) as excinfo:
        loader.get_location("mines")
    assert str(excinfo.value) == "Unknown location 'mines'"
    with pytest.raises(KeyError):
        loader.get_bounds("mines")


def test_access_before_load_raises(data_dir):
    loader = LocationLoader(data_dir)
    with pytest.raises(LocationLoadError):
        loader.get_location("farm")
    with pytest.raises(LocationLoadError):
        loader.available_locations()


@pytest.mark.asyncio
async def test_missing_manifest_is_fatal(tmp_path):
    loader = LocationLoader(tmp_path)
    with pytest.raises(LocationLoadError) as excinfo:
        await loader.load()
    assert excinfo.value.reason == "file not found"
    assert loader.loaded is False


@pytest.mark.asyncio
async def test_missing_location_file_is_fatal(data_dir):
    (data_dir / "locations-manifest.json").write_text(json.dumps(["farm", "mines"]), "utf-8")
    loader = LocationLoader(data_dir)
    with pytest.raises(LocationLoadError) as excinfo:
        await loader.load()
    assert excinfo.value.source == data_dir / "locations" / "mines.json"


@pytest.mark.asyncio
async def test_invalid_location_is_fatal(data_dir):
    (data_dir / "locations" / "cellar.json").write_text(json.dumps({"gridWidth": 0, "gridHeight": 4}), "utf-8")
    loader = LocationLoader(data_dir)
    with pytest.raises(LocationLoadError):
        await loader.load()


@pytest.mark.asyncio
async def test_manifest_must_be_a_list(data_dir):
    (data_dir / "locations-manifest.json").write_text(json.dumps({"farm": True}), "utf-8")
    with pytest.raises(LocationLoadError):
        await LocationLoader(data_dir).load()
