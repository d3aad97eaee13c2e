"""Tests for palette browsing and selection."""

import pytest

from farmplanner.palette import Palette


@pytest.mark.asyncio
async def test_palette_groups_by_category(catalog):
    palette = Palette(catalog)
    assert await palette.load() == 6

    assert palette.categories() == ["decor", "buildings", "wallpaper"]
    assert palette.definition("coop").footprint_width == 3
    assert palette.definition("unicorn") is None
    assert [d.key for d in palette.objects_in("decor")] == ["crate", "bench", "lamp", "stone_path"]


@pytest.mark.asyncio
async def test_palette_search_is_case_insensitive(catalog):
    palette = Palette(catalog)
    await palette.load()

    assert [d.key for d in palette.search("decor", "BEN")] == ["bench"]
    assert [d.key for d in palette.search("decor", "path")] == ["stone_path"]
    assert palette.search("decor", "coop") == []
    assert len(palette.search("decor", "")) == 4


@pytest.mark.asyncio
async def test_select_uses_default_layer(catalog):
    palette = Palette(catalog)
    await palette.load()

    item = palette.select("stone_path")
    assert (item.object_key, item.layer) == ("stone_path", "paths")
    assert palette.selected == item

    with pytest.raises(KeyError):
        palette.select("unicorn")
    assert palette.selected == item

    palette.clear_selection()
    assert palette.selected is None
