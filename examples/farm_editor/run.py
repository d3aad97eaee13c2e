"""
Farm Editor Walkthrough

Scripted editing session over the bundled data/ directory: places a few
objects, drags one around (including a drop onto blocked terrain that snaps
back), saves the layout and prints an ASCII view after every committed change.

Usage:
    # Default: edit the farm, save layouts to ./layouts
    python examples/farm_editor/run.py

    # Another location
    python examples/farm_editor/run.py --location greenhouse

    # Print every validation and drag transition
    python examples/farm_editor/run.py --debug
"""

import argparse
import asyncio
import os

from farmplanner import (
    EditorSession,
    JsonCatalog,
    JsonLayoutPersistence,
    ListenerNotifier,
    LocationLoader,
)
from farmplanner.config import Config

# Viewport drawn after each change (the farm is larger than a terminal)
VIEW_WIDTH = 24
VIEW_HEIGHT = 14

GLYPHS = {"buildings": "B", "objects": "o", "paths": "="}


def render(editor: EditorSession) -> str:
    """ASCII view of the top-left corner of the current location."""
    location = editor.current_location
    if location is None:
        return "(no location)"

    grid = [["." for _ in range(min(VIEW_WIDTH, location.grid_width))]
            for _ in range(min(VIEW_HEIGHT, location.grid_height))]
    for rect in location.blocked_areas:
        for x, y in rect.cells():
            if 0 <= y < len(grid) and 0 <= x < len(grid[0]):
                grid[y][x] = "#"

    # Footprints from the palette, loaded by start()
    for placement in location.placements:
        definition = editor.palette.definition(placement.object_key)
        width = definition.footprint_width if definition else 1
        height = definition.footprint_height if definition else 1
        glyph = GLYPHS.get(placement.layer, "?")
        for y in range(placement.grid_y, placement.grid_y + height):
            for x in range(placement.grid_x, placement.grid_x + width):
                if 0 <= y < len(grid) and 0 <= x < len(grid[0]):
                    grid[y][x] = glyph
    return "\n".join("".join(row) for row in grid)


def cell_center(editor: EditorSession, x: int, y: int):
    half = editor.tile_size // 2
    return x * editor.tile_size + half, y * editor.tile_size + half


async def main(location_key: str) -> None:
    Config.validate()
    print(Config.display())
    print()

    notifier = ListenerNotifier()
    editor = EditorSession(
        loader=LocationLoader(Config.DATA_DIR),
        catalog=JsonCatalog(Config.DATA_DIR),
        notifier=notifier,
        persistence=JsonLayoutPersistence(Config.LAYOUTS_DIR),
    )
    notifier.on_changed(lambda key: print(f"\n[{key}]\n{render(editor)}"))
    notifier.on_preview(
        lambda preview: preview and print(
            f"  ghost at [{preview.grid_x}, {preview.grid_y}] "
            f"{'ok' if preview.valid else preview.reason.message}"
        )
    )

    await editor.start(location_key)
    for summary in editor.available_locations():
        print(f"  {summary.key}: {summary.name} ({summary.grid_width}x{summary.grid_height})")

    editor.select_object("stone_path")
    for x in range(4, 10):
        await editor.place_selected((x, 9))

    editor.select_object("keg")
    result = await editor.place_selected((5, 6))
    print(f"Place keg: {'ok' if result.ok else result.reason.message}")

    # Drag the keg three cells right, then try to drop it on blocked terrain
    await editor.pointer_down(cell_center(editor, 5, 6))
    await editor.pointer_move(cell_center(editor, 7, 6))
    await editor.pointer_up(cell_center(editor, 8, 6))

    await editor.pointer_down(cell_center(editor, 8, 6))
    await editor.pointer_move(cell_center(editor, 8, 1))
    result = await editor.pointer_up(cell_center(editor, 8, 1))
    print(f"Drop on terrain: {'ok' if result.ok else result.reason.message}")

    layout = await editor.save_layout()
    print(f"\nSaved {len(layout.placements)} placements to {Config.LAYOUTS_DIR / (layout.location_key + '.json')}")
    await editor.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Scripted farm editor session")
    parser.add_argument("--location", default="farm", help="Location key from locations-manifest.json")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG_PLACEMENT and DEBUG_DRAG output")
    args = parser.parse_args()

    if args.debug:
        os.environ["DEBUG_PLACEMENT"] = "1"
        os.environ["DEBUG_DRAG"] = "1"

    asyncio.run(main(args.location))
