"""
EditorSession: one editing surface.

Wires the collaborators of a single editor together and owns its per-surface
state:
- the current location (and edited copies of every location visited, so
  switching back keeps unsaved edits)
- the active layer and the palette selection
- exactly one DragSession
- the in-flight location-switch guard

Fully injectable. Nothing here touches a UI toolkit: pointer positions come in as
canvas pixels, and everything visual goes out through the RenderNotifier.

Usage:
    editor = EditorSession(
        loader=LocationLoader(Config.DATA_DIR),
        catalog=JsonCatalog(Config.DATA_DIR),
        notifier=ListenerNotifier(changed_listeners=[redraw]),
        persistence=JsonLayoutPersistence(Config.LAYOUTS_DIR),
    )
    await editor.start("farm")
    editor.select_object("chicken_coop")
    await editor.place_selected((10, 12))
"""

from typing import Callable, Dict, List, Optional

from .catalog import MemoizedCatalog, ObjectCatalog
from .drag import DragSession
from .environment import Cell, Pixel
from .locations import LocationLoader
from .logging_utils import LOG_TAG_INFO, LOG_TAG_WARNING, log_info, log_warning
from .notifier import NullNotifier, RenderNotifier
from .palette import Palette
from .persistence import LayoutPersistence
from .schemas import (
    DEFAULT_LAYER,
    DragPreview,
    Location,
    LocationSummary,
    PlacementResult,
    ReasonCode,
    SavedLayout,
    SelectedItem,
)
from .store import PlacementStore, new_placement_id
from .validation import CollisionValidator


class EditorSession:
    """Placement editor for one surface: location context, selection and drag."""

    def __init__(
        self,
        loader: LocationLoader,
        catalog: ObjectCatalog,
        notifier: Optional[RenderNotifier] = None,
        persistence: Optional[LayoutPersistence] = None,
        tile_size: Optional[int] = None,
        enforce_bounds: Optional[bool] = None,
        id_factory: Callable[[], str] = new_placement_id,
    ):
        """Initialize editor with all dependencies injected.

        Args:
            loader: Source of location bounds and blocked terrain
            catalog: Object definitions; wrapped in MemoizedCatalog unless it already is one
            notifier: Render signals (defaults to NullNotifier)
            persistence: Optional layout storage for save_layout/load_layout
            tile_size: Pixel size of a cell (defaults to Config.TILE_SIZE)
            enforce_bounds: Reject off-grid footprints (defaults to Config.ENFORCE_BOUNDS)
            id_factory: Placement id generator owned by this session
        """
        self.loader = loader
        self.catalog = catalog if isinstance(catalog, MemoizedCatalog) else MemoizedCatalog(catalog)
        self.notifier = notifier or NullNotifier()
        self.persistence = persistence

        self.validator = CollisionValidator(self.catalog, enforce_bounds=enforce_bounds)
        self.store = PlacementStore(self.validator, self.notifier, id_factory=id_factory)
        self.drag = DragSession(self.validator, self.store, self.notifier, tile_size=tile_size)
        self.palette = Palette(self.catalog)

        self.active_layer: str = DEFAULT_LAYER
        self.current_location: Optional[Location] = None
        # Edited copies by key; the loader keeps the pristine data
        self._locations: Dict[str, Location] = {}
        self._switch_in_flight = False

    @property
    def tile_size(self) -> int:
        return self.drag.grid.tile_size

    @property
    def switching(self) -> bool:
        return self._switch_in_flight

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self, location_key: Optional[str] = None) -> None:
        """Load locations and the palette, open persistence, optionally enter a location.

        Raises:
            LocationLoadError / CatalogUnavailableError: If editor data is unreachable
        """
        await self.loader.load()
        count = await self.palette.load()
        if self.persistence is not None:
            await self.persistence.initialize()
        log_info(f"{LOG_TAG_INFO} [Editor] Palette initialized with {count} objects")
        if location_key is not None:
            await self.switch_location(location_key)

    async def close(self) -> None:
        self.drag.cancel()
        if self.persistence is not None:
            await self.persistence.close()

    def available_locations(self) -> List[LocationSummary]:
        return self.loader.available_locations()

    # ------------------------------------------------------------------
    # Location context
    # ------------------------------------------------------------------

    async def switch_location(self, key: str) -> bool:
        """Make ``key`` the current location.

        Any Armed drag is cancelled outright. While a switch is in flight, further
        switch requests are ignored (return False) and pointer events are dropped.

        Raises:
            LocationLoadError / LocationNotFoundError: The previous location stays current
        """
        if self._switch_in_flight:
            log_warning(f"{LOG_TAG_WARNING} [Editor] Switch to '{key}' ignored: another switch is in progress")
            return False

        self._switch_in_flight = True
        try:
            self.drag.cancel()
            location = await self._edited_location(key)
            self.current_location = location
        finally:
            self._switch_in_flight = False

        width, height = location.pixel_size(self.tile_size)
        log_info(f"{LOG_TAG_INFO} [Editor] Set location: {key} ({width}x{height}px)")
        self.notifier.changed(key)
        return True

    async def _edited_location(self, key: str) -> Location:
        location = self._locations.get(key)
        if location is None:
            await self.loader.load()
            location = self.loader.get_location(key)
            self._locations[key] = location
        return location

    def deselect(self) -> None:
        """Drop the palette selection and any Armed drag."""
        self.drag.cancel()
        self.palette.clear_selection()

    def select_object(self, object_key: str) -> SelectedItem:
        """Select a palette object; the active layer follows its default layer."""
        item = self.palette.select(object_key)
        self.active_layer = item.layer
        return item

    # ------------------------------------------------------------------
    # Direct edits
    # ------------------------------------------------------------------

    async def place(self, object_key: str, cell: Cell, layer: Optional[str] = None) -> PlacementResult:
        if self.current_location is None:
            return PlacementResult.failure(ReasonCode.NO_CURRENT_LOCATION)
        return await self.store.place(
            self.current_location, object_key, cell[0], cell[1], layer or self.active_layer
        )

    async def place_selected(self, cell: Cell) -> Optional[PlacementResult]:
        """Place the palette selection at ``cell``; None when nothing is selected."""
        selected = self.palette.selected
        if selected is None:
            return None
        return await self.place(selected.object_key, cell, selected.layer)

    def remove_at(self, cell: Cell, layer: Optional[str] = None) -> bool:
        location = self.current_location
        if location is None:
            return False
        layer = layer or self.active_layer
        target = self.store.anchored_at(location, cell[0], cell[1], layer)
        if target is not None and target.id == self.drag.held_placement_id:
            self.drag.cancel()
        return self.store.remove(location, cell[0], cell[1], layer)

    async def move(self, placement_id: str, cell: Cell) -> PlacementResult:
        if self.current_location is None:
            return PlacementResult.failure(ReasonCode.NO_CURRENT_LOCATION, placement_id=placement_id)
        return await self.store.move(self.current_location, placement_id, cell[0], cell[1])

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    async def pointer_down(self, pos: Pixel) -> bool:
        if self.current_location is None or self._switch_in_flight:
            return False
        return await self.drag.pointer_down(self.current_location, pos, self.active_layer)

    async def pointer_move(self, pos: Pixel) -> Optional[DragPreview]:
        if self._switch_in_flight:
            return None
        return await self.drag.pointer_move(pos)

    async def pointer_up(self, pos: Pixel) -> Optional[PlacementResult]:
        if self._switch_in_flight:
            return None
        return await self.drag.pointer_up(pos)

    # ------------------------------------------------------------------
    # Save / load
    # ------------------------------------------------------------------

    def snapshot(self) -> Optional[SavedLayout]:
        """Current location's placements as a SavedLayout (None without a location)."""
        location = self.current_location
        if location is None:
            return None
        return SavedLayout(
            location_key=location.key,
            placements=[placement.model_copy() for placement in location.placements],
        )

    async def save_layout(self) -> Optional[SavedLayout]:
        layout = self.snapshot()
        if layout is None:
            return None
        await self._require_persistence().save_layout(layout)
        log_info(f"{LOG_TAG_INFO} [Editor] Saved {len(layout.placements)} placements for '{layout.location_key}'")
        return layout

    async def load_layout(self, location_key: Optional[str] = None) -> bool:
        """Replace a location's placements with its stored layout.

        Args:
            location_key: Location to restore; defaults to the current location

        Returns:
            False if there is no target location or nothing was stored for it
        """
        key = location_key or (self.current_location.key if self.current_location else None)
        if key is None:
            return False
        layout = await self._require_persistence().load_layout(key)
        if layout is None:
            return False

        location = await self._edited_location(key)
        if location is self.current_location:
            self.drag.cancel()
        self.store.replace_all(location, layout.placements)
        log_info(f"{LOG_TAG_INFO} [Editor] Loaded {len(layout.placements)} placements for '{key}'")
        return True

    def _require_persistence(self) -> LayoutPersistence:
        if self.persistence is None:
            raise ValueError(
                "EditorSession has no persistence backend. "
                "Pass persistence=JsonLayoutPersistence(...) or InMemoryLayoutPersistence()."
            )
        return self.persistence
