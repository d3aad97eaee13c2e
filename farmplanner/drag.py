"""
DragSession: pointer-driven drag of an existing placement.

Two states:
- IDLE: nothing held. ``pointer_down`` over a placement arms the session.
- ARMED: one placement held, plus the pixel offset from the pointer to the
  placement's anchor cell origin. The offset is captured once at arm time, so the
  object follows the grab point instead of snapping its corner to the pointer.

Event handling:
- pointer_down while ARMED cancels the held drag (no mutation) and then starts
  over as if IDLE. A lost pointer-up can therefore never leave a drag stuck.
- pointer_move validates the candidate cell and emits a preview. It never mutates.
- pointer_up commits through ``PlacementStore.move`` and always returns to IDLE.
  A rejected drop leaves the placement where it was (snap back).

Catalog lookups inside validation may suspend, so several pointer moves can be in
flight at once. Every pointer event and every cancel bumps a sequence number; a
validation that finishes after a newer event is discarded (last-issued wins, not
last-resolved).

Each editing surface owns its own DragSession; there is no module-level drag state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .config import Config
from .environment import Cell, Pixel, TileGrid
from .logging_utils import (
    LOG_TAG_DETERMINISTIC,
    LOG_TAG_WARNING,
    debug_enabled,
    log_deterministic,
    log_warning,
)
from .notifier import NullNotifier, RenderNotifier
from .schemas import (
    CursorStyle,
    DragPreview,
    Location,
    PlacementCandidate,
    PlacementResult,
)
from .store import PlacementStore
from .validation import CollisionValidator


class DragState(str, Enum):
    IDLE = "idle"
    ARMED = "armed"


@dataclass
class ArmedDrag:
    """Everything an ARMED session holds."""

    placement_id: str
    location: Location
    offset_x: float  # pointer x minus anchor cell's left pixel edge
    offset_y: float
    origin: Cell     # anchor at arm time


class DragSession:
    """State machine turning pointer events into previews and committed moves."""

    def __init__(
        self,
        validator: CollisionValidator,
        store: PlacementStore,
        notifier: Optional[RenderNotifier] = None,
        tile_size: Optional[int] = None,
    ):
        self.validator = validator
        self.store = store
        self.notifier = notifier or NullNotifier()
        self.grid = TileGrid(tile_size or Config.TILE_SIZE)
        self.last_preview: Optional[DragPreview] = None
        self._armed: Optional[ArmedDrag] = None
        self._sequence = 0

    @property
    def state(self) -> DragState:
        return DragState.ARMED if self._armed is not None else DragState.IDLE

    @property
    def is_armed(self) -> bool:
        return self._armed is not None

    @property
    def armed(self) -> Optional[ArmedDrag]:
        return self._armed

    @property
    def held_placement_id(self) -> Optional[str]:
        return self._armed.placement_id if self._armed else None

    async def pointer_down(self, location: Location, pos: Pixel, layer: str) -> bool:
        """Try to grab the placement under ``pos`` on ``layer``.

        Returns:
            True if the session is now ARMED, False if nothing was grabbed
        """
        if self._armed is not None:
            self.cancel()

        self._sequence += 1
        sequence = self._sequence
        cell = self.grid.to_cell(pos)
        placement = await self.validator.placement_at(location, cell[0], cell[1], layer)

        # Superseded by a newer pointer down or a cancel while hit-testing
        if sequence != self._sequence:
            return False
        if placement is None:
            return False

        origin_x, origin_y = self.grid.cell_origin(placement.anchor)
        self._armed = ArmedDrag(
            placement_id=placement.id,
            location=location,
            offset_x=pos[0] - origin_x,
            offset_y=pos[1] - origin_y,
            origin=placement.anchor,
        )
        if debug_enabled("DEBUG_DRAG"):
            log_deterministic(
                f"  {LOG_TAG_DETERMINISTIC} [Drag] Started dragging placement {placement.id} "
                f"from [{cell[0]}, {cell[1]}]"
            )
        self.notifier.cursor(CursorStyle.GRABBING)
        return True

    async def pointer_move(self, pos: Pixel) -> Optional[DragPreview]:
        """Validate the candidate cell under the held offset and emit a preview.

        Returns:
            The emitted preview, or None when IDLE or superseded by a newer event
        """
        armed = self._armed
        if armed is None:
            return None

        self._sequence += 1
        sequence = self._sequence
        placement = armed.location.find_placement(armed.placement_id)
        if placement is None:
            # Held placement was removed from under the drag
            self.cancel()
            return None

        grid_x, grid_y = self.candidate_cell(pos)
        candidate = PlacementCandidate(
            object_key=placement.object_key,
            grid_x=grid_x,
            grid_y=grid_y,
            layer=placement.layer,
        )
        result = await self.validator.validate_placement(
            candidate, armed.location, exclude_id=armed.placement_id
        )

        if sequence != self._sequence or self._armed is not armed:
            return None

        preview = DragPreview(
            placement_id=armed.placement_id,
            grid_x=grid_x,
            grid_y=grid_y,
            valid=result.valid,
            reason=result.reason,
        )
        if debug_enabled("DEBUG_DRAG"):
            log_deterministic(
                f"  {LOG_TAG_DETERMINISTIC} [Drag] Dragging to provisional grid: [{grid_x}, {grid_y}] "
                f"({'valid' if result.valid else result.reason.value})"
            )
        self.last_preview = preview
        self.notifier.preview(preview)
        return preview

    async def pointer_up(self, pos: Pixel) -> Optional[PlacementResult]:
        """Drop the held placement at the cell under ``pos`` and return to IDLE.

        Returns:
            The store's PlacementResult, or None if the session was IDLE
        """
        armed = self._armed
        if armed is None:
            return None
        if armed.location.find_placement(armed.placement_id) is None:
            # Held placement was removed from under the drag
            self.cancel()
            return None

        grid_x, grid_y = self.candidate_cell(pos)
        self._sequence += 1
        # No committing state: the drop is synchronous with pointer up
        self._armed = None
        self.last_preview = None

        try:
            result = await self.store.move(armed.location, armed.placement_id, grid_x, grid_y)
        finally:
            self.notifier.preview(None)
            # A new drag may have been armed while the move was validating
            if self._armed is None:
                self.notifier.cursor(CursorStyle.DEFAULT)

        if result.ok:
            if debug_enabled("DEBUG_DRAG"):
                log_deterministic(
                    f"  {LOG_TAG_DETERMINISTIC} [Drag] Dropped {armed.placement_id} at [{grid_x}, {grid_y}]"
                )
        else:
            log_warning(
                f"  {LOG_TAG_WARNING} [Drag] Drop of {armed.placement_id} at [{grid_x}, {grid_y}] "
                f"rejected: {result.reason.message}; kept at [{armed.origin[0]}, {armed.origin[1]}]"
            )
            # Store did not mutate; redraw so the object snaps back to its cell
            self.notifier.changed(armed.location.key)
        return result

    def cancel(self) -> bool:
        """Discard the held drag without touching the store.

        Returns:
            True if an ARMED drag was discarded
        """
        self._sequence += 1
        armed = self._armed
        if armed is None:
            return False

        self._armed = None
        self.last_preview = None
        if debug_enabled("DEBUG_DRAG"):
            log_deterministic(f"  {LOG_TAG_DETERMINISTIC} [Drag] Cancelled drag of {armed.placement_id}")
        self.notifier.preview(None)
        self.notifier.cursor(CursorStyle.DEFAULT)
        return True

    def candidate_cell(self, pos: Pixel) -> Tuple[int, int]:
        """Cell the held placement's anchor would occupy with the pointer at ``pos``."""
        armed = self._armed
        if armed is None:
            return self.grid.to_cell(pos)
        return self.grid.to_cell((pos[0] - armed.offset_x, pos[1] - armed.offset_y))
