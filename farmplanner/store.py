"""
PlacementStore: the only writer of a location's placements.

Every insert and every move passes through ``CollisionValidator`` first; a
rejected operation leaves ``location.placements`` exactly as it was and hands
back the reason. Successful mutations fire ``RenderNotifier.changed``.
"""

from typing import Callable, Iterable, Optional
from uuid import uuid4

from .errors import PlacementNotFoundError
from .logging_utils import LOG_TAG_SUCCESS, debug_enabled, log_success
from .notifier import NullNotifier, RenderNotifier
from .schemas import (
    Location,
    Placement,
    PlacementCandidate,
    PlacementResult,
)
from .validation import CollisionValidator


def new_placement_id() -> str:
    """Default id factory. UUIDs are never reused, even across sessions."""
    return str(uuid4())


class PlacementStore:
    """Validated mutation of ``Location.placements``.

    Ids come from ``id_factory`` (owned by this store) so a session controls its
    own id space; the default factory issues UUIDs.
    """

    def __init__(
        self,
        validator: CollisionValidator,
        notifier: Optional[RenderNotifier] = None,
        id_factory: Callable[[], str] = new_placement_id,
    ):
        self.validator = validator
        self.notifier = notifier or NullNotifier()
        self.id_factory = id_factory

    async def place(
        self,
        location: Location,
        object_key: str,
        grid_x: int,
        grid_y: int,
        layer: str,
    ) -> PlacementResult:
        """Validate and append a new placement.

        Returns:
            PlacementResult with the new id on success, or the rejection reason
        """
        candidate = PlacementCandidate(object_key=object_key, grid_x=grid_x, grid_y=grid_y, layer=layer)
        validation = await self.validator.validate_placement(candidate, location)
        if not validation.valid:
            return PlacementResult.failure(validation.reason)

        placement = Placement(
            id=self.id_factory(),
            object_key=object_key,
            grid_x=grid_x,
            grid_y=grid_y,
            layer=layer,
        )
        location.placements.append(placement)
        if debug_enabled("DEBUG_PLACEMENT"):
            log_success(f"  {LOG_TAG_SUCCESS} [Store] Placed {object_key} at [{grid_x}, {grid_y}] ({placement.id})")
        self.notifier.changed(location.key)
        return PlacementResult.success(placement.id)

    def remove(self, location: Location, grid_x: int, grid_y: int, layer: str) -> bool:
        """Remove the placement anchored exactly at (grid_x, grid_y) on ``layer``.

        Only the anchor cell matches; clicking elsewhere on a large footprint removes
        nothing. Returns whether something was removed.
        """
        placement = self.anchored_at(location, grid_x, grid_y, layer)
        if placement is None:
            return False

        index = next(i for i, p in enumerate(location.placements) if p is placement)
        del location.placements[index]
        if debug_enabled("DEBUG_PLACEMENT"):
            log_success(f"  {LOG_TAG_SUCCESS} [Store] Removed {placement.id} at [{grid_x}, {grid_y}]")
        self.notifier.changed(location.key)
        return True

    @staticmethod
    def anchored_at(location: Location, grid_x: int, grid_y: int, layer: str) -> Optional[Placement]:
        """First placement anchored exactly at (grid_x, grid_y) on ``layer``; the one ``remove`` deletes."""
        for placement in location.placements:
            if placement.grid_x == grid_x and placement.grid_y == grid_y and placement.layer == layer:
                return placement
        return None

    async def move(
        self,
        location: Location,
        placement_id: str,
        new_grid_x: int,
        new_grid_y: int,
    ) -> PlacementResult:
        """Validate and move an existing placement in place.

        The placement is excluded from its own overlap check; key and layer are the
        placement's own.

        Raises:
            PlacementNotFoundError: If ``placement_id`` is not in ``location``
        """
        placement = self.get(location, placement_id)
        candidate = PlacementCandidate(
            object_key=placement.object_key,
            grid_x=new_grid_x,
            grid_y=new_grid_y,
            layer=placement.layer,
        )
        validation = await self.validator.validate_placement(candidate, location, exclude_id=placement_id)
        if not validation.valid:
            return PlacementResult.failure(validation.reason, placement_id=placement_id)

        placement.grid_x = new_grid_x
        placement.grid_y = new_grid_y
        if debug_enabled("DEBUG_PLACEMENT"):
            log_success(f"  {LOG_TAG_SUCCESS} [Store] Moved {placement_id} to [{new_grid_x}, {new_grid_y}]")
        self.notifier.changed(location.key)
        return PlacementResult.success(placement_id)

    def replace_all(self, location: Location, placements: Iterable[Placement]) -> None:
        """Swap in a whole placement list (layout load). No validation: saved data is trusted."""
        location.placements = [placement.model_copy() for placement in placements]
        self.notifier.changed(location.key)

    @staticmethod
    def get(location: Location, placement_id: str) -> Placement:
        placement = location.find_placement(placement_id)
        if placement is None:
            raise PlacementNotFoundError(placement_id, location.key)
        return placement
