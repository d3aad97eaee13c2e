"""
Collision validation for candidate placements.

``CollisionValidator.validate_placement`` is the single decision point for
"may this object occupy these cells?". It is used for new placements, for
committed moves and for every live drag preview.

Checks run in a fixed order and the first failure wins:
1. MissingDefinition  - object key not in the catalog
2. CategoryRestricted - wallpaper/flooring use their own placement path
3. BlockedTerrain     - a footprint cell lies in a blocked rect
4. Overlap            - a footprint cell is occupied on the same layer
5. IndoorRestriction  - outdoor-only object in an indoor location
6. OutOfBounds        - a footprint cell is off the grid (when enforced)

The order is part of the contract: the same candidate always produces the same
reason, and the UI shows that reason to the user.

Cost is footprint area x (blocked rects + placements on the layer). Fine for
editor-sized locations; this is not a simulation-scale broadphase.
"""

from typing import Optional

from .catalog import ObjectCatalog
from .config import Config
from .environment import (
    Rect,
    cells_outside,
    first_blocked_cell,
    footprint_rect,
    footprints_intersect,
)
from .logging_utils import LOG_TAG_DETERMINISTIC, debug_enabled, log_deterministic
from .schemas import (
    Location,
    Placement,
    PlacementCandidate,
    ReasonCode,
    ValidationResult,
)


RESTRICTED_CATEGORIES = frozenset({"wallpaper"})


class CollisionValidator:
    """Decide whether a candidate occupancy is legal on a location.

    The validator never mutates the location and never raises for a rejection.
    Only catalog infrastructure failures propagate.
    """

    def __init__(self, catalog: ObjectCatalog, *, enforce_bounds: Optional[bool] = None):
        """Initialize validator.

        Args:
            catalog: Definition source; wrap slow catalogs in MemoizedCatalog
            enforce_bounds: Reject footprints leaving the grid. Defaults to Config.ENFORCE_BOUNDS
        """
        self.catalog = catalog
        self.enforce_bounds = Config.ENFORCE_BOUNDS if enforce_bounds is None else enforce_bounds

    async def validate_placement(
        self,
        candidate: PlacementCandidate,
        location: Location,
        exclude_id: Optional[str] = None,
    ) -> ValidationResult:
        """Validate ``candidate`` against ``location``.

        Args:
            candidate: Object key, anchor cell and layer being considered
            location: Location holding bounds, blocked terrain and placements
            exclude_id: Placement to ignore in overlap checks (the one being moved)

        Returns:
            ValidationResult with ``valid`` and, on rejection, the first failing reason
        """
        result = await self._run_checks(candidate, location, exclude_id)
        if debug_enabled("DEBUG_PLACEMENT"):
            verdict = "valid" if result.valid else f"rejected ({result.reason.value})"
            log_deterministic(
                f"  {LOG_TAG_DETERMINISTIC} [Validate] {candidate.object_key} at "
                f"[{candidate.grid_x}, {candidate.grid_y}] on '{candidate.layer}': {verdict}"
            )
        return result

    async def _run_checks(
        self,
        candidate: PlacementCandidate,
        location: Location,
        exclude_id: Optional[str],
    ) -> ValidationResult:
        definition = await self.catalog.get_definition(candidate.object_key)
        if definition is None:
            return ValidationResult.reject(ReasonCode.MISSING_DEFINITION)

        if definition.category in RESTRICTED_CATEGORIES:
            return ValidationResult.reject(ReasonCode.CATEGORY_RESTRICTED)

        footprint = definition.footprint_at(candidate.grid_x, candidate.grid_y)

        if first_blocked_cell(footprint, location.blocked_areas) is not None:
            return ValidationResult.reject(ReasonCode.BLOCKED_TERRAIN)

        if await self.find_overlap(footprint, candidate.layer, location, exclude_id) is not None:
            return ValidationResult.reject(ReasonCode.OVERLAP)

        if location.indoors and not definition.placeable_indoors:
            return ValidationResult.reject(ReasonCode.INDOOR_RESTRICTION)

        if self.enforce_bounds and cells_outside(footprint, location.grid_width, location.grid_height):
            return ValidationResult.reject(ReasonCode.OUT_OF_BOUNDS)

        return ValidationResult.accept()

    async def footprint_of(self, placement: Placement) -> Rect:
        """Return the cells ``placement`` occupies; 1x1 if its definition is unknown."""
        definition = await self.catalog.get_definition(placement.object_key)
        if definition is None:
            return footprint_rect(placement.grid_x, placement.grid_y)
        return definition.footprint_at(placement.grid_x, placement.grid_y)

    async def find_overlap(
        self,
        footprint: Rect,
        layer: str,
        location: Location,
        exclude_id: Optional[str] = None,
    ) -> Optional[Placement]:
        """Return the first placement on ``layer`` sharing a cell with ``footprint``."""
        for existing in location.placements:
            # Layers are independent occupancy planes
            if existing.layer != layer or existing.id == exclude_id:
                continue
            if footprints_intersect(footprint, await self.footprint_of(existing)):
                return existing
        return None

    async def placement_at(self, location: Location, cell_x: int, cell_y: int, layer: str) -> Optional[Placement]:
        """Return the topmost placement on ``layer`` whose footprint covers the cell.

        Later placements draw on top, so the list is scanned back to front.
        """
        for placement in reversed(location.placements):
            if placement.layer != layer:
                continue
            footprint = await self.footprint_of(placement)
            if footprint.contains_cell(cell_x, cell_y):
                return placement
        return None
