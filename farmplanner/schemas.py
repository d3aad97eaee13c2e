"""
Pydantic schemas for the farmplanner editor.

All data structures shared between the catalog, the location model, the
collision validator, the placement store and the drag session live here.

Design Philosophy:
- Python attributes are snake_case; JSON on disk is camelCase (``gridX``,
  ``footprintWidth``, ``blockedAreas``) and both spellings are accepted on input
- Definitions and geometry are frozen; placements are mutable because the
  store moves them in place
- Expected rejections are values (``ReasonCode``), never exceptions
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from farmplanner.environment import Rect, footprint_rect


DEFAULT_LAYER = "objects"


# ============================================================================
# Catalog Schemas
# ============================================================================


class ObjectDefinition(BaseModel):
    """Static description of a placeable object, resolved by object key.

    Catalog files omit many fields for simple objects, so every field except
    ``key`` has a default: footprints fall back to 1x1, objects are placeable
    indoors unless they say otherwise, and the object lands on the default layer.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    key: str = Field(..., description="Unique object key used by placements")
    name: Optional[str] = Field(None, description="Human-friendly name for palettes")
    category: str = Field("decor", description="buildings, crops, decor, machines, wallpaper, ...")
    footprint_width: int = Field(1, ge=1, description="Footprint width in cells")
    footprint_height: int = Field(1, ge=1, description="Footprint height in cells")
    placeable_indoors: bool = True
    default_layer: str = DEFAULT_LAYER
    sprite: Optional[str] = Field(None, description="Sprite path for the renderer")

    @field_validator("footprint_width", "footprint_height", mode="before")
    @classmethod
    def _default_footprint(cls, value: Any) -> Any:
        # Catalog entries use 0/null to mean "single cell"
        if value is None or value == 0:
            return 1
        return value

    @field_validator("sprite", mode="before")
    @classmethod
    def _first_sprite(cls, value: Any) -> Any:
        # Seasonal objects list several sprites; the first is the spring/normal one
        if isinstance(value, list):
            return value[0] if value else None
        return value

    @property
    def display_name(self) -> str:
        return self.name or self.key

    def footprint_at(self, grid_x: int, grid_y: int) -> Rect:
        """Return the cells this object would occupy when anchored at (grid_x, grid_y)."""
        return footprint_rect(grid_x, grid_y, self.footprint_width, self.footprint_height)


# ============================================================================
# Location Schemas
# ============================================================================


class Placement(BaseModel):
    """One object instance on a location grid.

    The anchor ``(grid_x, grid_y)`` is the top-left cell of the footprint. The
    footprint itself is not stored; it is derived from the object's definition.
    """

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: str
    object_key: str
    grid_x: int
    grid_y: int
    layer: str = DEFAULT_LAYER

    @property
    def anchor(self) -> Tuple[int, int]:
        return self.grid_x, self.grid_y


class LocationBounds(BaseModel):
    """Static grid data for a location, loaded once."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    grid_width: int
    grid_height: int
    indoors: bool = False
    blocked_areas: List[Rect] = Field(default_factory=list)


class LocationSummary(BaseModel):
    """Lightweight entry for location pickers."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    key: str
    name: str
    grid_width: int
    grid_height: int


class Location(BaseModel):
    """A map location: grid bounds, blocked terrain and the ordered placements.

    ``blocked_areas`` is read-mostly after load. ``placements`` is mutated only by
    ``PlacementStore``; order is insertion order and later entries draw on top.
    """

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    key: str
    name: str = ""
    grid_width: int = Field(..., ge=1)
    grid_height: int = Field(..., ge=1)
    indoors: bool = False
    blocked_areas: List[Rect] = Field(default_factory=list)
    placements: List[Placement] = Field(default_factory=list)

    def bounds(self) -> LocationBounds:
        return LocationBounds(
            grid_width=self.grid_width,
            grid_height=self.grid_height,
            indoors=self.indoors,
            blocked_areas=list(self.blocked_areas),
        )

    def summary(self) -> LocationSummary:
        return LocationSummary(
            key=self.key,
            name=self.name or self.key,
            grid_width=self.grid_width,
            grid_height=self.grid_height,
        )

    def pixel_size(self, tile_size: int) -> Tuple[int, int]:
        return self.grid_width * tile_size, self.grid_height * tile_size

    def find_placement(self, placement_id: str) -> Optional[Placement]:
        for placement in self.placements:
            if placement.id == placement_id:
                return placement
        return None

    def placements_on(self, layer: str) -> List[Placement]:
        return [placement for placement in self.placements if placement.layer == layer]


# ============================================================================
# Validation / Result Schemas
# ============================================================================


class ReasonCode(str, Enum):
    """Why a placement was rejected. All rejections are recoverable."""

    MISSING_DEFINITION = "MissingDefinition"
    CATEGORY_RESTRICTED = "CategoryRestricted"
    BLOCKED_TERRAIN = "BlockedTerrain"
    OVERLAP = "Overlap"
    INDOOR_RESTRICTION = "IndoorRestriction"
    OUT_OF_BOUNDS = "OutOfBounds"
    NO_CURRENT_LOCATION = "NoCurrentLocation"

    @property
    def message(self) -> str:
        return _REASON_MESSAGES[self]


_REASON_MESSAGES = {
    ReasonCode.MISSING_DEFINITION: "Object definition not found",
    ReasonCode.CATEGORY_RESTRICTED: "Wallpaper and flooring use a separate placement tool",
    ReasonCode.BLOCKED_TERRAIN: "Placement blocked by terrain",
    ReasonCode.OVERLAP: "Placement overlaps existing object",
    ReasonCode.INDOOR_RESTRICTION: "Object cannot be placed indoors",
    ReasonCode.OUT_OF_BOUNDS: "Placement extends outside the location",
    ReasonCode.NO_CURRENT_LOCATION: "No current location",
}


class PlacementCandidate(BaseModel):
    """An occupancy being considered by the validator."""

    object_key: str
    grid_x: int
    grid_y: int
    layer: str = DEFAULT_LAYER


class ValidationResult(BaseModel):
    """Accept/reject decision from ``CollisionValidator``."""

    valid: bool
    reason: Optional[ReasonCode] = None

    @classmethod
    def accept(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def reject(cls, reason: ReasonCode) -> "ValidationResult":
        return cls(valid=False, reason=reason)


class PlacementResult(BaseModel):
    """Outcome of ``PlacementStore.place`` / ``PlacementStore.move``."""

    ok: bool
    placement_id: Optional[str] = None
    reason: Optional[ReasonCode] = None

    @classmethod
    def success(cls, placement_id: str) -> "PlacementResult":
        return cls(ok=True, placement_id=placement_id)

    @classmethod
    def failure(cls, reason: ReasonCode, placement_id: Optional[str] = None) -> "PlacementResult":
        return cls(ok=False, placement_id=placement_id, reason=reason)


# ============================================================================
# Editor / UI Signal Schemas
# ============================================================================


class CursorStyle(str, Enum):
    """Cursor cues emitted by the drag session."""

    DEFAULT = "default"
    GRABBING = "grabbing"


class DragPreview(BaseModel):
    """Ghost-rectangle data for an in-progress drag."""

    placement_id: str
    grid_x: int
    grid_y: int
    valid: bool
    reason: Optional[ReasonCode] = None


class SelectedItem(BaseModel):
    """Palette selection: what a click on an empty cell will place."""

    object_key: str
    layer: str = DEFAULT_LAYER


class SavedLayout(BaseModel):
    """Persisted layout: a location key plus its ordered placement records."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    location_key: str
    placements: List[Placement] = Field(default_factory=list)
