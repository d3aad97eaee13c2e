"""
farmplanner - tile-grid object placement editor core.

Drag buildings, crops and decor onto map locations, subject to collision
and terrain rules.

UI-toolkit agnostic. No global drag state. No required file I/O.
All collaborators (catalog, locations, renderer, storage) are injected.
"""

__version__ = "0.1.0"

# Editing surface
from .editor import EditorSession
from .drag import DragSession, DragState, ArmedDrag

# Core engine
from .validation import CollisionValidator
from .store import PlacementStore, new_placement_id

# Collaborator interfaces
from .catalog import ObjectCatalog, InMemoryCatalog, JsonCatalog, MemoizedCatalog
from .locations import LocationLoader
from .notifier import RenderNotifier, ListenerNotifier, NullNotifier, RecordingNotifier
from .persistence import LayoutPersistence, InMemoryLayoutPersistence, JsonLayoutPersistence
from .palette import Palette

# Geometry
from .environment import Rect, TileGrid, to_grid

# Schemas
from .schemas import (
    ObjectDefinition,
    Placement,
    Location,
    LocationBounds,
    LocationSummary,
    PlacementCandidate,
    ValidationResult,
    PlacementResult,
    ReasonCode,
    DragPreview,
    CursorStyle,
    SelectedItem,
    SavedLayout,
)

# Errors
from .errors import (
    FarmPlannerError,
    CatalogUnavailableError,
    LocationLoadError,
    LocationNotFoundError,
    PlacementNotFoundError,
)

__all__ = [
    # Editing surface
    "EditorSession",
    "DragSession",
    "DragState",
    "ArmedDrag",
    # Core engine
    "CollisionValidator",
    "PlacementStore",
    "new_placement_id",
    # Collaborators
    "ObjectCatalog",
    "InMemoryCatalog",
    "JsonCatalog",
    "MemoizedCatalog",
    "LocationLoader",
    "RenderNotifier",
    "ListenerNotifier",
    "NullNotifier",
    "RecordingNotifier",
    "LayoutPersistence",
    "InMemoryLayoutPersistence",
    "JsonLayoutPersistence",
    "Palette",
    # Geometry
    "Rect",
    "TileGrid",
    "to_grid",
    # Schemas
    "ObjectDefinition",
    "Placement",
    "Location",
    "LocationBounds",
    "LocationSummary",
    "PlacementCandidate",
    "ValidationResult",
    "PlacementResult",
    "ReasonCode",
    "DragPreview",
    "CursorStyle",
    "SelectedItem",
    "SavedLayout",
    # Errors
    "FarmPlannerError",
    "CatalogUnavailableError",
    "LocationLoadError",
    "LocationNotFoundError",
    "PlacementNotFoundError",
]
