"""
Exceptions raised by farmplanner.

Placement rejections (overlap, blocked terrain, ...) are NOT exceptions; they
come back as ``ReasonCode`` values. The classes below cover the cases where
no placement can be decided at all: the data behind the editor is missing or
malformed, or a caller referenced something that does not exist.
"""

from pathlib import Path
from typing import Optional


class FarmPlannerError(Exception):
    """Base class for all farmplanner errors."""


class CatalogUnavailableError(FarmPlannerError):
    """Raised when the object catalog cannot be read."""

    def __init__(self, *, source: Path | str, reason: str) -> None:
        self.source = source
        self.reason = reason
        message = (
            f"Object catalog unavailable at {source}: {reason}\n\n"
            "Remediation tips:\n"
            "  - Set DATA_DIR to the directory holding buildings.json, crops.json, ...\n"
            "  - Check that every category file is valid JSON keyed by object key"
        )
        super().__init__(message)


class LocationLoadError(FarmPlannerError):
    """Raised when location data cannot be loaded (or was never loaded)."""

    def __init__(self, *, reason: str, source: Optional[Path | str] = None) -> None:
        self.source = source
        self.reason = reason
        where = f" from {source}" if source else ""
        message = (
            f"Failed to load locations{where}: {reason}\n\n"
            "Remediation tips:\n"
            "  - Call LocationLoader.load() before requesting locations\n"
            "  - Check locations-manifest.json lists keys with matching locations/<key>.json files"
        )
        super().__init__(message)


class LocationNotFoundError(FarmPlannerError, KeyError):
    """Raised when a location key is not in the manifest."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unknown location '{key}'")

    def __str__(self) -> str:
        return self.args[0]


class PlacementNotFoundError(FarmPlannerError, KeyError):
    """Raised when an operation references a placement id the location does not hold."""

    def __init__(self, placement_id: str, location_key: str) -> None:
        self.placement_id = placement_id
        self.location_key = location_key
        super().__init__(f"Placement '{placement_id}' not found in location '{location_key}'")

    def __str__(self) -> str:
        return self.args[0]
