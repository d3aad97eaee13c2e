"""
Location loading for JSON-defined map locations.

This module provides LocationLoader for converting location files into
``Location`` models. A location defines the static side of an editing surface:
- Grid size (cells) and whether it is indoors
- Blocked terrain rectangles (water, cliffs, existing structures)
- Optional pre-placed objects

Data layout:
```
{data_dir}/
  locations-manifest.json     # ["farm", "greenhouse", ...]
  locations/
    farm.json                 # {"name": "Farm", "gridWidth": 80, ...}
    greenhouse.json
```

Location file structure:
```json
{
  "name": "Farm",
  "gridWidth": 80,
  "gridHeight": 65,
  "indoors": false,
  "blockedAreas": [{"x": 0, "y": 0, "width": 80, "height": 3}],
  "placements": []
}
```

Usage:
    loader = LocationLoader(Config.DATA_DIR)
    await loader.load()
    farm = loader.get_location("farm")
"""

import asyncio
import json
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError

from .config import Config
from .errors import LocationLoadError, LocationNotFoundError
from .logging_utils import LOG_TAG_INFO, log_info
from .schemas import Location, LocationBounds, LocationSummary


MANIFEST_FILE = "locations-manifest.json"


class LocationLoader:
    """Load and validate locations from a manifest plus one JSON file per location.

    All files are read once by ``load()``; every failure there is fatal
    (``LocationLoadError``) because no placement can be validated without bounds
    and blocked terrain. ``get_location`` hands out deep copies so editing one
    session's placements never leaks into the loaded baseline.
    """

    def __init__(self, data_dir: Optional[Path | str] = None):
        """Initialize location loader.

        Args:
            data_dir: Directory containing the manifest and ``locations/``.
                      Defaults to Config.DATA_DIR
        """
        self.data_dir = Path(data_dir) if data_dir is not None else Config.DATA_DIR
        self._locations: Optional[Dict[str, Location]] = None
        self._load_lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._locations is not None

    async def load(self) -> Dict[str, Location]:
        """Read the manifest and every listed location (once).

        Raises:
            LocationLoadError: If the manifest or any location file is missing or malformed
        """
        if self._locations is not None:
            return self._locations

        async with self._load_lock:
            if self._locations is None:
                self._locations = await asyncio.to_thread(self._read_all)
                log_info(f"{LOG_TAG_INFO} [Locations] Locations data loaded: {list(self._locations)}")
        return self._locations

    def _read_all(self) -> Dict[str, Location]:
        manifest_path = self.data_dir / MANIFEST_FILE
        keys = self._read_json(manifest_path)
        if not isinstance(keys, list) or not all(isinstance(key, str) for key in keys):
            raise LocationLoadError(source=manifest_path, reason="manifest must be a list of location keys")

        locations: Dict[str, Location] = {}
        for key in keys:
            path = self.data_dir / "locations" / f"{key}.json"
            data = self._read_json(path)
            if not isinstance(data, dict):
                raise LocationLoadError(source=path, reason="location file must contain an object")
            try:
                # File name is the source of truth for the key
                locations[key] = Location.model_validate({**data, "key": key})
            except ValidationError as exc:
                raise LocationLoadError(source=path, reason=str(exc)) from exc
        return locations

    @staticmethod
    def _read_json(path: Path):
        try:
            return json.loads(path.read_text("utf-8"))
        except FileNotFoundError as exc:
            raise LocationLoadError(source=path, reason="file not found") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise LocationLoadError(source=path, reason=str(exc)) from exc

    def _require_loaded(self) -> Dict[str, Location]:
        if self._locations is None:
            raise LocationLoadError(reason="Locations data not loaded. Call load() first.")
        return self._locations

    def get_location(self, key: str) -> Location:
        """Return an independent copy of the location ``key``.

        Raises:
            LocationLoadError: If ``load()`` has not completed
            LocationNotFoundError: If ``key`` is not in the manifest
        """
        locations = self._require_loaded()
        if key not in locations:
            raise LocationNotFoundError(key)
        return locations[key].model_copy(deep=True)

    def get_bounds(self, key: str) -> LocationBounds:
        locations = self._require_loaded()
        if key not in locations:
            raise LocationNotFoundError(key)
        return locations[key].bounds()

    def available_locations(self) -> List[LocationSummary]:
        """Summaries in manifest order, for location pickers."""
        return [location.summary() for location in self._require_loaded().values()]
