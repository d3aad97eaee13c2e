"""
LayoutPersistence interface for pluggable layout storage.

A saved layout is a location key plus the ordered list of placement records
``{id, objectKey, gridX, gridY, layer}``. Saving and loading are wholesale: the
editor replaces a location's placement list with whatever was stored. Storage is
optional; an editor without persistence simply cannot save.

Included implementations:
1. InMemoryLayoutPersistence - dict-based, lost on exit (tests, prototyping)
2. JsonLayoutPersistence - one human-readable JSON file per location

Usage pattern:
    persistence = JsonLayoutPersistence(Config.LAYOUTS_DIR)
    await persistence.initialize()
    await persistence.save_layout(layout)
    restored = await persistence.load_layout("farm")
    await persistence.close()
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from .config import Config
from .schemas import SavedLayout


class LayoutPersistence(ABC):
    """Abstract base class for layout storage backends.

    Async interface so file/database backends never block pointer handling.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the backend (create directories, open connections)."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release backend resources."""
        pass

    @abstractmethod
    async def save_layout(self, layout: SavedLayout) -> None:
        """Store ``layout``, replacing any previous layout for its location."""
        pass

    @abstractmethod
    async def load_layout(self, location_key: str) -> Optional[SavedLayout]:
        """Return the stored layout for ``location_key`` or None if never saved."""
        pass

    @abstractmethod
    async def list_layouts(self) -> List[str]:
        """Return location keys with a stored layout, sorted."""
        pass

    @abstractmethod
    async def delete_layout(self, location_key: str) -> None:
        """Remove the stored layout for ``location_key``. Missing layouts are ignored."""
        pass


class InMemoryLayoutPersistence(LayoutPersistence):
    """Layouts kept in a dict.

    Stored copies are deep copies, so editing the live location after a save does
    not change what was saved.
    """

    def __init__(self):
        self.layouts: Dict[str, SavedLayout] = {}

    async def initialize(self) -> None:
        pass

    async def close(self) -> None:
        # Data is kept so callers can inspect it after close
        pass

    async def save_layout(self, layout: SavedLayout) -> None:
        self.layouts[layout.location_key] = layout.model_copy(deep=True)

    async def load_layout(self, location_key: str) -> Optional[SavedLayout]:
        layout = self.layouts.get(location_key)
        return layout.model_copy(deep=True) if layout else None

    async def list_layouts(self) -> List[str]:
        return sorted(self.layouts)

    async def delete_layout(self, location_key: str) -> None:
        self.layouts.pop(location_key, None)


class JsonLayoutPersistence(LayoutPersistence):
    """File-based persistence, one pretty-printed JSON file per location.

    Directory structure:
    ```
    {base_path}/
      farm.json          # {"locationKey": "farm", "placements": [...]}
      greenhouse.json
    ```

    All file I/O runs in a worker thread (asyncio.to_thread).
    """

    def __init__(self, base_path: Optional[Path | str] = None):
        self.base_path = Path(base_path) if base_path is not None else Config.LAYOUTS_DIR

    async def initialize(self) -> None:
        await asyncio.to_thread(self.base_path.mkdir, parents=True, exist_ok=True)

    async def close(self) -> None:
        return None

    async def save_layout(self, layout: SavedLayout) -> None:
        path = self._layout_path(layout.location_key)
        await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
        payload = layout.model_dump(mode="json", by_alias=True)
        await asyncio.to_thread(path.write_text, json.dumps(payload, indent=2), "utf-8")

    async def load_layout(self, location_key: str) -> Optional[SavedLayout]:
        path = self._layout_path(location_key)
        if not path.exists():
            return None
        text = await asyncio.to_thread(path.read_text, "utf-8")
        return SavedLayout.model_validate(json.loads(text))

    async def list_layouts(self) -> List[str]:
        if not self.base_path.exists():
            return []
        paths = await asyncio.to_thread(lambda: sorted(self.base_path.glob("*.json")))
        return [path.stem for path in paths]

    async def delete_layout(self, location_key: str) -> None:
        path = self._layout_path(location_key)
        await asyncio.to_thread(path.unlink, True)

    def _layout_path(self, location_key: str) -> Path:
        return self.base_path / f"{location_key}.json"
