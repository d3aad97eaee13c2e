"""
ObjectCatalog interface for resolving object keys to definitions.

The catalog is an external collaborator of the collision engine: every
validation starts by resolving the candidate's object key, and overlap checks
resolve the key of every placement on the same layer. Lookups are async because
real catalogs are fetched (files, HTTP); the validator never assumes they are cheap.

Included implementations:
1. InMemoryCatalog - dict of definitions (tests, embedding)
2. JsonCatalog - category files on disk (buildings.json, crops.json, ...)
3. MemoizedCatalog - wraps any catalog so repeated keys never re-fetch

Usage pattern:
    catalog = MemoizedCatalog(JsonCatalog(Config.DATA_DIR))
    definition = await catalog.get_definition("chicken_coop")
    if definition is None:
        ...  # unknown key, handled by the caller
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

from pydantic import ValidationError

from .errors import CatalogUnavailableError
from .logging_utils import LOG_TAG_INFO, LOG_TAG_WARNING, debug_enabled, log_info, log_warning
from .schemas import ObjectDefinition


DEFAULT_CATEGORY_FILES: Sequence[str] = ("buildings", "crops", "decor", "machines", "wallpaper")


class ObjectCatalog(ABC):
    """Abstract source of object definitions.

    ``get_definition`` returns ``None`` for unknown keys. That is an expected
    outcome (the validator turns it into ``MissingDefinition``). Raise
    ``CatalogUnavailableError`` only when the catalog itself cannot be reached.
    """

    @abstractmethod
    async def get_definition(self, object_key: str) -> Optional[ObjectDefinition]:
        """Return the definition for ``object_key`` or None if the catalog lacks it."""
        pass

    @abstractmethod
    async def all_definitions(self) -> Dict[str, ObjectDefinition]:
        """Return every definition keyed by object key."""
        pass


class InMemoryCatalog(ObjectCatalog):
    """Catalog backed by a dict. Zero I/O."""

    def __init__(self, definitions: Iterable[ObjectDefinition] = ()):
        self.definitions: Dict[str, ObjectDefinition] = {d.key: d for d in definitions}

    def add(self, definition: ObjectDefinition) -> None:
        self.definitions[definition.key] = definition

    async def get_definition(self, object_key: str) -> Optional[ObjectDefinition]:
        return self.definitions.get(object_key)

    async def all_definitions(self) -> Dict[str, ObjectDefinition]:
        return dict(self.definitions)


class JsonCatalog(ObjectCatalog):
    """Catalog read from per-category JSON files.

    Directory structure:
    ```
    {data_dir}/
      buildings.json    # {"coop": {"name": "Coop", "footprintWidth": 6, ...}, ...}
      crops.json
      decor.json
      machines.json
      wallpaper.json
    ```

    Each file maps object key -> definition body. Files are merged in category order
    (a later category wins on duplicate keys). A body without ``category`` takes the
    file's name. A missing category file is skipped with a warning so partial data
    sets still load; a missing data directory or malformed JSON is fatal.

    Files are read once, on first lookup, in a worker thread.
    """

    def __init__(
        self,
        data_dir: Path | str,
        categories: Sequence[str] = DEFAULT_CATEGORY_FILES,
    ):
        self.data_dir = Path(data_dir)
        self.categories = tuple(categories)
        self._definitions: Optional[Dict[str, ObjectDefinition]] = None
        self._load_lock = asyncio.Lock()

    async def load(self) -> Dict[str, ObjectDefinition]:
        """Read every category file (once) and return the merged definitions."""
        if self._definitions is not None:
            return self._definitions

        async with self._load_lock:
            # Another task may have finished loading while we waited on the lock
            if self._definitions is None:
                self._definitions = await asyncio.to_thread(self._read_all)
                log_info(
                    f"{LOG_TAG_INFO} [Catalog] Objects data loaded: "
                    f"{len(self._definitions)} objects"
                )
        return self._definitions

    def _read_all(self) -> Dict[str, ObjectDefinition]:
        if not self.data_dir.is_dir():
            raise CatalogUnavailableError(source=self.data_dir, reason="directory does not exist")

        merged: Dict[str, ObjectDefinition] = {}
        for category in self.categories:
            path = self.data_dir / f"{category}.json"
            if not path.exists():
                log_warning(f"{LOG_TAG_WARNING} [Catalog] Missing category file {path}, skipping")
                continue
            try:
                payload = json.loads(path.read_text("utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                raise CatalogUnavailableError(source=path, reason=str(exc)) from exc
            if not isinstance(payload, dict):
                raise CatalogUnavailableError(source=path, reason="expected an object keyed by object key")

            for key, body in payload.items():
                try:
                    merged[key] = ObjectDefinition.model_validate(
                        {"category": category, **body, "key": key}
                    )
                except (TypeError, ValidationError) as exc:
                    raise CatalogUnavailableError(
                        source=path, reason=f"invalid definition '{key}': {exc}"
                    ) from exc
        return merged

    async def get_definition(self, object_key: str) -> Optional[ObjectDefinition]:
        definitions = await self.load()
        definition = definitions.get(object_key)
        if definition is None and debug_enabled("DEBUG_PLACEMENT"):
            log_warning(f"{LOG_TAG_WARNING} [Catalog] Object definition not found: {object_key}")
        return definition

    async def all_definitions(self) -> Dict[str, ObjectDefinition]:
        return dict(await self.load())


class MemoizedCatalog(ObjectCatalog):
    """Caller-side memoization for any catalog.

    Caches both hits and misses, so a placement whose definition is missing does
    not re-fetch on every overlap check. Concurrent lookups of the same key share a
    single in-flight fetch: pointer moves fire faster than slow catalogs answer.
    Failed fetches are not cached, so a transient outage can be retried.
    """

    def __init__(self, inner: ObjectCatalog):
        self.inner = inner
        self._cache: Dict[str, Optional[ObjectDefinition]] = {}
        self._pending: Dict[str, asyncio.Task] = {}

    async def get_definition(self, object_key: str) -> Optional[ObjectDefinition]:
        if object_key in self._cache:
            return self._cache[object_key]

        task = self._pending.get(object_key)
        if task is None:
            task = asyncio.ensure_future(self.inner.get_definition(object_key))
            self._pending[object_key] = task
            task.add_done_callback(lambda _t, key=object_key: self._pending.pop(key, None))

        definition = await asyncio.shield(task)
        self._cache[object_key] = definition
        return definition

    async def all_definitions(self) -> Dict[str, ObjectDefinition]:
        definitions = await self.inner.all_definitions()
        self._cache.update(definitions)
        return definitions

    def clear(self) -> None:
        """Forget every cached lookup (e.g. after the catalog files changed)."""
        self._cache.clear()
