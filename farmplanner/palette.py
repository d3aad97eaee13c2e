"""Object palette: browse the catalog by category, search by name, select."""

from typing import Dict, List, Optional

from .catalog import ObjectCatalog
from .schemas import ObjectDefinition, SelectedItem


class Palette:
    """Catalog-backed palette state for one editor.

    ``load()`` must complete before browsing. Categories and objects keep catalog
    order so palettes render stably.
    """

    def __init__(self, catalog: ObjectCatalog):
        self.catalog = catalog
        self.selected: Optional[SelectedItem] = None
        self._objects: Dict[str, ObjectDefinition] = {}

    async def load(self) -> int:
        """Fetch every definition; returns the object count."""
        self._objects = await self.catalog.all_definitions()
        return len(self._objects)

    def definition(self, object_key: str) -> Optional[ObjectDefinition]:
        return self._objects.get(object_key)

    def categories(self) -> List[str]:
        seen: List[str] = []
        for definition in self._objects.values():
            if definition.category not in seen:
                seen.append(definition.category)
        return seen

    def objects_in(self, category: str) -> List[ObjectDefinition]:
        return [d for d in self._objects.values() if d.category == category]

    def search(self, category: str, term: str) -> List[ObjectDefinition]:
        """Objects in ``category`` whose display name contains ``term`` (case-insensitive)."""
        if not term:
            return self.objects_in(category)
        needle = term.lower()
        return [d for d in self.objects_in(category) if needle in d.display_name.lower()]

    def select(self, object_key: str) -> SelectedItem:
        """Select an object for placement on its default layer.

        Raises:
            KeyError: If ``object_key`` is not in the loaded catalog
        """
        definition = self._objects.get(object_key)
        if definition is None:
            raise KeyError(f"Object '{object_key}' is not in the palette")
        self.selected = SelectedItem(object_key=object_key, layer=definition.default_layer)
        return self.selected

    def clear_selection(self) -> None:
        self.selected = None
