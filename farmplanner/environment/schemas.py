"""Pydantic schemas for grid geometry.

``Rect`` is shared by location data (blocked terrain zones) and by the
collision checks (implicit footprint occupancy). Coordinates are integer
grid units; a rect covers the half-open ranges ``[x, x + width)`` and
``[y, y + height)``.
"""

from __future__ import annotations

from typing import Iterator, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Rect(BaseModel):
    """Axis-aligned block of grid cells."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    width: int = Field(..., ge=0, description="Width in cells")
    height: int = Field(..., ge=0, description="Height in cells")

    @property
    def right(self) -> int:
        """Exclusive right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Exclusive bottom edge."""
        return self.y + self.height

    def contains_cell(self, cell_x: int, cell_y: int) -> bool:
        return self.x <= cell_x < self.right and self.y <= cell_y < self.bottom

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Yield every (x, y) cell covered by the rect, row by row."""
        for cell_y in range(self.y, self.bottom):
            for cell_x in range(self.x, self.right):
                yield cell_x, cell_y
