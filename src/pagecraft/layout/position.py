"""Canvas position and rectangle value objects."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def round_to_grid(value: float, grid_size: float) -> float:
    """Round to the nearest multiple of grid_size, halves rounding up."""
    if grid_size <= 0:
        raise ValueError(f"grid_size must be positive, got {grid_size}")
    return math.floor(value / grid_size + 0.5) * grid_size


class Position(BaseModel):
    """Immutable canvas coordinate; both axes non-negative."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(..., ge=0, description="X coordinate")
    y: float = Field(..., ge=0, description="Y coordinate")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Position:
        return cls(x=data["x"], y=data["y"])

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}

    def move(self, dx: float, dy: float) -> Position:
        """Translate; raises if the result leaves the canvas."""
        return Position(x=self.x + dx, y=self.y + dy)

    def snap_to_grid(self, grid_size: float) -> Position:
        return Position(x=round_to_grid(self.x, grid_size), y=round_to_grid(self.y, grid_size))

    def offset_from(self, origin: Position) -> tuple[float, float]:
        """Signed (dx, dy) from origin to this point."""
        return self.x - origin.x, self.y - origin.y


class Bounds(BaseModel):
    """Axis-aligned rectangle."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height
