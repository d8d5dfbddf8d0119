"""Bulk layout operations routed through the acceleration dispatcher."""

from __future__ import annotations

from itertools import combinations
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from .position import Position

if TYPE_CHECKING:
    from pagecraft.accel.dispatcher import AccelerationDispatcher


async def calculate_layout(
    components: Sequence[Mapping[str, Any]],
    viewport_width: float,
    dispatcher: AccelerationDispatcher,
) -> list[dict[str, Any]]:
    """Viewport layout of component dicts (see calculate_component_layout)."""
    return await dispatcher.call("calculate_layout", [dict(c) for c in components], viewport_width)


async def snap_positions(
    points: Sequence[tuple[float, float]],
    grid_size: float,
    dispatcher: AccelerationDispatcher,
) -> list[Position]:
    """Snap many points; each call is an independent request."""
    if grid_size <= 0:
        raise ValueError(f"grid_size must be positive, got {grid_size}")
    snapped = []
    for x, y in points:
        result = await dispatcher.call("snap_to_grid", x, y, grid_size)
        snapped.append(Position(x=result["x"], y=result["y"]))
    return snapped


async def find_collisions(
    components: Sequence[Mapping[str, Any]],
    dispatcher: AccelerationDispatcher,
) -> list[tuple[str, str]]:
    """Ids of every colliding pair, in input order."""
    pairs = []
    for a, b in combinations(components, 2):
        if await dispatcher.call("detect_collision", dict(a), dict(b)):
            pairs.append((a["id"], b["id"]))
    return pairs
