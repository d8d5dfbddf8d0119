"""Rectangle collision."""

from typing import Any, Mapping

from .position import Bounds

DEFAULT_SIZE = 100.0


def detect_collision(a: Bounds, b: Bounds) -> bool:
    """
    AABB overlap test.

    Strict on all four sides: rectangles that only share an edge do not
    collide. Symmetric in its arguments.
    """
    return a.x < b.right and a.right > b.x and a.y < b.bottom and a.bottom > b.y


def get_overlap(a: Bounds, b: Bounds) -> Bounds | None:
    """Intersection rectangle, or None when the rectangles do not collide."""
    x = max(a.x, b.x)
    y = max(a.y, b.y)
    width = min(a.right, b.right) - x
    height = min(a.bottom, b.bottom) - y
    if width <= 0 or height <= 0:
        return None
    return Bounds(x=x, y=y, width=width, height=height)


def _dimension(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip().removesuffix("px"))
        except ValueError:
            return None
    return None


def component_bounds(component: Mapping[str, Any]) -> Bounds:
    """
    Bounds of a component in its wire (dict) form.

    Missing position counts as the origin; width/height come from numeric
    or "NNpx" properties and default to 100.
    """
    position = component.get("position") or {}
    properties = component.get("properties") or {}
    x = _dimension(position.get("x")) or 0.0
    y = _dimension(position.get("y")) or 0.0
    width = _dimension(properties.get("width"))
    height = _dimension(properties.get("height"))
    return Bounds(
        x=x,
        y=y,
        width=width if width is not None and width >= 0 else DEFAULT_SIZE,
        height=height if height is not None and height >= 0 else DEFAULT_SIZE,
    )


def components_collide(a: Mapping[str, Any], b: Mapping[str, Any]) -> bool:
    """Collision test over component dicts."""
    return detect_collision(component_bounds(a), component_bounds(b))
