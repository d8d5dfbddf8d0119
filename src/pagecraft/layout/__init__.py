"""Position and layout arithmetic."""

from .position import Bounds, Position, round_to_grid
from .grid import is_on_grid, snap_to_grid
from .collision import component_bounds, components_collide, detect_collision, get_overlap
from .responsive import (
    BASE_WIDTH,
    BREAKPOINTS,
    ResponsiveOptions,
    breakpoint_for,
    calculate_component_layout,
    calculate_responsive_dimensions,
    calculate_responsive_width,
    calculate_responsive_x,
    calculate_responsive_y,
)

__all__ = [
    "Bounds",
    "Position",
    "round_to_grid",
    "snap_to_grid",
    "is_on_grid",
    "detect_collision",
    "get_overlap",
    "component_bounds",
    "components_collide",
    "BASE_WIDTH",
    "BREAKPOINTS",
    "ResponsiveOptions",
    "breakpoint_for",
    "calculate_component_layout",
    "calculate_responsive_dimensions",
    "calculate_responsive_width",
    "calculate_responsive_x",
    "calculate_responsive_y",
]
