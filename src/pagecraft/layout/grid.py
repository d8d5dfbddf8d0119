"""Grid alignment."""

from .position import Position, round_to_grid


def snap_to_grid(x: float, y: float, grid_size: float) -> Position:
    """
    Snap a point to the nearest grid intersection.

    Idempotent: snapping an already-snapped point returns it unchanged.

    Raises:
        ValueError: If grid_size <= 0 or the point is off-canvas
    """
    return Position(x=round_to_grid(x, grid_size), y=round_to_grid(y, grid_size))


def is_on_grid(x: float, y: float, grid_size: float) -> bool:
    """Check whether a point already sits on the grid."""
    return round_to_grid(x, grid_size) == x and round_to_grid(y, grid_size) == y
