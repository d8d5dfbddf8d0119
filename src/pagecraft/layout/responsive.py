"""Viewport-relative scaling."""

import copy
from typing import Any, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field

BASE_WIDTH = 1920.0

BREAKPOINTS: dict[str, int] = {
    "sm": 640,
    "md": 768,
    "lg": 1024,
    "xl": 1280,
}


class ResponsiveOptions(BaseModel):
    """Scaling parameters for one viewport."""

    model_config = ConfigDict(frozen=True)

    viewport_width: float = Field(..., gt=0)
    base_width: float = Field(default=BASE_WIDTH, gt=0)
    min_width: float | None = Field(default=None)
    max_width: float | None = Field(default=None)

    @property
    def ratio(self) -> float:
        return self.viewport_width / self.base_width


def _clamp(value: float, options: ResponsiveOptions) -> float:
    if options.min_width is not None:
        value = max(value, options.min_width)
    if options.max_width is not None:
        value = min(value, options.max_width)
    return value


def calculate_responsive_width(value: float, options: ResponsiveOptions) -> float:
    """Scale a width to the viewport, then clamp to [min_width, max_width]."""
    return _clamp(value * options.ratio, options)


def calculate_responsive_x(value: float, options: ResponsiveOptions) -> float:
    """Scale an x coordinate to the viewport, then clamp."""
    return _clamp(value * options.ratio, options)


def calculate_responsive_y(value: float, options: ResponsiveOptions) -> float:
    """Vertical coordinates keep their design-time value."""
    return value


def calculate_responsive_dimensions(
    width: float, height: float, options: ResponsiveOptions
) -> tuple[float, float]:
    """Scale both dimensions by the viewport ratio (no clamping)."""
    return width * options.ratio, height * options.ratio


def breakpoint_for(viewport_width: float) -> str:
    """Name of the largest breakpoint the viewport reaches ("xs" below sm)."""
    current = "xs"
    for name, min_width in BREAKPOINTS.items():
        if viewport_width >= min_width:
            current = name
    return current


def _percent_to_px(width: str, viewport_width: float) -> str | None:
    if not width.endswith("%"):
        return None
    try:
        percent = float(width[:-1])
    except ValueError:
        return None
    pixels = percent / 100.0 * viewport_width
    return f"{pixels:g}px"


def calculate_component_layout(
    components: Sequence[Mapping[str, Any]],
    viewport_width: float,
    base_width: float = BASE_WIDTH,
) -> list[dict[str, Any]]:
    """
    Lay out component dicts for a viewport.

    Scales ``position.x`` by viewport/base width and converts percentage
    ``properties.width`` into pixels. Non-mapping entries are dropped.
    Inputs are not modified.
    """
    ratio = viewport_width / base_width
    result: list[dict[str, Any]] = []

    for component in components:
        if not isinstance(component, Mapping):
            continue
        laid_out = copy.deepcopy(dict(component))

        position = laid_out.get("position")
        if isinstance(position, dict):
            x = position.get("x")
            if isinstance(x, (int, float)) and not isinstance(x, bool):
                position["x"] = x * ratio

        properties = laid_out.get("properties")
        if isinstance(properties, dict):
            width = properties.get("width")
            if isinstance(width, str):
                pixels = _percent_to_px(width, viewport_width)
                if pixels is not None:
                    properties["width"] = pixels

        result.append(laid_out)

    return result
