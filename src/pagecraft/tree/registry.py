"""Component type classification and default properties."""

import copy
from typing import Any, Mapping

# Types allowed to hold children. Extending this set is a configuration change.
CONTAINER_TYPES: frozenset[str] = frozenset(
    {
        "container",
        "grid-layout",
        "flex-layout",
        "split-layout",
        "tab-layout",
        "card-group",
        "responsive-container",
        "row",
        "column",
    }
)

_CHART_BASE: dict[str, Any] = {"dataSource": None, "legend": True, "width": 500, "height": 300}

_DEFAULTS: dict[str, dict[str, Any]] = {
    "text": {
        "content": "Sample text",
        "fontSize": 16,
        "fontWeight": "normal",
        "alignment": "left",
        "lineHeight": 1.5,
    },
    "button": {
        "text": "Button",
        "variant": "outline",
        "size": "default",
        "disabled": False,
        "fullWidth": False,
        "onClick": "none",
    },
    "image": {
        "src": "/placeholder.svg?height=200&width=300",
        "alt": "Sample image",
        "width": 300,
        "height": 200,
        "objectFit": "cover",
    },
    "divider": {"orientation": "horizontal", "thickness": 1, "color": "#e2e8f0", "style": "solid"},
    "input": {"placeholder": "Enter...", "type": "text", "label": "Input", "required": False},
    "textarea": {"placeholder": "Enter text...", "rows": 4, "label": "Text area", "required": False},
    "select": {"placeholder": "Select...", "options": ["Option 1", "Option 2", "Option 3"], "label": "Select"},
    "checkbox": {"label": "Checkbox", "checked": False, "disabled": False},
    "radio": {"options": ["Option 1", "Option 2", "Option 3"], "label": "Radio group"},
    "card": {"title": "Card title", "shadow": True, "padding": "1rem", "border": True, "rounded": True},
    "data-table": {"title": "Data table", "dataSource": None, "pagination": True, "pageSize": 10},
    "bar-chart": {**_CHART_BASE, "title": "Bar chart", "xField": "name", "yField": "sales"},
    "line-chart": {**_CHART_BASE, "title": "Line chart", "xField": "name", "yField": "y", "smooth": True},
    "pie-chart": {**_CHART_BASE, "title": "Pie chart", "colorField": "category", "valueField": "value"},
    "container": {"width": "100%", "height": "auto", "padding": "1rem"},
    "grid-layout": {"columns": 3, "gap": 2, "rowHeight": "auto", "width": "100%", "height": "auto"},
    "flex-layout": {
        "direction": "row",
        "wrap": True,
        "justifyContent": "start",
        "alignItems": "center",
        "gap": 2,
        "width": "100%",
        "height": "auto",
    },
    "split-layout": {"direction": "horizontal", "splitRatio": 30, "minSize": 100, "width": "100%", "height": "300px"},
    "tab-layout": {"tabs": [{"id": "tab-1", "label": "Tab 1"}, {"id": "tab-2", "label": "Tab 2"}], "defaultTab": "tab-1"},
    "card-group": {"columns": 3, "gap": 2, "width": "100%"},
    "responsive-container": {"width": "100%", "maxWidth": "1200px", "padding": "1rem"},
    "row": {"gap": 2, "width": "100%"},
    "column": {"span": 1, "gap": 2},
}

GROUP_PROPERTIES: dict[str, Any] = {
    "width": "auto",
    "height": "auto",
    "padding": "10px",
    "bgColor": "rgba(0, 0, 0, 0.03)",
    "isGroup": True,
}


def is_container(component_type: str) -> bool:
    """Check whether a component type may hold children."""
    return component_type in CONTAINER_TYPES


def default_properties(component_type: str, theme: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Default property bag for a new component.

    Args:
        component_type: Widget kind; unknown kinds get only the base properties
        theme: Optional theme; ``textColor`` colours new text components

    Returns:
        Fresh dict the caller may own
    """
    properties: dict[str, Any] = {"visible": True}
    properties.update(copy.deepcopy(_DEFAULTS.get(component_type, {})))

    if component_type == "text":
        color = theme.get("textColor") if theme else None
        properties["color"] = color or "#000000"

    return properties
