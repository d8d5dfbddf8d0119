"""Live document and exchanged schema models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import Field, field_validator

from pagecraft.core.id import new_project_id
from pagecraft.tree.models import Component, DataSource, WireModel
from pagecraft.tree.store import flatten_wire_components

SCHEMA_VERSION = "1.0.0"


def utc_now() -> str:
    """ISO-8601 timestamp used for createdAt/updatedAt."""
    return datetime.now(timezone.utc).isoformat()


class Canvas(WireModel):
    show_grid: bool = False
    snap_to_grid: bool = False
    viewport_width: float = 1920
    active_device: str = "desktop"


class ProjectSettings(WireModel):
    """Editor panel state saved with a project."""

    active_tab: str = "components"
    sidebar_collapsed: bool = False
    right_panel_collapsed: bool = False
    left_panel_collapsed: bool = False


class _DocumentBody(WireModel):
    components: tuple[Component, ...] = ()
    canvas: Canvas = Field(default_factory=Canvas)
    theme: Any = Field(default_factory=dict)
    data_sources: tuple[DataSource, ...] = ()

    @field_validator("components", mode="before")
    @classmethod
    def flatten_components(cls, value: Any) -> Any:
        """Tree-literal documents embed children; store them flat."""
        if isinstance(value, list):
            return flatten_wire_components(value)
        return value


class SchemaMetadata(WireModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    created_at: str = Field(default_factory=utc_now)
    updated_at: str = Field(default_factory=utc_now)
    version: str = SCHEMA_VERSION


class PageSchema(_DocumentBody):
    """Versioned, self-describing interchange form of a document."""

    version: str = Field(..., min_length=1)
    metadata: SchemaMetadata
    settings: ProjectSettings | None = None


class ProjectData(_DocumentBody):
    """The live document being edited."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str | None = None
    created_at: str = Field(default_factory=utc_now)
    updated_at: str = Field(default_factory=utc_now)
    settings: ProjectSettings = Field(default_factory=ProjectSettings)

    @classmethod
    def blank(cls, name: str, **fields: Any) -> ProjectData:
        """Empty project with a fresh id and current timestamps."""
        return cls(id=new_project_id(name), name=name, **fields)
