"""Component and data-source models."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from pagecraft.layout.position import Position


class WireModel(BaseModel):
    """Frozen model serialized with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys; unset optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def embedded_child_id(item: dict[str, Any]) -> str:
    """Id of an embedded child component; raises ValueError when it has none."""
    child_id = item.get("id")
    if not isinstance(child_id, str) or not child_id:
        raise ValueError("embedded child component has no id")
    return child_id


class Component(WireModel):
    """One placed widget instance in the design tree.

    ``parent_id`` is authoritative; ``children`` is a derived list of direct
    child ids that tree operations keep in sync.
    """

    id: str = Field(..., min_length=1, description="Unique, immutable identifier")
    type: str = Field(..., min_length=1, description="Widget kind")
    name: str | None = Field(default=None, description="Display label")
    position: Position | None = Field(default=None, description="Canvas or container-local position")
    properties: dict[str, Any] = Field(default_factory=dict)
    parent_id: str | None = Field(default=None)
    children: tuple[str, ...] | None = Field(default=None)
    data_source: str | None = Field(default=None, description="Bound DataSource id (weak)")
    data_mapping: list[dict[str, Any]] | None = Field(default=None)

    @field_validator("children", mode="before")
    @classmethod
    def child_ids(cls, value: Any) -> Any:
        """Accept embedded child components by reducing them to their ids."""
        if isinstance(value, list):
            return tuple(embedded_child_id(item) if isinstance(item, dict) else item for item in value)
        return value

    @property
    def is_root(self) -> bool:
        return not self.parent_id


class DataSourceType(str, Enum):
    """Kinds of data sources."""

    STATIC = "static"
    API = "api"
    DATABASE = "database"
    FILE = "file"
    WEBSOCKET = "websocket"


class DataSource(WireModel):
    """Data a component can bind to."""

    id: str = Field(..., min_length=1)
    name: str
    type: DataSourceType
    data: Any = None
    config: dict[str, Any] | None = None
    status: str | None = None
    error: str | None = None


Transform = Literal["string", "number", "boolean", "date", "json"]


class DataMapping(WireModel):
    """Copy one value from a data-source path to a component path."""

    field: str | None = None
    source_path: str
    target_path: str
    transform: Transform | None = None
    default_value: Any = None
