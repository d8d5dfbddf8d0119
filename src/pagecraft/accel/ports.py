"""Acceleration capability surface."""

from typing import Any, Protocol, runtime_checkable

CAPABILITIES: tuple[str, ...] = (
    "validate_json",
    "format_json",
    "minify_json",
    "parse_csv",
    "parse_xml",
    "serialize_schema",
    "deserialize_schema",
    "validate_schema",
    "migrate_schema",
    "generate_mapping",
    "apply_mapping",
    "transform_data",
    "calculate_layout",
    "snap_to_grid",
    "detect_collision",
)


@runtime_checkable
class Accelerator(Protocol):
    """
    Operations an accelerator provides.

    Arguments and results are JSON-shaped (str, dict, list, numbers) so a
    native module and the interpreted implementation are interchangeable.
    """

    # Text
    def validate_json(self, text: str) -> bool: ...

    def format_json(self, text: str, indent: int = 2) -> str: ...

    def minify_json(self, text: str) -> str: ...

    def parse_csv(self, text: str) -> list[dict[str, str]]: ...

    def parse_xml(self, text: str) -> dict[str, Any]: ...

    # Schema
    def serialize_schema(self, project: dict[str, Any]) -> str: ...

    def deserialize_schema(self, schema_json: str) -> dict[str, Any]: ...

    def validate_schema(self, schema_json: str) -> dict[str, Any]: ...

    def migrate_schema(self, schema_json: str, from_version: str, to_version: str) -> str: ...

    # Mapping
    def generate_mapping(self, source: Any, target: Any) -> list[dict[str, Any]]: ...

    def apply_mapping(self, data: Any, mappings: list[dict[str, Any]]) -> dict[str, Any]: ...

    def transform_data(self, data: Any, rules: Any) -> Any: ...

    # Layout
    def calculate_layout(self, components: list[dict[str, Any]], viewport_width: float) -> list[dict[str, Any]]: ...

    def snap_to_grid(self, x: float, y: float, grid_size: float) -> dict[str, float]: ...

    def detect_collision(self, a: dict[str, Any], b: dict[str, Any]) -> bool: ...
