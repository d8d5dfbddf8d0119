"""Interpreted implementation of every accelerated capability."""

from __future__ import annotations

from typing import Any

from pagecraft.binding import mapping, parsers
from pagecraft.core import json as jsonlib
from pagecraft.layout.collision import components_collide
from pagecraft.layout.grid import snap_to_grid
from pagecraft.layout.responsive import calculate_component_layout
from pagecraft.schema.migrator import migrate_schema_version
from pagecraft.schema.serializer import project_to_schema_json, schema_json_to_project
from pagecraft.schema.types import ProjectData
from pagecraft.schema.validator import validate_schema_json


class InterpretedAccelerator:
    """Reference behaviour; the dispatcher answers with this when native is absent or fails."""

    def validate_json(self, text: str) -> bool:
        return jsonlib.is_valid_json(text)

    def format_json(self, text: str, indent: int = 2) -> str:
        return jsonlib.format_json(text, indent=indent)

    def minify_json(self, text: str) -> str:
        return jsonlib.minify_json(text)

    def parse_csv(self, text: str) -> list[dict[str, str]]:
        return parsers.parse_csv(text)

    def parse_xml(self, text: str) -> dict[str, Any]:
        return parsers.parse_xml(text)

    def serialize_schema(self, project: dict[str, Any]) -> str:
        return project_to_schema_json(ProjectData.model_validate(project))

    def deserialize_schema(self, schema_json: str) -> dict[str, Any]:
        return schema_json_to_project(schema_json).to_wire()

    def validate_schema(self, schema_json: str) -> dict[str, Any]:
        return validate_schema_json(schema_json).to_dict()

    def migrate_schema(self, schema_json: str, from_version: str, to_version: str) -> str:
        return migrate_schema_version(schema_json, from_version, to_version)

    def generate_mapping(self, source: Any, target: Any) -> list[dict[str, Any]]:
        return [m.to_wire() for m in mapping.generate_mapping(source, target)]

    def apply_mapping(self, data: Any, mappings: list[dict[str, Any]]) -> dict[str, Any]:
        return mapping.apply_mapping(data, mappings)

    def transform_data(self, data: Any, rules: Any) -> Any:
        return mapping.transform_data(data, rules)

    def calculate_layout(self, components: list[dict[str, Any]], viewport_width: float) -> list[dict[str, Any]]:
        return calculate_component_layout(components, viewport_width)

    def snap_to_grid(self, x: float, y: float, grid_size: float) -> dict[str, float]:
        return snap_to_grid(x, y, grid_size).to_dict()

    def detect_collision(self, a: dict[str, Any], b: dict[str, Any]) -> bool:
        return components_collide(a, b)
