"""Conversion between the live document and its versioned schema."""

from __future__ import annotations

from typing import Any, Mapping

from pagecraft.core.id import new_project_id
from pagecraft.core.json import dumps, loads

from .types import SCHEMA_VERSION, PageSchema, ProjectData, ProjectSettings, SchemaMetadata


def to_schema(project: ProjectData, version: str = SCHEMA_VERSION) -> PageSchema:
    """Wrap a project into the versioned envelope. Pure and total."""
    return PageSchema(
        version=version,
        metadata=SchemaMetadata(
            name=project.name,
            description=project.description,
            created_at=project.created_at,
            updated_at=project.updated_at,
            version=SCHEMA_VERSION,
        ),
        components=project.components,
        canvas=project.canvas,
        theme=project.theme,
        data_sources=project.data_sources,
        settings=project.settings,
    )


def from_schema(schema: PageSchema | Mapping[str, Any]) -> ProjectData:
    """
    Unwrap a schema into a live project.

    A string ``id`` carried alongside the schema fields is kept. Otherwise a
    fresh id is generated from the name and the current time, so two
    conversions of the same schema yield different ids.
    """
    if not isinstance(schema, PageSchema):
        schema = PageSchema.model_validate(dict(schema))

    metadata = schema.metadata
    project_id = (schema.model_extra or {}).get("id")
    if not isinstance(project_id, str) or not project_id:
        project_id = new_project_id(metadata.name)

    return ProjectData(
        id=project_id,
        name=metadata.name,
        description=metadata.description,
        created_at=metadata.created_at,
        updated_at=metadata.updated_at,
        components=schema.components,
        canvas=schema.canvas,
        theme=schema.theme if schema.theme is not None else {},
        data_sources=schema.data_sources,
        settings=schema.settings or ProjectSettings(),
    )


def serialize_schema(schema: PageSchema, indent: int = 2) -> str:
    return dumps(schema.to_wire(), indent=indent)


def deserialize_schema(text: str | bytes) -> PageSchema:
    """Parse schema JSON into a model. No structural guard is applied."""
    return PageSchema.model_validate(loads(text))


def project_to_schema_json(project: ProjectData, version: str = SCHEMA_VERSION, indent: int = 2) -> str:
    return serialize_schema(to_schema(project, version), indent=indent)


def schema_json_to_project(text: str | bytes) -> ProjectData:
    return from_schema(deserialize_schema(text))
