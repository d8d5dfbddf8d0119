"""Versioned document schema: models, validation, migration, persistence."""

from .types import SCHEMA_VERSION, Canvas, PageSchema, ProjectData, ProjectSettings, SchemaMetadata
from .validator import (
    ValidationReport,
    schema_errors,
    validate_document,
    validate_schema,
    validate_schema_json,
    validate_schema_report,
)
from .serializer import (
    deserialize_schema,
    from_schema,
    project_to_schema_json,
    schema_json_to_project,
    serialize_schema,
    to_schema,
)
from .migrator import (
    compare_versions,
    is_legacy_project,
    migrate_schema,
    migrate_schema_version,
    needs_migration,
)
from .processor import SchemaProcessor
from .io import ImportOutcome, export_document, import_document, read_document, write_document
from .repository import ProjectLibrary, ProjectSummary

__all__ = [
    "SCHEMA_VERSION",
    "Canvas",
    "PageSchema",
    "ProjectData",
    "ProjectSettings",
    "SchemaMetadata",
    "ValidationReport",
    "schema_errors",
    "validate_document",
    "validate_schema",
    "validate_schema_json",
    "validate_schema_report",
    "deserialize_schema",
    "from_schema",
    "project_to_schema_json",
    "schema_json_to_project",
    "serialize_schema",
    "to_schema",
    "compare_versions",
    "is_legacy_project",
    "migrate_schema",
    "migrate_schema_version",
    "needs_migration",
    "SchemaProcessor",
    "ImportOutcome",
    "export_document",
    "import_document",
    "read_document",
    "write_document",
    "ProjectLibrary",
    "ProjectSummary",
]
