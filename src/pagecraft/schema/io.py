"""
Document Import / Export

Reads and writes UTF-8 ``.json`` PageSchema files. Import failures are
classified so the user can tell "not JSON" from "not a page document"
from "made by a newer version".
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from pagecraft.core.config import Settings, get_settings
from pagecraft.core.errors import (
    DocumentNotJSONError,
    SchemaValidationError,
    SchemaVersionError,
    UnrecognizedDocumentError,
)
from pagecraft.core.json import JSONParseError, loads, validate_json_depth, validate_json_size
from pagecraft.core.logging_config import get_logger

from .migrator import compare_versions, is_legacy_project, migrate_schema
from .serializer import from_schema, project_to_schema_json
from .types import SCHEMA_VERSION, PageSchema, ProjectData
from .validator import model_errors, schema_errors

logger = get_logger(__name__)

LEGACY = "legacy"


@dataclass(frozen=True)
class ImportOutcome:
    """
    A successfully imported document.

    ``migrated_from`` is the original schema version when the document was
    upgraded, ``"legacy"`` for an un-enveloped project, otherwise None.
    """

    project: ProjectData
    schema: PageSchema
    migrated_from: str | None = None

    @property
    def migrated(self) -> bool:
        return self.migrated_from is not None


def import_document(text: str | bytes, settings: Settings | None = None) -> ImportOutcome:
    """
    Parse, classify and load an exported document.

    Raises:
        DocumentNotJSONError: not JSON, too large, or nested too deeply
        SchemaVersionError: written by a newer schema version
        UnrecognizedDocumentError: JSON that is not a page document
    """
    settings = settings or get_settings()
    try:
        validate_json_size(text, settings.max_document_size, name="Document")
        document = loads(text)
        validate_json_depth(document, settings.max_document_depth)
    except JSONParseError as e:
        raise DocumentNotJSONError(str(e)) from e

    migrated_from = _check_version(document)

    try:
        if is_legacy_project(document):
            migrated_from = LEGACY
        schema = migrate_schema(document)
    except SchemaValidationError as e:
        errors = e.errors or schema_errors(document)
        raise UnrecognizedDocumentError(document, list(errors)) from e

    if migrated_from not in (None, LEGACY):
        schema = schema.model_copy(
            update={
                "version": SCHEMA_VERSION,
                "metadata": schema.metadata.model_copy(update={"version": SCHEMA_VERSION}),
            }
        )

    try:
        project = from_schema(schema)
    except PydanticValidationError as e:
        raise UnrecognizedDocumentError(document, list(model_errors(e))) from e

    logger.info(
        "document_imported",
        name=project.name,
        components=len(project.components),
        migrated_from=migrated_from,
    )
    return ImportOutcome(project=project, schema=schema, migrated_from=migrated_from)


def _check_version(document: Any) -> str | None:
    """Older version to migrate from, or None when current/absent."""
    if not isinstance(document, dict):
        return None
    version = document.get("version")
    if not isinstance(version, str) or not version:
        return None
    try:
        order = compare_versions(version, SCHEMA_VERSION)
    except ValueError as e:
        raise UnrecognizedDocumentError(document, [str(e)]) from e
    if order > 0:
        raise SchemaVersionError(version, SCHEMA_VERSION)
    return version if order < 0 else None


def export_document(project: ProjectData, indent: int = 2) -> str:
    return project_to_schema_json(project, indent=indent)


def read_document(path: str | Path, settings: Settings | None = None) -> ImportOutcome:
    """Import a document file (UTF-8 JSON)."""
    path = Path(path)
    logger.debug("document_read", path=str(path))
    return import_document(path.read_bytes(), settings)


def write_document(path: str | Path, project: ProjectData) -> Path:
    """Export a project to ``path``; a ``.json`` suffix is added when missing."""
    path = Path(path)
    if path.suffix != ".json":
        path = path.with_name(f"{path.name}.json")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_document(project), encoding="utf-8")
    logger.info("document_written", path=str(path), components=len(project.components))
    return path
