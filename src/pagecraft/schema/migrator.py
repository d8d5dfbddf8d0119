"""
Schema Migration

One-step heuristic: a valid PageSchema passes through, a legacy live
document is wrapped into the current envelope, anything else is rejected.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from pagecraft.core.errors import SchemaValidationError, UnrecognizedFormatError
from pagecraft.core.id import new_project_id
from pagecraft.core.json import loads
from pagecraft.core.logging_config import get_logger

from .serializer import serialize_schema, to_schema
from .types import SCHEMA_VERSION, PageSchema, ProjectData
from .validator import model_errors, validate_schema

logger = get_logger(__name__)

LEGACY_NAME = "Untitled project"


def is_legacy_project(candidate: Any) -> bool:
    """Live-document shape: components list and canvas object, no envelope."""
    return (
        isinstance(candidate, dict)
        and isinstance(candidate.get("components"), list)
        and isinstance(candidate.get("canvas"), dict)
        and "version" not in candidate
        and "metadata" not in candidate
    )


def migrate_schema(candidate: Any) -> PageSchema:
    """
    Bring a document to a PageSchema.

    Raises:
        UnrecognizedFormatError: neither a PageSchema nor a legacy project
        SchemaValidationError: recognized shape whose contents do not fit the models
    """
    if isinstance(candidate, PageSchema):
        return candidate

    try:
        if validate_schema(candidate):
            return PageSchema.model_validate(candidate)
        if is_legacy_project(candidate):
            logger.info("legacy_project_migrated", name=candidate.get("name"))
            return to_schema(_legacy_project(candidate))
    except PydanticValidationError as e:
        raise SchemaValidationError(
            "Document contents do not match the schema", candidate, list(model_errors(e))
        ) from e

    raise UnrecognizedFormatError(candidate)


def _legacy_project(document: dict[str, Any]) -> ProjectData:
    name = document.get("name") if isinstance(document.get("name"), str) else ""
    name = name or LEGACY_NAME
    data = {**document, "name": name}
    data.setdefault("id", new_project_id(name))
    return ProjectData.model_validate(data)


def migrate_schema_version(text: str | bytes, from_version: str, to_version: str) -> str:
    """Migrate schema JSON and stamp it with ``to_version``."""
    schema = migrate_schema(loads(text))
    stamped = schema.model_copy(
        update={
            "version": to_version,
            "metadata": schema.metadata.model_copy(update={"version": to_version}),
        }
    )
    logger.debug("schema_version_stamped", from_version=from_version, to_version=to_version)
    return serialize_schema(stamped)


def needs_migration(candidate: Any, target_version: str = SCHEMA_VERSION) -> bool:
    """Invalid documents always need migration."""
    if not validate_schema(candidate):
        return True
    version = candidate.version if isinstance(candidate, PageSchema) else candidate["version"]
    return version != target_version


def parse_version(version: str) -> tuple[int, ...]:
    """``"1.2.0"`` -> ``(1, 2, 0)``. Raises ValueError for non-numeric parts."""
    parts = version.strip().split(".")
    if not version.strip() or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid schema version: {version!r}")
    return tuple(int(part) for part in parts)


def compare_versions(a: str, b: str) -> int:
    """-1, 0 or 1 as ``a`` is older than, equal to, or newer than ``b``."""
    left, right = parse_version(a), parse_version(b)
    width = max(len(left), len(right))
    left += (0,) * (width - len(left))
    right += (0,) * (width - len(right))
    return (left > right) - (left < right)
