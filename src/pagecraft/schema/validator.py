"""
Schema Validation

Structural guard for PageSchema documents. A document is accepted only
when every rule holds; there is no partial acceptance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from returns.result import Failure, Result, Success

from pagecraft.core.json import JSONParseError, loads

from .types import PageSchema


@dataclass(frozen=True)
class ValidationReport:
    """Validation verdict with every violated rule."""

    valid: bool
    errors: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors)}


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but not a number on the wire
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_document(candidate: Any) -> Any:
    if isinstance(candidate, BaseModel):
        return candidate.model_dump(mode="json", by_alias=True)
    return candidate


def schema_errors(candidate: Any) -> list[str]:
    """Every structural rule the candidate violates."""
    obj = _as_document(candidate)
    if not isinstance(obj, dict):
        return ["Schema must be an object"]

    errors: list[str] = []

    version = obj.get("version")
    if not _is_string(version) or not version:
        errors.append("Missing or invalid 'version' field")

    metadata = obj.get("metadata")
    if not isinstance(metadata, dict):
        errors.append("Missing or invalid 'metadata' field")
    else:
        name = metadata.get("name")
        if not _is_string(name) or not name:
            errors.append("Missing or invalid 'metadata.name' field")
        if not _is_string(metadata.get("version")):
            errors.append("Missing or invalid 'metadata.version' field")

    if not isinstance(obj.get("components"), list):
        errors.append("Missing or invalid 'components' field (must be an array)")

    canvas = obj.get("canvas")
    if not isinstance(canvas, dict):
        errors.append("Missing or invalid 'canvas' field")
    else:
        if not isinstance(canvas.get("showGrid"), bool):
            errors.append("Missing or invalid 'canvas.showGrid' field")
        if not isinstance(canvas.get("snapToGrid"), bool):
            errors.append("Missing or invalid 'canvas.snapToGrid' field")
        if not _is_number(canvas.get("viewportWidth")):
            errors.append("Missing or invalid 'canvas.viewportWidth' field")
        if not _is_string(canvas.get("activeDevice")):
            errors.append("Missing or invalid 'canvas.activeDevice' field")

    if obj.get("theme") is None:
        errors.append("Missing 'theme' field")

    if not isinstance(obj.get("dataSources"), list):
        errors.append("Missing or invalid 'dataSources' field (must be an array)")

    return errors


def validate_schema(candidate: Any) -> bool:
    """True only if the candidate is a structurally complete PageSchema."""
    return not schema_errors(candidate)


def validate_schema_report(candidate: Any) -> ValidationReport:
    errors = schema_errors(candidate)
    return ValidationReport(valid=not errors, errors=tuple(errors))


def validate_schema_json(text: str | bytes) -> ValidationReport:
    """Validate JSON text; undecodable text is reported, not raised."""
    try:
        candidate = loads(text)
    except JSONParseError as e:
        return ValidationReport(valid=False, errors=(f"Invalid JSON: {e}",))
    return validate_schema_report(candidate)


def model_errors(error: PydanticValidationError) -> tuple[str, ...]:
    """Flatten pydantic errors into ``path: message`` strings."""
    return tuple(
        f"{'.'.join(str(part) for part in detail['loc'])}: {detail['msg']}"
        for detail in error.errors()
    )


def validate_document(candidate: Any) -> Result[PageSchema, ValidationReport]:
    """
    Validate and build a PageSchema without raising.

    Returns:
        Success with the model, or Failure with the report of what is wrong
    """
    report = validate_schema_report(candidate)
    if not report.valid:
        return Failure(report)
    try:
        return Success(PageSchema.model_validate(_as_document(candidate)))
    except PydanticValidationError as e:
        return Failure(ValidationReport(valid=False, errors=model_errors(e)))
