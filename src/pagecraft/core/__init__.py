"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .errors import (
    PagecraftError,
    ValidationError,
    SchemaValidationError,
    UnrecognizedFormatError,
    DocumentImportError,
    DocumentNotJSONError,
    UnrecognizedDocumentError,
    SchemaVersionError,
    TreeError,
    ComponentNotFoundError,
    DuplicateComponentError,
    InvariantViolationError,
    GroupingError,
    AccelerationError,
    CapabilityUnavailableError,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import (
    JSONParseError,
    dumps,
    loads,
    validate_json_size,
    validate_json_depth,
)
from .hash import Algorithm, fingerprint, hash_string


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "PagecraftError",
    "ValidationError",
    "SchemaValidationError",
    "UnrecognizedFormatError",
    "DocumentImportError",
    "DocumentNotJSONError",
    "UnrecognizedDocumentError",
    "SchemaVersionError",
    "TreeError",
    "ComponentNotFoundError",
    "DuplicateComponentError",
    "InvariantViolationError",
    "GroupingError",
    "AccelerationError",
    "CapabilityUnavailableError",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "JSONParseError",
    "dumps",
    "loads",
    "validate_json_size",
    "validate_json_depth",
    # DI
    "create_container",
    # Hashing
    "Algorithm",
    "fingerprint",
    "hash_string",
]
