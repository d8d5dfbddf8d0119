"""Error taxonomy for the editor core."""

from typing import Any


class PagecraftError(Exception):
    """Base class for all editor core errors."""


# ============================================================================
# Structural-invalid input
# ============================================================================


class ValidationError(PagecraftError):
    """Input failed structural validation."""


class SchemaValidationError(ValidationError):
    """Document is not a valid PageSchema."""

    def __init__(self, message: str, document: Any = None, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.document = document
        self.errors = errors or []


class UnrecognizedFormatError(SchemaValidationError):
    """Document is neither a PageSchema nor a legacy project."""

    def __init__(self, document: Any = None) -> None:
        super().__init__("Unable to recognize schema format", document)


# ============================================================================
# Import / export
# ============================================================================


class DocumentImportError(PagecraftError):
    """Import failed; message is suitable for display."""


class DocumentNotJSONError(DocumentImportError):
    """File content is not JSON at all."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"The file is not valid JSON: {detail}")
        self.detail = detail


class UnrecognizedDocumentError(DocumentImportError):
    """Valid JSON, but not a page document."""

    def __init__(self, document: Any = None, errors: list[str] | None = None) -> None:
        message = "The file is valid JSON but not a recognized page document"
        if errors:
            message = f"{message}: {'; '.join(errors)}"
        super().__init__(message)
        self.document = document
        self.errors = errors or []


class SchemaVersionError(DocumentImportError):
    """Recognized document whose version cannot be loaded."""

    def __init__(self, found: str, supported: str) -> None:
        super().__init__(
            f"The document uses schema version {found}, "
            f"which is newer than the supported version {supported}"
        )
        self.found = found
        self.supported = supported


# ============================================================================
# Tree
# ============================================================================


class TreeError(PagecraftError):
    """Tree operation refused."""


class ComponentNotFoundError(TreeError):
    """Referenced component id does not exist."""

    def __init__(self, component_id: str) -> None:
        super().__init__(f"Component not found: {component_id}")
        self.component_id = component_id


class DuplicateComponentError(TreeError):
    """Component id already present in the tree."""

    def __init__(self, component_id: str) -> None:
        super().__init__(f"Duplicate component id: {component_id}")
        self.component_id = component_id


class InvariantViolationError(TreeError):
    """Mutation would break a tree invariant."""


class GroupingError(TreeError):
    """Selection cannot be grouped."""


# ============================================================================
# Acceleration
# ============================================================================


class AccelerationError(PagecraftError):
    """Native accelerator call failed."""


class CapabilityUnavailableError(AccelerationError):
    """Native accelerator does not provide the requested capability."""

    def __init__(self, capability: str) -> None:
        super().__init__(f"Capability not provided by native module: {capability}")
        self.capability = capability
