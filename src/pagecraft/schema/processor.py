"""Schema operations routed through the acceleration dispatcher."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pagecraft.core.json import dumps

from .serializer import deserialize_schema
from .types import SCHEMA_VERSION, PageSchema, ProjectData
from .validator import ValidationReport

if TYPE_CHECKING:
    from pagecraft.accel.dispatcher import AccelerationDispatcher


def _as_text(document: Any) -> str:
    if isinstance(document, (str, bytes)):
        return document.decode("utf-8") if isinstance(document, bytes) else document
    if isinstance(document, PageSchema):
        return dumps(document.to_wire())
    return dumps(document)


class SchemaProcessor:
    """
    Async counterparts of the schema functions.

    Each method tries the native accelerator first; the dispatcher answers
    with the synchronous implementation when native is absent or fails.
    """

    def __init__(self, dispatcher: AccelerationDispatcher) -> None:
        self.dispatcher = dispatcher

    async def validate_async(self, document: Any) -> ValidationReport:
        result = await self.dispatcher.call("validate_schema", _as_text(document))
        return ValidationReport(valid=bool(result["valid"]), errors=tuple(result.get("errors", ())))

    async def migrate_async(self, document: Any, to_version: str = SCHEMA_VERSION) -> PageSchema:
        """
        Raises:
            UnrecognizedFormatError: document is neither schema nor legacy project
        """
        from_version = document.get("version") if isinstance(document, dict) else None
        text = await self.dispatcher.call(
            "migrate_schema", _as_text(document), from_version or "0.0.0", to_version
        )
        return deserialize_schema(text)

    async def serialize_async(self, project: ProjectData) -> str:
        return await self.dispatcher.call("serialize_schema", project.to_wire())

    async def deserialize_async(self, text: str | bytes) -> ProjectData:
        project = await self.dispatcher.call("deserialize_schema", _as_text(text))
        return ProjectData.model_validate(project)
