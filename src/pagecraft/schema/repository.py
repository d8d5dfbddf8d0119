"""File-backed project library."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pagecraft.core.config import Settings
from pagecraft.core.logging_config import get_logger

from .io import import_document
from .serializer import project_to_schema_json
from .types import ProjectData, utc_now

logger = get_logger(__name__)

CURRENT_POINTER = ".current"


@dataclass(frozen=True)
class ProjectSummary:
    """Listing entry; loading the full project is deferred."""

    id: str
    name: str
    updated_at: str
    path: Path


class ProjectLibrary:
    """
    Directory of saved projects, one ``<id>.json`` schema file each.

    Files hold the exported PageSchema; the live project id is the file name
    so it survives a save/load cycle. A ``.current`` pointer file remembers
    the last opened project.
    """

    def __init__(self, root: str | Path, settings: Settings | None = None) -> None:
        self.root = Path(root)
        self.settings = settings

    @classmethod
    def from_settings(cls, settings: Settings) -> ProjectLibrary:
        return cls(settings.library_dir, settings)

    def _path(self, project_id: str) -> Path:
        if not project_id or "/" in project_id or "\\" in project_id or project_id.startswith("."):
            raise ValueError(f"Invalid project id: {project_id!r}")
        return self.root / f"{project_id}.json"

    def save(self, project: ProjectData) -> ProjectData:
        """Write the project, stamping ``updated_at``; returns the saved copy."""
        saved = project.model_copy(update={"updated_at": utc_now()})
        path = self._path(saved.id)
        self.root.mkdir(parents=True, exist_ok=True)
        path.write_text(project_to_schema_json(saved), encoding="utf-8")
        logger.info("project_saved", id=saved.id, path=str(path))
        return saved

    def load(self, project_id: str) -> ProjectData | None:
        """
        Load a saved project, or None when it does not exist.

        Raises:
            DocumentImportError: the file exists but cannot be imported
        """
        path = self._path(project_id)
        if not path.is_file():
            return None
        outcome = import_document(path.read_bytes(), self.settings)
        return outcome.project.model_copy(update={"id": project_id})

    def list(self) -> list[ProjectSummary]:
        """Saved projects, most recently updated first. Unreadable files are skipped."""
        if not self.root.is_dir():
            return []

        summaries = []
        for path in self.root.glob("*.json"):
            try:
                project = self.load(path.stem)
            except Exception as e:
                logger.warning("project_unreadable", path=str(path), error=str(e))
                continue
            if project is not None:
                summaries.append(
                    ProjectSummary(id=path.stem, name=project.name, updated_at=project.updated_at, path=path)
                )
        summaries.sort(key=lambda s: s.updated_at, reverse=True)
        return summaries

    def delete(self, project_id: str) -> bool:
        """Remove a saved project; clears the current pointer if it pointed here."""
        path = self._path(project_id)
        if not path.is_file():
            return False
        path.unlink()
        if self.current_id() == project_id:
            self.set_current(None)
        logger.info("project_deleted", id=project_id)
        return True

    def current_id(self) -> str | None:
        pointer = self.root / CURRENT_POINTER
        if not pointer.is_file():
            return None
        return pointer.read_text(encoding="utf-8").strip() or None

    def set_current(self, project_id: str | None) -> None:
        pointer = self.root / CURRENT_POINTER
        if project_id is None:
            pointer.unlink(missing_ok=True)
            return
        self._path(project_id)
        self.root.mkdir(parents=True, exist_ok=True)
        pointer.write_text(project_id, encoding="utf-8")

    def current(self) -> ProjectData | None:
        """The last opened project, if it still exists."""
        project_id = self.current_id()
        return self.load(project_id) if project_id else None
