"""
Editor Session

One editing session over one document: the component tree lives in an
undo/redo history, everything else (canvas, theme, data sources, panel
settings) is document state outside the history. Sessions are constructed
explicitly and passed to whoever needs them; nothing here is global.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from pagecraft.binding.binding import resolve_component_data
from pagecraft.core.config import Settings, get_settings
from pagecraft.core.errors import ComponentNotFoundError
from pagecraft.core.hash import fingerprint
from pagecraft.core.id import generate_raw
from pagecraft.core.logging_config import LogContext, get_logger
from pagecraft.history import engine as hist
from pagecraft.history.engine import HistoryInfo, HistoryState
from pagecraft.layout.position import Position
from pagecraft.monitoring.metrics import MetricsCollector
from pagecraft.schema.io import ImportOutcome, export_document, import_document
from pagecraft.schema.processor import SchemaProcessor
from pagecraft.schema.repository import ProjectLibrary
from pagecraft.schema.types import ProjectData
from pagecraft.tree import store
from pagecraft.tree.models import Component, DataMapping, DataSource
from pagecraft.tree.store import Tree

logger = get_logger(__name__)

Listener = Callable[["EditorSession"], None]

DEFAULT_PROJECT_NAME = "Untitled project"

# Excluded from dirty tracking: they change on every save
_VOLATILE_KEYS = ("id", "createdAt", "updatedAt")


class EditorSession:
    """
    Live editing state for a single document.

    A view layer needs only ``components``, ``can_undo``/``can_redo`` and
    ``subscribe``. Every tree mutation goes through a pure tree operation
    and is recorded into history before listeners are notified.
    """

    def __init__(
        self,
        project: ProjectData | None = None,
        settings: Settings | None = None,
        metrics: MetricsCollector | None = None,
        processor: SchemaProcessor | None = None,
        session_id: str | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.metrics = metrics if metrics is not None else MetricsCollector()
        self.processor = processor
        self.session_id = session_id or generate_raw()
        self._listeners: list[Listener] = []
        self._install(project or ProjectData.blank(DEFAULT_PROJECT_NAME))

    # ========================================================================
    # View boundary
    # ========================================================================

    @property
    def components(self) -> Tree:
        return self._history.present

    @property
    def can_undo(self) -> bool:
        return hist.can_undo(self._history)

    @property
    def can_redo(self) -> bool:
        return hist.can_redo(self._history)

    @property
    def history(self) -> HistoryState[Tree]:
        return self._history

    def history_info(self) -> HistoryInfo:
        return hist.history_info(self._history)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(session)`` after every change; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ========================================================================
    # Tree edits
    # ========================================================================

    def add(
        self,
        component_type: str,
        position: Position | Mapping[str, float] | None = None,
        parent_id: str | None = None,
    ) -> Component:
        """Create a component of ``component_type`` and add it to the tree."""
        component = store.create_component(
            component_type,
            self._placed(position),
            parent_id=parent_id,
            theme=self._theme_mapping(),
        )
        self._commit("add", store.add_component(component, self.components))
        return component

    def add_component(self, component: Component) -> Component:
        """Add an existing component (template, paste)."""
        self._commit("add", store.add_component(component, self.components))
        return component

    def move(self, component_id: str, position: Position | Mapping[str, float]) -> None:
        """Drag/drop boundary; snaps when the canvas has snapping on."""
        self._commit("move", store.update_position(component_id, self._placed(position), self.components))

    def apply_patch(self, component_id: str, updates: Mapping[str, Any]) -> None:
        """Property-panel boundary: ``{id, updates}``."""
        self._commit("update", store.update_component(component_id, updates, self.components))

    def delete(self, component_id: str) -> None:
        self._commit("delete", store.delete_cascade(component_id, self.components))

    def group(self, component_ids: Sequence[str], name: str = "Group") -> Component:
        result = store.group(component_ids, name, self.components)
        self._commit("group", result.tree)
        return result.group

    def ungroup(self, group_id: str) -> None:
        self._commit("ungroup", store.ungroup(group_id, self.components))

    def reparent(
        self,
        component_id: str,
        new_parent_id: str | None,
        position: Position | Mapping[str, float] | None = None,
    ) -> None:
        self._commit(
            "reparent",
            store.reparent(component_id, new_parent_id, self.components, self._placed(position)),
        )

    def get(self, component_id: str) -> Component | None:
        return store.find_component(component_id, self.components)

    def undo(self) -> None:
        if not self.can_undo:
            return
        self._history = hist.undo(self._history)
        self.metrics.record_history_move("undo", len(self.components))
        self._notify()

    def redo(self) -> None:
        if not self.can_redo:
            return
        self._history = hist.redo(self._history)
        self.metrics.record_history_move("redo", len(self.components))
        self._notify()

    def _commit(self, operation: str, tree: Tree) -> None:
        if tree == self.components:
            return
        with LogContext(session=self.session_id):
            self._history = hist.record(self._history, tree, limit=self.settings.history_limit or None)
            self.metrics.record_mutation(operation, len(tree))
            logger.debug("tree_mutation", operation=operation, components=len(tree))
        self._notify()

    # ========================================================================
    # Data binding
    # ========================================================================

    @property
    def data_sources(self) -> tuple[DataSource, ...]:
        return self._document.data_sources

    def add_data_source(self, data_source: DataSource) -> None:
        if any(ds.id == data_source.id for ds in self.data_sources):
            raise ValueError(f"Duplicate data source id: {data_source.id}")
        self._update_document(data_sources=(*self.data_sources, data_source))

    def remove_data_source(self, data_source_id: str) -> None:
        """Bound components keep their reference; it reads as unbound."""
        self._update_document(data_sources=tuple(ds for ds in self.data_sources if ds.id != data_source_id))

    def bind(
        self,
        component_id: str,
        data_source_id: str,
        mappings: Sequence[DataMapping] | None = None,
    ) -> None:
        if self.get(component_id) is None:
            raise ComponentNotFoundError(component_id)
        self.apply_patch(
            component_id,
            {"dataSource": data_source_id, "dataMapping": [m.to_wire() for m in mappings or ()]},
        )

    def unbind(self, component_id: str) -> None:
        self.apply_patch(component_id, {"dataSource": None, "dataMapping": None})

    def component_data(self, component_id: str) -> Any:
        component = self.get(component_id)
        if component is None:
            return None
        return resolve_component_data(component, self.data_sources)

    # ========================================================================
    # Document state
    # ========================================================================

    @property
    def name(self) -> str:
        return self._document.name

    def update_canvas(self, **changes: Any) -> None:
        self._update_document(canvas=self._document.canvas.model_copy(update=changes))

    def set_theme(self, theme: Any) -> None:
        self._update_document(theme=theme)

    def update_settings(self, **changes: Any) -> None:
        self._update_document(settings=self._document.settings.model_copy(update=changes))

    def rename(self, name: str, description: str | None = None) -> None:
        changes: dict[str, Any] = {"name": name}
        if description is not None:
            changes["description"] = description
        self._update_document(**changes)

    def _update_document(self, **changes: Any) -> None:
        self._document = self._document.model_copy(update=changes)
        self._notify()

    def to_project_data(self) -> ProjectData:
        return self._document.model_copy(update={"components": self.components})

    def load_project(self, project: ProjectData) -> None:
        """Replace the document; history starts over."""
        self._install(project)
        logger.info("project_loaded", session=self.session_id, name=project.name)
        self._notify()

    def _install(self, project: ProjectData) -> None:
        self._document = project.model_copy(update={"components": ()})
        self._history = hist.create_history(store.sync_children(project.components))
        self.metrics.components.set(len(project.components))
        self._saved_fingerprint = self._fingerprint()

    # ========================================================================
    # Import / export
    # ========================================================================

    def export_document(self) -> str:
        text = export_document(self.to_project_data())
        self.metrics.record_document("export", "success")
        return text

    async def export_async(self) -> str:
        """Export through the accelerated path (requires a processor)."""
        if self.processor is None:
            return self.export_document()
        text = await self.processor.serialize_async(self.to_project_data())
        self.metrics.record_document("export", "success")
        return text

    def import_document(self, text: str | bytes) -> ImportOutcome:
        """
        Load an exported document; the current one is kept if import fails.

        Raises:
            DocumentImportError: classified failure with a display message
        """
        try:
            outcome = import_document(text, self.settings)
        except Exception:
            self.metrics.record_document("import", "failure")
            raise
        self.load_project(outcome.project)
        self.metrics.record_document("import", "success")
        return outcome

    # ========================================================================
    # Persistence
    # ========================================================================

    @property
    def is_dirty(self) -> bool:
        return self._fingerprint() != self._saved_fingerprint

    def mark_saved(self) -> None:
        self._saved_fingerprint = self._fingerprint()

    def save(self, library: ProjectLibrary) -> ProjectData:
        saved = library.save(self.to_project_data())
        library.set_current(saved.id)
        self._document = saved.model_copy(update={"components": ()})
        self.mark_saved()
        return saved

    def open(self, library: ProjectLibrary, project_id: str) -> bool:
        project = library.load(project_id)
        if project is None:
            return False
        self.load_project(project)
        library.set_current(project_id)
        return True

    def _fingerprint(self) -> str:
        wire = self.to_project_data().to_wire()
        for key in _VOLATILE_KEYS:
            wire.pop(key, None)
        return fingerprint(wire)

    def _placed(self, position: Position | Mapping[str, float] | None) -> Position | None:
        if position is None:
            return None
        if not isinstance(position, Position):
            position = Position.from_dict(dict(position))
        if self._document.canvas.snap_to_grid:
            position = position.snap_to_grid(self.settings.grid_size)
        return position

    def _theme_mapping(self) -> Mapping[str, Any] | None:
        theme = self._document.theme
        return theme if isinstance(theme, Mapping) else None
