"""Tests for the editor session."""

import pytest

from pagecraft.core.config import Settings
from pagecraft.core.errors import ComponentNotFoundError, DocumentNotJSONError, GroupingError
from pagecraft.editor import EditorSession
from pagecraft.history import HistoryInfo
from pagecraft.layout import Position
from pagecraft.schema import ProjectData, export_document
from pagecraft.tree import DataMapping, DataSource


def ids(session):
    return [c.id for c in session.components]


# ============================================================================
# History
# ============================================================================

@pytest.mark.unit
def test_new_session_has_no_history(session):
    assert ids(session) == ["A", "B", "C", "D", "E"]
    assert not session.can_undo
    assert not session.can_redo
    assert session.name == "Landing Page"


@pytest.mark.unit
def test_blank_session(empty_session):
    assert empty_session.components == ()
    assert empty_session.name == "Untitled project"


@pytest.mark.unit
def test_add_undo_redo(session, metrics):
    button = session.add("button", {"x": 10, "y": 10})

    assert session.get(button.id) is not None
    assert session.can_undo

    session.undo()
    assert session.get(button.id) is None
    assert session.can_redo

    session.redo()
    assert session.get(button.id) == button
    assert metrics.sample("pagecraft_history_moves_total", {"direction": "undo"}) == 1.0
    assert metrics.sample("pagecraft_mutations_total", {"operation": "add"}) == 1.0


@pytest.mark.unit
def test_undo_redo_without_history_are_noops(session):
    calls = []
    session.subscribe(calls.append)

    session.undo()
    session.redo()

    assert calls == []


@pytest.mark.unit
def test_new_edit_clears_redo(session):
    session.delete("E")
    session.undo()
    session.move("C", {"x": 0, "y": 0})

    assert not session.can_redo
    assert session.get("E") is not None


@pytest.mark.unit
def test_noop_edit_is_not_recorded(session):
    calls = []
    session.subscribe(calls.append)

    session.delete("missing")
    session.move("missing", {"x": 1, "y": 1})

    assert not session.can_undo
    assert calls == []


@pytest.mark.unit
def test_history_limit(tmp_path, sample_project, metrics):
    settings = Settings(library_dir=tmp_path, history_limit=2)
    session = EditorSession(sample_project, settings=settings, metrics=metrics)

    for _ in range(4):
        session.add("text")

    assert len(session.history.past) == 2
    assert session.history_info() == HistoryInfo(current_index=2, total_steps=3, can_undo=True, can_redo=False)


# ============================================================================
# Tree edits
# ============================================================================

@pytest.mark.unit
def test_add_uses_theme(session):
    text = session.add("text", {"x": 0, "y": 0})
    assert text.properties["color"] == "#333333"


@pytest.mark.unit
def test_add_into_container(session):
    text = session.add("text", {"x": 0, "y": 0}, parent_id="B")
    assert session.get("B").children == ("D", text.id)


@pytest.mark.unit
def test_snap_to_grid_on_drop(session):
    session.update_canvas(snap_to_grid=True)

    text = session.add("text", {"x": 23, "y": 37})
    session.move("E", {"x": 401, "y": 309})

    assert text.position == Position(x=20, y=40)
    assert session.get("E").position == Position(x=400, y=300)


@pytest.mark.unit
def test_no_snap_when_disabled(session):
    session.move("E", Position(x=401, y=309))
    assert session.get("E").position == Position(x=401, y=309)


@pytest.mark.unit
def test_delete_cascades(session):
    session.delete("A")
    assert ids(session) == ["E"]

    session.undo()
    assert ids(session) == ["A", "B", "C", "D", "E"]


@pytest.mark.unit
def test_apply_patch(session):
    session.apply_patch("C", {"properties": {"text": "Buy"}})
    assert session.get("C").properties["text"] == "Buy"


@pytest.mark.unit
def test_group_and_ungroup(session):
    group = session.group(["B", "C"], "Toolbar")

    assert session.get("B").parent_id == group.id
    assert session.get("A").children == (group.id,)

    session.ungroup(group.id)
    assert session.get("C").position == Position(x=200, y=10)
    assert session.get("C").parent_id == "A"


@pytest.mark.unit
def test_failed_group_leaves_history_untouched(session):
    with pytest.raises(GroupingError):
        session.group(["C", "missing"])
    assert not session.can_undo


@pytest.mark.unit
def test_group_across_containers(session):
    group = session.group(["C", "E"])

    assert group.parent_id is None
    assert session.get("C").parent_id == group.id
    assert session.get("A").children == ("B",)

    session.undo()
    assert session.get("C").parent_id == "A"


@pytest.mark.unit
def test_reparent(session):
    session.reparent("E", "A", {"x": 5, "y": 5})

    assert session.get("E").parent_id == "A"
    assert session.get("A").children == ("B", "C", "E")


@pytest.mark.unit
def test_subscribe_and_unsubscribe(session):
    calls = []
    unsubscribe = session.subscribe(calls.append)

    session.add("divider")
    unsubscribe()
    session.add("divider")

    assert calls == [session]


# ============================================================================
# Data binding
# ============================================================================

@pytest.mark.unit
def test_bind_and_resolve(session):
    session.bind("E", "users", [DataMapping(source_path="name", target_path="content")])

    assert session.get("E").data_source == "users"
    assert session.component_data("E") == [{"content": "Ada"}]

    session.unbind("E")
    assert session.component_data("E") is None


@pytest.mark.unit
def test_bind_missing_component(session):
    with pytest.raises(ComponentNotFoundError):
        session.bind("missing", "users")


@pytest.mark.unit
def test_data_sources(session):
    session.add_data_source(DataSource(id="stats", name="Stats", type="api", data={"total": 3}))
    assert [ds.id for ds in session.data_sources] == ["users", "stats"]

    with pytest.raises(ValueError):
        session.add_data_source(DataSource(id="stats", name="Again", type="static"))

    session.bind("E", "stats")
    session.remove_data_source("stats")
    assert session.get("E").data_source == "stats"
    assert session.component_data("E") is None


# ============================================================================
# Document state
# ============================================================================

@pytest.mark.unit
def test_document_state_is_outside_history(session):
    session.rename("Shop", description="Storefront")
    session.set_theme({"textColor": "#111111"})
    session.update_settings(active_tab="data")

    project = session.to_project_data()

    assert project.name == "Shop"
    assert project.description == "Storefront"
    assert project.theme == {"textColor": "#111111"}
    assert project.settings.active_tab == "data"
    assert not session.can_undo


@pytest.mark.unit
def test_dirty_tracking(session):
    assert not session.is_dirty

    session.add("text")
    assert session.is_dirty

    session.undo()
    assert not session.is_dirty


# ============================================================================
# Import / export / persistence
# ============================================================================

@pytest.mark.unit
def test_export_then_import(session, empty_session):
    outcome = empty_session.import_document(session.export_document())

    assert not outcome.migrated
    assert empty_session.name == "Landing Page"
    assert [c.id for c in empty_session.components] == ids(session)
    assert not empty_session.can_undo


@pytest.mark.unit
def test_failed_import_keeps_document(session, metrics):
    session.add("text")

    with pytest.raises(DocumentNotJSONError):
        session.import_document("{not json")

    assert session.name == "Landing Page"
    assert len(session.components) == 6
    assert session.can_undo
    assert metrics.sample("pagecraft_documents_total", {"direction": "import", "status": "failure"}) == 1.0


@pytest.mark.unit
@pytest.mark.asyncio
async def test_export_async(session):
    text = await session.export_async()
    assert '"Landing Page"' in text


@pytest.mark.unit
@pytest.mark.asyncio
async def test_export_async_without_processor(empty_session):
    text = await empty_session.export_async()
    assert '"Untitled project"' in text


@pytest.mark.unit
def test_save_and_open(session, empty_session, library):
    session.add("text")
    saved = session.save(library)

    assert not session.is_dirty
    assert library.current_id() == "landing_01"
    assert saved.id == "landing_01"

    assert empty_session.open(library, "landing_01")
    assert ids(empty_session) == ids(session)
    assert not empty_session.open(library, "missing")


@pytest.mark.unit
def test_load_project_resets_history(session):
    session.add("text")
    session.load_project(ProjectData.blank("Fresh"))

    assert session.components == ()
    assert not session.can_undo
    assert session.name == "Fresh"
