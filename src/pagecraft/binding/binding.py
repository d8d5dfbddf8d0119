"""Component to data-source binding."""

from __future__ import annotations

from typing import Any, Sequence

from pagecraft.core.logging_config import get_logger
from pagecraft.tree.models import Component, DataMapping, DataSource

from .mapping import apply_mapping

logger = get_logger(__name__)


def bind_data_source(
    component: Component,
    data_source_id: str,
    mappings: Sequence[DataMapping] | None = None,
) -> Component:
    """Return a copy of the component bound to a data source."""
    return component.model_copy(
        update={
            "data_source": data_source_id,
            "data_mapping": [m.to_wire() for m in mappings or ()],
        }
    )


def unbind_data_source(component: Component) -> Component:
    return component.model_copy(update={"data_source": None, "data_mapping": None})


def find_data_source(data_sources: Sequence[DataSource], data_source_id: str) -> DataSource | None:
    return next((ds for ds in data_sources if ds.id == data_source_id), None)


def resolve_component_data(component: Component, data_sources: Sequence[DataSource]) -> Any:
    """
    Data a component renders.

    Unbound components and dangling references resolve to None. Without
    mappings the source data is returned as is; with mappings each row of a
    list source (or the single object) is mapped.
    """
    if not component.data_source:
        return None

    source = find_data_source(data_sources, component.data_source)
    if source is None:
        logger.warning("data_source_missing", component=component.id, data_source=component.data_source)
        return None

    if not component.data_mapping:
        return source.data

    if isinstance(source.data, list):
        return [apply_mapping(row, component.data_mapping) for row in source.data]
    return apply_mapping(source.data, component.data_mapping)


def dangling_bindings(components: Sequence[Component], data_sources: Sequence[DataSource]) -> list[str]:
    """Ids of components bound to a data source that no longer exists."""
    known = {ds.id for ds in data_sources}
    return [c.id for c in components if c.data_source and c.data_source not in known]
