"""
Component Tree Store

Pure operations over a flat component collection. Every function takes a
sequence of components and returns a new tuple; inputs are never modified.
``parent_id`` is authoritative and ``children`` is refreshed from it after
each structural change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from pagecraft.core.errors import (
    ComponentNotFoundError,
    DuplicateComponentError,
    GroupingError,
    InvariantViolationError,
)
from pagecraft.core.id import new_component_id, new_group_id
from pagecraft.core.logging_config import get_logger
from pagecraft.layout.position import Position

from .index import TreeIndex
from .models import Component, embedded_child_id
from .registry import GROUP_PROPERTIES, default_properties, is_container

logger = get_logger(__name__)

Tree = tuple[Component, ...]

_PATCH_KEYS = {
    "name": "name",
    "position": "position",
    "properties": "properties",
    "dataSource": "dataSource",
    "data_source": "dataSource",
    "dataMapping": "dataMapping",
    "data_mapping": "dataMapping",
}
_IMMUTABLE_KEYS = {"id", "type", "parentId", "parent_id", "children"}


@dataclass(frozen=True)
class GroupResult:
    """Outcome of grouping: the new tree and the created container."""

    tree: Tree
    group: Component


# ============================================================================
# Creation
# ============================================================================


def create_component(
    component_type: str,
    position: Position | Mapping[str, float] | None = None,
    parent_id: str | None = None,
    theme: Mapping[str, Any] | None = None,
) -> Component:
    """
    Build a new component with a fresh id and the type's default properties.

    The component is not part of any tree until passed to ``add_component``.
    """
    return Component(
        id=new_component_id(component_type),
        type=component_type,
        name=component_type,
        position=_as_position(position),
        properties=default_properties(component_type, theme),
        parent_id=parent_id or None,
    )


def add_component(component: Component, tree: Sequence[Component]) -> Tree:
    """
    Append a component.

    Raises:
        DuplicateComponentError: id already in the tree
        ComponentNotFoundError: parent does not exist
        InvariantViolationError: parent cannot hold children
    """
    index = TreeIndex.build(tree)
    if component.id in index:
        raise DuplicateComponentError(component.id)
    if component.parent_id:
        _check_parent(index, component.parent_id)
    return sync_children((*tree, component))


# ============================================================================
# Updates
# ============================================================================


def update_position(
    component_id: str,
    position: Position | Mapping[str, float] | None,
    tree: Sequence[Component],
) -> Tree:
    """Replace one component's position; no-op if the id is absent."""
    new_position = _as_position(position)
    return tuple(
        c.model_copy(update={"position": new_position}) if c.id == component_id else c
        for c in tree
    )


def update_component(component_id: str, updates: Mapping[str, Any], tree: Sequence[Component]) -> Tree:
    """
    Apply a property-panel patch.

    ``properties`` is merged key by key; name, position and data binding are
    replaced; unknown keys are kept as extra fields. Structural keys (id,
    type, parentId, children) are refused. No-op if the id is absent.

    Raises:
        InvariantViolationError: patch touches a structural key
    """
    forbidden = _IMMUTABLE_KEYS.intersection(updates)
    if forbidden:
        raise InvariantViolationError(
            f"Cannot patch structural fields {sorted(forbidden)}; use reparent instead"
        )

    result = []
    for component in tree:
        if component.id != component_id:
            result.append(component)
            continue

        wire = component.to_wire()
        for key, value in updates.items():
            target = _PATCH_KEYS.get(key, key)
            if target == "properties":
                wire["properties"] = {**component.properties, **(value or {})}
            elif target == "position" and isinstance(value, Position):
                wire["position"] = value.to_dict()
            else:
                wire[target] = value
        result.append(Component.model_validate(wire))
    return tuple(result)


def reparent(
    component_id: str,
    new_parent_id: str | None,
    tree: Sequence[Component],
    position: Position | Mapping[str, float] | None = None,
) -> Tree:
    """
    Move a component under another container (or to the root when None).

    Args:
        position: New position in the target's coordinate space; the current
            position is kept when omitted

    Raises:
        ComponentNotFoundError: component or target missing
        InvariantViolationError: target is not a container or would form a cycle
    """
    index = TreeIndex.build(tree)
    if component_id not in index:
        raise ComponentNotFoundError(component_id)

    if new_parent_id:
        _check_parent(index, new_parent_id)
        if new_parent_id == component_id or index.is_descendant(new_parent_id, component_id):
            raise InvariantViolationError(
                f"Moving {component_id} under {new_parent_id} would create a cycle"
            )

    update: dict[str, Any] = {"parent_id": new_parent_id or None}
    if position is not None:
        update["position"] = _as_position(position)

    return sync_children(
        c.model_copy(update=update) if c.id == component_id else c for c in tree
    )


# ============================================================================
# Deletion
# ============================================================================


def delete_cascade(component_id: str, tree: Sequence[Component]) -> Tree:
    """
    Remove a component and all of its transitive descendants.

    The descendant closure is computed on the intact tree before anything is
    removed. No-op if the id is absent.
    """
    index = TreeIndex.build(tree)
    if component_id not in index:
        return tuple(tree)

    doomed = {component_id, *index.descendant_ids(component_id)}
    logger.debug("cascade_delete", id=component_id, removed=len(doomed))
    return sync_children(c for c in tree if c.id not in doomed)


# ============================================================================
# Queries
# ============================================================================


def find_component(component_id: str, tree: Sequence[Component]) -> Component | None:
    return next((c for c in tree if c.id == component_id), None)


def find_by_type(component_type: str, tree: Sequence[Component]) -> Tree:
    return tuple(c for c in tree if c.type == component_type)


def root_components(tree: Sequence[Component]) -> Tree:
    """Components without a parent."""
    return tuple(c for c in tree if not c.parent_id)


def children_of(component_id: str, tree: Sequence[Component]) -> Tree:
    """Direct children only, in collection order."""
    return tuple(c for c in tree if c.parent_id == component_id)


def descendant_ids(component_id: str, tree: Sequence[Component]) -> list[str]:
    return TreeIndex.build(tree).descendant_ids(component_id)


def ancestors_of(component_id: str, tree: Sequence[Component]) -> Tree:
    """Ancestors from the root down to the direct parent."""
    index = TreeIndex.build(tree)
    return tuple(index.by_id[i] for i in index.ancestor_ids(component_id))


def depth_of(component_id: str, tree: Sequence[Component]) -> int:
    """0 for roots."""
    return len(TreeIndex.build(tree).ancestor_ids(component_id))


# ============================================================================
# Grouping
# ============================================================================


def group(ids: Sequence[str], group_name: str, tree: Sequence[Component]) -> GroupResult:
    """
    Wrap components in a new container.

    Members sharing a parent are grouped inside that parent; a selection
    spanning several containers is grouped at the root using canvas
    coordinates. The container sits at the first selected id (caller
    order), or at the selection's top-left corner when some member lies
    above or left of it. Members are translated into its local space.

    Raises:
        GroupingError: fewer than two valid ids
    """
    index = TreeIndex.build(tree)
    wanted = set(ids)
    selected = [c for c in tree if c.id in wanted]

    if len(selected) < 2:
        raise GroupingError(f"Grouping needs at least 2 existing components, got {len(selected)}")

    parents = {c.parent_id for c in selected}
    group_parent = parents.pop() if len(parents) == 1 else None

    if group_parent is None:
        placed = {c.id: _canvas_position(c, index) for c in selected}
    else:
        placed = {c.id: c.position for c in selected}

    origin = _group_origin([placed[i] for i in dict.fromkeys(ids) if i in placed])
    group_id = new_group_id()

    moved: dict[str, Component] = {}
    for component in selected:
        position = placed[component.id]
        local = None
        if position is not None:
            dx, dy = position.offset_from(origin)
            local = Position(x=dx, y=dy)
        moved[component.id] = component.model_copy(update={"parent_id": group_id, "position": local})

    container = Component(
        id=group_id,
        type="container",
        name=group_name.strip() or "Group",
        position=origin,
        properties=dict(GROUP_PROPERTIES),
        parent_id=group_parent,
    )

    result: list[Component] = []
    for component in tree:
        if component.id == selected[0].id:
            result.append(container)
        result.append(moved.get(component.id, component))

    new_tree = sync_children(result)
    logger.info("components_grouped", group=group_id, members=len(selected), parent=group_parent)
    return GroupResult(tree=new_tree, group=TreeIndex.build(new_tree).by_id[group_id])


def _canvas_position(component: Component, index: TreeIndex) -> Position | None:
    """Position with every positioned ancestor's offset added."""
    if component.position is None:
        return None
    x, y = component.position.x, component.position.y
    for ancestor_id in index.ancestor_ids(component.id):
        ancestor = index.by_id[ancestor_id].position
        if ancestor is not None:
            x, y = x + ancestor.x, y + ancestor.y
    return Position(x=x, y=y)


def _group_origin(positions: Sequence[Position | None]) -> Position:
    known = [p for p in positions if p is not None]
    if not known:
        return Position(x=0, y=0)
    first = known[0]
    if all(p.x >= first.x and p.y >= first.y for p in known):
        return first
    return Position(x=min(p.x for p in known), y=min(p.y for p in known))


def ungroup(group_id: str, tree: Sequence[Component]) -> Tree:
    """
    Dissolve a container, moving its children to its parent.

    Child positions are translated back into the parent's space. No-op if
    the id is absent.

    Raises:
        InvariantViolationError: the component is not a container
    """
    index = TreeIndex.build(tree)
    container = index.get(group_id)
    if container is None:
        return tuple(tree)
    if not is_container(container.type):
        raise InvariantViolationError(f"{group_id} ({container.type}) is not a container")

    members = set(index.child_ids(group_id))
    origin = container.position

    result = []
    for component in tree:
        if component.id == group_id:
            continue
        if component.id in members:
            position = component.position
            if position is not None and origin is not None:
                position = position.move(origin.x, origin.y)
            component = component.model_copy(
                update={"parent_id": container.parent_id, "position": position}
            )
        result.append(component)
    return sync_children(result)


# ============================================================================
# Structure
# ============================================================================


def sync_children(tree: Iterable[Component]) -> Tree:
    """Recompute every ``children`` list from ``parent_id`` back-references."""
    components = tuple(tree)
    index = TreeIndex.build(components)

    result = []
    for component in components:
        ids = index.child_ids(component.id)
        if ids:
            derived: tuple[str, ...] | None = ids
        elif component.children is not None or is_container(component.type):
            derived = ()
        else:
            derived = None
        if derived != component.children:
            component = component.model_copy(update={"children": derived})
        result.append(component)
    return tuple(result)


def validate_tree(tree: Sequence[Component]) -> list[str]:
    """List every violated tree invariant (empty when the tree is sound)."""
    errors: list[str] = []
    seen: set[str] = set()
    for component in tree:
        if component.id in seen:
            errors.append(f"duplicate id {component.id}")
        seen.add(component.id)

    index = TreeIndex.build(tree)
    for component in tree:
        parent_id = component.parent_id
        if not parent_id:
            continue
        parent = index.get(parent_id)
        if parent is None:
            errors.append(f"{component.id}: parent {parent_id} does not exist")
        elif not is_container(parent.type):
            errors.append(f"{component.id}: parent {parent_id} ({parent.type}) is not a container")

        chain = {component.id}
        current = parent
        while current is not None and current.parent_id:
            if current.id in chain:
                errors.append(f"{component.id}: parent chain forms a cycle")
                break
            chain.add(current.id)
            current = index.get(current.parent_id)
    return errors


def flatten_wire_components(components: Sequence[Any]) -> list[Any]:
    """
    Flatten embedded child components (tree-literal form) into one list.

    Embedded children are emitted after their parent with ``parentId`` set
    and the parent's ``children`` reduced to ids. Entries without embedded
    children pass through untouched.
    """
    result: list[Any] = []
    for item in components:
        children = item.get("children") if isinstance(item, dict) else None
        if not isinstance(children, list) or not any(isinstance(c, dict) for c in children):
            result.append(item)
            continue

        parent_id = item.get("id")
        result.append({**item, "children": [embedded_child_id(c) if isinstance(c, dict) else c for c in children]})
        embedded = [{**c, "parentId": parent_id} for c in children if isinstance(c, dict)]
        result.extend(flatten_wire_components(embedded))
    return result


def flatten_component_tree(nested: Sequence[Mapping[str, Any]]) -> Tree:
    """Nested wire components to a flat tree."""
    return sync_children(Component.model_validate(c) for c in flatten_wire_components(list(nested)))


def build_component_tree(tree: Sequence[Component], parent_id: str | None = None) -> list[dict[str, Any]]:
    """Nested wire view: each component with its children embedded."""
    index = TreeIndex.build(tree)

    def expand(component_id: str) -> dict[str, Any]:
        node = index.by_id[component_id].to_wire()
        node["children"] = [expand(child) for child in index.child_ids(component_id)]
        return node

    start = index.roots if parent_id is None else index.child_ids(parent_id)
    return [expand(component_id) for component_id in start]


# ============================================================================
# Helpers
# ============================================================================


def _as_position(position: Position | Mapping[str, float] | None) -> Position | None:
    if position is None or isinstance(position, Position):
        return position
    return Position.from_dict(dict(position))


def _check_parent(index: TreeIndex, parent_id: str) -> None:
    parent = index.get(parent_id)
    if parent is None:
        raise ComponentNotFoundError(parent_id)
    if not is_container(parent.type):
        raise InvariantViolationError(f"{parent_id} ({parent.type}) cannot hold children")
