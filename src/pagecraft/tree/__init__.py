"""Component tree model and pure tree operations."""

from .models import Component, DataMapping, DataSource, DataSourceType, Transform, WireModel
from .registry import CONTAINER_TYPES, GROUP_PROPERTIES, default_properties, is_container
from .index import TreeIndex
from .store import (
    GroupResult,
    Tree,
    add_component,
    ancestors_of,
    build_component_tree,
    children_of,
    create_component,
    delete_cascade,
    depth_of,
    descendant_ids,
    find_by_type,
    find_component,
    flatten_component_tree,
    flatten_wire_components,
    group,
    reparent,
    root_components,
    sync_children,
    ungroup,
    update_component,
    update_position,
    validate_tree,
)

__all__ = [
    "Component",
    "DataMapping",
    "DataSource",
    "DataSourceType",
    "Transform",
    "WireModel",
    "CONTAINER_TYPES",
    "GROUP_PROPERTIES",
    "default_properties",
    "is_container",
    "TreeIndex",
    "GroupResult",
    "Tree",
    "add_component",
    "ancestors_of",
    "build_component_tree",
    "children_of",
    "create_component",
    "delete_cascade",
    "depth_of",
    "descendant_ids",
    "find_by_type",
    "find_component",
    "flatten_component_tree",
    "flatten_wire_components",
    "group",
    "reparent",
    "root_components",
    "sync_children",
    "ungroup",
    "update_component",
    "update_position",
    "validate_tree",
]
