"""Data-source binding, mapping and text parsers."""

from .mapping import (
    apply_mapping,
    extract_paths,
    generate_mapping,
    get_value,
    set_value,
    transform_data,
    transform_value,
)
from .parsers import parse_csv, parse_xml
from .binding import (
    bind_data_source,
    dangling_bindings,
    find_data_source,
    resolve_component_data,
    unbind_data_source,
)

__all__ = [
    "apply_mapping",
    "extract_paths",
    "generate_mapping",
    "get_value",
    "set_value",
    "transform_data",
    "transform_value",
    "parse_csv",
    "parse_xml",
    "bind_data_source",
    "dangling_bindings",
    "find_data_source",
    "resolve_component_data",
    "unbind_data_source",
]
