"""
Data Mapping

Copies values from data-source paths to component paths. Paths are dotted
(``user.name``) and may index lists either as a segment (``items.0``) or
with brackets (``items[0].title``).
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from pagecraft.core.json import JSONParseError, dumps, loads
from pagecraft.tree.models import DataMapping

_INDEX = re.compile(r"\[(\d+)\]")
_MISSING = object()


def _tokens(path: str) -> list[str | int]:
    tokens: list[str | int] = []
    for segment in path.split("."):
        bracket = segment.find("[")
        key = segment if bracket < 0 else segment[:bracket]
        if key:
            tokens.append(key)
        if bracket >= 0:
            tokens.extend(int(i) for i in _INDEX.findall(segment[bracket:]))
    return tokens


def get_value(data: Any, path: str, default: Any = None) -> Any:
    """Value at ``path``, or ``default`` when any step is missing."""
    current = data
    for token in _tokens(path):
        if isinstance(current, Mapping):
            current = current.get(str(token), _MISSING)
        elif isinstance(current, list):
            index = token if isinstance(token, int) else (int(token) if token.isdigit() else None)
            current = current[index] if index is not None and 0 <= index < len(current) else _MISSING
        else:
            current = _MISSING
        if current is _MISSING:
            return default
    return current


def set_value(target: dict[str, Any], path: str, value: Any) -> None:
    """
    Write ``value`` at ``path`` inside ``target``, creating objects on the way.

    Raises:
        ValueError: empty path, or a step that is not an object
    """
    keys = path.split(".")
    if not path or not all(keys):
        raise ValueError(f"Invalid target path: {path!r}")

    current = target
    for key in keys[:-1]:
        nested = current.setdefault(key, {})
        if not isinstance(nested, dict):
            raise ValueError(f"Path segment {key!r} is not an object")
        current = nested
    current[keys[-1]] = value


def transform_value(value: Any, transform: str | None, default: Any = None) -> Any:
    """Coerce a value; missing values and failed coercions yield ``default``."""
    if value is None:
        return default
    if not transform:
        return value

    if transform == "string":
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (dict, list)):
            return dumps(value)
        return str(value)

    if transform == "number":
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (int, float)):
            return value
        try:
            text = str(value).strip()
            number = int(text) if text.lstrip("-").isdigit() else float(text)
        except ValueError:
            return default
        return default if isinstance(number, float) and math.isnan(number) else number

    if transform == "boolean":
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() == "true" or value == "1"
        return bool(value)

    if transform == "date":
        try:
            if isinstance(value, (int, float)):
                return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
            return datetime.fromisoformat(str(value))
        except (ValueError, OverflowError, OSError):
            return default

    if transform == "json":
        if isinstance(value, (str, bytes)):
            try:
                return loads(value)
            except JSONParseError:
                return default
        return value

    return value


def generate_mapping(source: Any, target: Any) -> list[DataMapping]:
    """
    Propose mappings from a sample of the source to a target structure.

    List inputs are sampled by their first element. Nested objects present
    on both sides are walked; target keys missing from the source still get
    a mapping (with no default) so the caller can fill them in.
    """
    if isinstance(source, list):
        source = source[0] if source else {}
    if isinstance(target, list):
        target = target[0] if target else {}
    return _generate(source, target, "")


def _generate(source: Any, target: Any, prefix: str) -> list[DataMapping]:
    if not isinstance(source, Mapping) or not isinstance(target, Mapping):
        return []

    mappings: list[DataMapping] = []
    for key, target_value in target.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        source_value = source.get(key, _MISSING)
        if isinstance(source_value, Mapping) and isinstance(target_value, Mapping):
            mappings.extend(_generate(source_value, target_value, path))
        else:
            mappings.append(DataMapping(field=str(key), source_path=path, target_path=path))
    return mappings


def _as_mapping(rule: DataMapping | Mapping[str, Any]) -> DataMapping:
    return rule if isinstance(rule, DataMapping) else DataMapping.model_validate(rule)


def apply_mapping(data: Any, mappings: Sequence[DataMapping | Mapping[str, Any]]) -> dict[str, Any]:
    """
    Build a new object by applying every mapping to ``data``.

    Raises:
        pydantic.ValidationError: a mapping lacks sourcePath/targetPath
        ValueError: two target paths conflict
    """
    result: dict[str, Any] = {}
    for rule in map(_as_mapping, mappings):
        raw = get_value(data, rule.source_path)
        set_value(result, rule.target_path, transform_value(raw, rule.transform, rule.default_value))
    return result


def transform_data(data: Any, rules: Any) -> Any:
    """
    Apply a ``{"type": ...}`` rule to a value.

    Unknown rule types and failed coercions leave the value unchanged.
    """
    if not isinstance(rules, Mapping):
        return data
    return transform_value(data, rules.get("type"), default=data)


def extract_paths(data: Any, prefix: str = "") -> list[str]:
    """Leaf paths of a sample value, lists sampled by their first element."""
    if isinstance(data, list):
        return extract_paths(data[0], f"{prefix}[0]") if data else []
    if not isinstance(data, Mapping):
        return [prefix] if prefix else []

    paths: list[str] = []
    for key, value in data.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, (Mapping, list)) and value:
            paths.extend(extract_paths(value, path))
        else:
            paths.append(path)
    return paths
