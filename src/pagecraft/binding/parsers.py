"""CSV and XML text to JSON-shaped data."""

from __future__ import annotations

import csv
import io
import xml.etree.ElementTree as ET
from typing import Any

from pagecraft.core.logging_config import get_logger

logger = get_logger(__name__)

TEXT_KEY = "_text"


def parse_csv(text: str) -> list[dict[str, str]]:
    """
    Rows of a headed CSV document as dicts.

    Rows may be ragged: cells beyond the header are dropped and short rows
    simply lack the trailing keys.

    Raises:
        ValueError: malformed CSV (e.g. an unterminated quote in strict mode)
    """
    reader = csv.DictReader(io.StringIO(text), strict=True)
    try:
        rows = [
            {key: value for key, value in row.items() if key is not None and value is not None}
            for row in reader
        ]
    except csv.Error as e:
        raise ValueError(f"Failed to read CSV record: {e}") from e

    logger.debug("csv_parsed", rows=len(rows))
    return rows


def parse_xml(text: str) -> dict[str, Any]:
    """
    XML document as nested dicts keyed by element name.

    Attributes become string keys, non-blank text is stored under ``_text``
    (or replaces the element entirely when it is all there is), and repeated
    sibling names collect into a list.

    Raises:
        ValueError: text is not well-formed XML
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ValueError(f"XML parse error: {e}") from e
    return {root.tag: _element_value(root)}


def _element_value(element: ET.Element) -> Any:
    data: dict[str, Any] = dict(element.attrib)

    for child in element:
        value = _element_value(child)
        if child.tag not in data:
            data[child.tag] = value
        elif isinstance(data[child.tag], list):
            data[child.tag].append(value)
        else:
            data[child.tag] = [data[child.tag], value]

    text = (element.text or "").strip()
    if text:
        if not data:
            return text
        data[TEXT_KEY] = text
    return data
