"""Fast JSON codec for documents: msgspec decoding, orjson encoding."""

from typing import Any
import json

import msgspec
import orjson

_decoder = msgspec.json.Decoder()


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def loads(data: str | bytes) -> Any:
    """
    Decode JSON text.

    Args:
        data: JSON text or UTF-8 bytes

    Returns:
        Decoded Python value

    Raises:
        JSONParseError: If the text is not JSON or nests past the interpreter's recursion limit
    """
    raw = data.encode("utf-8") if isinstance(data, str) else data
    try:
        return _decoder.decode(raw)
    except msgspec.DecodeError as e:
        raise JSONParseError(str(e), e) from e
    except RecursionError as e:
        raise JSONParseError("JSON nesting too deep to decode", e) from e


def dumps(obj: Any, indent: int = 0) -> str:
    """
    Encode object to JSON string.

    orjson handles compact and two-space output; other indents go through
    the standard library.

    Args:
        obj: Object to encode
        indent: 0 for compact output

    Returns:
        JSON string
    """
    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except TypeError:
            # integers outside 64-bit range and similar edge cases
            return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)

    if indent == 2:
        try:
            return orjson.dumps(obj, option=orjson.OPT_INDENT_2).decode("utf-8")
        except TypeError:
            pass

    return json.dumps(obj, indent=indent, ensure_ascii=False)


def is_valid_json(text: str) -> bool:
    """Check whether text decodes as JSON."""
    try:
        loads(text)
        return True
    except JSONParseError:
        return False


def format_json(text: str, indent: int = 2) -> str:
    """Pretty-print JSON text. Raises JSONParseError on invalid input."""
    return dumps(loads(text), indent=indent)


def minify_json(text: str) -> str:
    """Strip insignificant whitespace from JSON text. Raises JSONParseError on invalid input."""
    return dumps(loads(text))


def validate_json_size(data: str | bytes, max_size: int, name: str = "JSON") -> None:
    """
    Reject oversized documents before decoding.

    Args:
        data: JSON text
        max_size: Maximum allowed size in bytes
        name: Name for error messages

    Raises:
        JSONParseError: If size exceeds limit
    """
    size = len(data.encode("utf-8")) if isinstance(data, str) else len(data)
    if size > max_size:
        raise JSONParseError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = 64, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth.

    Args:
        obj: Decoded value
        max_depth: Maximum allowed nesting depth
        current_depth: Current depth (internal)

    Raises:
        JSONParseError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise JSONParseError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)
