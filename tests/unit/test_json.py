"""Tests for the JSON codec."""

import pytest

from pagecraft.core.json import (
    JSONParseError,
    dumps,
    format_json,
    is_valid_json,
    loads,
    minify_json,
    validate_json_depth,
    validate_json_size,
)


@pytest.mark.unit
def test_loads_accepts_str_and_bytes():
    assert loads('{"a": [1, 2]}') == {"a": [1, 2]}
    assert loads(b'{"a": true}') == {"a": True}


@pytest.mark.unit
def test_loads_invalid_raises():
    with pytest.raises(JSONParseError) as exc_info:
        loads("{not json")
    assert exc_info.value.original is not None


@pytest.mark.unit
def test_dumps_compact_and_indented():
    assert dumps({"a": 1, "b": [1, 2]}) == '{"a":1,"b":[1,2]}'
    assert dumps({"a": 1}, indent=2) == '{\n  "a": 1\n}'
    assert loads(dumps({"a": 1}, indent=4)) == {"a": 1}


@pytest.mark.unit
def test_format_and_minify():
    text = '{ "a" : 1 , "b" : [ 1 , 2 ] }'
    assert minify_json(text) == '{"a":1,"b":[1,2]}'
    assert format_json(text).startswith('{\n  "a": 1')

    with pytest.raises(JSONParseError):
        minify_json("[1,")


@pytest.mark.unit
def test_is_valid_json():
    assert is_valid_json("[]")
    assert is_valid_json('"text"')
    assert not is_valid_json("")
    assert not is_valid_json("{'single': 'quotes'}")


@pytest.mark.unit
def test_validate_json_size():
    validate_json_size("x" * 10, max_size=10)
    with pytest.raises(JSONParseError, match="exceeds maximum"):
        validate_json_size("x" * 11, max_size=10)
    # Byte length, not character count
    with pytest.raises(JSONParseError):
        validate_json_size("é" * 6, max_size=10)


@pytest.mark.unit
def test_validate_json_depth():
    nested = {"a": {"b": {"c": [1]}}}
    validate_json_depth(nested, max_depth=4)
    with pytest.raises(JSONParseError, match="nesting depth"):
        validate_json_depth(nested, max_depth=3)


@pytest.mark.unit
def test_loads_rejects_nesting_past_recursion_limit():
    text = "[" * 200_000 + "]" * 200_000

    with pytest.raises(JSONParseError, match="too deep"):
        loads(text)
    assert not is_valid_json(text)
