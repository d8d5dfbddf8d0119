"""Tests for hash module."""

import pytest
from hypothesis import given, strategies as st

from pagecraft.core.hash import Algorithm, create_hasher, fingerprint, hash_string


def test_hash_string_xxhash():
    """Test xxhash string hashing."""
    result = hash_string("test", Algorithm.XXHASH64)
    assert isinstance(result, str)
    assert len(result) == 16  # xxhash64 produces 16 hex chars

    # Same input = same hash
    assert hash_string("test", Algorithm.XXHASH64) == result


def test_hash_string_sha256():
    """Test SHA256 string hashing."""
    result = hash_string("test", Algorithm.SHA256)
    assert len(result) == 64


def test_hash_string_truncate():
    full = hash_string("test", Algorithm.SHA256)
    truncated = hash_string("test", Algorithm.SHA256, truncate=16)

    assert len(truncated) == 16
    assert full.startswith(truncated)


def test_create_hasher_unknown():
    with pytest.raises(ValueError):
        create_hasher("md5")


def test_fingerprint_ignores_key_order():
    a = {"name": "Page", "canvas": {"showGrid": True, "viewportWidth": 1920}}
    b = {"canvas": {"viewportWidth": 1920, "showGrid": True}, "name": "Page"}

    assert fingerprint(a) == fingerprint(b)


def test_fingerprint_detects_changes():
    a = {"components": [{"id": "a"}, {"id": "b"}]}
    b = {"components": [{"id": "b"}, {"id": "a"}]}

    # List order is significant
    assert fingerprint(a) != fingerprint(b)


@given(st.dictionaries(st.text(max_size=8), st.integers(), max_size=10))
def test_fingerprint_deterministic(data):
    """Test fingerprint is a pure function of content."""
    assert fingerprint(data) == fingerprint(dict(reversed(list(data.items()))))
