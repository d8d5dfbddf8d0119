"""Fast hashing for document fingerprints.

xxhash for change detection (dirty tracking, library listings), SHA256 when
a stable cross-platform digest is needed.
"""

from typing import Any, Protocol
from enum import Enum
import hashlib

import xxhash

from .json import dumps


class Algorithm(str, Enum):
    """Supported hash algorithms."""

    XXHASH64 = "xxhash64"  # Fast, non-cryptographic
    SHA256 = "sha256"


class Hasher(Protocol):
    """Protocol for hash implementations."""

    def digest(self, data: bytes) -> str:
        """Compute hex digest of data."""
        ...


class XXHasher:
    """Non-cryptographic hasher."""

    def digest(self, data: bytes) -> str:
        return xxhash.xxh64(data).hexdigest()


class SHA256Hasher:
    """Cryptographic hasher."""

    def digest(self, data: bytes) -> str:
        return hashlib.sha256(data).hexdigest()


def create_hasher(algorithm: Algorithm = Algorithm.XXHASH64) -> Hasher:
    """
    Create hasher instance.

    Raises:
        ValueError: On unknown algorithm
    """
    if algorithm == Algorithm.XXHASH64:
        return XXHasher()
    elif algorithm == Algorithm.SHA256:
        return SHA256Hasher()
    else:
        raise ValueError(f"Unknown algorithm: {algorithm}")


def hash_string(
    text: str,
    algorithm: Algorithm = Algorithm.XXHASH64,
    truncate: int | None = None,
) -> str:
    """Hash string to hex digest, optionally truncated."""
    digest = create_hasher(algorithm).digest(text.encode("utf-8"))
    if truncate:
        return digest[:truncate]
    return digest


def fingerprint(document: Any, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """
    Hash a JSON-compatible value independent of key order.

    Args:
        document: Mapping/list tree of JSON values

    Returns:
        Hex digest; equal documents produce equal fingerprints
    """
    return hash_string(dumps(_canonical(document)), algorithm)


def _canonical(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _canonical(value[k]) for k in sorted(value, key=str)}
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    return value


__all__ = [
    "Algorithm",
    "Hasher",
    "create_hasher",
    "hash_string",
    "fingerprint",
]
