"""
Hashing Utilities
Hash capabilities, concatenation and hex helpers for Merkle commitments.

This module provides:
- HashFn: the hash capability type the Merkle engine is parameterized over
- SHA-256 hashing for raw bytes (the default capability)
- A registry of fixed-length hashlib algorithms, selectable by name
- Canonical hashing for objects (via dumps_canonical)
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Concatenation always builds a new bytes object; stored hashes are never
  extended in place
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from typing import Any, Callable

from core.schemas.canonical import dumps_canonical
from core.schemas.errors import UnsupportedHashAlgorithm


# A hash capability maps an arbitrary byte sequence to a fixed-size digest.
HashFn = Callable[[bytes], bytes]

DEFAULT_HASH_ALGORITHM = "sha256"


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def available_hash_algorithms() -> list[str]:
    """Names accepted by get_hash_function(), sorted."""
    names = {_normalize(name) for name in hashlib.algorithms_available}
    return sorted(
        name for name in names
        if not name.startswith("shake_") and _digest_size(name) is not None
    )


def _normalize(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def _digest_size(name: str) -> int | None:
    try:
        digest_size = hashlib.new(name).digest_size
    except (ValueError, TypeError):
        return None
    return digest_size or None


def get_hash_function(name: str = DEFAULT_HASH_ALGORITHM) -> HashFn:
    """
    Build a hash capability from a hashlib algorithm name.

    Only fixed-length algorithms are accepted. The SHAKE family needs an
    output length per call and is rejected.

    Args:
        name: Algorithm name, case-insensitive (e.g. "sha256", "sha3_256",
              "blake2b")

    Returns:
        A deterministic function bytes -> bytes

    Raises:
        UnsupportedHashAlgorithm: If hashlib does not know the name or the
            algorithm has no fixed digest size
    """
    normalized = _normalize(name)
    if normalized == DEFAULT_HASH_ALGORITHM:
        return sha256

    if normalized.startswith("shake_") or _digest_size(normalized) is None:
        raise UnsupportedHashAlgorithm(
            f"Unsupported hash algorithm: {name!r}",
            algorithm=name,
        )

    def _hash(data: bytes) -> bytes:
        return hashlib.new(normalized, data).digest()

    _hash.__name__ = normalized
    _hash.__qualname__ = normalized
    return _hash


def hash_bytes(data: bytes) -> bytes:
    """
    Alias for sha256() - compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest
    """
    return sha256(data)


def as_bytes(data: bytes) -> bytes:
    """
    Copy a bytes-like object into an immutable bytes object.

    Goes through the buffer protocol, so ints and strings raise TypeError
    instead of being coerced (bytes(4) would be four zero bytes).
    """
    return memoryview(data).tobytes()


def concat(left: bytes, right: bytes) -> bytes:
    """
    Concatenate two hashes into a new buffer of exactly len(left) + len(right).

    bytes objects are immutable, so the result never shares storage with
    either operand.
    """
    return b"".join((as_bytes(left), as_bytes(right)))


def hash_concat(left: bytes, right: bytes, hash_fn: HashFn = sha256) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    This is used for computing Merkle parent hashes:
    parent = H(left + right)

    Args:
        left: Left child hash
        right: Right child hash
        hash_fn: Hash capability (SHA-256 by default)

    Returns:
        Digest of the concatenation
    """
    return hash_fn(concat(left, right))


def canonical_bytes(obj: Any) -> bytes:
    """UTF-8 encoding of dumps_canonical(obj); the leaf bytes for an object."""
    return dumps_canonical(obj).encode("utf-8")


def hash_canonical(obj: Any, hash_fn: HashFn = sha256) -> bytes:
    """
    Hash an object using canonical JSON serialization.

    The object is first serialized to canonical JSON (deterministic),
    then the UTF-8 encoded bytes are hashed.

    Rule: H(dumps_canonical(obj).encode("utf-8"))

    Args:
        obj: Any object that can be canonically serialized
             (Pydantic model, dict, list, primitives)
        hash_fn: Hash capability (SHA-256 by default)

    Returns:
        Digest of the canonical JSON

    Raises:
        CanonicalizationException: If object cannot be canonically serialized
    """
    return hash_fn(canonical_bytes(obj))


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "HashFn",
    "DEFAULT_HASH_ALGORITHM",
    "sha256",
    "available_hash_algorithms",
    "get_hash_function",
    "hash_bytes",
    "as_bytes",
    "concat",
    "hash_concat",
    "canonical_bytes",
    "hash_canonical",
    "to_hex",
    "from_hex",
]
