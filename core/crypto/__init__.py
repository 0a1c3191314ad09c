"""
Core cryptographic utilities.

Hash capabilities and hex helpers used by the Merkle engine.
"""
from .hashing import (
    DEFAULT_HASH_ALGORITHM,
    HashFn,
    available_hash_algorithms,
    as_bytes,
    canonical_bytes,
    concat,
    from_hex,
    get_hash_function,
    hash_bytes,
    hash_canonical,
    hash_concat,
    sha256,
    to_hex,
)

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
