"""
Schemas & Canonicalization
File: __init__.py

Purpose: Export the public API for canonical serialization and the error
taxonomy.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonical_equals,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ConfigException,
    ErrorCodes,
    IndexOutOfRange,
    MerkleError,
    MerkleException,
    UnsupportedHashAlgorithm,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonical_equals",
    "canonicalize_value",
    "dumps_canonical",
    "format_datetime_canonical",
    # Errors
    "CanonicalizationException",
    "ConfigException",
    "ErrorCodes",
    "IndexOutOfRange",
    "MerkleError",
    "MerkleException",
    "UnsupportedHashAlgorithm",
]
