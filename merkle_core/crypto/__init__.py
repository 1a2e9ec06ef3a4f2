"""
Core cryptographic utilities.

Provides the hashing contract used by the tree builder and the proof engines.
"""
from .hashing import (
    Element,
    DEFAULT_ALGORITHM,
    SUPPORTED_ALGORITHMS,
    Hasher,
    DEFAULT_HASHER,
    to_bytes,
    sha256_hex,
    hash_leaf,
    hash_node,
    resolve_hasher,
)

__all__ = [
    "Element",
    "DEFAULT_ALGORITHM",
    "SUPPORTED_ALGORITHMS",
    "Hasher",
    "DEFAULT_HASHER",
    "to_bytes",
    "sha256_hex",
    "hash_leaf",
    "hash_node",
    "resolve_hasher",
]
