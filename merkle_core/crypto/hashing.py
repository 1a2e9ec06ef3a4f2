"""
Merkle Core - Hashing Utilities
Leaf and node hashing for Merkle commitments.

This module provides:
- Hasher: a pinned digest algorithm with leaf/node hashing
- DEFAULT_HASHER: SHA-256, the algorithm used unless a caller pins another
- Module-level hash_leaf/hash_node bound to the default hasher

Hashing Contract (Hard Contract):
1. Leaf hashing: leaf = hexdigest(element)
2. Node hashing: node = hexdigest(left_hex + right_hex)
   - The two operands are the hex digest STRINGS, concatenated without a
     separator, then UTF-8 encoded. Roots computed elsewhere with the same
     contract interoperate only if this is preserved exactly.
3. Empty node: hash_leaf("")
4. Digests are lowercase hex strings of fixed length per algorithm

Security/Determinism Notes:
- str elements are hashed as their UTF-8 encoding, bytes as-is
- No normalisation or whitespace stripping
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Union

from merkle_core.schemas.errors import (
    InvalidElementException,
    UnsupportedAlgorithmException,
)


Element = Union[str, bytes]

DEFAULT_ALGORITHM = "sha256"

# Fixed-length digests with at least SHA-256 collision resistance.
SUPPORTED_ALGORITHMS = frozenset({
    "sha256",
    "sha384",
    "sha512",
    "sha512_256",
    "sha3_256",
    "sha3_384",
    "sha3_512",
    "blake2b",
    "blake2s",
})


def to_bytes(data: Element) -> bytes:
    """
    Encode an element for hashing.

    Args:
        data: str (UTF-8 encoded) or bytes (returned unchanged)

    Returns:
        Raw bytes to feed the digest

    Raises:
        InvalidElementException: If data is neither str nor bytes
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    raise InvalidElementException(
        f"Merkle elements must be str or bytes, got {type(data).__name__}",
        element_type=type(data).__name__,
    )


def _validate_algorithm(algorithm: str) -> None:
    if algorithm not in hashlib.algorithms_available:
        raise UnsupportedAlgorithmException(
            f"Unknown digest algorithm: {algorithm!r}",
            algorithm=algorithm,
        )
    if algorithm.startswith("shake"):
        raise UnsupportedAlgorithmException(
            f"Digest algorithm {algorithm!r} has no fixed output length",
            algorithm=algorithm,
        )
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise UnsupportedAlgorithmException(
            f"Digest algorithm {algorithm!r} is weaker than sha256",
            algorithm=algorithm,
            details={"supported": sorted(SUPPORTED_ALGORITHMS)},
        )


@dataclass(frozen=True)
class Hasher:
    """
    A pinned digest algorithm.

    The builder and the verifier must use the same algorithm; a mismatch
    makes verification return False rather than raise.

    Attributes:
        algorithm: hashlib algorithm name (e.g. "sha256", "sha3_256", "blake2b")

    Example:
        >>> Hasher().hash_leaf("hello")
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    algorithm: str = DEFAULT_ALGORITHM

    def __post_init__(self) -> None:
        """Reject unknown, variable-length and weak digest algorithms."""
        _validate_algorithm(self.algorithm)

    def digest(self, data: Element) -> str:
        """Lowercase hex digest of data."""
        return hashlib.new(self.algorithm, to_bytes(data)).hexdigest()

    def hash_leaf(self, element: Element) -> str:
        """
        Hash a leaf element.

        Args:
            element: The original element (str or bytes)

        Returns:
            Hex digest of the element
        """
        return self.digest(element)

    def hash_node(self, left: str, right: str) -> str:
        """
        Hash two child digests into their parent digest.

        Args:
            left: Left child hex digest
            right: Right child hex digest

        Returns:
            Hex digest of the concatenated hex strings
        """
        return self.digest(left + right)

    @property
    def empty_hash(self) -> str:
        """Value of the padding node: hash_leaf("")."""
        return self.hash_leaf("")

    @property
    def digest_size(self) -> int:
        """Length of a hex digest produced by this hasher."""
        return hashlib.new(self.algorithm).digest_size * 2


DEFAULT_HASHER = Hasher()


def sha256_hex(data: Element) -> str:
    """
    Compute the SHA-256 hex digest of data.

    Example:
        >>> sha256_hex(b"hello")
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(to_bytes(data)).hexdigest()


def hash_leaf(element: Element) -> str:
    """Hash a leaf element with the default hasher."""
    return DEFAULT_HASHER.hash_leaf(element)


def hash_node(left: str, right: str) -> str:
    """Hash two child digests with the default hasher."""
    return DEFAULT_HASHER.hash_node(left, right)


def resolve_hasher(hasher: Hasher | None) -> Hasher:
    """Return hasher, or the default hasher when None."""
    return DEFAULT_HASHER if hasher is None else hasher


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
