"""
Merkle Core Schemas

Error taxonomy shared by the hashing, tree and proof modules.
"""

from .errors import (
    ErrorCodes,
    MerkleError,
    BoundsError,
    MerkleException,
    EmptyInputException,
    InvalidElementException,
    IndexOutOfBoundsException,
    InvalidRangeException,
    MalformedProofException,
    UnsupportedAlgorithmException,
    ConfigException,
)

__all__ = [
    "ErrorCodes",
    "MerkleError",
    "BoundsError",
    "MerkleException",
    "EmptyInputException",
    "InvalidElementException",
    "IndexOutOfBoundsException",
    "InvalidRangeException",
    "MalformedProofException",
    "UnsupportedAlgorithmException",
    "ConfigException",
]
