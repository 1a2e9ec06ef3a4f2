"""
Common test fixtures shared by all modules.

Provides:
- Element lists of every size from 3 to 8
- make_tree: build a tree from one of those lists
- expected_root_hash: an independent root computation straight from hashlib,
  used to check the builder without going through it
"""

import hashlib
from typing import Sequence

from merkle_core.crypto.hashing import Hasher
from merkle_core.merkle.merkle_tree import MerkleTree, build_merkle_tree


# =============================================================================
# Element Lists
# =============================================================================

TEST_ELEMENTS = ["some", "test", "elements"]
MORE_TEST_ELEMENTS = ["some", "more", "test", "elements"]
EVEN_MORE_TEST_ELEMENTS = ["some", "more", "valid", "test", "elements"]
YET_MORE_TEST_ELEMENTS = ["some", "more", "valid", "test", "elements", "too"]
LOTS_MORE_TEST_ELEMENTS = ["some", "more", "valid", "test", "elements", "to", "use"]
INCREASINGLY_MORE_TEST_ELEMENTS = [
    "some", "more", "valid", "test", "elements", "to", "use", "again",
]

ALL_TEST_ELEMENT_LISTS = [
    TEST_ELEMENTS,
    MORE_TEST_ELEMENTS,
    EVEN_MORE_TEST_ELEMENTS,
    YET_MORE_TEST_ELEMENTS,
    LOTS_MORE_TEST_ELEMENTS,
    INCREASINGLY_MORE_TEST_ELEMENTS,
]

INVALID_HASH = "not_a_valid_hash"


# =============================================================================
# Factories
# =============================================================================

def make_elements(count: int, prefix: str = "leaf") -> list[str]:
    """Create count distinct elements: leaf0, leaf1, ..."""
    return [f"{prefix}{i}" for i in range(count)]


def make_tree(
    elements: Sequence[str] | None = None,
    hasher: Hasher | None = None,
) -> MerkleTree:
    """Build a tree, defaulting to TEST_ELEMENTS."""
    if elements is None:
        elements = TEST_ELEMENTS
    return build_merkle_tree(list(elements), hasher)


def sha256_hex(data: str) -> str:
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def expected_root_hash(elements: Sequence[str]) -> str:
    """
    Compute a SHA-256 root without merkle_core.

    Pads the leaf list once with "", then pairs each odd row's last node
    with sha256("").
    """
    leaves = list(elements)
    if len(leaves) % 2 == 1:
        leaves.append("")

    nodes = [sha256_hex(leaf) for leaf in leaves]
    empty = sha256_hex("")

    while len(nodes) > 1:
        if len(nodes) % 2 == 1:
            nodes.append(empty)
        nodes = [
            sha256_hex(nodes[i] + nodes[i + 1])
            for i in range(0, len(nodes), 2)
        ]

    return nodes[0]


def flip_hex_bit(digest: str, bit: int) -> str:
    """
    Flip one bit of a hex digest.

    Bits are numbered 0 .. 4 * len(digest) - 1; bit // 4 picks the hex
    character and bit % 4 the bit inside it.
    """
    position, offset = divmod(bit, 4)
    flipped = format(int(digest[position], 16) ^ (1 << offset), "x")
    return digest[:position] + flipped + digest[position + 1:]
