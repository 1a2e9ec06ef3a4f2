"""
Test fixtures package for merkle_core tests.

- common.py: element lists, tree factory and an independent root calculator

Usage:
    from fixtures import make_tree, expected_root_hash

    def test_something():
        tree = make_tree(["a", "b", "c"])
        assert tree.root_hash == expected_root_hash(["a", "b", "c"])
"""

from .common import (
    TEST_ELEMENTS,
    MORE_TEST_ELEMENTS,
    EVEN_MORE_TEST_ELEMENTS,
    YET_MORE_TEST_ELEMENTS,
    LOTS_MORE_TEST_ELEMENTS,
    INCREASINGLY_MORE_TEST_ELEMENTS,
    ALL_TEST_ELEMENT_LISTS,
    INVALID_HASH,
    make_elements,
    make_tree,
    sha256_hex,
    expected_root_hash,
    flip_hex_bit,
)

__all__ = [
    "TEST_ELEMENTS",
    "MORE_TEST_ELEMENTS",
    "EVEN_MORE_TEST_ELEMENTS",
    "YET_MORE_TEST_ELEMENTS",
    "LOTS_MORE_TEST_ELEMENTS",
    "INCREASINGLY_MORE_TEST_ELEMENTS",
    "ALL_TEST_ELEMENT_LISTS",
    "INVALID_HASH",
    "make_elements",
    "make_tree",
    "sha256_hex",
    "expected_root_hash",
    "flip_hex_bit",
]
