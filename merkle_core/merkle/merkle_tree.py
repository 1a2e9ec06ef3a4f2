"""
Merkle Core - Merkle Tree Implementation
Deterministic Merkle tree construction and derived-tree updates.

This module provides:
- MerkleNode / MerkleTree value types
- Row construction shared by the builder and the proof engines
- Tree building, root lookup, height computation
- update_element: a new tree with an element inserted

Canonical Commitment Rules (Hard Contracts):
1. Leaf padding: an odd element count gets ONE "" sentinel appended.
   This is the only place the leaf sequence is padded.
2. Leaf hashing: leaf = hash_leaf(element)
3. Parent hashing: parent = hash_node(left, right)
4. Row padding: a trailing unpaired node at any internal level is paired
   with an empty node whose value is hash_leaf("")
5. Empty input is rejected; a root cannot be derived from zero leaves

Storage Notes:
- A tree keeps only its padded leaves and root hash
- Proof generation re-derives rows from the leaves on demand
- Rows are dropped level by level unless children are explicitly retained
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

from merkle_core.crypto.hashing import (
    DEFAULT_HASHER,
    Element,
    Hasher,
    resolve_hasher,
)
from merkle_core.schemas.errors import (
    EmptyInputException,
    IndexOutOfBoundsException,
)


logger = logging.getLogger(__name__)

# Appended to an odd-length element list before hashing.
PADDING_ELEMENT: str = ""


@dataclass(frozen=True)
class MerkleNode:
    """
    A node of a Merkle tree.

    Attributes:
        value: Hex digest of this node
        left: Left child, only set when children are retained
        right: Right child, only set when children are retained
    """
    value: str
    left: Optional[MerkleNode] = None
    right: Optional[MerkleNode] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


@dataclass(frozen=True)
class MerkleTree:
    """
    An immutable Merkle tree over an ordered element sequence.

    Attributes:
        leaves: Original (unhashed) elements, padded to even length
        root_hash: Hex digest of the root node
        element_count: Number of elements before padding
        hasher: Hasher the tree was built with
    """
    leaves: tuple[Element, ...]
    root_hash: str
    element_count: int
    hasher: Hasher = field(default=DEFAULT_HASHER, compare=False)

    @property
    def elements(self) -> tuple[Element, ...]:
        """The caller's elements without the padding sentinel."""
        return self.leaves[: self.element_count]

    @property
    def height(self) -> int:
        """Number of combine steps from the leaf row to the root."""
        return compute_tree_height(len(self.leaves))

    @property
    def is_padded(self) -> bool:
        return len(self.leaves) != self.element_count


def leaf_node(element: Element, hasher: Hasher | None = None) -> MerkleNode:
    """Create a leaf node from an unhashed element."""
    return MerkleNode(value=resolve_hasher(hasher).hash_leaf(element))


def empty_node(hasher: Hasher | None = None) -> MerkleNode:
    """Create the padding node paired with an unpaired row tail."""
    return MerkleNode(value=resolve_hasher(hasher).empty_hash)


def merkle_parent(
    left: MerkleNode,
    right: MerkleNode,
    hasher: Hasher | None = None,
    retain_children: bool = False,
) -> MerkleNode:
    """
    Combine two nodes into their parent.

    Args:
        left: Left child
        right: Right child
        hasher: Hasher to use (default SHA-256)
        retain_children: Link the children into the parent node

    Returns:
        Parent node with value hash_node(left.value, right.value)
    """
    value = resolve_hasher(hasher).hash_node(left.value, right.value)
    if retain_children:
        return MerkleNode(value=value, left=left, right=right)
    return MerkleNode(value=value)


def build_leaf_row(
    leaves: Sequence[Element],
    hasher: Hasher | None = None,
) -> list[MerkleNode]:
    """Hash every element into a leaf node, preserving order."""
    hasher = resolve_hasher(hasher)
    return [leaf_node(element, hasher) for element in leaves]


def build_parent_row(
    row: Sequence[MerkleNode],
    hasher: Hasher | None = None,
    retain_children: bool = False,
) -> list[MerkleNode]:
    """
    Build the parent row of a row of nodes.

    Consecutive non-overlapping pairs are combined. A trailing unpaired
    node is combined with an empty node.

    Example: [a, b, c] -> [parent(a, b), parent(c, empty)]

    Args:
        row: Nodes of the current level, left to right
        hasher: Hasher to use (default SHA-256)
        retain_children: Link children into the parent nodes

    Returns:
        Nodes of the next level up
    """
    hasher = resolve_hasher(hasher)
    parents: list[MerkleNode] = []
    for i in range(0, len(row) - 1, 2):
        parents.append(merkle_parent(row[i], row[i + 1], hasher, retain_children))

    if len(row) % 2 == 1:
        parents.append(
            merkle_parent(row[-1], empty_node(hasher), hasher, retain_children)
        )

    return parents


def iter_rows(
    leaves: Sequence[Element],
    hasher: Hasher | None = None,
    retain_children: bool = False,
) -> Iterator[list[MerkleNode]]:
    """
    Yield every row of the tree, from the leaf row up to the root row.

    Each row is built from the one before it, so callers that stop early
    never hash the levels above.

    Example: 6 leaves -> rows of length 6, 3, 2, 1

    Args:
        leaves: Unhashed leaf elements (already padded by the caller)
        hasher: Hasher to use (default SHA-256)
        retain_children: Link children into the parent nodes

    Yields:
        Rows of nodes, left to right; the last one is [root]
    """
    hasher = resolve_hasher(hasher)
    row = build_leaf_row(leaves, hasher)
    yield row
    while len(row) > 1:
        row = build_parent_row(row, hasher, retain_children)
        yield row


def build_root_node(
    leaves: Sequence[Element],
    hasher: Hasher | None = None,
    retain_children: bool = False,
) -> MerkleNode:
    """
    Hash the leaves and combine rows until a single node remains.

    Args:
        leaves: Unhashed leaf elements (already padded by the caller)
        hasher: Hasher to use (default SHA-256)
        retain_children: Keep the full node structure under the root

    Returns:
        The root node

    Raises:
        EmptyInputException: If leaves is empty
    """
    for row in iter_rows(leaves, hasher, retain_children):
        if len(row) == 1:
            return row[0]
    raise EmptyInputException()


def pad_elements(elements: Sequence[Element]) -> tuple[Element, ...]:
    """Copy elements, appending the padding sentinel if the count is odd."""
    padded = tuple(elements)
    if len(padded) % 2 == 1:
        padded += (PADDING_ELEMENT,)
    return padded


def build_merkle_tree(
    elements: Sequence[Element],
    hasher: Hasher | None = None,
) -> MerkleTree:
    """
    Build a Merkle tree from an ordered sequence of elements.

    Algorithm:
    1. Pad to even length with a "" sentinel if needed
    2. Hash every leaf
    3. Replace the row with its parent row until one node remains

    Args:
        elements: Unhashed elements. Order matters and is preserved.
        hasher: Hasher to use (default SHA-256)

    Returns:
        MerkleTree holding the padded leaves and root hash

    Raises:
        EmptyInputException: If elements is empty
        InvalidElementException: If an element is neither str nor bytes

    Example:
        >>> tree = build_merkle_tree(["some", "test", "elements"])
        >>> tree.leaves
        ('some', 'test', 'elements', '')
    """
    if len(elements) == 0:
        raise EmptyInputException()

    hasher = resolve_hasher(hasher)
    leaves = pad_elements(elements)

    root = build_root_node(leaves, hasher)

    tree = MerkleTree(
        leaves=leaves,
        root_hash=root.value,
        element_count=len(elements),
        hasher=hasher,
    )
    logger.debug(
        f"Built Merkle tree over {tree.element_count} elements "
        f"(height {tree.height}, {hasher.algorithm}): {tree.root_hash}"
    )
    return tree


def root_of(tree: MerkleTree) -> str:
    """Return the root hash of a tree."""
    return tree.root_hash


# Alias matching the get_root accessor name.
get_root = root_of


def expand_tree(tree: MerkleTree) -> MerkleNode:
    """
    Rebuild the full node structure of a tree.

    Trees only store their leaves. This re-derives every level with children
    linked, for callers that want to walk the nodes.

    Returns:
        Root node; its value equals tree.root_hash
    """
    return build_root_node(tree.leaves, tree.hasher, retain_children=True)


def update_element(tree: MerkleTree, index: int, element: Element) -> MerkleTree:
    """
    Build a new tree with element inserted at index.

    The index is interpreted against the caller's elements, not the padded
    leaves. The tree is rebuilt from scratch; the original is untouched.

    Example: elements [a, b, c], update_element(tree, 1, x) -> [a, x, b, c]

    Args:
        tree: Existing tree
        index: 0-based position in tree.elements
        element: Element to insert

    Returns:
        A new MerkleTree built with the same hasher

    Raises:
        IndexOutOfBoundsException: If index is outside tree.elements
    """
    if index < 0 or index >= tree.element_count:
        raise IndexOutOfBoundsException(
            f"Element index {index} out of range for {tree.element_count} elements",
            index=index,
            size=tree.element_count,
        )

    elements = list(tree.elements)
    elements.insert(index, element)

    logger.debug(f"Rebuilding tree with element inserted at index {index}")
    return build_merkle_tree(elements, tree.hasher)


def compute_tree_height(num_leaves: int) -> int:
    """
    Compute the height of a tree with the given number of leaves.

    Height is the number of combine steps from the leaf row to the root,
    which is also the length of an inclusion proof.

    Args:
        num_leaves: Number of leaves in the leaf row

    Returns:
        Tree height (0 for zero or one leaf)
    """
    height = 0
    n = num_leaves
    while n > 1:
        # Account for padding
        n = (n + 1) // 2
        height += 1

    return height


__all__ = [
    "PADDING_ELEMENT",
    "MerkleNode",
    "MerkleTree",
    "leaf_node",
    "empty_node",
    "merkle_parent",
    "build_leaf_row",
    "build_parent_row",
    "iter_rows",
    "build_root_node",
    "pad_elements",
    "build_merkle_tree",
    "root_of",
    "get_root",
    "expand_tree",
    "update_element",
    "compute_tree_height",
]
