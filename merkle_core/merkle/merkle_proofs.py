"""
Merkle Core - Inclusion Proofs
Proof generation and verification for a single element.

This module provides:
- MerkleProof: Dataclass representing a Merkle inclusion proof
- build_merkle_proof: Generate the proof for the element at an index
- verify_merkle_proof: Verify a proof against a known root
- MerkleProver / MerkleVerifier: class-based convenience wrappers

Proof Layout:
- siblings run from the leaf level to the level just below the root
- directions[i] is True when siblings[i] is the LEFT operand, i.e. the
  verifier computes hash_node(sibling, current); False means
  hash_node(current, sibling)
- len(siblings) == len(directions) == tree height

Example (proof for index 2, marked E; `*` nodes are returned):

    d0:                      [ R ]
    d1:           [ ]                     [*]
    d2:     [*]         [ ]         [ ]         [ ]
    d3:  [ ]   [ ]   [E]   [*]   [ ]   [ ]   [ ]   [ ]

    siblings   = [d3-3, d2-0, d1-1]
    directions = [False, True, False]
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from merkle_core.crypto.hashing import Element, Hasher, resolve_hasher
from merkle_core.merkle.aggregate_proofs import (
    MerkleAggregateProof,
    build_aggregate_proof,
    verify_aggregate_proof,
)
from merkle_core.merkle.merkle_tree import (
    MerkleTree,
    build_merkle_tree,
    iter_rows,
)
from merkle_core.schemas.errors import (
    IndexOutOfBoundsException,
    MalformedProofException,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single element of a tree.

    The proof allows verification that an element is included in a tree
    with a known root, without the tree itself.

    Attributes:
        element: The unhashed element being proven
        siblings: Sibling hashes from the leaf level up to the root
        directions: True where the sibling at the same index is on the left
    """
    element: Element
    siblings: tuple[str, ...]
    directions: tuple[bool, ...]

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if len(self.siblings) != len(self.directions):
            raise MalformedProofException(
                f"Proof has {len(self.siblings)} siblings but "
                f"{len(self.directions)} directions",
                details={
                    "siblings": len(self.siblings),
                    "directions": len(self.directions),
                },
            )

    def __len__(self) -> int:
        return len(self.siblings)


def build_merkle_proof(tree: MerkleTree, index: int) -> MerkleProof:
    """
    Generate a Merkle proof for the element at the given index.

    Rows are re-derived from the tree's leaves. The path node is tracked by
    its position in each row, never by comparing hash values, so duplicate
    elements are proven correctly.

    Algorithm:
    1. Start at the target leaf index
    2. At each level:
       - The sibling sits at index XOR 1; past the end of an odd row it is
         the empty node
       - Record the sibling hash and whether it is on the left (index odd)
       - Move up: index = index // 2
    3. Continue until the root row

    Args:
        tree: Tree built with build_merkle_tree
        index: 0-based position in tree.leaves (padding included)

    Returns:
        MerkleProof for the element at index

    Raises:
        IndexOutOfBoundsException: If index is out of range
    """
    if index < 0 or index >= len(tree.leaves):
        raise IndexOutOfBoundsException(
            f"Leaf index {index} out of range for {len(tree.leaves)} leaves",
            index=index,
            size=len(tree.leaves),
        )

    hasher = tree.hasher
    siblings: list[str] = []
    directions: list[bool] = []
    current_index = index

    for current_row in iter_rows(tree.leaves, hasher):
        if len(current_row) == 1:
            break

        sibling_is_left = current_index % 2 == 1
        sibling_index = current_index ^ 1

        if sibling_index < len(current_row):
            siblings.append(current_row[sibling_index].value)
        else:
            siblings.append(hasher.empty_hash)
        directions.append(sibling_is_left)

        current_index = current_index // 2

    return MerkleProof(
        element=tree.leaves[index],
        siblings=tuple(siblings),
        directions=tuple(directions),
    )


def compute_root_from_proof(proof: MerkleProof, hasher: Hasher | None = None) -> str:
    """
    Recompute the root implied by a proof.

    Args:
        proof: MerkleProof to fold
        hasher: Hasher to use (default SHA-256)

    Returns:
        Hex digest reached after folding every sibling into the leaf hash
    """
    hasher = resolve_hasher(hasher)
    current_hash = hasher.hash_leaf(proof.element)

    for sibling, is_left in zip(proof.siblings, proof.directions):
        if is_left:
            current_hash = hasher.hash_node(sibling, current_hash)
        else:
            current_hash = hasher.hash_node(current_hash, sibling)

    return current_hash


def verify_merkle_proof(
    root: str,
    proof: MerkleProof,
    hasher: Hasher | None = None,
) -> bool:
    """
    Verify a Merkle proof against a known root.

    This is a pure recomputation; the tree is not needed. A root that does
    not match (including one produced with another digest algorithm) gives
    False rather than an error.

    Args:
        root: Trusted root hash
        proof: MerkleProof to verify
        hasher: Hasher the root was built with (default SHA-256)

    Returns:
        True if the proof establishes inclusion under root, False otherwise
    """
    computed = compute_root_from_proof(proof, hasher)
    if computed != root:
        logger.debug(f"Inclusion proof root mismatch: computed {computed}, expected {root!r}")
        return False
    return True


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> tree = build_merkle_tree(["a", "b", "c"])
        >>> proof = MerkleProver.prove(tree, index=1)
        >>> proof.element
        'b'
    """

    @staticmethod
    def prove(tree: MerkleTree, index: int) -> MerkleProof:
        """
        Generate a Merkle proof for the element at the given index.

        Raises:
            IndexOutOfBoundsException: If index is out of range
        """
        return build_merkle_proof(tree, index)

    @staticmethod
    def prove_range(tree: MerkleTree, start: int, end: int) -> MerkleAggregateProof:
        """
        Generate an aggregate proof for the elements in [start, end).

        Raises:
            InvalidRangeException: If the range is empty or out of bounds
        """
        return build_aggregate_proof(tree, start, end)

    @staticmethod
    def compute_root(
        elements: Sequence[Element],
        hasher: Hasher | None = None,
    ) -> str:
        """
        Compute the Merkle root for a sequence of elements.

        Raises:
            EmptyInputException: If elements is empty
        """
        return build_merkle_tree(elements, hasher).root_hash


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove(tree, index=1)
        >>> MerkleVerifier.verify(tree.root_hash, proof)
        True
    """

    @staticmethod
    def verify(root: str, proof: MerkleProof, hasher: Hasher | None = None) -> bool:
        """Verify an inclusion proof against root."""
        return verify_merkle_proof(root, proof, hasher)

    @staticmethod
    def verify_range(
        root: str,
        proof: MerkleAggregateProof,
        hasher: Hasher | None = None,
    ) -> bool:
        """Verify an aggregate proof against root."""
        return verify_aggregate_proof(root, proof, hasher)

    @staticmethod
    def verify_element_in_root(
        element: Element,
        siblings: Sequence[str],
        directions: Sequence[bool],
        root: str,
        hasher: Hasher | None = None,
    ) -> bool:
        """
        Verify an element is included in a Merkle root using raw components.

        Args:
            element: The unhashed element
            siblings: Sibling hashes (bottom-up)
            directions: True where the sibling is on the left
            root: The claimed Merkle root
            hasher: Hasher the root was built with (default SHA-256)

        Returns:
            True if the proof is valid, False otherwise

        Raises:
            MalformedProofException: If siblings and directions differ in length
        """
        proof = MerkleProof(
            element=element,
            siblings=tuple(siblings),
            directions=tuple(directions),
        )
        return verify_merkle_proof(root, proof, hasher)


__all__ = [
    "MerkleProof",
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "MerkleProver",
    "MerkleVerifier",
]
