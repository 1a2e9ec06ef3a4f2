"""
Merkle Core - Aggregate Proofs
Proof generation and verification for a contiguous range of elements.

This module provides:
- MerkleAggregateProof: Dataclass representing a range inclusion proof
- build_aggregate_proof: Generate the proof for elements [start, end)
- verify_aggregate_proof: Verify a range proof against a known root

Range Convention:
- Ranges are half-open: [start, end), left-inclusive, right-exclusive
- Valid iff 0 <= start < end <= len(tree.leaves); the padding position
  counts as a leaf and can be covered

Proof Layout:
Only the two boundaries of the range need outside hashes. For every level
below the point where the range spans its whole row, the proof holds
exactly two (sibling, flag) entries:
- left boundary: the left neighbour of the first node when that node is a
  right-hand child, otherwise the empty hash with flag False
- right boundary: the right neighbour of the last node when that node is a
  left-hand child with a neighbour, otherwise the empty hash with flag False

A proof therefore holds at most 2 * height hashes, against height hashes
per element for separate inclusion proofs.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from merkle_core.crypto.hashing import Element, Hasher, resolve_hasher
from merkle_core.merkle.merkle_tree import (
    MerkleNode,
    MerkleTree,
    build_leaf_row,
    build_parent_row,
    iter_rows,
)
from merkle_core.schemas.errors import (
    InvalidRangeException,
    MalformedProofException,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleAggregateProof:
    """
    A Merkle proof for a contiguous run of elements.

    Attributes:
        elements: The unhashed elements in [start, end), in tree order
        siblings: Boundary sibling hashes, two per level (left, right)
        directions: True where the boundary sibling at the same index is present
    """
    elements: tuple[Element, ...]
    siblings: tuple[str, ...]
    directions: tuple[bool, ...]

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if len(self.elements) == 0:
            raise MalformedProofException("Aggregate proof must cover at least one element")
        if len(self.siblings) != len(self.directions):
            raise MalformedProofException(
                f"Proof has {len(self.siblings)} siblings but "
                f"{len(self.directions)} directions",
                details={
                    "siblings": len(self.siblings),
                    "directions": len(self.directions),
                },
            )
        if len(self.siblings) % 2 != 0:
            raise MalformedProofException(
                "Aggregate proof must hold one left and one right entry per level",
                details={"siblings": len(self.siblings)},
            )

    @property
    def levels(self) -> int:
        """Number of levels with recorded boundary entries."""
        return len(self.siblings) // 2

    @property
    def hash_count(self) -> int:
        """Number of real sibling hashes carried; placeholders are not counted."""
        return sum(1 for present in self.directions if present)


def build_aggregate_proof(tree: MerkleTree, start: int, end: int) -> MerkleAggregateProof:
    """
    Generate a Merkle proof for the elements in [start, end).

    Algorithm:
    1. Window [s, e] = [start, end - 1] (inclusive) on the leaf row
    2. While the window does not span its whole row:
       - s odd: record (row[s - 1], True), else (empty, False)
       - e even and not the last index: record (row[e + 1], True),
         else (empty, False)
       - Move up: s //= 2, e //= 2
    3. Stop once the window covers the row; the verifier can finish alone

    Args:
        tree: Tree built with build_merkle_tree
        start: First included position in tree.leaves
        end: Position after the last included one

    Returns:
        MerkleAggregateProof for the range

    Raises:
        InvalidRangeException: If start >= end, start < 0 or end > len(tree.leaves)
    """
    leaf_count = len(tree.leaves)
    if start < 0 or start >= end or end > leaf_count:
        raise InvalidRangeException(
            f"Invalid range [{start}, {end}) for {leaf_count} leaves",
            start=start,
            end=end,
            size=leaf_count,
        )

    hasher = tree.hasher
    empty_hash = hasher.empty_hash
    siblings: list[str] = []
    directions: list[bool] = []

    current_start = start
    current_end = end - 1

    for current_row in iter_rows(tree.leaves, hasher):
        if current_start == 0 and current_end == len(current_row) - 1:
            break

        start_sibling_is_left = current_start % 2 == 1
        end_sibling_is_right = (
            current_end % 2 == 0 and current_end + 1 < len(current_row)
        )

        if start_sibling_is_left:
            siblings.append(current_row[current_start - 1].value)
        else:
            siblings.append(empty_hash)
        directions.append(start_sibling_is_left)

        if end_sibling_is_right:
            siblings.append(current_row[current_end + 1].value)
        else:
            siblings.append(empty_hash)
        directions.append(end_sibling_is_right)

        current_start //= 2
        current_end //= 2

    return MerkleAggregateProof(
        elements=tuple(tree.leaves[start:end]),
        siblings=tuple(siblings),
        directions=tuple(directions),
    )


def compute_root_from_aggregate_proof(
    proof: MerkleAggregateProof,
    hasher: Hasher | None = None,
) -> str:
    """
    Recompute the root implied by an aggregate proof.

    Args:
        proof: MerkleAggregateProof to fold
        hasher: Hasher to use (default SHA-256)

    Returns:
        Hex digest of the single node left after folding
    """
    hasher = resolve_hasher(hasher)
    current_row = build_leaf_row(proof.elements, hasher)

    for i in range(0, len(proof.siblings), 2):
        if proof.directions[i]:
            current_row.insert(0, MerkleNode(value=proof.siblings[i]))
        if proof.directions[i + 1]:
            current_row.append(MerkleNode(value=proof.siblings[i + 1]))

        current_row = build_parent_row(current_row, hasher)

    while len(current_row) > 1:
        current_row = build_parent_row(current_row, hasher)

    return current_row[0].value


def verify_aggregate_proof(
    root: str,
    proof: MerkleAggregateProof,
    hasher: Hasher | None = None,
) -> bool:
    """
    Verify an aggregate proof against a known root.

    Args:
        root: Trusted root hash
        proof: MerkleAggregateProof to verify
        hasher: Hasher the root was built with (default SHA-256)

    Returns:
        True if the proof establishes inclusion of the whole range, False otherwise
    """
    computed = compute_root_from_aggregate_proof(proof, hasher)
    if computed != root:
        logger.debug(f"Aggregate proof root mismatch: computed {computed}, expected {root!r}")
        return False
    return True


__all__ = [
    "MerkleAggregateProof",
    "build_aggregate_proof",
    "compute_root_from_aggregate_proof",
    "verify_aggregate_proof",
]
