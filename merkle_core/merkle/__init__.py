"""
Merkle Tree and Commitments
Deterministic Merkle tree construction + inclusion and range proofs.

This module provides:
- MerkleTree / MerkleNode: Immutable tree values
- build_merkle_tree: Build a tree from unhashed elements
- update_element: Derive a new tree with an element inserted
- MerkleProof / build_merkle_proof / verify_merkle_proof: single element
- MerkleAggregateProof / build_aggregate_proof / verify_aggregate_proof:
  contiguous range [start, end)

Canonical Commitment Rules:
1. Leaf hashing: hash_leaf(element)
2. Parent hashing: hash_node(left_hex, right_hex)
3. Padding: one "" leaf for odd element counts; an empty node
   (hash_leaf("")) for any odd internal row
4. Empty input: rejected with EmptyInputException

Usage:
    from merkle_core.merkle import (
        build_merkle_tree, build_merkle_proof, verify_merkle_proof,
    )

    tree = build_merkle_tree(["some", "test", "elements"])
    proof = build_merkle_proof(tree, index=2)
    assert verify_merkle_proof(tree.root_hash, proof)
"""
from .merkle_tree import (
    PADDING_ELEMENT,
    MerkleNode,
    MerkleTree,
    merkle_parent,
    build_leaf_row,
    build_parent_row,
    iter_rows,
    build_root_node,
    build_merkle_tree,
    root_of,
    get_root,
    expand_tree,
    update_element,
    compute_tree_height,
)

from .aggregate_proofs import (
    MerkleAggregateProof,
    build_aggregate_proof,
    compute_root_from_aggregate_proof,
    verify_aggregate_proof,
)

from .merkle_proofs import (
    MerkleProof,
    build_merkle_proof,
    compute_root_from_proof,
    verify_merkle_proof,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "PADDING_ELEMENT",
    "MerkleNode",
    "MerkleTree",
    "MerkleProof",
    "MerkleAggregateProof",
    # Tree functions
    "merkle_parent",
    "build_leaf_row",
    "build_parent_row",
    "iter_rows",
    "build_root_node",
    "build_merkle_tree",
    "root_of",
    "get_root",
    "expand_tree",
    "update_element",
    "compute_tree_height",
    # Proof functions
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "build_aggregate_proof",
    "compute_root_from_aggregate_proof",
    "verify_aggregate_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
