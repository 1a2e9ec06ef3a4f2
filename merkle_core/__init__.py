"""
merkle_core - Merkle trees with inclusion and range proofs.

Build a tree once per dataset, hand out proofs, and verify them later with
only the trusted root hash.

Usage:
    from merkle_core import build, prove, verify, prove_range, verify_range

    tree = build(["some", "more", "valid", "test", "elements", "to", "use", "again"])
    assert verify(tree.root_hash, prove(tree, 3))
    assert verify_range(tree.root_hash, prove_range(tree, 2, 6))
"""
from merkle_core.crypto.hashing import (
    DEFAULT_HASHER,
    Hasher,
    hash_leaf,
    hash_node,
)
from merkle_core.merkle import (
    MerkleAggregateProof,
    MerkleNode,
    MerkleProof,
    MerkleProver,
    MerkleTree,
    MerkleVerifier,
    build_aggregate_proof,
    build_merkle_proof,
    build_merkle_tree,
    compute_tree_height,
    expand_tree,
    root_of,
    update_element,
    verify_aggregate_proof,
    verify_merkle_proof,
)
from merkle_core.schemas.errors import (
    EmptyInputException,
    ErrorCodes,
    IndexOutOfBoundsException,
    InvalidElementException,
    InvalidRangeException,
    MalformedProofException,
    MerkleError,
    MerkleException,
    UnsupportedAlgorithmException,
)

__version__ = "0.4.0"

# Short operation names
build = build_merkle_tree
prove = build_merkle_proof
verify = verify_merkle_proof
update = update_element
prove_range = build_aggregate_proof
verify_range = verify_aggregate_proof

InclusionProof = MerkleProof
AggregateProof = MerkleAggregateProof

__all__ = [
    "__version__",
    # Hashing
    "DEFAULT_HASHER",
    "Hasher",
    "hash_leaf",
    "hash_node",
    # Types
    "MerkleNode",
    "MerkleTree",
    "MerkleProof",
    "MerkleAggregateProof",
    "InclusionProof",
    "AggregateProof",
    # Operations
    "build",
    "root_of",
    "prove",
    "verify",
    "update",
    "prove_range",
    "verify_range",
    "build_merkle_tree",
    "build_merkle_proof",
    "verify_merkle_proof",
    "update_element",
    "build_aggregate_proof",
    "verify_aggregate_proof",
    "compute_tree_height",
    "expand_tree",
    "MerkleProver",
    "MerkleVerifier",
    # Errors
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "EmptyInputException",
    "InvalidElementException",
    "IndexOutOfBoundsException",
    "InvalidRangeException",
    "MalformedProofException",
    "UnsupportedAlgorithmException",
]
