"""
Aggregate Proof Unit Tests
Tests for merkle_core/merkle/aggregate_proofs.py

Required tests:
1. Range [2, 6) over eight elements verifies; an unrelated root fails
2. Every valid half-open range verifies for trees of 1 through 9 elements
3. Proof layout - two boundary entries per level
4. Size - never more hashes than per-element inclusion proofs
5. Invalid ranges raise InvalidRangeException
6. Tamper detection and structural validation
"""
import pytest

from fixtures.common import (
    INCREASINGLY_MORE_TEST_ELEMENTS,
    INVALID_HASH,
    TEST_ELEMENTS,
    flip_hex_bit,
    make_elements,
)
from merkle_core.crypto.hashing import Hasher, hash_leaf, hash_node
from merkle_core.merkle.aggregate_proofs import (
    MerkleAggregateProof,
    build_aggregate_proof,
    compute_root_from_aggregate_proof,
    verify_aggregate_proof,
)
from merkle_core.merkle.merkle_proofs import build_merkle_proof
from merkle_core.merkle.merkle_tree import build_merkle_tree
from merkle_core.schemas.errors import (
    ErrorCodes,
    InvalidRangeException,
    MalformedProofException,
)


def _all_ranges(leaf_count):
    for start in range(leaf_count):
        for end in range(start + 1, leaf_count + 1):
            yield start, end


class TestAggregateVerification:
    """Tests for range proof generation and verification."""

    def test_middle_range_of_eight(self, full_tree):
        proof = build_aggregate_proof(full_tree, 2, 6)

        assert proof.elements == ("valid", "test", "elements", "to")
        assert verify_aggregate_proof(full_tree.root_hash, proof)
        assert verify_aggregate_proof(INVALID_HASH, proof) is False

    @pytest.mark.parametrize("count", range(1, 10))
    def test_every_range_verifies(self, count):
        tree = build_merkle_tree(make_elements(count))

        for start, end in _all_ranges(len(tree.leaves)):
            proof = build_aggregate_proof(tree, start, end)
            assert verify_aggregate_proof(tree.root_hash, proof), f"Range [{start}, {end}) failed"
            assert proof.elements == tree.leaves[start:end]

    def test_full_range_needs_no_siblings(self, full_tree):
        proof = build_aggregate_proof(full_tree, 0, len(full_tree.leaves))

        assert proof.siblings == ()
        assert proof.levels == 0
        assert verify_aggregate_proof(full_tree.root_hash, proof)

    def test_range_excluding_padding(self):
        """Five elements: [0, 5) stops before the sentinel and still verifies."""
        tree = build_merkle_tree(make_elements(5))

        proof = build_aggregate_proof(tree, 0, 5)

        assert "" not in proof.elements
        assert verify_aggregate_proof(tree.root_hash, proof)

    def test_single_element_range(self, full_tree):
        proof = build_aggregate_proof(full_tree, 5, 6)

        assert proof.elements == ("to",)
        assert verify_aggregate_proof(full_tree.root_hash, proof)

    def test_compute_root_from_aggregate_proof(self, full_tree):
        proof = build_aggregate_proof(full_tree, 1, 3)

        assert compute_root_from_aggregate_proof(proof) == full_tree.root_hash

    def test_custom_hasher(self):
        hasher = Hasher("blake2b")
        tree = build_merkle_tree(INCREASINGLY_MORE_TEST_ELEMENTS, hasher)

        proof = build_aggregate_proof(tree, 3, 7)

        assert verify_aggregate_proof(tree.root_hash, proof, hasher)
        assert verify_aggregate_proof(tree.root_hash, proof) is False


class TestAggregateLayout:
    """Tests for boundary entries."""

    def test_middle_range_of_eight_layout(self, full_tree):
        h = [hash_leaf(e) for e in INCREASINGLY_MORE_TEST_ELEMENTS]
        empty = hash_leaf("")

        proof = build_aggregate_proof(full_tree, 2, 6)

        # Leaf level: window [2, 5] is already pair-aligned.
        # Level 1: window [1, 2] needs its outer neighbours 0 and 3.
        assert proof.siblings == (
            empty,
            empty,
            hash_node(h[0], h[1]),
            hash_node(h[6], h[7]),
        )
        assert proof.directions == (False, False, True, True)
        assert proof.levels == 2
        assert proof.hash_count == 2

    def test_unaligned_boundaries(self, full_tree):
        h = [hash_leaf(e) for e in INCREASINGLY_MORE_TEST_ELEMENTS]

        proof = build_aggregate_proof(full_tree, 1, 3)

        assert proof.siblings[:2] == (h[0], h[3])
        assert proof.directions[:2] == (True, True)

    def test_right_boundary_at_end_of_odd_row(self):
        """The last node of an odd row has no right neighbour to record."""
        tree = build_merkle_tree(make_elements(6))

        proof = build_aggregate_proof(tree, 4, 6)

        assert proof.directions == (False, False, False, False, True, False)
        assert verify_aggregate_proof(tree.root_hash, proof)

    def test_two_entries_per_level(self):
        tree = build_merkle_tree(make_elements(9))

        for start, end in _all_ranges(len(tree.leaves)):
            proof = build_aggregate_proof(tree, start, end)
            assert len(proof.siblings) == len(proof.directions)
            assert len(proof.siblings) % 2 == 0
            assert proof.levels <= tree.height


class TestAggregateSize:
    """Tests for proof size against separate inclusion proofs."""

    @pytest.mark.parametrize("count", [3, 5, 8, 9, 16])
    def test_bounded_by_twice_height(self, count):
        tree = build_merkle_tree(make_elements(count))

        for start, end in _all_ranges(len(tree.leaves)):
            proof = build_aggregate_proof(tree, start, end)
            assert len(proof.siblings) <= 2 * tree.height

    @pytest.mark.parametrize("count", [5, 8, 9, 16])
    def test_not_larger_than_inclusion_proofs(self, count):
        tree = build_merkle_tree(make_elements(count))
        assert tree.height >= 3

        for start, end in _all_ranges(len(tree.leaves)):
            proof = build_aggregate_proof(tree, start, end)
            naive = sum(
                len(build_merkle_proof(tree, i).siblings) for i in range(start, end)
            )
            assert proof.hash_count <= naive
            if end - start >= 2:
                assert len(proof.siblings) <= naive

    def test_strictly_smaller_for_wide_range(self, full_tree):
        proof = build_aggregate_proof(full_tree, 2, 6)

        assert len(proof.siblings) < 4 * full_tree.height


class TestInvalidRanges:
    """Tests for range validation (half-open [start, end))."""

    def test_empty_range_raises(self, full_tree):
        with pytest.raises(InvalidRangeException) as exc_info:
            build_aggregate_proof(full_tree, 2, 2)

        assert exc_info.value.code == ErrorCodes.INVALID_RANGE
        assert exc_info.value.details == {"start": 2, "end": 2, "size": 8}

    def test_inverted_range_raises(self, full_tree):
        with pytest.raises(InvalidRangeException):
            build_aggregate_proof(full_tree, 1, 0)

    def test_end_past_leaves_raises(self, full_tree):
        with pytest.raises(InvalidRangeException):
            build_aggregate_proof(full_tree, 0, len(full_tree.leaves) + 1)

    def test_end_equal_to_leaf_count_is_valid(self, full_tree):
        """end is exclusive, so len(tree.leaves) is the largest valid end."""
        proof = build_aggregate_proof(full_tree, 6, len(full_tree.leaves))

        assert proof.elements == ("use", "again")

    def test_negative_start_raises(self, full_tree):
        with pytest.raises(ValueError):
            build_aggregate_proof(full_tree, -1, 2)


class TestAggregateTampering:
    """Tests for tamper detection."""

    def test_any_root_bit_flip_fails(self, full_tree):
        proof = build_aggregate_proof(full_tree, 2, 6)

        for bit in range(len(full_tree.root_hash) * 4):
            assert not verify_aggregate_proof(flip_hex_bit(full_tree.root_hash, bit), proof)

    def test_swapped_elements_fail(self, full_tree):
        proof = build_aggregate_proof(full_tree, 2, 6)

        tampered = MerkleAggregateProof(
            elements=("test", "valid", "elements", "to"),
            siblings=proof.siblings,
            directions=proof.directions,
        )

        assert not verify_aggregate_proof(full_tree.root_hash, tampered)

    def test_dropped_element_fails(self, full_tree):
        proof = build_aggregate_proof(full_tree, 2, 6)

        tampered = MerkleAggregateProof(
            elements=proof.elements[:-1],
            siblings=proof.siblings,
            directions=proof.directions,
        )

        assert not verify_aggregate_proof(full_tree.root_hash, tampered)

    def test_flipped_flag_fails(self, full_tree):
        proof = build_aggregate_proof(full_tree, 2, 6)

        tampered = MerkleAggregateProof(
            elements=proof.elements,
            siblings=proof.siblings,
            directions=(True,) + proof.directions[1:],
        )

        assert not verify_aggregate_proof(full_tree.root_hash, tampered)

    def test_proof_from_other_tree_fails(self, full_tree):
        other = build_merkle_tree(TEST_ELEMENTS)
        proof = build_aggregate_proof(other, 0, 2)

        assert not verify_aggregate_proof(full_tree.root_hash, proof)


class TestMalformedAggregateProof:
    """Tests for structural validation."""

    def test_no_elements(self):
        with pytest.raises(MalformedProofException, match="at least one element"):
            MerkleAggregateProof(elements=(), siblings=(), directions=())

    def test_length_mismatch(self):
        with pytest.raises(MalformedProofException):
            MerkleAggregateProof(
                elements=("a",),
                siblings=(hash_leaf("b"), hash_leaf("")),
                directions=(True,),
            )

    def test_odd_entry_count(self):
        with pytest.raises(MalformedProofException, match="one left and one right"):
            MerkleAggregateProof(
                elements=("a",),
                siblings=(hash_leaf("b"),),
                directions=(True,),
            )
