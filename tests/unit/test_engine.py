"""
Merkle Engine Unit Tests
Tests for core/merkle/engine.py

Covers add/root/generate_proof/verify_proof on the stateful engine,
including the pinned five-transaction example and single-bit tampering.
"""
import logging

import pytest

from core.crypto.hashing import get_hash_function, sha256
from core.merkle.engine import MerkleEngine
from core.merkle.merkle_tree import build_merkle_root
from core.schemas.errors import ErrorCodes, IndexOutOfRange

from fixtures.merkle_fixtures import (
    ABC_ROOT,
    DEMO_LEAVES,
    DEMO_PROOF,
    DEMO_PROOF_INDEX,
    DEMO_ROOT,
    flip_bit,
    make_engine,
)


class TestEmptyEngine:
    def test_root_is_none(self):
        assert MerkleEngine().root() is None

    def test_no_root_node(self):
        engine = MerkleEngine()

        assert engine.root_node is None
        assert engine.leaf_count == 0
        assert len(engine) == 0
        assert engine.depth == 0

    def test_generate_proof_raises(self):
        with pytest.raises(IndexOutOfRange) as exc_info:
            MerkleEngine().generate_proof(0)

        assert exc_info.value.details == {"index": 0, "leaf_count": 0}

    def test_rejects_non_callable_hash(self):
        with pytest.raises(TypeError):
            MerkleEngine(hash_fn="sha256")


class TestAdd:
    def test_add_returns_none(self):
        engine = MerkleEngine()

        assert engine.add(b"x") is None

    def test_root_changes_on_every_add(self):
        engine = MerkleEngine()
        seen = set()

        for leaf in DEMO_LEAVES:
            engine.add(leaf)
            root = engine.root()
            assert root not in seen
            seen.add(root)

    def test_root_stable_between_adds(self):
        engine = make_engine(DEMO_LEAVES)

        first = engine.root()
        engine.generate_proof(1)
        engine.verify_proof(b"x", 0, [], first)

        assert engine.root() == first

    def test_leaves_preserve_insertion_order(self):
        engine = make_engine([b"c", b"a", b"b"])

        assert engine.leaves == (b"c", b"a", b"b")

    def test_accepts_empty_and_large_leaves(self):
        engine = MerkleEngine()
        engine.add(b"")
        engine.add(b"\x00" * 100_000)

        assert engine.leaf_count == 2
        assert engine.root() == build_merkle_root([b"", b"\x00" * 100_000])

    def test_add_copies_mutable_input(self):
        buffer = bytearray(b"original")
        engine = MerkleEngine()
        engine.add(buffer)
        root = engine.root()

        buffer[:] = b"mutated!"

        assert engine.leaves == (b"original",)
        assert engine.root() == root
        assert engine.generate_proof(0) == []

    def test_extend_matches_single_adds(self):
        one_by_one = MerkleEngine()
        for leaf in DEMO_LEAVES:
            one_by_one.add(leaf)

        assert make_engine(DEMO_LEAVES).root() == one_by_one.root()

    @pytest.mark.parametrize("leaf", [4, "text", None])
    def test_add_rejects_non_bytes_like(self, leaf):
        engine = MerkleEngine()

        with pytest.raises(TypeError):
            engine.add(leaf)

        assert engine.leaf_count == 0
        assert engine.root() is None

    def test_leaves_snapshot_is_detached(self):
        engine = make_engine([b"a"])
        snapshot = engine.leaves

        engine.add(b"b")

        assert snapshot == (b"a",)

    def test_root_node_is_rebuilt(self):
        engine = make_engine([b"a", b"b"])
        before = engine.root_node

        engine.add(b"c")

        assert engine.root_node is not before
        assert engine.root_node.hash == engine.root()


class TestSingleLeafIdentity:
    def test_root_is_leaf_hash(self):
        engine = make_engine([b"L"])

        assert engine.root() == sha256(b"L")

    def test_proof_is_empty(self):
        assert make_engine([b"L"]).generate_proof(0) == []

    def test_empty_proof_verifies(self):
        engine = make_engine([b"L"])

        assert engine.verify_proof(b"L", 0, [], engine.root())


class TestRoundTrip:
    @pytest.mark.parametrize("num_leaves", [1, 2, 3, 4, 5, 6, 7, 8, 9, 16, 17, 33])
    def test_every_index_verifies(self, num_leaves):
        leaves = [f"item-{i}".encode() for i in range(num_leaves)]
        engine = make_engine(leaves)
        root = engine.root()

        for i, leaf in enumerate(leaves):
            proof = engine.generate_proof(i)
            assert engine.verify_proof(leaf, i, proof, root), f"index {i} of {num_leaves}"

    def test_prove_bundles_leaf_and_root(self, demo_engine):
        proof = demo_engine.prove(DEMO_PROOF_INDEX)

        assert proof.leaf == DEMO_LEAVES[DEMO_PROOF_INDEX]
        assert proof.index == DEMO_PROOF_INDEX
        assert proof.siblings == demo_engine.generate_proof(DEMO_PROOF_INDEX)
        assert proof.root == demo_engine.root()

    def test_verify_is_independent_of_engine_leaves(self, demo_engine):
        proof = demo_engine.generate_proof(4)
        other = MerkleEngine()

        assert other.verify_proof(DEMO_LEAVES[4], 4, proof, demo_engine.root())

    def test_alternate_hash_function(self):
        sha3 = get_hash_function("sha3_256")
        engine = make_engine(DEMO_LEAVES, hash_fn=sha3)
        root = engine.root()

        assert root != DEMO_ROOT
        for i, leaf in enumerate(DEMO_LEAVES):
            assert engine.verify_proof(leaf, i, engine.generate_proof(i), root)


class TestOddLeafDuplication:
    def test_abc_equals_abcc(self):
        three = make_engine([b"a", b"b", b"c"])
        four = make_engine([b"a", b"b", b"c", b"c"])

        assert three.root() == four.root() == ABC_ROOT


class TestOutOfRange:
    @pytest.mark.parametrize("index", [-1, 5, 6, 1000])
    def test_raises_index_out_of_range(self, demo_engine, index):
        with pytest.raises(IndexOutOfRange) as exc_info:
            demo_engine.generate_proof(index)

        error = exc_info.value
        assert error.code == ErrorCodes.INDEX_OUT_OF_RANGE
        assert error.index == index
        assert error.leaf_count == 5
        assert error.retryable

    def test_state_unchanged_after_failure(self, demo_engine):
        root = demo_engine.root()

        with pytest.raises(IndexOutOfRange):
            demo_engine.generate_proof(5)

        assert demo_engine.root() == root
        assert demo_engine.leaf_count == 5

    def test_logs_warning(self, demo_engine, caplog):
        with caplog.at_level(logging.WARNING, logger="core.merkle.engine"):
            with pytest.raises(IndexOutOfRange):
                demo_engine.generate_proof(-1)

        assert "index -1" in caplog.text

    def test_recoverable_by_adding_leaves(self, demo_engine):
        with pytest.raises(IndexOutOfRange):
            demo_engine.generate_proof(5)

        demo_engine.add(b"tx6")

        assert demo_engine.verify_proof(b"tx6", 5, demo_engine.generate_proof(5), demo_engine.root())


class TestEndToEndExample:
    """Five transactions, proof for index 2, SHA-256 pinned."""

    def test_root(self, demo_engine):
        assert demo_engine.root() == DEMO_ROOT

    def test_proof(self, demo_engine):
        assert demo_engine.generate_proof(DEMO_PROOF_INDEX) == DEMO_PROOF

    def test_verifies(self, demo_engine):
        assert demo_engine.verify_proof(
            DEMO_LEAVES[DEMO_PROOF_INDEX], DEMO_PROOF_INDEX, DEMO_PROOF, DEMO_ROOT
        )

    def test_depth(self, demo_engine):
        assert demo_engine.depth == 4

    def test_any_leaf_bit_flip_fails(self, demo_engine):
        leaf = DEMO_LEAVES[DEMO_PROOF_INDEX]

        for byte_index in range(len(leaf)):
            for bit in range(8):
                tampered = flip_bit(leaf, byte_index, bit)
                assert not demo_engine.verify_proof(
                    tampered, DEMO_PROOF_INDEX, DEMO_PROOF, DEMO_ROOT
                )

    def test_any_sibling_bit_flip_fails(self, demo_engine):
        leaf = DEMO_LEAVES[DEMO_PROOF_INDEX]

        for level, sibling in enumerate(DEMO_PROOF):
            for byte_index in range(len(sibling)):
                for bit in range(8):
                    proof = list(DEMO_PROOF)
                    proof[level] = flip_bit(sibling, byte_index, bit)
                    assert not demo_engine.verify_proof(leaf, DEMO_PROOF_INDEX, proof, DEMO_ROOT)

    def test_any_root_bit_flip_fails(self, demo_engine):
        leaf = DEMO_LEAVES[DEMO_PROOF_INDEX]

        for byte_index in range(len(DEMO_ROOT)):
            for bit in range(8):
                root = flip_bit(DEMO_ROOT, byte_index, bit)
                assert not demo_engine.verify_proof(leaf, DEMO_PROOF_INDEX, DEMO_PROOF, root)

    @pytest.mark.parametrize("index", [0, 1, 3, 4, 6, 7, 8, -2])
    def test_wrong_index_fails(self, demo_engine, index):
        assert not demo_engine.verify_proof(
            DEMO_LEAVES[DEMO_PROOF_INDEX], index, DEMO_PROOF, DEMO_ROOT
        )


class TestMalformedVerification:
    def test_short_proof(self, demo_engine):
        assert not demo_engine.verify_proof(DEMO_LEAVES[2], 2, DEMO_PROOF[:2], DEMO_ROOT)

    def test_long_proof(self, demo_engine):
        assert not demo_engine.verify_proof(
            DEMO_LEAVES[2], 2, DEMO_PROOF + [DEMO_ROOT], DEMO_ROOT
        )

    def test_none_root(self, demo_engine):
        assert not demo_engine.verify_proof(DEMO_LEAVES[2], 2, DEMO_PROOF, None)

    def test_wrong_types_do_not_raise(self, demo_engine):
        assert not demo_engine.verify_proof("text", 2, DEMO_PROOF, DEMO_ROOT)
        assert not demo_engine.verify_proof(DEMO_LEAVES[2], 2, [None], DEMO_ROOT)
        assert not demo_engine.verify_proof(DEMO_LEAVES[2], "2", DEMO_PROOF, DEMO_ROOT)

    def test_int_leaf_is_not_zero_bytes(self):
        engine = MerkleEngine()

        assert not engine.verify_proof(3, 0, [], sha256(b"\x00\x00\x00"))

    def test_int_sibling_is_not_zero_bytes(self):
        engine = MerkleEngine()
        root = sha256(sha256(b"a") + b"\x00" * 32)

        assert engine.verify_proof(b"a", 0, [b"\x00" * 32], root)
        assert not engine.verify_proof(b"a", 0, [32], root)

    def test_int_root_is_rejected(self):
        engine = MerkleEngine()

        assert not engine.verify_proof(b"a", 0, [], 32)


class TestRepr:
    def test_repr_mentions_leaf_count(self, demo_engine):
        assert "leaves=5" in repr(demo_engine)
        assert "sha256" in repr(demo_engine)
