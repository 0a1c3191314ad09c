"""
Merkle Proofs Convenience Wrappers
Thin class-based wrappers around the functions in merkle_tree.py.

This module provides:
- MerkleProver: Generate proofs and roots from raw leaves or objects
- MerkleVerifier: Verify proofs

Objects are turned into leaf bytes with canonical JSON, after which they are
ordinary leaves.
"""
from __future__ import annotations

from typing import Any, Optional, Sequence

from core.crypto.hashing import HashFn, canonical_bytes, sha256
from core.merkle.merkle_tree import (
    MerkleProof,
    build_merkle_proof,
    build_merkle_root,
    verify_inclusion,
    verify_merkle_proof,
)


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove([b"a", b"b", b"c"], index=1)
        >>> proof.leaf
        b'b'
    """

    @staticmethod
    def prove(leaves: Sequence[bytes], index: int, hash_fn: HashFn = sha256) -> MerkleProof:
        """
        Generate a Merkle proof for the leaf at the given index.

        Raises:
            IndexOutOfRange: If index is out of range
        """
        return build_merkle_proof(leaves, index, hash_fn)

    @staticmethod
    def prove_object(objects: Sequence[Any], index: int, hash_fn: HashFn = sha256) -> MerkleProof:
        """
        Generate a Merkle proof for an object at the given index.

        The proof's leaf is the canonical JSON encoding of the object.
        """
        leaves = [canonical_bytes(obj) for obj in objects]
        return build_merkle_proof(leaves, index, hash_fn)

    @staticmethod
    def compute_root(leaves: Sequence[bytes], hash_fn: HashFn = sha256) -> Optional[bytes]:
        return build_merkle_root(leaves, hash_fn)

    @staticmethod
    def compute_root_from_objects(objects: Sequence[Any], hash_fn: HashFn = sha256) -> Optional[bytes]:
        leaves = [canonical_bytes(obj) for obj in objects]
        return build_merkle_root(leaves, hash_fn)


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove(leaves, index=1)
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def verify(proof: MerkleProof, hash_fn: HashFn = sha256) -> bool:
        return verify_merkle_proof(proof, hash_fn)

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        index: int,
        siblings: Sequence[bytes],
        root: bytes,
        hash_fn: HashFn = sha256,
    ) -> bool:
        """
        Verify a raw leaf is included in a Merkle root.

        Unlike MerkleProof, accepts a negative index (and returns False).

        Args:
            leaf: The raw leaf bytes
            index: The claimed index of the leaf
            siblings: List of sibling hashes (bottom-up)
            root: The claimed Merkle root
            hash_fn: Hash capability the tree was built with

        Returns:
            True if the proof is valid, False otherwise
        """
        return verify_inclusion(leaf, index, siblings, root, hash_fn)

    @staticmethod
    def verify_object_in_root(
        obj: Any,
        index: int,
        siblings: Sequence[bytes],
        root: bytes,
        hash_fn: HashFn = sha256,
    ) -> bool:
        """Verify an object, canonically encoded, is included in a Merkle root."""
        return verify_inclusion(canonical_bytes(obj), index, siblings, root, hash_fn)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
