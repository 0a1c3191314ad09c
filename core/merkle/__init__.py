"""
Merkle Tree and Commitments
Deterministic Merkle tree construction + proof generation/verification.

This package provides:
- MerkleEngine: stateful tree over appended leaves (add/root/proofs)
- Node, MerkleProof: tree node and bundled inclusion proof
- build_merkle_root, build_merkle_proof, verify_merkle_proof: pure functions
- MerkleProver, MerkleVerifier: convenience wrappers

Commitment Rules:
1. Leaf hashing: H(leaf_bytes)
2. Parent hashing: H(left + right)
3. Padding: Duplicate last node if odd number at any level
4. Empty tree: no root (None)
5. Single leaf: root = H(leaf), empty proof

Usage:
    from core.merkle import MerkleEngine

    engine = MerkleEngine()          # SHA-256 by default
    for item in items:
        engine.add(item)

    root = engine.root()
    proof = engine.generate_proof(2)
    assert engine.verify_proof(items[2], 2, proof, root)
"""
from .merkle_tree import (
    MerkleProof,
    Node,
    build_leaf_level,
    build_merkle_proof,
    build_merkle_root,
    build_merkle_tree,
    compute_proof_length,
    compute_root_from_proof,
    compute_tree_depth,
    generate_siblings,
    hash_leaf,
    merkle_parent,
    verify_inclusion,
    verify_merkle_proof,
)

from .engine import MerkleEngine

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleEngine",
    "MerkleProof",
    "Node",
    # Core functions
    "hash_leaf",
    "merkle_parent",
    "build_leaf_level",
    "build_merkle_tree",
    "build_merkle_root",
    "generate_siblings",
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_inclusion",
    "verify_merkle_proof",
    "compute_tree_depth",
    "compute_proof_length",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
