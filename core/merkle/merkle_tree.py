"""
Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification.

This module provides:
- Deterministic Merkle root computation over raw leaf bytes
- Node graph construction (fresh graph on every build)
- Merkle proof generation for any leaf index
- Merkle proof verification
- Standard padding rule for odd number of nodes

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf_hash = H(leaf_bytes)
2. Parent hashing: parent = H(left + right), left before right
3. Padding rule: Duplicate last node if odd number at any level
4. Empty leaves: there is no root (None), never a zero-filled hash
5. Single leaf: root = H(leaf), proof = []

H is the hash capability supplied by the caller; SHA-256 by default.

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts leaves - it trusts input order
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from core.crypto.hashing import HashFn, as_bytes, concat, sha256, to_hex
from core.schemas.errors import IndexOutOfRange


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Node:
    """
    A node of a built Merkle tree.

    Leaf nodes have no children and hash = H(leaf bytes). Internal nodes
    have exactly two children and hash = H(left.hash + right.hash). When a
    level has an odd count, its last node is both children of its parent.
    """
    hash: bytes
    left: Optional["Node"] = field(default=None, repr=False)
    right: Optional["Node"] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if (self.left is None) != (self.right is None):
            raise ValueError("A node has either zero or two children")

    @property
    def is_leaf(self) -> bool:
        return self.left is None


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf in a Merkle tree.

    The proof allows verification that a leaf is included in a tree
    with a known root, without revealing the entire tree.

    Attributes:
        leaf: The raw leaf bytes being proven (hashed during verification)
        index: The 0-based index of the leaf in insertion order
        siblings: List of sibling hashes from bottom to top of tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: list[bytes]
    root: bytes

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")

    def to_dict(self) -> dict:
        """Hex rendering for display. Not a wire format."""
        return {
            "leaf": to_hex(self.leaf),
            "index": self.index,
            "siblings": [to_hex(s) for s in self.siblings],
            "root": to_hex(self.root),
        }


def hash_leaf(data: bytes, hash_fn: HashFn = sha256) -> bytes:
    """Hash a leaf: H(data)."""
    return hash_fn(as_bytes(data))


def merkle_parent(left: bytes, right: bytes, hash_fn: HashFn = sha256) -> bytes:
    """
    Compute the parent hash of two child nodes.

    Parent hash is deterministic: H(left + right). The concatenation is a
    fresh buffer, so neither child hash can be altered by it.

    Args:
        left: Left child hash
        right: Right child hash
        hash_fn: Hash capability

    Returns:
        Parent hash
    """
    return hash_fn(concat(left, right))


def build_leaf_level(leaves: Sequence[bytes], hash_fn: HashFn = sha256) -> list[bytes]:
    """Hash every leaf, preserving order."""
    return [hash_leaf(leaf, hash_fn) for leaf in leaves]


def _next_level(level: list[bytes], hash_fn: HashFn) -> list[bytes]:
    # Caller guarantees an even count
    return [
        merkle_parent(level[i], level[i + 1], hash_fn)
        for i in range(0, len(level), 2)
    ]


def build_merkle_tree(leaves: Sequence[bytes], hash_fn: HashFn = sha256) -> Optional[Node]:
    """
    Build the full node graph for a sequence of leaves.

    Algorithm:
    1. If empty: return None
    2. Create one leaf node per leaf
    3. While more than one node remains:
       - If odd number of nodes, duplicate the last node
       - Pair adjacent nodes into parents
    4. Return the single remaining node

    Every call constructs a brand new graph; nothing is shared with a
    previous build.

    Args:
        leaves: Raw leaf byte sequences, order preserved
        hash_fn: Hash capability

    Returns:
        Root node, or None for an empty leaf list
    """
    if len(leaves) == 0:
        return None

    level: list[Node] = [Node(hash=hash_leaf(leaf, hash_fn)) for leaf in leaves]

    while len(level) > 1:
        if len(level) % 2 == 1:
            level.append(level[-1])

        level = [
            Node(
                hash=merkle_parent(level[i].hash, level[i + 1].hash, hash_fn),
                left=level[i],
                right=level[i + 1],
            )
            for i in range(0, len(level), 2)
        ]

    return level[0]


def build_merkle_root(leaves: Sequence[bytes], hash_fn: HashFn = sha256) -> Optional[bytes]:
    """
    Build a Merkle root from a sequence of raw leaves.

    Padding Rule: Duplicate last node at each level if odd.
    Example: [a, b, c] -> [a, b, c, c] -> [parent(a,b), parent(c,c)]

    Args:
        leaves: Raw leaf byte sequences. Order matters and is preserved.
        hash_fn: Hash capability

    Returns:
        Merkle root, or None if there are no leaves

    Example:
        >>> root = build_merkle_root([b"a", b"b", b"c"])
        >>> len(root)
        32
    """
    if len(leaves) == 0:
        return None

    current_level = build_leaf_level(leaves, hash_fn)

    while len(current_level) > 1:
        if len(current_level) % 2 == 1:
            current_level.append(current_level[-1])
        current_level = _next_level(current_level, hash_fn)

    return current_level[0]


def generate_siblings(
    leaves: Sequence[bytes],
    index: int,
    hash_fn: HashFn = sha256,
) -> tuple[list[bytes], bytes]:
    """
    Collect the sibling hashes for the leaf at ``index``.

    Algorithm:
    1. Recompute the leaf-hash level from the raw leaves
    2. At each level:
       - If odd number of nodes, pad with duplicate of last
       - Record the sibling hash (index XOR 1)
       - Combine pairs into the next level
       - Move up: index = index // 2
    3. Stop when one node (the root) remains

    Returns:
        (siblings bottom-up, root)

    Raises:
        IndexOutOfRange: If index < 0 or index >= len(leaves)
    """
    if index < 0 or index >= len(leaves):
        raise IndexOutOfRange(index=index, leaf_count=len(leaves))

    siblings: list[bytes] = []
    current_level = build_leaf_level(leaves, hash_fn)
    current_index = index

    while len(current_level) > 1:
        if len(current_level) % 2 == 1:
            current_level.append(current_level[-1])

        # XOR with 1 flips the last bit: the other member of the pair
        siblings.append(current_level[current_index ^ 1])

        current_level = _next_level(current_level, hash_fn)
        current_index = current_index // 2

    return siblings, current_level[0]


def build_merkle_proof(
    leaves: Sequence[bytes],
    index: int,
    hash_fn: HashFn = sha256,
) -> MerkleProof:
    """
    Generate a Merkle proof for the leaf at the given index.

    Args:
        leaves: Raw leaf byte sequences
        index: 0-based index of the leaf to prove
        hash_fn: Hash capability

    Returns:
        MerkleProof with leaf, index, siblings (bottom-up), and root

    Raises:
        IndexOutOfRange: If index is out of range (always, for no leaves)
    """
    siblings, root = generate_siblings(leaves, index, hash_fn)
    return MerkleProof(
        leaf=as_bytes(leaves[index]),
        index=index,
        siblings=siblings,
        root=root,
    )


def compute_root_from_proof(
    leaf: bytes,
    index: int,
    siblings: Sequence[bytes],
    hash_fn: HashFn = sha256,
) -> Optional[bytes]:
    """
    Recompute the root implied by a leaf, its index and its siblings.

    Algorithm:
    1. Start with H(leaf)
    2. For each sibling (bottom-up):
       - If current index is even: hash = parent(hash, sibling)
       - If current index is odd: hash = parent(sibling, hash)
       - Move up: index = index // 2
    3. The index must be exhausted once the siblings are

    Returns:
        The implied root, or None if the index cannot belong to a tree of
        this proof's height (negative, or >= 2 ** len(siblings))
    """
    if index < 0:
        return None

    current_hash = hash_leaf(leaf, hash_fn)
    current_index = index

    for sibling in siblings:
        if current_index % 2 == 0:
            # Current node is left child
            current_hash = merkle_parent(current_hash, sibling, hash_fn)
        else:
            # Current node is right child
            current_hash = merkle_parent(sibling, current_hash, hash_fn)
        current_index = current_index // 2

    if current_index != 0:
        return None

    return current_hash


def verify_inclusion(
    leaf: bytes,
    index: int,
    siblings: Sequence[bytes],
    expected_root: Optional[bytes],
    hash_fn: HashFn = sha256,
) -> bool:
    """
    Check that ``leaf`` sits at ``index`` under ``expected_root``.

    A pure predicate: malformed input (wrong proof length, wrong or negative
    index, non-bytes values) yields False instead of raising.
    """
    if expected_root is None:
        return False
    try:
        computed = compute_root_from_proof(leaf, index, siblings, hash_fn)
        return computed is not None and computed == as_bytes(expected_root)
    except (TypeError, ValueError) as e:
        logger.debug("Rejecting malformed proof input: %s", e)
        return False


def verify_merkle_proof(proof: MerkleProof, hash_fn: HashFn = sha256) -> bool:
    """
    Verify a Merkle proof.

    Recomputes the root from the leaf and siblings, checking
    against the claimed root in the proof.

    Args:
        proof: MerkleProof to verify
        hash_fn: Hash capability the tree was built with

    Returns:
        True if proof is valid, False otherwise
    """
    return verify_inclusion(proof.leaf, proof.index, proof.siblings, proof.root, hash_fn)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of levels from leaves to root (inclusive).
    A single leaf has depth 1, two leaves have depth 2, etc.

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves <= 0:
        return 0
    return compute_proof_length(num_leaves) + 1


def compute_proof_length(num_leaves: int) -> int:
    """
    Number of siblings in any proof for a tree of ``num_leaves`` leaves.

    Equals ceil(log2(num_leaves)); 0 for one leaf (or none).
    """
    if num_leaves <= 1:
        return 0
    return (num_leaves - 1).bit_length()


__all__ = [
    "Node",
    "MerkleProof",
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
]
