"""
Merkle Engine
Stateful owner of an ordered leaf list and the tree built from it.

The engine is a value holder with a single transition: a leaf is added and
the tree is rebuilt. Root lookup, proof generation and proof verification are
read-only queries.

Not thread-safe. Concurrent callers must guard add() with one exclusive lock
and read root()/generate_proof() under the same lock.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from core.crypto.hashing import HashFn, as_bytes, sha256
from core.merkle.merkle_tree import (
    MerkleProof,
    Node,
    build_merkle_tree,
    compute_tree_depth,
    generate_siblings,
    verify_inclusion,
)
from core.schemas.errors import IndexOutOfRange


logger = logging.getLogger(__name__)


class MerkleEngine:
    """
    Binary Merkle tree over caller-supplied leaves.

    Example:
        >>> engine = MerkleEngine()
        >>> for item in (b"tx1", b"tx2", b"tx3"):
        ...     engine.add(item)
        >>> proof = engine.generate_proof(2)
        >>> engine.verify_proof(b"tx3", 2, proof, engine.root())
        True
    """

    def __init__(self, hash_fn: HashFn = sha256) -> None:
        if not callable(hash_fn):
            raise TypeError(f"hash_fn must be callable, got {type(hash_fn).__name__}")
        self._hash_fn = hash_fn
        self._leaves: list[bytes] = []
        self._root_node: Optional[Node] = None

    def __len__(self) -> int:
        return len(self._leaves)

    def __repr__(self) -> str:
        name = getattr(self._hash_fn, "__name__", repr(self._hash_fn))
        return f"MerkleEngine(leaves={len(self._leaves)}, hash_fn={name})"

    @property
    def hash_fn(self) -> HashFn:
        return self._hash_fn

    @property
    def leaf_count(self) -> int:
        return len(self._leaves)

    @property
    def leaves(self) -> tuple[bytes, ...]:
        """Snapshot of the leaves in insertion order."""
        return tuple(self._leaves)

    @property
    def root_node(self) -> Optional[Node]:
        """Root of the current node graph, None while empty."""
        return self._root_node

    @property
    def depth(self) -> int:
        return compute_tree_depth(len(self._leaves))

    def add(self, leaf: bytes) -> None:
        """
        Append a leaf and rebuild the tree.

        The leaf must be bytes-like and is copied into an immutable bytes
        object; ints and strings raise TypeError. No validation is done on
        its content or size. The whole tree is rebuilt before
        returning, so root() reflects the new leaf immediately. Each call is
        O(leaf count), and adding n leaves one by one costs O(n^2) hashing in
        total.
        """
        self._leaves.append(as_bytes(leaf))
        self._rebuild()

    def extend(self, leaves: Iterable[bytes]) -> None:
        """add() each leaf in order."""
        for leaf in leaves:
            self.add(leaf)

    def _rebuild(self) -> None:
        self._root_node = build_merkle_tree(self._leaves, self._hash_fn)
        logger.debug(
            "Rebuilt Merkle tree: %d leaves, depth %d",
            len(self._leaves),
            self.depth,
        )

    def root(self) -> Optional[bytes]:
        """
        Hash of the root node.

        Returns None when no leaf has been added, which is distinct from
        any computed root.
        """
        if self._root_node is None:
            return None
        return self._root_node.hash

    def generate_proof(self, index: int) -> list[bytes]:
        """
        Sibling hashes for the leaf at ``index``, leaf level first.

        The levels are recomputed from the stored leaves; engine state is
        not touched. A single-leaf tree yields an empty proof.

        Raises:
            IndexOutOfRange: If index < 0 or index >= leaf count (every
                index, for an empty tree)
        """
        try:
            siblings, _ = generate_siblings(self._leaves, index, self._hash_fn)
        except IndexOutOfRange:
            logger.warning(
                "Proof requested for index %d with %d leaves",
                index,
                len(self._leaves),
            )
            raise
        logger.debug("Generated proof for index %d: %d siblings", index, len(siblings))
        return siblings

    def prove(self, index: int) -> MerkleProof:
        """generate_proof() bundled with the leaf and current root."""
        siblings = self.generate_proof(index)
        return MerkleProof(
            leaf=self._leaves[index],
            index=index,
            siblings=siblings,
            root=self.root(),
        )

    def verify_proof(
        self,
        leaf: bytes,
        index: int,
        proof: Sequence[bytes],
        expected_root: Optional[bytes],
    ) -> bool:
        """
        Recompute a root from ``leaf``, ``index`` and ``proof`` using this
        engine's hash capability, and compare it byte for byte with
        ``expected_root``.

        Independent of the engine's own leaves. Never raises: malformed
        input returns False.
        """
        return verify_inclusion(leaf, index, proof, expected_root, self._hash_fn)


__all__ = [
    "MerkleEngine",
]
