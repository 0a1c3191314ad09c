"""
CLI Demo Command

Build a tree over five sample transactions, print its root, the proof for
the third transaction, and whether that proof verifies.

Usage:
    merkletree demo [--json]
"""

from __future__ import annotations

import json
from argparse import Namespace

from core.crypto.hashing import to_hex
from core.merkle.engine import MerkleEngine
from merkletree_cli.commands.common import EXIT_SUCCESS, EXIT_VERIFICATION_FAILED, wants_json


DEMO_TRANSACTIONS: tuple[bytes, ...] = (
    b"tx1: Alice pays Bob 10 BTC",
    b"tx2: Bob pays Charlie 5 BTC",
    b"tx3: Charlie pays Dave 2 BTC",
    b"tx4: Dave pays Eve 1 BTC",
    b"tx5: sanskar pays vishu 1 BTC",
)

DEMO_INDEX = 2


def demo_cmd(args: Namespace) -> int:
    engine = MerkleEngine(hash_fn=args.hash_fn)
    engine.extend(DEMO_TRANSACTIONS)

    root = engine.root()
    proof = engine.generate_proof(DEMO_INDEX)
    valid = engine.verify_proof(DEMO_TRANSACTIONS[DEMO_INDEX], DEMO_INDEX, proof, root)

    if wants_json(args):
        print(json.dumps({
            "root": to_hex(root),
            "index": DEMO_INDEX,
            "proof": [to_hex(p) for p in proof],
            "valid": valid,
        }, indent=2))
    else:
        print(f"Merkle Root: {to_hex(root)}")
        print(f"Proof for leaf {DEMO_INDEX}:")
        for i, p in enumerate(proof):
            print(f"  [{i}] {to_hex(p)}")
        print(f"Proof valid? {str(valid).lower()}")

    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
