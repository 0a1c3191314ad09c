"""
CLI Prove Command

Generate an inclusion proof for one leaf.

Usage:
    merkletree prove 2 tx1 tx2 tx3 tx4 [--file leaves.txt] [--hex-leaves] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from core.crypto.hashing import to_hex
from core.schemas.errors import IndexOutOfRange
from merkletree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    build_engine,
    print_error,
    read_leaves,
    wants_json,
)


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Returns:
        Exit code (1 if the index is out of range)
    """
    engine = build_engine(args, read_leaves(args))

    try:
        proof = engine.prove(args.index)
    except IndexOutOfRange as e:
        if wants_json(args):
            print(json.dumps({"error": e.to_error_model().model_dump()}, indent=2))
        else:
            print_error(e.message)
        return EXIT_RUNTIME_ERROR

    logger.info(
        "Generated proof for leaf %d of %d (%d siblings)",
        proof.index, engine.leaf_count, len(proof.siblings),
    )

    if wants_json(args):
        print(json.dumps(proof.to_dict(), indent=2))
        return EXIT_SUCCESS

    print(f"root: {to_hex(proof.root)}")
    print(f"Proof for leaf {proof.index}:")
    for i, sibling in enumerate(proof.siblings):
        print(f"  [{i}] {to_hex(sibling)}")
    if not proof.siblings:
        print("  (empty: single-leaf tree)")

    return EXIT_SUCCESS
