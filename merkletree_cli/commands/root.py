"""
CLI Root Command

Compute the Merkle root of a list of leaves.

Usage:
    merkletree root tx1 tx2 tx3 [--file leaves.txt] [--hex-leaves] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from core.crypto.hashing import to_hex
from merkletree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    build_engine,
    print_error,
    read_leaves,
    wants_json,
)


logger = logging.getLogger(__name__)


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Returns:
        Exit code
    """
    leaves = read_leaves(args)
    if not leaves:
        print_error("No leaves given; an empty tree has no root")
        return EXIT_RUNTIME_ERROR

    engine = build_engine(args, leaves)
    root = engine.root()
    logger.info("Computed root over %d leaves", engine.leaf_count)

    if wants_json(args):
        print(json.dumps({
            "root": to_hex(root),
            "leaf_count": engine.leaf_count,
            "depth": engine.depth,
            "hash": args.cli_config.hash.algorithm,
        }, indent=2))
    else:
        print(f"root: {to_hex(root)}")
        print(f"leaves: {engine.leaf_count}")
        print(f"depth: {engine.depth}")

    return EXIT_SUCCESS
