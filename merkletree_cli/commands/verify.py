"""
CLI Verify Command

Check an inclusion proof against an expected root. Needs no other leaves.

Usage:
    merkletree verify --leaf tx3 --index 2 --root 0x... --sibling 0x... --sibling 0x...
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from core.crypto.hashing import from_hex
from core.merkle.engine import MerkleEngine
from core.schemas.errors import ErrorCodes, MerkleError
from merkletree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    parse_leaf,
    print_error,
    wants_json,
)


logger = logging.getLogger(__name__)


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code (0 valid, 2 invalid, 1 on unparsable input)
    """
    try:
        leaf = parse_leaf(args.leaf, args.hex_leaves)
        root = from_hex(args.root)
        siblings = [from_hex(s) for s in args.sibling or []]
    except ValueError as e:
        print_error(str(e))
        return EXIT_RUNTIME_ERROR

    engine = MerkleEngine(hash_fn=args.hash_fn)
    valid = engine.verify_proof(leaf, args.index, siblings, root)
    logger.info("Proof for index %d is %s", args.index, "valid" if valid else "invalid")

    if wants_json(args):
        result = {"valid": valid, "index": args.index}
        if not valid:
            result["error"] = MerkleError(
                code=ErrorCodes.MERKLE_PROOF_INVALID,
                message="Proof does not reconstruct the expected root",
                details={"index": args.index, "proof_length": len(siblings)},
            ).model_dump()
        print(json.dumps(result, indent=2))
    else:
        print(f"Proof valid? {str(valid).lower()}")

    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
