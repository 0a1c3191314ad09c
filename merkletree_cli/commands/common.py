"""
Shared helpers for CLI commands: leaf input, engine construction, output mode.
"""

from __future__ import annotations

import argparse
import sys
from argparse import Namespace
from pathlib import Path

from core.crypto.hashing import from_hex
from core.merkle.engine import MerkleEngine


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def add_output_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=None,
        help="Output machine-readable JSON (default: from config)",
    )


def add_leaf_arguments(parser: argparse.ArgumentParser) -> None:
    """Positional leaves plus --file / --hex-leaves."""
    parser.add_argument(
        "leaves",
        nargs="*",
        type=str,
        help="Leaf values, in order (UTF-8 text unless --hex-leaves)",
    )
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Read additional leaves from a file, one per line (appended after positional leaves)",
    )
    parser.add_argument(
        "--hex-leaves",
        action="store_true",
        default=False,
        help="Interpret every leaf as 0x-prefixed hex bytes",
    )


def parse_leaf(value: str, hex_leaves: bool = False) -> bytes:
    """Leaf bytes for a command-line value."""
    if hex_leaves:
        return from_hex(value)
    return value.encode("utf-8")


def read_leaves(args: Namespace) -> list[bytes]:
    """
    Collect leaves from positional arguments, then from --file.

    File lines keep their content verbatim apart from the line terminator.
    """
    values: list[str] = list(args.leaves or [])

    if args.file:
        path = Path(args.file)
        if not path.exists():
            raise FileNotFoundError(f"Leaf file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            values.extend(line.rstrip("\r\n") for line in f)

    return [parse_leaf(v, args.hex_leaves) for v in values]


def build_engine(args: Namespace, leaves: list[bytes]) -> MerkleEngine:
    engine = MerkleEngine(hash_fn=args.hash_fn)
    engine.extend(leaves)
    return engine


def wants_json(args: Namespace) -> bool:
    """--json on the command line, otherwise the configured output format."""
    if getattr(args, "json", None):
        return True
    config = getattr(args, "cli_config", None)
    return config is not None and config.output.format == "json"


def print_error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
