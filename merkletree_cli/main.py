"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkletree_cli root <leaf>... [--file PATH] [--hex-leaves] [--json]
    python -m merkletree_cli prove <index> <leaf>... [--file PATH] [--hex-leaves] [--json]
    python -m merkletree_cli verify --leaf L --index N --root 0x... [--sibling 0x...]...
    python -m merkletree_cli demo
    python -m merkletree_cli config --init | --show

Environment Variables:
    MERKLETREE_HASH_ALGORITHM   Hash algorithm (default: sha256)
    MERKLETREE_LOG_LEVEL        Log level (default: INFO)
    MERKLETREE_LOG_FILE         Also log to this file
    MERKLETREE_OUTPUT_FORMAT    human or json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.config.runtime import get_default_config_template
from core.crypto.hashing import available_hash_algorithms
from core.schemas.errors import MerkleException
from merkletree_cli import __version__
from merkletree_cli.commands import demo, prove, root, verify
from merkletree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    add_leaf_arguments,
    add_output_argument,
    print_error,
)
from merkletree_cli.config import load_config


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkletree",
        description="Merkle tree CLI - compute roots, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: ./merkletree.yaml or ~/.config/merkletree/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--hash",
        dest="hash_algorithm",
        type=str,
        default=None,
        help="Hash algorithm, e.g. sha256, sha3_256, blake2b (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of a list of leaves",
    )
    add_leaf_arguments(root_parser)
    add_output_argument(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for one leaf",
    )
    prove_parser.add_argument(
        "index",
        type=int,
        help="0-based index of the leaf to prove",
    )
    add_leaf_arguments(prove_parser)
    add_output_argument(prove_parser)
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof against a root",
        description="Recompute the root from a leaf, its index and sibling hashes. Exit 2 if it does not match.",
    )
    verify_parser.add_argument("--leaf", type=str, required=True, help="Leaf value")
    verify_parser.add_argument("--index", type=int, required=True, help="Claimed leaf index")
    verify_parser.add_argument("--root", type=str, required=True, help="Expected root (0x hex)")
    verify_parser.add_argument(
        "--sibling",
        type=str,
        action="append",
        default=[],
        help="Sibling hash (0x hex), leaf level first; repeat per level",
    )
    verify_parser.add_argument(
        "--hex-leaves",
        action="store_true",
        default=False,
        help="Interpret --leaf as 0x-prefixed hex bytes",
    )
    add_output_argument(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- demo command ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Run the five-transaction demonstration",
    )
    add_output_argument(demo_parser)
    demo_parser.set_defaults(func=demo.demo_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="merkletree.yaml",
        help="Path for config file (default: merkletree.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print_error(f"Config file already exists: {config_path}")
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (MERKLETREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config_dict = args.cli_config.to_dict()
        config_dict["available_hash_algorithms"] = available_hash_algorithms()
        print(json.dumps(config_dict, indent=2))
        return EXIT_SUCCESS

    print("Usage: merkletree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except (OSError, MerkleException) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.hash_algorithm:
        config.hash.algorithm = args.hash_algorithm

    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    # Attach config and hash capability to args for commands to use
    args.cli_config = config
    try:
        args.hash_fn = config.hash_function()
    except MerkleException as e:
        print_error(e.message)
        return EXIT_RUNTIME_ERROR

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (OSError, ValueError, MerkleException) as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        print_error(str(e))
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
