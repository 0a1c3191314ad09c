"""
Merkle Tree CLI

Command-line interface for building Merkle trees and checking inclusion proofs.

Usage:
    python -m merkletree_cli root tx1 tx2 tx3
    python -m merkletree_cli prove 2 tx1 tx2 tx3
    python -m merkletree_cli verify --leaf tx3 --index 2 --root 0x... --sibling 0x...
    python -m merkletree_cli demo
"""

__version__ = "0.1.0"
