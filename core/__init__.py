"""
Core Merkle commitment library: hashing, tree engine, errors and configuration.
"""
