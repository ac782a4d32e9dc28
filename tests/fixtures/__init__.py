"""
Test fixtures package for the account tree tests.

This package provides factory functions for creating test objects:
- common.py: accounts, trees, circuit layouts, counting hasher

Usage:
    from fixtures import make_account, make_tree

    def test_something():
        tree = make_tree(depth=3, items=[(0, make_account(nonce=1))])
"""

from .common import (
    DEFAULT_CIRCUIT,
    SMALL_CIRCUIT,
    CountingHasher,
    make_account,
    make_accounts,
    make_tree,
)

__all__ = [
    "DEFAULT_CIRCUIT",
    "SMALL_CIRCUIT",
    "CountingHasher",
    "make_account",
    "make_accounts",
    "make_tree",
]
