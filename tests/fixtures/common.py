"""
Common test fixtures shared by all modules.

Provides factory functions for core data structures:
- AccountLeaf
- CircuitConfig (small layouts for codec tests)
- SparseMerkleTree over accounts (fast or Pedersen hasher)
- CountingHasher (wraps a hasher and counts calls)
"""

from typing import Any, Optional

from plasma.codec.account import AccountLeaf
from plasma.config.runtime import CircuitConfig
from plasma.crypto.field import Fr
from plasma.crypto.hasher import Hasher
from plasma.merkle.sparse_merkle_tree import SparseMerkleTree
from plasma.state.account_hasher import AccountHasher, fast_account_hasher


# Default circuit layout used by the tests (matches production defaults)
DEFAULT_CIRCUIT = CircuitConfig()

# Narrow layout for codec tests that enumerate values
SMALL_CIRCUIT = CircuitConfig(balance_bits=8, nonce_bits=4, coord_bits=16, tree_depth=3)


def make_account(
    balance: int = 0,
    nonce: int = 0,
    pub_key_x: int = 0,
    pub_key_y: int = 0,
) -> AccountLeaf:
    """Create an AccountLeaf from plain integers."""
    return AccountLeaf(
        balance=balance,
        nonce=nonce,
        pub_key_x=pub_key_x,
        pub_key_y=pub_key_y,
    )


def make_accounts(count: int, start: int = 0) -> list[tuple[int, AccountLeaf]]:
    """Create `count` distinct (index, account) pairs at indices start..start+count-1."""
    return [
        (start + i, make_account(balance=1000 + i, nonce=i, pub_key_x=7 * i + 1, pub_key_y=11 * i + 2))
        for i in range(count)
    ]


def make_tree(
    depth: int = 3,
    hasher: Optional[AccountHasher] = None,
    items: Optional[list[tuple[int, AccountLeaf]]] = None,
) -> SparseMerkleTree[AccountLeaf]:
    """Create an account tree (fast hasher by default) and insert `items` in order."""
    tree = SparseMerkleTree(depth, hasher or fast_account_hasher(DEFAULT_CIRCUIT), AccountLeaf())
    for index, leaf in items or []:
        tree.insert(index, leaf)
    return tree


class CountingHasher(Hasher[Any]):
    """Delegating hasher that records how often each operation runs."""

    def __init__(self, inner: Hasher[Any]) -> None:
        self.inner = inner
        self.hash_calls = 0
        self.compress_calls = 0

    def hash(self, leaf: Any) -> Fr:
        self.hash_calls += 1
        return self.inner.hash(leaf)

    def compress(self, left: Fr, right: Fr) -> Fr:
        self.compress_calls += 1
        return self.inner.compress(left, right)

    def empty_hash(self) -> Fr:
        return self.inner.empty_hash()

    def reset(self) -> None:
        self.hash_calls = 0
        self.compress_calls = 0
