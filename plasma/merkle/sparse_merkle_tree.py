"""
Module 04 - Sparse Merkle Tree
Fixed-depth indexed tree that only stores explicitly written leaves.

Owner: Protocol/Crypto Engineer
Module ID: M04

Storage Model:
- leaves: index -> leaf, for every index ever written
- nodes: (level, position) -> hash, for every node whose subtree holds at
  least one written leaf. Level 0 holds leaf hashes, level `depth` the root.
- empty hashes: one constant per level for subtrees that hold only the
  default leaf. empty[0] = hash(default), empty[k] = compress(empty[k-1], empty[k-1])

Invariant: every cached node equals the hash of its subtree under the
current leaf set. insert() re-establishes it along the single path it
touches, so the root depends only on the final (index, leaf) set, never
on insertion order or on values that were later overwritten.

Concurrency: single writer. insert() mutates the node cache, so it must
not overlap with any other call on the same instance. Readers on other
threads should work on a snapshot().
"""
from __future__ import annotations

import logging
from typing import Generic, Iterator, TypeVar

from plasma.crypto.field import Fr
from plasma.crypto.hasher import Hasher
from plasma.merkle.merkle_proofs import MerkleProof
from plasma.schemas.errors import IndexOutOfRangeException, InvalidDepthException

logger = logging.getLogger(__name__)

T = TypeVar("T")


def compute_empty_hashes(hasher: Hasher[T], depth: int) -> tuple[Fr, ...]:
    """
    Hashes of all-default subtrees for levels 0..depth.

    Costs exactly `depth` compress calls plus one empty_hash call.
    """
    empties = [hasher.empty_hash()]
    for _ in range(depth):
        empties.append(hasher.compress(empties[-1], empties[-1]))
    return tuple(empties)


class SparseMerkleTree(Generic[T]):
    """
    Sparse Merkle tree over the index domain [0, 2^depth).

    Example:
        >>> tree = SparseMerkleTree(3, hasher, AccountLeaf())
        >>> tree.insert(0, AccountLeaf(nonce=1))
        >>> path = tree.authentication_path(0)
        >>> len(path)
        3
    """

    def __init__(self, depth: int, hasher: Hasher[T], default_leaf: T) -> None:
        """
        Args:
            depth: Number of levels below the root; 0 gives a single leaf
            hasher: Shared, read-only hasher
            default_leaf: Value of every index never written

        Raises:
            InvalidDepthException: If depth is negative
        """
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 0:
            raise InvalidDepthException(depth)

        self.depth = depth
        self.hasher = hasher
        self.default_leaf = default_leaf

        self._leaves: dict[int, T] = {}
        self._nodes: dict[tuple[int, int], Fr] = {}
        self._empty = compute_empty_hashes(hasher, depth)

        logger.debug(f"Precomputed {depth + 1} empty-subtree hashes for depth {depth}")

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return 1 << self.depth

    @property
    def empty_hashes(self) -> tuple[Fr, ...]:
        return self._empty

    def __len__(self) -> int:
        return len(self._leaves)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(depth={self.depth}, "
            f"leaves={len(self._leaves)}, hasher={self.hasher!r})"
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Leaf index must be an int, got {type(index).__name__}")
        if index < 0 or index >= self.capacity:
            raise IndexOutOfRangeException(index=index, depth=self.depth)

    def _node(self, level: int, position: int) -> Fr:
        """Cached hash for a non-empty subtree, else the empty constant."""
        return self._nodes.get((level, position), self._empty[level])

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def insert(self, index: int, leaf: T) -> None:
        """
        Write `leaf` at `index` and rehash the path to the root.

        Overwrites any previous value. O(depth) compress calls.

        Raises:
            IndexOutOfRangeException: If index is outside [0, 2^depth)
            EncodingOverflowException: If the hasher rejects the leaf; the
                tree is left unchanged
        """
        self._check_index(index)

        # Hash first so a rejected leaf leaves no partial state behind
        current = self.hasher.hash(leaf)

        self._leaves[index] = leaf
        position = index
        self._nodes[(0, position)] = current

        for level in range(self.depth):
            sibling = self._node(level, position ^ 1)
            if position & 1:
                current = self.hasher.compress(sibling, current)
            else:
                current = self.hasher.compress(current, sibling)
            position >>= 1
            self._nodes[(level + 1, position)] = current

        logger.debug(f"Inserted leaf at index {index}")

    def get(self, index: int) -> T:
        """
        Raises:
            IndexOutOfRangeException: If index is outside [0, 2^depth)
        """
        self._check_index(index)
        return self._leaves.get(index, self.default_leaf)

    def root_hash(self) -> Fr:
        """Current root; the empty-tree root until something is inserted."""
        return self._node(self.depth, 0)

    def leaf_hash(self, index: int) -> Fr:
        self._check_index(index)
        return self._node(0, index)

    def authentication_path(self, index: int) -> list[Fr]:
        """
        Sibling hashes from the leaf level up to just below the root.

        Raises:
            IndexOutOfRangeException: If index is outside [0, 2^depth)
        """
        self._check_index(index)
        path: list[Fr] = []
        position = index
        for level in range(self.depth):
            path.append(self._node(level, position ^ 1))
            position >>= 1
        return path

    def prove(self, index: int) -> MerkleProof:
        """Membership witness for `index` against the current root."""
        siblings = self.authentication_path(index)
        return MerkleProof(
            index=index,
            leaf_hash=self._node(0, index),
            siblings=tuple(siblings),
            root=self.root_hash(),
        )

    def items(self) -> Iterator[tuple[int, T]]:
        """Explicitly written (index, leaf) pairs in index order."""
        for index in sorted(self._leaves):
            yield index, self._leaves[index]

    def snapshot(self) -> "SparseMerkleTree[T]":
        """
        Independent copy sharing the hasher and empty-hash table.

        Later inserts on either tree are invisible to the other.
        """
        clone = self.__class__.__new__(self.__class__)
        clone.depth = self.depth
        clone.hasher = self.hasher
        clone.default_leaf = self.default_leaf
        clone._leaves = dict(self._leaves)
        clone._nodes = dict(self._nodes)
        clone._empty = self._empty
        return clone


__all__ = [
    "compute_empty_hashes",
    "SparseMerkleTree",
]
