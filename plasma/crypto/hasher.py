"""
Module 02 - Hasher Capability
Abstract interfaces the Merkle tree is generic over.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- Personalization: domain-separation tags for leaf vs. internal-node hashing
- BitHasher: backend that hashes a tagged bit string to a field element
- Hasher: leaf/compress/empty-hash capability consumed by SparseMerkleTree

Contract (Hard Rules):
1. hash() and compress() are pure and deterministic across processes
2. hash() and compress() use different personalizations
3. empty_hash() equals hash(default leaf); it may be memoized
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, Sequence, TypeVar

from plasma.crypto.field import Fr


T = TypeVar("T")

# Width of the personalization prefix prepended to every hashed bit string
PERSONALIZATION_BITS = 6


class Personalization(Enum):
    """
    Domain-separation tags.

    The tag bytes select the generator points, and the prefix bits are
    prepended to the hashed message. LEAF uses the all-ones prefix and
    NODE the all-zeros prefix, so the two can never coincide.
    """

    LEAF = "NoteCommitment"
    NODE = "MerkleTree"

    @property
    def tag(self) -> bytes:
        return self.value.encode("ascii")

    def prefix_bits(self) -> list[bool]:
        if self is Personalization.LEAF:
            return [True] * PERSONALIZATION_BITS
        return [False] * PERSONALIZATION_BITS


class BitHasher(ABC):
    """Hashes a personalized bit string into a single field element."""

    name: str = "abstract"

    @abstractmethod
    def hash_bits(self, personalization: Personalization, bits: Sequence[bool]) -> Fr:
        """Hash `bits` under `personalization`."""


class Hasher(ABC, Generic[T]):
    """
    Leaf and node hashing capability.

    Implementations must be safe to share read-only between trees and
    threads; apart from memoized constants they hold no state.
    """

    @abstractmethod
    def hash(self, leaf: T) -> Fr:
        """Hash a leaf value into its commitment."""

    @abstractmethod
    def compress(self, left: Fr, right: Fr) -> Fr:
        """Combine two child hashes into their parent hash."""

    @abstractmethod
    def empty_hash(self) -> Fr:
        """Hash of the default leaf."""


__all__ = [
    "PERSONALIZATION_BITS",
    "Personalization",
    "BitHasher",
    "Hasher",
]
