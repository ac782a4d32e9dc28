"""
Module 04 - Merkle Proofs
Authentication paths and their verification.

Owner: Protocol/Crypto Engineer
Module ID: M04

This module provides:
- MerkleProof: leaf hash, index, sibling hashes (leaf to root) and root
- path_bits: the left/right direction bits a circuit consumes
- compute_root_from_path / verify_merkle_proof: recompute the root
- MerkleVerifier: class-based convenience wrapper

Sibling Ordering (Hard Contract, identical to the circuit):
siblings[k] is the sibling at level k (0 = leaf level). Bit k of the
index says whether the running node is a left (0) or right (1) child.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from plasma.crypto.field import Fr
from plasma.crypto.hasher import Hasher
from plasma.crypto.hashing import fr_to_hex
from plasma.schemas.errors import MerkleVerificationException


@dataclass(frozen=True)
class MerkleProof:
    """
    Membership witness for one leaf of a fixed-depth tree.

    Attributes:
        index: The leaf index
        leaf_hash: Hash of the leaf at `index`
        siblings: Sibling hashes from the leaf level up to just below the root
        root: The root this proof is against
    """
    index: int
    leaf_hash: Fr
    siblings: tuple[Fr, ...]
    root: Fr

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")
        if self.index >> len(self.siblings):
            raise ValueError(
                f"Leaf index {self.index} does not fit a path of depth {len(self.siblings)}"
            )

    @property
    def depth(self) -> int:
        return len(self.siblings)

    @property
    def bits(self) -> list[bool]:
        return path_bits(self.index, self.depth)

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "leaf_hash": fr_to_hex(self.leaf_hash),
            "siblings": [fr_to_hex(s) for s in self.siblings],
            "root": fr_to_hex(self.root),
        }


def path_bits(index: int, depth: int) -> list[bool]:
    """Direction bits leaf to root: True means the node is a right child."""
    return [bool((index >> level) & 1) for level in range(depth)]


def compute_root_from_path(
    hasher: Hasher[Any],
    leaf_hash: Fr,
    index: int,
    siblings: Sequence[Fr],
) -> Fr:
    """
    Fold a leaf hash up through its siblings.

    Args:
        hasher: Hasher providing compress()
        leaf_hash: Hash of the leaf
        index: Leaf index; its bits choose left/right at each level
        siblings: Sibling hashes, leaf level first

    Returns:
        The implied root
    """
    current = leaf_hash
    for level, sibling in enumerate(siblings):
        if (index >> level) & 1:
            current = hasher.compress(sibling, current)
        else:
            current = hasher.compress(current, sibling)
    return current


def verify_merkle_proof(proof: MerkleProof, hasher: Hasher[Any]) -> bool:
    """
    Verify a Merkle proof.

    Returns:
        True if the siblings reproduce proof.root, False otherwise
    """
    computed = compute_root_from_path(hasher, proof.leaf_hash, proof.index, proof.siblings)
    return computed == proof.root


class MerkleVerifier:
    """
    Convenience class for verifying authentication paths.

    Example:
        >>> verifier = MerkleVerifier(hasher)
        >>> verifier.verify(tree.prove(5))
        True
    """

    def __init__(self, hasher: Hasher[Any]) -> None:
        self.hasher = hasher

    def verify(self, proof: MerkleProof) -> bool:
        return verify_merkle_proof(proof, self.hasher)

    def verify_leaf_in_root(
        self,
        leaf: Any,
        index: int,
        siblings: Sequence[Fr],
        root: Fr,
    ) -> bool:
        """Hash `leaf` and check it sits at `index` under `root`."""
        leaf_hash = self.hasher.hash(leaf)
        return compute_root_from_path(self.hasher, leaf_hash, index, siblings) == root

    def require_valid(self, proof: MerkleProof) -> None:
        """
        Raises:
            MerkleVerificationException: If the proof does not verify
        """
        if not self.verify(proof):
            raise MerkleVerificationException(
                f"Authentication path for leaf {proof.index} does not match root "
                f"{fr_to_hex(proof.root)}",
                leaf_index=proof.index,
            )


__all__ = [
    "MerkleProof",
    "path_bits",
    "compute_root_from_path",
    "verify_merkle_proof",
    "MerkleVerifier",
]
