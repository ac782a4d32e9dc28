"""
Module 04 - Sparse Merkle Tree and Authentication Paths

Owner: Protocol/Crypto Engineer
Module ID: M04

This module provides:
- SparseMerkleTree: fixed-depth tree generic over a Hasher
- MerkleProof: authentication path for one leaf
- compute_root_from_path / verify_merkle_proof: recompute a root off-tree

Canonical Commitment Rules:
1. Leaf hash: hasher.hash(leaf)
2. Parent hash: hasher.compress(left, right), left = even position
3. Unwritten index: default leaf, with precomputed empty-subtree hashes
4. Empty tree: empty[depth]
5. Depth 0: root = leaf hash

Usage:
    from plasma.merkle import SparseMerkleTree, verify_merkle_proof

    tree = SparseMerkleTree(depth=3, hasher=hasher, default_leaf=AccountLeaf())
    tree.insert(2, AccountLeaf(balance=5))
    proof = tree.prove(2)
    assert verify_merkle_proof(proof, hasher)
"""
from .merkle_proofs import (
    MerkleProof,
    MerkleVerifier,
    compute_root_from_path,
    path_bits,
    verify_merkle_proof,
)
from .sparse_merkle_tree import (
    SparseMerkleTree,
    compute_empty_hashes,
)

__all__ = [
    "SparseMerkleTree",
    "compute_empty_hashes",
    "MerkleProof",
    "MerkleVerifier",
    "compute_root_from_path",
    "path_bits",
    "verify_merkle_proof",
]
