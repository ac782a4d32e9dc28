"""
Module 05 - Account Tree
The account state tree: SparseMerkleTree specialised to AccountLeaf.

Owner: Protocol/Crypto Engineer
Module ID: M05
"""
from __future__ import annotations

import logging
from typing import Optional

from plasma.codec.account import AccountLeaf
from plasma.config.runtime import RuntimeConfig, get_default_config
from plasma.merkle.sparse_merkle_tree import SparseMerkleTree
from plasma.state.account_hasher import AccountHasher, account_hasher_from_config

logger = logging.getLogger(__name__)


AccountTree = SparseMerkleTree[AccountLeaf]


def new_account_tree(
    depth: Optional[int] = None,
    hasher: Optional[AccountHasher] = None,
    config: Optional[RuntimeConfig] = None,
) -> SparseMerkleTree[AccountLeaf]:
    """
    Create an empty account tree.

    Args:
        depth: Tree depth (defaults to config.circuit.tree_depth)
        hasher: Hasher to share (defaults to the configured backend)
        config: Runtime configuration (defaults to get_default_config())

    Returns:
        Empty tree whose unwritten leaves are AccountLeaf()
    """
    config = config or get_default_config()
    if depth is None:
        depth = config.circuit.tree_depth
    if hasher is None:
        hasher = account_hasher_from_config(config)

    logger.info(f"Creating account tree of depth {depth} with {hasher!r}")
    return SparseMerkleTree(depth, hasher, AccountLeaf())


__all__ = [
    "AccountTree",
    "new_account_tree",
]
