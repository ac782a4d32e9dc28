"""
Module 05 - Account State
Account hasher and account tree, wiring the codec, hasher and tree together.

Owner: Protocol/Crypto Engineer
Module ID: M05

Usage:
    from plasma.state import new_account_tree, pedersen_account_hasher
    from plasma.codec import AccountLeaf

    tree = new_account_tree(depth=3, hasher=pedersen_account_hasher())
    tree.insert(0, AccountLeaf(balance=100, nonce=1))
    root = tree.root_hash()
"""
from .account_hasher import (
    AccountHasher,
    account_hasher_from_config,
    check_hasher_contract,
    fast_account_hasher,
    pedersen_account_hasher,
)
from .account_tree import (
    AccountTree,
    new_account_tree,
)

__all__ = [
    "AccountHasher",
    "account_hasher_from_config",
    "check_hasher_contract",
    "fast_account_hasher",
    "pedersen_account_hasher",
    "AccountTree",
    "new_account_tree",
]
