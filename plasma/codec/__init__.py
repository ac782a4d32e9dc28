"""
Module 03 - Leaf Codec
Account record plus its canonical bit encoding.

Owner: Protocol/Crypto Engineer
Module ID: M03

Usage:
    from plasma.codec import AccountLeaf, AccountBitLayout, encode_account
    from plasma.config import CircuitConfig

    layout = AccountBitLayout.from_config(CircuitConfig())
    bits = encode_account(AccountLeaf(balance=10, nonce=1), layout)
    assert len(bits) == layout.total_bits
"""
from .account import AccountLeaf
from .leaf_codec import (
    ACCOUNT_FIELD_ORDER,
    AccountBitLayout,
    default_layout,
    encode_account,
    decode_account,
)

__all__ = [
    "AccountLeaf",
    "ACCOUNT_FIELD_ORDER",
    "AccountBitLayout",
    "default_layout",
    "encode_account",
    "decode_account",
]
