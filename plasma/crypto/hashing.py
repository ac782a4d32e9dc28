"""
Module 02 - Hashing Utilities
SHA-256 helpers, hex encoding for field elements, and the fast bit hasher.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- SHA-256 hashing for raw bytes
- Hex encoding/decoding with 0x prefix (bytes and field elements)
- Sha256BitHasher: a cheap BitHasher for tests and tooling

Sha256BitHasher is NOT circuit compatible. Roots it produces are only
comparable with roots from the same backend.
"""
from __future__ import annotations

import hashlib
from typing import Sequence

from plasma.crypto.field import FR_MODULUS, Fr, fr_from_bytes_le, fr_to_bytes_le
from plasma.crypto.hasher import BitHasher, Personalization


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def fr_to_hex(value: Fr) -> str:
    """Big-endian 0x-prefixed hex of a field element (64 hex digits)."""
    return to_hex(fr_to_bytes_le(value)[::-1])


def fr_from_hex(hex_string: str) -> Fr:
    """Inverse of fr_to_hex()."""
    return fr_from_bytes_le(from_hex(hex_string)[::-1])


def pack_bits_le(bits: Sequence[bool]) -> bytes:
    """Pack bits little-endian into bytes, prefixed by the bit count."""
    n = 0
    for i, bit in enumerate(bits):
        if bit:
            n |= 1 << i
    body = n.to_bytes((len(bits) + 7) // 8, "little")
    return len(bits).to_bytes(4, "little") + body


class Sha256BitHasher(BitHasher):
    """
    SHA-256 backend: field element = sha256(tag || 0x00 || packed bits) mod r.

    Roughly three orders of magnitude faster than Pedersen, which makes
    it the backend of choice for tree-algorithm tests.
    """

    name = "sha256"

    def hash_bits(self, personalization: Personalization, bits: Sequence[bool]) -> Fr:
        prefixed = personalization.prefix_bits() + list(bits)
        digest = sha256(personalization.tag + b"\x00" + pack_bits_le(prefixed))
        return Fr(int.from_bytes(digest, "little") % FR_MODULUS)

    def __repr__(self) -> str:
        return "Sha256BitHasher()"


__all__ = [
    "sha256",
    "to_hex",
    "from_hex",
    "fr_to_hex",
    "fr_from_hex",
    "pack_bits_le",
    "Sha256BitHasher",
]
