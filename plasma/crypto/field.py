"""
Module 02 - Field Element Adapter
Scalar field of the BN254 curve, which is also the base field of Baby Jubjub.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- Fr: immutable field element type (py_ecc FQ with the BN254 group order)
- Exact little-endian bit encoding to a caller-specified width
- Bit decoding back to a field element
- Square roots (Tonelli-Shanks), used to lift hash outputs onto the curve

Encoding Rules (Hard Contracts):
1. Bits are little-endian: bits[0] is the least significant bit
2. Output is zero-padded on the high side to exactly `width` bits
3. A value needing more than `width` bits is rejected, never truncated
"""
from __future__ import annotations

from typing import Sequence

from py_ecc.bn128 import curve_order
from py_ecc.fields.field_elements import FQ

from plasma.schemas.errors import DecodingException, EncodingOverflowException


class Fr(FQ):
    """Element of the BN254 scalar field."""

    field_modulus = curve_order

    def __hash__(self) -> int:
        return hash(self.n)


# Modulus of Fr
FR_MODULUS: int = curve_order

# Natural width of a canonical Fr encoding (254 for BN254)
FR_BITS: int = FR_MODULUS.bit_length()


def fr_to_bits_le(value: Fr, width: int, label: str = "value") -> list[bool]:
    """
    Encode a field element as exactly `width` little-endian bits.

    Args:
        value: Field element to encode
        width: Number of output bits
        label: Name reported in the overflow error

    Returns:
        List of `width` booleans, least significant bit first

    Raises:
        EncodingOverflowException: If the value needs more than `width` bits

    Example:
        >>> fr_to_bits_le(Fr(6), 4)
        [False, True, True, False]
    """
    n = value.n
    bit_length = n.bit_length()
    if bit_length > width:
        raise EncodingOverflowException(
            field_name=label,
            width=width,
            bit_length=bit_length,
        )
    return [bool((n >> i) & 1) for i in range(width)]


def fr_from_bits_le(bits: Sequence[bool]) -> Fr:
    """
    Decode little-endian bits into a field element.

    Raises:
        DecodingException: If the bits describe an integer >= the modulus
    """
    n = 0
    for i, bit in enumerate(bits):
        if bit:
            n |= 1 << i
    if n >= FR_MODULUS:
        raise DecodingException(
            f"Decoded integer is not a canonical field element ({len(bits)} bits)",
            details={"bit_count": len(bits)},
        )
    return Fr(n)


def fr_to_bytes_le(value: Fr) -> bytes:
    """Canonical 32-byte little-endian serialization."""
    return value.n.to_bytes(32, "little")


def fr_from_bytes_le(data: bytes) -> Fr:
    """
    Inverse of fr_to_bytes_le().

    Raises:
        DecodingException: On wrong length or a non-canonical value
    """
    if len(data) != 32:
        raise DecodingException(
            f"Field element encoding must be 32 bytes, got {len(data)}",
            details={"length": len(data)},
        )
    n = int.from_bytes(data, "little")
    if n >= FR_MODULUS:
        raise DecodingException("Field element encoding is not canonical")
    return Fr(n)


def _find_non_residue(p: int) -> int:
    z = 2
    while pow(z, (p - 1) // 2, p) != p - 1:
        z += 1
    return z


# p - 1 = q * 2^s with q odd
_TS_S = ((FR_MODULUS - 1) & -(FR_MODULUS - 1)).bit_length() - 1
_TS_Q = (FR_MODULUS - 1) >> _TS_S
_TS_Z = _find_non_residue(FR_MODULUS)


def fr_is_square(value: Fr) -> bool:
    """Euler's criterion. Zero counts as a square."""
    if value.n == 0:
        return True
    return pow(value.n, (FR_MODULUS - 1) // 2, FR_MODULUS) == 1


def fr_sqrt(value: Fr) -> Fr | None:
    """
    Compute a square root in Fr with Tonelli-Shanks.

    Returns:
        One of the two roots, or None if `value` is not a square
    """
    p = FR_MODULUS
    n = value.n
    if n == 0:
        return Fr(0)
    if not fr_is_square(value):
        return None

    m = _TS_S
    c = pow(_TS_Z, _TS_Q, p)
    t = pow(n, _TS_Q, p)
    r = pow(n, (_TS_Q + 1) // 2, p)

    while t != 1:
        # Least i with t^(2^i) == 1
        i = 0
        t2 = t
        while t2 != 1:
            t2 = t2 * t2 % p
            i += 1
        b = pow(c, 1 << (m - i - 1), p)
        m = i
        c = b * b % p
        t = t * c % p
        r = r * b % p

    return Fr(r)


__all__ = [
    "Fr",
    "FR_MODULUS",
    "FR_BITS",
    "fr_to_bits_le",
    "fr_from_bits_le",
    "fr_to_bytes_le",
    "fr_from_bytes_le",
    "fr_is_square",
    "fr_sqrt",
]
