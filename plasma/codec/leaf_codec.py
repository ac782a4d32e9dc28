"""
Module 03 - Leaf Codec
Canonical bit encoding of an account leaf, as consumed by the hasher.

Owner: Protocol/Crypto Engineer
Module ID: M03

Canonical Encoding Rules (Hard Contracts, shared with the circuit):
1. Field order: balance || nonce || pub_key_x || pub_key_y
2. Widths: BALANCE_BITS, NONCE_BITS, COORD_BITS, COORD_BITS
3. Each field is little-endian and zero-padded on the high side
4. A value wider than its declared width is rejected before hashing

Changing the order or any width changes every leaf hash and breaks
provability; the circuit must be changed in the same release.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from plasma.codec.account import AccountLeaf
from plasma.config.runtime import CircuitConfig, get_default_config
from plasma.crypto.field import fr_from_bits_le, fr_to_bits_le
from plasma.schemas.errors import DecodingException


# Order in which the circuit gadget concatenates the leaf fields
ACCOUNT_FIELD_ORDER: tuple[str, ...] = ("balance", "nonce", "pub_key_x", "pub_key_y")


@dataclass(frozen=True)
class AccountBitLayout:
    """
    Ordered (field name, width) pairs describing an encoded leaf.

    Attributes:
        fields: One entry per field in ACCOUNT_FIELD_ORDER
    """
    fields: tuple[tuple[str, int], ...]

    def __post_init__(self) -> None:
        names = tuple(name for name, _ in self.fields)
        if names != ACCOUNT_FIELD_ORDER:
            raise ValueError(
                f"Layout fields must be {ACCOUNT_FIELD_ORDER}, got {names}"
            )

    @classmethod
    def from_config(cls, config: CircuitConfig) -> "AccountBitLayout":
        return cls(
            fields=(
                ("balance", config.balance_bits),
                ("nonce", config.nonce_bits),
                ("pub_key_x", config.coord_bits),
                ("pub_key_y", config.coord_bits),
            )
        )

    @property
    def total_bits(self) -> int:
        return sum(width for _, width in self.fields)

    def width_of(self, field_name: str) -> int:
        for name, width in self.fields:
            if name == field_name:
                return width
        raise KeyError(field_name)

    def offsets(self) -> dict[str, tuple[int, int]]:
        """Map each field to its [start, end) bit range."""
        result: dict[str, tuple[int, int]] = {}
        start = 0
        for name, width in self.fields:
            result[name] = (start, start + width)
            start += width
        return result


def default_layout() -> AccountBitLayout:
    """Layout derived from the process-wide default configuration."""
    return AccountBitLayout.from_config(get_default_config().circuit)


def encode_account(leaf: AccountLeaf, layout: AccountBitLayout | None = None) -> list[bool]:
    """
    Encode an account leaf into its canonical bit sequence.

    Args:
        leaf: Account to encode
        layout: Field widths (defaults to the configured circuit layout)

    Returns:
        layout.total_bits booleans

    Raises:
        EncodingOverflowException: Naming the first field that does not fit
    """
    layout = layout or default_layout()
    bits: list[bool] = []
    for name, width in layout.fields:
        bits.extend(fr_to_bits_le(getattr(leaf, name), width, label=name))
    return bits


def decode_account(bits: Sequence[bool], layout: AccountBitLayout | None = None) -> AccountLeaf:
    """
    Decode a canonical bit sequence back into an account leaf.

    Only used for testing and debugging; hashing never needs it.

    Raises:
        DecodingException: If the length does not match the layout
    """
    layout = layout or default_layout()
    if len(bits) != layout.total_bits:
        raise DecodingException(
            f"Expected {layout.total_bits} bits for an account leaf, got {len(bits)}",
            details={"expected": layout.total_bits, "actual": len(bits)},
        )
    values = {
        name: fr_from_bits_le(bits[start:end])
        for name, (start, end) in layout.offsets().items()
    }
    return AccountLeaf(**values)


__all__ = [
    "ACCOUNT_FIELD_ORDER",
    "AccountBitLayout",
    "default_layout",
    "encode_account",
    "decode_account",
]
