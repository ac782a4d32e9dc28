"""
Module 05 - Account Hasher
Hasher[AccountLeaf] built from the leaf codec and a bit-hash backend.

Owner: Protocol/Crypto Engineer
Module ID: M05

Hash Rules (Hard Contracts):
1. hash(leaf) = backend(LEAF, encode_account(leaf))
2. compress(l, r) = backend(NODE, bits(l, FR_BITS) || bits(r, FR_BITS))
3. empty_hash() = hash(AccountLeaf()), memoized per instance

The production backend is Pedersen over Baby Jubjub; the sha256 backend
exists so tree tests run fast. Roots from different backends are
unrelated.
"""
from __future__ import annotations

import logging
from typing import Optional

from plasma.codec.account import AccountLeaf
from plasma.codec.leaf_codec import AccountBitLayout, decode_account, encode_account
from plasma.config.runtime import CircuitConfig, RuntimeConfig, get_default_config
from plasma.crypto.field import FR_BITS, FR_MODULUS, Fr, fr_to_bits_le
from plasma.crypto.hasher import BitHasher, Hasher, Personalization
from plasma.crypto.hashing import Sha256BitHasher
from plasma.crypto.pedersen import PedersenHasher
from plasma.schemas.errors import EncodingOverflowException, HasherContractException

logger = logging.getLogger(__name__)


class AccountHasher(Hasher[AccountLeaf]):
    """Leaf and node hashing for the account tree."""

    def __init__(self, backend: BitHasher, layout: AccountBitLayout) -> None:
        self.backend = backend
        self.layout = layout
        self._empty_hash: Optional[Fr] = None

    def encode(self, leaf: AccountLeaf) -> list[bool]:
        return encode_account(leaf, self.layout)

    def hash(self, leaf: AccountLeaf) -> Fr:
        return self.backend.hash_bits(Personalization.LEAF, self.encode(leaf))

    def compress(self, left: Fr, right: Fr) -> Fr:
        bits = fr_to_bits_le(left, FR_BITS, label="left") + fr_to_bits_le(right, FR_BITS, label="right")
        return self.backend.hash_bits(Personalization.NODE, bits)

    def empty_hash(self) -> Fr:
        if self._empty_hash is None:
            self._empty_hash = self.hash(AccountLeaf())
        return self._empty_hash

    def __repr__(self) -> str:
        return f"AccountHasher(backend={self.backend.name}, leaf_bits={self.layout.total_bits})"


def _circuit(config: CircuitConfig | RuntimeConfig | None) -> CircuitConfig:
    if config is None:
        return get_default_config().circuit
    if isinstance(config, RuntimeConfig):
        return config.circuit
    return config


def pedersen_account_hasher(config: CircuitConfig | RuntimeConfig | None = None) -> AccountHasher:
    """Production hasher: Pedersen over Baby Jubjub, circuit compatible."""
    return AccountHasher(PedersenHasher(), AccountBitLayout.from_config(_circuit(config)))


def fast_account_hasher(config: CircuitConfig | RuntimeConfig | None = None) -> AccountHasher:
    """Test hasher: same codec and tags, sha256 backend."""
    return AccountHasher(Sha256BitHasher(), AccountBitLayout.from_config(_circuit(config)))


def account_hasher_from_config(config: RuntimeConfig | None = None) -> AccountHasher:
    """Pick the backend named by config.hasher.backend."""
    config = config or get_default_config()
    if config.hasher.backend == "sha256":
        return fast_account_hasher(config)
    return pedersen_account_hasher(config)


def check_hasher_contract(hasher: AccountHasher) -> None:
    """
    Check that a hasher agrees with its codec layout.

    Checks:
    1. Default and maximal leaves survive an encode/decode round trip
       at exactly layout.total_bits bits
    2. A value one bit wider than its field is rejected
    3. empty_hash() equals a direct hash of the default leaf
    4. Leaf and node hashing are domain separated on identical bits

    Raises:
        HasherContractException: Naming the failed check
    """
    layout = hasher.layout

    widest = AccountLeaf(**{
        name: min((1 << width) - 1, FR_MODULUS - 1) for name, width in layout.fields
    })
    for sample in (AccountLeaf(), widest):
        bits = hasher.encode(sample)
        if len(bits) != layout.total_bits:
            raise HasherContractException(
                f"Encoded leaf has {len(bits)} bits, layout declares {layout.total_bits}",
                check="encoded_width",
            )
        if decode_account(bits, layout) != sample:
            raise HasherContractException(
                "Leaf does not survive an encode/decode round trip",
                check="round_trip",
            )

    for name, width in layout.fields:
        if width >= FR_BITS:
            continue
        try:
            hasher.encode(AccountLeaf(**{name: 1 << width}))
        except EncodingOverflowException:
            continue
        raise HasherContractException(
            f"Field '{name}' accepted a value wider than {width} bits",
            check="overflow",
        )

    if hasher.empty_hash() != hasher.hash(AccountLeaf()):
        raise HasherContractException(
            "empty_hash() differs from hash(default leaf)",
            check="empty_hash",
        )

    probe = [False] * (2 * FR_BITS)
    if hasher.backend.hash_bits(Personalization.LEAF, probe) == hasher.backend.hash_bits(
        Personalization.NODE, probe
    ):
        raise HasherContractException(
            "Leaf and node personalizations collide on identical input",
            check="domain_separation",
        )

    logger.debug(f"Hasher contract holds for {hasher!r}")


__all__ = [
    "AccountHasher",
    "pedersen_account_hasher",
    "fast_account_hasher",
    "account_hasher_from_config",
    "check_hasher_contract",
]
