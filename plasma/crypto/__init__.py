"""
Core cryptographic primitives.

Module 02 provides the field element type, the Baby Jubjub curve,
the hasher capability interfaces and the two bit-hash backends.
"""
from .field import (
    Fr,
    FR_BITS,
    FR_MODULUS,
    fr_to_bits_le,
    fr_from_bits_le,
    fr_to_bytes_le,
    fr_from_bytes_le,
    fr_sqrt,
)
from .hasher import (
    BitHasher,
    Hasher,
    Personalization,
)
from .hashing import (
    sha256,
    to_hex,
    from_hex,
    fr_to_hex,
    fr_from_hex,
    Sha256BitHasher,
)
from .babyjubjub import Point
from .pedersen import PedersenHasher

__all__ = [
    # Field
    "Fr",
    "FR_BITS",
    "FR_MODULUS",
    "fr_to_bits_le",
    "fr_from_bits_le",
    "fr_to_bytes_le",
    "fr_from_bytes_le",
    "fr_sqrt",
    # Hasher capability
    "BitHasher",
    "Hasher",
    "Personalization",
    # Hashing
    "sha256",
    "to_hex",
    "from_hex",
    "fr_to_hex",
    "fr_from_hex",
    "Sha256BitHasher",
    # Curve / Pedersen
    "Point",
    "PedersenHasher",
]
