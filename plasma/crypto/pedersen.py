"""
Module 02 - Pedersen Hash
Windowed Pedersen hash over Baby Jubjub, matching the circuit gadget.

Owner: Protocol/Crypto Engineer
Module ID: M02

Canonical Hash Rules (Hard Contracts):
1. Input = personalization prefix bits || message bits
2. Pad with zero bits to a multiple of 3
3. Each 3-bit chunk (s0, s1, s2) maps to (1 + s0 + 2*s1) * (1 - 2*s2)
4. Chunks are grouped 63 per segment; segment i uses generator G_i
   and scalar sum_j enc_j * 2^(4j)
5. Result point = sum_i scalar_i * G_i; output its x coordinate

Generator Derivation:
G_i for a personalization is found by try-and-increment over
sha256(GENERATOR_DOMAIN || tag || i || counter), read as a y coordinate,
lifted onto the curve and cleared of the cofactor. Nobody knows the
discrete logs between generators, which is what makes the hash
collision resistant.
"""
from __future__ import annotations

import logging
import threading
from typing import Iterator, Sequence

from plasma.crypto.babyjubjub import SUBGROUP_ORDER, Point
from plasma.crypto.field import FR_MODULUS, Fr
from plasma.crypto.hasher import BitHasher, Personalization
from plasma.crypto.hashing import sha256

logger = logging.getLogger(__name__)


GENERATOR_DOMAIN = b"plasma_pedersen"

CHUNK_BITS = 3
CHUNKS_PER_GENERATOR = 63


def find_group_hash(tag: bytes, index: int) -> Point:
    """
    Derive the generator for segment `index` of personalization `tag`.

    Returns:
        A point of prime order l
    """
    counter = 0
    while True:
        digest = sha256(
            GENERATOR_DOMAIN
            + tag
            + index.to_bytes(4, "little")
            + counter.to_bytes(4, "little")
        )
        y = Fr(int.from_bytes(digest, "little") % FR_MODULUS)
        point = Point.from_y(y)
        if point is not None:
            point = point.mul_by_cofactor()
            if not point.is_identity():
                return point
        counter += 1


def segment_scalars(bits: Sequence[bool]) -> Iterator[int]:
    """
    Yield one scalar per segment of 63 three-bit chunks.

    Each encoded chunk is nonzero and in [-4, 4], and successive chunks
    are 4 bits apart, so |scalar| < l/2 and distinct segments of the same
    length always give distinct scalars.
    """
    padded = list(bits)
    remainder = len(padded) % CHUNK_BITS
    if remainder:
        padded.extend([False] * (CHUNK_BITS - remainder))

    segment_bits = CHUNK_BITS * CHUNKS_PER_GENERATOR
    for start in range(0, len(padded), segment_bits):
        segment = padded[start:start + segment_bits]
        acc = 0
        shift = 0
        for c in range(0, len(segment), CHUNK_BITS):
            s0, s1, s2 = segment[c], segment[c + 1], segment[c + 2]
            enc = 1 + int(s0) + 2 * int(s1)
            if s2:
                enc = -enc
            acc += enc << shift
            shift += 4
        yield acc % SUBGROUP_ORDER


class PedersenHasher(BitHasher):
    """
    Pedersen bit hasher with per-instance memoized generators.

    Generators are derived lazily per personalization and cached for
    the lifetime of the instance. The cache is filled under a lock, so
    one instance can be shared between threads.
    """

    name = "pedersen"

    def __init__(self) -> None:
        self._generators: dict[Personalization, list[Point]] = {}
        self._lock = threading.Lock()

    def generators(self, personalization: Personalization, count: int) -> list[Point]:
        """Return the first `count` generators for `personalization`."""
        with self._lock:
            cached = self._generators.setdefault(personalization, [])
            while len(cached) < count:
                index = len(cached)
                cached.append(find_group_hash(personalization.tag, index))
                logger.debug(
                    f"Derived Pedersen generator {index} for {personalization.value}"
                )
            return cached[:count]

    def hash_to_point(self, personalization: Personalization, bits: Sequence[bool]) -> Point:
        prefixed = personalization.prefix_bits() + list(bits)
        scalars = list(segment_scalars(prefixed))
        generators = self.generators(personalization, len(scalars))

        result = Point.identity()
        for scalar, generator in zip(scalars, generators):
            result = result + generator * scalar
        return result

    def hash_bits(self, personalization: Personalization, bits: Sequence[bool]) -> Fr:
        return self.hash_to_point(personalization, bits).x

    def __repr__(self) -> str:
        return "PedersenHasher()"


__all__ = [
    "GENERATOR_DOMAIN",
    "CHUNK_BITS",
    "CHUNKS_PER_GENERATOR",
    "find_group_hash",
    "segment_scalars",
    "PedersenHasher",
]
