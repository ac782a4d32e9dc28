"""
Module 02 - Hashing Unit Tests
Tests for plasma/crypto/hashing.py and plasma/crypto/hasher.py

Tests:
- sha256 stability
- to_hex/from_hex and fr_to_hex/fr_from_hex round trips
- Bit packing
- Sha256BitHasher output range and personalization separation
"""
import hashlib

import pytest

from plasma.crypto.field import FR_MODULUS, Fr
from plasma.crypto.hasher import BitHasher, Personalization
from plasma.crypto.hashing import (
    Sha256BitHasher,
    fr_from_hex,
    fr_to_hex,
    from_hex,
    pack_bits_le,
    sha256,
    to_hex,
)
from plasma.schemas.errors import DecodingException


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_known_value(self):
        """Test sha256 produces correct hash for known input."""
        expected = hashlib.sha256(b"hello").digest()
        result = sha256(b"hello")

        assert result == expected
        assert len(result) == 32

    def test_sha256_different_inputs_different_outputs(self):
        assert sha256(b"input1") != sha256(b"input2")


class TestHexConversion:
    """Tests for to_hex() and from_hex() functions."""

    def test_to_hex_format(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_from_hex_missing_prefix(self):
        """Test from_hex rejects input without 0x prefix."""
        with pytest.raises(ValueError, match="must start with '0x'"):
            from_hex("deadbeef")

    def test_from_hex_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xgg")

    def test_hex_round_trip(self):
        original = bytes.fromhex("0123456789abcdef")
        assert from_hex(to_hex(original)) == original


class TestFieldHex:
    """Tests for fr_to_hex() and fr_from_hex()."""

    def test_big_endian_fixed_width(self):
        result = fr_to_hex(Fr(255))

        assert result == "0x" + "00" * 31 + "ff"
        assert len(result) == 2 + 64

    @pytest.mark.parametrize("value", [0, 1, 2**200 + 3, FR_MODULUS - 1])
    def test_round_trip(self, value):
        assert fr_from_hex(fr_to_hex(Fr(value))) == Fr(value)

    def test_non_canonical_rejected(self):
        with pytest.raises(DecodingException):
            fr_from_hex(to_hex(FR_MODULUS.to_bytes(32, "big")))


class TestPackBits:
    """Tests for pack_bits_le()."""

    def test_little_endian_packing(self):
        assert pack_bits_le([True, False, True]) == b"\x03\x00\x00\x00" + b"\x05"

    def test_length_prefix_distinguishes_trailing_zeros(self):
        assert pack_bits_le([True]) != pack_bits_le([True, False])

    def test_empty(self):
        assert pack_bits_le([]) == b"\x00\x00\x00\x00"

    def test_crosses_byte_boundary(self):
        bits = [False] * 8 + [True]
        assert pack_bits_le(bits) == b"\x09\x00\x00\x00" + b"\x00\x01"


class TestPersonalization:
    """Tests for the leaf/node personalization tags."""

    def test_tags(self):
        assert Personalization.LEAF.tag == b"NoteCommitment"
        assert Personalization.NODE.tag == b"MerkleTree"

    def test_prefix_bits(self):
        assert Personalization.LEAF.prefix_bits() == [True] * 6
        assert Personalization.NODE.prefix_bits() == [False] * 6


class TestSha256BitHasher:
    """Tests for the fast bit hasher backend."""

    def test_is_bit_hasher(self):
        hasher = Sha256BitHasher()

        assert isinstance(hasher, BitHasher)
        assert hasher.name == "sha256"

    def test_deterministic(self):
        bits = [True, False, True, True]
        assert Sha256BitHasher().hash_bits(Personalization.LEAF, bits) == Sha256BitHasher().hash_bits(
            Personalization.LEAF, bits
        )

    def test_output_is_reduced(self):
        result = Sha256BitHasher().hash_bits(Personalization.NODE, [True] * 100)

        assert isinstance(result, Fr)
        assert 0 <= result.n < FR_MODULUS

    def test_personalization_separates_domains(self):
        hasher = Sha256BitHasher()
        bits = [False] * 508
        assert hasher.hash_bits(Personalization.LEAF, bits) != hasher.hash_bits(Personalization.NODE, bits)

    def test_length_matters(self):
        hasher = Sha256BitHasher()
        assert hasher.hash_bits(Personalization.NODE, [False]) != hasher.hash_bits(
            Personalization.NODE, [False, False]
        )
