"""Tests for ISO 9564-1 PIN block format 4."""

import pytest

from pinblock.errors import (
    IntegrityCheckError,
    InvalidArgumentError,
    UnsupportedSizeError,
    WrongFormatError,
)
from pinblock.formats import CodecConfig, Format4Codec, PinBlockFormat
from pinblock.packing import PINBLOCK128_SIZE

# ANSI X9.24-3:2017 supplement, AES PIN block format 4
PIN = [1, 2, 3, 4]
PINFIELD_PREFIX = bytes.fromhex("441234AAAAAAAAAA")
PAN = bytes.fromhex("4111111111111111")
PANFIELD = bytes.fromhex("44111111111111111000000000000000")

PIN2 = [1, 2, 3, 4, 5]
PINFIELD_PREFIX2 = bytes.fromhex("4512345AAAAAAAAA")
PAN2 = bytes.fromhex("411111111111111F")
PANFIELD2 = bytes.fromhex("34111111111111110000000000000000")

PAN3 = bytes.fromhex("123456789F")
PANFIELD3 = bytes.fromhex("00001234567890000000000000000000")


class TestFormat4PinField:
    """Test cases for the format 4 PIN field."""

    def test_vector(self):
        """Test the X9.24-3 PIN field prefix."""
        pin_field = Format4Codec().encode(PIN)

        assert len(pin_field) == PINBLOCK128_SIZE
        assert pin_field[:8] == PINFIELD_PREFIX

    def test_odd_length(self):
        """Test an odd number of PIN digits."""
        assert Format4Codec().encode(PIN2)[:8] == PINFIELD_PREFIX2

    def test_random_second_half(self):
        """Test the second half comes from the random source."""
        codec = Format4Codec(CodecConfig(random_source=lambda n: b"\x5a" * n))
        assert codec.encode(PIN)[8:] == b"\x5a" * 8

    def test_unique(self):
        """Test two PIN fields for the same PIN differ."""
        codec = Format4Codec()
        assert codec.encode(PIN) != codec.encode(PIN)


class TestFormat4PanField:
    """Test cases for the format 4 PAN field."""

    @pytest.mark.parametrize(
        "pan,expected",
        [(PAN, PANFIELD), (PAN2, PANFIELD2), (PAN3, PANFIELD3)],
    )
    def test_vectors(self, pan, expected):
        """Test the X9.24-3 and hand made PAN fields."""
        assert Format4Codec().encode_pan_field(pan) == expected

    def test_missing_pan(self):
        """Test a PAN is required."""
        with pytest.raises(InvalidArgumentError):
            Format4Codec().encode_pan_field(None)


class TestFormat4Decode:
    """Test cases for decoding a deciphered format 4 PIN field."""

    def test_round_trip(self):
        """Test every PIN length round trips."""
        codec = Format4Codec()
        for length in range(4, 13):
            pin = [length % 10] * length
            result = codec.decode(codec.encode(pin))

            assert result.format == PinBlockFormat.FORMAT_4
            assert list(result.pin) == pin

    def test_tampered_fill(self):
        """Test flipping a fill bit fails decoding."""
        pin_field = Format4Codec().encode(PIN)
        pin_field[6] ^= 1
        with pytest.raises(IntegrityCheckError):
            Format4Codec().decode(pin_field)

    def test_random_half_not_checked(self):
        """Test the random second half may hold anything."""
        pin_field = PINFIELD_PREFIX + bytes.fromhex("0123456789ABCDEF")
        assert list(Format4Codec().decode(pin_field).pin) == PIN

    def test_wrong_size(self):
        """Test an 8 byte block is rejected."""
        with pytest.raises(UnsupportedSizeError):
            Format4Codec().decode(PINFIELD_PREFIX)

    def test_wrong_format(self):
        """Test the control nibble must be 4."""
        with pytest.raises(WrongFormatError):
            Format4Codec().decode(bytes.fromhex("341234AAAAAAAAAA") + bytes(8))
