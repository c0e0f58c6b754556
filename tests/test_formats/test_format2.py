"""Tests for ISO 9564-1 PIN block format 2."""

import pytest

from pinblock.errors import IntegrityCheckError, InvalidPinLengthError, UnsupportedSizeError
from pinblock.formats import CodecConfig, Format2Codec, PinBlockFormat

# Thales payShield Host Programmer's Manual example
PIN = [3, 4, 5, 6, 7]
PINBLOCK = bytes.fromhex("2534567FFFFFFFFF")


class TestFormat2:
    """Test cases for format 2."""

    def test_encode_vector(self):
        """Test the payShield example PIN block."""
        assert Format2Codec().encode(PIN) == PINBLOCK

    def test_decode_vector(self):
        """Test decoding the payShield example."""
        result = Format2Codec().decode(PINBLOCK)

        assert result.format == PinBlockFormat.FORMAT_2
        assert list(result.pin) == PIN

    def test_round_trip(self):
        """Test every PIN length round trips."""
        codec = Format2Codec()
        for length in range(4, 13):
            pin = [d % 10 for d in range(length)]
            assert list(codec.decode(codec.encode(pin)).pin) == pin

    def test_tampered_fill(self):
        """Test flipping a fill bit fails decoding though the PIN is intact."""
        block = bytearray(PINBLOCK)
        block[6] ^= 1
        with pytest.raises(IntegrityCheckError):
            Format2Codec().decode(block)

    def test_tampered_odd_fill_nibble(self):
        """Test the fill nibble sharing a byte with the last digit is checked."""
        block = bytearray(PINBLOCK)
        block[3] = 0x70
        with pytest.raises(IntegrityCheckError):
            Format2Codec().decode(block)

    def test_lenient_padding(self):
        """Test fill checks can be disabled."""
        block = bytearray(PINBLOCK)
        block[6] ^= 1
        result = Format2Codec(CodecConfig(strict_padding=False)).decode(block)
        assert list(result.pin) == PIN

    def test_non_decimal_digit(self):
        """Test a PIN digit above 9 fails decoding."""
        with pytest.raises(IntegrityCheckError):
            Format2Codec().decode(bytes.fromhex("253A567FFFFFFFFF"))

    def test_wrong_size(self):
        """Test a 16 byte block is rejected."""
        with pytest.raises(UnsupportedSizeError):
            Format2Codec().decode(PINBLOCK * 2)

    def test_invalid_length(self):
        """Test PINs outside 4-12 digits are rejected."""
        with pytest.raises(InvalidPinLengthError):
            Format2Codec().encode([1] * 13)
