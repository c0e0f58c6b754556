"""Tests for PIN digit packing."""

import pytest

from pinblock.packing import (
    PINBLOCK128_SIZE,
    PINBLOCK_SIZE,
    get_nibble,
    pack_pin,
    set_nibble,
    unpack_pin,
)


class TestNibbles:
    """Test cases for nibble access helpers."""

    def test_get_nibble(self):
        """Test nibbles are read most significant first."""
        buf = bytes.fromhex("A5C3")
        assert [get_nibble(buf, i) for i in range(4)] == [0xA, 0x5, 0xC, 0x3]

    def test_set_nibble_preserves_neighbour(self):
        """Test setting one nibble leaves the other nibble of the byte alone."""
        buf = bytearray.fromhex("A5C3")
        set_nibble(buf, 1, 0x9)
        set_nibble(buf, 2, 0x0)
        assert buf == bytes.fromhex("A903")

    def test_set_nibble_masks_value(self):
        """Test only the low 4 bits of the value are written."""
        buf = bytearray(1)
        set_nibble(buf, 0, 0x1F)
        assert buf == b"\xf0"


class TestPackPin:
    """Test cases for pack_pin."""

    def test_format2_vector(self):
        """Test the payShield format 2 example."""
        field = pack_pin(2, [3, 4, 5, 6, 7], 0xF)
        assert field == bytes.fromhex("2534567FFFFFFFFF")

    def test_even_length(self):
        """Test an even PIN length fills whole bytes."""
        field = pack_pin(0, [1, 2, 3, 4], 0xF)
        assert field == bytes.fromhex("041234FFFFFFFFFF")

    def test_maximum_length(self):
        """Test a 12 digit PIN."""
        field = pack_pin(0, [1, 2, 3, 4, 5, 6, 7, 8, 9, 0, 1, 2], 0xF)
        assert field == bytes.fromhex("0C123456789012FF")

    def test_wide_field(self):
        """Test packing into a 16 byte field."""
        field = pack_pin(4, [1, 2, 3, 4], 0xA, size=PINBLOCK128_SIZE)

        assert len(field) == PINBLOCK128_SIZE
        assert field == bytes.fromhex("441234" + "AA" * 13)

    def test_default_size(self):
        """Test the default field size."""
        assert len(pack_pin(1, [1, 2, 3, 4], 0)) == PINBLOCK_SIZE

    def test_length_is_masked(self):
        """Test the length nibble only keeps the low 4 bits."""
        field = pack_pin(1, [1] * 16, 0xF)
        assert field[0] == 0x10

    def test_accepts_bytes(self):
        """Test PIN digits may be given as bytes."""
        assert pack_pin(2, b"\x03\x04\x05\x06\x07", 0xF) == pack_pin(
            2, [3, 4, 5, 6, 7], 0xF
        )


class TestUnpackPin:
    """Test cases for unpack_pin."""

    def test_unpack(self):
        """Test digits are read from the second byte."""
        pin = unpack_pin(bytes.fromhex("2534567FFFFFFFFF"), 5)
        assert pin == bytearray([3, 4, 5, 6, 7])

    def test_inverse_of_pack(self):
        """Test unpack reverses pack for every PIN length."""
        for length in range(4, 13):
            digits = [(i * 7) % 10 for i in range(length)]
            field = pack_pin(0, digits, 0xF)
            assert list(unpack_pin(field, length)) == digits

    def test_no_digit_validation(self):
        """Test non-decimal nibbles are returned as they are."""
        assert list(unpack_pin(bytes.fromhex("04ABCDFFFFFFFFFF"), 4)) == [
            0xA,
            0xB,
            0xC,
            0xD,
        ]
