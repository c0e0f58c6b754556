"""Tests for PAN field derivation."""

import pytest

from pinblock.errors import InvalidArgumentError
from pinblock.pan import derive_pan_field, derive_pan_field_128, pan_digits
from pinblock.utils import pan_from_string


class TestDerivePanField:
    """Test cases for the 8 byte PAN field of formats 0 and 3."""

    def test_dukpt_vector(self):
        """Test the ANSI X9.24-1 DUKPT example PAN."""
        field = derive_pan_field(bytes.fromhex("4012345678909F"))
        assert field == bytes.fromhex("0000401234567890")

    def test_unpadded_pan(self):
        """Test a PAN with an even digit count and no pad nibble."""
        field = derive_pan_field(bytes.fromhex("4111111111111111"))
        assert field == bytes.fromhex("0000111111111111")

    def test_short_pan_is_zero_padded(self):
        """Test a PAN with fewer than 13 digits is left padded with zeros."""
        field = derive_pan_field(bytes.fromhex("123456789F"))
        assert field == bytes.fromhex("0000000012345678")

    def test_extra_padding_bytes(self):
        """Test trailing 0xFF bytes are skipped like single pad nibbles."""
        assert derive_pan_field(bytes.fromhex("4012345678909FFF")) == derive_pan_field(
            bytes.fromhex("4012345678909F")
        )

    def test_long_pan_keeps_rightmost_digits(self):
        """Test only the 12 digits left of the check digit are used."""
        field = derive_pan_field(pan_from_string("1234567890123456789"))
        assert field == bytes.fromhex("0000789012345678")

    def test_empty_pan(self):
        """Test an empty PAN is rejected."""
        with pytest.raises(InvalidArgumentError):
            derive_pan_field(b"")

    def test_non_numeric_pan(self):
        """Test nibbles 0xA-0xE are rejected."""
        with pytest.raises(InvalidArgumentError):
            derive_pan_field(bytes.fromhex("40123A5678909F"))


class TestDerivePanField128:
    """Test cases for the 16 byte PAN field of format 4."""

    def test_x924_vector(self):
        """Test the ANSI X9.24-3 AES PIN block example PAN."""
        field = derive_pan_field_128(bytes.fromhex("4111111111111111"))
        assert field == bytes.fromhex("44111111111111111000000000000000")

    def test_padded_pan(self):
        """Test a 15 digit PAN with a pad nibble."""
        field = derive_pan_field_128(bytes.fromhex("411111111111111F"))
        assert field == bytes.fromhex("34111111111111110000000000000000")

    def test_short_pan(self):
        """Test a PAN shorter than 12 digits is right justified after M=0."""
        field = derive_pan_field_128(bytes.fromhex("123456789F"))
        assert field == bytes.fromhex("00001234567890000000000000000000")

    def test_twelve_digits(self):
        """Test exactly 12 digits gives M=0."""
        field = derive_pan_field_128(pan_from_string("123456789012"))
        assert field == bytes.fromhex("01234567890120000000000000000000")

    def test_thirteen_digits(self):
        """Test 13 digits gives M=1 and keeps the check digit."""
        field = derive_pan_field_128(pan_from_string("4012345678909"))
        assert field == bytes.fromhex("14012345678909000000000000000000")

    def test_nineteen_digits(self):
        """Test the longest PAN allowed."""
        field = derive_pan_field_128(pan_from_string("1234567890123456789"))
        assert field == bytes.fromhex("71234567890123456789000000000000")

    def test_too_long(self):
        """Test a PAN over 19 digits is rejected."""
        with pytest.raises(InvalidArgumentError):
            derive_pan_field_128(pan_from_string("1" * 20))

    def test_empty_pan(self):
        """Test an empty PAN is rejected."""
        with pytest.raises(InvalidArgumentError):
            derive_pan_field_128(b"")


class TestPanDigits:
    """Test cases for pan_digits."""

    def test_stops_at_pad(self):
        """Test digits end at the first pad nibble."""
        assert list(pan_digits(bytes.fromhex("12345FFF"))) == [1, 2, 3, 4, 5]

    def test_only_padding(self):
        """Test a PAN of pad nibbles has no digits."""
        with pytest.raises(InvalidArgumentError):
            pan_digits(b"\xff")
