"""ISO 9564-1:2017 PIN block format 2.

Unmasked PIN block with 0xF fill, used for offline PIN verification by an
ICC.
"""

from typing import Sequence

from pinblock.formats.base import BasePinBlockCodec, DecodedPinBlock, PinBlockFormat
from pinblock.packing import PINBLOCK_SIZE, pack_pin, unpack_pin

FILL_DIGIT = 0xF


class Format2Codec(BasePinBlockCodec):
    """Unmasked PIN block with 0xF fill."""

    FORMAT = PinBlockFormat.FORMAT_2
    BLOCK_SIZE = PINBLOCK_SIZE

    def encode(self, pin: Sequence[int]) -> bytearray:
        """Encode a PIN as a format 2 PIN block."""
        self._check_pin(pin)
        return pack_pin(self.FORMAT, pin, FILL_DIGIT)

    def decode(self, block: Sequence[int]) -> DecodedPinBlock:
        """Decode a format 2 PIN block, checking its fill digits."""
        pin_len = self._check_block(block)
        self._check_pin_digits(block, pin_len)
        self._check_padding(block, pin_len, (FILL_DIGIT,), PINBLOCK_SIZE * 2)
        return DecodedPinBlock(format=self.FORMAT, pin=unpack_pin(block, pin_len))
