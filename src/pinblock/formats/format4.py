"""ISO 9564-1:2017 PIN block format 4.

Format 4 produces two 16 byte plaintext fields, the PIN field and the PAN
field. The caller enciphers them with AES; this codec only builds the
plaintext fields and decodes a deciphered PIN field.
"""

import logging
from typing import Sequence

from pinblock.formats.base import BasePinBlockCodec, DecodedPinBlock, PinBlockFormat
from pinblock.packing import PINBLOCK128_SIZE, pack_pin, unpack_pin
from pinblock.pan import derive_pan_field_128
from pinblock.utils import scratch

logger = logging.getLogger(__name__)

FILL_DIGIT = 0xA

# PIN digits and 0xA fill take the first half, random bytes the second
FILL_END = PINBLOCK128_SIZE // 2


class Format4Codec(BasePinBlockCodec):
    """AES PIN block plaintext fields."""

    FORMAT = PinBlockFormat.FORMAT_4
    BLOCK_SIZE = PINBLOCK128_SIZE

    def encode(self, pin: Sequence[int]) -> bytearray:
        """Build the format 4 plaintext PIN field.

        Returns:
            The 16 byte PIN field. It holds the plaintext PIN; encipher it
            and clear it.
        """
        self._check_pin(pin)

        with scratch(self._random_bytes(PINBLOCK128_SIZE - FILL_END)) as filler:
            pin_field = pack_pin(self.FORMAT, pin, FILL_DIGIT, size=PINBLOCK128_SIZE)
            pin_field[FILL_END:] = filler

        logger.debug("Encoded format 4 PIN field")
        return pin_field

    def encode_pan_field(self, pan: Sequence[int]) -> bytearray:
        """Build the format 4 plaintext PAN field.

        Args:
            pan: PAN in compressed numeric form, at most 19 digits.

        Returns:
            The 16 byte PAN field.
        """
        self._require(pan, "pan")
        return derive_pan_field_128(pan)

    def decode(self, block: Sequence[int]) -> DecodedPinBlock:
        """Decode a deciphered format 4 PIN field, checking its 0xA fill."""
        pin_len = self._check_block(block)
        self._check_pin_digits(block, pin_len)
        self._check_padding(block, pin_len, (FILL_DIGIT,), FILL_END * 2)
        return DecodedPinBlock(format=self.FORMAT, pin=unpack_pin(block, pin_len))
