"""ISO 9564-1:2017 PIN block format 3.

Like format 0, but the fill digits are random values from 0xA to 0xF so
that two encodings of the same PIN and PAN differ. See ISO 9564-1:2017
9.3.5.
"""

import logging
from typing import Sequence

from pinblock.errors import IntegrityCheckError
from pinblock.formats.base import BasePinBlockCodec, DecodedPinBlock, PinBlockFormat
from pinblock.nonce import padding_capacity, restricted_nonce, write_padding
from pinblock.packing import PINBLOCK_SIZE, pack_pin, unpack_pin
from pinblock.pan import derive_pan_field
from pinblock.utils import combine, equal_prefix, scratch

logger = logging.getLogger(__name__)

PADDING_DIGITS = range(0xA, 0x10)
CONSISTENCY_LENGTH = 2


class Format3Codec(BasePinBlockCodec):
    """PAN-masked PIN block with random 0xA-0xF fill."""

    FORMAT = PinBlockFormat.FORMAT_3
    BLOCK_SIZE = PINBLOCK_SIZE
    OTHER = "pan"

    def encode(self, pin: Sequence[int], pan: Sequence[int]) -> bytearray:
        """Encode a PIN as a format 3 PIN block.

        Args:
            pin: PIN digit values.
            pan: PAN in compressed numeric form.

        Returns:
            The 8 byte PIN block.
        """
        self._check_pin(pin)
        self._require(pan, "pan")

        # See ISO 9564-1:2017 9.3.5.2
        with scratch(pack_pin(self.FORMAT, pin, PADDING_DIGITS[0])) as pin_field:
            capacity = padding_capacity(len(pin))
            padding = restricted_nonce(capacity, self.config.random_source)
            with scratch(padding):
                write_padding(pin_field, len(pin), padding)

            # See ISO 9564-1:2017 9.3.5.3
            with scratch(derive_pan_field(pan)) as pan_field:
                block = combine(pin_field, pan_field)

        logger.debug("Encoded format 3 PIN block")
        return block

    def decode(self, block: Sequence[int], pan: Sequence[int]) -> DecodedPinBlock:
        """Decode a format 3 PIN block.

        Raises:
            IntegrityCheckError: If the unmasked PIN field is inconsistent,
                which happens when the PAN is wrong or the block corrupt.
        """
        self._require(pan, "pan")
        pin_len = self._check_block(block)

        with scratch(derive_pan_field(pan)) as pan_field:
            pin_field = combine(block, pan_field)

        with scratch(pin_field):
            if not equal_prefix(block, pin_field, CONSISTENCY_LENGTH):
                raise IntegrityCheckError("control field changed by unmasking")
            self._check_pin_digits(pin_field, pin_len)
            self._check_padding(pin_field, pin_len, PADDING_DIGITS, PINBLOCK_SIZE * 2)

            pin = unpack_pin(pin_field, pin_len)

        return DecodedPinBlock(format=self.FORMAT, pin=pin)
