"""ISO 9564-1:2017 PIN block format 0.

The PIN field (control nibble 0, PIN length, PIN digits, 0xF fill) is XORed
with a PAN field holding the 12 rightmost PAN digits excluding the check
digit. See ISO 9564-1:2017 9.3.2.
"""

import logging
from typing import Sequence

from pinblock.errors import IntegrityCheckError
from pinblock.formats.base import BasePinBlockCodec, DecodedPinBlock, PinBlockFormat
from pinblock.packing import PINBLOCK_SIZE, pack_pin, unpack_pin
from pinblock.pan import derive_pan_field
from pinblock.utils import combine, equal_prefix, scratch

logger = logging.getLogger(__name__)

FILL_DIGIT = 0xF

# Control/length byte and first PIN digits must survive unmasking unchanged
CONSISTENCY_LENGTH = 2


class Format0Codec(BasePinBlockCodec):
    """PAN-masked PIN block with 0xF fill."""

    FORMAT = PinBlockFormat.FORMAT_0
    BLOCK_SIZE = PINBLOCK_SIZE
    OTHER = "pan"

    def encode(self, pin: Sequence[int], pan: Sequence[int]) -> bytearray:
        """Encode a PIN as a format 0 PIN block.

        Args:
            pin: PIN digit values.
            pan: PAN in compressed numeric form.

        Returns:
            The 8 byte PIN block.
        """
        self._check_pin(pin)
        self._require(pan, "pan")

        # See ISO 9564-1:2017 9.3.2.2 and 9.3.2.3
        with scratch(pack_pin(self.FORMAT, pin, FILL_DIGIT)) as pin_field:
            with scratch(derive_pan_field(pan)) as pan_field:
                block = combine(pin_field, pan_field)

        logger.debug("Encoded format 0 PIN block")
        return block

    def decode(self, block: Sequence[int], pan: Sequence[int]) -> DecodedPinBlock:
        """Decode a format 0 PIN block.

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
            self._check_padding(pin_field, pin_len, (FILL_DIGIT,), PINBLOCK_SIZE * 2)

            pin = unpack_pin(pin_field, pin_len)

        return DecodedPinBlock(format=self.FORMAT, pin=pin)
