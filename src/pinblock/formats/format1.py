"""ISO 9564-1:2017 PIN block format 1.

Unmasked PIN block padded with a unique nonce, either random or supplied by
the caller.
"""

import logging
from typing import Optional, Sequence

from pinblock.formats.base import BasePinBlockCodec, DecodedPinBlock, PinBlockFormat
from pinblock.nonce import padding_capacity, reversed_nonce, write_padding
from pinblock.packing import PINBLOCK_SIZE, pack_pin, unpack_pin
from pinblock.utils import scratch

logger = logging.getLogger(__name__)


class Format1Codec(BasePinBlockCodec):
    """PIN block padded with a transaction unique nonce."""

    FORMAT = PinBlockFormat.FORMAT_1
    BLOCK_SIZE = PINBLOCK_SIZE
    OTHER = "nonce"

    def encode(
        self, pin: Sequence[int], nonce: Optional[Sequence[int]] = None
    ) -> bytearray:
        """Encode a PIN as a format 1 PIN block.

        Args:
            pin: PIN digit values.
            nonce: Optional unique value such as a transaction counter. Its
                last bytes are used first, so an incrementing big endian
                counter yields a different block on every call. Without a
                nonce the padding is random.

        Returns:
            The 8 byte PIN block.

        Raises:
            NonceTooShortError: If ``nonce`` cannot fill the padding.
        """
        self._check_pin(pin)

        capacity = padding_capacity(len(pin))
        if nonce:
            padding = reversed_nonce(nonce, capacity)
        else:
            padding = self._random_bytes(capacity)

        block = pack_pin(self.FORMAT, pin, 0)
        with scratch(padding):
            write_padding(block, len(pin), padding)

        logger.debug(f"Encoded format 1 PIN block, nonce={'caller' if nonce else 'random'}")
        return block

    def decode(self, block: Sequence[int]) -> DecodedPinBlock:
        """Decode a format 1 PIN block. The padding is not checked."""
        pin_len = self._check_block(block)
        self._check_pin_digits(block, pin_len)
        return DecodedPinBlock(format=self.FORMAT, pin=unpack_pin(block, pin_len))
