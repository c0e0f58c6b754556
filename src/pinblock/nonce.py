"""Padding and nonce generation for PIN fields.

Formats 1, 3 and 4 pad the PIN field with unique material so that two
encodings of the same PIN differ:

- format 1 uses random bytes or a caller supplied nonce (e.g. a transaction
  counter), consumed from its end so the fastest changing bytes come first
- format 3 uses random nibbles restricted to 0xA-0xF
- format 4 fills the second half of its PIN field with random bytes
"""

import logging
import secrets
from typing import Callable, Optional, Sequence

from pinblock.errors import InvalidArgumentError, NonceTooShortError
from pinblock.packing import PIN_OFFSET, PINBLOCK_SIZE, set_nibble
from pinblock.utils import scratch

logger = logging.getLogger(__name__)

RandomSource = Callable[[int], bytes]


def random_bytes(length: int, random_source: Optional[RandomSource] = None) -> bytearray:
    """Draw ``length`` bytes from a cryptographically secure source.

    Args:
        length: Number of bytes.
        random_source: Callable returning ``n`` random bytes. Defaults to
            :func:`secrets.token_bytes`.
    """
    source = random_source or secrets.token_bytes
    buf = bytearray(source(length))
    if len(buf) != length:
        raise InvalidArgumentError(
            "random_source", f"returned {len(buf)} bytes, {length} requested"
        )
    return buf


def padding_capacity(pin_len: int, size: int = PINBLOCK_SIZE) -> int:
    """Number of whole padding bytes a PIN field of ``size`` bytes can take."""
    return size - 1 - pin_len // 2


def reversed_nonce(nonce: Sequence[int], capacity: int) -> bytearray:
    """Take the last ``capacity`` bytes of ``nonce`` in reverse order.

    Args:
        nonce: Caller supplied unique value, for example a big endian
            transaction counter.
        capacity: Padding bytes required.

    Raises:
        NonceTooShortError: If the nonce holds fewer than ``capacity`` bytes.
    """
    if len(nonce) < capacity:
        raise NonceTooShortError(len(nonce), capacity)

    return bytearray(nonce[len(nonce) - 1 - i] for i in range(capacity))


def _nibble_from_random(b: int) -> int:
    # Scale 0-255 onto 0xA-0xF
    return (b * 6) // 256 + 0xA


def restricted_nonce(
    capacity: int, random_source: Optional[RandomSource] = None
) -> bytearray:
    """Generate ``capacity`` random bytes whose nibbles are all 0xA-0xF.

    Each output nibble comes from its own random byte, so twice as many
    random bytes as output bytes are drawn.
    """
    with scratch(random_bytes(capacity * 2, random_source)) as raw:
        out = bytearray(capacity)
        for i in range(capacity):
            out[i] = (_nibble_from_random(raw[2 * i]) << 4) | _nibble_from_random(
                raw[2 * i + 1]
            )
        return out


def write_padding(
    field: bytearray, pin_len: int, padding: Sequence[int], size: int = PINBLOCK_SIZE
) -> None:
    """Write padding into a PIN field after its PIN digits.

    The padding bytes are written as a nibble stream starting right after
    the last PIN digit. With an odd PIN length the stream starts mid byte
    and its final nibble does not fit, so it is dropped.
    """
    index = PIN_OFFSET + pin_len
    end = size * 2
    for b in padding:
        for nibble in (b >> 4, b & 0x0F):
            if index >= end:
                return
            set_nibble(field, index, nibble)
            index += 1
