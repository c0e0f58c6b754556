"""Format dispatch for pinblock.

This module identifies a PIN block's format from its size and control
nibble and routes encode and decode calls to the matching codec, so callers
do not need to know the format in advance.
"""

import logging
from typing import Optional, Sequence

from pinblock.errors import InvalidArgumentError
from pinblock.formats import CodecConfig, DecodedPinBlock, PinBlockFormat, get_codec, lookup_codec

logger = logging.getLogger(__name__)


def get_format(block: Sequence[int]) -> PinBlockFormat:
    """Identify the format of a PIN block.

    8 byte blocks may be formats 0 to 3 and 16 byte blocks format 4 (a
    deciphered PIN field).

    Args:
        block: The PIN block.

    Returns:
        The block's format.

    Raises:
        UnsupportedSizeError: If the block is neither 8 nor 16 bytes.
        UnsupportedFormatError: If the control nibble is not valid for the
            block size.

    Example:
        >>> get_format(bytes.fromhex("041274EDCBA9876F"))
        <PinBlockFormat.FORMAT_0: 0>
    """
    if block is None or not len(block):
        raise InvalidArgumentError("block")

    # Control field; see ISO 9564-1:2017 9.3.1
    codec_class = lookup_codec(len(block), block[0] >> 4)
    return codec_class.FORMAT


def decode(
    block: Sequence[int],
    other: Optional[Sequence[int]] = None,
    config: Optional[CodecConfig] = None,
) -> DecodedPinBlock:
    """Decode a PIN block of any supported format.

    Args:
        block: The PIN block.
        other: The PAN in compressed numeric form for formats 0 and 3.
            Ignored by the other formats.
        config: Optional codec configuration.

    Returns:
        The format and PIN digits.

    Example:
        >>> result = decode(bytes.fromhex("2534567FFFFFFFFF"))
        >>> result.format, list(result.pin)
        (<PinBlockFormat.FORMAT_2: 2>, [3, 4, 5, 6, 7])
    """
    fmt = get_format(block)
    codec = get_codec(fmt, config)

    logger.debug(f"Decoding format {int(fmt)} PIN block")
    if codec.requires_pan:
        return codec.decode(block, other)
    return codec.decode(block)


def encode(
    fmt: int,
    pin: Sequence[int],
    other: Optional[Sequence[int]] = None,
    config: Optional[CodecConfig] = None,
) -> bytearray:
    """Encode a PIN in the given format.

    Args:
        fmt: PIN block format, 0 to 4.
        pin: PIN digit values.
        other: The PAN for formats 0 and 3, an optional nonce for format 1.
            Ignored by formats 2 and 4.
        config: Optional codec configuration.

    Returns:
        The PIN block, or for format 4 the plaintext PIN field.
    """
    codec = get_codec(fmt, config)

    if codec.OTHER is not None:
        return codec.encode(pin, other)
    return codec.encode(pin)
