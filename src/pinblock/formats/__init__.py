"""ISO 9564-1:2017 PIN block format codecs.

This package provides one codec per PIN block format and a registry keyed
by block size and control nibble.

Supported Formats:
    - 0: PAN-masked, 0xF fill
    - 1: unmasked, nonce padding
    - 2: unmasked, 0xF fill
    - 3: PAN-masked, random 0xA-0xF fill
    - 4: 16 byte plaintext PIN and PAN fields for AES encipherment

Example:
    >>> from pinblock.formats import get_codec, CodecConfig
    >>>
    >>> codec = get_codec(0)
    >>> block = codec.encode([1, 2, 3, 4], bytes.fromhex("4012345678909F"))
    >>> codec.decode(block, bytes.fromhex("4012345678909F")).pin
    bytearray(b'\\x01\\x02\\x03\\x04')
"""

from pinblock.formats.base import (
    BasePinBlockCodec,
    CodecConfig,
    CodecRegistry,
    DecodedPinBlock,
    PinBlockFormat,
    get_codec,
    lookup_codec,
    register_codec,
)
from pinblock.formats.format0 import Format0Codec
from pinblock.formats.format1 import Format1Codec
from pinblock.formats.format2 import Format2Codec
from pinblock.formats.format3 import Format3Codec
from pinblock.formats.format4 import Format4Codec

for _codec in (Format0Codec, Format1Codec, Format2Codec, Format3Codec, Format4Codec):
    register_codec(_codec)

__all__ = [
    # Base classes
    "BasePinBlockCodec",
    "CodecConfig",
    "CodecRegistry",
    "DecodedPinBlock",
    "PinBlockFormat",
    # Registry functions
    "register_codec",
    "get_codec",
    "lookup_codec",
    # Codecs
    "Format0Codec",
    "Format1Codec",
    "Format2Codec",
    "Format3Codec",
    "Format4Codec",
]
