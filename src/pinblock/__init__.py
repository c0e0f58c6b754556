"""pinblock: ISO 9564-1:2017 PIN block encoding and decoding.

This package builds and parses the plaintext PIN block structures that
carry a cardholder's PIN between payment system components, formats 0
through 4. Encipherment, key management and PIN verification are left to
the surrounding cryptographic system.

QUICK START:
    >>> from pinblock import encode, decode, pan_from_string, pin_from_string
    >>> pan = pan_from_string("4012345678909")
    >>> block = encode(0, pin_from_string("1234"), pan)
    >>> block.hex().upper()
    '041274EDCBA9876F'
    >>> list(decode(block, pan).pin)
    [1, 2, 3, 4]

FORMAT 4:
    >>> from pinblock import Format4Codec
    >>> codec = Format4Codec()
    >>> pin_field = codec.encode([1, 2, 3, 4])        # encipher with AES
    >>> pan_field = codec.encode_pan_field(pan)

Modules:
    - core: Format detection and dispatch (start here!)
    - formats: One codec per PIN block format
    - packing: PIN digit packing
    - pan: PAN field derivation
    - nonce: Padding and nonce generation
    - utils: Field combiner, zeroization and input helpers
    - errors: Exception hierarchy
"""

import logging

from pinblock.__version__ import __version__, __version_info__
from pinblock.core import decode, encode, get_format
from pinblock.errors import (
    IntegrityCheckError,
    InvalidArgumentError,
    InvalidPinLengthError,
    NonceTooShortError,
    PinBlockError,
    UnsupportedFormatError,
    UnsupportedSizeError,
    WrongFormatError,
)
from pinblock.formats import (
    BasePinBlockCodec,
    CodecConfig,
    DecodedPinBlock,
    Format0Codec,
    Format1Codec,
    Format2Codec,
    Format3Codec,
    Format4Codec,
    PinBlockFormat,
    get_codec,
    register_codec,
)
from pinblock.packing import PINBLOCK128_SIZE, PINBLOCK_SIZE
from pinblock.pan import derive_pan_field, derive_pan_field_128
from pinblock.utils import (
    cleanse,
    combine,
    pan_from_string,
    pin_from_string,
    scratch,
    to_hex,
)

# Silence verbose logging by default
logging.getLogger("pinblock").setLevel(logging.WARNING)

__all__ = [
    # Dispatch - Start here!
    "encode",
    "decode",
    "get_format",
    "__version__",
    "__version_info__",
    # Codecs
    "BasePinBlockCodec",
    "CodecConfig",
    "DecodedPinBlock",
    "PinBlockFormat",
    "Format0Codec",
    "Format1Codec",
    "Format2Codec",
    "Format3Codec",
    "Format4Codec",
    "get_codec",
    "register_codec",
    # Fields
    "PINBLOCK_SIZE",
    "PINBLOCK128_SIZE",
    "derive_pan_field",
    "derive_pan_field_128",
    "combine",
    "cleanse",
    "scratch",
    # Helpers
    "pan_from_string",
    "pin_from_string",
    "to_hex",
    # Errors
    "PinBlockError",
    "InvalidArgumentError",
    "InvalidPinLengthError",
    "UnsupportedSizeError",
    "WrongFormatError",
    "UnsupportedFormatError",
    "IntegrityCheckError",
    "NonceTooShortError",
]
