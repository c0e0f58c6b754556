"""PIN block codec base classes.

This module provides the base class shared by the ISO 9564-1 format codecs,
their configuration, the decode result type, and the registry the
dispatcher uses to find a codec from a block's size and control nibble.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, Optional, Sequence, Type

from pinblock.errors import (
    IntegrityCheckError,
    InvalidArgumentError,
    InvalidPinLengthError,
    UnsupportedFormatError,
    UnsupportedSizeError,
    WrongFormatError,
)
from pinblock.nonce import RandomSource, random_bytes
from pinblock.packing import (
    PIN_MAX_LENGTH,
    PIN_MIN_LENGTH,
    PIN_OFFSET,
    PINBLOCK_SIZE,
    get_nibble,
)

logger = logging.getLogger(__name__)


class PinBlockFormat(IntEnum):
    """ISO 9564-1:2017 PIN block formats (see 9.3)."""

    FORMAT_0 = 0
    FORMAT_1 = 1
    FORMAT_2 = 2
    FORMAT_3 = 3
    FORMAT_4 = 4


@dataclass
class CodecConfig:
    """Configuration for PIN block codecs.

    Attributes:
        random_source: Callable returning ``n`` cryptographically secure
            random bytes. Defaults to :func:`secrets.token_bytes`.
        strict_padding: Reject decoded blocks whose fill digits or nonce
            padding do not match the format's padding rule.
    """

    random_source: Optional[RandomSource] = None
    strict_padding: bool = True


@dataclass
class DecodedPinBlock:
    """Result of decoding a PIN block.

    Attributes:
        format: Format the block was decoded as.
        pin: PIN digit values, one per byte. Clear it once the PIN is used.
    """

    format: PinBlockFormat
    pin: bytearray


class BasePinBlockCodec(ABC):
    """Abstract base class for ISO 9564-1 format codecs.

    Subclasses set :attr:`FORMAT` and :attr:`BLOCK_SIZE`, and
    :attr:`OTHER` when encoding or decoding needs a second input
    (``"pan"`` or ``"nonce"``).

    Attributes:
        config: Codec configuration.
    """

    FORMAT: PinBlockFormat
    BLOCK_SIZE: int = PINBLOCK_SIZE
    OTHER: Optional[str] = None

    def __init__(self, config: Optional[CodecConfig] = None):
        """Initialize the codec.

        Args:
            config: Codec configuration.
        """
        self.config = config or CodecConfig()

    @abstractmethod
    def encode(self, pin: Sequence[int], *args, **kwargs) -> bytearray:
        """Encode PIN digits into a PIN block.

        Args:
            pin: PIN digit values, 4 to 12 of them.

        Returns:
            The PIN block.
        """
        pass

    @abstractmethod
    def decode(self, block: Sequence[int], *args, **kwargs) -> DecodedPinBlock:
        """Decode a PIN block into its PIN digits.

        Args:
            block: The PIN block.

        Returns:
            The decoded PIN block.
        """
        pass

    @property
    def requires_pan(self) -> bool:
        """Whether decoding needs the PAN."""
        return self.OTHER == "pan"

    def _random_bytes(self, length: int) -> bytearray:
        return random_bytes(length, self.config.random_source)

    @staticmethod
    def _require(value: Optional[Sequence[int]], name: str) -> None:
        if value is None or not len(value):
            raise InvalidArgumentError(name)

    def _check_pin(self, pin: Sequence[int]) -> None:
        """Validate PIN digits before encoding."""
        self._require(pin, "pin")

        # See ISO 9564-1:2017 8.1
        if not PIN_MIN_LENGTH <= len(pin) <= PIN_MAX_LENGTH:
            raise InvalidPinLengthError(len(pin))

        for digit in pin:
            if not 0 <= digit <= 9:
                raise InvalidArgumentError("pin", "digits must be 0-9")

    def _check_block(self, block: Sequence[int]) -> int:
        """Validate a PIN block header and return its PIN length."""
        self._require(block, "block")

        if len(block) != self.BLOCK_SIZE:
            raise UnsupportedSizeError(len(block), self.BLOCK_SIZE)

        # Control field; see ISO 9564-1:2017 9.3.1
        control = block[0] >> 4
        if control != self.FORMAT:
            raise WrongFormatError(control, int(self.FORMAT))

        pin_len = block[0] & 0x0F
        if not PIN_MIN_LENGTH <= pin_len <= PIN_MAX_LENGTH:
            raise InvalidPinLengthError(pin_len)

        return pin_len

    def _check_pin_digits(self, pin_field: Sequence[int], pin_len: int) -> None:
        for i in range(pin_len):
            if get_nibble(pin_field, PIN_OFFSET + i) > 0x9:
                logger.debug(f"Format {int(self.FORMAT)} PIN digit out of range")
                raise IntegrityCheckError("PIN digit out of range")

    def _check_padding(
        self,
        pin_field: Sequence[int],
        pin_len: int,
        allowed: Iterable[int],
        end: int,
    ) -> None:
        """Check every nibble from the end of the PIN up to nibble ``end``."""
        if not self.config.strict_padding:
            return

        allowed = frozenset(allowed)
        for i in range(PIN_OFFSET + pin_len, end):
            if get_nibble(pin_field, i) not in allowed:
                logger.debug(f"Format {int(self.FORMAT)} padding mismatch")
                raise IntegrityCheckError("unexpected padding digit")


class CodecRegistry:
    """Registry of PIN block codecs keyed by block size and control nibble.

    Example:
        >>> registry = CodecRegistry()
        >>> registry.register(Format0Codec)
        >>> registry.lookup(8, 0)
        <class 'pinblock.formats.format0.Format0Codec'>
    """

    def __init__(self):
        """Initialize the registry."""
        self._by_size: Dict[int, Dict[int, Type[BasePinBlockCodec]]] = {}

    def register(self, codec_class: Type[BasePinBlockCodec], override: bool = False) -> None:
        """Register a codec class.

        Args:
            codec_class: The codec to register.
            override: Whether to replace an existing codec for the format.

        Raises:
            ValueError: If the format is already registered and override=False.
        """
        fmt = int(codec_class.FORMAT)
        by_format = self._by_size.setdefault(codec_class.BLOCK_SIZE, {})
        if fmt in by_format and not override:
            raise ValueError(f"Format {fmt} is already registered")

        by_format[fmt] = codec_class

    def lookup(self, size: int, control: int) -> Type[BasePinBlockCodec]:
        """Find the codec for a block size and control nibble.

        Raises:
            UnsupportedSizeError: If no format uses blocks of this size.
            UnsupportedFormatError: If no format of this size has the nibble.
        """
        by_format = self._by_size.get(size)
        if by_format is None:
            raise UnsupportedSizeError(size)

        codec_class = by_format.get(control)
        if codec_class is None:
            raise UnsupportedFormatError(control, size)
        return codec_class

    def get_codec(
        self, fmt: int, config: Optional[CodecConfig] = None
    ) -> BasePinBlockCodec:
        """Return a configured codec instance for a format.

        Raises:
            UnsupportedFormatError: If the format is not registered.
        """
        for by_format in self._by_size.values():
            if fmt in by_format:
                return by_format[fmt](config)

        raise UnsupportedFormatError(fmt)

    def get_supported_formats(self) -> Dict[int, int]:
        """Map every registered format to its block size."""
        return {
            fmt: size
            for size, by_format in self._by_size.items()
            for fmt in by_format
        }


# Global registry instance
_global_registry = CodecRegistry()


def register_codec(codec_class: Type[BasePinBlockCodec], override: bool = False) -> None:
    """Register a codec with the global registry.

    Args:
        codec_class: The codec to register.
        override: Whether to override an existing codec for the format.
    """
    _global_registry.register(codec_class, override)


def get_codec(fmt: int, config: Optional[CodecConfig] = None) -> BasePinBlockCodec:
    """Get a configured codec from the global registry."""
    return _global_registry.get_codec(fmt, config)


def lookup_codec(size: int, control: int) -> Type[BasePinBlockCodec]:
    """Find a codec class in the global registry by size and control nibble."""
    return _global_registry.lookup(size, control)
