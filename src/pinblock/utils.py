"""Utility functions for pinblock.

This module provides the buffer helpers shared by every format: the XOR
field combiner, zeroization of scratch buffers, and conversion of PINs and
PANs from their printable form.
"""

from contextlib import contextmanager
from typing import Iterator, Sequence, Union

from pinblock.errors import InvalidArgumentError

BytesLike = Union[bytes, bytearray, memoryview]


def combine(a: Sequence[int], b: Sequence[int]) -> bytearray:
    """XOR two equally sized fields.

    Used to mask a PIN field with a PAN field and to unmask it again;
    ``combine(combine(a, b), b) == a``.

    Args:
        a: First field.
        b: Second field, same size as ``a``.

    Returns:
        A new bytearray holding ``a[i] ^ b[i]``.

    Raises:
        InvalidArgumentError: If the fields differ in size.
    """
    if len(a) != len(b):
        raise InvalidArgumentError(
            "b", f"size {len(b)} does not match field size {len(a)}"
        )

    out = bytearray(len(a))
    for i in range(len(a)):
        out[i] = a[i] ^ b[i]
    return out


def equal_prefix(a: Sequence[int], b: Sequence[int], length: int) -> bool:
    """Compare the first ``length`` bytes of two fields without copying them.

    Every byte is examined regardless of where the first difference is.
    """
    if len(a) < length or len(b) < length:
        return False

    diff = 0
    for i in range(length):
        diff |= a[i] ^ b[i]
    return diff == 0


def cleanse(buf: bytearray) -> None:
    """Overwrite a buffer with zeros in place."""
    for i in range(len(buf)):
        buf[i] = 0


@contextmanager
def scratch(buf: Union[int, bytearray]) -> Iterator[bytearray]:
    """Provide a scratch buffer that is cleansed on exit.

    Args:
        buf: Either a size, for a new zeroed buffer, or an existing
            bytearray such as a freshly built PIN or PAN field.

    Example:
        >>> with scratch(pack_pin(0, [1, 2, 3, 4], 0xF)) as pin_field:
        ...     block = combine(pin_field, pan_field)
    """
    if isinstance(buf, int):
        buf = bytearray(buf)
    try:
        yield buf
    finally:
        cleanse(buf)


def pin_from_string(pin: str) -> bytearray:
    """Convert a printable PIN into one digit value per byte.

    Example:
        >>> pin_from_string("1234")
        bytearray(b'\\x01\\x02\\x03\\x04')
    """
    if not pin:
        raise InvalidArgumentError("pin")
    if not pin.isdigit() or not pin.isascii():
        raise InvalidArgumentError("pin", "must contain decimal digits only")

    return bytearray(ord(c) - ord("0") for c in pin)


def pan_from_string(pan: str) -> bytes:
    """Convert a printable PAN into compressed numeric (EMV "cn") form.

    Digits are packed two per byte, left justified, and an odd digit count
    is padded with a trailing 0xF nibble.

    Example:
        >>> pan_from_string("4012345678909").hex().upper()
        '4012345678909F'
    """
    if not pan:
        raise InvalidArgumentError("pan")
    if not pan.isdigit() or not pan.isascii():
        raise InvalidArgumentError("pan", "must contain decimal digits only")

    if len(pan) % 2:
        pan += "F"
    return bytes.fromhex(pan)


def to_hex(buf: BytesLike) -> str:
    """Render a buffer as upper case hex."""
    return bytes(buf).hex().upper()
