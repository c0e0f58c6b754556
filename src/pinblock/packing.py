"""PIN digit packing for ISO 9564-1 PIN fields.

A PIN field starts with the control nibble (the format number) and the PIN
length nibble, followed by one PIN digit per nibble and the format's padding.
Nibbles are indexed from the high nibble of byte 0.
"""

from typing import Sequence

PINBLOCK_SIZE = 8
PINBLOCK128_SIZE = 16

PIN_MIN_LENGTH = 4
PIN_MAX_LENGTH = 12

# Nibble index of the first PIN digit
PIN_OFFSET = 2


def get_nibble(buf: Sequence[int], index: int) -> int:
    """Return nibble ``index`` of ``buf``, most significant nibble first."""
    if index & 0x1:
        return buf[index >> 1] & 0x0F
    return buf[index >> 1] >> 4


def set_nibble(buf: bytearray, index: int, value: int) -> None:
    """Overwrite nibble ``index`` of ``buf`` with the low 4 bits of ``value``."""
    value &= 0x0F
    if index & 0x1:
        buf[index >> 1] = (buf[index >> 1] & 0xF0) | value
    else:
        buf[index >> 1] = (buf[index >> 1] & 0x0F) | (value << 4)


def pack_pin(
    fmt: int,
    pin: Sequence[int],
    fill_digit: int,
    size: int = PINBLOCK_SIZE,
) -> bytearray:
    """Build a PIN field from PIN digits.

    The field is first filled with ``fill_digit`` in both nibbles of every
    byte, then the control and length nibbles and the PIN digits are
    written over it. The PIN length is masked to 4 bits, so callers must
    validate it beforehand.

    Args:
        fmt: PIN block format written to the control nibble.
        pin: PIN digit values, one per item.
        fill_digit: Padding nibble for the rest of the field.
        size: Field size in bytes.

    Returns:
        The PIN field. It holds the plaintext PIN; clear it after use.

    Example:
        >>> pack_pin(2, [3, 4, 5, 6, 7], 0xF).hex().upper()
        '2534567FFFFFFFFF'
    """
    pin_len = len(pin) & 0x0F
    fill_digit &= 0x0F

    field = bytearray([(fill_digit << 4) | fill_digit]) * size
    field[0] = ((fmt & 0x0F) << 4) | pin_len
    for i in range(pin_len):
        set_nibble(field, PIN_OFFSET + i, pin[i])

    return field


def unpack_pin(field: Sequence[int], pin_len: int) -> bytearray:
    """Extract ``pin_len`` PIN digits from a PIN field.

    No digit range validation is performed here.
    """
    return bytearray(get_nibble(field, PIN_OFFSET + i) for i in range(pin_len))
