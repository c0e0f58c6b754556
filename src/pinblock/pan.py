"""PAN field derivation.

PANs are taken in compressed numeric form (EMV format "cn", the same
encoding as EMV field 5A): two digits per byte, left justified, padded with
trailing 0xF nibbles.
"""

import logging
from typing import Sequence

from pinblock.errors import InvalidArgumentError
from pinblock.packing import PINBLOCK128_SIZE, PINBLOCK_SIZE, get_nibble, set_nibble
from pinblock.utils import scratch

logger = logging.getLogger(__name__)

PAN_PAD = 0xF
PAN_FIELD_DIGITS = 12
PAN_MAX_LENGTH = 19


def _check_pan(pan: Sequence[int]) -> None:
    if pan is None or not len(pan):
        raise InvalidArgumentError("pan")

    for i in range(len(pan) * 2):
        if 0x9 < get_nibble(pan, i) < PAN_PAD:
            raise InvalidArgumentError("pan", "must be compressed numeric")


def pan_digits(pan: Sequence[int]) -> bytearray:
    """Return the PAN digits up to the first pad nibble, check digit included.

    Raises:
        InvalidArgumentError: If the PAN is empty or not compressed numeric.
    """
    _check_pan(pan)

    digits = bytearray()
    for i in range(len(pan) * 2):
        digit = get_nibble(pan, i)
        if digit == PAN_PAD:
            break
        digits.append(digit)

    if not digits:
        raise InvalidArgumentError("pan", "contains no digits")
    return digits


def derive_pan_field(pan: Sequence[int]) -> bytearray:
    """Build the 8 byte PAN field used by PIN block formats 0 and 3.

    The PAN is scanned from its rightmost nibble. Pad nibbles are skipped,
    the first digit found is the check digit and is skipped too, and the
    next 12 digits are packed right to left. Unused leading nibbles are
    zero, so shorter PANs come out zero padded on the left.

    Args:
        pan: PAN in compressed numeric form.

    Returns:
        The PAN field. Clear it after use.

    Example:
        >>> derive_pan_field(bytes.fromhex("4012345678909F")).hex()
        '0000401234567890'
    """
    _check_pan(pan)

    field = bytearray(PINBLOCK_SIZE)
    field_idx = PINBLOCK_SIZE * 2 - 1
    packed = 0
    check_digit_found = False

    for i in range(len(pan) * 2 - 1, -1, -1):
        if packed == PAN_FIELD_DIGITS:
            break

        digit = get_nibble(pan, i)
        if digit == PAN_PAD:
            continue
        if not check_digit_found:
            check_digit_found = True
            continue

        set_nibble(field, field_idx, digit)
        field_idx -= 1
        packed += 1

    return field


def derive_pan_field_128(pan: Sequence[int]) -> bytearray:
    """Build the 16 byte PAN field used by PIN block format 4.

    The first nibble holds M, the number of PAN digits beyond 12. With 12
    digits or fewer M is 0 and the digits are right justified in the 12
    nibbles that follow. Otherwise every digit follows M left justified.
    The check digit is part of the field.

    Args:
        pan: PAN in compressed numeric form, at most 19 digits.

    Returns:
        The PAN field. Clear it after use.

    Raises:
        InvalidArgumentError: If the PAN is empty, malformed or too long.
    """
    with scratch(pan_digits(pan)) as digits:
        if len(digits) > PAN_MAX_LENGTH:
            raise InvalidArgumentError(
                "pan", f"{len(digits)} digits exceeds {PAN_MAX_LENGTH}"
            )

        field = bytearray(PINBLOCK128_SIZE)
        if len(digits) <= PAN_FIELD_DIGITS:
            offset = 1 + PAN_FIELD_DIGITS - len(digits)
        else:
            set_nibble(field, 0, len(digits) - PAN_FIELD_DIGITS)
            offset = 1

        for i, digit in enumerate(digits):
            set_nibble(field, offset + i, digit)

        logger.debug(f"Derived format 4 PAN field, M={get_nibble(field, 0)}")
        return field
