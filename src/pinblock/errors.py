"""Custom exceptions and error handling for pinblock.

Every failure raised by an encode or decode call is a subclass of
:class:`PinBlockError`, so callers can catch the whole family at once or
single out one category (for example a wrong PAN reported as
:class:`IntegrityCheckError`).
"""

from typing import Optional


class PinBlockError(ValueError):
    """Base exception for pinblock errors."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message}\n\n💡 Hint: {self.suggestion}"
        return self.message


class InvalidArgumentError(PinBlockError):
    """Raised when an argument is missing, empty or malformed."""

    def __init__(self, name: str, reason: str = "must not be empty"):
        self.argument = name
        super().__init__(f"Invalid argument '{name}': {reason}")


class InvalidPinLengthError(PinBlockError):
    """Raised when a PIN has fewer than 4 or more than 12 digits."""

    def __init__(self, length: int):
        self.length = length
        suggestion = (
            "ISO 9564-1 PINs have between 4 and 12 digits.\n"
            "  - On encode, check the PIN passed in\n"
            "  - On decode, the block is corrupt or not a PIN block"
        )
        super().__init__(f"Invalid PIN length: {length}", suggestion)


class UnsupportedSizeError(PinBlockError):
    """Raised when a PIN block buffer has an unexpected size."""

    def __init__(self, size: int, expected: Optional[int] = None):
        self.size = size
        self.expected = expected
        if expected is None:
            suggestion = "PIN blocks are 8 bytes (formats 0-3) or 16 bytes (format 4)"
        else:
            suggestion = f"This format uses {expected} byte PIN blocks"
        super().__init__(f"Unsupported PIN block size: {size} bytes", suggestion)


class WrongFormatError(PinBlockError):
    """Raised when a block's control nibble names another format."""

    def __init__(self, found: int, expected: int):
        self.found = found
        self.expected = expected
        suggestion = (
            "Use pinblock.decode() to let the control nibble pick the format"
        )
        super().__init__(
            f"Wrong PIN block format: expected {expected}, found {found}",
            suggestion,
        )


class UnsupportedFormatError(PinBlockError):
    """Raised when no known format matches a control nibble and block size."""

    def __init__(self, control: int, size: Optional[int] = None):
        self.control = control
        self.size = size
        suggestion = (
            "Supported formats:\n"
            "  - 0, 1, 2, 3 in 8 byte blocks\n"
            "  - 4 in 16 byte blocks (deciphered PIN field)"
        )
        message = f"Unsupported PIN block format {control}"
        if size is not None:
            message += f" for a {size} byte block"
        super().__init__(message, suggestion)


class IntegrityCheckError(PinBlockError):
    """Raised when a decoded PIN field fails its consistency checks.

    For PAN-masked formats this cannot tell a wrong PAN apart from a
    corrupted or foreign block.
    """

    def __init__(self, reason: str):
        self.reason = reason
        suggestion = (
            "This could mean:\n"
            "  - The PAN supplied differs from the one used to encode\n"
            "  - The PIN block was corrupted or tampered with\n"
            "  - The block was deciphered with the wrong key"
        )
        super().__init__(f"PIN block integrity check failed: {reason}", suggestion)


class NonceTooShortError(PinBlockError):
    """Raised when a caller nonce cannot fill the PIN field padding."""

    def __init__(self, length: int, required: int):
        self.length = length
        self.required = required
        suggestion = (
            f"Supply at least {required} nonce bytes, "
            "or pass no nonce to use random padding"
        )
        super().__init__(
            f"Nonce too short: {length} bytes supplied, {required} required",
            suggestion,
        )


def format_error(e: Exception) -> str:
    """Format an exception into a user-friendly message.

    Args:
        e: The exception to format.

    Returns:
        A user-friendly error message with suggestions.
    """
    if isinstance(e, PinBlockError):
        return str(e)

    if isinstance(e, ValueError):
        return f"Invalid value: {e}\n\n💡 Hint: Hex input must have an even number of 0-9/A-F characters."

    if isinstance(e, TypeError):
        return f"Type error: {e}\n\n💡 Hint: PINs and PANs are passed as bytes or sequences of ints."

    return f"Unexpected error: {type(e).__name__}: {e}"
