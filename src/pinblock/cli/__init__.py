#!/usr/bin/env python3
"""pinblock CLI - Command line interface for ISO 9564-1 PIN blocks.

Usage:
    pinblock encode -f FORMAT --pin DIGITS [--pan DIGITS] [--nonce HEX]
    pinblock decode BLOCK [--pan DIGITS]
    pinblock format BLOCK
    pinblock panfield --pan DIGITS [--wide]

Examples:
    # Format 0 PIN block
    pinblock encode -f 0 --pin 1234 --pan 4012345678909

    # Decode a block of unknown format
    pinblock decode 041274EDCBA9876F --pan 4012345678909

    # Format 4 PAN field
    pinblock panfield --pan 4111111111111111 --wide
"""

import argparse
import logging
import sys

from pinblock import __version__
from pinblock.core import decode, encode, get_format
from pinblock.errors import InvalidArgumentError, format_error
from pinblock.formats import Format4Codec
from pinblock.pan import derive_pan_field
from pinblock.utils import cleanse, pan_from_string, pin_from_string, to_hex

logger = logging.getLogger(__name__)


def print_error(message: str):
    """Print an error message."""
    print(f"✗ {message}", file=sys.stderr)


def print_success(message: str):
    """Print a success message."""
    print(f"✓ {message}")


def print_info(message: str):
    """Print an info message."""
    print(f"ℹ {message}")


def _encode_other(args):
    """Pick the second encode input the format uses, rejecting the other."""
    if args.format in (0, 3):
        if args.nonce:
            raise InvalidArgumentError("nonce", f"not used by format {args.format}")
        return pan_from_string(args.pan) if args.pan else None

    if args.pan:
        raise InvalidArgumentError("pan", f"not used by format {args.format}")
    if args.format == 1:
        return bytes.fromhex(args.nonce) if args.nonce else None
    if args.nonce:
        raise InvalidArgumentError("nonce", f"not used by format {args.format}")
    return None


def cmd_encode(args) -> int:
    """Handle the encode command."""
    try:
        other = _encode_other(args)
        pin = pin_from_string(args.pin)

        try:
            block = encode(args.format, pin, other)
        finally:
            cleanse(pin)

        print(to_hex(block))
        if args.format == 4:
            print_info("This is the plaintext PIN field; encipher it before use.")
        return 0

    except ValueError as e:
        print_error(f"Encoding failed: {format_error(e)}")
        return 1


def cmd_decode(args) -> int:
    """Handle the decode command."""
    try:
        block = bytes.fromhex(args.block)
        pan = pan_from_string(args.pan) if args.pan else None

        result = decode(block, pan)
        print_success(f"Format {int(result.format)} PIN block")
        print(f"  PIN: {''.join(str(d) for d in result.pin)}")
        cleanse(result.pin)
        return 0

    except ValueError as e:
        print_error(f"Decoding failed: {format_error(e)}")
        return 1


def cmd_format(args) -> int:
    """Handle the format command."""
    try:
        fmt = get_format(bytes.fromhex(args.block))
        print(int(fmt))
        return 0

    except ValueError as e:
        print_error(format_error(e))
        return 1


def cmd_panfield(args) -> int:
    """Handle the panfield command."""
    try:
        pan = pan_from_string(args.pan)
        if args.wide:
            field = Format4Codec().encode_pan_field(pan)
        else:
            field = derive_pan_field(pan)

        print(to_hex(field))
        return 0

    except ValueError as e:
        print_error(format_error(e))
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pinblock",
        description="""
pinblock - ISO 9564-1:2017 PIN block encoding and decoding.

Quick Start:
    pinblock encode -f 0 --pin 1234 --pan 4012345678909
    pinblock decode 041274EDCBA9876F --pan 4012345678909
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Encode command
    encode_parser = subparsers.add_parser(
        "encode",
        aliases=["enc"],
        help="Encode a PIN block"
    )
    encode_parser.add_argument(
        "-f", "--format",
        type=int,
        choices=[0, 1, 2, 3, 4],
        required=True,
        help="PIN block format"
    )
    encode_parser.add_argument("--pin", required=True, help="PIN digits")
    encode_parser.add_argument(
        "--pan",
        help="PAN digits including the check digit (formats 0 and 3)"
    )
    encode_parser.add_argument(
        "--nonce",
        help="Nonce in hex, e.g. a transaction counter (format 1, default: random)"
    )

    # Decode command
    decode_parser = subparsers.add_parser(
        "decode",
        aliases=["dec"],
        help="Decode a PIN block of any format"
    )
    decode_parser.add_argument("block", help="PIN block in hex")
    decode_parser.add_argument(
        "--pan",
        help="PAN digits including the check digit (formats 0 and 3)"
    )

    # Format command
    format_parser = subparsers.add_parser(
        "format",
        help="Print the format of a PIN block"
    )
    format_parser.add_argument("block", help="PIN block in hex")

    # PAN field command
    panfield_parser = subparsers.add_parser(
        "panfield",
        help="Print the PAN field derived from a PAN"
    )
    panfield_parser.add_argument("--pan", required=True, help="PAN digits")
    panfield_parser.add_argument(
        "--wide",
        action="store_true",
        help="Derive the 16 byte format 4 PAN field"
    )

    return parser


def main(argv=None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
        logging.getLogger("pinblock").setLevel(logging.DEBUG)
        logger.debug(f"Running {args.command} command")

    if args.command in ("encode", "enc"):
        return cmd_encode(args)

    elif args.command in ("decode", "dec"):
        return cmd_decode(args)

    elif args.command == "format":
        return cmd_format(args)

    elif args.command == "panfield":
        return cmd_panfield(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
