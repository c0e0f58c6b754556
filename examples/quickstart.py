#!/usr/bin/env python3
"""
pinblock Quick Start Example

This example walks through each ISO 9564-1 PIN block format.
Run this script to see pinblock in action!
"""

from pinblock import (
    CodecConfig,
    Format4Codec,
    IntegrityCheckError,
    cleanse,
    decode,
    encode,
    get_format,
    pan_from_string,
    pin_from_string,
    scratch,
    to_hex,
)


def example_format0():
    """Example 1: PAN-masked format 0 block."""
    print("\n" + "="*60)
    print("Example 1: Format 0")
    print("="*60)

    pan = pan_from_string("4012345678909")
    with scratch(4) as pin:
        pin[:] = pin_from_string("1234")
        block = encode(0, pin, pan)
    print(f"\nPIN block:     {to_hex(block)}")

    result = decode(block, pan)
    print(f"Decoded PIN:   {''.join(str(d) for d in result.pin)}")
    cleanse(result.pin)


def example_nonce_formats():
    """Example 2: Formats 1 and 3 give a different block every time."""
    print("\n" + "="*60)
    print("Example 2: Unique Padding")
    print("="*60)

    pan = pan_from_string("4012345678909")
    pin = [1, 2, 3, 4, 5]

    print("\nFormat 1 with a transaction counter:")
    for counter in range(3):
        block = encode(1, pin, counter.to_bytes(8, "big"))
        print(f"  counter {counter}: {to_hex(block)}")

    print("\nFormat 3 with random padding:")
    for _ in range(3):
        print(f"  {to_hex(encode(3, pin, pan))}")


def example_detection():
    """Example 3: Decoding without knowing the format."""
    print("\n" + "="*60)
    print("Example 3: Format Detection")
    print("="*60)

    pan = pan_from_string("4012345678909")
    blocks = ["041274EDCBA9876F", "2534567FFFFFFFFF", "1512345EDCBA9876"]

    for hex_block in blocks:
        block = bytes.fromhex(hex_block)
        fmt = get_format(block)
        result = decode(block, pan)
        print(f"  {hex_block}: format {int(fmt)}, {len(result.pin)} digit PIN")


def example_wrong_pan():
    """Example 4: A wrong PAN is caught by the padding check."""
    print("\n" + "="*60)
    print("Example 4: Wrong PAN")
    print("="*60)

    block = bytes.fromhex("041274EDCBA9876F")

    try:
        decode(block, pan_from_string("4012345678989"))
    except IntegrityCheckError as e:
        print(f"\n✓ Rejected: {e.reason}")

    # The weaker check alone accepts the block
    result = decode(block, pan_from_string("4012345678989"), CodecConfig(strict_padding=False))
    print(f"  Without padding checks the PIN comes out as {list(result.pin)}")


def example_format4():
    """Example 5: Format 4 plaintext fields for AES."""
    print("\n" + "="*60)
    print("Example 5: Format 4")
    print("="*60)

    codec = Format4Codec()
    pin_field = codec.encode([1, 2, 3, 4])
    pan_field = codec.encode_pan_field(pan_from_string("4111111111111111"))

    print(f"\nPIN field: {to_hex(pin_field)}")
    print(f"PAN field: {to_hex(pan_field)}")
    print("  Encipher both with AES before sending the PIN block.")
    cleanse(pin_field)


if __name__ == "__main__":
    print("\n" + "🔐 " * 15)
    print("  PINBLOCK - Quick Start Examples")
    print("🔐 " * 15)

    example_format0()
    example_nonce_formats()
    example_detection()
    example_wrong_pan()
    example_format4()

    print("\n" + "="*60)
    print("✓ All examples completed successfully!")
    print("="*60)
    print("\nNext steps:")
    print("  1. Try the CLI: pinblock encode -f 0 --pin 1234 --pan 4012345678909")
    print("  2. Identify a block: pinblock format 2534567FFFFFFFFF")
    print()
