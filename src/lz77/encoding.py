"""
Encoding utilities for the LZ77 stream format.

This module provides the low-level primitives shared by the compressor and
the decompressor:

1. **VarInt encoding**: every integer in the stream (the length header, token
   tags, lengths and offsets) is a variable-length unsigned integer.

2. **Token encoding**: the byte layout of the three token kinds.

Stream layout::

    Stream        := VarInt(uncompressed_length) Token*
    EndOfBuffer   := VarInt(1) RawBytes(remaining)
    BackReference := VarInt(2) VarInt(offset) VarInt(length)
    LiteralRun    := VarInt(3) VarInt(length) RawBytes(length)
"""

from __future__ import annotations

from .constants import (
    BACK_REFERENCE,
    END_OF_BUFFER,
    LITERAL_RUN,
    VARINT_CONTINUATION_BIT,
    VARINT_DATA_MASK,
    VARINT_MAX_BYTES,
    VARINT_MAX_VALUE,
    VARINT_SHIFT,
)
from .exceptions import FormatError, VarintOverflowError

# VarInt Encoding
#
# Each byte has 8 bits:
#   - Bit 7 (high): continuation flag.
#       - 1 = more bytes follow,
#       - 0 = this is the last byte.
#   - Bits 0-6 (low): 7 bits of the integer value.
#
# Bytes are emitted least-significant group first.
#
# Byte count by value:
#   0 .. 127           -> 1 byte
#   128 .. 16,383      -> 2 bytes
#   16,384 .. 2^21 - 1 -> 3 bytes
#   ...
#   2^63 .. 2^64 - 1   -> 10 bytes
#
# Example: encoding 300
#
#   300 = 0b1_0010_1100
#
#   Group 1 (bits 0-6): 0101100 = 44, more bits remain -> 0x80 | 44 = 0xAC
#   Group 2 (bits 7+):  0000010 = 2, last group        -> 0x02
#
#   Encoded: [0xAC, 0x02]


def encode_varint64(value: int) -> bytes:
    """Encode an unsigned 64-bit integer as a VarInt.

    Args:
        value: Non-negative integer to encode.

    Returns:
        Between 1 and 10 bytes.

    Raises:
        ValueError: If value is negative.
        VarintOverflowError: If value does not fit in 64 bits.
    """
    if value < 0:
        raise ValueError(f"VarInt value must be non-negative, got {value}")
    if value > VARINT_MAX_VALUE:
        raise VarintOverflowError(
            f"VarInt value {value} exceeds 64 bits", max_value=VARINT_MAX_VALUE
        )

    result = bytearray()

    # Emit full groups with the continuation bit set.
    while value >= VARINT_CONTINUATION_BIT:
        result.append(VARINT_CONTINUATION_BIT | (value & VARINT_DATA_MASK))
        value >>= VARINT_SHIFT

    # The final group has the high bit clear.
    result.append(value)

    return bytes(result)


def decode_varint64(data: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode a VarInt starting at `offset`.

    Args:
        data: Byte sequence containing the VarInt.
        offset: Position in data where the VarInt starts.

    Returns:
        Tuple of (decoded_value, bytes_consumed).

    Raises:
        FormatError: If the continuation chain runs past the end of data.
        VarintOverflowError: If the value does not fit in 64 bits.
    """
    result = 0
    shift = 0
    bytes_read = 0

    while True:
        if offset + bytes_read >= len(data):
            raise FormatError("Truncated varint: unexpected end of data", offset=offset)

        byte = data[offset + bytes_read]
        bytes_read += 1

        if byte & VARINT_CONTINUATION_BIT:
            result |= (byte & VARINT_DATA_MASK) << shift
        else:
            # Last byte contributes its full value.
            result |= byte << shift

        if result > VARINT_MAX_VALUE:
            raise VarintOverflowError(
                f"Varint at offset {offset} overflows 64 bits", max_value=VARINT_MAX_VALUE
            )

        if not byte & VARINT_CONTINUATION_BIT:
            return result, bytes_read

        # Padding groups (0x80 0x80 ...) would never overflow the value but
        # still exceed what a 64-bit integer can need.
        if bytes_read >= VARINT_MAX_BYTES:
            raise VarintOverflowError(
                f"Varint at offset {offset} is longer than {VARINT_MAX_BYTES} bytes",
                max_value=VARINT_MAX_VALUE,
            )

        shift += VARINT_SHIFT


def varint_length(value: int) -> int:
    """Number of bytes `encode_varint64(value)` produces."""
    return max(1, -(-value.bit_length() // VARINT_SHIFT))


# Token Encoding
#
# Tags are VarInts too, but every tag value is below 128 so a tag always
# occupies a single byte.


def encode_end_of_buffer(payload: bytes = b"") -> bytes:
    """Encode the terminal token followed by its raw trailing bytes."""
    return encode_varint64(END_OF_BUFFER) + payload


def encode_literal_run(payload: bytes) -> bytes:
    """Encode a literal run.

    Args:
        payload: Raw bytes to emit verbatim.

    Raises:
        ValueError: If payload is empty.
    """
    if not payload:
        raise ValueError("Literal run must carry at least 1 byte")

    return encode_varint64(LITERAL_RUN) + encode_varint64(len(payload)) + payload


def encode_back_reference(offset: int, length: int) -> bytes:
    """Encode a back-reference.

    Args:
        offset: How far behind the current output position the copy starts.
        length: How many bytes to copy.

    Raises:
        ValueError: If offset or length is less than 1.
    """
    if offset < 1:
        raise ValueError(f"Back-reference offset must be >= 1, got {offset}")
    if length < 1:
        raise ValueError(f"Back-reference length must be >= 1, got {length}")

    return encode_varint64(BACK_REFERENCE) + encode_varint64(offset) + encode_varint64(length)
