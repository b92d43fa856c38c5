"""
LZ77 decompression.

This module implements the decoding side of the codec.


HOW DECOMPRESSION WORKS
-----------------------
The stream begins with the uncompressed length. The decoder allocates an
output buffer of exactly that size, then replays tokens into it:

  END OF BUFFER:  copy every remaining stream byte to the output. Done.
  LITERAL RUN:    copy the next N stream bytes to the output.
  BACK-REFERENCE: copy N bytes from `offset` bytes behind the output
                  position to the output position.


Example:
-------
Stream: [len=12] [literal "AB"] [backref offset=2, length=10] [end]

    literal  -> "AB"
    backref  -> "AB" + "ABABABABAB"
    end      -> nothing left

Result: "ABABABABABAB"


OVERLAPPING COPIES
------------------
When offset < length, the copy reads bytes it has just written. Copying
one byte at a time, front to back, turns a short pattern into a run:

    output = "AB", offset = 2, length = 4

    output[2] = output[0] = 'A'  -> "ABA"
    output[3] = output[1] = 'B'  -> "ABAB"
    output[4] = output[2] = 'A'  -> "ABABA"
    output[5] = output[3] = 'B'  -> "ABABAB"


EMPTY INPUT
-----------
An empty stream decodes to empty output without reading a header, even
though the compressor always writes one.
"""

from __future__ import annotations

import logging

from .config import DecompressorConfig
from .encoding import decode_varint64
from .exceptions import AllocationLimitError, FormatError, LZ77Error
from .tokens import BackReference, EndOfBuffer, decode_token

logger = logging.getLogger(__name__)


def decompress(data: bytes, max_uncompressed_length: int | None = None) -> bytes:
    """Decompress an LZ77 stream.

    Args:
        data: Compressed bytes (may be empty).
        max_uncompressed_length: Refuse streams declaring more output than
            this. Defaults to the process-wide limit.

    Returns:
        Original uncompressed data.

    Raises:
        AllocationLimitError: If the header declares too much output.
        FormatError: If the stream is malformed.
        VarintOverflowError: If a VarInt does not fit in 64 bits.
    """
    if max_uncompressed_length is None:
        config = DecompressorConfig()
    else:
        config = DecompressorConfig(max_uncompressed_length=max_uncompressed_length)

    if not data:
        return b""

    # Step 1: Read the header and allocate the output once.
    uncompressed_length, pos = decode_varint64(data, 0)
    if uncompressed_length > config.max_uncompressed_length:
        raise AllocationLimitError(uncompressed_length, config.max_uncompressed_length)

    output = bytearray(uncompressed_length)
    out_pos = 0

    # Step 2: Replay tokens until the stream is consumed.
    while pos < len(data):
        token, consumed = decode_token(data, pos)

        if isinstance(token, BackReference):
            _execute_copy(output, out_pos, token.offset, token.length, pos)
            out_pos += token.length
        else:
            # EndOfBuffer and LiteralRun both carry raw bytes.
            payload = token.payload
            if out_pos + len(payload) > uncompressed_length:
                kind = "End of buffer" if isinstance(token, EndOfBuffer) else "Literal run"
                raise FormatError(
                    f"{kind} of {len(payload)} bytes overflows output: "
                    f"{out_pos} + {len(payload)} > {uncompressed_length}",
                    offset=pos,
                )
            output[out_pos : out_pos + len(payload)] = payload
            out_pos += len(payload)

        pos += consumed

    # Step 3: The tokens must describe exactly the declared length.
    if out_pos != uncompressed_length:
        raise FormatError(
            f"Output length mismatch: got {out_pos}, expected {uncompressed_length}",
            offset=pos,
        )

    logger.debug("Decompressed %d bytes to %d", len(data), uncompressed_length)

    return bytes(output)


def _execute_copy(output: bytearray, out_pos: int, offset: int, length: int, pos: int) -> None:
    """Copy `length` bytes from `offset` bytes behind `out_pos`.

    Raises:
        FormatError: If the source starts before the buffer or the copy
            writes past its end.
    """
    if offset < 1:
        raise FormatError(f"Invalid back-reference offset: {offset}", offset=pos)
    if offset > out_pos:
        raise FormatError(
            f"Back-reference offset {offset} exceeds decoded size {out_pos}", offset=pos
        )
    if out_pos + length > len(output):
        raise FormatError(
            f"Back-reference would overflow output: {out_pos} + {length} > {len(output)}",
            offset=pos,
        )

    # Byte-by-byte so that overlapping copies repeat the pattern.
    src_pos = out_pos - offset
    for i in range(length):
        output[out_pos + i] = output[src_pos + i]


def get_uncompressed_length(data: bytes) -> int:
    """Read the declared uncompressed length without decompressing.

    An empty stream has length 0, matching `decompress`.

    Raises:
        FormatError: If the header VarInt is truncated.
        VarintOverflowError: If the header does not fit in 64 bits.
    """
    if not data:
        return 0

    length, _ = decode_varint64(data, 0)
    return length


def is_valid_compressed_data(data: bytes) -> bool:
    """Check whether data looks like output of the compressor.

    Only the header is checked: it must decode and be followed by at least
    one token byte. The compressor never produces an empty stream, so empty
    data is rejected here even though `decompress` accepts it.
    """
    if not data:
        return False

    try:
        _, header_bytes = decode_varint64(data, 0)
    except LZ77Error:
        return False

    return header_bytes < len(data)
