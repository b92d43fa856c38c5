"""
Constants for the LZ77 compression format.
"""

from __future__ import annotations

from typing import Final

# ===========================================================================
# Token Tag Identifiers
# ===========================================================================
#
# Every token in the compressed stream starts with a VarInt tag:
#
#   1 = End of buffer (terminal, the rest of the stream is raw bytes)
#   2 = Back-reference (offset and length follow)
#   3 = Literal run (length and raw bytes follow)

END_OF_BUFFER: Final = 1
"""Tag for the terminal token.

Everything that follows the tag, up to the end of the stream, is copied
verbatim to the output.
"""

BACK_REFERENCE: Final = 2
"""Tag for a back-reference.

Followed by two VarInts: the offset (how far back) and the length (how many
bytes to copy).
"""

LITERAL_RUN: Final = 3
"""Tag for a literal run.

Followed by a VarInt length and that many raw bytes.
"""

# ===========================================================================
# VarInt Encoding Constants
# ===========================================================================

VARINT_DATA_MASK: Final = 0x7F
"""Mask for the 7 data bits of a VarInt byte."""

VARINT_CONTINUATION_BIT: Final = 0x80
"""High bit of a VarInt byte: set when more bytes follow."""

VARINT_SHIFT: Final = 7
"""Number of data bits carried by each VarInt byte."""

VARINT_MAX_VALUE: Final = (1 << 64) - 1
"""Largest value a VarInt may carry (unsigned 64-bit)."""

VARINT_MAX_BYTES: Final = 10
"""Longest legal VarInt: ceil(64 / 7) bytes."""

# ===========================================================================
# Match Finder Constants
# ===========================================================================

DEFAULT_MIN_MATCH_LENGTH: Final = 12
"""Shortest run the compressor will encode as a back-reference.

Larger values skip short matches that barely pay for their token.
"""

DEFAULT_TABLE_CAPACITY: Final = 1024
"""Number of slots in the lookup table.

More slots find more matches at the cost of longer scans.
"""

EMPTY_SLOT: Final = -1
"""Marker for a lookup table slot that has never been written."""

HASH_SEED: Final = 0x13371337
"""Initial accumulator for the fast hash."""

HASH_MULTIPLIER: Final = 0xDEADBEEF
"""Odd constant each byte is multiplied by in the fast hash."""

THOROUGH_HASH_MULTIPLIER: Final = 0x1E35A7BD
"""Multiplier for the thorough (full window) hash."""

HASH_MASK: Final = 0xFFFFFFFF
"""Hashes are computed in 32-bit unsigned arithmetic."""

FAST_HASH_DIVISOR: Final = 0xFF
"""The fast hash reads `table_capacity // FAST_HASH_DIVISOR + 1` bytes."""

# ===========================================================================
# Decompression Limits
# ===========================================================================

DEFAULT_MAX_UNCOMPRESSED_LENGTH: Final = 1 << 30
"""Largest declared output size the decompressor will allocate (1 GiB)."""
