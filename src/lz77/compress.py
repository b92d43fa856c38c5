"""
LZ77 compression.

This module implements the encoding side of the codec.


HOW COMPRESSION WORKS
---------------------
A cursor walks the input. At each position the match finder is asked for an
earlier occurrence of the upcoming bytes:

  - No usable match: the byte joins a pending literal run, cursor moves 1.
  - Match found: the pending literal run (if any) is flushed as a LiteralRun
    token, then a BackReference token is emitted and the cursor jumps past
    the matched bytes.

Once fewer than `min_match_length` bytes remain, an EndOfBuffer token is
written followed by the pending literals and the unprocessed tail. The
decoder copies everything after that tag verbatim.


Example:
-------
Input (min_match_length = 4): "abcdefXabcdefYZ"

  - Positions 0-6 ("abcdefX"): nothing seen before, kept as pending literals.
  - Position 7: the finder proposes position 0, which shares "abcdef".
    Emit LiteralRun("abcdefX"), then BackReference(offset=7, length=6).
  - Position 13: only 2 bytes remain. Emit EndOfBuffer followed by "YZ".

Whether a given repeat is found depends on the lookup table; the decoder
only replays what was chosen.

Compression never fails: every byte can be stored as a literal.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from .config import CompressorConfig, MatchMode
from .constants import DEFAULT_MIN_MATCH_LENGTH, DEFAULT_TABLE_CAPACITY
from .encoding import (
    encode_back_reference,
    encode_end_of_buffer,
    encode_literal_run,
    encode_varint64,
)
from .match_finder import MatchFinder

logger = logging.getLogger(__name__)


class CompressionResult(NamedTuple):
    """Compressed bytes and the space saved as a fraction of the input."""

    output: bytes
    """The compressed stream."""

    ratio: float
    """`(input_size - output_size) / input_size`. Negative when the data grew."""


class LZ77Compressor:
    """Stream encoder bound to one lookup table.

    The table is allocated at construction and never grows. An instance is
    not safe for concurrent `compress()` calls; use one per thread.
    """

    def __init__(self, config: CompressorConfig | None = None) -> None:
        self.config = config or CompressorConfig()
        self.match_finder = MatchFinder(self.config)

    def compress(self, data: bytes) -> CompressionResult:
        """Compress `data`.

        Args:
            data: Uncompressed input bytes.

        Returns:
            The compressed stream and its compression ratio.

        Output format:
            [varint: uncompressed length] [token] [token] ... [end of buffer]
        """
        data = bytes(data)
        min_length = self.config.min_match_length
        end = len(data)

        self.match_finder.reset(data)

        output = bytearray(encode_varint64(end))
        pending = bytearray()
        cursor = 0
        literal_runs = 0
        back_references = 0

        while cursor <= end:
            # Too few bytes left for a match: flush everything as raw tail.
            if cursor > end - min_length:
                output.extend(encode_end_of_buffer())
                output.extend(pending)
                output.extend(data[cursor:])
                break

            match_length, offset = self.match_finder.find_match(cursor)

            if match_length < min_length:
                pending.append(data[cursor])
                cursor += 1

                if cursor > end:
                    output.extend(encode_end_of_buffer())
                    output.extend(pending)
                    break

                continue

            if pending:
                output.extend(encode_literal_run(bytes(pending)))
                pending.clear()
                literal_runs += 1

            output.extend(encode_back_reference(offset, match_length))
            back_references += 1
            cursor += match_length

        ratio = _compression_ratio(end, len(output))

        logger.debug(
            "Compressed %d bytes to %d (ratio %.4f): %d literal runs, %d back-references",
            end,
            len(output),
            ratio,
            literal_runs,
            back_references,
        )

        return CompressionResult(bytes(output), ratio)


def compress(
    data: bytes,
    min_match_length: int = DEFAULT_MIN_MATCH_LENGTH,
    table_capacity: int = DEFAULT_TABLE_CAPACITY,
    mode: MatchMode = MatchMode.FAST,
) -> CompressionResult:
    """Compress data with a fresh compressor.

    Args:
        data: Uncompressed input bytes.
        min_match_length: Shortest run encoded as a back-reference.
        table_capacity: Number of lookup table slots.
        mode: Match finder strategy.

    Returns:
        The compressed stream and its compression ratio.

    Raises:
        pydantic.ValidationError: If a parameter is out of range.
    """
    config = CompressorConfig(
        min_match_length=min_match_length,
        table_capacity=table_capacity,
        mode=mode,
    )
    return LZ77Compressor(config).compress(data)


def _compression_ratio(input_size: int, output_size: int) -> float:
    # Empty input has nothing to save.
    if input_size == 0:
        return 0.0
    return (input_size - output_size) / input_size
