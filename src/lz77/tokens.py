"""
Token values of the compressed stream.

A compressed stream is a length header followed by tokens. Parsing the
tokens out as values is useful for inspection and testing; the decompressor
replays them against its output buffer.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .constants import BACK_REFERENCE, END_OF_BUFFER, LITERAL_RUN
from .encoding import (
    decode_varint64,
    encode_back_reference,
    encode_end_of_buffer,
    encode_literal_run,
)
from .exceptions import FormatError


@dataclass(frozen=True, slots=True)
class EndOfBuffer:
    """Terminal token: every remaining stream byte is raw output."""

    payload: bytes = b""

    def encode(self) -> bytes:
        return encode_end_of_buffer(self.payload)


@dataclass(frozen=True, slots=True)
class LiteralRun:
    """`len(payload)` raw bytes copied verbatim."""

    payload: bytes

    @property
    def length(self) -> int:
        return len(self.payload)

    def encode(self) -> bytes:
        return encode_literal_run(self.payload)


@dataclass(frozen=True, slots=True)
class BackReference:
    """Copy `length` bytes starting `offset` bytes behind the output position."""

    offset: int
    length: int

    def encode(self) -> bytes:
        return encode_back_reference(self.offset, self.length)


Token = EndOfBuffer | LiteralRun | BackReference


def decode_token(data: bytes, pos: int) -> tuple[Token, int]:
    """Decode the token starting at `pos`.

    Args:
        data: The compressed stream.
        pos: Position of the token's tag.

    Returns:
        Tuple of (token, bytes_consumed).

    Raises:
        FormatError: If the tag is unknown or the token is truncated.
        VarintOverflowError: If a VarInt field does not fit in 64 bits.
    """
    tag, consumed = decode_varint64(data, pos)
    cursor = pos + consumed

    if tag == END_OF_BUFFER:
        # Consumes the rest of the stream.
        return EndOfBuffer(bytes(data[cursor:])), len(data) - pos

    if tag == LITERAL_RUN:
        length, consumed = decode_varint64(data, cursor)
        cursor += consumed

        if length > len(data) - cursor:
            raise FormatError(
                f"Literal run of {length} bytes extends past end of input, "
                f"only {len(data) - cursor} available",
                offset=pos,
            )

        return LiteralRun(bytes(data[cursor : cursor + length])), cursor + length - pos

    if tag == BACK_REFERENCE:
        offset, consumed = decode_varint64(data, cursor)
        cursor += consumed
        length, consumed = decode_varint64(data, cursor)
        cursor += consumed

        return BackReference(offset, length), cursor - pos

    raise FormatError(f"Unknown token tag {tag}", offset=pos)


def iter_tokens(data: bytes) -> Iterator[Token]:
    """Yield the tokens of a compressed stream, skipping its length header.

    An empty stream yields nothing.
    """
    if not data:
        return

    _, pos = decode_varint64(data, 0)

    while pos < len(data):
        token, consumed = decode_token(data, pos)
        yield token
        pos += consumed
