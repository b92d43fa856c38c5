"""Exception hierarchy for the LZ77 codec."""

from __future__ import annotations


class LZ77Error(Exception):
    """
    Base exception for all codec errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class FormatError(LZ77Error):
    """
    Raised when a compressed stream is malformed.

    Attributes:
        detail: Description of what went wrong.
        offset: Byte position in the compressed stream (if known).
    """

    def __init__(self, detail: str, *, offset: int | None = None) -> None:
        self.detail = detail
        self.offset = offset

        msg = detail
        if offset is not None:
            msg = f"{detail} (at byte offset {offset})"

        super().__init__(msg)


class VarintOverflowError(LZ77Error, OverflowError):
    """
    Raised when a VarInt does not fit in 64 bits.

    Attributes:
        max_value: The largest value the codec accepts.
    """

    def __init__(self, detail: str, *, max_value: int) -> None:
        self.max_value = max_value
        super().__init__(f"{detail} (maximum is {max_value})")


class AllocationLimitError(LZ77Error):
    """
    Raised when a stream declares more output than the decompressor may allocate.

    Attributes:
        declared: The uncompressed length read from the header.
        limit: The configured maximum.
    """

    def __init__(self, declared: int, limit: int) -> None:
        self.declared = declared
        self.limit = limit

        super().__init__(
            f"Declared uncompressed length {declared} exceeds the allocation limit of {limit}"
        )
