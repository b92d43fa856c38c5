"""Pure Python LZ77 compression library.

A single-pass, dictionary-based byte compressor. Repeated byte sequences are
replaced by back-references into previously seen data; everything else is
stored as literal runs. There is no entropy coding stage.

Usage::

    from lz77 import compress, decompress

    compressed, ratio = compress(data)
    original = decompress(compressed)
"""

from __future__ import annotations

from .compress import CompressionResult, LZ77Compressor, compress
from .config import CompressorConfig, DecompressorConfig, MatchMode
from .decompress import decompress, get_uncompressed_length, is_valid_compressed_data
from .exceptions import AllocationLimitError, FormatError, LZ77Error, VarintOverflowError
from .match_finder import MatchFinder
from .tokens import BackReference, EndOfBuffer, LiteralRun, Token, iter_tokens

__all__ = [
    # Core API
    "compress",
    "decompress",
    "LZ77Compressor",
    "CompressionResult",
    # Configuration
    "CompressorConfig",
    "DecompressorConfig",
    "MatchMode",
    "MatchFinder",
    # Tokens
    "Token",
    "EndOfBuffer",
    "LiteralRun",
    "BackReference",
    "iter_tokens",
    # Utilities
    "get_uncompressed_length",
    "is_valid_compressed_data",
    # Exceptions
    "LZ77Error",
    "FormatError",
    "VarintOverflowError",
    "AllocationLimitError",
]
