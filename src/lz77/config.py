"""
Configuration for the LZ77 codec.

Compressor parameters are per-instance models. The decompressor's allocation
limit defaults to a process-wide value that can be set through the
`LZ77_MAX_UNCOMPRESSED_LENGTH` environment variable.
"""

from __future__ import annotations

import os
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    DEFAULT_MAX_UNCOMPRESSED_LENGTH,
    DEFAULT_MIN_MATCH_LENGTH,
    DEFAULT_TABLE_CAPACITY,
)


def _read_max_uncompressed_length() -> int:
    raw = os.environ.get("LZ77_MAX_UNCOMPRESSED_LENGTH")
    if raw is None:
        return DEFAULT_MAX_UNCOMPRESSED_LENGTH

    try:
        value = int(raw)
    except ValueError:
        value = -1

    if value < 0:
        raise ValueError(
            f"Invalid LZ77_MAX_UNCOMPRESSED_LENGTH environment variable: '{raw}'. "
            "Expected a non-negative integer."
        )
    return value


MAX_UNCOMPRESSED_LENGTH = _read_max_uncompressed_length()
"""Default allocation limit for decompression. Defaults to 1 GiB."""


class StrictBaseModel(BaseModel):
    """A strict, immutable pydantic base model."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        strict=True,
        validate_default=True,
    )


class MatchMode(Enum):
    """How hard the match finder looks for a back-reference."""

    FAST = "fast"
    """Hash a short prefix and take the first candidate that qualifies."""

    THOROUGH = "thorough"
    """Hash the whole match window and scan the table for the best quality."""


class CompressorConfig(StrictBaseModel):
    """Tuning parameters for one compressor instance."""

    min_match_length: int = Field(default=DEFAULT_MIN_MATCH_LENGTH, ge=1)
    """Shortest run encoded as a back-reference."""

    table_capacity: int = Field(default=DEFAULT_TABLE_CAPACITY, ge=1)
    """Number of slots in the lookup table. Fixed for the instance's lifetime."""

    mode: MatchMode = MatchMode.FAST
    """Match finder strategy."""


class DecompressorConfig(StrictBaseModel):
    """Limits applied while decompressing untrusted streams."""

    max_uncompressed_length: int = Field(default=MAX_UNCOMPRESSED_LENGTH, ge=0)
    """Largest declared output length that will be allocated."""
