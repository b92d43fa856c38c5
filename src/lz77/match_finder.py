"""
Hash-seeded match finder.

Given a cursor into the input, the match finder proposes an earlier position
whose bytes repeat the upcoming ones.


THE LOOKUP TABLE
----------------
The table is a fixed array of `table_capacity` slots. Each slot holds either
EMPTY_SLOT or a byte index into the input being compressed. Indices are
always written by the position being probed, so every stored index is
strictly behind any later cursor.


THE SCAN
--------
A lookup does not walk a per-bucket chain. It hashes the upcoming bytes to a
starting slot, then walks the table BACKWARD slot by slot, wrapping from
slot 0 to the last slot, until it either:

  - meets an empty slot, or
  - arrives back at the starting slot.

Every non-empty slot on the way is a candidate, whether or not it was hashed
into that bucket. In the worst case a lookup visits the whole table.

Example (capacity 8, start slot 3):

    slots:  [ 5 | 9 | - | 2 | 7 | 1 | 4 | 6 ]
                      ^   ^
                      |   start, candidate 2
                      empty: the scan stops after visiting slots 3, 2.

When the scan ends, the slot it stopped on is overwritten with the cursor.
Whatever was stored there is evicted; nothing is chained.


MATCH QUALITY
-------------
A candidate qualifies when it shares at least `min_match_length` bytes with
the cursor. Qualifying candidates are ranked by

    quality = (match_length * table_capacity) // distance

so long, close matches win. A candidate replaces the current best only if
its quality is strictly greater. Since the best starts at 0, a match whose
quality rounds down to 0 is never used.

In FAST mode the scan stops at the first qualifying candidate.
In THOROUGH mode it keeps going for a better score.
"""

from __future__ import annotations

from .config import CompressorConfig, MatchMode
from .constants import (
    EMPTY_SLOT,
    FAST_HASH_DIVISOR,
    HASH_MASK,
    HASH_MULTIPLIER,
    HASH_SEED,
    THOROUGH_HASH_MULTIPLIER,
)


class MatchFinder:
    """Lookup table plus the scan that searches it.

    The table is allocated once. `reset()` binds it to a new input buffer and
    clears every slot, since stored indices only make sense for the buffer
    they were taken from.
    """

    def __init__(self, config: CompressorConfig | None = None) -> None:
        self.config = config or CompressorConfig()
        self.table: list[int] = [EMPTY_SLOT] * self.config.table_capacity
        self.data: bytes = b""

    @property
    def table_capacity(self) -> int:
        return self.config.table_capacity

    @property
    def min_match_length(self) -> int:
        return self.config.min_match_length

    def reset(self, data: bytes) -> None:
        """Clear the table and start matching against `data`."""
        for slot in range(len(self.table)):
            self.table[slot] = EMPTY_SLOT
        self.data = data

    def hash(self, position: int) -> int:
        """Map the bytes at `position` to a starting slot.

        FAST mode mixes the first `table_capacity // 255 + 1` bytes.
        THOROUGH mode mixes the whole `min_match_length` window.
        Both are clamped to the bytes actually available.
        """
        if self.config.mode is MatchMode.FAST:
            window = self.table_capacity // FAST_HASH_DIVISOR + 1
            return _fast_hash(self.data, position, window) % self.table_capacity

        return _thorough_hash(self.data, position, self.min_match_length) % self.table_capacity

    def find_match(self, position: int) -> tuple[int, int]:
        """Search the table for an earlier occurrence of the bytes at `position`.

        The slot the scan ends on is overwritten with `position`.

        Args:
            position: Cursor into the bound input.

        Returns:
            Tuple of (match_length, offset), or (0, 0) when nothing qualifies.
        """
        table = self.table
        capacity = self.table_capacity
        min_length = self.min_match_length
        fast = self.config.mode is MatchMode.FAST

        base = self.hash(position)
        slot = base

        best_quality = 0
        best_length = 0
        best_offset = 0

        while True:
            candidate = table[slot]
            if candidate == EMPTY_SLOT:
                break

            length = self._common_prefix(candidate, position)

            if length >= min_length:
                distance = position - candidate
                quality = (length * capacity) // distance
                if quality > best_quality:
                    best_quality = quality
                    best_length = length
                    best_offset = distance

                if fast:
                    break

            # Step back, wrapping from the first slot to the last.
            slot = slot - 1 if slot > 0 else capacity - 1
            if slot == base:
                break

        table[slot] = position

        return best_length, best_offset

    def _common_prefix(self, candidate: int, position: int) -> int:
        """Count matching bytes at `candidate` and `position`.

        Stops at end of input, or once the candidate range reaches `position`.
        """
        data = self.data
        remaining = len(data) - position
        length = 0

        while data[position + length] == data[candidate + length]:
            length += 1
            if length >= remaining or candidate + length >= position:
                break

        return length


def _fast_hash(data: bytes, position: int, window: int) -> int:
    """XOR of each byte times an odd constant, over a short window."""
    value = HASH_SEED
    for byte in data[position : position + window]:
        value ^= (byte * HASH_MULTIPLIER) & HASH_MASK
    return value


def _thorough_hash(data: bytes, position: int, window: int) -> int:
    """Multiplicative hash over the full match window."""
    value = HASH_SEED
    for byte in data[position : position + window]:
        value = ((value ^ byte) * THOROUGH_HASH_MULTIPLIER) & HASH_MASK
    return value
