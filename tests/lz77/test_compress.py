"""Compression and round-trip tests."""

from __future__ import annotations

import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from lz77 import (
    CompressionResult,
    CompressorConfig,
    LZ77Compressor,
    MatchMode,
    compress,
    decompress,
)

SAMPLE_TEXT = (
    b"It was the best of times, it was the worst of times, it was the age of wisdom, "
    b"it was the age of foolishness, it was the epoch of belief, it was the epoch of "
    b"incredulity, it was the season of Light, it was the season of Darkness, it was "
    b"the spring of hope, it was the winter of despair."
)


class TestSimpleCompression:
    """Basic inputs."""

    def test_empty_input(self) -> None:
        """Empty input still gets a header and a bare terminal."""
        output, ratio = compress(b"")
        assert output == b"\x00\x01"
        assert ratio == 0.0
        assert decompress(output) == b""

    def test_shorter_than_min_match(self) -> None:
        """Input below the minimum match length is all tail."""
        output, _ = compress(b"hello")
        assert output == b"\x05\x01hello"
        assert decompress(output) == b"hello"

    def test_exactly_min_match_length(self) -> None:
        data = b"0123456789ab"
        assert decompress(compress(data).output) == data

    def test_single_bytes(self) -> None:
        for char in [b"a", b"\x00", b"\xff"]:
            assert decompress(compress(char).output) == char

    def test_result_is_a_named_tuple(self) -> None:
        result = compress(SAMPLE_TEXT)
        assert isinstance(result, CompressionResult)
        output, ratio = result
        assert output == result.output
        assert ratio == result.ratio

    def test_accepts_bytearray_and_memoryview(self) -> None:
        data = SAMPLE_TEXT * 2
        assert compress(bytearray(data)) == compress(data)
        assert compress(memoryview(data)) == compress(data)


class TestCompressionGain:
    """Compression of redundant and random data."""

    def test_repeated_pattern_shrinks(self) -> None:
        """1024 repetitions of 'AB' compress with a positive ratio."""
        data = b"AB" * 1024
        output, ratio = compress(data, min_match_length=12)

        assert len(output) < len(data)
        assert ratio > 0
        assert ratio == (len(data) - len(output)) / len(data)
        assert decompress(output) == data

    def test_text_roundtrip(self) -> None:
        data = SAMPLE_TEXT * 20
        output, ratio = compress(data)
        assert ratio > 0
        assert decompress(output) == data

    def test_random_input_roundtrips(self) -> None:
        """Incompressible input may grow but must come back intact."""
        data = random.Random(42).randbytes(1024)
        output, ratio = compress(data)

        assert ratio == (len(data) - len(output)) / len(data)
        assert decompress(output) == data

    def test_random_input_cannot_shrink_much(self) -> None:
        data = random.Random(7).randbytes(1024)
        output, ratio = compress(data)
        assert ratio <= 0.01


class TestTablePressure:
    """Small tables force collisions and eviction but never corrupt output."""

    @pytest.mark.parametrize("table_capacity", [1, 2, 3, 16])
    @pytest.mark.parametrize("mode", list(MatchMode))
    def test_small_table_roundtrip(self, table_capacity: int, mode: MatchMode) -> None:
        data = SAMPLE_TEXT * 10 + random.Random(1).randbytes(500) + SAMPLE_TEXT
        output, _ = compress(data, min_match_length=4, table_capacity=table_capacity, mode=mode)
        assert decompress(output) == data

    def test_ab_samples_with_small_table(self) -> None:
        rng = random.Random(3)
        data = bytes(rng.choice(b"AB") for _ in range(4096))
        output, _ = compress(data, table_capacity=8)
        assert decompress(output) == data


class TestModes:
    """Fast and thorough matching."""

    @pytest.mark.parametrize("mode", list(MatchMode))
    def test_mode_roundtrip(self, mode: MatchMode) -> None:
        data = SAMPLE_TEXT * 8
        output, ratio = compress(data, min_match_length=6, table_capacity=256, mode=mode)
        assert ratio > 0
        assert decompress(output) == data

    def test_thorough_mode_roundtrips_repetition(self) -> None:
        data = b"AB" * 1024
        output, ratio = compress(data, mode=MatchMode.THOROUGH)
        assert ratio > 0
        assert decompress(output) == data


class TestCompressorInstance:
    """Reuse of one compressor and its lookup table."""

    def test_table_is_allocated_once(self) -> None:
        compressor = LZ77Compressor(CompressorConfig(table_capacity=64))
        table = compressor.match_finder.table
        compressor.compress(SAMPLE_TEXT)
        compressor.compress(SAMPLE_TEXT * 2)

        assert compressor.match_finder.table is table
        assert len(table) == 64

    def test_reuse_gives_identical_output(self) -> None:
        """Earlier inputs leave no trace in later results."""
        compressor = LZ77Compressor()
        first = compressor.compress(SAMPLE_TEXT)
        compressor.compress(random.Random(5).randbytes(3000))
        assert compressor.compress(SAMPLE_TEXT) == first

    def test_reuse_after_longer_input(self) -> None:
        compressor = LZ77Compressor(CompressorConfig(min_match_length=4, table_capacity=32))
        compressor.compress(SAMPLE_TEXT * 10)
        output, _ = compressor.compress(b"short input, short input")
        assert decompress(output) == b"short input, short input"

    def test_module_function_matches_instance(self) -> None:
        config = CompressorConfig(min_match_length=8, table_capacity=128)
        assert compress(SAMPLE_TEXT, 8, 128) == LZ77Compressor(config).compress(SAMPLE_TEXT)


class TestInvalidParameters:
    """Out-of-range parameters are rejected before compressing."""

    def test_zero_min_match_length(self) -> None:
        with pytest.raises(ValidationError):
            compress(b"data", min_match_length=0)

    def test_zero_table_capacity(self) -> None:
        with pytest.raises(ValidationError):
            compress(b"data", table_capacity=0)


class TestRoundTripProperty:
    """Property-based round trips."""

    @settings(max_examples=150)
    @given(
        data=st.binary(max_size=400),
        min_match_length=st.integers(min_value=1, max_value=16),
        table_capacity=st.integers(min_value=1, max_value=64),
        mode=st.sampled_from(list(MatchMode)),
    )
    def test_roundtrip(
        self, data: bytes, min_match_length: int, table_capacity: int, mode: MatchMode
    ) -> None:
        output, _ = compress(data, min_match_length, table_capacity, mode)
        assert decompress(output) == data

    @settings(max_examples=50)
    @given(
        pattern=st.binary(min_size=1, max_size=8),
        repeats=st.integers(min_value=1, max_value=200),
        suffix=st.binary(max_size=20),
    )
    def test_repetitive_roundtrip(self, pattern: bytes, repeats: int, suffix: bytes) -> None:
        data = pattern * repeats + suffix
        output, _ = compress(data, min_match_length=3, table_capacity=32)
        assert decompress(output) == data
