"""Tests for the round-trip driver."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from lz77.__main__ import ColoredFormatter, generate_sample, main, run_round_trip
from lz77.config import CompressorConfig

pytestmark = pytest.mark.usefixtures("restore_root_logger")


class TestGenerateSample:
    """Tests for generated input."""

    def test_size_and_alphabet(self) -> None:
        sample = generate_sample(1024, seed=1)
        assert len(sample) == 1024
        assert set(sample) <= set(b"AB")

    def test_seed_is_reproducible(self) -> None:
        assert generate_sample(256, seed=9) == generate_sample(256, seed=9)

    def test_empty(self) -> None:
        assert generate_sample(0, seed=1) == b""


class TestRunRoundTrip:
    """Tests for the report produced by one round trip."""

    def test_reports_passing_checks(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO)
        assert run_round_trip(b"AB" * 512, CompressorConfig()) is True

        assert "Size Check: PASS" in caplog.text
        assert "Integrity Check: PASS" in caplog.text
        assert "Compression Ratio:" in caplog.text
        assert "Compression Size:" in caplog.text


class TestMain:
    """Tests for the command line entry point."""

    def test_generated_input(self, caplog: pytest.LogCaptureFixture) -> None:
        assert main(["--seed", "3", "--no-color"]) == 0
        assert "Integrity Check: PASS" in caplog.text

    def test_file_input(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "input.txt"
        path.write_bytes(b"the rain in spain falls mainly on the plain. " * 40)

        assert main([str(path), "--mode", "thorough", "--min-match", "6", "--no-color"]) == 0
        assert "Size Check: PASS" in caplog.text

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.bin"
        path.write_bytes(b"")
        assert main([str(path), "--no-color"]) == 0

    def test_missing_file(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        assert main([str(tmp_path / "missing.bin"), "--no-color"]) == 2
        assert "Cannot read" in caplog.text

    def test_allocation_limit_reported(self, caplog: pytest.LogCaptureFixture) -> None:
        assert main(["--size", "100", "--seed", "1", "--max-length", "10", "--no-color"]) == 2
        assert "Round trip failed" in caplog.text

    def test_invalid_parameters_exit(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--min-match", "0"])
        assert exc_info.value.code == 2

    def test_negative_max_length_exits(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--max-length", "-1"])
        assert exc_info.value.code == 2

    def test_verbose_enables_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        assert main(["--seed", "2", "-v", "--no-color"]) == 0
        assert logging.getLogger().level == logging.DEBUG
        assert "Compressed 1024 bytes" in caplog.text


class TestColoredFormatter:
    """Tests for colored log output."""

    def test_includes_level_and_message(self) -> None:
        record = logging.LogRecord("lz77", logging.WARNING, __file__, 1, "hello %s", ("x",), None)
        line = ColoredFormatter().format(record)
        assert "WARNING" in line
        assert "hello x" in line
        assert ColoredFormatter.YELLOW in line
