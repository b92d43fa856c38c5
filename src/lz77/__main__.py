"""
LZ77 round-trip driver.

Compress a file (or generated sample data), decompress the result, and
report timings, sizes and integrity checks.

Usage::

    python -m lz77 path/to/file
    python -m lz77 --size 4096 --seed 7
    python -m lz77 path/to/file --min-match 8 --table-capacity 512 --mode thorough

Options:
    FILE               Input file (default: random 'A'/'B' bytes)
    --size             Size of generated input (default: 1024)
    --seed             Seed for generated input (default: random)
    --min-match        Minimum match length (default: 12)
    --table-capacity   Lookup table slots (default: 512)
    --mode             Match finder mode: fast or thorough (default: fast)
    --max-length       Decompression allocation limit in bytes
"""

from __future__ import annotations

import argparse
import logging
import random
import time
from pathlib import Path

from pydantic import ValidationError

from lz77.compress import LZ77Compressor
from lz77.config import CompressorConfig, MatchMode
from lz77.constants import DEFAULT_MIN_MATCH_LENGTH
from lz77.decompress import decompress
from lz77.exceptions import LZ77Error

DEFAULT_SAMPLE_SIZE = 1024
"""Bytes generated when no input file is given."""

DEFAULT_DRIVER_TABLE_CAPACITY = 512
"""The driver runs with a smaller table than the library default."""

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)

        timestamp = self.formatTime(record, self.datefmt)
        colored_time = f"{self.CYAN}{timestamp}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"

        return f"{colored_time} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure the root logger with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def generate_sample(size: int, seed: int | None = None) -> bytes:
    """Random bytes drawn from b"A" and b"B".

    Two symbols make plenty of short repeats for the match finder.
    """
    rng = random.Random(seed)
    return bytes(rng.choice(b"AB") for _ in range(size))


def load_input(path: Path | None, size: int, seed: int | None) -> bytes:
    """Read the input file, or generate sample data when no path is given."""
    if path is None:
        return generate_sample(size, seed)
    return path.read_bytes()


def run_round_trip(
    data: bytes,
    config: CompressorConfig,
    max_uncompressed_length: int | None = None,
) -> bool:
    """
    Compress and decompress `data`, logging a report.

    Returns:
        True when the round trip reproduced the input exactly.
    """
    compressor = LZ77Compressor(config)

    start = time.perf_counter()
    compressed, ratio = compressor.compress(data)
    compressed_at = time.perf_counter()
    restored = decompress(compressed, max_uncompressed_length)
    restored_at = time.perf_counter()

    size_ok = len(restored) == len(data)
    integrity_ok = restored == data

    logger.info("Compression Time: %.3f ms", (compressed_at - start) * 1000)
    logger.info("Decompression Time: %.3f ms", (restored_at - compressed_at) * 1000)
    logger.info("Compression Size: %d", len(compressed))
    logger.info("Compression Ratio: %.6f", ratio)
    logger.info("Size Check: %s", "PASS" if size_ok else "FAIL")
    logger.info("Integrity Check: %s", "PASS" if integrity_ok else "FAIL")

    return size_ok and integrity_ok


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="LZ77 compression round trip",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        default=None,
        help="Input file (default: generated 'A'/'B' sample data)",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=DEFAULT_SAMPLE_SIZE,
        help=f"Size of generated input (default: {DEFAULT_SAMPLE_SIZE})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for generated input (default: random)",
    )
    parser.add_argument(
        "--min-match",
        type=int,
        default=DEFAULT_MIN_MATCH_LENGTH,
        help=f"Minimum match length (default: {DEFAULT_MIN_MATCH_LENGTH})",
    )
    parser.add_argument(
        "--table-capacity",
        type=int,
        default=DEFAULT_DRIVER_TABLE_CAPACITY,
        help=f"Lookup table slots (default: {DEFAULT_DRIVER_TABLE_CAPACITY})",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in MatchMode],
        default=MatchMode.FAST.value,
        help="Match finder mode (default: fast)",
    )
    parser.add_argument(
        "--max-length",
        type=int,
        default=None,
        help="Refuse to decompress streams declaring more bytes than this",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    try:
        config = CompressorConfig(
            min_match_length=args.min_match,
            table_capacity=args.table_capacity,
            mode=MatchMode(args.mode),
        )
    except ValidationError as e:
        parser.error(str(e))

    if args.max_length is not None and args.max_length < 0:
        parser.error(f"--max-length must be non-negative, got {args.max_length}")

    try:
        data = load_input(args.input, args.size, args.seed)
    except OSError as e:
        logger.error("Cannot read %s: %s", args.input, e)
        return 2

    try:
        passed = run_round_trip(data, config, args.max_length)
    except LZ77Error as e:
        logger.error("Round trip failed: %s", e)
        return 2

    return 0 if passed else 1


if __name__ == "__main__":
    raise SystemExit(main())
