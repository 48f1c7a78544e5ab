"""Command-line validator for UTF-8 files.

Exit codes:
    0: Every input is well-formed UTF-8.
    1: At least one input contains malformed UTF-8.
    2: An input could not be read.

Usage:
    utf8validator [--format {rust,simple,json}] [--max-errors N]
                  [--chunk-size N] [--color] [--first] [-v] [FILE ...]

Reads standard input when no FILE (or "-") is given.

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING, BinaryIO

from utf8validator.config import ScanConfig
from utf8validator.constants import DEFAULT_CHUNK_SIZE
from utf8validator.diagnostics.formatter import OutputFormat
from utf8validator.scanner import scan

if TYPE_CHECKING:
    from collections.abc import Sequence

    from utf8validator.scanner import ScanReport

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_IO_ERROR = 2


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        msg = f"invalid integer: {text!r}"
        raise argparse.ArgumentTypeError(msg) from None
    if value <= 0:
        msg = f"must be positive, got {value}"
        raise argparse.ArgumentTypeError(msg)
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the utf8validator command."""
    from utf8validator import __version__  # noqa: PLC0415 - circular

    parser = argparse.ArgumentParser(
        prog="utf8validator",
        description="Check that files are well-formed UTF-8.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="files to check ('-' or none for standard input)",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.RUST.value,
        help="diagnostic output format (default: rust)",
    )
    parser.add_argument(
        "--max-errors",
        type=_positive_int,
        default=None,
        help="stop checking a file after N errors",
    )
    parser.add_argument(
        "--first",
        action="store_true",
        help="stop at the first error (same as --max-errors 1)",
    )
    parser.add_argument(
        "--chunk-size",
        type=_positive_int,
        default=DEFAULT_CHUNK_SIZE,
        help="bytes read per I/O call (default: %(default)s)",
    )
    parser.add_argument("--color", action="store_true", help="colorize diagnostics")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="log progress to stderr (-vv for per-error debug output)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _config_from_args(args: argparse.Namespace) -> ScanConfig:
    return ScanConfig(
        chunk_size=args.chunk_size,
        max_errors=1 if args.first else args.max_errors,
        output_format=OutputFormat(args.output_format),
        color=args.color,
    )


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:  # noqa: PLR2004
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _report(name: str, report: ScanReport, config: ScanConfig) -> None:
    formatter = config.formatter()
    for error in report.errors:
        rendered = formatter.format(error.diagnostic)
        if config.output_format is OutputFormat.JSON:
            print(rendered)
        else:
            print(f"{name}: {rendered}")
    if report.stopped_early:
        logger.info("%s: stopped after %d error(s)", name, len(report.errors))


def _check_stream(name: str, stream: BinaryIO, config: ScanConfig) -> bool:
    logger.info("Checking %s", name)
    report = scan(stream, config)
    _report(name, report, config)
    return report.is_valid


def main(argv: Sequence[str] | None = None) -> int:
    """Run the validator and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    config = _config_from_args(args)

    files = args.files or ["-"]
    exit_code = EXIT_OK
    for name in files:
        if name == "-":
            valid = _check_stream("<stdin>", sys.stdin.buffer, config)
        else:
            try:
                with open(name, "rb") as handle:
                    valid = _check_stream(name, handle, config)
            except OSError as e:
                logger.error("Cannot read %s: %s", name, e)
                exit_code = EXIT_IO_ERROR
                continue
        if not valid and exit_code == EXIT_OK:
            exit_code = EXIT_INVALID
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
