#!/usr/bin/env python3
# FUZZ_PLUGIN_HEADER_START
# FUZZ_PLUGIN: utf8 - Streaming UTF-8 Validation (differential)
# Run directly: python fuzz_atheris/fuzz_utf8.py [libFuzzer options] [CORPUS_DIR]
# Requires the fuzz extra: pip install -e ".[fuzz]"
# FUZZ_PLUGIN_HEADER_END
"""Streaming UTF-8 Validation Fuzzer (Atheris).

Targets: utf8validator.decoder.validate_next, utf8validator.scanner
Differential oracle: bytes.decode("utf-8") in strict mode.

Patterns:
    differential - scan() verdict must match the stdlib verdict
    text         - decode_text() of valid input must equal the stdlib text
    chunked      - streaming with a random chunk size must match in-memory scan
    step         - each validate_next() call consumes at most MAX_SEQUENCE_LENGTH bytes

Built for Python 3.13+.
"""

from __future__ import annotations

import atexit
import io
import json
import logging
import os
import sys
from typing import TypeAlias

# --- PEP 695 Type Aliases ---
FuzzStats: TypeAlias = dict[str, int | str]

_fuzz_stats: FuzzStats = {
    "status": "incomplete",
    "iterations": 0,
    "findings": 0,
    "valid_inputs": 0,
    "peak_rss_mb": 0,
}

_PATTERNS = ("differential", "text", "chunked", "step")
_MAX_INPUT = 4096
_RSS_INTERVAL = 1000


def _emit_final_report() -> None:
    report = json.dumps(_fuzz_stats)
    print(f"\n[SUMMARY-JSON-BEGIN]{report}[SUMMARY-JSON-END]", file=sys.stderr)


atexit.register(_emit_final_report)

try:
    import atheris
    import psutil
except ImportError:
    sys.exit(1)

logging.getLogger("utf8validator").setLevel(logging.CRITICAL)

with atheris.instrument_imports(include=["utf8validator"]):
    from utf8validator.config import ScanConfig
    from utf8validator.constants import MAX_SEQUENCE_LENGTH
    from utf8validator.decoder import validate_next
    from utf8validator.scanner import decode_text, scan
    from utf8validator.source import ByteCursor

_process = psutil.Process(os.getpid())


def _stdlib_text(data: bytes) -> str | None:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def _finding(msg: str) -> None:
    _fuzz_stats["findings"] = int(_fuzz_stats["findings"]) + 1
    raise RuntimeError(msg)


def _check_differential(data: bytes, expected: str | None) -> None:
    report = scan(data)
    if report.is_valid != (expected is not None):
        _finding(f"Verdict mismatch: scan={report.is_valid} stdlib={expected is not None}")
    if report.bytes_scanned != len(data):
        _finding(f"Scanned {report.bytes_scanned} of {len(data)} byte(s)")
    if expected is not None and report.code_points != len(expected):
        _finding("Code point count mismatch")


def _check_text(data: bytes, expected: str | None) -> None:
    text, errors = decode_text(data)
    if expected is None:
        if not errors:
            _finding("decode_text() accepted input rejected by stdlib")
    elif text != expected or errors:
        _finding("decode_text() output differs from stdlib")


def _check_chunked(data: bytes, chunk_size: int) -> None:
    streamed = scan(io.BytesIO(data), ScanConfig(chunk_size=chunk_size))
    in_memory = scan(data)
    if streamed != in_memory:
        _finding(f"Streaming with chunk_size={chunk_size} changed the result")


def _check_step(data: bytes) -> None:
    cursor = ByteCursor(data)
    while not cursor.is_eof:
        before = cursor.position
        _, error = validate_next(cursor)
        consumed = cursor.position - before
        if consumed > MAX_SEQUENCE_LENGTH:
            _finding(f"validate_next() consumed {consumed} bytes at {before}")
        if consumed == 0:
            if error is None:
                _finding(f"validate_next() made no progress at {before}")
            # Resume past an unconsumed lead or non-continuation byte
            cursor.next_byte()


def test_one_input(data: bytes) -> None:
    """Atheris entry point: compare the validator against the stdlib decoder."""
    iterations = int(_fuzz_stats["iterations"]) + 1
    _fuzz_stats["iterations"] = iterations
    _fuzz_stats["status"] = "running"

    fdp = atheris.FuzzedDataProvider(data)
    pattern = fdp.PickValueInList(list(_PATTERNS))
    chunk_size = fdp.ConsumeIntInRange(1, 64)
    payload = fdp.ConsumeBytes(_MAX_INPUT)

    expected = _stdlib_text(payload)
    if expected is not None:
        _fuzz_stats["valid_inputs"] = int(_fuzz_stats["valid_inputs"]) + 1

    match pattern:
        case "differential":
            _check_differential(payload, expected)
        case "text":
            _check_text(payload, expected)
        case "chunked":
            _check_chunked(payload, chunk_size)
        case _:
            _check_step(payload)

    if iterations % _RSS_INTERVAL == 0:
        rss_mb = _process.memory_info().rss // (1024 * 1024)
        _fuzz_stats["peak_rss_mb"] = max(int(_fuzz_stats["peak_rss_mb"]), rss_mb)


if __name__ == "__main__":
    atheris.Setup(sys.argv, test_one_input)
    atheris.Fuzz()
