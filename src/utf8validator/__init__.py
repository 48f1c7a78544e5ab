"""utf8validator - streaming, one-code-point-at-a-time UTF-8 validation.

Decodes UTF-8 from any forward-only byte source and rejects every kind of
ill-formed sequence: stray continuation bytes, invalid lead bytes, truncated
and interrupted sequences, overlong encodings, surrogate halves, and values
above U+10FFFF.

Public API:
    validate_next - Decode the next code point: (code_point, error) tuple
    classify - Sequence length announced by a lead byte
    SequenceLength - Enumerated sequence length (1-4)
    ByteCursor / IterByteSource / StreamByteSource - Byte sources
    scan / decode_text - Whole-input helpers with error recovery

Exceptions (returned by validate_next, never raised by it):
    Utf8Error - Base class
    InvalidLeadError, NotEnoughRoomError, IncompleteSequenceError,
    OverlongSequenceError, InvalidCodePointError

Submodules:
    utf8validator.diagnostics - Diagnostic codes, templates, formatter
    utf8validator.config - ScanConfig
    utf8validator.cli - Command-line entry point
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .decoder import SequenceLength, classify, validate_next
from .diagnostics import (
    IncompleteSequenceError,
    InvalidCodePointError,
    InvalidLeadError,
    NotEnoughRoomError,
    OverlongSequenceError,
    Utf8Error,
)
from .scanner import ScanReport, decode_text, scan
from .source import ByteCursor, ByteSource, IterByteSource, StreamByteSource

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("utf8validator")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

# UTF-8 as defined by RFC 3629 / Unicode Standard section 3.9
__rfc_url__ = "https://www.rfc-editor.org/rfc/rfc3629"

__all__ = [
    "ByteCursor",
    "ByteSource",
    "IncompleteSequenceError",
    "InvalidCodePointError",
    "InvalidLeadError",
    "IterByteSource",
    "NotEnoughRoomError",
    "OverlongSequenceError",
    "ScanReport",
    "SequenceLength",
    "StreamByteSource",
    "Utf8Error",
    "__rfc_url__",
    "__version__",
    "classify",
    "decode_text",
    "scan",
    "validate_next",
]
