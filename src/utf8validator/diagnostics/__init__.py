"""Diagnostic system for UTF-8 validation errors.

Provides structured error diagnostics with codes, byte spans, hints, and
reference URLs. Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import ByteSpan, Diagnostic, DiagnosticCode
from .errors import (
    IncompleteSequenceError,
    InvalidCodePointError,
    InvalidLeadError,
    NotEnoughRoomError,
    OverlongSequenceError,
    Utf8Error,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "ByteSpan",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "IncompleteSequenceError",
    "InvalidCodePointError",
    "InvalidLeadError",
    "NotEnoughRoomError",
    "OverlongSequenceError",
    "OutputFormat",
    "Utf8Error",
]
