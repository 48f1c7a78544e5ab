"""Diagnostic codes and data structures.

Defines error codes, byte spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "ByteSpan",
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by the pipeline stage that detects them:
        1000-1999: Byte-level errors (classification and continuation decoding)
        2000-2999: Value-level errors (checks on the assembled code point)
    """

    # Byte-level errors (1000-1999)
    INVALID_LEAD = 1001
    NOT_ENOUGH_ROOM = 1002
    INCOMPLETE_SEQUENCE = 1003

    # Value-level errors (2000-2999)
    OVERLONG_SEQUENCE = 2001
    INVALID_CODE_POINT = 2002


@dataclass(frozen=True, slots=True)
class ByteSpan:
    """Byte range of a malformed sequence in the scanned input.

    Attributes:
        start: Offset of the lead byte (0-indexed)
        end: Offset one past the last byte taken into account (exclusive)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate ByteSpan invariants.

        Raises:
            ValueError: If start is negative or end precedes start.
        """
        if self.start < 0:
            msg = f"ByteSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"ByteSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)

    @property
    def length(self) -> int:
        """Number of bytes covered by the span."""
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Carries everything the
    formatter needs; the validation core never renders it itself.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Byte range of the offending sequence (None if unknown)
        hint: Suggestion for handling the error
        help_url: Reference documentation for this error
        found: Offending byte or value, rendered in hex
        expected: What the decoder needed instead
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: ByteSpan | None = None
    hint: str | None = None
    help_url: str | None = None
    found: str | None = None
    expected: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like the Rust compiler.

        Example output:
            error[INVALID_LEAD]: Invalid lead byte "0x80"
              --> byte 12
              = found: 0x80
              = help: 0x80-0xBF are continuation bytes and cannot start a sequence

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
