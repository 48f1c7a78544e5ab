"""UTF-8 error hierarchy with structured diagnostics.

Errors are Exception subclasses so callers can raise them, but the
validation core only ever returns them. Each instance stores the
Diagnostic it was built from plus the raw payload for programmatic use.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import ClassVar

from .codes import Diagnostic, DiagnosticCode
from .templates import ErrorTemplate

__all__ = [
    "IncompleteSequenceError",
    "InvalidCodePointError",
    "InvalidLeadError",
    "NotEnoughRoomError",
    "OverlongSequenceError",
    "Utf8Error",
]


def _rebuild(
    cls: type[Utf8Error], args: tuple[object, ...], kwargs: dict[str, object]
) -> Utf8Error:
    return cls(*args, **kwargs)  # type: ignore[arg-type]


class Utf8Error(Exception):
    """Base exception for all UTF-8 validation errors.

    Attributes:
        code: Error classification (class-level)
        diagnostic: Structured diagnostic information
        offset: Byte offset of the sequence's lead byte
    """

    code: ClassVar[DiagnosticCode]

    def __init__(self, diagnostic: Diagnostic, *, offset: int) -> None:
        """Initialize Utf8Error.

        Args:
            diagnostic: Diagnostic describing the failure
            offset: Byte offset of the lead byte
        """
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic
        self.offset = offset

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Utf8Error):
            return NotImplemented
        return type(self) is type(other) and self.diagnostic == other.diagnostic

    def __hash__(self) -> int:
        return hash((type(self), self.diagnostic))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.diagnostic.message!r}, offset={self.offset})"

    def _init_args(self) -> tuple[tuple[object, ...], dict[str, object]]:
        """Positional and keyword arguments that rebuild this error."""
        return ((self.diagnostic,), {"offset": self.offset})

    def __reduce__(self) -> tuple[object, ...]:
        args, kwargs = self._init_args()
        return (_rebuild, (type(self), args, kwargs))


class InvalidLeadError(Utf8Error):
    """Byte matches none of the four lead byte shapes.

    Raised for stray continuation bytes (0x80-0xBF) and 0xF8-0xFF.
    Nothing is consumed from the source.
    """

    code = DiagnosticCode.INVALID_LEAD

    def __init__(self, byte: int, *, offset: int) -> None:
        super().__init__(ErrorTemplate.invalid_lead(byte, offset), offset=offset)
        self.byte = byte

    def _init_args(self) -> tuple[tuple[object, ...], dict[str, object]]:
        return ((self.byte,), {"offset": self.offset})


class NotEnoughRoomError(Utf8Error):
    """Byte source exhausted before the sequence was complete.

    This is end of input, not malformation: a streaming caller may
    retry once more bytes arrive if it snapshotted the source.

    Attributes:
        needed: Length of the sequence being decoded (0 for empty input)
        available: Bytes of it that were present
    """

    code = DiagnosticCode.NOT_ENOUGH_ROOM

    def __init__(self, *, offset: int, needed: int = 0, available: int = 0) -> None:
        super().__init__(
            ErrorTemplate.not_enough_room(offset, needed, available), offset=offset
        )
        self.needed = needed
        self.available = available

    def _init_args(self) -> tuple[tuple[object, ...], dict[str, object]]:
        return (
            (),
            {"offset": self.offset, "needed": self.needed, "available": self.available},
        )


class IncompleteSequenceError(Utf8Error):
    """Byte where a continuation byte was expected fails the 10xxxxxx test.

    Attributes:
        partial: Value assembled from the lead and valid continuation bytes
        byte: The offending byte (left unconsumed in the source)
        consumed: Bytes of the sequence consumed before the failure
    """

    code = DiagnosticCode.INCOMPLETE_SEQUENCE

    def __init__(self, partial: int, byte: int, *, offset: int, consumed: int) -> None:
        super().__init__(
            ErrorTemplate.incomplete_sequence(partial, byte, offset, consumed),
            offset=offset,
        )
        self.partial = partial
        self.byte = byte
        self.consumed = consumed

    def _init_args(self) -> tuple[tuple[object, ...], dict[str, object]]:
        return (
            (self.partial, self.byte),
            {"offset": self.offset, "consumed": self.consumed},
        )


class OverlongSequenceError(Utf8Error):
    """Decoded value has a shorter valid encoding.

    Example: 0xC0 0x80 decodes to U+0000, which must be the single byte 0x00.
    """

    code = DiagnosticCode.OVERLONG_SEQUENCE

    def __init__(self, code_point: int, length: int, *, offset: int) -> None:
        super().__init__(
            ErrorTemplate.overlong_sequence(code_point, length, offset), offset=offset
        )
        self.code_point = code_point
        self.length = length

    def _init_args(self) -> tuple[tuple[object, ...], dict[str, object]]:
        return ((self.code_point, self.length), {"offset": self.offset})


class InvalidCodePointError(Utf8Error):
    """Decoded value exceeds U+10FFFF or is a surrogate half."""

    code = DiagnosticCode.INVALID_CODE_POINT

    def __init__(self, code_point: int, length: int, *, offset: int) -> None:
        super().__init__(
            ErrorTemplate.invalid_code_point(code_point, length, offset), offset=offset
        )
        self.code_point = code_point
        self.length = length

    def _init_args(self) -> tuple[tuple[object, ...], dict[str, object]]:
        return ((self.code_point, self.length), {"offset": self.offset})
