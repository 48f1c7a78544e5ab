"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import ByteSpan, Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Payloads are rendered in hexadecimal (``0x80``, ``0xd800``) so that
    messages read the same as a hex dump of the input.
    """

    # Base documentation URL (Unicode Standard, section 3.9)
    _DOCS_BASE = "https://www.unicode.org/versions/latest/core-spec/chapter-3"
    _DOCS_UTF8 = f"{_DOCS_BASE}/#G31703"

    @staticmethod
    def invalid_lead(byte: int, offset: int) -> Diagnostic:
        """Byte cannot start a UTF-8 sequence.

        Args:
            byte: The offending lead byte
            offset: Position of the byte in the input

        Returns:
            Diagnostic for INVALID_LEAD
        """
        msg = f'Invalid lead byte "{byte:#x}"'
        if byte >> 6 == 0b10:
            hint = "0x80-0xBF are continuation bytes and cannot start a sequence"
        else:
            hint = "0xF8-0xFF never appear in UTF-8"
        return Diagnostic(
            code=DiagnosticCode.INVALID_LEAD,
            message=msg,
            span=ByteSpan(offset, offset + 1),
            hint=hint,
            help_url=ErrorTemplate._DOCS_UTF8,
            found=f"{byte:#x}",
            expected="0x00-0x7F, 0xC0-0xDF, 0xE0-0xEF or 0xF0-0xF7",
        )

    @staticmethod
    def not_enough_room(offset: int, needed: int, available: int) -> Diagnostic:
        """Input ended before the sequence was complete.

        Args:
            offset: Position of the lead byte (or end of input if none)
            needed: Bytes the sequence requires (0 when no lead byte was read)
            available: Bytes that were actually present

        Returns:
            Diagnostic for NOT_ENOUGH_ROOM
        """
        if needed == 0:
            msg = "Not enough room for validate UTF-8: input is empty"
            hint = "There is no lead byte left to classify"
        else:
            msg = (
                f"Not enough room for validate UTF-8: sequence needs {needed} "
                f"byte(s), input ends after {available}"
            )
            hint = "The input was truncated in the middle of a character"
        return Diagnostic(
            code=DiagnosticCode.NOT_ENOUGH_ROOM,
            message=msg,
            span=ByteSpan(offset, offset + available),
            hint=hint,
            help_url=ErrorTemplate._DOCS_UTF8,
            expected=f"{needed} byte(s)" if needed else None,
        )

    @staticmethod
    def incomplete_sequence(
        partial: int, byte: int, offset: int, consumed: int
    ) -> Diagnostic:
        """Continuation byte expected but another byte found.

        Args:
            partial: Value assembled from the bytes consumed so far
            byte: The byte that is not a continuation byte
            offset: Position of the lead byte
            consumed: Bytes of the sequence consumed before the failure

        Returns:
            Diagnostic for INCOMPLETE_SEQUENCE
        """
        msg = f'Incomplete sequence "{partial:#x}"'
        return Diagnostic(
            code=DiagnosticCode.INCOMPLETE_SEQUENCE,
            message=msg,
            span=ByteSpan(offset, offset + consumed),
            hint=f"Byte {byte:#x} at offset {offset + consumed} is not of the form 10xxxxxx",
            help_url=ErrorTemplate._DOCS_UTF8,
            found=f"{byte:#x}",
            expected="continuation byte 0x80-0xBF",
        )

    @staticmethod
    def overlong_sequence(code_point: int, length: int, offset: int) -> Diagnostic:
        """Value encoded with more bytes than necessary.

        Args:
            code_point: The decoded value
            length: Bytes used by the encoding
            offset: Position of the lead byte

        Returns:
            Diagnostic for OVERLONG_SEQUENCE
        """
        msg = f'Overlong sequence "{code_point:#x}"'
        return Diagnostic(
            code=DiagnosticCode.OVERLONG_SEQUENCE,
            message=msg,
            span=ByteSpan(offset, offset + length),
            hint=f"U+{code_point:04X} must be encoded in fewer than {length} bytes",
            help_url=ErrorTemplate._DOCS_UTF8,
            found=f"{code_point:#x}",
        )

    @staticmethod
    def invalid_code_point(code_point: int, length: int, offset: int) -> Diagnostic:
        """Decoded value is not a Unicode scalar value.

        Args:
            code_point: The decoded value
            length: Bytes used by the encoding
            offset: Position of the lead byte

        Returns:
            Diagnostic for INVALID_CODE_POINT
        """
        msg = f'Invalid code point "{code_point:#x}"'
        if 0xD800 <= code_point <= 0xDFFF:
            hint = "Surrogate halves (U+D800-U+DFFF) are not encodable in UTF-8"
        else:
            hint = "Code points above U+10FFFF do not exist"
        return Diagnostic(
            code=DiagnosticCode.INVALID_CODE_POINT,
            message=msg,
            span=ByteSpan(offset, offset + length),
            hint=hint,
            help_url=ErrorTemplate._DOCS_UTF8,
            found=f"{code_point:#x}",
            expected="U+0000-U+D7FF or U+E000-U+10FFFF",
        )
