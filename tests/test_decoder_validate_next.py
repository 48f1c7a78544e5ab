"""Tests for decoder.validate_next: decoding, error taxonomy, cursor effects.

Each error kind is exercised with the canonical byte sequences from the
Unicode Standard's ill-formed examples, and the exact cursor position
after every failure is asserted.
"""

from __future__ import annotations

import pytest

from utf8validator.decoder import SequenceLength, validate_code_point, validate_next
from utf8validator.diagnostics.codes import DiagnosticCode
from utf8validator.diagnostics.errors import (
    IncompleteSequenceError,
    InvalidCodePointError,
    InvalidLeadError,
    NotEnoughRoomError,
    OverlongSequenceError,
)
from utf8validator.source import ByteCursor, IterByteSource

# ============================================================================
# WELL-FORMED INPUT
# ============================================================================


class TestValidSequences:
    """Well-formed sequences of every length."""

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            (b"\x00", 0x00),
            (b"A", 0x41),
            (b"\x7f", 0x7F),
            (b"\xc2\x80", 0x80),
            (b"\xc3\xa9", 0xE9),
            (b"\xdf\xbf", 0x7FF),
            (b"\xe0\xa0\x80", 0x800),
            (b"\xe2\x82\xac", 0x20AC),
            (b"\xed\x9f\xbf", 0xD7FF),
            (b"\xee\x80\x80", 0xE000),
            (b"\xef\xbf\xbf", 0xFFFF),
            (b"\xf0\x90\x80\x80", 0x10000),
            (b"\xf0\x9f\x98\x80", 0x1F600),
            (b"\xf4\x8f\xbf\xbf", 0x10FFFF),
        ],
    )
    def test_decodes_value(self, data: bytes, expected: int) -> None:
        cursor = ByteCursor(data)

        code_point, error = validate_next(cursor)

        assert error is None
        assert code_point == expected
        assert cursor.position == len(data)

    def test_consumes_only_one_code_point(self) -> None:
        cursor = ByteCursor("€uro".encode())

        assert validate_next(cursor) == (0x20AC, None)
        assert cursor.position == 3
        assert cursor.peek() == ord("u")

    def test_streaming_ascii_then_exhaustion(self) -> None:
        """ASCII "A!" yields 0x41, 0x21, then NotEnoughRoom."""
        cursor = ByteCursor(bytes([0x41, 0x21]))

        assert validate_next(cursor) == (0x41, None)
        assert validate_next(cursor) == (0x21, None)
        code_point, error = validate_next(cursor)

        assert code_point is None
        assert isinstance(error, NotEnoughRoomError)

    @pytest.mark.parametrize("text", ["qwerty", "¡¢£¤¥¦§¨©", "ขฃคฅฆง", "😀𒀀𒀁𒀂"])
    def test_decodes_text_code_point_by_code_point(self, text: str) -> None:
        cursor = ByteCursor(text.encode("utf-8"))

        for char in text:
            assert validate_next(cursor) == (ord(char), None)

        _, error = validate_next(cursor)
        assert isinstance(error, NotEnoughRoomError)


# ============================================================================
# ERROR TAXONOMY
# ============================================================================


class TestInvalidLead:
    """Bytes that cannot start a sequence."""

    @pytest.mark.parametrize("lead", [0x80, 0xBF, 0xF8, 0xFC, 0xFE, 0xFF])
    def test_rejected_without_consuming(self, lead: int) -> None:
        cursor = ByteCursor(bytes([lead, 0x41]))

        code_point, error = validate_next(cursor)

        assert code_point is None
        assert isinstance(error, InvalidLeadError)
        assert error.byte == lead
        assert error.offset == 0
        assert cursor.position == 0

    def test_bare_continuation_byte(self) -> None:
        _, error = validate_next(ByteCursor(b"\x80"))

        assert isinstance(error, InvalidLeadError)
        assert error.code is DiagnosticCode.INVALID_LEAD
        assert str(error) == 'Invalid lead byte "0x80"'


class TestNotEnoughRoom:
    """Source exhausted before the sequence completed."""

    def test_empty_input(self) -> None:
        _, error = validate_next(ByteCursor(b""))

        assert isinstance(error, NotEnoughRoomError)
        assert error.needed == 0
        assert error.available == 0

    @pytest.mark.parametrize(
        ("data", "needed"),
        [
            (b"\xc3", 2),
            (b"\xe2", 3),
            (b"\xe2\x82", 3),
            (b"\xf0", 4),
            (b"\xf0\x9f\x98", 4),
        ],
    )
    def test_truncated_sequence(self, data: bytes, needed: int) -> None:
        cursor = ByteCursor(data)

        code_point, error = validate_next(cursor)

        assert code_point is None
        assert isinstance(error, NotEnoughRoomError)
        assert error.needed == needed
        assert error.available == len(data)
        assert cursor.position == len(data)

    def test_lone_three_byte_lead(self) -> None:
        _, error = validate_next(ByteCursor(b"\xe2"))

        assert isinstance(error, NotEnoughRoomError)
        assert not isinstance(error, IncompleteSequenceError)


class TestIncompleteSequence:
    """Non-continuation byte where a continuation byte belongs."""

    def test_lead_followed_by_ascii(self) -> None:
        cursor = ByteCursor(b"\xe2\x41")

        code_point, error = validate_next(cursor)

        assert code_point is None
        assert isinstance(error, IncompleteSequenceError)
        assert error.byte == 0x41
        assert error.partial == 0x2
        assert error.consumed == 1
        # Offending byte is left for the caller
        assert cursor.position == 1
        assert cursor.peek() == 0x41

    def test_fails_fast_on_first_bad_byte(self) -> None:
        """Bytes after the offending one are never read."""
        consumed: list[int] = []

        def producer():
            for byte in (0xF0, 0x9F, 0x41, 0x80, 0x80):
                consumed.append(byte)
                yield byte

        source = IterByteSource(producer())
        _, error = validate_next(source)

        assert isinstance(error, IncompleteSequenceError)
        assert consumed == [0xF0, 0x9F, 0x41]
        assert source.position == 2

    @pytest.mark.parametrize(
        ("data", "partial"),
        [
            (b"\xc3\xc3", 0x03),
            (b"\xe2\x82\x41", (0x2 << 6) | 0x02),
            (b"\xf0\x9f\x98\xf0", (((0x0 << 6) | 0x1F) << 6) | 0x18),
        ],
    )
    def test_partial_value_reported(self, data: bytes, partial: int) -> None:
        _, error = validate_next(ByteCursor(data))

        assert isinstance(error, IncompleteSequenceError)
        assert error.partial == partial
        assert error.consumed == len(data) - 1


class TestOverlongSequence:
    """Values encoded in more bytes than necessary."""

    @pytest.mark.parametrize(
        ("data", "value"),
        [
            (b"\xc0\x80", 0x00),
            (b"\xc0\xaf", 0x2F),
            (b"\xc1\xbf", 0x7F),
            (b"\xe0\x80\x80", 0x00),
            (b"\xe0\x9f\xbf", 0x7FF),
            (b"\xf0\x80\x80\x80", 0x00),
            (b"\xf0\x8f\xbf\xbf", 0xFFFF),
        ],
    )
    def test_rejected(self, data: bytes, value: int) -> None:
        cursor = ByteCursor(data)

        code_point, error = validate_next(cursor)

        assert code_point is None
        assert isinstance(error, OverlongSequenceError)
        assert error.code_point == value
        assert error.length == len(data)
        assert cursor.position == len(data)

    def test_overlong_nul_is_not_accepted(self) -> None:
        code_point, error = validate_next(ByteCursor(b"\xc0\x80"))

        assert code_point is None
        assert str(error) == 'Overlong sequence "0x0"'


class TestInvalidCodePoint:
    """Surrogates and values above U+10FFFF."""

    @pytest.mark.parametrize(
        ("data", "value"),
        [
            (b"\xed\xa0\x80", 0xD800),
            (b"\xed\xad\xbf", 0xDB7F),
            (b"\xed\xb0\x80", 0xDC00),
            (b"\xed\xbf\xbf", 0xDFFF),
            (b"\xf4\x90\x80\x80", 0x110000),
            (b"\xf7\xbf\xbf\xbf", 0x1FFFFF),
        ],
    )
    def test_rejected(self, data: bytes, value: int) -> None:
        cursor = ByteCursor(data)

        code_point, error = validate_next(cursor)

        assert code_point is None
        assert isinstance(error, InvalidCodePointError)
        assert error.code_point == value
        assert cursor.position == len(data)

    def test_four_byte_surrogate_is_invalid_not_overlong(self) -> None:
        """Scalar value checks take precedence over the overlong check."""
        _, error = validate_next(ByteCursor(b"\xf0\x8d\xa0\x80"))

        assert isinstance(error, InvalidCodePointError)
        assert error.code_point == 0xD800


# ============================================================================
# POST-DECODE VALIDATION
# ============================================================================


class TestValidateCodePoint:
    """validate_code_point in isolation."""

    def test_accepts_minimal_encoding(self) -> None:
        assert validate_code_point(0x20AC, SequenceLength.THREE) is None

    def test_reports_offset(self) -> None:
        error = validate_code_point(0x41, SequenceLength.TWO, offset=7)

        assert isinstance(error, OverlongSequenceError)
        assert error.offset == 7
        assert error.diagnostic.span is not None
        assert (error.diagnostic.span.start, error.diagnostic.span.end) == (7, 9)


# ============================================================================
# SOURCE ADAPTATION
# ============================================================================


class TestSourceOverloads:
    """validate_next accepts buffers and iterables directly."""

    @pytest.mark.parametrize(
        "source",
        [
            b"\xe2\x82\xac",
            bytearray(b"\xe2\x82\xac"),
            memoryview(b"\xe2\x82\xac"),
            [0xE2, 0x82, 0xAC],
            [b"\xe2", b"\x82", b"\xac"],
        ],
    )
    def test_owned_and_borrowed_bytes(self, source: object) -> None:
        assert validate_next(source) == (0x20AC, None)  # type: ignore[arg-type]

    def test_offsets_follow_source_position(self) -> None:
        cursor = ByteCursor(b"ab\x80")
        validate_next(cursor)
        validate_next(cursor)

        _, error = validate_next(cursor)

        assert error is not None
        assert error.offset == 2
