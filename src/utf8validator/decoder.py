"""Validating UTF-8 decoder.

Decodes exactly one code point per call from a caller-owned ByteSource:

    1. classify()            - lead byte (peeked, not consumed) -> length
    2. _decode_{one..four}() - consume the lead and its continuation bytes
    3. validate_code_point() - range, surrogate and overlong checks

Failures are returned, never raised: validate_next() yields a
``(code_point, error)`` tuple with exactly one member set. Byte-level
failures short-circuit before any value-level check runs.

Cursor contract:
    - InvalidLead: nothing consumed
    - NotEnoughRoom: every byte that was available has been consumed
    - IncompleteSequence: lead and valid continuation bytes consumed; the
      offending byte is only peeked, so it is the next byte to be read
    - OverlongSequence / InvalidCodePoint: the whole sequence consumed

Empty input:
    A source that is exhausted on the first peek reports NotEnoughRoom
    with needed == 0. There is no lead byte to classify, so this is end
    of input rather than an invalid lead.

Thread Safety:
    No module state. Concurrent calls on independent sources need no
    locking; a single source must not be shared between threads.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable
from enum import IntEnum
from typing import TypeAlias

from utf8validator.constants import (
    ASCII_MAX,
    CODE_POINT_MAX,
    CONTINUATION_PATTERN,
    CONTINUATION_PAYLOAD_MASK,
    LEAD_2_PATTERN,
    LEAD_2_PAYLOAD_MASK,
    LEAD_3_PATTERN,
    LEAD_3_PAYLOAD_MASK,
    LEAD_4_PATTERN,
    LEAD_4_PAYLOAD_MASK,
    MIN_FOUR_BYTE_VALUE,
    MIN_THREE_BYTE_VALUE,
    MIN_TWO_BYTE_VALUE,
    SURROGATE_MAX,
    SURROGATE_MIN,
)
from utf8validator.diagnostics.errors import (
    IncompleteSequenceError,
    InvalidCodePointError,
    InvalidLeadError,
    NotEnoughRoomError,
    OverlongSequenceError,
    Utf8Error,
)
from utf8validator.source import BufferLike, ByteLike, ByteSource, as_byte_source

__all__ = [
    "SequenceLength",
    "classify",
    "is_code_point_valid",
    "is_continuation",
    "is_overlong",
    "is_surrogate",
    "validate_code_point",
    "validate_next",
]

DecodeResult: TypeAlias = tuple[int, None] | tuple[None, Utf8Error]


class SequenceLength(IntEnum):
    """Number of bytes a UTF-8 sequence occupies, announced by its lead byte."""

    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4


# ============================================================================
# BIT PREDICATES
# ============================================================================


def is_continuation(byte: int) -> bool:
    """Check the 10xxxxxx continuation byte shape."""
    return (byte & 0xFF) >> 6 == CONTINUATION_PATTERN


def is_surrogate(code_point: int) -> bool:
    """Check if code_point is a UTF-16 surrogate half (U+D800-U+DFFF)."""
    return SURROGATE_MIN <= code_point <= SURROGATE_MAX


def is_code_point_valid(code_point: int) -> bool:
    """Check if code_point is a Unicode scalar value."""
    return 0 <= code_point <= CODE_POINT_MAX and not is_surrogate(code_point)


def is_overlong(code_point: int, length: SequenceLength) -> bool:
    """Check if code_point could have been encoded in fewer than length bytes.

    Values from U+10000 up always need four bytes, so no upper bound is
    checked for SequenceLength.FOUR.
    """
    if code_point < MIN_TWO_BYTE_VALUE:
        return length != SequenceLength.ONE
    if code_point < MIN_THREE_BYTE_VALUE:
        return length != SequenceLength.TWO
    if code_point < MIN_FOUR_BYTE_VALUE:
        return length != SequenceLength.THREE
    return False


# ============================================================================
# SEQUENCE CLASSIFIER
# ============================================================================


def classify(lead: int) -> SequenceLength | None:
    """Determine sequence length from a lead byte.

    Depends on the lead byte only. Returns None for stray continuation
    bytes (10xxxxxx) and for 11111xxx, which no valid sequence starts with.

    Raises:
        ValueError: If lead is not in 0..255

    Example:
        >>> classify(0x41)
        <SequenceLength.ONE: 1>
        >>> classify(0xE2)
        <SequenceLength.THREE: 3>
        >>> classify(0x80) is None
        True
    """
    if not 0 <= lead <= 0xFF:
        msg = f"lead byte must be in 0..255, got {lead}"
        raise ValueError(msg)
    if lead <= ASCII_MAX:
        return SequenceLength.ONE
    if lead >> 5 == LEAD_2_PATTERN:
        return SequenceLength.TWO
    if lead >> 4 == LEAD_3_PATTERN:
        return SequenceLength.THREE
    if lead >> 3 == LEAD_4_PATTERN:
        return SequenceLength.FOUR
    return None


# ============================================================================
# CONTINUATION DECODING
# ============================================================================


class _SequenceFailure(Exception):
    """Internal control flow: carries a byte-level error out of a routine."""

    def __init__(self, error: Utf8Error) -> None:
        super().__init__(error)
        self.error = error


def _take_continuation(
    source: ByteSource, partial: int, offset: int, length: SequenceLength
) -> int:
    """Consume one continuation byte and return its payload bits.

    The byte is peeked first and consumed only if it has the 10xxxxxx
    shape. partial is the value assembled so far, reported on failure.
    """
    consumed = source.position - offset
    byte = source.peek()
    if byte is None:
        raise _SequenceFailure(
            NotEnoughRoomError(offset=offset, needed=length, available=consumed)
        )
    if not is_continuation(byte):
        raise _SequenceFailure(
            IncompleteSequenceError(partial, byte, offset=offset, consumed=consumed)
        )
    source.next_byte()
    return byte & CONTINUATION_PAYLOAD_MASK


def _take_lead(source: ByteSource) -> int:
    lead = source.next_byte()
    if lead is None:  # pragma: no cover - guarded by the peek in validate_next
        raise _SequenceFailure(NotEnoughRoomError(offset=source.position))
    return lead


def _decode_one(source: ByteSource, offset: int) -> int:
    return _take_lead(source)


def _decode_two(source: ByteSource, offset: int) -> int:
    length = SequenceLength.TWO
    lead = _take_lead(source) & LEAD_2_PAYLOAD_MASK
    b1 = _take_continuation(source, lead, offset, length)
    return lead << 6 | b1


def _decode_three(source: ByteSource, offset: int) -> int:
    length = SequenceLength.THREE
    lead = _take_lead(source) & LEAD_3_PAYLOAD_MASK
    b1 = _take_continuation(source, lead, offset, length)
    b2 = _take_continuation(source, lead << 6 | b1, offset, length)
    return lead << 12 | b1 << 6 | b2


def _decode_four(source: ByteSource, offset: int) -> int:
    length = SequenceLength.FOUR
    lead = _take_lead(source) & LEAD_4_PAYLOAD_MASK
    b1 = _take_continuation(source, lead, offset, length)
    b2 = _take_continuation(source, lead << 6 | b1, offset, length)
    b3 = _take_continuation(source, lead << 12 | b1 << 6 | b2, offset, length)
    return lead << 18 | b1 << 12 | b2 << 6 | b3


_DECODERS = {
    SequenceLength.ONE: _decode_one,
    SequenceLength.TWO: _decode_two,
    SequenceLength.THREE: _decode_three,
    SequenceLength.FOUR: _decode_four,
}


# ============================================================================
# POST-DECODE VALIDATION
# ============================================================================


def validate_code_point(
    code_point: int, length: SequenceLength, offset: int = 0
) -> Utf8Error | None:
    """Check a fully decoded value against the scalar value and overlong rules.

    Scalar value checks run first: a 4-byte encoding of a surrogate is
    reported as InvalidCodePoint, not OverlongSequence.

    Args:
        code_point: Value assembled from a complete sequence
        length: Number of bytes the sequence used
        offset: Byte offset of the lead byte, for diagnostics

    Returns:
        None if the value is acceptable, otherwise the error
    """
    if not is_code_point_valid(code_point):
        return InvalidCodePointError(code_point, length, offset=offset)
    if is_overlong(code_point, length):
        return OverlongSequenceError(code_point, length, offset=offset)
    return None


# ============================================================================
# ORCHESTRATION
# ============================================================================


def validate_next(
    source: ByteSource | BufferLike | Iterable[ByteLike],
) -> DecodeResult:
    """Decode and validate the next code point.

    Args:
        source: ByteSource to advance. Buffers and iterables are wrapped
            in a throwaway source on every call; pass a ByteSource to
            decode several code points in a row.

    Returns:
        Tuple of (code_point, error):
        - code_point: Unicode scalar value, or None on failure
        - error: Utf8Error subclass, or None on success

    Example:
        >>> from utf8validator.source import ByteCursor
        >>> cursor = ByteCursor(b"A!")
        >>> validate_next(cursor)
        (65, None)
        >>> validate_next(cursor)
        (33, None)
        >>> code_point, error = validate_next(cursor)
        >>> type(error).__name__
        'NotEnoughRoomError'
    """
    byte_source = as_byte_source(source)
    offset = byte_source.position

    lead = byte_source.peek()
    if lead is None:
        return (None, NotEnoughRoomError(offset=offset))

    length = classify(lead)
    if length is None:
        return (None, InvalidLeadError(lead, offset=offset))

    try:
        code_point = _DECODERS[length](byte_source, offset)
    except _SequenceFailure as failure:
        return (None, failure.error)

    error = validate_code_point(code_point, length, offset)
    if error is not None:
        return (None, error)
    return (code_point, None)
