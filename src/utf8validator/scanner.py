"""Host-side scanning built on validate_next().

The decoder validates one code point and leaves recovery to its caller.
This module is such a caller: it walks a whole source and applies a
resynchronization policy after each error.

Resynchronization policy:
    InvalidLeadError         - skip the offending byte
    IncompleteSequenceError  - resume at the offending byte (not consumed)
    OverlongSequenceError    - resume after the sequence (already consumed)
    InvalidCodePointError    - resume after the sequence (already consumed)
    NotEnoughRoomError       - end of input; an error only if a sequence
                               was cut short (needed > 0)

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TypeAlias

from utf8validator.config import ScanConfig
from utf8validator.constants import REPLACEMENT_CHARACTER
from utf8validator.decoder import validate_next
from utf8validator.diagnostics.errors import (
    InvalidLeadError,
    NotEnoughRoomError,
    Utf8Error,
)
from utf8validator.source import (
    BufferLike,
    ByteLike,
    ByteSource,
    StreamByteSource,
    as_byte_source,
)

__all__ = ["ScanReport", "decode_text", "scan"]

logger = logging.getLogger(__name__)

ScanInput: TypeAlias = ByteSource | BufferLike | Iterable[ByteLike]


@dataclass(frozen=True, slots=True)
class ScanReport:
    """Outcome of scanning a byte source.

    Attributes:
        code_points: Number of valid code points decoded
        bytes_scanned: Bytes consumed from the source
        errors: Errors in input order
        truncated: Input ended inside a multi-byte sequence
        stopped_early: Scan halted because max_errors was reached
    """

    code_points: int
    bytes_scanned: int
    errors: tuple[Utf8Error, ...] = ()
    truncated: bool = False
    stopped_early: bool = False

    @property
    def is_valid(self) -> bool:
        """True if the whole input is well-formed UTF-8."""
        return not self.errors


def _open_source(source: ScanInput, config: ScanConfig) -> ByteSource:
    if hasattr(source, "read") and not isinstance(source, ByteSource):
        return StreamByteSource(source, config.chunk_size)  # type: ignore[arg-type]
    return as_byte_source(source)


def _iter_decoded(
    source: ByteSource, max_errors: int | None
) -> Iterator[tuple[int, None] | tuple[None, Utf8Error]]:
    """Yield (code_point, error) pairs until the source is exhausted.

    Stops after max_errors errors. The final NotEnoughRoomError of a
    cleanly terminated input is not yielded.
    """
    error_count = 0
    while True:
        code_point, error = validate_next(source)
        if error is None:
            yield (code_point, None)  # type: ignore[misc]
            continue

        if isinstance(error, NotEnoughRoomError) and error.needed == 0:
            return

        error_count += 1
        logger.debug("Malformed UTF-8 at byte %d: %s", error.offset, error)
        yield (None, error)

        if isinstance(error, NotEnoughRoomError):
            return
        if isinstance(error, InvalidLeadError):
            source.next_byte()
        if max_errors is not None and error_count >= max_errors:
            return


def scan(source: ScanInput, config: ScanConfig | None = None) -> ScanReport:
    """Validate an entire source, collecting every error.

    Args:
        source: ByteSource, buffer, iterable of bytes, or binary stream
        config: Scan options (default: ScanConfig())

    Returns:
        ScanReport summarizing the input

    Example:
        >>> report = scan(b"caf\\xc3\\xa9 \\xc0\\x80")
        >>> report.code_points, len(report.errors)
        (5, 1)
        >>> report.errors[0].code.name
        'OVERLONG_SEQUENCE'
    """
    config = config or ScanConfig()
    byte_source = _open_source(source, config)
    start = byte_source.position

    code_points = 0
    errors: list[Utf8Error] = []
    for code_point, error in _iter_decoded(byte_source, config.max_errors):
        if error is None:
            code_points += 1
        else:
            errors.append(error)

    truncated = bool(errors) and isinstance(errors[-1], NotEnoughRoomError)
    stopped_early = (
        config.max_errors is not None
        and len(errors) >= config.max_errors
        and byte_source.peek() is not None
    )
    report = ScanReport(
        code_points=code_points,
        bytes_scanned=byte_source.position - start,
        errors=tuple(errors),
        truncated=truncated,
        stopped_early=stopped_early,
    )
    logger.info(
        "Scanned %d byte(s): %d code point(s), %d error(s)",
        report.bytes_scanned,
        report.code_points,
        len(report.errors),
    )
    return report


def decode_text(
    source: ScanInput, config: ScanConfig | None = None
) -> tuple[str, tuple[Utf8Error, ...]]:
    """Decode a source to text, substituting U+FFFD for malformed sequences.

    One replacement character is emitted per reported error, so a whole
    overlong or out-of-range sequence such as E0 80 80 or F4 90 80 80
    becomes a single U+FFFD. This differs from bytes.decode("utf-8",
    "replace"), which substitutes each maximal subpart and yields three
    or four. Decoding ends early if config.max_errors is reached.

    Returns:
        Tuple of (text, errors):
        - text: Decoded string with replacements
        - errors: Tuple of Utf8Error (empty tuple on success)

    Example:
        >>> decode_text(b"a\\x80b")
        ('a\\ufffdb', (InvalidLeadError('Invalid lead byte "0x80"', offset=1),))
    """
    config = config or ScanConfig()
    byte_source = _open_source(source, config)

    parts: list[str] = []
    errors: list[Utf8Error] = []
    for code_point, error in _iter_decoded(byte_source, config.max_errors):
        if error is None:
            parts.append(chr(code_point))  # type: ignore[arg-type]
        else:
            parts.append(REPLACEMENT_CHARACTER)
            errors.append(error)
    return ("".join(parts), tuple(errors))
