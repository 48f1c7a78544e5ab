"""Byte source infrastructure for streaming validation.

The decoder pulls bytes from a forward-only, peekable cursor that the
caller owns. It peeks at most one byte ahead and never seeks backward,
so any ordered byte producer can back it.

Implementations:
    ByteCursor       - borrowed buffer (bytes, bytearray, memoryview);
                       supports mark()/reset() snapshots
    IterByteSource   - any iterable of ints or 1-byte bytes objects
    StreamByteSource - binary file object read chunk by chunk

Design:
    - Exhaustion is a state: peek() and next_byte() return None at EOF,
      never a sentinel byte value
    - position counts bytes consumed, for diagnostics offsets
    - Sources are mutable and NOT thread-safe; share one per consumer

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable, Iterator
from typing import BinaryIO, Protocol, TypeAlias, runtime_checkable

from utf8validator.constants import DEFAULT_CHUNK_SIZE

__all__ = [
    "ByteCursor",
    "ByteSource",
    "IterByteSource",
    "StreamByteSource",
    "as_byte",
    "as_byte_source",
]

ByteLike: TypeAlias = int | bytes | bytearray
BufferLike: TypeAlias = bytes | bytearray | memoryview


@runtime_checkable
class ByteSource(Protocol):
    """Forward-only, peekable cursor over 8-bit values."""

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        ...

    def peek(self) -> int | None:
        """Return the next byte without consuming it, or None at EOF."""
        ...

    def next_byte(self) -> int | None:
        """Consume and return the next byte, or None at EOF."""
        ...


def as_byte(value: ByteLike) -> int:
    """Convert an owned or borrowed byte representation to an int.

    Accepts an int in 0..255 or a bytes/bytearray of length 1, which is
    what iterating a buffer (ints) or chunking one (1-byte slices) yields.

    Raises:
        TypeError: If value is neither an int nor a bytes-like object
        ValueError: If the int is out of range or the bytes object is not
            exactly one byte long

    Example:
        >>> as_byte(0x41)
        65
        >>> as_byte(b"A")
        65
    """
    if isinstance(value, bool):
        msg = "bool is not a byte value"
        raise TypeError(msg)
    if isinstance(value, int):
        if not 0 <= value <= 0xFF:
            msg = f"byte value must be in 0..255, got {value}"
            raise ValueError(msg)
        return value
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 1:
            msg = f"expected a single byte, got {len(value)} bytes"
            raise ValueError(msg)
        return value[0]
    msg = f"expected int or bytes, got {type(value).__name__}"
    raise TypeError(msg)


class ByteCursor:
    """Mutable cursor over a borrowed buffer.

    The buffer is wrapped in a memoryview, never copied. Because the
    underlying data is addressable, the cursor can be snapshotted with
    mark() and rewound with reset(), which lets a caller retry after a
    failed validation instead of treating the position as lost.

    Example:
        >>> cursor = ByteCursor(b"A!")
        >>> cursor.peek()
        65
        >>> cursor.next_byte(), cursor.next_byte(), cursor.next_byte()
        (65, 33, None)
        >>> cursor.position
        2
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: BufferLike, pos: int = 0) -> None:
        view = memoryview(data)
        if view.ndim != 1 or view.itemsize != 1:
            view = view.cast("B")
        if not 0 <= pos <= len(view):
            msg = f"pos must be in 0..{len(view)}, got {pos}"
            raise ValueError(msg)
        self._data = view
        self._pos = pos

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._pos

    @property
    def remaining(self) -> int:
        """Bytes left before EOF."""
        return len(self._data) - self._pos

    @property
    def is_eof(self) -> bool:
        """Check if every byte has been consumed."""
        return self._pos >= len(self._data)

    def peek(self) -> int | None:
        if self._pos >= len(self._data):
            return None
        return self._data[self._pos]

    def next_byte(self) -> int | None:
        if self._pos >= len(self._data):
            return None
        byte = self._data[self._pos]
        self._pos += 1
        return byte

    def mark(self) -> int:
        """Snapshot the current position for a later reset()."""
        return self._pos

    def reset(self, mark: int) -> None:
        """Rewind (or fast-forward) to a position obtained from mark().

        Raises:
            ValueError: If mark lies outside the buffer
        """
        if not 0 <= mark <= len(self._data):
            msg = f"mark must be in 0..{len(self._data)}, got {mark}"
            raise ValueError(msg)
        self._pos = mark

    def __repr__(self) -> str:
        return f"ByteCursor(pos={self._pos}, len={len(self._data)})"


class IterByteSource:
    """Peekable adapter over any iterable of byte values.

    Items may be ints (iterating bytes) or 1-byte bytes objects; both are
    normalized through as_byte(). Only one item of lookahead is buffered.

    Example:
        >>> source = IterByteSource(iter([0xE2, 0x82, 0xAC]))
        >>> source.peek(), source.position
        (226, 0)
    """

    __slots__ = ("_it", "_lookahead", "_pos")

    def __init__(self, iterable: Iterable[ByteLike]) -> None:
        self._it: Iterator[ByteLike] = iter(iterable)
        self._lookahead: int | None = None
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def peek(self) -> int | None:
        if self._lookahead is None:
            item = next(self._it, None)
            if item is None:
                return None
            self._lookahead = as_byte(item)
        return self._lookahead

    def next_byte(self) -> int | None:
        byte = self.peek()
        if byte is not None:
            self._lookahead = None
            self._pos += 1
        return byte


class StreamByteSource:
    """Byte source reading a binary stream in fixed-size chunks.

    Memory use is bounded by chunk_size regardless of stream length, so
    arbitrarily large inputs can be validated. The stream is borrowed:
    it is read but never closed.

    Args:
        stream: Object with a read(n) method returning bytes (b"" at EOF)
        chunk_size: Maximum bytes requested per read() call
    """

    __slots__ = ("_buffer", "_chunk_size", "_eof", "_index", "_pos", "_stream")

    def __init__(self, stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            msg = "chunk_size must be positive"
            raise ValueError(msg)
        self._stream = stream
        self._chunk_size = chunk_size
        self._buffer = b""
        self._index = 0
        self._pos = 0
        self._eof = False

    @property
    def position(self) -> int:
        return self._pos

    def _fill(self) -> bool:
        """Ensure at least one unread byte is buffered. False at EOF."""
        while self._index >= len(self._buffer):
            if self._eof:
                return False
            chunk = self._stream.read(self._chunk_size)
            if not chunk:
                self._eof = True
                return False
            self._buffer = bytes(chunk)
            self._index = 0
        return True

    def peek(self) -> int | None:
        if not self._fill():
            return None
        return self._buffer[self._index]

    def next_byte(self) -> int | None:
        if not self._fill():
            return None
        byte = self._buffer[self._index]
        self._index += 1
        self._pos += 1
        return byte


def as_byte_source(obj: ByteSource | BufferLike | Iterable[ByteLike]) -> ByteSource:
    """Return obj as a ByteSource, wrapping it if needed.

    Existing ByteSource instances are returned unchanged so that repeated
    calls share one cursor. Buffers become a ByteCursor; objects with a
    read() method a StreamByteSource; other iterables an IterByteSource.

    Raises:
        TypeError: If obj is none of the supported kinds
    """
    if isinstance(obj, ByteSource):
        return obj
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return ByteCursor(obj)
    if hasattr(obj, "read"):
        return StreamByteSource(obj)  # type: ignore[arg-type]
    if isinstance(obj, Iterable):
        return IterByteSource(obj)
    msg = f"cannot read bytes from {type(obj).__name__}"
    raise TypeError(msg)
