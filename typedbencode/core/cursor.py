"""Byte cursor used by the bencode parser."""

from __future__ import annotations

from typedbencode.exceptions import UnexpectedEndOfFileError


class ByteCursor:
    """Forward-only reader over an input buffer.

    The cursor keeps its own copy of the input so the caller's buffer can
    change afterwards without affecting an in-progress parse.
    """

    __slots__ = ("_data", "_position")

    def __init__(self, data: bytes | bytearray | memoryview):
        """Initialize cursor at the start of ``data``."""
        self._data = bytes(data)
        self._position = 0

    @property
    def position(self) -> int:
        """Offset of the next unread byte."""
        return self._position

    @property
    def is_at_end(self) -> bool:
        """Whether all input has been consumed."""
        return self._position >= len(self._data)

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._data) - self._position

    def peek(self) -> int:
        """Return the next byte without consuming it."""
        if self.is_at_end:
            raise UnexpectedEndOfFileError(self._position)
        return self._data[self._position]

    def pop(self) -> int:
        """Consume and return the next byte."""
        byte = self.peek()
        self._position += 1
        return byte

    def take(self, count: int) -> bytes:
        """Consume exactly ``count`` bytes.

        Nothing is consumed when fewer than ``count`` bytes remain.
        """
        if count > self.remaining:
            raise UnexpectedEndOfFileError(len(self._data))
        start = self._position
        self._position += count
        return self._data[start : self._position]
