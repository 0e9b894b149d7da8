"""Exception hierarchy for typedbencode.

Parse errors carry the byte offset where the input stopped matching the
grammar. Decoding errors carry the coding path of the value being decoded
when the target type did not fit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typedbencode.core.coding_path import CodingPath


class BencodeError(Exception):
    """Base exception for all typedbencode errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize bencode error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ConfigurationError(BencodeError):
    """Configuration validation errors."""


class UnsupportedTargetError(BencodeError, TypeError):
    """The requested target type cannot be decoded from bencode."""

    def __init__(self, target: Any):
        """Initialize unsupported target error."""
        super().__init__(f"Cannot decode bencode into {target!r}")
        self.target = target


class ParseError(BencodeError):
    """Syntax errors raised while parsing raw bytes."""

    def __init__(self, message: str, position: int | None = None):
        """Initialize parse error."""
        details = {"position": position} if position is not None else None
        super().__init__(message, details)
        self.position = position


class UnexpectedCharacterError(ParseError):
    """A byte did not match any production expected at that point."""

    def __init__(self, position: int, byte: int | None = None):
        """Initialize unexpected character error."""
        if byte is None:
            message = "Unexpected character"
        else:
            message = f"Unexpected character {bytes([byte])!r}"
        super().__init__(message, position)
        self.byte = byte


class UnexpectedEndOfFileError(ParseError):
    """Input ended before a production was complete."""

    def __init__(self, position: int | None = None):
        """Initialize unexpected end of file error."""
        super().__init__("Unexpected end of file", position)


class IntegerWithLeadingZeroError(ParseError):
    """A magnitude started with 0 and had further digits."""

    def __init__(self, position: int):
        """Initialize leading zero error."""
        super().__init__("Integer with leading zero", position)


class IntegerNotRepresentableError(ParseError):
    """A magnitude is too large to be held by the parser."""

    def __init__(self, reason: str, position: int | None = None):
        """Initialize not representable error."""
        super().__init__(f"Integer is not representable: {reason}", position)


class NegativeZeroError(ParseError):
    """The integer ``i-0e`` is not canonical bencode."""

    def __init__(self, position: int):
        """Initialize negative zero error."""
        super().__init__("Negative zero is not allowed", position)


class KeyEncodingError(ParseError):
    """A dictionary key is not valid UTF-8."""

    def __init__(self, position: int, key: bytes):
        """Initialize key encoding error."""
        super().__init__("Cannot convert dictionary key to UTF-8", position)
        self.key = key


class DuplicateKeyError(ParseError):
    """A dictionary contains the same key twice."""

    def __init__(self, position: int, key: str):
        """Initialize duplicate key error."""
        super().__init__(f"Duplicate dictionary key {key!r}", position)
        self.key = key


class NestingTooDeepError(ParseError):
    """Lists and dictionaries are nested deeper than the configured limit."""

    def __init__(self, position: int, limit: int):
        """Initialize nesting error."""
        super().__init__(f"Nesting exceeds maximum depth of {limit}", position)
        self.limit = limit


class DecodingError(BencodeError):
    """Errors raised while mapping a value tree onto a target type."""

    def __init__(self, message: str, coding_path: CodingPath):
        """Initialize decoding error."""
        super().__init__(f"{message} at {coding_path}")
        self.reason = message
        self.coding_path = coding_path


class TypeMismatchError(DecodingError):
    """The value variant does not match the requested shape."""

    def __init__(self, expected: str, actual: str, coding_path: CodingPath):
        """Initialize type mismatch error."""
        super().__init__(f"Expected {expected}, found {actual}", coding_path)
        self.expected = expected
        self.actual = actual


class ValueNotFoundError(DecodingError):
    """A key or list element the target needs is missing."""


class DataCorruptedError(DecodingError):
    """A value is present but failed a secondary validation."""


class NumberOutOfRangeError(DecodingError):
    """An integer does not fit the requested numeric type."""

    def __init__(self, value: int, target: str, coding_path: CodingPath):
        """Initialize number out of range error."""
        super().__init__(f"Integer {value} does not fit in {target}", coding_path)
        self.value = value
        self.target = target
