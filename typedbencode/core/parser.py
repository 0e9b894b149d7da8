"""Recursive-descent parser turning bencoded bytes into a value tree.

Grammar::

    value      := dictionary | list | integer | string
    dictionary := 'd' (string value)* 'e'
    list       := 'l' value* 'e'
    integer    := 'i' ['-'] magnitude 'e'
    string     := magnitude ':' <magnitude raw bytes>
    magnitude  := '0' | [1-9][0-9]*
"""

from __future__ import annotations

import logging
import sys

from typedbencode.core.cursor import ByteCursor
from typedbencode.core.values import (
    BencodeDictionary,
    BencodeInteger,
    BencodeList,
    BencodeString,
    Value,
)
from typedbencode.exceptions import (
    DuplicateKeyError,
    IntegerNotRepresentableError,
    IntegerWithLeadingZeroError,
    KeyEncodingError,
    NegativeZeroError,
    NestingTooDeepError,
    UnexpectedCharacterError,
)
from typedbencode.models import DecoderConfig

logger = logging.getLogger(__name__)

DICTIONARY_START = ord("d")
LIST_START = ord("l")
INTEGER_START = ord("i")
END = ord("e")
COLON = ord(":")
MINUS = ord("-")
ZERO = ord("0")
NINE = ord("9")


class BencodeParser:
    """Single-use parser over one input buffer."""

    def __init__(
        self,
        data: bytes | bytearray | memoryview,
        config: DecoderConfig | None = None,
    ):
        """Initialize parser for ``data``."""
        self._cursor = ByteCursor(data)
        self._config = config or DecoderConfig()

    def parse(self) -> Value:
        """Parse exactly one value and require the input to end after it."""
        try:
            value = self._parse_value(depth=0)
        except RecursionError as e:
            # The interpreter stack ran out before max_depth was reached
            limit = self._config.max_depth
            raise NestingTooDeepError(self._cursor.position, limit) from e
        if not self._cursor.is_at_end:
            position = self._cursor.position
            raise UnexpectedCharacterError(position, self._cursor.peek())
        logger.debug("Parsed %d bytes into %s", self._cursor.position, value.kind)
        return value

    def _parse_value(self, depth: int) -> Value:
        marker = self._cursor.peek()
        if marker == DICTIONARY_START:
            self._enter(depth)
            self._cursor.pop()
            return self._parse_dictionary(depth + 1)
        if marker == LIST_START:
            self._enter(depth)
            self._cursor.pop()
            return self._parse_list(depth + 1)
        if marker == INTEGER_START:
            self._cursor.pop()
            return BencodeInteger(self._parse_integer())
        if ZERO <= marker <= NINE:
            return BencodeString(self._parse_string())
        raise UnexpectedCharacterError(self._cursor.position, marker)

    def _enter(self, depth: int) -> None:
        if depth >= self._config.max_depth:
            raise NestingTooDeepError(self._cursor.position, self._config.max_depth)

    def _parse_dictionary(self, depth: int) -> BencodeDictionary:
        entries: dict[str, Value] = {}
        while self._cursor.peek() != END:
            key_position = self._cursor.position
            key = self._parse_key()
            if key in entries and self._config.reject_duplicate_keys:
                raise DuplicateKeyError(key_position, key)
            entries[key] = self._parse_value(depth)
        self._cursor.pop()
        return BencodeDictionary(entries)

    def _parse_list(self, depth: int) -> BencodeList:
        items: list[Value] = []
        while self._cursor.peek() != END:
            items.append(self._parse_value(depth))
        self._cursor.pop()
        return BencodeList(tuple(items))

    def _parse_integer(self) -> int:
        sign_position = self._cursor.position
        negative = self._cursor.peek() == MINUS
        if negative:
            self._cursor.pop()
        magnitude = self._parse_magnitude(until=END)
        if negative and magnitude == 0 and not self._config.allow_negative_zero:
            raise NegativeZeroError(sign_position)
        return -magnitude if negative else magnitude

    def _parse_key(self) -> str:
        position = self._cursor.position
        raw = self._parse_string()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise KeyEncodingError(position, raw) from e

    def _parse_string(self) -> bytes:
        length_position = self._cursor.position
        length = self._parse_magnitude(until=COLON)
        if length > sys.maxsize:
            msg = f"string length {length} exceeds {sys.maxsize}"
            raise IntegerNotRepresentableError(msg, length_position)
        return self._cursor.take(length)

    def _parse_magnitude(self, until: int) -> int:
        has_leading_zero = self._cursor.peek() == ZERO
        if has_leading_zero:
            self._cursor.pop()

        limit = self._config.max_integer_digits
        digits = 1 if has_leading_zero else 0
        magnitude = 0
        while self._cursor.peek() != until:
            position = self._cursor.position
            digit = self._parse_digit()
            if has_leading_zero:
                raise IntegerWithLeadingZeroError(position)
            digits += 1
            if limit and digits > limit:
                msg = f"more than {limit} digits"
                raise IntegerNotRepresentableError(msg, position)
            magnitude = magnitude * 10 + digit

        if digits == 0:
            raise UnexpectedCharacterError(self._cursor.position, until)
        self._cursor.pop()
        return magnitude

    def _parse_digit(self) -> int:
        position = self._cursor.position
        byte = self._cursor.pop()
        if not ZERO <= byte <= NINE:
            raise UnexpectedCharacterError(position, byte)
        return byte - ZERO


def parse(
    data: bytes | bytearray | memoryview,
    config: DecoderConfig | None = None,
) -> Value:
    """Parse bencoded ``data`` into a value tree.

    Args:
        data: Complete bencoded input
        config: Parser limits, defaults to ``DecoderConfig()``

    Returns:
        The root value

    Raises:
        ParseError: If ``data`` is not exactly one well-formed value

    """
    return BencodeParser(data, config).parse()
