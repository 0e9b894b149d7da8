"""Decoding framework mapping a value tree onto target types.

A ``Decoder`` wraps one value together with its coding path. Target types
read from it through one of three containers:

- ``KeyedContainer`` for dictionary-shaped targets (named fields)
- ``UnkeyedContainer`` for list-shaped targets (sequences)
- ``SingleValueContainer`` for scalars, and as the entry point that hands
  composite targets to their reconstruction logic
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, TypeVar

from pydantic import AnyUrl, TypeAdapter, ValidationError

from typedbencode.core.coding_path import ROOT, CodingPath, ListIndex
from typedbencode.core.numbers import FixedWidthInt, narrow
from typedbencode.core.parser import parse
from typedbencode.core.reconstruct import is_class, reconstruct
from typedbencode.core.values import (
    VALUE_TYPES,
    BencodeDictionary,
    BencodeInteger,
    BencodeList,
    BencodeString,
    Value,
)
from typedbencode.exceptions import (
    DataCorruptedError,
    DecodingError,
    NumberOutOfRangeError,
    TypeMismatchError,
    ValueNotFoundError,
)
from typedbencode.models import DecoderConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)


class Decoder:
    """Handle over one value, passed to composite types to rebuild themselves."""

    def __init__(
        self,
        value: Value,
        coding_path: CodingPath = ROOT,
        config: DecoderConfig | None = None,
    ):
        """Initialize decoder at ``coding_path``."""
        self._value = value
        self._coding_path = coding_path
        self._config = config or DecoderConfig()

    @property
    def value(self) -> Value:
        """The value this decoder reads."""
        return self._value

    @property
    def coding_path(self) -> CodingPath:
        """Path from the root to this value."""
        return self._coding_path

    @property
    def config(self) -> DecoderConfig:
        """Limits and policies in effect."""
        return self._config

    def keyed_container(self) -> KeyedContainer:
        """Read the value as a dictionary of named fields."""
        if not isinstance(self._value, BencodeDictionary):
            msg = f"Expected dictionary, found {self._value.kind}"
            raise DataCorruptedError(msg, self._coding_path)
        return KeyedContainer(self._value, self._coding_path, self._config)

    def unkeyed_container(self) -> UnkeyedContainer:
        """Read the value as an ordered sequence."""
        if not isinstance(self._value, BencodeList):
            msg = f"Expected list, found {self._value.kind}"
            raise DataCorruptedError(msg, self._coding_path)
        return UnkeyedContainer(self._value, self._coding_path, self._config)

    def single_value_container(self) -> SingleValueContainer:
        """Read the value as a single scalar or composite."""
        return SingleValueContainer(self._value, self._coding_path, self._config)

    def decode(self, target: type[T]) -> T:
        """Shortcut for ``single_value_container().decode(target)``."""
        return self.single_value_container().decode(target)


class KeyedContainer:
    """Dictionary-backed container for types with named fields."""

    def __init__(
        self,
        dictionary: BencodeDictionary,
        coding_path: CodingPath,
        config: DecoderConfig,
    ):
        """Initialize keyed container."""
        self._dictionary = dictionary
        self._coding_path = coding_path
        self._config = config

    @property
    def coding_path(self) -> CodingPath:
        """Path of the dictionary itself."""
        return self._coding_path

    @property
    def all_keys(self) -> list[str]:
        """Keys present in the dictionary."""
        return list(self._dictionary.entries)

    def contains(self, key: str) -> bool:
        """Whether ``key`` is present."""
        return key in self._dictionary

    def decode(self, target: type[T], key: str) -> T:
        """Decode the value under ``key`` as ``target``."""
        return self._with(key, lambda decoder: decoder.decode(target))

    def decode_if_present(self, target: type[T], key: str) -> T | None:
        """Decode the value under ``key``, or return None when it is absent."""
        if not self.contains(key):
            return None
        return self.decode(target, key)

    def decode_nil(self, key: str) -> bool:
        """Always False once ``key`` exists; bencode has no null."""
        return self._with(
            key,
            lambda decoder: decoder.single_value_container().decode_nil(),
        )

    def nested_keyed_container(self, key: str) -> KeyedContainer:
        """Keyed container for the dictionary under ``key``."""
        return self._with(key, lambda decoder: decoder.keyed_container())

    def nested_unkeyed_container(self, key: str) -> UnkeyedContainer:
        """Unkeyed container for the list under ``key``."""
        return self._with(key, lambda decoder: decoder.unkeyed_container())

    def super_decoder(self, key: str = "super") -> Decoder:
        """Decoder for the value under ``key``."""
        return self._with(key, lambda decoder: decoder)

    def _with(self, key: str, body: Callable[[Decoder], T]) -> T:
        coding_path = self._coding_path.append(key)
        value = self._dictionary.get(key)
        if value is None:
            msg = f"No value for key {key!r}"
            raise ValueNotFoundError(msg, coding_path)
        return body(Decoder(value, coding_path, self._config))


class UnkeyedContainer:
    """List-backed container for sequence types.

    Each read advances ``current_index`` by one.
    """

    def __init__(
        self,
        sequence: BencodeList,
        coding_path: CodingPath,
        config: DecoderConfig,
    ):
        """Initialize unkeyed container."""
        self._sequence = sequence
        self._coding_path = coding_path
        self._config = config
        self._index = 0

    @property
    def coding_path(self) -> CodingPath:
        """Path of the list itself."""
        return self._coding_path

    @property
    def count(self) -> int:
        """Total number of elements."""
        return len(self._sequence)

    @property
    def current_index(self) -> int:
        """Index of the next element to be read."""
        return self._index

    @property
    def is_at_end(self) -> bool:
        """Whether every element has been read."""
        return self._index >= len(self._sequence)

    def decode(self, target: type[T]) -> T:
        """Decode the next element as ``target``."""
        return self._with(lambda decoder: decoder.decode(target))

    def decode_nil(self) -> bool:
        """Always False; bencode has no null."""
        return False

    def nested_keyed_container(self) -> KeyedContainer:
        """Keyed container for the next element."""
        return self._with(lambda decoder: decoder.keyed_container())

    def nested_unkeyed_container(self) -> UnkeyedContainer:
        """Unkeyed container for the next element."""
        return self._with(lambda decoder: decoder.unkeyed_container())

    def super_decoder(self) -> Decoder:
        """Decoder for the next element."""
        return self._with(lambda decoder: decoder)

    def _with(self, body: Callable[[Decoder], T]) -> T:
        coding_path = self._coding_path.append(ListIndex(self._index))
        if self.is_at_end:
            msg = "Unkeyed container is at end"
            raise ValueNotFoundError(msg, coding_path)
        value = self._sequence[self._index]
        self._index += 1
        return body(Decoder(value, coding_path, self._config))


class SingleValueContainer:
    """Container for one value; dispatches on the requested target shape."""

    def __init__(
        self,
        value: Value,
        coding_path: CodingPath,
        config: DecoderConfig,
    ):
        """Initialize single value container."""
        self._value = value
        self._coding_path = coding_path
        self._config = config

    @property
    def coding_path(self) -> CodingPath:
        """Path of the value."""
        return self._coding_path

    def decode_nil(self) -> bool:
        """Always False; bencode has no null."""
        return False

    def decode(self, target: Any) -> Any:
        """Decode the value as ``target``."""
        if target is bytes:
            return self.decode_bytes()
        if target is str:
            return self.decode_str()
        if target is bool:
            return self.decode_int() != 0
        if target is int:
            return self.decode_int()
        if target is float:
            return self.decode_float()
        if target is Decimal:
            return Decimal(self.decode_int())
        if target == Value:
            return self._value
        if target in VALUE_TYPES:
            return self._decode_variant(target)
        if is_class(target):
            if issubclass(target, FixedWidthInt):
                return self.decode_fixed_width(target)
            if issubclass(target, AnyUrl):
                return self.decode_url(target)
        decoder = Decoder(self._value, self._coding_path, self._config)
        return reconstruct(decoder, target)

    def decode_bytes(self) -> bytes:
        """Decode a byte string."""
        if not isinstance(self._value, BencodeString):
            raise TypeMismatchError("string", self._value.kind, self._coding_path)
        return self._value.data

    def decode_str(self) -> str:
        """Decode a byte string as UTF-8 text."""
        data = self.decode_bytes()
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            msg = "Unable to convert data to a string"
            raise DataCorruptedError(msg, self._coding_path) from e

    def decode_url(self, target: type[AnyUrl] = AnyUrl) -> AnyUrl:
        """Decode UTF-8 text and validate it as a URL."""
        text = self.decode_str()
        try:
            return TypeAdapter(target).validate_python(text)
        except ValidationError as e:
            msg = f"Invalid URL {text!r}"
            raise DataCorruptedError(msg, self._coding_path) from e

    def decode_int(self) -> int:
        """Decode an integer of any size."""
        if not isinstance(self._value, BencodeInteger):
            raise TypeMismatchError("integer", self._value.kind, self._coding_path)
        return self._value.value

    def decode_fixed_width(self, target: type[FixedWidthInt]) -> FixedWidthInt:
        """Decode an integer and narrow it to ``target``."""
        value = self.decode_int()
        narrowed = narrow(value, target, self._config.overflow_policy)
        if narrowed is None:
            raise NumberOutOfRangeError(value, target.__name__, self._coding_path)
        return narrowed

    def decode_float(self) -> float:
        """Decode an integer as a float."""
        value = self.decode_int()
        try:
            return float(value)
        except OverflowError as e:
            raise NumberOutOfRangeError(value, "float", self._coding_path) from e

    def _decode_variant(self, target: type) -> Value:
        if not isinstance(self._value, target):
            raise TypeMismatchError(target.kind, self._value.kind, self._coding_path)
        return self._value


class BencodeDecoder:
    """Top-level entry point: bytes in, typed value out."""

    def __init__(self, config: DecoderConfig | None = None):
        """Initialize decoder.

        Args:
            config: Decoder limits. If None, uses the global configuration

        """
        if config is None:
            from typedbencode.config import get_config

            config = get_config().decoder
        self.config = config

    def parse(self, data: bytes | bytearray | memoryview) -> Value:
        """Parse ``data`` into a value tree without decoding it."""
        return parse(data, self.config)

    def decode(self, target: type[T], data: bytes | bytearray | memoryview) -> T:
        """Parse ``data`` and decode it as ``target``.

        Raises:
            ParseError: If ``data`` is not well-formed bencode
            DecodingError: If the value tree does not fit ``target``

        """
        return self.decode_value(target, self.parse(data))

    def decode_value(self, target: type[T], value: Value) -> T:
        """Decode an already parsed value tree as ``target``."""
        decoder = Decoder(value, ROOT, self.config)
        try:
            return decoder.decode(target)
        except DecodingError as e:
            logger.debug(
                "Failed to decode %s at %s: %s",
                _type_name(target),
                e.coding_path,
                e.reason,
            )
            raise


def decode(
    target: type[T],
    data: bytes | bytearray | memoryview,
    config: DecoderConfig | None = None,
) -> T:
    """Decode bencoded ``data`` as ``target``.

    Example:
        >>> decode(list[str], b"l4:spam4:eggse")
        ['spam', 'eggs']

    """
    return BencodeDecoder(config).decode(target, data)
