"""Generic value tree produced by the bencode parser."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Union


@dataclass(frozen=True, slots=True)
class BencodeDictionary:
    """Mapping of UTF-8 keys to values."""

    entries: Mapping[str, Value] = field(default_factory=dict)

    kind: ClassVar[str] = "dictionary"

    def __post_init__(self) -> None:
        """Freeze the entries mapping."""
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BencodeDictionary):
            return NotImplemented
        return dict(self.entries) == dict(other.entries)

    def __hash__(self) -> int:
        return hash(frozenset(self.entries.items()))

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __getitem__(self, key: str) -> Value:
        return self.entries[key]

    def get(self, key: str) -> Value | None:
        """Return the value stored under ``key`` or None."""
        return self.entries.get(key)

    def to_python(self) -> dict[str, Any]:
        """Convert to a plain ``dict`` recursively."""
        return {key: value.to_python() for key, value in self.entries.items()}


@dataclass(frozen=True, slots=True)
class BencodeList:
    """Ordered sequence of values."""

    items: tuple[Value, ...] = ()

    kind: ClassVar[str] = "list"

    def __post_init__(self) -> None:
        """Freeze the items sequence."""
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    def to_python(self) -> list[Any]:
        """Convert to a plain ``list`` recursively."""
        return [item.to_python() for item in self.items]


@dataclass(frozen=True, slots=True)
class BencodeInteger:
    """Arbitrary-precision signed integer."""

    value: int

    kind: ClassVar[str] = "integer"

    def to_python(self) -> int:
        """Return the integer."""
        return self.value


@dataclass(frozen=True, slots=True)
class BencodeString:
    """Raw byte string, not necessarily valid text."""

    data: bytes

    kind: ClassVar[str] = "string"

    def to_python(self) -> bytes:
        """Return the raw bytes."""
        return self.data


Value = Union[BencodeDictionary, BencodeList, BencodeInteger, BencodeString]

VALUE_TYPES: tuple[type, ...] = (
    BencodeDictionary,
    BencodeList,
    BencodeInteger,
    BencodeString,
)
