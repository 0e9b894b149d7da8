"""Coding path tracking for decode diagnostics."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class DictionaryKey:
    """Path frame for a dictionary entry."""

    key: str

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True, slots=True)
class ListIndex:
    """Path frame for a list element."""

    index: int

    def __str__(self) -> str:
        return str(self.index)


CodingKey = Union[DictionaryKey, ListIndex]


@dataclass(frozen=True, slots=True)
class CodingPath:
    """Immutable route from the root value to the value being decoded.

    ``append`` never modifies the receiver; each nested decode receives its
    own extended path.
    """

    keys: tuple[CodingKey, ...] = ()

    def append(self, key: CodingKey | str | int) -> CodingPath:
        """Return a new path with ``key`` added at the end."""
        if isinstance(key, str):
            key = DictionaryKey(key)
        elif isinstance(key, int):
            key = ListIndex(key)
        return CodingPath((*self.keys, key))

    def __iter__(self) -> Iterator[CodingKey]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def __str__(self) -> str:
        if not self.keys:
            return "<root>"
        parts: list[str] = []
        for key in self.keys:
            if isinstance(key, ListIndex):
                parts.append(f"[{key.index}]")
            elif parts:
                parts.append(f".{key.key}")
            else:
                parts.append(key.key)
        return "".join(parts)


ROOT = CodingPath()
