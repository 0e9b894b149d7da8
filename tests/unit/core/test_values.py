"""Tests for the value tree model and coding paths.
"""

import dataclasses

import pytest

pytestmark = [pytest.mark.unit, pytest.mark.core]

from typedbencode.core.coding_path import CodingPath, DictionaryKey, ListIndex
from typedbencode.core.parser import parse
from typedbencode.core.values import (
    BencodeDictionary,
    BencodeInteger,
    BencodeList,
    BencodeString,
)


class TestValues:
    """Test cases for value variants."""

    def test_to_python(self):
        """Test conversion of a nested tree to plain Python objects."""
        value = BencodeDictionary(
            {
                "name": BencodeString(b"x"),
                "sizes": BencodeList((BencodeInteger(1), BencodeInteger(2))),
            }
        )
        assert value.to_python() == {"name": b"x", "sizes": [1, 2]}

    def test_immutable(self):
        """Test that values cannot be changed after construction."""
        entries = {"a": BencodeInteger(1)}
        value = BencodeDictionary(entries)
        entries["b"] = BencodeInteger(2)
        assert "b" not in value
        with pytest.raises(TypeError):
            value.entries["c"] = BencodeInteger(3)
        with pytest.raises(dataclasses.FrozenInstanceError):
            value.entries = {}
        with pytest.raises(dataclasses.FrozenInstanceError):
            BencodeInteger(1).value = 2

    def test_list_from_list(self):
        """Test that list items are stored as a tuple."""
        value = BencodeList([BencodeInteger(1)])
        assert value.items == (BencodeInteger(1),)
        assert len(value) == 1

    def test_kind(self):
        """Test diagnostic kind names."""
        assert BencodeDictionary({}).kind == "dictionary"
        assert BencodeList(()).kind == "list"
        assert BencodeInteger(0).kind == "integer"
        assert BencodeString(b"").kind == "string"

    def test_dictionary_access(self):
        """Test mapping-style helpers."""
        value = BencodeDictionary({"a": BencodeInteger(1)})
        assert value["a"] == BencodeInteger(1)
        assert value.get("b") is None
        assert len(value) == 1
        assert value != BencodeDictionary({})

    def test_hashable(self):
        """Test that parsed trees containing dictionaries can be hashed."""
        first = parse(b"ld1:ai1eee")
        second = parse(b"ld1:ai1eee")
        assert hash(first) == hash(second)
        expected = BencodeDictionary({"a": BencodeInteger(1)})
        assert hash(parse(b"d1:ai1ee")) == hash(expected)
        assert len({first, second, parse(b"d1:ai2ee")}) == 2


class TestCodingPath:
    """Test cases for CodingPath."""

    def test_root(self):
        """Test the empty path."""
        assert str(CodingPath()) == "<root>"
        assert len(CodingPath()) == 0

    def test_append_returns_new_path(self):
        """Test that appending never mutates the original path."""
        root = CodingPath()
        info = root.append("info")
        files = info.append("files").append(0)
        assert len(root) == 0
        assert list(info) == [DictionaryKey("info")]
        assert list(files) == [
            DictionaryKey("info"),
            DictionaryKey("files"),
            ListIndex(0),
        ]

    def test_render(self):
        """Test the textual form used in error messages."""
        path = CodingPath().append("info").append("files").append(2).append("length")
        assert str(path) == "info.files[2].length"
        assert str(CodingPath().append(0).append("name")) == "[0].name"
