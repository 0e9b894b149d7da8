"""Core bencode decoding implementation.

This module contains the fundamental components:
- Byte cursor and value parser
- Value tree model
- Decoding framework (decoder handle and containers)
- Reconstruction of composite target types
"""

from __future__ import annotations

from typedbencode.core.coding_path import CodingPath, DictionaryKey, ListIndex
from typedbencode.core.cursor import ByteCursor
from typedbencode.core.decoder import (
    BencodeDecoder,
    Decoder,
    KeyedContainer,
    SingleValueContainer,
    UnkeyedContainer,
    decode,
)
from typedbencode.core.numbers import (
    FixedWidthInt,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)
from typedbencode.core.parser import BencodeParser, parse
from typedbencode.core.reconstruct import Decodable, bencode_field
from typedbencode.core.values import (
    BencodeDictionary,
    BencodeInteger,
    BencodeList,
    BencodeString,
    Value,
)

__all__ = [
    # Values
    "BencodeDictionary",
    "BencodeInteger",
    "BencodeList",
    "BencodeString",
    "Value",
    # Parsing
    "BencodeParser",
    "ByteCursor",
    "parse",
    # Decoding
    "BencodeDecoder",
    "CodingPath",
    "Decodable",
    "Decoder",
    "DictionaryKey",
    "KeyedContainer",
    "ListIndex",
    "SingleValueContainer",
    "UnkeyedContainer",
    "bencode_field",
    "decode",
    # Numbers
    "FixedWidthInt",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
]
