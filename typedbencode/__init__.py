"""typedbencode - decode bencoded data into typed Python values."""

from __future__ import annotations

__version__ = "0.1.0"

from typedbencode.core import (
    BencodeDecoder,
    BencodeDictionary,
    BencodeInteger,
    BencodeList,
    BencodeString,
    CodingPath,
    Decodable,
    Decoder,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    Value,
    bencode_field,
    decode,
    parse,
)
from typedbencode.exceptions import (
    BencodeError,
    DataCorruptedError,
    DecodingError,
    NumberOutOfRangeError,
    ParseError,
    TypeMismatchError,
    ValueNotFoundError,
)
from typedbencode.models import DecoderConfig, OverflowPolicy

__all__ = [
    "BencodeDecoder",
    "BencodeDictionary",
    "BencodeError",
    "BencodeInteger",
    "BencodeList",
    "BencodeString",
    "CodingPath",
    "DataCorruptedError",
    "Decodable",
    "Decoder",
    "DecoderConfig",
    "DecodingError",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "NumberOutOfRangeError",
    "OverflowPolicy",
    "ParseError",
    "TypeMismatchError",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Value",
    "ValueNotFoundError",
    "__version__",
    "bencode_field",
    "decode",
    "parse",
]
