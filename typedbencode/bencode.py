"""Bencode decoding module.

This module provides a convenient interface to the core bencode functionality.
"""

from __future__ import annotations

from typedbencode.core.decoder import BencodeDecoder, decode
from typedbencode.core.parser import parse
from typedbencode.exceptions import BencodeError, DecodingError, ParseError

__all__ = [
    "BencodeDecoder",
    "BencodeError",
    "DecodingError",
    "ParseError",
    "decode",
    "parse",
]
