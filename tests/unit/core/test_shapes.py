"""Tests for scalar target shapes of the single value container.
"""

from decimal import Decimal
from enum import Enum, IntEnum
from typing import Any, Optional

import pytest
from pydantic import AnyUrl, HttpUrl

pytestmark = [pytest.mark.unit, pytest.mark.core]

from typedbencode.core.decoder import decode
from typedbencode.core.numbers import Int8, Int32, UInt8, UInt64
from typedbencode.core.values import (
    BencodeDictionary,
    BencodeInteger,
    BencodeList,
    BencodeString,
    Value,
)
from typedbencode.exceptions import (
    DataCorruptedError,
    NumberOutOfRangeError,
    TypeMismatchError,
    UnsupportedTargetError,
)
from typedbencode.models import DecoderConfig, OverflowPolicy


class Event(str, Enum):
    STARTED = "started"
    STOPPED = "stopped"


class Flag(IntEnum):
    OFF = 0
    ON = 1


class TestTextAndBytes:
    """Test cases for byte string targets."""

    def test_bytes(self):
        """Test raw bytes, including invalid UTF-8."""
        assert decode(bytes, b"2:\xff\xfe") == b"\xff\xfe"

    def test_bytes_type_mismatch(self):
        """Test that an integer is not a byte string."""
        with pytest.raises(TypeMismatchError) as exc_info:
            decode(bytes, b"i1e")
        assert exc_info.value.expected == "string"
        assert exc_info.value.actual == "integer"

    def test_text(self):
        """Test UTF-8 text."""
        assert decode(str, "6:héllo".encode()) == "héllo"

    def test_text_invalid_utf8(self):
        """Test that undecodable text is reported as corrupted."""
        with pytest.raises(DataCorruptedError) as exc_info:
            decode(str, b"2:\xff\xfe")
        assert exc_info.value.reason == "Unable to convert data to a string"


class TestUrl:
    """Test cases for resource locator targets."""

    def test_url(self):
        """Test decoding a tracker URL."""
        url = decode(AnyUrl, b"31:http://tracker.example/announce")
        assert url.scheme == "http"
        assert url.host == "tracker.example"
        assert url.path == "/announce"

    def test_http_url(self):
        """Test a URL subclass with stricter rules."""
        url = decode(HttpUrl, b"19:https://example.com")
        assert url.scheme == "https"

    def test_invalid_url_is_recoverable(self):
        """Test that an invalid URL raises instead of crashing."""
        with pytest.raises(DataCorruptedError) as exc_info:
            decode(AnyUrl, b"10:not a url!")
        assert "Invalid URL" in exc_info.value.reason

    def test_url_type_mismatch(self):
        """Test that a URL must be a string."""
        with pytest.raises(TypeMismatchError):
            decode(AnyUrl, b"i1e")


class TestNumbers:
    """Test cases for numeric targets."""

    def test_int(self):
        """Test arbitrary-precision integers."""
        assert decode(int, b"i-123456789012345678901234567890e") == (
            -123456789012345678901234567890
        )

    def test_int_type_mismatch(self):
        """Test that a string is not an integer."""
        with pytest.raises(TypeMismatchError):
            decode(int, b"1:1")

    def test_fixed_width_in_range(self):
        """Test narrowing values that fit."""
        assert decode(Int8, b"i-128e") == -128
        assert decode(UInt8, b"i255e") == 255
        value = decode(UInt64, b"i18446744073709551615e")
        assert value == 2**64 - 1
        assert isinstance(value, UInt64)

    @pytest.mark.parametrize(
        ("target", "data"),
        [(Int8, b"i128e"), (Int8, b"i-129e"), (UInt8, b"i-1e"), (Int32, b"i2147483648e")],
    )
    def test_fixed_width_out_of_range(self, target, data):
        """Test that overflow raises by default."""
        with pytest.raises(NumberOutOfRangeError) as exc_info:
            decode(target, data)
        assert exc_info.value.target == target.__name__

    def test_clamp_policy(self):
        """Test saturating overflow."""
        config = DecoderConfig(overflow_policy=OverflowPolicy.CLAMP)
        assert decode(UInt8, b"i300e", config) == 255
        assert decode(UInt8, b"i-5e", config) == 0
        assert decode(Int8, b"i-300e", config) == -128

    def test_wrap_policy(self):
        """Test two's complement truncation."""
        config = DecoderConfig(overflow_policy=OverflowPolicy.WRAP)
        assert decode(UInt8, b"i256e", config) == 0
        assert decode(UInt8, b"i-1e", config) == 255
        assert decode(Int8, b"i128e", config) == -128
        assert decode(Int8, b"i255e", config) == -1

    def test_float(self):
        """Test integers decoded as floats."""
        assert decode(float, b"i3e") == 3.0

    def test_float_overflow(self):
        """Test integers too large for a float."""
        data = b"i1" + b"0" * 400 + b"e"
        with pytest.raises(NumberOutOfRangeError):
            decode(float, data)

    def test_decimal(self):
        """Test exact decimal conversion."""
        assert decode(Decimal, b"i12345678901234567890e") == Decimal(
            "12345678901234567890"
        )

    def test_bool(self):
        """Test integers as booleans."""
        assert decode(bool, b"i1e") is True
        assert decode(bool, b"i0e") is False
        assert decode(bool, b"i-7e") is True


class TestValueTargets:
    """Test cases for raw value targets."""

    def test_value_alias(self):
        """Test decoding into the generic value union."""
        assert decode(Value, b"i1e") == BencodeInteger(1)
        assert decode(Value, b"le") == BencodeList(())

    def test_specific_variant(self):
        """Test requesting one value variant."""
        assert decode(BencodeString, b"1:x") == BencodeString(b"x")
        assert decode(dict[str, BencodeDictionary], b"d1:adee") == {
            "a": BencodeDictionary({})
        }
        with pytest.raises(TypeMismatchError):
            decode(BencodeList, b"de")

    def test_any(self):
        """Test decoding into plain Python objects."""
        assert decode(Any, b"d1:ali1e1:bee") == {"a": [1, b"b"]}


class TestEnumsAndOptionals:
    """Test cases for enums and optional wrappers."""

    def test_str_enum(self):
        """Test string-backed enums."""
        assert decode(Event, b"7:started") is Event.STARTED

    def test_int_enum(self):
        """Test integer-backed enums."""
        assert decode(Flag, b"i1e") is Flag.ON

    def test_unknown_raw_value(self):
        """Test that unknown raw values are reported as corrupted."""
        with pytest.raises(DataCorruptedError) as exc_info:
            decode(Event, b"6:paused")
        assert "invalid raw value 'paused'" in exc_info.value.reason

    def test_optional_never_none(self):
        """Test that optional targets decode the present value."""
        assert decode(Optional[int], b"i4e") == 4
        assert decode(str | None, b"1:a") == "a"

    def test_ambiguous_union_unsupported(self):
        """Test that unions other than optionals are refused."""
        with pytest.raises(UnsupportedTargetError):
            decode(int | str, b"i1e")

    def test_unsupported_target(self):
        """Test that unknown target types are refused."""
        with pytest.raises(UnsupportedTargetError):
            decode(object, b"i1e")
        with pytest.raises(TypeError):
            decode(set[int], b"le")
