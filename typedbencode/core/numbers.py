"""Fixed-width integer targets and checked narrowing.

Bencode integers are unbounded. Declaring a field as ``UInt32`` instead of
``int`` asks the decoder to check that the value fits in 32 unsigned bits.
"""

from __future__ import annotations

from typing import ClassVar

from typedbencode.models import OverflowPolicy


class FixedWidthInt(int):
    """Base for integer types with a bounded range."""

    bits: ClassVar[int] = 64
    signed: ClassVar[bool] = True

    @classmethod
    def min_value(cls) -> int:
        """Smallest representable value."""
        return -(1 << (cls.bits - 1)) if cls.signed else 0

    @classmethod
    def max_value(cls) -> int:
        """Largest representable value."""
        return (1 << (cls.bits - 1)) - 1 if cls.signed else (1 << cls.bits) - 1

    @classmethod
    def fits(cls, value: int) -> bool:
        """Whether ``value`` is inside the range."""
        return cls.min_value() <= value <= cls.max_value()

    @classmethod
    def clamp(cls, value: int) -> int:
        """Saturate ``value`` at the range limits."""
        return max(cls.min_value(), min(cls.max_value(), value))

    @classmethod
    def wrap(cls, value: int) -> int:
        """Truncate ``value`` to the low ``bits`` bits, two's complement."""
        value &= (1 << cls.bits) - 1
        if cls.signed and value > cls.max_value():
            value -= 1 << cls.bits
        return value


class Int8(FixedWidthInt):
    bits = 8


class Int16(FixedWidthInt):
    bits = 16


class Int32(FixedWidthInt):
    bits = 32


class Int64(FixedWidthInt):
    bits = 64


class UInt8(FixedWidthInt):
    bits = 8
    signed = False


class UInt16(FixedWidthInt):
    bits = 16
    signed = False


class UInt32(FixedWidthInt):
    bits = 32
    signed = False


class UInt64(FixedWidthInt):
    bits = 64
    signed = False


def narrow(
    value: int,
    target: type[FixedWidthInt],
    policy: OverflowPolicy,
) -> FixedWidthInt | None:
    """Convert ``value`` to ``target`` according to ``policy``.

    Returns None when ``value`` is out of range and the policy is RAISE; the
    caller owns the error since only it knows the coding path.
    """
    if target.fits(value):
        return target(value)
    if policy == OverflowPolicy.CLAMP:
        return target(target.clamp(value))
    if policy == OverflowPolicy.WRAP:
        return target(target.wrap(value))
    return None
