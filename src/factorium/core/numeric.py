"""
factorium.core.numeric
======================

The scalar contract for values that carry units.

A scalar only needs ordered-field arithmetic and integer powers; factorium does
not tie ``ValueWithUnits`` to ``float``. The core keeps scale factors as exact
fractions, and ``scale_value`` moves such a factor into the scalar's own type.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from numbers import Integral, Rational, Real
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Scalar(Protocol):
    """Minimal arithmetic a value must support to carry units."""

    def __add__(self, other: Any) -> Any: ...
    def __sub__(self, other: Any) -> Any: ...
    def __mul__(self, other: Any) -> Any: ...
    def __truediv__(self, other: Any) -> Any: ...
    def __pow__(self, other: Any) -> Any: ...
    def __lt__(self, other: Any) -> Any: ...


def is_scalar(value: object) -> bool:
    """Real numbers and decimals qualify; ``bool`` and complex numbers do not."""
    if isinstance(value, bool):
        return False
    return isinstance(value, (Real, Decimal)) and isinstance(value, Scalar)


def scale_value(value: Any, constant: Fraction) -> Any:
    """Multiply ``value`` by an exact ``constant`` without leaving ``value``'s numeric type.

    - ``float`` (and other inexact reals) multiply by ``float(constant)``.
    - ``Decimal`` multiplies by numerator and divides by denominator in decimal.
    - ``int`` and ``Fraction`` stay exact; whole results come back as ``int``.
    """
    if constant == 1:
        return value
    if isinstance(value, float):
        return value * float(constant)
    if isinstance(value, Decimal):
        return value * Decimal(constant.numerator) / Decimal(constant.denominator)
    if isinstance(value, Rational):
        result = Fraction(value.numerator, value.denominator) * constant
        return result.numerator if result.denominator == 1 else result
    return value * float(constant)


def match_scalar(value: Any, like: Any) -> Any:
    """Express ``value`` in the numeric type of ``like`` when the two do not mix.

    Python refuses ``Decimal + float`` and ``Decimal + Fraction``; for those
    pairs the type of ``like`` wins. Floats enter decimal through their
    shortest repr, so ``0.001`` becomes ``Decimal("0.001")``. Every other
    pairing is returned unchanged.
    """
    if isinstance(like, Decimal) and not isinstance(value, Decimal):
        if isinstance(value, float):
            return Decimal(repr(value))
        if isinstance(value, Rational) and not isinstance(value, Integral):
            return Decimal(value.numerator) / Decimal(value.denominator)
    elif isinstance(value, Decimal) and not isinstance(like, Decimal):
        if isinstance(like, float):
            return float(value)
        if isinstance(like, Rational) and not isinstance(like, Integral):
            return Fraction(value)
    return value


__all__ = ["Scalar", "is_scalar", "scale_value", "match_scalar"]
