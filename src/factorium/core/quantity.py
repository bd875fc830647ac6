"""
factorium.core.quantity
=======================

Defines ``ValueWithUnits``: a scalar paired with ``Units``.

Addition and subtraction convert the right operand into the left operand's
units first; multiplication and division compose units without converting.
Dividing a value by bare units is the conversion primitive: it succeeds only
when the two sets of units differ by a constant factor.

>>> from factorium import u
>>> (1 * u.km - 2 * u.m) / u.m
998
>>> (2 * u.km) / (10 * u("m/s")) / u.s
200.0
"""

from __future__ import annotations

from typing import Any, Union

from factorium.core.errors import IncompatibleUnitsError, NotConstantError, Result
from factorium.core.factor import Factor
from factorium.core.numeric import is_scalar, match_scalar, scale_value
from factorium.core.units import DIMENSIONLESS, Units, as_units

UnitsLike = Union[Units, Factor, str]


class ValueWithUnits:
    """
    An immutable scalar value with units attached.

    Attributes
    ----------
    value : Scalar
        The numeric magnitude, expressed in ``units``. Any real number works
        (``int``, ``float``, ``Fraction``, ``Decimal``, ...).
    units : Units
        The attached units.
    """
    __slots__ = ("value", "units")

    def __init__(self, value: Any, units: UnitsLike):
        if not is_scalar(value):
            raise TypeError(f"Value must be a real number, got {type(value).__name__}")
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "units", as_units(units))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # --- conversion ---
    def convert(self, units: UnitsLike) -> Any:
        """Return the bare scalar this value amounts to in ``units``.

        Raises
        ------
        IncompatibleUnitsError
            If ``self.units / units`` does not reduce to a constant.
        """
        ratio = self.units / as_units(units)
        try:
            constant = ratio.as_constant()
        except NotConstantError as exc:
            raise IncompatibleUnitsError(f"Could not convert units of '{ratio}' to a constant.") from exc
        return scale_value(self.value, constant)

    def try_convert(self, units: UnitsLike) -> Result[Any]:
        return Result.capture(self.convert, units)

    def to(self, units: UnitsLike) -> "ValueWithUnits":
        """Re-express this value in other (compatible) units."""
        target = as_units(units)
        if target == self.units:
            return self
        return ValueWithUnits(self.convert(target), target)

    def as_key(self, precision: int = 12) -> tuple:
        """
        Returns a hashable key for this value.

        ``__hash__`` is disabled because equality holds across different units
        (``1000 m == 1 km``). The key pairs the units' named part with the value
        scaled by the units' numeric part, rounded to ``precision`` decimals.
        """
        magnitude = float(scale_value(self.value, self.units.factor.scale))
        rounded = round(magnitude, precision)
        if rounded == 0.0:
            # -0.0 and 0.0 compare equal but must share a key
            rounded = 0.0
        return (self.units.factor.dimensional_part, rounded)

    __hash__ = None  # type: ignore[assignment]

    # --- equality / ordering ---
    def _converted(self, other: "ValueWithUnits") -> Any:
        # right operand in the left operand's units and scalar type
        return match_scalar(other.convert(self.units), self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueWithUnits):
            return NotImplemented
        try:
            return self.value == self._converted(other)
        except IncompatibleUnitsError:
            return False

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ValueWithUnits):
            return NotImplemented
        return self.value < self._converted(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, ValueWithUnits):
            return NotImplemented
        return self.value <= self._converted(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ValueWithUnits):
            return NotImplemented
        return self.value > self._converted(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, ValueWithUnits):
            return NotImplemented
        return self.value >= self._converted(other)

    # --- arithmetic ---
    def __add__(self, other: object) -> "ValueWithUnits":
        if not isinstance(other, ValueWithUnits):
            return NotImplemented
        # result keeps the left operand's units
        return ValueWithUnits(self.value + self._converted(other), self.units)

    def __sub__(self, other: object) -> "ValueWithUnits":
        if not isinstance(other, ValueWithUnits):
            return NotImplemented
        return ValueWithUnits(self.value - self._converted(other), self.units)

    def __mul__(self, other: object) -> "ValueWithUnits":
        if isinstance(other, ValueWithUnits):
            value = self.value * match_scalar(other.value, self.value)
            return ValueWithUnits(value, self.units * other.units)
        if isinstance(other, (Units, Factor)):
            return ValueWithUnits(self.value, self.units * other)
        if is_scalar(other):
            return ValueWithUnits(self.value * other, self.units)
        return NotImplemented

    def __rmul__(self, other: object) -> "ValueWithUnits":
        if isinstance(other, (Units, Factor)):
            return ValueWithUnits(self.value, other * self.units)
        if is_scalar(other):
            return ValueWithUnits(other * self.value, self.units)
        return NotImplemented

    def __truediv__(self, other: object) -> Any:
        if isinstance(other, ValueWithUnits):
            value = self.value / match_scalar(other.value, self.value)
            return ValueWithUnits(value, self.units / other.units)
        if isinstance(other, (Units, Factor, str)):
            # value / units -> bare scalar
            return self.convert(other)
        if is_scalar(other):
            return ValueWithUnits(self.value / other, self.units)
        return NotImplemented

    def __rtruediv__(self, other: object) -> "ValueWithUnits":
        if is_scalar(other):
            return ValueWithUnits(other / self.value, self.units.pow(-1))
        return NotImplemented

    def __pow__(self, power: int) -> "ValueWithUnits":
        return ValueWithUnits(self.value ** power, self.units.pow(power))

    def __neg__(self) -> "ValueWithUnits":
        return ValueWithUnits(-self.value, self.units)

    def __pos__(self) -> "ValueWithUnits":
        return self

    def __abs__(self) -> "ValueWithUnits":
        return ValueWithUnits(abs(self.value), self.units)

    def __float__(self) -> float:
        # only meaningful when the units reduce to a plain number
        return float(self.convert(DIMENSIONLESS))

    # --- text ---
    def __str__(self) -> str:
        return f"{self.value} {self.units}"

    def __repr__(self) -> str:
        return f"ValueWithUnits({self.value!r}, {str(self.units)!r})"

    def __format__(self, spec: str) -> str:
        """
        Format the value with ``spec`` and append the units.

        >>> f"{2.5 * u.km:.2f}"
        '2.50 meter*10^3'
        """
        return f"{format(self.value, spec)} {self.units}"


__all__ = ["ValueWithUnits"]
