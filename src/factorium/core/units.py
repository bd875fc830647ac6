from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import TYPE_CHECKING, Any, Union

from factorium.core.errors import Result
from factorium.core.factor import ONE, Factor
from factorium.core.numeric import is_scalar

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from factorium.core.quantity import ValueWithUnits
    from factorium.units.registry import UnitsRegistry


@dataclass(frozen=True, slots=True)
class Units:
    """A canonical factor bound together as a set of units.

    ``Units`` is what values carry. Multiplying a number by units produces a
    ``ValueWithUnits``; combining units with units composes their factors.
    """

    factor: Factor

    def __post_init__(self) -> None:
        if self.factor is None:
            raise TypeError("Units require a factor, got None")
        if not isinstance(self.factor, Factor):
            raise TypeError(f"Units require a Factor, got {type(self.factor).__name__}")

    @classmethod
    def parse(cls, text: str, registry: "UnitsRegistry | None" = None) -> "Units":
        """Explicit string-to-units conversion, e.g. ``Units.parse("kg*m/s^2")``.

        Raises ``UnitFormatError`` for empty, malformed or unknown expressions.
        """
        from factorium.units.parser import parse_units_expr

        if registry is None:
            from factorium.units.registry import DEFAULT_REGISTRY as registry
        return cls(parse_units_expr(text, registry))

    @classmethod
    def try_parse(cls, text: str, registry: "UnitsRegistry | None" = None) -> Result["Units"]:
        return Result.capture(cls.parse, text, registry)

    @property
    def is_identity(self) -> bool:
        return self.factor.is_identity

    def is_constant(self) -> bool:
        return self.factor.is_constant()

    def as_constant(self) -> Fraction:
        return self.factor.as_constant()

    def pow(self, power: int) -> "Units":
        if power == 1:
            return self
        return Units(self.factor.pow(power))

    def __pow__(self, power: int) -> "Units":
        return self.pow(power)

    def __mul__(self, other: Any) -> "Units | ValueWithUnits":
        if isinstance(other, Units):
            return Units(self.factor * other.factor)
        if isinstance(other, Factor):
            return Units(self.factor * other)
        if is_scalar(other):
            from factorium.core.quantity import ValueWithUnits

            return ValueWithUnits(other, self)
        return NotImplemented

    def __rmul__(self, other: Any) -> "Units | ValueWithUnits":
        if isinstance(other, Factor):
            return Units(other * self.factor)
        if is_scalar(other):
            from factorium.core.quantity import ValueWithUnits

            return ValueWithUnits(other, self)
        return NotImplemented

    def __truediv__(self, other: Any) -> "Units":
        if isinstance(other, Units):
            return Units(self.factor / other.factor)
        if isinstance(other, Factor):
            return Units(self.factor / other)
        return NotImplemented

    def __rtruediv__(self, other: Any) -> "Units | ValueWithUnits":
        if isinstance(other, Factor):
            return Units(other / self.factor)
        if is_scalar(other):
            from factorium.core.quantity import ValueWithUnits

            return ValueWithUnits(other, self.pow(-1))
        return NotImplemented

    def __str__(self) -> str:
        return str(self.factor)

    def __repr__(self) -> str:
        return f"Units({str(self.factor)!r})"


def as_units(units: Union[Units, Factor, str], registry: "UnitsRegistry | None" = None) -> Units:
    """Coerce ``Units``, a bare ``Factor`` or a unit expression into ``Units``."""
    if isinstance(units, Units):
        return units
    if isinstance(units, Factor):
        return Units(units)
    if isinstance(units, str):
        return Units.parse(units, registry)
    if units is None:
        raise TypeError("units must not be None")
    raise TypeError(f"Expected Units, Factor or str, got {type(units).__name__}")


DIMENSIONLESS = Units(ONE)

__all__ = ["Units", "as_units", "DIMENSIONLESS"]
