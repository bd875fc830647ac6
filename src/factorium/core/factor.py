"""
factorium.core.factor
=====================

The factor algebra: an immutable representation of units as products of named
terms and numeric scale terms, each raised to an integer power.

Three variants exist:

- ``NameFactor``     a named unit raised to a power (``meter^2``).
- ``NumberFactor``   a positive number raised to a power (``10^3``); SI prefixes
  and plain numeric coefficients are number factors.
- ``CompositeFactor`` a canonical product of name and number terms.

Every construction path (direct construction, ``*``, ``/``, ``**``, parsing) goes
through :func:`group_factors`, which merges like terms and drops zero powers.
Equality and hashing look only at that grouped form, so ``10*100*second`` and
``1000*second`` are the same factor, and a bare term equals the one-term
composite that wraps it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
from numbers import Integral
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Mapping, Tuple, Union

from factorium.core.errors import InvalidFactorError, NotConstantError, Result
from factorium.core.utils import as_fraction, canonical_power, format_number

TermKey = Union[str, Fraction]
Term = Union["NameFactor", "NumberFactor"]


def _check_power(power: Any) -> int:
    if isinstance(power, bool) or not isinstance(power, Integral):
        raise TypeError(f"Exponent must be an integer, got {type(power).__name__}")
    return int(power)


class Factor:
    """Base class of the three factor variants.

    Subclasses only describe their canonical ``terms``; equality, hashing,
    arithmetic and rendering are defined once here on top of that mapping.
    """

    __slots__ = ()

    # --- canonical content ---
    @property
    def terms(self) -> Mapping[TermKey, Term]:
        """Canonical mapping of term key (name or numeric base) to term."""
        raise NotImplementedError

    @property
    def factors(self) -> Tuple[Term, ...]:
        """Canonical terms in display order: names by name, then the number term."""
        return tuple(self.terms.values())

    def _signature(self) -> FrozenSet[Tuple[TermKey, int]]:
        return frozenset((key, term.power) for key, term in self.terms.items())

    def pow(self, power: int) -> "Factor":
        """Raise this factor to an integer power."""
        raise NotImplementedError

    # --- equality / hashing ---
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Factor):
            return NotImplemented
        return self._signature() == other._signature()

    def __hash__(self) -> int:
        # frozenset hashing is order independent, so construction order never matters
        return hash(self._signature())

    # --- algebra ---
    def __mul__(self, other: object) -> "Factor":
        if not isinstance(other, Factor):
            return NotImplemented
        return multiply(self, other)

    def __truediv__(self, other: object) -> "Factor":
        if not isinstance(other, Factor):
            return NotImplemented
        return divide(self, other)

    def __rtruediv__(self, other: object) -> "Factor":
        if other != 1:
            raise TypeError(
                f"Invalid operation: cannot divide {other!r} by a factor ({self}). "
                "Only 1/factor (reciprocal) is supported."
            )
        return self.pow(-1)

    def __pow__(self, power: int, modulo: Any | None = None) -> "Factor":
        if modulo is not None:
            raise TypeError("Modulo exponentiation is not supported for factors.")
        return self.pow(power)

    # --- constants ---
    @property
    def is_identity(self) -> bool:
        """True for the dimensionless identity (no terms at all)."""
        return not self.terms

    def is_constant(self) -> bool:
        """True when only number terms remain, i.e. the factor is a plain number."""
        return all(isinstance(term, NumberFactor) for term in self.terms.values())

    def as_constant(self) -> Fraction:
        """Return the exact numeric value of a constant factor.

        Raises
        ------
        NotConstantError
            If any named term remains.
        """
        value = Fraction(1)
        for term in self.terms.values():
            if not isinstance(term, NumberFactor):
                raise NotConstantError(f"Could not convert factor of '{self}' to a constant.")
            value *= term.exact ** term.power
        return value

    def try_as_constant(self) -> Result[Fraction]:
        return Result.capture(self.as_constant)

    @property
    def scale(self) -> Fraction:
        """Exact product of the number terms (1 when there are none)."""
        value = Fraction(1)
        for term in self.terms.values():
            if isinstance(term, NumberFactor):
                value *= term.exact ** term.power
        return value

    @property
    def dimensional_part(self) -> "Factor":
        """This factor with its number terms removed."""
        return multiply(*(t for t in self.terms.values() if isinstance(t, NameFactor)))

    # --- text ---
    def __str__(self) -> str:
        terms = self.terms
        if not terms:
            return "1"
        return "*".join(term._render() for term in terms.values())


@dataclass(frozen=True, slots=True, eq=False)
class NameFactor(Factor):
    """A named unit raised to an integer power."""

    name: str
    power: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError(f"Unit name must be a string, got {type(self.name).__name__}")
        if not self.name:
            raise InvalidFactorError("Unit name must not be empty.")
        object.__setattr__(self, "power", _check_power(self.power))

    @property
    def terms(self) -> Mapping[TermKey, Term]:
        if self.power == 0:
            return MappingProxyType({})
        return MappingProxyType({self.name: self})

    def pow(self, power: int) -> Factor:
        power = _check_power(power)
        if power == 1:
            return self
        if power == 0 or self.power == 0:
            return ONE
        return NameFactor(self.name, self.power * power)

    def _render(self) -> str:
        return self.name if self.power == 1 else f"{self.name}^{self.power}"


@dataclass(frozen=True, slots=True, eq=False)
class NumberFactor(Factor):
    """A positive number raised to an integer power.

    ``number`` keeps whatever real was passed in; ``exact`` is its exact
    ``Fraction`` value, which is what grouping and equality use.
    """

    number: Any
    power: int = 1
    exact: Fraction = field(init=False, repr=False)
    _terms: Mapping[TermKey, Term] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        try:
            exact = as_fraction(self.number)
        except ValueError as exc:
            raise InvalidFactorError(str(exc)) from exc
        if exact <= 0:
            raise InvalidFactorError(f"Number factors must be positive, got {self.number!r}")
        object.__setattr__(self, "exact", exact)
        object.__setattr__(self, "power", _check_power(self.power))

        canonical = canonical_power([(exact, self.power)])
        if canonical is None:
            terms: Dict[TermKey, Term] = {}
        elif canonical == (exact, self.power):
            terms = {exact: self}
        else:
            base, power = canonical
            terms = {base: NumberFactor(base, power)}
        object.__setattr__(self, "_terms", MappingProxyType(terms))

    @property
    def terms(self) -> Mapping[TermKey, Term]:
        return self._terms

    def pow(self, power: int) -> Factor:
        power = _check_power(power)
        if power == 1:
            return self
        if power == 0 or self.power == 0 or self.exact == 1:
            return ONE
        return NumberFactor(self.number, self.power * power)

    def _render(self) -> str:
        text = format_number(self.exact)
        return text if self.power == 1 else f"{text}^{self.power}"


@dataclass(frozen=True, slots=True, eq=False, init=False, repr=False)
class CompositeFactor(Factor):
    """A canonical product of name and number terms.

    ``CompositeFactor(*factors)`` groups its arguments immediately; nested
    composites are flattened, like terms are merged, zero powers are dropped.
    An empty composite is the dimensionless identity.
    """

    _terms: Mapping[TermKey, Term]

    def __init__(self, *factors: Factor) -> None:
        object.__setattr__(self, "_terms", MappingProxyType(group_factors(factors)))

    @classmethod
    def of(cls, factors: Iterable[Factor]) -> "CompositeFactor":
        if factors is None:
            raise TypeError("factors must not be None")
        return cls(*factors)

    @property
    def terms(self) -> Mapping[TermKey, Term]:
        return self._terms

    def pow(self, power: int) -> Factor:
        power = _check_power(power)
        if power == 1:
            return self
        if power == 0:
            return ONE
        return multiply(*(term.pow(power) for term in self._terms.values()))

    def __repr__(self) -> str:
        return f"CompositeFactor({str(self)!r})"


def _expand(factors: Iterable[Factor]) -> Iterator[Term]:
    for factor in factors:
        if factor is None:
            raise TypeError("factor must not be None")
        if isinstance(factor, CompositeFactor):
            yield from factor.terms.values()
        elif isinstance(factor, (NameFactor, NumberFactor)):
            yield factor
        else:
            raise TypeError(f"Expected a Factor, got {type(factor).__name__}")


def group_factors(factors: Iterable[Factor]) -> Dict[TermKey, Term]:
    """Merge a list of factors into canonical terms.

    Name terms are summed per name and number terms are combined exactly; a
    zero net power removes a name, and a net numeric value of 1 removes the
    number term. The remaining number is stored as its canonical perfect power
    (``2^2*5^2*10 -> 10^3``). Names come first, sorted, then the number term.
    """
    names: Dict[str, int] = {}
    numbers: List[Tuple[Fraction, int]] = []

    for term in _expand(factors):
        if isinstance(term, NameFactor):
            total = names.get(term.name, 0) + term.power
            if total:
                names[term.name] = total
            else:
                names.pop(term.name, None)
        else:
            numbers.append((term.exact, term.power))

    grouped: Dict[TermKey, Term] = {
        name: NameFactor(name, power) for name, power in sorted(names.items())
    }
    canonical = canonical_power(numbers)
    if canonical is not None:
        base, power = canonical
        grouped[base] = NumberFactor(base, power)
    return grouped


def multiply(*factors: Factor) -> Factor:
    """Multiply any number of factors into canonical form.

    A single remaining term is returned bare; no terms gives ``ONE``.
    """
    grouped = group_factors(factors)
    if not grouped:
        return ONE
    if len(grouped) == 1:
        return next(iter(grouped.values()))
    composite = object.__new__(CompositeFactor)
    object.__setattr__(composite, "_terms", MappingProxyType(grouped))
    return composite


def divide(left: Factor, right: Factor) -> Factor:
    if not isinstance(right, Factor):
        raise TypeError(f"Expected a Factor, got {type(right).__name__}")
    return multiply(left, right.pow(-1))


ONE: Factor = CompositeFactor()


__all__ = [
    "Factor",
    "NameFactor",
    "NumberFactor",
    "CompositeFactor",
    "ONE",
    "group_factors",
    "multiply",
    "divide",
]
