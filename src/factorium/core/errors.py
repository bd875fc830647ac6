"""
factorium.core.errors
=====================

Error kinds raised by the factor algebra, the unit parser and value arithmetic,
plus a small ``Result`` type for the non-raising ``try_*`` entry points.

The exceptions subclass the built-in ``ValueError``/``TypeError`` so callers that
already guard unit code with those keep working.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class UnitsError(Exception):
    """Base class for every error raised by factorium."""


class UnitFormatError(UnitsError, ValueError):
    """An empty, malformed, or unresolvable unit expression."""


class InvalidFactorError(UnitsError, ValueError):
    """A factor was constructed from an invalid name or number."""


class IncompatibleUnitsError(UnitsError, TypeError):
    """Two sets of units do not reduce to a constant ratio."""


class NotConstantError(IncompatibleUnitsError):
    """A factor with named terms was treated as a plain number."""


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Outcome of a ``try_*`` operation: either a value or the error it raised."""

    value: Optional[T] = None
    error: Optional[UnitsError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, re-raising the captured error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: UnitsError) -> "Result[T]":
        return cls(error=error)

    @classmethod
    def capture(cls, fn: Callable[..., T], *args: object) -> "Result[T]":
        """Call ``fn(*args)`` and wrap a ``UnitsError`` instead of raising it."""
        try:
            return cls.success(fn(*args))
        except UnitsError as exc:
            return cls.failure(exc)


__all__ = [
    "UnitsError",
    "UnitFormatError",
    "InvalidFactorError",
    "IncompatibleUnitsError",
    "NotConstantError",
    "Result",
]
