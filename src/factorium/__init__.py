"""
Factorium: exact dimensional analysis built on a canonical factor algebra.

Units are products of named terms (``meter``, ``second``) and numeric scale
terms (``10^3``), each raised to an integer power. Factorium keeps every unit in
a canonical grouped form, so equivalent spellings compare equal, and converts
values between compatible units through exact scale factors.
This module exposes a minimal, stable public API. Heavy subsystems (e.g. the
units registry) are imported lazily to avoid import-time side effects and
circular imports.
"""

import logging
from importlib import metadata as _metadata
from pathlib import Path as _Path

from factorium.core.errors import (
    IncompatibleUnitsError,
    InvalidFactorError,
    NotConstantError,
    Result,
    UnitFormatError,
    UnitsError,
)
from factorium.core.factor import (
    ONE,
    CompositeFactor,
    Factor,
    NameFactor,
    NumberFactor,
    divide,
    multiply,
)
from factorium.core.quantity import ValueWithUnits
from factorium.core.units import DIMENSIONLESS, Units

__author__ = "Parneet Sidhu"
__license__ = "MIT"

# Try to read the installed package version first; fall back to the source tree's pyproject.
try:
    __version__ = _metadata.version("factorium")
except _metadata.PackageNotFoundError:
    import tomllib
    with open(_Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public names exposed by the package. Keep this minimal and stable.
__all__ = [
    "__version__", "__author__", "__license__",
    "Factor", "NameFactor", "NumberFactor", "CompositeFactor", "ONE",
    "multiply", "divide",
    "Units", "DIMENSIONLESS", "ValueWithUnits",
    "UnitsError", "UnitFormatError", "InvalidFactorError",
    "IncompatibleUnitsError", "NotConstantError", "Result",
]


def __getattr__(name: str):
    """Lazy ``u``, served by :mod:`factorium.units`."""
    if name == "u":
        from factorium import units
        return units.u
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__() -> list[str]:
    return sorted([*globals(), "u"])
