"""
factorium.units.catalog
=======================

The static catalog of SI prefixes, base units and derived units.

Everything here is built in one pass, top to bottom: the identity first, then
the prefixes, the seven base units, and finally derived units composed only of
factors defined above them. The objects are immutable, so the module can be
read from any thread once imported.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Tuple

from factorium.core.factor import ONE, Factor, NameFactor, NumberFactor

# ---------------------------------------------------------------------------
# SI prefixes (number factors, base 10)
# ---------------------------------------------------------------------------
QUETTA = NumberFactor(10, 30)
RONNA = NumberFactor(10, 27)
YOTTA = NumberFactor(10, 24)
ZETTA = NumberFactor(10, 21)
EXA = NumberFactor(10, 18)
PETA = NumberFactor(10, 15)
TERA = NumberFactor(10, 12)
GIGA = NumberFactor(10, 9)
MEGA = NumberFactor(10, 6)
KILO = NumberFactor(10, 3)
HECTO = NumberFactor(10, 2)
DECA = NumberFactor(10, 1)
DECI = NumberFactor(10, -1)
CENTI = NumberFactor(10, -2)
MILLI = NumberFactor(10, -3)
MICRO = NumberFactor(10, -6)
NANO = NumberFactor(10, -9)
PICO = NumberFactor(10, -12)
FEMTO = NumberFactor(10, -15)
ATTO = NumberFactor(10, -18)
ZEPTO = NumberFactor(10, -21)
YOCTO = NumberFactor(10, -24)
RONTO = NumberFactor(10, -27)
QUECTO = NumberFactor(10, -30)


@dataclass(frozen=True, slots=True)
class Prefix:
    """An SI prefix: its symbol, spelled-out name and scale factor."""

    symbol: str
    name: str
    factor: NumberFactor
    aliases: Tuple[str, ...] = ()

    @property
    def symbols(self) -> Tuple[str, ...]:
        return (self.symbol, *self.aliases)


PREFIXES: Tuple[Prefix, ...] = (
    Prefix("Q", "quetta", QUETTA),
    Prefix("R", "ronna", RONNA),
    Prefix("Y", "yotta", YOTTA),
    Prefix("Z", "zetta", ZETTA),
    Prefix("E", "exa", EXA),
    Prefix("P", "peta", PETA),
    Prefix("T", "tera", TERA),
    Prefix("G", "giga", GIGA),
    Prefix("M", "mega", MEGA),
    Prefix("k", "kilo", KILO),
    Prefix("h", "hecto", HECTO),
    Prefix("da", "deca", DECA, ("dk",)),
    Prefix("d", "deci", DECI),
    Prefix("c", "centi", CENTI),
    Prefix("m", "milli", MILLI),
    Prefix("\u00b5", "micro", MICRO, ("\u03bc", "u")),  # micro sign, Greek mu, ASCII
    Prefix("n", "nano", NANO),
    Prefix("p", "pico", PICO),
    Prefix("f", "femto", FEMTO),
    Prefix("a", "atto", ATTO),
    Prefix("z", "zepto", ZEPTO),
    Prefix("y", "yocto", YOCTO),
    Prefix("r", "ronto", RONTO),
    Prefix("q", "quecto", QUECTO),
)

# ---------------------------------------------------------------------------
# Base SI units (name factors)
# ---------------------------------------------------------------------------
METER = NameFactor("meter")        # length
GRAM = NameFactor("gram")          # mass
SECOND = NameFactor("second")      # time
AMPERE = NameFactor("ampere")      # electric current
KELVIN = NameFactor("kelvin")      # thermodynamic temperature
MOLE = NameFactor("mole")          # amount of substance
CANDELA = NameFactor("candela")    # luminous intensity

KILOGRAM = KILO * GRAM

# ---------------------------------------------------------------------------
# Derived units
# ---------------------------------------------------------------------------
HERTZ = SECOND ** -1
NEWTON = KILOGRAM * METER / SECOND ** 2
PASCAL = NEWTON / METER ** 2
JOULE = NEWTON * METER
WATT = JOULE / SECOND
COULOMB = SECOND * AMPERE
VOLT = WATT / AMPERE
FARAD = COULOMB / VOLT
OHM = VOLT / AMPERE
SIEMENS = OHM ** -1
WEBER = VOLT * SECOND
TESLA = WEBER / METER ** 2
HENRY = WEBER / AMPERE
BECQUEREL = HERTZ
GRAY = JOULE / KILOGRAM
SIEVERT = GRAY
KATAL = MOLE / SECOND
LUMEN = CANDELA                    # cd·sr, the steradian being dimensionless
LUX = LUMEN / METER ** 2

# Accepted non-SI units
LITER = (DECI * METER) ** 3
MINUTE = NumberFactor(60) * SECOND
HOUR = NumberFactor(60) * MINUTE
DAY = NumberFactor(24) * HOUR
TONNE = MEGA * GRAM
ELECTRONVOLT = NumberFactor(Fraction("1.602176634e-19")) * JOULE

# Composite helpers
METERS_PER_SECOND = METER / SECOND
JOULE_SECOND = JOULE * SECOND


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One registrable unit: canonical name, factor, symbol and extra spellings."""

    name: str
    factor: Factor
    symbol: Optional[str] = None
    aliases: Tuple[str, ...] = ()
    symbol_aliases: Tuple[str, ...] = ()
    prefixable: bool = True


# Registration order matches definition order above.
CATALOG: Tuple[CatalogEntry, ...] = (
    # base
    CatalogEntry("meter", METER, "m", ("metre",)),
    CatalogEntry("gram", GRAM, "g", ("gramme",)),
    CatalogEntry("second", SECOND, "s", ("sec",)),
    CatalogEntry("ampere", AMPERE, "A", ("amp",)),
    CatalogEntry("kelvin", KELVIN, "K"),
    CatalogEntry("mole", MOLE, "mol"),
    CatalogEntry("candela", CANDELA, "cd"),
    # derived
    CatalogEntry("hertz", HERTZ, "Hz"),
    CatalogEntry("newton", NEWTON, "N"),
    CatalogEntry("pascal", PASCAL, "Pa"),
    CatalogEntry("joule", JOULE, "J"),
    CatalogEntry("watt", WATT, "W"),
    CatalogEntry("coulomb", COULOMB, "C"),
    CatalogEntry("volt", VOLT, "V"),
    CatalogEntry("farad", FARAD, "F"),
    CatalogEntry("ohm", OHM, "\u03a9"),
    CatalogEntry("siemens", SIEMENS, "S"),
    CatalogEntry("weber", WEBER, "Wb"),
    CatalogEntry("tesla", TESLA, "T"),
    CatalogEntry("henry", HENRY, "H", ("henries",)),
    CatalogEntry("becquerel", BECQUEREL, "Bq"),
    CatalogEntry("gray", GRAY, "Gy"),
    CatalogEntry("sievert", SIEVERT, "Sv"),
    CatalogEntry("katal", KATAL, "kat"),
    CatalogEntry("lumen", LUMEN, "lm"),
    CatalogEntry("lux", LUX, "lx"),
    # non-SI
    CatalogEntry("liter", LITER, "L", ("litre",), symbol_aliases=("l",)),
    CatalogEntry("minute", MINUTE, "min", prefixable=False),
    CatalogEntry("hour", HOUR, "h", ("hr",), prefixable=False),
    CatalogEntry("day", DAY, "d", prefixable=False),
    CatalogEntry("tonne", TONNE, "t"),
    CatalogEntry("electronvolt", ELECTRONVOLT, "eV", ("electron_volt",)),
)


__all__ = [
    "ONE",
    "Prefix",
    "PREFIXES",
    "CatalogEntry",
    "CATALOG",
    "QUETTA", "RONNA", "YOTTA", "ZETTA", "EXA", "PETA", "TERA", "GIGA", "MEGA",
    "KILO", "HECTO", "DECA", "DECI", "CENTI", "MILLI", "MICRO", "NANO", "PICO",
    "FEMTO", "ATTO", "ZEPTO", "YOCTO", "RONTO", "QUECTO",
    "METER", "GRAM", "SECOND", "AMPERE", "KELVIN", "MOLE", "CANDELA", "KILOGRAM",
    "HERTZ", "NEWTON", "PASCAL", "JOULE", "WATT", "COULOMB", "VOLT", "FARAD",
    "OHM", "SIEMENS", "WEBER", "TESLA", "HENRY", "BECQUEREL", "GRAY", "SIEVERT",
    "KATAL", "LUMEN", "LUX", "LITER", "MINUTE", "HOUR", "DAY", "TONNE",
    "ELECTRONVOLT", "METERS_PER_SECOND", "JOULE_SECOND",
]
