"""
factorium.units.constants
=========================

Physical constants (2019 SI exact values) as ``ValueWithUnits``.

The constants are built from the catalog factors only, after the catalog has
been fully constructed, so importing this module never touches the registry.
"""

from __future__ import annotations

import math

from factorium.core.factor import ONE
from factorium.core.quantity import ValueWithUnits
from factorium.units.catalog import (
    COULOMB,
    JOULE,
    JOULE_SECOND,
    KELVIN,
    METERS_PER_SECOND,
    MOLE,
)

AVOGADRO = ValueWithUnits(6.02214076e23, MOLE ** -1)
BOLTZMANN = ValueWithUnits(1.380649e-23, JOULE / KELVIN)
ELEMENTARY_CHARGE = ValueWithUnits(1.602176634e-19, COULOMB)
PLANCK = ValueWithUnits(6.62607015e-34, JOULE_SECOND)
SPEED_OF_LIGHT = ValueWithUnits(299792458, METERS_PER_SECOND)

MOLE_QUANTITY = ValueWithUnits(1, MOLE)
ONE_QUANTITY = ValueWithUnits(1, ONE)
PI = ValueWithUnits(math.pi, ONE)
TAU = ValueWithUnits(math.tau, ONE)


__all__ = [
    "AVOGADRO",
    "BOLTZMANN",
    "ELEMENTARY_CHARGE",
    "PLANCK",
    "SPEED_OF_LIGHT",
    "MOLE_QUANTITY",
    "ONE_QUANTITY",
    "PI",
    "TAU",
]
