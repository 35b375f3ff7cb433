#!/usr/bin/python3
# -*- coding: utf-8 -*-

"""
    pyTwinset - Gas equalization between diving cylinders
              Copyright (C) 2022, Mark Burgoyne

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    The GNU General Public License can be found in the LICENSE directory,
    and at  <https://www.gnu.org/licenses/>.

          Contact author at mark.w.burgoyne@gmail.com
"""

from types import MappingProxyType
from typing import NamedTuple

from pytwinset.classes import gas_kind

# Constants
R = 0.0831  # Universal gas constant, L·bar/K·mol
MOLAR_VOLUME = 22.4  # Litres of gas per mol at reference conditions
CEL2KEL = 273.15  # Offset to convert degrees C to Kelvin

# Operating envelope of a dive cylinder
MAX_PRESSURE = 350  # bar
MAX_VOLUME = 1000  # litres
MIN_DEGC = -30  # deg C, exclusive
MAX_DEGC = 80  # deg C, exclusive

FRAC_TOL = 1e-9  # Slack allowed when summing gas fractions

class VdwConstant(NamedTuple):
    a: float  # Attraction, L²·bar/mol²
    b: float  # Excluded volume, L/mol

VDW_CONSTANTS = MappingProxyType({
    gas_kind.AR: VdwConstant(a=1.355, b=0.03201),
    gas_kind.HE: VdwConstant(a=0.0346, b=0.0238),
    gas_kind.H2: VdwConstant(a=0.2476, b=0.02661),
    gas_kind.NE: VdwConstant(a=0.2135, b=0.01709),
    gas_kind.N2: VdwConstant(a=1.370, b=0.0387),
    gas_kind.O2: VdwConstant(a=1.382, b=0.03186),
})

# Molar mass of each gas as it is stored (g/mol)
MW_AR = 39.948
MW_HE = 4.002602
MW_H2 = 2.01588
MW_NE = 20.1797
MW_N2 = 28.0134
MW_O2 = 31.998

MOLAR_MASS = MappingProxyType({
    gas_kind.AR: MW_AR,
    gas_kind.HE: MW_HE,
    gas_kind.H2: MW_H2,
    gas_kind.NE: MW_NE,
    gas_kind.N2: MW_N2,
    gas_kind.O2: MW_O2,
})
