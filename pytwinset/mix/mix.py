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

from collections.abc import Mapping

from pytwinset.classes import gas_kind
from pytwinset.constants import FRAC_TOL, MOLAR_MASS
from pytwinset.validate import InvalidGasComposition, validate_methods, validate_fractions


class GasComposition(Mapping):
    """ Mole fractions of a breathing gas, keyed by gas_kind. Read only once built.

            Inputs:
                fractions: Dictionary of gas_kind (or gas name, e.g. 'O2') to mole fraction (0-1).
                           Fractions must sum to 1.0. Zero fractions are dropped.

            Usage example for Trimix 21/35:
                mix = GasComposition({'O2': 0.21, 'HE': 0.35, 'N2': 0.44})
                mix[gas_kind.HE]
                >> 0.35
    """
    __slots__ = ("_fracs",)

    def __init__(self, fractions):
        fracs = {}
        for gas, frac in fractions.items():
            gas = validate_methods(["gas"], [gas])
            fracs[gas] = fracs.get(gas, 0.0) + float(frac)
        total = validate_fractions(fracs)
        if abs(total - 1.0) > FRAC_TOL:
            raise InvalidGasComposition(f"Gas fractions must sum to 1.0, got {total}")
        # Keep enumeration order so that summations run in a fixed order
        self._fracs = {gas: fracs[gas] for gas in gas_kind if fracs.get(gas, 0.0) > 0}

    def __getitem__(self, gas):
        return self._fracs[validate_methods(["gas"], [gas])]

    def __iter__(self):
        return iter(self._fracs)

    def __len__(self):
        return len(self._fracs)

    def __hash__(self):
        return hash(tuple(self._fracs.items()))

    def __eq__(self, other):
        if isinstance(other, GasComposition):
            return self._fracs == other._fracs
        return NotImplemented

    def __repr__(self):
        return "GasComposition({" + ", ".join(f"'{gas.name}': {frac:g}" for gas, frac in self._fracs.items()) + "})"

    def __str__(self):
        return ", ".join(f"{gas.name} {100 * frac:.1f}%" for gas, frac in self._fracs.items())

    @property
    def molecular_weight(self) -> float:
        """ Molar mass of the mix (g/mol) """
        return sum(frac * MOLAR_MASS[gas] for gas, frac in self._fracs.items())


def gas_composition(
    o2: float = 0.21,
    he: float = 0,
    ne: float = 0,
    ar: float = 0,
    h2: float = 0,
) -> GasComposition:
    """ Returns a GasComposition with nitrogen making up the balance of the explicitly defined gases
        o2: Mole fraction of Oxygen. Defaults to 0.21
        he: Mole fraction of Helium. Defaults to zero
        ne: Mole fraction of Neon. Defaults to zero
        ar: Mole fraction of Argon. Defaults to zero
        h2: Mole fraction of Hydrogen. Defaults to zero

        Raises InvalidGasComposition if the defined gases exceed 1.0 in total
    """
    defined = {gas_kind.HE: he, gas_kind.O2: o2, gas_kind.AR: ar, gas_kind.NE: ne, gas_kind.H2: h2}
    total = validate_fractions(defined)
    defined[gas_kind.N2] = max(0.0, 1.0 - total)
    return GasComposition(defined)

AIR = gas_composition(o2=0.21)
