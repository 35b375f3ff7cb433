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

from dataclasses import dataclass
from typing import Mapping, Tuple

from pytwinset.classes import gas_system, gas_kind
from pytwinset.eos import composition_moles, composition_weight, composition_gas_volume
from pytwinset.validate import validate_pressures, validate_volumes


class Cylinder():
    """ A single cylinder and the gas it contains. Pressure is the only attribute that changes once built,
        and only through equalization.

            Inputs:
                description: Label used in step traces ('left', 'right', 'source', 'destination')
                volume: Water volume of the cylinder (litres)
                pressure: Gas pressure (bar)
    """
    def __init__(self, description: str, volume: float, pressure: float):
        self.description = description
        self.volume = volume
        self.pressure = pressure

    def __repr__(self):
        return f"Cylinder({self.description!r}, volume={self.volume:g}, pressure={self.pressure:g})"

    def gas_volume(self, composition: Mapping[gas_kind, float], degk: float, gsystem: gas_system = gas_system.VDW) -> float:
        """ Returns volume of gas (litres) in the cylinder """
        return composition_gas_volume(self.volume, self.pressure, composition, degk, gsystem)

    def moles(self, composition: Mapping[gas_kind, float], degk: float) -> float:
        """ Returns Van der Waals moles of gas in the cylinder """
        return composition_moles(self.volume, self.pressure, composition, degk)

    def gas_weight(self, composition: Mapping[gas_kind, float], degk: float) -> float:
        """ Returns weight of gas (grams) in the cylinder """
        return composition_weight(self.volume, self.pressure, composition, degk)


class CylinderList(list):
    """ Ordered cylinders making up one side of a gas transfer """

    def total_volume(self) -> float:
        return sum(cyl.volume for cyl in self)

    def total_gas_volume(self, composition: Mapping[gas_kind, float], degk: float, gsystem: gas_system = gas_system.VDW) -> float:
        return sum(cyl.gas_volume(composition, degk, gsystem) for cyl in self)

    def total_gas_weight(self, composition: Mapping[gas_kind, float], degk: float) -> float:
        return sum(cyl.gas_weight(composition, degk) for cyl in self)

    def total_moles(self, composition: Mapping[gas_kind, float], degk: float) -> float:
        return sum(cyl.moles(composition, degk) for cyl in self)

    @property
    def is_twinset(self) -> bool:
        return len(self) > 1


@dataclass(frozen=True)
class CylinderConfiguration:
    """ Source and destination cylinder sizes (litres), pressures (bar), and whether each side is a twinset
        with a closed manifold. Ranges are checked when built, raising InvalidPressureRange or
        InvalidVolumeRange.
    """
    source_volume: float
    source_pressure: float
    destination_volume: float
    destination_pressure: float
    source_twinset: bool = False
    destination_twinset: bool = False

    def __post_init__(self):
        validate_pressures(self.source_pressure, self.destination_pressure)
        validate_volumes(self.source_volume, self.destination_volume)


def _side(volume: float, pressure: float, twinset: bool, label: str) -> CylinderList:
    if twinset:  # Closed manifold isolates each half
        return CylinderList([Cylinder("left", volume / 2, pressure), Cylinder("right", volume / 2, pressure)])
    return CylinderList([Cylinder(label, volume, pressure)])

def initialize_cylinders(config: CylinderConfiguration) -> Tuple[CylinderList, CylinderList]:
    """ Returns (source, destination) cylinder lists for a configuration. A twinset side is split into
        'left' and 'right' halves of equal volume, otherwise a single 'source' or 'destination' cylinder.
    """
    source = _side(config.source_volume, config.source_pressure, config.source_twinset, "source")
    destination = _side(config.destination_volume, config.destination_pressure, config.destination_twinset, "destination")
    return source, destination
