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

from enum import Enum

class gas_system(Enum):  # Equation of state used to count the gas in a cylinder
    IDEAL = 0
    VDW = 1

class gas_kind(Enum):  # Gases a breathing mix may contain
    HE = 0
    O2 = 1
    N2 = 2
    AR = 3
    NE = 4
    H2 = 5

class_dic = {
    "gsystem": gas_system,
    "gas": gas_kind,
}
