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

import numpy as np
import numpy.typing as npt
from typing import Tuple

from pytwinset.constants import CEL2KEL

def convert_to_numpy(input_data: npt.ArrayLike) -> Tuple[np.ndarray, bool]:
    # Convert input data to a float numpy array ensuring it is always sizeable,
    # and flag whether the caller passed a sequence rather than a single value
    is_list = not np.isscalar(input_data) and np.ndim(input_data) > 0
    return np.atleast_1d(np.asarray(input_data, dtype=float)), is_list

def process_output(output_data, is_list: bool):
    # Hand back a float for single value inputs, otherwise a numpy array
    output_data = np.asarray(output_data, dtype=float)
    if is_list:
        return output_data
    return output_data.item() if output_data.size == 1 else output_data

def celsius_to_kelvin(degc: float) -> float:
    return degc + CEL2KEL
