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

import logging
from typing import Mapping

import numpy as np
import numpy.typing as npt
from scipy.optimize import brentq

from pytwinset.classes import gas_system, gas_kind
from pytwinset.constants import R, MOLAR_VOLUME, VdwConstant, VDW_CONSTANTS, MOLAR_MASS
from pytwinset.shared_fns import convert_to_numpy, process_output
from pytwinset.validate import validate_methods

logger = logging.getLogger(__name__)


class EOSDomainError(ValueError):
    """ Raised when a cylinder state has no physically meaningful Van der Waals solution """


def pressure_from_volumes(gas_volume: npt.ArrayLike, total_volume: float) -> float:
    """ Returns ideal gas pressure (bar) of a quantity of gas held in a cylinder
        gas_volume: Gas volume (litres at 1 bar)
        total_volume: Cylinder volume (litres)
    """
    return gas_volume / total_volume

def partial_pressure(p: npt.ArrayLike, frac: float) -> float:
    """ Returns partial pressure (bar) of a component with mole fraction frac in gas at total pressure p (bar) """
    return p * frac

def gas_weight_from_mole(moles: npt.ArrayLike, mw: float) -> float:
    """ Returns weight (grams) of moles of a gas with molar mass mw (g/mol) """
    return moles * mw

def ideal_moles(volume: float, p: npt.ArrayLike, degk: float) -> float:
    """ Returns moles of ideal gas held at pressure p (bar) in volume (litres) at degk (deg K) """
    return p * volume / (R * degk)

# Analytic solution for real root(s) of cubic polynomial
# a[0] * n**3 + a[1]*n**2 + a[2]*n + a[3] = 0
def cubic_root(a) -> np.ndarray:
    a = np.array(a, dtype=float) / a[0]  # Normalize to unity exponent for n^3
    p = (3 * a[2] - a[1]**2) / 3
    q = (2 * a[1]**3 - 9 * a[1] * a[2] + 27 * a[3]) / 27
    root_diagnostic = q**2 / 4 + p**3 / 27

    if root_diagnostic < 0:  # Three real roots
        m = 2 * np.sqrt(-p / 3)
        qpm = np.clip(3 * q / p / m, -1.0, 1.0)
        theta1 = np.arccos(qpm) / 3
        roots = np.array([m * np.cos(theta1), m * np.cos(theta1 + 4 * np.pi / 3), m * np.cos(theta1 + 2 * np.pi / 3)])
    else:
        sqrt_diagnostic = np.sqrt(root_diagnostic)
        roots = np.array([np.cbrt(-q / 2 + sqrt_diagnostic) + np.cbrt(-q / 2 - sqrt_diagnostic)])
    return roots - a[1] / 3

def moles_from_state(
    volume: float,
    p: npt.ArrayLike,
    vdw: VdwConstant,
    degk: float,
) -> np.ndarray:
    """ Returns moles of a single gas in a cylinder using the Van der Waals equation of state,
        (P + a.n²/V²)(V - n.b) = n.R.T, solved analytically for n. Returns either single float, or numpy
        array depending upon whether single pressure or list/array of pressures has been specified.
        volume: Cylinder volume (litres)
        p: Partial pressure of the gas (bar). Takes a single float, 1D list or 1D Numpy array
        vdw: Van der Waals constants of the gas, VdwConstant(a, b)
        degk: Gas temperature (deg K)

        Pressures at or below zero hold no gas and return 0 moles.
        In the diving envelope (< 350 bar, -30 to 80 deg C) the cubic has a single real root. Should three
        real roots appear the gas phase (smallest) root is used. EOSDomainError is raised if no root lies
        between zero and the excluded volume limit V/b.
    """
    p, is_list = convert_to_numpy(p)
    a, b = vdw
    rt = R * degk

    def vdw_moles(pbar):
        if a == 0 and b == 0:
            return pbar * volume / rt
        if a == 0:
            return pbar * volume / (pbar * b + rt)
        if b == 0:
            disc = rt**2 - 4 * a * pbar
            if disc < 0:
                raise EOSDomainError(f"No gas phase solution at {pbar} bar and {degk} K")
            return 2 * pbar * volume / (rt + np.sqrt(disc))

        # ab.n³ - aV.n² + (Pb + RT)V².n - PV³ = 0
        roots = cubic_root([a * b, -a * volume, (pbar * b + rt) * volume**2, -pbar * volume**3])
        gas_roots = [n for n in roots if np.isfinite(n) and 0 < n < volume / b]
        if not gas_roots:
            raise EOSDomainError(f"No physical Van der Waals root at {pbar} bar, {volume} l and {degk} K")
        if len(roots) > 1:
            logger.warning("Van der Waals cubic has %d real roots at %.3f bar and %.2f K, using gas phase root",
                           len(roots), pbar, degk)
        return min(gas_roots)

    nout = [vdw_moles(pbar) if pbar > 0 else 0.0 for pbar in p]
    return process_output(nout, is_list)

def pressure_from_moles(
    volume: float,
    n: npt.ArrayLike,
    degk: float,
    vdw: VdwConstant,
) -> np.ndarray:
    """ Returns pressure (bar) exerted by n moles of a single gas in a cylinder using the Van der Waals
        equation of state, P = n.(-a.n/V² - R.T/(b.n - V))
        volume: Cylinder volume (litres)
        n: Moles of gas. Takes a single float, 1D list or 1D Numpy array
        degk: Gas temperature (deg K)
        vdw: Van der Waals constants of the gas, VdwConstant(a, b)
    """
    n, is_list = convert_to_numpy(n)
    a, b = vdw
    if np.any(b * n >= volume):
        raise EOSDomainError(f"{np.max(n)} moles exceeds the excluded volume limit of a {volume} l cylinder")
    pout = n * (-(a * n) / volume**2 - (R * degk) / (b * n - volume))
    pout = np.where(n > 0, pout, 0.0)
    return process_output(pout, is_list)

def composition_moles(
    volume: float,
    p: npt.ArrayLike,
    composition: Mapping[gas_kind, float],
    degk: float,
) -> np.ndarray:
    """ Returns total moles of a gas mix in a cylinder, summing each component at its Dalton's law partial pressure
        volume: Cylinder volume (litres)
        p: Cylinder pressure (bar). Takes a single float, 1D list or 1D Numpy array
        composition: Mapping of gas_kind to mole fraction (0-1)
        degk: Gas temperature (deg K)
    """
    p, is_list = convert_to_numpy(p)
    nout = np.zeros_like(p)
    for gas, frac in composition.items():
        nout = nout + moles_from_state(volume, partial_pressure(p, frac), VDW_CONSTANTS[gas], degk)
    return process_output(nout, is_list)

def composition_pressure(
    volume: float,
    n: npt.ArrayLike,
    composition: Mapping[gas_kind, float],
    degk: float,
) -> np.ndarray:
    """ Returns pressure (bar) of n moles of a gas mix, summing the pressure of each component's share of the moles
        volume: Cylinder volume (litres)
        n: Total moles of gas. Takes a single float, 1D list or 1D Numpy array
        composition: Mapping of gas_kind to mole fraction (0-1)
        degk: Gas temperature (deg K)
    """
    n, is_list = convert_to_numpy(n)
    pout = np.zeros_like(n)
    for gas, frac in composition.items():
        pout = pout + pressure_from_moles(volume, n * frac, degk, VDW_CONSTANTS[gas])
    return process_output(pout, is_list)

def composition_weight(
    volume: float,
    p: npt.ArrayLike,
    composition: Mapping[gas_kind, float],
    degk: float,
) -> np.ndarray:
    """ Returns weight (grams) of a gas mix in a cylinder
        volume: Cylinder volume (litres)
        p: Cylinder pressure (bar). Takes a single float, 1D list or 1D Numpy array
        composition: Mapping of gas_kind to mole fraction (0-1)
        degk: Gas temperature (deg K)
    """
    p, is_list = convert_to_numpy(p)
    wout = np.zeros_like(p)
    for gas, frac in composition.items():
        moles = moles_from_state(volume, partial_pressure(p, frac), VDW_CONSTANTS[gas], degk)
        wout = wout + gas_weight_from_mole(moles, MOLAR_MASS[gas])
    return process_output(wout, is_list)

def composition_gas_volume(
    volume: float,
    p: npt.ArrayLike,
    composition: Mapping[gas_kind, float],
    degk: float,
    gsystem: gas_system = gas_system.VDW,
) -> np.ndarray:
    """ Returns the volume of gas (litres) held in a cylinder
        volume: Cylinder volume (litres)
        p: Cylinder pressure (bar). Takes a single float, 1D list or 1D Numpy array
        composition: Mapping of gas_kind to mole fraction (0-1)
        degk: Gas temperature (deg K)
        gsystem: 'IDEAL' returns volume x pressure
                 'VDW' returns Van der Waals moles x 22.4 l/mol
                 Defaults to 'VDW'
    """
    gsystem = validate_methods(["gsystem"], [gsystem])
    p, is_list = convert_to_numpy(p)
    if gsystem.name == "IDEAL":
        return process_output(volume * p, is_list)
    return process_output(composition_moles(volume, p, composition, degk) * MOLAR_VOLUME, is_list)

def equilibrium_pressure(
    volume: float,
    n: float,
    composition: Mapping[gas_kind, float],
    degk: float,
    xtol: float = 1e-12,
) -> float:
    """ Returns the pressure (bar) at which a gas mix of n moles fills volume, i.e. the inverse of
        composition_moles. Summed component pressures (composition_pressure) are exact for a single gas
        but only approximate the inverse for a mix, so they serve as the starting bracket for a brentq solve.
        volume: Total cylinder volume (litres)
        n: Total moles of gas
        composition: Mapping of gas_kind to mole fraction (0-1)
        degk: Gas temperature (deg K)
        xtol: Absolute pressure tolerance (bar)
    """
    if n <= 0:
        return 0.0

    def n_err(pbar):
        return composition_moles(volume, pbar, composition, degk) - n

    guess = composition_pressure(volume, n, composition, degk)
    if n_err(guess) == 0:
        return float(guess)
    p_hi = 2 * guess + 1
    niter = 0
    while n_err(p_hi) < 0:
        p_hi *= 2
        niter += 1
        if niter > 50:
            raise EOSDomainError(f"Could not bracket pressure for {n} moles in {volume} l")
    return brentq(n_err, 0.0, p_hi, xtol=xtol, rtol=1e-14)
