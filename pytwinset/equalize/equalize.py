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
from dataclasses import dataclass, replace
from typing import List, Mapping, Sequence, Tuple

import pandas as pd
from tabulate import tabulate

from pytwinset.classes import gas_system, gas_kind
from pytwinset.constants import CEL2KEL
from pytwinset.cylinder import Cylinder, CylinderList, CylinderConfiguration, initialize_cylinders
from pytwinset.eos import pressure_from_volumes, equilibrium_pressure
from pytwinset.mix import AIR
from pytwinset.validate import validate_methods

logger = logging.getLogger(__name__)

DEGK_DEFAULT = 20 + CEL2KEL

SUMMARY_COLUMNS = ['Scenario', 'Src bar', 'Src l', 'Dst bar', 'Dst l', 'Improvement %', 'Src g', 'Dst g']


@dataclass(frozen=True)
class TransferStep:
    """ One whip connection between a source and a destination cylinder """
    step: int
    source: str
    destination: str
    gas_volume: float  # Litres gained by the destination cylinder


@dataclass(frozen=True)
class CylinderSummary:
    """ End result of a gas transfer scenario. Pressures in bar, gas volumes in litres, weights in grams.
        In VDW mode each side's pressure is the real pressure its combined contents settle at, not its
        gas volume divided by cylinder volume, and can differ from that estimate by several percent.
    """
    description: str
    source_gas_volume: float
    source_pressure: float
    source_gas_weight: float
    destination_gas_volume: float
    destination_pressure: float
    destination_gas_weight: float
    source_start_gas_volume: float = 0.0
    source_start_pressure: float = 0.0
    destination_start_gas_volume: float = 0.0
    destination_start_pressure: float = 0.0
    steps: Tuple[TransferStep, ...] = ()


def group_pressure(
    cylinders: Sequence[Cylinder],
    composition: Mapping[gas_kind, float] = AIR,
    degk: float = DEGK_DEFAULT,
    gsystem: gas_system = gas_system.VDW,
) -> float:
    """ Returns the pressure (bar) the combined contents of a group of cylinders settle at once connected.
        Cylinders are left untouched.
        cylinders: Cylinders to be connected. Must not be empty
        composition: Mapping of gas_kind to mole fraction (0-1). Defaults to air
        degk: Gas temperature (deg K). Defaults to 20 deg C
        gsystem: 'IDEAL' conserves volume x pressure
                 'VDW' conserves Van der Waals moles
                 Defaults to 'VDW'
    """
    if len(cylinders) == 0:
        raise ValueError("Cannot equalize an empty group of cylinders")
    gsystem = validate_methods(["gsystem"], [gsystem])

    pressures = {cyl.pressure for cyl in cylinders}
    if len(pressures) == 1:  # Already level
        return pressures.pop()

    total_volume = sum(cyl.volume for cyl in cylinders)

    if gsystem.name == "IDEAL":
        total_gas_volume = sum(cyl.gas_volume(composition, degk, gsystem) for cyl in cylinders)
        return pressure_from_volumes(total_gas_volume, total_volume)

    total_moles = 0.0
    for cyl in cylinders:
        moles = cyl.moles(composition, degk)
        logger.debug("Cylinder %r moles %.6f", cyl, moles)
        total_moles += moles
    peq = equilibrium_pressure(total_volume, total_moles, composition, degk)
    logger.debug("Moles: %.6f Pressure after equalize: %.6f", total_moles, peq)
    return peq

def equalize(
    cylinders: Sequence[Cylinder],
    composition: Mapping[gas_kind, float] = AIR,
    degk: float = DEGK_DEFAULT,
    gsystem: gas_system = gas_system.VDW,
) -> float:
    """ Connects a group of cylinders and lets their pressures level out, conserving the gas they hold.
        Every cylinder in the group is updated to the common pressure, which is also returned (bar).
        cylinders: Cylinders to be connected. Must not be empty
        composition: Mapping of gas_kind to mole fraction (0-1). Defaults to air
        degk: Gas temperature (deg K). Defaults to 20 deg C
        gsystem: 'IDEAL' or 'VDW' (default)
    """
    peq = group_pressure(cylinders, composition, degk, gsystem)
    for cyl in cylinders:
        cyl.pressure = peq
    return peq

def scenario_description(source_twinset: bool, destination_twinset: bool) -> str:
    if source_twinset and destination_twinset:
        return "both manifolds closed"
    elif destination_twinset:
        return "destination manifold closed"
    elif source_twinset:
        return "source manifold closed"
    return "all manifolds open"

def run_scenario(
    source: CylinderList,
    destination: CylinderList,
    composition: Mapping[gas_kind, float] = AIR,
    degk: float = DEGK_DEFAULT,
    gsystem: gas_system = gas_system.VDW,
) -> CylinderSummary:
    """ Transfers gas from source to destination cylinders and returns a CylinderSummary.
        Each source cylinder is connected in turn to each destination cylinder (source-major order) and
        allowed to equalize, after which the destination cylinders are connected to each other.
        source: Source cylinders, one or two (twinset with closed manifold)
        destination: Destination cylinders, one or two (twinset with closed manifold)
        composition: Mapping of gas_kind to mole fraction (0-1). Defaults to air
        degk: Gas temperature (deg K). Defaults to 20 deg C
        gsystem: 'IDEAL' or 'VDW' (default)
    """
    gsystem = validate_methods(["gsystem"], [gsystem])
    source, destination = CylinderList(source), CylinderList(destination)
    description = scenario_description(source.is_twinset, destination.is_twinset)

    src_start_volume = source.total_gas_volume(composition, degk, gsystem)
    dst_start_volume = destination.total_gas_volume(composition, degk, gsystem)
    src_start_pressure = group_pressure(source, composition, degk, gsystem)
    dst_start_pressure = group_pressure(destination, composition, degk, gsystem)
    logger.info("Before any transfers: source %.0f l of gas at %.0f bar, destination %.0f l of gas at %.0f bar",
                src_start_volume, src_start_pressure, dst_start_volume, dst_start_pressure)
    logger.info("Equalizing with %s", description)

    steps = []
    for src in source:
        for dst in destination:
            before = dst.gas_volume(composition, degk, gsystem)
            equalize([dst, src], composition, degk, gsystem)
            step = TransferStep(len(steps) + 1, src.description, dst.description,
                                dst.gas_volume(composition, degk, gsystem) - before)
            logger.info("Step %d: from %s to %s; transferred %.0fl of gas",
                        step.step, step.source, step.destination, step.gas_volume)
            steps.append(step)

    # Destination manifold opened once transfers are complete
    equalize(destination, composition, degk, gsystem)

    summary = CylinderSummary(
        description=description,
        source_gas_volume=source.total_gas_volume(composition, degk, gsystem),
        source_pressure=group_pressure(source, composition, degk, gsystem),
        source_gas_weight=source.total_gas_weight(composition, degk),
        destination_gas_volume=destination.total_gas_volume(composition, degk, gsystem),
        destination_pressure=group_pressure(destination, composition, degk, gsystem),
        destination_gas_weight=destination.total_gas_weight(composition, degk),
        source_start_gas_volume=src_start_volume,
        source_start_pressure=src_start_pressure,
        destination_start_gas_volume=dst_start_volume,
        destination_start_pressure=dst_start_pressure,
        steps=tuple(steps),
    )
    logger.info("Source cylinders: %.0fl, %.0fbar", summary.source_gas_volume, summary.source_pressure)
    logger.info("Destination cylinders: %.0fl, %.0fbar", summary.destination_gas_volume, summary.destination_pressure)
    return summary

def manifold_configurations(config: CylinderConfiguration) -> List[CylinderConfiguration]:
    """ Returns the configuration as given, followed by each variant with fewer closed manifolds:
        source manifold opened, destination manifold opened, then all manifolds opened.
    """
    configs = [config]
    if config.source_twinset:
        configs.append(replace(config, source_twinset=False))
    if config.destination_twinset:
        configs.append(replace(config, destination_twinset=False))
    if config.source_twinset or config.destination_twinset:
        configs.append(replace(config, source_twinset=False, destination_twinset=False))
    return configs

def compare_configurations(
    config: CylinderConfiguration,
    composition: Mapping[gas_kind, float] = AIR,
    degk: float = DEGK_DEFAULT,
    gsystem: gas_system = gas_system.VDW,
) -> pd.DataFrame:
    """ Runs a transfer for every manifold configuration and returns a DataFrame with one row per scenario;
        Scenario, Src bar, Src l, Dst bar, Dst l, Improvement %, Src g, Dst g
        Improvement % is the gain in destination pressure over the worst scenario.
        config: CylinderConfiguration of the closed-manifold setup
        composition: Mapping of gas_kind to mole fraction (0-1). Defaults to air
        degk: Gas temperature (deg K). Defaults to 20 deg C
        gsystem: 'IDEAL' or 'VDW' (default)
    """
    rows = []
    for cfg in manifold_configurations(config):
        source, destination = initialize_cylinders(cfg)
        s = run_scenario(source, destination, composition, degk, gsystem)
        rows.append([s.description, s.source_pressure, s.source_gas_volume, s.destination_pressure,
                     s.destination_gas_volume, 0.0, s.source_gas_weight, s.destination_gas_weight])
    df = pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
    worst = df['Dst bar'].min()
    if worst > 0:
        df['Improvement %'] = 100 * (df['Dst bar'] - worst) / worst
    return df

def summary_table(df: pd.DataFrame, weights: bool = False) -> str:
    """ Returns the compare_configurations DataFrame as a text table, with gas weights if requested """
    cols = SUMMARY_COLUMNS if weights else SUMMARY_COLUMNS[:6]
    fmt = ("", ".0f", ".0f", ".0f", ".0f", ".2f", ".0f", ".0f")[:len(cols)]
    return tabulate(df[cols], headers="keys", showindex=False, floatfmt=fmt)
