#!/usr/bin/env python3
"""
Validation tests for equalize module.
Run with: python3 -m pytest pytwinset/tests/ -v
"""

import sys
import os
import importlib
from types import MappingProxyType
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
import pytwinset.equalize as eq
from pytwinset.cylinder import Cylinder, CylinderConfiguration, initialize_cylinders
from pytwinset.constants import VdwConstant, VDW_CONSTANTS
from pytwinset.eos import composition_moles
from pytwinset.mix import AIR, gas_composition

DEGK = 293.15
RTOL = 1e-9
TRIMIX = gas_composition(o2=0.18, he=0.45)

def total_moles(cylinders, composition):
    return sum(composition_moles(c.volume, c.pressure, composition, DEGK) for c in cylinders)

def total_ideal_volume(cylinders):
    return sum(c.volume * c.pressure for c in cylinders)

# =============================================================================
# Reference scenario: 2x12 l at 210 bar into 2x8.5 l at 80 bar, ideal gas, air
# =============================================================================

def worked_example(source_twinset, destination_twinset):
    config = CylinderConfiguration(24, 210, 17, 80, source_twinset=source_twinset,
                                   destination_twinset=destination_twinset)
    source, destination = initialize_cylinders(config)
    return eq.run_scenario(source, destination, AIR, DEGK, 'IDEAL')

def test_worked_example_both_closed():
    s = worked_example(True, True)
    assert s.description == "both manifolds closed"
    assert abs(s.source_pressure - 143) < 1, f"Source ended at {s.source_pressure} bar"
    assert abs(s.destination_pressure - 175) < 1, f"Destination ended at {s.destination_pressure} bar"

def test_worked_example_all_open():
    s = worked_example(False, False)
    assert s.description == "all manifolds open"
    assert abs(s.source_pressure - 6400 / 41) < 1e-9
    assert abs(s.destination_pressure - 6400 / 41) < 1e-9
    assert abs(s.source_pressure - 156) < 1

def test_worked_example_single_side_closed():
    src_closed = worked_example(True, False)
    dst_closed = worked_example(False, True)
    assert src_closed.description == "source manifold closed"
    assert dst_closed.description == "destination manifold closed"
    # Any closed manifold on the source side improves on all manifolds open
    all_open = worked_example(False, False)
    assert src_closed.destination_pressure > all_open.destination_pressure
    assert worked_example(True, True).destination_pressure > all_open.destination_pressure

def test_worked_example_steps():
    """Source-major order of whip connections"""
    s = worked_example(True, True)
    assert [(st.step, st.source, st.destination) for st in s.steps] == [
        (1, 'left', 'left'), (2, 'left', 'right'), (3, 'right', 'left'), (4, 'right', 'right')]
    # Step 1 moves 12 l x (210 - 156.1) bar of gas into the left destination cylinder
    assert abs(s.steps[0].gas_volume - 8.5 * (3200 / 20.5 - 80)) < 1e-9
    assert all(st.gas_volume > 0 for st in s.steps)

def test_start_snapshot():
    s = worked_example(True, True)
    assert s.source_start_pressure == 210
    assert s.destination_start_pressure == 80
    assert s.source_start_gas_volume == 24 * 210
    assert s.destination_start_gas_volume == 17 * 80

def test_start_snapshot_vdw():
    """Twinset halves at the same pressure report that pressure exactly"""
    heliox = gas_composition(o2=0.2, he=0.8)
    config = CylinderConfiguration(24, 350, 17, 80, source_twinset=True, destination_twinset=True)
    s = eq.run_scenario(*initialize_cylinders(config), heliox, DEGK, 'VDW')
    assert s.source_start_pressure == 350
    assert s.destination_start_pressure == 80
    src, _ = initialize_cylinders(config)
    assert eq.group_pressure(src, TRIMIX, DEGK, 'VDW') == 350

def test_gas_conserved_in_scenario():
    for gsystem in ['IDEAL', 'VDW']:
        s = eq.run_scenario(*initialize_cylinders(CylinderConfiguration(24, 232, 24, 50, True, True)),
                            AIR, DEGK, gsystem)
        before = s.source_start_gas_volume + s.destination_start_gas_volume
        after = s.source_gas_volume + s.destination_gas_volume
        assert abs(after - before) / before < RTOL, f"{gsystem}: {before} -> {after}"

# =============================================================================
# Equalization of a group
# =============================================================================

def test_conservation_vdw():
    """Moles before equal moles after"""
    for mix in [AIR, TRIMIX]:
        group = [Cylinder('a', 12, 232), Cylinder('b', 8.5, 40), Cylinder('c', 3, 0)]
        before = total_moles(group, mix)
        eq.equalize(group, mix, DEGK, 'VDW')
        after = total_moles(group, mix)
        assert abs(after - before) / before < RTOL, f"{mix}: {before} -> {after}"

def test_conservation_ideal():
    group = [Cylinder('a', 12, 232), Cylinder('b', 8.5, 40)]
    before = total_ideal_volume(group)
    p = eq.equalize(group, AIR, DEGK, 'IDEAL')
    assert abs(total_ideal_volume(group) - before) / before < RTOL
    assert abs(p - before / 20.5) < 1e-9

def test_uniform_pressure():
    group = [Cylinder('a', 12, 300), Cylinder('b', 7, 100), Cylinder('c', 10, 20)]
    p = eq.equalize(group, TRIMIX, DEGK)
    assert all(c.pressure == p for c in group)
    assert 20 < p < 300

def test_idempotent():
    for gsystem in ['IDEAL', 'VDW']:
        group = [Cylinder('a', 12, 232), Cylinder('b', 8.5, 40)]
        p1 = eq.equalize(group, AIR, DEGK, gsystem)
        p2 = eq.equalize(group, AIR, DEGK, gsystem)
        assert p1 == p2
        assert [c.pressure for c in group] == [p1, p1]

def test_single_cylinder_unchanged():
    cyl = Cylinder('only', 12, 187.5)
    assert eq.equalize([cyl], AIR, DEGK) == 187.5
    assert cyl.pressure == 187.5

def test_empty_group():
    with pytest.raises(ValueError):
        eq.equalize([], AIR, DEGK)

def test_group_pressure_leaves_cylinders():
    group = [Cylinder('a', 12, 232), Cylinder('b', 12, 0)]
    p = eq.group_pressure(group, AIR, DEGK, 'IDEAL')
    assert p == 116
    assert [c.pressure for c in group] == [232, 0]

def test_vdw_close_to_ideal_at_low_pressure():
    """Equalized pressures agree when the gas behaves nearly ideally"""
    vdw = eq.equalize([Cylinder('a', 12, 2), Cylinder('b', 12, 0.5)], AIR, DEGK, 'VDW')
    ideal = eq.equalize([Cylinder('a', 12, 2), Cylinder('b', 12, 0.5)], AIR, DEGK, 'IDEAL')
    assert abs(vdw - ideal) / ideal < 1e-3, f"VDW {vdw} vs ideal {ideal}"

def test_ideal_gas_reduction(monkeypatch):
    """Van der Waals equalized pressure converges on total gas volume / total volume as a and b shrink"""
    eos_module = importlib.import_module('pytwinset.eos.eos')
    group = [Cylinder('a', 12, 232), Cylinder('b', 8.5, 40)]
    p_ideal = total_ideal_volume(group) / 20.5
    errs = []
    for scale in [1e-1, 1e-2, 1e-4]:
        scaled = MappingProxyType({gas: VdwConstant(c.a * scale, c.b * scale) for gas, c in VDW_CONSTANTS.items()})
        monkeypatch.setattr(eos_module, 'VDW_CONSTANTS', scaled)
        p = eq.group_pressure(group, AIR, DEGK, 'VDW')
        errs.append(abs(p - p_ideal) / p_ideal)
    assert errs[0] > errs[1] > errs[2], f"No convergence: {errs}"
    assert errs[-1] < 1e-3, f"Scaled pressure off ideal {p_ideal} by {errs[-1]}"

def test_vdw_differs_from_ideal_at_high_pressure():
    """Helium rich gas is less compressible than ideal, so doubling its volume more than halves its pressure"""
    heliox = gas_composition(o2=0.2, he=0.8)
    vdw = eq.equalize([Cylinder('a', 12, 300), Cylinder('b', 12, 0)], heliox, DEGK, 'VDW')
    assert 100 < vdw < 150, f"Heliox settled at {vdw} bar"

# =============================================================================
# Path independence
# =============================================================================

def destination_major(source, destination, composition, gsystem):
    """Same whip connections as run_scenario, with each destination cylinder visiting every source in turn"""
    for dst in destination:
        for src in source:
            eq.equalize([dst, src], composition, DEGK, gsystem)
    eq.equalize(destination, composition, DEGK, gsystem)

def test_path_independence():
    """Order of source/destination pairings does not change the final state"""
    configs = [CylinderConfiguration(24, 232, 24, 50, True, True), CylinderConfiguration(24, 210, 17, 80, True, True)]
    for config in configs:
        for mix in [AIR, TRIMIX]:
            for gsystem in ['IDEAL', 'VDW']:
                s = eq.run_scenario(*initialize_cylinders(config), mix, DEGK, gsystem)
                src, dst = initialize_cylinders(config)
                destination_major(src, dst, mix, gsystem)
                checks = [('destination', s.destination_pressure, eq.group_pressure(dst, mix, DEGK, gsystem)),
                          ('source', s.source_pressure, eq.group_pressure(src, mix, DEGK, gsystem))]
                for side, ref, val in checks:
                    assert abs(val - ref) <= RTOL * ref, f"{config} {mix} {gsystem} {side}: {ref} vs {val}"
                # Left source half gives up more gas, as in run_scenario
                assert src[0].pressure < src[1].pressure

def test_destination_level_after_scenario():
    src, dst = initialize_cylinders(CylinderConfiguration(24, 232, 24, 50, True, True))
    eq.run_scenario(src, dst, AIR, DEGK)
    assert dst[0].pressure == dst[1].pressure
    assert src[0].pressure != src[1].pressure  # Source halves were drained unevenly

# =============================================================================
# Manifold configurations and comparison table
# =============================================================================

def test_manifold_configurations():
    both = CylinderConfiguration(24, 232, 24, 50, True, True)
    configs = eq.manifold_configurations(both)
    assert [(c.source_twinset, c.destination_twinset) for c in configs] == [
        (True, True), (False, True), (True, False), (False, False)]
    assert len(eq.manifold_configurations(CylinderConfiguration(24, 232, 24, 50, True, False))) == 2
    assert len(eq.manifold_configurations(CylinderConfiguration(24, 232, 24, 50))) == 1

def test_compare_configurations():
    config = CylinderConfiguration(24, 210, 17, 80, True, True)
    df = eq.compare_configurations(config, AIR, DEGK, 'IDEAL')
    assert list(df.columns) == eq.SUMMARY_COLUMNS
    assert list(df['Scenario']) == ["both manifolds closed", "destination manifold closed",
                                    "source manifold closed", "all manifolds open"]
    assert df['Improvement %'].min() == 0
    worst = df['Dst bar'].min()
    best = df['Dst bar'].max()
    assert abs(df['Improvement %'].max() - 100 * (best - worst) / worst) < 1e-9

def test_summary_table():
    df = eq.compare_configurations(CylinderConfiguration(24, 210, 17, 80, True, True), AIR, DEGK, 'VDW')
    table = eq.summary_table(df)
    assert "both manifolds closed" in table
    assert "Dst bar" in table
    assert "Src g" not in table
    assert "Src g" in eq.summary_table(df, weights=True)
