#!/usr/bin/env python3
"""
Validation tests for the command line.
"""

import sys
import os
import io
import contextlib

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
from pytwinset.cli import build_parser, main

def run(argv):
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()

def test_defaults():
    args = build_parser().parse_args([])
    assert args.source_cylinder_volume == 24
    assert args.destination_cylinder_volume == 24
    assert args.source_cylinder_pressure == 232
    assert args.destination_cylinder_pressure == 100
    assert args.temperature == 20.0
    assert args.oxygen == 0.21
    assert not args.use_ideal_gas
    assert not args.source_cylinder_twinset and not args.destination_cylinder_twinset

def test_twinsets_table():
    code, out, _ = run(['--source-cylinder-twinset', '--destination-cylinder-twinset'])
    assert code == 0
    for scenario in ["both manifolds closed", "destination manifold closed",
                     "source manifold closed", "all manifolds open"]:
        assert scenario in out, f"Missing {scenario}"
    assert "Src g" not in out

def test_single_cylinders_ideal():
    code, out, _ = run(['--source-cylinder-volume', '24', '--source-cylinder-pressure', '210',
                        '--destination-cylinder-volume', '17', '--destination-cylinder-pressure', '80',
                        '--use-ideal-gas'])
    assert code == 0
    assert "all manifolds open" in out
    assert "both manifolds closed" not in out
    assert "156" in out

def test_verbose_adds_weights():
    code, out, _ = run(['--destination-cylinder-twinset', '--verbose'])
    assert code == 0
    assert "Dst g" in out

def test_temperature_out_of_range():
    code, out, err = run(['--temperature', '80'])
    assert code == 1
    assert out == ""
    assert "temperature" in err

def test_pressure_out_of_range():
    code, _, err = run(['--source-cylinder-pressure', '100', '--destination-cylinder-pressure', '150'])
    assert code == 1
    assert "Source pressure" in err

def test_volume_out_of_range():
    code, _, _ = run(['--source-cylinder-volume', '0'])
    assert code == 1

def test_gas_fractions_exceed_one():
    code, out, err = run(['--oxygen', '0.5', '--helium', '0.6'])
    assert code == 11
    assert out == ""
    assert "100%" in err

def test_trimix():
    code, out, _ = run(['--oxygen', '0.18', '--helium', '0.45', '--source-cylinder-twinset'])
    assert code == 0
    assert "source manifold closed" in out
