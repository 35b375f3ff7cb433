#!/usr/bin/env python3
"""
Validation tests for mix module.
"""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
import pytwinset.mix as mix
from pytwinset.classes import gas_kind
from pytwinset.validate import InvalidGasComposition, InvalidMethod

def test_air_default():
    """Default composition is 21% oxygen, balance nitrogen"""
    air = mix.gas_composition()
    assert air[gas_kind.O2] == 0.21
    assert abs(air[gas_kind.N2] - 0.79) < 1e-12
    assert len(air) == 2
    assert air == mix.AIR

def test_trimix_balance():
    """Nitrogen is whatever the defined gases leave over"""
    tx = mix.gas_composition(o2=0.18, he=0.45)
    assert abs(tx[gas_kind.N2] - 0.37) < 1e-12
    assert abs(sum(tx.values()) - 1.0) < 1e-12

def test_no_nitrogen_remainder():
    """Defined gases summing to one leave no nitrogen"""
    heliox = mix.gas_composition(o2=0.5, he=0.5)
    assert gas_kind.N2 not in heliox
    assert len(heliox) == 2

def test_fractions_exceed_one():
    with pytest.raises(InvalidGasComposition):
        mix.gas_composition(o2=0.5, he=0.6)

def test_negative_fraction():
    with pytest.raises(InvalidGasComposition):
        mix.gas_composition(o2=0.21, he=-0.1)

def test_explicit_fractions_must_sum_to_one():
    with pytest.raises(InvalidGasComposition):
        mix.GasComposition({'O2': 0.21, 'N2': 0.5})

def test_string_keys():
    nitrox = mix.GasComposition({'o2': 0.32, 'n2': 0.68})
    assert nitrox['O2'] == 0.32
    assert nitrox[gas_kind.N2] == 0.68

def test_unknown_gas():
    with pytest.raises(InvalidMethod):
        mix.GasComposition({'XE': 1.0})

def test_read_only():
    """A composition is shared between cylinders and cannot be changed"""
    with pytest.raises(TypeError):
        mix.AIR[gas_kind.O2] = 0.32

def test_molecular_weight():
    mw = mix.AIR.molecular_weight
    assert abs(mw - 28.85) < 0.01, f"Air MW = {mw}"
