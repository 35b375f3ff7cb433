"""
pytwinset
===================================

-----------------------------------------------------
Gas equalization between connected diving cylinders
-----------------------------------------------------

Estimates the pressure and gas content of source and destination cylinders after decanting gas through a
single whip, and compares transfers made with twinset manifolds closed against those made with them open.

Includes functions to perform simple calculations including;

- Van der Waals moles and pressure for single gases and gas mixes (Dalton's law partial pressures)
- Ideal gas volumes and pressures
- Gas weight of a cylinder
- Equalization of any group of cylinders, conserving the gas they hold
- Step by step whip transfers between single cylinders and twinsets
- Comparison tables across manifold configurations

"""

submodules = [
    'classes',
    'constants',
    'cli',
    'cylinder',
    'eos',
    'equalize',
    'mix',
    'shared_fns',
    'validate'
]

__all__ = submodules

import importlib

def __dir__():
    return __all__


def __getattr__(name):
    if name in submodules:
        return importlib.import_module(f'pytwinset.{name}')
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(
                f"Module 'pytwinset' has no attribute '{name}'"
            )
