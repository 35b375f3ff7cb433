from .eos import (EOSDomainError, pressure_from_volumes, partial_pressure, gas_weight_from_mole, ideal_moles,
                  cubic_root, moles_from_state, pressure_from_moles, composition_moles, composition_pressure,
                  composition_weight, composition_gas_volume, equilibrium_pressure)
