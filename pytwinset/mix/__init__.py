from .mix import GasComposition, gas_composition, AIR
