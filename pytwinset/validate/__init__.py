from .validate import (CylinderInputError, InvalidPressureRange, InvalidVolumeRange, InvalidTemperatureRange,
                       InvalidGasComposition, InvalidMethod, validate_methods, validate_pressures, validate_volumes,
                       validate_temperature, validate_fractions)
