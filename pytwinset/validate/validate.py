from pytwinset.classes import class_dic
from pytwinset.constants import MAX_PRESSURE, MAX_VOLUME, MIN_DEGC, MAX_DEGC, FRAC_TOL


class CylinderInputError(ValueError):
    """ Base class for inputs outside the range the equalization models accept """

class InvalidPressureRange(CylinderInputError):
    pass

class InvalidVolumeRange(CylinderInputError):
    pass

class InvalidTemperatureRange(CylinderInputError):
    pass

class InvalidGasComposition(CylinderInputError):
    pass

class InvalidMethod(CylinderInputError):
    pass


def validate_methods(names, variables):
    for m, method in enumerate(names):
        if type(variables[m]) == str:
            try:
                variables[m] = class_dic[method][variables[m].upper()]
            except KeyError:
                raise InvalidMethod(f"An incorrect {method} was specified: {variables[m]}") from None
        elif not isinstance(variables[m], class_dic[method]):
            raise InvalidMethod(f"An incorrect {method} was specified: {variables[m]}")
    if len(variables) == 1:
        return variables[0]
    else:
        return variables

def validate_pressures(source_pressure: float, destination_pressure: float) -> None:
    """ Source must hold (0, 350] bar, destination [0, 350] bar, and source must not be below destination """
    if destination_pressure > MAX_PRESSURE or destination_pressure < 0:
        raise InvalidPressureRange(f"Invalid destination cylinder pressure; must be >= 0 and <={MAX_PRESSURE}")
    if source_pressure > MAX_PRESSURE or source_pressure <= 0:
        raise InvalidPressureRange(f"Invalid source cylinder pressure; must be > 0 and <={MAX_PRESSURE}")
    if source_pressure < destination_pressure:
        raise InvalidPressureRange("Source pressure must be higher than destination pressure")

def validate_volumes(source_volume: float, destination_volume: float) -> None:
    for side, volume in (("Destination", destination_volume), ("Source", source_volume)):
        if volume <= 0 or volume > MAX_VOLUME:
            raise InvalidVolumeRange(f"{side} cylinder volume size must be greater than 0 and less than {MAX_VOLUME}")

def validate_temperature(degc: float) -> None:
    # Limits are exclusive at both ends
    if degc <= MIN_DEGC or degc >= MAX_DEGC:
        raise InvalidTemperatureRange(f"Invalid temperature. Must be >{MIN_DEGC} and <{MAX_DEGC}")

def validate_fractions(fractions: dict) -> float:
    """ Checks explicitly specified gas fractions and returns their sum
        fractions: Dictionary of gas_kind (or gas name string) to fraction (0-1)
    """
    total = 0.0
    for gas, frac in fractions.items():
        gas = validate_methods(["gas"], [gas])
        if frac < 0 or frac > 1:
            raise InvalidGasComposition(f"Fraction of {gas.name} must be between 0 and 1, got {frac}")
        total += frac
    if total > 1.0 + FRAC_TOL:
        raise InvalidGasComposition("Defined gases must not exceed 100% (1.0)")
    return total
