#!/usr/bin/env python3
"""
pyTwinset command line.

Compares how much gas reaches the destination cylinders when transferring
through a single whip with the twinset manifolds closed or open.

Usage:
    pytwinset --source-cylinder-twinset --destination-cylinder-twinset
    pytwinset --source-cylinder-volume 24 --source-cylinder-pressure 210 \\
              --destination-cylinder-volume 17 --destination-cylinder-pressure 80 --use-ideal-gas
"""

import argparse
import logging
import sys

from pytwinset.classes import gas_system
from pytwinset.cylinder import CylinderConfiguration
from pytwinset.equalize import compare_configurations, summary_table
from pytwinset.mix import gas_composition
from pytwinset.shared_fns import celsius_to_kelvin
from pytwinset.validate import CylinderInputError, InvalidGasComposition, validate_temperature

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pytwinset",
        description="Gas transfer between cylinders with closed or open manifolds",
    )
    parser.add_argument("--verbose", action="store_true", help="Print detailed information")
    parser.add_argument("--debug", action="store_true", help="Print debug information")
    parser.add_argument("--use-ideal-gas", action="store_true",
                        help="Use ideal gas equations instead of Van der Waals")
    parser.add_argument("--source-cylinder-volume", type=float, default=24,
                        help="Source cylinder volume in liters")
    parser.add_argument("--destination-cylinder-volume", type=float, default=24,
                        help="Destination cylinder volume in liters")
    parser.add_argument("--source-cylinder-pressure", type=float, default=232,
                        help="Source cylinder pressure in bar")
    parser.add_argument("--destination-cylinder-pressure", type=float, default=100,
                        help="Destination cylinder pressure in bar")
    parser.add_argument("--source-cylinder-twinset", action="store_true",
                        help="Source cylinder is a twinset with a closeable manifold")
    parser.add_argument("--destination-cylinder-twinset", action="store_true",
                        help="Destination cylinder is a twinset with a closeable manifold")
    parser.add_argument("--temperature", type=float, default=20.0,
                        help="Gas temperature for Van der Waals equation (celsius)")
    parser.add_argument("--helium", type=float, default=0.0, help="Fraction of helium")
    parser.add_argument("--oxygen", type=float, default=0.21, help="Fraction of oxygen")
    parser.add_argument("--neon", type=float, default=0.0, help="Fraction of neon")
    parser.add_argument("--argon", type=float, default=0.0, help="Fraction of argon")
    parser.add_argument("--hydrogen", type=float, default=0.0, help="Fraction of hydrogen")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.debug else logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(message)s")

    try:
        validate_temperature(args.temperature)
        composition = gas_composition(o2=args.oxygen, he=args.helium, ne=args.neon, ar=args.argon, h2=args.hydrogen)
        config = CylinderConfiguration(
            source_volume=args.source_cylinder_volume,
            source_pressure=args.source_cylinder_pressure,
            destination_volume=args.destination_cylinder_volume,
            destination_pressure=args.destination_cylinder_pressure,
            source_twinset=args.source_cylinder_twinset,
            destination_twinset=args.destination_cylinder_twinset,
        )
    except InvalidGasComposition as e:
        print(e, file=sys.stderr)
        return 11
    except CylinderInputError as e:
        print(e, file=sys.stderr)
        return 1

    gsystem = gas_system.IDEAL if args.use_ideal_gas else gas_system.VDW
    logger.info("Gas: %s, %.1f deg C, %s", composition, args.temperature, gsystem.name)

    df = compare_configurations(config, composition, celsius_to_kelvin(args.temperature), gsystem)
    print(summary_table(df, weights=args.verbose))
    return 0


if __name__ == "__main__":
    sys.exit(main())
