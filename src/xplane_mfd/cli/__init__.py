"""Command-line harness shared by the calculators.

Typical usage:
    from xplane_mfd.cli import SCHEMAS, run_calculator

    status = run_calculator(SCHEMAS["wind"], ["90", "85", "270", "15"])
"""

from xplane_mfd.cli.formatting import OutputSettings, format_json, to_wire
from xplane_mfd.cli.harness import (
    SCHEMAS,
    TURN_SCHEMA,
    VNAV_SCHEMA,
    WIND_SCHEMA,
    ArgumentSpec,
    CalculatorInputError,
    CalculatorSchema,
    InvalidArgumentCountError,
    InvalidValueError,
    format_usage,
    parse_arguments,
    run_calculator,
)

__all__ = [
    "ArgumentSpec",
    "CalculatorInputError",
    "CalculatorSchema",
    "InvalidArgumentCountError",
    "InvalidValueError",
    "OutputSettings",
    "SCHEMAS",
    "TURN_SCHEMA",
    "VNAV_SCHEMA",
    "WIND_SCHEMA",
    "format_json",
    "format_usage",
    "parse_arguments",
    "run_calculator",
    "to_wire",
]
