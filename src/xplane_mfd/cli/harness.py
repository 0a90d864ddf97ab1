"""Shared command-line harness for the calculators.

Each calculator is described by a CalculatorSchema: its positional
arguments, the range checks applied before calculating, and the function
producing its result records. run_calculator does the rest for all of them:
count and parse the tokens, validate, calculate, print JSON.

Exit status is 0 on success and 1 on any input error, in which case the
error and the usage text go to stderr.

Typical usage example:
    import sys

    from xplane_mfd.cli.harness import TURN_SCHEMA, run_calculator

    sys.exit(run_calculator(TURN_SCHEMA, ["250", "25", "90"]))
"""

import math
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TextIO

from xplane_mfd.calculators.constants import MAX_BANK_DEG
from xplane_mfd.calculators.turn import compute_turn
from xplane_mfd.calculators.vnav import compute_vnav, compute_vnav_aux
from xplane_mfd.calculators.wind import compute_wind
from xplane_mfd.cli.formatting import OutputSettings, format_json, to_wire
from xplane_mfd.core.logging_system import get_logger

logger = get_logger(__name__)


class CalculatorInputError(Exception):
    """Raised when command-line input cannot be used for a calculation."""


class InvalidArgumentCountError(CalculatorInputError):
    """Raised when the number of arguments does not match the calculator."""


class InvalidValueError(CalculatorInputError):
    """Raised when an argument is not a number or is out of range."""


@dataclass(frozen=True)
class ArgumentSpec:
    """One positional calculator argument.

    Attributes:
        name: Argument name shown in the usage line
        description: Description shown in the usage text
        required: False for trailing optional arguments
        default: Value used when an optional argument is omitted
    """

    name: str
    description: str
    required: bool = True
    default: float = 0.0


@dataclass(frozen=True)
class CalculatorSchema:
    """Input schema and behavior of one calculator.

    Attributes:
        name: Subcommand name (turn, vnav, wind)
        program: Program name shown in usage
        title: Human-readable calculator name
        arguments: Positional arguments in order
        validate: Raises InvalidValueError for out-of-range values
        calculate: Returns the result records for validated values
        example: Example argument tokens
        example_note: One-line explanation of the example
    """

    name: str
    program: str
    title: str
    arguments: tuple[ArgumentSpec, ...]
    validate: Callable[[dict[str, float]], None]
    calculate: Callable[[dict[str, float]], tuple[Any, ...]]
    example: tuple[str, ...]
    example_note: str

    @property
    def min_count(self) -> int:
        return sum(1 for arg in self.arguments if arg.required)

    @property
    def max_count(self) -> int:
        return len(self.arguments)


def parse_decimal(token: str, name: str) -> float:
    """Parse one argument token as a finite decimal number.

    Args:
        token: Command-line token.
        name: Argument name for the error message.

    Returns:
        Parsed value.

    Raises:
        InvalidValueError: If the token is not a finite number.
    """
    try:
        value = float(token)
    except ValueError:
        raise InvalidValueError(f"{name} is not a valid number: {token!r}") from None

    if not math.isfinite(value):
        raise InvalidValueError(f"{name} must be a finite number: {token!r}")
    return value


def parse_arguments(schema: CalculatorSchema, tokens: Sequence[str]) -> dict[str, float]:
    """Parse positional tokens against a calculator schema.

    Args:
        schema: Calculator schema.
        tokens: Command-line tokens after the program name.

    Returns:
        Argument name to value, with defaults filled in for omitted
        optional arguments.

    Raises:
        InvalidArgumentCountError: If too few or too many tokens are given.
        InvalidValueError: If a token is not a number.
    """
    if not schema.min_count <= len(tokens) <= schema.max_count:
        if schema.min_count == schema.max_count:
            expected = str(schema.max_count)
        else:
            expected = f"{schema.min_count} to {schema.max_count}"
        raise InvalidArgumentCountError(f"Expected {expected} arguments, got {len(tokens)}")

    values = {}
    for index, spec in enumerate(schema.arguments):
        if index < len(tokens):
            values[spec.name] = parse_decimal(tokens[index], spec.name)
        else:
            values[spec.name] = spec.default
    return values


def format_usage(schema: CalculatorSchema, program: str | None = None) -> str:
    """Build the usage text for a calculator.

    Args:
        schema: Calculator schema.
        program: Program name to show; defaults to schema.program.

    Returns:
        Multi-line usage text.
    """
    program = program or schema.program
    placeholders = " ".join(
        f"<{arg.name}>" if arg.required else f"[{arg.name}]" for arg in schema.arguments
    )
    width = max(len(arg.name) for arg in schema.arguments)

    lines = [f"Usage: {program} {placeholders}", "", "Arguments:"]
    for arg in schema.arguments:
        suffix = "" if arg.required else " (optional)"
        lines.append(f"  {arg.name.ljust(width)} : {arg.description}{suffix}")
    lines += [
        "",
        "Example:",
        f"  {program} {' '.join(schema.example)}",
        f"  ({schema.example_note})",
        "",
    ]
    return "\n".join(lines)


def run_calculator(
    schema: CalculatorSchema,
    tokens: Sequence[str],
    settings: OutputSettings | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    program: str | None = None,
) -> int:
    """Run one calculator invocation end to end.

    Args:
        schema: Calculator schema.
        tokens: Command-line tokens after the program name.
        settings: Output settings.
        stdout: Stream for the JSON result (default: sys.stdout).
        stderr: Stream for errors and usage (default: sys.stderr).
        program: Program name for the usage text.

    Returns:
        Process exit status: 0 on success, 1 on input errors.
    """
    settings = settings or OutputSettings()
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    try:
        values = parse_arguments(schema, tokens)
        schema.validate(values)
    except CalculatorInputError as e:
        logger.info("Rejected %s input %s: %s", schema.name, list(tokens), e)
        stderr.write(f"Error: {e}\n")
        stderr.write(format_usage(schema, program))
        return 1

    records = schema.calculate(values)
    logger.info("Calculated %s for %s", schema.name, values)
    stdout.write(format_json(to_wire(*records, legacy_keys=settings.legacy_keys), settings))
    return 0


def _validate_turn(values: dict[str, float]) -> None:
    if values["tas_kts"] <= 0:
        raise InvalidValueError("TAS must be positive")
    if abs(values["bank_deg"]) > MAX_BANK_DEG:
        raise InvalidValueError("Bank angle must be between -85 and 85 degrees")


def _calculate_turn(values: dict[str, float]) -> tuple[Any, ...]:
    return (compute_turn(values["tas_kts"], values["bank_deg"], values["course_change_deg"]),)


def _validate_vnav(values: dict[str, float]) -> None:
    if values["distance_nm"] < 0:
        raise InvalidValueError("Distance cannot be negative")
    if values["groundspeed_kts"] <= 0:
        raise InvalidValueError("Groundspeed must be positive")


def _calculate_vnav(values: dict[str, float]) -> tuple[Any, ...]:
    vnav = compute_vnav(
        values["current_alt_ft"],
        values["target_alt_ft"],
        values["distance_nm"],
        values["groundspeed_kts"],
    )
    aux = compute_vnav_aux(
        values["groundspeed_kts"],
        values["current_vs_fpm"],
        values["target_alt_ft"] - values["current_alt_ft"],
    )
    return (vnav, aux)


def _validate_wind(values: dict[str, float]) -> None:
    if values["wind_speed"] < 0:
        raise InvalidValueError("Wind speed cannot be negative")


def _calculate_wind(values: dict[str, float]) -> tuple[Any, ...]:
    return (
        compute_wind(
            values["track"], values["heading"], values["wind_dir"], values["wind_speed"]
        ),
    )


TURN_SCHEMA = CalculatorSchema(
    name="turn",
    program="turn-calculator",
    title="Turn Performance Calculator",
    arguments=(
        ArgumentSpec("tas_kts", "True airspeed (knots)"),
        ArgumentSpec("bank_deg", "Bank angle (degrees)"),
        ArgumentSpec("course_change_deg", "Course change required (degrees)"),
    ),
    validate=_validate_turn,
    calculate=_calculate_turn,
    example=("250", "25", "90"),
    example_note="250 knots TAS, 25° bank, 90° turn",
)

VNAV_SCHEMA = CalculatorSchema(
    name="vnav",
    program="vnav-calculator",
    title="VNAV Calculator",
    arguments=(
        ArgumentSpec("current_alt_ft", "Current altitude (feet)"),
        ArgumentSpec("target_alt_ft", "Target altitude at constraint (feet)"),
        ArgumentSpec("distance_nm", "Distance to constraint (nautical miles)"),
        ArgumentSpec("groundspeed_kts", "Current groundspeed (knots)"),
        ArgumentSpec("current_vs_fpm", "Current vertical speed (ft/min)", required=False),
    ),
    validate=_validate_vnav,
    calculate=_calculate_vnav,
    example=("35000", "10000", "100", "450", "-1500"),
    example_note="Descend from FL350 to 10000 ft, 100 nm away, GS 450 kts, VS -1500 fpm",
)

WIND_SCHEMA = CalculatorSchema(
    name="wind",
    program="wind-calculator",
    title="Wind Calculator",
    arguments=(
        ArgumentSpec("track", "Ground track (degrees true)"),
        ArgumentSpec("heading", "Aircraft heading (degrees)"),
        ArgumentSpec("wind_dir", "Wind direction FROM (degrees)"),
        ArgumentSpec("wind_speed", "Wind speed (knots)"),
    ),
    validate=_validate_wind,
    calculate=_calculate_wind,
    example=("90", "85", "270", "15"),
    example_note="Track 90°, Heading 85°, Wind from 270° at 15 knots",
)

SCHEMAS = {schema.name: schema for schema in (TURN_SCHEMA, VNAV_SCHEMA, WIND_SCHEMA)}
