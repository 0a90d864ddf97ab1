"""X-Plane MFD calculators - command-line entry points.

The unified front end runs any calculator by name; the single-calculator
programs take their positional arguments directly, as the MFD invokes them.

Typical usage:
    xplane-mfd turn 250 25 90
    xplane-mfd --legacy-keys vnav 35000 10000 100 450 -1500
    xplane-mfd demo
    wind-calculator 90 85 270 15
"""

import argparse
import dataclasses
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from xplane_mfd.cli.formatting import OutputSettings
from xplane_mfd.cli.harness import (
    SCHEMAS,
    TURN_SCHEMA,
    VNAV_SCHEMA,
    WIND_SCHEMA,
    CalculatorSchema,
    run_calculator,
)
from xplane_mfd.core.config import ConfigError, ConfigLoader
from xplane_mfd.core.logging_system import LoggingError, get_logger, initialize_logging
from xplane_mfd.core.resource_path import get_config_path

logger = get_logger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CalculatorArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def default_settings() -> ConfigLoader:
    """Settings used when no file overrides them."""
    return ConfigLoader(
        {
            "output": {"precision": 2, "indent": 2, "legacy_keys": False},
            "logging": {"config": "logging.yaml", "use_platform_dir": True},
        }
    )


def load_config(config_path: str | Path | None = None) -> ConfigLoader:
    """Load settings, layering a YAML file over the defaults.

    Args:
        config_path: Explicit settings file. If None, config/settings.yaml
            is used when present.

    Returns:
        Merged configuration.

    Raises:
        ConfigError: If the explicit file is missing or malformed.
    """
    config = default_settings()

    if config_path is None:
        default_path = get_config_path("settings.yaml")
        if default_path.exists():
            config.merge(ConfigLoader.load(default_path))
    else:
        config.merge(ConfigLoader.load(config_path))

    return config


def configure_logging(config: ConfigLoader, console_level: str | None = None) -> None:
    """Initialize logging from the file named in the settings.

    The logging file is resolved relative to the settings file; if it does
    not exist, the built-in defaults apply.

    Raises:
        LoggingError: If the logging file exists but cannot be used.
    """
    base_dir = config.source.parent if config.source else get_config_path("")
    logging_path = base_dir / str(config.get("logging.config", "logging.yaml"))
    use_platform_dir = bool(config.get("logging.use_platform_dir", True))

    if logging_path.is_file():
        initialize_logging(logging_path, use_platform_dir, console_level)
    else:
        initialize_logging(None, use_platform_dir, console_level)


def build_parser() -> argparse.ArgumentParser:
    """Build the parser for the unified front end.

    Returns:
        Configured argument parser.
    """
    parser = CalculatorArgumentParser(
        prog="xplane-mfd",
        description="Flight performance calculators for the X-Plane MFD",
    )
    parser.add_argument("--config", help="Settings YAML file (default: config/settings.yaml)")
    parser.add_argument("--precision", type=int, help="Decimal places in the JSON output")
    parser.add_argument(
        "--legacy-keys",
        action="store_true",
        default=None,
        help="Emit legacy field names (turn_rate_dps, headwind, ...)",
    )
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="Console log level")

    subparsers = parser.add_subparsers(
        dest="command", required=True, parser_class=CalculatorArgumentParser
    )
    for schema in SCHEMAS.values():
        subparser = subparsers.add_parser(schema.name, help=schema.title)
        # Tokens such as -1.5e3 look like options to argparse; pass them through
        subparser.add_argument(
            "values",
            nargs=argparse.REMAINDER,
            help=" ".join(arg.name for arg in schema.arguments),
        )
    subparsers.add_parser("demo", help="Run every calculator on its example input")

    return parser


def run_demo(settings: OutputSettings | None = None, stdout: TextIO | None = None) -> int:
    """Run every calculator on its usage example.

    Args:
        settings: Output settings.
        stdout: Output stream (default: sys.stdout).

    Returns:
        0 if every calculator succeeded, otherwise 1.
    """
    stdout = stdout or sys.stdout
    rule = "=" * 36

    stdout.write(f"{rule}\nX-Plane Flight Calculator Demo\n{rule}\n\n")

    status = 0
    for index, schema in enumerate(SCHEMAS.values(), start=1):
        stdout.write(f"{index}. {schema.title}\n")
        stdout.write(f"   Input: {schema.example_note}\n")
        status = max(status, run_calculator(schema, schema.example, settings, stdout=stdout))
        stdout.write("\n")

    stdout.write(f"{rule}\nAll calculations complete!\n{rule}\n")
    return status


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point of the unified front end.

    Args:
        argv: Arguments after the program name (default: sys.argv[1:]).

    Returns:
        Exit code (0 for success).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.precision is not None and args.precision < 0:
        parser.error("--precision must not be negative")

    try:
        config = load_config(args.config)
        configure_logging(config, args.log_level)
        settings = OutputSettings.from_config(config)
    except (ConfigError, LoggingError) as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1

    if args.precision is not None:
        settings = dataclasses.replace(settings, precision=args.precision)
    if args.legacy_keys is not None:
        settings = dataclasses.replace(settings, legacy_keys=args.legacy_keys)

    try:
        if args.command == "demo":
            return run_demo(settings)
        return run_calculator(
            SCHEMAS[args.command], args.values, settings, program=f"xplane-mfd {args.command}"
        )
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.exception("Fatal error: %s", e)
        return 1


def _run_single(schema: CalculatorSchema, argv: Sequence[str] | None) -> int:
    tokens = sys.argv[1:] if argv is None else list(argv)

    try:
        config = load_config()
        configure_logging(config)
        settings = OutputSettings.from_config(config)
    except (ConfigError, LoggingError) as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1

    return run_calculator(schema, tokens, settings)


def turn_main(argv: Sequence[str] | None = None) -> int:
    """Entry point of turn-calculator."""
    return _run_single(TURN_SCHEMA, argv)


def vnav_main(argv: Sequence[str] | None = None) -> int:
    """Entry point of vnav-calculator."""
    return _run_single(VNAV_SCHEMA, argv)


def wind_main(argv: Sequence[str] | None = None) -> int:
    """Entry point of wind-calculator."""
    return _run_single(WIND_SCHEMA, argv)


if __name__ == "__main__":
    sys.exit(main())
