"""JSON output for calculator results.

Results are written as one flat JSON object, one key per line, with every
number in fixed-point notation. The standard json encoder cannot fix the
number of decimals, so values are rendered here and only keys go through
json.dumps.

Typical usage example:
    from xplane_mfd.cli.formatting import OutputSettings, format_json, to_wire

    fields = to_wire(compute_turn(250.0, 25.0, 90.0))
    print(format_json(fields, OutputSettings()), end="")
"""

import dataclasses
import json
import math
from dataclasses import dataclass
from typing import Any

from xplane_mfd.core.config import ConfigError, ConfigLoader

# Field names used by displays built against the first release of the calculators
LEGACY_KEYS = {
    "turn_rate_deg_per_s": "turn_rate_dps",
    "time_to_turn_s": "time_to_turn_sec",
    "standard_rate_bank_deg": "standard_rate_bank",
    "altitude_delta_ft": "altitude_to_lose_ft",
    "vs_for_3deg_fpm": "vs_for_3deg",
    "vs_for_5deg_fpm": "vs_for_5deg",
    "headwind_kt": "headwind",
    "crosswind_kt": "crosswind",
    "total_wind_kt": "total_wind",
    "wca_deg": "wca",
    "drift_deg": "drift",
}


@dataclass(frozen=True)
class OutputSettings:
    """How results are written.

    Attributes:
        precision: Decimal places for every numeric field
        indent: Spaces before each key
        legacy_keys: Emit the legacy field names
    """

    precision: int = 2
    indent: int = 2
    legacy_keys: bool = False

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "OutputSettings":
        """Build output settings from the 'output' section of a config.

        Args:
            config: Loaded configuration.

        Returns:
            OutputSettings with defaults for missing keys.

        Raises:
            ConfigError: If a value has the wrong type or is negative.
        """
        precision = config.get("output.precision", cls.precision)
        indent = config.get("output.indent", cls.indent)
        legacy_keys = config.get("output.legacy_keys", cls.legacy_keys)

        for key, value in (("precision", precision), ("indent", indent)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"output.{key} must be a non-negative integer, got {value!r}")
        if not isinstance(legacy_keys, bool):
            raise ConfigError(f"output.legacy_keys must be true or false, got {legacy_keys!r}")

        return cls(precision=precision, indent=indent, legacy_keys=legacy_keys)


def to_wire(*records: Any, legacy_keys: bool = False) -> dict[str, Any]:
    """Flatten result records into an ordered mapping of wire keys.

    Args:
        *records: Result dataclasses, emitted in order.
        legacy_keys: Rename fields to their legacy names.

    Returns:
        Field name to value, in declaration order.
    """
    fields: dict[str, Any] = {}
    for record in records:
        for field in dataclasses.fields(record):
            key = LEGACY_KEYS.get(field.name, field.name) if legacy_keys else field.name
            fields[key] = getattr(record, field.name)
    return fields


def format_value(value: Any, precision: int = 2) -> str:
    """Render one value as a JSON literal.

    None and non-finite numbers become null; booleans become true/false.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return "null"
        return f"{value:.{precision}f}"
    return json.dumps(value)


def format_json(fields: dict[str, Any], settings: OutputSettings | None = None) -> str:
    """Render a flat JSON object with fixed-point numbers.

    Args:
        fields: Ordered mapping of key to value.
        settings: Output settings (defaults: 2 decimals, indent 2).

    Returns:
        JSON text ending with a newline.

    Examples:
        >>> print(format_json({"load_factor": 1.1034, "is_descent": True}), end="")
        {
          "load_factor": 1.10,
          "is_descent": true
        }
    """
    settings = settings or OutputSettings()
    if not fields:
        return "{}\n"

    pad = " " * settings.indent
    lines = [
        f"{pad}{json.dumps(key)}: {format_value(value, settings.precision)}"
        for key, value in fields.items()
    ]
    return "{\n" + ",\n".join(lines) + "\n}\n"
