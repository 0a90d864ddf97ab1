"""Tests for the shared calculator command-line harness."""

import io
import json

import pytest

from xplane_mfd.cli.formatting import OutputSettings
from xplane_mfd.cli.harness import (
    SCHEMAS,
    TURN_SCHEMA,
    VNAV_SCHEMA,
    WIND_SCHEMA,
    CalculatorInputError,
    InvalidArgumentCountError,
    InvalidValueError,
    format_usage,
    parse_arguments,
    parse_decimal,
    run_calculator,
)


def run(schema, tokens, settings=None):
    """Run a calculator and return (status, stdout, stderr)."""
    stdout = io.StringIO()
    stderr = io.StringIO()
    status = run_calculator(schema, tokens, settings, stdout=stdout, stderr=stderr)
    return status, stdout.getvalue(), stderr.getvalue()


class TestParseDecimal:
    """Test token parsing."""

    @pytest.mark.parametrize(
        "token, expected", [("250", 250.0), ("-1500", -1500.0), ("0.5", 0.5), ("1e3", 1000.0)]
    )
    def test_valid(self, token: str, expected: float) -> None:
        """Test decimal tokens parse."""
        assert parse_decimal(token, "value") == expected

    @pytest.mark.parametrize("token", ["abc", "", "12kt", "nan", "inf", "-inf"])
    def test_invalid(self, token: str) -> None:
        """Test non-numeric and non-finite tokens are rejected."""
        with pytest.raises(InvalidValueError, match="tas_kts"):
            parse_decimal(token, "tas_kts")


class TestParseArguments:
    """Test argument count and defaults."""

    def test_turn_arguments(self) -> None:
        """Test tokens map to argument names."""
        values = parse_arguments(TURN_SCHEMA, ["250", "25", "90"])

        assert values == {"tas_kts": 250.0, "bank_deg": 25.0, "course_change_deg": 90.0}

    @pytest.mark.parametrize("tokens", [[], ["250", "25"], ["250", "25", "90", "1"]])
    def test_wrong_count(self, tokens: list[str]) -> None:
        """Test turn needs exactly three arguments."""
        with pytest.raises(InvalidArgumentCountError, match="Expected 3 arguments"):
            parse_arguments(TURN_SCHEMA, tokens)

    def test_optional_vertical_speed_defaults_to_zero(self) -> None:
        """Test VNAV accepts four arguments."""
        values = parse_arguments(VNAV_SCHEMA, ["35000", "10000", "100", "450"])

        assert values["current_vs_fpm"] == 0.0

    def test_optional_vertical_speed(self) -> None:
        """Test VNAV accepts five arguments."""
        values = parse_arguments(VNAV_SCHEMA, ["35000", "10000", "100", "450", "-1500"])

        assert values["current_vs_fpm"] == -1500.0

    @pytest.mark.parametrize("count", [3, 6])
    def test_vnav_wrong_count(self, count: int) -> None:
        """Test VNAV needs four or five arguments."""
        with pytest.raises(InvalidArgumentCountError, match="4 to 5"):
            parse_arguments(VNAV_SCHEMA, ["1"] * count)

    def test_errors_share_base_class(self) -> None:
        """Test both error kinds are CalculatorInputError."""
        assert issubclass(InvalidArgumentCountError, CalculatorInputError)
        assert issubclass(InvalidValueError, CalculatorInputError)


class TestUsage:
    """Test usage text."""

    def test_turn_usage(self) -> None:
        """Test usage line, arguments and example."""
        usage = format_usage(TURN_SCHEMA)

        assert usage.startswith("Usage: turn-calculator <tas_kts> <bank_deg> <course_change_deg>\n")
        assert "Arguments:" in usage
        assert "True airspeed (knots)" in usage
        assert "turn-calculator 250 25 90" in usage

    def test_optional_argument_in_brackets(self) -> None:
        """Test optional arguments are shown in brackets."""
        usage = format_usage(VNAV_SCHEMA)

        assert "<groundspeed_kts> [current_vs_fpm]" in usage
        assert "(optional)" in usage

    def test_program_override(self) -> None:
        """Test the program name can be replaced."""
        assert format_usage(WIND_SCHEMA, "xplane-mfd wind").startswith("Usage: xplane-mfd wind ")


class TestRunCalculator:
    """Test end-to-end runs."""

    def test_turn(self) -> None:
        """Test turn output."""
        status, out, err = run(TURN_SCHEMA, ["250", "25", "90"])
        data = json.loads(out)

        assert status == 0
        assert err == ""
        assert data["load_factor"] == pytest.approx(1.10)
        assert data["turn_rate_deg_per_s"] == pytest.approx(2.04)
        assert '"radius_ft": 11867.' in out

    def test_turn_wings_level_sentinels(self) -> None:
        """Test sentinels appear literally on the wire."""
        status, out, _ = run(TURN_SCHEMA, ["250", "0", "90"])

        assert status == 0
        assert '"radius_nm": 999.90' in out
        assert '"radius_ft": 999900.00' in out
        assert '"time_to_turn_s": 999.90' in out

    def test_vnav_example(self) -> None:
        """Test the VNAV example from the usage text."""
        status, out, _ = run(VNAV_SCHEMA, ["35000", "10000", "100", "450", "-1500"])
        data = json.loads(out)

        assert status == 0
        assert data["altitude_delta_ft"] == 25000.0
        assert data["required_vs_fpm"] == pytest.approx(-1874.0, abs=5.0)
        assert data["tod_distance_nm"] == pytest.approx(78.4, abs=0.5)
        assert data["distance_at_current_vs_nm"] == 125.0
        assert '"is_descent": true' in out
        assert '"on_idle_path": true' in out

    def test_vnav_without_vertical_speed(self) -> None:
        """Test distance at current VS is unbounded when VS is omitted."""
        _, out, _ = run(VNAV_SCHEMA, ["35000", "10000", "100", "450"])

        assert '"distance_at_current_vs_nm": 999.90' in out

    def test_vnav_zero_distance(self) -> None:
        """Test zero distance passes validation and stays finite."""
        status, out, _ = run(VNAV_SCHEMA, ["35000", "10000", "0", "450"])

        assert status == 0
        assert "nan" not in out and "inf" not in out

    def test_vnav_level_segment(self) -> None:
        """Test a level segment prints 0.00 altitude to lose without a sign."""
        status, out, _ = run(VNAV_SCHEMA, ["10000", "10000", "20", "250"])

        assert status == 0
        assert '"altitude_delta_ft": 0.00,' in out

    def test_wind_example(self) -> None:
        """Test the wind example from the usage text."""
        status, out, _ = run(WIND_SCHEMA, ["90", "85", "270", "15"])

        assert status == 0
        assert out == (
            "{\n"
            '  "headwind_kt": 15.00,\n'
            '  "crosswind_kt": 0.00,\n'
            '  "total_wind_kt": 15.00,\n'
            '  "wca_deg": null,\n'
            '  "drift_deg": 5.00\n'
            "}\n"
        )

    def test_legacy_keys(self) -> None:
        """Test legacy keys are used when configured."""
        _, out, _ = run(WIND_SCHEMA, ["90", "85", "270", "15"], OutputSettings(legacy_keys=True))

        assert '"headwind": 15.00' in out
        assert '"wca": null' in out

    @pytest.mark.parametrize(
        "schema, tokens, message",
        [
            (TURN_SCHEMA, ["0", "25", "90"], "TAS must be positive"),
            (TURN_SCHEMA, ["-250", "25", "90"], "TAS must be positive"),
            (TURN_SCHEMA, ["250", "86", "90"], "Bank angle must be between -85 and 85 degrees"),
            (TURN_SCHEMA, ["250", "-85.5", "90"], "Bank angle must be between -85 and 85 degrees"),
            (VNAV_SCHEMA, ["35000", "10000", "-1", "450"], "Distance cannot be negative"),
            (VNAV_SCHEMA, ["35000", "10000", "100", "0"], "Groundspeed must be positive"),
            (WIND_SCHEMA, ["90", "85", "270", "-5"], "Wind speed cannot be negative"),
            (WIND_SCHEMA, ["90", "north", "270", "5"], "heading is not a valid number"),
            (WIND_SCHEMA, ["90", "85", "270"], "Expected 4 arguments, got 3"),
        ],
    )
    def test_rejected_input(self, schema, tokens: list[str], message: str) -> None:
        """Test invalid input exits 1 with error and usage on stderr."""
        status, out, err = run(schema, tokens)

        assert status == 1
        assert out == ""
        assert err.startswith(f"Error: {message}")
        assert f"Usage: {schema.program}" in err

    @pytest.mark.parametrize("bank", ["85", "-85"])
    def test_bank_limit_inclusive(self, bank: str) -> None:
        """Test ±85° is accepted."""
        status, _, _ = run(TURN_SCHEMA, ["250", bank, "90"])
        assert status == 0

    def test_registry(self) -> None:
        """Test every calculator is registered by name."""
        assert set(SCHEMAS) == {"turn", "vnav", "wind"}
        for name, schema in SCHEMAS.items():
            assert schema.name == name
            status, _, _ = run(schema, list(schema.example))
            assert status == 0
