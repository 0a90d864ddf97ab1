"""Turn performance calculations.

This module calculates turn geometry for a coordinated turn:
- Turn radius and turn rate
- Lead distance to roll out onto a new course
- Load factor
- Bank angle for a standard rate turn
- Time to complete the turn

Formulas:
    R = V² / (g × tan φ)
    ω = (g × tan φ) / V
    L = R × tan(Δψ / 2)
    n = 1 / cos φ
    φ_std = atan(ω_std × V / g), ω_std = 3°/s
"""

import math
from dataclasses import dataclass

from xplane_mfd.calculators.constants import (
    DEG_TO_RAD,
    GRAVITY_MS2,
    KTS_TO_MS,
    M_TO_FT,
    MIN_TURN_RATE_DPS,
    NM_TO_FT,
    RAD_TO_DEG,
    STANDARD_RATE_DPS,
    UNBOUNDED,
    UNBOUNDED_RADIUS_FT,
    WINGS_LEVEL_TAN_TOLERANCE,
)
from xplane_mfd.core.logging_system import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TurnResult:
    """Turn performance results.

    Signs follow the bank angle: a left bank (negative) yields a negative
    radius and turn rate.

    Attributes:
        radius_nm: Turn radius (nm), 999.9 when wings level
        radius_ft: Turn radius (ft), 999900.0 when wings level
        turn_rate_deg_per_s: Rate of heading change (deg/s)
        lead_distance_nm: Distance before the fix to start the turn (nm)
        lead_distance_ft: Same lead distance (ft)
        time_to_turn_s: Time to complete the course change (s)
        load_factor: G-loading in the turn
        standard_rate_bank_deg: Bank needed for a 3°/s turn at this TAS
    """

    radius_nm: float
    radius_ft: float
    turn_rate_deg_per_s: float
    lead_distance_nm: float
    lead_distance_ft: float
    time_to_turn_s: float
    load_factor: float
    standard_rate_bank_deg: float


def standard_rate_bank(true_airspeed_kt: float) -> float:
    """Calculate the bank angle giving a standard rate (3°/s) turn.

    Args:
        true_airspeed_kt: True airspeed (knots)

    Returns:
        Bank angle (degrees)
    """
    v_ms = true_airspeed_kt * KTS_TO_MS
    omega_std = STANDARD_RATE_DPS * DEG_TO_RAD
    return math.atan((omega_std * v_ms) / GRAVITY_MS2) * RAD_TO_DEG


def compute_turn(true_airspeed_kt: float, bank_deg: float, course_change_deg: float) -> TurnResult:
    """Calculate turn performance for a coordinated turn.

    Args:
        true_airspeed_kt: True airspeed (knots), must be positive
        bank_deg: Bank angle (degrees), within ±85
        course_change_deg: Course change to fly (degrees), any sign

    Returns:
        TurnResult with all turn metrics

    Examples:
        >>> turn = compute_turn(250.0, 25.0, 90.0)
        >>> print(f"Radius: {turn.radius_ft:.0f} ft")
        Radius: 11867 ft
    """
    v_ms = true_airspeed_kt * KTS_TO_MS
    phi_rad = bank_deg * DEG_TO_RAD
    delta_psi_rad = course_change_deg * DEG_TO_RAD

    load_factor = 1.0 / math.cos(phi_rad)
    tan_phi = math.tan(phi_rad)

    if abs(tan_phi) < WINGS_LEVEL_TAN_TOLERANCE:
        # Wings level: radius is effectively infinite
        logger.debug("Bank %.3f° is wings level, reporting unbounded turn", bank_deg)
        radius_nm = UNBOUNDED
        radius_ft = UNBOUNDED_RADIUS_FT
        turn_rate_dps = 0.0
        lead_nm = 0.0
        lead_ft = 0.0
        time_to_turn_s = UNBOUNDED
    else:
        radius_m = (v_ms * v_ms) / (GRAVITY_MS2 * tan_phi)
        radius_ft = radius_m * M_TO_FT
        radius_nm = radius_ft / NM_TO_FT

        omega_rad_s = (GRAVITY_MS2 * tan_phi) / v_ms
        turn_rate_dps = omega_rad_s * RAD_TO_DEG

        lead_m = radius_m * math.tan(delta_psi_rad / 2.0)
        lead_ft = lead_m * M_TO_FT
        lead_nm = lead_ft / NM_TO_FT

        if turn_rate_dps > MIN_TURN_RATE_DPS:
            time_to_turn_s = abs(course_change_deg) / turn_rate_dps
        else:
            time_to_turn_s = UNBOUNDED

    return TurnResult(
        radius_nm=radius_nm,
        radius_ft=radius_ft,
        turn_rate_deg_per_s=turn_rate_dps,
        lead_distance_nm=lead_nm,
        lead_distance_ft=lead_ft,
        time_to_turn_s=time_to_turn_s,
        load_factor=load_factor,
        standard_rate_bank_deg=standard_rate_bank(true_airspeed_kt),
    )
