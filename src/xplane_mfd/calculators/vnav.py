"""Vertical navigation (VNAV) calculations.

This module calculates the vertical profile to an altitude constraint:
- Flight path angle and required vertical speed
- Top of descent (TOD) distance on a 3° path
- Time to the constraint
- Idle descent path check
- Reference vertical speeds for 3° and 5° descents

Key formulas:
    γ = atan(Δh / distance)
    VS_fpm = 101.27 × GS_kts × tan(γ)
    TOD_nm = |Δh_ft| / (6076.12 × tan(3°))

Distance and groundspeed are clamped (0.01 nm, 1 kt) rather than rejected,
so every input the CLI accepts produces finite output.
"""

import math
from dataclasses import dataclass

from xplane_mfd.calculators.constants import (
    CLIMB_BAND_DEG,
    DEG_TO_RAD,
    IDLE_DESCENT_BAND_DEG,
    LEVEL_SEGMENT_FT,
    MIN_DISTANCE_NM,
    MIN_GROUNDSPEED_KTS,
    MIN_VERTICAL_SPEED_FPM,
    NM_TO_FT,
    RAD_TO_DEG,
    REFERENCE_DESCENT_DEG,
    STEEP_DESCENT_DEG,
    UNBOUNDED,
    VS_PER_GS_SLOPE,
)
from xplane_mfd.core.logging_system import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class VnavResult:
    """VNAV profile to an altitude constraint.

    Attributes:
        altitude_delta_ft: Altitude to lose (ft), positive when descending
        flight_path_angle_deg: Path angle (deg), negative = descent
        required_vs_fpm: Vertical speed to meet the constraint (fpm)
        tod_distance_nm: Top of descent distance on a 3° path (nm), 0 for climbs
        time_to_constraint_min: Time to reach the constraint (min)
        distance_per_1000ft: Track distance per 1000 ft of altitude change (nm)
        is_descent: True if the target is below the current altitude
        on_idle_path: True if the path angle is within the acceptable band
    """

    altitude_delta_ft: float
    flight_path_angle_deg: float
    required_vs_fpm: float
    tod_distance_nm: float
    time_to_constraint_min: float
    distance_per_1000ft: float
    is_descent: bool
    on_idle_path: bool


@dataclass(frozen=True)
class VnavAuxResult:
    """Reference vertical speeds at the current groundspeed.

    Attributes:
        vs_for_3deg_fpm: VS for a 3° descent (fpm, always negative)
        vs_for_5deg_fpm: VS for a 5° descent (fpm, always negative)
        distance_at_current_vs_nm: Distance to achieve the altitude change
            holding the current VS (nm), 999.9 if not converging
    """

    vs_for_3deg_fpm: float
    vs_for_5deg_fpm: float
    distance_at_current_vs_nm: float


def required_vertical_speed(groundspeed_kt: float, path_angle_deg: float) -> float:
    """Calculate the vertical speed that holds a path angle.

    Args:
        groundspeed_kt: Groundspeed (knots)
        path_angle_deg: Flight path angle (degrees), negative = descent

    Returns:
        Vertical speed (fpm)
    """
    return VS_PER_GS_SLOPE * groundspeed_kt * math.tan(path_angle_deg * DEG_TO_RAD)


def is_on_idle_path(flight_path_angle_deg: float, is_descent: bool) -> bool:
    """Check whether a path angle is within the acceptable band.

    Descents accept 2° to 4° (typical idle descent is 2.5° to 3.5°).
    Climbs accept any angle from 0.5° to 15°.

    Args:
        flight_path_angle_deg: Flight path angle (degrees)
        is_descent: True when descending

    Returns:
        True if the angle is within the band for the direction of travel.
    """
    if is_descent:
        low, high = IDLE_DESCENT_BAND_DEG
        return low <= abs(flight_path_angle_deg) <= high

    low, high = CLIMB_BAND_DEG
    return low <= flight_path_angle_deg <= high


def compute_vnav(
    current_alt_ft: float,
    target_alt_ft: float,
    distance_nm: float,
    groundspeed_kt: float,
) -> VnavResult:
    """Calculate the vertical profile to an altitude constraint.

    Args:
        current_alt_ft: Current altitude (ft)
        target_alt_ft: Altitude at the constraint (ft)
        distance_nm: Distance to the constraint (nm), clamped to 0.01
        groundspeed_kt: Groundspeed (knots), clamped to 1.0

    Returns:
        VnavResult with the profile

    Examples:
        >>> vnav = compute_vnav(35000.0, 10000.0, 100.0, 450.0)
        >>> print(f"FPA: {vnav.flight_path_angle_deg:.2f}°")
        FPA: -2.36°
    """
    altitude_change_ft = target_alt_ft - current_alt_ft
    is_descent = altitude_change_ft < 0

    if distance_nm < MIN_DISTANCE_NM:
        logger.debug("Clamping distance %.4f nm to %.2f nm", distance_nm, MIN_DISTANCE_NM)
        distance_nm = MIN_DISTANCE_NM
    if groundspeed_kt < MIN_GROUNDSPEED_KTS:
        logger.debug(
            "Clamping groundspeed %.2f kts to %.1f kts", groundspeed_kt, MIN_GROUNDSPEED_KTS
        )
        groundspeed_kt = MIN_GROUNDSPEED_KTS

    gamma_rad = math.atan(altitude_change_ft / (distance_nm * NM_TO_FT))
    flight_path_angle_deg = gamma_rad * RAD_TO_DEG
    required_vs_fpm = VS_PER_GS_SLOPE * groundspeed_kt * math.tan(gamma_rad)

    # TOD is only meaningful for descents
    if is_descent:
        tod_distance_nm = abs(altitude_change_ft) / (
            NM_TO_FT * math.tan(REFERENCE_DESCENT_DEG * DEG_TO_RAD)
        )
    else:
        tod_distance_nm = 0.0

    time_to_constraint_min = (distance_nm / groundspeed_kt) * 60.0

    if abs(altitude_change_ft) > LEVEL_SEGMENT_FT:
        distance_per_1000ft = (distance_nm * 1000.0) / abs(altitude_change_ft)
    else:
        distance_per_1000ft = UNBOUNDED

    return VnavResult(
        altitude_delta_ft=current_alt_ft - target_alt_ft,
        flight_path_angle_deg=flight_path_angle_deg,
        required_vs_fpm=required_vs_fpm,
        tod_distance_nm=tod_distance_nm,
        time_to_constraint_min=time_to_constraint_min,
        distance_per_1000ft=distance_per_1000ft,
        is_descent=is_descent,
        on_idle_path=is_on_idle_path(flight_path_angle_deg, is_descent),
    )


def compute_vnav_aux(
    groundspeed_kt: float, current_vs_fpm: float, altitude_change_ft: float
) -> VnavAuxResult:
    """Calculate reference vertical speeds and distance at the current VS.

    Args:
        groundspeed_kt: Groundspeed (knots)
        current_vs_fpm: Current vertical speed (fpm), 0 if unknown
        altitude_change_ft: Target minus current altitude (ft)

    Returns:
        VnavAuxResult with the reference values
    """
    vs_for_3deg = -required_vertical_speed(groundspeed_kt, REFERENCE_DESCENT_DEG)
    vs_for_5deg = -required_vertical_speed(groundspeed_kt, STEEP_DESCENT_DEG)

    if abs(current_vs_fpm) > MIN_VERTICAL_SPEED_FPM and groundspeed_kt > MIN_GROUNDSPEED_KTS:
        time_min = altitude_change_ft / current_vs_fpm
        distance_nm = (time_min * groundspeed_kt) / 60.0
        if distance_nm < 0:
            # Current VS trends away from the target
            logger.debug(
                "VS %.0f fpm diverges from %.0f ft change", current_vs_fpm, altitude_change_ft
            )
            distance_nm = UNBOUNDED
    else:
        distance_nm = UNBOUNDED

    return VnavAuxResult(
        vs_for_3deg_fpm=vs_for_3deg,
        vs_for_5deg_fpm=vs_for_5deg,
        distance_at_current_vs_nm=distance_nm,
    )
