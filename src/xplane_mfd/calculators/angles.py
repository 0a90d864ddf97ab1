"""Angle normalization helpers.

Typical usage example:
    from xplane_mfd.calculators.angles import normalize_bearing, signed_deviation

    normalize_bearing(-90.0)  # 270.0
    signed_deviation(350.0)  # -10.0
"""


def normalize_bearing(angle_deg: float) -> float:
    """Normalize an angle to the range [0, 360).

    Args:
        angle_deg: Angle in degrees, any sign or magnitude.

    Returns:
        Equivalent bearing in [0, 360).

    Examples:
        >>> normalize_bearing(370.0)
        10.0
        >>> normalize_bearing(-90.0)
        270.0
    """
    normalized = angle_deg % 360.0
    # Tiny negative operands round up to exactly 360.0
    if normalized >= 360.0:
        return 0.0
    return normalized


def signed_deviation(angle_deg: float) -> float:
    """Map an angle to a signed deviation in the range (-180, 180].

    Args:
        angle_deg: Angle in degrees, any sign or magnitude.

    Returns:
        Signed deviation; 180 stays 180, 190 becomes -170.

    Examples:
        >>> signed_deviation(350.0)
        -10.0
        >>> signed_deviation(180.0)
        180.0
    """
    deviation = normalize_bearing(angle_deg)
    if deviation > 180.0:
        deviation -= 360.0
    return deviation
