"""Physical constants, unit conversions and sentinel values.

All values are module-level constants. Nothing here is configurable: the
calculators must produce identical results for identical inputs regardless
of the settings file in use.
"""

import math

# Physics
GRAVITY_MS2 = 9.80665  # Standard gravity (m/s²)

# Unit conversions
KTS_TO_MS = 0.514444  # knots to m/s
M_TO_FT = 3.28084  # meters to feet
NM_TO_FT = 6076.12  # nautical miles to feet
DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi

# Turn performance
STANDARD_RATE_DPS = 3.0  # Standard rate turn (deg/s)
MAX_BANK_DEG = 85.0
WINGS_LEVEL_TAN_TOLERANCE = 0.001
MIN_TURN_RATE_DPS = 0.01

# Vertical navigation
# 60 / (6076.12 * pi/180): slope per foot of distance -> fpm per knot of GS
VS_PER_GS_SLOPE = 101.27
REFERENCE_DESCENT_DEG = 3.0
STEEP_DESCENT_DEG = 5.0
MIN_DISTANCE_NM = 0.01
MIN_GROUNDSPEED_KTS = 1.0
LEVEL_SEGMENT_FT = 10.0
MIN_VERTICAL_SPEED_FPM = 10.0
IDLE_DESCENT_BAND_DEG = (2.0, 4.0)
CLIMB_BAND_DEG = (0.5, 15.0)

# "Effectively infinite" markers kept on the wire for display compatibility
UNBOUNDED = 999.9
UNBOUNDED_RADIUS_FT = 999900.0


def is_unbounded(value: float) -> bool:
    """Check whether a result field carries an "effectively infinite" sentinel.

    Args:
        value: Numeric result field.

    Returns:
        True if the value is one of the sentinel markers.
    """
    return value in (UNBOUNDED, UNBOUNDED_RADIUS_FT)
