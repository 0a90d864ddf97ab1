"""Wind triangle decomposition.

Splits the reported wind into components relative to the ground track and
derives the drift angle. Wind direction is where the wind blows FROM.

Sign conventions:
    headwind: positive = headwind, negative = tailwind
    crosswind: positive = from the right, negative = from the left
    drift: track minus heading, in (-180, 180]

The wind correction angle needs true airspeed (WCA = asin(crosswind / TAS)),
which is not an input here, so it is reported as unavailable (None).
"""

import math
from dataclasses import dataclass

from xplane_mfd.calculators.angles import normalize_bearing, signed_deviation
from xplane_mfd.calculators.constants import DEG_TO_RAD


@dataclass(frozen=True)
class WindResult:
    """Wind components relative to the ground track.

    Attributes:
        headwind_kt: Headwind component (knots)
        crosswind_kt: Crosswind component (knots)
        total_wind_kt: Reported wind speed (knots)
        wca_deg: Wind correction angle (degrees), None when not computable
        drift_deg: Drift angle (degrees)
    """

    headwind_kt: float
    crosswind_kt: float
    total_wind_kt: float
    wca_deg: float | None
    drift_deg: float

    @property
    def wca_available(self) -> bool:
        """Whether a wind correction angle could be computed."""
        return self.wca_deg is not None


def compute_wind(
    track_deg: float, heading_deg: float, wind_from_deg: float, wind_speed_kt: float
) -> WindResult:
    """Calculate wind components relative to the aircraft track.

    Args:
        track_deg: Ground track (degrees)
        heading_deg: Aircraft heading (degrees)
        wind_from_deg: Direction the wind blows from (degrees)
        wind_speed_kt: Wind speed (knots), non-negative

    Returns:
        WindResult with components and drift

    Examples:
        >>> wind = compute_wind(90.0, 85.0, 270.0, 15.0)
        >>> print(f"Headwind: {wind.headwind_kt:.1f} kts")
        Headwind: 15.0 kts
    """
    track = normalize_bearing(track_deg)
    heading = normalize_bearing(heading_deg)
    wind_from = normalize_bearing(wind_from_deg)

    drift = signed_deviation(track - heading)

    # Relative angle of 180° gives cos = -1, reported as +speed headwind
    wind_from_rad = signed_deviation(wind_from - track) * DEG_TO_RAD
    headwind = -wind_speed_kt * math.cos(wind_from_rad)
    crosswind = wind_speed_kt * math.sin(wind_from_rad)

    return WindResult(
        headwind_kt=headwind,
        crosswind_kt=crosswind,
        total_wind_kt=wind_speed_kt,
        wca_deg=None,
        drift_deg=drift,
    )
