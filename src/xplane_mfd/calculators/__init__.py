"""Flight performance calculations.

This module provides the stateless calculators behind the MFD pages:
- Turn performance (radius, rate, lead distance, load factor)
- Vertical navigation (path angle, required VS, top of descent)
- Wind triangle (headwind, crosswind, drift)
"""

from xplane_mfd.calculators.turn import TurnResult, compute_turn
from xplane_mfd.calculators.vnav import VnavAuxResult, VnavResult, compute_vnav, compute_vnav_aux
from xplane_mfd.calculators.wind import WindResult, compute_wind

__all__ = [
    "TurnResult",
    "VnavAuxResult",
    "VnavResult",
    "WindResult",
    "compute_turn",
    "compute_vnav",
    "compute_vnav_aux",
    "compute_wind",
]
