"""X-Plane MFD flight performance calculators.

Stateless turn, VNAV and wind calculations for a multi-function display,
with command-line front ends that print one JSON object per run.
"""

__version__ = "0.1.0"
