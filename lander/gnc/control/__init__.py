"""Control algorithms for the lander.

Provides the proportional throttle autopilot and the attitude stabilizer.
"""

from lander.gnc.control.attitude import (
    AttitudeStabilizer,
    radial_attitude,
)
from lander.gnc.control.autopilot import (
    Autopilot,
    AutopilotGains,
    throttle_command,
)

__all__ = [
    "Autopilot",
    "AutopilotGains",
    "throttle_command",
    "AttitudeStabilizer",
    "radial_attitude",
]
