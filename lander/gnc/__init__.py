"""GNC (Guidance, Navigation, Control) module for the lander.

Example:
    >>> from lander.gnc import Autopilot, AttitudeStabilizer
    >>>
    >>> autopilot = Autopilot()
    >>> autopilot.update(state)  # sets state.throttle
    >>>
    >>> AttitudeStabilizer().update(state)  # base toward the planet
"""

from lander.gnc.control import (
    AttitudeStabilizer,
    Autopilot,
    AutopilotGains,
)

__all__ = [
    # Control
    "Autopilot",
    "AutopilotGains",
    "AttitudeStabilizer",
]
