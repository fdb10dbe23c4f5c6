"""Proportional descent autopilot.

The autopilot targets a descent rate that shrinks linearly with altitude,
    target = -(0.5 + kh * h)
and maps the proportional error onto the throttle through a deadband:

    e = -(0.5 + kh*h + h_dot)
    P = kp * e
    throttle = 0           if P <= -delta
             = 1           if P >= 1 - delta
             = delta + P   otherwise

There is no integral or derivative term and no dependence on fuel.

Example:
    >>> from lander.gnc.control import Autopilot
    >>>
    >>> autopilot = Autopilot()
    >>> autopilot.throttle(altitude=1000.0, descent_rate=-40.0)
    1.0
    >>> autopilot.update(state)  # writes state.throttle
"""

from dataclasses import dataclass, field

from lander.dynamics.state import LanderState
from lander.environment.gravity import MARS_RADIUS
from lander.typecheck import beartype
from lander.vector import dot, norm

# =============================================================================
# Gains
# =============================================================================


@beartype
@dataclass(frozen=True)
class AutopilotGains:
    """Autopilot gains.

    Attributes:
        kh: Descent-rate setpoint slope per metre of altitude [1/s]
        kp: Proportional gain
        delta: Throttle offset; also the half-width of the linear band
    """
    kh: float = 0.03
    kp: float = 0.5
    delta: float = 0.5


@beartype
def throttle_command(
    altitude: float,
    descent_rate: float,
    gains: AutopilotGains = AutopilotGains(),
) -> float:
    """Throttle in [0, 1] for the given altitude and radial velocity.

    Args:
        altitude: Height above the surface [m]
        descent_rate: Radial velocity [m/s], negative when descending
        gains: Controller gains
    """
    error = -(0.5 + gains.kh * altitude + descent_rate)
    p_out = gains.kp * error

    if p_out <= -gains.delta:
        return 0.0
    if p_out >= 1 - gains.delta:
        return 1.0
    return gains.delta + p_out


# =============================================================================
# Autopilot
# =============================================================================


@beartype
@dataclass
class Autopilot:
    """Stateless throttle controller driven by the lander state.

    Attributes:
        gains: Controller gains
        planet_radius: Radius used to compute altitude [m]
    """
    gains: AutopilotGains = field(default_factory=AutopilotGains)
    planet_radius: float = MARS_RADIUS

    @beartype
    def throttle(self, altitude: float, descent_rate: float) -> float:
        return throttle_command(altitude, descent_rate, self.gains)

    @beartype
    def compute(self, state: LanderState) -> float:
        """Throttle command for ``state`` without modifying it."""
        r = norm(state.position)
        altitude = r - self.planet_radius
        descent_rate = dot(state.position, state.velocity) / r
        return self.throttle(altitude, descent_rate)

    @beartype
    def update(self, state: LanderState) -> float:
        """Write the throttle command into ``state`` and return it."""
        command = self.compute(state)
        state.set_throttle(command)
        return command
