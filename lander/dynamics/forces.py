"""Force model for the lander.

Net force is the sum of:
- Gravity: -G*M*m/|r|^2 * r_hat, with m from the remaining fuel
- Drag: -v_hat * 0.5*rho*Cd*A*|v|^2 for the body, plus a canopy term while
  the parachute is deployed
- Thrust: throttle * max_thrust along the body +z axis

Example:
    >>> from lander.dynamics.forces import ForceModel
    >>>
    >>> model = ForceModel()
    >>> a = model.acceleration(state)  # [m/s^2]
    >>> forces = model.breakdown(state)
    >>> forces.drag, forces.thrust
"""

from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from lander.config import LanderConfig
from lander.dynamics.state import LanderState, ParachuteStatus, body_to_world
from lander.environment.atmosphere import MarsAtmosphere
from lander.environment.gravity import MarsGravity
from lander.typecheck import beartype
from lander.vector import add, norm2, scale, unit, vec3, zeros

BODY_UP = vec3(0.0, 0.0, 1.0)


class ForceBreakdown(NamedTuple):
    """Individual forces acting on the lander [N]."""
    gravity: NDArray[np.float64]
    drag: NDArray[np.float64]
    thrust: NDArray[np.float64]
    mass: float

    @property
    def net(self) -> NDArray[np.float64]:
        return add(add(self.gravity, self.drag), self.thrust)

    @property
    def acceleration(self) -> NDArray[np.float64]:
        return self.net / self.mass


# =============================================================================
# Individual Forces
# =============================================================================


@beartype
def drag_magnitude(density: float, drag_coef: float, area: float, speed_sq: float) -> float:
    """Quadratic drag 0.5 * rho * Cd * A * v^2 [N]."""
    return 0.5 * density * drag_coef * area * speed_sq


@beartype
def drag_force(
    velocity: NDArray[np.float64],
    density: float,
    vehicle: LanderConfig,
    parachute_status: ParachuteStatus = ParachuteStatus.NOT_DEPLOYED,
) -> NDArray[np.float64]:
    """Aerodynamic drag opposing the velocity.

    A stationary lander feels no drag.
    """
    speed_sq = norm2(velocity)
    magnitude = drag_magnitude(density, vehicle.drag_coef_lander, vehicle.lander_area, speed_sq)
    if parachute_status == ParachuteStatus.DEPLOYED:
        magnitude += drag_magnitude(density, vehicle.drag_coef_chute, vehicle.chute_area, speed_sq)
    return scale(unit(velocity), -magnitude)


@beartype
def thrust_force(
    orientation_deg: NDArray[np.float64],
    throttle: float,
    fuel: float,
    vehicle: LanderConfig,
) -> NDArray[np.float64]:
    """Engine thrust along the body up axis in world coordinates.

    An empty tank produces no thrust.
    """
    if throttle == 0.0 or fuel <= 0.0:
        return zeros()
    return body_to_world(orientation_deg, scale(BODY_UP, throttle * vehicle.max_thrust))


# =============================================================================
# Force Model
# =============================================================================


@beartype
class ForceModel:
    """Gravity, drag and thrust acting on a lander.

    Attributes:
        vehicle: Lander constants
        gravity: Planet gravity field
        atmosphere: Atmosphere density model
    """

    def __init__(
        self,
        vehicle: LanderConfig | None = None,
        gravity: MarsGravity | None = None,
        atmosphere: MarsAtmosphere | None = None,
    ) -> None:
        self.vehicle = vehicle or LanderConfig()
        self.gravity = gravity or MarsGravity()
        self.atmosphere = atmosphere or MarsAtmosphere()

    @beartype
    def mass(self, state: LanderState) -> float:
        return self.vehicle.mass(state.fuel)

    @beartype
    def breakdown(self, state: LanderState) -> ForceBreakdown:
        """All forces acting on the lander.

        The caller guarantees a non-zero, finite position.
        """
        mass = self.mass(state)
        density = self.atmosphere.density_at(state.position)
        return ForceBreakdown(
            gravity=self.gravity.force(state.position, mass),
            drag=drag_force(state.velocity, density, self.vehicle, state.parachute_status),
            thrust=thrust_force(state.orientation, state.throttle, state.fuel, self.vehicle),
            mass=mass,
        )

    @beartype
    def net_force(self, state: LanderState) -> NDArray[np.float64]:
        return self.breakdown(state).net

    @beartype
    def acceleration(self, state: LanderState) -> NDArray[np.float64]:
        """Net acceleration = net force / mass [m/s^2]."""
        return self.breakdown(state).acceleration

    @beartype
    def chute_drag(self, state: LanderState) -> float:
        """Load on the parachute canopy if it were deployed [N]."""
        density = self.atmosphere.density_at(state.position)
        return drag_magnitude(
            density,
            self.vehicle.drag_coef_chute,
            self.vehicle.chute_area,
            norm2(state.velocity),
        )
