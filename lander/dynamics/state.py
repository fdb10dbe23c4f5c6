"""Lander state representation.

The state record contains:
- Position (3): [x, y, z] in the planet-centred Cartesian frame [m]
- Velocity (3): [vx, vy, vz] in the same frame [m/s]
- Orientation (3): xyz Euler angles [deg]
- Fuel fraction, throttle, parachute status
- Simulation time and the fixed time step
- Mode flags for the autopilot and attitude stabilizer

Orientation convention:
    Angles (a, b, g) = orientation (x, y, z) build the body-to-world matrix
    R = Rz(a) @ Ry(b) @ Rx(g). The body +z axis is the lander's "up", the
    direction the engine pushes.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import NDArray

from lander.errors import ConfigurationError, PreconditionError
from lander.typecheck import beartype
from lander.vector import vec3

# =============================================================================
# Orientation Utilities
# =============================================================================


@beartype
def euler_to_matrix(orientation_deg: NDArray[np.float64]) -> NDArray[np.float64]:
    """Body-to-world rotation matrix from xyz Euler angles.

    Args:
        orientation_deg: Euler angles [deg]

    Returns:
        3x3 matrix whose columns are the body axes expressed in world axes
    """
    a, b, g = np.radians(orientation_deg)
    ca, sa = np.cos(a), np.sin(a)
    cb, sb = np.cos(b), np.sin(b)
    cg, sg = np.cos(g), np.sin(g)

    return np.array([
        [ca*cb, ca*sb*sg - sa*cg, ca*sb*cg + sa*sg],
        [sa*cb, sa*sb*sg + ca*cg, sa*sb*cg - ca*sg],
        [-sb, cb*sg, cb*cg],
    ])


@beartype
def matrix_to_euler(m: NDArray[np.float64]) -> NDArray[np.float64]:
    """Inverse of :func:`euler_to_matrix`.

    Returns:
        Euler angles [deg]
    """
    sb = -float(np.clip(m[2, 0], -1.0, 1.0))
    b = np.arcsin(sb)
    if abs(sb) < 1.0 - 1e-12:
        a = np.arctan2(m[1, 0], m[0, 0])
        g = np.arctan2(m[2, 1], m[2, 2])
    else:
        # Gimbal lock: only a - g (or a + g) is defined, put it all in a
        a = np.arctan2(-m[0, 1], m[1, 1])
        g = 0.0
    return np.degrees(np.array([a, b, g], dtype=np.float64))


@beartype
def body_to_world(
    orientation_deg: NDArray[np.float64],
    vector_body: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Rotate a body-frame vector into the world frame."""
    return euler_to_matrix(orientation_deg) @ vector_body


# =============================================================================
# State Classes
# =============================================================================


class ParachuteStatus(Enum):
    NOT_DEPLOYED = "not_deployed"
    DEPLOYED = "deployed"
    LOST = "lost"


@beartype
@dataclass
class LanderState:
    """Mutable state of the lander, owned by the simulation loop.

    Attributes:
        position: [x, y, z] planet-centred position [m]
        velocity: [vx, vy, vz] velocity [m/s]
        orientation: xyz Euler angles [deg]
        fuel: fuel remaining as a fraction of a full tank [0, 1]
        throttle: engine throttle [0, 1]
        parachute_status: parachute deployment status
        time: simulation time [s]
        delta_t: fixed integration time step [s]
        stabilized_attitude: hold the lander upright every tick
        autopilot_enabled: let the autopilot set the throttle every tick
    """
    position: NDArray[np.float64]
    velocity: NDArray[np.float64]
    orientation: NDArray[np.float64]
    fuel: float = 1.0
    throttle: float = 0.0
    parachute_status: ParachuteStatus = ParachuteStatus.NOT_DEPLOYED
    time: float = 0.0
    delta_t: float = 0.1
    stabilized_attitude: bool = False
    autopilot_enabled: bool = False

    def __setattr__(self, name: str, value) -> None:
        # Every write of fuel or throttle, including from __init__, is clamped
        if name in ("fuel", "throttle"):
            value = clamp_unit(value)
        super().__setattr__(name, value)

    def __post_init__(self) -> None:
        """Validate shapes and the time step."""
        self.position = np.asarray(self.position, dtype=np.float64)
        self.velocity = np.asarray(self.velocity, dtype=np.float64)
        self.orientation = np.asarray(self.orientation, dtype=np.float64)

        if self.position.shape != (3,):
            raise ValueError(f"Position must be shape (3,), got {self.position.shape}")
        if self.velocity.shape != (3,):
            raise ValueError(f"Velocity must be shape (3,), got {self.velocity.shape}")
        if self.orientation.shape != (3,):
            raise ValueError(f"Orientation must be shape (3,), got {self.orientation.shape}")
        if not np.isfinite(self.delta_t) or self.delta_t <= 0:
            raise ConfigurationError(f"Time step must be positive, got {self.delta_t}")

    @classmethod
    def at_rest(cls, position: NDArray[np.float64], delta_t: float = 0.1) -> "LanderState":
        """Lander at ``position`` with zero velocity, full tank and engine off."""
        return cls(
            position=np.asarray(position, dtype=np.float64),
            velocity=np.zeros(3),
            orientation=np.zeros(3),
            delta_t=delta_t,
        )

    def copy(self) -> "LanderState":
        """Create a copy of this state."""
        return LanderState(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            orientation=self.orientation.copy(),
            fuel=self.fuel,
            throttle=self.throttle,
            parachute_status=self.parachute_status,
            time=self.time,
            delta_t=self.delta_t,
            stabilized_attitude=self.stabilized_attitude,
            autopilot_enabled=self.autopilot_enabled,
        )

    @beartype
    def set_throttle(self, value: float) -> None:
        self.throttle = value

    @beartype
    def set_fuel(self, value: float) -> None:
        self.fuel = value

    def check_finite(self) -> None:
        """Raise if the kinematic state cannot be advanced.

        Raises:
            PreconditionError: on NaN/Inf values or a lander at the planet centre
        """
        for name in ("position", "velocity", "orientation"):
            if not np.all(np.isfinite(getattr(self, name))):
                raise PreconditionError(f"{name} is not finite: {getattr(self, name)}")
        if not np.isfinite(self.throttle) or not np.isfinite(self.fuel):
            raise PreconditionError("throttle and fuel must be finite")
        if not np.any(self.position):
            raise PreconditionError("Lander is at the planet centre, gravity is undefined")

    @property
    def radius(self) -> float:
        """Distance from the planet centre [m]."""
        return float(np.linalg.norm(self.position))

    @property
    def speed(self) -> float:
        """Speed magnitude [m/s]."""
        return float(np.linalg.norm(self.velocity))

    @property
    def radial_velocity(self) -> float:
        """Velocity component along the outward radial [m/s], negative when descending."""
        return float(np.dot(self.position, self.velocity)) / self.radius

    @property
    def up_direction(self) -> NDArray[np.float64]:
        """Body +z axis in the world frame."""
        return body_to_world(self.orientation, vec3(0.0, 0.0, 1.0))


def clamp_unit(value: float) -> float:
    """Clamp ``value`` to [0, 1]; NaN is passed through for the finiteness check."""
    if np.isnan(value):
        return value
    return min(1.0, max(0.0, float(value)))
