"""Point-mass gravity for Mars.

Gravity is modelled as a single spherical body at the origin of the
planet-centred frame. Core kernels are numba-compiled.

Example:
    >>> from lander.environment import MarsGravity
    >>>
    >>> grav = MarsGravity()
    >>> f = grav.force(position, mass=200.0)  # [N]
    >>> v = circular_velocity(1.2 * MARS_RADIUS)
"""

import numpy as np
from numba import njit
from numpy.typing import NDArray

from lander.typecheck import beartype

# =============================================================================
# Constants
# =============================================================================

GRAVITY: float = 6.673e-11  # Gravitational constant [m^3/(kg·s^2)]
MARS_MASS: float = 6.42e23  # [kg]
MARS_RADIUS: float = 3386000.0  # Mean radius [m]
MU_MARS: float = GRAVITY * MARS_MASS  # Gravitational parameter [m^3/s^2]


# =============================================================================
# Numba-Optimized Core Functions
# =============================================================================


@njit(cache=True)
def _point_mass_force(
    x: float, y: float, z: float,
    mass: float,
    mu: float = MU_MARS,
) -> tuple[float, float, float]:
    """Gravitational force on ``mass`` at (x, y, z).

    F = -mu * m / r^2 * r_hat
    """
    r_sq = x*x + y*y + z*z
    r = np.sqrt(r_sq)
    f_over_r = mu * mass / r_sq / r

    return (-f_over_r * x, -f_over_r * y, -f_over_r * z)


# =============================================================================
# Gravity Class
# =============================================================================


@beartype
class MarsGravity:
    """Spherical gravity field of a planet.

    Attributes:
        mu: Gravitational parameter G*M [m^3/s^2]
        radius: Planet mean radius [m]
    """

    def __init__(self, mu: float = MU_MARS, radius: float = MARS_RADIUS) -> None:
        self.mu = mu
        self.radius = radius

    @beartype
    def force(self, position: NDArray[np.float64], mass: float) -> NDArray[np.float64]:
        """Gravitational force on a body of ``mass`` at ``position``.

        The caller guarantees ``position`` is non-zero.

        Args:
            position: Planet-centred position [m]
            mass: Body mass [kg]

        Returns:
            Force vector [N]
        """
        fx, fy, fz = _point_mass_force(
            float(position[0]), float(position[1]), float(position[2]), mass, self.mu,
        )
        return np.array([fx, fy, fz])

    @beartype
    def acceleration(self, position: NDArray[np.float64]) -> NDArray[np.float64]:
        """Gravitational acceleration at ``position`` [m/s^2]."""
        return self.force(position, 1.0)

    @beartype
    def potential(self, position: NDArray[np.float64]) -> float:
        """Gravitational potential per unit mass [J/kg]."""
        return -self.mu / float(np.linalg.norm(position))


# =============================================================================
# Convenience Functions
# =============================================================================


@beartype
def circular_velocity(radius: float, mu: float = MU_MARS) -> float:
    """Speed of a circular orbit at ``radius`` from the planet centre [m/s]."""
    return float(np.sqrt(mu / radius))


@beartype
def escape_velocity(radius: float, mu: float = MU_MARS) -> float:
    """Escape speed at ``radius`` from the planet centre [m/s]."""
    return float(np.sqrt(2 * mu / radius))


@beartype
def orbital_period(radius: float, mu: float = MU_MARS) -> float:
    """Period of a circular orbit at ``radius`` [s]."""
    return float(2 * np.pi * np.sqrt(radius ** 3 / mu))


@beartype
def specific_orbital_energy(
    position: NDArray[np.float64],
    velocity: NDArray[np.float64],
    mu: float = MU_MARS,
) -> float:
    """Kinetic plus potential energy per unit mass [J/kg]."""
    r = float(np.linalg.norm(position))
    v = float(np.linalg.norm(velocity))
    return 0.5 * v * v - mu / r
