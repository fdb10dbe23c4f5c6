"""Exponential Mars atmosphere.

Density falls off exponentially with altitude from a surface value and is
cut to zero above the exosphere boundary and below the surface:

    rho(h) = RHO_SURFACE * exp(-h / SCALE_HEIGHT),  0 <= h <= EXOSPHERE

Example:
    >>> from lander.environment import MarsAtmosphere
    >>>
    >>> atm = MarsAtmosphere()
    >>> rho = atm.density(10000.0)  # kg/m^3
    >>> rho = atm.density_at(position)  # from a planet-centred position
"""

import numpy as np
from numba import njit
from numpy.typing import NDArray

from lander.environment.gravity import MARS_RADIUS
from lander.typecheck import beartype

# =============================================================================
# Constants
# =============================================================================

RHO_SURFACE: float = 0.017  # Surface density [kg/m^3]
SCALE_HEIGHT: float = 11000.0  # [m]
EXOSPHERE: float = 200000.0  # Altitude above which density is zero [m]


@njit(cache=True)
def _exponential_density(
    altitude: float,
    rho0: float = RHO_SURFACE,
    scale_height: float = SCALE_HEIGHT,
    exosphere: float = EXOSPHERE,
) -> float:
    if altitude > exosphere or altitude < 0.0:
        return 0.0
    return rho0 * np.exp(-altitude / scale_height)


# =============================================================================
# Atmosphere Model
# =============================================================================


@beartype
class MarsAtmosphere:
    """Exponential atmosphere bounded by an exosphere.

    Attributes:
        rho0: Density at the surface [kg/m^3]
        scale_height: e-folding height [m]
        exosphere: Upper edge of the atmosphere [m]
        planet_radius: Radius used to turn positions into altitudes [m]
    """

    def __init__(
        self,
        rho0: float = RHO_SURFACE,
        scale_height: float = SCALE_HEIGHT,
        exosphere: float = EXOSPHERE,
        planet_radius: float = MARS_RADIUS,
    ) -> None:
        self.rho0 = rho0
        self.scale_height = scale_height
        self.exosphere = exosphere
        self.planet_radius = planet_radius

    @beartype
    def density(self, altitude: float) -> float:
        """Density at ``altitude`` above the surface [kg/m^3]."""
        return float(_exponential_density(
            altitude, self.rho0, self.scale_height, self.exosphere,
        ))

    @beartype
    def altitude(self, position: NDArray[np.float64]) -> float:
        """Altitude of a planet-centred position [m]."""
        return float(np.linalg.norm(position)) - self.planet_radius

    @beartype
    def density_at(self, position: NDArray[np.float64]) -> float:
        """Density at a planet-centred position [kg/m^3]."""
        return self.density(self.altitude(position))

    @beartype
    def in_atmosphere(self, position: NDArray[np.float64]) -> bool:
        return self.altitude(position) <= self.exosphere

    @beartype
    def dynamic_pressure(self, position: NDArray[np.float64], speed: float) -> float:
        """Dynamic pressure q = 0.5 * rho * v^2 [Pa]."""
        return 0.5 * self.density_at(position) * speed ** 2


class Vacuum(MarsAtmosphere):
    """Atmosphere with zero density everywhere."""

    def __init__(self, planet_radius: float = MARS_RADIUS) -> None:
        super().__init__(rho0=0.0, planet_radius=planet_radius)
