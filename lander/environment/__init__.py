"""Environment models for the lander simulation.

Provides the Mars atmosphere and gravity field.

Example:
    >>> from lander.environment import MarsAtmosphere, MarsGravity
    >>>
    >>> atm = MarsAtmosphere()
    >>> rho = atm.density(altitude=10000.0)  # kg/m^3
    >>>
    >>> grav = MarsGravity()
    >>> g = grav.acceleration(position)  # m/s^2
"""

from lander.environment.atmosphere import (
    EXOSPHERE,
    MarsAtmosphere,
    Vacuum,
)
from lander.environment.gravity import (
    GRAVITY,
    MARS_MASS,
    MARS_RADIUS,
    MU_MARS,
    MarsGravity,
    circular_velocity,
    escape_velocity,
    orbital_period,
    specific_orbital_energy,
)

__all__ = [
    # Atmosphere
    "EXOSPHERE",
    "MarsAtmosphere",
    "Vacuum",
    # Gravity
    "GRAVITY",
    "MARS_MASS",
    "MARS_RADIUS",
    "MU_MARS",
    "MarsGravity",
    "circular_velocity",
    "escape_velocity",
    "orbital_period",
    "specific_orbital_energy",
]
