"""Vehicle and simulation configuration.

Defaults reproduce the reference Mars lander: a 1 m lander of 100 kg dry
mass carrying 100 l of propellant, with an engine able to lift 1.5 times
the fully fuelled weight at the surface.

Example:
    >>> from lander.config import LanderConfig, SimConfig, IntegrationMethod
    >>>
    >>> vehicle = LanderConfig()
    >>> vehicle.mass(fuel=0.5)
    150.0
    >>> config = SimConfig(method=IntegrationMethod.EULER)
"""

from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np

from lander.environment.gravity import MARS_RADIUS, MU_MARS
from lander.errors import ConfigurationError
from lander.typecheck import beartype

# =============================================================================
# Vehicle Defaults
# =============================================================================

LANDER_SIZE: float = 1.0  # Radius of the lander body [m]
UNLOADED_LANDER_MASS: float = 100.0  # [kg]
FUEL_CAPACITY: float = 100.0  # [l]
FUEL_DENSITY: float = 1.0  # [kg/l]
FUEL_RATE_AT_MAX_THRUST: float = 0.5  # [l/s]
MAX_THRUST: float = (
    1.5 * (FUEL_DENSITY * FUEL_CAPACITY + UNLOADED_LANDER_MASS)
    * (MU_MARS / (MARS_RADIUS * MARS_RADIUS))
)  # [N]
DRAG_COEF_LANDER: float = 1.0
DRAG_COEF_CHUTE: float = 2.0
CHUTE_AREA_FACTOR: float = 5.0 * 2.0 * 2.0  # Canopy area per size^2 (five 2x2 panels)
MAX_PARACHUTE_DRAG: float = 20000.0  # [N]
MAX_PARACHUTE_SPEED: float = 500.0  # [m/s]


class IntegrationMethod(Enum):
    """Fixed-step integration policies."""

    EULER = auto()   # Explicit forward Euler
    VERLET = auto()  # Two-step position Verlet with a Taylor bootstrap step


# =============================================================================
# Vehicle Configuration
# =============================================================================


@beartype
@dataclass(frozen=True)
class LanderConfig:
    """Physical constants of the lander.

    Attributes:
        size: Lander body radius [m]
        unloaded_mass: Dry mass [kg]
        fuel_capacity: Tank volume [l]
        fuel_density: Propellant density [kg/l]
        fuel_rate_at_max_thrust: Propellant flow at full throttle [l/s]
        max_thrust: Engine thrust at full throttle [N]
        drag_coef_lander: Drag coefficient of the body
        drag_coef_chute: Drag coefficient of the parachute canopy
        chute_area_factor: Canopy reference area divided by size^2
        max_parachute_drag: Canopy load above which the parachute is torn off [N]
        max_parachute_speed: Speed above which a deployed parachute fails [m/s]
    """
    size: float = LANDER_SIZE
    unloaded_mass: float = UNLOADED_LANDER_MASS
    fuel_capacity: float = FUEL_CAPACITY
    fuel_density: float = FUEL_DENSITY
    fuel_rate_at_max_thrust: float = FUEL_RATE_AT_MAX_THRUST
    max_thrust: float = MAX_THRUST
    drag_coef_lander: float = DRAG_COEF_LANDER
    drag_coef_chute: float = DRAG_COEF_CHUTE
    chute_area_factor: float = CHUTE_AREA_FACTOR
    max_parachute_drag: float = MAX_PARACHUTE_DRAG
    max_parachute_speed: float = MAX_PARACHUTE_SPEED

    def __post_init__(self) -> None:
        """Reject values outside physical sense."""
        for name in ("size", "unloaded_mass", "fuel_density"):
            value = getattr(self, name)
            if not np.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        for name in (
            "fuel_capacity",
            "fuel_rate_at_max_thrust",
            "max_thrust",
            "drag_coef_lander",
            "drag_coef_chute",
            "chute_area_factor",
            "max_parachute_drag",
            "max_parachute_speed",
        ):
            value = getattr(self, name)
            if not np.isfinite(value) or value < 0:
                raise ConfigurationError(f"{name} must be non-negative, got {value}")

    @property
    def lander_area(self) -> float:
        """Body cross-section pi * size^2 [m^2]."""
        return float(np.pi * self.size * self.size)

    @property
    def chute_area(self) -> float:
        """Canopy reference area [m^2]."""
        return self.chute_area_factor * self.size * self.size

    @property
    def fuel_mass_capacity(self) -> float:
        """Propellant mass of a full tank [kg]."""
        return self.fuel_capacity * self.fuel_density

    @beartype
    def mass(self, fuel: float) -> float:
        """Total mass with ``fuel`` as a fraction of a full tank [kg]."""
        return self.unloaded_mass + fuel * self.fuel_mass_capacity


# =============================================================================
# Simulation Configuration
# =============================================================================


@beartype
@dataclass
class SimConfig:
    """Simulation configuration.

    Attributes:
        method: Integration policy
        vehicle: Lander constants
        burn_fuel: Whether thrust consumes propellant
        record_history: Keep a copy of every state in the simulator
    """
    method: IntegrationMethod = IntegrationMethod.VERLET
    vehicle: LanderConfig = field(default_factory=LanderConfig)
    burn_fuel: bool = True
    record_history: bool = True
