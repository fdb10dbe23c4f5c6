"""Lander - Mars lander descent and orbit simulation.

This package advances a lander's position and velocity under gravity,
atmospheric drag and engine thrust with a fixed time step, and can fly it
with a proportional throttle autopilot.

Example:
    >>> from lander import IntegrationMethod, SimConfig, Simulator
    >>>
    >>> sim = Simulator.from_scenario(1, SimConfig(method=IntegrationMethod.VERLET))
    >>> sim.state.autopilot_enabled = True
    >>> sim.run(duration=100.0)
    >>> print(f"Altitude: {sim.altitude:.1f} m")
"""

__version__ = "0.1.0"

from lander.config import (
    IntegrationMethod,
    LanderConfig,
    SimConfig,
)
from lander.dynamics import (
    ForceBreakdown,
    ForceModel,
    Integrator,
    LanderState,
    ParachuteStatus,
)
from lander.environment import (
    EXOSPHERE,
    MARS_MASS,
    MARS_RADIUS,
    MarsAtmosphere,
    MarsGravity,
    Vacuum,
)
from lander.errors import (
    ConfigurationError,
    LanderError,
    PreconditionError,
    ScenarioIndexError,
)
from lander.gnc import (
    AttitudeStabilizer,
    Autopilot,
    AutopilotGains,
)
from lander.simulation import (
    SCENARIOS,
    Scenario,
    SimulationResult,
    Simulator,
    initialize_scenario,
    scenario_description,
    tick,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "IntegrationMethod",
    "LanderConfig",
    "SimConfig",
    # Dynamics
    "ForceBreakdown",
    "ForceModel",
    "Integrator",
    "LanderState",
    "ParachuteStatus",
    # Environment
    "EXOSPHERE",
    "MARS_MASS",
    "MARS_RADIUS",
    "MarsAtmosphere",
    "MarsGravity",
    "Vacuum",
    # Errors
    "LanderError",
    "PreconditionError",
    "ScenarioIndexError",
    "ConfigurationError",
    # Control
    "Autopilot",
    "AutopilotGains",
    "AttitudeStabilizer",
    # Simulation
    "SCENARIOS",
    "Scenario",
    "SimulationResult",
    "Simulator",
    "initialize_scenario",
    "scenario_description",
    "tick",
]
