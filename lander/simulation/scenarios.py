"""Catalogue of initial conditions.

Ten scenario slots, of which 0-5 are defined and 6-9 are reserved. Loading
a reserved slot leaves the state untouched.

| idx | description |
|-----|-------------|
| 0 | circular equatorial orbit |
| 1 | descent from rest at 10 km |
| 2 | elliptical polar orbit |
| 3 | polar surface launch at escape velocity |
| 4 | elliptical orbit that clips the atmosphere and decays |
| 5 | descent from rest at the edge of the exosphere |

Example:
    >>> from lander.simulation.scenarios import initialize_scenario
    >>>
    >>> state = LanderState.at_rest(np.array([0.0, 0.0, 4e6]))
    >>> initialize_scenario(1, state)
    >>> state.stabilized_attitude
    True
"""

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from lander.config import LANDER_SIZE
from lander.dynamics.integrators import Integrator
from lander.dynamics.state import LanderState, ParachuteStatus
from lander.environment.atmosphere import EXOSPHERE
from lander.environment.gravity import MARS_RADIUS
from lander.errors import ScenarioIndexError
from lander.typecheck import beartype
from lander.vector import as_vec3

logger = logging.getLogger(__name__)

N_SCENARIOS = 10


@beartype
@dataclass(frozen=True)
class Scenario:
    """Initial conditions for a run.

    Attributes:
        description: Text shown to the user
        position: Planet-centred position [m]
        velocity: Velocity [m/s]
        orientation: xyz Euler angles [deg]
        delta_t: Time step [s]
        parachute_status: Initial parachute status
        stabilized_attitude: Hold the lander upright
        autopilot_enabled: Let the autopilot fly
    """
    description: str
    position: tuple[float, float, float]
    velocity: tuple[float, float, float]
    orientation: tuple[float, float, float]
    delta_t: float = 0.1
    parachute_status: ParachuteStatus = ParachuteStatus.NOT_DEPLOYED
    stabilized_attitude: bool = False
    autopilot_enabled: bool = False

    def apply(self, state: LanderState) -> None:
        """Overwrite the kinematic state and mode flags of ``state``."""
        state.position = _array(self.position)
        state.velocity = _array(self.velocity)
        state.orientation = _array(self.orientation)
        state.delta_t = self.delta_t
        state.parachute_status = self.parachute_status
        state.stabilized_attitude = self.stabilized_attitude
        state.autopilot_enabled = self.autopilot_enabled

    def to_state(self) -> LanderState:
        """Fresh state at t=0 with a full tank and the engine off."""
        return LanderState(
            position=_array(self.position),
            velocity=_array(self.velocity),
            orientation=_array(self.orientation),
            delta_t=self.delta_t,
            parachute_status=self.parachute_status,
            stabilized_attitude=self.stabilized_attitude,
            autopilot_enabled=self.autopilot_enabled,
        )


def _array(values: tuple[float, float, float]) -> NDArray[np.float64]:
    return as_vec3(values)


SCENARIOS: dict[int, Scenario] = {
    0: Scenario(
        description="circular orbit",
        position=(1.2 * MARS_RADIUS, 0.0, 0.0),
        velocity=(0.0, -3247.087385863725, 0.0),
        orientation=(0.0, 90.0, 0.0),
    ),
    1: Scenario(
        description="descent from 10km",
        position=(0.0, -(MARS_RADIUS + 10000.0), 0.0),
        velocity=(0.0, 0.0, 0.0),
        orientation=(0.0, 0.0, 90.0),
        stabilized_attitude=True,
    ),
    2: Scenario(
        description="elliptical orbit, thrust changes orbital plane",
        position=(0.0, 0.0, 1.2 * MARS_RADIUS),
        velocity=(3500.0, 0.0, 0.0),
        orientation=(0.0, 0.0, 90.0),
    ),
    3: Scenario(
        description="polar launch at escape velocity (but drag prevents escape)",
        position=(0.0, 0.0, MARS_RADIUS + LANDER_SIZE / 2.0),
        velocity=(0.0, 0.0, 5027.0),
        orientation=(0.0, 0.0, 0.0),
    ),
    4: Scenario(
        description="elliptical orbit that clips the atmosphere and decays",
        position=(0.0, 0.0, MARS_RADIUS + 100000.0),
        velocity=(4000.0, 0.0, 0.0),
        orientation=(0.0, 90.0, 0.0),
    ),
    5: Scenario(
        description="descent from 200km",
        position=(0.0, -(MARS_RADIUS + EXOSPHERE), 0.0),
        velocity=(0.0, 0.0, 0.0),
        orientation=(0.0, 0.0, 90.0),
        stabilized_attitude=True,
    ),
}


def _check_index(index: int) -> None:
    if not 0 <= index < N_SCENARIOS:
        raise ScenarioIndexError(index, N_SCENARIOS)


@beartype
def get_scenario(index: int) -> Scenario | None:
    """Scenario at ``index``, or None for a reserved slot.

    Raises:
        ScenarioIndexError: if ``index`` is outside 0..9
    """
    _check_index(index)
    return SCENARIOS.get(index)


@beartype
def scenario_description(index: int) -> str:
    """Description of scenario ``index``; reserved slots have an empty one."""
    scenario = get_scenario(index)
    return scenario.description if scenario is not None else ""


@beartype
def list_scenarios() -> list[str]:
    """Descriptions of all ten slots, in index order."""
    return [scenario_description(i) for i in range(N_SCENARIOS)]


@beartype
def initialize_scenario(
    index: int,
    state: LanderState,
    integrator: Integrator | None = None,
) -> bool:
    """Overwrite ``state`` with the initial conditions of scenario ``index``.

    Position, velocity, orientation, time step, parachute status and the two
    mode flags are written. Reserved slots leave the state untouched.

    Args:
        index: Scenario slot 0..9
        state: State to overwrite
        integrator: Integrator of the run, reset when the state is modified

    Returns:
        True if the state was modified

    Raises:
        ScenarioIndexError: if ``index`` is outside 0..9
    """
    scenario = get_scenario(index)
    if scenario is None:
        logger.info("Scenario %d is reserved, state unchanged", index)
        return False
    scenario.apply(state)
    if integrator is not None:
        integrator.reset()
    logger.info("Loaded scenario %d: %s", index, scenario.description)
    return True
