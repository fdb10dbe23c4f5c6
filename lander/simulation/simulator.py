"""Step-driven lander simulation.

One call to :func:`tick` advances the lander by one fixed time step:

    precondition checks -> net acceleration -> integrate -> time += dt
    -> fuel burn -> parachute check -> autopilot -> attitude stabilizer

The autopilot and stabilizer run after the dynamics update, so they react to
the state the integrator just produced and act on the next tick.

Architecture:
    The simulation loop owns a :class:`LanderState` and an
    :class:`Integrator`. Both are passed explicitly; nothing is kept in
    module globals.

Example:
    >>> from lander.simulation import Simulator
    >>>
    >>> sim = Simulator.from_scenario(1)
    >>> sim.state.autopilot_enabled = True
    >>> sim.run(duration=60.0)
    >>> result = SimulationResult.from_simulator(sim)
    >>> df = result.to_dataframe()
"""

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray
from tqdm import tqdm

from lander.config import SimConfig
from lander.dynamics.forces import ForceModel
from lander.dynamics.integrators import Integrator
from lander.dynamics.state import LanderState, ParachuteStatus
from lander.environment.atmosphere import MarsAtmosphere
from lander.environment.gravity import MARS_RADIUS, MarsGravity
from lander.gnc.control.attitude import AttitudeStabilizer
from lander.gnc.control.autopilot import Autopilot
from lander.simulation.scenarios import initialize_scenario
from lander.typecheck import beartype

logger = logging.getLogger(__name__)


# =============================================================================
# Tick
# =============================================================================


@beartype
def burn_fuel(state: LanderState, model: ForceModel) -> None:
    """Consume propellant for one step at the current throttle."""
    vehicle = model.vehicle
    if vehicle.fuel_capacity == 0.0:
        return
    used = state.delta_t * vehicle.fuel_rate_at_max_thrust * state.throttle / vehicle.fuel_capacity
    state.set_fuel(state.fuel - used)


@beartype
def check_parachute(state: LanderState, model: ForceModel) -> bool:
    """Tear off a deployed parachute that is overloaded.

    Returns:
        True if the parachute was lost on this call
    """
    if state.parachute_status != ParachuteStatus.DEPLOYED:
        return False

    vehicle = model.vehicle
    load = model.chute_drag(state)
    if load > vehicle.max_parachute_drag:
        reason = f"drag {load:.0f} N"
    elif state.speed > vehicle.max_parachute_speed and model.atmosphere.in_atmosphere(state.position):
        reason = f"speed {state.speed:.0f} m/s"
    else:
        return False

    state.parachute_status = ParachuteStatus.LOST
    logger.warning("Parachute lost at t=%.1f s (%s)", state.time, reason)
    return True


@beartype
def tick(
    state: LanderState,
    integrator: Integrator,
    model: ForceModel | None = None,
    autopilot: Autopilot | None = None,
    stabilizer: AttitudeStabilizer | None = None,
    burn: bool = True,
) -> None:
    """Advance ``state`` in place by one time step.

    Args:
        state: Lander state, mutated in place
        integrator: Integrator holding the step history of this run
        model: Force model (defaults to the reference lander on Mars)
        autopilot: Controller used when ``state.autopilot_enabled``
        stabilizer: Stabilizer used when ``state.stabilized_attitude``
        burn: Whether thrust consumes propellant

    Raises:
        PreconditionError: on a non-finite state or a lander at the planet centre
    """
    model = model or ForceModel()

    state.check_finite()
    acceleration = model.acceleration(state)
    integrator.step(state, acceleration)
    state.time += state.delta_t

    if burn:
        burn_fuel(state, model)
    check_parachute(state, model)

    if state.autopilot_enabled:
        (autopilot or Autopilot(planet_radius=model.atmosphere.planet_radius)).update(state)
    if state.stabilized_attitude:
        (stabilizer or AttitudeStabilizer()).update(state)


# =============================================================================
# Simulator
# =============================================================================


@beartype
@dataclass
class Simulator:
    """Owns the lander state and drives the tick loop.

    Example:
        >>> sim = Simulator.from_scenario(0)
        >>> for _ in range(1000):
        ...     sim.step()
        >>> sim.altitude
    """
    state: LanderState
    config: SimConfig = field(default_factory=SimConfig)
    autopilot: Autopilot = field(default_factory=Autopilot)
    stabilizer: AttitudeStabilizer = field(default_factory=AttitudeStabilizer)
    gravity: MarsGravity = field(default_factory=MarsGravity)
    atmosphere: MarsAtmosphere = field(default_factory=MarsAtmosphere)

    # Internal
    _model: ForceModel = field(init=False, repr=False)
    _integrator: Integrator = field(init=False, repr=False)
    _history: list[LanderState] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self._model = ForceModel(self.config.vehicle, self.gravity, self.atmosphere)
        self._integrator = Integrator(self.config.method)
        if self.config.record_history:
            self._history = [self.state.copy()]

    @classmethod
    def from_scenario(cls, index: int, config: SimConfig | None = None) -> "Simulator":
        """Create a simulator at the start of scenario ``index``.

        Raises:
            ScenarioIndexError: if ``index`` is outside 0..9
        """
        sim = cls(state=LanderState.at_rest(np.array([0.0, 0.0, MARS_RADIUS])), config=config or SimConfig())
        sim.load_scenario(index)
        return sim

    def load_scenario(self, index: int) -> bool:
        """Reset the run and apply scenario ``index``.

        Time, fuel, throttle and the integrator history are reset even for a
        reserved slot, which leaves the rest of the state as it was.
        """
        modified = initialize_scenario(index, self.state)
        self.reset()
        return modified

    def reset(self) -> None:
        """Restart the run from the current position and velocity."""
        self.state.time = 0.0
        self.state.set_fuel(1.0)
        self.state.set_throttle(0.0)
        self._integrator.reset()
        if self.config.record_history:
            self._history = [self.state.copy()]

    @property
    def model(self) -> ForceModel:
        return self._model

    @property
    def integrator(self) -> Integrator:
        return self._integrator

    def step(self) -> LanderState:
        """Advance one tick and return the (live) state."""
        tick(
            self.state,
            self._integrator,
            self._model,
            self.autopilot,
            self.stabilizer,
            burn=self.config.burn_fuel,
        )
        if self.config.record_history:
            self._history.append(self.state.copy())
        return self.state

    def run(self, duration: float, progress: bool = False) -> LanderState:
        """Advance until ``duration`` seconds have elapsed.

        Args:
            duration: Simulated time to cover [s]
            progress: Show a tqdm progress bar
        """
        n_steps = int(round(duration / self.state.delta_t))
        iterator = range(n_steps)
        if progress:
            iterator = tqdm(iterator, desc="Simulating", total=n_steps)

        for _ in iterator:
            self.step()

        logger.info(
            "Ran %d steps to t=%.1f s: altitude=%.1f m speed=%.1f m/s fuel=%.3f",
            n_steps, self.state.time, self.altitude, self.state.speed, self.state.fuel,
        )
        return self.state

    @beartype
    def set_throttle(self, value: float) -> None:
        self.state.set_throttle(value)

    def deploy_parachute(self) -> bool:
        """Deploy the parachute if it has not been used yet.

        Returns:
            True if the parachute is now deployed by this call
        """
        if self.state.parachute_status != ParachuteStatus.NOT_DEPLOYED:
            logger.warning(
                "Cannot deploy parachute, status is %s", self.state.parachute_status.value,
            )
            return False
        self.state.parachute_status = ParachuteStatus.DEPLOYED
        logger.info("Parachute deployed at t=%.1f s", self.state.time)
        return True

    def get_state(self) -> LanderState:
        """Copy of the current state."""
        return self.state.copy()

    def get_history(self) -> list[LanderState]:
        return self._history.copy()

    @property
    def time(self) -> float:
        return self.state.time

    @property
    def altitude(self) -> float:
        """Height above the surface [m]."""
        return self.state.radius - self.atmosphere.planet_radius

    @property
    def descent_rate(self) -> float:
        """Radial velocity [m/s], negative when descending."""
        return self.state.radial_velocity

    @property
    def mass(self) -> float:
        return self._model.mass(self.state)


# =============================================================================
# Results and Analysis
# =============================================================================


@beartype
@dataclass
class SimulationResult:
    """Recorded trajectory of a run."""
    states: list[LanderState]
    planet_radius: float = MARS_RADIUS

    @property
    def time(self) -> NDArray[np.float64]:
        return np.array([s.time for s in self.states])

    @property
    def position(self) -> NDArray[np.float64]:
        """Position history [m], shape (N, 3)."""
        return np.array([s.position for s in self.states])

    @property
    def velocity(self) -> NDArray[np.float64]:
        """Velocity history [m/s], shape (N, 3)."""
        return np.array([s.velocity for s in self.states])

    @property
    def radius(self) -> NDArray[np.float64]:
        return np.linalg.norm(self.position, axis=1)

    @property
    def altitude(self) -> NDArray[np.float64]:
        return self.radius - self.planet_radius

    @property
    def speed(self) -> NDArray[np.float64]:
        return np.linalg.norm(self.velocity, axis=1)

    @property
    def throttle(self) -> NDArray[np.float64]:
        return np.array([s.throttle for s in self.states])

    @property
    def fuel(self) -> NDArray[np.float64]:
        return np.array([s.fuel for s in self.states])

    @classmethod
    def from_simulator(cls, sim: Simulator) -> "SimulationResult":
        return cls(states=sim.get_history(), planet_radius=sim.atmosphere.planet_radius)

    def to_dataframe(self):
        """Convert to Polars DataFrame."""
        import polars as pl

        return pl.DataFrame({
            "time": self.time,
            "altitude": self.altitude,
            "speed": self.speed,
            "throttle": self.throttle,
            "fuel": self.fuel,
            "x": self.position[:, 0],
            "y": self.position[:, 1],
            "z": self.position[:, 2],
            "vx": self.velocity[:, 0],
            "vy": self.velocity[:, 1],
            "vz": self.velocity[:, 2],
            "parachute": [s.parachute_status.value for s in self.states],
        })
