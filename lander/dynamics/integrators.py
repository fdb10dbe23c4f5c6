"""Fixed-step integrators for the lander's translational motion.

Two policies are available:

- EULER: explicit forward Euler
    x' = x + v*dt
    v' = v + a*dt

- VERLET: two-step position Verlet
    x' = 2x - x_prev + a*dt^2
    v' = (x' - x_prev) / (2*dt)

  The two-step rule needs the position of the previous step. On the first
  step of a run there is none, so the integrator bootstraps with a
  second-order Taylor step
    x' = x + v*dt + 0.5*a*dt^2
    v' = v + a*dt
  and remembers the pre-update position.

Example:
    >>> from lander.dynamics.integrators import Integrator
    >>> from lander.config import IntegrationMethod
    >>>
    >>> integrator = Integrator(IntegrationMethod.VERLET)
    >>> integrator.step(state, acceleration)  # mutates state.position/velocity
    >>> integrator.reset()  # before starting a new run
"""

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from lander.config import IntegrationMethod
from lander.dynamics.state import LanderState
from lander.errors import ConfigurationError, PreconditionError
from lander.typecheck import beartype
from lander.vector import add, is_finite, scale

logger = logging.getLogger(__name__)


# =============================================================================
# Single-Step Rules
# =============================================================================


@beartype
def euler_step(
    position: NDArray[np.float64],
    velocity: NDArray[np.float64],
    acceleration: NDArray[np.float64],
    dt: float,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Explicit Euler step.

    Returns:
        (new_position, new_velocity)
    """
    return add(position, scale(velocity, dt)), add(velocity, scale(acceleration, dt))


@beartype
def taylor_step(
    position: NDArray[np.float64],
    velocity: NDArray[np.float64],
    acceleration: NDArray[np.float64],
    dt: float,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Second-order Taylor step used to start the two-step rule."""
    new_position = position + velocity * dt + 0.5 * acceleration * dt * dt
    new_velocity = velocity + acceleration * dt
    return new_position, new_velocity


@beartype
def verlet_step(
    position: NDArray[np.float64],
    previous_position: NDArray[np.float64],
    acceleration: NDArray[np.float64],
    dt: float,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Two-step position Verlet update.

    The returned velocity is the central difference across the step, which
    is the velocity at the current (pre-update) position.
    """
    new_position = 2 * position - previous_position + acceleration * dt * dt
    new_velocity = (new_position - previous_position) / (2 * dt)
    return new_position, new_velocity


# =============================================================================
# Integrator
# =============================================================================


@beartype
@dataclass
class Integrator:
    """Stateful integrator for one simulation run.

    The Verlet policy is a two-state machine: while ``previous_position`` is
    None the next step bootstraps, afterwards it uses the two-step rule.

    A run ends when the state's position is no longer the one this
    integrator last wrote, e.g. after a scenario is loaded into the state.
    The next step then bootstraps again.

    Attributes:
        method: Integration policy
        previous_position: Position before the last step, None before the first step
        delta_t: Time step fixed by the first step of the run
        last_position: Position written by the last step
    """
    method: IntegrationMethod = IntegrationMethod.VERLET
    previous_position: NDArray[np.float64] | None = field(default=None, repr=False)
    delta_t: float | None = field(default=None, repr=False)
    last_position: NDArray[np.float64] | None = field(default=None, repr=False)

    @property
    def initialized(self) -> bool:
        return self.previous_position is not None

    def reset(self) -> None:
        """Forget the step history; the next step starts a new run."""
        self.previous_position = None
        self.delta_t = None
        self.last_position = None

    def owns(self, state: LanderState) -> bool:
        """True if ``state`` is where the last step of this run left it."""
        return self.last_position is not None and np.array_equal(state.position, self.last_position)

    @beartype
    def step(self, state: LanderState, acceleration: NDArray[np.float64]) -> None:
        """Advance ``state.position`` and ``state.velocity`` by ``state.delta_t``.

        The state is only written once the new values are known to be finite.

        Raises:
            ConfigurationError: if the time step differs from earlier steps of the run
            PreconditionError: if the update would produce non-finite values
        """
        if self.initialized and not self.owns(state):
            logger.debug("Position changed outside the integrator at t=%.1f s, starting a new run", state.time)
            self.reset()

        dt = state.delta_t
        if self.delta_t is None:
            self.delta_t = dt
        elif dt != self.delta_t:
            raise ConfigurationError(
                f"Time step changed mid-run from {self.delta_t} to {dt}"
            )

        if self.method == IntegrationMethod.EULER:
            new_position, new_velocity = euler_step(
                state.position, state.velocity, acceleration, dt,
            )
        elif self.method == IntegrationMethod.VERLET:
            if self.previous_position is None:
                logger.debug(
                    "Bootstrapping Verlet: position=%s velocity=%s acceleration=%s",
                    state.position, state.velocity, acceleration,
                )
                new_position, new_velocity = taylor_step(
                    state.position, state.velocity, acceleration, dt,
                )
            else:
                new_position, new_velocity = verlet_step(
                    state.position, self.previous_position, acceleration, dt,
                )
        else:
            raise ValueError(f"Unknown integration method: {self.method}")

        if not (is_finite(new_position) and is_finite(new_velocity)):
            raise PreconditionError(
                f"Integration produced non-finite state at t={state.time}"
            )

        self.previous_position = state.position.copy()
        self.last_position = new_position.copy()
        state.position = new_position
        state.velocity = new_velocity
