"""Dynamics module for the lander simulation.

This module provides the state record, the force model and the fixed-step
integrators that advance the lander's position and velocity.

Example:
    >>> from lander.dynamics import ForceModel, Integrator, LanderState
    >>> import numpy as np
    >>>
    >>> state = LanderState.at_rest(np.array([0.0, -3396000.0, 0.0]))
    >>> model = ForceModel()
    >>> integrator = Integrator()
    >>> integrator.step(state, model.acceleration(state))
"""

from lander.dynamics.forces import (
    ForceBreakdown,
    ForceModel,
    drag_force,
    drag_magnitude,
    thrust_force,
)
from lander.dynamics.integrators import (
    Integrator,
    euler_step,
    taylor_step,
    verlet_step,
)
from lander.dynamics.state import (
    LanderState,
    ParachuteStatus,
    body_to_world,
    clamp_unit,
    euler_to_matrix,
    matrix_to_euler,
)

__all__ = [
    # State
    "LanderState",
    "ParachuteStatus",
    "clamp_unit",
    # Orientation utilities
    "euler_to_matrix",
    "matrix_to_euler",
    "body_to_world",
    # Forces
    "ForceModel",
    "ForceBreakdown",
    "drag_force",
    "drag_magnitude",
    "thrust_force",
    # Integration
    "Integrator",
    "euler_step",
    "taylor_step",
    "verlet_step",
]
