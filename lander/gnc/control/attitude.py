"""Attitude stabilization.

Keeps the lander's base pointing at the planet: the body +z axis is set to
the outward radial direction every tick. Roll about that axis is fixed by
a reference axis so the resulting Euler angles are deterministic.

Only ``state.orientation`` is modified.
"""

import numpy as np
from numpy.typing import NDArray

from lander.dynamics.state import LanderState, matrix_to_euler
from lander.typecheck import beartype
from lander.vector import unit, vec3

# =============================================================================
# Attitude Stabilizer
# =============================================================================


@beartype
def radial_attitude(position: NDArray[np.float64]) -> NDArray[np.float64]:
    """Euler angles [deg] that point the body +z axis along ``position``."""
    up = unit(position)
    reference = vec3(0.0, 0.0, 1.0)
    if abs(float(np.dot(up, reference))) > 0.999:
        reference = vec3(1.0, 0.0, 0.0)

    left = unit(np.cross(up, reference))
    out = np.cross(left, up)

    return matrix_to_euler(np.column_stack([out, left, up]))


@beartype
class AttitudeStabilizer:
    """Holds the lander upright relative to the local vertical.

    Example:
        >>> stabilizer = AttitudeStabilizer()
        >>> stabilizer.update(state)
        >>> state.up_direction  # parallel to state.position
    """

    @beartype
    def update(self, state: LanderState) -> None:
        state.orientation = radial_attitude(state.position)
