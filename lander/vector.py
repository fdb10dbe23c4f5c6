"""Three-component vector arithmetic.

Vectors are plain ``float64`` numpy arrays of shape (3,). These helpers
add the few guarantees the force model relies on, most importantly that the
unit vector of a zero vector is the zero vector rather than NaN.

Example:
    >>> from lander.vector import vec3, unit, norm
    >>> r = vec3(3.0, 4.0, 0.0)
    >>> norm(r)
    5.0
    >>> unit(vec3(0.0, 0.0, 0.0))
    array([0., 0., 0.])
"""

import numpy as np
from numpy.typing import NDArray

from lander.typecheck import beartype


@beartype
def vec3(x: float, y: float, z: float) -> NDArray[np.float64]:
    """Build a vector from its components."""
    return np.array([x, y, z], dtype=np.float64)


@beartype
def as_vec3(values: NDArray | list | tuple) -> NDArray[np.float64]:
    """Convert any 3-sequence to a float64 vector.

    Raises:
        ValueError: if the input does not have exactly three components
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"Vector must be shape (3,), got {arr.shape}")
    return arr


def zeros() -> NDArray[np.float64]:
    return np.zeros(3, dtype=np.float64)


@beartype
def add(a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    return a + b


@beartype
def scale(a: NDArray[np.float64], factor: float) -> NDArray[np.float64]:
    return a * factor


@beartype
def dot(a: NDArray[np.float64], b: NDArray[np.float64]) -> float:
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


@beartype
def norm2(a: NDArray[np.float64]) -> float:
    """Squared Euclidean norm."""
    return dot(a, a)


@beartype
def norm(a: NDArray[np.float64]) -> float:
    """Euclidean norm."""
    return float(np.sqrt(norm2(a)))


@beartype
def unit(a: NDArray[np.float64]) -> NDArray[np.float64]:
    """Unit vector along ``a``; the zero vector maps to itself."""
    n = norm(a)
    if n == 0.0:
        return zeros()
    return a / n


@beartype
def is_finite(a: NDArray[np.float64]) -> bool:
    return bool(np.all(np.isfinite(a)))
