"""Unit tests for the three-component vector helpers."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from lander.vector import add, as_vec3, dot, is_finite, norm, norm2, scale, unit, vec3, zeros


class TestVector:
    """Test vector arithmetic."""

    def test_vec3(self):
        v = vec3(1.0, -2.0, 3.5)
        assert v.dtype == np.float64
        assert np.array_equal(v, [1.0, -2.0, 3.5])

    def test_vec3_accepts_integers(self):
        assert np.array_equal(vec3(1, 0, -2), [1.0, 0.0, -2.0])

    def test_as_vec3(self):
        assert np.array_equal(as_vec3((1, 2, 3)), [1.0, 2.0, 3.0])
        assert as_vec3([0, 0, 1]).dtype == np.float64

    def test_as_vec3_wrong_length(self):
        with pytest.raises(ValueError):
            as_vec3([1.0, 2.0])

    def test_add_and_scale(self):
        a = vec3(1.0, 2.0, 3.0)
        b = vec3(-1.0, 0.5, 2.0)
        assert np.array_equal(add(a, b), [0.0, 2.5, 5.0])
        assert np.array_equal(scale(a, -2.0), [-2.0, -4.0, -6.0])

    def test_dot_and_norm(self):
        a = vec3(3.0, 4.0, 12.0)
        assert dot(a, vec3(1.0, 0.0, 0.0)) == 3.0
        assert norm2(a) == 169.0
        assert norm(a) == 13.0

    def test_unit(self):
        u = unit(vec3(0.0, -5.0, 0.0))
        assert_allclose(u, [0.0, -1.0, 0.0])
        assert_allclose(norm(unit(vec3(1.0, 2.0, 3.0))), 1.0, rtol=1e-15)

    def test_unit_of_zero_is_zero(self):
        """No division by zero for a stationary lander."""
        u = unit(zeros())
        assert np.array_equal(u, np.zeros(3))
        assert is_finite(u)

    def test_is_finite(self):
        assert is_finite(vec3(1.0, 2.0, 3.0))
        assert not is_finite(vec3(1.0, np.nan, 3.0))
        assert not is_finite(vec3(np.inf, 0.0, 0.0))
