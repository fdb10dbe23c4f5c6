"""Unit tests for the Mars atmosphere and gravity models."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from lander.environment.atmosphere import EXOSPHERE, RHO_SURFACE, MarsAtmosphere, Vacuum
from lander.environment.gravity import (
    MARS_RADIUS,
    MU_MARS,
    MarsGravity,
    circular_velocity,
    escape_velocity,
    orbital_period,
    specific_orbital_energy,
)

# =============================================================================
# Atmosphere Tests
# =============================================================================


class TestMarsAtmosphere:
    """Test the exponential atmosphere."""

    def test_surface_density(self):
        assert_allclose(MarsAtmosphere().density(0.0), RHO_SURFACE)

    def test_scale_height(self):
        """Density should drop by 1/e every 11 km."""
        atm = MarsAtmosphere()
        assert_allclose(atm.density(11000.0) / atm.density(0.0), np.exp(-1.0), rtol=1e-12)

    def test_density_decreases_with_altitude(self):
        atm = MarsAtmosphere()
        altitudes = np.linspace(0.0, EXOSPHERE, 50)
        densities = [atm.density(float(h)) for h in altitudes]
        assert np.all(np.diff(densities) < 0)

    @pytest.mark.parametrize("altitude", [EXOSPHERE + 1.0, 1e6, -10.0])
    def test_zero_outside_atmosphere(self, altitude):
        """No density above the exosphere or below the surface."""
        assert MarsAtmosphere().density(altitude) == 0.0

    def test_density_at_position(self):
        """Position-based lookup should use |r| - R as altitude."""
        atm = MarsAtmosphere()
        position = np.array([0.0, -(MARS_RADIUS + 5000.0), 0.0])
        assert_allclose(atm.density_at(position), atm.density(5000.0))
        assert atm.in_atmosphere(position)

    def test_dynamic_pressure(self):
        atm = MarsAtmosphere()
        position = np.array([MARS_RADIUS + 1000.0, 0.0, 0.0])
        assert_allclose(atm.dynamic_pressure(position, 100.0), 0.5 * atm.density(1000.0) * 1e4)

    def test_vacuum(self):
        assert Vacuum().density(0.0) == 0.0


# =============================================================================
# Gravity Tests
# =============================================================================


class TestMarsGravity:
    """Test the point-mass gravity field."""

    def test_surface_gravity(self):
        """Surface gravity on Mars is about 3.7 m/s^2."""
        g = MarsGravity().acceleration(np.array([MARS_RADIUS, 0.0, 0.0]))
        assert_allclose(g, [-MU_MARS / MARS_RADIUS**2, 0.0, 0.0], rtol=1e-12)
        assert 3.6 < np.linalg.norm(g) < 3.8

    def test_force_scales_with_mass(self):
        grav = MarsGravity()
        position = np.array([1.0e6, 2.0e6, 3.0e6])
        assert_allclose(grav.force(position, 200.0), 200.0 * grav.acceleration(position), rtol=1e-12)

    def test_inverse_square(self):
        grav = MarsGravity()
        g1 = np.linalg.norm(grav.acceleration(np.array([0.0, 0.0, MARS_RADIUS])))
        g2 = np.linalg.norm(grav.acceleration(np.array([0.0, 0.0, 2 * MARS_RADIUS])))
        assert_allclose(g1 / g2, 4.0, rtol=1e-12)

    def test_circular_orbit_speed_matches_scenario(self):
        """The reference circular orbit speed at 1.2 R."""
        assert_allclose(circular_velocity(1.2 * MARS_RADIUS), 3247.087385863725, rtol=1e-9)

    def test_escape_velocity(self):
        r = MARS_RADIUS
        assert_allclose(escape_velocity(r), np.sqrt(2.0) * circular_velocity(r), rtol=1e-12)
        assert 5000.0 < escape_velocity(r) < 5050.0

    def test_orbital_period(self):
        r = 1.2 * MARS_RADIUS
        assert_allclose(orbital_period(r), 2 * np.pi * r / circular_velocity(r), rtol=1e-12)

    def test_circular_orbit_energy(self):
        """Specific energy of a circular orbit is -mu / 2r."""
        r = 1.2 * MARS_RADIUS
        position = np.array([r, 0.0, 0.0])
        velocity = np.array([0.0, circular_velocity(r), 0.0])
        assert_allclose(specific_orbital_energy(position, velocity), -MU_MARS / (2 * r), rtol=1e-12)

    def test_potential(self):
        position = np.array([0.0, MARS_RADIUS, 0.0])
        assert_allclose(MarsGravity().potential(position), -MU_MARS / MARS_RADIUS)
