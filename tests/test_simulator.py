"""Unit tests for the step-driven Simulator.

Tests the tick order, fuel and parachute bookkeeping, and result export.
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest
from numpy.testing import assert_allclose

from lander.config import IntegrationMethod, SimConfig
from lander.dynamics.forces import ForceModel
from lander.dynamics.integrators import Integrator, taylor_step
from lander.dynamics.state import LanderState, ParachuteStatus
from lander.environment.gravity import MARS_RADIUS
from lander.errors import PreconditionError, ScenarioIndexError
from lander.gnc.control import Autopilot
from lander.plotting import plot_descent, plot_orbit
from lander.simulation import SCENARIOS, SimulationResult, Simulator, initialize_scenario, tick

# =============================================================================
# Tick Tests
# =============================================================================


class TestTick:
    """Test a single simulation step."""

    def test_rejects_planet_centre(self):
        state = LanderState.at_rest(np.zeros(3))
        integrator = Integrator()

        with pytest.raises(PreconditionError):
            tick(state, integrator)

        assert np.array_equal(state.position, np.zeros(3))
        assert state.time == 0.0
        assert not integrator.initialized

    def test_rejects_nan(self):
        state = LanderState(
            position=np.array([MARS_RADIUS, np.nan, 0.0]),
            velocity=np.zeros(3),
            orientation=np.zeros(3),
        )
        with pytest.raises(PreconditionError):
            tick(state, Integrator())
        assert state.time == 0.0

    def test_first_tick_is_bootstrap(self):
        """The first Verlet tick equals a Taylor step with the same acceleration."""
        sim = Simulator.from_scenario(4)
        start = sim.get_state()
        acceleration = sim.model.acceleration(start)
        expected_position, expected_velocity = taylor_step(
            start.position, start.velocity, acceleration, start.delta_t,
        )

        sim.step()

        assert np.array_equal(sim.state.position, expected_position)
        assert np.array_equal(sim.state.velocity, expected_velocity)
        assert_allclose(sim.time, 0.1)

    def test_reinitialized_scenario_bootstraps(self):
        """Loading a new scenario into a running state starts a fresh run."""
        model = ForceModel()
        state = LanderState.at_rest(np.array([0.0, 0.0, MARS_RADIUS]))
        integrator = Integrator()
        initialize_scenario(0, state)
        for _ in range(5):
            tick(state, integrator, model)

        initialize_scenario(1, state)
        state.time = 0.0
        start = state.copy()
        expected_position, expected_velocity = taylor_step(
            start.position, start.velocity, model.acceleration(start), start.delta_t,
        )
        tick(state, integrator, model)

        assert np.array_equal(state.position, expected_position)
        assert np.array_equal(state.velocity, expected_velocity)
        assert state.speed < 1.0

    def test_out_of_range_throttle_write_is_clamped(self):
        """A direct throttle write cannot exceed full thrust."""
        model = ForceModel()
        state = SCENARIOS[0].to_state()
        state.throttle = 5.0
        assert_allclose(np.linalg.norm(model.breakdown(state).thrust), model.vehicle.max_thrust)

        tick(state, Integrator(), model)

        assert state.throttle == 1.0
        assert 0.0 <= state.fuel <= 1.0

    def test_time_advances(self):
        sim = Simulator.from_scenario(0)
        for _ in range(25):
            sim.step()
        assert_allclose(sim.time, 2.5, rtol=1e-12)

    def test_default_model(self):
        state = LanderState(
            position=np.array([0.0, -(MARS_RADIUS + 1000.0), 0.0]),
            velocity=np.zeros(3),
            orientation=np.zeros(3),
        )
        tick(state, Integrator())
        # Gravity pulls toward the centre, i.e. +y here
        assert state.velocity[1] > 0.0


# =============================================================================
# Fuel Tests
# =============================================================================


class TestFuel:
    """Test propellant consumption."""

    def test_full_throttle_burn(self):
        """0.5 l/s from a 100 l tank for 1 s."""
        sim = Simulator.from_scenario(0)
        sim.set_throttle(1.0)
        for _ in range(10):
            sim.step()
        assert_allclose(sim.state.fuel, 0.995, rtol=1e-12)

    def test_no_burn_when_disabled(self):
        sim = Simulator.from_scenario(0, SimConfig(burn_fuel=False))
        sim.set_throttle(1.0)
        for _ in range(10):
            sim.step()
        assert sim.state.fuel == 1.0

    def test_fuel_never_negative(self):
        sim = Simulator.from_scenario(0)
        sim.state.fuel = 0.0001
        sim.set_throttle(1.0)
        for _ in range(5):
            sim.step()
        assert sim.state.fuel == 0.0

    def test_mass_drops_with_fuel(self):
        sim = Simulator.from_scenario(0)
        assert_allclose(sim.mass, 200.0)
        sim.state.fuel = 0.5
        assert_allclose(sim.mass, 150.0)


# =============================================================================
# Controller Tests
# =============================================================================


class TestControllers:
    """Test autopilot and stabilizer wiring."""

    def test_autopilot_sets_throttle_after_step(self):
        sim = Simulator.from_scenario(1)
        sim.state.autopilot_enabled = True
        for _ in range(200):
            sim.step()
            assert sim.state.throttle == Autopilot().compute(sim.state)

    def test_autopilot_off_leaves_throttle(self):
        sim = Simulator.from_scenario(1)
        sim.set_throttle(0.3)
        sim.step()
        assert sim.state.throttle == 0.3

    def test_stabilized_scenario_stays_upright(self):
        sim = Simulator.from_scenario(1)
        for _ in range(10):
            sim.step()
        up = sim.state.up_direction
        assert_allclose(up, sim.state.position / sim.state.radius, atol=1e-10)

    def test_autopilot_slows_descent(self):
        """With the autopilot flying, the lander falls slower than in free fall."""
        free = Simulator.from_scenario(1)
        flown = Simulator.from_scenario(1)
        for sim in (free, flown):
            # 2 km up, falling at 100 m/s
            sim.state.position = np.array([0.0, -(MARS_RADIUS + 2000.0), 0.0])
            sim.state.velocity = np.array([0.0, 100.0, 0.0])
        flown.state.autopilot_enabled = True
        flown.step()
        assert flown.state.throttle == 1.0

        free.run(10.0)
        flown.run(10.0)

        assert flown.descent_rate > free.descent_rate
        assert flown.altitude > free.altitude


# =============================================================================
# Parachute Tests
# =============================================================================


class TestParachute:
    """Test parachute deployment and loss."""

    def test_deploy_once(self):
        sim = Simulator.from_scenario(1)
        assert sim.deploy_parachute()
        assert sim.state.parachute_status == ParachuteStatus.DEPLOYED
        assert not sim.deploy_parachute()

    def test_lost_at_orbital_speed(self):
        """Deploying at 4 km/s inside the atmosphere tears the canopy off."""
        sim = Simulator.from_scenario(4)
        assert sim.deploy_parachute()

        sim.step()

        assert sim.state.parachute_status == ParachuteStatus.LOST
        assert not sim.deploy_parachute()

    def test_survives_slow_descent(self):
        sim = Simulator.from_scenario(1)
        sim.deploy_parachute()
        for _ in range(100):
            sim.step()
        assert sim.state.parachute_status == ParachuteStatus.DEPLOYED

    def test_slows_descent(self):
        free = Simulator.from_scenario(1)
        chute = Simulator.from_scenario(1)
        chute.deploy_parachute()

        free.run(60.0)
        chute.run(60.0)

        assert chute.descent_rate > free.descent_rate


# =============================================================================
# Simulator Tests
# =============================================================================


class TestSimulator:
    """Test scenario loading and run management."""

    def test_from_scenario(self):
        sim = Simulator.from_scenario(1)
        assert_allclose(sim.altitude, 10000.0)
        assert sim.descent_rate == 0.0
        assert sim.time == 0.0

    def test_out_of_range_scenario(self):
        with pytest.raises(ScenarioIndexError):
            Simulator.from_scenario(10)

    def test_load_scenario_resets_run(self):
        sim = Simulator.from_scenario(0)
        sim.set_throttle(1.0)
        for _ in range(5):
            sim.step()
        assert sim.integrator.initialized

        assert sim.load_scenario(1)

        assert sim.time == 0.0
        assert sim.state.fuel == 1.0
        assert sim.state.throttle == 0.0
        assert not sim.integrator.initialized
        assert len(sim.get_history()) == 1

    def test_reserved_scenario_keeps_position(self):
        sim = Simulator.from_scenario(1)
        sim.step()
        position = sim.state.position.copy()

        assert not sim.load_scenario(8)

        assert np.array_equal(sim.state.position, position)
        assert sim.time == 0.0
        assert not sim.integrator.initialized

    def test_get_state_is_copy(self):
        sim = Simulator.from_scenario(1)
        state = sim.get_state()
        state.position[0] = 123.0
        assert sim.state.position[0] == 0.0

    def test_run_duration(self):
        sim = Simulator.from_scenario(0)
        sim.run(10.0)
        assert_allclose(sim.time, 10.0, rtol=1e-9)
        assert len(sim.get_history()) == 101

    def test_run_with_integer_duration(self):
        sim = Simulator.from_scenario(0)
        sim.run(1)
        assert_allclose(sim.time, 1.0, rtol=1e-9)

    def test_run_with_progress(self):
        sim = Simulator.from_scenario(0)
        sim.run(1.0, progress=True)
        assert_allclose(sim.time, 1.0, rtol=1e-9)

    def test_no_history(self):
        sim = Simulator.from_scenario(0, SimConfig(record_history=False))
        sim.run(1.0)
        assert sim.get_history() == []

    def test_euler_config(self):
        sim = Simulator.from_scenario(0, SimConfig(method=IntegrationMethod.EULER))
        assert sim.integrator.method == IntegrationMethod.EULER
        sim.run(1.0)
        assert sim.altitude > 0.0


# =============================================================================
# Results Tests
# =============================================================================


class TestSimulationResult:
    """Test recorded results and export."""

    @pytest.fixture
    def result(self):
        sim = Simulator.from_scenario(1)
        sim.state.autopilot_enabled = True
        sim.run(20.0)
        return SimulationResult.from_simulator(sim)

    def test_arrays(self, result):
        n = len(result.states)
        assert n == 201
        assert result.position.shape == (n, 3)
        assert result.velocity.shape == (n, 3)
        assert_allclose(result.altitude[0], 10000.0)
        assert result.altitude[-1] < result.altitude[0]
        assert_allclose(result.time[-1], 20.0, rtol=1e-9)

    def test_to_dataframe(self, result):
        df = result.to_dataframe()
        assert df.height == len(result.states)
        assert {"time", "altitude", "throttle", "fuel", "parachute"} <= set(df.columns)
        assert df["parachute"][0] == "not_deployed"

    def test_plot_descent(self, result):
        fig = plot_descent(result)
        assert len(fig.axes) == 4

    def test_plot_orbit(self):
        sim = Simulator.from_scenario(0)
        sim.run(60.0)
        fig = plot_orbit(SimulationResult.from_simulator(sim))
        assert len(fig.axes) == 1


def test_force_model_shared_with_simulator():
    """The simulator builds its force model from its config."""
    sim = Simulator.from_scenario(0)
    assert isinstance(sim.model, ForceModel)
    assert sim.model.vehicle is sim.config.vehicle
