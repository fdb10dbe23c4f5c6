"""Simulation module for the lander.

Provides the tick function, the step-driven simulator and the scenario
catalogue.

Example:
    >>> from lander.simulation import Simulator, SimulationResult
    >>>
    >>> sim = Simulator.from_scenario(5)
    >>> sim.state.autopilot_enabled = True
    >>> sim.run(duration=600.0, progress=True)
    >>> SimulationResult.from_simulator(sim).to_dataframe()
"""

from lander.simulation.scenarios import (
    N_SCENARIOS,
    SCENARIOS,
    Scenario,
    get_scenario,
    initialize_scenario,
    list_scenarios,
    scenario_description,
)
from lander.simulation.simulator import (
    SimulationResult,
    Simulator,
    burn_fuel,
    check_parachute,
    tick,
)

__all__ = [
    # Scenarios
    "N_SCENARIOS",
    "SCENARIOS",
    "Scenario",
    "get_scenario",
    "initialize_scenario",
    "list_scenarios",
    "scenario_description",
    # Simulator
    "SimulationResult",
    "Simulator",
    "burn_fuel",
    "check_parachute",
    "tick",
]
