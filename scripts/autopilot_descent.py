#!/usr/bin/env python
"""Example: Autopilot descent from 10 km.

Loads the "descent from 10km" scenario, hands the throttle to the
proportional autopilot and flies until the lander reaches the surface.
The attitude stabilizer keeps the engine pointing down the whole way.

Usage:
    uv run python scripts/autopilot_descent.py
"""

import logging
from pathlib import Path

from lander.plotting import plot_descent
from lander.simulation import SimulationResult, Simulator, scenario_description

SCENARIO = 1
MAX_TIME = 2000.0  # [s]
SAFE_LANDING_SPEED = 1.0  # [m/s]


def run_descent() -> Simulator:
    """Fly the descent scenario under autopilot until touchdown."""
    print("=" * 60)
    print("AUTOPILOT DESCENT")
    print("=" * 60)

    sim = Simulator.from_scenario(SCENARIO)
    sim.state.autopilot_enabled = True

    print(f"\nScenario {SCENARIO}: {scenario_description(SCENARIO)}")
    print(f"  Initial altitude: {sim.altitude:.0f} m")
    print(f"  Time step: {sim.state.delta_t} s")
    print(f"  Gains: {sim.autopilot.gains}")

    print("\nRunning simulation...")
    print("-" * 60)
    print(f"{'Time':>8} {'Alt':>10} {'Rate':>9} {'Throttle':>9} {'Fuel':>7}")

    last_print_time = -50.0
    while sim.altitude > 0.0 and sim.time < MAX_TIME:
        sim.step()

        if sim.time - last_print_time >= 50.0:
            print(
                f"{sim.time:7.1f}s {sim.altitude:9.1f}m {sim.descent_rate:8.2f}m/s "
                f"{sim.state.throttle:9.3f} {sim.state.fuel * 100:6.1f}%"
            )
            last_print_time = sim.time

    print("-" * 60)
    print("\nFINAL STATE:")
    print(f"  Time: {sim.time:.1f} s")
    print(f"  Altitude: {sim.altitude:.2f} m")
    print(f"  Descent rate: {sim.descent_rate:.2f} m/s")
    print(f"  Fuel remaining: {sim.state.fuel * 100:.1f}%")

    if sim.altitude <= 0.0 and abs(sim.descent_rate) < SAFE_LANDING_SPEED:
        print("\n✓ Safe landing")
    elif sim.altitude <= 0.0:
        print(f"\n✗ Hard landing at {abs(sim.descent_rate):.1f} m/s")
    else:
        print(f"\n✗ Still airborne after {MAX_TIME:.0f} s")

    return sim


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    sim = run_descent()

    result = SimulationResult.from_simulator(sim)
    output = Path("outputs/autopilot_descent.png")
    output.parent.mkdir(exist_ok=True)
    plot_descent(result, title="Autopilot Descent from 10 km").savefig(output, dpi=150)
    print(f"\nSaved telemetry plot to {output}")
