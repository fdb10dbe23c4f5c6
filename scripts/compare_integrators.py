#!/usr/bin/env python
"""Example: Euler vs Verlet on a circular orbit.

Propagates the circular orbit scenario for several periods with each
integration method and reports how far the orbital radius drifts. Euler
spirals outward; Verlet holds the radius to within metres.

Usage:
    uv run python scripts/compare_integrators.py
"""

import numpy as np

from lander.config import IntegrationMethod, SimConfig
from lander.environment.gravity import orbital_period, specific_orbital_energy
from lander.plotting import plot_orbit
from lander.simulation import SimulationResult, Simulator

SCENARIO = 0
N_ORBITS = 3


def propagate(method: IntegrationMethod) -> SimulationResult:
    sim = Simulator.from_scenario(SCENARIO, SimConfig(method=method))
    period = orbital_period(sim.state.radius)
    sim.run(N_ORBITS * period, progress=True)
    return SimulationResult.from_simulator(sim)


def summarize(method: IntegrationMethod, result: SimulationResult) -> None:
    r = result.radius
    energy_start = specific_orbital_energy(result.position[0], result.velocity[0])
    energy_end = specific_orbital_energy(result.position[-1], result.velocity[-1])

    print(f"\n{method.name}:")
    print(f"  Radius drift: {r[-1] - r[0]:+.1f} m")
    print(f"  Radius range: {np.ptp(r):.1f} m")
    print(f"  Energy drift: {(energy_end - energy_start) / abs(energy_start):+.2e} (relative)")


def main():
    print("=" * 60)
    print("INTEGRATOR COMPARISON")
    print("=" * 60)
    print(f"\nCircular orbit at 1.2 R, {N_ORBITS} periods, dt = 0.1 s")

    results = {}
    for method in IntegrationMethod:
        results[method] = propagate(method)
        summarize(method, results[method])

    return results


if __name__ == "__main__":
    from pathlib import Path

    results = main()

    output_dir = Path("outputs")
    output_dir.mkdir(exist_ok=True)
    for method, result in results.items():
        output = output_dir / f"orbit_{method.name.lower()}.png"
        plot_orbit(result, title=f"Circular Orbit ({method.name.title()})").savefig(output, dpi=150)
        print(f"Saved {output}")
