"""Visualization of lander runs.

Provides plotting functions for:
- Descent telemetry (altitude, radial velocity, throttle, fuel vs time)
- Orbit ground tracks projected onto a coordinate plane

All plots use matplotlib with a consistent style.
"""

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Circle

from lander.simulation.simulator import SimulationResult
from lander.typecheck import beartype

# =============================================================================
# Plot Style Configuration
# =============================================================================

COLORS = {
    "primary": "#2E86AB",  # Steel blue
    "secondary": "#A23B72",  # Berry
    "accent": "#F18F01",  # Orange
    "planet": "#C1440E",  # Mars red
    "text": "#333333",
}

DEFAULT_FIGSIZE = (12.0, 8.0)


def _setup_style() -> None:
    plt.rcParams.update(
        {
            "font.family": "sans-serif",
            "font.size": 11,
            "axes.titlesize": 13,
            "axes.labelsize": 11,
            "axes.edgecolor": COLORS["text"],
            "axes.labelcolor": COLORS["text"],
            "legend.fontsize": 10,
            "grid.alpha": 0.5,
        }
    )


# =============================================================================
# Descent Telemetry
# =============================================================================


@beartype
def plot_descent(
    result: SimulationResult,
    title: str = "Descent",
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
) -> Figure:
    """Plot altitude, radial velocity, throttle and fuel against time.

    Args:
        result: Recorded run
        title: Figure title
        figsize: Figure size

    Returns:
        matplotlib Figure with four subplots
    """
    _setup_style()

    t = result.time
    position = result.position
    radius = result.radius
    radial_velocity = np.einsum("ij,ij->i", position, result.velocity) / radius

    fig, axes = plt.subplots(2, 2, figsize=figsize, sharex=True)
    (ax_alt, ax_rate), (ax_thr, ax_fuel) = axes

    ax_alt.plot(t, result.altitude / 1000, color=COLORS["primary"], linewidth=2)
    ax_alt.set_ylabel("Altitude (km)")
    ax_alt.set_title("Altitude")

    ax_rate.plot(t, radial_velocity, color=COLORS["secondary"], linewidth=2)
    ax_rate.axhline(y=0.0, color=COLORS["text"], linewidth=0.8)
    ax_rate.set_ylabel("Radial velocity (m/s)")
    ax_rate.set_title("Descent Rate")

    ax_thr.plot(t, result.throttle, color=COLORS["accent"], linewidth=2)
    ax_thr.set_ylim(-0.05, 1.05)
    ax_thr.set_ylabel("Throttle")
    ax_thr.set_title("Throttle")

    ax_fuel.plot(t, result.fuel * 100, color=COLORS["primary"], linewidth=2)
    ax_fuel.set_ylim(0, 105)
    ax_fuel.set_ylabel("Fuel (%)")
    ax_fuel.set_title("Fuel")

    for ax in axes.flat:
        ax.grid(True, alpha=0.3)
    for ax in axes[1]:
        ax.set_xlabel("Time (s)")

    fig.suptitle(title, fontsize=14)
    fig.tight_layout()
    return fig


# =============================================================================
# Orbit Plot
# =============================================================================


@beartype
def plot_orbit(
    result: SimulationResult,
    plane: tuple[int, int] = (0, 1),
    title: str = "Trajectory",
    figsize: tuple[float, float] = (8.0, 8.0),
) -> Figure:
    """Plot the trajectory projected onto a coordinate plane.

    Args:
        result: Recorded run
        plane: Indices of the two position axes to plot (0=x, 1=y, 2=z)
        title: Figure title
        figsize: Figure size

    Returns:
        matplotlib Figure
    """
    _setup_style()

    labels = ("x", "y", "z")
    i, j = plane
    position_km = result.position / 1000

    fig, ax = plt.subplots(figsize=figsize)
    ax.add_patch(Circle(
        (0.0, 0.0), result.planet_radius / 1000,
        color=COLORS["planet"], alpha=0.6, label="Mars",
    ))
    ax.plot(position_km[:, i], position_km[:, j], color=COLORS["primary"], linewidth=1.5, label="Lander")
    ax.plot(position_km[0, i], position_km[0, j], "o", color=COLORS["accent"], label="Start")

    ax.set_aspect("equal")
    ax.set_xlabel(f"{labels[i]} (km)")
    ax.set_ylabel(f"{labels[j]} (km)")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper right")

    fig.tight_layout()
    return fig
