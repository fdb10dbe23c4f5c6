"""Exceptions raised by the lander simulation.

All errors derive from :class:`LanderError`, itself a ``ValueError``, so
callers that only care about bad input can keep catching ``ValueError``.
"""


class LanderError(ValueError):
    """Base class for lander simulation errors."""


class PreconditionError(LanderError):
    """State cannot be advanced (lander at the planet centre, NaN/Inf values)."""


class ScenarioIndexError(LanderError):
    """Scenario index outside the catalogue."""

    def __init__(self, index: int, n_scenarios: int) -> None:
        self.index = index
        self.n_scenarios = n_scenarios
        super().__init__(
            f"Scenario index {index} out of range, expected 0..{n_scenarios - 1}"
        )


class ConfigurationError(LanderError):
    """Configuration value outside physical sense."""
