"""Exceptions raised by the pity simulator."""

from __future__ import annotations


class PitySimulatorError(ValueError):
    """Base class for simulator precondition violations."""


class InvalidSampleSize(PitySimulatorError):
    """Raised when a batch is requested with a non-positive trial count."""

    def __init__(self, sim_count: int) -> None:
        super().__init__(f"Simulation count must be positive, received {sim_count}")
        self.sim_count = sim_count


class UnknownPreset(PitySimulatorError):
    """Raised when a preset name is missing from the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown banner preset '{name}'")
        self.name = name
