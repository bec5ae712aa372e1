"""Dataclasses shared across the simulation, distribution, and statistics modules."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GachaSystemConfig:
    """Pity rules of a single banner.

    The engine assumes ``soft_pity_start < hard_pity <= featured_guarantee``
    but never enforces it; see ``data.pity_order_issues`` for the checks the
    presentation layer runs.
    """

    base_rate: float
    soft_pity_start: int
    soft_pity_increment: float
    hard_pity: int
    featured_guarantee: int
    has_fifty_fifty: bool
    name: str = "Custom"


@dataclass(frozen=True)
class SimParams:
    """Configuration plus the number of independent trials to run."""

    config: GachaSystemConfig
    sim_count: int


@dataclass(frozen=True)
class TrialOutcome:
    """Result of one player's pull sequence."""

    pulls: int
    won_at_guarantee: bool


SimulationBatch = tuple[TrialOutcome, ...]


@dataclass(frozen=True)
class DistributionPoint:
    """Number of trials that finished in exactly ``pull_count`` pulls."""

    pull_count: int
    count: int


@dataclass(frozen=True)
class CumulativePoint:
    """Percentage of trials finished by or before ``pull_count``."""

    pull_count: int
    probability: float


@dataclass(frozen=True)
class PercentileBracket:
    """Nearest-rank pull count for a luck bracket."""

    percentile: float
    label: str
    pulls: int


@dataclass(frozen=True)
class SummaryStats:
    """Aggregated Monte Carlo metrics for a simulated batch."""

    avg: float
    max: int
    min: int
    guarantee_rate: float
    current_confidence: float
    avg_cost: float
    max_cost: float
