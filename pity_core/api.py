"""High-level entry points used by the UI and callers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from time import perf_counter
from typing import Optional

from .distribution import build_distribution, pulls_of
from .errors import InvalidSampleSize
from .models import (
    CumulativePoint,
    DistributionPoint,
    GachaSystemConfig,
    PercentileBracket,
    SimParams,
    SimulationBatch,
    SummaryStats,
)
from .simulation import run_monte_carlo
from .summary import compute_summary, percentile_brackets, refresh_user_metrics

logger = logging.getLogger(__name__)


def check_sample_size(sim_count: int) -> int:
    """Return ``sim_count`` unchanged, rejecting non-positive values.

    Raises
    ------
    InvalidSampleSize
        If ``sim_count`` is zero or negative.
    """

    if sim_count <= 0:
        raise InvalidSampleSize(sim_count)
    return sim_count


@dataclass(frozen=True)
class SimulationReport:
    """Bundle containing the raw batch and every derived table."""

    params: SimParams
    batch: SimulationBatch
    pdf: list[DistributionPoint]
    cdf: list[CumulativePoint]
    summary: Optional[SummaryStats]
    brackets: list[PercentileBracket]
    stash: int
    cost_per_pull: float
    compute_seconds: float

    @property
    def config(self) -> GachaSystemConfig:
        return self.params.config

    @property
    def pulls(self) -> list[int]:
        return pulls_of(self.batch)


def simulate_banner(
    config: GachaSystemConfig,
    sim_count: int,
    stash: int,
    cost_per_pull: float,
    seed: Optional[int] = None,
    workers: int = 1,
) -> SimulationReport:
    """Run the Monte Carlo batch and derive distribution tables and statistics.

    Parameters
    ----------
    config:
        Banner rules to simulate.
    sim_count:
        Number of independent trials.
    stash:
        Pulls currently available to the player.
    cost_per_pull:
        Currency cost of one pull.
    seed:
        Seed forwarded to the batch generator (``None`` for a fresh one).
    workers:
        Worker processes used by the engine.

    Raises
    ------
    InvalidSampleSize
        If ``sim_count`` is not positive.
    """

    params = SimParams(config=config, sim_count=check_sample_size(sim_count))

    compute_start = perf_counter()
    batch = run_monte_carlo(config, params.sim_count, seed=seed, workers=workers)
    pulls = pulls_of(batch)
    pdf, cdf = build_distribution(pulls)
    summary = compute_summary(batch, stash, cost_per_pull)
    brackets = percentile_brackets(pulls)
    compute_seconds = perf_counter() - compute_start

    logger.info(
        "Banner '%s': %s trials, %.3f s", config.name, params.sim_count, compute_seconds
    )
    return SimulationReport(
        params=params,
        batch=batch,
        pdf=pdf,
        cdf=cdf,
        summary=summary,
        brackets=brackets,
        stash=stash,
        cost_per_pull=cost_per_pull,
        compute_seconds=compute_seconds,
    )


def update_user_inputs(
    report: SimulationReport,
    stash: int,
    cost_per_pull: float,
) -> SimulationReport:
    """Return ``report`` with stash-dependent and cost-dependent fields refreshed.

    The simulation is never rerun; only the existing batch is rescanned.
    """

    if report.summary is None:
        return replace(report, stash=stash, cost_per_pull=cost_per_pull)
    summary = refresh_user_metrics(report.summary, report.batch, stash, cost_per_pull)
    return replace(report, summary=summary, stash=stash, cost_per_pull=cost_per_pull)
