"""Summary statistics, luck brackets, and stash/cost projections."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import Final, Optional

from .distribution import pulls_of, round_half_up
from .models import PercentileBracket, SimulationBatch, SummaryStats

LUCK_BRACKETS: Final[list[tuple[float, str]]] = [
    (0.10, "Top 10% (Insane Luck)"),
    (0.25, "Top 25% (Lucky)"),
    (0.50, "50% (Average)"),
    (0.75, "Bottom 25% (Unlucky)"),
    (0.90, "Bottom 10% (Cursed)"),
]


def success_probability(pulls: Sequence[int], stash: int) -> float:
    """Return the percentage of trials finished within ``stash`` pulls (unrounded)."""

    if not pulls:
        return 0.0
    within = sum(1 for count in pulls if count <= stash)
    return 100.0 * within / len(pulls)


def nearest_rank(sorted_pulls: Sequence[int], percentile: float) -> int:
    """Return ``sorted_pulls[floor((n - 1) * percentile)]`` without interpolation."""

    return sorted_pulls[int((len(sorted_pulls) - 1) * percentile)]


def percentile_brackets(pulls: Sequence[int]) -> list[PercentileBracket]:
    """Return the luck bracket table, empty when there are no trials."""

    if not pulls:
        return []
    ordered = sorted(pulls)
    return [
        PercentileBracket(percentile=p, label=label, pulls=nearest_rank(ordered, p))
        for p, label in LUCK_BRACKETS
    ]


def _user_metrics(
    pulls: Sequence[int], stash: int, cost_per_pull: float
) -> tuple[float, float, float]:
    mean = sum(pulls) / len(pulls)
    return (
        round_half_up(success_probability(pulls, stash), 1),
        round_half_up(mean * cost_per_pull, 2),
        round_half_up(max(pulls) * cost_per_pull, 2),
    )


def compute_summary(
    batch: SimulationBatch,
    stash: int,
    cost_per_pull: float,
) -> Optional[SummaryStats]:
    """Derive summary scalars from a finished batch.

    Parameters
    ----------
    batch:
        Trial outcomes returned by ``run_monte_carlo``.
    stash:
        Pulls the player currently has available.
    cost_per_pull:
        Currency cost of a single pull.

    Returns
    -------
    Optional[SummaryStats]
        ``None`` for an empty batch, since no statistic is defined.
    """

    if not batch:
        return None
    pulls = pulls_of(batch)
    total = len(pulls)
    guaranteed = sum(1 for outcome in batch if outcome.won_at_guarantee)
    confidence, avg_cost, max_cost = _user_metrics(pulls, stash, cost_per_pull)
    return SummaryStats(
        avg=round_half_up(sum(pulls) / total, 1),
        max=max(pulls),
        min=min(pulls),
        guarantee_rate=round_half_up(100.0 * guaranteed / total, 1),
        current_confidence=confidence,
        avg_cost=avg_cost,
        max_cost=max_cost,
    )


def refresh_user_metrics(
    summary: SummaryStats,
    batch: SimulationBatch,
    stash: int,
    cost_per_pull: float,
) -> SummaryStats:
    """Recompute confidence and cost fields after the stash or pull cost changed."""

    if not batch:
        return summary
    confidence, avg_cost, max_cost = _user_metrics(pulls_of(batch), stash, cost_per_pull)
    return replace(
        summary,
        current_confidence=confidence,
        avg_cost=avg_cost,
        max_cost=max_cost,
    )
