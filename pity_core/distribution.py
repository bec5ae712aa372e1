"""Histogram and cumulative success tables built from raw pull counts."""

from __future__ import annotations

from bisect import bisect_right
from collections import Counter
from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from .models import CumulativePoint, DistributionPoint, SimulationBatch


def round_half_up(value: float, places: int) -> float:
    """Round to ``places`` decimals with exact halves rounded away from zero."""

    quantum = Decimal(10) ** -places
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def pulls_of(batch: SimulationBatch) -> list[int]:
    """Return the pull count of every trial, dropping the guarantee flag."""

    return [outcome.pulls for outcome in batch]


def build_pdf(pulls: Iterable[int]) -> list[DistributionPoint]:
    """Count trials per exact pull count, ascending, without zero-filled gaps."""

    counts = Counter(pulls)
    return [DistributionPoint(pull_count=key, count=counts[key]) for key in sorted(counts)]


def build_cdf(pdf: Sequence[DistributionPoint], sim_count: int) -> list[CumulativePoint]:
    """Convert an ascending PDF into cumulative success percentages."""

    if sim_count <= 0:
        return []
    running_total = 0
    cdf: list[CumulativePoint] = []
    for point in pdf:
        running_total += point.count
        cdf.append(
            CumulativePoint(
                pull_count=point.pull_count,
                probability=round_half_up(100 * running_total / sim_count, 2),
            )
        )
    return cdf


def build_distribution(
    pulls: Sequence[int],
) -> tuple[list[DistributionPoint], list[CumulativePoint]]:
    """Return the (PDF, CDF) tables for the supplied pull counts.

    Parameters
    ----------
    pulls:
        Pull count of every trial in the batch. Order is irrelevant.

    Returns
    -------
    tuple[list[DistributionPoint], list[CumulativePoint]]
        Both tables ascend by pull count; absent pull counts mean zero trials.
    """

    pdf = build_pdf(pulls)
    return pdf, build_cdf(pdf, len(pulls))


def probability_at(cdf: Sequence[CumulativePoint], pull_count: int) -> float:
    """Return the cumulative success percentage at an arbitrary pull count."""

    keys = [point.pull_count for point in cdf]
    index = bisect_right(keys, pull_count)
    if index == 0:
        return 0.0
    return cdf[index - 1].probability
