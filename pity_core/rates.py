"""Pity rate model: per-pull success probability from the current pity counter."""

from __future__ import annotations

from typing import Optional

from .models import GachaSystemConfig


def pity_rate(pity_counter: int, config: GachaSystemConfig, *, clamp: bool = False) -> float:
    """Return the success probability of the pull numbered ``pity_counter``.

    Parameters
    ----------
    pity_counter:
        Pulls since the last generic pity reset, including the current pull.
    config:
        Banner rules supplying the base rate and the soft-pity ramp.
    clamp:
        Limit the result to ``[0.0, 1.0]``. The simulator leaves this off;
        hard pity bounds the pull count, not the probability.
    """

    rate = config.base_rate
    if pity_counter > config.soft_pity_start:
        rate += (pity_counter - config.soft_pity_start) * config.soft_pity_increment
    if clamp:
        return min(1.0, max(0.0, rate))
    return rate


def rate_curve(config: GachaSystemConfig, max_pull: Optional[int] = None) -> list[float]:
    """Return clamped rates for pity counters ``1..max_pull`` (defaults to hard pity)."""

    limit = config.hard_pity if max_pull is None else max_pull
    return [pity_rate(counter, config, clamp=True) for counter in range(1, limit + 1)]
