"""Trial state machine and Monte Carlo batch driver."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from enum import Enum
from time import perf_counter
from typing import Optional, Protocol

from .models import GachaSystemConfig, SimulationBatch, TrialOutcome
from .rates import pity_rate

logger = logging.getLogger(__name__)

FIFTY_FIFTY_WIN_CHANCE = 0.5


class RandomSource(Protocol):
    """Anything exposing ``random()`` on ``[0, 1)``, e.g. ``random.Random``."""

    def random(self) -> float: ...


class PullPhase(Enum):
    PULLING = "pulling"
    DONE = "done"


@dataclass
class TrialState:
    """Counters of one trial in progress.

    ``total_pulls`` and ``featured_counter`` never reset. ``pity_counter``
    drops back to zero whenever a generic success loses the 50/50.
    """

    total_pulls: int = 0
    pity_counter: int = 0
    featured_counter: int = 0
    phase: PullPhase = PullPhase.PULLING
    won_at_guarantee: bool = False

    def outcome(self) -> TrialOutcome:
        if self.phase is not PullPhase.DONE:
            raise RuntimeError("Trial has not obtained the featured outcome yet.")
        return TrialOutcome(pulls=self.total_pulls, won_at_guarantee=self.won_at_guarantee)


def advance(state: TrialState, config: GachaSystemConfig, rng: RandomSource) -> TrialState:
    """Execute a single pull, mutating and returning ``state``.

    Parameters
    ----------
    state:
        Trial counters; must still be in ``PullPhase.PULLING``.
    config:
        Banner rules.
    rng:
        Source for the success roll and, when needed, the separate 50/50 roll.
    """

    if state.phase is PullPhase.DONE:
        return state

    state.total_pulls += 1
    state.pity_counter += 1
    state.featured_counter += 1

    current_rate = pity_rate(state.pity_counter, config)
    roll = rng.random()

    hit_hard_pity = state.pity_counter >= config.hard_pity
    hit_featured_guarantee = state.featured_counter >= config.featured_guarantee

    if not (roll < current_rate or hit_hard_pity or hit_featured_guarantee):
        return state

    if hit_featured_guarantee:
        is_featured = True
    elif config.has_fifty_fifty:
        is_featured = rng.random() < FIFTY_FIFTY_WIN_CHANCE
    else:
        is_featured = True

    if is_featured:
        state.phase = PullPhase.DONE
        state.won_at_guarantee = hit_featured_guarantee
    else:
        state.pity_counter = 0
    return state


def simulate_trial(config: GachaSystemConfig, rng: RandomSource) -> TrialOutcome:
    """Pull until the featured outcome is obtained and return the trial record."""

    state = TrialState()
    while state.phase is PullPhase.PULLING:
        advance(state, config, rng)
    return state.outcome()


def _simulate_chunk(config: GachaSystemConfig, count: int, seed: int) -> list[TrialOutcome]:
    """Worker entry point: run ``count`` trials with a generator of its own."""

    rng = random.Random(seed)
    return [simulate_trial(config, rng) for _ in range(count)]


def _split_counts(total: int, parts: int) -> list[int]:
    base, extra = divmod(total, parts)
    return [base + 1 if index < extra else base for index in range(parts) if base or index < extra]


def run_monte_carlo(
    config: GachaSystemConfig,
    sim_count: int,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    workers: int = 1,
    should_stop: Optional[Callable[[], bool]] = None,
) -> SimulationBatch:
    """Run ``sim_count`` independent trials and return them in trial order.

    Parameters
    ----------
    config:
        Banner rules shared read-only by every trial.
    sim_count:
        Number of trials. Non-positive values yield an empty batch.
    seed:
        Seed for the batch generator. Seeding is per batch: one generator
        drives every trial sequentially, or seeds one generator per chunk
        when ``workers > 1``.
    rng:
        Explicit generator for sequential runs; overrides ``seed``.
    workers:
        Number of worker processes. ``1`` runs in the calling process.
    should_stop:
        Polled between trials in sequential mode; returning True ends the
        batch early with the trials completed so far.
    """

    if sim_count <= 0:
        logger.warning("Skipping simulation: non-positive trial count %s", sim_count)
        return ()

    start = perf_counter()
    generator = rng if rng is not None else random.Random(seed)

    if workers <= 1:
        outcomes: list[TrialOutcome] = []
        for _ in range(sim_count):
            if should_stop is not None and should_stop():
                logger.info("Simulation stopped after %s of %s trials", len(outcomes), sim_count)
                break
            outcomes.append(simulate_trial(config, generator))
    else:
        chunk_sizes = _split_counts(sim_count, workers)
        chunk_seeds = [generator.getrandbits(64) for _ in chunk_sizes]
        outcomes = []
        with ProcessPoolExecutor(max_workers=len(chunk_sizes)) as executor:
            futures = [
                executor.submit(_simulate_chunk, config, size, chunk_seed)
                for size, chunk_seed in zip(chunk_sizes, chunk_seeds)
            ]
            for future in futures:
                outcomes.extend(future.result())

    logger.debug(
        "Simulated %s trials for '%s' in %.3f s",
        len(outcomes),
        config.name,
        perf_counter() - start,
    )
    return tuple(outcomes)
