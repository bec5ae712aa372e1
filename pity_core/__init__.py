"""Monte Carlo engine for gacha pity systems."""

from .api import SimulationReport, check_sample_size, simulate_banner, update_user_inputs
from .data import (
    DEFAULT_COST_PER_PULL,
    DEFAULT_SIM_COUNT,
    DEFAULT_SIM_SEED,
    DEFAULT_STASH,
    GAME_PRESETS,
    PRESET_CUSTOM_LABEL,
    SAMPLE_SIZE_CHOICES,
    get_preset,
    load_banner_presets,
    pity_order_issues,
    presets_by_name,
)
from .distribution import build_distribution, probability_at, pulls_of, round_half_up
from .errors import InvalidSampleSize, PitySimulatorError, UnknownPreset
from .models import (
    CumulativePoint,
    DistributionPoint,
    GachaSystemConfig,
    PercentileBracket,
    SimParams,
    SimulationBatch,
    SummaryStats,
    TrialOutcome,
)
from .rates import pity_rate, rate_curve
from .simulation import PullPhase, TrialState, advance, run_monte_carlo, simulate_trial
from .summary import (
    compute_summary,
    percentile_brackets,
    refresh_user_metrics,
    success_probability,
)

__all__ = [
    "CumulativePoint",
    "DEFAULT_COST_PER_PULL",
    "DEFAULT_SIM_COUNT",
    "DEFAULT_SIM_SEED",
    "DEFAULT_STASH",
    "DistributionPoint",
    "GAME_PRESETS",
    "GachaSystemConfig",
    "InvalidSampleSize",
    "PRESET_CUSTOM_LABEL",
    "PercentileBracket",
    "PitySimulatorError",
    "PullPhase",
    "SAMPLE_SIZE_CHOICES",
    "SimParams",
    "SimulationBatch",
    "SimulationReport",
    "SummaryStats",
    "TrialOutcome",
    "TrialState",
    "UnknownPreset",
    "advance",
    "build_distribution",
    "check_sample_size",
    "compute_summary",
    "get_preset",
    "load_banner_presets",
    "percentile_brackets",
    "pity_order_issues",
    "pity_rate",
    "presets_by_name",
    "probability_at",
    "pulls_of",
    "rate_curve",
    "round_half_up",
    "refresh_user_metrics",
    "run_monte_carlo",
    "simulate_banner",
    "simulate_trial",
    "success_probability",
    "update_user_inputs",
]
