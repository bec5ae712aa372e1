"""Print a pull distribution report for a banner preset or explicit pity rules."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Iterable

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from pity_core import (
    DEFAULT_COST_PER_PULL,
    DEFAULT_SIM_COUNT,
    DEFAULT_SIM_SEED,
    DEFAULT_STASH,
    GachaSystemConfig,
    PitySimulatorError,
    SimulationReport,
    get_preset,
    load_banner_presets,
    pity_order_issues,
    simulate_banner,
)


def resolve_config(args: argparse.Namespace) -> GachaSystemConfig:
    """Return the preset named on the command line, with any explicit overrides."""

    catalog = load_banner_presets(args.preset_file)
    config = get_preset(args.preset, catalog)
    overrides = {
        field: value
        for field, value in (
            ("base_rate", args.base_rate),
            ("soft_pity_start", args.soft_pity_start),
            ("soft_pity_increment", args.soft_pity_increment),
            ("hard_pity", args.hard_pity),
            ("featured_guarantee", args.featured_guarantee),
            ("has_fifty_fifty", args.fifty_fifty),
        )
        if value is not None
    }
    if not overrides:
        return config
    return replace(config, name="Custom", **overrides)


def format_report(report: SimulationReport, show_cdf: bool) -> list[str]:
    """Return the report as printable lines."""

    config = report.config
    lines = [
        f"Banner: {config.name}",
        (
            f"  base {config.base_rate:.3%}, soft pity after {config.soft_pity_start} "
            f"(+{config.soft_pity_increment:.3%}/pull), hard pity {config.hard_pity}, "
            f"featured guarantee {config.featured_guarantee}, "
            f"50/50 {'on' if config.has_fifty_fifty else 'off'}"
        ),
        f"Trials: {report.params.sim_count:,} ({report.compute_seconds:.2f} s)",
    ]
    summary = report.summary
    if summary is None:
        lines.append("No statistics available.")
        return lines

    lines.extend(
        [
            "",
            f"Average pulls:   {summary.avg}",
            f"Luckiest:        {summary.min}",
            f"Worst case:      {summary.max}",
            f"Guarantee rate:  {summary.guarantee_rate}%",
            f"Success with {report.stash} pulls: {summary.current_confidence}%",
            f"Market value:    ${summary.avg_cost:.2f} (max ${summary.max_cost:.2f})",
            "",
            "Luck distribution:",
        ]
    )
    width = max(len(bracket.label) for bracket in report.brackets)
    for bracket in report.brackets:
        lines.append(f"  {bracket.label:<{width}}  {bracket.pulls:>4} pulls")

    if show_cdf:
        lines.extend(["", "Cumulative success:"])
        for point in report.cdf:
            lines.append(f"  {point.pull_count:>4}  {point.probability:6.2f}%")
    return lines


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate pulls until the featured unit.")
    parser.add_argument(
        "--preset",
        default="Arknights: Endfield",
        help="Preset to start from (default: %(default)s).",
    )
    parser.add_argument(
        "--preset-file",
        default=None,
        help="JSON file with extra presets (default: $PITY_PRESET_FILE if set).",
    )
    parser.add_argument("--base-rate", type=float, default=None)
    parser.add_argument("--soft-pity-start", type=int, default=None)
    parser.add_argument("--soft-pity-increment", type=float, default=None)
    parser.add_argument("--hard-pity", type=int, default=None)
    parser.add_argument("--featured-guarantee", type=int, default=None)
    parser.add_argument(
        "--fifty-fifty",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Enable or disable the 50/50 rule (default: preset value).",
    )
    parser.add_argument(
        "--sims",
        type=int,
        default=DEFAULT_SIM_COUNT,
        help="Number of simulated players (default: %(default)s).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SIM_SEED,
        help="Random seed (default: %(default)s).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker processes for the simulation (default: %(default)s).",
    )
    parser.add_argument(
        "--stash",
        type=int,
        default=DEFAULT_STASH,
        help="Pulls currently available (default: %(default)s).",
    )
    parser.add_argument(
        "--cost-per-pull",
        type=float,
        default=DEFAULT_COST_PER_PULL,
        help="Cost of one pull (default: %(default)s).",
    )
    parser.add_argument(
        "--cdf",
        action="store_true",
        help="Also print the cumulative success table.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(list(argv) if argv is not None else None)


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = resolve_config(args)
        for issue in pity_order_issues(config):
            print(f"Warning: {issue}")
        report = simulate_banner(
            config=config,
            sim_count=args.sims,
            stash=args.stash,
            cost_per_pull=args.cost_per_pull,
            seed=args.seed,
            workers=args.workers,
        )
    except PitySimulatorError as exc:
        raise SystemExit(f"Error: {exc}") from exc

    print("\n".join(format_report(report, args.cdf)))


if __name__ == "__main__":
    main(sys.argv[1:])
