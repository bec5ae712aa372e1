"""Streamlit front-end for the gacha pity simulator."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

import altair as alt
import numpy as np
import pandas as pd
import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from pity_core import (
    DEFAULT_COST_PER_PULL,
    DEFAULT_SIM_COUNT,
    DEFAULT_SIM_SEED,
    DEFAULT_STASH,
    GAME_PRESETS,
    PRESET_CUSTOM_LABEL,
    SAMPLE_SIZE_CHOICES,
    CumulativePoint,
    DistributionPoint,
    GachaSystemConfig,
    PercentileBracket,
    PitySimulatorError,
    SimulationReport,
    SummaryStats,
    load_banner_presets,
    pity_order_issues,
    rate_curve,
    simulate_banner,
    update_user_inputs,
)

BANNER_PRESET_PATH = Path(__file__).resolve().parent / "banner_presets.json"
BANNER_PRESETS = load_banner_presets(
    BANNER_PRESET_PATH if BANNER_PRESET_PATH.exists() else None
)
CONFIG_WIDGET_KEYS = (
    "base_rate",
    "soft_pity_start",
    "soft_pity_increment",
    "hard_pity",
    "featured_guarantee",
    "has_fifty_fifty",
)
CHART_COLOR = "#4a5d4e"
SAVINGS_COLOR = "#1a2a1e"
GUARANTEED_COLOR = "#059669"


def reset_simulation_results() -> None:
    """Clear cached results so the UI reflects new inputs."""

    st.session_state.sim_report = None
    st.session_state.sim_error = None


def apply_preset_to_widgets(preset: GachaSystemConfig) -> None:
    """Copy preset values into the widget keys of the configuration panel."""

    for key in CONFIG_WIDGET_KEYS:
        st.session_state[key] = getattr(preset, key)


def ensure_session_state_defaults() -> None:
    """Populate Streamlit session state with expected default entries."""

    if "base_rate" not in st.session_state:
        apply_preset_to_widgets(GAME_PRESETS[0])
    st.session_state.setdefault("selected_preset", GAME_PRESETS[0].name)
    st.session_state.setdefault("last_applied_preset", GAME_PRESETS[0].name)
    st.session_state.setdefault("sim_count", DEFAULT_SIM_COUNT)
    st.session_state.setdefault("sim_seed", DEFAULT_SIM_SEED)
    st.session_state.setdefault("user_savings", DEFAULT_STASH)
    st.session_state.setdefault("cost_per_pull", DEFAULT_COST_PER_PULL)
    st.session_state.setdefault("sim_report", None)
    st.session_state.setdefault("sim_error", None)


def mark_custom_configuration() -> None:
    """Switch the preset picker to 'Custom' after any manual tweak."""

    st.session_state.selected_preset = PRESET_CUSTOM_LABEL
    st.session_state.last_applied_preset = PRESET_CUSTOM_LABEL


def update_widgets_from_preset(selected_preset: str) -> bool:
    """Synchronise configuration inputs with the selected preset, returning change status."""

    if selected_preset == st.session_state.last_applied_preset:
        return False
    if selected_preset != PRESET_CUSTOM_LABEL:
        apply_preset_to_widgets(BANNER_PRESETS[selected_preset])
    st.session_state.last_applied_preset = selected_preset
    return True


def current_config() -> GachaSystemConfig:
    """Build the configuration described by the widget state."""

    return GachaSystemConfig(
        name=st.session_state.selected_preset,
        base_rate=float(st.session_state.base_rate),
        soft_pity_start=int(st.session_state.soft_pity_start),
        soft_pity_increment=float(st.session_state.soft_pity_increment),
        hard_pity=int(st.session_state.hard_pity),
        featured_guarantee=int(st.session_state.featured_guarantee),
        has_fifty_fifty=bool(st.session_state.has_fifty_fifty),
    )


def render_rules_expander() -> None:
    """Explain how the pity thresholds relate to each other."""

    with st.expander("How to configure the pity logic"):
        rule_col, def_col = st.columns([1.0, 2.0])
        with rule_col:
            st.markdown("**The golden rule**")
            st.caption("Values must follow this sequence for a meaningful simulation:")
            st.code("Soft < Hard ≤ Featured Guarantee", language=None)
        with def_col:
            st.markdown("**Definitions**")
            st.markdown(
                "- **Soft pity:** pull count where the rate begins to increase.\n"
                "- **Hard pity:** pull count that guarantees a top-rarity unit.\n"
                "- **Featured guarantee:** absolute worst-case fallback for the featured unit.\n"
                "- **50/50 rule:** a top-rarity unit has a 50% chance of not being the "
                "featured one; losing resets only the hard-pity counter."
            )


def render_configuration_panel() -> bool:
    """Render the sidebar controls and return whether a simulation was requested."""

    preset_options = list(BANNER_PRESETS.keys())
    if st.session_state.selected_preset not in preset_options:
        preset_options.append(PRESET_CUSTOM_LABEL)

    st.sidebar.caption("Game presets")
    selected_preset = st.sidebar.selectbox(
        "Game presets",
        options=preset_options,
        key="selected_preset",
        label_visibility="collapsed",
    )
    if update_widgets_from_preset(selected_preset):
        reset_simulation_results()

    st.sidebar.markdown("**Rates & 50/50**")
    st.sidebar.slider(
        "Base rate",
        min_value=0.0,
        max_value=0.1,
        step=0.001,
        format="%.3f",
        key="base_rate",
        help="Probability of a top-rarity unit on pull #1, before pity applies.",
        on_change=mark_custom_configuration,
    )
    st.sidebar.checkbox(
        "50/50 rule",
        key="has_fifty_fifty",
        help="A top-rarity unit has a 50% chance to be the featured one.",
        on_change=mark_custom_configuration,
    )

    st.sidebar.markdown("**Pity chain**")
    st.sidebar.slider(
        "Soft pity start",
        min_value=1,
        max_value=400,
        key="soft_pity_start",
        help="Pull count after which the rate begins to escalate.",
        on_change=mark_custom_configuration,
    )
    st.sidebar.slider(
        "Increase per pull",
        min_value=0.0,
        max_value=1.0,
        step=0.005,
        format="%.3f",
        key="soft_pity_increment",
        help="Probability added for every pull past the soft pity threshold.",
        on_change=mark_custom_configuration,
    )

    st.sidebar.markdown("**Safety nets**")
    st.sidebar.slider(
        "Hard pity",
        min_value=1,
        max_value=400,
        key="hard_pity",
        help="Pull count at which a top-rarity unit is forced. The 50/50 rule still applies.",
        on_change=mark_custom_configuration,
    )
    st.sidebar.slider(
        "Featured guarantee",
        min_value=1,
        max_value=400,
        key="featured_guarantee",
        help="Cumulative pulls that guarantee the featured unit, across lost 50/50s.",
        on_change=mark_custom_configuration,
    )
    for issue in pity_order_issues(current_config()):
        st.sidebar.warning(issue, icon="⚠️")

    st.sidebar.markdown("**Sample size**")
    size_cols = st.sidebar.columns(len(SAMPLE_SIZE_CHOICES))
    for column, size in zip(size_cols, SAMPLE_SIZE_CHOICES):
        button_type = "primary" if st.session_state.sim_count == size else "secondary"
        if column.button(f"{size // 1000}k", key=f"sample_size_{size}", type=button_type):
            st.session_state.sim_count = size
            st.rerun()
    st.sidebar.number_input(
        "Random seed",
        min_value=0,
        step=1,
        key="sim_seed",
    )

    st.sidebar.markdown("**Cost per pull**")
    st.sidebar.slider(
        "Cost per pull (USD)",
        min_value=0.5,
        max_value=3.0,
        step=0.01,
        format="$%.2f",
        key="cost_per_pull",
        help="Cost of a single pull for the market value estimate.",
    )

    return st.sidebar.button("Run simulation", type="primary", use_container_width=True)


def run_simulation(config: GachaSystemConfig) -> None:
    """Run the Monte Carlo batch with the current configuration."""

    st.session_state.sim_error = None
    st.session_state.sim_report = None
    try:
        with st.spinner(f"Simulating {st.session_state.sim_count:,} players…"):
            report = simulate_banner(
                config=config,
                sim_count=int(st.session_state.sim_count),
                stash=int(st.session_state.user_savings),
                cost_per_pull=float(st.session_state.cost_per_pull),
                seed=int(st.session_state.sim_seed),
            )
        st.session_state.sim_report = report
    except PitySimulatorError as exc:
        st.session_state.sim_error = str(exc)


def refresh_report_inputs() -> SimulationReport:
    """Apply stash and cost changes to the cached report without re-simulating."""

    report: SimulationReport = st.session_state.sim_report
    stash = int(st.session_state.user_savings)
    cost = float(st.session_state.cost_per_pull)
    if report.stash != stash or report.cost_per_pull != cost:
        report = update_user_inputs(report, stash, cost)
        st.session_state.sim_report = report
    return report


def render_summary_cards(report: SimulationReport) -> None:
    """Display the headline statistics as metric cards."""

    summary = report.summary
    if summary is None:
        st.info("No trials were simulated.")
        return
    cols = st.columns(5)
    cols[0].metric("Average pulls", f"{summary.avg}", help="Mean pulls across all iterations.")
    cols[1].metric("Luckiest", f"{summary.min}", help="Best result in this batch.")
    cols[2].metric("Worst case", f"{summary.max}", help="Maximum pulls recorded.")
    cols[3].metric(
        "Guarantee rate",
        f"{summary.guarantee_rate}%",
        help="Runs that only obtained the featured unit at the featured guarantee.",
    )
    cols[4].metric(
        "Market value",
        f"${summary.avg_cost:.2f}",
        delta=f"Max: ${summary.max_cost:.2f}",
        delta_color="off",
        help="Cost based on pull volume and cost per pull.",
    )


def build_axis_ticks(max_pull: int) -> list[int]:
    """Return x-axis ticks every 10 (or 20 above 150) pulls, ending at ``max_pull``."""

    if max_pull <= 0:
        return []
    interval = 10 if max_pull <= 150 else 20
    ticks = np.arange(0, max_pull + 1, interval).tolist()
    if ticks[-1] != max_pull:
        ticks.append(max_pull)
    return ticks


def distribution_frame(
    pdf: Sequence[DistributionPoint], cdf: Sequence[CumulativePoint]
) -> pd.DataFrame:
    """Join PDF and CDF tables into one frame keyed by pull count."""

    return pd.DataFrame(
        {
            "pull_count": [point.pull_count for point in pdf],
            "count": [point.count for point in pdf],
            "probability": [point.probability for point in cdf],
        }
    )


def render_distribution_chart(report: SimulationReport, view: str) -> None:
    """Render the PDF or CDF area chart with the savings marker."""

    chart_data = distribution_frame(report.pdf, report.cdf)
    if chart_data.empty:
        st.caption("No distribution data to plot.")
        return

    max_pull = int(chart_data["pull_count"].max())
    savings = int(st.session_state.user_savings)
    guaranteed = savings >= max_pull
    marker_pos = min(savings, max_pull)

    is_cdf = view == "Cumulative success"
    field = "probability" if is_cdf else "count"
    y_axis = alt.Y(
        f"{field}:Q",
        title="Success probability" if is_cdf else "Frequency",
        axis=alt.Axis(labelExpr="datum.value + '%'") if is_cdf else alt.Axis(),
    )
    area = alt.Chart(chart_data).mark_area(
        line={"color": CHART_COLOR, "strokeWidth": 2},
        color=CHART_COLOR,
        opacity=0.1,
        interpolate="linear",
    ).encode(
        x=alt.X(
            "pull_count:Q",
            title="Successful pull",
            scale=alt.Scale(domain=(0, max_pull)),
            axis=alt.Axis(values=build_axis_ticks(max_pull), format=".0f"),
        ),
        y=y_axis,
        tooltip=[
            alt.Tooltip("pull_count:Q", title="Successful pull"),
            alt.Tooltip("count:Q", title="Frequency"),
            alt.Tooltip("probability:Q", title="Probability (%)", format=".1f"),
        ],
    )
    marker_frame = pd.DataFrame(
        {
            "pull_count": [marker_pos],
            "label": ["100% GUARANTEED" if guaranteed else "YOUR SAVINGS"],
        }
    )
    marker_color = GUARANTEED_COLOR if guaranteed else SAVINGS_COLOR
    rule = alt.Chart(marker_frame).mark_rule(
        color=marker_color, strokeDash=[3, 3]
    ).encode(x="pull_count:Q")
    label = alt.Chart(marker_frame).mark_text(
        color=marker_color, fontWeight="bold", fontSize=10, dy=-6, baseline="bottom"
    ).encode(x="pull_count:Q", y=alt.value(0), text="label:N")

    chart = (area + rule + label).properties(height=320)
    chart = chart.configure_view(strokeOpacity=0).configure_axis(gridColor="#f0f4f1")
    st.altair_chart(chart, use_container_width=True)


def render_rate_curve(config: GachaSystemConfig) -> None:
    """Plot the per-pull success rate up to hard pity."""

    rates = rate_curve(config)
    if not rates:
        return
    frame = pd.DataFrame(
        {"pity_counter": np.arange(1, len(rates) + 1), "rate": np.asarray(rates) * 100}
    )
    chart = alt.Chart(frame).mark_line(color=CHART_COLOR).encode(
        x=alt.X("pity_counter:Q", title="Pulls since last reset"),
        y=alt.Y("rate:Q", title="Rate (%)"),
        tooltip=[
            alt.Tooltip("pity_counter:Q", title="Pull"),
            alt.Tooltip("rate:Q", title="Rate (%)", format=".2f"),
        ],
    ).properties(height=180)
    st.altair_chart(chart, use_container_width=True)


def render_savings_confidence(summary: SummaryStats | None) -> None:
    """Let the user test their current stash against the simulated batch."""

    with st.container(border=True):
        st.markdown("**Success rate based on available pulls**")
        slider_col, result_col = st.columns([2.0, 1.0])
        with slider_col:
            st.slider(
                "Currently available pulls",
                min_value=1,
                max_value=400,
                step=1,
                key="user_savings",
            )
        if summary is None:
            return
        probability = summary.current_confidence
        with result_col:
            st.metric("Success rate", f"{probability}%")
            if probability > 80:
                st.success("Comfortable stash")


def render_percentile_table(brackets: Sequence[PercentileBracket]) -> None:
    """Render the luck distribution table."""

    if not brackets:
        return
    rows = "".join(
        "<tr>"
        f"<td>{bracket.label}</td>"
        f"<td class='pulls'>{bracket.pulls} pulls</td>"
        "</tr>"
        for bracket in brackets
    )
    st.markdown(
        "<div class='luck-group'>"
        "<div class='luck-header'>Luck distribution table</div>"
        f"<table class='luck-table'><tbody>{rows}</tbody></table>"
        "</div>",
        unsafe_allow_html=True,
    )


def apply_page_styling() -> None:
    """Inject CSS tweaks that style the Streamlit app."""

    st.set_page_config(page_title="Gacha Pull Simulator", page_icon="🔮", layout="wide")
    st.markdown(
        """
        <style>
        div[data-testid="stVerticalBlockBorderWrapper"] {
            border: 1px solid #dce3de;
            border-radius: 10px;
            padding: 1rem;
            background-color: #ffffff;
            margin-bottom: 1rem;
        }
        div[data-testid="stMetricValue"] {
            font-size: 1.6rem;
            font-weight: 600;
            color: #1a2a1e;
        }
        div[data-testid="stMetricLabel"] {
            font-size: 0.85rem;
            color: #6a7a6d;
        }
        .luck-group {
            border: 1px solid #dce3de;
            border-radius: 8px;
            overflow: hidden;
        }
        .luck-header {
            background-color: #f8faf9;
            padding: 0.5rem 1rem;
            font-size: 0.75rem;
            font-weight: 700;
            text-transform: uppercase;
            letter-spacing: 0.1em;
            color: #4a5d4e;
            border-bottom: 1px solid #dce3de;
        }
        .luck-table {
            width: 100%;
            border-collapse: collapse;
            font-size: 0.9rem;
        }
        .luck-table td {
            padding: 0.6rem 1rem;
            border-bottom: 1px solid #f0f4f1;
            color: #6a7a6d;
        }
        .luck-table td.pulls {
            text-align: right;
            font-family: monospace;
            font-weight: 700;
            color: #4a5d4e;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def main() -> None:
    """Entry point used by Streamlit."""

    apply_page_styling()
    ensure_session_state_defaults()

    st.title("🔮 Gacha Pull Simulator")
    st.caption(
        "Probability and cost analysis for obtaining a single copy of a featured banner character"
    )
    render_rules_expander()

    simulate_requested = render_configuration_panel()
    config = current_config()
    if simulate_requested:
        run_simulation(config)

    if st.session_state.sim_error:
        st.error(f"Simulation failed: {st.session_state.sim_error}")
        return

    report = st.session_state.sim_report
    if not isinstance(report, SimulationReport):
        st.info("Run the simulation to view the probability distribution.")
        render_rate_curve(config)
        return

    report = refresh_report_inputs()
    st.caption(
        f"{report.params.sim_count:,} trials of '{report.config.name}' "
        f"in {report.compute_seconds:.2f} s"
    )
    render_summary_cards(report)

    view = st.radio(
        "Chart view",
        options=["Probability density", "Cumulative success"],
        horizontal=True,
        label_visibility="collapsed",
    )
    render_distribution_chart(report, view)
    render_savings_confidence(report.summary)
    render_percentile_table(report.brackets)

    with st.expander("Rate curve"):
        render_rate_curve(report.config)


if __name__ == "__main__":
    main()
