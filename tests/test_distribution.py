import pytest

from pity_core import (
    CumulativePoint,
    DistributionPoint,
    TrialOutcome,
    build_distribution,
    get_preset,
    probability_at,
    pulls_of,
    round_half_up,
    run_monte_carlo,
)


def test_pdf_counts_each_pull_count_ascending():
    pdf, _ = build_distribution([3, 1, 3, 2, 3])
    assert pdf == [
        DistributionPoint(pull_count=1, count=1),
        DistributionPoint(pull_count=2, count=1),
        DistributionPoint(pull_count=3, count=3),
    ]


def test_pdf_omits_gaps():
    pdf, _ = build_distribution([1, 5, 5])
    assert [point.pull_count for point in pdf] == [1, 5]


def test_cdf_is_rounded_percentage_of_trials():
    _, cdf = build_distribution([1, 2, 2])
    assert cdf == [
        CumulativePoint(pull_count=1, probability=33.33),
        CumulativePoint(pull_count=2, probability=100.0),
    ]


def test_empty_input_gives_empty_tables():
    assert build_distribution([]) == ([], [])


def test_simulated_tables_are_consistent():
    batch = run_monte_carlo(get_preset("Arknights: Endfield"), 3000, seed=21)
    pulls = pulls_of(batch)
    pdf, cdf = build_distribution(pulls)

    assert sum(point.count for point in pdf) == len(batch)
    assert [point.pull_count for point in pdf] == [point.pull_count for point in cdf]
    assert all(
        left.probability <= right.probability for left, right in zip(cdf, cdf[1:])
    )
    assert cdf[-1].probability == pytest.approx(100.0)


def test_distribution_ignores_trial_order():
    pulls = [4, 9, 1, 9, 4, 4]
    assert build_distribution(pulls) == build_distribution(sorted(pulls))


def test_pulls_of_drops_guarantee_flag():
    batch = (TrialOutcome(pulls=3, won_at_guarantee=False), TrialOutcome(pulls=8, won_at_guarantee=True))
    assert pulls_of(batch) == [3, 8]


def test_probability_at_fills_gaps_with_previous_point():
    _, cdf = build_distribution([2, 2, 6, 10])
    assert probability_at(cdf, 1) == 0.0
    assert probability_at(cdf, 2) == 50.0
    assert probability_at(cdf, 5) == 50.0
    assert probability_at(cdf, 6) == 75.0
    assert probability_at(cdf, 400) == 100.0


def test_cdf_rounds_exact_halves_up():
    _, cdf = build_distribution([1] + [2] * 31)
    assert cdf[0] == CumulativePoint(pull_count=1, probability=3.13)


def test_round_half_up():
    assert round_half_up(12.25, 1) == 12.3
    assert round_half_up(3.125, 2) == 3.13
    assert round_half_up(12.24, 1) == 12.2
    assert round_half_up(100.0, 2) == 100.0
