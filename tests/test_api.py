import pytest

from pity_core import (
    InvalidSampleSize,
    compute_summary,
    get_preset,
    round_half_up,
    simulate_banner,
    success_probability,
    update_user_inputs,
)


@pytest.fixture()
def report():
    return simulate_banner(
        config=get_preset("Arknights: Endfield"),
        sim_count=2000,
        stash=120,
        cost_per_pull=1.11,
        seed=42,
    )


def test_report_tables_cover_the_batch(report):
    assert len(report.batch) == report.params.sim_count == 2000
    assert sum(point.count for point in report.pdf) == 2000
    assert report.cdf[-1].probability == pytest.approx(100.0)
    assert len(report.brackets) == 5


def test_full_stash_at_guarantee_is_certain(report):
    assert report.summary.current_confidence == 100.0
    assert report.summary.max <= 120


@pytest.mark.parametrize("count", [0, -10])
def test_non_positive_sample_size_is_rejected(count):
    with pytest.raises(InvalidSampleSize):
        simulate_banner(get_preset("Arknights: Endfield"), count, stash=10, cost_per_pull=1.0)


def test_update_user_inputs_reuses_batch(report):
    updated = update_user_inputs(report, stash=60, cost_per_pull=2.0)
    assert updated.batch is report.batch
    assert updated.pdf is report.pdf
    assert updated.stash == 60
    assert updated.cost_per_pull == 2.0
    assert updated.summary == compute_summary(report.batch, 60, 2.0)


def test_refreshed_confidence_matches_stash(report):
    updated = update_user_inputs(report, stash=75, cost_per_pull=report.cost_per_pull)
    expected = round_half_up(success_probability(report.pulls, 75), 1)
    assert updated.summary.current_confidence == expected
    assert updated.summary.avg == report.summary.avg


def test_same_seed_gives_same_report(report):
    again = simulate_banner(
        config=get_preset("Arknights: Endfield"),
        sim_count=2000,
        stash=120,
        cost_per_pull=1.11,
        seed=42,
    )
    assert again.batch == report.batch
    assert again.summary == report.summary
