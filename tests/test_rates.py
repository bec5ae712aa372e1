from dataclasses import replace

import pytest

from pity_core import pity_rate, rate_curve


def test_base_rate_until_soft_pity(ramp_config):
    assert pity_rate(1, ramp_config) == 0.1
    assert pity_rate(5, ramp_config) == 0.1


def test_linear_escalation_after_soft_pity(ramp_config):
    assert pity_rate(6, ramp_config) == pytest.approx(0.2)
    assert pity_rate(7, ramp_config) == pytest.approx(0.3)


def test_rate_is_not_clamped_by_default(ramp_config):
    assert pity_rate(20, ramp_config) == pytest.approx(1.6)


def test_clamp_limits_rate_to_one(ramp_config):
    assert pity_rate(20, ramp_config, clamp=True) == 1.0


def test_zero_increment_keeps_base_rate(ramp_config):
    flat = replace(ramp_config, soft_pity_increment=0.0)
    assert pity_rate(50, flat) == 0.1


def test_rate_curve_runs_to_hard_pity(ramp_config):
    curve = rate_curve(ramp_config)
    assert len(curve) == ramp_config.hard_pity
    assert curve[0] == 0.1
    assert curve[-1] == pytest.approx(0.6)
    assert all(left <= right for left, right in zip(curve, curve[1:]))


def test_rate_curve_custom_length_is_clamped(ramp_config):
    curve = rate_curve(ramp_config, max_pull=30)
    assert len(curve) == 30
    assert max(curve) == 1.0
