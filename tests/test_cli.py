import importlib.util
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "simulate_banner.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("simulate_banner", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_preset_without_overrides_is_unchanged(cli):
    args = cli.parse_args(["--preset", "Aggressive Slope (90 Cap)"])
    config = cli.resolve_config(args)
    assert config.name == "Aggressive Slope (90 Cap)"
    assert config.hard_pity == 90


def test_overrides_produce_custom_config(cli):
    args = cli.parse_args(["--hard-pity", "70", "--no-fifty-fifty"])
    config = cli.resolve_config(args)
    assert config.name == "Custom"
    assert config.hard_pity == 70
    assert config.has_fifty_fifty is False
    assert config.featured_guarantee == 120


def test_main_prints_report(cli, capsys):
    cli.main(["--sims", "500", "--stash", "80", "--cdf"])
    output = capsys.readouterr().out
    assert "Banner: Arknights: Endfield" in output
    assert "Success with 80 pulls" in output
    assert "Bottom 10% (Cursed)" in output
    assert "100.00%" in output


def test_main_rejects_zero_sims(cli):
    with pytest.raises(SystemExit, match="must be positive"):
        cli.main(["--sims", "0"])


def test_main_rejects_unknown_preset(cli):
    with pytest.raises(SystemExit, match="Unknown banner preset"):
        cli.main(["--preset", "Nope"])
