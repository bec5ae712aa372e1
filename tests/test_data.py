import json
from dataclasses import replace

import pytest

from pity_core import (
    GAME_PRESETS,
    UnknownPreset,
    get_preset,
    load_banner_presets,
    pity_order_issues,
    presets_by_name,
)


def test_builtin_presets_are_well_ordered():
    for preset in GAME_PRESETS:
        assert pity_order_issues(preset) == []


def test_get_preset_by_name():
    preset = get_preset("Arknights: Endfield")
    assert (preset.hard_pity, preset.featured_guarantee) == (80, 120)


def test_get_preset_unknown_name():
    with pytest.raises(UnknownPreset, match="Mystery Banner"):
        get_preset("Mystery Banner")


def test_soft_pity_at_hard_pity_is_flagged():
    config = replace(GAME_PRESETS[0], soft_pity_start=80)
    issues = pity_order_issues(config)
    assert len(issues) == 1
    assert "Soft pity start" in issues[0]


def test_hard_pity_past_guarantee_is_flagged():
    config = replace(GAME_PRESETS[0], hard_pity=130)
    issues = pity_order_issues(config)
    assert len(issues) == 1
    assert "featured guarantee" in issues[0]


def test_load_presets_merges_valid_entries(tmp_path):
    preset_file = tmp_path / "presets.json"
    preset_file.write_text(
        json.dumps(
            {
                "House Banner": {
                    "base_rate": 0.01,
                    "soft_pity_start": 60,
                    "soft_pity_increment": 0.05,
                    "hard_pity": 75,
                    "featured_guarantee": 150,
                    "has_fifty_fifty": False,
                },
                "Missing Fields": {"base_rate": 0.01},
                "Bad Number": {
                    "base_rate": "high",
                    "soft_pity_start": 60,
                    "soft_pity_increment": 0.05,
                    "hard_pity": 75,
                    "featured_guarantee": 150,
                },
                "Not An Object": 3,
            }
        ),
        encoding="utf-8",
    )
    catalog = load_banner_presets(preset_file)

    assert set(catalog) == set(presets_by_name()) | {"House Banner"}
    house = catalog["House Banner"]
    assert house.name == "House Banner"
    assert house.has_fifty_fifty is False
    assert house.soft_pity_start == 60


def test_load_presets_defaults_fifty_fifty_on(tmp_path):
    preset_file = tmp_path / "presets.json"
    preset_file.write_text(
        json.dumps(
            {
                "Coin Banner": {
                    "base_rate": 0.01,
                    "soft_pity_start": 60,
                    "soft_pity_increment": 0.05,
                    "hard_pity": 75,
                    "featured_guarantee": 150,
                }
            }
        ),
        encoding="utf-8",
    )
    assert load_banner_presets(preset_file)["Coin Banner"].has_fifty_fifty is True


def test_missing_or_broken_file_returns_builtins(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert load_banner_presets(tmp_path / "absent.json") == presets_by_name()
    assert load_banner_presets(broken) == presets_by_name()


def test_preset_file_from_environment(tmp_path, monkeypatch):
    preset_file = tmp_path / "env.json"
    preset_file.write_text(
        json.dumps(
            {
                "Env Banner": {
                    "base_rate": 0.02,
                    "soft_pity_start": 10,
                    "soft_pity_increment": 0.1,
                    "hard_pity": 20,
                    "featured_guarantee": 40,
                }
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("PITY_PRESET_FILE", str(preset_file))
    assert "Env Banner" in load_banner_presets()
