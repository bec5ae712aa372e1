"""Banner presets, runtime defaults, and configuration sanity checks."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from .errors import UnknownPreset
from .models import GachaSystemConfig

GAME_PRESETS: Final[list[GachaSystemConfig]] = [
    GachaSystemConfig(
        name="Arknights: Endfield",
        base_rate=0.008,
        soft_pity_start=65,
        soft_pity_increment=0.05,
        hard_pity=80,
        featured_guarantee=120,
        has_fifty_fifty=True,
    ),
    GachaSystemConfig(
        name="Aggressive Slope (90 Cap)",
        base_rate=0.006,
        soft_pity_start=74,
        soft_pity_increment=0.06,
        hard_pity=90,
        featured_guarantee=180,
        has_fifty_fifty=True,
    ),
    GachaSystemConfig(
        name="High Base / Extended Floor",
        base_rate=0.02,
        soft_pity_start=50,
        soft_pity_increment=0.02,
        hard_pity=99,
        featured_guarantee=300,
        has_fifty_fifty=True,
    ),
    GachaSystemConfig(
        name="Flat Rate / Direct Milestone",
        base_rate=0.03,
        soft_pity_start=195,  # effectively no ramp
        soft_pity_increment=0.7,
        hard_pity=200,
        featured_guarantee=200,
        has_fifty_fifty=False,
    ),
    GachaSystemConfig(
        name="Low-Probability / Max Variance",
        base_rate=0.01,
        soft_pity_start=380,
        soft_pity_increment=0.05,
        hard_pity=400,
        featured_guarantee=400,
        has_fifty_fifty=True,
    ),
]

PRESET_CUSTOM_LABEL: Final[str] = "Custom"
SAMPLE_SIZE_CHOICES: Final[tuple[int, ...]] = (1_000, 10_000, 50_000)

DEFAULT_SIM_COUNT: Final[int] = int(os.environ.get("PITY_SIM_COUNT", "10000"))
DEFAULT_SIM_SEED: Final[int] = int(os.environ.get("PITY_SIM_SEED", "42"))
DEFAULT_STASH: Final[int] = 120
DEFAULT_COST_PER_PULL: Final[float] = 1.11
PRESET_FILE_ENV: Final[str] = "PITY_PRESET_FILE"

_CONFIG_FIELDS: Final[dict[str, type]] = {
    "base_rate": float,
    "soft_pity_start": int,
    "soft_pity_increment": float,
    "hard_pity": int,
    "featured_guarantee": int,
}


def presets_by_name(
    presets: list[GachaSystemConfig] | None = None,
) -> dict[str, GachaSystemConfig]:
    """Return the preset catalog keyed by display name."""

    return {preset.name: preset for preset in (GAME_PRESETS if presets is None else presets)}


def get_preset(name: str, catalog: Mapping[str, GachaSystemConfig] | None = None) -> GachaSystemConfig:
    """Look up a preset by name.

    Raises
    ------
    UnknownPreset
        If no preset carries the supplied name.
    """

    lookup = presets_by_name() if catalog is None else catalog
    try:
        return lookup[name]
    except KeyError as exc:
        raise UnknownPreset(name) from exc


def _parse_preset(name: str, raw: Mapping[object, object]) -> GachaSystemConfig | None:
    values: dict[str, object] = {}
    for field_name, caster in _CONFIG_FIELDS.items():
        if field_name not in raw:
            return None
        try:
            values[field_name] = caster(raw[field_name])
        except (TypeError, ValueError):
            return None
    flag = raw.get("has_fifty_fifty", True)
    if not isinstance(flag, bool):
        return None
    return GachaSystemConfig(name=name, has_fifty_fifty=flag, **values)


def load_banner_presets(
    preset_path: str | Path | None = None,
) -> dict[str, GachaSystemConfig]:
    """Return built-in presets merged with those defined in a JSON file.

    The file maps preset names to objects with the ``GachaSystemConfig`` field
    names. Unreadable files and malformed entries are ignored. When no path is
    supplied, the ``PITY_PRESET_FILE`` environment variable is consulted.
    """

    catalog = presets_by_name()
    if preset_path is None:
        preset_path = os.environ.get(PRESET_FILE_ENV) or None
    if not preset_path:
        return catalog

    path = Path(preset_path)
    try:
        raw_data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return catalog
    except (OSError, json.JSONDecodeError):
        return catalog

    if not isinstance(raw_data, Mapping):
        return catalog

    for name, fields in raw_data.items():
        if not isinstance(name, str) or not isinstance(fields, Mapping):
            continue
        parsed = _parse_preset(name, fields)
        if parsed is not None:
            catalog[name] = parsed
    return catalog


def pity_order_issues(config: GachaSystemConfig) -> list[str]:
    """Return warnings for thresholds breaking ``soft < hard <= featured guarantee``.

    The simulator still runs such configurations; the results are merely
    hard to interpret.
    """

    issues: list[str] = []
    if config.soft_pity_start >= config.hard_pity:
        issues.append(
            f"Soft pity start ({config.soft_pity_start}) must be below hard pity ({config.hard_pity})."
        )
    if config.hard_pity > config.featured_guarantee:
        issues.append(
            f"Hard pity ({config.hard_pity}) must not exceed the featured guarantee "
            f"({config.featured_guarantee})."
        )
    return issues
