from collections.abc import Iterable

import pytest

from pity_core import GachaSystemConfig


class ScriptedRandom:
    """Replays a fixed sequence of rolls and fails loudly when it runs out."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values = list(values)
        self.calls = 0

    def random(self) -> float:
        if self.calls >= len(self._values):
            raise AssertionError(f"Unexpected roll #{self.calls + 1}")
        value = self._values[self.calls]
        self.calls += 1
        return value

    @property
    def exhausted(self) -> bool:
        return self.calls == len(self._values)


@pytest.fixture()
def scripted():
    return ScriptedRandom


@pytest.fixture()
def ramp_config():
    return GachaSystemConfig(
        base_rate=0.1,
        soft_pity_start=5,
        soft_pity_increment=0.1,
        hard_pity=10,
        featured_guarantee=20,
        has_fifty_fifty=True,
    )


@pytest.fixture()
def zero_rate_config():
    return GachaSystemConfig(
        base_rate=0.0,
        soft_pity_start=1,
        soft_pity_increment=0.0,
        hard_pity=5,
        featured_guarantee=5,
        has_fifty_fifty=False,
    )
