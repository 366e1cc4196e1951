"""Shared fixtures for the *_test.py modules."""
from typing import Iterable, List

import pytest

from config.base import BaseConfiguration
from pairs.random_source import RandomSource
from pairs.scheduling import ManualScheduler


class ScriptedRandom(RandomSource):
    """Random source that replays fixed swap indices, then repeats the last."""

    def __init__(self, indices: Iterable[int]) -> None:
        super().__init__(seed=0)
        self._indices: List[int] = list(indices)
        self._pos = 0

    def randbelow(self, n: int) -> int:
        if not self._indices:
            return n - 1
        value = self._indices[min(self._pos, len(self._indices) - 1)]
        self._pos += 1
        assert 0 <= value < n, f"scripted index {value} out of range for {n}"
        return value


# Fisher-Yates on [1, 1, 2, 2] with draws 3, 1, 1 yields [1, 2, 1, 2].
ALTERNATING_2X2 = (3, 1, 1)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def small_config() -> BaseConfiguration:
    return BaseConfiguration(rows=2, cols=2, symbol_count=2, time_budget_seconds=60)


@pytest.fixture
def alternating_rng() -> ScriptedRandom:
    return ScriptedRandom(ALTERNATING_2X2)
