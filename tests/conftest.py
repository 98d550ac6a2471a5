import random

import pytest

from nimgame.config_loader import GameSettings
from nimgame.nim_game import NimGame


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def rng():
    """Seeded random source so tie-breaks are repeatable"""
    return random.Random(1234)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def small_game(rng):
    return NimGame.from_counts([3, 5, 7], rng=rng)


@pytest.fixture
def settings():
    return GameSettings(
        window_width=400,
        window_height=300,
        frame_interval=1.0 / 60,
        ai_move_delay=0.5,
        heaps_count=3,
        max_stones_per_heap=5,
        seed=7,
    )
