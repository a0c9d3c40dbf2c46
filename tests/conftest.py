import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from session import GameSession


class ScriptedRandom(random.Random):
    """Random stream that replays fixed values, then falls back to 0.99."""

    def __init__(self, values=()):
        super().__init__(0)
        self.values = list(values)

    def random(self):
        if self.values:
            return self.values.pop(0)
        return 0.99


class FakeClock:
    def __init__(self, *times):
        self.times = list(times)

    def now(self):
        return self.times.pop(0)


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def session():
    s = GameSession(rng=ScriptedRandom())
    s.new_game()
    return s


@pytest.fixture
def menu_session():
    return GameSession(rng=ScriptedRandom())


@pytest.fixture
def fake_clock():
    return FakeClock
