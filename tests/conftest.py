"""
Shared fixtures for the simulation tests.

File logging is switched off before any engine module is imported so
test runs don't write into logs/.
"""
import random

import pytest

import city_builder.config as config

config.LOG_TO_FILE = False

from city_builder.engine.state import create_game_state  # noqa: E402


class FixedRandom(random.Random):
    """
    Random source whose random() replays a fixed list of draws.

    Once the list runs out every draw returns `default`. randrange() and
    choice() still come from the seeded Mersenne Twister, so they never
    consume queued values.
    """

    def __init__(self):
        super().__init__(0)
        self.values = []
        self.default = 0.99
        self.calls = 0

    def load(self, values, default=0.99):
        self.values = list(values)
        self.default = default
        return self

    def random(self):
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default

    def getrandbits(self, k):
        return super().getrandbits(k)


@pytest.fixture
def state():
    """Fresh 20x20 city with the default starting funds."""
    return create_game_state(size=20, money=10000)


@pytest.fixture
def fixed_rng():
    """Factory: fixed_rng(0.1, 0.5) replays those draws, then 0.99 forever."""
    def make(*values, default=0.99):
        return FixedRandom().load(values, default)
    return make
