import random

import pytest

from game.pacman.config import EngineConfig
from game.pacman.engine import initialize

# Cells are 30px and hitboxes 25px, so a hitbox centred in cell (c, r)
# has its top-left corner at (30c + 2.5, 30r + 2.5).

CORRIDOR = (
    "WWWWWWWW",
    "WP....GW",
    "WWWWWWWW",
)

T_JUNCTION = (
    "WWWWWW",
    "WP...W",
    "WW.WWW",
    "WW.WWW",
    "WWWWWW",
)

POWER_ROOM = (
    "WWWWWWWWW",
    "WPo....GW",
    "W......GW",
    "WWWWWWWWW",
)


def origin(col, row):
    return col * 30.0 + 2.5, row * 30.0 + 2.5


class ScriptedRandom(random.Random):
    """random.Random whose random() replays a fixed script of values"""

    def __init__(self, values):
        super().__init__(0)
        self.values = list(values)

    def random(self):
        return self.values.pop(0)

    def choice(self, seq):
        return seq[-1]


@pytest.fixture
def no_pursuers():
    return EngineConfig(default_pursuers=0, seed=1)


@pytest.fixture
def corridor_game():
    return initialize(CORRIDOR, EngineConfig(seed=7))
