"""
Game State — The immutable snapshot every transition consumes and
produces.

A tick or a placement never edits a snapshot; it builds the next one.
Readers holding an older GameState keep seeing a consistent city.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple

from city_builder.config import GRID_SIZE, START_MONEY, BASE_HAPPINESS, BASE_ENVIRONMENT
from city_builder.world.map import Grid, create_grid
from .market import MarketState, create_market
from .random_events import ActiveEvent


@dataclass(frozen=True)
class Stats:
    money: int = START_MONEY
    population: int = 0
    jobs: int = 0
    income: int = 0             # Net result of the last tick
    happiness: float = BASE_HAPPINESS
    environment: float = BASE_ENVIRONMENT


@dataclass(frozen=True)
class GameState:
    grid: Grid
    stats: Stats = field(default_factory=Stats)
    market: MarketState = field(default_factory=create_market)
    active_events: Tuple[ActiveEvent, ...] = ()
    unlocked: FrozenSet[str] = frozenset()      # Achievement ids, only ever grows
    titles: Tuple[str, ...] = ()
    tick: int = 0
    happy_streak: int = 0                       # Consecutive ticks at/above HAPPY_THRESHOLD
    selected_tool: str = "house"


def create_game_state(size: int = GRID_SIZE, money: int = START_MONEY) -> GameState:
    return GameState(grid=create_grid(size), stats=Stats(money=money))
