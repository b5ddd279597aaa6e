"""
Tick Pipeline — One simulation step, from one GameState to the next.

Order per tick:
  1. Zoned land develops (per zone policy), then population and jobs
  2. Raw income per tile, nearby-shop bonus for residential tiles
  3. Event per-building multipliers, then the global income multiplier
  4. Funds updated with the net income (may be negative)
  5. Happiness drifts toward its target, environment recomputed
  6. Market countdown / transition
  7. Active events age and expire; a new event may fire
  8. Achievements checked against the new state, rewards paid

Multipliers used in steps 1-5 come from the market and events as they
stood at the start of the tick. The only randomness is the `rng`
passed in.
"""

import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from city_builder.config import ZONE_GROWTH_CHANCE, ZONE_POLICY, HAPPY_THRESHOLD
from city_builder.world.buildings import ZONE_BUILDINGS, ZoneType
from city_builder.world.map import Grid
from .achievements import Achievement, unlock_achievements
from .economy import (
    compute_environment, compute_happiness, compute_income, compute_jobs,
    compute_population,
)
from .market import advance_market
from .modifiers import JOBS, collect_multipliers, combine
from .random_events import ActiveEvent, advance_events, pick_event, should_trigger, start_event
from .state import GameState, Stats


class ZonePolicy(Enum):
    MANUAL = "manual"       # Zones never fill in on their own
    GROWTH = "growth"       # Each zoned lot has a chance per tick
    INSTANT = "instant"     # Every zoned lot builds on the next tick


@dataclass(frozen=True)
class TickResult:
    state: GameState
    unlocked: List[Achievement] = field(default_factory=list)
    started_events: List[ActiveEvent] = field(default_factory=list)
    expired_events: List[ActiveEvent] = field(default_factory=list)
    market_changed: bool = False


def develop_zones(grid: Grid, rng: random.Random, policy: ZonePolicy,
                  job_growth: float = 1.0) -> Grid:
    """Put the zone's default building on empty zoned lots."""
    if policy is ZonePolicy.MANUAL:
        return grid

    chance = ZONE_GROWTH_CHANCE * job_growth
    for tile in list(grid.tiles()):
        if tile.zone is ZoneType.NONE or not tile.is_empty:
            continue
        if policy is ZonePolicy.GROWTH and rng.random() >= chance:
            continue
        grid = grid.with_building(tile.x, tile.y, ZONE_BUILDINGS[tile.zone])
    return grid


def run_tick(state: GameState, rng: random.Random,
             zone_policy: Optional[ZonePolicy] = None) -> TickResult:
    if zone_policy is None:
        zone_policy = ZonePolicy(ZONE_POLICY)
    multipliers = collect_multipliers(state.market, state.active_events)

    # --- 1. Zones & population ---
    grid = develop_zones(state.grid, rng, zone_policy, combine(multipliers, JOBS))
    population = compute_population(grid)
    jobs = compute_jobs(grid, multipliers)

    # --- 2-3. Income ---
    income = compute_income(grid, multipliers)

    # --- 4. Funds ---
    money = state.stats.money + income.net

    # --- 5. Happiness & environment ---
    stats = Stats(
        money=money,
        population=population,
        jobs=jobs,
        income=income.net,
        happiness=compute_happiness(state.stats.happiness, grid, multipliers),
        environment=compute_environment(grid),
    )

    # --- 6. Market ---
    market = advance_market(state.market, rng)

    # --- 7. Random events ---
    events, expired = advance_events(state.active_events)
    new_state = replace(
        state, grid=grid, stats=stats, market=market,
        active_events=events, tick=state.tick + 1,
    )
    started: List[ActiveEvent] = []
    if should_trigger(new_state, rng):
        new_state = start_event(new_state, pick_event(rng))
        started.append(new_state.active_events[-1])

    # --- 8. Achievements ---
    if new_state.stats.happiness >= HAPPY_THRESHOLD:
        new_state = replace(new_state, happy_streak=state.happy_streak + 1)
    else:
        new_state = replace(new_state, happy_streak=0)
    new_state, unlocked = unlock_achievements(new_state)

    return TickResult(
        state=new_state,
        unlocked=unlocked,
        started_events=started,
        expired_events=expired,
        market_changed=market.condition is not state.market.condition,
    )


def simulate_tick(state: GameState, rng: random.Random,
                  zone_policy: Optional[ZonePolicy] = None) -> GameState:
    return run_tick(state, rng, zone_policy).state
