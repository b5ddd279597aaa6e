"""
Economy — Per-tile formulas the tick pipeline sums over the grid.

  1. POPULATION: residential buildings house a fixed number of people,
     scaled by their upgrades. Zoned but unbuilt land houses nobody.
  2. JOBS: commercial, industrial and service buildings employ people;
     the total follows the market's job growth.
  3. INCOME: revenue per tile, with residential tiles earning the
     higher "nearby shop" rate when a shop sits within the square box.
     Event multipliers apply per building type, then the global income
     multiplier on the total. Upkeep is paid in full regardless.
  4. HAPPINESS / ENVIRONMENT: baselines pulled up by parks and services,
     down by factories and power plants.

All functions here are pure: same grid and multipliers, same answer.
"""

from dataclasses import dataclass
from typing import List

from city_builder.config import (
    NEARBY_SHOP_RADIUS, BASE_HAPPINESS, BASE_ENVIRONMENT, HAPPINESS_DRIFT,
)
from city_builder.world.buildings import BuildingType, get_spec
from city_builder.world.map import Grid, Tile
from city_builder.world.upgrades import tile_effects
from .modifiers import Multiplier, combine, BUILDING_INCOME, INCOME, JOBS, HAPPINESS


@dataclass(frozen=True)
class IncomeBreakdown:
    revenue: float      # After every multiplier
    upkeep: int
    net: int


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


# ================================================================
# POPULATION & JOBS
# ================================================================

def tile_population(tile: Tile) -> int:
    base = get_spec(tile.building).population
    if not base:
        return 0
    return int(base * tile_effects(tile).population_multiplier)


def compute_population(grid: Grid) -> int:
    return sum(tile_population(t) for t in grid.tiles())


def compute_jobs(grid: Grid, multipliers: List[Multiplier]) -> int:
    total = 0.0
    for tile in grid.tiles():
        base = get_spec(tile.building).jobs
        if base:
            total += base * tile_effects(tile).jobs_multiplier
    return int(total * combine(multipliers, JOBS))


# ================================================================
# INCOME
# ================================================================

def tile_revenue(grid: Grid, tile: Tile) -> float:
    """Raw revenue of one tile before any event or market multiplier."""
    spec = get_spec(tile.building)
    if spec.residential and grid.has_nearby(tile.x, tile.y, BuildingType.SHOP,
                                            NEARBY_SHOP_RADIUS):
        base = spec.revenue_near_shop
    else:
        base = spec.revenue
    if not base:
        return 0.0
    return base * tile_effects(tile).income_multiplier


def compute_income(grid: Grid, multipliers: List[Multiplier]) -> IncomeBreakdown:
    revenue = 0.0
    upkeep = 0
    for tile in grid.tiles():
        if tile.is_empty:
            continue
        raw = tile_revenue(grid, tile)
        if raw:
            revenue += raw * combine(multipliers, BUILDING_INCOME, tile.building)
        upkeep += get_spec(tile.building).upkeep

    revenue *= combine(multipliers, INCOME)
    return IncomeBreakdown(revenue=revenue, upkeep=upkeep,
                           net=int(round(revenue)) - upkeep)


# ================================================================
# HAPPINESS & ENVIRONMENT
# ================================================================

def happiness_target(grid: Grid, multipliers: List[Multiplier]) -> float:
    total = BASE_HAPPINESS
    for tile in grid.tiles():
        if tile.is_empty:
            continue
        total += get_spec(tile.building).happiness
        total += tile_effects(tile).happiness_bonus
    return _clamp(total * combine(multipliers, HAPPINESS))


def compute_happiness(previous: float, grid: Grid,
                      multipliers: List[Multiplier]) -> float:
    """Move a fraction of the way from the previous value to the target."""
    target = happiness_target(grid, multipliers)
    return _clamp(previous + (target - previous) * HAPPINESS_DRIFT)


def compute_environment(grid: Grid) -> float:
    total = BASE_ENVIRONMENT
    for tile in grid.tiles():
        if tile.is_empty:
            continue
        impact = get_spec(tile.building).environment
        # Upgrades can cancel a building's pollution, never turn it positive
        if impact < 0:
            impact = min(0.0, impact + tile_effects(tile).pollution_reduction)
        total += impact
    return _clamp(total)
