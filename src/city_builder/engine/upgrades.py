"""
Upgrades — Offer and apply building improvements.

Options whose requirements are unmet are left out of the offered list
rather than reported as errors. Applying an option works like a
placement: it costs money, bumps the tile's level, and either happens
in full or not at all.
"""

from dataclasses import replace
from typing import List

from city_builder.core.errors import CityError, InsufficientFunds, InvalidUpgradeRequirement
from city_builder.world.map import Tile
from city_builder.world.upgrades import UpgradeOption, find_upgrade, upgrades_for
from .economy import compute_population
from .placement import effective_cost
from .state import GameState


def check_upgrade(state: GameState, tile: Tile, option: UpgradeOption) -> None:
    """Raise InvalidUpgradeRequirement if `option` cannot go on `tile`."""
    if option.name in tile.upgrades:
        raise InvalidUpgradeRequirement(f"{option.name} is already installed")

    req = option.requirements
    if not req:
        return

    if req.min_level and tile.level < req.min_level:
        raise InvalidUpgradeRequirement(
            f"{option.name} needs level {req.min_level} (tile is level {tile.level})")

    if req.adjacent_buildings:
        adjacent = {t.building for t in state.grid.neighbors(tile.x, tile.y)}
        if not any(b in adjacent for b in req.adjacent_buildings):
            wanted = ", ".join(b.value for b in req.adjacent_buildings)
            raise InvalidUpgradeRequirement(f"{option.name} needs an adjacent {wanted}")

    if req.min_population and state.stats.population < req.min_population:
        raise InvalidUpgradeRequirement(
            f"{option.name} needs a population of {req.min_population}")


def available_upgrades(state: GameState, x: int, y: int) -> List[UpgradeOption]:
    if not state.grid.in_bounds(x, y):
        return []
    tile = state.grid.tile_at(x, y)
    offered = []
    for option in upgrades_for(tile.building):
        try:
            check_upgrade(state, tile, option)
        except InvalidUpgradeRequirement:
            continue
        offered.append(option)
    return offered


def try_upgrade(state: GameState, x: int, y: int, name: str) -> GameState:
    tile = state.grid.tile_at(x, y)
    option = find_upgrade(tile.building, name)
    if not option:
        raise InvalidUpgradeRequirement(
            f"No upgrade named {name!r} for {tile.building.value}")
    check_upgrade(state, tile, option)

    cost = effective_cost(state, option.cost)
    if state.stats.money < cost:
        raise InsufficientFunds(cost, state.stats.money)

    upgraded = replace(tile, level=tile.level + 1, upgrades=tile.upgrades + (name,))
    new_grid = state.grid.with_tile(upgraded)
    return replace(
        state,
        grid=new_grid,
        stats=replace(state.stats, money=state.stats.money - cost,
                      population=compute_population(new_grid)),
    )


def apply_upgrade(state: GameState, x: int, y: int, name: str) -> GameState:
    try:
        return try_upgrade(state, x, y, name)
    except CityError:
        return state
