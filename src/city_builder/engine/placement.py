"""
Placement — Build, zone, or bulldoze one tile.

Every call returns a whole new GameState with the funds change and the
tile change applied together, or the input state untouched when the
action is rejected. Rejections are never errors at this boundary:
clicking off the map or on something unaffordable simply does nothing.

try_place() is the strict variant for callers that want to know why an
action was refused.
"""

import math
from dataclasses import dataclass, replace
from typing import Optional, Union

from city_builder.config import ZONE_COST
from city_builder.core.errors import CityError, InsufficientFunds, OutOfBounds, UnknownTool
from city_builder.world.buildings import BuildingType, ZoneType, building_cost
from .economy import compute_population
from .modifiers import COST, collect_multipliers, combine
from .state import GameState

BULLDOZE = "bulldoze"
ZONE_PREFIX = "zone_"


@dataclass(frozen=True)
class Tool:
    """A parsed tool selection: exactly one of building / zone, or bulldoze."""
    name: str
    building: Optional[BuildingType] = None
    zone: Optional[ZoneType] = None

    @property
    def is_bulldoze(self) -> bool:
        return self.building is None and self.zone is None


def parse_tool(name: Union[str, "Tool"]) -> Tool:
    if isinstance(name, Tool):
        return name
    # The grass type doubles as the bulldozer
    if name in (BULLDOZE, BuildingType.EMPTY.value):
        return Tool(BULLDOZE)
    if name.startswith(ZONE_PREFIX):
        try:
            zone = ZoneType(name[len(ZONE_PREFIX):])
        except ValueError:
            raise UnknownTool(name) from None
        if zone is ZoneType.NONE:
            raise UnknownTool(name)
        return Tool(name, zone=zone)
    try:
        return Tool(name, building=BuildingType(name))
    except ValueError:
        raise UnknownTool(name) from None


def cost_multiplier(state: GameState) -> float:
    return combine(collect_multipliers(state.market, state.active_events), COST)


def effective_cost(state: GameState, base_cost: int) -> int:
    """Catalog price adjusted by the market and any running events."""
    return int(round(base_cost * cost_multiplier(state)))


def tool_cost(state: GameState, tool: Union[str, Tool]) -> int:
    """What the player pays right now to use `tool` (0 for bulldoze)."""
    parsed = parse_tool(tool)
    if parsed.is_bulldoze:
        return 0
    if parsed.zone is not None:
        return effective_cost(state, ZONE_COST)
    return effective_cost(state, building_cost(parsed.building))


def try_place(state: GameState, x: int, y: int, tool: Union[str, Tool]) -> GameState:
    """Apply a placement or raise the reason it cannot happen."""
    parsed = parse_tool(tool)
    grid = state.grid
    if not grid.in_bounds(x, y):
        raise OutOfBounds(x, y, grid.size)

    tile = grid.tile_at(x, y)
    stats = state.stats

    if parsed.is_bulldoze:
        if tile == tile.cleared():
            return state
        refund = math.floor(building_cost(tile.building) / 2)
        new_grid = grid.with_tile(tile.cleared())
        return replace(
            state,
            grid=new_grid,
            stats=replace(stats, money=stats.money + refund,
                          population=compute_population(new_grid)),
        )

    # Zones only go on bare land; rezoning to the same zone changes nothing
    if parsed.zone is not None and (tile.zone is parsed.zone or not tile.is_empty):
        return state
    if tile.building is parsed.building:
        return state

    cost = tool_cost(state, parsed)
    if stats.money < cost:
        raise InsufficientFunds(cost, stats.money)

    if parsed.zone is not None:
        # Zoned land fills in on later ticks; population is left alone here
        return replace(
            state,
            grid=grid.with_tile(replace(tile, zone=parsed.zone)),
            stats=replace(stats, money=stats.money - cost),
        )

    new_grid = grid.with_building(x, y, parsed.building)
    return replace(
        state,
        grid=new_grid,
        stats=replace(stats, money=stats.money - cost,
                      population=compute_population(new_grid)),
    )


def place(state: GameState, x: int, y: int, tool: Union[str, Tool]) -> GameState:
    try:
        return try_place(state, x, y, tool)
    except CityError:
        return state
