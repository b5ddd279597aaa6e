"""
Modifiers — One place where every multiplier in play is listed and
combined.

The market and each active event contribute Multiplier entries. A
consumer asks for a target (and optionally a building type) and gets
the product of every matching entry, in list order. Nothing else in
the engine multiplies economic factors on its own.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from city_builder.world.buildings import BuildingType
from .market import MarketState, market_multipliers
from .random_events import ActiveEvent

COST = "cost"
INCOME = "income"
JOBS = "jobs"
HAPPINESS = "happiness"
BUILDING_INCOME = "building_income"

# Event template global keys -> reducer targets
_EVENT_GLOBAL_TARGETS = {
    "income": INCOME,
    "costs": COST,
    "happiness": HAPPINESS,
}


@dataclass(frozen=True)
class Multiplier:
    source: str
    target: str
    value: float
    building: Optional[BuildingType] = None


def collect_multipliers(market: MarketState,
                        events: Iterable[ActiveEvent]) -> List[Multiplier]:
    """Market sources first, then each active event in activation order."""
    m = market_multipliers(market)
    source = f"market:{market.condition.value}"
    result = [
        Multiplier(source, COST, m.building_costs),
        Multiplier(source, INCOME, m.tax_income),
        Multiplier(source, JOBS, m.job_growth),
    ]
    for event in events:
        source = f"event:{event.kind}"
        for building, value in event.template.building_multipliers:
            result.append(Multiplier(source, BUILDING_INCOME, value, building))
        for key, value in event.template.global_multipliers:
            result.append(Multiplier(source, _EVENT_GLOBAL_TARGETS[key], value))
    return result


def combine(multipliers: Iterable[Multiplier], target: str,
            building: Optional[BuildingType] = None) -> float:
    """Product of all entries for `target` (and `building`, if given)."""
    product = 1.0
    for mult in multipliers:
        if mult.target != target:
            continue
        if building is not None and mult.building is not building:
            continue
        product *= mult.value
    return product
