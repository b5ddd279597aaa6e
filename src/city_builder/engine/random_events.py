"""
Random Events — Timed windfalls and setbacks layered over the market.

Once the city is big enough, every tick carries a small chance that
one event from the catalog fires. Its one-off effects (cash, mood)
land immediately; its multipliers stay in force for `duration` ticks
while it sits in the active list.
"""

import random
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple

from city_builder.config import EVENT_TRIGGER_CHANCE, EVENT_MIN_POPULATION
from city_builder.world.buildings import BuildingType


@dataclass(frozen=True)
class EventTemplate:
    """Static definition of a random event."""
    kind: str
    title: str
    description: str
    duration: int                       # Ticks
    money_bonus: int = 0
    happiness_bonus: float = 0.0
    building_multipliers: Tuple[Tuple[BuildingType, float], ...] = ()
    # Keys: "income", "costs", "happiness"
    global_multipliers: Tuple[Tuple[str, float], ...] = ()


@dataclass(frozen=True)
class ActiveEvent:
    """A running instance of a template."""
    template: EventTemplate
    remaining: int

    @property
    def kind(self) -> str:
        return self.template.kind

    def is_expired(self) -> bool:
        return self.remaining <= 0

    def ticked(self) -> "ActiveEvent":
        return replace(self, remaining=self.remaining - 1)


# ============================================================
# Event Catalog
# ============================================================

RANDOM_EVENTS: List[EventTemplate] = [
    EventTemplate(
        "tech_boom", "Tech Boom!",
        "A major tech company is moving to your city! Offices generate double income.",
        duration=150, money_bonus=5000,
        building_multipliers=((BuildingType.OFFICE, 2.0),),
    ),
    EventTemplate(
        "tourism_surge", "Tourism Boom!",
        "Your city was featured in a travel magazine! Parks and stadiums draw crowds.",
        duration=100, happiness_bonus=20,
        building_multipliers=((BuildingType.PARK, 1.5), (BuildingType.STADIUM, 1.8)),
    ),
    EventTemplate(
        "factory_strike", "Factory Strike!",
        "Workers are on strike! Industrial buildings produce no income.",
        duration=80,
        building_multipliers=((BuildingType.FACTORY, 0.0),),
    ),
    EventTemplate(
        "sports_championship", "Championship Victory!",
        "Your city's team won the championship! Stadium income surges.",
        duration=120, money_bonus=10000, happiness_bonus=30,
        building_multipliers=((BuildingType.STADIUM, 3.0),),
    ),
    EventTemplate(
        "university_grant", "Research Grant!",
        "Your university received a massive research grant!",
        duration=200, money_bonus=15000,
        building_multipliers=((BuildingType.UNIVERSITY, 1.8), (BuildingType.SCHOOL, 1.4)),
        global_multipliers=(("happiness", 1.1),),
    ),
    EventTemplate(
        "celebrity_visit", "Celebrity Visit!",
        "A famous celebrity is visiting! Tourism income and a happiness boost.",
        duration=50, money_bonus=8000, happiness_bonus=25,
        global_multipliers=(("income", 1.2),),
    ),
    EventTemplate(
        "construction_boom", "Construction Boom!",
        "Materials are cheap and workers plentiful. Construction costs drop by 30%.",
        duration=100,
        global_multipliers=(("costs", 0.7),),
    ),
    EventTemplate(
        "power_outage", "Power Crisis!",
        "Rolling blackouts affect the city! Happiness and income drop.",
        duration=60, happiness_bonus=-15,
        global_multipliers=(("income", 0.8),),
    ),
]

EVENTS_BY_KIND: Dict[str, EventTemplate] = {e.kind: e for e in RANDOM_EVENTS}


def should_trigger(state: Any, rng: random.Random) -> bool:
    """Roll for a new event. No draw is made while the city is small."""
    if state.stats.population <= EVENT_MIN_POPULATION:
        return False
    return rng.random() < EVENT_TRIGGER_CHANCE


def pick_event(rng: random.Random) -> EventTemplate:
    return rng.choice(RANDOM_EVENTS)


def start_event(state: Any, template: EventTemplate) -> Any:
    """Apply a template's immediate effects and add it to the active list."""
    stats = state.stats
    if template.money_bonus:
        stats = replace(stats, money=stats.money + template.money_bonus)
    if template.happiness_bonus:
        stats = replace(
            stats,
            happiness=max(0.0, min(100.0, stats.happiness + template.happiness_bonus)),
        )
    return replace(
        state,
        stats=stats,
        active_events=state.active_events + (ActiveEvent(template, template.duration),),
    )


def advance_events(
    events: Tuple[ActiveEvent, ...],
) -> Tuple[Tuple[ActiveEvent, ...], List[ActiveEvent]]:
    """Decrement every event; return (still running, just expired)."""
    remaining: List[ActiveEvent] = []
    expired: List[ActiveEvent] = []
    for event in events:
        ticked = event.ticked()
        if ticked.is_expired():
            expired.append(ticked)
        else:
            remaining.append(ticked)
    return tuple(remaining), expired


def get_template(kind: str) -> Optional[EventTemplate]:
    return EVENTS_BY_KIND.get(kind)
