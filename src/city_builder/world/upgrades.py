"""
Upgrade Catalog — Optional improvements per building type.

Each option has a price, a set of effect multipliers/bonuses, and
optional requirements. A tile remembers which options it has taken;
tile_effects() folds them into one set of numbers for the economy.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .buildings import BuildingType


@dataclass(frozen=True)
class UpgradeEffects:
    population_multiplier: float = 1.0
    jobs_multiplier: float = 1.0
    income_multiplier: float = 1.0
    happiness_bonus: float = 0.0
    pollution_reduction: float = 0.0


@dataclass(frozen=True)
class UpgradeRequirements:
    min_level: Optional[int] = None
    adjacent_buildings: Tuple[BuildingType, ...] = ()   # Any one of these
    min_population: Optional[int] = None


@dataclass(frozen=True)
class UpgradeOption:
    name: str
    description: str
    cost: int
    effects: UpgradeEffects = field(default_factory=UpgradeEffects)
    requirements: Optional[UpgradeRequirements] = None


BUILDING_UPGRADES: Dict[BuildingType, List[UpgradeOption]] = {
    BuildingType.HOUSE: [
        UpgradeOption(
            "Solar Panels", "Add rooftop solar panels for eco-friendly energy",
            cost=500,
            effects=UpgradeEffects(happiness_bonus=5, pollution_reduction=2),
        ),
        UpgradeOption(
            "Garden Extension", "Beautiful gardens increase property value",
            cost=300,
            effects=UpgradeEffects(happiness_bonus=8, population_multiplier=1.2),
        ),
    ],
    BuildingType.APARTMENT: [
        UpgradeOption(
            "Penthouse Suites", "Luxury top floors for a growing city",
            cost=2000,
            effects=UpgradeEffects(population_multiplier=1.5, income_multiplier=1.3),
            requirements=UpgradeRequirements(min_population=500),
        ),
    ],
    BuildingType.SHOP: [
        UpgradeOption(
            "Neon Signs", "Bright signs attract more customers",
            cost=800,
            effects=UpgradeEffects(income_multiplier=1.4, jobs_multiplier=1.2),
        ),
        UpgradeOption(
            "Delivery Service", "Online ordering and delivery increases revenue",
            cost=1200,
            effects=UpgradeEffects(income_multiplier=1.6, happiness_bonus=3),
            requirements=UpgradeRequirements(adjacent_buildings=(BuildingType.ROAD,)),
        ),
        UpgradeOption(
            "Flagship Store", "A landmark storefront for an established business",
            cost=2500,
            effects=UpgradeEffects(income_multiplier=2.0, jobs_multiplier=1.5),
            requirements=UpgradeRequirements(min_level=2),
        ),
    ],
    BuildingType.FACTORY: [
        UpgradeOption(
            "Pollution Filters", "Advanced filtration reduces environmental impact",
            cost=2000,
            effects=UpgradeEffects(pollution_reduction=10, happiness_bonus=5),
        ),
        UpgradeOption(
            "Automation", "Robotic systems increase efficiency",
            cost=3500,
            effects=UpgradeEffects(income_multiplier=1.8, jobs_multiplier=0.8),
        ),
    ],
    BuildingType.PARK: [
        UpgradeOption(
            "Playground Equipment", "Swings and slides make families happier",
            cost=600,
            effects=UpgradeEffects(happiness_bonus=12, jobs_multiplier=1.5),
        ),
        UpgradeOption(
            "Food Trucks", "Mobile vendors provide snacks and jobs",
            cost=400,
            effects=UpgradeEffects(jobs_multiplier=2.0, income_multiplier=1.3),
        ),
    ],
    BuildingType.HOSPITAL: [
        UpgradeOption(
            "Emergency Helicopter", "Faster emergency response saves more lives",
            cost=5000,
            effects=UpgradeEffects(happiness_bonus=15, jobs_multiplier=1.3),
        ),
        UpgradeOption(
            "Research Wing", "Medical research brings prestige and funding",
            cost=8000,
            effects=UpgradeEffects(income_multiplier=1.5, happiness_bonus=10,
                                   jobs_multiplier=1.4),
            requirements=UpgradeRequirements(adjacent_buildings=(BuildingType.UNIVERSITY,)),
        ),
    ],
    BuildingType.SCHOOL: [
        UpgradeOption(
            "Computer Lab", "Modern technology prepares students for the future",
            cost=1500,
            effects=UpgradeEffects(happiness_bonus=8, jobs_multiplier=1.2),
        ),
        UpgradeOption(
            "Sports Complex", "Athletic facilities improve student health and happiness",
            cost=2500,
            effects=UpgradeEffects(happiness_bonus=15, population_multiplier=1.1),
        ),
    ],
}


def upgrades_for(building: BuildingType) -> List[UpgradeOption]:
    return BUILDING_UPGRADES.get(building, [])


def find_upgrade(building: BuildingType, name: str) -> Optional[UpgradeOption]:
    for option in upgrades_for(building):
        if option.name == name:
            return option
    return None


def tile_effects(tile) -> UpgradeEffects:
    """Combined effects of every upgrade applied to a tile."""
    if not tile.upgrades:
        return UpgradeEffects()
    pop = jobs = income = 1.0
    happiness = pollution = 0.0
    for name in tile.upgrades:
        option = find_upgrade(tile.building, name)
        if not option:
            continue
        fx = option.effects
        pop *= fx.population_multiplier
        jobs *= fx.jobs_multiplier
        income *= fx.income_multiplier
        happiness += fx.happiness_bonus
        pollution += fx.pollution_reduction
    return UpgradeEffects(pop, jobs, income, happiness, pollution)
