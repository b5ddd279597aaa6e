"""
Building Catalog — Static cost, output, and display data for every
building type a tile can hold.

The simulation reads these tables but never mutates them. Placement
prices, per-tick revenue and upkeep, population, jobs, and the
happiness/environment pull of each building all live here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class BuildingType(Enum):
    EMPTY = "empty"              # Grass
    ROAD = "road"
    HOUSE = "house"
    APARTMENT = "apartment"
    SHOP = "shop"
    OFFICE = "office"
    FACTORY = "factory"
    PARK = "park"
    SCHOOL = "school"
    UNIVERSITY = "university"
    HOSPITAL = "hospital"
    STADIUM = "stadium"
    POWER_PLANT = "power_plant"


class ZoneType(Enum):
    NONE = "none"
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"


@dataclass(frozen=True)
class BuildingSpec:
    """Static description of one building type."""
    label: str
    color: Tuple[int, int, int]
    cost: int
    population: int = 0
    jobs: int = 0
    revenue: int = 0             # Per tick
    revenue_near_shop: int = 0   # Residential only; replaces revenue when a shop is close
    upkeep: int = 0              # Per tick, never scaled by multipliers
    happiness: float = 0.0
    environment: float = 0.0
    residential: bool = False
    commercial: bool = False


BUILDINGS: Dict[BuildingType, BuildingSpec] = {
    BuildingType.EMPTY: BuildingSpec("Grass", (144, 238, 144), cost=0),
    BuildingType.ROAD: BuildingSpec("Road", (47, 79, 79), cost=50, environment=-0.5),

    # Residential
    BuildingType.HOUSE: BuildingSpec(
        "House", (139, 69, 19), cost=100, population=4,
        revenue=2, revenue_near_shop=10, residential=True,
    ),
    BuildingType.APARTMENT: BuildingSpec(
        "Apartment", (160, 82, 45), cost=400, population=20,
        revenue=6, revenue_near_shop=30, happiness=-1.0, environment=-0.5,
        residential=True,
    ),

    # Commercial & Industrial
    BuildingType.SHOP: BuildingSpec(
        "Shop", (65, 105, 225), cost=200, jobs=4, revenue=5,
        happiness=0.5, commercial=True,
    ),
    BuildingType.OFFICE: BuildingSpec(
        "Office", (100, 149, 237), cost=600, jobs=12, revenue=15,
        environment=-0.5, commercial=True,
    ),
    BuildingType.FACTORY: BuildingSpec(
        "Factory", (105, 105, 105), cost=500, jobs=10, revenue=12,
        happiness=-3.0, environment=-6.0,
    ),
    BuildingType.POWER_PLANT: BuildingSpec(
        "Power Plant", (255, 140, 0), cost=1500, jobs=6, upkeep=8,
        happiness=-2.0, environment=-8.0,
    ),

    # Services & Leisure
    BuildingType.PARK: BuildingSpec(
        "Park", (34, 139, 34), cost=150, upkeep=1,
        happiness=4.0, environment=4.0,
    ),
    BuildingType.SCHOOL: BuildingSpec(
        "School", (255, 215, 0), cost=800, jobs=3, upkeep=5, happiness=2.0,
    ),
    BuildingType.UNIVERSITY: BuildingSpec(
        "University", (218, 165, 32), cost=3000, jobs=10, upkeep=15, happiness=3.0,
    ),
    BuildingType.HOSPITAL: BuildingSpec(
        "Hospital", (220, 20, 60), cost=2500, jobs=8, upkeep=12, happiness=5.0,
    ),
    BuildingType.STADIUM: BuildingSpec(
        "Stadium", (147, 112, 219), cost=5000, jobs=6, revenue=25, upkeep=5,
        happiness=6.0, environment=-1.0,
    ),
}

# Tint drawn under zoned tiles and the building each zone grows into
ZONE_COLORS: Dict[ZoneType, Tuple[int, int, int]] = {
    ZoneType.RESIDENTIAL: (120, 200, 120),
    ZoneType.COMMERCIAL: (120, 160, 220),
    ZoneType.INDUSTRIAL: (220, 200, 110),
}

ZONE_BUILDINGS: Dict[ZoneType, BuildingType] = {
    ZoneType.RESIDENTIAL: BuildingType.HOUSE,
    ZoneType.COMMERCIAL: BuildingType.SHOP,
    ZoneType.INDUSTRIAL: BuildingType.FACTORY,
}


def get_spec(building: BuildingType) -> BuildingSpec:
    return BUILDINGS[building]


def building_cost(building: BuildingType) -> int:
    """Base catalog price, before any market or event multiplier."""
    return BUILDINGS[building].cost
