"""
Achievements — Milestones the city can reach, and their rewards.

Definitions are immutable and shared. Whether a milestone has been
reached belongs to the game in progress: GameState.unlocked holds the
ids, and that set only ever grows. A city that shrinks after unlocking
"Metropolis" keeps it.
"""

from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Tuple

from city_builder.world.buildings import BuildingType
from .state import GameState


@dataclass(frozen=True)
class Reward:
    money: int = 0
    happiness_bonus: float = 0.0
    title: Optional[str] = None


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    reward: Reward
    condition: Callable[[GameState], bool] = field(compare=False)
    progress: Optional[Callable[[GameState], Tuple[int, int]]] = field(
        default=None, compare=False)


@dataclass(frozen=True)
class AchievementStatus:
    """What the achievements panel shows for one definition."""
    achievement: Achievement
    unlocked: bool
    current: Optional[int] = None
    target: Optional[int] = None


def _count(state: GameState, *buildings: BuildingType) -> int:
    return state.grid.count(*buildings)


ACHIEVEMENTS: List[Achievement] = [
    Achievement(
        "first_city", "City Founder",
        "Build your first city with 100 population",
        Reward(money=5000, title="City Founder"),
        condition=lambda s: s.stats.population >= 100,
        progress=lambda s: (s.stats.population, 100),
    ),
    Achievement(
        "metropolis", "Metropolis",
        "Reach 10,000 population",
        Reward(money=50000, happiness_bonus=10, title="Metropolitan Mayor"),
        condition=lambda s: s.stats.population >= 10000,
        progress=lambda s: (s.stats.population, 10000),
    ),
    Achievement(
        "green_city", "Green City",
        "Build 50 parks and maintain 80+ environment rating",
        Reward(money=20000),
        condition=lambda s: (_count(s, BuildingType.PARK) >= 50
                             and s.stats.environment >= 80),
        progress=lambda s: (_count(s, BuildingType.PARK), 50),
    ),
    Achievement(
        "economic_powerhouse", "Economic Powerhouse",
        "Generate $5,000 per tick in net income",
        Reward(money=100000, title="Economic Genius"),
        condition=lambda s: s.stats.income >= 5000,
        progress=lambda s: (s.stats.income, 5000),
    ),
    Achievement(
        "sports_capital", "Sports Capital",
        "Build a stadium, a school and three parks",
        Reward(money=30000, happiness_bonus=20),
        condition=lambda s: (_count(s, BuildingType.STADIUM) > 0
                             and _count(s, BuildingType.SCHOOL) > 0
                             and _count(s, BuildingType.PARK) >= 3),
    ),
    Achievement(
        "education_hub", "Education Hub",
        "Build 10 schools and 3 universities",
        Reward(money=25000),
        condition=lambda s: (_count(s, BuildingType.SCHOOL) >= 10
                             and _count(s, BuildingType.UNIVERSITY) >= 3),
        progress=lambda s: (_count(s, BuildingType.SCHOOL), 10),
    ),
    Achievement(
        "road_builder", "Transport Master",
        "Lay 50 road tiles",
        Reward(money=40000, title="Transport Tycoon"),
        condition=lambda s: _count(s, BuildingType.ROAD) >= 50,
        progress=lambda s: (_count(s, BuildingType.ROAD), 50),
    ),
    Achievement(
        "happy_citizens", "Happy Citizens",
        "Maintain 90+ happiness for 100 ticks",
        Reward(money=20000, happiness_bonus=5),
        condition=lambda s: s.happy_streak >= 100,
        progress=lambda s: (s.happy_streak, 100),
    ),
    Achievement(
        "millionaire_mayor", "Millionaire Mayor",
        "Accumulate $1,000,000 in city funds",
        Reward(happiness_bonus=25, title="Millionaire Mayor"),
        condition=lambda s: s.stats.money >= 1000000,
        progress=lambda s: (s.stats.money, 1000000),
    ),
]


def evaluate_achievements(state: GameState) -> List[Achievement]:
    """Definitions not yet unlocked whose condition now holds."""
    return [a for a in ACHIEVEMENTS
            if a.id not in state.unlocked and a.condition(state)]


def unlock_achievements(state: GameState) -> Tuple[GameState, List[Achievement]]:
    """Mark newly reached milestones and pay out their rewards."""
    newly = evaluate_achievements(state)
    if not newly:
        return state, []

    stats = state.stats
    titles = state.titles
    for achievement in newly:
        reward = achievement.reward
        stats = replace(
            stats,
            money=stats.money + reward.money,
            happiness=max(0.0, min(100.0, stats.happiness + reward.happiness_bonus)),
        )
        if reward.title and reward.title not in titles:
            titles = titles + (reward.title,)

    return replace(
        state,
        stats=stats,
        titles=titles,
        unlocked=state.unlocked | {a.id for a in newly},
    ), newly


def achievement_progress(state: GameState) -> List[AchievementStatus]:
    statuses = []
    for achievement in ACHIEVEMENTS:
        current = target = None
        if achievement.progress:
            current, target = achievement.progress(state)
        statuses.append(AchievementStatus(
            achievement, achievement.id in state.unlocked, current, target,
        ))
    return statuses


def completion_percentage(state: GameState) -> int:
    unlocked = sum(1 for a in ACHIEVEMENTS if a.id in state.unlocked)
    return round(unlocked / len(ACHIEVEMENTS) * 100)
