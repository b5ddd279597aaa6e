"""
Market — The boom/bust cycle that scales building prices, tax income,
and job growth.

The market sits in one of four conditions. Each tick the countdown
drops by one; when it hits zero a single uniform draw decides where
the economy goes next, and a fresh countdown is rolled.

Transition checks per condition are two independent `r < p` tests,
taken in order, first match wins. Anything else keeps the current
condition.
"""

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Tuple

from city_builder.config import (
    MARKET_INITIAL_TIME, MARKET_MIN_DURATION, MARKET_MAX_DURATION,
)


class MarketCondition(Enum):
    BOOM = "boom"
    NORMAL = "normal"
    RECESSION = "recession"
    CRASH = "crash"


class MarketTrend(Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


@dataclass(frozen=True)
class MarketState:
    condition: MarketCondition = MarketCondition.NORMAL
    intensity: float = 1.0               # Tax income multiplier, always > 0
    time_remaining: int = MARKET_INITIAL_TIME
    trend: MarketTrend = MarketTrend.STABLE


@dataclass(frozen=True)
class MarketMultipliers:
    building_costs: float
    tax_income: float
    job_growth: float


# (threshold, destination, intensity, trend), checked in order
TRANSITIONS: Dict[MarketCondition, List[Tuple[float, MarketCondition, float, MarketTrend]]] = {
    MarketCondition.BOOM: [
        (0.30, MarketCondition.NORMAL, 1.0, MarketTrend.DECLINING),
        (0.40, MarketCondition.RECESSION, 0.7, MarketTrend.DECLINING),
    ],
    MarketCondition.NORMAL: [
        (0.20, MarketCondition.BOOM, 1.5, MarketTrend.IMPROVING),
        (0.40, MarketCondition.RECESSION, 0.8, MarketTrend.DECLINING),
    ],
    MarketCondition.RECESSION: [
        (0.40, MarketCondition.NORMAL, 1.0, MarketTrend.IMPROVING),
        (0.50, MarketCondition.CRASH, 0.5, MarketTrend.DECLINING),
    ],
    MarketCondition.CRASH: [
        (0.60, MarketCondition.RECESSION, 0.7, MarketTrend.IMPROVING),
        (0.80, MarketCondition.NORMAL, 1.0, MarketTrend.IMPROVING),
    ],
}

BUILDING_COST_MULTIPLIERS: Dict[MarketCondition, float] = {
    MarketCondition.BOOM: 1.3,
    MarketCondition.RECESSION: 0.8,
    MarketCondition.CRASH: 0.6,
}

JOB_GROWTH_MULTIPLIERS: Dict[MarketCondition, float] = {
    MarketCondition.BOOM: 1.4,
    MarketCondition.RECESSION: 0.7,
    MarketCondition.CRASH: 0.4,
}

DESCRIPTIONS: Dict[MarketCondition, str] = {
    MarketCondition.BOOM: "Economic Boom! High costs but great income!",
    MarketCondition.NORMAL: "Normal market conditions",
    MarketCondition.RECESSION: "Recession - Lower costs but reduced income",
    MarketCondition.CRASH: "Market Crash! Cheap buildings but terrible income!",
}


def create_market() -> MarketState:
    return MarketState()


def advance_market(market: MarketState, rng: random.Random) -> MarketState:
    """Run one tick of the market countdown, transitioning at zero."""
    remaining = max(0, market.time_remaining - 1)
    if remaining > 0:
        return replace(market, time_remaining=remaining)

    roll = rng.random()
    condition, intensity, trend = market.condition, market.intensity, market.trend
    for threshold, dest, dest_intensity, dest_trend in TRANSITIONS[market.condition]:
        if roll < threshold:
            condition, intensity, trend = dest, dest_intensity, dest_trend
            break

    return MarketState(
        condition=condition,
        intensity=intensity,
        time_remaining=rng.randrange(MARKET_MIN_DURATION, MARKET_MAX_DURATION),
        trend=trend,
    )


def market_multipliers(market: MarketState) -> MarketMultipliers:
    return MarketMultipliers(
        building_costs=BUILDING_COST_MULTIPLIERS.get(market.condition, 1.0),
        tax_income=market.intensity,
        job_growth=JOB_GROWTH_MULTIPLIERS.get(market.condition, 1.0),
    )


def describe_market(market: MarketState) -> str:
    return DESCRIPTIONS[market.condition]
