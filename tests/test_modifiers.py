"""
Tests for the multiplier reducer
"""
import pytest

from city_builder.engine.market import MarketCondition, MarketState, create_market
from city_builder.engine.modifiers import (
    BUILDING_INCOME, COST, HAPPINESS, INCOME, JOBS, Multiplier, collect_multipliers, combine,
)
from city_builder.engine.random_events import ActiveEvent, get_template
from city_builder.world.buildings import BuildingType


class TestCollect:
    """Tests for the ordered list of multiplier sources"""

    def test_market_comes_first(self):
        events = [ActiveEvent(get_template("tech_boom"), 5)]

        multipliers = collect_multipliers(MarketState(MarketCondition.BOOM, 1.5), events)

        assert [m.target for m in multipliers[:3]] == [COST, INCOME, JOBS]
        assert multipliers[0].source == "market:boom"
        assert multipliers[-1] == Multiplier(
            "event:tech_boom", BUILDING_INCOME, 2.0, BuildingType.OFFICE)

    def test_event_global_keys_are_mapped(self):
        events = [ActiveEvent(get_template("university_grant"), 5)]

        multipliers = collect_multipliers(create_market(), events)

        assert combine(multipliers, HAPPINESS) == pytest.approx(1.1)


class TestCombine:
    """Tests for the product over matching entries"""

    def test_no_matches_is_identity(self):
        assert combine([], INCOME) == 1.0

    def test_building_filter(self):
        multipliers = [
            Multiplier("a", BUILDING_INCOME, 1.5, BuildingType.PARK),
            Multiplier("b", BUILDING_INCOME, 1.8, BuildingType.STADIUM),
            Multiplier("c", BUILDING_INCOME, 2.0, BuildingType.PARK),
        ]

        assert combine(multipliers, BUILDING_INCOME, BuildingType.PARK) == 3.0
        assert combine(multipliers, BUILDING_INCOME, BuildingType.HOUSE) == 1.0

    def test_market_and_events_multiply(self):
        events = [ActiveEvent(get_template("construction_boom"), 5)]

        multipliers = collect_multipliers(MarketState(MarketCondition.RECESSION, 0.8), events)

        assert combine(multipliers, COST) == pytest.approx(0.8 * 0.7)
        assert combine(multipliers, INCOME) == pytest.approx(0.8)
        assert combine(multipliers, JOBS) == pytest.approx(0.7)
