"""
Tests for the market boom/bust cycle
"""
import random

import pytest

from city_builder.engine.market import (
    MarketCondition, MarketState, MarketTrend, advance_market, create_market,
    describe_market, market_multipliers,
)


class TestCountdown:
    """Tests for the ticks between market reviews"""

    def test_initial_market(self):
        market = create_market()

        assert market.condition is MarketCondition.NORMAL
        assert market.intensity == 1.0
        assert market.time_remaining == 100
        assert market.trend is MarketTrend.STABLE

    def test_mid_countdown_never_transitions(self, fixed_rng):
        """Test a countdown above zero only decrements and draws nothing"""
        rng = fixed_rng(0.0)
        market = MarketState(MarketCondition.RECESSION, 0.8, 5, MarketTrend.DECLINING)

        advanced = advance_market(market, rng)

        assert advanced == MarketState(MarketCondition.RECESSION, 0.8, 4, MarketTrend.DECLINING)
        assert rng.calls == 0

    def test_countdown_floors_at_zero(self, fixed_rng):
        market = MarketState(time_remaining=0)

        advanced = advance_market(market, fixed_rng(0.5))

        assert 50 <= advanced.time_remaining < 200


class TestTransitions:
    """Tests for the draw taken when the countdown reaches zero"""

    def test_normal_at_point_one_goes_to_boom(self, fixed_rng):
        """Test a 0.1 draw from normal lands on boom"""
        # Arrange
        market = MarketState(time_remaining=1)

        # Act
        advanced = advance_market(market, fixed_rng(0.1))

        # Assert
        assert advanced.condition is MarketCondition.BOOM
        assert advanced.intensity == 1.5
        assert advanced.trend is MarketTrend.IMPROVING
        assert 50 <= advanced.time_remaining < 200

    @pytest.mark.parametrize("start,roll,condition,intensity,trend", [
        (MarketCondition.BOOM, 0.10, MarketCondition.NORMAL, 1.0, MarketTrend.DECLINING),
        (MarketCondition.BOOM, 0.35, MarketCondition.RECESSION, 0.7, MarketTrend.DECLINING),
        (MarketCondition.NORMAL, 0.30, MarketCondition.RECESSION, 0.8, MarketTrend.DECLINING),
        (MarketCondition.RECESSION, 0.20, MarketCondition.NORMAL, 1.0, MarketTrend.IMPROVING),
        (MarketCondition.RECESSION, 0.45, MarketCondition.CRASH, 0.5, MarketTrend.DECLINING),
        (MarketCondition.CRASH, 0.50, MarketCondition.RECESSION, 0.7, MarketTrend.IMPROVING),
        (MarketCondition.CRASH, 0.70, MarketCondition.NORMAL, 1.0, MarketTrend.IMPROVING),
    ])
    def test_transition_table(self, fixed_rng, start, roll, condition, intensity, trend):
        market = MarketState(start, 1.0, 1, MarketTrend.STABLE)

        advanced = advance_market(market, fixed_rng(roll))

        assert advanced.condition is condition
        assert advanced.intensity == intensity
        assert advanced.trend is trend

    @pytest.mark.parametrize("start,roll", [
        (MarketCondition.BOOM, 0.40),
        (MarketCondition.NORMAL, 0.95),
        (MarketCondition.RECESSION, 0.50),
        (MarketCondition.CRASH, 0.80),
    ])
    def test_high_roll_stays_put(self, fixed_rng, start, roll):
        """Test a draw past both checks keeps condition, intensity and trend"""
        market = MarketState(start, 1.2, 1, MarketTrend.DECLINING)

        advanced = advance_market(market, fixed_rng(roll))

        assert (advanced.condition, advanced.intensity, advanced.trend) == \
            (start, 1.2, MarketTrend.DECLINING)
        assert advanced.time_remaining >= 50

    def test_intensity_stays_positive_over_long_run(self):
        """Test thousands of ticks never produce a non-positive intensity"""
        rng = random.Random(42)
        market = create_market()
        seen = set()

        for _ in range(20000):
            previous = market
            market = advance_market(market, rng)
            assert market.intensity > 0
            if market.condition is not previous.condition:
                assert previous.time_remaining == 1
            seen.add(market.condition)

        assert seen == set(MarketCondition)


class TestMultipliers:
    """Tests for what each condition does to the economy"""

    @pytest.mark.parametrize("condition,costs,jobs", [
        (MarketCondition.BOOM, 1.3, 1.4),
        (MarketCondition.NORMAL, 1.0, 1.0),
        (MarketCondition.RECESSION, 0.8, 0.7),
        (MarketCondition.CRASH, 0.6, 0.4),
    ])
    def test_condition_multipliers(self, condition, costs, jobs):
        m = market_multipliers(MarketState(condition, intensity=0.9))

        assert m.building_costs == costs
        assert m.job_growth == jobs
        assert m.tax_income == 0.9

    def test_description(self):
        assert describe_market(create_market()) == "Normal market conditions"
