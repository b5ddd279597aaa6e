"""
Tests for offering and applying building upgrades
"""
from dataclasses import replace

import pytest

from city_builder.core.errors import InsufficientFunds, InvalidUpgradeRequirement
from city_builder.engine.market import MarketCondition, MarketState
from city_builder.engine.placement import place
from city_builder.engine.upgrades import (
    apply_upgrade, available_upgrades, check_upgrade, try_upgrade,
)
from city_builder.world.upgrades import find_upgrade
from city_builder.world.buildings import BuildingType


def _names(options):
    return [o.name for o in options]


class TestAvailableUpgrades:
    """Tests for which options are offered"""

    def test_house_options(self, state):
        s = place(state, 0, 0, "house")

        assert _names(available_upgrades(s, 0, 0)) == ["Solar Panels", "Garden Extension"]

    def test_applied_option_is_not_offered_again(self, state):
        s = apply_upgrade(place(state, 0, 0, "house"), 0, 0, "Solar Panels")

        assert _names(available_upgrades(s, 0, 0)) == ["Garden Extension"]

    def test_adjacency_and_level_requirements(self, state):
        """Test Delivery Service needs a road, Flagship Store needs level 2"""
        s = place(state, 5, 5, "shop")
        assert _names(available_upgrades(s, 5, 5)) == ["Neon Signs"]

        s = place(s, 6, 6, "road")
        assert _names(available_upgrades(s, 5, 5)) == ["Neon Signs", "Delivery Service"]

        s = apply_upgrade(s, 5, 5, "Neon Signs")
        assert _names(available_upgrades(s, 5, 5)) == ["Delivery Service", "Flagship Store"]

    def test_population_requirement(self, state):
        s = place(state, 0, 0, "apartment")
        assert available_upgrades(s, 0, 0) == []

        s = replace(s, stats=replace(s.stats, population=500))
        assert _names(available_upgrades(s, 0, 0)) == ["Penthouse Suites"]

    def test_no_catalog_or_off_grid(self, state):
        assert available_upgrades(state, 0, 0) == []
        assert available_upgrades(state, 50, 50) == []

    def test_check_raises_for_unmet_requirement(self, state):
        s = place(state, 0, 0, "shop")
        option = find_upgrade(BuildingType.SHOP, "Flagship Store")

        with pytest.raises(InvalidUpgradeRequirement):
            check_upgrade(s, s.grid.tile_at(0, 0), option)


class TestApplyUpgrade:
    """Tests for buying an upgrade"""

    def test_applies_cost_level_and_effects(self, state):
        s = place(state, 0, 0, "house")

        upgraded = apply_upgrade(s, 0, 0, "Solar Panels")

        tile = upgraded.grid.tile_at(0, 0)
        assert upgraded.stats.money == s.stats.money - 500
        assert tile.level == 2
        assert tile.upgrades == ("Solar Panels",)

    def test_population_is_recomputed(self, state):
        s = place(state, 0, 0, "apartment")
        s = replace(s, stats=replace(s.stats, population=500))

        upgraded = apply_upgrade(s, 0, 0, "Penthouse Suites")

        assert upgraded.stats.population == 30

    def test_boom_price(self, state):
        s = place(state, 0, 0, "house")
        s = replace(s, market=MarketState(MarketCondition.BOOM, 1.5))

        assert apply_upgrade(s, 0, 0, "Solar Panels").stats.money == s.stats.money - 650

    @pytest.mark.parametrize("x,y,name", [
        (0, 0, "Helipad"),
        (1, 1, "Solar Panels"),
        (-1, 0, "Solar Panels"),
        (0, 0, "Penthouse Suites"),
    ])
    def test_rejections_are_noops(self, state, x, y, name):
        s = place(state, 0, 0, "house")

        assert apply_upgrade(s, x, y, name) is s

    def test_unaffordable_is_noop(self, state):
        s = place(state, 0, 0, "house")
        s = replace(s, stats=replace(s.stats, money=499))

        assert apply_upgrade(s, 0, 0, "Solar Panels") is s
        with pytest.raises(InsufficientFunds):
            try_upgrade(s, 0, 0, "Solar Panels")

    def test_same_upgrade_twice_is_noop(self, state):
        s = apply_upgrade(place(state, 0, 0, "house"), 0, 0, "Solar Panels")

        assert apply_upgrade(s, 0, 0, "Solar Panels") is s
