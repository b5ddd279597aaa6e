"""
Tests for per-tile population, income, happiness and environment
"""
import pytest

from city_builder.engine.economy import (
    compute_environment, compute_happiness, compute_income, compute_jobs,
    compute_population, happiness_target, tile_revenue,
)
from city_builder.engine.market import MarketCondition, MarketState, create_market
from city_builder.engine.modifiers import collect_multipliers
from city_builder.engine.random_events import ActiveEvent, get_template
from city_builder.world.buildings import BuildingType, ZoneType
from city_builder.world.map import Tile, create_grid


def _grid(*tiles, size=10):
    grid = create_grid(size)
    for tile in tiles:
        grid = grid.with_tile(tile)
    return grid


def _normal(*events):
    return collect_multipliers(create_market(), events)


class TestPopulation:
    """Tests for population and jobs totals"""

    def test_sum_of_tiles_and_idempotent(self):
        grid = _grid(Tile(0, 0, BuildingType.HOUSE), Tile(1, 0, BuildingType.APARTMENT),
                     Tile(2, 0, BuildingType.SHOP))

        first = compute_population(grid)

        assert first == 24
        assert compute_population(grid) == first

    def test_zoned_land_houses_nobody(self):
        grid = _grid(Tile(0, 0, zone=ZoneType.RESIDENTIAL))

        assert compute_population(grid) == 0

    def test_upgrade_multiplier_floors(self):
        grid = _grid(
            Tile(0, 0, BuildingType.HOUSE, level=2, upgrades=("Garden Extension",)),
            Tile(1, 0, BuildingType.APARTMENT, level=2, upgrades=("Penthouse Suites",)),
        )

        assert compute_population(grid) == 4 + 30

    def test_jobs_follow_market(self):
        grid = _grid(Tile(0, 0, BuildingType.FACTORY), Tile(1, 0, BuildingType.SHOP))
        boom = collect_multipliers(MarketState(MarketCondition.BOOM, 1.5), [])

        assert compute_jobs(grid, _normal()) == 14
        assert compute_jobs(grid, boom) == int(14 * 1.4)


class TestIncome:
    """Tests for revenue, upkeep and the nearby-shop bonus"""

    def test_house_near_shop_earns_more(self):
        """Test a house within two tiles of a shop uses the higher rate"""
        near = _grid(Tile(5, 6, BuildingType.SHOP), Tile(5, 7, BuildingType.HOUSE), size=20)
        alone = _grid(Tile(5, 7, BuildingType.HOUSE), size=20)

        with_shop = tile_revenue(near, near.tile_at(5, 7))
        without = tile_revenue(alone, alone.tile_at(5, 7))

        assert with_shop == 10
        assert without == 2
        assert with_shop > without

    def test_shop_three_tiles_away_does_not_count(self):
        grid = _grid(Tile(0, 0, BuildingType.HOUSE), Tile(3, 0, BuildingType.SHOP))

        assert compute_income(grid, _normal()).net == 2 + 5

    def test_upkeep_is_subtracted(self):
        grid = _grid(Tile(0, 0, BuildingType.PARK), Tile(1, 0, BuildingType.POWER_PLANT))

        income = compute_income(grid, _normal())

        assert income.upkeep == 9
        assert income.net == -9

    def test_market_intensity_scales_revenue_not_upkeep(self):
        grid = _grid(Tile(0, 0, BuildingType.FACTORY), Tile(1, 0, BuildingType.PARK))
        crash = collect_multipliers(MarketState(MarketCondition.CRASH, 0.5), [])

        assert compute_income(grid, crash).net == 6 - 1

    def test_factory_strike_zeroes_factories(self):
        grid = _grid(Tile(0, 0, BuildingType.FACTORY), Tile(1, 0, BuildingType.SHOP))

        income = compute_income(grid, _normal(ActiveEvent(get_template("factory_strike"), 80)))

        assert income.net == 5

    def test_upgrade_income_multiplier(self):
        grid = _grid(Tile(0, 0, BuildingType.SHOP, level=2, upgrades=("Neon Signs",)))

        assert compute_income(grid, _normal()).net == 7

    def test_empty_grid(self):
        income = compute_income(create_grid(5), _normal())

        assert (income.revenue, income.upkeep, income.net) == (0.0, 0, 0)


class TestHappinessAndEnvironment:
    """Tests for the wellbeing ratings"""

    def test_parks_raise_factories_lower(self):
        parks = _grid(Tile(0, 0, BuildingType.PARK))
        factory = _grid(Tile(0, 0, BuildingType.FACTORY))

        assert happiness_target(parks, _normal()) == 54.0
        assert happiness_target(factory, _normal()) == 47.0
        assert compute_environment(parks) == 54.0
        assert compute_environment(factory) == 44.0

    def test_happiness_drifts_toward_target(self):
        grid = _grid(Tile(0, 0, BuildingType.PARK))

        assert compute_happiness(50.0, grid, _normal()) == pytest.approx(50.8)
        assert compute_happiness(80.0, grid, _normal()) == pytest.approx(74.8)

    def test_ratings_are_clamped(self):
        plants = _grid(*[Tile(x, y, BuildingType.POWER_PLANT) for x in range(10) for y in range(2)])

        assert compute_environment(plants) == 0.0
        assert happiness_target(plants, _normal()) == 10.0
        assert compute_happiness(0.0, plants, _normal()) >= 0.0

    def test_pollution_filters_cancel_but_never_improve(self):
        """Test a filtered factory is cleaner than a plain one but no better than grass"""
        grass = compute_environment(create_grid(10))
        plain = _grid(Tile(0, 0, BuildingType.FACTORY))
        filtered = _grid(Tile(0, 0, BuildingType.FACTORY, level=2, upgrades=("Pollution Filters",)))

        assert compute_environment(plain) < compute_environment(filtered)
        assert compute_environment(filtered) == grass

    def test_solar_panels_do_not_lift_a_clean_house(self):
        plain = _grid(Tile(0, 0, BuildingType.HOUSE))
        solar = _grid(Tile(0, 0, BuildingType.HOUSE, level=2, upgrades=("Solar Panels",)))

        assert compute_environment(solar) == compute_environment(plain) == 50.0

    def test_every_factory_lowers_environment(self):
        """Test adding any factory, upgraded or not, never raises the rating"""
        grid = _grid(Tile(0, 0, BuildingType.PARK))
        before = compute_environment(grid)

        for upgrades in [(), ("Pollution Filters",), ("Pollution Filters", "Automation")]:
            after = compute_environment(
                grid.with_tile(Tile(1, 0, BuildingType.FACTORY, upgrades=upgrades)))
            assert after <= before
