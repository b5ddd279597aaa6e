"""
Simulation Engine — The session that owns one city.

Holds the current GameState and the single random source, and commits
transitions one at a time under a lock:
  - place() / upgrade() / select_tool(): player actions, run
    synchronously from the UI
  - tick(): one pass of the tick pipeline, run by the background clock
    every TICK_INTERVAL seconds (or by hand in tests and headless runs)

A reader that grabs `engine.state` always sees a complete snapshot.
Stopping the clock lets an in-flight tick finish before the thread
exits.
"""

import random
import threading
from dataclasses import replace
from typing import Any, Dict, List, Optional

from city_builder.config import GRID_SIZE, START_MONEY, RANDOM_SEED, TICK_INTERVAL, ZONE_POLICY
from city_builder.core.errors import CityError
from city_builder.core.events import EventBus, Event, EventType
from city_builder.core.logger import CityLogger
from city_builder.world.buildings import get_spec
from city_builder.world.upgrades import UpgradeOption
from .achievements import AchievementStatus, achievement_progress
from .market import describe_market
from .placement import parse_tool, try_place
from .state import GameState, create_game_state
from .tick import TickResult, ZonePolicy, run_tick
from .upgrades import available_upgrades, try_upgrade


class CityEngine:
    """Top-level simulation coordinator."""

    def __init__(self, size: int = GRID_SIZE, money: int = START_MONEY,
                 seed: Optional[int] = RANDOM_SEED,
                 zone_policy: Optional[str] = None,
                 tick_interval: float = TICK_INTERVAL) -> None:
        self.state: GameState = create_game_state(size, money)
        self.rng = random.Random(seed)
        self.zone_policy = ZonePolicy(zone_policy or ZONE_POLICY)
        self.tick_interval = tick_interval
        self.event_bus = EventBus()
        self.logger = CityLogger()
        self.lock = threading.RLock()

        self.paused: bool = False
        self.running: bool = False
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

        self.logger.log_event(
            "ENGINE", f"New city: {size}x{size}, ${money}, zones={self.zone_policy.value}")

    # ================================================================
    # PLAYER ACTIONS
    # ================================================================

    def select_tool(self, tool: str) -> bool:
        try:
            parse_tool(tool)
        except CityError as e:
            self.logger.debug("TOOL", str(e))
            return False
        with self.lock:
            self.state = replace(self.state, selected_tool=tool)
        return True

    def place(self, x: int, y: int, tool: Optional[str] = None) -> bool:
        """Apply a tool at (x, y). Returns False when nothing changed."""
        with self.lock:
            before = self.state
            tool = tool or before.selected_tool
            try:
                after = try_place(before, x, y, tool)
            except CityError as e:
                self.logger.debug("PLACE", f"Rejected {tool} at ({x}, {y}): {e}")
                return False
            if after is before:
                return False

            self.state = after
            self._emit_placement(before, after, x, y, tool)
            self.event_bus.process(after.tick)
            return True

    def upgrade(self, x: int, y: int, name: str) -> bool:
        with self.lock:
            before = self.state
            try:
                after = try_upgrade(before, x, y, name)
            except CityError as e:
                self.logger.debug("UPGRADE", f"Rejected {name} at ({x}, {y}): {e}")
                return False

            self.state = after
            tile = after.grid.tile_at(x, y)
            self.event_bus.emit(Event(
                event_type=EventType.UPGRADE_APPLIED.value,
                origin=(x, y),
                data={"upgrade": name, "building": tile.building.value,
                      "level": tile.level},
            ))
            self.event_bus.process(after.tick)
            return True

    def available_upgrades(self, x: int, y: int) -> List[UpgradeOption]:
        return available_upgrades(self.state, x, y)

    def _emit_placement(self, before: GameState, after: GameState,
                        x: int, y: int, tool: str) -> None:
        parsed = parse_tool(tool)
        old_tile = before.grid.tile_at(x, y)
        if parsed.is_bulldoze:
            etype = EventType.BUILDING_BULLDOZED
            data = {"building": old_tile.building.value}
        elif parsed.zone is not None:
            etype = EventType.ZONE_PLACED
            data = {"zone": parsed.zone.value}
        else:
            etype = EventType.BUILDING_PLACED
            data = {"building": parsed.building.value,
                    "label": get_spec(parsed.building).label}
        data["money_delta"] = after.stats.money - before.stats.money
        self.event_bus.emit(Event(event_type=etype.value, origin=(x, y), data=data))

    # ================================================================
    # MAIN UPDATE
    # ================================================================

    def tick(self) -> TickResult:
        with self.lock:
            before = self.state
            result = run_tick(before, self.rng, self.zone_policy)
            self.state = result.state
            self._emit_tick_events(before, result)
            self.event_bus.process(result.state.tick)
            return result

    def update(self) -> Optional[TickResult]:
        if self.paused:
            return None
        return self.tick()

    def _emit_tick_events(self, before: GameState, result: TickResult) -> None:
        state = result.state

        if result.market_changed:
            self.logger.log_event("MARKET", describe_market(state.market))
            self.event_bus.emit(Event(
                event_type=EventType.MARKET_CHANGED.value,
                data={
                    "from": before.market.condition.value,
                    "to": state.market.condition.value,
                    "intensity": state.market.intensity,
                    "trend": state.market.trend.value,
                },
            ))

        for event in result.expired_events:
            self.logger.log_event("EVENT", f"{event.template.title} has ended.")
            self.event_bus.emit(Event(
                event_type=EventType.RANDOM_EVENT_ENDED.value,
                data={"kind": event.kind, "title": event.template.title},
            ))

        for event in result.started_events:
            self.logger.log_event("EVENT", f"{event.template.title} {event.template.description}")
            self.event_bus.emit(Event(
                event_type=EventType.RANDOM_EVENT_STARTED.value,
                data={"kind": event.kind, "title": event.template.title,
                      "duration": event.remaining},
            ))

        for achievement in result.unlocked:
            self.logger.log_event("ACHIEVEMENT", f"Unlocked: {achievement.name}")
            self.event_bus.emit(Event(
                event_type=EventType.ACHIEVEMENT_UNLOCKED.value,
                data={
                    "id": achievement.id,
                    "name": achievement.name,
                    "money": achievement.reward.money,
                    "happiness_bonus": achievement.reward.happiness_bonus,
                    "title": achievement.reward.title,
                },
            ))

    # ================================================================
    # TICK CLOCK
    # ================================================================

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self.running = True
        self._thread = threading.Thread(target=self._run, name="city-ticker", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while not self._stop.wait(self.tick_interval):
            self.update()

    def stop(self) -> None:
        self._stop.set()
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None
        self.running = False

    def shutdown(self) -> None:
        self.logger.log_event("ENGINE", "Shutting down...")
        self.stop()
        self.logger.log_event("ENGINE", f"Stopped at tick {self.state.tick}.")

    # ================================================================
    # QUERY METHODS
    # ================================================================

    def achievements(self) -> List[AchievementStatus]:
        return achievement_progress(self.state)

    def get_status(self) -> Dict[str, Any]:
        state = self.state
        stats = state.stats
        return {
            "tick": state.tick,
            "money": stats.money,
            "population": stats.population,
            "jobs": stats.jobs,
            "income": stats.income,
            "happiness": stats.happiness,
            "environment": stats.environment,
            "market": state.market.condition.value,
            "events": [e.template.title for e in state.active_events],
            "tool": state.selected_tool,
        }
