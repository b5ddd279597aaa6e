#!/usr/bin/env python3
"""
City Builder — Text Report
============================

Plain-text view of a running city:

  1. Funds, population, jobs, income, happiness, environment
  2. Market condition and countdown
  3. Active random events with ticks left
  4. Achievement progress
  5. Building counts on the grid

Usage:
    from city_builder.tools.city_report import CityReport
    report = CityReport(engine)
    print(report.dump_all())
    report.watch(interval=5)     # Auto-refresh every 5 seconds
    report.export_json("city.json")
"""

import json
import time
from collections import Counter
from typing import Any, Dict

from city_builder.engine.achievements import achievement_progress, completion_percentage
from city_builder.engine.market import describe_market
from city_builder.world.buildings import BuildingType, get_spec


class CityReport:
    """Text dashboard over a CityEngine."""

    def __init__(self, engine: Any) -> None:
        self.engine = engine

    def dump_stats(self) -> str:
        state = self.engine.state
        s = state.stats
        lines = [
            "--- CITY ---",
            f"  Tick: {state.tick}",
            f"  Money: ${s.money:,}  (last tick {s.income:+,})",
            f"  Population: {s.population:,}   Jobs: {s.jobs:,}",
            f"  Happiness: {s.happiness:.1f}   Environment: {s.environment:.1f}",
        ]
        if state.titles:
            lines.append(f"  Titles: {', '.join(state.titles)}")
        return "\n".join(lines)

    def dump_market(self) -> str:
        market = self.engine.state.market
        return "\n".join([
            "--- MARKET ---",
            f"  {describe_market(market)}",
            f"  Condition: {market.condition.value}  Intensity: {market.intensity:.2f}"
            f"  Trend: {market.trend.value}  Next review in {market.time_remaining} ticks",
        ])

    def dump_events(self) -> str:
        events = self.engine.state.active_events
        lines = ["--- EVENTS ---"]
        if not events:
            lines.append("  (none)")
        for event in events:
            lines.append(f"  {event.template.title} ({event.remaining} ticks left)")
        return "\n".join(lines)

    def dump_achievements(self) -> str:
        state = self.engine.state
        lines = [f"--- ACHIEVEMENTS ({completion_percentage(state)}%) ---"]
        for status in achievement_progress(state):
            mark = "x" if status.unlocked else " "
            line = f"  [{mark}] {status.achievement.name}"
            if status.target and not status.unlocked:
                line += f"  {status.current}/{status.target}"
            lines.append(line)
        return "\n".join(lines)

    def dump_buildings(self) -> str:
        counts = Counter(t.building for t in self.engine.state.grid.tiles()
                         if t.building is not BuildingType.EMPTY)
        lines = ["--- BUILDINGS ---"]
        if not counts:
            lines.append("  (empty grid)")
        for building, count in sorted(counts.items(), key=lambda kv: -kv[1]):
            lines.append(f"  {get_spec(building).label:>12}: {count}")
        return "\n".join(lines)

    def dump_all(self) -> str:
        with self.engine.lock:
            parts = [
                "=" * 60,
                "  CITY REPORT",
                "=" * 60,
                self.dump_stats(),
                self.dump_market(),
                self.dump_events(),
                self.dump_buildings(),
                self.dump_achievements(),
            ]
        return "\n".join(parts)

    def watch(self, interval: float = 5.0):
        """Live-updating terminal dashboard."""
        print(f"[Report] Refreshing every {interval}s...")
        print("[Report] Press Ctrl+C to stop.\n")
        try:
            while True:
                print("\033[2J\033[H", end="")
                print(self.dump_all())
                time.sleep(interval)
        except KeyboardInterrupt:
            print("\n[Report] Stopped.")

    def to_dict(self) -> Dict[str, Any]:
        state = self.engine.state
        return {
            "status": self.engine.get_status(),
            "market": {
                "condition": state.market.condition.value,
                "intensity": state.market.intensity,
                "time_remaining": state.market.time_remaining,
                "trend": state.market.trend.value,
            },
            "events": [
                {"kind": e.kind, "remaining": e.remaining}
                for e in state.active_events
            ],
            "achievements": [
                {
                    "id": s.achievement.id,
                    "unlocked": s.unlocked,
                    "current": s.current,
                    "target": s.target,
                }
                for s in achievement_progress(state)
            ],
        }

    def export_json(self, filepath: str = "city_report.json") -> None:
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)
        print(f"[Report] Exported to {filepath}")
