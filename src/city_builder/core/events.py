"""
Event Bus — Decoupled notifications from the engine to whoever draws
or reports on the city.

The engine emits an Event whenever something the player should hear
about happens: a building goes up, the market turns, a random event
starts or ends, an achievement unlocks. Listeners subscribe by event
type; emitted events are delivered when process() runs, once per
committed transition.

Usage:
    from city_builder.core.events import EventBus, Event, EventType

    bus = EventBus()
    bus.subscribe(EventType.ACHIEVEMENT_UNLOCKED.value, on_unlock)
    bus.emit(Event(EventType.ACHIEVEMENT_UNLOCKED.value,
                   data={"id": "first_city", "name": "City Founder"}))
    bus.process(tick)
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from enum import Enum

from city_builder.config import EVENT_HISTORY_CAP
from city_builder.core.logger import CityLogger


class EventType(Enum):
    """Categories of notifications."""
    # Construction
    BUILDING_PLACED = "building_placed"
    BUILDING_BULLDOZED = "building_bulldozed"
    ZONE_PLACED = "zone_placed"
    UPGRADE_APPLIED = "upgrade_applied"

    # Economy
    MARKET_CHANGED = "market_changed"
    RANDOM_EVENT_STARTED = "random_event_started"
    RANDOM_EVENT_ENDED = "random_event_ended"

    # Progress
    ACHIEVEMENT_UNLOCKED = "achievement_unlocked"

    # Generic
    CUSTOM = "custom"


@dataclass
class Event:
    """A single notification."""
    event_type: str                     # EventType value or custom string
    data: Dict[str, Any] = field(default_factory=dict)
    origin: Optional[tuple] = None      # Tile the event concerns, if any
    tick: int = 0                       # Set on delivery


class EventBus:
    """Central notification dispatcher."""

    def __init__(self) -> None:
        self.pending: List[Event] = []
        self.history: List[Event] = []
        self._listeners: Dict[str, List[Callable]] = {}
        self._history_cap: int = EVENT_HISTORY_CAP
        self._logger = CityLogger()

    def emit(self, event: Event) -> None:
        """Queue an event for the next process() call."""
        self.pending.append(event)

    def subscribe(self, event_type: str, callback: Callable) -> None:
        """Register a listener for an event type."""
        if event_type not in self._listeners:
            self._listeners[event_type] = []
        self._listeners[event_type].append(callback)

    def process(self, tick: int) -> List[Event]:
        """Deliver all pending events to their listeners."""
        events = list(self.pending)
        self.pending = []

        for event in events:
            event.tick = tick

            for callback in self._listeners.get(event.event_type, []):
                try:
                    callback(event)
                except Exception as e:
                    self._logger.error(
                        "EVENT", f"Listener error for {event.event_type}: {e}")

            self.history.append(event)

        # Trim history
        if len(self.history) > self._history_cap:
            self.history = self.history[-self._history_cap:]

        return events

    def get_recent_events(self, n: int = 10,
                          event_type: Optional[str] = None) -> List[Event]:
        """Get recent events, optionally filtered by type."""
        if event_type:
            filtered = [e for e in self.history if e.event_type == event_type]
            return filtered[-n:]
        return self.history[-n:]
