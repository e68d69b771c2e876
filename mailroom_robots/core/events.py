"""
Event System
============

Provides a publish-subscribe event system so that reporting, statistics
and UIs can observe robots and the mail pool without being wired into them.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from enum import Enum, auto

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Standard event types."""
    # Robot events
    ROBOT_STATE_CHANGED = auto()
    ROBOT_DISPATCHED = auto()
    ROBOT_DEPARTED = auto()

    # Mail events
    ITEM_ARRIVED = auto()
    ITEM_DELIVERED = auto()
    ITEM_REJECTED = auto()
    ITEM_RETURNED = auto()
    STRAY_ITEM_RETURNED = auto()

    # System events
    SIMULATION_STARTED = auto()
    SIMULATION_STOPPED = auto()


@dataclass
class Event:
    """Event data container."""
    event_type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)
    source: str = ""

    def __repr__(self) -> str:
        return f"Event({self.event_type.name}, source={self.source})"


class EventBus:
    """
    Centralized event bus for component communication.

    Uses publish-subscribe pattern for loose coupling.

    Usage:
        bus = EventBus()

        def on_delivered(event):
            print(f"{event.data['item_id']} delivered by {event.source}")

        bus.subscribe(EventType.ITEM_DELIVERED, on_delivered)

        bus.publish(Event(
            event_type=EventType.ITEM_DELIVERED,
            data={'item_id': 'M12', 'floor': 4},
            source='R1'
        ))
    """

    _instance: Optional['EventBus'] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._subscribers: Dict[EventType, List[Callable[[Event], None]]] = {}
        self._global_subscribers: List[Callable[[Event], None]] = []
        self._event_history: List[Event] = []
        self._lock = threading.Lock()
        self._max_history = 500
        self._initialized = True

    @classmethod
    def reset(cls):
        """Reset singleton instance (for testing)."""
        cls._instance = None

    def subscribe(
        self,
        event_type: EventType,
        callback: Callable[[Event], None]
    ) -> None:
        """Subscribe to a specific event type."""
        with self._lock:
            if event_type not in self._subscribers:
                self._subscribers[event_type] = []
            if callback not in self._subscribers[event_type]:
                self._subscribers[event_type].append(callback)
                logger.debug(f"Subscribed to {event_type.name}")

    def subscribe_all(self, callback: Callable[[Event], None]) -> None:
        """Subscribe to all events."""
        with self._lock:
            if callback not in self._global_subscribers:
                self._global_subscribers.append(callback)
                logger.debug("Subscribed to all events")

    def unsubscribe(
        self,
        event_type: EventType,
        callback: Callable[[Event], None]
    ) -> None:
        """Unsubscribe from a specific event type."""
        with self._lock:
            if event_type in self._subscribers:
                if callback in self._subscribers[event_type]:
                    self._subscribers[event_type].remove(callback)

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribers."""
        with self._lock:
            self._event_history.append(event)
            if len(self._event_history) > self._max_history:
                self._event_history = self._event_history[-self._max_history:]

            specific = list(self._subscribers.get(event.event_type, []))
            global_subs = list(self._global_subscribers)

        # Subscriber errors are logged, never raised to the publisher
        for callback in specific:
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Event callback error: {e}")

        for callback in global_subs:
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Global event callback error: {e}")

    def get_history(
        self,
        event_type: Optional[EventType] = None,
        source: Optional[str] = None,
        limit: int = 50
    ) -> List[Event]:
        """
        Get recent events, oldest first.

        Args:
            event_type: Only events of this type
            source: Only events from this publisher, e.g. a robot id or 'pool'
            limit: Maximum number of events returned
        """
        with self._lock:
            events = [
                e for e in self._event_history
                if (event_type is None or e.event_type == event_type)
                and (source is None or e.source == source)
            ]
        return events[-limit:]

    def clear_history(self) -> None:
        """Clear event history."""
        with self._lock:
            self._event_history.clear()


# Global event bus accessor
def get_event_bus() -> EventBus:
    """Get the global event bus instance."""
    return EventBus()
