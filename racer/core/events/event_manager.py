"""
Event bus for decoupled communication between the game loop and its observers.

Publishers queue events; the game loop drains the queue once per frame with
``process_events()``. The whole game runs on one thread, so the queue needs
no locking.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, auto
from itertools import count
from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .events import GameEvent, EventType


class EventPriority(Enum):
    """Event processing priorities (lower value is processed first)."""
    CRITICAL = auto()
    HIGH = auto()
    NORMAL = auto()
    LOW = auto()


_sequence = count()


@dataclass
class QueuedEvent:
    """An event in the processing queue with metadata."""
    event: "GameEvent"
    priority: EventPriority = EventPriority.NORMAL
    source: Optional[str] = None  # For debugging
    sequence: int = field(default_factory=lambda: next(_sequence))

    def __lt__(self, other: "QueuedEvent") -> bool:
        if self.priority.value != other.priority.value:
            return self.priority.value < other.priority.value
        # Same priority: publication order
        return self.sequence < other.sequence


EventSubscriber = Callable[["GameEvent"], None]


class EventManager:
    """Central event bus."""

    def __init__(self, enable_debug_logging: bool = False, history_size: int = 256):
        """Initialize the event manager.

        Args:
            enable_debug_logging: Whether to report bus activity to the debug callback
            history_size: Number of processed events kept for inspection
        """
        self.enable_debug_logging = enable_debug_logging

        self._subscribers: dict["EventType", list[EventSubscriber]] = defaultdict(list)
        self._universal_subscribers: list[EventSubscriber] = []
        self._event_queue: deque[QueuedEvent] = deque()

        self._events_published = 0
        self._events_processed = 0
        self._subscriber_errors = 0
        self._event_history: deque[QueuedEvent] = deque(maxlen=history_size)

        self._debug_callback: Optional[Callable[[str], None]] = None

    def set_debug_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        """Set a callback function for debug logging."""
        self._debug_callback = callback

    def _debug_log(self, message: str) -> None:
        if self.enable_debug_logging and self._debug_callback:
            self._debug_callback(f"[EVENT] {message}")

    def subscribe(
        self,
        event_type: "EventType",
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Subscribe to events of a specific type."""
        self._subscribers[event_type].append(subscriber)

        subscriber_display = subscriber_name or getattr(subscriber, '__name__', 'anonymous')
        self._debug_log(f"Subscribed {subscriber_display} to {event_type.name} events")

    def subscribe_all(self, subscriber: EventSubscriber) -> None:
        """Subscribe to every event type."""
        self._universal_subscribers.append(subscriber)

    def unsubscribe(self, event_type: "EventType", subscriber: EventSubscriber) -> bool:
        """Unsubscribe from events of a specific type.

        Returns:
            True if subscriber was found and removed
        """
        try:
            self._subscribers[event_type].remove(subscriber)
            return True
        except ValueError:
            return False

    def publish(
        self,
        event: "GameEvent",
        priority: EventPriority = EventPriority.NORMAL,
        source: Optional[str] = None
    ) -> None:
        """Queue an event for the next ``process_events()`` call."""
        self._event_queue.append(QueuedEvent(event=event, priority=priority, source=source or "unknown"))
        self._events_published += 1

    def publish_immediate(self, event: "GameEvent", source: Optional[str] = None) -> None:
        """Publish and immediately process an event."""
        self._events_published += 1
        self._process_event(QueuedEvent(event=event, priority=EventPriority.CRITICAL, source=source or "immediate"))

    def process_events(self, max_events: Optional[int] = None) -> int:
        """Process queued events in priority order.

        Events published by subscribers during processing are left for the
        next call.

        Returns:
            Number of events processed
        """
        sorted_events = sorted(self._event_queue)
        self._event_queue.clear()

        processed_count = 0
        for queued_event in sorted_events:
            if max_events is not None and processed_count >= max_events:
                self._event_queue.extendleft(reversed(sorted_events[processed_count:]))
                break

            self._process_event(queued_event)
            processed_count += 1

        return processed_count

    def _process_event(self, queued_event: QueuedEvent) -> None:
        event = queued_event.event

        self._event_history.append(queued_event)
        self._events_processed += 1

        subscribers = self._subscribers.get(event.event_type, []) + self._universal_subscribers
        for subscriber in subscribers:
            try:
                subscriber(event)
            except Exception as e:
                # A faulty observer must not stop the frame
                self._subscriber_errors += 1
                self._debug_log(
                    f"Error in subscriber {getattr(subscriber, '__name__', 'anonymous')}: {e}"
                )

    def has_queued_events(self) -> bool:
        return len(self._event_queue) > 0

    def get_recent_events(self, count: int = 10) -> list["GameEvent"]:
        return [queued.event for queued in list(self._event_history)[-count:]]

    def get_statistics(self) -> dict[str, Any]:
        return {
            'events_published': self._events_published,
            'events_processed': self._events_processed,
            'events_queued': len(self._event_queue),
            'subscriber_errors': self._subscriber_errors,
            'subscribers_count': sum(len(subs) for subs in self._subscribers.values()),
            'universal_subscribers_count': len(self._universal_subscribers),
        }

    def shutdown(self) -> None:
        """Drop all subscribers and pending events."""
        self._subscribers.clear()
        self._universal_subscribers.clear()
        self._event_queue.clear()
        self._event_history.clear()
