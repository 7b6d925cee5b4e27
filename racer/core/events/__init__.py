"""Event system for publisher-subscriber communication.

- event_manager.py: event bus with a per-frame processing queue
- events.py: event definitions
"""

from .event_manager import EventManager, EventPriority, QueuedEvent
from .events import (
    GameEvent,
    EventType,
    GameStarted,
    GameEnded,
    ObstacleSpawned,
    ObstacleCleared,
    CollisionDetected,
    KeyDecoded,
    LogMessage,
    LogSaveRequested,
)

__all__ = [
    "EventManager",
    "EventPriority",
    "QueuedEvent",
    "GameEvent",
    "EventType",
    "GameStarted",
    "GameEnded",
    "ObstacleSpawned",
    "ObstacleCleared",
    "CollisionDetected",
    "KeyDecoded",
    "LogMessage",
    "LogSaveRequested",
]
