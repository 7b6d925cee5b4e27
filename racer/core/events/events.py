"""Game events published on the event bus.

Events are immutable dataclasses. Every event carries the simulation tick
it happened on, so log output and tests can order them without wall-clock
timestamps.
"""

from dataclasses import dataclass, field
from abc import ABC
from enum import Enum, auto
from typing import Optional


class EventType(Enum):
    """Types of game events that subscribers can listen for."""
    # Session lifecycle
    GAME_STARTED = auto()
    GAME_ENDED = auto()

    # Simulation
    OBSTACLE_SPAWNED = auto()
    OBSTACLE_CLEARED = auto()
    COLLISION_DETECTED = auto()

    # Input
    KEY_DECODED = auto()

    # Logging
    LOG_MESSAGE = auto()
    LOG_SAVE_REQUESTED = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all game events."""
    tick: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class GameStarted(GameEvent):
    """Event emitted when a new run begins."""
    difficulty: int
    tick_interval: float

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.GAME_STARTED)


@dataclass(frozen=True)
class GameEnded(GameEvent):
    """Event emitted when a run is over."""
    score: int
    reason: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.GAME_ENDED)


@dataclass(frozen=True)
class ObstacleSpawned(GameEvent):
    x: int
    y: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.OBSTACLE_SPAWNED)


@dataclass(frozen=True)
class ObstacleCleared(GameEvent):
    """Event emitted when an obstacle scrolls past the bottom row."""
    score: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.OBSTACLE_CLEARED)


@dataclass(frozen=True)
class CollisionDetected(GameEvent):
    x: int
    y: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.COLLISION_DETECTED)


@dataclass(frozen=True)
class KeyDecoded(GameEvent):
    """Event emitted for every key the game loop reads."""
    display: str
    recognized: bool

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.KEY_DECODED)


@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event emitted when a log message is created."""
    message: str
    category: str
    source: str
    level: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class LogSaveRequested(GameEvent):
    path: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_SAVE_REQUESTED)
