"""
Log management for game messages and debugging.

Messages arrive as ``LogMessage`` events on the event bus or through the
convenience methods, are kept in a bounded buffer, and can be written to a
file when the program exits.
"""
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from ..core.events import EventType, LogMessage as LogEvent, LogSaveRequested

if TYPE_CHECKING:
    from ..core.events import EventManager, GameEvent


class LogCategory(Enum):
    """Categories for log messages."""
    SYSTEM = auto()     # Startup, config, shutdown
    GAME = auto()       # Session lifecycle and scoring
    INPUT = auto()      # Decoded keys
    TERMINAL = auto()   # Terminal capability
    DEBUG = auto()
    WARNING = auto()
    ERROR = auto()


class LogLevel(Enum):
    """Log levels for filtering."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass
class LogEntry:
    """A single log message with metadata."""
    text: str
    category: LogCategory
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self, include_timestamp: bool = False) -> str:
        parts = []
        if include_timestamp:
            parts.append(f"[{self.timestamp.strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]}]")
        parts.append(f"[{self.category.name}]")
        parts.append(self.text)
        return " ".join(parts)


# Categories below INFO only show when the log level is DEBUG
CATEGORY_LEVELS = {
    LogCategory.DEBUG: LogLevel.DEBUG,
    LogCategory.INPUT: LogLevel.DEBUG,
    LogCategory.WARNING: LogLevel.WARNING,
    LogCategory.ERROR: LogLevel.ERROR,
}


class LogManager:
    """Categorized in-memory game log fed from the event bus."""

    def __init__(
        self,
        event_manager: "EventManager",
        max_messages: int = 1000,
        default_level: LogLevel = LogLevel.INFO,
        log_path: Optional[str] = None,
    ):
        """Initialize the log manager.

        Args:
            event_manager: Event manager to receive log events from
            max_messages: Maximum number of messages kept in the buffer
            default_level: Minimum level returned by ``get_messages``
            log_path: File written on ``save_log_to_file`` when no path is given
        """
        self.messages: deque[LogEntry] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.event_manager = event_manager
        self.log_path = log_path

        self.event_manager.subscribe(
            EventType.LOG_MESSAGE, self._handle_log_message_event, subscriber_name="LogManager.log_message"
        )
        self.event_manager.subscribe(
            EventType.LOG_SAVE_REQUESTED, self._handle_log_save_request, subscriber_name="LogManager.log_save"
        )

    def _handle_log_message_event(self, event: "GameEvent") -> None:
        if isinstance(event, LogEvent):
            try:
                category = LogCategory[event.category.upper()]
            except KeyError:
                category = LogCategory.SYSTEM
            self.log(f"[{event.source}] {event.message}", category)

    def _handle_log_save_request(self, event: "GameEvent") -> None:
        if isinstance(event, LogSaveRequested):
            self.save_log_to_file(event.path)

    def log(self, text: str, category: LogCategory = LogCategory.SYSTEM) -> None:
        self.messages.append(LogEntry(text=text, category=category))

    def system(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM)

    def game(self, text: str) -> None:
        self.log(text, LogCategory.GAME)

    def input(self, text: str) -> None:
        self.log(text, LogCategory.INPUT)

    def terminal(self, text: str) -> None:
        self.log(text, LogCategory.TERMINAL)

    def debug(self, text: str) -> None:
        self.log(text, LogCategory.DEBUG)

    def warning(self, text: str) -> None:
        self.log(text, LogCategory.WARNING)

    def error(self, text: str) -> None:
        self.log(text, LogCategory.ERROR)

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level

    def get_messages(self, count: Optional[int] = None,
                     categories: Optional[set[LogCategory]] = None) -> list[LogEntry]:
        """Recent messages at or above the current level, optionally filtered by category."""
        filtered = []
        for msg in self.messages:
            if categories is not None and msg.category not in categories:
                continue
            if CATEGORY_LEVELS.get(msg.category, LogLevel.INFO).value < self.log_level.value:
                continue
            filtered.append(msg)

        if count is not None:
            return filtered[-count:] if count > 0 else []
        return filtered

    def clear(self) -> None:
        self.messages.clear()

    def save_log_to_file(self, path: Optional[str] = None) -> bool:
        """Write every buffered message, whatever its level, to a file.

        Returns:
            True if save was successful, False otherwise
        """
        target = path or self.log_path
        if target is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            target = f"logs/racer_{timestamp}.log"

        try:
            filepath = Path(target)
            filepath.parent.mkdir(parents=True, exist_ok=True)
            with open(filepath, 'w', encoding='utf-8') as f:
                f.write("Terminal Racer - Game Log\n")
                f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write("=" * 60 + "\n\n")
                if not self.messages:
                    f.write("No messages to save.\n")
                for msg in self.messages:
                    f.write(msg.format(include_timestamp=True) + "\n")
        except OSError as e:
            self.error(f"Failed to save log file: {e}")
            return False

        self.system(f"Game log saved to {filepath}")
        return True
