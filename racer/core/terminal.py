from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional

from .decoder import DEFAULT_SEQUENCES
from .errors import TerminalError
from .input import Key


class TerminalIO(ABC):
    """Raw keyboard input and cursor control for one terminal device.

    Raw mode is exclusive for the whole process: only one terminal may hold
    it at a time. Use ``raw_mode()`` so the device is restored on every exit
    path, including exceptions and ``KeyboardInterrupt``.
    """

    # Key sequences this platform delivers, fed to the input decoder
    key_sequences: dict[bytes, Key] = DEFAULT_SEQUENCES

    _raw_owner: Optional["TerminalIO"] = None

    terminal_codes = {
        "reset": "\033[0m",
        "clear_screen": "\033[2J",
        "cursor_home": "\033[H",
        "hide_cursor": "\033[?25l",
        "show_cursor": "\033[?25h",
    }

    def __init__(self):
        self._raw_active = False

    @abstractmethod
    def poll_key(self) -> Optional[bytes]:
        """Return pending input bytes, or None at once when nothing is waiting."""
        pass

    @abstractmethod
    def write(self, text: str) -> None:
        pass

    @abstractmethod
    def flush(self) -> None:
        pass

    @abstractmethod
    def _acquire_raw(self) -> None:
        pass

    @abstractmethod
    def _release_raw(self) -> None:
        pass

    @property
    def is_raw(self) -> bool:
        return self._raw_active

    def move_cursor(self, row: int, col: int) -> None:
        """Move the cursor to a 1-based screen position."""
        self.write(f"\033[{row};{col}H")

    def hide_cursor(self) -> None:
        self.write(self.terminal_codes["hide_cursor"])
        self.flush()

    def show_cursor(self) -> None:
        self.write(self.terminal_codes["show_cursor"])
        self.flush()

    def clear_screen(self) -> None:
        self.write(self.terminal_codes["clear_screen"] + self.terminal_codes["cursor_home"])
        self.flush()

    def enter_raw_mode(self) -> None:
        owner = TerminalIO._raw_owner
        if owner is self:
            raise TerminalError("Raw mode is already active on this terminal")
        if owner is not None:
            raise TerminalError("Raw mode is held by another terminal")

        self._acquire_raw()
        self._raw_active = True
        TerminalIO._raw_owner = self

    def restore_mode(self) -> None:
        if not self._raw_active:
            return
        try:
            self._release_raw()
        finally:
            self._raw_active = False
            if TerminalIO._raw_owner is self:
                TerminalIO._raw_owner = None

    @contextmanager
    def raw_mode(self) -> Iterator["TerminalIO"]:
        self.enter_raw_mode()
        try:
            yield self
        finally:
            try:
                self.write(self.terminal_codes["reset"])
                self.show_cursor()
            finally:
                self.restore_mode()
