"""Platform implementations of the terminal capability.

- posix.py: termios/tty raw mode with select-based polling
- windows.py: msvcrt polling with console modes set through ctypes
- scripted.py: in-memory terminal for headless runs and tests
"""

import os

from ..core.terminal import TerminalIO
from .scripted import ScriptedTerminal


def open_terminal() -> TerminalIO:
    """Return the terminal implementation for the running platform."""
    if os.name == "nt":
        from .windows import WindowsTerminal
        return WindowsTerminal()

    from .posix import PosixTerminal
    return PosixTerminal()


__all__ = ["open_terminal", "ScriptedTerminal", "TerminalIO"]
