import os
import select
import sys
import termios
import tty
from typing import Optional, TextIO

from ..core.decoder import POSIX_SEQUENCES
from ..core.errors import TerminalError
from ..core.terminal import TerminalIO


class PosixTerminal(TerminalIO):
    """Terminal capability for Linux and macOS built on termios."""

    key_sequences = POSIX_SEQUENCES

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None, read_size: int = 64):
        super().__init__()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.read_size = read_size
        self._old_settings = None

    def _acquire_raw(self) -> None:
        try:
            fd = self.stdin.fileno()
            if not os.isatty(fd):
                raise TerminalError("Standard input is not a terminal")
            self._old_settings = termios.tcgetattr(fd)
            tty.setraw(fd)
        except (termios.error, OSError, ValueError) as e:
            raise TerminalError(f"Cannot switch terminal to raw mode: {e}") from e

    def _release_raw(self) -> None:
        if self._old_settings:
            termios.tcsetattr(self.stdin.fileno(), termios.TCSADRAIN, self._old_settings)
            self._old_settings = None

    def poll_key(self) -> Optional[bytes]:
        fd = self.stdin.fileno()
        ready, _, _ = select.select([fd], [], [], 0)
        if not ready:
            return None
        data = os.read(fd, self.read_size)
        return data or None

    def write(self, text: str) -> None:
        self.stdout.write(text)

    def flush(self) -> None:
        self.stdout.flush()
