from collections import deque
from typing import Iterable, Optional

from ..core.errors import TerminalError
from ..core.terminal import TerminalIO


class ScriptedTerminal(TerminalIO):
    """In-memory terminal fed from a script of input chunks.

    Each ``poll_key()`` call pops one entry from the script; ``None`` entries
    stand for polls where no key was pending. Everything written is kept in
    ``output`` for inspection.
    """

    def __init__(self, script: Optional[Iterable[Optional[bytes]]] = None, fail_acquire: bool = False):
        super().__init__()
        self.script: deque[Optional[bytes]] = deque(script or [])
        self.fail_acquire = fail_acquire
        self.output: list[str] = []
        self.polls = 0
        self.flushes = 0
        self.acquire_count = 0
        self.release_count = 0

    def feed(self, *chunks: Optional[bytes]) -> None:
        self.script.extend(chunks)

    def _acquire_raw(self) -> None:
        if self.fail_acquire:
            raise TerminalError("Scripted terminal refused raw mode")
        self.acquire_count += 1

    def _release_raw(self) -> None:
        self.release_count += 1

    def poll_key(self) -> Optional[bytes]:
        self.polls += 1
        if not self.script:
            return None
        return self.script.popleft()

    def write(self, text: str) -> None:
        self.output.append(text)

    def flush(self) -> None:
        self.flushes += 1

    @property
    def text(self) -> str:
        return "".join(self.output)

    @property
    def cursor_visible(self) -> bool:
        """Whether the last cursor visibility code written was 'show'."""
        text = self.text
        return text.rfind(self.terminal_codes["show_cursor"]) >= text.rfind(self.terminal_codes["hide_cursor"])
