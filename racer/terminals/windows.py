import ctypes
import msvcrt
import sys
from ctypes import wintypes
from typing import Optional, TextIO

from ..core.decoder import WINDOWS_SEQUENCES
from ..core.errors import TerminalError
from ..core.terminal import TerminalIO

STD_INPUT_HANDLE = -10
STD_OUTPUT_HANDLE = -11

ENABLE_ECHO_INPUT = 0x0004
ENABLE_LINE_INPUT = 0x0002
ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004

# msvcrt.getch() prefixes extended keys with one of these bytes
EXTENDED_PREFIXES = (b"\x00", b"\xe0")


class WindowsTerminal(TerminalIO):
    """Terminal capability for the Windows console.

    Line input and echo are switched off on the input handle, and virtual
    terminal processing is switched on for the output handle so the ANSI
    cursor codes used by the renderer work on Windows 10 and later.
    """

    key_sequences = WINDOWS_SEQUENCES

    def __init__(self, stdout: Optional[TextIO] = None, max_read: int = 16):
        super().__init__()
        self.stdout = stdout or sys.stdout
        self.max_read = max_read
        self._kernel32 = ctypes.windll.kernel32
        self._stdin_handle = None
        self._stdout_handle = None
        self._original_input_mode: Optional[int] = None
        self._original_output_mode: Optional[int] = None

    def _get_mode(self, handle) -> int:
        mode = wintypes.DWORD()
        if not self._kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            raise TerminalError("Console mode is unavailable (not attached to a console)")
        return mode.value

    def _acquire_raw(self) -> None:
        self._stdin_handle = self._kernel32.GetStdHandle(STD_INPUT_HANDLE)
        self._stdout_handle = self._kernel32.GetStdHandle(STD_OUTPUT_HANDLE)

        input_mode = self._get_mode(self._stdin_handle)
        output_mode = self._get_mode(self._stdout_handle)

        raw_input = input_mode & ~(ENABLE_LINE_INPUT | ENABLE_ECHO_INPUT)
        if not self._kernel32.SetConsoleMode(self._stdin_handle, raw_input):
            raise TerminalError("Cannot disable console line input")
        self._original_input_mode = input_mode

        if not self._kernel32.SetConsoleMode(self._stdout_handle, output_mode | ENABLE_VIRTUAL_TERMINAL_PROCESSING):
            self._kernel32.SetConsoleMode(self._stdin_handle, input_mode)
            self._original_input_mode = None
            raise TerminalError("Cannot enable virtual terminal processing")
        self._original_output_mode = output_mode

    def _release_raw(self) -> None:
        if self._original_input_mode is not None:
            self._kernel32.SetConsoleMode(self._stdin_handle, self._original_input_mode)
            self._original_input_mode = None
        if self._original_output_mode is not None:
            self._kernel32.SetConsoleMode(self._stdout_handle, self._original_output_mode)
            self._original_output_mode = None

    def poll_key(self) -> Optional[bytes]:
        if not msvcrt.kbhit():
            return None

        data = bytearray()
        while msvcrt.kbhit() and len(data) < self.max_read:
            ch = msvcrt.getch()
            data += ch
            if ch in EXTENDED_PREFIXES:
                # The scan code always follows its prefix
                data += msvcrt.getch()
        return bytes(data)

    def write(self, text: str) -> None:
        self.stdout.write(text)

    def flush(self) -> None:
        self.stdout.flush()
