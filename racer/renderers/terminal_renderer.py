from typing import Optional

from ..core.renderer import Renderer, RendererConfig
from ..core.renderable import RenderContext
from ..core.terminal import TerminalIO


class TerminalRenderer(Renderer):
    """Draws the track onto a terminal by repainting every cell each frame."""

    def __init__(self, terminal: TerminalIO, config: Optional[RendererConfig] = None):
        super().__init__(config)
        self.terminal = terminal
        self.frames_drawn = 0
        # Longest status line so far; shorter lines are padded to erase leftovers
        self._status_width = 0

    def initialize(self) -> None:
        self.terminal.clear_screen()
        self.terminal.hide_cursor()

    def cleanup(self) -> None:
        self.terminal.show_cursor()

    def render_frame(self, context: RenderContext) -> None:
        lines = self.build_lines(context)
        status = lines.pop()
        self._status_width = max(self._status_width, len(status))

        # Explicit cursor moves per row; raw mode disables newline translation
        for row, line in enumerate(lines, start=1):
            self.terminal.move_cursor(row, 1)
            self.terminal.write(line)

        self.terminal.move_cursor(context.screen_height + 1, 1)
        self.terminal.write(status.ljust(self._status_width))
        self.terminal.flush()
        self.frames_drawn += 1
