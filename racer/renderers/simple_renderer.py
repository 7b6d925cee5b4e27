from collections import deque
from typing import Optional

from ..core.renderer import Renderer, RendererConfig
from ..core.renderable import RenderContext


class SimpleRenderer(Renderer):
    """Headless renderer that keeps the most recent frames as text.

    Used for demo runs without a terminal and by the test suite.
    """

    def __init__(self, config: Optional[RendererConfig] = None, keep_frames: int = 10, echo: bool = False):
        super().__init__(config)
        self.frames: deque[list[str]] = deque(maxlen=keep_frames)
        self.frame_count = 0
        self.echo = echo

    def initialize(self) -> None:
        self.frames.clear()
        self.frame_count = 0

    def cleanup(self) -> None:
        if self.echo and self.frames:
            print("\n".join(self.frames[-1]))

    def render_frame(self, context: RenderContext) -> None:
        self.frame_count += 1
        self.frames.append(self.build_lines(context))

    @property
    def last_frame(self) -> list[str]:
        return self.frames[-1] if self.frames else []
