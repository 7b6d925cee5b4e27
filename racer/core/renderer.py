from abc import ABC, abstractmethod
from typing import Optional
from dataclasses import dataclass

import numpy as np

from .renderable import RenderContext


@dataclass
class RendererConfig:
    player_char: str = "@"
    obstacle_char: str = "#"
    road_char: str = " "
    border_char: str = "|"
    crash_char: str = "X"


class Renderer(ABC):

    def __init__(self, config: Optional[RendererConfig] = None):
        self.config = config or RendererConfig()
        self._running = False

    @abstractmethod
    def initialize(self) -> None:
        pass

    @abstractmethod
    def cleanup(self) -> None:
        pass

    @abstractmethod
    def render_frame(self, context: RenderContext) -> None:
        pass

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True
        self.initialize()

    def stop(self) -> None:
        self._running = False
        self.cleanup()

    def build_grid(self, context: RenderContext) -> np.ndarray:
        """Compose the track as a (rows, columns) array of single characters."""
        grid = np.full((context.screen_height, context.grid_width), self.config.road_char, dtype="<U1")
        grid[:, 0] = self.config.border_char
        grid[:, -1] = self.config.border_char

        if context.obstacles:
            xs, ys = np.array(context.obstacles, dtype=int).T
            visible = (ys >= 1) & (ys <= context.screen_height) & (xs >= 2) & (xs <= context.track_width + 1)
            grid[ys[visible] - 1, xs[visible] - 1] = self.config.obstacle_char

        player_char = self.config.crash_char if context.crashed else self.config.player_char
        grid[context.screen_height - 1, context.player_x - 1] = player_char
        return grid

    def build_lines(self, context: RenderContext) -> list[str]:
        """Full frame as text: one line per track row plus the status line."""
        grid = self.build_grid(context)
        lines = ["".join(row) for row in grid]
        lines.append(context.status_line())
        return lines
