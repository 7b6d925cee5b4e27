import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from ..core.config import GameConfig
from .collision import SCORE_PER_OBSTACLE, score_for
from .obstacle_field import ObstacleField


class GamePhase(Enum):
    RUNNING = auto()
    OVER = auto()


class EndReason(Enum):
    COLLISION = auto()
    QUIT = auto()


@dataclass
class Player:
    """The player's car: one column on the bottom row."""
    x: int
    min_x: int
    max_x: int

    def move(self, delta: int) -> bool:
        """Shift by ``delta`` columns, clamped to the track. Returns True if the car moved."""
        target = max(self.min_x, min(self.max_x, self.x + delta))
        moved = target != self.x
        self.x = target
        return moved


@dataclass
class GameSession:
    """State of a single run, created fresh for every new game."""
    player: Player
    field: ObstacleField
    score: int = 0
    phase: GamePhase = GamePhase.RUNNING
    end_reason: Optional[EndReason] = None
    ticks: int = 0
    obstacles_cleared: int = 0

    @classmethod
    def new(cls, config: GameConfig, rng: Optional[random.Random] = None) -> "GameSession":
        if rng is None:
            rng = random.Random(config.seed)
        player = Player(x=config.start_column, min_x=config.min_column, max_x=config.max_column)
        obstacle_field = ObstacleField(
            track_width=config.track_width,
            bottom_row=config.screen_height,
            spawn_probability=config.spawn_probability,
            spawn_gap=config.spawn_gap,
            rng=rng,
        )
        return cls(player=player, field=obstacle_field)

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.OVER

    @property
    def is_running(self) -> bool:
        return self.phase == GamePhase.RUNNING

    def end(self, reason: EndReason) -> None:
        if self.phase == GamePhase.OVER:
            return
        self.phase = GamePhase.OVER
        self.end_reason = reason

    def add_cleared(self, count: int, per_obstacle: int = SCORE_PER_OBSTACLE) -> int:
        """Credit cleared obstacles; returns the points added."""
        points = score_for(count, per_obstacle)
        self.obstacles_cleared += count
        self.score += points
        return points


@dataclass
class GameResult:
    """What a finished run reports back to the menu."""
    score: int
    reason: EndReason
    high_score: int
    ticks: int = 0
    new_high_score: bool = False
