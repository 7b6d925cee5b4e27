"""
Obstacles scrolling down the track.

The field keeps obstacles in spawn order, so the oldest obstacle, the one
closest to leaving the screen, is always at the front.
"""
import random
from collections import deque
from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass
class Obstacle:
    x: int
    y: int


class ObstacleField:
    """Ordered collection of obstacles with the spawn and retire rules."""

    def __init__(
        self,
        track_width: int,
        bottom_row: int,
        spawn_probability: float = 0.3,
        spawn_gap: int = 2,
        rng: Optional[random.Random] = None,
    ):
        self.track_width = track_width
        self.bottom_row = bottom_row
        self.spawn_probability = spawn_probability
        self.spawn_gap = spawn_gap
        self.rng = rng or random.Random()
        self.obstacles: deque[Obstacle] = deque()

    def __len__(self) -> int:
        return len(self.obstacles)

    def __iter__(self) -> Iterator[Obstacle]:
        return iter(self.obstacles)

    @property
    def is_empty(self) -> bool:
        return not self.obstacles

    @property
    def oldest(self) -> Optional[Obstacle]:
        return self.obstacles[0] if self.obstacles else None

    @property
    def newest(self) -> Optional[Obstacle]:
        return self.obstacles[-1] if self.obstacles else None

    def advance(self) -> int:
        """Move every obstacle down one row.

        Returns:
            1 if the oldest obstacle left the track and was removed, else 0
        """
        for obstacle in self.obstacles:
            obstacle.y += 1

        if self.obstacles and self.obstacles[0].y > self.bottom_row:
            self.obstacles.popleft()
            return 1
        return 0

    def maybe_spawn(self) -> Optional[Obstacle]:
        """Apply the spawn policy once; return the new obstacle if one was added.

        An empty road gets a new obstacle with ``spawn_probability``. Otherwise
        the next obstacle follows as soon as the newest one has moved past
        row ``spawn_gap``.
        """
        if self.obstacles:
            should_spawn = self.obstacles[-1].y > self.spawn_gap
        else:
            should_spawn = self.rng.random() < self.spawn_probability

        if not should_spawn:
            return None

        obstacle = Obstacle(x=self.rng.randint(2, self.track_width + 1), y=1)
        self.obstacles.append(obstacle)
        return obstacle

    def place(self, x: int, y: int) -> Obstacle:
        """Append an obstacle at an explicit position."""
        obstacle = Obstacle(x=x, y=y)
        self.obstacles.append(obstacle)
        return obstacle

    def positions(self) -> list[tuple[int, int]]:
        return [(obstacle.x, obstacle.y) for obstacle in self.obstacles]

    def clear(self) -> None:
        self.obstacles.clear()
