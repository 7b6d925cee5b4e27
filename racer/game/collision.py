from typing import Iterable

from .obstacle_field import Obstacle

SCORE_PER_OBSTACLE = 10


def check_collision(player_x: int, obstacles: Iterable[Obstacle], bottom_row: int) -> bool:
    """True iff an obstacle sits on the bottom row in the player's column."""
    return any(obstacle.y == bottom_row and obstacle.x == player_x for obstacle in obstacles)


def score_for(cleared: int, per_obstacle: int = SCORE_PER_OBSTACLE) -> int:
    return cleared * per_obstacle
