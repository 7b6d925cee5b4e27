from dataclasses import dataclass, field


@dataclass
class RenderContext:
    """Everything a renderer needs to draw one frame.

    Positions are 1-based screen coordinates: column 1 and column
    ``track_width + 2`` are the borders, row ``screen_height`` is the row the
    player drives on.
    """
    track_width: int
    screen_height: int
    player_x: int
    obstacles: list[tuple[int, int]] = field(default_factory=list)  # (x, y) pairs
    score: int = 0
    difficulty: int = 1
    left_label: str = "a"
    right_label: str = "d"
    crashed: bool = False

    @property
    def grid_width(self) -> int:
        return self.track_width + 2

    def status_line(self) -> str:
        return (
            f"Score: {self.score} | Level: {self.difficulty} | "
            f"Controls: Left={self.left_label} Right={self.right_label}"
        )
