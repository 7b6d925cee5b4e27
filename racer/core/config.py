"""
Game settings and their YAML loader.

Settings are read once at startup. The menu may replace the difficulty and
key binding between runs (``dataclasses.replace``), but a running game only
ever reads them.
"""
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Optional

import yaml

from .errors import ConfigError
from .input import KeyBinding, KeyToken

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5

DEFAULT_CONFIG_PATH = "assets/config/settings.yaml"


def clamp_difficulty(level: int) -> int:
    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, int(level)))


def default_quit_keys() -> tuple[KeyToken, ...]:
    return (KeyToken.character("q"), KeyToken.character("Q"), KeyToken.parse("CTRL_C"))


@dataclass
class GameConfig:
    track_width: int = 20
    screen_height: int = 20
    difficulty: int = 1
    bindings: KeyBinding = field(default_factory=KeyBinding.default)
    quit_keys: tuple[KeyToken, ...] = field(default_factory=default_quit_keys)

    # Timing, in milliseconds
    base_tick_ms: int = 120
    tick_step_ms: int = 20
    min_tick_ms: int = 20
    frame_yield_ms: float = 1.0
    escape_timeout_ms: int = 100

    spawn_probability: float = 0.3
    spawn_gap: int = 2
    score_per_obstacle: int = 10

    highscore_file: str = "highscore.txt"
    seed: Optional[int] = None

    def __post_init__(self):
        self.difficulty = clamp_difficulty(self.difficulty)
        if self.track_width < 1 or self.screen_height < 2:
            raise ConfigError(
                f"Track must be at least 1x2, got {self.track_width}x{self.screen_height}"
            )
        if not 0.0 <= self.spawn_probability <= 1.0:
            raise ConfigError(f"Spawn probability must be within [0, 1], got {self.spawn_probability}")
        if self.min_tick_ms <= 0 or self.frame_yield_ms < 0 or self.escape_timeout_ms < 0:
            raise ConfigError("Timing values must be positive")

    @property
    def tick_interval(self) -> float:
        """Seconds between simulation ticks for the current difficulty."""
        ms = max(self.min_tick_ms, self.base_tick_ms - self.difficulty * self.tick_step_ms)
        return ms / 1000.0

    @property
    def frame_yield(self) -> float:
        return self.frame_yield_ms / 1000.0

    @property
    def escape_timeout(self) -> float:
        return self.escape_timeout_ms / 1000.0

    @property
    def min_column(self) -> int:
        return 2

    @property
    def max_column(self) -> int:
        return self.track_width + 1

    @property
    def start_column(self) -> int:
        return self.track_width // 2 + 1

    def with_difficulty(self, level: int) -> "GameConfig":
        return replace(self, difficulty=clamp_difficulty(level))

    def with_bindings(self, bindings: KeyBinding) -> "GameConfig":
        return replace(self, bindings=bindings)


class ConfigLoader:
    """Loads ``GameConfig`` from a YAML settings file."""

    def __init__(self, config_path: Optional[str] = None, warn: Optional[Callable[[str], None]] = None):
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.warn = warn or (lambda message: None)

    def resolve_path(self) -> Path:
        # Relative paths are looked up from the project root
        if os.path.isabs(self.config_path):
            return Path(self.config_path)
        cwd_path = Path(self.config_path)
        if cwd_path.exists():
            return cwd_path
        project_root = Path(__file__).parent.parent.parent
        return project_root / self.config_path

    def load(self) -> GameConfig:
        """
        Load settings, falling back to defaults when the file does not exist.

        Raises:
            ConfigError: if the file cannot be read, is not valid YAML or holds invalid values
        """
        config_file = self.resolve_path()
        if not config_file.exists():
            self.warn(f"Settings file not found: {config_file}, using defaults")
            return GameConfig()

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read settings file {config_file}: {e}") from e

        return parse_config(data)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{name}' must be a mapping")
    return section


def parse_config(data: Any) -> GameConfig:
    """Build a ``GameConfig`` from already-parsed settings data."""
    if not isinstance(data, dict):
        raise ConfigError("Settings must be a mapping")

    kwargs: dict[str, Any] = {}
    try:
        if "difficulty" in data:
            kwargs["difficulty"] = int(data["difficulty"])

        controls = _section(data, "controls")
        defaults = KeyBinding.default()
        left = KeyToken.parse(str(controls["left"])) if "left" in controls else defaults.left
        right = KeyToken.parse(str(controls["right"])) if "right" in controls else defaults.right
        kwargs["bindings"] = KeyBinding(left=left, right=right)
        if "quit" in controls:
            quit_names = controls["quit"]
            if isinstance(quit_names, str):
                quit_names = [quit_names]
            kwargs["quit_keys"] = tuple(KeyToken.parse(str(name)) for name in quit_names)

        timing = _section(data, "timing")
        for key in ("base_tick_ms", "tick_step_ms", "min_tick_ms", "escape_timeout_ms"):
            if key in timing:
                kwargs[key] = int(timing[key])
        if "frame_yield_ms" in timing:
            kwargs["frame_yield_ms"] = float(timing["frame_yield_ms"])

        spawn = _section(data, "spawn")
        if "probability" in spawn:
            kwargs["spawn_probability"] = float(spawn["probability"])
        if "gap" in spawn:
            kwargs["spawn_gap"] = int(spawn["gap"])

        scoring = _section(data, "scoring")
        if "per_obstacle" in scoring:
            kwargs["score_per_obstacle"] = int(scoring["per_obstacle"])

        if data.get("highscore_file"):
            kwargs["highscore_file"] = str(data["highscore_file"])
        if data.get("seed") is not None:
            kwargs["seed"] = int(data["seed"])
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid setting: {e}") from e

    return GameConfig(**kwargs)


def load_config(path: Optional[str] = None, warn: Optional[Callable[[str], None]] = None) -> GameConfig:
    return ConfigLoader(path, warn=warn).load()
