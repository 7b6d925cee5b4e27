"""Unit tests for GameConfig and the YAML settings loader."""
import pytest

from racer.core.config import (
    ConfigLoader, GameConfig, clamp_difficulty, load_config, parse_config,
)
from racer.core.errors import ConfigError
from racer.core.input import Key, KeyBinding, KeyToken


class TestGameConfig:

    def test_defaults(self):
        config = GameConfig()
        assert config.track_width == 20
        assert config.screen_height == 20
        assert config.difficulty == 1
        assert config.bindings == KeyBinding.default()
        assert KeyToken.character("q") in config.quit_keys
        assert KeyToken.named(Key.INTERRUPT) in config.quit_keys
        assert config.spawn_probability == 0.3
        assert config.spawn_gap == 2
        assert config.score_per_obstacle == 10

    @pytest.mark.parametrize("level, expected", [(-3, 1), (0, 1), (1, 1), (3, 3), (5, 5), (9, 5)])
    def test_difficulty_clamped(self, level, expected):
        assert clamp_difficulty(level) == expected
        assert GameConfig(difficulty=level).difficulty == expected

    @pytest.mark.parametrize("level, expected_ms", [(1, 100), (2, 80), (3, 60), (4, 40), (5, 20)])
    def test_tick_interval_shrinks_with_difficulty(self, level, expected_ms):
        assert GameConfig(difficulty=level).tick_interval == pytest.approx(expected_ms / 1000)

    def test_tick_interval_floor(self):
        config = GameConfig(difficulty=5, base_tick_ms=60, tick_step_ms=20, min_tick_ms=25)
        assert config.tick_interval == pytest.approx(0.025)

    def test_column_bounds(self):
        config = GameConfig(track_width=20)
        assert (config.min_column, config.max_column, config.start_column) == (2, 21, 11)

    def test_with_difficulty_returns_copy(self):
        config = GameConfig(difficulty=2)
        harder = config.with_difficulty(7)
        assert harder.difficulty == 5
        assert config.difficulty == 2

    def test_with_bindings_returns_copy(self):
        config = GameConfig()
        arrows = KeyBinding(left=KeyToken.named(Key.LEFT), right=KeyToken.named(Key.RIGHT))
        updated = config.with_bindings(arrows)
        assert updated.bindings == arrows
        assert config.bindings == KeyBinding.default()

    @pytest.mark.parametrize("kwargs", [
        {"track_width": 0},
        {"screen_height": 1},
        {"spawn_probability": 1.5},
        {"min_tick_ms": 0},
        {"frame_yield_ms": -1},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ConfigError):
            GameConfig(**kwargs)


class TestParseConfig:

    def test_full_settings(self):
        config = parse_config({
            "difficulty": 4,
            "controls": {"left": "LEFT_ARROW", "right": "RIGHT_ARROW", "quit": ["x"]},
            "timing": {"base_tick_ms": 200, "tick_step_ms": 30, "min_tick_ms": 50,
                       "frame_yield_ms": 2.5, "escape_timeout_ms": 80},
            "spawn": {"probability": 0.5, "gap": 3},
            "scoring": {"per_obstacle": 25},
            "highscore_file": "best.txt",
            "seed": 42,
        })

        assert config.difficulty == 4
        assert config.bindings == KeyBinding(left=KeyToken.named(Key.LEFT), right=KeyToken.named(Key.RIGHT))
        assert config.quit_keys == (KeyToken.character("x"),)
        assert config.tick_interval == pytest.approx(0.08)
        assert config.frame_yield == pytest.approx(0.0025)
        assert config.escape_timeout == pytest.approx(0.08)
        assert (config.spawn_probability, config.spawn_gap) == (0.5, 3)
        assert config.score_per_obstacle == 25
        assert config.highscore_file == "best.txt"
        assert config.seed == 42

    def test_partial_controls_keep_defaults(self):
        config = parse_config({"controls": {"right": "l"}})
        assert config.bindings == KeyBinding(left=KeyToken.character("a"), right=KeyToken.character("l"))

    def test_single_quit_key_string(self):
        assert parse_config({"controls": {"quit": "CTRL_C"}}).quit_keys == (KeyToken.named(Key.INTERRUPT),)

    def test_empty_mapping_gives_defaults(self):
        assert parse_config({}) == GameConfig()

    @pytest.mark.parametrize("data", [
        ["not", "a", "mapping"],
        {"difficulty": "hard"},
        {"controls": {"left": "NOT_A_KEY"}},
        {"spawn": "often"},
        {"spawn": {"probability": 2}},
    ])
    def test_malformed_settings(self, data):
        with pytest.raises(ConfigError):
            parse_config(data)


class TestConfigLoader:

    def test_load_yaml_file(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("difficulty: 2\ncontrols:\n  left: j\n  right: l\n", encoding="utf-8")

        config = load_config(str(settings))

        assert config.difficulty == 2
        assert config.bindings.describe() == "Left=j Right=l"

    def test_missing_file_falls_back_with_warning(self, tmp_path):
        warnings = []
        config = ConfigLoader(str(tmp_path / "absent.yaml"), warn=warnings.append).load()

        assert config == GameConfig()
        assert len(warnings) == 1
        assert "not found" in warnings[0]

    def test_invalid_yaml(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("difficulty: [1, 2\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config(str(settings))

    def test_undecodable_file(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_bytes(b"difficulty: \xff\n")

        with pytest.raises(ConfigError):
            load_config(str(settings))

    def test_directory_instead_of_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(str(tmp_path))

    def test_empty_file_gives_defaults(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("", encoding="utf-8")
        assert load_config(str(settings)) == GameConfig()

    def test_bundled_settings_file(self):
        config = load_config()
        assert config.track_width == 20
        assert config.bindings == KeyBinding.default()
