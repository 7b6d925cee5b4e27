"""Unit tests for the player, the game session and its phases."""
import pytest

from racer.core.config import GameConfig
from racer.game.session import EndReason, GamePhase, GameSession, Player


class TestPlayerMovement:
    """Test clamped player movement."""

    def test_moves_one_column(self):
        player = Player(x=11, min_x=2, max_x=21)
        assert player.move(-1)
        assert player.x == 10
        assert player.move(1)
        assert player.x == 11

    def test_left_edge_is_a_no_op(self):
        player = Player(x=2, min_x=2, max_x=21)
        assert not player.move(-1)
        assert player.x == 2

    def test_right_edge_is_a_no_op(self):
        player = Player(x=21, min_x=2, max_x=21)
        assert not player.move(1)
        assert player.x == 21

    @pytest.mark.parametrize("moves", [[-1] * 40, [1] * 40, [1, -1] * 20 + [1] * 30])
    def test_stays_within_bounds(self, moves):
        player = Player(x=11, min_x=2, max_x=21)
        for delta in moves:
            player.move(delta)
            assert 2 <= player.x <= 21


class TestGameSession:
    """Test GameSession creation and lifecycle."""

    def test_new_session_is_fresh(self):
        config = GameConfig(track_width=20, screen_height=20)
        session = GameSession.new(config)

        assert session.score == 0
        assert session.phase == GamePhase.RUNNING
        assert session.is_running
        assert not session.is_over
        assert session.end_reason is None
        assert session.player.x == 11
        assert (session.player.min_x, session.player.max_x) == (2, 21)
        assert session.field.is_empty
        assert session.field.bottom_row == 20

    def test_end_records_first_reason(self):
        session = GameSession.new(GameConfig())
        session.end(EndReason.COLLISION)
        session.end(EndReason.QUIT)

        assert session.is_over
        assert session.end_reason == EndReason.COLLISION

    def test_add_cleared(self):
        session = GameSession.new(GameConfig())

        assert session.add_cleared(1, per_obstacle=10) == 10
        assert session.add_cleared(0, per_obstacle=10) == 0
        assert session.score == 10
        assert session.obstacles_cleared == 1

    def test_add_cleared_defaults_to_ten_points(self):
        session = GameSession.new(GameConfig())

        assert session.add_cleared(2) == 20
        assert session.add_cleared(1, per_obstacle=25) == 25
        assert session.score == 45
        assert session.obstacles_cleared == 3

    def test_sessions_share_nothing(self):
        config = GameConfig()
        first = GameSession.new(config)
        second = GameSession.new(config)
        first.field.place(5, 5)
        first.player.move(1)

        assert second.field.is_empty
        assert second.player.x == config.start_column
