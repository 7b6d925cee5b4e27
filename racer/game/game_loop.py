"""
Real-time game loop.

One thread runs input polling, simulation and rendering in sequence. Input
is polled and applied on every iteration so steering feels immediate; the
obstacle simulation only advances when a full tick interval of wall-clock
time has passed; every iteration redraws the screen and then yields briefly
so polling does not saturate a CPU core.
"""

import random
import time
from typing import Callable, Optional

from ..core.config import GameConfig
from ..core.decoder import InputDecoder
from ..core.events import (
    CollisionDetected, EventManager, EventPriority, GameEnded, GameStarted,
    KeyDecoded, LogMessage, ObstacleCleared, ObstacleSpawned,
)
from ..core.input import KeyToken
from ..core.renderable import RenderContext
from ..core.renderer import Renderer
from ..core.terminal import TerminalIO
from ..renderers.terminal_renderer import TerminalRenderer
from .collision import check_collision
from .highscore import HighScoreStore
from .session import EndReason, GameResult, GameSession


class GameLoop:
    """Runs one game from the first frame until the car crashes or the player quits."""

    def __init__(
        self,
        config: GameConfig,
        terminal: TerminalIO,
        renderer: Optional[Renderer] = None,
        event_manager: Optional[EventManager] = None,
        high_scores: Optional[HighScoreStore] = None,
        decoder: Optional[InputDecoder] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.terminal = terminal
        self.renderer = renderer or TerminalRenderer(terminal)
        self.event_manager = event_manager or EventManager()
        self.high_scores = high_scores
        self.decoder = decoder or InputDecoder(terminal.key_sequences, escape_timeout=config.escape_timeout)
        self.clock = clock
        self.sleep = sleep
        self.rng = rng or random.Random(config.seed)

        # Fixed for the whole run
        self.bindings = config.bindings
        self.quit_keys = frozenset(config.quit_keys)
        self.tick_interval = config.tick_interval
        self.frame_yield = config.frame_yield

        self.frames = 0
        self._last_tick = 0.0
        self.session = GameSession.new(config, rng=self.rng)

    def reset(self) -> GameSession:
        """Start over with a fresh session."""
        self.session = GameSession.new(self.config, rng=self.rng)
        self.decoder.reset()
        self.frames = 0
        return self.session

    def run(self) -> GameResult:
        """Play until the session is over and report the result.

        Raises:
            TerminalError: if raw mode cannot be acquired; the loop never starts
        """
        if self.session.is_over:
            self.reset()

        with self.terminal.raw_mode():
            try:
                self.renderer.start()
                self._last_tick = self.clock()
                self.event_manager.publish(
                    GameStarted(tick=0, difficulty=self.config.difficulty, tick_interval=self.tick_interval),
                    source="GameLoop",
                )
                self._log(
                    f"Run started at level {self.config.difficulty} "
                    f"({self.tick_interval * 1000:.0f} ms per tick)"
                )
                while self.session.is_running:
                    self.step()
            finally:
                self.renderer.stop()
                self.event_manager.process_events()

        return self._finish()

    def step(self) -> None:
        """One loop iteration: input, maybe a tick, render, yield."""
        for token in self._poll_input():
            self._handle_key(token)
            if self.session.is_over:
                return

        now = self.clock()
        if now - self._last_tick >= self.tick_interval:
            self.tick()
            self._last_tick = now

        self._render()
        self.event_manager.process_events()

        if self.frame_yield > 0:
            self.sleep(self.frame_yield)

    def tick(self) -> None:
        """Advance the simulation by one step and check for a crash."""
        session = self.session
        obstacle_field = session.field
        bottom_row = self.config.screen_height
        player_x = session.player.x
        session.ticks += 1

        # The car may have steered into an obstacle that already sits on the bottom row
        steered_into = check_collision(player_x, obstacle_field, bottom_row)

        cleared = obstacle_field.advance()
        if cleared:
            session.add_cleared(cleared, self.config.score_per_obstacle)
            self.event_manager.publish(ObstacleCleared(tick=session.ticks, score=session.score), source="GameLoop")

        spawned = obstacle_field.maybe_spawn()
        if spawned is not None:
            self.event_manager.publish(
                ObstacleSpawned(tick=session.ticks, x=spawned.x, y=spawned.y),
                priority=EventPriority.LOW,
                source="GameLoop",
            )

        if steered_into or check_collision(player_x, obstacle_field, bottom_row):
            self.event_manager.publish(
                CollisionDetected(tick=session.ticks, x=player_x, y=bottom_row),
                priority=EventPriority.HIGH,
                source="GameLoop",
            )
            self._log(f"Crashed at column {player_x} with score {session.score}")
            session.end(EndReason.COLLISION)

    def build_render_context(self) -> RenderContext:
        session = self.session
        return RenderContext(
            track_width=self.config.track_width,
            screen_height=self.config.screen_height,
            player_x=session.player.x,
            obstacles=session.field.positions(),
            score=session.score,
            difficulty=self.config.difficulty,
            left_label=self.bindings.left.display(),
            right_label=self.bindings.right.display(),
            crashed=session.end_reason == EndReason.COLLISION,
        )

    def _poll_input(self) -> list[KeyToken]:
        try:
            data = self.terminal.poll_key()
        except OSError as e:
            self._log(f"Input poll failed: {e}", category="ERROR")
            return []

        now = self.clock()
        tokens = self.decoder.feed(data, now) if data else []
        expired = self.decoder.expire(now)
        if expired is not None:
            tokens.append(expired)
        return tokens

    def _handle_key(self, token: KeyToken) -> None:
        self.event_manager.publish(
            KeyDecoded(tick=self.session.ticks, display=token.display(), recognized=token.is_recognized),
            priority=EventPriority.LOW,
            source="GameLoop",
        )

        if not token.is_recognized:
            self._log(f"Ignored unrecognized input {token.display()}", category="INPUT")
            return

        delta = self.bindings.direction_of(token)
        if delta:
            self.session.player.move(delta)
        elif token in self.quit_keys:
            self._log(f"Quit with {token.display()} at score {self.session.score}")
            self.session.end(EndReason.QUIT)

    def _render(self) -> None:
        try:
            self.renderer.render_frame(self.build_render_context())
        except OSError as e:
            self._log(f"Frame {self.frames} not drawn: {e}", category="ERROR")
            return
        self.frames += 1

    def _finish(self) -> GameResult:
        session = self.session
        reason = session.end_reason or EndReason.QUIT

        high_score = session.score
        new_high_score = False
        if self.high_scores is not None:
            try:
                new_high_score = self.high_scores.save(session.score)
                high_score = max(self.high_scores.load(), session.score)
            except OSError as e:
                self._log(f"High score not saved: {e}", category="ERROR")

        self.event_manager.publish(
            GameEnded(tick=session.ticks, score=session.score, reason=reason.name.lower()),
            source="GameLoop",
        )
        self._log(f"Run over ({reason.name.lower()}): score {session.score} after {session.ticks} ticks")
        self.event_manager.process_events()

        return GameResult(
            score=session.score,
            reason=reason,
            high_score=high_score,
            ticks=session.ticks,
            new_high_score=new_high_score,
        )

    def _log(self, message: str, category: str = "GAME") -> None:
        self.event_manager.publish(
            LogMessage(tick=self.session.ticks, message=message, category=category, source="GameLoop"),
            source="GameLoop",
        )
