"""
Text menu around the game loop.

The menu reads line-buffered input with the terminal in its normal mode and
only takes raw mode for the duration of a game or of a key capture.
"""
import time
from typing import Callable, Optional

from ..core.config import MAX_DIFFICULTY, MIN_DIFFICULTY, GameConfig
from ..core.decoder import InputDecoder
from ..core.input import KeyBinding, KeyToken
from ..core.terminal import TerminalIO
from .highscore import HighScoreStore
from .session import EndReason, GameResult

CLEAR_SCREEN = "\033[2J\033[1;1H"

MENU_NEW_GAME = "1"
MENU_LEVEL = "2"
MENU_CONTROLS = "3"
MENU_HIGH_SCORE = "4"
MENU_EXIT = "5"


class MainMenu:
    """Main menu: new game, level select, controls, high score, exit."""

    def __init__(
        self,
        config: GameConfig,
        terminal: TerminalIO,
        high_scores: HighScoreStore,
        play: Callable[[GameConfig], GameResult],
        input_fn: Optional[Callable[[str], str]] = None,
        output: Optional[Callable[[str], None]] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        capture_poll_interval: float = 0.025,
    ):
        self.config = config
        self.terminal = terminal
        self.high_scores = high_scores
        self.play = play
        self.input_fn = input_fn or input
        self.output = output or print
        self.clock = clock
        self.sleep = sleep
        self.capture_poll_interval = capture_poll_interval
        self.last_result: Optional[GameResult] = None

    def run(self) -> GameConfig:
        """Show the menu until the player exits; returns the final settings."""
        while True:
            self.show()
            try:
                choice = self.input_fn("Enter choice (1-5) and press ENTER: ").strip()
            except EOFError:
                break
            if not self.handle_choice(choice):
                break
        return self.config

    def show(self) -> None:
        bindings = self.config.bindings
        self.output(CLEAR_SCREEN + "--- TERMINAL RACER MENU ---\n")
        self.output(f"1. New Game (Level: {self.config.difficulty})")
        self.output(f"2. Select Level ({MIN_DIFFICULTY}-{MAX_DIFFICULTY})")
        self.output(f"3. Controls (Left: '{bindings.left.display()}', Right: '{bindings.right.display()}')")
        self.output(f"4. Highest Score: {self.high_scores.load()}")
        self.output("5. Exit\n")

    def handle_choice(self, choice: str) -> bool:
        """Act on one menu choice. Returns False when the player chose to exit."""
        if choice == MENU_NEW_GAME:
            self.new_game()
        elif choice == MENU_LEVEL:
            self.select_level()
        elif choice == MENU_CONTROLS:
            self.customize_controls()
        elif choice == MENU_HIGH_SCORE:
            self._pause("Highest score displayed. Press ENTER to return to menu.")
        elif choice == MENU_EXIT:
            return False
        else:
            self._pause("Invalid choice. Press ENTER to continue...")
        return True

    def new_game(self) -> GameResult:
        result = self.play(self.config)
        self.last_result = result
        self.show_game_over(result)
        return result

    def show_game_over(self, result: GameResult) -> None:
        headline = "*** GAME OVER ***" if result.reason == EndReason.COLLISION else "*** RUN ENDED ***"
        self.output(f"\n\n  {headline}")
        self.output(f"  Final Score: {result.score}")
        self.output(f"  Highest Score: {result.high_score}")
        if result.new_high_score:
            self.output("  New high score!")
        self._pause("\nPress ENTER to return to the main menu...")

    def select_level(self) -> int:
        self.output(CLEAR_SCREEN + "--- SELECT DIFFICULTY ---\n")
        self.output(
            f"Levels: {MIN_DIFFICULTY} (Easy) to {MAX_DIFFICULTY} (Hardest). Current: {self.config.difficulty}"
        )
        try:
            answer = self.input_fn(f"Enter new level ({MIN_DIFFICULTY}-{MAX_DIFFICULTY}) and press ENTER: ")
        except EOFError:
            return self.config.difficulty

        try:
            level = int(answer.strip())
        except ValueError:
            level = self.config.difficulty

        # Out-of-range answers keep the current level
        if MIN_DIFFICULTY <= level <= MAX_DIFFICULTY:
            self.config = self.config.with_difficulty(level)
        self._pause(f"Level set to {self.config.difficulty}. Press ENTER to return to menu.")
        return self.config.difficulty

    def customize_controls(self) -> KeyBinding:
        bindings = self.config.bindings
        self.output(CLEAR_SCREEN + "--- CONTROL CUSTOMIZATION ---\n")
        self.output(f"Current Left Key : {bindings.left.display()}")
        self.output(f"Current Right Key: {bindings.right.display()}\n")

        left = self.capture_key("Press any key now to set NEW Left control (arrow keys work).")
        self.output(f"\nLeft key assigned to: {left.display()}")
        right = self.capture_key("Now press any key to set NEW Right control (arrow keys work).")
        self.output(f"\nRight key assigned to: {right.display()}\n")

        bindings = KeyBinding(left=left, right=right)
        self.config = self.config.with_bindings(bindings)
        self.output(f"Controls Updated! Left: '{left.display()}'  Right: '{right.display()}'\n")
        self._pause("Press ENTER to return to the menu...")
        return bindings

    def capture_key(self, prompt: str) -> KeyToken:
        """Wait in raw mode for one bindable key press."""
        self.output(prompt)
        decoder = InputDecoder(self.terminal.key_sequences, escape_timeout=self.config.escape_timeout)

        with self.terminal.raw_mode():
            while True:
                data = self.terminal.poll_key()
                now = self.clock()
                tokens = decoder.feed(data, now) if data else []
                expired = decoder.expire(now)
                if expired is not None:
                    tokens.append(expired)

                for token in tokens:
                    if token.is_recognized:
                        return token
                self.sleep(self.capture_poll_interval)

    def _pause(self, message: str) -> None:
        self.output(message)
        try:
            self.input_fn("")
        except EOFError:
            pass
