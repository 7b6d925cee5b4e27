"""Command-line entry point: settings, logging, terminal and the menu."""

import argparse
import sys
from dataclasses import replace
from typing import Optional

from .core.config import GameConfig, load_config
from .core.errors import ConfigError, TerminalError
from .core.events import EventManager, LogSaveRequested
from .core.terminal import TerminalIO
from .game.game_loop import GameLoop
from .game.highscore import HighScoreStore
from .game.log_manager import LogLevel, LogManager
from .game.menu import MainMenu
from .game.session import GameResult
from .terminals import open_terminal


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="terminal-racer",
        description="Dodge the obstacles on a terminal race track.",
    )
    parser.add_argument("--config", help="Path to a YAML settings file")
    parser.add_argument("--difficulty", type=int, help="Starting level, 1 (easy) to 5 (hardest)")
    parser.add_argument("--highscore-file", help="File that stores the best score")
    parser.add_argument("--seed", type=int, help="Seed for obstacle placement")
    parser.add_argument("--log-file", help="Write the game log to this file on exit")
    parser.add_argument("--play", action="store_true", help="Start a game right away and skip the menu")
    parser.add_argument("--debug", action="store_true", help="Keep input and event details in the log")
    return parser


def apply_overrides(config: GameConfig, args: argparse.Namespace) -> GameConfig:
    if args.difficulty is not None:
        config = config.with_difficulty(args.difficulty)
    if args.highscore_file:
        config = replace(config, highscore_file=args.highscore_file)
    if args.seed is not None:
        config = replace(config, seed=args.seed)
    return config


class Application:
    """Wires the game loop to the menu, the high score file and the log."""

    def __init__(self, config: GameConfig, terminal: TerminalIO, event_manager: EventManager):
        self.config = config
        self.terminal = terminal
        self.event_manager = event_manager
        self.high_scores = HighScoreStore(config.highscore_file)

    def play(self, config: GameConfig) -> GameResult:
        loop = GameLoop(
            config,
            self.terminal,
            event_manager=self.event_manager,
            high_scores=self.high_scores,
        )
        return loop.run()

    def build_menu(self) -> MainMenu:
        return MainMenu(self.config, self.terminal, self.high_scores, play=self.play)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    event_manager = EventManager(enable_debug_logging=args.debug)
    log_manager = LogManager(event_manager, log_path=args.log_file)
    if args.debug:
        log_manager.set_log_level(LogLevel.DEBUG)
        event_manager.set_debug_callback(log_manager.debug)

    try:
        config = apply_overrides(load_config(args.config, warn=log_manager.warning), args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    log_manager.system(f"Settings loaded: level {config.difficulty}, {config.bindings.describe()}")
    app = Application(config, open_terminal(), event_manager)

    status = 0
    try:
        if args.play:
            result = app.play(config)
            app.build_menu().show_game_over(result)
        else:
            app.build_menu().run()
    except TerminalError as e:
        log_manager.error(str(e))
        print(f"\n\nTerminal unavailable: {e}", file=sys.stderr)
        status = 1
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user")
        status = 130
    finally:
        if args.log_file:
            event_manager.publish_immediate(LogSaveRequested(tick=0, path=args.log_file), source="main")
        print("\n\nThanks for playing Terminal Racer!")

    return status
