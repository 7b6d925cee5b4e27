"""Exception hierarchy for the racer package."""


class RacerError(Exception):
    """Base class for all racer errors."""


class TerminalError(RacerError):
    """Raised when the terminal capability cannot be acquired or is already held."""


class ConfigError(RacerError):
    """Raised when a settings file is malformed."""
