"""Terminal Racer: steer a car along a character-cell track and dodge the obstacles."""

__version__ = "0.1.0"
