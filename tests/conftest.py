"""
Shared fixtures for the Terminal Racer test suite.

The game loop takes its clock, sleep function, terminal and random source
as constructor arguments; these fixtures provide deterministic stand-ins.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from racer.core.config import GameConfig
from racer.core.events import EventManager
from racer.core.terminal import TerminalIO
from racer.renderers.simple_renderer import SimpleRenderer
from racer.terminals.scripted import ScriptedTerminal
from tests.helpers import FakeClock


@pytest.fixture(autouse=True)
def release_raw_mode_owner():
    """Make sure no test leaks the process-wide raw mode ownership."""
    yield
    TerminalIO._raw_owner = None


@pytest.fixture
def config():
    return GameConfig(difficulty=3, frame_yield_ms=1.0)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def terminal():
    return ScriptedTerminal()


@pytest.fixture
def renderer():
    return SimpleRenderer()


@pytest.fixture
def event_manager():
    return EventManager(enable_debug_logging=False)
