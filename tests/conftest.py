import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from objects.game_state import GameState  # noqa: E402
from objects.observers import Observers  # noqa: E402
from utils.config import Config  # noqa: E402
from utils.game_controller import GameController  # noqa: E402
from utils.wled import WLEDDriver  # noqa: E402


class FakeSocketIO:
    """Records emits instead of talking to real Socket.IO clients."""

    def __init__(self):
        self.emitted = []
        self.handlers = {}

    def on(self, event):
        def decorator(handler):
            self.handlers[event] = handler
            return handler
        return decorator

    async def emit(self, event, data=None, to=None):
        self.emitted.append((event, data, to))

    def states(self, to=None):
        return [data for event, data, target in self.emitted if event == 'state' and target == to]


@pytest.fixture
def fake_sio():
    return FakeSocketIO()


@pytest.fixture
def game():
    return GameState(max_hp=100, hp_per_crystal=10)


@pytest.fixture
def observers():
    return Observers()


@pytest.fixture
def controller(fake_sio, game, observers):
    return GameController(fake_sio, game, WLEDDriver('', 10), observers)


@pytest.fixture
def test_config():
    return Config(environ={'BOSS_MAX_HP': '100', 'HP_PER_CRYSTAL': '10', 'STATIC_DIR': '/nonexistent'},
                  config_path=None)
