import contextlib

import pytest

from oatmeal.engine import ViewportBuffer
from oatmeal.entities import EMPTY, WALL, make_catalog
from oatmeal.levels import new_dungeon
from oatmeal.mapgen import MapBuilder


class FakeTerm:
    """Stands in for blessed.Terminal with readable sequences."""

    home = '<home>'
    normal = '<normal>'
    clear = '<clear>'
    width = 80
    height = 24

    def __init__(self, keys=(), is_a_tty=True):
        self.keys = list(keys)
        self.is_a_tty = is_a_tty
        self.events = []

    def color(self, n):
        return f'<fg{n}>'

    def on_color(self, n):
        return f'<bg{n}>'

    def move_xy(self, x, y):
        return f'<at{x},{y}>'

    def inkey(self):
        return self.keys.pop(0)

    @contextlib.contextmanager
    def _mode(self, name):
        self.events.append(f'enter {name}')
        try:
            yield
        finally:
            self.events.append(f'exit {name}')

    def fullscreen(self):
        return self._mode('fullscreen')

    def raw(self):
        return self._mode('raw')

    def hidden_cursor(self):
        return self._mode('hidden_cursor')


class ScriptedUI:
    """Terminal port fed from a list of keys; keeps every rendered buffer."""

    def __init__(self, keys):
        self.keys = list(keys)
        self.frames = []

    def render(self, buffer: ViewportBuffer):
        self.frames.append(buffer)

    def read_key(self):
        if not self.keys:
            raise AssertionError('script ran out of keys')
        return self.keys.pop(0)


@pytest.fixture
def fake_term():
    return FakeTerm()


@pytest.fixture
def dungeon():
    return new_dungeon()


@pytest.fixture
def open_field():
    """30x10 floor with no walls, hero at the top-left corner."""
    grid = MapBuilder(30, 10, EMPTY).finish()
    return new_dungeon(1, make_catalog(), grid, (0, 0))


@pytest.fixture
def walled_room():
    """30x10 room walled on its border, hero just inside the corner."""
    builder = MapBuilder(30, 10, EMPTY)
    builder.wall_rect(0, 0, 30, 10)
    return new_dungeon(1, make_catalog(), builder.finish(), (1, 1))


@pytest.fixture
def solid_rock():
    return MapBuilder(5, 5, WALL).finish()
