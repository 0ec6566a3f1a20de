"""
Levels
=======
The three phases of a session and the two operations every phase
supports: drawing a frame and reacting to a key.

Levels are plain dataclasses; `get_buffer` and `execute` dispatch on the
level type.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union

from .engine import Color, ViewportBuffer
from .entities import EMPTY, HERO, EntityCatalog, EntityDescriptor, make_catalog
from .keys import Key, KeyKind
from .mapgen import TileGrid, build_dungeon


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

WELCOME_LEVEL = 0
DUNGEON_LEVEL = 1
FAREWELL_LEVEL = 2

TITLE_TEXT = '10K Types of Oatmeal'
WELCOME_HINT = "('n' for next, 'q' to quit)"
FAREWELL_TEXT = 'Thanks for playing!'
FAREWELL_HINT = '(press any key)'

DEFAULT_VIEW_WIDTH = 80
DEFAULT_VIEW_HEIGHT = 24

_STEPS = {
    KeyKind.LEFT: (0, -1),
    KeyKind.RIGHT: (0, 1),
    KeyKind.UP: (-1, 0),
    KeyKind.DOWN: (1, 0),
}


# =============================================================================
# OUTCOMES
# =============================================================================

class Action(Enum):
    OK = auto()
    IGNORED = auto()
    NEXT = auto()
    QUIT = auto()


@dataclass(frozen=True)
class Outcome:
    """What a level wants after handling a key. `index` is set for NEXT."""
    action: Action
    index: Optional[int] = None


OK = Outcome(Action.OK)
IGNORED = Outcome(Action.IGNORED)
QUIT = Outcome(Action.QUIT)


def next_level(index: int) -> Outcome:
    return Outcome(Action.NEXT, index)


# =============================================================================
# LEVEL STATE
# =============================================================================

@dataclass
class WelcomeLevel:
    level_index: int = WELCOME_LEVEL


@dataclass
class FarewellLevel:
    level_index: int = FAREWELL_LEVEL


@dataclass
class DungeonLevel:
    """
    Player-on-a-map state.

    The player always stands on a non-blocking tile. The camera
    (frame_top, frame_left) keeps the player inside the viewport's inner
    margin unless the map edge stops it. In look mode the cursor stays on
    a visible tile and the player does not move.
    """
    level_index: int
    catalog: EntityCatalog
    grid: TileGrid
    player_row: int
    player_col: int
    frame_top: int = 0
    frame_left: int = 0
    buffer_width: int = DEFAULT_VIEW_WIDTH
    buffer_height: int = DEFAULT_VIEW_HEIGHT
    looking: bool = False
    look_row: int = 0
    look_col: int = 0

    def lookup(self, row: int, col: int) -> EntityDescriptor:
        return self.catalog.lookup(self.grid.get(row, col))

    def blocks(self, row: int, col: int) -> bool:
        """Off-map tiles count as blocking."""
        if not self.grid.in_bounds(row, col):
            return True
        return self.lookup(row, col).blocks


Level = Union[WelcomeLevel, DungeonLevel, FarewellLevel]


def new_dungeon(level_index: int = DUNGEON_LEVEL,
                catalog: Optional[EntityCatalog] = None,
                grid: Optional[TileGrid] = None,
                spawn: Optional[tuple] = None) -> DungeonLevel:
    """
    Build a dungeon level and place the hero on its spawn tile.

    Without a grid the standard dungeon layout is used.
    """
    if catalog is None:
        catalog = make_catalog()
    if grid is None:
        grid, spawn_row, spawn_col = build_dungeon()
    else:
        spawn_row, spawn_col = spawn if spawn is not None else (0, 0)

    spawn_entity = catalog.lookup(grid.get(spawn_row, spawn_col))
    if spawn_entity.blocks:
        raise ValueError(
            f'spawn ({spawn_row}, {spawn_col}) is inside a {spawn_entity.name}'
        )
    grid.set(spawn_row, spawn_col, HERO)

    level = DungeonLevel(level_index, catalog, grid, spawn_row, spawn_col)
    _refit_camera(level)
    return level


def make_level(index: int, catalog: Optional[EntityCatalog] = None) -> Optional[Level]:
    """Construct the level for an absolute index, or None past the end."""
    if index == WELCOME_LEVEL:
        return WelcomeLevel()
    if index == DUNGEON_LEVEL:
        return new_dungeon(index, catalog)
    if index == FAREWELL_LEVEL:
        return FarewellLevel()
    return None


# =============================================================================
# CAMERA
# =============================================================================

def _follow(pos: int, frame: int, view: int, extent: int) -> int:
    """
    Scroll one axis so `pos` stays within [1, view - 2] of the frame.

    The frame never leaves [0, extent - view]; near the map edge the
    player may reach the outermost screen cell.
    """
    if view > 2:
        low, high = 1, view - 2
    else:
        low, high = 0, view - 1
    if pos - frame > high:
        frame = pos - high
    elif pos - frame < low:
        frame = pos - low
    return max(0, min(frame, extent - view))


def _refit_camera(level: DungeonLevel):
    level.frame_top = _follow(level.player_row, level.frame_top,
                              level.buffer_height, level.grid.height)
    level.frame_left = _follow(level.player_col, level.frame_left,
                               level.buffer_width, level.grid.width)
    if level.looking:
        level.look_row, level.look_col = _clamp_look(level, level.look_row,
                                                     level.look_col)


def _clamp_look(level: DungeonLevel, row: int, col: int) -> tuple:
    """Clamp a look cursor to the part of the map on screen."""
    bottom = min(level.frame_top + level.buffer_height, level.grid.height) - 1
    right = min(level.frame_left + level.buffer_width, level.grid.width) - 1
    row = max(level.frame_top, min(row, bottom))
    col = max(level.frame_left, min(col, right))
    return row, col


# =============================================================================
# RENDERING
# =============================================================================

def _render_welcome(buffer: ViewportBuffer):
    buffer.print_centered(TITLE_TEXT, -1)
    buffer.print_centered(WELCOME_HINT, 1)


def _render_farewell(buffer: ViewportBuffer):
    buffer.print_centered(FAREWELL_TEXT, -1)
    buffer.print_centered(FAREWELL_HINT, 1)


def _render_dungeon(level: DungeonLevel, buffer: ViewportBuffer):
    grid = level.grid
    for y in range(buffer.height):
        row = level.frame_top + y
        if row >= grid.height:
            break
        for x in range(buffer.width):
            col = level.frame_left + x
            if col >= grid.width:
                break
            entity = level.lookup(row, col)
            buffer.put(y, x, entity.symbol, entity.color, Color.BLACK)

    if level.looking:
        entity = level.lookup(level.look_row, level.look_col)
        cursor_y = level.look_row - level.frame_top
        buffer.put(cursor_y, level.look_col - level.frame_left,
                   entity.symbol, Color.BLACK, Color.YELLOW)
        # The banner must not cover the cursor
        name = entity.name[:buffer.width - 1]
        if cursor_y == buffer.height - 1:
            buffer.print_upper_left(name)
        else:
            buffer.print_lower_left(name)


def get_buffer(level: Level, width: int, height: int) -> ViewportBuffer:
    """Draw the current frame of a level into a fresh buffer."""
    buffer = ViewportBuffer(width, height)
    if isinstance(level, WelcomeLevel):
        _render_welcome(buffer)
    elif isinstance(level, DungeonLevel):
        if (width, height) != (level.buffer_width, level.buffer_height):
            level.buffer_width = width
            level.buffer_height = height
            _refit_camera(level)
        _render_dungeon(level, buffer)
    elif isinstance(level, FarewellLevel):
        _render_farewell(buffer)
    else:
        raise TypeError(f'not a level: {level!r}')
    return buffer


# =============================================================================
# INPUT
# =============================================================================

def _execute_welcome(key: Key) -> Outcome:
    if key.is_char('n'):
        return next_level(DUNGEON_LEVEL)
    if key.is_char('q'):
        return QUIT
    return IGNORED


def _execute_look(level: DungeonLevel, key: Key) -> Outcome:
    if key.is_char('l') or key.kind is KeyKind.ESC:
        level.looking = False
        return OK

    step = _STEPS.get(key.kind)
    if step is None:
        return IGNORED
    level.look_row, level.look_col = _clamp_look(
        level, level.look_row + step[0], level.look_col + step[1]
    )
    return OK


def _move_player(level: DungeonLevel, d_row: int, d_col: int):
    row = level.player_row + d_row
    col = level.player_col + d_col
    if level.blocks(row, col):
        logger.debug('Move to (%d, %d) blocked', row, col)
        return

    level.grid.set(level.player_row, level.player_col, EMPTY)
    level.grid.set(row, col, HERO)
    level.player_row = row
    level.player_col = col

    frame = (level.frame_top, level.frame_left)
    _refit_camera(level)
    if frame != (level.frame_top, level.frame_left):
        logger.debug('Camera scrolled to (%d, %d)', level.frame_top, level.frame_left)


def _execute_dungeon(level: DungeonLevel, key: Key) -> Outcome:
    if level.looking:
        return _execute_look(level, key)

    if key.kind is KeyKind.ESC or key.is_char('q'):
        return next_level(level.level_index + 1)

    step = _STEPS.get(key.kind)
    if step is not None:
        # Blocked moves are absorbed and still count as handled
        _move_player(level, *step)
        return OK

    if key.is_char('l'):
        level.looking = True
        level.look_row = level.player_row
        level.look_col = level.player_col
        return OK

    return IGNORED


def execute(level: Level, key: Key) -> Outcome:
    """Apply one key to a level and report what should happen next."""
    if isinstance(level, WelcomeLevel):
        return _execute_welcome(key)
    if isinstance(level, DungeonLevel):
        return _execute_dungeon(level, key)
    if isinstance(level, FarewellLevel):
        return QUIT
    raise TypeError(f'not a level: {level!r}')
