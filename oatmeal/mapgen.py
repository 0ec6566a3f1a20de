"""
Map Construction
=================
Tile grids and the builder that carves them.

Builder coordinates are (x, y) = (column, row); grid accessors take
(row, col), matching how levels walk the map.
"""

import logging
from typing import List, Tuple

from .entities import EMPTY, WALL, WATER, DOOR


logger = logging.getLogger(__name__)

# Dungeon layout: larger than the default 80x24 viewport so the camera scrolls
DUNGEON_WIDTH = 120
DUNGEON_HEIGHT = 40
DUNGEON_SPAWN = (4, 4)  # (row, col)


class TileGrid:
    """
    Rectangular grid of tile indices, stored flat with a row stride.

    Every access is bounds checked; an out-of-range coordinate is a
    programming error and raises IndexError.
    """

    def __init__(self, width: int, height: int, tiles: List[int]):
        if len(tiles) != width * height:
            raise ValueError(
                f'{len(tiles)} tiles cannot fill a {width}x{height} grid'
            )
        self.width = width
        self.height = height
        self._tiles = tiles

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def _index(self, row: int, col: int) -> int:
        if not self.in_bounds(row, col):
            raise IndexError(
                f'tile ({row}, {col}) outside {self.width}x{self.height} grid'
            )
        return row * self.width + col

    def get(self, row: int, col: int) -> int:
        return self._tiles[self._index(row, col)]

    def set(self, row: int, col: int, tile: int):
        self._tiles[self._index(row, col)] = tile

    def row(self, row: int) -> List[int]:
        start = self._index(row, 0)
        return self._tiles[start:start + self.width]

    def tiles(self) -> List[int]:
        """Copy of every tile, row by row."""
        return list(self._tiles)


class MapBuilder:
    """Single-use builder: carve, then finish() once for a snapshot."""

    def __init__(self, width: int, height: int, fill: int = EMPTY):
        if width <= 0 or height <= 0:
            raise ValueError(f'map size must be positive, got {width}x{height}')
        self.width = width
        self.height = height
        self._tiles = [fill] * (width * height)
        self._finished = False

    def _put(self, x: int, y: int, tile: int):
        if self._finished:
            raise RuntimeError('map builder already finished')
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f'({x}, {y}) outside {self.width}x{self.height} map'
            )
        self._tiles[y * self.width + x] = tile

    def wall_rect(self, x: int, y: int, width: int, height: int):
        """Wall off the border of a rectangle; the interior is left alone."""
        for i in range(width):
            self._put(x + i, y, WALL)
            self._put(x + i, y + height - 1, WALL)
        for j in range(1, height - 1):
            self._put(x, y + j, WALL)
            self._put(x + width - 1, y + j, WALL)

    def carve_line(self, x: int, y: int, vertical: bool, length: int,
                   tile: int = WALL):
        """Set `length` cells from (x, y) along one axis to `tile`."""
        for i in range(length):
            if vertical:
                self._put(x, y + i, tile)
            else:
                self._put(x + i, y, tile)

    def carve_rect(self, x: int, y: int, width: int, height: int):
        """Hollow out a rectangle."""
        for j in range(height):
            for i in range(width):
                self._put(x + i, y + j, EMPTY)

    def set_tile(self, x: int, y: int, tile: int):
        self._put(x, y, tile)

    def finish(self) -> TileGrid:
        """Return an independent grid and seal the builder."""
        if self._finished:
            raise RuntimeError('map builder already finished')
        self._finished = True
        return TileGrid(self.width, self.height, list(self._tiles))


# =============================================================================
# LAYOUTS
# =============================================================================

def build_room_demo(width: int, height: int) -> TileGrid:
    """
    Two walled rooms joined by a short corridor, on open floor.

    Needs at least 25x20.
    """
    builder = MapBuilder(width, height, EMPTY)
    builder.wall_rect(0, 0, 5, 5)
    builder.wall_rect(0, 10, 25, 10)
    builder.carve_line(2, 5, True, 5)
    builder.carve_line(4, 5, True, 5)
    builder.set_tile(3, 4, EMPTY)
    builder.set_tile(3, 10, EMPTY)
    return builder.finish()


def build_dungeon() -> Tuple[TileGrid, int, int]:
    """
    Carve the dungeon out of solid rock.

    Returns (grid, spawn_row, spawn_col). The hero is not placed; the
    level does that after checking the spawn tile.
    """
    builder = MapBuilder(DUNGEON_WIDTH, DUNGEON_HEIGHT, WALL)

    # Entry hall with a pillar line
    builder.carve_rect(2, 2, 20, 10)
    builder.carve_line(8, 4, True, 6, WALL)

    # East passage into the great hall
    builder.carve_line(22, 6, False, 18, EMPTY)
    builder.set_tile(22, 6, DOOR)
    builder.set_tile(39, 6, DOOR)
    builder.carve_rect(40, 3, 30, 14)
    builder.carve_line(44, 8, False, 6, WATER)
    builder.carve_line(44, 9, False, 6, WATER)

    # South stairwell to the cellar
    builder.carve_line(55, 17, True, 10, EMPTY)
    builder.carve_rect(45, 27, 40, 10)

    # Far east vault, walled inside its own chamber
    builder.carve_line(85, 31, False, 15, EMPTY)
    builder.carve_rect(100, 20, 18, 18)
    builder.wall_rect(104, 24, 10, 10)
    builder.set_tile(109, 24, DOOR)

    grid = builder.finish()
    logger.debug('Built dungeon %dx%d, spawn=%s', grid.width, grid.height,
                 DUNGEON_SPAWN)
    return grid, DUNGEON_SPAWN[0], DUNGEON_SPAWN[1]
