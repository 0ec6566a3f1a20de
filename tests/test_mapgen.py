import pytest

from oatmeal.entities import DOOR, EMPTY, WALL, WATER, make_catalog
from oatmeal.mapgen import (
    DUNGEON_HEIGHT, DUNGEON_WIDTH, MapBuilder, TileGrid,
    build_dungeon, build_room_demo
)


def test_builder_fills_with_default():
    grid = MapBuilder(4, 3, WALL).finish()
    assert (grid.width, grid.height) == (4, 3)
    assert grid.tiles() == [WALL] * 12


def test_wall_rect_leaves_interior():
    builder = MapBuilder(6, 5)
    builder.wall_rect(1, 1, 4, 3)
    grid = builder.finish()
    assert grid.row(0) == [EMPTY] * 6
    assert grid.row(1) == [EMPTY, WALL, WALL, WALL, WALL, EMPTY]
    assert grid.row(2) == [EMPTY, WALL, EMPTY, EMPTY, WALL, EMPTY]
    assert grid.row(3) == [EMPTY, WALL, WALL, WALL, WALL, EMPTY]
    assert grid.row(4) == [EMPTY] * 6


def test_carve_line_both_axes():
    builder = MapBuilder(5, 5)
    builder.carve_line(1, 0, True, 3)
    builder.carve_line(2, 4, False, 3, WATER)
    grid = builder.finish()
    assert [grid.get(row, 1) for row in range(5)] == [WALL, WALL, WALL, EMPTY, EMPTY]
    assert grid.row(4) == [EMPTY, EMPTY, WATER, WATER, WATER]


def test_carve_rect_hollows_rock():
    builder = MapBuilder(5, 4, WALL)
    builder.carve_rect(1, 1, 3, 2)
    grid = builder.finish()
    assert grid.row(0) == [WALL] * 5
    assert grid.row(1) == [WALL, EMPTY, EMPTY, EMPTY, WALL]
    assert grid.row(2) == [WALL, EMPTY, EMPTY, EMPTY, WALL]
    assert grid.row(3) == [WALL] * 5


def test_set_tile_is_x_then_y():
    builder = MapBuilder(3, 2)
    builder.set_tile(2, 1, DOOR)
    assert builder.finish().get(1, 2) == DOOR


@pytest.mark.parametrize('operation', [
    lambda b: b.set_tile(4, 0, WALL),
    lambda b: b.set_tile(0, -1, WALL),
    lambda b: b.wall_rect(2, 2, 3, 3),
    lambda b: b.carve_line(0, 2, True, 3),
    lambda b: b.carve_rect(3, 0, 2, 1),
])
def test_builder_rejects_out_of_bounds(operation):
    builder = MapBuilder(4, 4)
    with pytest.raises(IndexError):
        operation(builder)


def test_builder_is_single_use():
    builder = MapBuilder(2, 2)
    builder.finish()
    with pytest.raises(RuntimeError):
        builder.set_tile(0, 0, WALL)
    with pytest.raises(RuntimeError):
        builder.finish()


def test_snapshot_is_independent():
    builder = MapBuilder(2, 2)
    grid = builder.finish()
    grid.set(0, 0, WALL)
    assert grid.tiles() == [WALL, EMPTY, EMPTY, EMPTY]


@pytest.mark.parametrize('size', [(0, 3), (3, 0), (-1, 2)])
def test_builder_rejects_empty_maps(size):
    with pytest.raises(ValueError):
        MapBuilder(*size)


def test_grid_bounds():
    grid = TileGrid(3, 2, [EMPTY] * 6)
    assert grid.in_bounds(1, 2)
    assert not grid.in_bounds(2, 0)
    assert not grid.in_bounds(0, -1)
    with pytest.raises(IndexError):
        grid.get(0, 3)
    with pytest.raises(IndexError):
        grid.set(-1, 0, WALL)


def test_grid_must_be_rectangular():
    with pytest.raises(ValueError):
        TileGrid(3, 2, [EMPTY] * 5)


def test_room_demo_layout():
    grid = build_room_demo(30, 20)
    assert grid.get(0, 0) == WALL
    assert grid.get(4, 3) == EMPTY      # doorway out of the small room
    assert grid.get(10, 3) == EMPTY     # doorway into the large room
    assert grid.get(7, 2) == WALL       # corridor walls
    assert grid.get(7, 4) == WALL
    assert grid.get(7, 3) == EMPTY
    assert grid.get(19, 24) == WALL


def test_dungeon_layout():
    grid, spawn_row, spawn_col = build_dungeon()
    catalog = make_catalog()
    assert (grid.width, grid.height) == (DUNGEON_WIDTH, DUNGEON_HEIGHT)
    assert not catalog.lookup(grid.get(spawn_row, spawn_col)).blocks
    assert all(tile in catalog for tile in grid.tiles())
    # Solid rock around the edges
    assert set(grid.row(0)) == {WALL}
    assert set(grid.row(DUNGEON_HEIGHT - 1)) == {WALL}
    assert grid.get(6, 22) == DOOR
    assert grid.get(8, 44) == WATER
    assert grid.get(9, 49) == WATER


def test_dungeon_is_deterministic():
    first, _, _ = build_dungeon()
    second, _, _ = build_dungeon()
    assert first.tiles() == second.tiles()
