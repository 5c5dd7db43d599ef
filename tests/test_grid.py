import pytest

from tankgrid.grid import Base, GameMap
from tankgrid.tile import TileType, brick, forest, water


def test_new_map_is_empty():
    game_map = GameMap(4, 3)
    assert game_map.size == (4, 3)
    for y in range(3):
        for x in range(4):
            assert game_map.tile((x, y)).type is TileType.EMPTY


@pytest.mark.parametrize(
    "cell, inside",
    [((0, 0), True), ((3, 2), True), ((4, 0), False), ((0, 3), False), ((-1, 0), False), ((0, -1), False)],
)
def test_is_inside(cell, inside):
    assert GameMap(4, 3).is_inside(cell) is inside


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        GameMap(-1, 5)


def test_outside_reads_as_steel():
    game_map = GameMap(2, 2)
    assert game_map.tile((5, 5)).type is TileType.STEEL
    assert game_map.tile_ref((-1, 0)).type is TileType.STEEL


def test_set_tile_and_read_back():
    game_map = GameMap(3, 3)
    game_map.set_tile((1, 2), brick())
    assert game_map.tile((1, 2)).type is TileType.BRICK
    assert game_map.tile((2, 1)).type is TileType.EMPTY


def test_set_tile_outside_is_ignored():
    game_map = GameMap(2, 2)
    game_map.set_tile((2, 2), brick())
    assert all(game_map.tile((x, y)).type is TileType.EMPTY for x in range(2) for y in range(2))


def test_tile_returns_copy_but_tile_ref_is_live():
    game_map = GameMap(2, 2)
    game_map.set_tile((0, 0), brick())
    game_map.tile((0, 0)).take_damage(2)
    assert game_map.tile((0, 0)).damage == 0
    game_map.tile_ref((0, 0)).take_damage(2)
    assert game_map.tile((0, 0)).damage == 2


def test_set_tile_stores_copy():
    game_map = GameMap(2, 2)
    tile = brick()
    game_map.set_tile((1, 1), tile)
    tile.take_damage(3)
    assert game_map.tile((1, 1)).damage == 0


def test_walkability():
    game_map = GameMap(3, 1)
    game_map.set_tile((0, 0), water())
    game_map.set_tile((1, 0), forest())
    assert not game_map.is_walkable((0, 0))
    assert game_map.is_walkable((1, 0))
    assert game_map.is_walkable((2, 0))
    assert not game_map.is_walkable((3, 0))


def test_base_health_and_destruction():
    eagle = Base((6, 12))
    assert eagle.cell == (6, 12)
    assert eagle.health == 2
    eagle.take_damage()
    assert not eagle.is_destroyed
    eagle.take_damage()
    assert eagle.is_destroyed


def test_base_large_damage():
    eagle = Base((0, 0))
    eagle.take_damage(5)
    assert eagle.is_destroyed
    assert eagle.health < 0