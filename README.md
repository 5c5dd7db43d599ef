# tankgrid

The core of a grid-based tank arcade game. It has no graphics and no third-party
dependencies.

## Modules

- `tankgrid.tile` holds the tile types (`TileType`), the collision masks
  (`CollisionMask.NONE`, `TANK`, `BULLET`) and the `Tile` record, which tracks damage
  through `max_damage()`, `take_damage()` and `is_destroyed()`. The factory functions
  `brick()`, `steel()`, `empty()`, `base()`, `forest()`, `water()` and `ice()` build
  the standard tiles. `Wall` wraps a brick tile, or a steel tile for any other type.
- `tankgrid.grid` has `GameMap`, a rectangular grid of tiles addressed by `(x, y)`
  cells, and `Base`, the eagle the player defends. The base starts with a health of 2.
- `tankgrid.input` has `Direction`, `Key` and `InputSystem`. `InputSystem` tracks which
  direction keys are held, with the most recent one winning, and whether a shot is
  pending. W/A/S/D and the arrow keys steer, and Space fires. Scan codes for the
  physical W/A/S/D positions take precedence over key codes.
- `tankgrid.rendering` has the small helpers `Animation` (looping frame names),
  `Camera` (tile to scene coordinates) and `SpriteManager` (a key to path registry).
- `tankgrid.levels` has `LevelLoader`, which builds `LevelData` from character layouts,
  from numeric level files, or as a built-in default layout. `LevelRules` gives the map
  size and the base cell.
- `tankgrid.systems` has `CollisionSystem`, which resolves bullets against tiles,
  tanks and the base, and `PhysicsSystem`, which calls `update(delta_ms)` on each bullet.
- `tankgrid.walker` has `GridWalker`, a mover that goes one cell at a time and has
  idle, patrol and path-following states (`ObjectState`). It also has
  `rotation_for_step()`, which gives the heading in degrees for a one-cell step.
- `tankgrid.menu` has `MenuSystem`, which covers the main, level-select, pause,
  game-over and about menus and is driven by key presses through `handle_input()`.

## Installation

```
pip install .
```

Run the tests with:

```
pip install .[test]
pytest
```

## Examples

```python
from tankgrid.grid import GameMap
from tankgrid.tile import brick

game_map = GameMap(13, 13)
game_map.set_tile((3, 4), brick())
assert not game_map.is_walkable((3, 4))
assert game_map.is_walkable((0, 0))
```

```python
from tankgrid.levels import LevelLoader, LevelRules

rules = LevelRules(map_size=(5, 5), base_cell=(2, 3))
level = LevelLoader().load_from_text(
    ["SSSSS", "S.E.S", "S.P.S", "S#A#S", "SSSSS"], rules
)
assert level.base_cell == (2, 3)
assert level.player_spawn == (2, 2)
assert level.enemy_spawns == [(2, 1)]
```

```python
from tankgrid.input import Direction, InputSystem, Key

keys = InputSystem()
keys.handle_key_press(Key.W)
assert keys.current_direction() is Direction.UP
```

## Rules

Ordinary tiles:

- A bullet that hits a brick tile damages it. After four hits the tile turns back into
  empty ground.
- Steel stops ordinary bullets. Piercing shots damage steel and fly on through it,
  and after four such hits the steel becomes empty ground.
- Forest and ice block nothing. Water stops tanks but lets bullets pass.
- `GameMap.tile()` reports cells outside the map as steel, and a bullet that leaves
  the map is destroyed.

Tanks and the base:

- A bullet that reaches a tank of a different `tank_type` than its `owner` damages it.
  The bullet is then destroyed without an explosion.
- A bullet that hits the base cell damages the base. When the base is destroyed, the
  game state is told and the cell is cleared.

## Level files

`LevelLoader` looks for level files in `assets/maps`. It searches from the working
directory upwards, unless you pass `maps_dir`. `available_level_files()` lists the
`Level*.txt` files, sorted without regard to case.

A numeric level file may start with an optional `width height` line, followed by rows
of tile codes:

| Code | Tile   |
|------|--------|
| 0    | empty  |
| 1    | brick  |
| 2    | steel  |
| 3    | forest |
| 4    | water  |
| 5    | ice    |

A file without any numbers is read as a character layout.

`load_saved_level()` reads `assets/maps/Demo.txt`. When a file cannot be read, both
`load_saved_level()` and `load_level_by_name()` fall back to the default level.

## What it does not do

The package draws nothing, opens no window and plays no sound. It has no game loop
and no level editor. It has no tank or bullet classes: `CollisionSystem` and
`PhysicsSystem` work with any objects that provide the attributes described by the
protocols in `tankgrid.systems`. In the same way, `MenuSystem` calls into a game object
that you supply.