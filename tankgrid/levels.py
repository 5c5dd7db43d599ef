"""Building level maps from text layouts, numeric level files and a built-in default."""

from __future__ import annotations

import fnmatch
import logging
import os
import re
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from tankgrid.grid import Cell, GameMap
from tankgrid.tile import Tile, TileType, base, brick, empty, forest, ice, steel, water

log = logging.getLogger(__name__)

MAPS_SUBDIR = Path("assets") / "maps"
SAVED_LEVEL = MAPS_SUBDIR / "Demo.txt"
LEVEL_PATTERN = "level*.txt"

_MAP_DIR_CANDIDATES = (
    MAPS_SUBDIR,
    Path("..") / MAPS_SUBDIR,
    Path("..") / ".." / MAPS_SUBDIR,
    Path("..") / ".." / ".." / MAPS_SUBDIR,
)

_INTEGER = re.compile(r"[+-]?\d+")

_TILE_FACTORIES = {
    TileType.EMPTY: empty,
    TileType.BRICK: brick,
    TileType.STEEL: steel,
    TileType.FOREST: forest,
    TileType.WATER: water,
    TileType.ICE: ice,
    TileType.BASE: base,
}

# Tile codes used by numeric level files.
_TILE_CODES = {
    0: TileType.EMPTY,
    1: TileType.BRICK,
    2: TileType.STEEL,
    3: TileType.FOREST,
    4: TileType.WATER,
    5: TileType.ICE,
}

# Symbols of the text layout; anything else is an empty cell.
_BRICK_SYMBOLS = frozenset("#B")
_STEEL_SYMBOLS = frozenset("SX")
_BASE_SYMBOLS = frozenset("AH")
_PLAYER_SYMBOL = "P"
_ENEMY_SYMBOL = "E"


@dataclass(frozen=True)
class LevelRules:
    """The level geometry a game uses: map size in tiles and the base cell."""

    map_size: tuple[int, int]
    base_cell: Cell


@dataclass
class LevelData:
    """A built level: its map, spawn points and base position."""

    game_map: GameMap
    player_spawn: Cell
    base_cell: Cell
    enemy_spawns: list[Cell] = field(default_factory=list)
    loaded_from_file: bool = False


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _inside(size: tuple[int, int], cell: Cell) -> bool:
    width, height = size
    x, y = cell
    return 0 <= x < width and 0 <= y < height


def _bottom_center(size: tuple[int, int]) -> Cell:
    width, height = size
    return _clamp(width // 2, 0, width - 1), _clamp(height - 2, 0, height - 1)


def _default_player_spawn(size: tuple[int, int], base_cell: Cell) -> Cell:
    left_of_base = (base_cell[0] - 2, base_cell[1])
    if _inside(size, left_of_base):
        return left_of_base
    return _bottom_center(size)


def _default_enemy_spawns(size: tuple[int, int]) -> list[Cell]:
    width, height = size
    max_x = max(0, width - 1)
    max_y = max(0, height - 1)
    y = _clamp(1, 0, max_y)
    return [
        (_clamp(1, 0, max_x), y),
        (_clamp(width // 2, 0, max_x), y),
        (_clamp(width - 2, 0, max_x), y),
    ]


def _tile_for_type(tile_type: TileType) -> Tile:
    return _TILE_FACTORIES[tile_type]()


def _parse_int(text: str) -> int | None:
    return int(text) if _INTEGER.fullmatch(text) else None


def _parse_numeric_level(
    lines: Iterable[str], rules: LevelRules
) -> tuple[tuple[int, int], list[list[int]]] | None:
    """Read a numeric level: an optional "width height" line, then rows of tile codes.

    Returns the declared size and the rows, or None when nothing numeric was found.
    """
    declared_size = rules.map_size
    size_parsed = False
    rows: list[list[int]] = []

    for line in lines:
        parts = line.split()
        if not parts:
            continue

        if not size_parsed and len(parts) >= 2:
            width = _parse_int(parts[0])
            height = _parse_int(parts[1])
            if width is not None and height is not None and width > 0 and height > 0:
                declared_size = (width, height)
                size_parsed = True
                continue

        row = [value for value in map(_parse_int, parts) if value is not None]
        if row:
            rows.append(row)

    if not size_parsed and not rows:
        return None
    return declared_size, rows


def _clear_first_spawn(level: LevelData, candidates: Sequence[Cell], *, force_clear: bool) -> None:
    """Move the player spawn to the first candidate that is inside and not the base."""
    game_map = level.game_map
    for candidate in candidates:
        if not game_map.is_inside(candidate):
            continue
        tile = game_map.tile(candidate)
        if tile.type is TileType.BASE:
            continue
        if force_clear or tile.type is not TileType.EMPTY:
            game_map.set_tile(candidate, empty())
        level.player_spawn = candidate
        return


def _level_from_numeric(
    rows: Sequence[Sequence[int]], declared_size: tuple[int, int], rules: LevelRules
) -> LevelData:
    map_size = rules.map_size
    width, height = map_size
    game_map = GameMap(width, height)
    base_cell = rules.base_cell
    level = LevelData(
        game_map=game_map,
        player_spawn=_default_player_spawn(map_size, base_cell),
        base_cell=base_cell,
        enemy_spawns=_default_enemy_spawns(map_size),
        loaded_from_file=True,
    )

    declared_width, declared_height = declared_size
    for y, row in enumerate(rows[: min(height, declared_height)]):
        for x, code in enumerate(row[: min(width, declared_width)]):
            tile_type = _TILE_CODES.get(code)
            if tile_type is None or tile_type is TileType.BASE:
                continue
            game_map.set_tile((x, y), _tile_for_type(tile_type))

    if game_map.is_inside(base_cell):
        game_map.set_tile(base_cell, base())

    candidates = [
        level.player_spawn,
        (base_cell[0] - 1, base_cell[1]),
        _bottom_center(map_size),
    ]
    _clear_first_spawn(level, candidates, force_clear=True)

    level.enemy_spawns = []
    for spawn in _default_enemy_spawns(map_size):
        if not game_map.is_inside(spawn):
            continue
        if game_map.tile(spawn).type is TileType.BASE:
            continue
        game_map.set_tile(spawn, empty())
        level.enemy_spawns.append(spawn)

    return level


def _read_lines(path: Path) -> list[str]:
    """Read a text file as lines without their line endings."""
    with path.open("r", encoding="utf-8", errors="replace") as handle:
        content = handle.read()
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _is_readable(path: Path) -> bool:
    return path.exists() and os.access(path, os.R_OK)


def _find_maps_directory() -> Path:
    current = Path.cwd()
    for candidate in _MAP_DIR_CANDIDATES:
        directory = current / candidate
        if directory.is_dir() and os.access(directory, os.R_OK):
            return directory.resolve()
    return current / MAPS_SUBDIR


def _default_app_dir() -> Path:
    program = sys.argv[0] if sys.argv and sys.argv[0] else "."
    return Path(os.path.abspath(program)).parent


class LevelLoader:
    """Builds levels from the maps directory, from text layouts or procedurally.

    ``maps_dir`` fixes where level files are looked up; by default the
    ``assets/maps`` directory is searched from the working directory upwards.
    ``app_dir`` is the program directory used to find the saved level.
    """

    def __init__(self, maps_dir: str | os.PathLike[str] | None = None,
                 app_dir: str | os.PathLike[str] | None = None) -> None:
        self._maps_dir = Path(maps_dir) if maps_dir is not None else None
        self._app_dir = Path(app_dir) if app_dir is not None else None

    @property
    def maps_dir(self) -> Path:
        return self._maps_dir if self._maps_dir is not None else _find_maps_directory()

    def load_from_text(self, lines: Sequence[str], rules: LevelRules) -> LevelData:
        """Build a level from a character layout.

        '#'/'B' brick, 'S'/'X' steel, 'A'/'H' base, 'P' player spawn,
        'E' enemy spawn; any other symbol is an empty cell.
        """
        if lines:
            height = len(lines)
            width = max(len(row) for row in lines)
        else:
            width, height = rules.map_size
        map_size = (width, height)

        game_map = GameMap(width, height)
        level = LevelData(
            game_map=game_map,
            player_spawn=_default_player_spawn(map_size, rules.base_cell),
            base_cell=rules.base_cell,
        )
        has_player_spawn = False

        for y, row in enumerate(lines):
            for x, symbol in enumerate(row):
                cell = (x, y)
                if symbol in _BRICK_SYMBOLS:
                    game_map.set_tile(cell, brick())
                elif symbol in _STEEL_SYMBOLS:
                    game_map.set_tile(cell, steel())
                elif symbol in _BASE_SYMBOLS:
                    level.base_cell = cell
                    game_map.set_tile(cell, base())
                elif symbol == _PLAYER_SYMBOL:
                    level.player_spawn = cell
                    has_player_spawn = True
                elif symbol == _ENEMY_SYMBOL:
                    level.enemy_spawns.append(cell)
                else:
                    game_map.set_tile(cell, empty())

        # The base is always present, even when the layout has no symbol for it.
        if game_map.is_inside(level.base_cell):
            game_map.set_tile(level.base_cell, base())

        if not has_player_spawn:
            level.player_spawn = _default_player_spawn(map_size, level.base_cell)

        candidates = [
            level.player_spawn,
            (level.base_cell[0] - 1, level.base_cell[1]),
            _bottom_center(map_size),
        ]
        _clear_first_spawn(level, candidates, force_clear=False)
        return level

    def load_default_level(self, rules: LevelRules) -> LevelData:
        """The built-in level: steel border, brick rows and a brick shield round the base."""
        width, height = rules.map_size
        base_x, base_y = rules.base_cell
        center_x = width // 2
        last_y = height - 1

        def symbol(x: int, y: int) -> str:
            if y in (0, last_y) or x in (0, width - 1):
                return "S"
            if (x, y) == (base_x, base_y):
                return "A"
            if x == base_x - 2 and y == base_y:
                return "P"
            if y == 1 and x in (1, center_x, width - 2):
                return "E"
            if base_y - 1 <= y <= base_y and base_x - 1 <= x <= base_x + 1:
                return "#"
            if y % 4 == 2 and 1 < x < width - 2:
                return "#"
            return "."

        lines = ["".join(symbol(x, y) for x in range(width)) for y in range(height)]
        level = self.load_from_text(lines, rules)

        if level.game_map.is_inside((5, 5)):
            level.game_map.set_tile((5, 5), steel())
        if level.game_map.is_inside((6, 5)):
            level.game_map.set_tile((6, 5), forest())
        return level

    def load_level_by_name(self, file_name: str, rules: LevelRules) -> LevelData:
        """Load a level file from the maps directory, numeric or text layout.

        Falls back to the default level when the file cannot be read.
        """
        path = self.maps_dir / file_name
        if not _is_readable(path):
            return self.load_default_level(rules)

        try:
            lines = _read_lines(path)
        except OSError:
            return self.load_default_level(rules)

        parsed = _parse_numeric_level(lines, rules)
        if parsed is not None:
            declared_size, rows = parsed
            return _level_from_numeric(rows, declared_size, rules)

        level = self.load_from_text(lines, rules)
        level.loaded_from_file = True
        return level

    def load_level_by_index(self, index: int, rules: LevelRules) -> LevelData:
        """Load the level file at index (clamped to the available range)."""
        files = self.available_level_files()
        if not files:
            return self.load_default_level(rules)
        clamped = _clamp(index, 0, len(files) - 1)
        return self.load_level_by_name(files[clamped], rules)

    def available_level_files(self) -> list[str]:
        """Names of the Level*.txt files in the maps directory, sorted case-insensitively."""
        directory = self.maps_dir
        if not directory.is_dir():
            return []
        names = [
            entry.name
            for entry in directory.iterdir()
            if entry.is_file() and fnmatch.fnmatchcase(entry.name.lower(), LEVEL_PATTERN)
        ]
        return sorted(names, key=lambda name: (name.lower(), name))

    def load_saved_level(self, rules: LevelRules) -> LevelData:
        """Load the numeric level saved as assets/maps/Demo.txt, or the default level."""
        app_dir = self._app_dir if self._app_dir is not None else _default_app_dir()
        initial_path = Path(os.path.abspath(SAVED_LEVEL))
        log.info("LevelLoader: working directory %s, application directory %s",
                 Path.cwd(), app_dir)

        candidates = [
            app_dir / SAVED_LEVEL,
            app_dir / ".." / SAVED_LEVEL,
            app_dir / ".." / ".." / SAVED_LEVEL,
            app_dir / ".." / ".." / ".." / SAVED_LEVEL,
            initial_path,
        ]

        resolved: Path | None = None
        for candidate in candidates:
            readable = _is_readable(candidate)
            log.info("LevelLoader: candidate %s readable: %s", candidate, readable)
            if readable:
                resolved = Path(os.path.abspath(candidate))
                break

        if resolved is None:
            resolved = initial_path
            log.warning("LevelLoader: no readable saved level found; using %s", resolved)

        try:
            lines = _read_lines(resolved)
        except OSError as error:
            log.warning("LevelLoader: failed to open saved level (%s); using default level", error)
            return self.load_default_level(rules)

        parsed = _parse_numeric_level(lines, rules)
        if parsed is None:
            return self.load_default_level(rules)
        declared_size, rows = parsed
        return _level_from_numeric(rows, declared_size, rules)