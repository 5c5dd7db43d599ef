"""The tile grid of a level and the base the player defends."""

from __future__ import annotations

from collections.abc import Sequence

from tankgrid.tile import CollisionMask, Tile, empty, steel

Cell = tuple[int, int]

DEFAULT_BASE_HEALTH = 2


class GameMap:
    """A rectangular grid of tiles addressed by (x, y) cells."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"map size must not be negative: {width}x{height}")
        self._width = width
        self._height = height
        self._tiles = [[empty() for _ in range(width)] for _ in range(height)]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) in tiles."""
        return self._width, self._height

    def is_inside(self, cell: Sequence[int]) -> bool:
        x, y = cell
        return 0 <= x < self._width and 0 <= y < self._height

    def tile(self, cell: Sequence[int]) -> Tile:
        """A copy of the tile at cell; cells outside the map read as steel."""
        if not self.is_inside(cell):
            return steel()
        x, y = cell
        return self._tiles[y][x].copy()

    def tile_ref(self, cell: Sequence[int]) -> Tile:
        """The stored tile at cell, for in-place changes.

        Outside the map a detached steel tile is returned, so changes to it are lost.
        """
        if not self.is_inside(cell):
            return steel()
        x, y = cell
        return self._tiles[y][x]

    def set_tile(self, cell: Sequence[int], tile: Tile) -> None:
        """Store a copy of tile at cell; cells outside the map are ignored."""
        if not self.is_inside(cell):
            return
        x, y = cell
        self._tiles[y][x] = tile.copy()

    def is_walkable(self, cell: Sequence[int]) -> bool:
        """Whether a tank may enter cell."""
        return not (self.tile(cell).block_mask & CollisionMask.TANK)


class Base:
    """The eagle: losing it ends the game."""

    def __init__(self, cell: Sequence[int]) -> None:
        x, y = cell
        self._cell: Cell = (x, y)
        self._health = DEFAULT_BASE_HEALTH

    @property
    def cell(self) -> Cell:
        return self._cell

    @property
    def health(self) -> int:
        return self._health

    @property
    def is_destroyed(self) -> bool:
        return self._health <= 0

    def take_damage(self, value: int = 1) -> None:
        self._health -= value