"""Map tiles: kinds, collision masks, damage tracking and the standard tile set."""

from __future__ import annotations

from copy import copy as _shallow_copy
from dataclasses import dataclass, field
from enum import Enum, IntFlag

#: Damage limit used for tiles that can never be broken.
UNBREAKABLE = 2**31 - 1

BRICK_MAX_DAMAGE = 4
STEEL_REINFORCED_DAMAGE = 4


class TileType(Enum):
    """What occupies a cell of the map."""

    EMPTY = 0
    BRICK = 1
    STEEL = 2
    BASE = 3
    FOREST = 4
    WATER = 5
    ICE = 6


class CollisionMask(IntFlag):
    """Which kinds of objects a tile stops."""

    NONE = 0
    TANK = 1 << 0
    BULLET = 1 << 1


_TYPE_DAMAGE_LIMITS = {
    TileType.BRICK: BRICK_MAX_DAMAGE,
    TileType.STEEL: UNBREAKABLE,
}


@dataclass
class Tile:
    """A single map cell with its blocking rules and accumulated damage."""

    type: TileType = TileType.EMPTY
    block_mask: CollisionMask = CollisionMask.NONE
    destructible: bool = False
    walkable: bool = True
    pierceable: bool = False
    reinforced_max_damage: int = 0
    _damage: int = field(default=0, init=False, repr=False)

    @property
    def damage(self) -> int:
        """Damage taken so far."""
        return self._damage

    @property
    def is_steel(self) -> bool:
        return self.type is TileType.STEEL

    def max_damage(self) -> int:
        """Damage the tile can absorb before it is destroyed; 0 means it takes none."""
        if self.reinforced_max_damage > 0:
            return self.reinforced_max_damage
        return _TYPE_DAMAGE_LIMITS.get(self.type, 0)

    def take_damage(self, amount: int) -> None:
        """Add damage, capped at the tile's limit. Non-positive amounts are ignored."""
        if amount <= 0:
            return
        limit = self.max_damage()
        if limit <= 0:
            return
        self._damage = max(0, min(self._damage + amount, limit))

    def is_destroyed(self) -> bool:
        limit = self.max_damage()
        if limit <= 0:
            return False
        return self._damage >= limit

    def copy(self) -> Tile:
        """Return an independent copy, damage included."""
        return _shallow_copy(self)


def brick() -> Tile:
    """A brick wall: blocks tanks and bullets, breaks after a few hits."""
    return Tile(
        type=TileType.BRICK,
        block_mask=CollisionMask.TANK | CollisionMask.BULLET,
        destructible=True,
        walkable=False,
    )


def steel() -> Tile:
    """A steel wall: blocks everything, only piercing shots can wear it down."""
    return Tile(
        type=TileType.STEEL,
        block_mask=CollisionMask.TANK | CollisionMask.BULLET,
        destructible=False,
        walkable=False,
        pierceable=True,
        reinforced_max_damage=STEEL_REINFORCED_DAMAGE,
    )


def empty() -> Tile:
    """Open ground."""
    return Tile(
        type=TileType.EMPTY,
        block_mask=CollisionMask.NONE,
        destructible=False,
        walkable=True,
    )


def base() -> Tile:
    """The player's base cell."""
    return Tile(
        type=TileType.BASE,
        block_mask=CollisionMask.TANK | CollisionMask.BULLET,
        destructible=True,
        walkable=False,
    )


def forest() -> Tile:
    """Forest: transparent to bullets and passable for tanks."""
    return Tile(
        type=TileType.FOREST,
        block_mask=CollisionMask.NONE,
        destructible=False,
        walkable=True,
    )


def water() -> Tile:
    """Water: stops tanks, lets bullets fly over."""
    return Tile(
        type=TileType.WATER,
        block_mask=CollisionMask.TANK,
        destructible=False,
        walkable=False,
    )


def ice() -> Tile:
    """Ice: passable ground."""
    return Tile(
        type=TileType.ICE,
        block_mask=CollisionMask.NONE,
        destructible=False,
        walkable=True,
    )


class Wall:
    """A brick or steel obstacle; any type other than brick yields steel."""

    def __init__(self, tile_type: TileType) -> None:
        self._tile = brick() if tile_type is TileType.BRICK else steel()

    def is_destructible(self) -> bool:
        return self._tile.destructible

    def to_tile(self) -> Tile:
        return self._tile.copy()