"""Per-frame systems: bullet collisions with the map, tanks and base, and bullet motion."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Optional, Protocol, runtime_checkable

from tankgrid.grid import Base, GameMap
from tankgrid.tile import CollisionMask, empty


class BulletLike(Protocol):
    """What the systems need from a bullet."""

    @property
    def cell(self) -> Sequence[int]: ...

    @property
    def is_alive(self) -> bool: ...

    @property
    def can_pierce_steel(self) -> bool: ...

    @property
    def owner(self) -> Any: ...

    def destroy(self, spawn_explosion: bool) -> None: ...

    def update(self, delta_ms: int) -> None: ...


class TankLike(Protocol):
    """What the collision system needs from a tank."""

    @property
    def cell(self) -> Sequence[int]: ...

    @property
    def is_destroyed(self) -> bool: ...

    @property
    def tank_type(self) -> Any: ...

    def receive_damage(self, amount: int) -> bool: ...


@runtime_checkable
class HitFeedback(Protocol):
    """A tank that shows a reaction when it survives a hit."""

    def trigger_hit_feedback(self) -> None: ...


class GameStateLike(Protocol):
    """The part of the game state the collision system updates."""

    @property
    def is_base_destroyed(self) -> bool: ...

    def set_base_destroyed(self) -> None: ...


def _cell(value: Sequence[int]) -> tuple[int, int]:
    x, y = value
    return x, y


class CollisionSystem:
    """Resolves bullet hits using the tiles' blocking masks.

    The system knows no tile kinds: it only asks whether a tile stops bullets,
    whether it breaks and whether piercing shots wear it down.
    """

    def resolve(
        self,
        game_map: GameMap,
        tanks: Iterable[Optional[TankLike]],
        bullets: Iterable[Optional[BulletLike]],
        base: Optional[Base],
        state: GameStateLike,
    ) -> None:
        tanks = list(tanks)
        for bullet in bullets:
            if bullet is None or not bullet.is_alive:
                continue

            cell = _cell(bullet.cell)
            spawn_explosion = True
            destroy_bullet = self._hit_map(bullet, game_map, base, state)

            if not destroy_bullet:
                owner = bullet.owner
                for tank in tanks:
                    if tank is None or tank.is_destroyed:
                        continue
                    if tank.tank_type == owner:
                        continue
                    if _cell(tank.cell) != cell:
                        continue

                    damaged = tank.receive_damage(1)
                    if damaged and not tank.is_destroyed and isinstance(tank, HitFeedback):
                        tank.trigger_hit_feedback()
                    destroy_bullet = True
                    spawn_explosion = False
                    break

            if destroy_bullet:
                bullet.destroy(spawn_explosion)

    @staticmethod
    def _hit_map(
        bullet: BulletLike, game_map: GameMap, base: Optional[Base], state: GameStateLike
    ) -> bool:
        """Apply the bullet to the tile it is on; return whether the bullet stops."""
        cell = _cell(bullet.cell)
        if not game_map.is_inside(cell):
            return True

        tile = game_map.tile(cell)
        if not tile.block_mask & CollisionMask.BULLET:
            return False

        if tile.destructible:
            stored = game_map.tile_ref(cell)
            stored.take_damage(1)
            if stored.is_destroyed():
                game_map.set_tile(cell, empty())
        elif bullet.can_pierce_steel and tile.pierceable:
            stored = game_map.tile_ref(cell)
            stored.take_damage(1)
            if stored.is_destroyed():
                game_map.set_tile(cell, empty())
            return False

        if base is not None and cell == base.cell:
            base.take_damage()
            if base.is_destroyed and not state.is_base_destroyed:
                state.set_base_destroyed()
                game_map.set_tile(cell, empty())

        return True


class PhysicsSystem:
    """Advances bullets in flight."""

    def update(self, bullets: Iterable[Optional[BulletLike]], delta_ms: int) -> None:
        for bullet in bullets:
            if bullet is not None:
                bullet.update(delta_ms)