"""A grid-bound object that idles, wanders at random or follows a path cell by cell."""

from __future__ import annotations

import math
import random
from collections import deque
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Optional, Protocol

from tankgrid.rendering import DEFAULT_TILE_SIZE

Cell = tuple[int, int]

DEFAULT_SPEED = 4.0


class WalkableMap(Protocol):
    def is_walkable(self, cell: Sequence[int]) -> bool: ...


class ObjectState(Enum):
    IDLE = "idle"
    PATROL = "patrol"
    FOLLOW_PATH = "follow_path"


_PATROL_STEPS: tuple[Cell, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

_ROTATIONS = {
    (1, 0): 90.0,
    (-1, 0): -90.0,
    (0, 1): 180.0,
    (0, -1): 0.0,
}


def rotation_for_step(previous: Sequence[int], current: Sequence[int]) -> Optional[float]:
    """Heading in degrees for a one-cell step, or None when the step is not a unit move."""
    step = (current[0] - previous[0], current[1] - previous[1])
    return _ROTATIONS.get(step)


class GridWalker:
    """A state machine driven by ticks that moves over a walkable map.

    The cell changes at once when a move starts; the pixel position then
    glides towards the new cell by ``speed`` pixels per tick while following a path.
    """

    def __init__(
        self,
        grid_x: int,
        grid_y: int,
        game_map: WalkableMap,
        *,
        tile_size: float = DEFAULT_TILE_SIZE,
        speed: float = DEFAULT_SPEED,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._x = grid_x
        self._y = grid_y
        self._map = game_map
        self.tile_size = tile_size
        self.speed = speed
        self._rng = rng if rng is not None else random.Random()
        self.state = ObjectState.IDLE
        self._path: deque[Cell] = deque()
        self._moving = False
        self._position = self._cell_origin()
        self._target = self._position

    @property
    def cell(self) -> Cell:
        return self._x, self._y

    @property
    def position(self) -> tuple[float, float]:
        """Current pixel position of the top-left corner."""
        return self._position

    @property
    def target(self) -> tuple[float, float]:
        return self._target

    @property
    def moving(self) -> bool:
        return self._moving

    @property
    def path(self) -> list[Cell]:
        """Cells still to visit."""
        return list(self._path)

    def set_path(self, path: Iterable[Sequence[int]]) -> None:
        """Replace the path; a non-empty path switches to following it."""
        self._path = deque((x, y) for x, y in path)
        self._moving = False
        if self._path:
            self.state = ObjectState.FOLLOW_PATH

    def update(self) -> None:
        """Advance one tick of the current state."""
        if self.state is ObjectState.PATROL:
            self._patrol_step()
        elif self.state is ObjectState.FOLLOW_PATH:
            self._follow_path_step()

    def _cell_origin(self) -> tuple[float, float]:
        return self._x * self.tile_size, self._y * self.tile_size

    def _patrol_step(self) -> None:
        if self._moving:
            return
        dx, dy = _PATROL_STEPS[self._rng.randrange(len(_PATROL_STEPS))]
        self._try_move(self._x + dx, self._y + dy)

    def _follow_path_step(self) -> None:
        if self._moving:
            px, py = self._position
            tx, ty = self._target
            dx, dy = tx - px, ty - py
            distance = math.hypot(dx, dy)
            if distance <= self.speed:
                self._position = self._target
                self._moving = False
            else:
                scale = self.speed / distance
                self._position = (px + dx * scale, py + dy * scale)
            return

        if not self._path:
            self.state = ObjectState.IDLE
            return

        next_cell = self._path.popleft()
        if not self._map.is_walkable(next_cell):
            self.state = ObjectState.IDLE
            return

        self._x, self._y = next_cell
        self._target = self._cell_origin()
        self._moving = True

    def _try_move(self, x: int, y: int) -> None:
        if not self._map.is_walkable((x, y)):
            return
        self._x, self._y = x, y
        self._target = self._cell_origin()
        self._moving = True