"""Keyboard state for the player tank: held directions and fire requests."""

from __future__ import annotations

from enum import Enum, IntEnum


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class Key(IntEnum):
    """Key codes understood by the game."""

    SPACE = 0x20
    A = 0x41
    D = 0x44
    S = 0x53
    W = 0x57
    ESCAPE = 0x01000000
    RETURN = 0x01000004
    ENTER = 0x01000005
    LEFT = 0x01000012
    UP = 0x01000013
    RIGHT = 0x01000014
    DOWN = 0x01000015


_KEY_DIRECTIONS = {
    Key.W: Direction.UP,
    Key.UP: Direction.UP,
    Key.S: Direction.DOWN,
    Key.DOWN: Direction.DOWN,
    Key.A: Direction.LEFT,
    Key.LEFT: Direction.LEFT,
    Key.D: Direction.RIGHT,
    Key.RIGHT: Direction.RIGHT,
}

# Physical positions of W, S, A and D, independent of keyboard layout.
_SCAN_CODE_DIRECTIONS = {
    0x11: Direction.UP,
    0x1F: Direction.DOWN,
    0x1E: Direction.LEFT,
    0x20: Direction.RIGHT,
}


def direction_from_key(key: int) -> Direction | None:
    return _KEY_DIRECTIONS.get(key)


def direction_from_scan_code(scan_code: int) -> Direction | None:
    return _SCAN_CODE_DIRECTIONS.get(scan_code)


def _resolve_direction(key: int, scan_code: int) -> Direction | None:
    direction = direction_from_scan_code(scan_code)
    if direction is None:
        direction = direction_from_key(key)
    return direction


class InputSystem:
    """Tracks held direction keys (most recent wins) and a pending shot."""

    def __init__(self) -> None:
        self._pressed: list[Direction] = []
        self._fire_requested = False

    def handle_key_press(self, key: int, scan_code: int = 0) -> bool:
        """Record a key press; returns whether the key was handled."""
        if key == Key.SPACE:
            self.request_fire()
            return True
        direction = _resolve_direction(key, scan_code)
        if direction is None:
            return False
        if direction in self._pressed:
            self._pressed.remove(direction)
        self._pressed.append(direction)
        return True

    def handle_key_release(self, key: int, scan_code: int = 0) -> bool:
        """Record a key release; returns whether the key was handled."""
        if key == Key.SPACE:
            return True
        direction = _resolve_direction(key, scan_code)
        if direction is None:
            return False
        if direction in self._pressed:
            self._pressed.remove(direction)
        return True

    def current_direction(self) -> Direction | None:
        """The most recently pressed direction still held, if any."""
        return self._pressed[-1] if self._pressed else None

    def request_fire(self) -> None:
        self._fire_requested = True

    def consume_fire(self) -> bool:
        """Return True once per fire request."""
        if not self._fire_requested:
            return False
        self._fire_requested = False
        return True

    def clear(self) -> None:
        self._pressed.clear()
        self._fire_requested = False