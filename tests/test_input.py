import pytest

from tankgrid.input import (
    Direction,
    InputSystem,
    Key,
    direction_from_key,
    direction_from_scan_code,
)


@pytest.mark.parametrize(
    "key, direction",
    [
        (Key.W, Direction.UP),
        (Key.UP, Direction.UP),
        (Key.S, Direction.DOWN),
        (Key.DOWN, Direction.DOWN),
        (Key.A, Direction.LEFT),
        (Key.LEFT, Direction.LEFT),
        (Key.D, Direction.RIGHT),
        (Key.RIGHT, Direction.RIGHT),
    ],
)
def test_direction_from_key(key, direction):
    assert direction_from_key(key) is direction


@pytest.mark.parametrize(
    "scan_code, direction",
    [(0x11, Direction.UP), (0x1F, Direction.DOWN), (0x1E, Direction.LEFT), (0x20, Direction.RIGHT), (0, None)],
)
def test_direction_from_scan_code(scan_code, direction):
    assert direction_from_scan_code(scan_code) is direction


def test_unknown_key_has_no_direction():
    assert direction_from_key(Key.ESCAPE) is None


def test_latest_press_wins_and_release_restores():
    system = InputSystem()
    assert system.current_direction() is None
    assert system.handle_key_press(Key.UP)
    assert system.handle_key_press(Key.LEFT)
    assert system.current_direction() is Direction.LEFT
    assert system.handle_key_release(Key.LEFT)
    assert system.current_direction() is Direction.UP


def test_repressing_moves_direction_to_top():
    system = InputSystem()
    system.handle_key_press(Key.UP)
    system.handle_key_press(Key.RIGHT)
    system.handle_key_press(Key.UP)
    assert system.current_direction() is Direction.UP
    system.handle_key_release(Key.UP)
    assert system.current_direction() is Direction.RIGHT


def test_scan_code_takes_precedence():
    system = InputSystem()
    system.handle_key_press(Key.UP, 0x1F)
    assert system.current_direction() is Direction.DOWN


def test_unknown_key_not_handled():
    system = InputSystem()
    assert system.handle_key_press(Key.ESCAPE) is False
    assert system.handle_key_release(Key.RETURN) is False
    assert system.current_direction() is None


def test_space_requests_single_shot():
    system = InputSystem()
    assert system.handle_key_press(Key.SPACE)
    assert system.consume_fire() is True
    assert system.consume_fire() is False
    assert system.handle_key_release(Key.SPACE) is True
    assert system.consume_fire() is False


def test_clear_resets_everything():
    system = InputSystem()
    system.handle_key_press(Key.D)
    system.request_fire()
    system.clear()
    assert system.current_direction() is None
    assert system.consume_fire() is False