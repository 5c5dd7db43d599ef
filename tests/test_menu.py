from dataclasses import dataclass, field

import pytest

from tankgrid.input import Direction, InputSystem, Key
from tankgrid.menu import MenuEntry, MenuState, MenuSystem


@dataclass
class FakeGame:
    calls: list = field(default_factory=list)
    pending: list = field(default_factory=list)

    def start_new_game(self):
        self.calls.append("start")

    def enter_editor(self):
        self.calls.append("editor")

    def pause(self):
        self.calls.append("pause")

    def resume(self):
        self.calls.append("resume")

    def enter_main_menu(self):
        self.calls.append("main")

    def set_pending_level_index(self, index):
        self.pending.append(index)


@dataclass
class FakeCatalog:
    files: list

    def available_level_files(self):
        return list(self.files)


@dataclass
class FakeStatus:
    is_victory: bool = False
    is_game_over: bool = False


MAIN_LABELS = ["Start Game", "Select Level", "Editor", "About", "Exit"]


@pytest.fixture
def game():
    return FakeGame()


@pytest.fixture
def exits():
    return []


@pytest.fixture
def menu(game, exits):
    system = MenuSystem(
        game=game,
        input_system=InputSystem(),
        exit_callback=lambda: exits.append(True),
        level_catalog=FakeCatalog(["Level1.txt", "Level2.txt"]),
    )
    system.show_main_menu()
    return system


def test_initial_state_blocks_gameplay():
    system = MenuSystem()
    assert system.state is MenuState.MAIN_MENU
    assert system.blocks_gameplay() is True


def test_show_main_menu(menu, game):
    assert menu.title == "BATTLE CITY"
    assert menu.labels == MAIN_LABELS
    assert menu.selected_index == 0
    assert game.calls == ["main"]


def test_navigation_wraps(menu):
    assert menu.handle_input(Key.UP) is True
    assert menu.selected_index == len(MAIN_LABELS) - 1
    assert menu.handle_input(Key.DOWN) is True
    assert menu.selected_index == 0


def test_scan_codes_navigate(menu):
    menu.handle_input(0, 0x1F)
    assert menu.selected_index == 1
    menu.handle_input(0, 0x11)
    assert menu.selected_index == 0


def test_start_game_clears_input(menu, game):
    menu.input_system.handle_key_press(Key.LEFT)
    assert menu.input_system.current_direction() is Direction.LEFT
    assert menu.handle_input(Key.RETURN) is True
    assert menu.state is MenuState.NONE
    assert menu.blocks_gameplay() is False
    assert game.calls[-1] == "start"
    assert menu.input_system.current_direction() is None


def test_editor_entry(menu, game):
    menu.handle_input(Key.DOWN)
    menu.handle_input(Key.DOWN)
    menu.handle_input(Key.ENTER)
    assert game.calls[-1] == "editor"
    assert menu.state is MenuState.NONE


def test_escape_during_play_pauses_and_resumes(menu, game):
    menu.handle_input(Key.SPACE)
    assert menu.handle_input(Key.ESCAPE) is True
    assert menu.state is MenuState.PAUSE_MENU
    assert menu.title == "PAUSED"
    assert menu.labels == ["Resume", "Restart Level", "Exit to Main Menu"]
    assert game.calls[-1] == "pause"
    assert menu.handle_input(Key.ESCAPE) is True
    assert menu.state is MenuState.NONE
    assert game.calls[-1] == "resume"


def test_unhandled_key_during_play(menu):
    menu.handle_input(Key.RETURN)
    assert menu.handle_input(Key.W) is False


def test_other_keys_swallowed_in_menu(menu):
    assert menu.handle_input(Key.W) is True
    assert menu.selected_index == 0


def test_escape_in_main_menu_exits(menu, exits):
    assert menu.handle_input(Key.ESCAPE) is True
    assert exits == [True]


def test_exit_entry_calls_callback(menu, exits):
    assert menu.handle_input(Key.UP) is True
    assert menu.selected_index == len(MAIN_LABELS) - 1
    assert menu.handle_input(Key.RETURN) is True
    assert exits == [True]
    assert menu.state is MenuState.MAIN_MENU


def test_game_over_sync(menu):
    menu.sync_with_game_state(FakeStatus(is_game_over=True))
    assert menu.state is MenuState.GAME_OVER_MENU
    assert menu.title == "GAME OVER"
    assert menu.labels == ["Restart Level", "Exit to Main Menu"]


def test_victory_sync(menu):
    menu.sync_with_game_state(FakeStatus(is_victory=True))
    assert menu.title == "STAGE CLEAR"


def test_repeated_sync_keeps_selection(menu):
    status = FakeStatus(is_game_over=True)
    menu.sync_with_game_state(status)
    menu.handle_input(Key.DOWN)
    menu.sync_with_game_state(status)
    assert menu.selected_index == 1


def test_sync_running_leaves_game_over(menu):
    menu.sync_with_game_state(FakeStatus(is_game_over=True))
    menu.sync_with_game_state(FakeStatus())
    assert menu.state is MenuState.NONE


def test_escape_in_game_over_returns_to_main(menu, game):
    menu.sync_with_game_state(FakeStatus(is_game_over=True))
    menu.handle_input(Key.ESCAPE)
    assert menu.state is MenuState.MAIN_MENU
    assert menu.title == "BATTLE CITY"
    assert game.calls[-1] == "main"


def test_restart_from_game_over(menu, game):
    menu.sync_with_game_state(FakeStatus(is_game_over=True))
    menu.handle_input(Key.RETURN)
    assert game.calls[-1] == "start"
    assert menu.state is MenuState.NONE


def test_level_select(menu, game):
    menu.handle_input(Key.DOWN)
    menu.handle_input(Key.RETURN)
    assert menu.title == "SELECT LEVEL"
    assert menu.state is MenuState.MAIN_MENU
    assert menu.labels == ["Level 1", "Level 2", "Back"]
    menu.handle_input(Key.DOWN)
    menu.handle_input(Key.RETURN)
    assert game.pending == [1]
    assert game.calls[-1] == "start"
    assert menu.state is MenuState.NONE


def test_level_select_back(menu):
    menu.handle_input(Key.DOWN)
    menu.handle_input(Key.RETURN)
    menu.handle_input(Key.UP)
    menu.handle_input(Key.RETURN)
    assert menu.labels == MAIN_LABELS


def test_level_select_without_levels(game):
    system = MenuSystem(game=game, level_catalog=FakeCatalog([]))
    system.show_main_menu()
    system.handle_input(Key.DOWN)
    system.handle_input(Key.RETURN)
    assert system.labels == ["No levels found", "Back"]
    system.handle_input(Key.RETURN)
    assert system.title == "SELECT LEVEL"
    assert game.calls == ["main"]


def test_about_menu(menu, game):
    menu.handle_input(Key.DOWN)
    menu.handle_input(Key.DOWN)
    menu.handle_input(Key.DOWN)
    menu.handle_input(Key.RETURN)
    assert menu.state is MenuState.ABOUT
    assert menu.title == "ABOUT"
    assert menu.selected_index == -1
    assert menu.labels[0] == "Battle City Clone"
    assert all(entry.action is None for entry in menu.entries)
    assert menu.handle_input(Key.DOWN) is True
    assert menu.selected_index == -1
    menu.handle_input(Key.ESCAPE)
    assert menu.state is MenuState.MAIN_MENU
    assert game.calls[-1] == "main"


def test_menu_entry_defaults():
    entry = MenuEntry("Back")
    assert entry.action is None
    assert entry.label == "Back"


def test_works_without_collaborators():
    system = MenuSystem(level_catalog=FakeCatalog([]))
    system.show_main_menu()
    system.handle_input(Key.RETURN)
    assert system.state is MenuState.NONE
    system.handle_input(Key.ESCAPE)
    assert system.state is MenuState.PAUSE_MENU