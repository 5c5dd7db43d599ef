"""Menu flow: main, pause, game-over, level-select and about screens driven by keys."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Optional, Protocol

from tankgrid.input import Key

SCAN_UP = 0x11
SCAN_DOWN = 0x1F

MAIN_TITLE = "BATTLE CITY"
PAUSE_TITLE = "PAUSED"
GAME_OVER_TITLE = "GAME OVER"
VICTORY_TITLE = "STAGE CLEAR"
ABOUT_TITLE = "ABOUT"
LEVEL_SELECT_TITLE = "SELECT LEVEL"

ABOUT_LINES = (
    "Battle City Clone",
    "Developer build",
    "",
    "Controls:",
    "Arrows — Move",
    "Space — Fire",
    "ESC — Back",
)


class MenuState(Enum):
    NONE = "none"
    MAIN_MENU = "main_menu"
    PAUSE_MENU = "pause_menu"
    GAME_OVER_MENU = "game_over_menu"
    ABOUT = "about"


_BLOCKING_STATES = frozenset(
    {MenuState.MAIN_MENU, MenuState.PAUSE_MENU, MenuState.GAME_OVER_MENU, MenuState.ABOUT}
)
_SELECTABLE_STATES = frozenset(
    {MenuState.MAIN_MENU, MenuState.PAUSE_MENU, MenuState.GAME_OVER_MENU}
)
_CONFIRM_KEYS = frozenset({Key.RETURN, Key.ENTER, Key.SPACE})


@dataclass(frozen=True)
class MenuEntry:
    """A menu line; entries without an action are plain text."""

    label: str
    action: Optional[Callable[[], None]] = None


class GameControl(Protocol):
    """What the menu asks of the running game."""

    def start_new_game(self) -> None: ...

    def enter_editor(self) -> None: ...

    def pause(self) -> None: ...

    def resume(self) -> None: ...

    def enter_main_menu(self) -> None: ...

    def set_pending_level_index(self, index: int) -> None: ...


class InputClearable(Protocol):
    def clear(self) -> None: ...


class LevelCatalog(Protocol):
    def available_level_files(self) -> Sequence[str]: ...


class GameStatus(Protocol):
    @property
    def is_victory(self) -> bool: ...

    @property
    def is_game_over(self) -> bool: ...


class MenuSystem:
    """Keeps the active menu, its entries and selection, and reacts to key presses."""

    def __init__(
        self,
        game: Optional[GameControl] = None,
        input_system: Optional[InputClearable] = None,
        exit_callback: Optional[Callable[[], None]] = None,
        level_catalog: Optional[LevelCatalog] = None,
    ) -> None:
        self.game = game
        self.input_system = input_system
        self.exit_callback = exit_callback
        self._level_catalog = level_catalog
        self._state = MenuState.MAIN_MENU
        self._entries: tuple[MenuEntry, ...] = ()
        self._title = ""
        self._selected_index = 0
        self._victory = False

    @property
    def state(self) -> MenuState:
        return self._state

    @property
    def title(self) -> str:
        return self._title

    @property
    def entries(self) -> tuple[MenuEntry, ...]:
        return self._entries

    @property
    def labels(self) -> list[str]:
        return [entry.label for entry in self._entries]

    @property
    def selected_index(self) -> int:
        """Index of the highlighted entry, -1 when nothing is selectable."""
        return self._selected_index

    def blocks_gameplay(self) -> bool:
        return self._state in _BLOCKING_STATES

    def handle_input(self, key: int, scan_code: int = 0) -> bool:
        """React to a key press; returns whether the menu consumed it."""
        is_up = key == Key.UP or scan_code == SCAN_UP
        is_down = key == Key.DOWN or scan_code == SCAN_DOWN

        if self._state in _SELECTABLE_STATES:
            if is_up or is_down:
                if self._entries:
                    step = -1 if is_up else 1
                    count = len(self._entries)
                    self._selected_index = (self._selected_index + step + count) % count
                return True
            if key in _CONFIRM_KEYS:
                if 0 <= self._selected_index < len(self._entries):
                    action = self._entries[self._selected_index].action
                    if action is not None:
                        action()
                return True
            if key == Key.ESCAPE:
                if self._state is MenuState.MAIN_MENU:
                    self._request_exit()
                elif self._state is MenuState.PAUSE_MENU:
                    self._resume_game()
                else:
                    self._return_to_main_menu()
                return True

        if key == Key.ESCAPE and self._state is MenuState.ABOUT:
            self._return_to_main_menu()
            return True

        if self._state is MenuState.NONE and key == Key.ESCAPE:
            self._pause_game()
            return True

        return self.blocks_gameplay()

    def sync_with_game_state(self, state: GameStatus) -> None:
        """Open the game-over menu when the session has ended."""
        if state.is_victory or state.is_game_over:
            self._enter_game_over_menu(state.is_victory)
            return
        if self._state is MenuState.GAME_OVER_MENU:
            self._state = MenuState.NONE

    def show_main_menu(self) -> None:
        self._return_to_main_menu()

    def _activate(self, state: MenuState, title: str, entries: Sequence[MenuEntry]) -> None:
        self._state = state
        self._entries = tuple(entries)
        self._title = title
        self._selected_index = 0 if self._entries else -1

    def _build_main_menu(self) -> None:
        self._activate(
            MenuState.MAIN_MENU,
            MAIN_TITLE,
            [
                MenuEntry("Start Game", self._start_game),
                MenuEntry("Select Level", self._build_level_select_menu),
                MenuEntry("Editor", self._start_editor),
                MenuEntry("About", self._build_about_menu),
                MenuEntry("Exit", self._request_exit),
            ],
        )

    def _build_pause_menu(self) -> None:
        self._activate(
            MenuState.PAUSE_MENU,
            PAUSE_TITLE,
            [
                MenuEntry("Resume", self._resume_game),
                MenuEntry("Restart Level", self._restart_level),
                MenuEntry("Exit to Main Menu", self._return_to_main_menu),
            ],
        )

    def _build_game_over_menu(self, victory: bool) -> None:
        self._activate(
            MenuState.GAME_OVER_MENU,
            VICTORY_TITLE if victory else GAME_OVER_TITLE,
            [
                MenuEntry("Restart Level", self._restart_level),
                MenuEntry("Exit to Main Menu", self._return_to_main_menu),
            ],
        )

    def _build_about_menu(self) -> None:
        self._activate(MenuState.ABOUT, ABOUT_TITLE, [MenuEntry(line) for line in ABOUT_LINES])
        self._selected_index = -1

    def _build_level_select_menu(self) -> None:
        catalog = self._level_catalog
        if catalog is None:
            from tankgrid.levels import LevelLoader

            catalog = LevelLoader()
        files = catalog.available_level_files()
        entries = [
            MenuEntry(f"Level {index + 1}", partial(self._start_level, index))
            for index in range(len(files))
        ]
        if not entries:
            entries.append(MenuEntry("No levels found"))
        entries.append(MenuEntry("Back", self._build_main_menu))
        self._activate(MenuState.MAIN_MENU, LEVEL_SELECT_TITLE, entries)

    def _start_level(self, index: int) -> None:
        if self.game is not None:
            self.game.set_pending_level_index(index)
        self._start_game()

    def _start_game(self) -> None:
        self._clear_input()
        if self.game is not None:
            self.game.start_new_game()
        self._state = MenuState.NONE

    def _start_editor(self) -> None:
        self._clear_input()
        if self.game is not None:
            self.game.enter_editor()
        self._state = MenuState.NONE

    def _pause_game(self) -> None:
        self._clear_input()
        if self.game is not None:
            self.game.pause()
        self._build_pause_menu()

    def _resume_game(self) -> None:
        self._clear_input()
        if self.game is not None:
            self.game.resume()
        self._state = MenuState.NONE

    def _restart_level(self) -> None:
        self._clear_input()
        if self.game is not None:
            self.game.start_new_game()
        self._state = MenuState.NONE

    def _return_to_main_menu(self) -> None:
        self._clear_input()
        if self.game is not None:
            self.game.enter_main_menu()
        self._build_main_menu()

    def _enter_game_over_menu(self, victory: bool) -> None:
        if self._state is MenuState.GAME_OVER_MENU and self._victory == victory:
            return
        self._clear_input()
        self._victory = victory
        self._build_game_over_menu(victory)

    def _request_exit(self) -> None:
        if self.exit_callback is not None:
            self.exit_callback()

    def _clear_input(self) -> None:
        if self.input_system is not None:
            self.input_system.clear()