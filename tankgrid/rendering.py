"""Small rendering helpers: frame animation, world-to-scene camera and sprite registry."""

from __future__ import annotations

from collections.abc import Sequence

DEFAULT_TILE_SIZE = 32.0


class Animation:
    """A looping list of frame names with a step counter."""

    def __init__(self) -> None:
        self._frames: list[str] = []
        self._index = 0

    def add_frame(self, frame: str) -> None:
        self._frames.append(frame)

    def current_frame(self) -> str:
        """The frame at the current step, or an empty string when there are none."""
        if not self._frames:
            return ""
        return self._frames[self._index % len(self._frames)]

    def step(self) -> None:
        if self._frames:
            self._index += 1


class Camera:
    """Converts tile coordinates into scene coordinates."""

    def __init__(self, tile_size: float = DEFAULT_TILE_SIZE) -> None:
        self.tile_size = tile_size

    def to_scene(self, world_pos: Sequence[float]) -> tuple[float, float]:
        x, y = world_pos
        return x * self.tile_size, y * self.tile_size


class SpriteManager:
    """Maps sprite keys to asset paths."""

    def __init__(self) -> None:
        self._sprites: dict[str, str] = {}

    def register_sprite(self, key: str, path: str) -> None:
        self._sprites[key] = path

    def sprite_path(self, key: str) -> str:
        """The registered path, or an empty string for an unknown key."""
        return self._sprites.get(key, "")