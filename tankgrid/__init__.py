"""Grid-based tank game core: tiles, maps, levels, collisions, input, grid movement and menus."""

__version__ = "0.1.0"

__all__ = ["grid", "input", "levels", "menu", "rendering", "systems", "tile", "walker"]