[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tankgrid"
version = "0.1.0"
description = "Grid-based tank game core: tiles, maps, level loading, collisions, input and menus"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "tanks", "grid", "tilemap", "arcade", "level-loader"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tankgrid"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
