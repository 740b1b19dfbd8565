[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubraycast"
version = "0.1.0"
description = "A textured grid raycaster that loads .cub scene files and XPM wall textures"
requires-python = ">=3.10"
keywords = ["raycasting", "raycaster", "cub", "xpm", "maze", "game", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: First Person Shooters",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cubraycast = "cubraycast.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cubraycast"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
