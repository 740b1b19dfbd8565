"""Reading and validating the header of a .cub scene file."""

from __future__ import annotations

import os
import re
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .text import (
    create_argb,
    has_alnum,
    leading_digits,
    parse_input,
    path_token,
    word_length,
)

IDENTIFIERS = ("NO", "SO", "EA", "WE", "C", "F")
_WALL_IDS = frozenset({"NO", "SO", "EA", "WE"})
_COLOR_IDS = frozenset({"C", "F"})
_SPACES = " \t"
_WORD_THEN_GAP = re.compile(r"[A-Za-z0-9]*[^A-Za-z0-9]*")
_NON_DIGITS = re.compile(r"[^0-9]*")


class ParseError(ValueError):
    """Raised when a scene file or its arguments are invalid."""


@dataclass
class Scene:
    """Texture paths, floor and ceiling colours and raw map rows of a scene."""

    path_north: str = ""
    path_south: str = ""
    path_east: str = ""
    path_west: str = ""
    floor_rgb: tuple[int, int, int] = (0, 0, 0)
    ceiling_rgb: tuple[int, int, int] = (0, 0, 0)
    floor_color: int = 0
    ceiling_color: int = 0
    textures: list[str] = field(default_factory=list)
    map_lines: list[str] = field(default_factory=list)


def check_argument(argv: Sequence[str]) -> str:
    """Validate the command-line arguments and return the scene file name.

    Exactly one argument is expected, and its last extension must start
    with ``.cub``.
    """
    if len(argv) != 1:
        raise ParseError("Number of arguments incorrect")
    filename = argv[0]
    dot = filename.rfind(".")
    if dot == -1 or not filename[dot:].startswith(".cub"):
        raise ParseError("File name incorrect")
    return filename


def read_sections(lines: Iterable[str]) -> tuple[list[str], list[str]]:
    """Split scene lines into the six identifier lines and the map rows.

    Lines without letters or digits are skipped before and between the
    identifier lines. Everything from the first non-blank line after them
    is the map; empty rows are dropped.
    """
    rows = iter(lines)
    header: list[str] = []
    for line in rows:
        if has_alnum(line):
            header.append(line)
            if len(header) == 6:
                break
    else:
        raise ParseError("Incomplete file")
    textures = [part for part in "".join(header).split("\n") if part]
    first = next((line for line in rows if has_alnum(line)), None)
    if first is None:
        raise ParseError("Incomplete file")
    map_text = first + "".join(rows)
    return textures, [part for part in map_text.split("\n") if part]


def check_text_id(counts: Counter, line: str) -> str:
    """Count the identifier that ``line`` starts with and return it.

    ``NO`` may be followed by any separator; the other identifiers must be
    followed by a space.
    """
    length = word_length(line)
    if length == 2 and line.startswith("NO"):
        ident = "NO"
    elif length == 2 and line.startswith(("SO ", "EA ", "WE ")):
        ident = line[:2]
    elif length == 1 and line.startswith(("C ", "F ")):
        ident = line[:1]
    else:
        raise ParseError("Wrong ID")
    counts[ident] += 1
    return ident


def check_text_dup(counts: Counter) -> None:
    """Require each of the six identifiers to have been seen exactly once."""
    if any(counts[ident] != 1 for ident in IDENTIFIERS):
        raise ParseError("Duplicate IDs")


def check_text_path(line: str, base: str | os.PathLike[str] | None = None) -> Path | None:
    """Check that the texture file named on a wall line can be opened.

    Returns the path that was opened, or None when ``line`` is not a wall
    texture line. Relative paths are taken from ``base`` when given.
    """
    length = word_length(line)
    if length != 2 or line[:2] not in _WALL_IDS:
        return None
    token = path_token(line[length:].lstrip(_SPACES))
    path = Path(base) / token if base is not None else Path(token)
    try:
        with open(path, "rb"):
            pass
    except OSError as exc:
        raise ParseError("Xpm not found") from exc
    return path


def check_rgb_value(text: str) -> int:
    """Return the colour component that starts ``text``; it must be 0 to 255."""
    value = parse_input(text[:word_length(text)])
    if value > 255 or value < 0:
        raise ParseError("Wrong rgb value")
    return value


def check_text_rgb(line: str) -> tuple[int, int, int] | None:
    """Validate the three components of a floor or ceiling line.

    Returns them, or None when ``line`` is not a colour line.
    """
    if word_length(line) != 1 or line[:1] not in _COLOR_IDS:
        return None
    values = []
    pos = 0
    for _ in range(3):
        pos = _WORD_THEN_GAP.match(line, pos).end()
        if pos >= len(line):
            raise ParseError("Wrong rgb value")
        values.append(check_rgb_value(line[pos:]))
    return values[0], values[1], values[2]


def parse_rgb(text: str) -> tuple[int, int, int]:
    """Read the three colour components following a one-letter identifier."""
    rest = text[1:].lstrip(_SPACES)
    values = []
    for index in range(3):
        if index:
            rest = rest[_NON_DIGITS.match(rest).end():]
        value, used = leading_digits(rest)
        values.append(value)
        rest = rest[used:]
    return values[0], values[1], values[2]


def store_textures(scene: Scene, textures: Iterable[str]) -> Scene:
    """Fill ``scene`` with the paths and colours named by identifier lines."""
    scene.textures = list(textures)
    for raw in scene.textures:
        line = raw.lstrip(_SPACES)
        length = word_length(line)
        ident = line[:length]
        if length == 2 and ident in _WALL_IDS:
            path = path_token(line[2:].lstrip(_SPACES))
            attribute = {
                "NO": "path_north",
                "SO": "path_south",
                "EA": "path_east",
                "WE": "path_west",
            }[ident]
            setattr(scene, attribute, path)
        elif length == 1 and ident == "C":
            scene.ceiling_rgb = parse_rgb(line)
        elif length == 1 and ident == "F":
            scene.floor_rgb = parse_rgb(line)
    scene.ceiling_color = create_argb(0, *scene.ceiling_rgb)
    scene.floor_color = create_argb(0, *scene.floor_rgb)
    return scene


def load_scene(path: str | os.PathLike[str]) -> Scene:
    """Read and validate a scene file, returning its Scene.

    The map rows are stored unchecked in ``map_lines``.
    """
    try:
        handle = open(path, encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise ParseError("File not found") from exc
    with handle:
        textures, rows = read_sections(handle)
    counts: Counter = Counter()
    for raw in textures:
        line = raw.lstrip(_SPACES)
        check_text_id(counts, line)
        check_text_path(line)
        check_text_rgb(line)
    check_text_dup(counts)
    scene = store_textures(Scene(), textures)
    scene.map_lines = rows
    return scene