"""Building and validating the map grid of a scene."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from itertools import groupby

from .text import has_alnum, is_player_character

WALL = 1
FLOOR = 0
OUTSIDE = 2
_ALLOWED = frozenset("01 NSWE")

Grid = list[list[int]]


class MapError(ValueError):
    """Raised when the map part of a scene is invalid."""


def measure_map(rows: Sequence[str]) -> tuple[int, int]:
    """Return the number of rows and the length of the longest row."""
    return len(rows), max((len(row) for row in rows), default=0)


def find_player(rows: Iterable[str]) -> tuple[int, int, str] | None:
    """Return the row, column and marker of the first player start, or None."""
    for row_index, row in enumerate(rows):
        for col_index, ch in enumerate(row):
            if is_player_character(ch):
                return row_index, col_index, ch
    return None


def _cell_value(ch: str, fill: int) -> int:
    if is_player_character(ch):
        return FLOOR
    if ch == " ":
        return fill
    return ord(ch) - ord("0")


def build_grid(rows: Iterable[str], width: int, fill: int) -> Grid:
    """Turn map rows into a grid of integers, each row ``width`` cells long.

    Player markers become floor, digits their value, and spaces as well as
    the cells past the end of a short row take ``fill``.
    """
    grid = []
    for row in rows:
        cells = [_cell_value(ch, fill) for ch in row[:width]]
        cells.extend([fill] * (width - len(cells)))
        grid.append(cells)
    return grid


def store_map(rows: Sequence[str]) -> Grid:
    """Return the grid used for raycasting: empty space counts as wall."""
    _, columns = measure_map(rows)
    return build_grid(rows, columns, WALL)


def store_midmap(rows: Sequence[str]) -> Grid:
    """Return the grid used for wall checks: empty space is marked outside."""
    _, columns = measure_map(rows)
    return build_grid(rows, columns, OUTSIDE)


def check_map_character(rows: Iterable[str]) -> None:
    """Reject any character other than 0, 1, a space or a player marker."""
    if any(ch not in _ALLOWED for row in rows for ch in row):
        raise MapError("Map character incorrect")


def check_map_line(rows: Iterable[str]) -> None:
    """Reject rows holding no letter or digit."""
    if not all(has_alnum(row) for row in rows):
        raise MapError("Map has empty line")


def check_map_players(rows: Iterable[str]) -> None:
    """Require exactly one player start marker."""
    count = sum(1 for row in rows for ch in row if is_player_character(ch))
    if count != 1:
        raise MapError("Number of players incorrect")


def check_map_size(width: int, height: int) -> None:
    """Require the map to be at least three cells in each direction."""
    if width < 3 or height < 3:
        raise MapError("map must be at least 3x3")


def _line_is_closed(cells: Iterable[int]) -> bool:
    for outside, group in groupby(cells, key=lambda value: value == OUTSIDE):
        if outside:
            continue
        run = list(group)
        if run[0] != WALL or run[-1] != WALL:
            return False
    return True


def check_map_walls(grid: Sequence[Sequence[int]]) -> None:
    """Require every run of inside cells, across and down, to end in walls.

    ``grid`` is the grid from :func:`store_midmap`.
    """
    columns = [list(column) for column in zip(*grid)]
    if not all(_line_is_closed(row) for row in grid):
        raise MapError("Map is not closed by walls")
    if not all(_line_is_closed(column) for column in columns):
        raise MapError("Map is not closed by walls")


def format_grid(grid: Iterable[Iterable[int]]) -> str:
    """Render a grid as one line of digits per row."""
    return "".join("".join(str(value) for value in row) + "\n" for row in grid)