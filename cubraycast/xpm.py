"""Reader for XPM images into 32-bit Image objects."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from .colors import lookup_color
from .image import Image

TRANSPARENT = 0xFF000000
_NAME_LIMIT = 63
_HEX_RE = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")
_INT_RE = re.compile(r"\s*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or is malformed."""


def split_words(text: str) -> list[str]:
    """Split ``text`` on runs of spaces and tabs, dropping empty words."""
    return [word for word in re.split(r"[ \t]+", text) if word]


def find(text: str, needle: str) -> int:
    """Return the position of the first ``needle`` in ``text``, or -1."""
    return text.find(needle)


def find_unquoted(text: str, needle: str) -> int:
    """Return the position of the first ``needle`` outside double quotes, or -1."""
    last = len(text) - len(needle)
    quoted = False
    for pos, ch in enumerate(text):
        if pos > last:
            break
        if ch == '"':
            quoted = not quoted
        if not quoted and text.startswith(needle, pos):
            return pos
    return -1


def _blank(text: str, start: int, length: int) -> str:
    end = min(len(text), start + length)
    return text[:start] + " " * (end - start) + text[end:]


def strip_comments(text: str) -> str:
    """Replace C-style comments outside quoted strings with spaces.

    The length of the text is preserved.
    """
    while (begin := find_unquoted(text, "/*")) != -1:
        end = find(text[begin + 2:], "*/")
        text = _blank(text, begin, end + 4)
    while (begin := find_unquoted(text, "//")) != -1:
        end = find(text[begin + 2:], "\n")
        text = _blank(text, begin, end + 3)
    return text


def extract_quoted_lines(text: str) -> list[str]:
    """Return the contents of each double-quoted string in ``text``, in order."""
    lines = []
    pos = 0
    while (start := text.find('"', pos)) != -1:
        end = text.find('"', start + 1)
        if end == -1:
            break
        lines.append(text[start + 1:end])
        pos = end + 1
    return lines


def parse_color(name: str, suffix: str | None = None) -> int:
    """Resolve an XPM colour specification to 0xRRGGBB.

    ``#hex`` values are read as hexadecimal; otherwise ``name`` (joined with
    ``suffix`` when given) is looked up in the colour table. Unknown names
    give 0; ``None`` gives -1.
    """
    if name.startswith("#"):
        match = _HEX_RE.match(name, 1)
        if not match:
            return 0
        value = int(match.group(2), 16)
        return -value if match.group(1) == "-" else value
    if suffix:
        name = f"{name} {suffix}"[:_NAME_LIMIT]
    color = lookup_color(name)
    return 0 if color is None else color


def _atoi(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _next_line(rows: Iterator[str], what: str) -> str:
    try:
        return next(rows)
    except StopIteration:
        raise XpmError(f"XPM data ends before {what}") from None


def _read_palette(rows: Iterator[str], ncolors: int, cpp: int) -> dict[str, int]:
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(rows, "the colour table is complete")
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"colour line without a 'c' key: {line!r}") from None
        if index >= len(words):
            raise XpmError(f"colour line without a colour value: {line!r}")
        suffix = words[index + 1] if index + 1 < len(words) else None
        color = parse_color(words[index], suffix)
        key = line[:cpp]
        if cpp <= 2:
            palette[key] = color
        else:
            palette.setdefault(key, color)
    return palette


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an Image from XPM strings: header, colour table, then pixel rows."""
    rows = iter(lines)
    words = split_words(_next_line(rows, "the header"))
    if len(words) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {' '.join(words[:4])}")
    palette = _read_palette(rows, ncolors, cpp)
    image = Image(width, height)
    for y in range(height):
        line = _next_line(rows, f"pixel row {y}")
        for x in range(width):
            color = palette.get(line[x * cpp:(x + 1) * cpp], 0)
            if color == -1:
                color = TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def xpm_from_lines(lines: Iterable[str]) -> Image:
    """Build an Image from XPM data already split into strings."""
    return parse_xpm(lines)


def xpm_from_file(path: str | os.PathLike[str]) -> Image:
    """Read an XPM file and return its Image."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {os.fspath(path)}: {exc}") from exc
    return parse_xpm(extract_quoted_lines(strip_comments(text)))