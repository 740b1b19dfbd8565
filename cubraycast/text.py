"""Character and number helpers used by the scene file reader."""

from __future__ import annotations

from itertools import takewhile

_DIGITS = frozenset("0123456789")
_ATOI_SPACE = " \f\n\r\t\v"
_PATH_STOP = frozenset("\0\n \t")


def _is_alnum(ch: str) -> bool:
    return len(ch) == 1 and ch.isascii() and ch.isalnum()


def has_alnum(text: str) -> bool:
    """Return True if ``text`` holds at least one ASCII letter or digit."""
    return any(_is_alnum(ch) for ch in text)


def is_space(ch: str) -> bool:
    """Return True for a space or a tab."""
    return ch in (" ", "\t")


def is_not_space(ch: str) -> bool:
    """Return True unless ``ch`` is a space, a tab or the end of the text."""
    return ch not in ("", "\0", " ", "\t")


def word_length(text: str) -> int:
    """Return the number of ASCII letters and digits at the start of ``text``."""
    return sum(1 for _ in takewhile(_is_alnum, text))


def is_player_character(ch: str) -> bool:
    """Return True for the player start markers N, S, W and E."""
    return ch in ("N", "S", "W", "E")


def atoi(text: str) -> int:
    """Read a signed decimal integer at the start of ``text``.

    Leading whitespace is skipped and reading stops at the first non-digit;
    text without digits gives 0.
    """
    rest = text.lstrip(_ATOI_SPACE)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits = "".join(takewhile(_DIGITS.__contains__, rest))
    return sign * int(digits) if digits else 0


def parse_input(text: str) -> int:
    """Return the integer ``text`` spells in canonical form, or -1.

    The text must read back exactly as the decimal form of its value, so
    leading zeros, signs such as ``+`` and trailing characters are rejected.
    """
    value = atoi(text)
    if not str(value).startswith(text):
        return -1
    return value


def create_argb(a: int, r: int, g: int, b: int) -> int:
    """Pack alpha, red, green and blue into one 0xAARRGGBB integer."""
    return a << 24 | r << 16 | g << 8 | b


def leading_digits(text: str) -> tuple[int, int]:
    """Return the value of the digits at the start of ``text`` and their count.

    Text that does not start with a digit gives ``(0, 0)``.
    """
    digits = "".join(takewhile(_DIGITS.__contains__, text))
    return (int(digits) if digits else 0), len(digits)


def path_token(text: str) -> str:
    """Return the start of ``text`` up to a space, tab, newline or NUL."""
    return "".join(takewhile(lambda ch: ch not in _PATH_STOP, text))