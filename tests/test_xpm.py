import pytest

from cubraycast.colors import lookup_color
from cubraycast.xpm import (
    TRANSPARENT,
    XpmError,
    extract_quoted_lines,
    find,
    find_unquoted,
    parse_color,
    parse_xpm,
    split_words,
    strip_comments,
    xpm_from_file,
    xpm_from_lines,
)

SAMPLE = [
    "2 2 2 1",
    "a c #FF0000",
    "b c None",
    "ab",
    "ba",
]

SAMPLE_FILE = """/* XPM */
static char *sample[] = {
/* columns rows colors chars-per-pixel */
"2 2 2 1",
"a c #FF0000", // red
"b c None",
/* pixels */
"ab",
"ba"
};
"""


def test_split_words():
    assert split_words("  a\tb  c ") == ["a", "b", "c"]
    assert split_words(" \t ") == []


def test_find_matches_first_occurrence():
    text = "xx/*yy/*"
    pos = find(text, "/*")
    assert text[pos:].startswith("/*")
    assert "/*" not in text[:pos]
    assert find(text, "zz") == -1


def test_find_unquoted_skips_quoted_text():
    text = '"a /* b" /* c'
    assert find_unquoted(text, "/*") == text.rindex("/*")
    assert find_unquoted('"/*"', "/*") == -1


def test_strip_comments_keeps_length_and_quotes():
    text = '"keep /* this */" /* drop */ "x"'
    stripped = strip_comments(text)
    assert len(stripped) == len(text)
    assert "drop" not in stripped
    assert extract_quoted_lines(stripped) == ["keep /* this */", "x"]


def test_strip_line_comment():
    text = '"ab" // note\n"cd"'
    stripped = strip_comments(text)
    assert "note" not in stripped
    assert extract_quoted_lines(stripped) == ["ab", "cd"]


def test_extract_quoted_lines():
    assert extract_quoted_lines('x "a" y "b c" z "open') == ["a", "b c"]


def test_parse_color_hex_and_names():
    assert parse_color("#FF0000", None) == 0xFF0000
    assert parse_color("red", None) == lookup_color("red")
    assert parse_color("RED", None) == lookup_color("red")
    assert parse_color("ghost", "white") == lookup_color("ghost white")
    assert parse_color("None", None) == -1
    assert parse_color("nosuchcolour", None) == 0


def test_parse_xpm_pixels():
    image = parse_xpm(SAMPLE)
    assert (image.width, image.height) == (2, 2)
    assert image.get_pixel(0, 0) == 0xFF0000
    assert image.get_pixel(1, 0) == TRANSPARENT
    assert image.get_pixel(0, 1) == TRANSPARENT
    assert image.get_pixel(1, 1) == 0xFF0000


def test_xpm_from_lines_matches_parse_xpm():
    assert xpm_from_lines(SAMPLE).to_bytes() == parse_xpm(SAMPLE).to_bytes()


def test_unknown_pixel_key_is_black():
    image = parse_xpm(["1 1 1 1", "a c #FF0000", "z"])
    assert image.get_pixel(0, 0) == 0


def test_short_codes_last_definition_wins():
    image = parse_xpm(["1 1 2 1", "a c #FF0000", "a c #00FF00", "a"])
    assert image.get_pixel(0, 0) == 0x00FF00


def test_long_codes_first_definition_wins():
    image = parse_xpm(["1 1 2 3", "aaa c #FF0000", "aaa c #00FF00", "aaa"])
    assert image.get_pixel(0, 0) == 0xFF0000


def test_multi_char_codes():
    image = parse_xpm(["2 1 2 2", "ab c #FF0000", "cd c #00FF00", "cdab"])
    assert image.get_pixel(0, 0) == 0x00FF00
    assert image.get_pixel(1, 0) == 0xFF0000


@pytest.mark.parametrize(
    "lines",
    [
        [],
        ["2 2 1"],
        ["0 2 1 1", "a c #FF0000", "aa", "aa"],
        ["1 1 1 1", "a #FF0000", "a"],
        ["1 1 1 1", "a c", "a"],
        ["1 2 1 1", "a c #FF0000", "a"],
        ["1 1 2 1", "a c #FF0000"],
    ],
)
def test_malformed_xpm_raises(lines):
    with pytest.raises(XpmError):
        parse_xpm(lines)


def test_xpm_from_file_round_trip(tmp_path):
    path = tmp_path / "sample.xpm"
    path.write_text(SAMPLE_FILE)
    image = xpm_from_file(path)
    assert image.to_bytes() == parse_xpm(SAMPLE).to_bytes()


def test_xpm_from_missing_file_raises(tmp_path):
    with pytest.raises(XpmError):
        xpm_from_file(tmp_path / "missing.xpm")