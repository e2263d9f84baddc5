import pytest

from cubcaster.colors import lookup_color
from cubcaster.errors import CubError
from cubcaster.xpm import (
    TRANSPARENT,
    XpmImage,
    load_xpm,
    parse_xpm,
    split_words,
    strip_comments,
)

SIMPLE = """/* XPM */
static char *img[] = {
/* columns rows colors chars-per-pixel */
"2 2 2 1",
"a c #FF0000",
"b c blue",
/* pixels */
"ab",
"ba"
};
"""


def _xpm(*strings):
    body = ",\n".join(f'"{s}"' for s in strings)
    return "static char *img[] = {\n" + body + "\n};\n"


def test_strip_block_comment():
    assert strip_comments("a/*b*/c") == "a     c"


def test_strip_line_comment_through_newline():
    assert strip_comments("p// q\nr") == "p" + " " * 5 + "r"


def test_comment_inside_quotes_is_kept():
    text = '"x/*y*/"'
    assert strip_comments(text) == text


def test_strip_keeps_length():
    text = '/* one */ "a // b" // two\n"c"'
    result = strip_comments(text)
    assert len(result) == len(text)
    assert '"a // b"' in result
    assert "two" not in result


def test_split_words():
    assert split_words("  a  b\tc\t") == ["a", "b", "c"]


def test_parse_simple_image():
    img = parse_xpm(SIMPLE)
    red = int("FF0000", 16)
    blue = lookup_color("blue")
    assert img == XpmImage(width=2, height=2, pixels=(red, blue, blue, red))


def test_none_colour_is_transparent():
    img = parse_xpm(_xpm("1 1 1 1", "x c None", "x"))
    assert img.pixels == (TRANSPARENT,)
    assert TRANSPARENT == 0xFF000000


def test_two_chars_per_pixel():
    img = parse_xpm(_xpm("2 1 2 2", "aa c red", "bb c #00FF00", "aabb"))
    assert img.pixels == (lookup_color("red"), 0x00FF00)


def test_two_word_colour_name():
    img = parse_xpm(_xpm("1 1 1 1", "a c ghost white", "a"))
    assert img.pixels == (lookup_color("ghost white"),)


def test_unknown_colour_name_is_black():
    img = parse_xpm(_xpm("1 1 1 1", "a c nosuchcolour", "a"))
    assert img.pixels == (lookup_color("black"),)


def test_short_keys_later_definition_wins():
    img = parse_xpm(_xpm("1 1 2 1", "a c red", "a c blue", "a"))
    assert img.pixels == (lookup_color("blue"),)


def test_long_keys_first_definition_wins():
    img = parse_xpm(_xpm("1 1 2 3", "aaa c red", "aaa c blue", "aaa"))
    assert img.pixels == (lookup_color("red"),)


def test_pixel_count_matches_size():
    img = parse_xpm(_xpm("3 2 1 1", "a c white", "aaa", "aaa"))
    assert len(img.pixels) == img.width * img.height
    assert set(img.pixels) == {lookup_color("white")}


@pytest.mark.parametrize(
    "text",
    [
        "no strings at all",
        _xpm("1 1"),
        _xpm("0 1 1 1", "a c red", "a"),
        _xpm("1 1 1 1"),
        _xpm("1 1 1 1", "a s red", "a"),
        _xpm("1 1 1 1", "a c", "a"),
        _xpm("1 2 1 1", "a c red", "a"),
    ],
)
def test_invalid_images_raise(text):
    with pytest.raises(CubError):
        parse_xpm(text)


def test_load_xpm_round_trip(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(SIMPLE)
    assert load_xpm(path) == parse_xpm(SIMPLE)


def test_load_missing_file(tmp_path):
    with pytest.raises(CubError):
        load_xpm(tmp_path / "missing.xpm")