import pytest

from solong.colors import lookup_color
from solong.xpm import (
    XpmError,
    XpmImage,
    parse_xpm_lines,
    parse_xpm_text,
    quoted_strings,
    read_xpm_file,
    split_words,
    strip_comments,
    text_to_rgb,
)

SAMPLE = """/* XPM */
static char *x[] = {
/* w h nc cpp */
"2 2 2 1",
"a c #FF0000",
"b c None",
"ab",
"ba"
};
"""


def test_split_words_spaces_and_tabs():
    assert split_words("  a\tb  c ") == ["a", "b", "c"]


def test_split_words_empty():
    assert split_words(" \t ") == []


def test_strip_comments_block_outside_quotes():
    text = 'x /* hidden */ "keep /* this */" y'
    result = strip_comments(text)
    assert "hidden" not in result
    assert '"keep /* this */"' in result
    assert len(result) == len(text)


def test_strip_comments_line_comment():
    text = 'a // gone\n"b"'
    result = strip_comments(text)
    assert "gone" not in result
    assert result.endswith('\n"b"')


def test_quoted_strings_pairs():
    assert list(quoted_strings('x "one" y "two" "unclosed')) == ["one", "two"]


def test_text_to_rgb_hex():
    assert text_to_rgb("#FF0000", None) == 0xFF0000


def test_text_to_rgb_names():
    assert text_to_rgb("red", None) == lookup_color("red")
    assert text_to_rgb("navy", "blue") == lookup_color("navy blue")
    assert text_to_rgb("None", None) == -1


def test_text_to_rgb_unknown_is_zero():
    assert text_to_rgb("nosuchcolour", None) == 0


def test_parse_sample():
    image = parse_xpm_text(SAMPLE)
    assert (image.width, image.height) == (2, 2)
    assert image.pixel(0, 0) == 0xFF0000
    assert image.pixel(1, 0) == 0xFF000000
    assert image.pixel(0, 1) == 0xFF000000
    assert image.pixel(1, 1) == 0xFF0000


def test_pixel_out_of_range():
    image = parse_xpm_text(SAMPLE)
    with pytest.raises(IndexError):
        image.pixel(2, 0)


def test_named_colour_in_table():
    image = parse_xpm_lines(["1 1 1 1", "w c white", "w"])
    assert image == XpmImage(1, 1, (lookup_color("white"),))


def test_short_keys_later_definition_wins():
    image = parse_xpm_lines(["1 1 2 1", "a c #000001", "a c #000002", "a"])
    assert image.pixel(0, 0) == 0x000002


def test_long_keys_first_definition_wins():
    image = parse_xpm_lines(["1 1 2 3", "abc c #000001", "abc c #000002", "abc"])
    assert image.pixel(0, 0) == 0x000001


def test_bad_header():
    with pytest.raises(XpmError):
        parse_xpm_lines(["0 1 1 1", "a c red", "a"])


def test_missing_colour_key():
    with pytest.raises(XpmError):
        parse_xpm_lines(["1 1 1 1", "a m red", "a"])


def test_missing_rows():
    with pytest.raises(XpmError):
        parse_xpm_lines(["1 2 1 1", "a c red", "a"])


def test_read_file_round_trip(tmp_path):
    path = tmp_path / "img.xpm"
    path.write_text(SAMPLE)
    assert read_xpm_file(path) == parse_xpm_text(SAMPLE)


def test_read_missing_file(tmp_path):
    with pytest.raises(XpmError):
        read_xpm_file(tmp_path / "absent.xpm")