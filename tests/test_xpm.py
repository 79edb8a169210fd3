import pytest

from solong.colors import lookup_color
from solong.xpm import (
    XpmError,
    find_substring,
    find_unquoted,
    parse_xpm_file,
    parse_xpm_lines,
    parse_xpm_text,
    str_to_words,
    strip_comments,
    text_to_rgb,
)

SAMPLE = """/* XPM */
static char *img[] = {
/* columns rows colors chars-per-pixel */
"3 2 3 1",
"  c None",
". c #FF0000",
"X c red",
" .X", // first row
"X. "
};
"""

SAMPLE_LINES = ["3 2 3 1", "  c None", ". c #FF0000", "X c red", " .X", "X. "]


def test_parse_text_dimensions():
    image = parse_xpm_text(SAMPLE)
    assert (image.width, image.height) == (3, 2)
    assert len(image.pixels) == image.width * image.height


def test_parse_text_pixels():
    image = parse_xpm_text(SAMPLE)
    assert image.pixel(0, 0) == 0xFF000000
    assert image.pixel(1, 0) == 0xFF0000
    assert image.pixel(2, 0) == lookup_color("red")
    assert image.pixel(0, 1) == lookup_color("red")
    assert image.pixel(2, 1) == image.pixel(0, 0)


def test_lines_and_text_agree():
    assert parse_xpm_lines(SAMPLE_LINES) == parse_xpm_text(SAMPLE)


def test_extra_lines_are_ignored():
    assert parse_xpm_lines(SAMPLE_LINES + ["junk"]) == parse_xpm_lines(SAMPLE_LINES)


def test_two_chars_per_pixel():
    image = parse_xpm_lines(["2 1 2 2", "aa c #000010", "bb c #000020", "bbaa"])
    assert image.pixels == (0x20, 0x10)


def test_short_keys_later_definition_wins():
    image = parse_xpm_lines(["1 1 2 1", "a c #000001", "a c #000002", "a"])
    assert image.pixel(0, 0) == 0x2


def test_long_keys_first_definition_wins():
    image = parse_xpm_lines(["1 1 2 3", "abc c #000001", "abc c #000002", "abc"])
    assert image.pixel(0, 0) == 0x1


def test_missing_row_raises():
    with pytest.raises(XpmError):
        parse_xpm_lines(SAMPLE_LINES[:-1])


def test_zero_in_header_raises():
    with pytest.raises(XpmError):
        parse_xpm_lines(["0 2 3 1"] + SAMPLE_LINES[1:])


def test_colour_without_c_key_raises():
    with pytest.raises(XpmError):
        parse_xpm_lines(["1 1 1 1", "a m #000001", "a"])


def test_short_row_raises():
    with pytest.raises(XpmError):
        parse_xpm_lines(["3 1 1 1", "a c #000001", "aa"])


def test_pixel_out_of_bounds():
    image = parse_xpm_text(SAMPLE)
    with pytest.raises(IndexError):
        image.pixel(3, 0)
    with pytest.raises(IndexError):
        image.pixel(0, -1)


def test_parse_file(tmp_path):
    path = tmp_path / "img.xpm"
    path.write_text(SAMPLE, encoding="latin-1")
    assert parse_xpm_file(path) == parse_xpm_text(SAMPLE)


def test_parse_missing_file(tmp_path):
    with pytest.raises(XpmError):
        parse_xpm_file(tmp_path / "absent.xpm")


def test_str_to_words():
    assert str_to_words("  a\tb  c ") == ["a", "b", "c"]
    assert str_to_words(" \t ") == []


def test_find_substring():
    text = "xxabc"
    assert find_substring(text, "abc", 3) == text.index("abc")
    assert find_substring(text, "abc", 2) == -1
    assert find_substring(text, "abd", 10) == -1


def test_find_unquoted_skips_quoted():
    text = '"//" //'
    assert find_unquoted(text, "//", len(text)) == text.rindex("//")
    assert find_unquoted('"//"', "//", 4) == -1


def test_strip_comments_keeps_length_and_quotes():
    text = 'a /* c1 */ "x/*y*/" // tail\nb'
    stripped = strip_comments(text)
    assert len(stripped) == len(text)
    assert "c1" not in stripped
    assert "tail" not in stripped
    assert '"x/*y*/"' in stripped
    assert stripped.endswith("b")


def test_unterminated_comment_raises():
    with pytest.raises(XpmError):
        strip_comments("abc /* never closed")


def test_text_to_rgb():
    assert text_to_rgb("#00ff00", None) == 0x00FF00
    assert text_to_rgb("Red", None) == lookup_color("red")
    assert text_to_rgb("dark", "slate") == lookup_color("dark slate")
    assert text_to_rgb("None", None) == -1
    assert text_to_rgb("nosuchcolour", None) == 0
    assert text_to_rgb("#", None) == 0