import pytest

from fdfview.colors import lookup_color
from fdfview.xpm import (
    XpmError,
    find_outside_quotes,
    parse_xpm,
    quoted_lines,
    split_words,
    strip_comments,
    text_rgb,
    xpm_file_to_image,
    xpm_to_image,
)

SMALL = ["2 2 2 1", ". c #FF0000", "# c None", ".#", "#."]


def test_split_words_on_spaces_and_tabs():
    assert split_words("  a\tb  c ") == ["a", "b", "c"]
    assert split_words("a\nb") == ["a\nb"]
    assert split_words("   ") == []


def test_find_outside_quotes():
    text = 'x "/*" /*'
    assert find_outside_quotes(text, "/*") == 7
    assert find_outside_quotes('"/*"', "/*") == -1
    assert find_outside_quotes("abc", "zz") == -1


def test_strip_block_comment_keeps_length():
    text = "a /* b */ c"
    result = strip_comments(text)
    assert len(result) == len(text)
    assert result == "a" + " " * 9 + "c"


def test_strip_line_comment_blanks_newline():
    assert strip_comments("a // b\nc") == "a" + " " * 6 + "c"


def test_strip_comments_leaves_quoted_text():
    text = '"/*x*/" "//y"'
    assert strip_comments(text) == text


def test_quoted_lines():
    text = 'static char *x[] = {"ab", "cd"};'
    assert list(quoted_lines(text)) == ["ab", "cd"]
    assert list(quoted_lines('"only')) == []


def test_text_rgb_hex_and_names():
    assert text_rgb("#FF0000", None) == 0xFF0000
    assert text_rgb("red", None) == lookup_color("red")
    assert text_rgb("dark", "red") == lookup_color("dark red")
    assert text_rgb("None", None) == -1
    assert text_rgb("nosuchcolour", None) == 0


def test_text_rgb_joins_following_key():
    # The word after the colour is always joined, so "red m" is not a name.
    assert text_rgb("red", "m") == 0


def test_parse_small_image():
    image = parse_xpm(SMALL)
    assert (image.width, image.height) == (2, 2)
    assert image.get_pixel(0, 0) == 0xFF0000
    assert image.get_pixel(1, 0) == 0xFF000000
    assert image.get_pixel(0, 1) == 0xFF000000
    assert image.get_pixel(1, 1) == 0xFF0000


def test_parse_wide_keys():
    lines = ["2 1 2 3", "aaa c #00FF00", "bbb c #0000FF", "bbbaaa"]
    image = xpm_to_image(lines)
    assert image.get_pixel(0, 0) == 0x0000FF
    assert image.get_pixel(1, 0) == 0x00FF00


def test_unknown_pixel_key_gives_black():
    image = parse_xpm(["1 1 1 1", ". c #123456", "?"])
    assert image.get_pixel(0, 0) == 0


@pytest.mark.parametrize(
    "lines",
    [
        ["0 2 2 1"],
        ["2 2"],
        ["1 1 1 1", ". #FF0000", "."],
        ["1 1 1 1", ". x c", "."],
        ["2 2 2 1", ". c #FF0000", "# c None", ".#"],
        [],
    ],
)
def test_parse_errors(lines):
    with pytest.raises(XpmError):
        parse_xpm(lines)


def test_file_round_trip(tmp_path):
    path = tmp_path / "open.xpm"
    path.write_text(
        "/* XPM */\n"
        "static char *pic[] = {\n"
        "/* width height ncolors cpp */\n"
        '"2 2 2 1",\n'
        '". c #FF0000",\n'
        '"# c None",\n'
        "// rows follow\n"
        '".#",\n'
        '"#."\n'
        "};\n"
    )
    from_file = xpm_file_to_image(path)
    from_data = xpm_to_image(SMALL)
    assert from_file.data == from_data.data
    assert (from_file.width, from_file.height) == (2, 2)


def test_missing_file(tmp_path):
    with pytest.raises(OSError):
        xpm_file_to_image(tmp_path / "absent.xpm")