import string

import pytest

from microbit_sim.core.glyphs import GLYPH_HEIGHT, GLYPHS, glyph_width, parse_glyph


def test_table_covers_letters_digits_and_space():
    for char in string.ascii_letters + string.digits + " ":
        assert char in GLYPHS


def test_glyphs_fit_the_matrix():
    for char, glyph in GLYPHS.items():
        assert len(glyph) == GLYPH_HEIGHT, char
        assert 1 <= glyph_width(char) <= 5, char
        assert all(len(row) == glyph_width(char) for row in glyph), char


def test_parse_glyph():
    glyph = parse_glyph("x", ("#.", ".#", "#.", ".#", "##"))
    assert glyph[0] == (True, False)
    assert glyph[4] == (True, True)


@pytest.mark.parametrize(
    "art",
    [
        ("#", "#", "#", "#"),
        ("##", "#", "#", "#", "#"),
        ("", "", "", "", ""),
    ],
)
def test_parse_glyph_rejects_bad_art(art):
    with pytest.raises(ValueError):
        parse_glyph("?", art)
