import pytest

from microbit_sim.core.glyphs import GLYPHS, glyph_width
from microbit_sim.core.text_scroller import (
    TRAILING_BLANK_COLUMNS,
    TextScroller,
    build_scroll_pattern,
)


class RecordingSurface:
    def __init__(self):
        self.ops = []

    def plot(self, x, y):
        self.ops.append(("plot", x, y))

    def clear_screen(self):
        self.ops.append(("clear",))

    def frames(self):
        """Split recorded ops into the plots drawn after each clear."""
        frames = []
        for op in self.ops:
            if op == ("clear",):
                frames.append([])
            else:
                frames[-1].append(op[1:])
        return frames


def column(pattern, index):
    return [row[index] for row in pattern]


def test_pattern_for_single_glyph():
    pattern = build_scroll_pattern("A")
    width = glyph_width("A")

    assert len(pattern) == 5
    assert all(len(row) == width + TRAILING_BLANK_COLUMNS for row in pattern)
    for row_index, row in enumerate(GLYPHS["A"]):
        assert tuple(pattern[row_index][:width]) == row
    assert all(not any(row[width:]) for row in pattern)


def test_pattern_inserts_one_blank_column_between_glyphs():
    pattern = build_scroll_pattern("HI")
    h_width = glyph_width("H")
    i_width = glyph_width("I")

    assert len(pattern[0]) == h_width + 1 + i_width + TRAILING_BLANK_COLUMNS
    assert column(pattern, h_width) == [False] * 5
    assert tuple(row[h_width + 1 : h_width + 1 + i_width] for row in map(tuple, pattern)) == GLYPHS["I"]


def test_pattern_skips_unknown_characters_and_preserves_case():
    assert build_scroll_pattern("aéb") == build_scroll_pattern("ab")
    assert build_scroll_pattern("a") != build_scroll_pattern("A")


@pytest.mark.parametrize("text", ["", "éè", "\t\n"])
def test_pattern_empty_when_nothing_known(text):
    assert build_scroll_pattern(text) == []


def test_frames_advance_one_column_at_a_time():
    scroller = TextScroller(RecordingSurface(), clock=None)
    pattern = build_scroll_pattern("A")
    frames = list(scroller.frames("A"))

    assert len(frames) == glyph_width("A") + TRAILING_BLANK_COLUMNS
    for offset, frame in enumerate(frames):
        left_column = [frame[row][0] for row in range(5)]
        assert left_column == column(pattern, offset)
    assert not any(any(row) for row in frames[-1])


@pytest.mark.asyncio
async def test_scroll_draws_every_frame_then_clears(fake_clock):
    surface = RecordingSurface()
    scroller = TextScroller(surface, fake_clock)

    await scroller.scroll("A", 10)

    frame_count = glyph_width("A") + TRAILING_BLANK_COLUMNS
    drawn = surface.frames()
    # One clear per frame plus the final clear
    assert len(drawn) == frame_count + 1
    assert drawn[-1] == []
    # No suspend after the last frame
    assert fake_clock.sleeps == [10] * (frame_count - 1)

    expected_first = [
        (col, row)
        for row, cells in enumerate(GLYPHS["A"])
        for col, lit in enumerate(cells)
        if lit
    ]
    assert drawn[0] == expected_first


@pytest.mark.asyncio
async def test_scroll_without_known_characters_only_clears(fake_clock):
    surface = RecordingSurface()
    scroller = TextScroller(surface, fake_clock)

    await scroller.scroll("é", 10)

    assert surface.ops == [("clear",)]
    assert fake_clock.sleeps == []
