"""Scrolling text across the 5x5 LED matrix."""

from __future__ import annotations

from typing import Iterator, Mapping, Protocol

from microbit_sim.core.glyphs import GLYPH_HEIGHT, GLYPHS, Glyph
from microbit_sim.interfaces.clock import IClock

TRAILING_BLANK_COLUMNS = 5

ScrollPattern = list[list[bool]]


class LedSurface(Protocol):
    """What the scroller draws on; the script bridge satisfies this."""

    def plot(self, x: int, y: int) -> None:
        ...

    def clear_screen(self) -> None:
        ...


def build_scroll_pattern(
    text: str, glyphs: Mapping[str, Glyph] = GLYPHS
) -> ScrollPattern:
    """Lay out text as rows of lit/dark columns, ready to scroll.

    Characters without a glyph are dropped. Consecutive glyphs are separated
    by one blank column and the pattern ends with TRAILING_BLANK_COLUMNS
    blank columns so the text fully leaves the display. Returns an empty
    list when no character has a glyph.
    """
    chars = [char for char in text if char in glyphs]
    if not chars:
        return []

    pattern: ScrollPattern = [[] for _ in range(GLYPH_HEIGHT)]
    for index, char in enumerate(chars):
        for row_index, row in enumerate(glyphs[char]):
            pattern[row_index].extend(row)
            if index < len(chars) - 1:
                pattern[row_index].append(False)

    for row in pattern:
        row.extend([False] * TRAILING_BLANK_COLUMNS)
    return pattern


class TextScroller:
    """Plays a scroll pattern on an LED surface one column per frame."""

    def __init__(
        self,
        surface: LedSurface,
        clock: IClock,
        width: int = 5,
        height: int = GLYPH_HEIGHT,
        glyphs: Mapping[str, Glyph] = GLYPHS,
    ):
        self._surface = surface
        self._clock = clock
        self._width = width
        self._height = height
        self._glyphs = glyphs

    def frames(self, text: str) -> Iterator[tuple[tuple[bool, ...], ...]]:
        """Yield each visible window as rows of booleans, first to last."""
        pattern = build_scroll_pattern(text, self._glyphs)
        total = len(pattern[0]) if pattern else 0
        for offset in range(total):
            yield tuple(
                tuple(
                    offset + col < total and pattern[row][offset + col]
                    for col in range(self._width)
                )
                for row in range(self._height)
            )

    async def scroll(self, text: str, interval_ms: float) -> None:
        """Scroll text across the surface, suspending between frames.

        With no known characters the surface is cleared and the call
        returns without suspending.
        """
        frames = list(self.frames(text))
        for index, frame in enumerate(frames):
            self._surface.clear_screen()
            for row, cells in enumerate(frame):
                for col, lit in enumerate(cells):
                    if lit:
                        self._surface.plot(col, row)
            if index < len(frames) - 1:
                await self._clock.sleep(interval_ms)

        self._surface.clear_screen()
