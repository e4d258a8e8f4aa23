"""5-row bitmap font for the LED matrix.

Glyphs are drawn as five strings, '#' for a lit LED and '.' for a dark one.
Widths vary from 1 to 5 columns; spacing between characters is added by
the scroller, not stored in the glyphs.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

GLYPH_HEIGHT = 5

Glyph = tuple[tuple[bool, ...], ...]

_GLYPH_ART: dict[str, tuple[str, ...]] = {
    # Uppercase
    "A": (".##.", "#..#", "####", "#..#", "#..#"),
    "B": ("###.", "#..#", "###.", "#..#", "###."),
    "C": (".###", "#...", "#...", "#...", ".###"),
    "D": ("###.", "#..#", "#..#", "#..#", "###."),
    "E": ("####", "#...", "###.", "#...", "####"),
    "F": ("####", "#...", "###.", "#...", "#..."),
    "G": (".###", "#...", "#.##", "#..#", ".##."),
    "H": ("#..#", "#..#", "####", "#..#", "#..#"),
    "I": ("###", ".#.", ".#.", ".#.", "###"),
    "J": ("####", "...#", "...#", "#..#", ".##."),
    "K": ("#..#", "#.#.", "##..", "#.#.", "#..#"),
    "L": ("#...", "#...", "#...", "#...", "####"),
    "M": ("#...#", "##.##", "#.#.#", "#...#", "#...#"),
    "N": ("#...#", "##..#", "#.#.#", "#..##", "#...#"),
    "O": (".##.", "#..#", "#..#", "#..#", ".##."),
    "P": ("###.", "#..#", "###.", "#...", "#..."),
    "Q": (".##.", "#..#", "#..#", "#.##", ".###"),
    "R": ("###.", "#..#", "###.", "#.#.", "#..#"),
    "S": (".###", "#...", ".##.", "...#", "###."),
    "T": ("#####", "..#..", "..#..", "..#..", "..#.."),
    "U": ("#..#", "#..#", "#..#", "#..#", ".##."),
    "V": ("#...#", "#...#", "#...#", ".#.#.", "..#.."),
    "W": ("#...#", "#...#", "#.#.#", "##.##", "#...#"),
    "X": ("#...#", ".#.#.", "..#..", ".#.#.", "#...#"),
    "Y": ("#...#", ".#.#.", "..#..", "..#..", "..#.."),
    "Z": ("####", "...#", ".##.", "#...", "####"),
    # Lowercase
    "a": ("....", ".###", "#..#", "#..#", ".###"),
    "b": ("#...", "###.", "#..#", "#..#", "###."),
    "c": ("...", ".##", "#..", "#..", ".##"),
    "d": ("...#", ".###", "#..#", "#..#", ".###"),
    "e": ("....", ".##.", "####", "#...", ".###"),
    "f": ("..##", ".#..", "####", ".#..", ".#.."),
    "g": (".###", "#..#", ".###", "...#", ".##."),
    "h": ("#...", "#...", "###.", "#..#", "#..#"),
    "i": ("#", ".", "#", "#", "#"),
    "j": ("..#", "...", "..#", "#.#", ".#."),
    "k": ("#...", "#.#.", "##..", "#.#.", "#..#"),
    "l": ("#.", "#.", "#.", "#.", ".#"),
    "m": (".....", "##.#.", "#.#.#", "#.#.#", "#...#"),
    "n": ("....", "###.", "#..#", "#..#", "#..#"),
    "o": ("....", ".##.", "#..#", "#..#", ".##."),
    "p": ("###.", "#..#", "###.", "#...", "#..."),
    "q": (".###", "#..#", ".###", "...#", "...#"),
    "r": ("...", "#.#", "##.", "#..", "#.."),
    "s": (".##", "#..", ".#.", "..#", "##."),
    "t": (".#.", "###", ".#.", ".#.", "..#"),
    "u": ("....", "#..#", "#..#", "#..#", ".###"),
    "v": (".....", "#...#", "#...#", ".#.#.", "..#.."),
    "w": (".....", "#...#", "#.#.#", "#.#.#", ".#.#."),
    "x": ("....", "#..#", ".##.", ".##.", "#..#"),
    "y": ("#..#", "#..#", ".###", "...#", ".##."),
    "z": ("....", "####", "..#.", ".#..", "####"),
    # Digits
    "0": (".#.", "#.#", "#.#", "#.#", ".#."),
    "1": (".#.", "##.", ".#.", ".#.", "###"),
    "2": ("###.", "...#", ".##.", "#...", "####"),
    "3": ("###.", "...#", ".##.", "...#", "###."),
    "4": ("#..#", "#..#", "####", "...#", "...#"),
    "5": ("####", "#...", "###.", "...#", "###."),
    "6": (".##.", "#...", "###.", "#..#", ".##."),
    "7": ("####", "...#", "..#.", ".#..", ".#.."),
    "8": (".##.", "#..#", ".##.", "#..#", ".##."),
    "9": (".##.", "#..#", ".###", "...#", ".##."),
    # Punctuation
    " ": ("...", "...", "...", "...", "..."),
    "!": ("#", "#", "#", ".", "#"),
    "?": (".##.", "#..#", "..#.", "....", "..#."),
    ".": (".", ".", ".", ".", "#"),
    ",": ("..", "..", "..", ".#", "#."),
    ":": (".", "#", ".", "#", "."),
    "'": ("#", "#", ".", ".", "."),
    "-": ("...", "...", "###", "...", "..."),
    "+": ("...", ".#.", "###", ".#.", "..."),
    "=": ("...", "###", "...", "###", "..."),
    "(": (".#", "#.", "#.", "#.", ".#"),
    ")": ("#.", ".#", ".#", ".#", "#."),
    "/": ("..#", "..#", ".#.", "#..", "#.."),
}


def parse_glyph(char: str, art: tuple[str, ...]) -> Glyph:
    """Convert glyph art into rows of booleans.

    Raises:
        ValueError: If the art is not GLYPH_HEIGHT rows of equal width.
    """
    if len(art) != GLYPH_HEIGHT:
        raise ValueError(f"Glyph {char!r} must have {GLYPH_HEIGHT} rows, got {len(art)}")
    width = len(art[0])
    if width == 0 or any(len(row) != width for row in art):
        raise ValueError(f"Glyph {char!r} rows must share a non-zero width")
    return tuple(tuple(cell == "#" for cell in row) for row in art)


GLYPHS: Mapping[str, Glyph] = MappingProxyType(
    {char: parse_glyph(char, art) for char, art in _GLYPH_ART.items()}
)


def glyph_width(char: str) -> int:
    return len(GLYPHS[char][0])
