"""Text rasterization into a flat arena of glyph pixels."""

from dataclasses import dataclass

import numpy as np

from otpx.errors import EmptyMessage, MalformedFont, UnknownCharacter
from otpx.font import Font
from otpx.logging import audit, get_logger, trace

log = get_logger("raster")

NEWLINE = "\n"
BLANK = " "


@dataclass(eq=False)
class Buffer:
    """Rasterized text.

    ``pixels[line, cell, row, col]`` holds every glyph pixel. ``present`` marks
    cells that carry a glyph; blank cells and the padding past the end of a
    shorter line are False there and their pixels are never touched.
    ``line_lengths`` is the cell count of each line, blanks included.
    """
    pixels: np.ndarray
    present: np.ndarray
    line_lengths: list[int]

    @property
    def height(self) -> int:
        """Number of text lines."""
        return len(self.line_lengths)

    @property
    def width(self) -> int:
        """Cell count of the longest line."""
        return max(self.line_lengths, default=0)

    @property
    def glyph_shape(self) -> tuple[int, int]:
        return self.pixels.shape[2], self.pixels.shape[3]

    @property
    def shape(self) -> tuple[int, ...]:
        return self.pixels.shape

    @property
    def pixel_count(self) -> int:
        """Number of pixels the encoder traverses."""
        rows, cols = self.glyph_shape
        return int(self.present.sum()) * rows * cols

    def line(self, index: int) -> list[np.ndarray | None]:
        """Cells of one line: a glyph array, or None for a blank."""
        return [
            self.pixels[index, c] if self.present[index, c] else None
            for c in range(self.line_lengths[index])
        ]

    def copy(self) -> "Buffer":
        return Buffer(self.pixels.copy(), self.present.copy(), list(self.line_lengths))

    def __eq__(self, other):
        if not isinstance(other, Buffer):
            return NotImplemented
        return (
            self.line_lengths == other.line_lengths
            and np.array_equal(self.present, other.present)
            and np.array_equal(self.pixels[self.present], other.pixels[other.present])
        )


@trace
def rasterize(text: str, font: Font) -> Buffer:
    """Lay *text* out as glyph cells.

    A newline starts a new line, a space is a blank cell, and every other
    character must be defined by *font*. The text after the last newline is
    always a line of its own, even when empty.

    Raises:
        EmptyMessage: *text* is empty or holds only newlines.
        UnknownCharacter: a character is missing from *font*.
    """
    if not text.strip(NEWLINE):
        raise EmptyMessage("message is empty")

    lines = text.split(NEWLINE)
    width = max(len(line) for line in lines)
    n = font.size

    pixels = np.zeros((len(lines), width, n, n), dtype=bool)
    present = np.zeros((len(lines), width), dtype=bool)

    for y, line in enumerate(lines):
        for x, char in enumerate(line):
            if char == BLANK:
                continue
            if char not in font:
                raise UnknownCharacter(char, y + 1, x + 1)
            glyph = font.glyphs[char]
            if glyph.shape != (n, n):
                raise MalformedFont(f"glyph {char!r} is {glyph.shape[0]}x{glyph.shape[1]}, font size is {n}")
            pixels[y, x] = glyph
            present[y, x] = True

    buffer = Buffer(pixels, present, [len(line) for line in lines])
    audit("raster.done", logger=log, lines=buffer.height, width=buffer.width,
          glyphs=int(present.sum()), font_size=n)
    return buffer
