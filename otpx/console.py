"""Console rendition of rasterized or encoded buffers."""

import sys
from typing import TextIO

from otpx.font import OFF, ON, Font
from otpx.raster import Buffer

SEPARATOR = "  "


def format_buffer(buffer: Buffer, font: Font) -> str:
    """Draw *buffer* as text, one glyph row per output line.

    Blank cells are as wide as a glyph of *font*. Every text line is followed
    by an empty line; lines without cells produce no output.
    """
    out = []
    rows = buffer.glyph_shape[0]
    blank = OFF * font.size
    for index in range(buffer.height):
        cells = buffer.line(index)
        if not cells:
            continue
        for r in range(rows):
            out.append("".join(
                (blank if cell is None else "".join(ON if px else OFF for px in cell[r])) + SEPARATOR
                for cell in cells
            ))
        out.append("")
    return "".join(line + "\n" for line in out)


def render_to_console(buffer: Buffer, font: Font, stream: TextIO | None = None):
    """Print :func:`format_buffer` output to *stream* (stdout by default)."""
    (stream or sys.stdout).write(format_buffer(buffer, font))
