"""Bitmap renderer: lay an encoded buffer and optional hint out on a square canvas.

Every glyph pixel becomes a ``pixel`` x ``pixel`` block framed by a
``border``-wide grid line. Characters are separated by ``char_margin``, which
is also kept around the text block, and the whole image gets an extra
``image_margin``. A hint, if given, sits centered under the text; the same
height is reserved above the text so the text stays vertically balanced.
"""

from dataclasses import dataclass

import numpy as np

from otpx.errors import UnsupportedFontShape
from otpx.logging import audit, get_logger, trace
from otpx.raster import Buffer

log = get_logger("render")


@dataclass(frozen=True)
class Layout:
    """Spacing constants, in output pixels."""
    pixel: int = 7
    border: int = 1
    char_margin: int = 10
    image_margin: int = 20

    @property
    def bit_pitch(self) -> int:
        """Distance between neighbouring glyph pixels."""
        return self.pixel + self.border

    def char_pitch(self, font_size: int) -> int:
        """Distance between neighbouring characters."""
        return self.bit_pitch * font_size - self.border + self.char_margin


DEFAULT_LAYOUT = Layout()


@dataclass(frozen=True)
class Geometry:
    """Resolved placement of text and hint on the canvas."""
    side: int
    raw_width: int
    raw_height: int
    char_pitch: int
    text_x: int
    text_y: int
    hint_x: int | None = None
    hint_y: int | None = None


def compute_geometry(
    width: int,
    height: int,
    font_size: int,
    hint_shape: tuple[int, int] | None = None,
    layout: Layout = DEFAULT_LAYOUT,
) -> Geometry:
    """Work out canvas size and origins for a *width* x *height* character block."""
    pitch = layout.char_pitch(font_size)
    margins = layout.image_margin + layout.char_margin
    hint_reserve = hint_shape[0] + layout.char_margin if hint_shape else 0

    raw_width = margins + width * pitch + layout.image_margin
    raw_height = margins + 2 * hint_reserve + height * pitch + layout.image_margin
    side = max(raw_width, raw_height)
    if hint_shape:
        # Wide hints grow the canvas instead of running off its edges
        side = max(side, hint_shape[1] + 2 * layout.image_margin)

    text_x = (side - (width * pitch - layout.char_margin)) // 2
    text_y = (side - raw_height) // 2 + margins + hint_reserve

    hint_x = hint_y = None
    if hint_shape:
        hint_x = (side - hint_shape[1]) // 2
        hint_y = text_y + height * pitch

    return Geometry(side, raw_width, raw_height, pitch, text_x, text_y, hint_x, hint_y)


def _draw_bit(bitmap: np.ndarray, y: int, x: int, on: bool, layout: Layout):
    p = layout.pixel
    if on:
        bitmap[y:y + p, x:x + p] = True
    # Grid frame around every bit, on or off
    bitmap[y - 1, x - 1:x + p + 1] = True
    bitmap[y + p, x - 1:x + p + 1] = True
    bitmap[y - 1:y + p + 1, x - 1] = True
    bitmap[y - 1:y + p + 1, x + p] = True


@trace
def render_bitmap(
    buffer: Buffer,
    hint: np.ndarray | None = None,
    layout: Layout = DEFAULT_LAYOUT,
) -> np.ndarray:
    """Render *buffer* (and *hint*) to a square boolean bitmap.

    Raises:
        UnsupportedFontShape: the buffer's glyphs are not square.
    """
    rows, cols = buffer.glyph_shape
    if rows != cols:
        raise UnsupportedFontShape(f"only square fonts are supported, got {rows}x{cols} glyphs")

    geo = compute_geometry(
        buffer.width, buffer.height, rows,
        hint_shape=hint.shape if hint is not None else None,
        layout=layout,
    )
    bitmap = np.zeros((geo.side, geo.side), dtype=bool)
    step = layout.bit_pitch

    for line, cell in np.argwhere(buffer.present):
        y0 = geo.text_y + line * geo.char_pitch
        x0 = geo.text_x + cell * geo.char_pitch
        glyph = buffer.pixels[line, cell]
        for r in range(rows):
            for c in range(cols):
                _draw_bit(bitmap, y0 + r * step, x0 + c * step, glyph[r, c], layout)

    if hint is not None:
        h, w = hint.shape
        bitmap[geo.hint_y:geo.hint_y + h, geo.hint_x:geo.hint_x + w] |= hint.astype(bool)

    audit("render.bitmap", logger=log, side=geo.side, chars=f"{buffer.width}x{buffer.height}",
          font_size=rows, hint=hint is not None, set_pixels=int(bitmap.sum()))
    return bitmap
