"""Pad encoder: XOR rasterized pixels against a one-time pad, in place."""

from otpx.logging import audit, get_logger, trace
from otpx.pad import Pad
from otpx.raster import Buffer

log = get_logger("cipher")


@trace
def encode(buffer: Buffer, pad: Pad, cursor: int = 0) -> int:
    """XOR every glyph pixel of *buffer* with consecutive pad bits.

    Pixels are visited line by line, then cell, glyph row and glyph column;
    blank cells consume no key. The pad wraps around at its end.

    Applying the same pad from the same cursor twice restores the buffer.

    Returns:
        The cursor after the last consumed bit, for chaining further calls.
    """
    if cursor < 0:
        raise ValueError(f"pad cursor must be non-negative, got {cursor}")
    cursor %= len(pad)

    # Boolean-mask indexing walks cells in C order: line, then cell
    cells = buffer.pixels[buffer.present]
    key = pad.keystream(cursor, cells.size).reshape(cells.shape).astype(bool)
    buffer.pixels[buffer.present] = cells ^ key

    end = (cursor + cells.size) % len(pad)
    audit("cipher.encoded", logger=log, pixels=int(cells.size), pad_bits=len(pad),
          cursor_start=cursor, cursor_end=end, wrapped=cursor + cells.size >= len(pad))
    return end


decode = encode
