"""End-to-end encoding: text in, cipher bitmap out."""

from dataclasses import dataclass
from pathlib import Path

import numpy as np

from otpx.cipher import encode
from otpx.font import Font
from otpx.logging import audit, get_logger, trace
from otpx.pad import Pad
from otpx.pbm import save_image, write_pbm
from otpx.raster import Buffer, rasterize
from otpx.render import DEFAULT_LAYOUT, Layout, render_bitmap

log = get_logger("pipeline")


@dataclass
class EncodeResult:
    """Everything produced by one :func:`encode_message` run."""
    plaintext: Buffer
    ciphertext: Buffer
    bitmap: np.ndarray
    cursor: int

    @property
    def side(self) -> int:
        return self.bitmap.shape[0]


@trace
def encode_message(
    message: str,
    font: Font,
    pad: Pad,
    *,
    hint: np.ndarray | None = None,
    cursor: int = 0,
    layout: Layout = DEFAULT_LAYOUT,
) -> EncodeResult:
    """Rasterize *message*, encrypt it with *pad* and render the cipher image.

    Nothing is written to disk; see :func:`write_outputs`.
    """
    ciphertext = rasterize(message, font)
    plaintext = ciphertext.copy()
    end = encode(ciphertext, pad, cursor)
    bitmap = render_bitmap(ciphertext, hint=hint, layout=layout)

    audit("pipeline.encoded", logger=log, lines=ciphertext.height, width=ciphertext.width,
          pixels=ciphertext.pixel_count, cursor=end, side=bitmap.shape[0])
    return EncodeResult(plaintext=plaintext, ciphertext=ciphertext, bitmap=bitmap, cursor=end)


@trace
def write_outputs(
    result: EncodeResult,
    pbm_path: str | Path,
    png_path: str | Path | None = None,
) -> list[Path]:
    """Write the PBM (and optionally a Pillow-rendered image) for *result*."""
    written = [write_pbm(result.bitmap, pbm_path)]
    if png_path is not None:
        written.append(save_image(result.bitmap, png_path))
    return written
