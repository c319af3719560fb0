"""Plain PBM (``P1``) bitmaps: hint loading, output serialization, PNG export."""

import os
from pathlib import Path

import numpy as np
from PIL import Image

from otpx.errors import MalformedHint
from otpx.logging import audit, get_logger, trace

log = get_logger("pbm")

MAGIC = "P1"


@trace
def parse_pbm(text: str, source: str = "<pbm>") -> np.ndarray:
    """Parse a plain PBM into a boolean array of shape (height, width).

    The layout is line oriented: the ``P1`` marker, optional ``#`` comment
    lines, a ``width height`` line, then one line of *width* tokens per row.
    A ``0`` token is off; anything else is on.
    """
    lines = text.splitlines()
    if not lines or lines[0].strip() != MAGIC:
        raise MalformedHint(f"{source}: missing {MAGIC!r} marker")

    i = 1
    while i < len(lines) and lines[i].lstrip().startswith("#"):
        i += 1
    if i >= len(lines):
        raise MalformedHint(f"{source}: missing 'width height' line")
    try:
        width, height = (int(v) for v in lines[i].split())
    except ValueError:
        raise MalformedHint(f"{source}, line {i + 1}: expected 'width height', got {lines[i]!r}") from None
    if width < 1 or height < 1:
        raise MalformedHint(f"{source}: dimensions must be positive, got {width}x{height}")

    rows = lines[i + 1:i + 1 + height]
    if len(rows) != height:
        raise MalformedHint(f"{source}: expected {height} rows, found {len(rows)}")

    bitmap = np.zeros((height, width), dtype=bool)
    for y, row in enumerate(rows):
        tokens = row.split()
        if len(tokens) != width:
            raise MalformedHint(f"{source}, row {y + 1}: expected {width} pixels, found {len(tokens)}")
        bitmap[y] = [t != "0" for t in tokens]
    return bitmap


@trace
def load_hint(path: str | Path | None) -> np.ndarray | None:
    """Load a hint bitmap, or return None when no path is given."""
    if path is None:
        return None
    hint = parse_pbm(Path(path).read_text(), source=str(path))
    audit("hint.loaded", logger=log, path=str(path), size=f"{hint.shape[1]}x{hint.shape[0]}")
    return hint


def format_pbm(bitmap: np.ndarray) -> str:
    """Serialize a boolean bitmap as plain PBM text."""
    height, width = bitmap.shape
    lines = [MAGIC, f"{width} {height}"]
    lines.extend(" ".join("1" if px else "0" for px in row) for row in bitmap.tolist())
    return "\n".join(lines) + "\n"


@trace
def write_pbm(bitmap: np.ndarray, path: str | Path) -> Path:
    """Write *bitmap* to *path*, replacing any existing file in one step."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_text(format_pbm(bitmap))
        os.replace(tmp, path)
    finally:
        tmp.unlink(missing_ok=True)
    audit("pbm.written", logger=log, path=str(path), size=f"{bitmap.shape[1]}x{bitmap.shape[0]}")
    return path


def to_image(bitmap: np.ndarray) -> Image.Image:
    """Convert a bitmap to a 1-bit PIL image (set pixels are black, as in PBM)."""
    gray = np.where(bitmap, 0, 255).astype(np.uint8)
    return Image.fromarray(gray).convert("1", dither=Image.Dither.NONE)


@trace
def save_image(bitmap: np.ndarray, path: str | Path) -> Path:
    """Save *bitmap* in any format Pillow infers from the file extension."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    to_image(bitmap).save(path)
    audit("image.saved", logger=log, path=str(path), size=f"{bitmap.shape[1]}x{bitmap.shape[0]}")
    return path
