"""One-time pads: loading, generating and writing bit sequences.

Pad files hold one record per line, either a bare value or ``index value``
as in OEIS b-files (https://oeis.org). Blank lines and ``#`` comments are
ignored. Only the value matters; any non-zero integer is a 1 bit.
"""

from dataclasses import dataclass
from pathlib import Path

import numpy as np

from otpx.errors import EmptyPad, MalformedPad
from otpx.logging import audit, get_logger, trace

log = get_logger("pad")

COMMENT = "#"


@dataclass(eq=False)
class Pad:
    """A circular sequence of key bits."""
    bits: np.ndarray

    def __post_init__(self):
        self.bits = np.asarray(self.bits, dtype=np.uint8).ravel()
        if self.bits.size == 0:
            raise EmptyPad("pad holds no bits")
        if np.any(self.bits > 1):
            raise MalformedPad("pad bits must be 0 or 1")

    def __len__(self) -> int:
        return int(self.bits.size)

    def __eq__(self, other):
        if not isinstance(other, Pad):
            return NotImplemented
        return np.array_equal(self.bits, other.bits)

    @property
    def shape(self) -> tuple[int, ...]:
        return self.bits.shape

    def keystream(self, cursor: int, count: int) -> np.ndarray:
        """Return *count* bits starting at *cursor*, wrapping around the end."""
        return self.bits[(cursor + np.arange(count)) % len(self)]


@trace
def parse_pad(text: str, source: str = "<pad>") -> Pad:
    """Parse pad records into a :class:`Pad`.

    Raises:
        MalformedPad: a value token is not an integer.
        EmptyPad: no usable records.
    """
    bits: list[int] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith(COMMENT):
            continue
        tokens = line.split()
        value = tokens[1] if len(tokens) > 1 else tokens[0]
        try:
            bits.append(1 if int(value) else 0)
        except ValueError:
            raise MalformedPad(f"{source}, line {lineno}: expected an integer value, got {value!r}") from None

    if not bits:
        raise EmptyPad(f"{source}: no bits found")

    pad = Pad(np.array(bits, dtype=np.uint8))
    audit("pad.parsed", logger=log, source=source, bits=len(pad), ones=int(pad.bits.sum()))
    return pad


@trace
def load_pad(path: str | Path) -> Pad:
    """Read a pad file."""
    return parse_pad(Path(path).read_text(), source=str(path))


@trace
def generate_pad(length: int, seed: int | None = None) -> Pad:
    """Draw *length* random bits.

    Uses numpy's default generator; fine for demonstrations, not for secrets.
    """
    if length < 1:
        raise ValueError(f"pad length must be at least 1, got {length}")
    rng = np.random.default_rng(seed)
    pad = Pad(rng.integers(0, 2, size=length, dtype=np.uint8))
    audit("pad.generated", logger=log, bits=length, seeded=seed is not None)
    return pad


def format_pad(pad: Pad) -> str:
    """Serialize *pad* as an OEIS-style b-file with 1-based indices."""
    lines = [f"{COMMENT} one-time pad, {len(pad)} bits"]
    lines.extend(f"{i} {bit}" for i, bit in enumerate(pad.bits.tolist(), start=1))
    return "\n".join(lines) + "\n"


@trace
def write_pad(pad: Pad, path: str | Path) -> Path:
    """Write *pad* to *path* in the format read by :func:`load_pad`."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_pad(pad))
    audit("pad.written", logger=log, path=str(path), bits=len(pad))
    return path
