"""Square dot-matrix fonts: parsing, serialization and the built-in 5x5 font.

A font file is a sequence of blocks, in any order. Each block is one line
holding the character itself, followed by N lines of N characters where a
space is "off" and ``*`` is "on". N is taken from the first pixel row of the
first block and must be greater than 1 and the same for every block.
"""

from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from otpx.errors import DuplicateGlyph, MalformedFont
from otpx.logging import audit, get_logger, trace

log = get_logger("font")

ON = "*"
OFF = " "
BUILTIN_PREFIX = "builtin:"


@dataclass
class Font:
    """A square monospaced bitmap font."""
    size: int
    glyphs: dict[str, np.ndarray] = field(default_factory=dict)

    def __contains__(self, char: str) -> bool:
        return char in self.glyphs

    def __len__(self) -> int:
        return len(self.glyphs)

    @property
    def chars(self) -> str:
        return "".join(sorted(self.glyphs))

    def glyph(self, char: str) -> np.ndarray:
        """Return an independent copy of the pixel grid for *char*."""
        return self.glyphs[char].copy()


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _split_lines(text: str) -> list[str]:
    # Rows may end in significant spaces, so only the newline is stripped
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


@trace
def parse_font(text: str, source: str = "<font>") -> Font:
    """Parse a font definition.

    Raises:
        MalformedFont: bad character line, bad row, N <= 1, truncated block,
            or no glyphs at all.
        DuplicateGlyph: a character defined twice.
    """
    lines = _split_lines(text)
    glyphs: dict[str, np.ndarray] = {}
    size = None

    i = 0
    while i < len(lines):
        char = lines[i]
        if len(char) != 1:
            raise MalformedFont(f"{source}, line {i + 1}: expected a single character, got {char!r}")
        if char in glyphs:
            raise DuplicateGlyph(char, i + 1)
        i += 1

        rows: list[list[bool]] = []
        while size is None or len(rows) < size:
            if i >= len(lines):
                raise MalformedFont(f"{source}: definition of {char!r} is truncated at end of file")
            row = lines[i]
            if size is None:
                size = len(row)
                if size <= 1:
                    raise MalformedFont(f"{source}, line {i + 1}: font size must be greater than 1, got {size}")
            if len(row) != size or set(row) - {ON, OFF}:
                raise MalformedFont(
                    f"{source}, line {i + 1}: expected {size} characters from {OFF + ON!r}, got {row!r}"
                )
            rows.append([c == ON for c in row])
            i += 1

        glyphs[char] = np.array(rows, dtype=bool)

    if not glyphs:
        raise MalformedFont(f"{source}: no glyphs defined")

    audit("font.parsed", logger=log, source=source, size=size, glyphs=len(glyphs))
    return Font(size=size, glyphs=glyphs)


def format_font(font: Font) -> str:
    """Serialize *font* back into the block format read by :func:`parse_font`."""
    out = []
    for char in sorted(font.glyphs):
        out.append(char)
        for row in font.glyphs[char]:
            out.append("".join(ON if px else OFF for px in row))
    return "\n".join(out) + "\n"


@trace
def load_font(path: str | Path) -> Font:
    """Load a font file, or a built-in font given as ``builtin:<name>``."""
    target = str(path)
    if target.startswith(BUILTIN_PREFIX):
        return builtin_font(target[len(BUILTIN_PREFIX):])
    font = parse_font(Path(path).read_text(), source=target)
    audit("font.loaded", logger=log, path=target, size=font.size, chars=font.chars)
    return font


# ---------------------------------------------------------------------------
# Built-in fonts
# ---------------------------------------------------------------------------

GLYPHS_5X5: dict[str, tuple[str, ...]] = {
    "A": (" *** ", "*   *", "*****", "*   *", "*   *"),
    "B": ("**** ", "*   *", "**** ", "*   *", "**** "),
    "C": (" ****", "*    ", "*    ", "*    ", " ****"),
    "D": ("**** ", "*   *", "*   *", "*   *", "**** "),
    "E": ("*****", "*    ", "**** ", "*    ", "*****"),
    "F": ("*****", "*    ", "**** ", "*    ", "*    "),
    "G": (" ****", "*    ", "*  **", "*   *", " ****"),
    "H": ("*   *", "*   *", "*****", "*   *", "*   *"),
    "I": ("*****", "  *  ", "  *  ", "  *  ", "*****"),
    "J": ("*****", "   * ", "   * ", "*  * ", " **  "),
    "K": ("*   *", "*  * ", "***  ", "*  * ", "*   *"),
    "L": ("*    ", "*    ", "*    ", "*    ", "*****"),
    "M": ("*   *", "** **", "* * *", "*   *", "*   *"),
    "N": ("*   *", "**  *", "* * *", "*  **", "*   *"),
    "O": (" *** ", "*   *", "*   *", "*   *", " *** "),
    "P": ("**** ", "*   *", "**** ", "*    ", "*    "),
    "Q": (" *** ", "*   *", "* * *", "*  * ", " ** *"),
    "R": ("**** ", "*   *", "**** ", "*  * ", "*   *"),
    "S": (" ****", "*    ", " *** ", "    *", "**** "),
    "T": ("*****", "  *  ", "  *  ", "  *  ", "  *  "),
    "U": ("*   *", "*   *", "*   *", "*   *", " *** "),
    "V": ("*   *", "*   *", "*   *", " * * ", "  *  "),
    "W": ("*   *", "*   *", "* * *", "** **", "*   *"),
    "X": ("*   *", " * * ", "  *  ", " * * ", "*   *"),
    "Y": ("*   *", " * * ", "  *  ", "  *  ", "  *  "),
    "Z": ("*****", "   * ", "  *  ", " *   ", "*****"),
    "0": (" *** ", "*  **", "* * *", "**  *", " *** "),
    "1": ("  *  ", " **  ", "  *  ", "  *  ", " *** "),
    "2": ("**** ", "    *", " *** ", "*    ", "*****"),
    "3": ("**** ", "    *", " *** ", "    *", "**** "),
    "4": ("*   *", "*   *", "*****", "    *", "    *"),
    "5": ("*****", "*    ", "**** ", "    *", "**** "),
    "6": (" *** ", "*    ", "**** ", "*   *", " *** "),
    "7": ("*****", "    *", "   * ", "  *  ", "  *  "),
    "8": (" *** ", "*   *", " *** ", "*   *", " *** "),
    "9": (" *** ", "*   *", " ****", "    *", " *** "),
    ".": ("     ", "     ", "     ", "     ", "  *  "),
    ",": ("     ", "     ", "     ", "  *  ", " *   "),
    "!": ("  *  ", "  *  ", "  *  ", "     ", "  *  "),
    "?": (" *** ", "*   *", "  ** ", "     ", "  *  "),
    "-": ("     ", "     ", "*****", "     ", "     "),
    ":": ("     ", "  *  ", "     ", "  *  ", "     "),
    "'": ("  *  ", "  *  ", "     ", "     ", "     "),
}

BUILTIN_FONTS: dict[str, dict[str, tuple[str, ...]]] = {
    "5x5": GLYPHS_5X5,
}


def _builtin_source(glyphs: dict[str, tuple[str, ...]]) -> str:
    return "".join(char + "\n" + "\n".join(rows) + "\n" for char, rows in glyphs.items())


@trace
def builtin_font(name: str = "5x5") -> Font:
    """Return one of the fonts shipped with the package."""
    if name not in BUILTIN_FONTS:
        raise MalformedFont(f"unknown built-in font {name!r}. Choose from {sorted(BUILTIN_FONTS)}")
    return parse_font(_builtin_source(BUILTIN_FONTS[name]), source=f"{BUILTIN_PREFIX}{name}")
