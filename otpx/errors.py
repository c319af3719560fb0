"""Error taxonomy for the OTP-X pipeline.

Every failure is fatal to the invocation that hit it. All errors derive from
``ValueError`` through :class:`OTPXError`, so callers may catch either.
"""


class OTPXError(ValueError):
    """Base class for all OTP-X input and layout errors."""


class MalformedFont(OTPXError):
    """A font definition block is inconsistent or invalid."""


class DuplicateGlyph(MalformedFont):
    """The same character is defined twice in one font."""

    def __init__(self, char: str, line: int):
        super().__init__(f"line {line}: duplicate definition of character {char!r}")
        self.char = char
        self.line = line


class EmptyPad(OTPXError):
    """A pad source contained no usable bits."""


class MalformedPad(OTPXError):
    """A pad record's value is not an integer."""


class MalformedHint(OTPXError):
    """A hint bitmap's header or dimensions do not match its rows."""


class UnknownCharacter(OTPXError):
    """The message uses a character the font does not define."""

    def __init__(self, char: str, line: int, column: int):
        super().__init__(f"no character {char!r} in font (line {line}, column {column})")
        self.char = char
        self.line = line
        self.column = column


class EmptyMessage(OTPXError):
    """The message has nothing to encode."""


class UnsupportedFontShape(OTPXError):
    """Glyphs are not square."""
