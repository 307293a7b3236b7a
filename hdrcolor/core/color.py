"""Unbounded floating-point colour used as an intermediate render value.

Unlike 8-bit display colours, each channel may go below 0 or above 1 while
colours are being accumulated. Display conversion clamps to [0, 1] and scales
to 0-255; the whole image should be tone mapped before that happens.

Example:
    >>> parse_hex_color('#f0f').rgba()
    (255, 0, 255, 1)
"""

from __future__ import annotations

import math
import numbers
import re
from dataclasses import dataclass

_HEX6 = re.compile(r'[0-9a-fA-F]{6}')


class ColorError(ValueError):
    """Base class for colour parsing errors."""


class ColorParseError(ColorError):
    """A colour string that is not 3 or 6 hex digits."""

    def __init__(self, text: str, reason: str = 'Bad color string'):
        super().__init__(f'{reason}: {text}')
        self.text = text


class TruncatedInputError(ColorError):
    """Deserialization input too short to hold a colour."""

    def __init__(self, data: bytes | str):
        shown = data.decode('utf-8', 'replace') if isinstance(data, bytes) else data
        super().__init__(f'Bad color string: {shown!r} is too short')
        self.data = data


def _clamp(f: float) -> float:
    if math.isnan(f) or f < 0:
        return 0.0
    if f > 1:
        return 1.0
    return f


@dataclass(frozen=True)
class Color:
    """A colour with unbounded intensity in each channel."""

    r: float
    g: float
    b: float

    def add(self, other: Color) -> Color:
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def mul(self, other: Color) -> Color:
        """Component-wise product."""
        return Color(self.r * other.r, self.g * other.g, self.b * other.b)

    def scale(self, f: float) -> Color:
        return Color(self.r * f, self.g * f, self.b * f)

    def __add__(self, other):
        if isinstance(other, Color):
            return self.add(other)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Color):
            return self.mul(other)
        if isinstance(other, numbers.Real):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Real):
            return self.scale(other)
        return NotImplemented

    def __iter__(self):
        yield self.r
        yield self.g
        yield self.b

    def rgba(self) -> tuple[int, int, int, int]:
        """Clamp to [0, 1] and scale to 0-255, truncating.

        Alpha is always 1, not 255. Callers that need an 8-bit alpha supply
        their own.
        """
        return (
            int(_clamp(self.r) * 0xFF),
            int(_clamp(self.g) * 0xFF),
            int(_clamp(self.b) * 0xFF),
            1,
        )

    def in_gamut(self) -> bool:
        """True if every channel already lies in [0, 1]."""
        return all(0.0 <= c <= 1.0 for c in self)

    def to_hex(self) -> str:
        """Nearest 8-bit #rrggbb form of the clamped colour."""
        r, g, b = (round(_clamp(c) * 0xFF) for c in self)
        return f'#{r:02x}{g:02x}{b:02x}'

    @classmethod
    def from_text(cls, data: bytes | str) -> Color:
        return unmarshal_text(data)


BLACK = Color(0.0, 0.0, 0.0)
PINK = Color(1.0, 0.0, 0.5)
YELLOW = Color(0.5, 0.5, 0.0)


def to_display(color: Color) -> tuple[int, int, int, int]:
    """Display-ready (r, g, b, a) for a colour. See Color.rgba."""
    return color.rgba()


def parse_hex_color(s: str) -> Color:
    """Parse a CSS-style hex colour (e.g. #123abc, #fff) into [0, 1] channels."""
    if s.startswith('#'):
        s = s[1:]
    if len(s) == 3:
        s = s[0] * 2 + s[1] * 2 + s[2] * 2
    if len(s) != 6:
        raise ColorParseError(s)

    # int(..., 16) alone would also accept signs, whitespace, underscores and 0x
    if not _HEX6.fullmatch(s):
        raise ColorParseError(s, 'Bad hex digits in color string')
    rgb = int(s, 16)

    return Color(
        (rgb >> 16) / 0xFF,
        ((rgb >> 8) & 0xFF) / 0xFF,
        (rgb & 0xFF) / 0xFF,
    )


def unmarshal_text(data: bytes | str) -> Color:
    """Decode a colour from raw JSON text such as b'"#abc"' or b'abc'.

    One leading and one trailing double quote are stripped independently,
    so '"abc' and 'abc"' are accepted too.
    """
    if len(data) < 2:
        raise TruncatedInputError(data)
    if isinstance(data, bytes):
        try:
            text = data.decode('utf-8')
        except UnicodeDecodeError as err:
            raise ColorParseError(data.decode('utf-8', 'replace')) from err
    else:
        text = data

    if text[0] == '"':
        text = text[1:]
    if text[-1] == '"':
        text = text[:-1]
    return parse_hex_color(text)
