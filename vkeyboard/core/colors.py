"""Key colours, the default palette and colour parsing helpers."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence, Union

from vkeyboard.core.errors import KeyboardConfigurationError

# Brightest allowed R/G/B of a key background; leaves room for the hover delta.
MAX_KEY_COMPONENT = 205
HIGHLIGHT_DELTA = 50


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 0-255 components."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for component in (self.r, self.g, self.b, self.a):
            if not 0 <= component <= 255:
                raise KeyboardConfigurationError(f"Colour component out of range: {component}")

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse ``#RRGGBB`` or ``#AARRGGBB``."""
        text = value.strip()
        if not text.startswith("#") or len(text) not in (7, 9):
            raise KeyboardConfigurationError(f"Expected #RRGGBB or #AARRGGBB, got {value!r}")
        try:
            channels = [int(text[i:i + 2], 16) for i in range(1, len(text), 2)]
        except ValueError as e:
            raise KeyboardConfigurationError(f"Invalid hex colour {value!r}") from e
        if len(channels) == 4:
            a, r, g, b = channels
            return cls(r, g, b, a)
        r, g, b = channels
        return cls(r, g, b)

    def lighten(self, delta: int = HIGHLIGHT_DELTA) -> "Color":
        """Raise R, G and B by *delta*, saturating at 255. Alpha is kept."""
        return replace(
            self,
            r=min(255, self.r + delta),
            g=min(255, self.g + delta),
            b=min(255, self.b + delta),
        )

    def to_hex(self) -> str:
        if self.a == 255:
            return f"#{self.r:02X}{self.g:02X}{self.b:02X}"
        return f"#{self.a:02X}{self.r:02X}{self.g:02X}{self.b:02X}"

    def to_css(self) -> str:
        """Qt style sheet form, ``rgba(r, g, b, a)``."""
        return f"rgba({self.r}, {self.g}, {self.b}, {self.a})"


class KeyboardColors:
    """Default palette: translucent dark keys with white text."""

    KEY = Color(60, 60, 60, 180)
    KEY_TEXT = Color(255, 255, 255)
    BACKGROUND = Color(0, 0, 0, 220)


ColorLike = Union[Color, str, Sequence[int]]


def parse_color(value: ColorLike) -> Color:
    """Accept a Color, a hex string or an ``[r, g, b(, a)]`` sequence."""
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        return Color.from_hex(value)
    try:
        channels = [int(v) for v in value]
    except (TypeError, ValueError) as e:
        raise KeyboardConfigurationError(f"Cannot interpret {value!r} as a colour") from e
    if len(channels) not in (3, 4):
        raise KeyboardConfigurationError(f"Expected 3 or 4 colour components, got {len(channels)}")
    return Color(*channels)


def validate_key_color(color: Color) -> Color:
    """Reject key colours too bright to show the hover highlight."""
    if color.r > MAX_KEY_COMPONENT or color.g > MAX_KEY_COMPONENT or color.b > MAX_KEY_COMPONENT:
        raise KeyboardConfigurationError(
            f"RGB components must not exceed ({MAX_KEY_COMPONENT}, {MAX_KEY_COMPONENT}, "
            f"{MAX_KEY_COMPONENT}), got ({color.r}, {color.g}, {color.b})"
        )
    return color
