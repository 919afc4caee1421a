from __future__ import annotations

import math
import re
from typing import NamedTuple, Union

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


class InvalidColorError(ValueError):
    """Raised for malformed hex strings and out-of-range channels."""


def clamp_channel(value: float) -> int:
    # Round half up, then pin into the 8-bit range.
    return min(255, max(0, int(math.floor(value + 0.5))))


class _RGB(NamedTuple):
    r: int
    g: int
    b: int


class Color(_RGB):
    """An 8-bit sRGB triple; every channel is an int in [0, 255]."""

    __slots__ = ()

    def __new__(cls, r: int, g: int, b: int) -> "Color":
        for name, channel in (("r", r), ("g", g), ("b", b)):
            if isinstance(channel, bool) or not isinstance(channel, int):
                raise InvalidColorError(f"Channel {name} must be an int, got {type(channel).__name__}")
            if not 0 <= channel <= 255:
                raise InvalidColorError(f"Channel {name} out of range [0, 255]: {channel}")
        return super().__new__(cls, r, g, b)

    @classmethod
    def clamped(cls, r: float, g: float, b: float) -> "Color":
        return cls(clamp_channel(r), clamp_channel(g), clamp_channel(b))

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        if not isinstance(value, str):
            raise InvalidColorError(f"Expected hex color string, got {type(value).__name__}")
        match = _HEX_RE.match(value.strip())
        if match is None:
            raise InvalidColorError(f"Invalid hex color: {value!r}")
        return cls(*(int(part, 16) for part in match.groups()))

    @property
    def hex(self) -> str:
        return "#{:02X}{:02X}{:02X}".format(self.r, self.g, self.b)

    def scaled(self, factor: float) -> "Color":
        return Color.clamped(self.r * factor, self.g * factor, self.b * factor)

    def is_near_white(self, threshold: int = 240) -> bool:
        return self.r > threshold and self.g > threshold and self.b > threshold


ColorLike = Union[Color, str]


def to_color(value: ColorLike) -> Color:
    if isinstance(value, Color):
        return value
    return Color.from_hex(value)
