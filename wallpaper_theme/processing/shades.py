from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .color import Color, ColorLike, to_color


NEUTRAL_GRAY = Color(0x69, 0x69, 0x69)
WHITE = Color(255, 255, 255)


def lighten(color: Color, factor: float) -> Color:
    """Move each channel ``factor`` of the way towards white."""
    return Color.clamped(
        color.r + (255 - color.r) * factor,
        color.g + (255 - color.g) * factor,
        color.b + (255 - color.b) * factor,
    )


def darken(color: Color, factor: float) -> Color:
    """Move each channel ``factor`` of the way towards black."""
    return color.scaled(1 - factor)


@dataclass(frozen=True)
class ToneShadeSet:
    background: Color
    light_tint: Color
    darker: Color
    base: Color
    dark_text: Color
    white: Color = WHITE

    def to_hex(self) -> Dict[str, str]:
        return {
            "background": self.background.hex,
            "light_tint": self.light_tint.hex,
            "darker": self.darker.hex,
            "base": self.base.hex,
            "dark_text": self.dark_text.hex,
            "white": self.white.hex,
        }


def derive_shades(base: ColorLike) -> ToneShadeSet:
    """Build the six-step tonal ramp for ``base``.

    Near-white inputs are swapped for a neutral gray first so the ramp never
    collapses into invisible white-on-white tones. Raises
    ``InvalidColorError`` for malformed hex strings.
    """

    color = to_color(base)
    if color.is_near_white():
        color = NEUTRAL_GRAY

    return ToneShadeSet(
        background=lighten(color, 0.7),
        light_tint=lighten(color, 0.9),
        darker=darken(color, 0.3),
        base=color,
        dark_text=darken(color, 0.8),
    )
