"""Palette extraction and tonal ramp components for the theme engine."""

from .color import Color, InvalidColorError
from .palette import FALLBACK_PALETTE, DominantColorSet, compose, select_dominant
from .pipeline import extract_palette, palette_from_buffer
from .quantize import filter_and_quantize, luma, saturation
from .sampler import PixelBuffer, resample, sample
from .shades import ToneShadeSet, darken, derive_shades, lighten

__all__ = [
    "Color",
    "InvalidColorError",
    "FALLBACK_PALETTE",
    "DominantColorSet",
    "compose",
    "select_dominant",
    "extract_palette",
    "palette_from_buffer",
    "filter_and_quantize",
    "luma",
    "saturation",
    "PixelBuffer",
    "resample",
    "sample",
    "ToneShadeSet",
    "darken",
    "derive_shades",
    "lighten",
]
