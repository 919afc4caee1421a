from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Tuple

from ..config import FALLBACK_PALETTE_HEX
from .color import Color
from .quantize import ClusterKey


LOGGER = logging.getLogger(__name__)

TOP_CLUSTERS = 10
MIN_CLUSTERS = 3
GRADIENT_START_FACTOR = 0.3
GRADIENT_END_FACTOR = 0.4


@dataclass(frozen=True)
class DominantColorSet:
    primary: Color
    secondary: Color
    accent: Color
    bg_gradient_start: Color
    bg_gradient_end: Color
    is_fallback: bool = False
    ranked: Tuple[Color, ...] = ()

    def to_hex(self) -> Dict[str, str]:
        return {
            "primary": self.primary.hex,
            "secondary": self.secondary.hex,
            "accent": self.accent.hex,
            "bg_gradient_start": self.bg_gradient_start.hex,
            "bg_gradient_end": self.bg_gradient_end.hex,
        }


FALLBACK_PALETTE = DominantColorSet(
    *(Color.from_hex(value) for value in FALLBACK_PALETTE_HEX),
    is_fallback=True,
)


def compose(primary: Color, secondary: Color) -> Tuple[Color, Color]:
    """Darkened gradient stops that keep light text legible on top."""
    return primary.scaled(GRADIENT_START_FACTOR), secondary.scaled(GRADIENT_END_FACTOR)


def rank_clusters(weights: Mapping[ClusterKey, float], limit: int = TOP_CLUSTERS) -> Tuple[Color, ...]:
    # Heaviest first; equal weights fall back to the lowest (r, g, b) key.
    ordered = sorted(weights.items(), key=lambda item: (-item[1], item[0]))
    return tuple(Color(*key) for key, _ in ordered[:limit])


def select_dominant(weights: Mapping[ClusterKey, float]) -> DominantColorSet:
    ranked = rank_clusters(weights)
    if len(ranked) < MIN_CLUSTERS:
        LOGGER.info("Only %d usable color clusters; using fallback palette", len(ranked))
        return FALLBACK_PALETTE

    primary, secondary, accent = ranked[:MIN_CLUSTERS]
    start, end = compose(primary, secondary)
    return DominantColorSet(
        primary=primary,
        secondary=secondary,
        accent=accent,
        bg_gradient_start=start,
        bg_gradient_end=end,
        ranked=ranked,
    )
