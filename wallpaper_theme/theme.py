from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Union

from .config import SETTINGS
from .infrastructure.network import FETCHER, ImageLoadError, SourceFetcher
from .infrastructure.registry import REGISTRY, StyleRegistry
from .processing.color import ColorLike
from .processing.palette import DominantColorSet
from .processing.pipeline import extract_palette
from .processing.shades import ToneShadeSet, derive_shades, lighten


LOGGER = logging.getLogger(__name__)

Themeable = Union[DominantColorSet, ToneShadeSet]


@dataclass(frozen=True)
class ExtractionResult:
    palette: DominantColorSet
    applied: bool
    generation: int


def shade_tokens(shades: ToneShadeSet) -> Dict[str, str]:
    return {
        "bg-color": shades.background.hex,
        "accent-light-tint": shades.light_tint.hex,
        "darker-color": shades.darker.hex,
        "dark-color": shades.base.hex,
        "text-color-dark": shades.dark_text.hex,
        "whitish-color": shades.white.hex,
    }


def build_tokens(theme: Themeable) -> Dict[str, str]:
    """Expand a palette or a shade ramp into the full token table."""
    if isinstance(theme, DominantColorSet):
        tokens = {
            "primary": theme.primary.hex,
            "secondary": theme.secondary.hex,
            "accent": theme.accent.hex,
            "bg-gradient-start": theme.bg_gradient_start.hex,
            "bg-gradient-end": theme.bg_gradient_end.hex,
        }
        tokens.update(shade_tokens(derive_shades(theme.primary)))
        return tokens

    if isinstance(theme, ToneShadeSet):
        tokens = {
            "primary": theme.base.hex,
            "secondary": theme.darker.hex,
            "accent": lighten(theme.base, 0.2).hex,
            "bg-gradient-start": theme.dark_text.hex,
            "bg-gradient-end": theme.darker.hex,
        }
        tokens.update(shade_tokens(theme))
        return tokens

    raise TypeError(f"Cannot build style tokens from {type(theme).__name__}")


class ThemeApplier:
    """The only writer of the shared style registry."""

    def __init__(
        self,
        registry: StyleRegistry = REGISTRY,
        fetcher: SourceFetcher = FETCHER,
        discard_stale: Optional[bool] = None,
        scale: Optional[float] = None,
    ) -> None:
        self.registry = registry
        self.fetcher = fetcher
        self.discard_stale = SETTINGS.discard_stale if discard_stale is None else discard_stale
        self.scale = scale

    def apply(self, theme: Themeable, generation: Optional[int] = None) -> bool:
        tokens = build_tokens(theme)
        applied = self.registry.replace(tokens, generation=generation, discard_stale=self.discard_stale)
        if applied:
            LOGGER.info("Applied theme generation %s: %s", self.registry.generation, tokens)
        else:
            LOGGER.info(
                "Discarded stale theme generation %s (latest %s)",
                generation,
                self.registry.latest_generation,
            )
        return applied

    def apply_base_color(self, base: ColorLike) -> ToneShadeSet:
        shades = derive_shades(base)
        self.apply(shades, generation=self.registry.next_generation())
        return shades

    def extract(self, source: str) -> DominantColorSet:
        return extract_palette(source, fetcher=self.fetcher, scale=self.scale)

    def extract_and_apply(self, source: str) -> ExtractionResult:
        """Extract a palette from ``source`` and apply it.

        On ``ImageLoadError`` the registry is left untouched, the claimed
        generation is abandoned and the error is re-raised to the caller.
        ``applied`` is false when a newer request superseded this one.
        """

        generation = self.registry.next_generation()
        try:
            palette = self.extract(source)
        except ImageLoadError as exc:
            LOGGER.warning("Color extraction failed for generation %s: %s", generation, exc)
            self.registry.abandon(generation)
            raise
        applied = self.apply(palette, generation=generation)
        return ExtractionResult(palette, applied, generation)

    def reset(self) -> None:
        self.registry.reset(generation=self.registry.next_generation())
        LOGGER.info("Reset style tokens to defaults")
