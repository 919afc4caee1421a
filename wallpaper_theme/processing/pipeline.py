from __future__ import annotations

from ..infrastructure.network import FETCHER, SourceFetcher
from .palette import DominantColorSet, select_dominant
from .quantize import filter_and_quantize
from .sampler import PixelBuffer, sample


def palette_from_buffer(buffer: PixelBuffer) -> DominantColorSet:
    return select_dominant(filter_and_quantize(buffer))


def extract_palette(
    source: str,
    fetcher: SourceFetcher = FETCHER,
    scale: float | None = None,
) -> DominantColorSet:
    return palette_from_buffer(sample(source, fetcher=fetcher, scale=scale))
