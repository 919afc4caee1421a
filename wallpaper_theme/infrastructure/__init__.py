"""Infrastructure helpers for image loading, shared token state and responses."""

from .network import FETCHER, ImageLoadError, SourceFetcher, UnsupportedSourceError
from .registry import REGISTRY, StyleRegistry
from .responses import render_css, render_swatches, send_png

__all__ = [
    "FETCHER",
    "ImageLoadError",
    "SourceFetcher",
    "UnsupportedSourceError",
    "REGISTRY",
    "StyleRegistry",
    "render_css",
    "render_swatches",
    "send_png",
]
