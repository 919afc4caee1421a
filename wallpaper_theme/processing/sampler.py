from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

from ..config import SETTINGS
from ..infrastructure.network import FETCHER, SourceFetcher


@dataclass(frozen=True)
class PixelBuffer:
    """Downsampled RGBA samples, row-major, four bytes per pixel."""

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"PixelBuffer dimensions must be positive, got {self.width}x{self.height}")
        expected = self.width * self.height * 4
        if len(self.data) != expected:
            raise ValueError(f"PixelBuffer expects {expected} bytes, got {len(self.data)}")

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelBuffer":
        rgba = img if img.mode == "RGBA" else img.convert("RGBA")
        return cls(rgba.width, rgba.height, rgba.tobytes())


def downscaled_size(width: int, height: int, scale: float) -> tuple[int, int]:
    return max(1, int(width * scale)), max(1, int(height * scale))


def resample(img: Image.Image, scale: float) -> PixelBuffer:
    rgba = img.convert("RGBA")
    size = downscaled_size(rgba.width, rgba.height, scale)
    if size != rgba.size:
        rgba = rgba.resize(size, Image.Resampling.BOX)
    return PixelBuffer.from_image(rgba)


def sample(
    source: str,
    fetcher: SourceFetcher = FETCHER,
    scale: float | None = None,
) -> PixelBuffer:
    """Decode ``source`` and return it resampled to ``scale`` in each dimension.

    Raises ``ImageLoadError`` when the source cannot be fetched or decoded.
    """

    img = fetcher.fetch_source(source)
    return resample(img, SETTINGS.sample_scale if scale is None else scale)
