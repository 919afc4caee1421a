import base64
import io
from typing import Sequence, Tuple

import pytest
import requests
from PIL import Image

from wallpaper_theme.processing.sampler import PixelBuffer


RGBA = Tuple[int, int, int, int]


def solid_buffer(rgba: RGBA, width: int = 10, height: int = 10) -> PixelBuffer:
    return PixelBuffer(width, height, bytes(rgba) * (width * height))


def band_buffer(colors: Sequence[RGBA], band_width: int = 10, height: int = 10) -> PixelBuffer:
    row = b"".join(bytes(rgba) * band_width for rgba in colors)
    return PixelBuffer(band_width * len(colors), height, row * height)


def band_image(colors: Sequence[Tuple[int, int, int]], band_width: int = 100, height: int = 100) -> Image.Image:
    img = Image.new("RGB", (band_width * len(colors), height))
    for index, rgb in enumerate(colors):
        img.paste(rgb, (index * band_width, 0, (index + 1) * band_width, height))
    return img


def png_bytes(img: Image.Image) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, "PNG")
    return buffer.getvalue()


def data_uri(img: Image.Image) -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes(img)).decode("ascii")


class FakeResponse:
    def __init__(self, content: bytes = b"", status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Stands in for ``requests.Session`` and serves canned responses by URL."""

    def __init__(self, responses=None) -> None:
        self.headers = {}
        self.responses = dict(responses or {})
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        outcome = self.responses.get(url, FakeResponse(status_code=404))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def rgb_bands_uri() -> str:
    return data_uri(band_image([(255, 0, 0), (0, 255, 0), (45, 45, 255)]))
