from __future__ import annotations

import io
from typing import Mapping

from flask import send_file
from PIL import Image, ImageDraw

SWATCH_SIZE = 48


def render_swatches(tokens: Mapping[str, str], size: int = SWATCH_SIZE) -> Image.Image:
    """One square per token, left to right in table order."""
    strip = Image.new("RGB", (size * max(1, len(tokens)), size), (0, 0, 0))
    draw = ImageDraw.Draw(strip)
    for index, value in enumerate(tokens.values()):
        left = index * size
        draw.rectangle((left, 0, left + size - 1, size - 1), fill=value)
    return strip


def send_png(img: Image.Image):
    buffer = io.BytesIO()
    img.save(buffer, "PNG", optimize=True)
    buffer.seek(0)
    return send_file(buffer, mimetype="image/png")


def render_css(tokens: Mapping[str, str]) -> str:
    lines = [f"  --{name}: {value};" for name, value in tokens.items()]
    return ":root {\n" + "\n".join(lines) + "\n}\n"
