from __future__ import annotations

from typing import Dict, Tuple

from .sampler import PixelBuffer


ClusterKey = Tuple[int, int, int]

MIN_ALPHA = 128
MIN_LUMA = 30
MAX_LUMA = 240
MIN_SATURATION = 0.2
BUCKET_SIZE = 10


def luma(r: int, g: int, b: int) -> float:
    return 0.299 * r + 0.587 * g + 0.114 * b


def saturation(r: int, g: int, b: int) -> float:
    max_channel = max(r, g, b)
    if max_channel == 0:
        return 0.0
    return (max_channel - min(r, g, b)) / max_channel


def bucket_key(r: int, g: int, b: int) -> ClusterKey:
    return (
        r // BUCKET_SIZE * BUCKET_SIZE,
        g // BUCKET_SIZE * BUCKET_SIZE,
        b // BUCKET_SIZE * BUCKET_SIZE,
    )


def filter_and_quantize(buffer: PixelBuffer) -> Dict[ClusterKey, float]:
    """Bucket usable pixels into 10-step color clusters weighted by saturation.

    Pixels are dropped when they are mostly transparent, too dark or too
    bright by luma, or close to gray. Each survivor adds its own saturation
    to its bucket, so vivid regions outvote large muted ones.
    """

    weights: Dict[ClusterKey, float] = {}
    data = buffer.data
    for offset in range(0, len(data), 4):
        r, g, b, a = data[offset], data[offset + 1], data[offset + 2], data[offset + 3]
        if a < MIN_ALPHA:
            continue
        y = luma(r, g, b)
        if y < MIN_LUMA or y > MAX_LUMA:
            continue
        s = saturation(r, g, b)
        if s < MIN_SATURATION:
            continue
        key = bucket_key(r, g, b)
        weights[key] = weights.get(key, 0.0) + s
    return weights
