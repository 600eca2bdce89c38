"""Conversion of sixel HLS colour specifications to packed RGB values."""

from __future__ import annotations

import math


def _pack(r: int, g: int, b: int) -> int:
    return (r << 16) + (g << 8) + b


def _clamp_percent(value: int) -> int:
    return max(0, min(100, value))


def hls_to_rgb(hue: int, lum: int, sat: int) -> int:
    """Convert hue (degrees), lightness and saturation (percent) to RGB.

    The result packs red into bits 16-23, green into 8-15 and blue into 0-7.
    Hues follow the sixel convention: blue at 0, red at 120, green at 240.
    """
    hs = math.fmod(hue + 240, 360)
    hv = hs / 360.0
    lv = lum / 100.0
    sv = sat / 100.0

    if sat == 0:
        grey = int(lum * 255 / 100)
        return _pack(grey, grey, grey)

    c = (1.0 - abs(2.0 * lv - 1.0)) * sv
    hpi = int(hv * 6.0)
    x = c if hpi & 1 else 0.0
    m = lv - 0.5 * c

    sectors = {
        0: (c, x, 0.0),
        1: (x, c, 0.0),
        2: (0.0, c, x),
        3: (0.0, x, c),
        4: (x, 0.0, c),
        5: (c, 0.0, x),
    }
    if hpi not in sectors:
        return _pack(255, 255, 255)

    r, g, b = (
        _clamp_percent(int((component + m) * 100.0 + 0.5))
        for component in sectors[hpi]
    )
    return _pack(r * 255 // 100, g * 255 // 100, b * 255 // 100)