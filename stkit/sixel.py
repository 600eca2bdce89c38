"""Decoder for DEC sixel graphics data into an indexed image and pixels."""

from __future__ import annotations

from array import array
from dataclasses import dataclass, field
from enum import IntEnum

from .hls import hls_to_rgb

PARAMS_MAX = 16
PALETTE_MAX = 1024
PARAMVALUE_MAX = 65535
WIDTH_MAX = 4096
HEIGHT_MAX = 4096

_ESC = 0x1B


def _rgb(r: int, g: int, b: int) -> int:
    return r + (g << 8) + (b << 16)


def _palval(n: int, a: int, m: int) -> int:
    return (n * a + m // 2) // m


def _xrgb(r: int, g: int, b: int) -> int:
    return _rgb(_palval(r, 255, 100), _palval(g, 255, 100), _palval(b, 255, 100))


_VT340_COLORS = tuple(
    _xrgb(r, g, b)
    for r, g, b in (
        (0, 0, 0),
        (20, 20, 80),
        (80, 13, 13),
        (20, 80, 20),
        (80, 20, 80),
        (20, 80, 80),
        (80, 80, 20),
        (53, 53, 53),
        (26, 26, 26),
        (33, 33, 60),
        (60, 26, 26),
        (33, 60, 33),
        (60, 33, 60),
        (33, 60, 60),
        (60, 60, 33),
        (80, 80, 80),
    )
)


class SixelError(Exception):
    """Raised when sixel data cannot be decoded."""


class ParseState(IntEnum):
    ESC = 1
    DECSIXEL = 2
    DECGRA = 3
    DECGRI = 4
    DECGCI = 5


def default_palette() -> list[int]:
    """Return the full default palette; entry 0 is a black placeholder."""
    palette = [0, *_VT340_COLORS]
    palette += [
        _rgb(r * 51, g * 51, b * 51)
        for r in range(6)
        for g in range(6)
        for b in range(6)
    ]
    palette += [_rgb(i * 11, i * 11, i * 11) for i in range(24)]
    palette += [_rgb(255, 255, 255)] * (PALETTE_MAX - len(palette))
    return palette


def _blank(width: int, height: int) -> array:
    return array("H", [0]) * (width * height)


def _round_up(value: int, step: int) -> int:
    return (value + step - 1) // step * step


@dataclass
class SixelImage:
    """An image of palette indices, stored row by row."""

    width: int
    height: int
    data: array = field(repr=False)
    palette: list[int] = field(default_factory=lambda: [0] * PALETTE_MAX, repr=False)
    ncolors: int = 2
    palette_modified: bool = False
    use_private_register: bool = False

    def resize(self, width: int, height: int) -> None:
        """Resize, keeping the overlapping area and filling the rest with 0."""
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        data = _blank(width, height)
        copy = min(width, self.width)
        for row in range(min(height, self.height)):
            src = row * self.width
            dst = row * width
            data[dst:dst + copy] = self.data[src:src + copy]
        self.data = data
        self.width = width
        self.height = height


class SixelParser:
    """Incremental sixel parser; feed data with parse() and call finalize()."""

    def __init__(self, fgcolor, bgcolor, use_private_register, cell_width, cell_height):
        if cell_width < 1 or cell_height < 1:
            raise ValueError("cell dimensions must be positive")
        self.state = ParseState.DECSIXEL
        self.pos_x = 0
        self.pos_y = 0
        self.max_x = 0
        self.max_y = 0
        self.attributed_pan = 2
        self.attributed_pad = 1
        self.attributed_ph = 0
        self.attributed_pv = 0
        self.repeat_count = 1
        self.color_index = 16
        self.grid_width = cell_width
        self.grid_height = cell_height
        self.param = 0
        self.params: list[int] = []
        self.image = SixelImage(
            width=1,
            height=1,
            data=_blank(1, 1),
            use_private_register=bool(use_private_register),
        )
        self.image.palette[0] = bgcolor
        if use_private_register:
            self.image.palette[1] = fgcolor

    def parse(self, data) -> None:
        """Consume a chunk of sixel data; raises SixelError past an escape."""
        handlers = {
            ParseState.DECSIXEL: self._body,
            ParseState.DECGRA: self._raster,
            ParseState.DECGRI: self._repeat,
            ParseState.DECGCI: self._color,
        }
        chunk = bytes(data)
        pos = 0
        while pos < len(chunk):
            if self.state is ParseState.ESC:
                raise SixelError("sixel data continues after an escape")
            ch = chunk[pos]
            if ch == _ESC:
                self.state = ParseState.ESC
                pos += 1
            elif handlers[self.state](ch):
                pos += 1

    def set_default_color(self) -> None:
        """Load the default palette into every register but the background."""
        self.image.palette[1:] = default_palette()[1:]

    def finalize(self) -> bytes:
        """Crop to the drawn area and return four bytes per pixel.

        Each pixel holds bits 16-23, 8-15 and 0-7 of its palette colour,
        followed by a zero byte.
        """
        image = self.image
        self.max_x += 1
        if self.max_x < self.attributed_ph:
            self.max_x = self.attributed_ph
        self.max_y += 1
        if self.max_y < self.attributed_pv:
            self.max_y = self.attributed_pv

        sx = _round_up(self.max_x, self.grid_width)
        sy = _round_up(self.max_y, self.grid_height)
        if image.width > sx or image.height > sy:
            image.resize(sx, sy)

        if image.use_private_register and image.ncolors > 2 and not image.palette_modified:
            self.set_default_color()

        pixels = bytearray(4 * image.width * image.height)
        for i, index in enumerate(image.data):
            color = image.palette[index]
            pixels[4 * i:4 * i + 3] = bytes(
                ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)
            )
        return bytes(pixels)

    def _begin(self, state: ParseState) -> None:
        self.param = 0
        self.params = []
        self.state = state

    def _digit(self, ch: int) -> None:
        self.param = min(self.param * 10 + ch - 0x30, PARAMVALUE_MAX)

    def _push_param(self) -> None:
        if len(self.params) < PARAMS_MAX:
            self.params.append(self.param)

    def _body(self, ch: int) -> bool:
        if ch == ord('"'):
            self._begin(ParseState.DECGRA)
        elif ch == ord("!"):
            self._begin(ParseState.DECGRI)
        elif ch == ord("#"):
            self._begin(ParseState.DECGCI)
        elif ch == ord("$"):
            self.pos_x = 0
        elif ch == ord("-"):
            self.pos_x = 0
            if self.pos_y < HEIGHT_MAX - 5 - 6:
                self.pos_y += 6
            else:
                self.pos_y = HEIGHT_MAX + 1
        elif ord("?") <= ch <= ord("~"):
            self._draw(ch - ord("?"))
        return True

    def _draw(self, bits: int) -> None:
        image = self.image
        if (
            image.width < self.pos_x + self.repeat_count
            or image.height < self.pos_y + 6
        ) and image.width < WIDTH_MAX and image.height < HEIGHT_MAX:
            sx = image.width * 2
            sy = image.height * 2
            while sx < self.pos_x + self.repeat_count or sy < self.pos_y + 6:
                sx *= 2
                sy *= 2
            image.resize(min(sx, WIDTH_MAX), min(sy, HEIGHT_MAX))

        if self.color_index > image.ncolors:
            image.ncolors = self.color_index

        if self.pos_x + self.repeat_count > image.width:
            self.repeat_count = image.width - self.pos_x

        repeat = self.repeat_count
        if repeat > 0 and self.pos_y - 5 < image.height and bits:
            run = array("H", [self.color_index]) * repeat
            for i in range(6):
                if not bits >> i & 1:
                    continue
                row = self.pos_y + i
                if row >= image.height:
                    break
                start = row * image.width + self.pos_x
                image.data[start:start + repeat] = run
                self.max_x = max(self.max_x, self.pos_x + repeat - 1)
                self.max_y = max(self.max_y, row)

        if repeat > 0:
            self.pos_x += repeat
        self.repeat_count = 1

    def _raster(self, ch: int) -> bool:
        if 0x30 <= ch <= 0x39:
            self._digit(ch)
            return True
        if ch == ord(";"):
            self._push_param()
            self.param = 0
            return True

        self._push_param()
        params = self.params
        if len(params) > 0:
            self.attributed_pad = params[0]
        if len(params) > 1:
            self.attributed_pan = params[1]
        if len(params) > 2 and params[2] > 0:
            self.attributed_ph = params[2]
        if len(params) > 3 and params[3] > 0:
            self.attributed_pv = params[3]
        if self.attributed_pan <= 0:
            self.attributed_pan = 1
        if self.attributed_pad <= 0:
            self.attributed_pad = 1

        image = self.image
        if image.width < self.attributed_ph or image.height < self.attributed_pv:
            sx = _round_up(max(self.attributed_ph, image.width), self.grid_width)
            sy = _round_up(max(self.attributed_pv, image.height), self.grid_height)
            image.resize(min(sx, WIDTH_MAX), min(sy, HEIGHT_MAX))

        self._begin(ParseState.DECSIXEL)
        return False

    def _repeat(self, ch: int) -> bool:
        if 0x30 <= ch <= 0x39:
            self._digit(ch)
            return True
        self.repeat_count = self.param or 1
        self._begin(ParseState.DECSIXEL)
        return False

    def _color(self, ch: int) -> bool:
        if 0x30 <= ch <= 0x39:
            self._digit(ch)
            return True
        if ch == ord(";"):
            self._push_param()
            self.param = 0
            return True

        self.state = ParseState.DECSIXEL
        self._push_param()
        self.param = 0
        params = self.params

        if params:
            self.color_index = max(0, min(1 + params[0], PALETTE_MAX - 1))

        if len(params) > 4:
            image = self.image
            image.palette_modified = True
            if params[1] == 1:
                image.palette[self.color_index] = hls_to_rgb(
                    min(params[2], 360), min(params[3], 100), min(params[4], 100)
                )
            elif params[1] == 2:
                image.palette[self.color_index] = _xrgb(
                    min(params[2], 100), min(params[3], 100), min(params[4], 100)
                )
        return False