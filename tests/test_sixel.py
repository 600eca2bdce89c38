import pytest

from stkit.hls import hls_to_rgb
from stkit.sixel import (
    HEIGHT_MAX,
    PALETTE_MAX,
    PARAMVALUE_MAX,
    ParseState,
    SixelError,
    SixelImage,
    SixelParser,
    default_palette,
)


def _parser(cell_width=1, cell_height=1, fg=0, bg=0, private=True):
    return SixelParser(fg, bg, private, cell_width, cell_height)


def _pixel(image, x, y):
    return image.data[y * image.width + x]


def _channels(color):
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def test_default_palette_length():
    assert len(default_palette()) == PALETTE_MAX


def test_default_palette_tail_is_white():
    palette = default_palette()
    assert all(color == 0xFFFFFF for color in palette[257:])


def test_default_palette_grey_ramp():
    for color in default_palette()[233:257]:
        r, g, b = _channels(color)
        assert r == g == b


def test_default_palette_color_cube_steps():
    for color in default_palette()[17:233]:
        assert all(part % 51 == 0 for part in _channels(color))


def test_initial_image():
    parser = _parser(fg=7, bg=3)
    image = parser.image
    assert (image.width, image.height) == (1, 1)
    assert image.ncolors == 2
    assert image.palette[0] == 3
    assert image.palette[1] == 7
    assert parser.state is ParseState.DECSIXEL


def test_invalid_cell_size():
    with pytest.raises(ValueError):
        SixelParser(0, 0, True, 0, 1)


def test_single_column_all_bits():
    parser = _parser()
    parser.parse(b"#1~")
    image = parser.image
    assert image.height > 6
    assert [_pixel(image, 0, y) for y in range(6)] == [2] * 6
    assert _pixel(image, 0, 6) == 0
    assert parser.max_x == 0
    assert parser.max_y == 5
    assert parser.pos_x == 1


def test_single_bit():
    parser = _parser()
    parser.parse(b"@")
    image = parser.image
    assert _pixel(image, 0, 0) == 16
    assert all(_pixel(image, 0, y) == 0 for y in range(1, 6))


def test_repeat_introducer():
    parser = _parser()
    parser.parse(b"!5~")
    image = parser.image
    for y in range(6):
        assert [_pixel(image, x, y) for x in range(5)] == [16] * 5
    assert parser.pos_x == 5
    assert parser.max_x == 4
    assert parser.repeat_count == 1


def test_carriage_return_overwrites():
    parser = _parser()
    parser.parse(b"~$#2~")
    assert _pixel(parser.image, 0, 0) == 3
    assert parser.pos_x == 1


def test_next_line():
    parser = _parser()
    parser.parse(b"~-~")
    image = parser.image
    assert parser.pos_y == 6
    assert all(_pixel(image, 0, y) == 16 for y in range(12))
    assert parser.max_y == 11


def test_repeat_count_clamped():
    parser = _parser()
    parser.parse(b"!99999")
    assert parser.param == PARAMVALUE_MAX
    assert parser.state is ParseState.DECGRI


def test_color_index_clamped():
    parser = _parser()
    parser.parse(b"#5000~")
    assert parser.color_index == PALETTE_MAX - 1


def test_hls_color_definition():
    parser = _parser()
    parser.parse(b"#1;1;120;50;100~")
    assert parser.image.palette[2] == hls_to_rgb(120, 50, 100)
    assert parser.image.palette_modified


def test_rgb_components_are_clamped():
    high = _parser()
    high.parse(b"#1;2;200;0;0~")
    exact = _parser()
    exact.parse(b"#1;2;100;0;0~")
    assert high.image.palette[2] == exact.image.palette[2]


def test_ncolors_tracks_highest_index():
    parser = _parser()
    parser.parse(b"#9~#3~")
    assert parser.image.ncolors == 10


def test_raster_attributes_resize_to_grid():
    parser = _parser(cell_width=10, cell_height=20)
    parser.parse(b'"1;1;25;30~')
    image = parser.image
    assert parser.attributed_ph == 25
    assert parser.attributed_pv == 30
    assert image.width % 10 == 0 and 25 <= image.width < 35
    assert image.height % 20 == 0 and 30 <= image.height < 50


def test_escape_stops_parsing():
    parser = _parser()
    parser.parse(b"~\x1b")
    assert parser.state is ParseState.ESC
    with pytest.raises(SixelError):
        parser.parse(b"~")


def test_finalize_crops_and_encodes():
    parser = _parser()
    parser.parse(b"#1;2;100;0;0~")
    pixels = parser.finalize()
    image = parser.image
    assert (image.width, image.height) == (1, 6)
    assert len(pixels) == 4 * image.width * image.height
    expected = bytes(_channels(image.palette[2])) + b"\x00"
    assert pixels[:4] == expected
    assert pixels[-4:] == expected


def test_finalize_rounds_to_cell_grid():
    parser = _parser(cell_width=4, cell_height=8, bg=0)
    parser.parse(b"!3~")
    pixels = parser.finalize()
    image = parser.image
    assert image.width % 4 == 0
    assert image.height % 8 == 0
    assert len(pixels) == 4 * image.width * image.height


def test_finalize_loads_default_palette():
    parser = _parser(fg=5)
    parser.parse(b"#3~")
    parser.finalize()
    palette = default_palette()
    assert parser.image.palette[4] == palette[4]
    assert parser.image.palette[1] == palette[1]


def test_finalize_keeps_modified_palette():
    parser = _parser()
    parser.parse(b"#3;2;100;100;100~")
    before = list(parser.image.palette)
    parser.finalize()
    assert parser.image.palette == before


def test_set_default_color_keeps_background():
    parser = _parser(bg=9)
    parser.set_default_color()
    assert parser.image.palette[0] == 9
    assert parser.image.palette[1:] == default_palette()[1:]


def test_resize_preserves_and_crops():
    parser = _parser()
    parser.parse(b"!2~")
    image = parser.image
    image.resize(image.width + 3, image.height + 2)
    assert _pixel(image, 1, 5) == 16
    assert _pixel(image, image.width - 1, 0) == 0
    assert _pixel(image, 0, image.height - 1) == 0
    image.resize(1, 2)
    assert list(image.data) == [16, 16]


def test_resize_rejects_negative():
    image = SixelImage(width=1, height=1, data=default_palette and __import_array())
    with pytest.raises(ValueError):
        image.resize(-1, 1)


def __import_array():
    from array import array

    return array("H", [0])


def test_next_line_saturates():
    parser = _parser()
    parser.pos_y = HEIGHT_MAX - 5
    parser.parse(b"-")
    assert parser.pos_y == HEIGHT_MAX + 1
    assert parser.pos_x == 0