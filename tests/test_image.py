import pytest

from cubraycast.image import Image, convert_color

IM1_SX = 42
IM1_SY = 42
IM3_SX = 242
IM3_SY = 242


def _gradient(x, y, w, h, kind):
    if kind == 2:
        return (y * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)
    return (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)


@pytest.mark.parametrize(
    "width,height,kind",
    [(IM1_SX, IM1_SY, 1), (IM3_SX, IM3_SY, 1), (IM3_SX, IM3_SY, 2)],
)
def test_gradient_fill_round_trips(width, height, kind):
    image = Image(width, height)
    for y in range(height):
        for x in range(width):
            image.put_pixel(x, y, convert_color(_gradient(x, y, width, height, kind), 24, [0] * 6))
    for y in range(height):
        for x in range(width):
            assert image.get_pixel(x, y) == _gradient(x, y, width, height, kind)


def test_image_layout_attributes():
    image = Image(IM1_SX, IM1_SY)
    assert image.bits_per_pixel == 32
    assert image.endian == 0
    assert image.size_line == IM1_SX * 4
    assert len(image.to_bytes()) == IM1_SX * IM1_SY * 4


def test_new_image_is_black():
    image = Image(IM1_SX, IM1_SY)
    assert set(image.to_bytes()) == {0}


def test_to_bytes_is_little_endian():
    image = Image(2, 1)
    image.put_pixel(0, 0, 0x11223344)
    assert image.to_bytes()[:4] == bytes([0x44, 0x33, 0x22, 0x11])
    assert image.to_bytes()[4:] == bytes(4)


def test_to_bytes_row_order():
    image = Image(2, 2)
    image.put_pixel(1, 1, 0xFF99FF)
    data = image.to_bytes()
    assert data[12:16] == (0xFF99FF).to_bytes(4, "little")
    assert data[:12] == bytes(12)


def test_fill_sets_every_pixel():
    image = Image(3, 4)
    image.fill(0x00FFFF)
    assert all(image.get_pixel(x, y) == 0x00FFFF for y in range(4) for x in range(3))


def test_color_truncated_to_32_bits():
    image = Image(1, 1)
    image.put_pixel(0, 0, -1)
    assert image.get_pixel(0, 0) == 0xFFFFFFFF


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (IM1_SX, 0), (0, IM1_SY)])
def test_out_of_bounds_raises(x, y):
    image = Image(IM1_SX, IM1_SY)
    with pytest.raises(IndexError):
        image.put_pixel(x, y, 0)
    with pytest.raises(IndexError):
        image.get_pixel(x, y)


@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-3, 3)])
def test_invalid_size_raises(width, height):
    with pytest.raises(ValueError):
        Image(width, height)


@pytest.mark.parametrize("color", [0xFF99FF, 0x00FFFF, 0x11223344])
def test_convert_color_deep_display_is_identity(color):
    assert convert_color(color, 24, [16, 8, 8, 8, 0, 8]) == color
    assert convert_color(color, 32, [16, 8, 8, 8, 0, 8]) == color


def test_convert_color_rgb565():
    shifts = [11, 5, 5, 6, 0, 5]
    assert convert_color(0xFFFFFF, 16, shifts) == 0xFFFF
    assert convert_color(0x000000, 16, shifts) == 0
    assert convert_color(0xFF0000, 16, shifts) == 0xF800


def test_convert_color_rejects_bad_shifts():
    with pytest.raises(ValueError):
        convert_color(0xFFFFFF, 16, [0, 8])