import random

import pytest

from imgtogif.codec.gif_writer import GifWriter, block_join, color_table_size_code, min_code_size_for
from imgtogif.errors import EncodingError
from imgtogif.models.image_model import IndexedImage, Palette

RED_PALETTE = Palette(((240, 0, 0),) + ((0, 0, 0),) * 255)


def _rainbow_palette():
    return Palette(tuple(((i * 7) % 256, (i * 13 + 5) % 256, (255 - i) % 256) for i in range(256)))


def test_single_pixel_layout():
    data = GifWriter().write(IndexedImage(1, 1, b"\x00"), RED_PALETTE)

    expected = (
        b"GIF89a"
        + b"\x01\x00\x01\x00\xf7\x00\x00"
        + bytes([240, 0, 0]) + bytes(255 * 3)
        + b"\x21\xf9\x04\x00\x00\x00\x00\x00"
        + b"\x2c\x00\x00\x00\x00\x01\x00\x01\x00\x00"
        + b"\x08"
        + b"\x04\x00\x01\x04\x04"
        + b"\x00"
        + b"\x3b"
    )
    assert data == expected


def test_dimensions_are_little_endian(screen_size):
    image = IndexedImage(300, 2, bytes(600))
    data = GifWriter().write(image, RED_PALETTE)
    assert screen_size(data) == (300, 2)
    descriptor_offset = 6 + 7 + 768 + 8
    assert data[descriptor_offset:descriptor_offset + 10] == b"\x2c\x00\x00\x00\x00\x2c\x01\x02\x00\x00"


def test_transparency_flag_and_delay():
    data = GifWriter(transparent_index=3, delay=10).write(IndexedImage(1, 1, b"\x00"), RED_PALETTE)
    gce_offset = 6 + 7 + 768
    assert data[gce_offset:gce_offset + 8] == b"\x21\xf9\x04\x01\x0a\x00\x03\x00"


def test_sub_blocks_are_framed(sub_blocks):
    rng = random.Random(42)
    image = IndexedImage(64, 64, bytes(rng.randrange(256) for _ in range(64 * 64)))
    data = GifWriter().write(image, _rainbow_palette())

    lzw_min, blocks, end = sub_blocks(data)
    assert lzw_min == 8
    assert len(blocks) > 1
    assert all(1 <= len(block) <= 255 for block in blocks)
    assert all(len(block) == 255 for block in blocks[:-1])
    assert data[end:] == b"\x3b"


def test_round_trip_through_standard_reader(gif_indices):
    rng = random.Random(99)
    # enough pixels to fill the LZW table and force clear codes
    indices = bytes(rng.randrange(256) for _ in range(160 * 120))
    palette = _rainbow_palette()
    data = GifWriter().write(IndexedImage(160, 120, indices), palette)
    assert gif_indices(data) == indices


def test_round_trip_low_entropy_image(gif_indices):
    indices = bytes((x // 7 + y // 5) % 4 for y in range(90) for x in range(70))
    data = GifWriter().write(IndexedImage(70, 90, indices), _rainbow_palette())
    assert gif_indices(data) == indices


@pytest.mark.parametrize("image", [
    IndexedImage(0, 1, b""),
    IndexedImage(1, 0, b""),
    IndexedImage(2, 2, b"\x00\x00\x00"),
    IndexedImage(70000, 1, bytes(70000)),
])
def test_rejects_invalid_image(image):
    with pytest.raises(EncodingError):
        GifWriter().write(image, RED_PALETTE)


def test_rejects_short_palette():
    with pytest.raises(EncodingError):
        GifWriter().write(IndexedImage(1, 1, b"\x00"), Palette(((0, 0, 0),) * 16))


@pytest.mark.parametrize("index", [-1, 256])
def test_rejects_bad_transparent_index(index):
    with pytest.raises(EncodingError):
        GifWriter(transparent_index=index)


def test_block_join_splits_at_255():
    joined = block_join(bytes(600))
    assert joined[0] == 255
    assert joined[256] == 255
    assert joined[512] == 90
    assert joined[-1] == 0
    assert len(joined) == 600 + 4


def test_block_join_empty():
    assert block_join(b"") == b"\x00"


@pytest.mark.parametrize("size,min_code,size_code", [(2, 2, 0), (4, 2, 1), (16, 4, 3), (256, 8, 7)])
def test_code_sizes(size, min_code, size_code):
    assert min_code_size_for(size) == min_code
    assert color_table_size_code(size) == size_code
