"""Shared fixtures: synthetic RGBA images and helpers to inspect produced GIFs.

Pillow acts as the independent standard GIF reader for round-trip checks.
"""
import io
import struct

import pytest
from PIL import Image

from imgtogif.models.image_model import RawImage

# signature + screen descriptor + 256-color table + GCE + image descriptor
LZW_MIN_OFFSET = 6 + 7 + 256 * 3 + 8 + 10


def _make_raw(width, height, colors):
    """Build a RawImage from a flat list of RGBA (or RGB, alpha=255) tuples."""
    pixels = bytearray()
    for color in colors:
        if len(color) == 3:
            color = (*color, 255)
        pixels.extend(color)
    return RawImage(width=width, height=height, pixels=bytes(pixels))


def _sub_blocks(gif_bytes):
    """Return (lzw_min, [sub-block payloads], offset after the terminator)."""
    lzw_min = gif_bytes[LZW_MIN_OFFSET]
    pos = LZW_MIN_OFFSET + 1
    blocks = []
    while True:
        size = gif_bytes[pos]
        pos += 1
        if size == 0:
            break
        blocks.append(gif_bytes[pos:pos + size])
        pos += size
    return lzw_min, blocks, pos


def _gif_indices(gif_bytes):
    """Decode the GIF with Pillow and return its palette index stream as bytes."""
    with Image.open(io.BytesIO(gif_bytes)) as img:
        assert img.format == "GIF"
        assert img.mode == "P"
        img.load()
        return img.tobytes()


def _screen_size(gif_bytes):
    return struct.unpack_from("<HH", gif_bytes, 6)


@pytest.fixture
def make_raw():
    return _make_raw


@pytest.fixture
def sub_blocks():
    return _sub_blocks


@pytest.fixture
def gif_indices():
    return _gif_indices


@pytest.fixture
def screen_size():
    return _screen_size


@pytest.fixture
def png_bytes():
    """Encode a solid-color RGBA PNG of the given size."""
    def _png(width=4, height=3, color=(200, 100, 50, 255)):
        buf = io.BytesIO()
        Image.new("RGBA", (width, height), color).save(buf, format="PNG")
        return buf.getvalue()
    return _png
