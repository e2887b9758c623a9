import warnings

import pytest

from imgtogif.errors import QuantizationOverflow
from imgtogif.services.quantize_service import ColorQuantizer

BLACK = (0, 0, 0)


def _distinct_colors(count):
    """`count` colors that never collide after 16-level quantization."""
    return [((i >> 8) * 16, ((i >> 4) & 15) * 16, (i & 15) * 16) for i in range(count)]


def test_single_red_pixel(make_raw):
    palette, indexed = ColorQuantizer().quantize(make_raw(1, 1, [(255, 0, 0, 255)]))
    assert palette[0] == (240, 0, 0)
    assert list(palette.colors[1:]) == [BLACK] * 255
    assert indexed.indices == b"\x00"
    assert (indexed.width, indexed.height) == (1, 1)


def test_first_seen_order(make_raw):
    colors = [(16, 32, 48), (255, 255, 255), (0, 128, 0), (64, 0, 200)]
    palette, indexed = ColorQuantizer().quantize(make_raw(2, 2, colors))
    assert list(palette.colors[:4]) == [(16, 32, 48), (240, 240, 240), (0, 128, 0), (64, 0, 192)]
    assert list(palette.colors[4:]) == [BLACK] * 252
    assert indexed.indices == bytes([0, 1, 2, 3])


def test_colors_in_same_bucket_share_an_index(make_raw):
    colors = [(17, 17, 17), (31, 20, 30), (32, 17, 17), (17, 17, 17)]
    palette, indexed = ColorQuantizer().quantize(make_raw(4, 1, colors))
    assert indexed.indices == bytes([0, 0, 1, 0])
    assert palette[0] == (16, 16, 16)
    assert palette[1] == (32, 16, 16)


def test_alpha_is_ignored(make_raw):
    colors = [(100, 100, 100, 0), (100, 100, 100, 255)]
    palette, indexed = ColorQuantizer().quantize(make_raw(2, 1, colors))
    assert indexed.indices == b"\x00\x00"
    assert palette[0] == (96, 96, 96)


def test_palette_is_always_256_entries(make_raw):
    palette, _ = ColorQuantizer().quantize(make_raw(1, 1, [BLACK]))
    assert len(palette) == 256
    assert palette.to_bytes() == bytes(768)


def test_overflow_maps_extra_colors_to_index_zero(make_raw):
    colors = _distinct_colors(300)
    with pytest.warns(QuantizationOverflow) as record:
        palette, indexed = ColorQuantizer().quantize(make_raw(300, 1, colors))

    assert record[0].message.dropped == 44
    assert len(palette) == 256
    assert list(palette.colors) == colors[:256]
    assert indexed.indices[:256] == bytes(range(256))
    assert indexed.indices[256:] == bytes(44)


def test_no_warning_at_exactly_256_colors(make_raw):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        palette, indexed = ColorQuantizer().quantize(make_raw(16, 16, _distinct_colors(256)))
    assert indexed.indices == bytes(range(256))
    assert len(palette) == 256
