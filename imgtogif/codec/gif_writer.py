"""Сборка одиночного кадра GIF89a: заголовки, таблица цветов, блоки, LZW-данные.

Источники по формату:
- matthewflickinger.com/lab/whatsinagif
- w3.org/Graphics/GIF/spec-gif89a.txt
"""
from __future__ import annotations

import logging
from struct import pack
from typing import Optional

from imgtogif.codec.lzw_encoder import compress
from imgtogif.errors import EncodingError
from imgtogif.models.image_model import PALETTE_SIZE, IndexedImage, Palette

logger = logging.getLogger(__name__)

GIF_SIGNATURE = b"GIF89a"
BLOCK_HEADER = 0x21
GRAPHIC_HEADER = 0xF9
GRAPHIC_SIZE = 4
IMAGE_HEADER = 0x2C
BLOCK_FOOTER = 0
GIF_FOOTER = 0x3B

SUB_BLOCK_MAX = 255
MAX_DIMENSION = 0xFFFF
COLOR_RESOLUTION = 7


def min_code_size_for(palette_size: int) -> int:
    """Наименьший размер кода (не меньше 2), при котором 2**size >= числа цветов."""
    return max(2, (palette_size - 1).bit_length())


def color_table_size_code(palette_size: int) -> int:
    """Поле размера таблицы цветов: таблица содержит 2**(code + 1) записей."""
    return max(1, (palette_size - 1).bit_length()) - 1


def block_join(raw_bytes: bytes) -> bytes:
    """Режет данные на под-блоки по <=255 байт с префиксом длины и завершает нулевым блоком."""
    blocks = bytearray()
    for start in range(0, len(raw_bytes), SUB_BLOCK_MAX):
        chunk = raw_bytes[start:start + SUB_BLOCK_MAX]
        blocks.append(len(chunk))
        blocks.extend(chunk)
    blocks.append(BLOCK_FOOTER)
    return bytes(blocks)


class GifWriter:
    """Пишет индексированное изображение в байтовый поток GIF89a.

    Args:
        transparent_index: Индекс прозрачного цвета; при None флаг прозрачности сброшен.
        delay: Задержка кадра, сотые доли секунды.
    """

    def __init__(self, transparent_index: Optional[int] = None, delay: int = 0) -> None:
        if transparent_index is not None and not 0 <= transparent_index < PALETTE_SIZE:
            raise EncodingError(f"Transparent index must be in 0..255, got {transparent_index}")
        if not 0 <= delay <= MAX_DIMENSION:
            raise EncodingError(f"Delay must fit in 16 bits, got {delay}")
        self.transparent_index = transparent_index
        self.delay = delay

    def write(self, image: IndexedImage, palette: Palette) -> bytes:
        """Возвращает полный файл GIF89a.

        Raises:
            EncodingError: при неположительных или слишком больших размерах,
                несовпадении длины буфера индексов и при палитре не из 256 цветов.
        """
        self._validate(image, palette)

        out = bytearray(GIF_SIGNATURE)
        out.extend(self._screen_descriptor(image, palette))
        out.extend(palette.to_bytes())
        out.extend(self._graphic_control())
        out.extend(self._image_descriptor(image))

        lzw_min = min_code_size_for(len(palette))
        data = compress(image.indices, lzw_min)
        out.append(lzw_min)
        out.extend(block_join(data))

        out.append(GIF_FOOTER)
        logger.debug(
            "GIF %dx%d: %d bytes of LZW data, %d bytes total",
            image.width, image.height, len(data), len(out),
        )
        return bytes(out)

    # ---- Blocks ----
    def _screen_descriptor(self, image: IndexedImage, palette: Palette) -> bytes:
        packed_byte = 1 << 7  # global color table present
        packed_byte |= (COLOR_RESOLUTION & 7) << 4
        # unsorted (bit 3 = 0)
        packed_byte |= color_table_size_code(len(palette)) & 7
        background, aspect = 0, 0
        return pack("<HH3B", image.width, image.height, packed_byte, background, aspect)

    def _graphic_control(self) -> bytes:
        disposal, user_input = 0, 0
        transparent = self.transparent_index is not None
        packed_byte = (disposal & 7) << 2
        packed_byte |= (user_input & 1) << 1
        packed_byte |= transparent & 1
        index = self.transparent_index if transparent else 0
        out = bytearray([BLOCK_HEADER, GRAPHIC_HEADER, GRAPHIC_SIZE, packed_byte])
        out.extend(pack("<HBB", self.delay, index, BLOCK_FOOTER))
        return bytes(out)

    def _image_descriptor(self, image: IndexedImage) -> bytes:
        # no local color table, no interlace
        packed_byte = 0
        return bytes([IMAGE_HEADER]) + pack("<4HB", 0, 0, image.width, image.height, packed_byte)

    @staticmethod
    def _validate(image: IndexedImage, palette: Palette) -> None:
        if image.width <= 0 or image.height <= 0:
            raise EncodingError(f"Image dimensions must be positive, got {image.width}x{image.height}")
        if image.width > MAX_DIMENSION or image.height > MAX_DIMENSION:
            raise EncodingError(f"GIF dimensions are limited to {MAX_DIMENSION}, got {image.width}x{image.height}")
        expected = image.width * image.height
        if len(image.indices) != expected:
            raise EncodingError(f"Index buffer has {len(image.indices)} entries, expected {expected}")
        if len(palette) != PALETTE_SIZE:
            raise EncodingError(f"Palette must have exactly {PALETTE_SIZE} colors, got {len(palette)}")
