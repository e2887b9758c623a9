"""Модели данных для изображений.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from imgtogif.errors import EncodingError

RGB = Tuple[int, int, int]

PALETTE_SIZE = 256
BLACK: RGB = (0, 0, 0)


@dataclass(frozen=True)
class RawImage:
    """Неизменяемый буфер RGBA-пикселей.

    Fields:
        width: Ширина, px (> 0).
        height: Высота, px (> 0).
        pixels: Байты RGBA построчно, длина width*height*4.

    Raises:
        EncodingError: если размеры неположительны или длина буфера не совпадает.
    """
    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise EncodingError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        # bytearray/memoryview -> bytes, чтобы буфер нельзя было изменить снаружи
        object.__setattr__(self, "pixels", bytes(self.pixels))
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise EncodingError(f"RGBA buffer has {len(self.pixels)} bytes, expected {expected}")

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def as_array(self) -> np.ndarray:
        """Возвращает read-only представление numpy формы (height, width, 4), uint8."""
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(self.height, self.width, 4)


@dataclass(frozen=True)
class Palette:
    """Упорядоченная палитра RGB (глобальная таблица цветов GIF).

    Fields:
        colors: Цвета в порядке первого появления; после квантования ровно 256.
    """
    colors: Tuple[RGB, ...]

    def __post_init__(self) -> None:
        if len(self.colors) > PALETTE_SIZE:
            raise EncodingError(f"Palette holds {len(self.colors)} colors, GIF allows at most {PALETTE_SIZE}")

    def __len__(self) -> int:
        return len(self.colors)

    def __getitem__(self, index: int) -> RGB:
        return self.colors[index]

    def to_bytes(self) -> bytes:
        out = bytearray()
        for color in self.colors:
            out.extend(color)
        return bytes(out)


@dataclass(frozen=True)
class IndexedImage:
    """Изображение в индексах палитры.

    Fields:
        width: Ширина, px.
        height: Высота, px.
        indices: По одному байту-индексу на пиксель, длина width*height.
    """
    width: int
    height: int
    indices: bytes


@dataclass(frozen=True)
class GifFile:
    """Готовый GIF-файл для выгрузки: имя и байты."""
    filename: str
    data: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.data)
