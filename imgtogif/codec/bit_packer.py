"""Упаковка кодов переменной ширины в байты (порядок LSB-first, как требует GIF LZW)."""
from __future__ import annotations

from typing import Iterable, Tuple

from imgtogif.errors import EncodingError


class BitPacker:
    """Накопитель битов: младший бит кода занимает следующую свободную позицию байта."""

    __slots__ = ("_bytes", "_acc", "_nbits")

    def __init__(self) -> None:
        self._bytes = bytearray()
        self._acc = 0
        self._nbits = 0

    def write(self, value: int, width: int) -> None:
        """Дописывает `value` шириной `width` бит; полные байты сразу уходят в буфер."""
        if width <= 0:
            raise EncodingError(f"Code width must be positive, got {width}")
        if value < 0 or value >> width:
            raise EncodingError(f"Code {value} does not fit in {width} bits")
        self._acc |= value << self._nbits
        self._nbits += width
        while self._nbits >= 8:
            self._bytes.append(self._acc & 0xFF)
            self._acc >>= 8
            self._nbits -= 8

    @property
    def bit_length(self) -> int:
        """Сколько бит записано всего."""
        return len(self._bytes) * 8 + self._nbits

    def to_bytes(self) -> bytes:
        """Возвращает байты; неполный последний байт дополняется нулями."""
        if self._nbits:
            return bytes(self._bytes) + bytes([self._acc & 0xFF])
        return bytes(self._bytes)


def pack(codes: Iterable[Tuple[int, int]]) -> bytes:
    """Упаковывает последовательность пар (значение, ширина в битах) в байты."""
    packer = BitPacker()
    for value, width in codes:
        packer.write(value, width)
    return packer.to_bytes()
