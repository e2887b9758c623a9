"""LZW-сжатие потока индексов в варианте GIF.

Коды переменной ширины: старт с `min_code_size + 1` бит, рост до 12 бит,
при заполнении таблицы (4096 кодов) выдаётся clear code и таблица сбрасывается.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from imgtogif.codec.bit_packer import pack
from imgtogif.errors import EncodingError

logger = logging.getLogger(__name__)

MAX_CODE_BITS = 12
MAX_CODES = 1 << MAX_CODE_BITS
MIN_CODE_SIZE_RANGE = (2, 8)

# (код, ширина в битах)
LzwCodeStream = List[Tuple[int, int]]


class LzwEncoder:
    """Кодировщик LZW для данных изображения GIF.

    Args:
        min_code_size: Минимальный размер кода (2..8); clear code равен `2**min_code_size`.
    """

    def __init__(self, min_code_size: int) -> None:
        low, high = MIN_CODE_SIZE_RANGE
        if not low <= min_code_size <= high:
            raise EncodingError(f"LZW minimum code size must be in {low}..{high}, got {min_code_size}")
        self.min_code_size = min_code_size
        self.clear_code = 1 << min_code_size
        self.end_code = self.clear_code + 1

    def encode(self, indices: Iterable[int]) -> LzwCodeStream:
        """Сжимает индексы в поток кодов, готовый для `bit_packer.pack`.

        Ширина растёт сразу после выдачи кода, если следующий свободный код
        уже не помещается в текущую ширину. Так декодер, который добавляет
        запись в таблицу на шаг позже, читает каждый код той же ширины,
        включая последний код и end code.

        Raises:
            EncodingError: если индекс не меньше clear code.
        """
        clear, end = self.clear_code, self.end_code
        first_free = end + 1
        initial_width = self.min_code_size + 1

        codes: LzwCodeStream = [(clear, initial_width)]
        width = initial_width
        next_code = first_free
        # (prefix_code << 8) | index -> code; индексы всегда < 256
        table: Dict[int, int] = {}

        stream = iter(indices)
        prefix = next(stream, None)
        if prefix is None:
            codes.append((end, width))
            return codes
        if not 0 <= prefix < clear:
            raise EncodingError(f"Index {prefix} out of range for minimum code size {self.min_code_size}")

        for k in stream:
            if not 0 <= k < clear:
                raise EncodingError(f"Index {k} out of range for minimum code size {self.min_code_size}")
            key = (prefix << 8) | k
            code = table.get(key)
            if code is not None:
                prefix = code
                continue

            codes.append((prefix, width))
            if next_code >= (1 << width) and width < MAX_CODE_BITS:
                width += 1
            if next_code == MAX_CODES:
                # Table full: reset
                codes.append((clear, width))
                table.clear()
                next_code = first_free
                width = initial_width
            else:
                table[key] = next_code
                next_code += 1
            prefix = k

        codes.append((prefix, width))
        if next_code >= (1 << width) and width < MAX_CODE_BITS:
            width += 1
        codes.append((end, width))
        logger.debug("LZW: %d codes, final width %d bits", len(codes), width)
        return codes


def encode(indices: Iterable[int], min_code_size: int) -> LzwCodeStream:
    """Функциональная обёртка над `LzwEncoder.encode`."""
    return LzwEncoder(min_code_size).encode(indices)


def compress(indices: Iterable[int], min_code_size: int) -> bytes:
    """LZW-кодирует индексы и упаковывает коды в байты (без разбиения на под-блоки)."""
    return pack(encode(indices, min_code_size))
