"""Параметры конвертации (заполняются из CLI или создаются напрямую)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

RESAMPLE_FILTERS = ("nearest", "bilinear", "bicubic", "lanczos")


@dataclass(frozen=True)
class ConversionOptions:
    """Неизменяемая конфигурация конвейера.

    Fields:
        resample: Фильтр масштабирования Pillow: nearest | bilinear | bicubic | lanczos.
        transparent_index: Индекс прозрачного цвета в палитре; None означает без прозрачности.
        delay: Задержка кадра в сотых долях секунды (для одного кадра 0).
    """
    resample: str = "bilinear"
    transparent_index: Optional[int] = None
    delay: int = 0
