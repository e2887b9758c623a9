"""Ошибки конвертации.

Принципы:
- Одна базовая ошибка `ConversionError`, остальные уточняют этап, на котором
  нарушен контракт.
- `QuantizationOverflow` не ошибка, а предупреждение: кодирование продолжается.
"""
from __future__ import annotations

from typing import Optional


class ConversionError(RuntimeError):
    """Базовая ошибка конвертации изображения в GIF.

    Attributes:
        stage: Имя этапа конвейера, на котором возникла ошибка (если известно).
    """

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        super().__init__(message)
        self.stage = stage


class DecodeError(ConversionError):
    """Исходные байты не удалось распознать как изображение."""


class RenderEnvironmentError(ConversionError):
    """Недоступна требуемая возможность рендеринга или ресемплинга."""


class EncodingError(ConversionError):
    """Нарушен внутренний контракт кодировщика (размеры, длина буфера, палитра)."""


class QuantizationOverflow(UserWarning):
    """Различных квантованных цветов больше 256; лишние отображены в индекс 0."""

    def __init__(self, dropped: int) -> None:
        super().__init__(f"{dropped} quantized colors did not fit the palette and were mapped to index 0")
        self.dropped = dropped


class CommandOptionError(ValueError):
    """Опция команды /imgtogif имеет недопустимое значение."""
