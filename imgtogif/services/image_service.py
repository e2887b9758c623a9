"""Декодирование изображений и ресемплинг через Pillow.

Принципы:
- SRP: класс отвечает только за перевод байтов/файлов в `RawImage` и изменение размера.
- OCP: новые источники (стрим, URL) подключаются снаружи, сюда приходят уже байты.
- LSP/ISP: возвращает `RawImage` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from imgtogif.errors import DecodeError, RenderEnvironmentError
from imgtogif.models.image_model import RawImage

logger = logging.getLogger(__name__)

_FILTERS = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}


class ImageService:
    """Pillow-реализация возможностей `decode` и `resample`.

    Args:
        resample_filter: Имя фильтра масштабирования (nearest | bilinear | bicubic | lanczos).
    """

    def __init__(self, resample_filter: str = "bilinear") -> None:
        self.resample_filter = resample_filter

    def decode(self, data: bytes) -> RawImage:
        """Декодирует байты PNG/JPEG/WebP/... в RGBA.

        Для анимированных источников берётся первый кадр.

        Raises:
            DecodeError: если данных нет или они не распознаны как изображение.
        """
        if not data:
            raise DecodeError("Empty image data")
        try:
            with Image.open(io.BytesIO(data)) as pil_image:
                rgba = pil_image.convert("RGBA")
        except UnidentifiedImageError as exc:
            raise DecodeError("Data is not a recognized image") from exc
        except (OSError, EOFError, SyntaxError, ValueError) as exc:
            # truncated or corrupt file
            raise DecodeError(f"Could not decode image: {exc}") from exc
        logger.debug("Decoded %d bytes into %dx%d RGBA", len(data), rgba.width, rgba.height)
        return self._to_raw(rgba)

    def load_image(self, file_path: str | Path) -> RawImage:
        """Загружает изображение с диска.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            DecodeError: если файл не распознан как изображение.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return self.decode(path.read_bytes())

    def resample(self, image: RawImage, width: int, height: int) -> RawImage:
        """Меняет размер изображения выбранным фильтром.

        Raises:
            RenderEnvironmentError: если фильтр не поддерживается.
        """
        resample_filter = _FILTERS.get(self.resample_filter)
        if resample_filter is None:
            raise RenderEnvironmentError(f"Resampling filter {self.resample_filter!r} is not available")
        pil_image = Image.frombytes("RGBA", image.size, image.pixels)
        resized = pil_image.resize((width, height), resample=resample_filter)
        logger.debug(
            "Resampled %dx%d -> %dx%d (%s)",
            image.width, image.height, width, height, self.resample_filter,
        )
        return self._to_raw(resized)

    @staticmethod
    def _to_raw(pil_image: Image.Image) -> RawImage:
        width, height = pil_image.size
        return RawImage(width=width, height=height, pixels=pil_image.tobytes())
