"""Конвейер конвертации: (ресемплинг) -> квантование -> запись GIF.

Принципы:
- SRP: только оркестрация этапов; алгоритмы живут в сервисах и кодеке.
- DIP: декодер и ресемплер передаются снаружи (см. `interfaces`).
- Ошибки этапов не перехватываются и не повторяются: пробрасываются как есть;
  конвейер только отмечает этап, логирует их вызывающий код.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from imgtogif.codec.gif_writer import MAX_DIMENSION, GifWriter
from imgtogif.errors import ConversionError, EncodingError, RenderEnvironmentError
from imgtogif.models.image_model import RawImage
from imgtogif.models.options_model import ConversionOptions
from imgtogif.services.interfaces import Decoder, Resampler
from imgtogif.services.quantize_service import ColorQuantizer

logger = logging.getLogger(__name__)


def _scale_half_up(value: int, numerator: int, denominator: int) -> int:
    """round(value * numerator / denominator) с округлением .5 вверх, в целых числах."""
    return (2 * value * numerator + denominator) // (2 * denominator)


def resolve_dimensions(
    width: int,
    height: int,
    target_width: Optional[int] = None,
    target_height: Optional[int] = None,
) -> Tuple[int, int]:
    """Итоговый размер GIF.

    - заданы оба -> как есть;
    - только ширина -> высота = round(ширина * H0 / W0);
    - только высота -> ширина = round(высота * W0 / H0);
    - ничего -> исходный размер.
    Вычисленная сторона не меньше 1 px.

    Raises:
        EncodingError: если явно задан неположительный размер или любая
            из сторон больше предела GIF (65535).
    """
    for name, value in (("width", target_width), ("height", target_height)):
        if value is not None and value <= 0:
            raise EncodingError(f"Target {name} must be positive, got {value}")

    if target_width is not None and target_height is not None:
        size = target_width, target_height
    elif target_width is not None:
        size = target_width, max(1, _scale_half_up(target_width, height, width))
    elif target_height is not None:
        size = max(1, _scale_half_up(target_height, width, height)), target_height
    else:
        size = width, height

    if size[0] > MAX_DIMENSION or size[1] > MAX_DIMENSION:
        raise EncodingError(f"GIF dimensions are limited to {MAX_DIMENSION}, got {size[0]}x{size[1]}")
    return size


@contextmanager
def _stage(name: str) -> Iterator[None]:
    """Отмечает этап на собственных ошибках конвертации; исключение не меняется."""
    try:
        yield
    except ConversionError as exc:
        if exc.stage is None:
            exc.stage = name
        raise


class ConversionPipeline:
    """Превращает `RawImage` (или байты исходного изображения) в файл GIF89a.

    Args:
        resampler: Возможность изменения размера.
        decoder: Возможность декодирования байтов; нужна только для `convert_bytes`.
        quantizer: Квантователь цветов.
        writer: Писатель GIF.
    """

    def __init__(
        self,
        resampler: Resampler,
        decoder: Optional[Decoder] = None,
        quantizer: Optional[ColorQuantizer] = None,
        writer: Optional[GifWriter] = None,
    ) -> None:
        self._resampler = resampler
        self._decoder = decoder
        self._quantizer = quantizer or ColorQuantizer()
        self._writer = writer or GifWriter()

    @classmethod
    def from_options(
        cls,
        resampler: Resampler,
        decoder: Optional[Decoder] = None,
        options: Optional[ConversionOptions] = None,
    ) -> "ConversionPipeline":
        options = options or ConversionOptions()
        writer = GifWriter(transparent_index=options.transparent_index, delay=options.delay)
        return cls(resampler=resampler, decoder=decoder, writer=writer)

    def convert(
        self,
        image: RawImage,
        target_width: Optional[int] = None,
        target_height: Optional[int] = None,
    ) -> bytes:
        """Конвертирует изображение в GIF с необязательным изменением размера."""
        with _stage("resolve"):
            width, height = resolve_dimensions(image.width, image.height, target_width, target_height)

        if (width, height) != image.size:
            with _stage("resample"):
                image = self._resampler(image, width, height)
                if image.size != (width, height):
                    raise EncodingError(
                        f"Resampler returned {image.width}x{image.height}, expected {width}x{height}"
                    )

        with _stage("quantize"):
            palette, indexed = self._quantizer.quantize(image)

        with _stage("encode"):
            data = self._writer.write(indexed, palette)

        logger.debug("Converted to %dx%d GIF, %d bytes", width, height, len(data))
        return data

    def convert_bytes(
        self,
        data: bytes,
        target_width: Optional[int] = None,
        target_height: Optional[int] = None,
    ) -> bytes:
        """Декодирует исходные байты и конвертирует результат в GIF."""
        if self._decoder is None:
            raise RenderEnvironmentError("No image decoder configured", stage="decode")
        with _stage("decode"):
            image = self._decoder(data)
        return self.convert(image, target_width, target_height)
