"""Ленивая инициализация кодеков Pillow, общая на процесс.

Единственный разделяемый ресурс системы: реестр плагинов форматов Pillow.
`ensure_initialized()` идемпотентен и безопасен при одновременных вызовах
(двойная проверка под блокировкой: инициализирует один поток, остальные
ждут и получают тот же дескриптор).
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from PIL import Image

from imgtogif.errors import RenderEnvironmentError
from imgtogif.services.image_service import ImageService

logger = logging.getLogger(__name__)


def init_pillow_codecs() -> None:
    """Загружает все плагины форматов Pillow.

    Raises:
        RenderEnvironmentError: если не зарегистрировано ни одного декодера.
    """
    Image.init()
    if not Image.OPEN:
        raise RenderEnvironmentError("Pillow has no image decoders registered")
    logger.debug("Pillow codecs ready: %d formats", len(Image.OPEN))


class CodecRuntime:
    """Возможность декодирования/ресемплинга с явным жизненным циклом init/teardown.

    Args:
        resample_filter: Фильтр масштабирования для создаваемого `ImageService`.
        initializer: Однократная инициализация окружения (по умолчанию плагины Pillow).
    """

    def __init__(
        self,
        resample_filter: str = "bilinear",
        initializer: Callable[[], None] = init_pillow_codecs,
    ) -> None:
        self._resample_filter = resample_filter
        self._initializer = initializer
        self._lock = threading.Lock()
        self._handle: Optional[ImageService] = None

    @property
    def is_initialized(self) -> bool:
        return self._handle is not None

    def ensure_initialized(self) -> ImageService:
        """Возвращает дескриптор возможности, инициализируя окружение при первом вызове.

        Если инициализация упала, состояние остаётся неинициализированным и
        следующий вызов попробует снова.
        """
        handle = self._handle
        if handle is not None:
            return handle
        with self._lock:
            if self._handle is None:
                self._initializer()
                self._handle = ImageService(self._resample_filter)
                logger.info("Codec runtime initialized")
            return self._handle

    def teardown(self) -> None:
        """Сбрасывает дескриптор; следующий `ensure_initialized()` инициализирует заново."""
        with self._lock:
            if self._handle is not None:
                logger.info("Codec runtime torn down")
            self._handle = None
