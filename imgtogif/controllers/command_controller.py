"""Контроллер команды /imgtogif: оркестрация источников, конвейера и выгрузки.

SOLID:
- SRP: класс управляет потоком команды (без логики обработки изображений).
- DIP: зависит от уведомлений, выгрузки, хранилища сообщений и загрузчика
  как от абстрактных ролей; конкретные реализации передаются при сборке.
Clean Code:
- Обработчик компактный; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any, Iterable, Mapping, Optional

from imgtogif.errors import CommandOptionError
from imgtogif.models.image_model import GifFile
from imgtogif.models.message_model import Attachment, CommandArgs
from imgtogif.services.conversion_service import ConversionPipeline
from imgtogif.services.interfaces import Fetcher, MessageStore, Notifier, Uploader

logger = logging.getLogger(__name__)

NO_IMAGE_TEXT = "❌ No image found! Send an image first or use: /imgtogif url:YOUR_URL"
CONVERTING_TEXT = "🔄 Converting to GIF..."
NO_UPLOADER_TEXT = "✅ GIF created! (Upload handler not available)"
ERROR_TEXT = "❌ Error: {error}"
FALLBACK_NAME = "converted"


def gif_filename(source_name: Optional[str]) -> str:
    """Имя результата: исходное имя с заменой расширения на `.gif`."""
    stem = PurePosixPath(source_name).stem if source_name else ""
    return f"{stem or FALLBACK_NAME}.gif"


@dataclass
class ImgToGifCommand:
    """Выполняет команду конвертации изображения в GIF.

    Ответственности:
    - Поиск последнего изображения в канале, если URL не передан.
    - Сообщения о ходе работы и ошибках через `Notifier`.
    - Загрузка байтов, конвертация через `ConversionPipeline`.
    - Выгрузка результата через `Uploader` (если доступен).
    """
    notifier: Notifier
    fetcher: Fetcher
    pipeline: ConversionPipeline
    uploader: Optional[Uploader] = None
    message_store: Optional[MessageStore] = None

    def execute(self, args: CommandArgs, channel_id: str) -> Optional[GifFile]:
        """Запускает команду; возвращает созданный файл или None при неудаче.

        Исключения не выходят наружу: пользователь получает сообщение об ошибке.
        """
        try:
            url = args.url
            if not url:
                attachment = self._find_latest_image(channel_id)
                if attachment is None:
                    self.notifier.send(channel_id, NO_IMAGE_TEXT)
                    return None
                url = attachment.url

            self.notifier.send(channel_id, CONVERTING_TEXT)
            logger.info("Converting %s (width=%s, height=%s)", url, args.width, args.height)

            data = self.fetcher.fetch(url)
            gif_data = self.pipeline.convert_bytes(data, args.width, args.height)
            gif_file = GifFile(filename=gif_filename(self.fetcher.filename_for(url)), data=gif_data)

            if self.uploader is not None:
                self.uploader.upload(gif_file, channel_id)
            else:
                self.notifier.send(channel_id, NO_UPLOADER_TEXT)
            return gif_file
        except Exception as exc:
            self._report_error(channel_id, exc)
            return None

    def execute_options(self, options: Iterable[Mapping[str, Any]], channel_id: str) -> Optional[GifFile]:
        """Разбирает опции чата и запускает команду; ошибка разбора тоже уходит пользователю."""
        try:
            args = CommandArgs.from_options(options)
        except CommandOptionError as exc:
            self._report_error(channel_id, exc)
            return None
        return self.execute(args, channel_id)

    # ---- Helpers ----
    def _report_error(self, channel_id: str, exc: Exception) -> None:
        stage = getattr(exc, "stage", None)
        if stage:
            logger.exception("imgtogif failed in channel %s at stage '%s'", channel_id, stage)
        else:
            logger.exception("imgtogif failed in channel %s", channel_id)
        self.notifier.send(channel_id, ERROR_TEXT.format(error=exc))

    def _find_latest_image(self, channel_id: str) -> Optional[Attachment]:
        if self.message_store is None:
            return None
        for message in reversed(self.message_store.get_messages(channel_id)):
            for attachment in message.attachments:
                if attachment.is_image:
                    return attachment
        return None
