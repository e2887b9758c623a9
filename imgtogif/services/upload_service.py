"""Простые реализации уведомлений, выгрузки и хранилища сообщений.

Используются консольным запуском и тестами; чат-платформа подставляет свои.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from imgtogif.models.image_model import GifFile
from imgtogif.models.message_model import Message

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """Отправляет сообщения в лог вместо канала."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._log = log or logger

    def send(self, channel_id: str, text: str) -> None:
        self._log.info("[%s] %s", channel_id, text)


class DirectoryUploader:
    """Сохраняет GIF в каталог; каталог создаётся при первой выгрузке."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        self.saved: List[Path] = []

    def upload(self, file: GifFile, channel_id: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / file.filename
        path.write_bytes(file.data)
        self.saved.append(path)
        logger.info("Saved %s (%d bytes) for %s", path, file.size_bytes, channel_id)


class InMemoryMessageStore:
    """История сообщений по каналам, от старых к новым."""

    def __init__(self) -> None:
        self._channels: Dict[str, List[Message]] = {}

    def add(self, channel_id: str, message: Message) -> None:
        self._channels.setdefault(channel_id, []).append(message)

    def get_messages(self, channel_id: str) -> Sequence[Message]:
        return tuple(self._channels.get(channel_id, ()))
