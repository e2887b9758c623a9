"""Узкие интерфейсы внешних возможностей.

DIP: конвейер и команда зависят только от этих ролей; реализации
(Pillow, requests, чат-платформа, файловая система) передаются явно
при сборке приложения.
"""
from __future__ import annotations

from typing import Protocol, Sequence

from imgtogif.models.image_model import GifFile, RawImage
from imgtogif.models.message_model import Message


class Decoder(Protocol):
    def __call__(self, data: bytes) -> RawImage: ...


class Resampler(Protocol):
    def __call__(self, image: RawImage, width: int, height: int) -> RawImage: ...


class Fetcher(Protocol):
    def fetch(self, url: str) -> bytes: ...

    def filename_for(self, url: str) -> str: ...


class Notifier(Protocol):
    def send(self, channel_id: str, text: str) -> None: ...


class Uploader(Protocol):
    def upload(self, file: GifFile, channel_id: str) -> None: ...


class MessageStore(Protocol):
    def get_messages(self, channel_id: str) -> Sequence[Message]: ...
