"""Модели чата: сообщения, вложения и аргументы команды /imgtogif."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple

from imgtogif.errors import CommandOptionError

_IMAGE_NAME_RE = re.compile(r"\.(png|jpg|jpeg|gif|webp)$", re.IGNORECASE)


def _parse_size(name: str, value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise CommandOptionError(f"Option '{name}' must be an integer, got {value!r}") from exc


@dataclass(frozen=True)
class Attachment:
    """Вложение сообщения.

    Fields:
        url: Адрес файла.
        filename: Имя файла, если известно.
        content_type: MIME-тип, если известен.
    """
    url: str
    filename: Optional[str] = None
    content_type: Optional[str] = None

    @property
    def is_image(self) -> bool:
        if self.content_type and self.content_type.startswith("image/"):
            return True
        return bool(self.filename and _IMAGE_NAME_RE.search(self.filename))


@dataclass(frozen=True)
class Message:
    attachments: Tuple[Attachment, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CommandArgs:
    """Аргументы команды: источник и желаемые размеры GIF."""
    url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None

    @classmethod
    def from_options(cls, options: Iterable[Mapping[str, Any]]) -> "CommandArgs":
        """Собирает аргументы из списка опций вида ``{"name": ..., "value": ...}``.

        Неизвестные опции игнорируются; width/height приводятся к int.

        Raises:
            CommandOptionError: если width или height не целое число.
        """
        url: Optional[str] = None
        width: Optional[int] = None
        height: Optional[int] = None
        for option in options:
            name = option.get("name")
            value = option.get("value")
            if value is None:
                continue
            if name == "url":
                url = str(value)
            elif name == "width":
                width = _parse_size(name, value)
            elif name == "height":
                height = _parse_size(name, value)
        return cls(url=url, width=width, height=height)
