"""Получение байтов исходного изображения по URL или пути к файлу."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import requests

from imgtogif.errors import DecodeError

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "image.png"


class FetchService:
    """HTTP(S) через `requests.Session`; `file://` и обычные пути читаются с диска.

    Ошибки requests (сеть, HTTP-статус) пробрасываются без изменений.
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 30.0) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout

    def fetch(self, url: str) -> bytes:
        """Возвращает содержимое ресурса.

        Raises:
            DecodeError: если ответ пустой.
            FileNotFoundError: если локальный файл не существует.
            requests.RequestException: при сетевой или HTTP-ошибке.
        """
        parsed = urlparse(url)
        if parsed.scheme in ("http", "https"):
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
            data = response.content
        else:
            path = Path(unquote(parsed.path)) if parsed.scheme == "file" else Path(url)
            if not path.is_file():
                raise FileNotFoundError(f"File not found: {path}")
            data = path.read_bytes()

        if not data:
            raise DecodeError(f"Empty response from {url}")
        logger.debug("Fetched %d bytes from %s", len(data), url)
        return data

    @staticmethod
    def filename_for(url: str) -> str:
        """Последний сегмент пути без query-строки, либо `image.png`."""
        path = urlparse(url).path if "://" in url else url
        name = path.replace("\\", "/").rstrip("/").split("/")[-1]
        return unquote(name) or DEFAULT_FILENAME

    def close(self) -> None:
        self._session.close()
