"""Настройка логирования для точки входа CLI.

Модули библиотеки только пишут в `logging.getLogger(__name__)`; обработчик
и уровень задаёт приложение.
"""
from __future__ import annotations

import argparse
import logging

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(module)s : %(message)s'


def setup_custom_logger(name: str) -> logging.Logger:
    """Возвращает логгер `name` с обработчиком stderr.

    Повторный вызов не добавляет второй обработчик.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def set_loglevel(logger: logging.Logger, args: argparse.Namespace) -> None:
    """Уровень по флагам CLI: `-q` -> WARNING, `-v` -> DEBUG, иначе INFO."""
    if args.quiet:
        level = logging.WARNING
    elif args.verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logger.setLevel(level)
