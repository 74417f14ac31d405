# File: keyscout/logger.py
"""
keyscout.logger: единый логгер ``KeyScout``.

Все модули пишут в один именованный логгер: либо через готовый
:data:`logger`, либо через ``logging.getLogger(LOGGER_NAME)``.
CLI перенастраивает его один раз при старте через :func:`init_logging`.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "KeyScout"

# ротация лог-файла: 5 МБ, три архива
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _handler(target: Optional[Path], fmt: str) -> logging.Handler:
    """Консольный handler при ``target=None``, иначе ротируемый файл."""
    if target is None:
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
    else:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            target, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8"
        )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _drop_handlers(lg: logging.Logger) -> None:
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """
    Настраивает логгер KeyScout.

    :param level: уровень (``"DEBUG"``, ``logging.INFO`` ...)
    :param log_file: дополнительный файл с ротацией; ``None`` — только stdout
    :param log_format: формат для :class:`logging.Formatter`
    :param replace_handlers: закрыть и убрать прежние handlers
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    if replace_handlers:
        _drop_handlers(lg)

    lg.addHandler(_handler(None, log_format))
    if log_file is not None:
        lg.addHandler(_handler(Path(log_file).expanduser(), log_format))

    # сообщения краулера не дублируются корневым логгером
    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Полная перенастройка логгера, используется CLI."""
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]
