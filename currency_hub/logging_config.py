from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .infra.settings import SettingsLoader

LOGGER_NAME = "currency_hub.actions"
LOG_FILE_NAME = "actions.log"

_actions_logger: Optional[logging.Logger] = None


def _build_file_handler(
    logs_dir: Path,
    formatter: logging.Formatter,
) -> Optional[logging.Handler]:
    """Создать ротируемый файловый обработчик в logs_dir.

    Если каталог недоступен на запись, вернуть None: сервис курсов
    обязан работать и без файла логов.
    """
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            logs_dir / LOG_FILE_NAME,
            maxBytes=1_000_000,
            backupCount=5,
            encoding="utf-8",
        )
    except OSError:
        return None
    handler.setFormatter(formatter)
    return handler


def get_actions_logger() -> logging.Logger:
    """Вернуть логгер операций с курсами (FETCH/SNAPSHOT/RESOLVE/CONVERT).

    Ленивая инициализация: пути, уровень и формат берутся из SettingsLoader
    при первом обращении. Сообщения пишутся в logs/actions.log и в stderr.
    """
    global _actions_logger

    if _actions_logger is not None:
        return _actions_logger

    settings = SettingsLoader()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.get("log_level", "INFO"))

    if not logger.handlers:
        formatter = logging.Formatter(
            fmt=settings.get(
                "log_format",
                "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            ),
            datefmt="%Y-%m-%dT%H:%M:%S",
        )

        file_handler = _build_file_handler(
            Path(settings.get("logs_dir")),
            formatter,
        )
        if file_handler is not None:
            logger.addHandler(file_handler)

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

        if file_handler is None:
            logger.warning(
                "LOGGING file handler disabled: logs_dir=%s is not writable",
                settings.get("logs_dir"),
            )

    _actions_logger = logger
    return logger
