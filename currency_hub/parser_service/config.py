from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from ..core.currencies import SUPPORTED_CURRENCIES
from ..infra.settings import SettingsLoader


def _setting(key: str):
    """Фабрика значения по умолчанию: читаем ключ из SettingsLoader."""
    return lambda: SettingsLoader().get(key)


@dataclass(frozen=True)
class ParserConfig:
    """Конфигурация Parser Service.

    Здесь фиксируем:
    - EXCHANGERATE_API_KEY: ключ для ExchangeRate-API (берём из окружения);
    - snapshot_file: путь к снимку курсов (из SettingsLoader);
    - default_base_currency: базовая валюта для прогрева кеша;
    - exchangerate_base_url: базовый URL ExchangeRate-API;
    - request_timeout: таймаут HTTP-запроса;
    - snapshot_precision: число знаков после запятой в снимке;
    - rates_ttl_seconds: срок свежести живых курсов (0 — без кеширования);
    - supported_currencies: валюты, курсы которых извлекаем из ответа.

    Значения по умолчанию читаются при создании экземпляра, поэтому
    любое поле можно переопределить явно (так делают тесты).
    """

    # default="" гарантирует, что тип всегда str, без None.
    EXCHANGERATE_API_KEY: str = field(
        default_factory=lambda: os.getenv("EXCHANGERATE_API_KEY", ""),
    )

    snapshot_file: Path = field(default_factory=_setting("snapshot_file"))
    default_base_currency: str = field(
        default_factory=_setting("default_base_currency"),
    )
    exchangerate_base_url: str = field(
        default_factory=_setting("exchangerate_api_url"),
    )
    request_timeout: float = field(default_factory=_setting("request_timeout"))
    snapshot_precision: int = field(
        default_factory=_setting("snapshot_precision"),
    )
    rates_ttl_seconds: int = field(default_factory=_setting("rates_ttl_seconds"))
    warm_on_start: bool = field(default_factory=_setting("warm_on_start"))

    supported_currencies: tuple[str, ...] = SUPPORTED_CURRENCIES
