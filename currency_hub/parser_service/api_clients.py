from __future__ import annotations

from abc import ABC, abstractmethod
from time import monotonic
from typing import Any, Dict

import requests

from ..core.exceptions import ApiRequestError, RateParseError
from ..core.utils import validate_currency_code
from ..logging_config import get_actions_logger
from .config import ParserConfig
from .parser import parse_rates


class BaseApiClient(ABC):
    """Базовый клиент внешнего API курсов.

    Наследники реализуют fetch_rates(base), который возвращает
    курсы поддерживаемых валют относительно base:
    {
        "USD": 1.0,
        "EUR": 0.95,
        ...
    }
    и бросает ApiRequestError / RateParseError при любой неудаче.
    """

    name = "base"

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()

    @abstractmethod
    def fetch_rates(self, base_currency: str) -> Dict[str, float]:
        """Получить курсы относительно base_currency."""


class ExchangeRateApiClient(BaseApiClient):
    """Клиент ExchangeRate-API (v6) для получения курсов фиатных валют."""

    name = "ExchangeRate-API"

    def build_url(self, base_currency: str) -> str:
        cfg = self.config
        base = validate_currency_code(base_currency)
        return f"{cfg.exchangerate_base_url}/{cfg.EXCHANGERATE_API_KEY}/latest/{base}"

    def fetch_rates(self, base_currency: str) -> Dict[str, float]:
        """Запросить /latest/<BASE> и вернуть словарь CODE → rate."""
        cfg = self.config

        if not cfg.EXCHANGERATE_API_KEY:
            raise ApiRequestError(
                "Не указан API-ключ для ExchangeRate-API. "
                "Установите переменную окружения EXCHANGERATE_API_KEY.",
            )

        url = self.build_url(base_currency)

        start = monotonic()
        try:
            response = requests.get(
                url,
                timeout=cfg.request_timeout,
            )
        except requests.exceptions.RequestException as exc:
            raise ApiRequestError(
                f"Ошибка при обращении к ExchangeRate-API: {exc}",
            ) from exc
        elapsed_ms = int((monotonic() - start) * 1000)

        get_actions_logger().debug(
            "RATES_FETCH base=%s http_status=%s elapsed_ms=%d",
            base_currency,
            response.status_code,
            elapsed_ms,
        )

        if response.status_code != 200:
            raise ApiRequestError(
                "Ошибка ExchangeRate-API: HTTP "
                f"{response.status_code} — {response.text[:200]}",
            )

        body = response.text
        if not body or not body.strip():
            raise ApiRequestError("ExchangeRate-API вернул пустой ответ.")

        payload: Any
        try:
            payload = response.json()
        except ValueError:
            # Не JSON: разбираем текст построчным сканированием.
            payload = body

        if isinstance(payload, dict) and payload.get("result") == "error":
            error_type = payload.get("error-type", "unknown")
            raise ApiRequestError(
                "ExchangeRate-API вернул ошибку: "
                f"{error_type}",
            )

        result = parse_rates(payload, cfg.supported_currencies)
        if not result:
            raise RateParseError(
                "ExchangeRate-API вернул ответ без ожидаемых курсов "
                "для поддерживаемых валют.",
            )
        return result
