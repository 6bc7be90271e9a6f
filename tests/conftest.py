"""Общие фикстуры тестов Currency Hub.

Сеть в тестах не используется: requests.get подменяется через monkeypatch,
снимок курсов пишется во временный каталог.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

import pytest
import requests

from currency_hub.core.usecases import CurrencyService
from currency_hub.logging_config import get_actions_logger
from currency_hub.parser_service import api_clients
from currency_hub.parser_service.config import ParserConfig

API_URL = "https://v6.exchangerate-api.com/v6"
API_KEY = "test-key"


class FakeResponse:
    """Минимальная замена requests.Response."""

    def __init__(
        self,
        status_code: int = 200,
        json_data: Any = None,
        text: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self._json = json_data
        if text is None:
            text = json.dumps(json_data) if json_data is not None else ""
        self.text = text

    def json(self) -> Any:
        if self._json is None:
            return json.loads(self.text)
        return self._json


class FakeHttp:
    """Подмена requests.get: по умолчанию сеть недоступна."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self._handler: Callable[[str], FakeResponse] = self._offline

    @staticmethod
    def _offline(url: str) -> FakeResponse:
        raise requests.exceptions.ConnectionError("network disabled in tests")

    def respond(self, response: FakeResponse) -> None:
        self._handler = lambda url: response

    def respond_with(self, handler: Callable[[str], FakeResponse]) -> None:
        self._handler = handler

    def fail(self, exc: Exception) -> None:
        def _raise(url: str) -> FakeResponse:
            raise exc

        self._handler = _raise

    def get(self, url: str, timeout: Any = None, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, "timeout": timeout})
        return self._handler(url)


def provider_payload(base: str = "USD", **rates: float) -> Dict[str, Any]:
    """Ответ ExchangeRate-API v6 для /latest/<base>."""
    conversion_rates = rates or {
        "USD": 1,
        "EUR": 0.9213,
        "GBP": 0.7865,
        "IDR": 15800.5,
        "JPY": 151.2,
    }
    return {
        "result": "success",
        "base_code": base,
        "time_last_update_unix": 1729296001,
        "conversion_rates": conversion_rates,
    }


@pytest.fixture(scope="session", autouse=True)
def actions_logger():
    """Логгер создаётся один раз, до подмены потоков в capsys."""
    return get_actions_logger()


@pytest.fixture
def http(monkeypatch) -> FakeHttp:
    fake = FakeHttp()
    monkeypatch.setattr(api_clients.requests, "get", fake.get)
    return fake


@pytest.fixture
def config(tmp_path) -> ParserConfig:
    return ParserConfig(
        EXCHANGERATE_API_KEY=API_KEY,
        snapshot_file=tmp_path / "data" / "default_rates.json",
        default_base_currency="USD",
        exchangerate_base_url=API_URL,
        request_timeout=5.0,
        snapshot_precision=2,
        rates_ttl_seconds=0,
        warm_on_start=False,
    )


@pytest.fixture
def service(config, http) -> CurrencyService:
    return CurrencyService(config=config, warm=False)
