from __future__ import annotations

from typing import Dict

from ..parser_service.api_clients import BaseApiClient, ExchangeRateApiClient
from ..parser_service.config import ParserConfig
from ..parser_service.storage import RateStore
from ..parser_service.updater import RateFetcher
from .converter import CurrencyConverter
from .default_rates import get_default_rates
from .models import RateCache, RateResult
from .rate_cache import RateCacheManager


class CurrencyService:
    """Точка входа для вызывающего кода (CLI, тесты, другие приложения).

    Собирает вместе снимок, клиент API, получение курсов, кеш и
    конвертер. Кеш принадлежит экземпляру сервиса: два сервиса
    не делят состояние между собой.

    Публичные операции:
    - fetch_exchange_rates(base) — живые курсы или пустой словарь;
    - load_rates_from_file() — курсы из снимка или пустой словарь;
    - get_default_rates() — снимок, а если его нет — встроенная таблица;
    - convert_currency(amount, from, to) — сумма в целевой валюте.
    """

    def __init__(
        self,
        config: ParserConfig | None = None,
        client: BaseApiClient | None = None,
        warm: bool | None = None,
    ) -> None:
        self.config = config or ParserConfig()
        self.cache = RateCache()
        self.store = RateStore(self.config)
        self.client = client or ExchangeRateApiClient(self.config)
        self.fetcher = RateFetcher(
            client=self.client,
            store=self.store,
            config=self.config,
        )
        self.manager = RateCacheManager(
            cache=self.cache,
            fetcher=self.fetcher,
            store=self.store,
            config=self.config,
            warm=warm,
        )
        self.converter = CurrencyConverter(self.manager, self.cache)

    def fetch_exchange_rates(self, base_currency: str) -> Dict[str, float]:
        """Живые курсы для base_currency; при ошибке пустой словарь."""
        return self.fetcher.fetch(base_currency)

    def load_rates_from_file(self) -> Dict[str, float]:
        """Курсы из снимка на диске; пустой словарь, если снимка нет."""
        return self.store.load()

    def get_default_rates(self) -> Dict[str, float]:
        """Курсы из снимка, а при его отсутствии встроенная таблица.

        Таблица в этом случае сразу записывается в снимок.
        """
        rates = self.store.load()
        if not rates:
            rates = get_default_rates()
            self.store.save(rates)
        return rates

    def convert_currency(
        self,
        amount: float,
        from_currency: str,
        to_currency: str,
    ) -> float:
        return self.converter.convert(amount, from_currency, to_currency)

    def get_rate(self, from_currency: str, to_currency: str) -> float:
        return self.converter.get_rate(from_currency, to_currency)

    def update_rates(self, base_currency: str | None = None) -> RateResult:
        """Принудительно разрешить курсы заново (API → снимок → таблица)."""
        return self.manager.resolve(
            base_currency or self.config.default_base_currency,
            force=True,
        )

    def current_rates(self) -> RateCache:
        """Текущее состояние кеша курсов."""
        return self.cache
