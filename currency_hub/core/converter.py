from __future__ import annotations

from typing import Dict

from ..decorators import log_action
from ..logging_config import get_actions_logger
from .currencies import get_currency
from .exceptions import CurrencyError, CurrencyNotFoundError
from .models import RateCache
from .rate_cache import RateCacheManager
from .utils import validate_amount


class CurrencyConverter:
    """Конвертация суммы между двумя валютами.

    Перед каждым расчётом курсы разрешаются заново с from_currency
    в качестве базы. Если разрешение упало, используется то, что уже
    лежит в кеше.
    """

    def __init__(self, manager: RateCacheManager, cache: RateCache) -> None:
        self.manager = manager
        self.cache = cache
        self._logger = get_actions_logger()

    def _current_rates(self, base: str) -> Dict[str, float]:
        try:
            result = self.manager.resolve(base)
        except CurrencyError as exc:
            if self.cache.is_empty():
                raise
            self._logger.warning(
                "RATES_RESOLVE base=%s status=USE_CACHE error=%s",
                base,
                exc,
            )
            return self.cache.snapshot()

        if result.ok:
            return result.rates
        return self.cache.snapshot()

    @log_action("CONVERT")
    def convert(
        self,
        amount: float,
        from_currency: str,
        to_currency: str,
    ) -> float:
        """Перевести amount из from_currency в to_currency.

        Считается как amount * (rate[to] / rate[from]); база набора
        курсов при этом значения не имеет.
        """
        value = validate_amount(amount)
        from_code = get_currency(from_currency)
        to_code = get_currency(to_currency)

        rates = self._current_rates(from_code)

        for code in (from_code, to_code):
            if code not in rates:
                raise CurrencyNotFoundError(
                    f"Курс для валюты '{code}' недоступен",
                )

        return value * (rates[to_code] / rates[from_code])

    def get_rate(self, from_currency: str, to_currency: str) -> float:
        """Курс from_currency → to_currency (сколько to за 1 from)."""
        return self.convert(1.0, from_currency, to_currency)
