from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, Optional, Tuple

from ..logging_config import get_actions_logger
from ..parser_service.config import ParserConfig
from ..parser_service.storage import RateStore
from ..parser_service.updater import RateFetcher
from .default_rates import get_default_rates
from .exceptions import ApiRequestError, RateParseError, StorageError
from .models import FailureKind, RateCache, RateResult, RateSource
from .utils import validate_currency_code

FallbackStep = Tuple[RateSource, Callable[[], RateResult]]


def _failure_kind(exc: Exception) -> FailureKind:
    if isinstance(exc, ApiRequestError):
        return FailureKind.NETWORK
    if isinstance(exc, RateParseError):
        return FailureKind.PARSE
    if isinstance(exc, (StorageError, OSError)):
        return FailureKind.STORAGE
    return FailureKind.EMPTY


def resolve_with_fallback(steps: Iterable[FallbackStep]) -> RateResult:
    """Выполнить шаги по порядку и вернуть первый удачный результат.

    Следующий шаг запускается, только если предыдущий вернул пустой
    набор, ошибку или бросил исключение. Если удачных шагов нет,
    возвращается результат последнего шага.
    """
    logger = get_actions_logger()
    last: Optional[RateResult] = None

    for source, step in steps:
        name = source.value
        try:
            result = step()
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "RATES_RESOLVE step=%s status=UNEXPECTED_ERROR error=%s",
                name,
                exc,
            )
            result = RateResult.failed(source, _failure_kind(exc), str(exc))

        if result.ok:
            logger.info(
                "RATES_RESOLVE step=%s status=OK rates=%d",
                name,
                len(result.rates),
            )
            return result

        logger.warning(
            "RATES_RESOLVE step=%s status=FALLBACK failure=%s message=%s",
            name,
            result.failure.value if result.failure else "-",
            result.message or "-",
        )
        last = result

    if last is None:
        return RateResult.failed(RateSource.DEFAULTS, FailureKind.EMPTY, "нет шагов")
    return last


class RateCacheManager:
    """Политика выбора курсов: API → снимок → встроенная таблица.

    Результат разрешения целиком заменяет содержимое RateCache.
    При rates_ttl_seconds > 0 свежий живой набор из кеша отдаётся
    без обращения к API.
    """

    def __init__(
        self,
        cache: RateCache,
        fetcher: RateFetcher | None = None,
        store: RateStore | None = None,
        config: ParserConfig | None = None,
        warm: bool | None = None,
    ) -> None:
        self.config = config or ParserConfig()
        self.cache = cache
        self.store = store or RateStore(self.config)
        self.fetcher = fetcher or RateFetcher(store=self.store, config=self.config)
        self._logger = get_actions_logger()

        if self.config.warm_on_start if warm is None else warm:
            self.warm()

    def warm(self) -> RateResult:
        """Прогреть кеш курсами для базовой валюты по умолчанию."""
        return self.resolve(self.config.default_base_currency)

    def _use_defaults(self) -> RateResult:
        rates = get_default_rates()
        # Следующие неудачи будут читать этот же снимок.
        self.store.save(rates)
        return RateResult.success(rates, RateSource.DEFAULTS, base_currency="USD")

    def _fresh_cached(self, now: datetime | None = None) -> Optional[RateResult]:
        ttl = self.config.rates_ttl_seconds
        cache = self.cache
        if ttl <= 0 or cache.is_empty() or cache.source is not RateSource.LIVE:
            return None
        age = cache.age_seconds(now)
        if age is None or age > ttl:
            return None
        return RateResult.success(
            cache.snapshot(),
            RateSource.CACHE,
            base_currency=cache.base_currency,
        )

    def resolve(self, base_currency: str, force: bool = False) -> RateResult:
        """Получить действующий набор курсов для base_currency.

        force=True игнорирует срок свежести кеша.
        """
        base = validate_currency_code(base_currency)

        cached = None if force else self._fresh_cached()
        if cached is not None:
            self._logger.info(
                "RATES_RESOLVE base=%s step=cache status=OK age=%.0fs",
                base,
                self.cache.age_seconds() or 0.0,
            )
            return cached

        result = resolve_with_fallback(
            [
                (RateSource.LIVE, lambda: self.fetcher.fetch_result(base)),
                (RateSource.SNAPSHOT, self.store.load_result),
                (RateSource.DEFAULTS, self._use_defaults),
            ],
        )
        if result.ok:
            self.cache.replace(result)
        return result
