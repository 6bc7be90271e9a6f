from __future__ import annotations

from typing import Dict

from ..core.exceptions import ApiRequestError, RateParseError
from ..core.models import FailureKind, RateResult, RateSource
from ..core.utils import validate_currency_code
from ..logging_config import get_actions_logger
from .api_clients import BaseApiClient, ExchangeRateApiClient
from .config import ParserConfig
from .storage import RateStore


class RateFetcher:
    """Получение живых курсов у провайдера с записью снимка.

    Задачи:
    - запрос курсов для базовой валюты через API-клиент;
    - перевод любых ошибок в RateResult с видом ошибки;
    - запись удачного результата в снимок до возврата вызывающему;
    - логирование шагов и ошибок.
    """

    def __init__(
        self,
        client: BaseApiClient | None = None,
        store: RateStore | None = None,
        config: ParserConfig | None = None,
    ) -> None:
        self.config = config or ParserConfig()
        self.client = client or ExchangeRateApiClient(self.config)
        self.store = store or RateStore(self.config)
        self._logger = get_actions_logger()

    def fetch_result(self, base_currency: str) -> RateResult:
        """Запросить курсы для base_currency. Исключений не бросает."""
        logger = self._logger
        client_name = getattr(self.client, "name", self.client.__class__.__name__)

        try:
            base = validate_currency_code(base_currency)
        except (TypeError, ValueError) as exc:
            logger.error(
                "RATES_FETCH base=%r status=INVALID_BASE error=%s",
                base_currency,
                exc,
            )
            return RateResult.failed(RateSource.LIVE, FailureKind.INVALID, str(exc))

        logger.info("RATES_FETCH base=%s client=%s status=START", base, client_name)

        try:
            rates = self.client.fetch_rates(base)
        except RateParseError as exc:
            logger.error(
                "RATES_FETCH base=%s client=%s status=PARSE_ERROR error=%s",
                base,
                client_name,
                exc,
            )
            return RateResult.failed(
                RateSource.LIVE,
                FailureKind.PARSE,
                str(exc),
                base_currency=base,
            )
        except ApiRequestError as exc:
            logger.error(
                "RATES_FETCH base=%s client=%s status=ERROR error=%s",
                base,
                client_name,
                exc,
            )
            return RateResult.failed(
                RateSource.LIVE,
                FailureKind.NETWORK,
                str(exc),
                base_currency=base,
            )
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "RATES_FETCH base=%s client=%s status=UNEXPECTED_ERROR error=%s",
                base,
                client_name,
                exc,
            )
            return RateResult.failed(
                RateSource.LIVE,
                FailureKind.NETWORK,
                str(exc),
                base_currency=base,
            )

        if not rates:
            logger.warning(
                "RATES_FETCH base=%s client=%s status=NO_DATA",
                base,
                client_name,
            )
            return RateResult.failed(
                RateSource.LIVE,
                FailureKind.EMPTY,
                "провайдер не вернул курсов",
                base_currency=base,
            )

        self.store.save(self._snapshot_rates(rates))
        logger.info(
            "RATES_FETCH base=%s client=%s status=OK rates=%d",
            base,
            client_name,
            len(rates),
        )
        return RateResult.success(rates, RateSource.LIVE, base_currency=base)

    def _snapshot_rates(self, rates: Dict[str, float]) -> Dict[str, float]:
        """Курсы для снимка, пересчитанные к default_base_currency.

        Снимок хранит набор относительно одной базы: при базе вроде IDR
        курсы основных валют слишком малы для фиксированной точности.
        Если базовой валюты по умолчанию в ответе нет, набор пишется как есть.
        """
        pivot = rates.get(self.config.default_base_currency)
        if not pivot:
            return dict(rates)
        return {code: rate / pivot for code, rate in rates.items()}

    def fetch(self, base_currency: str) -> Dict[str, float]:
        """Курсы для base_currency или пустой словарь при любой ошибке."""
        return self.fetch_result(base_currency).rates
