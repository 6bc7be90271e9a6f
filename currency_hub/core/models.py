from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional


class RateSource(str, Enum):
    """Откуда взят набор курсов."""

    LIVE = "live"
    SNAPSHOT = "snapshot"
    DEFAULTS = "defaults"
    CACHE = "cache"


class FailureKind(str, Enum):
    """Вид неудачи шага получения курсов."""

    NETWORK = "network_failure"
    PARSE = "parse_failure"
    STORAGE = "storage_failure"
    EMPTY = "empty"
    INVALID = "invalid_request"


@dataclass(frozen=True)
class RateResult:
    """Результат одного шага получения курсов (API, снимок, таблица).

    Вместо исключений шаг возвращает либо непустой набор курсов,
    либо вид ошибки и сообщение.
    """

    rates: Dict[str, float]
    source: RateSource
    base_currency: Optional[str] = None
    failure: Optional[FailureKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None and bool(self.rates)

    @classmethod
    def success(
        cls,
        rates: Dict[str, float],
        source: RateSource,
        base_currency: Optional[str] = None,
    ) -> "RateResult":
        if not rates:
            return cls.failed(source, FailureKind.EMPTY, "пустой набор курсов")
        return cls(
            rates=dict(rates),
            source=source,
            base_currency=base_currency,
        )

    @classmethod
    def failed(
        cls,
        source: RateSource,
        failure: FailureKind,
        message: str = "",
        base_currency: Optional[str] = None,
    ) -> "RateResult":
        return cls(
            rates={},
            source=source,
            base_currency=base_currency,
            failure=failure,
            message=message,
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RateCache:
    """Набор курсов, действующий в данный момент.

    Кешем владеет создавший его сервис; объект передаётся
    менеджеру кеша и конвертеру явно. Содержимое только заменяется
    целиком через replace(), частичного слияния нет.
    """

    rates: Dict[str, float] = field(default_factory=dict)
    base_currency: Optional[str] = None
    source: Optional[RateSource] = None
    updated_at: Optional[datetime] = None

    def replace(self, result: RateResult, now: Optional[datetime] = None) -> None:
        """Заменить содержимое кеша результатом разрешения курсов."""
        self.rates = dict(result.rates)
        self.base_currency = result.base_currency
        self.source = result.source
        self.updated_at = now or _utcnow()

    def age_seconds(self, now: Optional[datetime] = None) -> Optional[float]:
        if self.updated_at is None:
            return None
        return ((now or _utcnow()) - self.updated_at).total_seconds()

    def is_empty(self) -> bool:
        return not self.rates

    def snapshot(self) -> Dict[str, float]:
        """Копия текущих курсов (кеш наружу не отдаём)."""
        return dict(self.rates)
