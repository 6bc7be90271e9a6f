"""Встроенная таблица курсов: последний уровень цепочки fallback.

Курсы выражены относительно USD. Для валют без явного курса
используется условное значение 1.0.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping

from .currencies import SUPPORTED_CURRENCIES

PLACEHOLDER_RATE = 1.0

_MAJOR_RATES: Dict[str, float] = {
    "USD": 1.0,
    "IDR": 15925.78,
    "EUR": 0.95,
    "GBP": 0.79,
    "JPY": 149.72,
    "CNY": 7.28,
    "AUD": 1.54,
    "CAD": 1.40,
    "CHF": 0.89,
    "MXN": 20.42,
    "NGN": 1674.42,
    "INR": 84.75,
    "BRL": 6.02,
    "RUB": 106.29,
    "ZAR": 18.15,
}


def _build_default_rates() -> Mapping[str, float]:
    rates = {code: PLACEHOLDER_RATE for code in SUPPORTED_CURRENCIES}
    rates.update(_MAJOR_RATES)
    return MappingProxyType(rates)


DEFAULT_RATES: Mapping[str, float] = _build_default_rates()


def get_default_rates() -> Dict[str, float]:
    """Вернуть копию встроенной таблицы курсов (без I/O)."""
    return dict(DEFAULT_RATES)
