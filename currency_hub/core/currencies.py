from __future__ import annotations

from typing import FrozenSet, Tuple

from .exceptions import CurrencyNotFoundError

# Коды валют, которые публикует ExchangeRate-API (v6).
# Порядок фиксирован: ZWL последний в перечне.
SUPPORTED_CURRENCIES: Tuple[str, ...] = (
    "AED", "AFN", "ALL", "AMD", "ANG", "AOA", "ARS", "AUD", "AWG", "AZN",
    "BAM", "BBD", "BDT", "BGN", "BHD", "BIF", "BMD", "BND", "BOB", "BRL",
    "BSD", "BTN", "BWP", "BYN", "BZD", "CAD", "CDF", "CHF", "CLP", "CNY",
    "COP", "CRC", "CUP", "CVE", "CZK", "DJF", "DKK", "DOP", "DZD", "EGP",
    "ERN", "ETB", "EUR", "FJD", "FKP", "FOK", "GBP", "GEL", "GGP", "GHS",
    "GIP", "GMD", "GNF", "GTQ", "GYD", "HKD", "HNL", "HRK", "HTG", "HUF",
    "IDR", "ILS", "IMP", "INR", "IQD", "IRR", "ISK", "JEP", "JMD", "JOD",
    "JPY", "KES", "KGS", "KHR", "KID", "KMF", "KRW", "KWD", "KYD", "KZT",
    "LAK", "LBP", "LKR", "LRD", "LSL", "LYD", "MAD", "MDL", "MGA", "MKD",
    "MMK", "MNT", "MOP", "MRU", "MUR", "MVR", "MWK", "MXN", "MYR", "MZN",
    "NAD", "NGN", "NIO", "NOK", "NPR", "NZD", "OMR", "PAB", "PEN", "PGK",
    "PHP", "PKR", "PLN", "PYG", "QAR", "RON", "RSD", "RUB", "RWF", "SAR",
    "SBD", "SCR", "SDG", "SEK", "SGD", "SHP", "SLE", "SOS", "SRD", "SSP",
    "STN", "SYP", "SZL", "THB", "TJS", "TMT", "TND", "TOP", "TRY", "TTD",
    "TVD", "TWD", "TZS", "UAH", "UGX", "USD", "UYU", "UZS", "VES", "VND",
    "VUV", "WST", "XAF", "XCD", "XDR", "XOF", "XPF", "YER", "ZAR", "ZMW",
    "ZWL",
)

_SUPPORTED_SET: FrozenSet[str] = frozenset(SUPPORTED_CURRENCIES)


def is_supported(code: str) -> bool:
    """Проверить, входит ли код в перечень поддерживаемых валют."""
    if not isinstance(code, str):
        return False
    return code.strip().upper() in _SUPPORTED_SET


def get_currency(code: str) -> str:
    """Вернуть нормализованный код поддерживаемой валюты.

    Любой непустой код вне перечня (в том числе "EURO" или "US")
    даёт CurrencyNotFoundError.
    """
    if not isinstance(code, str):
        raise TypeError("Код валюты должен быть строкой.")
    normalized = code.strip().upper()
    if not normalized:
        raise ValueError("Код валюты не может быть пустым.")
    if normalized not in _SUPPORTED_SET:
        raise CurrencyNotFoundError(
            f"Неизвестная валюта '{normalized}'",
        )
    return normalized
