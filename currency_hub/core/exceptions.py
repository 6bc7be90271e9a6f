from __future__ import annotations


class CurrencyError(Exception):
    """Базовое исключение для ошибок, связанных с валютами и курсами."""


class CurrencyNotFoundError(CurrencyError):
    """Неизвестная валюта или валюта, которой нет в текущем наборе курсов."""


class ApiRequestError(CurrencyError):
    """Ошибка при обращении к внешнему API курсов (сеть, HTTP, ключ)."""


class RateParseError(CurrencyError):
    """В ответе или снимке не найдено ни одного корректного курса."""


class StorageError(CurrencyError):
    """Ошибка чтения или записи снимка курсов на диске."""
