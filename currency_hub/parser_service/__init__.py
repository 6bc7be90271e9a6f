"""Parser Service: получение курсов валют из внешнего API.

Состоит из:
- config: конфигурация API, снимка и таймаутов
- parser: извлечение курсов из ответа провайдера и из снимка
- api_clients: работа с ExchangeRate-API
- storage: чтение/запись снимка default_rates.json
- updater: получение живых курсов с записью снимка
"""
from __future__ import annotations

__all__ = [
    "config",
    "parser",
    "api_clients",
    "storage",
    "updater",
]
