"""Извлечение курсов из ответа провайдера или из снимка на диске.

Правило одно для обоих источников: берём только поддерживаемые коды,
неизвестные ключи игнорируем, некорректные значения отбрасываем
без ошибки для всего ответа.
"""
from __future__ import annotations

import json
import re
from typing import Any, Dict, Iterable, Mapping

from ..core.currencies import SUPPORTED_CURRENCIES
from ..core.utils import validate_rate
from ..logging_config import get_actions_logger

# Секции с курсами в порядке приоритета: v6 отдаёт conversion_rates,
# старые API и снимки используют rates или плоский объект.
_RATE_SECTIONS = ("conversion_rates", "rates")


def _rates_section(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, dict):
        return {}
    for key in _RATE_SECTIONS:
        section = data.get(key)
        if isinstance(section, dict):
            return section
    return data


def _extract(
    section: Mapping[str, Any],
    supported: Iterable[str],
) -> Dict[str, float]:
    logger = get_actions_logger()
    result: Dict[str, float] = {}

    for code in supported:
        if code not in section:
            continue
        try:
            result[code] = validate_rate(section[code])
        except (TypeError, ValueError) as exc:
            logger.debug(
                "RATES_PARSE status=SKIP code=%s error=%s",
                code,
                exc,
            )
    return result


def _scan(text: str, supported: Iterable[str]) -> Dict[str, float]:
    """Разбор текста, который не является валидным JSON.

    Значение идёт сразу после `"<CODE>":` и заканчивается перед
    ближайшей `,` или `}`. Так читаются снимки старого формата
    с запятой после последней строки и обрезанные ответы.
    """
    section: Dict[str, str] = {}
    for code in supported:
        match = re.search(rf'"{code}"\s*:\s*([^,}}]*)', text)
        if match is None:
            continue
        section[code] = match.group(1).strip()
    return _extract(section, supported)


def parse_rates(
    payload: str | Mapping[str, Any],
    supported: Iterable[str] = SUPPORTED_CURRENCIES,
) -> Dict[str, float]:
    """Вернуть словарь CODE → rate для поддерживаемых валют.

    payload — текст ответа/снимка или уже декодированный JSON-объект.
    Отсутствующие коды просто не попадают в результат.
    """
    codes = tuple(supported)

    if isinstance(payload, str):
        if not payload.strip():
            return {}
        try:
            data = json.loads(payload)
        except json.JSONDecodeError:
            return _scan(payload, codes)
    else:
        data = payload

    return _extract(_rates_section(data), codes)
