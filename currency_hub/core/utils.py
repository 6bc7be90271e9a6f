from __future__ import annotations

import math


def validate_amount(amount: float) -> float:
    """Проверка суммы для конвертации: конечное число >= 0.

    Возвращает сумму как float.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise TypeError("Сумма должна быть числом.")
    value = float(amount)
    if not math.isfinite(value):
        raise ValueError("Сумма должна быть конечным числом.")
    if value < 0:
        raise ValueError("Сумма не может быть отрицательной.")
    return value


def validate_currency_code(code: str) -> str:
    """Проверка кода валюты: три латинские буквы, приводим к верхнему регистру."""
    if not isinstance(code, str):
        raise TypeError("Код валюты должен быть строкой.")
    normalized = code.strip().upper()
    if not normalized:
        raise ValueError("Код валюты не может быть пустым.")
    if len(normalized) != 3 or not normalized.isascii() or not normalized.isalpha():
        raise ValueError(
            f"Код валюты должен состоять из трёх букв, получено '{normalized}'.",
        )
    return normalized


def validate_rate(value: object) -> float:
    """Привести значение курса к float.

    Курс должен быть конечным положительным числом; bool не считается числом.
    Строки вида "0.95" допускаются (так выглядят значения в старых снимках).
    """
    if isinstance(value, bool):
        raise TypeError("Курс должен быть числом.")
    if isinstance(value, (int, float)):
        rate = float(value)
    elif isinstance(value, str):
        try:
            rate = float(value.strip())
        except ValueError as exc:
            raise ValueError(f"Некорректное значение курса: '{value}'.") from exc
    else:
        raise TypeError("Курс должен быть числом.")

    if not math.isfinite(rate) or rate <= 0:
        raise ValueError(f"Курс должен быть положительным числом, получено {rate}.")
    return rate
