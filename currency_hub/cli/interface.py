from __future__ import annotations

import shlex
from typing import List

from ..core.exceptions import (
    ApiRequestError,
    CurrencyError,
    CurrencyNotFoundError,
)
from ..core.models import RateSource
from ..core.usecases import CurrencyService
from ..core.utils import validate_currency_code

_SOURCE_LABELS = {
    RateSource.LIVE: "ExchangeRate-API",
    RateSource.SNAPSHOT: "локальный снимок",
    RateSource.DEFAULTS: "встроенная таблица",
    RateSource.CACHE: "кеш",
}


def _parse_convert_args(args: List[str]) -> tuple[float, str, str]:
    """Разбор аргументов для команды convert."""
    amount_str: str | None = None
    from_code: str | None = None
    to_code: str | None = None

    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--amount" and i + 1 < len(args):
            amount_str = args[i + 1]
            i += 2
            continue
        if arg == "--from" and i + 1 < len(args):
            from_code = args[i + 1]
            i += 2
            continue
        if arg == "--to" and i + 1 < len(args):
            to_code = args[i + 1]
            i += 2
            continue
        raise ValueError(f"Неизвестный аргумент для convert: {arg}")

    if amount_str is None:
        raise ValueError("Параметр --amount обязателен.")
    if from_code is None:
        raise ValueError("Параметр --from обязателен.")
    if to_code is None:
        raise ValueError("Параметр --to обязателен.")

    try:
        amount = float(amount_str)
    except ValueError as exc:
        raise ValueError("'amount' должен быть неотрицательным числом") from exc

    return amount, from_code, to_code


def _parse_get_rate_args(args: List[str]) -> tuple[str, str]:
    """Разбор аргументов для команды get-rate."""
    from_code: str | None = None
    to_code: str | None = None

    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--from" and i + 1 < len(args):
            from_code = args[i + 1]
            i += 2
            continue
        if arg == "--to" and i + 1 < len(args):
            to_code = args[i + 1]
            i += 2
            continue
        raise ValueError(f"Неизвестный аргумент для get-rate: {arg}")

    if from_code is None:
        raise ValueError("Параметр --from обязателен.")
    if to_code is None:
        raise ValueError("Параметр --to обязателен.")

    return from_code, to_code


def _parse_update_rates_args(args: List[str]) -> str | None:
    """Разобрать аргументы команды update-rates.

    Поддерживается флаг:
    --base <CODE>
    """
    base: str | None = None
    idx = 0

    while idx < len(args):
        token = args[idx]
        if token == "--base":
            if idx + 1 >= len(args):
                raise ValueError("Флаг --base требует значения: код валюты.")
            if base is not None:
                raise ValueError("Параметр --base нельзя указывать несколько раз.")
            base = validate_currency_code(args[idx + 1])
            idx += 2
        else:
            raise ValueError(f"Неизвестный аргумент для update-rates: {token}")

    return base


def _parse_show_rates_args(args: List[str]) -> tuple[str | None, int | None]:
    """Разобрать аргументы команды show-rates.

    Поддерживаются флаги:
    --currency <CODE>
    --top <N>
    Нельзя одновременно использовать --currency и --top.
    """
    currency: str | None = None
    top_n: int | None = None

    idx = 0
    while idx < len(args):
        token = args[idx]
        if token == "--currency":
            if idx + 1 >= len(args):
                raise ValueError("Флаг --currency требует значения: код валюты.")
            if currency is not None:
                raise ValueError(
                    "Параметр --currency нельзя указывать несколько раз.",
                )
            currency = validate_currency_code(args[idx + 1])
            idx += 2
        elif token == "--top":
            if idx + 1 >= len(args):
                raise ValueError(
                    "Флаг --top требует значения: положительное целое число.",
                )
            if top_n is not None:
                raise ValueError("Параметр --top нельзя указывать несколько раз.")
            try:
                value = int(args[idx + 1])
            except ValueError as exc:
                raise ValueError(
                    "Значение --top должно быть целым числом.",
                ) from exc
            if value <= 0:
                raise ValueError("Значение --top должно быть положительным.")
            top_n = value
            idx += 2
        else:
            raise ValueError(f"Неизвестный аргумент для show-rates: {token}")

    if currency is not None and top_n is not None:
        raise ValueError("Нельзя одновременно использовать --currency и --top.")

    return currency, top_n


def _print_currency_hint() -> None:
    print(
        "Проверьте код валюты или выполните "
        "show-rates для списка доступных курсов.",
    )


def _handle_convert(service: CurrencyService, args: List[str]) -> None:
    """Обработчик команды convert."""
    try:
        amount, from_code, to_code = _parse_convert_args(args)
        result = service.convert_currency(
            amount=amount,
            from_currency=from_code,
            to_currency=to_code,
        )
        source = _SOURCE_LABELS.get(service.cache.source, "неизвестно")
        print(
            f"{amount:,.2f} {from_code.strip().upper()} = "
            f"{result:,.2f} {to_code.strip().upper()} (источник: {source})",
        )
    except CurrencyNotFoundError as exc:
        print(str(exc))
        _print_currency_hint()
    except (CurrencyError, TypeError, ValueError) as exc:
        print(str(exc))


def _handle_get_rate(service: CurrencyService, args: List[str]) -> None:
    """Обработчик команды get-rate."""
    try:
        from_code, to_code = _parse_get_rate_args(args)
        rate = service.get_rate(from_code, to_code)

        base = from_code.strip().upper()
        quote = to_code.strip().upper()
        reverse_rate = 1.0 / rate if rate else 0.0

        print(f"Курс {base}→{quote}: {rate:.8f}")
        print(f"Обратный курс {quote}→{base}: {reverse_rate:.8f}")
    except CurrencyNotFoundError as exc:
        print(str(exc))
        _print_currency_hint()
    except (CurrencyError, TypeError, ValueError) as exc:
        print(str(exc))


def _handle_update_rates(service: CurrencyService, args: List[str]) -> None:
    """Обработчик команды update-rates."""
    try:
        base = _parse_update_rates_args(args)
    except ValueError as exc:
        print(str(exc))
        return

    print("Запуск обновления курсов...")
    try:
        result = service.update_rates(base)
    except ApiRequestError as exc:
        print(f"Ошибка при обновлении курсов: {exc}")
        print("Подробности смотрите в logs/actions.log.")
        return

    if not result.ok:
        print("Обновление завершено с ошибками.")
        print("Подробности смотрите в logs/actions.log.")
        return

    source = _SOURCE_LABELS.get(result.source, "неизвестно")
    if result.source is RateSource.LIVE:
        print(
            "Обновление успешно. "
            f"Получено курсов: {len(result.rates)} (база: {result.base_currency}).",
        )
    else:
        print(
            "API недоступен, используются курсы: "
            f"{source} ({len(result.rates)} валют).",
        )


def _handle_show_rates(service: CurrencyService, args: List[str]) -> None:
    """Обработчик команды show-rates."""
    try:
        currency, top_n = _parse_show_rates_args(args)
    except ValueError as exc:
        print(str(exc))
        return

    cache = service.current_rates()
    if cache.is_empty():
        print(
            "Кеш курсов пуст. "
            "Выполните 'update-rates', чтобы загрузить данные.",
        )
        return

    items = sorted(cache.snapshot().items())

    if currency is not None:
        items = [item for item in items if item[0] == currency]
        if not items:
            print(f"Курс для '{currency}' не найден в кеше.")
            return

    if top_n is not None:
        items = sorted(items, key=lambda x: x[1], reverse=True)[:top_n]

    base = cache.base_currency or "?"
    updated = cache.updated_at.strftime("%Y-%m-%d %H:%M:%S") if cache.updated_at else "?"
    source = _SOURCE_LABELS.get(cache.source, "неизвестно")
    print(f"Курсы относительно {base} (источник: {source}, обновлено: {updated}):")
    for code, rate in items:
        print(f"- {code}: {rate:.5f}")


def _dispatch_command(
    service: CurrencyService,
    command: str,
    args: List[str],
) -> None:
    """Диспетчер команд CLI."""
    if command == "convert":
        _handle_convert(service, args)
    elif command == "get-rate":
        _handle_get_rate(service, args)
    elif command == "update-rates":
        _handle_update_rates(service, args)
    elif command == "show-rates":
        _handle_show_rates(service, args)
    elif command in {"exit", "quit"}:
        print("Выход из Currency Hub.")
        raise SystemExit
    else:
        print(
            "Неизвестная команда "
            f"'{command}'. Попробуйте: convert, get-rate, "
            "update-rates, show-rates, exit.",
        )


def run_cli(service: CurrencyService | None = None) -> None:
    """Основной цикл CLI."""
    print("Currency Hub CLI. Введите команду или 'exit' для выхода.")
    if service is None:
        service = CurrencyService()

    while True:
        try:
            raw = input("> ").strip()
        except EOFError:
            print()
            break

        if not raw:
            continue

        try:
            parts = shlex.split(raw)
        except ValueError as exc:
            print(f"Ошибка разбора команды: {exc}")
            continue

        command, *arg_tokens = parts
        try:
            _dispatch_command(service, command, arg_tokens)
        except SystemExit:
            break
