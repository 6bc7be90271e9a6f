from __future__ import annotations

import inspect
from functools import wraps
from typing import Any, Callable, Dict, Optional

from .logging_config import get_actions_logger

FuncType = Callable[..., Any]


def _format_amount(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{float(value):.4f}"
    return "-"


def log_action(
    action: Optional[str] = None,
) -> Callable[[FuncType], FuncType]:
    """Декоратор для логирования операций конвертации.

    Логируем на уровне INFO структуру:
    - action (CONVERT/GET_RATE)
    - from, to, amount (позиционные или именованные аргументы)
    - result и результат OK/ERROR
    - error_type и error_message при исключениях

    Декоратор не глотает исключения, только фиксирует их в логах.
    """

    def decorator(func: FuncType) -> FuncType:
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            logger = get_actions_logger()
            act = action or func.__name__.upper()

            try:
                bound: Dict[str, Any] = dict(
                    signature.bind_partial(*args, **kwargs).arguments,
                )
            except TypeError:
                bound = dict(kwargs)

            from_code = bound.get("from_currency") or "-"
            to_code = bound.get("to_currency") or "-"
            amount_repr = _format_amount(bound.get("amount"))

            try:
                result = func(*args, **kwargs)
            except Exception as exc:  # noqa: BLE001
                logger.error(
                    "%s from='%s' to='%s' amount=%s result=ERROR "
                    "error_type='%s' error_message='%s'",
                    act,
                    from_code,
                    to_code,
                    amount_repr,
                    type(exc).__name__,
                    exc,
                )
                raise

            logger.info(
                "%s from='%s' to='%s' amount=%s value=%s result=OK",
                act,
                from_code,
                to_code,
                amount_repr,
                _format_amount(result),
            )
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
