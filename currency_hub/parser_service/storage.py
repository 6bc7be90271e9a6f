from __future__ import annotations

import contextlib
import os
from pathlib import Path
from typing import Dict, Mapping

from ..core.exceptions import StorageError
from ..core.models import FailureKind, RateResult, RateSource
from ..logging_config import get_actions_logger
from .config import ParserConfig
from .parser import parse_rates


# Значащих цифр для курсов, которые при фиксированной точности стали бы 0.
_SMALL_RATE_DIGITS = 6


def _format_rate(rate: float, precision: int) -> str:
    value = float(rate)
    text = f"{value:.{precision}f}"
    if value > 0 and float(text) == 0:
        return f"{value:.{_SMALL_RATE_DIGITS}g}"
    return text


def format_snapshot(rates: Mapping[str, float], precision: int = 2) -> str:
    """Сериализовать курсы в текст снимка.

    Формат: строгий JSON, по одной паре на строку, ключи отсортированы:
    {
      "EUR": 0.95,
      "USD": 1.00
    }
    Курс меньше половины последнего разряда пишется
    в экспоненциальной записи, чтобы не превратиться в 0.
    """
    lines = [
        f'  "{code}": {_format_rate(rate, precision)}'
        for code, rate in sorted(rates.items())
    ]
    if not lines:
        return "{\n}\n"
    return "{\n" + ",\n".join(lines) + "\n}\n"


def _atomic_write(path: Path, text: str) -> None:
    """Атомарная запись текста в файл.

    Пишем во временный файл и затем заменяем основной через os.replace.
    """
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tmp_path.open("w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_path, path)
    except OSError as exc:
        with contextlib.suppress(OSError):
            tmp_path.unlink(missing_ok=True)
        raise StorageError(
            f"Не удалось записать снимок курсов {path}: {exc}",
        ) from exc


class RateStore:
    """Снимок последних удачно полученных курсов на диске.

    Файл перезаписывается целиком при каждом save(). Ошибки ввода-вывода
    не пробрасываются: они пишутся в лог, а вызывающий получает
    False / пустой словарь и идёт дальше по цепочке fallback.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()
        self._logger = get_actions_logger()

    @property
    def path(self) -> Path:
        return Path(self.config.snapshot_file)

    def save(self, rates: Mapping[str, float]) -> bool:
        """Перезаписать снимок. Возвращает True, если файл записан."""
        text = format_snapshot(rates, self.config.snapshot_precision)
        try:
            _atomic_write(self.path, text)
        except StorageError as exc:
            self._logger.error(
                "RATES_SNAPSHOT action=SAVE status=ERROR error=%s",
                exc,
            )
            return False

        self._logger.info(
            "RATES_SNAPSHOT action=SAVE status=OK path=%s rates=%d",
            self.path,
            len(rates),
        )
        return True

    def load_result(self) -> RateResult:
        """Прочитать снимок и вернуть результат с видом ошибки."""
        path = self.path
        if not path.exists():
            return RateResult.failed(
                RateSource.SNAPSHOT,
                FailureKind.EMPTY,
                f"снимок {path} отсутствует",
            )

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self._logger.warning(
                "RATES_SNAPSHOT action=LOAD status=ERROR path=%s error=%s",
                path,
                exc,
            )
            return RateResult.failed(
                RateSource.SNAPSHOT,
                FailureKind.STORAGE,
                str(exc),
            )

        rates: Dict[str, float] = parse_rates(
            text,
            self.config.supported_currencies,
        )
        if not rates:
            self._logger.warning(
                "RATES_SNAPSHOT action=LOAD status=NO_DATA path=%s",
                path,
            )
            return RateResult.failed(
                RateSource.SNAPSHOT,
                FailureKind.PARSE,
                f"в снимке {path} нет корректных курсов",
            )

        self._logger.info(
            "RATES_SNAPSHOT action=LOAD status=OK path=%s rates=%d",
            path,
            len(rates),
        )
        return RateResult.success(rates, RateSource.SNAPSHOT)

    def load(self) -> Dict[str, float]:
        """Прочитать снимок; пустой словарь, если читать нечего."""
        return self.load_result().rates
