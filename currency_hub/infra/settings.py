from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

BASE_DIR = Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class _Defaults:
    """Значения по умолчанию для конфигурации проекта."""

    data_dir: Path = BASE_DIR / "data"
    logs_dir: Path = BASE_DIR / "logs"
    snapshot_name: str = "default_rates.json"
    rates_ttl_seconds: int = 0
    default_base_currency: str = "USD"
    request_timeout: float = 10.0
    exchangerate_api_url: str = "https://v6.exchangerate-api.com/v6"
    snapshot_precision: int = 2
    warm_on_start: bool = True
    log_level: str = "INFO"
    log_format: str = (
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
    )


class SettingsLoader:
    """Singleton для загрузки и кеширования конфигурации проекта.

    Источник конфигурации:
    - pyproject.toml → секция [tool.currency_hub]
    - при отсутствии ключа используется значение по умолчанию.

    Доступные ключи:
    - data_dir: каталог для снимка курсов
    - logs_dir: каталог логов
    - snapshot_file: путь к снимку курсов (по умолчанию data_dir/default_rates.json)
    - rates_ttl_seconds: сколько секунд живой курс считается свежим (0 — всегда
      запрашивать API заново)
    - default_base_currency: базовая валюта для прогрева кеша
    - request_timeout: таймаут HTTP-запроса в секундах
    - exchangerate_api_url: базовый URL ExchangeRate-API
    - snapshot_precision: сколько знаков после запятой писать в снимок
    - warm_on_start: прогревать ли кеш при создании сервиса
    - log_level / log_format: настройки логирования
    """

    _instance: "SettingsLoader | None" = None
    _initialized: bool = False

    def __new__(cls, *args: Any, **kwargs: Any) -> "SettingsLoader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if self.__class__._initialized:
            return
        self.__class__._initialized = True

        self._defaults = _Defaults()
        self._config: Dict[str, Any] = {}
        self.reload()

    def _load_from_pyproject(self) -> Dict[str, Any]:
        """Загрузка конфигурации из pyproject.toml (секция [tool.currency_hub])."""
        pyproject_path = BASE_DIR / "pyproject.toml"
        if not pyproject_path.exists():
            return {}

        with pyproject_path.open("rb") as f:
            data = tomllib.load(f)

        tool_section = data.get("tool", {})
        return tool_section.get("currency_hub", {}) or {}

    def reload(self) -> None:
        """Полная перезагрузка конфигурации из pyproject.toml."""
        raw = self._load_from_pyproject()
        defaults = self._defaults

        cfg: Dict[str, Any] = {}

        data_dir = Path(raw.get("data_dir", defaults.data_dir))
        if not data_dir.is_absolute():
            data_dir = BASE_DIR / data_dir
        logs_dir = Path(raw.get("logs_dir", defaults.logs_dir))
        if not logs_dir.is_absolute():
            logs_dir = BASE_DIR / logs_dir

        snapshot_file = Path(
            raw.get("snapshot_file", data_dir / defaults.snapshot_name),
        )
        if not snapshot_file.is_absolute():
            snapshot_file = BASE_DIR / snapshot_file

        cfg["data_dir"] = data_dir
        cfg["logs_dir"] = logs_dir
        cfg["snapshot_file"] = snapshot_file
        cfg["rates_ttl_seconds"] = int(
            raw.get("rates_ttl_seconds", defaults.rates_ttl_seconds),
        )
        cfg["default_base_currency"] = str(
            raw.get(
                "default_base_currency",
                defaults.default_base_currency,
            ),
        ).upper()
        cfg["request_timeout"] = float(
            raw.get("request_timeout", defaults.request_timeout),
        )
        cfg["exchangerate_api_url"] = str(
            raw.get("exchangerate_api_url", defaults.exchangerate_api_url),
        ).rstrip("/")
        cfg["snapshot_precision"] = int(
            raw.get("snapshot_precision", defaults.snapshot_precision),
        )
        cfg["warm_on_start"] = bool(
            raw.get("warm_on_start", defaults.warm_on_start),
        )
        cfg["log_level"] = str(
            raw.get("log_level", defaults.log_level),
        ).upper()
        cfg["log_format"] = str(
            raw.get("log_format", defaults.log_format),
        )

        self._config = cfg

    def get(self, key: str, default: Any | None = None) -> Any:
        """Получить значение конфигурации по ключу.

        Если ключ не найден, возвращается default.
        """
        return self._config.get(key, default)
