"""Тесты загрузки настроек."""
from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from currency_hub.infra.settings import BASE_DIR, SettingsLoader
from currency_hub.parser_service.config import ParserConfig


class TestSettingsLoader:
    def test_is_singleton(self):
        assert SettingsLoader() is SettingsLoader()

    def test_reads_pyproject_section(self):
        settings = SettingsLoader()

        assert settings.get("default_base_currency") == "USD"
        assert settings.get("rates_ttl_seconds") == 0
        assert settings.get("snapshot_precision") == 2
        assert settings.get("request_timeout") == 10.0

    def test_paths_are_absolute(self):
        settings = SettingsLoader()

        assert settings.get("data_dir") == BASE_DIR / "data"
        assert settings.get("snapshot_file") == BASE_DIR / "data" / "default_rates.json"

    def test_unknown_key_returns_default(self):
        assert SettingsLoader().get("missing", "fallback") == "fallback"


class TestParserConfig:
    def test_defaults_come_from_settings(self, monkeypatch):
        monkeypatch.setenv("EXCHANGERATE_API_KEY", "env-key")

        config = ParserConfig()

        assert config.EXCHANGERATE_API_KEY == "env-key"
        assert config.exchangerate_base_url == "https://v6.exchangerate-api.com/v6"
        assert Path(config.snapshot_file).name == "default_rates.json"
        assert config.supported_currencies[-1] == "ZWL"

    def test_missing_key_is_empty_string(self, monkeypatch):
        monkeypatch.delenv("EXCHANGERATE_API_KEY", raising=False)

        assert ParserConfig().EXCHANGERATE_API_KEY == ""

    def test_is_frozen(self, config):
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.request_timeout = 1.0  # type: ignore[misc]
