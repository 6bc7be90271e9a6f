"""Тесты извлечения курсов из ответа провайдера и из снимка."""
from __future__ import annotations

from currency_hub.core.currencies import SUPPORTED_CURRENCIES
from currency_hub.parser_service.parser import parse_rates

from conftest import provider_payload


class TestParseJson:
    """Разбор корректного JSON."""

    def test_reads_conversion_rates_section(self):
        """Курсы берутся из секции conversion_rates ответа v6."""
        rates = parse_rates(provider_payload(USD=1, EUR=0.95, IDR=15925.78))

        assert rates == {"USD": 1.0, "EUR": 0.95, "IDR": 15925.78}

    def test_reads_rates_section(self):
        """Старый формат с секцией rates тоже поддерживается."""
        rates = parse_rates('{"base": "EUR", "rates": {"USD": 1.08, "EUR": 1}}')

        assert rates == {"USD": 1.08, "EUR": 1.0}

    def test_reads_flat_object(self):
        """Плоский объект CODE → rate (формат снимка)."""
        rates = parse_rates('{\n  "EUR": 0.95,\n  "USD": 1.00\n}\n')

        assert rates == {"EUR": 0.95, "USD": 1.0}

    def test_missing_code_is_omitted(self):
        """Отсутствующая валюта просто не попадает в результат."""
        rates = parse_rates('{"USD": 1.00}', ["USD", "EUR"])

        assert rates == {"USD": 1.0}

    def test_unknown_codes_are_ignored(self):
        """Коды вне поддерживаемого перечня игнорируются."""
        rates = parse_rates({"USD": 1.0, "BTC": 0.000016, "XXX": 5})

        assert rates == {"USD": 1.0}

    def test_malformed_values_are_dropped(self):
        """Некорректные значения отбрасываются, остальные курсы сохраняются."""
        payload = {
            "USD": 1.0,
            "EUR": "abc",
            "GBP": -0.79,
            "JPY": True,
            "CNY": None,
            "INR": 0,
            "BRL": "6.02",
        }

        assert parse_rates(payload) == {"USD": 1.0, "BRL": 6.02}

    def test_only_requested_codes(self):
        """Извлекаются только переданные коды."""
        rates = parse_rates(provider_payload(), ["EUR"])

        assert rates == {"EUR": 0.9213}


class TestParseText:
    """Разбор текста, который не является валидным JSON."""

    def test_fragment_with_closing_brace(self):
        """Фрагмент `"USD":1.00,"EUR":0.95}` даёт оба курса."""
        rates = parse_rates('"USD":1.00,"EUR":0.95}', ["USD", "EUR"])

        assert rates == {"USD": 1.0, "EUR": 0.95}

    def test_fragment_without_eur(self):
        """Фрагмент без EUR даёт только USD."""
        rates = parse_rates('"USD":1.00}', ["USD", "EUR"])

        assert rates == {"USD": 1.0}

    def test_legacy_snapshot_with_trailing_comma(self):
        """Снимок старого формата с запятой после последней строки читается."""
        text = '{\n  "USD": 1.00,\n  "IDR": 15925.78,\n  "ZWL": 1.00,\n}\n'

        assert parse_rates(text) == {"USD": 1.0, "IDR": 15925.78, "ZWL": 1.0}

    def test_unparseable_value_is_skipped(self):
        """Значение, которое не является числом, пропускается."""
        rates = parse_rates('{"USD": 1.00, "EUR": n/a, }', ["USD", "EUR"])

        assert rates == {"USD": 1.0}

    def test_base_code_field_is_not_a_rate(self):
        """Поле "base_code":"USD" не принимается за курс USD."""
        text = '{"base_code":"USD", "conversion_rates": {"EUR":0.9,}'

        assert parse_rates(text, ["USD", "EUR"]) == {"EUR": 0.9}


class TestParseEdgeCases:
    def test_empty_text(self):
        assert parse_rates("") == {}
        assert parse_rates("   \n") == {}

    def test_non_object_json(self):
        assert parse_rates("[1, 2, 3]") == {}

    def test_full_code_set(self):
        """Ответ со всеми кодами даёт курс для каждого из них."""
        payload = {code: 1.5 for code in SUPPORTED_CURRENCIES}

        rates = parse_rates(provider_payload(**payload))

        assert set(rates) == set(SUPPORTED_CURRENCIES)
