"""Тесты перечня валют, встроенной таблицы и валидаторов."""
from __future__ import annotations

import math

import pytest

from currency_hub.core.currencies import (
    SUPPORTED_CURRENCIES,
    get_currency,
    is_supported,
)
from currency_hub.core.default_rates import DEFAULT_RATES, get_default_rates
from currency_hub.core.exceptions import CurrencyNotFoundError
from currency_hub.core.utils import validate_amount, validate_currency_code


class TestSupportedCurrencies:
    def test_codes_are_unique_three_letter_upper(self):
        assert len(SUPPORTED_CURRENCIES) == len(set(SUPPORTED_CURRENCIES))
        for code in SUPPORTED_CURRENCIES:
            assert len(code) == 3 and code.isupper()

    def test_last_code_is_zwl(self):
        assert SUPPORTED_CURRENCIES[-1] == "ZWL"

    def test_is_supported_normalizes_case(self):
        assert is_supported("usd")
        assert is_supported(" IDR ")
        assert not is_supported("XXX")
        assert not is_supported(None)  # type: ignore[arg-type]

    def test_get_currency_returns_normalized_code(self):
        assert get_currency(" eur ") == "EUR"

    def test_get_currency_unknown_code(self):
        """Неизвестный код — CurrencyNotFoundError."""
        with pytest.raises(CurrencyNotFoundError, match="XXX"):
            get_currency("XXX")

    @pytest.mark.parametrize("code", ["US", "USDT", "EURO", "U1D"])
    def test_get_currency_malformed_code(self, code):
        """Код не из трёх букв тоже просто неизвестная валюта."""
        with pytest.raises(CurrencyNotFoundError):
            get_currency(code)

    @pytest.mark.parametrize("code", ["", "   "])
    def test_get_currency_empty_code(self, code):
        with pytest.raises(ValueError):
            get_currency(code)

    def test_get_currency_non_string(self):
        with pytest.raises(TypeError):
            get_currency(840)  # type: ignore[arg-type]


class TestDefaultRates:
    def test_covers_every_supported_code(self):
        assert set(DEFAULT_RATES) == set(SUPPORTED_CURRENCIES)

    @pytest.mark.parametrize(
        ("code", "rate"),
        [
            ("USD", 1.0),
            ("IDR", 15925.78),
            ("EUR", 0.95),
            ("GBP", 0.79),
            ("JPY", 149.72),
            ("CNY", 7.28),
            ("AUD", 1.54),
            ("CAD", 1.40),
            ("CHF", 0.89),
            ("MXN", 20.42),
            ("NGN", 1674.42),
            ("INR", 84.75),
            ("BRL", 6.02),
            ("RUB", 106.29),
            ("ZAR", 18.15),
        ],
    )
    def test_major_currency_rates(self, code, rate):
        assert DEFAULT_RATES[code] == rate

    def test_other_codes_use_placeholder(self):
        assert DEFAULT_RATES["AED"] == 1.0
        assert DEFAULT_RATES["ZWL"] == 1.0

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_RATES["USD"] = 2.0  # type: ignore[index]

    def test_get_default_rates_returns_copy(self):
        """Изменение копии не затрагивает встроенную таблицу."""
        rates = get_default_rates()
        rates["USD"] = 42.0

        assert get_default_rates()["USD"] == 1.0
        assert DEFAULT_RATES["USD"] == 1.0


class TestValidators:
    def test_validate_currency_code(self):
        assert validate_currency_code(" jpy ") == "JPY"

    def test_validate_currency_code_type(self):
        with pytest.raises(TypeError):
            validate_currency_code(840)  # type: ignore[arg-type]

    @pytest.mark.parametrize("amount", [0, 0.0, 1, 12.5])
    def test_validate_amount_accepts_non_negative(self, amount):
        assert validate_amount(amount) == float(amount)

    @pytest.mark.parametrize("amount", [-1, -0.01, math.inf, math.nan])
    def test_validate_amount_rejects_invalid(self, amount):
        with pytest.raises(ValueError):
            validate_amount(amount)

    @pytest.mark.parametrize("amount", ["10", None, True])
    def test_validate_amount_rejects_non_numbers(self, amount):
        with pytest.raises(TypeError):
            validate_amount(amount)  # type: ignore[arg-type]
