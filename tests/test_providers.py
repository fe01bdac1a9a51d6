# tests/test_providers.py
"""
Provider Tests - Unit Tests for Exchange Rate Provider Adapters

This module contains unit tests for every RateProvider: the request each one
builds and how it parses its own response shape, including malformed and
non-positive values.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- geofx.adapters.providers (provider classes under test)
- unittest.mock (patch for settings)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from unittest.mock import patch  # Patching settings without touching the environment

from geofx.adapters.providers import (
    ExchangeRateApiProvider,
    FastForexProvider,
    FreeForexApiProvider,
    OpenErApiProvider,
)


class TestExchangeRateApiProvider:
    def test_build_request_uses_upper_case_base(self):
        url, params = ExchangeRateApiProvider().build_request("usd", "ngn")
        assert url == "https://api.exchangerate-api.com/v4/latest/USD"
        assert params == {}

    def test_parse_success(self):
        data = {"base": "USD", "rates": {"NGN": 1530.5, "EUR": 0.92}}
        assert ExchangeRateApiProvider().parse(data, "usd", "ngn") == 1530.5

    def test_parse_missing_currency(self):
        data = {"rates": {"EUR": 0.92}}
        assert ExchangeRateApiProvider().parse(data, "usd", "ngn") is None

    def test_parse_rejects_non_positive_and_non_numeric(self):
        provider = ExchangeRateApiProvider()
        assert provider.parse({"rates": {"NGN": 0}}, "usd", "ngn") is None
        assert provider.parse({"rates": {"NGN": -3}}, "usd", "ngn") is None
        assert provider.parse({"rates": {"NGN": "abc"}}, "usd", "ngn") is None
        assert provider.parse({"rates": {"NGN": True}}, "usd", "ngn") is None

    def test_parse_accepts_numeric_string(self):
        assert ExchangeRateApiProvider().parse({"rates": {"NGN": "1500"}}, "usd", "ngn") == 1500.0

    def test_parse_malformed_body(self):
        provider = ExchangeRateApiProvider()
        assert provider.parse(None, "usd", "ngn") is None
        assert provider.parse([], "usd", "ngn") is None
        assert provider.parse({"rates": "oops"}, "usd", "ngn") is None


class TestOpenErApiProvider:
    def test_build_request(self):
        url, params = OpenErApiProvider().build_request("usd", "kes")
        assert url == "https://open.er-api.com/v6/latest/USD"
        assert params == {}

    def test_parse_success(self):
        data = {"result": "success", "rates": {"KES": 129.4}}
        assert OpenErApiProvider().parse(data, "usd", "kes") == 129.4

    def test_parse_requires_success_result(self):
        data = {"result": "error", "rates": {"KES": 129.4}}
        assert OpenErApiProvider().parse(data, "usd", "kes") is None

    def test_parse_missing_rates(self):
        assert OpenErApiProvider().parse({"result": "success"}, "usd", "kes") is None


class TestFreeForexApiProvider:
    def test_build_request_uses_pair(self):
        url, params = FreeForexApiProvider().build_request("usd", "gbp")
        assert url == "https://www.freeforexapi.com/api/live"
        assert params == {"pairs": "USDGBP"}

    def test_parse_success(self):
        data = {"rates": {"USDGBP": {"rate": 0.79, "timestamp": 1700000000}}, "code": 200}
        assert FreeForexApiProvider().parse(data, "usd", "gbp") == 0.79

    def test_parse_wrong_pair(self):
        data = {"rates": {"USDEUR": {"rate": 0.92}}}
        assert FreeForexApiProvider().parse(data, "usd", "gbp") is None

    def test_parse_quote_not_a_dict(self):
        data = {"rates": {"USDGBP": 0.79}}
        assert FreeForexApiProvider().parse(data, "usd", "gbp") is None


class TestFastForexProvider:
    def test_init_with_explicit_key(self):
        provider = FastForexProvider(api_key="abcdef123456")
        assert provider.api_key == "abcdef123456"

    def test_init_without_api_key(self):
        with patch("geofx.adapters.providers.fastforex.settings") as mock_settings:
            mock_settings.fastforex_key = ""
            with pytest.raises(ValueError, match="FASTFOREX_KEY is missing or empty"):
                FastForexProvider()

    def test_init_with_whitespace_key(self):
        with pytest.raises(ValueError):
            FastForexProvider(api_key="   ")

    def test_build_request(self):
        url, params = FastForexProvider(api_key="abcdef123456").build_request("usd", "zar")
        assert url == "https://api.fastforex.io/fetch-one"
        assert params == {"from": "USD", "to": "ZAR", "api_key": "abcdef123456"}

    def test_parse_result_block(self):
        data = {"base": "USD", "result": {"ZAR": 18.2}}
        assert FastForexProvider(api_key="abcdef123456").parse(data, "usd", "zar") == 18.2

    def test_parse_results_block(self):
        data = {"base": "USD", "results": {"ZAR": 18.2}}
        assert FastForexProvider(api_key="abcdef123456").parse(data, "usd", "zar") == 18.2

    def test_parse_unexpected_structure(self):
        provider = FastForexProvider(api_key="abcdef123456")
        assert provider.parse({"error": "Invalid key"}, "usd", "zar") is None
        assert provider.parse("nope", "usd", "zar") is None
