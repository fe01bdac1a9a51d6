# src/geofx/adapters/providers/exchangerate_api.py
"""
ExchangeRate-API Provider

Free "latest" endpoint keyed by base currency.
Expected body: {"base": "USD", "rates": {"NGN": 1530.5, "EUR": 0.92, ...}}

Files that USE this module:
- geofx.application.rates_service (first provider)
- tests.test_providers (unit tests)
"""
from typing import Any, Dict, Optional, Tuple

from geofx.adapters.providers.base import RateProvider
from geofx.shared.validators import parse_positive_rate


class ExchangeRateApiProvider(RateProvider):
    name = "exchangerate-api.com"
    url = "https://api.exchangerate-api.com/v4/latest/{base}"

    def build_request(self, base: str, target: str) -> Tuple[str, Dict[str, Any]]:
        return self.url.format(base=base.upper()), {}

    def parse(self, data: Any, base: str, target: str) -> Optional[float]:
        if not isinstance(data, dict) or not isinstance(data.get("rates"), dict):
            return None
        return parse_positive_rate(data["rates"].get(target.upper()))
