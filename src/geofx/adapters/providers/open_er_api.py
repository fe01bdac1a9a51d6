# src/geofx/adapters/providers/open_er_api.py
"""
Open Exchange Rates (open.er-api.com) Provider

Expected body: {"result": "success", "base_code": "USD", "rates": {"NGN": 1530.5, ...}}
Errors come back as {"result": "error", "error-type": "..."}.

Files that USE this module:
- geofx.application.rates_service (second provider)
- tests.test_providers (unit tests)
"""
from typing import Any, Dict, Optional, Tuple

from geofx.adapters.providers.base import RateProvider
from geofx.shared.validators import parse_positive_rate


class OpenErApiProvider(RateProvider):
    name = "open.er-api.com"
    url = "https://open.er-api.com/v6/latest/{base}"

    def build_request(self, base: str, target: str) -> Tuple[str, Dict[str, Any]]:
        return self.url.format(base=base.upper()), {}

    def parse(self, data: Any, base: str, target: str) -> Optional[float]:
        if not isinstance(data, dict) or data.get("result") != "success":
            return None
        rates = data.get("rates")
        if not isinstance(rates, dict):
            return None
        return parse_positive_rate(rates.get(target.upper()))
