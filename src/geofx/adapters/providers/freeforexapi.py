# src/geofx/adapters/providers/freeforexapi.py
"""
FreeForexAPI Provider

Pair-based endpoint.
Expected body: {"rates": {"USDNGN": {"rate": 1530.5, "timestamp": 1700000000}}, "code": 200}

Files that USE this module:
- geofx.application.rates_service (third provider)
- tests.test_providers (unit tests)
"""
from typing import Any, Dict, Optional, Tuple

from geofx.adapters.providers.base import RateProvider
from geofx.shared.validators import parse_positive_rate


class FreeForexApiProvider(RateProvider):
    name = "freeforexapi.com"
    url = "https://www.freeforexapi.com/api/live"

    @staticmethod
    def _pair(base: str, target: str) -> str:
        return f"{base.upper()}{target.upper()}"

    def build_request(self, base: str, target: str) -> Tuple[str, Dict[str, Any]]:
        return self.url, {"pairs": self._pair(base, target)}

    def parse(self, data: Any, base: str, target: str) -> Optional[float]:
        if not isinstance(data, dict) or not isinstance(data.get("rates"), dict):
            return None
        quote = data["rates"].get(self._pair(base, target))
        if not isinstance(quote, dict):
            return None
        return parse_positive_rate(quote.get("rate"))
