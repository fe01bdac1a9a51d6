# src/geofx/adapters/providers/fastforex.py
"""
FastForex API Provider

This module implements the FastForex client used as the last live source.
It is only wired in when an API key is configured.

Expected body: {"base": "USD", "result": {"NGN": 1530.5}, "updated": "..."}
(older responses use "results" instead of "result").

Files that USE this module:
- geofx.application.rates_service (optional fourth provider)
- geofx.app (added when FASTFOREX_KEY is set)
- tests.test_providers (unit tests)

Files that this module USES:
- geofx.adapters.providers.base (RateProvider interface)
- geofx.config (settings for API key)
"""
import logging
from typing import Any, Dict, Optional, Tuple

from geofx.adapters.providers.base import RateProvider
from geofx.config import settings
from geofx.shared.validators import parse_positive_rate

log = logging.getLogger(__name__)


class FastForexProvider(RateProvider):
    name = "fastforex"
    url = "https://api.fastforex.io/fetch-one"

    def __init__(self, api_key: Optional[str] = None):
        """
        Initialize FastForex API provider.

        Args:
            api_key: Optional API key (defaults to settings.fastforex_key)

        Raises:
            ValueError: If API key is missing or empty
        """
        self.api_key = api_key or settings.fastforex_key
        if not self.api_key or not self.api_key.strip():
            raise ValueError("FASTFOREX_KEY is missing or empty.")

    def build_request(self, base: str, target: str) -> Tuple[str, Dict[str, Any]]:
        return self.url, {"from": base.upper(), "to": target.upper(), "api_key": self.api_key}

    def parse(self, data: Any, base: str, target: str) -> Optional[float]:
        if not isinstance(data, dict):
            return None
        results = data.get("result")
        if not isinstance(results, dict):
            results = data.get("results")
        if not isinstance(results, dict):
            log.debug("FastForex unexpected response structure: %s", data)
            return None
        return parse_positive_rate(results.get(target.upper()))
