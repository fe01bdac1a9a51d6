# src/geofx/adapters/providers/base.py
"""
Base Provider Interface for Exchange Rate Providers

This module defines the abstract base class for all exchange rate providers.
A provider knows how to ask its service for a base→target quote and how to
pull the numeric rate out of that service's own response shape.

Files that USE this module:
- geofx.adapters.providers.exchangerate_api
- geofx.adapters.providers.open_er_api
- geofx.adapters.providers.freeforexapi
- geofx.adapters.providers.fastforex
- geofx.application.rates_service (ExchangeRateProvider iterates RateProviders)

Files that this module USES:
- None (pure interface definition)
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple


class RateProvider(ABC):
    name: str = "provider"

    @abstractmethod
    def build_request(self, base: str, target: str) -> Tuple[str, Dict[str, Any]]:
        """Return (url, query params) for a base→target quote."""
        raise NotImplementedError

    @abstractmethod
    def parse(self, data: Any, base: str, target: str) -> Optional[float]:
        """Return units of target per 1 base, or None if the body has no usable rate."""
        raise NotImplementedError
