# src/geofx/adapters/providers/__init__.py
"""
Provider Adapters - Exchange Rate API Clients

This package contains adapters for external exchange rate APIs.
All providers implement the RateProvider interface.
"""

from geofx.adapters.providers.base import RateProvider
from geofx.adapters.providers.exchangerate_api import ExchangeRateApiProvider
from geofx.adapters.providers.fastforex import FastForexProvider
from geofx.adapters.providers.freeforexapi import FreeForexApiProvider
from geofx.adapters.providers.open_er_api import OpenErApiProvider

__all__ = [
    "RateProvider",
    "ExchangeRateApiProvider",
    "OpenErApiProvider",
    "FreeForexApiProvider",
    "FastForexProvider",
]
