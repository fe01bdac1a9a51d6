# src/geofx/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains application services that orchestrate domain logic.
No direct I/O - external endpoints are reached through adapters.
"""

from geofx.application.classifier import AgreementCurrencyClassifier, EarningsSummary
from geofx.application.currency_store import CurrencyStore
from geofx.application.geo_resolver import GeoCoordinateResolver
from geofx.application.location_chain import LocationFallbackChain
from geofx.application.rates_service import ExchangeRateProvider, default_providers
from geofx.application.reverse_geocoder import ReverseGeocoder, default_geocoders

__all__ = [
    "GeoCoordinateResolver",
    "ReverseGeocoder",
    "default_geocoders",
    "LocationFallbackChain",
    "ExchangeRateProvider",
    "default_providers",
    "CurrencyStore",
    "AgreementCurrencyClassifier",
    "EarningsSummary",
]
