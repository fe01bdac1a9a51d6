# src/geofx/app.py
"""
Application Entry Point - Engine Wiring and Startup

This module serves as the composition root for the geofx engine.
It wires all dependencies from settings and provides a small command-line
entry point that resolves the visitor's currency once and prints it.

Files that USE this module:
- geofx console script (pyproject.toml)
- tests.test_app (wiring tests)

Files that this module USES:
- geofx.shared.logging_conf (setup_logging for logging configuration)
- geofx.config (settings for configuration management)
- geofx.adapters.* (HTTP client, positioning, persistence)
- geofx.application.* (resolver, geocoder, fallback chain, rates, store)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import argparse  # Command-line flags
import asyncio  # Event loop for the async engine
import logging  # Standard library for logging messages and errors
from datetime import timedelta  # TTL windows
from typing import List, Optional

from geofx.adapters.formatting import state_lines
from geofx.adapters.geocoders import BigDataCloudGeocoder, GeocodeXyzGeocoder, PositionstackGeocoder
from geofx.adapters.http_client import HttpClient
from geofx.adapters.persistence import JsonFileStore, KeyValueStore, LocationCache
from geofx.adapters.positioning import IpApiPositionSource, PositionSource
from geofx.application.currency_store import CurrencyStore
from geofx.application.geo_resolver import GeoCoordinateResolver
from geofx.application.location_chain import LocationFallbackChain
from geofx.application.rates_service import ExchangeRateProvider, default_providers
from geofx.application.reverse_geocoder import ReverseGeocoder
from geofx.config import Settings
from geofx.shared.logging_conf import setup_logging


def build_currency_store(
    settings: Settings,
    client: Optional[HttpClient] = None,
    position_source: Optional[PositionSource] = None,
    store: Optional[KeyValueStore] = None,
) -> CurrencyStore:
    """
    Wire a CurrencyStore with its whole dependency graph.

    Args:
        settings: Engine configuration
        client: Optional shared HttpClient (defaults to one using settings timeouts)
        position_source: Optional positioning capability (defaults to IP positioning)
        store: Optional durable storage (defaults to the JSON cache file)

    Returns:
        CurrencyStore ready for initialize()
    """
    client = client or HttpClient(timeout=settings.http_timeout_seconds)
    if position_source is None:
        position_source = IpApiPositionSource(
            client, url=settings.ipapi_url, timeout=settings.geolocation_timeout_seconds
        )
    store = store or JsonFileStore(settings.location_cache_file)

    resolver = GeoCoordinateResolver(position_source, timeout=settings.geolocation_timeout_seconds)
    geocoder = ReverseGeocoder(
        client,
        geocoders=[
            BigDataCloudGeocoder(),
            GeocodeXyzGeocoder(),
            PositionstackGeocoder(access_key=settings.positionstack_access_key),
        ],
        timeout=settings.http_timeout_seconds,
    )
    cache = LocationCache(store, ttl=timedelta(hours=settings.location_cache_hours))
    chain = LocationFallbackChain(
        resolver,
        geocoder,
        cache,
        force_anchor_on_african_timezone=settings.force_anchor_on_african_timezone,
    )
    rates = ExchangeRateProvider(
        client,
        providers=default_providers(settings.fastforex_key),
        ttl=timedelta(minutes=settings.rate_cache_minutes),
        base_currency=settings.base_currency,
        timeout=settings.http_timeout_seconds,
    )
    return CurrencyStore(chain, rates)


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="geofx", description="Resolve the visitor's display currency.")
    parser.add_argument("--refresh", action="store_true", help="ignore the cached location")
    parser.add_argument("--amount", type=float, default=None, help="base-currency amount to show converted")
    return parser.parse_args(argv)


async def _run(currency_store: CurrencyStore, refresh: bool, amount: Optional[float]) -> None:
    state = await (currency_store.refresh() if refresh else currency_store.initialize())
    print(state_lines(state, base=currency_store.base_currency, locale=currency_store.locale))
    if amount is not None:
        display = currency_store.multi_currency_display(amount)
        print(f"{display['base']['formatted']} ≈ {display['local']['formatted']}")
        print(f"Gateway: {currency_store.recommended_gateway()}")


def main(argv: Optional[List[str]] = None) -> None:
    """
    Resolve the currency once and print the published state.

    This function:
    1. Sets up logging from settings
    2. Wires the engine
    3. Runs initialize() (or refresh() with --refresh) on a fresh event loop
    """
    # Import settings here so a bad .env surfaces as a startup error, not an import error
    from geofx.config import settings

    setup_logging(
        level=settings.log_level_value,
        log_file=settings.log_file,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
        log_to_stdout=settings.log_stdout,
    )
    logger = logging.getLogger(__name__)
    args = _parse_args(argv)

    currency_store = build_currency_store(settings)
    logger.info("Resolving currency (refresh=%s, cache=%s)", args.refresh, settings.location_cache_file)
    try:
        asyncio.run(_run(currency_store, args.refresh, args.amount))
    except KeyboardInterrupt:
        logger.info("Stopped by user (KeyboardInterrupt)")
        raise
    finally:
        currency_store.rates.client.close()


if __name__ == "__main__":
    main()
