# src/geofx/application/rates_service.py
"""
Rates Service - Business Logic for Exchange Rate Operations

This module contains the exchange-rate acquisition logic. ExchangeRateProvider
returns base→target rates and never raises:

1. The base currency itself is always 1, with no network call.
2. A fresh in-memory entry (TTL, checked lazily on read) is returned as is.
3. Otherwise each RateProvider is tried once, in order; the first strictly
   positive numeric rate is stored with a timestamp and returned.
4. If every provider fails, the static fallback table answers. Fallback
   values are not cached, so the next call tries the live sources again.

Concurrent requests for the same currency share one in-flight fetch.

Files that USE this module:
- geofx.application.currency_store (rate for the resolved currency)
- geofx.app (wiring)
- tests.test_rates_service (unit tests)

Files that this module USES:
- geofx.adapters.providers.* (provider endpoints and parsers)
- geofx.adapters.http_client (HttpClient)
- geofx.domain.currencies (fallback rate table)
- geofx.domain.models (ExchangeRateEntry)
- geofx.shared.single_flight (SingleFlight)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Sequence

from geofx.adapters.http_client import HttpClient
from geofx.adapters.providers import (
    ExchangeRateApiProvider,
    FastForexProvider,
    FreeForexApiProvider,
    OpenErApiProvider,
    RateProvider,
)
from geofx.config import settings
from geofx.domain.currencies import BASE_CURRENCY, fallback_rate
from geofx.domain.errors import RateUnavailable
from geofx.domain.models import ExchangeRateEntry, utcnow
from geofx.shared.single_flight import SingleFlight

log = logging.getLogger(__name__)


def default_providers(fastforex_key: Optional[str] = None) -> List[RateProvider]:
    """
    Build the ordered provider list.

    FastForex is appended only when an API key is available.

    Args:
        fastforex_key: Optional key (defaults to settings.fastforex_key)
    """
    providers: List[RateProvider] = [
        ExchangeRateApiProvider(),
        OpenErApiProvider(),
        FreeForexApiProvider(),
    ]
    key = fastforex_key if fastforex_key is not None else settings.fastforex_key
    if key:
        providers.append(FastForexProvider(api_key=key))
    return providers


class ExchangeRateProvider:
    """
    Cached, multi-source base→target exchange rates.

    Attributes:
        base_currency: Currency every rate is expressed against
        ttl: How long a live rate stays fresh
    """

    def __init__(
        self,
        client: HttpClient,
        providers: Optional[Sequence[RateProvider]] = None,
        ttl: timedelta = timedelta(minutes=10),
        clock: Callable[[], datetime] = utcnow,
        base_currency: str = BASE_CURRENCY,
        timeout: Optional[float] = None,
    ):
        self.client = client
        self.providers = list(providers) if providers is not None else default_providers()
        self.ttl = ttl
        self.clock = clock
        self.base_currency = base_currency.lower()
        self.timeout = timeout
        self._entries: Dict[str, ExchangeRateEntry] = {}
        self._flight = SingleFlight()

    @staticmethod
    def _key(currency: Optional[str]) -> str:
        return (currency or "").strip().lower()

    def cached_rate(self, currency: str) -> Optional[float]:
        """Return the cached live rate if it is still fresh, without any I/O."""
        entry = self._entries.get(self._key(currency))
        if entry is not None and entry.is_fresh(self.clock(), self.ttl):
            return entry.rate
        return None

    def fallback_rate(self, currency: str) -> float:
        """Static-table rate of ``currency`` against the configured base."""
        return fallback_rate(currency) / fallback_rate(self.base_currency)

    def known_rate(self, currency: str) -> float:
        """Best rate available without I/O: fresh cache, else the static table."""
        target = self._key(currency)
        if not target or target == self.base_currency:
            return 1.0
        cached = self.cached_rate(target)
        return cached if cached is not None else self.fallback_rate(target)

    async def get_rate(self, target_currency: str) -> float:
        """
        Get units of ``target_currency`` per 1 base unit.

        Args:
            target_currency: Currency code in any case

        Returns:
            A strictly positive rate; never raises
        """
        target = self._key(target_currency)
        if not target or target == self.base_currency:
            return 1.0

        cached = self.cached_rate(target)
        if cached is not None:
            log.debug("Using cached rate for %s: %s", target, cached)
            return cached

        return await self._flight.run(f"rate:{target}", lambda: self._fetch_or_fallback(target))

    async def _fetch_or_fallback(self, target: str) -> float:
        try:
            entry = await self._fetch_live(target)
        except RateUnavailable as e:
            rate = self.fallback_rate(target)
            log.warning("Using fallback rate for %s: %s (%s)", target, rate, e)
            return rate

        self._entries[target] = entry
        log.info("Exchange rate %s → %s: %s via %s (ttl=%s)",
                 self.base_currency, target, entry.rate, entry.provider, self.ttl)
        return entry.rate

    async def _fetch_live(self, target: str) -> ExchangeRateEntry:
        """
        Try every provider once, in order.

        Raises:
            RateUnavailable: If no provider returned a usable rate
        """
        for provider in self.providers:
            url, params = provider.build_request(self.base_currency, target)
            try:
                log.debug("Trying %s for %s → %s", provider.name, self.base_currency, target)
                data = await self.client.get_json(url, params=params, timeout=self.timeout, name=provider.name)
                rate = provider.parse(data, self.base_currency, target)
            except Exception as e:
                log.warning("%s failed: %s", provider.name, e)
                continue

            if rate is None:
                log.warning("%s returned no usable rate for %s", provider.name, target)
                continue

            return ExchangeRateEntry(
                target_currency=target,
                rate=rate,
                fetched_at=self.clock(),
                provider=provider.name,
                base_currency=self.base_currency,
            )

        log.error("All exchange rate providers failed for %s", target)
        raise RateUnavailable(f"All {len(self.providers)} exchange rate providers failed for {target}")

    async def convert_from_base(self, amount: Any, target_currency: str) -> float:
        """Convert a base-currency amount into ``target_currency``; falsy amounts give 0."""
        if not amount:
            return 0.0
        return float(amount) * await self.get_rate(target_currency)

    async def convert_to_base(self, amount: Any, source_currency: str) -> float:
        """Convert an amount in ``source_currency`` into the base currency; falsy amounts give 0."""
        if not amount:
            return 0.0
        return float(amount) / await self.get_rate(source_currency)

    def last_provider(self, currency: str) -> Optional[str]:
        """Name of the provider behind the cached rate, if any."""
        entry = self._entries.get(self._key(currency))
        return entry.provider if entry else None

    def clear_cache(self) -> None:
        self._entries.clear()
        log.info("Exchange rate cache cleared")

    def cache_stats(self) -> Dict[str, Any]:
        """
        Describe the in-memory rate map.

        Returns:
            {"size": n, "entries": [{"currency", "rate", "provider", "fetched_at", "age_seconds", "fresh"}]}
        """
        now = self.clock()
        entries = [
            {
                "currency": code,
                "rate": entry.rate,
                "provider": entry.provider,
                "fetched_at": entry.fetched_at.isoformat(),
                "age_seconds": int((now - entry.fetched_at).total_seconds()),
                "fresh": entry.is_fresh(now, self.ttl),
            }
            for code, entry in sorted(self._entries.items())
        ]
        return {"size": len(entries), "entries": entries}
