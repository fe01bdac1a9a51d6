# src/geofx/application/location_chain.py
"""
Location Fallback Chain - Durable Cache → Live Detection → Anchor Market

This module resolves the visitor's location and currency. It never raises:
1. A non-expired durable cache entry is returned without any network call.
2. Otherwise the positioning source and reverse geocoders are asked; the
   country is mapped to its currency, the record is cached for the TTL
   window and returned.
3. If anything in step 2 fails, the anchor-market record is returned. That
   record is NOT cached, so the next call tries live detection again.

Concurrent callers share one in-flight resolution.

Files that USE this module:
- geofx.application.currency_store (CurrencyStore.initialize/refresh)
- geofx.app (wiring)
- tests.test_location_chain (unit tests)

Files that this module USES:
- geofx.application.geo_resolver (GeoCoordinateResolver)
- geofx.application.reverse_geocoder (ReverseGeocoder)
- geofx.adapters.persistence.location_cache (LocationCache)
- geofx.domain.currencies (country table, anchor market)
- geofx.shared.single_flight (SingleFlight)
"""
from __future__ import annotations

import logging
import os
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from geofx.adapters.persistence.location_cache import LocationCache
from geofx.application.geo_resolver import GeoCoordinateResolver
from geofx.application.reverse_geocoder import ReverseGeocoder
from geofx.domain.currencies import (
    ANCHOR_CITY,
    ANCHOR_COUNTRY,
    ANCHOR_COUNTRY_CODE,
    ANCHOR_CURRENCY,
    currency_for_country,
    currency_info,
)
from geofx.domain.errors import GeocodeUnavailable, PositioningError
from geofx.domain.models import CachedLocationEntry, Coordinates, DetectionMethod, GeocodeResult, LocationRecord, utcnow
from geofx.shared.single_flight import SingleFlight

log = logging.getLogger(__name__)


def host_timezone() -> Optional[str]:
    """IANA timezone of the host, if the environment declares one."""
    return os.environ.get("TZ") or None


class LocationFallbackChain:
    """
    Resolves a LocationRecord through cache, live detection and fallback.

    Attributes:
        last_error: Why the most recent resolution fell back, or None
    """

    def __init__(
        self,
        resolver: GeoCoordinateResolver,
        geocoder: ReverseGeocoder,
        cache: LocationCache,
        clock: Callable[[], datetime] = utcnow,
        force_anchor_on_african_timezone: bool = False,
        timezone_provider: Callable[[], Optional[str]] = host_timezone,
    ):
        self.resolver = resolver
        self.geocoder = geocoder
        self.cache = cache
        self.clock = clock
        self.force_anchor_on_african_timezone = force_anchor_on_african_timezone
        self.timezone_provider = timezone_provider
        self.last_error: Optional[str] = None
        self._flight = SingleFlight()

    async def resolve_location(self, force_refresh: bool = False) -> LocationRecord:
        """
        Resolve the visitor's location.

        Args:
            force_refresh: Skip the durable cache read (the result is still written back)

        Returns:
            LocationRecord tagged "geolocation" (live or cached) or "fallback"
        """
        key = "location:refresh" if force_refresh else "location"
        return await self._flight.run(key, lambda: self._resolve(force_refresh))

    async def _resolve(self, force_refresh: bool) -> LocationRecord:
        if not force_refresh:
            entry = self._load_cached()
            if entry is not None:
                log.info("Using cached location: %s", entry.record.display_name)
                self.last_error = None
                return entry.record

        try:
            coords = await self.resolver.locate()
            geo = await self.geocoder.reverse(coords.latitude, coords.longitude)
        except (PositioningError, GeocodeUnavailable) as e:
            log.warning("Live location detection failed (%s), using anchor-market fallback: %s",
                        type(e).__name__, e)
            self.last_error = f"{type(e).__name__}: {e}"
            return self.fallback_record()
        except Exception as e:
            log.exception("Unexpected error during location detection, using fallback: %s", e)
            self.last_error = f"{type(e).__name__}: {e}"
            return self.fallback_record()

        record = self._apply_anchor_override(self._build_record(geo, coords))
        try:
            self.cache.save(record)
        except Exception as e:
            log.exception("Could not persist detected location, returning it uncached: %s", e)
        self.last_error = None
        return record

    def _load_cached(self) -> Optional[CachedLocationEntry]:
        try:
            return self.cache.load()
        except Exception as e:
            log.exception("Location cache read failed, treating as miss: %s", e)
            return None

    def _build_record(self, geo: GeocodeResult, coords: Coordinates) -> LocationRecord:
        info = currency_for_country(geo.country_code)
        record = LocationRecord(
            country=geo.country_name,
            country_code=geo.country_code.lower(),
            city=geo.city,
            currency_code=info.code,
            currency_symbol=info.symbol,
            flag=info.flag,
            detection_method=DetectionMethod.GEOLOCATION,
            latitude=coords.latitude,
            longitude=coords.longitude,
            resolved_at=self.clock(),
        )
        log.info("Detected location: %s → %s", record.display_name, record.currency_code)
        return record

    def _apply_anchor_override(self, record: LocationRecord) -> LocationRecord:
        # Opt-in only; see FORCE_ANCHOR_ON_AFRICAN_TIMEZONE
        if not self.force_anchor_on_african_timezone or record.currency_code == ANCHOR_CURRENCY:
            return record
        tz = self.timezone_provider() or ""
        if not tz.startswith("Africa/"):
            return record

        anchor = currency_info(ANCHOR_CURRENCY)
        log.warning("Host timezone %s overrides detected %s with anchor market %s",
                    tz, record.country_code, ANCHOR_COUNTRY_CODE)
        return replace(
            record,
            country=ANCHOR_COUNTRY,
            country_code=ANCHOR_COUNTRY_CODE,
            city=ANCHOR_CITY,
            currency_code=anchor.code,
            currency_symbol=anchor.symbol,
            flag=anchor.flag,
        )

    def fallback_record(self) -> LocationRecord:
        """Anchor-market record used when nothing better is known."""
        anchor = currency_info(ANCHOR_CURRENCY)
        return LocationRecord(
            country=ANCHOR_COUNTRY,
            country_code=ANCHOR_COUNTRY_CODE,
            city=ANCHOR_CITY,
            currency_code=anchor.code,
            currency_symbol=anchor.symbol,
            flag=anchor.flag,
            detection_method=DetectionMethod.FALLBACK,
            resolved_at=self.clock(),
        )

    def clear_cache(self) -> None:
        self.cache.clear()
