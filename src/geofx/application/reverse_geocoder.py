# src/geofx/application/reverse_geocoder.py
"""
Reverse Geocoder - Coordinates to Country/City with Ordered Fallback

Tries each configured Geocoder once, in order. The first candidate whose
parser yields both a country code and a country name wins; a network error,
bad status, malformed body or empty extraction moves on to the next one.
When every candidate has failed, GeocodeUnavailable is raised.

Files that USE this module:
- geofx.application.location_chain (live resolution step)
- geofx.app (wiring)
- tests.test_reverse_geocoder (unit tests)

Files that this module USES:
- geofx.adapters.geocoders.* (endpoint descriptions and parsers)
- geofx.adapters.http_client (HttpClient)
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from geofx.adapters.geocoders import (
    BigDataCloudGeocoder,
    GeocodeXyzGeocoder,
    Geocoder,
    PositionstackGeocoder,
)
from geofx.adapters.http_client import HttpClient
from geofx.domain.errors import GeocodeUnavailable
from geofx.domain.models import GeocodeResult

log = logging.getLogger(__name__)


def default_geocoders() -> List[Geocoder]:
    return [BigDataCloudGeocoder(), GeocodeXyzGeocoder(), PositionstackGeocoder()]


class ReverseGeocoder:
    def __init__(
        self,
        client: HttpClient,
        geocoders: Optional[Sequence[Geocoder]] = None,
        timeout: Optional[float] = None,
    ):
        self.client = client
        self.geocoders = list(geocoders) if geocoders is not None else default_geocoders()
        self.timeout = timeout

    async def reverse(self, latitude: float, longitude: float) -> GeocodeResult:
        """
        Resolve coordinates to a country and city.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            GeocodeResult with non-empty country_code and country_name

        Raises:
            GeocodeUnavailable: If every candidate failed
        """
        failures: List[str] = []
        for geocoder in self.geocoders:
            url, params = geocoder.build_request(latitude, longitude)
            try:
                log.debug("Trying reverse geocoding service %s", geocoder.name)
                data = await self.client.get_json(url, params=params, timeout=self.timeout, name=geocoder.name)
                result = geocoder.parse(data)
            except Exception as e:
                log.warning("Reverse geocoding service %s failed: %s", geocoder.name, e)
                failures.append(f"{geocoder.name}: {e}")
                continue

            if result is not None and result.country_code and result.country_name:
                log.info("Reverse geocoded via %s: %s (%s)", geocoder.name, result.country_name, result.country_code)
                return result

            log.warning("Reverse geocoding service %s returned no country", geocoder.name)
            failures.append(f"{geocoder.name}: empty result")

        log.error("All reverse geocoding services failed: %s", "; ".join(failures))
        raise GeocodeUnavailable(f"All reverse geocoding services failed ({len(failures)} tried)")
