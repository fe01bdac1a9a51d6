# src/geofx/adapters/geocoders/base.py
"""
Base Geocoder Interface for Reverse-Geocoding Endpoints

Every reverse-geocoding service is described by one Geocoder: how to build
the GET request for a coordinate pair, and how to parse that service's own
response shape into a GeocodeResult. The fallback loop in ReverseGeocoder
treats them all the same way.

Files that USE this module:
- geofx.adapters.geocoders.bigdatacloud
- geofx.adapters.geocoders.geocode_xyz
- geofx.adapters.geocoders.positionstack
- geofx.application.reverse_geocoder

Files that this module USES:
- geofx.domain.models (GeocodeResult)
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from geofx.domain.models import GeocodeResult


def clean(value: Any) -> Optional[str]:
    """Strip a string field; anything empty or non-string becomes None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def build_result(country_code: Any, country_name: Any, city: Any) -> Optional[GeocodeResult]:
    """Return a GeocodeResult only when both country fields are non-empty."""
    code = clean(country_code)
    name = clean(country_name)
    if not code or not name:
        return None
    return GeocodeResult(country_code=code, country_name=name, city=clean(city))


class Geocoder(ABC):
    name: str = "geocoder"

    @abstractmethod
    def build_request(self, latitude: float, longitude: float) -> Tuple[str, Dict[str, Any]]:
        """Return (url, query params) for the coordinates."""
        raise NotImplementedError

    @abstractmethod
    def parse(self, data: Any) -> Optional[GeocodeResult]:
        """Extract a GeocodeResult from the decoded body, or None."""
        raise NotImplementedError
