# src/geofx/adapters/geocoders/bigdatacloud.py
"""
BigDataCloud Reverse Geocoder

Client-side reverse geocoding endpoint; no key required.
Expected body: {"countryCode": "NG", "countryName": "Nigeria", "city": "Lagos", "locality": "..."}

Files that USE this module:
- geofx.application.reverse_geocoder (first candidate)
- tests.test_geocoders (unit tests)
"""
from typing import Any, Dict, Optional, Tuple

from geofx.adapters.geocoders.base import Geocoder, build_result
from geofx.domain.models import GeocodeResult


class BigDataCloudGeocoder(Geocoder):
    name = "bigdatacloud"
    url = "https://api.bigdatacloud.net/data/reverse-geocode-client"

    def build_request(self, latitude: float, longitude: float) -> Tuple[str, Dict[str, Any]]:
        return self.url, {"latitude": latitude, "longitude": longitude, "localityLanguage": "en"}

    def parse(self, data: Any) -> Optional[GeocodeResult]:
        if not isinstance(data, dict):
            return None
        return build_result(
            data.get("countryCode"),
            data.get("countryName"),
            data.get("city") or data.get("locality"),
        )
