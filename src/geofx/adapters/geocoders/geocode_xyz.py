# src/geofx/adapters/geocoders/geocode_xyz.py
"""
geocode.xyz Reverse Geocoder

Expected body: {"prov": "NG", "country": "Nigeria", "city": "Lagos", ...}
Throttled or failed lookups come back with HTTP 200 and an "error" object,
so the parser rejects any body that carries one.

Files that USE this module:
- geofx.application.reverse_geocoder (second candidate)
- tests.test_geocoders (unit tests)
"""
from typing import Any, Dict, Optional, Tuple

from geofx.adapters.geocoders.base import Geocoder, build_result
from geofx.domain.models import GeocodeResult
from geofx.shared.validators import validate_country_code


class GeocodeXyzGeocoder(Geocoder):
    name = "geocode.xyz"
    url = "https://geocode.xyz/{latitude},{longitude}"

    def build_request(self, latitude: float, longitude: float) -> Tuple[str, Dict[str, Any]]:
        return self.url.format(latitude=latitude, longitude=longitude), {"json": 1}

    def parse(self, data: Any) -> Optional[GeocodeResult]:
        if not isinstance(data, dict) or data.get("error"):
            return None
        # "prov" is the ISO-2 code for country-level answers only
        prov = data.get("prov")
        if not validate_country_code(prov):
            return None
        return build_result(prov, data.get("country"), data.get("city"))
