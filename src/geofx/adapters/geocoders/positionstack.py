# src/geofx/adapters/geocoders/positionstack.py
"""
positionstack Reverse Geocoder

Expected body: {"data": [{"country_code": "NGA", "country": "Nigeria", "locality": "Lagos", ...}]}
positionstack reports ISO-3 country codes; the matching ISO-2 code is taken
from its "country_module" block; without one the result is rejected.

Files that USE this module:
- geofx.application.reverse_geocoder (third candidate)
- tests.test_geocoders (unit tests)

Files that this module USES:
- geofx.config (settings for access key)
"""
from typing import Any, Dict, Optional, Tuple

from geofx.adapters.geocoders.base import Geocoder, build_result
from geofx.config import settings
from geofx.domain.models import GeocodeResult
from geofx.shared.validators import validate_country_code


class PositionstackGeocoder(Geocoder):
    name = "positionstack"
    url = "http://api.positionstack.com/v1/reverse"

    def __init__(self, access_key: Optional[str] = None):
        self.access_key = access_key or settings.positionstack_access_key

    def build_request(self, latitude: float, longitude: float) -> Tuple[str, Dict[str, Any]]:
        return self.url, {"access_key": self.access_key, "query": f"{latitude},{longitude}", "limit": 1}

    def parse(self, data: Any) -> Optional[GeocodeResult]:
        if not isinstance(data, dict):
            return None
        items = data.get("data")
        if not isinstance(items, list) or not items or not isinstance(items[0], dict):
            return None
        item = items[0]

        code = item.get("country_code")
        if not validate_country_code(code):
            module = item.get("country_module")
            code = module.get("code_alpha2") if isinstance(module, dict) else None
        if not validate_country_code(code):
            return None
        return build_result(code, item.get("country"), item.get("locality"))
