# src/geofx/adapters/geocoders/__init__.py
"""
Geocoder Adapters - Reverse-Geocoding Endpoints

Each module describes one external service and parses its own response shape.
"""

from geofx.adapters.geocoders.base import Geocoder
from geofx.adapters.geocoders.bigdatacloud import BigDataCloudGeocoder
from geofx.adapters.geocoders.geocode_xyz import GeocodeXyzGeocoder
from geofx.adapters.geocoders.positionstack import PositionstackGeocoder

__all__ = [
    "Geocoder",
    "BigDataCloudGeocoder",
    "GeocodeXyzGeocoder",
    "PositionstackGeocoder",
]
