# src/geofx/adapters/positioning/__init__.py
"""
Positioning Adapters - Sources of Latitude/Longitude

All sources implement the PositionSource interface.
"""

from geofx.adapters.positioning.base import PositionSource, StaticPositionSource
from geofx.adapters.positioning.ipapi import IpApiPositionSource

__all__ = [
    "PositionSource",
    "StaticPositionSource",
    "IpApiPositionSource",
]
