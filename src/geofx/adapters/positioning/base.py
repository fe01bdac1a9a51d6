# src/geofx/adapters/positioning/base.py
"""
Base Positioning Interface

This module defines the abstract base class for positioning sources: whatever
can produce a latitude/longitude fix for the current visitor.

Files that USE this module:
- geofx.adapters.positioning.ipapi (IpApiPositionSource implements PositionSource)
- geofx.application.geo_resolver (GeoCoordinateResolver wraps a PositionSource)
- tests.test_geo_resolver (fake sources)

Files that this module USES:
- geofx.domain.models (Coordinates)
"""
from abc import ABC, abstractmethod

from geofx.domain.models import Coordinates


class PositionSource(ABC):
    @abstractmethod
    async def current_position(self, high_accuracy: bool = True, allow_cached: bool = False) -> Coordinates:
        """
        Return a single fresh fix.

        Implementations may raise PositioningError subclasses directly, or any
        other exception; GeoCoordinateResolver classifies whatever comes out.
        """
        raise NotImplementedError


class StaticPositionSource(PositionSource):
    """Always reports the same coordinates (manual override, tests)."""

    def __init__(self, latitude: float, longitude: float):
        self.coordinates = Coordinates(latitude=latitude, longitude=longitude)

    async def current_position(self, high_accuracy: bool = True, allow_cached: bool = False) -> Coordinates:
        return self.coordinates
