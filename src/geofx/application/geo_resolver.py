# src/geofx/application/geo_resolver.py
"""
Geo Coordinate Resolver - One-shot Positioning with Classified Failures

Wraps a PositionSource: asks once for a fresh high-accuracy fix, bounds the
wait with a hard timeout, and turns every failure into exactly one of
PermissionDenied, PositionUnavailable, PositioningTimeout or Unsupported.

Files that USE this module:
- geofx.application.location_chain (live resolution step)
- tests.test_geo_resolver (unit tests)

Files that this module USES:
- geofx.adapters.positioning.base (PositionSource)
- geofx.adapters.http_client (HttpError/HttpTimeout for classification)
- geofx.config (settings for timeout)
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from geofx.adapters.http_client import HttpError, HttpTimeout
from geofx.adapters.positioning.base import PositionSource
from geofx.config import settings
from geofx.domain.errors import (
    PermissionDenied,
    PositionUnavailable,
    PositioningError,
    PositioningTimeout,
    Unsupported,
)
from geofx.domain.models import Coordinates
from geofx.shared.validators import validate_coordinates

log = logging.getLogger(__name__)

# Statuses an IP-positioning service uses to refuse a caller
_REFUSAL_STATUSES = frozenset({401, 403, 429})


class GeoCoordinateResolver:
    def __init__(self, source: Optional[PositionSource], timeout: Optional[float] = None):
        """
        Args:
            source: Positioning capability; None means the capability is unsupported
            timeout: Hard timeout in seconds (defaults to settings.geolocation_timeout_seconds)
        """
        self.source = source
        self.timeout = timeout or settings.geolocation_timeout_seconds

    async def locate(self) -> Coordinates:
        """
        Obtain a fresh fix.

        Returns:
            Coordinates of the visitor

        Raises:
            Unsupported: No positioning source is configured
            PermissionDenied: The source refused the request
            PositioningTimeout: No answer within the timeout
            PositionUnavailable: Any other failure, including invalid coordinates
        """
        if self.source is None:
            raise Unsupported("No positioning capability configured")

        try:
            coords = await asyncio.wait_for(
                self.source.current_position(high_accuracy=True, allow_cached=False),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise PositioningTimeout(f"Positioning timeout after {self.timeout}s") from e
        except PositioningError:
            raise
        except HttpTimeout as e:
            raise PositioningTimeout(str(e)) from e
        except HttpError as e:
            if e.status_code in _REFUSAL_STATUSES:
                raise PermissionDenied(f"Positioning refused (HTTP {e.status_code})") from e
            raise PositionUnavailable(str(e)) from e
        except Exception as e:
            raise PositionUnavailable(f"Positioning failed: {e}") from e

        if not isinstance(coords, Coordinates) or not validate_coordinates(coords.latitude, coords.longitude):
            raise PositionUnavailable(f"Positioning returned invalid coordinates: {coords!r}")

        log.info("Got coordinates: %s, %s", coords.latitude, coords.longitude)
        return coords
