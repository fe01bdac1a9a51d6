# src/geofx/adapters/positioning/ipapi.py
"""
ipapi Position Source - IP-based Positioning

This module implements the default positioning source. On a server there is
no device GPS, so the visitor's fix comes from an IP-positioning endpoint
(ipapi.co by default), asked for a fresh, uncached answer.

Files that USE this module:
- geofx.app (default PositionSource)
- tests.test_geo_resolver (unit tests)

Files that this module USES:
- geofx.adapters.http_client (HttpClient for the request)
- geofx.adapters.positioning.base (PositionSource interface)
- geofx.config (settings for endpoint URL)
- geofx.shared.validators (coordinate validation)
"""
import logging
from typing import Optional

from geofx.adapters.http_client import HttpClient
from geofx.adapters.positioning.base import PositionSource
from geofx.config import settings
from geofx.domain.errors import PositionUnavailable
from geofx.domain.models import Coordinates
from geofx.shared.validators import validate_coordinates

log = logging.getLogger(__name__)


class IpApiPositionSource(PositionSource):
    """
    Position source backed by an ipapi-compatible endpoint.

    The endpoint answers with a flat JSON object containing ``latitude`` and
    ``longitude``; on failure it returns ``{"error": true, "reason": ...}``.
    """

    def __init__(self, client: HttpClient, url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize the position source.

        Args:
            client: Shared HttpClient
            url: Optional endpoint URL (defaults to settings.ipapi_url)
            timeout: Optional request timeout (defaults to settings.geolocation_timeout_seconds)
        """
        self.client = client
        self.url = url or settings.ipapi_url
        self.timeout = timeout or settings.geolocation_timeout_seconds

    async def current_position(self, high_accuracy: bool = True, allow_cached: bool = False) -> Coordinates:
        """
        Ask the endpoint for the caller's coordinates.

        Returns:
            Coordinates of the visitor

        Raises:
            HttpError: If the request failed (classified by the resolver)
            PositionUnavailable: If the body carries no usable coordinates
        """
        headers = {} if allow_cached else {"Cache-Control": "no-cache", "Pragma": "no-cache"}
        data = await self.client.get_json(self.url, headers=headers, timeout=self.timeout, name="ipapi")

        if not isinstance(data, dict):
            raise PositionUnavailable("ipapi returned non-dict JSON")
        if data.get("error"):
            raise PositionUnavailable(f"ipapi error: {data.get('reason') or 'unknown'}")

        lat, lon = data.get("latitude"), data.get("longitude")
        if not validate_coordinates(lat, lon):
            log.warning("ipapi returned unusable coordinates: %r, %r", lat, lon)
            raise PositionUnavailable("ipapi response has no usable coordinates")

        coords = Coordinates(latitude=float(lat), longitude=float(lon))
        log.debug("ipapi position: %s", coords)
        return coords
