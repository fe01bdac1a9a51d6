# src/geofx/adapters/http_client.py
"""
HTTP Client - JSON GET Requests for the Event Loop

This module wraps a requests Session so provider adapters can issue JSON GET
requests from coroutines. The blocking call runs in the loop's default
executor and the whole attempt is bounded with asyncio.wait_for, so one slow
endpoint cannot stall a fallback chain.

Files that USE this module:
- geofx.adapters.positioning.ipapi (positioning request)
- geofx.application.reverse_geocoder (geocoding attempts)
- geofx.application.rates_service (rate attempts)
- geofx.app (builds the shared client)

Files that this module USES:
- geofx.config (settings for default timeout)
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

import requests

from geofx.config import settings

log = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Cache-Control": "no-cache",
}


class HttpError(RuntimeError):
    """Raised for any failed attempt; carries the HTTP status when there was one."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class HttpTimeout(HttpError):
    """Raised when an attempt exceeded its time budget."""
    pass


class HttpClient:
    """
    Thin JSON GET client shared by every external endpoint.

    Attributes:
        timeout: Default per-attempt timeout in seconds
        session: Underlying requests Session
    """

    def __init__(self, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        self.timeout = timeout or settings.http_timeout_seconds
        self.session = session or requests.Session()

    def get_json_sync(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        name: str = "HTTP",
    ) -> Any:
        """
        Perform a blocking GET and decode the JSON body.

        Args:
            url: Endpoint URL
            params: Optional query parameters
            headers: Extra headers merged over DEFAULT_HEADERS
            timeout: Per-attempt timeout in seconds (defaults to self.timeout)
            name: Service name used in log and error messages

        Returns:
            Decoded JSON value

        Raises:
            HttpTimeout: If the request timed out
            HttpError: On connection errors, non-2xx status or invalid JSON
        """
        timeout = timeout or self.timeout
        merged: Dict[str, str] = dict(DEFAULT_HEADERS)
        if headers:
            merged.update(headers)

        try:
            resp = self.session.get(url, params=params, headers=merged, timeout=timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.exceptions.Timeout:
            log.warning("%s timeout after %s seconds", name, timeout)
            raise HttpTimeout(f"{name} timeout after {timeout}s")
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            log.warning("%s HTTP error %s: %s", name, status, e)
            raise HttpError(f"{name} HTTP error: {e}", status_code=status) from e
        except requests.exceptions.RequestException as e:
            log.warning("%s request failed: %s", name, e)
            raise HttpError(f"{name} request failed: {e}") from e
        except ValueError as e:
            log.warning("%s returned invalid JSON: %s", name, e)
            raise HttpError(f"{name} returned invalid JSON: {e}") from e

    async def get_json(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        name: str = "HTTP",
    ) -> Any:
        """
        Coroutine version of get_json_sync, bounded by ``timeout`` in total.

        Raises:
            HttpTimeout: If the attempt did not finish within ``timeout``
            HttpError: As get_json_sync
        """
        timeout = timeout or self.timeout
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(
                    None,
                    lambda: self.get_json_sync(url, params=params, headers=headers, timeout=timeout, name=name),
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            log.warning("%s did not answer within %s seconds", name, timeout)
            raise HttpTimeout(f"{name} timeout after {timeout}s")

    def close(self) -> None:
        self.session.close()
