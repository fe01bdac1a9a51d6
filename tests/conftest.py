# tests/conftest.py
"""
Shared Test Fakes - Clock, HTTP, Positioning and Wiring Helpers

Files that USE this module:
- pytest (fixtures are discovered automatically)
- tests.test_* (fixtures: clock, http, memory_store)

Files that this module USES:
- geofx.adapters.http_client (HttpError raised for unknown services)
- geofx.adapters.positioning.base (PositionSource interface)
"""
import asyncio  # Yield to the event loop inside fakes
from datetime import datetime, timedelta, timezone  # Fixed clock start

import pytest  # Testing framework for writing and running tests

from geofx.adapters.http_client import HttpError
from geofx.adapters.persistence import MemoryStore
from geofx.adapters.positioning.base import PositionSource
from geofx.domain.models import Coordinates

LAGOS = Coordinates(latitude=6.5244, longitude=3.3792)
NAIROBI = Coordinates(latitude=-1.2921, longitude=36.8219)
BERLIN = Coordinates(latitude=52.52, longitude=13.405)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start=None):
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeHttpClient:
    """
    Answers get_json by service name.

    A response that is an exception instance is raised; services without a
    response raise HttpError, like an unreachable host.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []
        self.closed = False

    async def get_json(self, url, params=None, headers=None, timeout=None, name="HTTP"):
        self.calls.append((name, url, dict(params or {})))
        await asyncio.sleep(0)
        if name not in self.responses:
            raise HttpError(f"{name} unreachable")
        value = self.responses[name]
        if isinstance(value, BaseException):
            raise value
        return value

    def calls_to(self, name):
        return [call for call in self.calls if call[0] == name]

    def close(self):
        self.closed = True


class FakePositionSource(PositionSource):
    def __init__(self, result):
        self.result = result
        self.calls = 0

    async def current_position(self, high_accuracy=True, allow_cached=False):
        self.calls += 1
        await asyncio.sleep(0)
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result


def bigdatacloud_body(code="NG", name="Nigeria", city="Lagos"):
    return {"countryCode": code, "countryName": name, "city": city, "locality": city}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def http():
    return FakeHttpClient()


@pytest.fixture
def memory_store():
    return MemoryStore()
