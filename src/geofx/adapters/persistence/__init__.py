# src/geofx/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting data:
- Durable key-value storage (JSON file, in-memory)
- The expiring location cache built on top of it
"""

from geofx.adapters.persistence.file_store import JsonFileStore, KeyValueStore, MemoryStore
from geofx.adapters.persistence.location_cache import CACHE_KEY, LocationCache

__all__ = [
    "KeyValueStore",
    "JsonFileStore",
    "MemoryStore",
    "LocationCache",
    "CACHE_KEY",
]
