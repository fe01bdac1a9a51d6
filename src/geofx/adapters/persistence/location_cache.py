# src/geofx/adapters/persistence/location_cache.py
"""
Location Cache - Durable, Expiring Cache of the Resolved Location

Stores one CachedLocationEntry under a fixed key of a KeyValueStore. Reads
check the expiry against the injected clock; an expired or unreadable entry
is reported as absent and is not deleted, the next successful resolution
simply overwrites it. Storage faults are logged, never raised: a failed read
is a miss and a failed write leaves the record unpersisted.

Files that USE this module:
- geofx.application.location_chain (read on every resolution, write on success)
- geofx.app (wiring)

Files that this module USES:
- geofx.adapters.persistence.file_store (KeyValueStore)
- geofx.domain.models (CachedLocationEntry, LocationRecord)
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from geofx.adapters.persistence.file_store import KeyValueStore
from geofx.domain.errors import StorageError
from geofx.domain.models import CachedLocationEntry, LocationRecord, utcnow

log = logging.getLogger(__name__)

CACHE_KEY = "geofx.location_cache"


class LocationCache:
    def __init__(
        self,
        store: KeyValueStore,
        ttl: timedelta = timedelta(hours=2),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.ttl = ttl
        self.clock = clock

    def load(self) -> Optional[CachedLocationEntry]:
        """
        Return the cached entry if present and not expired.

        Returns:
            CachedLocationEntry, or None on miss, expiry, schema mismatch or storage fault
        """
        try:
            raw = self.store.get(CACHE_KEY)
        except (StorageError, OSError) as e:
            log.error("Failed to read location cache, treating as miss: %s", e)
            return None
        if raw is None:
            return None

        try:
            entry = CachedLocationEntry.from_json(raw)
        except (KeyError, ValueError, TypeError) as e:
            log.warning("Location cache entry unreadable, treating as miss: %s", e)
            return None

        now = self.clock()
        if entry.is_expired(now):
            log.debug("Location cache expired at %s", entry.expires_at)
            return None

        remaining = int((entry.expires_at - now).total_seconds() // 60)
        log.debug("Location cache hit (valid for %d more minutes)", remaining)
        return entry

    def save(self, record: LocationRecord) -> Optional[CachedLocationEntry]:
        """
        Persist a record with a fresh expiry window.

        A failed write is logged and otherwise ignored: the record is still
        usable for this resolution, only the next one will miss the cache.

        Returns:
            The stored entry, or None if the write failed
        """
        entry = CachedLocationEntry(record=record, expires_at=self.clock() + self.ttl)
        try:
            self.store.set(CACHE_KEY, entry.to_json())
        except (StorageError, OSError) as e:
            log.error("Failed to persist location cache: %s", e)
            return None
        log.info("Location cached until %s (%s)", entry.expires_at.isoformat(), record.display_name)
        return entry

    def clear(self) -> None:
        try:
            self.store.delete(CACHE_KEY)
        except (StorageError, OSError) as e:
            log.error("Failed to clear location cache: %s", e)
            return
        log.info("Location cache cleared")
