# tests/test_persistence.py
"""
Persistence Tests - JSON File Store and Expiring Location Cache

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- geofx.adapters.persistence (JsonFileStore, MemoryStore, LocationCache)
- unittest.mock (patch for simulating write failures)
- tests.conftest (FakeClock)
"""
import json
from datetime import timedelta

import pytest

from unittest.mock import patch

from conftest import FakeClock
from geofx.adapters.persistence import CACHE_KEY, JsonFileStore, LocationCache, MemoryStore
from geofx.domain.errors import StorageError
from geofx.domain.models import DetectionMethod, LocationRecord


def kenya_record(clock):
    return LocationRecord(
        country="Kenya",
        country_code="ke",
        city="Nairobi",
        currency_code="kes",
        currency_symbol="KSh",
        flag="🇰🇪",
        detection_method=DetectionMethod.GEOLOCATION,
        latitude=-1.2921,
        longitude=36.8219,
        resolved_at=clock(),
    )


class TestJsonFileStore:
    def test_missing_file_is_empty(self, tmp_path):
        store = JsonFileStore(tmp_path / "cache.json")
        assert store.get("anything") is None

    def test_set_get_delete(self, tmp_path):
        path = tmp_path / "nested" / "cache.json"
        store = JsonFileStore(path)
        store.set("a", {"x": 1})
        store.set("b", [1, 2])

        assert path.exists()
        assert store.get("a") == {"x": 1}
        assert JsonFileStore(path).get("b") == [1, 2]

        store.delete("a")
        assert store.get("a") is None
        assert store.get("b") == [1, 2]

    def test_no_temp_files_left_behind(self, tmp_path):
        store = JsonFileStore(tmp_path / "cache.json")
        store.set("a", 1)
        assert [p.name for p in tmp_path.iterdir()] == ["cache.json"]

    def test_corrupt_file_is_backed_up(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text("{not json", encoding="utf-8")

        store = JsonFileStore(path)
        assert store.get("a") is None
        assert (tmp_path / "cache.json.corrupt").read_text(encoding="utf-8") == "{not json"
        assert not path.exists()

    def test_invalid_utf8_is_backed_up(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_bytes(b"\xff\xfe{bad")

        assert JsonFileStore(path).get("a") is None
        assert (tmp_path / "cache.json.corrupt").read_bytes() == b"\xff\xfe{bad"
        assert not path.exists()

    def test_uncreatable_directory_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        store = JsonFileStore(blocker / "cache.json")

        assert store.get("a") is None
        with pytest.raises(StorageError):
            store.set("a", 1)

    def test_non_object_file_is_ignored(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
        assert JsonFileStore(path).get("a") is None

    def test_write_failure_raises_storage_error(self, tmp_path):
        store = JsonFileStore(tmp_path / "cache.json")
        with patch("geofx.adapters.persistence.file_store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageError, match="disk full"):
                store.set("a", 1)
        assert [p.name for p in tmp_path.iterdir()] == []


class TestMemoryStore:
    def test_values_are_copied(self):
        store = MemoryStore()
        value = {"x": [1]}
        store.set("k", value)
        value["x"].append(2)
        assert store.get("k") == {"x": [1]}

    def test_delete_missing_key(self):
        store = MemoryStore()
        store.delete("nope")
        assert store.get("nope") is None


class TestLocationCache:
    def test_round_trip(self):
        clock = FakeClock()
        cache = LocationCache(MemoryStore(), clock=clock)
        record = kenya_record(clock)

        entry = cache.save(record)
        assert entry.expires_at == clock() + timedelta(hours=2)
        assert cache.load().record == record

    def test_expiry_boundary(self):
        clock = FakeClock()
        cache = LocationCache(MemoryStore(), ttl=timedelta(hours=2), clock=clock)
        cache.save(kenya_record(clock))

        clock.advance(hours=1, minutes=59, seconds=59)
        assert cache.load() is not None
        clock.advance(seconds=1)
        assert cache.load() is None

    def test_unreadable_entry_is_a_miss(self):
        store = MemoryStore()
        store.set(CACHE_KEY, {"record": {"country": "Kenya"}, "expires_at": "garbage"})
        assert LocationCache(store, clock=FakeClock()).load() is None

    def test_non_object_record_is_a_miss(self):
        store = MemoryStore()
        store.set(CACHE_KEY, {"record": [], "expires_at": "2026-01-01T14:00:00+00:00"})
        assert LocationCache(store, clock=FakeClock()).load() is None

    def test_unwritable_directory_is_logged_not_raised(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        clock = FakeClock()
        cache = LocationCache(JsonFileStore(blocker / "cache.json"), clock=clock)

        assert cache.save(kenya_record(clock)) is None
        assert cache.load() is None
        cache.clear()

    def test_write_failure_is_logged_not_raised(self):
        class FailingStore(MemoryStore):
            def set(self, key, value):
                raise StorageError("read-only")

        clock = FakeClock()
        cache = LocationCache(FailingStore(), clock=clock)
        assert cache.save(kenya_record(clock)) is None
        assert cache.load() is None

    def test_persists_to_json_file(self, tmp_path):
        clock = FakeClock()
        path = tmp_path / "location_cache.json"
        LocationCache(JsonFileStore(path), clock=clock).save(kenya_record(clock))

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert raw[CACHE_KEY]["record"]["currency_code"] == "kes"
        assert raw[CACHE_KEY]["record"]["detection_method"] == "geolocation"

        loaded = LocationCache(JsonFileStore(path), clock=clock).load()
        assert loaded.record.city == "Nairobi"

    def test_clear(self):
        clock = FakeClock()
        store = MemoryStore()
        cache = LocationCache(store, clock=clock)
        cache.save(kenya_record(clock))
        cache.clear()
        assert store.get(CACHE_KEY) is None
