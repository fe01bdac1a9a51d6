# src/geofx/adapters/persistence/file_store.py
"""
File Store - Durable Key-Value Storage

This module provides the durable key-value storage the engine persists its
location cache into. The file-backed store keeps one JSON object on disk and
rewrites it atomically on every change; the in-memory store has the same
interface for tests and short-lived processes.

Files that USE this module:
- geofx.adapters.persistence.location_cache (LocationCache stores its entry here)
- geofx.app (builds a JsonFileStore at settings.location_cache_file)

Files that this module USES:
- geofx.domain.errors (StorageError)
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

from geofx.domain.errors import StorageError

log = logging.getLogger(__name__)


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """Process-local store; values are JSON round-tripped to mimic the file store."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value, ensure_ascii=False)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """
    Key-value store backed by a single JSON file.

    Attributes:
        path: Location of the JSON file
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _ensure_dir(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _load_all(self) -> Dict[str, Any]:
        """
        Load the whole file.

        Handles corrupt files gracefully: a file that fails to decode is
        backed up next to itself with a ``.corrupt`` suffix, removed, and
        treated as empty.

        Returns:
            Dictionary of stored keys (empty if the file is missing or corrupt)
        """
        try:
            if not self.path.exists():
                return {}
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError
            backup_path = self.path.with_suffix(self.path.suffix + ".corrupt")
            try:
                shutil.copy2(self.path, backup_path)
                self.path.unlink()
                log.warning("Store file corrupted, backed up to %s: %s", backup_path, e)
            except OSError as backup_error:
                log.error("Failed to backup corrupt store file: %s", backup_error)
            return {}
        except OSError as e:
            log.error("Unexpected error reading store file %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            log.warning("Store file %s does not hold a JSON object, ignoring it", self.path)
            return {}
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        """
        Write the whole file using temp file + atomic rename.

        Raises:
            StorageError: If the file cannot be written
        """
        try:
            self._ensure_dir()
            temp_fd, temp_path = tempfile.mkstemp(
                suffix=".json.tmp",
                dir=str(self.path.parent),
                text=True,
            )
        except OSError as e:
            raise StorageError(f"Failed to create store file in {self.path.parent}: {e}") from e

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_path, str(self.path))
        except Exception as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StorageError(f"Failed to save store file: {e}") from e

    def get(self, key: str) -> Optional[Any]:
        return self._load_all().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._load_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._load_all()
        if key in data:
            del data[key]
            self._write_all(data)
