"""Single-slot stores for the cached tide reading."""

import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from core.models import TideReading

logger = logging.getLogger(__name__)


class CacheStore(ABC):
    """
    Holds exactly one tide reading for the whole deployment.

    ``put`` replaces the stored reading wholesale; readers never observe a
    partially written entry.
    """

    @abstractmethod
    def get(self) -> Optional[TideReading]:
        """
        Return the stored reading.

        Returns:
            The cached reading, or None if nothing has been stored yet
        """
        pass

    @abstractmethod
    def put(self, entry: TideReading) -> None:
        """
        Replace the stored reading.

        Args:
            entry: Reading to persist
        """
        pass


class InMemoryCacheStore(CacheStore):
    """Lock-protected in-process slot (tests and embedding)."""

    def __init__(self, entry: Optional[TideReading] = None):
        self._entry = entry
        self._lock = threading.Lock()
        self.writes = 0

    def get(self) -> Optional[TideReading]:
        with self._lock:
            return self._entry

    def put(self, entry: TideReading) -> None:
        with self._lock:
            self._entry = entry
            self.writes += 1


class JsonFileCacheStore(CacheStore):
    """Durable store backed by a single JSON file."""

    def __init__(self, cache_file: Path):
        """
        Initialize the file store.

        Args:
            cache_file: Path to the cache file (created on first write)
        """
        self.cache_file = Path(cache_file)

    def get(self) -> Optional[TideReading]:
        """Load the reading, treating a missing or corrupt file as empty."""
        try:
            with open(self.cache_file, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except ValueError as e:
            logger.warning(f"Invalid cache file {self.cache_file}: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Invalid cache file {self.cache_file}: not an object")
            return None

        try:
            return TideReading.from_dict(data)
        except (TypeError, ValueError) as e:
            logger.warning(f"Invalid cache entry in {self.cache_file}: {e}")
            return None

    def put(self, entry: TideReading) -> None:
        """
        Write the reading atomically.

        The entry is written to a temporary file next to the cache file and
        moved into place, so concurrent readers see either the old or the new
        entry. OSError propagates to the caller.
        """
        self.cache_file.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=self.cache_file.parent,
            prefix=f".{self.cache_file.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(entry.to_dict(), f, indent=2)
            os.replace(tmp_path, self.cache_file)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
            raise

        logger.debug(f"Cached tide data to {self.cache_file}")
