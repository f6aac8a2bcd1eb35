"""
Freshness-gated price cache.

The cache holds a single provider payload per key. Storage is injected as a
StorageHandle so the cache never touches a fixed path or the system clock:
- FileStorage keeps one file per key in a directory (used by the widget)
- Tests use an in-memory double with the same four methods
"""
import json
import logging
from datetime import timedelta
from pathlib import Path
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)


class StorageHandle(Protocol):
    """Byte storage keyed by name, aware of when each key was last written."""

    def exists(self, key: str) -> bool: ...

    def age_of(self, key: str, now) -> timedelta: ...

    def read(self, key: str) -> bytes: ...

    def write(self, key: str, data: bytes) -> None: ...


class FileStorage:
    """StorageHandle backed by files in a single directory."""

    def __init__(self, directory):
        self.directory = Path(directory)

    def _path(self, key):
        return self.directory / key

    def exists(self, key):
        return self._path(key).is_file()

    def age_of(self, key, now):
        modified = self._path(key).stat().st_mtime
        return timedelta(seconds=now.timestamp() - modified)

    def read(self, key):
        return self._path(key).read_bytes()

    def write(self, key, data):
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_bytes(data)


class PriceCache:
    """Serve a stored payload while it is younger than max_age, else refetch."""

    def get_or_fetch(
        self,
        key: str,
        max_age: timedelta,
        fetch: Callable[[], Any],
        store: StorageHandle,
        now,
    ) -> Any:
        """Return the cached payload for key, fetching a new one when stale.

        Args:
            key: Storage key of the single cache slot
            max_age: Freshness duration; an entry exactly max_age old is stale
            fetch: Zero-argument callable returning a JSON-serializable payload
            store: StorageHandle holding the cache entry
            now: Reference instant used to compute the entry age

        Returns:
            The cached or freshly fetched payload

        Raises:
            Whatever fetch raises. Stale data is never served as a fallback.
        """
        if store.exists(key):
            age = store.age_of(key, now)
            if age < max_age:
                cached = self._load(store, key)
                if cached is not None:
                    logger.info(f"Using cached electricity prices (age: {age.total_seconds() / 60:.1f} min)")
                    return cached
            else:
                logger.debug(f"Cache entry '{key}' is stale (age: {age.total_seconds() / 60:.1f} min)")

        logger.info("Fetching new electricity prices...")
        payload = fetch()
        store.write(key, json.dumps(payload).encode("utf-8"))
        return payload

    @staticmethod
    def _load(store, key):
        try:
            return json.loads(store.read(key).decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Discarding unreadable cache entry '{key}': {e}")
            return None
