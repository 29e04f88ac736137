"""In-memory key-value store."""

from __future__ import annotations

from threading import RLock
from typing import Dict, Iterator, Optional

from ..utils import get_logger
from .base import StorageQuotaExceeded


class InMemoryStore:
    """
    Process-local store. ``quota_bytes`` caps the total UTF-8 size of keys
    and values, mirroring the quota of browser storage.
    """

    def __init__(self, *, quota_bytes: int | None = None) -> None:
        self._store: Dict[str, str] = {}
        self._lock = RLock()
        self.quota_bytes = quota_bytes
        self.logger = get_logger("storage.memory")

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._store.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            if self.quota_bytes is not None:
                projected = self._usage(exclude=key) + _size(key) + _size(value)
                if projected > self.quota_bytes:
                    raise StorageQuotaExceeded(
                        f"Writing '{key}' needs {projected} bytes; quota is {self.quota_bytes}."
                    )
            self._store[key] = value
        self.logger.debug("Stored key", extra={"storage_key": key, "size": _size(value)})

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def keys(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._store))

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def close(self) -> None:
        return None

    def _usage(self, *, exclude: str | None = None) -> int:
        return sum(_size(k) + _size(v) for k, v in self._store.items() if k != exclude)


def _size(text: str) -> int:
    return len(text.encode("utf-8"))
