"""
Key-value stores backing PostKeep repositories.
"""

from .base import (
    KeyValueStore,
    StorageConfig,
    StorageConfigurationError,
    StorageError,
    StorageQuotaExceeded,
)
from .memory import InMemoryStore
from .sqlite import SQLiteStore


def open_store(config: StorageConfig) -> KeyValueStore:
    """
    Instantiate the store described by ``config``.
    """

    if config.scheme == "sqlite":
        return SQLiteStore(config)
    if config.scheme == "memory":
        return InMemoryStore(quota_bytes=config.quota_bytes)
    raise StorageConfigurationError(f"Unsupported store scheme '{config.scheme}'")


__all__ = [
    "InMemoryStore",
    "KeyValueStore",
    "SQLiteStore",
    "StorageConfig",
    "StorageConfigurationError",
    "StorageError",
    "StorageQuotaExceeded",
    "open_store",
]
