"""
Key-value store protocol and configuration for PostKeep.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Protocol
from urllib.parse import parse_qs, urlencode, urlparse


class StorageError(RuntimeError):
    """Base error for store-related failures."""


class StorageConfigurationError(StorageError):
    """Raised when configuration or a DSN is invalid."""


class StorageQuotaExceeded(StorageError):
    """Raised when a write would exceed the store's size quota."""


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

SUPPORTED_SCHEMES = ("memory", "sqlite")


def _parse_bool(value: str, *, key: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise StorageConfigurationError(f"Invalid boolean value for '{key}': {value!r}")


def _parse_float(value: str, *, key: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise StorageConfigurationError(f"Invalid float value for '{key}': {value!r}") from exc


def _parse_int(value: str, *, key: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise StorageConfigurationError(f"Invalid integer value for '{key}': {value!r}") from exc


@dataclass
class StorageConfig:
    """
    Normalized store configuration.

    ``url`` is a DSN such as ``memory://`` or ``sqlite:///path/to/posts.db``.
    """

    url: str
    scheme: str = "memory"
    path: str | None = None
    table: str = "kv_store"
    timeout: float | None = None
    quota_bytes: int | None = None
    durable: bool = True
    source: str | None = None

    @classmethod
    def from_dsn(cls, dsn: str, **kwargs: Any) -> "StorageConfig":
        """
        Build a store config by parsing the DSN string.
        """

        parsed = urlparse(dsn)
        scheme = parsed.scheme
        if scheme not in SUPPORTED_SCHEMES:
            raise StorageConfigurationError(
                f"Unsupported store scheme '{scheme}'. Expected one of: {', '.join(SUPPORTED_SCHEMES)}"
            )
        query = {k: v[0] for k, v in parse_qs(parsed.query).items()}

        path: str | None = None
        if scheme == "sqlite":
            path = parsed.path[1:] if parsed.path.startswith("/") else parsed.path
            if not path:
                raise StorageConfigurationError("A sqlite store DSN requires a path, e.g. sqlite:///posts.db")

        options: dict[str, Any] = {}
        if "timeout" in query:
            options["timeout"] = _parse_float(query.pop("timeout"), key="timeout")
        if "quota_bytes" in query:
            options["quota_bytes"] = _parse_int(query.pop("quota_bytes"), key="quota_bytes")
        if "durable" in query:
            options["durable"] = _parse_bool(query.pop("durable"), key="durable")
        if "table" in query:
            options["table"] = query.pop("table")
        if query:
            raise StorageConfigurationError(f"Unknown store option(s): {', '.join(sorted(query))}")

        options.update(kwargs)
        return cls(url=dsn, scheme=scheme, path=path, **options)

    @classmethod
    def from_env(cls, env_var: str, **kwargs: Any) -> "StorageConfig":
        """
        Build a config from an environment variable containing a DSN.
        """

        value = os.getenv(env_var)
        if not value:
            raise StorageConfigurationError(f"Environment variable {env_var} is not set")
        return cls.from_dsn(value, source=env_var, **kwargs)

    def redacted_dsn(self) -> str:
        """
        Return the DSN without query options, safe for logging.
        """

        parsed = urlparse(self.url)
        base = f"{parsed.scheme}://{parsed.netloc}{parsed.path}"
        if parsed.query:
            keys = {k: "..." for k in parse_qs(parsed.query)}
            base += f"?{urlencode(keys)}"
        return base

    def descriptive_label(self) -> str:
        """
        Describe the config source for diagnostics.
        """

        redacted = self.redacted_dsn()
        if self.source:
            return f"{self.source} ({redacted})"
        return redacted


class KeyValueStore(Protocol):
    """
    String-keyed, string-valued persistent store, modelled on browser storage.
    """

    def get_item(self, key: str) -> Optional[str]:
        """
        Return the stored value or ``None`` when the key is absent.
        """

    def set_item(self, key: str, value: str) -> None:
        """
        Replace the value stored under ``key``.
        """

    def remove_item(self, key: str) -> None:
        """
        Delete ``key``. Removing an absent key is a no-op.
        """

    def keys(self) -> Iterator[str]:
        """
        Iterate over stored keys.
        """

    def clear(self) -> None:
        """
        Remove every key.
        """

    def close(self) -> None:
        """
        Release underlying resources. Implementations should be idempotent.
        """
