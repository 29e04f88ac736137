"""
Logging helpers for PostKeep.

Every logger lives under the ``postkeep`` namespace. Records are tagged with the
id of the session that produced them so output from interleaved sessions can be
told apart.
"""

from __future__ import annotations

import logging
import os
import time
import uuid
from contextvars import ContextVar
from typing import Optional

ROOT_LOGGER = "postkeep"
LEVEL_ENV_VAR = "POSTKEEP_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(session_id)s | %(name)s | %(message)s"

_session_id: ContextVar[str | None] = ContextVar("postkeep_session_id", default=None)


class SessionIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = current_session_id()
        return True


def _level_from_env(default: int) -> int:
    name = os.getenv(LEVEL_ENV_VAR)
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(level: int | None = None) -> None:
    """
    Attach the package handler once. ``$POSTKEEP_LOG_LEVEL`` sets the level
    when ``level`` is not given.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(SessionIdFilter())
    logger.addHandler(handler)
    logger.setLevel(level if level is not None else _level_from_env(logging.INFO))


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def bind_session_id(value: Optional[str] = None) -> str:
    """
    Tag log records emitted from this context with ``value``, or a fresh id.
    """
    token = value or uuid.uuid4().hex[:12]
    _session_id.set(token)
    return token


def current_session_id() -> str:
    sid = _session_id.get()
    if sid is None:
        sid = bind_session_id()
    return sid


class StoreTimer:
    """
    Measures one store operation.

    Durations at or above ``threshold_ms`` are logged as warnings, shorter ones
    at debug level. ``elapsed_ms`` is set once the block exits.
    """

    def __init__(
        self,
        operation: str,
        logger: logging.Logger,
        *,
        key: str | None = None,
        threshold_ms: float = 100.0,
    ) -> None:
        self.operation = operation
        self.logger = logger
        self.key = key
        self.threshold_ms = threshold_ms
        self.elapsed_ms: float | None = None
        self._started = 0.0

    def __enter__(self) -> "StoreTimer":
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.elapsed_ms = (time.perf_counter() - self._started) * 1000
        level = logging.WARNING if self.elapsed_ms >= self.threshold_ms else logging.DEBUG
        outcome = "failed after" if exc_type is not None else "took"
        self.logger.log(
            level,
            "%s on %s %s %.2fms",
            self.operation,
            self.key or "-",
            outcome,
            self.elapsed_ms,
            extra={"storage_key": self.key, "elapsed_ms": self.elapsed_ms},
        )
        return False


def time_call(
    operation: str, logger: logging.Logger, *, key: str | None = None, threshold_ms: float = 100.0
) -> StoreTimer:
    return StoreTimer(operation, logger, key=key, threshold_ms=threshold_ms)
