"""
Repository mapping one record collection onto one key of a key-value store.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Generic, List, Optional, Sequence, Type, TypeVar

from ..core.record import Record
from ..storage import KeyValueStore, StorageError
from ..utils import get_logger, time_call
from ..validation import ValidationError
from .errors import PersistenceReadError, PersistenceWriteError

if TYPE_CHECKING:
    from ..notifications import Notifier

TRecord = TypeVar("TRecord", bound=Record)


class Repository(Generic[TRecord]):
    """
    Loads and saves a whole collection as a JSON array under ``key``.

    Saves always replace the full collection; there are no incremental writes.
    """

    def __init__(
        self,
        record_cls: Type[TRecord],
        store: KeyValueStore,
        key: str,
        *,
        notifier: Optional["Notifier"] = None,
        indent: int | None = 2,
    ) -> None:
        self.record_cls = record_cls
        self.store = store
        self.key = key
        self.notifier = notifier
        self.indent = indent
        self.logger = get_logger("persistence.repository")

    # ------------------------------------------------------------------ #
    def read(self) -> List[TRecord]:
        """
        Strictly decode the stored collection.

        Returns an empty list when nothing is stored and raises
        :class:`PersistenceReadError` for anything that cannot be decoded.
        """

        try:
            with time_call("repository.read", self.logger, key=self.key):
                raw = self.store.get_item(self.key)
        except StorageError as exc:
            raise PersistenceReadError(self.key, f"store read failed: {exc}") from exc
        if raw is None:
            return []
        return self.loads(raw)

    def load(self) -> List[TRecord]:
        """
        Decode the stored collection, degrading to an empty list on failure.
        """

        try:
            return self.read()
        except PersistenceReadError as exc:
            self.logger.error("Failed to load %s: %s", self.key, exc)
            if self.notifier is not None:
                plural = f"{self.record_cls._meta.verbose_name}s"
                self.notifier.error(f"Could not load saved {plural}.")
            return []

    def save(self, records: Sequence[TRecord]) -> None:
        payload = self.dumps(records)
        try:
            with time_call("repository.save", self.logger, key=self.key):
                self.store.set_item(self.key, payload)
        except StorageError as exc:
            raise PersistenceWriteError(self.key, f"store write failed: {exc}") from exc
        self.logger.debug("Saved %d record(s) to %s", len(records), self.key)

    # ------------------------------------------------------------------ #
    def dumps(self, records: Sequence[TRecord]) -> str:
        return json.dumps([record.to_storage() for record in records], indent=self.indent)

    def loads(self, raw: str) -> List[TRecord]:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceReadError(self.key, f"malformed JSON: {exc}") from exc
        except RecursionError as exc:
            raise PersistenceReadError(self.key, "JSON nested too deeply to decode") from exc
        if not isinstance(data, list):
            raise PersistenceReadError(self.key, f"expected a JSON array, found {type(data).__name__}")

        records: List[TRecord] = []
        seen: set[object] = set()
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                raise PersistenceReadError(self.key, f"item {index} is not an object")
            try:
                record = self.record_cls.from_storage(item)
            except ValidationError as exc:
                raise PersistenceReadError(self.key, f"item {index} is invalid: {exc}") from exc
            if record.pk in seen:
                raise PersistenceReadError(self.key, f"item {index} repeats id {record.pk!r}")
            seen.add(record.pk)
            records.append(record)
        return records
