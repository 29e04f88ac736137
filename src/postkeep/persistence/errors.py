"""
Persistence error hierarchy for PostKeep.
"""

from __future__ import annotations


class PersistenceError(RuntimeError):
    """Base error for repository failures."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(f"[{key}] {message}")


class PersistenceReadError(PersistenceError):
    """Stored payload is malformed or does not match the schema."""


class PersistenceWriteError(PersistenceError):
    """The store rejected a write."""


class NotFoundError(LookupError):
    """No record with the requested identifier exists in the collection."""

    def __init__(self, record_name: str, pk: object) -> None:
        self.record_name = record_name
        self.pk = pk
        super().__init__(f"No {record_name} with id {pk!r}")
