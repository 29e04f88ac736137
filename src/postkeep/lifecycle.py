"""
Create/update/delete operations enforcing validation and identity rules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

from .confirmation import DeletionRequest
from .core.record import Record
from .persistence import RecordCollection
from .utils import get_logger
from .validation import ValidationError, check_payload

TRecord = TypeVar("TRecord", bound=Record)


@dataclass
class Outcome(Generic[TRecord]):
    """
    Result of a lifecycle operation. Expected failures are reported here
    rather than raised.
    """

    ok: bool
    record: Optional[TRecord] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)
    message: Optional[str] = None


class LifecycleManager(Generic[TRecord]):
    """
    Base manager around a :class:`RecordCollection`.

    Subclasses set ``kind`` (used in messages) and ``label_field`` (the
    attribute quoted in confirmations), and may override ``check_create``.
    """

    kind = "record"
    label_field = "pk"

    def __init__(self, collection: RecordCollection[TRecord]) -> None:
        self.collection = collection
        self.record_cls = collection.record_cls
        self.logger = get_logger(f"lifecycle.{self.record_cls._meta.name}")

    @property
    def notifier(self):
        return self.collection.notifier

    # ------------------------------------------------------------------ #
    # Reading
    # ------------------------------------------------------------------ #
    def all(self) -> List[TRecord]:
        return self.collection.all()

    def get(self, pk: Any) -> Optional[TRecord]:
        return self.collection.get(pk)

    def get_or_raise(self, pk: Any) -> TRecord:
        return self.collection.get_or_raise(pk)

    def label(self, record: TRecord) -> str:
        return str(getattr(record, self.label_field))

    # ------------------------------------------------------------------ #
    # Mutation
    # ------------------------------------------------------------------ #
    def create(self, payload: Mapping[str, Any]) -> Outcome[TRecord]:
        result = check_payload(self.record_cls, payload)
        if not result.is_valid:
            return Outcome(ok=False, errors=result.errors)
        try:
            self.check_create(result.values)
        except ValidationError as exc:
            return Outcome(ok=False, errors=exc.errors)

        pk_name = self.record_cls._meta.primary_key.require_name()
        record = self.record_cls(**{pk_name: self.collection.new_identifier()}, **result.values)
        try:
            self.collection.add(record)
        except ValidationError as exc:
            return Outcome(ok=False, errors=exc.errors)

        message = f'{self.kind.capitalize()} "{self.label(record)}" has been created.'
        self._success(message)
        return Outcome(ok=True, record=record, message=message)

    def update(self, pk: Any, payload: Mapping[str, Any]) -> Outcome[TRecord]:
        """
        Merge the supplied fields into an existing record. Fields absent from
        ``payload`` keep their current values.
        """

        current = self.collection.get(pk)
        if current is None:
            self.logger.warning("Update requested for unknown %s %r", self.kind, pk)
            return Outcome(ok=False, errors={"__all__": [f"No {self.kind} with id '{pk}'."]})

        result = check_payload(self.record_cls, payload, partial=True, instance=current)
        if not result.is_valid:
            return Outcome(ok=False, record=current, errors=result.errors)

        updated = current.merged(result.values)
        try:
            self.collection.replace(updated)
        except ValidationError as exc:
            return Outcome(ok=False, record=current, errors=exc.errors)

        message = f'{self.kind.capitalize()} "{self.label(updated)}" has been updated.'
        self._success(message)
        return Outcome(ok=True, record=updated, message=message)

    def delete(self, pk: Any) -> Outcome[TRecord]:
        """
        Remove a record. Deleting an unknown identifier is a no-op.
        """

        removed = self.collection.remove(pk)
        if removed is None:
            self.logger.debug("Delete of unknown %s %r ignored", self.kind, pk)
            return Outcome(ok=True)

        message = f'{self.kind.capitalize()} "{self.label(removed)}" has been removed.'
        if self.notifier is not None:
            self.notifier.success(message, title=f"{self.kind.capitalize()} Deleted")
        return Outcome(ok=True, record=removed, message=message)

    def request_delete(self, pk: Any) -> DeletionRequest:
        """
        First step of the delete gesture; the returned request must be confirmed.
        """

        record = self.collection.get_or_raise(pk)
        return DeletionRequest(self.label(record), lambda: self.delete(pk), kind=self.kind)

    # ------------------------------------------------------------------ #
    def check_create(self, values: Dict[str, Any]) -> None:
        """
        Hook for creation-only rules; raise ``ValidationError`` to reject.
        """
        return None

    def _success(self, message: str) -> None:
        if self.notifier is not None:
            self.notifier.success(message)
