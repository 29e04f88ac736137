"""
In-memory record collection mirrored to a repository after every mutation.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import TYPE_CHECKING, Any, Generic, Iterator, List, Optional, TypeVar

from ..core.record import Record
from ..query import RecordQuery
from ..utils import get_logger
from .errors import NotFoundError, PersistenceWriteError
from .repository import Repository

if TYPE_CHECKING:
    from ..hooks import HookDispatcher
    from ..notifications import Notifier

TRecord = TypeVar("TRecord", bound=Record)


class RecordCollection(Generic[TRecord]):
    """
    Owns the in-memory copy of one collection.

    The in-memory state is the source of truth; the repository is a durability
    shadow rewritten in full after each mutation. A failed write is logged and
    reported but never rolls back the in-memory change.
    """

    def __init__(
        self,
        repository: Repository[TRecord],
        *,
        notifier: Optional["Notifier"] = None,
        hook_dispatcher: Optional["HookDispatcher"] = None,
    ) -> None:
        self.repository = repository
        self.record_cls = repository.record_cls
        self.notifier = notifier if notifier is not None else repository.notifier
        if hook_dispatcher is None:
            from ..hooks import hooks

            hook_dispatcher = hooks
        self.hooks = hook_dispatcher
        self._records: "OrderedDict[Any, TRecord]" = OrderedDict()
        self._retired: set[Any] = set()
        self.version = 0
        self.logger = get_logger("persistence.collection")

    # ------------------------------------------------------------------ #
    # Reading
    # ------------------------------------------------------------------ #
    def load(self) -> None:
        """
        Replace the in-memory state with whatever the repository holds.
        """
        self._records = OrderedDict((record.pk, record) for record in self.repository.load())
        self._touch()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TRecord]:
        return iter(list(self._records.values()))

    def __contains__(self, pk: object) -> bool:
        return pk in self._records

    def all(self) -> List[TRecord]:
        return list(self._records.values())

    def get(self, pk: Any) -> Optional[TRecord]:
        return self._records.get(pk)

    def get_or_raise(self, pk: Any) -> TRecord:
        record = self._records.get(pk)
        if record is None:
            raise NotFoundError(self.record_cls._meta.verbose_name, pk)
        return record

    def query(self) -> RecordQuery[TRecord]:
        return RecordQuery(self.all())

    def new_identifier(self) -> str:
        """
        Generate a primary key never used by this collection, live or deleted.
        """
        pk_field = self.record_cls._meta.primary_key
        while True:
            candidate = pk_field.get_default()
            if candidate not in self._records and candidate not in self._retired:
                return candidate

    # ------------------------------------------------------------------ #
    # Mutation
    # ------------------------------------------------------------------ #
    def add(self, record: TRecord) -> None:
        if record.pk in self._records or record.pk in self._retired:
            raise ValueError(f"Identifier {record.pk!r} is already in use.")
        record.full_clean()
        self.hooks.fire("before_save", record, collection=self, created=True)
        self._records[record.pk] = record
        self._touch()
        try:
            self.hooks.fire("after_save", record, collection=self, created=True)
        finally:
            self.commit()

    def replace(self, record: TRecord) -> None:
        if record.pk not in self._records:
            raise NotFoundError(self.record_cls._meta.verbose_name, record.pk)
        record.full_clean()
        self.hooks.fire("before_save", record, collection=self, created=False)
        self._records[record.pk] = record
        self._touch()
        try:
            self.hooks.fire("after_save", record, collection=self, created=False)
        finally:
            self.commit()

    def remove(self, pk: Any) -> Optional[TRecord]:
        record = self._records.get(pk)
        if record is None:
            return None
        self.hooks.fire("before_delete", record, collection=self)
        del self._records[pk]
        self._retired.add(pk)
        self._touch()
        try:
            self.hooks.fire("after_delete", record, collection=self)
        finally:
            self.commit()
        return record

    def commit(self) -> bool:
        """
        Persist the whole collection. Returns ``False`` when the write failed.
        """
        try:
            self.repository.save(self.all())
        except PersistenceWriteError as exc:
            self.logger.error("Failed to save %s: %s", self.repository.key, exc)
            if self.notifier is not None:
                self.notifier.error(
                    "Changes are kept in this session but could not be saved.",
                    title="Save failed",
                )
            return False
        self.hooks.fire("after_commit", None, collection=self, key=self.repository.key)
        return True

    def _touch(self) -> None:
        self.version += 1
