"""
Chainable, in-memory query API over record collections.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from .expressions import Q

if TYPE_CHECKING:
    from ..core.record import Record

TRecord = TypeVar("TRecord", bound="Record")


class RecordQuery(Generic[TRecord]):
    """
    Lazily filters and orders a sequence of records.

    Every call returns a new query; the source sequence is never modified.
    Ordering uses Python's stable sort, so ties keep their source order.
    """

    def __init__(
        self,
        records: Iterable[TRecord],
        *,
        where: Optional[Q] = None,
        ordering: Tuple[str, ...] = (),
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> None:
        self._records = records
        self._where = where or Q()
        self._ordering = ordering
        self._limit = limit
        self._offset = offset

    # Public API --------------------------------------------------------
    def filter(self, **lookups: Any) -> "RecordQuery[TRecord]":
        return self._clone(where=self._add_q(Q(**lookups)))

    def order_by(self, *fields: str) -> "RecordQuery[TRecord]":
        return self._clone(ordering=tuple(fields))

    def limit(self, value: int) -> "RecordQuery[TRecord]":
        return self._clone(limit=value)

    def offset(self, value: int) -> "RecordQuery[TRecord]":
        return self._clone(offset=value)

    def first(self) -> Optional[TRecord]:
        results = self.limit(1).all()
        return results[0] if results else None

    def count(self) -> int:
        return len(self.all())

    def all(self) -> List[TRecord]:
        results = [record for record in self._records if self._where.matches(record)]
        for field in reversed(self._ordering):
            descending = field.startswith("-")
            name = field.lstrip("-")
            results.sort(key=lambda record, name=name: getattr(record, name), reverse=descending)
        start = self._offset or 0
        stop = start + self._limit if self._limit is not None else None
        return results[start:stop]

    def __iter__(self) -> Iterator[TRecord]:
        return iter(self.all())

    def __len__(self) -> int:
        return self.count()

    # Internal helpers --------------------------------------------------
    def _add_q(self, q_object: Q) -> Q:
        if self._where.is_empty():
            return q_object
        return self._where & q_object

    def _clone(self, **overrides: Any) -> "RecordQuery[TRecord]":
        params = {
            "where": overrides.get("where", self._where),
            "ordering": overrides.get("ordering", self._ordering),
            "limit": overrides.get("limit", self._limit),
            "offset": overrides.get("offset", self._offset),
        }
        return RecordQuery(self._records, **params)
