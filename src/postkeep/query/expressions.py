"""
Expression tree primitives for in-memory record filtering.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Tuple

if TYPE_CHECKING:
    from ..core.record import Record


def _icontains(value: Any, needle: Any) -> bool:
    if value is None:
        return False
    return str(needle).lower() in str(value).lower()


LOOKUPS: Dict[str, Callable[[Any, Any], bool]] = {
    "exact": lambda value, other: value == other,
    "icontains": _icontains,
}


def split_lookup(key: str) -> Tuple[str, str]:
    """
    Split ``title__icontains`` into ``("title", "icontains")``.
    """
    if "__" in key:
        field_name, lookup = key.rsplit("__", 1)
        if lookup in LOOKUPS:
            return field_name, lookup
    return key, "exact"


class Q:
    """
    Conjunction of field lookups, similar to Django-style Q objects but
    evaluated directly against records.
    """

    def __init__(self, *children: Any, **lookups: Any) -> None:
        self.children: List[Any] = list(children)
        self.children.extend(lookups.items())

    def __and__(self, other: "Q") -> "Q":
        return Q(self, other)

    def __repr__(self) -> str:
        return f"<Q AND: {self.children!r}>"

    def is_empty(self) -> bool:
        return not self.children

    def matches(self, record: "Record") -> bool:
        return all(self._evaluate_child(child, record) for child in self.children)

    def _evaluate_child(self, child: Any, record: "Record") -> bool:
        if isinstance(child, Q):
            return child.matches(record)
        key, expected = child
        field_name, lookup = split_lookup(key)
        record._meta.get_field(field_name)
        return LOOKUPS[lookup](getattr(record, field_name), expected)
