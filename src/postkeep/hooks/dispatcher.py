"""
Hook dispatcher coordinating collection lifecycle events.

:class:`~postkeep.persistence.RecordCollection` fires ``before_save`` and
``after_save`` (with ``created``), ``before_delete``, ``after_delete`` and
``after_commit`` (with ``key``, and no instance).
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple, Type

if TYPE_CHECKING:
    from ..core.record import Record


HookHandler = Callable[..., None]

BEFORE_SAVE = "before_save"
AFTER_SAVE = "after_save"
BEFORE_DELETE = "before_delete"
AFTER_DELETE = "after_delete"
AFTER_COMMIT = "after_commit"

EVENTS = frozenset({BEFORE_SAVE, AFTER_SAVE, BEFORE_DELETE, AFTER_DELETE, AFTER_COMMIT})


class HookDispatcher:
    """
    Routes lifecycle events to handlers.

    Handlers registered without a record class see every event. Handlers bound
    to a record class only see events for instances of exactly that class, and
    run after the global ones.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Tuple[str, Optional[Type["Record"]]], List[HookHandler]] = defaultdict(list)

    def register(self, event: str, handler: HookHandler, *, record: Optional[Type["Record"]] = None) -> None:
        if event not in EVENTS:
            raise ValueError(f"Unknown hook event '{event}'. Expected one of: {', '.join(sorted(EVENTS))}")
        self._handlers[(event, record)].append(handler)

    def unregister(self, event: str, handler: HookHandler, *, record: Optional[Type["Record"]] = None) -> bool:
        handlers = self._handlers.get((event, record), [])
        if handler not in handlers:
            return False
        handlers.remove(handler)
        return True

    def handlers_for(self, event: str, record_cls: Optional[Type["Record"]] = None) -> List[HookHandler]:
        handlers = list(self._handlers.get((event, None), []))
        if record_cls is not None:
            handlers.extend(self._handlers.get((event, record_cls), []))
        return handlers

    def fire(self, event: str, instance: Optional["Record"], **context: Any) -> None:
        record_cls = type(instance) if instance is not None else None
        for handler in self.handlers_for(event, record_cls):
            handler(instance, **context)

    def clear(self) -> None:
        self._handlers.clear()


hooks = HookDispatcher()
