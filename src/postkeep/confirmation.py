"""Two-step confirmation for destructive actions."""

from __future__ import annotations

from typing import Any, Callable

from .utils import get_logger

logger = get_logger("confirmation")

PENDING = "pending"
CONFIRMED = "confirmed"
CANCELLED = "cancelled"


class ConfirmationError(RuntimeError):
    """Raised when a confirmation request is resolved twice."""


class DeletionRequest:
    """
    A destructive action held back until the user confirms it.

    Created by the trigger gesture; ``confirm()`` runs the action, ``cancel()``
    discards it. A request resolves exactly once.
    """

    def __init__(self, label: str, action: Callable[[], Any], *, kind: str = "item") -> None:
        self.label = label
        self.kind = kind
        self._action = action
        self.state = PENDING

    @property
    def title(self) -> str:
        return "Are you sure?"

    @property
    def description(self) -> str:
        return (
            f'This will permanently delete the {self.kind} "{self.label}". '
            "This action cannot be undone."
        )

    @property
    def pending(self) -> bool:
        return self.state == PENDING

    def confirm(self) -> Any:
        self._resolve(CONFIRMED)
        logger.info("Confirmed deletion of %s %r", self.kind, self.label)
        return self._action()

    def cancel(self) -> None:
        self._resolve(CANCELLED)
        logger.debug("Cancelled deletion of %s %r", self.kind, self.label)

    def _resolve(self, state: str) -> None:
        if self.state != PENDING:
            raise ConfirmationError(
                f"Deletion of {self.kind} '{self.label}' was already {self.state}."
            )
        self.state = state
