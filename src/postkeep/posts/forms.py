"""
Form state for creating and editing posts.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..lifecycle import Outcome
from ..utils import get_logger
from .images import encode_image_file
from .manager import PostManager
from .models import BlogPost

MIN_PUBLISH_DATE = date(1900, 1, 1)

logger = get_logger("posts.forms")


def date_picker_allows(value: date | datetime | str) -> bool:
    """
    The date picker disables every day before 1900-01-01.

    Accepts anything the publish date field accepts; raises ``ValueError`` for
    values it cannot read as a date.
    """
    return _publish_date(value).date() >= MIN_PUBLISH_DATE


def _publish_date(value: Any) -> datetime:
    return BlogPost._meta.get_field("publish_date").to_python(value)


def blank_values() -> Dict[str, Any]:
    return {
        "title": "",
        "content": "",
        "author": "",
        "image_url": "",
        "category": "Technology",
        "priority": "Medium",
        "is_published": False,
        "publish_date": datetime.now(timezone.utc),
    }


class PostForm:
    """
    Pending values for the create view, or for the edit view when ``post`` is given.
    """

    def __init__(self, manager: PostManager, post: Optional[BlogPost] = None) -> None:
        self.manager = manager
        self.post = post
        self.values: Dict[str, Any] = {}
        self.errors: Dict[str, List[str]] = {}
        self.reset()

    @property
    def is_editing(self) -> bool:
        return self.post is not None

    @property
    def heading(self) -> str:
        return "Update Post" if self.is_editing else "Create Post"

    def reset(self) -> None:
        if self.post is not None:
            self.values = {
                name: value for name, value in self.post.to_dict().items() if name != "id"
            }
        else:
            self.values = blank_values()
        self.errors = {}

    def set(self, name: str, value: Any) -> None:
        if name not in self.values:
            raise KeyError(f"Unknown form field '{name}'")
        if name == "publish_date":
            self.set_publish_date(value)
            return
        self.values[name] = value
        self.errors.pop(name, None)

    def set_publish_date(self, value: date | datetime | str) -> bool:
        try:
            moment = _publish_date(value)
        except ValueError as exc:
            self.errors["publish_date"] = [str(exc)]
            return False
        if moment.date() < MIN_PUBLISH_DATE:
            self.errors["publish_date"] = [
                f"Choose a date on or after {MIN_PUBLISH_DATE.isoformat()}."
            ]
            return False
        self.values["publish_date"] = moment
        self.errors.pop("publish_date", None)
        return True

    def attach_image(self, path: str | Path) -> bool:
        """
        Load an image file into ``image_url`` as a data URL.
        """
        try:
            self.values["image_url"] = encode_image_file(path)
        except (OSError, ValueError) as exc:
            logger.warning("Image attachment failed: %s", exc)
            self.errors["image_url"] = [str(exc)]
            return False
        self.errors.pop("image_url", None)
        return True

    def submit(self) -> Outcome[BlogPost]:
        if self.errors:
            return Outcome(ok=False, errors=dict(self.errors))
        payload = dict(self.values)
        if not payload.get("image_url"):
            payload["image_url"] = None
        if self.post is not None:
            outcome = self.manager.update(self.post.id, payload)
        else:
            outcome = self.manager.create(payload)
        if outcome.ok:
            if self.post is not None:
                self.post = outcome.record
            self.reset()
        else:
            self.errors = dict(outcome.errors)
        return outcome

    def cancel(self) -> None:
        self.reset()
